import logging
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from config.settings import COMPANY_ADDRESS, CURRENCY_LABEL
from models.employee import Employee
from models.payroll import (
    DEDUCTION_FIELDS, SALARY_FIELDS, AttendanceInput, Automatic, DeductionOverrides, Manual,
    OtherDeductionsMode, PayslipComputation, PeriodSelection
)
from processors.attendance_proration import AttendanceProration
from processors.payslip_calculator import PayslipCalculator
from utils.formatters import display_value, format_amount, format_currency, format_date_dmy, format_days_label
from utils.validators import normalize_amount

logger = logging.getLogger(__name__)

FOOTER_TEXT = "This PDF is system-generated, no signature required"
NET_PAYABLE_NOTE = "Total Net Payable = Gross Earnings - Total Deductions"

EARNING_LABELS = [
    ('basic_salary', 'Basic Salary'),
    ('hra', 'HRA'),
    ('other_allowances', 'Other Allowances'),
]

DEDUCTION_LABELS = [
    ('pf_deduction', 'PF'),
    ('esi_deduction', 'ESI'),
    ('professional_tax', 'Professional Tax'),
    ('other_deductions', 'Other Deductions'),
]


class ManualOverridePolicy(Enum):
    """What happens to a manual other_deductions value when attendance changes"""
    # Attendance or period change recomputes and returns to automatic mode
    AUTO_WINS = 'auto_wins'
    # Manual value survives attendance changes until edit mode is left
    FREEZE_UNTIL_EDIT_EXIT = 'freeze_until_edit_exit'


class PayslipDocument:
    """The payslip currently on screen

    Identity fields are passed through from the employee record. The salary
    figures are a local copy seeded at generation time; edits never reach the
    employee record. Every change goes back through the calculator.
    """

    def __init__(self, employee: Employee, period: PeriodSelection, attendance: AttendanceInput,
                 deductions: DeductionOverrides, mode: OtherDeductionsMode = Automatic(),
                 calculator: Optional[PayslipCalculator] = None,
                 proration: Optional[AttendanceProration] = None,
                 policy: ManualOverridePolicy = ManualOverridePolicy.AUTO_WINS):
        self.employee = employee
        self.period = period
        self.attendance = attendance
        self.mode = mode
        self.policy = policy
        self.editing = False
        self.calculator = calculator or PayslipCalculator()
        self.proration = proration or AttendanceProration()
        self.salary = employee.salary.replace(**deductions.to_dict())
        self.computation = self._recompute()

    # ========== Edit contract ==========

    def set_field(self, name: str, raw_value: Any) -> PayslipComputation:
        """Overwrite one salary figure from raw input and recompute (invalid -> 0)"""
        if name not in SALARY_FIELDS:
            raise KeyError(f"Unknown salary field: {name}")
        value = normalize_amount(raw_value)
        if name == 'other_deductions':
            self.mode = Manual(value)
        self.salary = self.salary.replace(**{name: value})
        self.computation = self._recompute()
        return self.computation

    def set_editing(self, editing: bool) -> PayslipComputation:
        """Switch edit mode, values only change when leaving a frozen manual edit"""
        leaving = self.editing and not editing
        self.editing = editing
        if leaving and self.policy is ManualOverridePolicy.FREEZE_UNTIL_EDIT_EXIT:
            self.mode = Automatic()
            self.computation = self._recompute()
        return self.computation

    def toggle_editing(self) -> PayslipComputation:
        return self.set_editing(not self.editing)

    def set_attendance(self, attendance: AttendanceInput) -> PayslipComputation:
        self.attendance = attendance
        return self._attendance_changed()

    def set_period(self, period: PeriodSelection) -> PayslipComputation:
        self.period = period
        return self._attendance_changed()

    def _attendance_changed(self) -> PayslipComputation:
        frozen = (
            self.policy is ManualOverridePolicy.FREEZE_UNTIL_EDIT_EXIT
            and self.editing
            and isinstance(self.mode, Manual)
        )
        if not frozen:
            self.mode = Automatic()
        self.computation = self._recompute()
        return self.computation

    def _recompute(self) -> PayslipComputation:
        result = self.proration.calculate(
            self.employee.salary, self.attendance, self.period.total_days_in_month
        )
        if isinstance(self.mode, Automatic):
            other = result.prorated_deduction
        else:
            other = self.mode.value
        self.salary = self.salary.replace(other_deductions=other)
        return self.calculator.calculate(self.salary, proration=result)

    # ========== Rendering data ==========

    @property
    def title(self) -> str:
        return f"Payslip from - {self.period.month} {self.period.year}"

    def snapshot_filename(self, extension: str = "pdf") -> str:
        return f"Payslip_{self.employee.name}_{self.period.month}_{self.period.year}.{extension}"

    def identity_rows(self) -> List[Tuple[str, str]]:
        e = self.employee
        return [
            ('Name', display_value(e.name)),
            ('Bank Name', display_value(e.bank_name)),
            ('Code', display_value(e.code)),
            ('Bank A/C No.', display_value(e.bank_account_no)),
            ('Designation', display_value(e.designation)),
            ('IFSC Code', display_value(e.ifsc_code)),
            ('Department', display_value(e.department)),
            ('Branch Name', display_value(e.branch_name)),
            ('Date of Joining', display_value(e.uan_number)),
            ('Date of Birth', format_date_dmy(e.date_of_birth)),
            ('PF Number', display_value(e.pf_number)),
            ('Work Location', display_value(e.work_location)),
            ('ESIC Number', display_value(e.esic_number)),
        ]

    def earnings_rows(self) -> List[Tuple[str, str]]:
        salary = self.computation.salary
        return [(label, format_amount(getattr(salary, name))) for name, label in EARNING_LABELS]

    def deduction_rows(self) -> List[Tuple[str, str]]:
        salary = self.computation.salary
        return [(label, format_amount(getattr(salary, name))) for name, label in DEDUCTION_LABELS]

    def payable_days_rows(self) -> List[Tuple[str, str]]:
        a = self.attendance
        return [
            ('Worked Full Day', str(a.worked_full_days)),
            ('Worked Half Day', str(a.worked_half_days)),
            ('Worked Days', format_days_label(a.worked_payable_days)),
            ('Holiday', str(a.holiday)),
            ('Paid Leaves', str(a.paid_leaves)),
            ('Weekly Off', str(a.weekly_off)),
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot of everything the rendering surface needs"""
        c = self.computation
        return {
            'title': self.title,
            'company': self.employee.company,
            'company_address': COMPANY_ADDRESS,
            'employee': dict(self.identity_rows()),
            'earnings': dict(self.earnings_rows()),
            'deductions': dict(self.deduction_rows()),
            'total_earnings': format_amount(c.total_earnings),
            'total_deductions': format_amount(c.total_deductions),
            'net_payable': format_amount(c.net_payable),
            'net_payable_label': f"Total Net Payable : {format_currency(c.net_payable, CURRENCY_LABEL)}",
            'net_payable_note': NET_PAYABLE_NOTE,
            'payable_days': dict(self.payable_days_rows()),
            'total_days': self.period.total_days_in_month,
            'other_deductions_mode': 'manual' if isinstance(self.mode, Manual) else 'automatic',
            'editing': self.editing,
            'filename': self.snapshot_filename(),
            'footer': FOOTER_TEXT,
        }


class PayslipSession:
    """Per-screen generation context

    Holds the selected employee, the period/attendance selections and the
    operator's deduction inputs. Discarded when another employee is chosen.
    """

    def __init__(self, calculator: Optional[PayslipCalculator] = None,
                 proration: Optional[AttendanceProration] = None,
                 policy: ManualOverridePolicy = ManualOverridePolicy.AUTO_WINS):
        self.calculator = calculator or PayslipCalculator()
        self.proration = proration or AttendanceProration()
        self.policy = policy
        self.employee: Optional[Employee] = None
        self.period: Optional[PeriodSelection] = None
        self.attendance = AttendanceInput()
        self.deductions = DeductionOverrides()
        self.other_deductions_mode: OtherDeductionsMode = Automatic()
        self.document: Optional[PayslipDocument] = None

    def select_employee(self, employee: Optional[Employee]):
        self.employee = employee
        self.document = None
        if employee is None:
            self.deductions = DeductionOverrides()
        else:
            self.deductions = DeductionOverrides.from_salary(employee.salary)
        self.other_deductions_mode = Automatic()
        self._refresh_other_deductions()

    def set_period(self, month: str, year: Any):
        self.period = PeriodSelection(month, year)
        self.other_deductions_mode = Automatic()
        self._refresh_other_deductions()
        if self.document is not None:
            self.document.set_period(self.period)

    def set_attendance(self, attendance: AttendanceInput):
        self.attendance = attendance
        self.other_deductions_mode = Automatic()
        self._refresh_other_deductions()
        if self.document is not None:
            self.document.set_attendance(attendance)

    def set_deduction_input(self, name: str, raw_value: Any) -> Decimal:
        """Operator entry in the deduction form before generation"""
        if name not in DEDUCTION_FIELDS:
            raise KeyError(f"Unknown deduction field: {name}")
        value = normalize_amount(raw_value)
        setattr(self.deductions, name, value)
        if name == 'other_deductions':
            self.other_deductions_mode = Manual(value)
        return value

    def _refresh_other_deductions(self):
        if self.employee is None or self.period is None:
            return
        if isinstance(self.other_deductions_mode, Automatic):
            result = self.proration.calculate(
                self.employee.salary, self.attendance, self.period.total_days_in_month
            )
            self.deductions.other_deductions = result.prorated_deduction

    def generate(self) -> Optional[PayslipDocument]:
        """Build the payslip, no-op without a selected employee and period"""
        if self.employee is None or self.period is None:
            logger.debug("Generate requested without employee/period selection")
            return None
        logger.info("Generating payslip for %s, %s", self.employee.name, self.period)
        self.document = PayslipDocument(
            employee=self.employee,
            period=self.period,
            attendance=self.attendance,
            deductions=DeductionOverrides(**self.deductions.to_dict()),
            mode=self.other_deductions_mode,
            calculator=self.calculator,
            proration=self.proration,
            policy=self.policy,
        )
        return self.document

    def export_snapshot(self, exporter) -> Any:
        """Hand the current document to a snapshot exporter, errors propagate"""
        if self.document is None:
            return None
        return exporter.export(self.document)
