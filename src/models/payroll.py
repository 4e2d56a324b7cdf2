import calendar
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Union

from utils.validators import MONTHS, normalize_amount, normalize_count, validate_month_name, validate_year

EARNING_FIELDS = ('basic_salary', 'hra', 'other_allowances')
DEDUCTION_FIELDS = ('pf_deduction', 'esi_deduction', 'professional_tax', 'other_deductions')
SALARY_FIELDS = EARNING_FIELDS + DEDUCTION_FIELDS


@dataclass(frozen=True)
class SalaryComponents:
    """Fixed per-employee pay figures"""
    basic_salary: Decimal = Decimal('0')
    hra: Decimal = Decimal('0')
    other_allowances: Decimal = Decimal('0')
    pf_deduction: Decimal = Decimal('0')
    esi_deduction: Decimal = Decimal('0')
    professional_tax: Decimal = Decimal('0')
    other_deductions: Decimal = Decimal('0')

    def __post_init__(self):
        for name in SALARY_FIELDS:
            object.__setattr__(self, name, normalize_amount(getattr(self, name)))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'SalaryComponents':
        return cls(**{name: data.get(name) for name in SALARY_FIELDS})

    @property
    def gross_monthly(self) -> Decimal:
        return self.basic_salary + self.hra + self.other_allowances

    def replace(self, **changes) -> 'SalaryComponents':
        values = self.to_dict()
        values.update(changes)
        return SalaryComponents(**values)

    def to_dict(self) -> Dict[str, Decimal]:
        return {name: getattr(self, name) for name in SALARY_FIELDS}


@dataclass(frozen=True)
class PeriodSelection:
    """Month/year a payslip is generated for"""
    month: str
    year: int

    def __post_init__(self):
        if not validate_month_name(self.month):
            raise ValueError(f"Unknown month: {self.month!r}")
        if not validate_year(self.year):
            raise ValueError(f"Year must have 4 digits: {self.year!r}")
        object.__setattr__(self, 'year', int(self.year))

    @property
    def month_number(self) -> int:
        return MONTHS.index(self.month) + 1

    @property
    def total_days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month_number)[1]

    def __str__(self):
        return f"{self.month} {self.year}"


@dataclass(frozen=True)
class AttendanceInput:
    """Day counters for one period"""
    worked_full_days: int = 0
    worked_half_days: int = 0
    weekly_off: int = 0
    holiday: int = 0
    paid_leaves: int = 0

    def __post_init__(self):
        for name in ('worked_full_days', 'worked_half_days', 'weekly_off', 'holiday', 'paid_leaves'):
            object.__setattr__(self, name, normalize_count(getattr(self, name)))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'AttendanceInput':
        # Simpler variant only reports whole worked days
        full_days = data.get('worked_full_days', data.get('worked_days'))
        return cls(
            worked_full_days=full_days,
            worked_half_days=data.get('worked_half_days'),
            weekly_off=data.get('weekly_off'),
            holiday=data.get('holiday'),
            paid_leaves=data.get('paid_leaves'),
        )

    @property
    def worked_payable_days(self) -> Decimal:
        return Decimal(self.worked_full_days) + Decimal(self.worked_half_days) * Decimal('0.5')


@dataclass(frozen=True)
class Automatic:
    """other_deductions is derived from attendance"""


@dataclass(frozen=True)
class Manual:
    """other_deductions was set by the operator"""
    value: Decimal


OtherDeductionsMode = Union[Automatic, Manual]


@dataclass(frozen=True)
class ProrationResult:
    """Attendance proration outcome"""
    total_days: int
    accounted_days: Decimal
    missing_days: Decimal
    per_day_rate: Decimal
    prorated_deduction: Decimal


@dataclass(frozen=True)
class PayslipComputation:
    """Totals derived from salary components and deduction overrides"""
    salary: SalaryComponents
    total_earnings: Decimal
    total_deductions: Decimal
    net_payable: Decimal
    proration: Optional[ProrationResult] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {name: str(value) for name, value in self.salary.to_dict().items()}
        data.update({
            'total_earnings': str(self.total_earnings),
            'total_deductions': str(self.total_deductions),
            'net_payable': str(self.net_payable),
        })
        return data


@dataclass
class DeductionOverrides:
    """Per-run deduction inputs, seeded from the employee's defaults"""
    pf_deduction: Decimal = Decimal('0')
    esi_deduction: Decimal = Decimal('0')
    professional_tax: Decimal = Decimal('0')
    other_deductions: Decimal = Decimal('0')

    def __post_init__(self):
        for name in DEDUCTION_FIELDS:
            setattr(self, name, normalize_amount(getattr(self, name)))

    @classmethod
    def from_salary(cls, salary: SalaryComponents) -> 'DeductionOverrides':
        return cls(**{name: getattr(salary, name) for name in DEDUCTION_FIELDS})

    def to_dict(self) -> Dict[str, Decimal]:
        return {name: getattr(self, name) for name in DEDUCTION_FIELDS}
