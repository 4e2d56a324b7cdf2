import csv
import io
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from config.settings import OUTPUT_DIR
from models.employee import Employee
from utils.formatters import format_amount, format_export_date

logger = logging.getLogger(__name__)

# (header, attribute, is_amount)
EMPLOYEE_COLUMNS = [
    ('Name', 'name', False),
    ('Code', 'code', False),
    ('Designation', 'designation', False),
    ('Department', 'department', False),
    ('Basic Salary', 'basic_salary', True),
    ('HRA', 'hra', True),
    ('Other Allowances', 'other_allowances', True),
    ('PF Deduction', 'pf_deduction', True),
    ('ESI Deduction', 'esi_deduction', True),
    ('Professional Tax', 'professional_tax', True),
    ('Other Deductions', 'other_deductions', True),
    ('Bank Name', 'bank_name', False),
    ('Bank A/C No.', 'bank_account_no', False),
    ('IFSC Code', 'ifsc_code', False),
    ('Branch Name', 'branch_name', False),
    ('UAN Number', 'uan_number', False),
    ('PF Number', 'pf_number', False),
    ('ESIC Number', 'esic_number', False),
    ('Work Location', 'work_location', False),
]

HEADERS = [header for header, _, _ in EMPLOYEE_COLUMNS]


def filter_employees(employees: Iterable[Employee], search_term: str = "",
                     department: str = "all") -> List[Employee]:
    """Search over name, code, designation and department plus department filter"""
    term = (search_term or "").strip().lower()
    result = []
    for e in employees:
        matches_search = (
            not term
            or term in (e.name or "").lower()
            or term in (e.code or "").lower()
            or term in (e.designation or "").lower()
            or term in (e.department or "").lower()
        )
        matches_dept = department in (None, "", "all") or (e.department or "") == department
        if matches_search and matches_dept:
            result.append(e)
    return result


def list_departments(employees: Iterable[Employee]) -> List[str]:
    """Distinct non-empty departments in first-seen order"""
    seen = []
    for e in employees:
        if e.department and e.department not in seen:
            seen.append(e.department)
    return seen


class EmployeeCSVExporter:
    """Export employee records with their salary components to CSV"""

    def __init__(self):
        self.output_dir = OUTPUT_DIR / "exports"
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def build_row(self, employee: Employee) -> Dict[str, str]:
        row = {}
        for header, attr, is_amount in EMPLOYEE_COLUMNS:
            if is_amount:
                row[header] = format_amount(getattr(employee.salary, attr))
            else:
                value = getattr(employee, attr)
                row[header] = "" if value is None else str(value)
        return row

    @staticmethod
    def _clean(value: str) -> str:
        # Keep every record on one physical line
        return value.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")

    def to_csv(self, employees: Iterable[Employee]) -> str:
        """Render CSV text, every cell quoted, rows joined by \\n"""
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow([self._clean(h) for h in HEADERS])

        count = 0
        for employee in employees:
            row = self.build_row(employee)
            writer.writerow([self._clean(row[h]) for h in HEADERS])
            count += 1

        logger.info("Exported %d employees to CSV", count)
        # No trailing newline after the last row
        return buffer.getvalue()[:-1]

    @staticmethod
    def filename(export_date: Optional[datetime] = None) -> str:
        return f"employees_{format_export_date(export_date)}.csv"

    def generate(self, employees: Iterable[Employee], export_date: Optional[datetime] = None) -> str:
        """Write CSV export file and return its path"""
        filepath = self.output_dir / self.filename(export_date)
        Path(filepath).write_text(self.to_csv(employees), encoding="utf-8")
        return str(filepath)
