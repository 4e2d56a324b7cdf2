from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from models.payroll import SalaryComponents

IDENTITY_FIELDS = (
    'name', 'code', 'designation', 'department', 'date_of_birth', 'company',
    'bank_name', 'bank_account_no', 'ifsc_code', 'branch_name',
    'pf_number', 'esic_number', 'work_location', 'uan_number',
)


@dataclass
class Employee:
    """Employee record as supplied by the persistence layer"""
    employee_id: str
    name: str
    code: Optional[str] = None
    designation: Optional[str] = None
    department: Optional[str] = None
    date_of_birth: Optional[str] = None
    company: Optional[str] = None
    bank_name: Optional[str] = None
    bank_account_no: Optional[str] = None
    ifsc_code: Optional[str] = None
    branch_name: Optional[str] = None
    pf_number: Optional[str] = None
    esic_number: Optional[str] = None
    work_location: Optional[str] = None
    # Shown on the payslip as the date of joining
    uan_number: Optional[str] = None
    salary: SalaryComponents = field(default_factory=SalaryComponents)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'Employee':
        """Build from a flat mapping of named fields"""
        identity = {}
        for name in IDENTITY_FIELDS:
            value = record.get(name)
            identity[name] = str(value) if value not in (None, "") else None
        identity['name'] = identity['name'] or ""
        return cls(
            employee_id=str(record.get('id') or record.get('employee_id') or ""),
            salary=SalaryComponents.from_mapping(record),
            **identity
        )

    def to_record(self) -> Dict[str, Any]:
        record = {'id': self.employee_id}
        record.update({name: getattr(self, name) for name in IDENTITY_FIELDS})
        record.update(self.salary.to_dict())
        return record

    def __str__(self):
        return f"Employee({self.employee_id}, {self.name})"
