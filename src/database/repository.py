import logging
import uuid
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Mapping, Optional
from .models import EmployeeDB
from models.employee import Employee, IDENTITY_FIELDS
from models.payroll import SALARY_FIELDS
from utils.validators import normalize_amount

logger = logging.getLogger(__name__)


def sanitize_employee_data(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Empty text -> None, invalid amounts -> 0"""
    clean = dict(data)
    for name in IDENTITY_FIELDS:
        if name in clean and clean[name] == "":
            clean[name] = None
    for name in SALARY_FIELDS:
        if name in clean:
            clean[name] = normalize_amount(clean[name])
    return clean


class EmployeeRepository:
    """Repository for employee records"""

    def __init__(self, db_session: Session):
        self.db = db_session

    # ========== Employee Operations ==========

    def save_employee(self, data: Mapping[str, Any]) -> Employee:
        """Insert or update an employee from a flat field mapping"""
        clean = sanitize_employee_data(data)
        employee_id = clean.pop('id', None) or clean.pop('employee_id', None)

        db_employee = None
        if employee_id:
            db_employee = self.db.query(EmployeeDB).filter_by(id=employee_id).first()
        if not db_employee:
            db_employee = EmployeeDB(id=employee_id or str(uuid.uuid4()))
            self.db.add(db_employee)
            logger.info("Creating employee %s", clean.get('name'))

        for name in IDENTITY_FIELDS + SALARY_FIELDS:
            if name in clean:
                setattr(db_employee, name, clean[name])

        self.db.commit()
        self.db.refresh(db_employee)
        return self._to_employee(db_employee)

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        """Get employee by ID"""
        db_employee = self.db.query(EmployeeDB).filter_by(id=employee_id).first()
        return self._to_employee(db_employee) if db_employee else None

    def get_all_employees(self) -> List[Employee]:
        """Get all employees, newest first"""
        rows = self.db.query(EmployeeDB).order_by(EmployeeDB.created_at.desc()).all()
        return [self._to_employee(row) for row in rows]

    def delete_employee(self, employee_id: str) -> bool:
        db_employee = self.db.query(EmployeeDB).filter_by(id=employee_id).first()
        if not db_employee:
            return False
        self.db.delete(db_employee)
        self.db.commit()
        return True

    # ========== Helper Methods ==========

    def _to_employee(self, row: EmployeeDB) -> Employee:
        record = {'id': row.id}
        for name in IDENTITY_FIELDS + SALARY_FIELDS:
            record[name] = getattr(row, name)
        return Employee.from_record(record)
