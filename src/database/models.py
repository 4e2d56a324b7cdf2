from sqlalchemy import Column, String, Numeric, DateTime
from datetime import datetime
from .db import Base

class EmployeeDB(Base):
    """Employee database model"""
    __tablename__ = "employees"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    code = Column(String)
    designation = Column(String)
    department = Column(String, index=True)
    date_of_birth = Column(String)
    company = Column(String)
    work_location = Column(String)
    uan_number = Column(String)

    # Bank and statutory numbers
    bank_name = Column(String)
    bank_account_no = Column(String)
    ifsc_code = Column(String)
    branch_name = Column(String)
    pf_number = Column(String)
    esic_number = Column(String)

    # Salary components
    basic_salary = Column(Numeric(12, 2), default=0)
    hra = Column(Numeric(12, 2), default=0)
    other_allowances = Column(Numeric(12, 2), default=0)
    pf_deduction = Column(Numeric(12, 2), default=0)
    esi_deduction = Column(Numeric(12, 2), default=0)
    professional_tax = Column(Numeric(12, 2), default=0)
    other_deductions = Column(Numeric(12, 2), default=0)

    # Metadata
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Employee(id={self.id}, name={self.name})>"
