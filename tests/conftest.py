import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent

# Add project root and src to path
sys.path.insert(0, str(ROOT_DIR))
sys.path.insert(0, str(ROOT_DIR / 'src'))

# Keep test runs away from the real database and output folders
_TMP_DIR = Path(tempfile.mkdtemp(prefix="payslip-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'test.db'}"
os.environ["OUTPUT_DIR"] = str(_TMP_DIR / "output")

from models.employee import Employee  # noqa: E402


@pytest.fixture
def employee_record():
    """A flat employee record as the persistence layer returns it"""
    return {
        "id": "emp-1",
        "name": "Asha Kumar",
        "code": "E001",
        "designation": "Engineer",
        "department": "R&D",
        "date_of_birth": "1990-05-07",
        "company": "GAP",
        "bank_name": "State Bank",
        "bank_account_no": "1234567890",
        "ifsc_code": "SBIN0001234",
        "branch_name": "Besant Nagar",
        "pf_number": "PF/123",
        "esic_number": None,
        "work_location": "Chennai",
        "uan_number": "2020-01-15",
        "basic_salary": 20000,
        "hra": 8000,
        "other_allowances": 2000,
        "pf_deduction": 1800,
        "esi_deduction": 0,
        "professional_tax": 200,
        "other_deductions": 0,
    }


@pytest.fixture
def employee(employee_record):
    return Employee.from_record(employee_record)
