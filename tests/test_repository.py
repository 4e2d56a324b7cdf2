from decimal import Decimal

from database.db import SessionLocal, init_db
from database.repository import EmployeeRepository, sanitize_employee_data


def test_sanitize_employee_data():
    clean = sanitize_employee_data({"name": "A", "code": "", "hra": "abc", "basic_salary": "100"})
    assert clean["code"] is None
    assert clean["hra"] == Decimal('0')
    assert clean["basic_salary"] == Decimal('100')


def test_save_and_load_employee(employee_record):
    init_db()
    db = SessionLocal()
    try:
        repo = EmployeeRepository(db)
        record = dict(employee_record, id="repo-1", code="", hra="not a number")
        saved = repo.save_employee(record)
        assert saved.employee_id == "repo-1"

        loaded = repo.get_employee("repo-1")
        assert loaded.name == "Asha Kumar"
        assert loaded.code is None
        assert loaded.salary.hra == Decimal('0')
        assert loaded.salary.basic_salary == Decimal('20000')

        repo.save_employee({"id": "repo-1", "name": "Asha K"})
        assert repo.get_employee("repo-1").name == "Asha K"
        assert repo.get_employee("repo-1").salary.basic_salary == Decimal('20000')

        assert "repo-1" in [e.employee_id for e in repo.get_all_employees()]
        assert repo.delete_employee("repo-1")
        assert repo.get_employee("repo-1") is None
        assert not repo.delete_employee("repo-1")
    finally:
        db.close()


def test_save_generates_id():
    init_db()
    db = SessionLocal()
    try:
        saved = EmployeeRepository(db).save_employee({"name": "New Hire"})
        assert saved.employee_id
        EmployeeRepository(db).delete_employee(saved.employee_id)
    finally:
        db.close()
