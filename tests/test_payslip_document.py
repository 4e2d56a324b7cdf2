from decimal import Decimal

import pytest

from models.payroll import AttendanceInput, Automatic, Manual, PeriodSelection
from processors.payslip_document import ManualOverridePolicy, PayslipSession


def make_session(employee, policy=ManualOverridePolicy.AUTO_WINS):
    session = PayslipSession(policy=policy)
    session.select_employee(employee)
    session.set_period("April", 2025)
    session.set_attendance(AttendanceInput(worked_full_days=23, weekly_off=4))
    return session


def test_generate_without_employee_is_noop():
    session = PayslipSession()
    session.set_period("April", 2025)
    assert session.generate() is None
    assert session.document is None


def test_generate_computes_totals(employee):
    document = make_session(employee).generate()
    c = document.computation
    assert c.salary.other_deductions == Decimal('3000.00')
    assert c.total_earnings == Decimal('30000')
    assert c.total_deductions == Decimal('5000.00')
    assert c.net_payable == Decimal('25000.00')
    assert isinstance(document.mode, Automatic)


def test_set_field_invalid_value_becomes_zero(employee):
    document = make_session(employee).generate()
    document.set_editing(True)
    result = document.set_field("basic_salary", "abc")
    assert result.salary.basic_salary == Decimal('0')
    assert result.total_earnings == Decimal('10000')
    assert result.net_payable == Decimal('5000.00')
    assert document.computation is result


def test_set_field_unknown_name(employee):
    document = make_session(employee).generate()
    with pytest.raises(KeyError):
        document.set_field("bonus", "10")


def test_edits_do_not_touch_employee_record(employee):
    document = make_session(employee).generate()
    document.set_field("hra", "9999")
    assert employee.salary.hra == Decimal('8000')


def test_toggling_edit_mode_keeps_values(employee):
    document = make_session(employee).generate()
    before = document.computation
    document.toggle_editing()
    assert document.editing
    document.toggle_editing()
    assert not document.editing
    assert document.computation == before


def test_auto_wins_on_attendance_change(employee):
    document = make_session(employee).generate()
    document.set_editing(True)
    document.set_field("other_deductions", "500")
    assert document.mode == Manual(Decimal('500'))
    assert document.computation.net_payable == Decimal('27500')

    document.set_attendance(AttendanceInput(worked_full_days=26, weekly_off=4))
    assert isinstance(document.mode, Automatic)
    assert document.computation.salary.other_deductions == Decimal('0.00')
    assert document.computation.net_payable == Decimal('28000.00')


def test_auto_wins_period_change_recomputes(employee):
    document = make_session(employee).generate()
    document.set_field("other_deductions", "500")
    document.set_period(PeriodSelection("May", 2025))
    # 31 days, 27 accounted
    assert document.computation.salary.other_deductions == Decimal('3870.97')


def test_auto_wins_manual_value_survives_edit_exit(employee):
    document = make_session(employee).generate()
    document.set_editing(True)
    document.set_field("other_deductions", "500")
    document.set_editing(False)
    assert document.computation.salary.other_deductions == Decimal('500')


def test_freeze_manual_value_until_edit_exit(employee):
    document = make_session(employee, ManualOverridePolicy.FREEZE_UNTIL_EDIT_EXIT).generate()
    document.set_editing(True)
    document.set_field("other_deductions", "500")

    document.set_attendance(AttendanceInput(worked_full_days=25, weekly_off=4))
    assert document.mode == Manual(Decimal('500'))
    assert document.computation.salary.other_deductions == Decimal('500')

    document.set_editing(False)
    assert isinstance(document.mode, Automatic)
    assert document.computation.salary.other_deductions == Decimal('1000.00')


def test_freeze_policy_outside_edit_mode_recomputes(employee):
    document = make_session(employee, ManualOverridePolicy.FREEZE_UNTIL_EDIT_EXIT).generate()
    document.set_field("other_deductions", "500")
    document.set_attendance(AttendanceInput(worked_full_days=25, weekly_off=4))
    assert document.computation.salary.other_deductions == Decimal('1000.00')


def test_operator_other_deduction_input_before_generate(employee):
    session = make_session(employee)
    session.set_deduction_input("other_deductions", "750")
    session.set_deduction_input("pf_deduction", "not a number")
    document = session.generate()
    assert document.computation.salary.other_deductions == Decimal('750')
    assert document.computation.salary.pf_deduction == Decimal('0')

    session.set_attendance(AttendanceInput(worked_full_days=30))
    assert session.deductions.other_deductions == Decimal('0.00')
    assert document.computation.salary.other_deductions == Decimal('0.00')


def test_unknown_deduction_input(employee):
    session = make_session(employee)
    with pytest.raises(KeyError):
        session.set_deduction_input("basic_salary", "1")


def test_selecting_other_employee_discards_document(employee):
    session = make_session(employee)
    session.generate()
    session.select_employee(None)
    assert session.document is None
    assert session.generate() is None


def test_snapshot_failure_leaves_document_unchanged(employee):
    class BrokenExporter:
        def export(self, document):
            raise RuntimeError("renderer offline")

    session = make_session(employee)
    document = session.generate()
    before = document.to_dict()
    with pytest.raises(RuntimeError):
        session.export_snapshot(BrokenExporter())
    assert session.document is document
    assert document.to_dict() == before


def test_to_dict_rendering_data(employee):
    document = make_session(employee).generate()
    data = document.to_dict()
    assert data["title"] == "Payslip from - April 2025"
    assert data["filename"] == "Payslip_Asha Kumar_April_2025.pdf"
    assert data["employee"]["Date of Birth"] == "07-05-1990"
    assert data["employee"]["Date of Joining"] == "2020-01-15"
    assert data["employee"]["ESIC Number"] == "-"
    assert data["earnings"]["Basic Salary"] == "20000.00"
    assert data["deductions"]["Other Deductions"] == "3000.00"
    assert data["net_payable"] == "25000.00"
    assert data["payable_days"]["Worked Days"] == "23"
    assert data["total_days"] == 30
    assert data["other_deductions_mode"] == "automatic"


def test_half_day_label(employee):
    session = make_session(employee)
    session.set_attendance(AttendanceInput(worked_full_days=20, worked_half_days=3, weekly_off=4))
    document = session.generate()
    assert dict(document.payable_days_rows())["Worked Days"] == "21.5"
    # 30 - 25.5 = 4.5 days at 1000
    assert document.computation.salary.other_deductions == Decimal('4500.00')


def test_set_field_huge_value_becomes_zero(employee):
    document = make_session(employee).generate()
    document.set_editing(True)
    document.set_field("basic_salary", "1e30")
    rendered = document.to_dict()
    assert rendered['earnings']['Basic Salary'] == '0.00'
    assert rendered['total_earnings'] == '10000.00'
