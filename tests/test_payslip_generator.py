from pathlib import Path

import openpyxl

from models.employee import Employee
from models.payroll import AttendanceInput
from processors.payslip_document import PayslipSession
from processors.payslip_generator import DocumentSnapshotExporter, PayslipGenerator


def test_generate_payslip_workbook(employee):
    session = PayslipSession()
    session.select_employee(employee)
    session.set_period("April", 2025)
    session.set_attendance(AttendanceInput(worked_full_days=23, weekly_off=4))
    session.generate()

    generator = PayslipGenerator()
    assert isinstance(generator, DocumentSnapshotExporter)
    filepath = session.export_snapshot(generator)

    path = Path(filepath)
    assert path.exists()
    assert path.name == "Payslip_Asha_Kumar_April_2025.xlsx"

    ws = openpyxl.load_workbook(filepath).active
    values = [cell for row in ws.iter_rows(values_only=True) for cell in row if cell is not None]
    assert "Payslip from - April 2025" in values
    assert "07-05-1990" in values
    assert "3000.00" in values
    assert "Total Net Payable : Rs. 25000.00" in values
    assert "This PDF is system-generated, no signature required" in values


def test_export_without_document_is_noop():
    assert PayslipSession().export_snapshot(PayslipGenerator()) is None


def test_workbook_name_stays_in_output_folder(employee_record):
    generator = PayslipGenerator()
    for name in ("A/B", "../../escape"):
        session = PayslipSession()
        session.select_employee(Employee.from_record({**employee_record, "name": name}))
        session.set_period("April", 2025)
        document = session.generate()

        path = Path(session.export_snapshot(generator))
        assert path.exists()
        assert path.parent == generator.output_dir
        assert document.snapshot_filename() == f"Payslip_{name}_April_2025.pdf"
