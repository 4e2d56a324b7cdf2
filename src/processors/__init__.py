from .attendance_proration import AttendanceProration
from .payslip_calculator import PayslipCalculator
from .payslip_document import PayslipDocument, PayslipSession, ManualOverridePolicy
from .csv_exporter import EmployeeCSVExporter, filter_employees, list_departments
from .payslip_generator import DocumentSnapshotExporter, PayslipGenerator


__all__ = [
    'AttendanceProration',
    'PayslipCalculator',
    'PayslipDocument',
    'PayslipSession',
    'ManualOverridePolicy',
    'EmployeeCSVExporter',
    'filter_employees',
    'list_departments',
    'DocumentSnapshotExporter',
    'PayslipGenerator'
]