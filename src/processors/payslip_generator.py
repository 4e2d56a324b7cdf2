import logging
from abc import ABC, abstractmethod
from typing import Any

import openpyxl
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill
from werkzeug.utils import secure_filename

from config.settings import OUTPUT_DIR, COMPANY_ADDRESS, CURRENCY_LABEL
from processors.payslip_document import FOOTER_TEXT, NET_PAYABLE_NOTE, PayslipDocument
from utils.formatters import format_amount, format_currency

logger = logging.getLogger(__name__)


class DocumentSnapshotExporter(ABC):
    """Turns a finished payslip document into a downloadable artifact"""

    @abstractmethod
    def export(self, document: PayslipDocument) -> Any:
        ...


class PayslipGenerator(DocumentSnapshotExporter):
    """Generate individual payslip Excel files"""

    def __init__(self):
        self.output_dir = OUTPUT_DIR / "payslips"
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export(self, document: PayslipDocument) -> str:
        return self.generate(document)

    def generate(self, document: PayslipDocument) -> str:
        """Generate payslip Excel file"""

        # Create workbook
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "Payslip"

        # Set column widths
        ws.column_dimensions['A'].width = 25
        ws.column_dimensions['B'].width = 18
        ws.column_dimensions['C'].width = 25
        ws.column_dimensions['D'].width = 18

        # Define styles
        header_font = Font(bold=True, size=12)
        bold_font = Font(bold=True)
        header_fill = PatternFill(start_color="B4C7E7", end_color="B4C7E7", fill_type="solid")
        thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )
        right = Alignment(horizontal='right')

        # Header section
        row = 1
        ws[f'A{row}'] = document.employee.company or ""
        ws[f'A{row}'].font = header_font
        ws[f'D{row}'] = document.title
        ws[f'D{row}'].font = bold_font

        row = 2
        ws[f'A{row}'] = COMPANY_ADDRESS

        # Employee details, two columns of label/value pairs
        row = 4
        ws[f'A{row}'] = "Employee Details"
        ws[f'A{row}'].font = header_font
        row += 1

        identity = document.identity_rows()
        for index in range(0, len(identity), 2):
            label, value = identity[index]
            ws[f'A{row}'] = label
            ws[f'B{row}'] = value
            if index + 1 < len(identity):
                label, value = identity[index + 1]
                ws[f'C{row}'] = label
                ws[f'D{row}'] = value
            row += 1

        # Earnings and deductions table
        row += 1
        for col, header in zip('ABCD', ['Earnings', f'Amount ({CURRENCY_LABEL})',
                                        'Deductions', f'Amount ({CURRENCY_LABEL})']):
            ws[f'{col}{row}'] = header
            ws[f'{col}{row}'].font = bold_font
            ws[f'{col}{row}'].fill = header_fill
            ws[f'{col}{row}'].border = thin_border
        row += 1

        earnings = document.earnings_rows()
        deductions = document.deduction_rows()
        for index in range(max(len(earnings), len(deductions))):
            if index < len(earnings):
                ws[f'A{row}'] = earnings[index][0]
                ws[f'B{row}'] = earnings[index][1]
            if index < len(deductions):
                ws[f'C{row}'] = deductions[index][0]
                ws[f'D{row}'] = deductions[index][1]
            for col in 'ABCD':
                ws[f'{col}{row}'].border = thin_border
            ws[f'B{row}'].alignment = right
            ws[f'D{row}'].alignment = right
            row += 1

        computation = document.computation
        ws[f'A{row}'] = "Total Gross Earnings"
        ws[f'B{row}'] = format_amount(computation.total_earnings)
        ws[f'C{row}'] = "Total Deductions"
        ws[f'D{row}'] = format_amount(computation.total_deductions)
        for col in 'ABCD':
            ws[f'{col}{row}'].font = bold_font
            ws[f'{col}{row}'].border = thin_border
        ws[f'B{row}'].alignment = right
        ws[f'D{row}'].alignment = right
        row += 2

        # Payable days
        ws[f'A{row}'] = "Total Payable Days"
        ws[f'A{row}'].font = bold_font
        row += 1
        for label, value in document.payable_days_rows():
            ws[f'A{row}'] = label
            ws[f'B{row}'] = value
            row += 1
        row += 1

        # Net payment
        ws[f'A{row}'] = f"Total Net Payable : {format_currency(computation.net_payable, CURRENCY_LABEL)}"
        ws[f'A{row}'].font = Font(bold=True, size=14)
        row += 1
        ws[f'A{row}'] = NET_PAYABLE_NOTE
        row += 2

        ws[f'A{row}'] = FOOTER_TEXT

        # Generate filename, employee names may carry path separators
        filepath = self.output_dir / secure_filename(document.snapshot_filename("xlsx"))

        # Save workbook
        wb.save(filepath)
        logger.info("Saved payslip workbook %s", filepath.name)

        return str(filepath)
