"""
Excel report generator for Model 182 donor totals.
Creates a workbook with a summary sheet and one row per donor.
"""

from datetime import datetime
from pathlib import Path
import logging

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from ..config import FiscalConfig
from ..models.transaction import Model182Result
from ..utils.exceptions import ReportGenerationError

logger = logging.getLogger(__name__)

# Style definitions
HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True)
RECURRENT_FILL = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
RETURNED_FILL = PatternFill(start_color="FFEB9C", end_color="FFEB9C", fill_type="solid")
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)
AMOUNT_FORMAT = "#,##0.00"

DONOR_HEADERS = [
    "Tax ID",
    "Name",
    "Zip Code",
    "Province",
    "Donor Type",
    "Total Amount",
    "Returned Amount",
    "Year -1",
    "Year -2",
    "Recurrent",
]


class Model182ExcelReport:
    """Generates the Model 182 donor totals workbook."""

    def __init__(self, config: FiscalConfig):
        self.config = config
        self.sheet_config = config.output.sheets

    def default_output_path(self, year: int) -> Path:
        """Build the output file name from the configured template."""
        excel_config = self.config.output.excel
        timestamp = (
            datetime.now().strftime("%Y%m%d_%H%M%S") if excel_config.include_timestamp else ""
        )
        filename = excel_config.filename_template.format(year=year, timestamp=timestamp)
        return Path(filename.replace("_.xlsx", ".xlsx"))

    def generate_report(self, result: Model182Result, output_path: Path) -> Path:
        """
        Generate the report workbook.

        Args:
            result: Model 182 calculation result
            output_path: Path for output file

        Returns:
            Path to generated report

        Raises:
            ReportGenerationError: If the workbook cannot be written
        """
        logger.info(f"Generating Excel report: {output_path}")

        wb = Workbook()
        if wb.active:
            wb.remove(wb.active)

        if self.sheet_config.summary.enabled:
            self._create_summary_sheet(wb, result)
        if self.sheet_config.donors.enabled:
            self._create_donors_sheet(wb, result)

        if not wb.worksheets:
            raise ReportGenerationError("All report sheets are disabled")

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            wb.save(output_path)
        except OSError as e:
            raise ReportGenerationError(f"Failed to save report {output_path}: {e}") from e

        logger.info(f"Report saved: {output_path}")
        return output_path

    def _create_summary_sheet(self, wb: Workbook, result: Model182Result) -> None:
        """Create the summary sheet with key figures."""
        ws = wb.create_sheet(self.sheet_config.summary.name)

        ws["A1"] = f"Model 182 - Donations {result.year}"
        ws["A1"].font = Font(size=16, bold=True)
        ws.merge_cells("A1:C1")

        ws["A3"] = "Generated:"
        ws["B3"] = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

        stats = result.stats
        rows = [
            ("Declared Donors:", stats.total_donors),
            ("Total Amount:", float(stats.total_amount)),
            ("Returns Excluded:", stats.excluded_returns),
            ("Returned Amount:", float(stats.excluded_amount)),
        ]
        for i, (label, value) in enumerate(rows, start=5):
            ws[f"A{i}"] = label
            ws[f"A{i}"].font = Font(bold=True)
            ws[f"B{i}"] = value
            if isinstance(value, float):
                ws[f"B{i}"].number_format = AMOUNT_FORMAT

        ws.column_dimensions["A"].width = 25
        ws.column_dimensions["B"].width = 25

    def _create_donors_sheet(self, wb: Workbook, result: Model182Result) -> None:
        """Create one row per declared donor."""
        ws = wb.create_sheet(self.sheet_config.donors.name)

        for col, header in enumerate(DONOR_HEADERS, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.border = THIN_BORDER
            cell.alignment = Alignment(horizontal="center")

        for row_num, row in enumerate(result.donor_totals, start=2):
            donor = row.donor
            row_data = [
                donor.tax_id,
                donor.name,
                donor.zip_code,
                donor.province or "",
                donor.donor_type.value,
                float(row.total_amount),
                float(row.returned_amount),
                float(row.value1),
                float(row.value2),
                "Yes" if row.recurrent else "No",
            ]

            for col, value in enumerate(row_data, start=1):
                cell = ws.cell(row=row_num, column=col, value=value)
                cell.border = THIN_BORDER
                if isinstance(value, float):
                    cell.number_format = AMOUNT_FORMAT
                if row.recurrent:
                    cell.fill = RECURRENT_FILL
                elif row.returned_amount > 0:
                    cell.fill = RETURNED_FILL

        for col_letter, width in zip("ABCDEFGHIJ", [14, 30, 10, 14, 12, 14, 16, 12, 12, 10]):
            ws.column_dimensions[col_letter].width = width
        ws.freeze_panes = "A2"
