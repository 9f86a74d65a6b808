# utils/sales_dashboard/export.py
"""
Formatted Excel Export for the Sales Dashboard

Creates an Excel workbook with:
- Summary sheet with KPIs and progress against targets
- Sales by vendor (with monthly targets)
- Monthly breakdown with cumulative amounts
- Detailed records

Uses openpyxl for formatting capabilities.
"""

import logging
from datetime import datetime
from io import BytesIO
from typing import Any, List, Optional, Sequence, Tuple

from openpyxl import Workbook
from openpyxl.formatting.rule import ColorScaleRule
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from .constants import ALL_BRANCHES, EXCEL_STYLES, MONTH_MAPPING
from .metrics import generate_complete_month_series, running_totals
from .models import Report
from .normalizer import month_number
from .progress import annual_progress, current_month_progress, resolve_branch_target

logger = logging.getLogger(__name__)

# (field, header, width, kind)
Column = Tuple[str, str, int, str]


class SalesExport:
    """
    Excel report generator for the sales dashboard.

    Usage:
        exporter = SalesExport()
        excel_bytes = exporter.create_report(report, up_to_month=3)

        st.download_button(
            label="Descargar Excel",
            data=excel_bytes,
            file_name="ventas_2025.xlsx",
            mime=EXCEL_MIME
        )
    """

    def __init__(self):
        self.wb = None
        self._init_styles()

    def _init_styles(self):
        """Initialize reusable styles."""
        self.header_fill = PatternFill(
            start_color=EXCEL_STYLES['header_fill_color'],
            end_color=EXCEL_STYLES['header_fill_color'],
            fill_type='solid'
        )
        self.header_font = Font(
            bold=True,
            color=EXCEL_STYLES['header_font_color'],
            size=11
        )
        self.title_font = Font(bold=True, size=16)
        self.label_font = Font(bold=True, size=11)

        thin_border = Side(style='thin', color='000000')
        self.cell_border = Border(
            left=thin_border,
            right=thin_border,
            top=thin_border,
            bottom=thin_border
        )

        self.center_align = Alignment(horizontal='center', vertical='center')
        self.right_align = Alignment(horizontal='right', vertical='center')

        self.currency_format = EXCEL_STYLES['currency_format']
        self.percent_format = EXCEL_STYLES['percent_format']

    # =========================================================================
    # MAIN EXPORT METHOD
    # =========================================================================

    def create_report(self, report: Report, up_to_month: int) -> BytesIO:
        """
        Create the workbook for one report.

        Args:
            report: Report of the selected year
            up_to_month: Reporting month (0 for a future year)

        Returns:
            BytesIO containing the Excel file
        """
        self.wb = Workbook()

        self._create_summary_sheet(report, up_to_month)
        self._create_vendor_sheet(report)
        self._create_monthly_sheet(report, up_to_month)
        self._create_detail_sheet(report)

        if 'Sheet' in self.wb.sheetnames:
            del self.wb['Sheet']

        output = BytesIO()
        self.wb.save(output)
        output.seek(0)

        logger.info(f"Excel report created for {report.year} ({report.total_sales} records)")
        return output

    # =========================================================================
    # SUMMARY SHEET
    # =========================================================================

    def _create_summary_sheet(self, report: Report, up_to_month: int):
        ws = self.wb.create_sheet("Resumen")
        ws['A1'] = f"Reporte de Ventas {report.year}"
        ws['A1'].font = self.title_font
        ws['A2'] = f"Generado: {datetime.now().strftime('%Y-%m-%d %H:%M')}"

        monthly_target = resolve_branch_target(report.targets_by_branch, ALL_BRANCHES)
        current = next(
            (summary for summary in report.monthly_sales if month_number(summary.month) == up_to_month),
            None
        )
        annual = annual_progress(report.total_amount, monthly_target)
        monthly = current_month_progress(current, monthly_target)
        month_label = MONTH_MAPPING.get(up_to_month, "-")

        rows = [
            ("Vendedores", len(report.vendors), None),
            ("Ventas", report.total_sales, None),
            ("Monto total", report.total_amount, self.currency_format),
            ("Meta mensual (todas las sucursales)", monthly_target or 0, self.currency_format),
            ("Meta anual", annual.target, self.currency_format),
            ("Avance anual", annual.percentage, self.percent_format),
            (f"Ventas {month_label}", monthly.actual, self.currency_format),
            (f"Avance {month_label}", monthly.percentage, self.percent_format),
        ]

        for row_idx, (label, value, number_format) in enumerate(rows, 4):
            label_cell = ws.cell(row=row_idx, column=1, value=label)
            label_cell.font = self.label_font
            value_cell = ws.cell(row=row_idx, column=2, value=value)
            value_cell.alignment = self.right_align
            if number_format:
                value_cell.number_format = number_format

        ws.column_dimensions['A'].width = 38
        ws.column_dimensions['B'].width = 18

    # =========================================================================
    # VENDOR SHEET
    # =========================================================================

    def _create_vendor_sheet(self, report: Report):
        ws = self.wb.create_sheet("Vendedores")
        columns: List[Column] = [
            ('vendor', 'Vendedor', 28, 'text'),
            ('sales_count', 'Ventas', 10, 'count'),
            ('total_amount', 'Monto', 16, 'currency'),
            ('average_amount', 'Promedio', 16, 'currency'),
            ('target', 'Meta mensual', 16, 'currency'),
        ]
        rows = [
            [
                summary.vendor,
                summary.sales_count,
                summary.total_amount,
                summary.average_amount,
                report.targets_by_vendor.get(summary.vendor),
            ]
            for summary in report.vendors
        ]
        self._write_table(ws, columns, rows)

        if rows:
            # Zero-sales vendors stand out red, the top seller green
            ws.conditional_formatting.add(
                f'C2:C{len(rows) + 1}',
                ColorScaleRule(
                    start_type='min', start_color='F8696B',
                    end_type='max', end_color='63BE7B'
                )
            )

    # =========================================================================
    # MONTHLY SHEET
    # =========================================================================

    def _create_monthly_sheet(self, report: Report, up_to_month: int):
        ws = self.wb.create_sheet("Mensual")
        columns: List[Column] = [
            ('month', 'Mes', 14, 'text'),
            ('sales_count', 'Ventas', 10, 'count'),
            ('total_amount', 'Monto', 16, 'currency'),
            ('cumulative_amount', 'Acumulado', 16, 'currency'),
        ]
        series = generate_complete_month_series(report.monthly_sales, up_to_month)
        cumulative = running_totals(series)
        rows = [
            [summary.month, summary.sales_count, summary.total_amount, running]
            for summary, running in zip(series, cumulative)
        ]
        self._write_table(ws, columns, rows)

    # =========================================================================
    # DETAIL SHEET
    # =========================================================================

    def _create_detail_sheet(self, report: Report):
        if not report.records:
            return

        ws = self.wb.create_sheet("Detalle")
        columns: List[Column] = [
            ('month', 'Mes', 12, 'text'),
            ('client', 'Cliente', 30, 'text'),
            ('vendor', 'Vendedor', 24, 'text'),
            ('branch', 'Sucursal', 18, 'text'),
            ('amount', 'Monto', 16, 'currency'),
            ('source', 'Fuente', 14, 'text'),
        ]
        rows = [
            [getattr(record, field) for field, _, _, _ in columns]
            for record in report.records
        ]
        self._write_table(ws, columns, rows)

    # =========================================================================
    # HELPER METHODS
    # =========================================================================

    def _write_table(self, ws, columns: Sequence[Column], rows: Sequence[Sequence[Optional[Any]]]):
        """Header row + data rows with borders, number formats and frozen header."""
        for col_idx, (_, header, width, _) in enumerate(columns, 1):
            cell = ws.cell(row=1, column=col_idx, value=header)
            cell.fill = self.header_fill
            cell.font = self.header_font
            cell.alignment = self.center_align
            cell.border = self.cell_border
            ws.column_dimensions[get_column_letter(col_idx)].width = width

        for row_idx, row in enumerate(rows, 2):
            for col_idx, ((_, _, _, kind), value) in enumerate(zip(columns, row), 1):
                cell = ws.cell(row=row_idx, column=col_idx, value=value)
                cell.border = self.cell_border
                if kind == 'currency':
                    cell.number_format = self.currency_format
                    cell.alignment = self.right_align
                elif kind == 'count':
                    cell.alignment = self.center_align

        ws.freeze_panes = 'A2'
