"""
Excel export of replenishment simulation results.

Creates one workbook with:
1. Daily - cash, profit and inventory per charted day
2. Financial Events - deposits, balances, freight and recalls
3. Batch Timeline - production, shipping, holding, selling and stock-out bars
4. Summary - aggregates, dates and KPIs
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from ..analysis.kpis import compute_plan_kpis
from ..models.simulation_result import SimulationResult
from .dataframes import result_to_frames

logger = logging.getLogger(__name__)

# Color constants (matching design system)
HEADER_COLOR = "1E88E5"
ALT_ROW_COLOR = "F5F5F5"
NEGATIVE_COLOR = "FFCDD2"  # Red
POSITIVE_COLOR = "C8E6C9"  # Green

CURRENCY_FORMAT = '$#,##0.00'
NUMBER_FORMAT = '#,##0'
PERCENT_FORMAT = '0.0%'


def create_header_style() -> Dict[str, Any]:
    """Create header row style (blue background, white text, bold)."""
    return {
        'font': Font(name='Calibri', size=11, bold=True, color='FFFFFF'),
        'fill': PatternFill(start_color=HEADER_COLOR, end_color=HEADER_COLOR, fill_type='solid'),
        'alignment': Alignment(horizontal='center', vertical='center', wrap_text=True),
        'border': Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )
    }


def write_header(worksheet, headers: Sequence[str], row: int = 1):
    """Write a styled header row."""
    style = create_header_style()
    for col_idx, header in enumerate(headers, 1):
        cell = worksheet.cell(row=row, column=col_idx)
        cell.value = header
        cell.font = style['font']
        cell.fill = style['fill']
        cell.alignment = style['alignment']
        cell.border = style['border']


def apply_alternating_rows(worksheet, start_row: int, end_row: int, start_col: int = 1, end_col: int = 10):
    """Apply alternating row colors (white / light gray)."""
    fill = PatternFill(start_color=ALT_ROW_COLOR, end_color=ALT_ROW_COLOR, fill_type='solid')
    for row_idx in range(start_row, end_row + 1):
        if (row_idx - start_row) % 2 == 1:
            for col_idx in range(start_col, end_col + 1):
                worksheet.cell(row=row_idx, column=col_idx).fill = fill


def format_column(worksheet, column: int, start_row: int, end_row: int, number_format: str):
    """Apply a number format to a column range."""
    for row_idx in range(start_row, end_row + 1):
        worksheet.cell(row=row_idx, column=column).number_format = number_format


def auto_fit_columns(worksheet, max_width: int = 50):
    """Auto-fit column widths based on content."""
    for column in worksheet.columns:
        column_letter = get_column_letter(column[0].column)
        max_length = max(
            (len(str(cell.value)) for cell in column if cell.value is not None),
            default=0
        )
        worksheet.column_dimensions[column_letter].width = min(max_length + 2, max_width)


def write_frame(
    worksheet,
    df: pd.DataFrame,
    formats: Optional[Dict[str, str]] = None,
) -> int:
    """
    Write a DataFrame as a formatted table starting at A1.

    Args:
        worksheet: Target worksheet
        df: Table to write (headers come from its columns)
        formats: Number format per column name

    Returns:
        Number of data rows written
    """
    headers = list(df.columns)
    write_header(worksheet, headers)

    for row_idx, row_data in enumerate(df.itertuples(index=False), 2):
        for col_idx, value in enumerate(row_data, 1):
            worksheet.cell(row=row_idx, column=col_idx).value = value

    n_rows = len(df)
    if n_rows > 0:
        for name, number_format in (formats or {}).items():
            format_column(worksheet, headers.index(name) + 1, 2, n_rows + 1, number_format)
        apply_alternating_rows(worksheet, 2, n_rows + 1, 1, len(headers))
        worksheet.auto_filter.ref = f"A1:{get_column_letter(len(headers))}{n_rows + 1}"

    worksheet.freeze_panes = 'A2'
    auto_fit_columns(worksheet)
    return n_rows


def summary_rows(result: SimulationResult) -> List[Tuple[str, Any, Optional[str]]]:
    """(metric, value, number format) rows of the Summary sheet."""
    kpis = compute_plan_kpis(result)
    return [
        ("Min Cash", result.min_cash, CURRENCY_FORMAT),
        ("Final Cash", result.final_cash, CURRENCY_FORMAT),
        ("Total Net Profit", result.total_net_profit, CURRENCY_FORMAT),
        ("Total Revenue", result.total_revenue, CURRENCY_FORMAT),
        ("Total GMV", result.total_gmv, CURRENCY_FORMAT),
        ("Units Sold", result.total_units_sold, NUMBER_FORMAT),
        ("Stock-out Days", result.total_stockout_days, NUMBER_FORMAT),
        ("Break-even Date", result.break_even_date, None),
        ("Profitability Date", result.profitability_date, None),
        ("ROI", kpis.roi, PERCENT_FORMAT),
        ("Capital Turnover", kpis.capital_turnover, '0.00'),
        ("Net Margin", kpis.net_margin, PERCENT_FORMAT),
    ]


def export_simulation_workbook(
    result: SimulationResult,
    output_path: Union[str, Path],
) -> str:
    """
    Export a simulation result to a formatted Excel file.

    An empty result produces sheets with header rows only.

    Args:
        result: Simulation result
        output_path: Path to save Excel file

    Returns:
        Path to created file
    """
    frames = result_to_frames(result)

    wb = Workbook()
    wb.remove(wb.active)  # Remove default sheet

    # Sheet 1: Daily
    ws_daily = wb.create_sheet("Daily")
    write_frame(ws_daily, frames["daily"], {
        "Cash": CURRENCY_FORMAT,
        "Profit": CURRENCY_FORMAT,
        "Inventory": NUMBER_FORMAT,
    })

    # Sheet 2: Financial Events
    ws_events = wb.create_sheet("Financial Events")
    n_events = write_frame(ws_events, frames["events"], {"Amount": CURRENCY_FORMAT})
    amount_col = list(frames["events"].columns).index("Amount") + 1
    for row_idx in range(2, n_events + 2):
        cell = ws_events.cell(row=row_idx, column=amount_col)
        color = NEGATIVE_COLOR if (cell.value or 0) < 0 else POSITIVE_COLOR
        cell.fill = PatternFill(start_color=color, end_color=color, fill_type='solid')

    # Sheet 3: Batch Timeline
    ws_gantt = wb.create_sheet("Batch Timeline")
    write_frame(ws_gantt, frames["gantt"], {"Amount": CURRENCY_FORMAT})

    # Sheet 4: Summary
    ws_summary = wb.create_sheet("Summary")
    write_header(ws_summary, ["Metric", "Value"])
    for row_idx, (metric, value, number_format) in enumerate(summary_rows(result), 2):
        ws_summary.cell(row=row_idx, column=1).value = metric
        value_cell = ws_summary.cell(row=row_idx, column=2)
        value_cell.value = value
        if number_format:
            value_cell.number_format = number_format
    auto_fit_columns(ws_summary)

    wb.save(str(output_path))
    logger.info("Exported simulation workbook to %s", output_path)
    return str(output_path)
