"""
Exporters for replenishment simulation results.

- pandas DataFrames (daily series, financial events, gantt bars)
- Formatted Excel workbook
"""

from .dataframes import result_to_frames
from .excel_workbook import export_simulation_workbook

__all__ = [
    'result_to_frames',
    'export_simulation_workbook',
]
