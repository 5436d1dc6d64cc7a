"""pandas tables of a simulation result."""

from typing import Dict, List

import pandas as pd

from ..models.simulation_result import GanttBar, SimulationResult

DAILY_COLUMNS = ["Day", "Cash", "Profit", "Inventory"]
EVENT_COLUMNS = ["Day", "Type", "Batch", "Amount", "Label"]
GANTT_COLUMNS = ["Phase", "Batch", "Start", "End", "Days", "Amount"]


def _bar_amount(bar: GanttBar) -> float:
    for value in (bar.cost, bar.freight, bar.revenue, bar.duration, bar.gap_days):
        if value is not None:
            return value
    return 0.0


def daily_frame(result: SimulationResult) -> pd.DataFrame:
    """One row per charted day with cash, profit and inventory."""
    rows = [
        {
            "Day": cash.x,
            "Cash": cash.y,
            "Profit": profit.y,
            "Inventory": inventory.y,
        }
        for cash, profit, inventory in zip(
            result.cash_series, result.profit_series, result.inventory_series
        )
    ]
    return pd.DataFrame(rows, columns=DAILY_COLUMNS)


def events_frame(result: SimulationResult) -> pd.DataFrame:
    """One row per financial event, in day order. Batches are numbered from 1."""
    rows = [
        {
            "Day": event.day,
            "Type": event.type.value,
            "Batch": event.batch_index + 1,
            "Amount": event.amount,
            "Label": event.label,
        }
        for event in result.financial_events
    ]
    return pd.DataFrame(rows, columns=EVENT_COLUMNS)


def gantt_frame(result: SimulationResult) -> pd.DataFrame:
    """
    All gantt bars in one table.

    ``Amount`` holds the bar's payload: cost for production, freight for
    shipping, revenue for selling, and the day count for holding and
    stock-out bars.
    """
    phases: List[tuple] = [
        ("production", result.gantt_production),
        ("shipping", result.gantt_shipping),
        ("holding", result.gantt_holding),
        ("selling", result.gantt_selling),
        ("stockout", result.gantt_stockout),
    ]
    rows = []
    for phase, bars in phases:
        for bar in bars:
            rows.append({
                "Phase": phase,
                "Batch": bar.batch_index + 1,
                "Start": bar.start,
                "End": bar.end,
                "Days": bar.length,
                "Amount": _bar_amount(bar),
            })

    df = pd.DataFrame(rows, columns=GANTT_COLUMNS)
    if len(df) > 0:
        df = df.sort_values(["Batch", "Start"], kind="stable").reset_index(drop=True)
    return df


def result_to_frames(result: SimulationResult) -> Dict[str, pd.DataFrame]:
    """
    Convert a simulation result to DataFrames.

    Args:
        result: Simulation result

    Returns:
        Dictionary with keys 'daily', 'events' and 'gantt'. Frames of an
        empty result have the columns but no rows.
    """
    return {
        "daily": daily_frame(result),
        "events": events_frame(result),
        "gantt": gantt_frame(result),
    }
