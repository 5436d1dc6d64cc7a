"""Data models for the replenishment simulation."""

from .batch import Batch, LogisticsType
from .logistics import LogisticsCosts, LogisticsLeadTimes
from .module_state import ModuleState
from .fee_breakdown import FeeBreakdown, FeeBreakdownFunction
from .simulation_result import (
    BREAK_EVEN_NOT_REACHED,
    PROFITABILITY_NOT_REACHED,
    FinancialEvent,
    FinancialEventType,
    GanttBar,
    SeriesPoint,
    SimulationResult,
)

__all__ = [
    # Batches and logistics
    "Batch",
    "LogisticsType",
    "LogisticsCosts",
    "LogisticsLeadTimes",
    # Engine input
    "ModuleState",
    "FeeBreakdown",
    "FeeBreakdownFunction",
    # Engine output
    "BREAK_EVEN_NOT_REACHED",
    "PROFITABILITY_NOT_REACHED",
    "FinancialEvent",
    "FinancialEventType",
    "GanttBar",
    "SeriesPoint",
    "SimulationResult",
]
