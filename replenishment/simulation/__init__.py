"""Replenishment simulation engine and its components."""

from .config import SimulationConfig
from .engine import simulate, chart_cutoff_day
from .timeline import BatchTimeline, resolve_timeline, resolve_timelines
from .inventory import (
    ConsumptionOutcome,
    InventoryConsumptionSimulator,
    InventoryLot,
    InventoryQueue,
    SellingWindow,
)
from .ledger import CashProfitLedger, LedgerTotals, RecallPosting
from .breakeven import find_zero_crossing
from .stockout import StockoutEpisode, StockoutScan, attribute_stockout, detect_stockouts
from .recall_chunker import chunk_recalls, format_recall_label
from .pricing import UnitValuation

__all__ = [
    "SimulationConfig",
    "simulate",
    "chart_cutoff_day",
    "BatchTimeline",
    "resolve_timeline",
    "resolve_timelines",
    "ConsumptionOutcome",
    "InventoryConsumptionSimulator",
    "InventoryLot",
    "InventoryQueue",
    "SellingWindow",
    "CashProfitLedger",
    "LedgerTotals",
    "RecallPosting",
    "find_zero_crossing",
    "StockoutEpisode",
    "StockoutScan",
    "attribute_stockout",
    "detect_stockouts",
    "chunk_recalls",
    "format_recall_label",
    "UnitValuation",
]
