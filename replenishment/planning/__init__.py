"""Batch planning helpers feeding proposals into the simulation engine."""

from .smart_batches import (
    generate_smart_batches,
    rolling_demand,
    sell_out_day,
    smart_batches_for_state,
)
from .batch_editor import CoverageWindow, cascade_offsets, coverage_relay, propose_next_batch

__all__ = [
    "generate_smart_batches",
    "rolling_demand",
    "sell_out_day",
    "smart_batches_for_state",
    "CoverageWindow",
    "cascade_offsets",
    "coverage_relay",
    "propose_next_batch",
]
