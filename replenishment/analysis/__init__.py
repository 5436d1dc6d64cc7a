"""Post-simulation analysis."""

from .kpis import PlanKPIs, compute_plan_kpis, safe_ratio
from .batch_outcomes import BatchOutcome, summarize_batch_outcomes

__all__ = [
    "PlanKPIs",
    "compute_plan_kpis",
    "safe_ratio",
    "BatchOutcome",
    "summarize_batch_outcomes",
]
