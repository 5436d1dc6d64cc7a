"""Fee breakdown contract supplied by an external pricing model."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class FeeBreakdown:
    """
    Per-unit economics for one selling price under a pricing strategy.

    Attributes:
        recall_amount: Cash the platform pays out per unit after its fees
        net_profit: Per-unit profit after all costs
    """
    recall_amount: float
    net_profit: float


class FeeBreakdownFunction(Protocol):
    """Callable computing a FeeBreakdown for a price under a strategy."""

    def __call__(self, price: float, strategy_id: str) -> FeeBreakdown:
        ...
