"""Per-unit recall and profit valuation."""

from typing import Optional, Sequence, Tuple

from ..models.fee_breakdown import FeeBreakdownFunction


def period_value(values: Sequence[float], period: int) -> float:
    """Value of a per-period array, 0 when the period is missing."""
    if 0 <= period < len(values):
        return values[period]
    return 0.0


class UnitValuation:
    """
    Values one sold unit in cash recalled and profit earned.

    With a selected pricing strategy the external fee breakdown decides both
    numbers. Without one, profit is ``price * margin / 100`` and the platform
    is assumed to pay back the unit's cost and freight plus that profit.

    Example:
        >>> valuation = UnitValuation([20.0] * 6, [20.0] * 6)
        >>> valuation.value(0, unit_cost=10.0, unit_freight=1.0)
        (15.0, 4.0)
    """

    def __init__(
        self,
        prices: Sequence[float],
        margins: Sequence[float],
        strategy_id: str = "",
        fee_breakdown: Optional[FeeBreakdownFunction] = None,
    ):
        """
        Initialize valuation.

        Args:
            prices: Price per pricing period
            margins: Fallback margin percent per pricing period
            strategy_id: Selected pricing strategy, empty for the fallback
            fee_breakdown: Fee breakdown function used with a strategy
        """
        self.prices = list(prices)
        self.margins = list(margins)
        self.strategy_id = strategy_id or ""
        self.fee_breakdown = fee_breakdown

    @property
    def uses_strategy(self) -> bool:
        """True when the fee breakdown function is consulted."""
        return bool(self.strategy_id) and self.fee_breakdown is not None

    def price(self, period: int) -> float:
        """List price in a pricing period."""
        return period_value(self.prices, period)

    def value(self, period: int, unit_cost: float, unit_freight: float) -> Tuple[float, float]:
        """
        Recall and profit of one unit sold in a pricing period.

        Args:
            period: Pricing period index
            unit_cost: Production cost of the unit
            unit_freight: Freight of the unit

        Returns:
            Tuple of (unit recall, unit profit)
        """
        price = self.price(period)
        if self.uses_strategy:
            breakdown = self.fee_breakdown(price, self.strategy_id)
            return breakdown.recall_amount, breakdown.net_profit

        profit = price * (period_value(self.margins, period) / 100.0)
        return unit_cost + unit_freight + profit, profit
