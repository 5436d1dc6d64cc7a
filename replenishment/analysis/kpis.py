"""Plan-level KPIs derived from a simulation result."""

from dataclasses import dataclass

from ..models.simulation_result import SimulationResult
from ..simulation.constants import RATIO_EPSILON


def safe_ratio(numerator: float, denominator: float, epsilon: float = RATIO_EPSILON) -> float:
    """Divide, returning 0 when ``|denominator| < epsilon``."""
    if abs(denominator) < epsilon:
        return 0.0
    return numerator / denominator


@dataclass
class PlanKPIs:
    """
    Capital efficiency of a replenishment plan.

    Capital at risk is ``|min_cash|``: the deepest the plan pushes the cash
    position below zero.

    Attributes:
        capital_at_risk: |min_cash|
        roi: Net profit per unit of capital at risk
        capital_turnover: GMV per unit of capital at risk
        revenue_turnover: Recalled revenue per unit of capital at risk
        net_margin: Net profit as a share of GMV
    """
    capital_at_risk: float = 0.0
    roi: float = 0.0
    capital_turnover: float = 0.0
    revenue_turnover: float = 0.0
    net_margin: float = 0.0

    def __str__(self) -> str:
        """String representation."""
        return (
            f"ROI {self.roi:.1%}, capital turnover {self.capital_turnover:.2f}x, "
            f"net margin {self.net_margin:.1%} (capital at risk ${self.capital_at_risk:,.2f})"
        )


def compute_plan_kpis(result: SimulationResult, epsilon: float = RATIO_EPSILON) -> PlanKPIs:
    """
    Compute KPIs of a simulation result.

    Args:
        result: Simulation result
        epsilon: Denominator magnitude below which a ratio is 0

    Returns:
        PlanKPIs
    """
    capital = abs(result.min_cash)
    return PlanKPIs(
        capital_at_risk=capital,
        roi=safe_ratio(result.total_net_profit, capital, epsilon),
        capital_turnover=safe_ratio(result.total_gmv, capital, epsilon),
        revenue_turnover=safe_ratio(result.total_revenue, capital, epsilon),
        net_margin=safe_ratio(result.total_net_profit, result.total_gmv, epsilon),
    )
