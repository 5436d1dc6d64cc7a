"""Per-batch profit and loss summary.

Combines each batch's production and freight bars with its selling bar to
tell the seller which batches paid for themselves and when their cash came
back.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from ..models.simulation_result import GanttBar, SimulationResult
from ..simulation.constants import RECEIVABLE_DELAY_DAYS, UNSOLD_RECALL_FALLBACK_DAYS


@dataclass
class BatchOutcome:
    """
    Profit and loss of one batch.

    Attributes:
        batch_index: Batch position
        production_cost: Production cost of the batch
        freight_cost: Freight of the batch
        revenue: Revenue recalled from the batch's sales
        arrival_day: Day the batch landed
        sell_start_day: First selling day, or None if never sold
        sell_end_day: Day after the last sale, or None if never sold
        recall_complete_day: Day the last revenue is expected back
    """
    batch_index: int
    production_cost: float
    freight_cost: float
    revenue: float
    arrival_day: float
    sell_start_day: Optional[float] = None
    sell_end_day: Optional[float] = None
    recall_complete_day: float = 0.0

    @property
    def landed_cost(self) -> float:
        """Production plus freight cost."""
        return self.production_cost + self.freight_cost

    @property
    def net(self) -> float:
        """Revenue minus landed cost."""
        return self.revenue - self.landed_cost

    @property
    def is_profitable(self) -> bool:
        """True when revenue covers landed cost."""
        return self.net >= 0

    @property
    def sold(self) -> bool:
        """True when any unit was sold."""
        return self.sell_end_day is not None

    def __str__(self) -> str:
        """String representation."""
        status = "profit" if self.is_profitable else "loss"
        return (
            f"Batch #{self.batch_index + 1}: revenue ${self.revenue:,.2f} vs landed "
            f"${self.landed_cost:,.2f} ({status} ${self.net:,.2f})"
        )


def _by_batch(bars: List[GanttBar]) -> Dict[int, GanttBar]:
    return {bar.batch_index: bar for bar in bars}


def summarize_batch_outcomes(
    result: SimulationResult,
    receivable_delay_days: int = RECEIVABLE_DELAY_DAYS,
) -> List[BatchOutcome]:
    """
    Summarize every simulated batch.

    Recall completes ``receivable_delay_days`` after the selling window ends;
    a batch that never sold is assumed to be recalled 60 days after arrival.

    Args:
        result: Simulation result
        receivable_delay_days: Delay between sale and payout

    Returns:
        One BatchOutcome per production bar, in batch order
    """
    shipping = _by_batch(result.gantt_shipping)
    selling = _by_batch(result.gantt_selling)

    outcomes = []
    for production in result.gantt_production:
        index = production.batch_index
        ship_bar = shipping.get(index)
        sell_bar = selling.get(index)
        arrival = ship_bar.end if ship_bar is not None else production.end

        outcome = BatchOutcome(
            batch_index=index,
            production_cost=production.cost or 0.0,
            freight_cost=(ship_bar.freight or 0.0) if ship_bar is not None else 0.0,
            revenue=(sell_bar.revenue or 0.0) if sell_bar is not None else 0.0,
            arrival_day=arrival,
        )
        if sell_bar is not None:
            outcome.sell_start_day = sell_bar.start
            outcome.sell_end_day = sell_bar.end
            outcome.recall_complete_day = sell_bar.end + receivable_delay_days
        else:
            outcome.recall_complete_day = arrival + UNSOLD_RECALL_FALLBACK_DAYS
        outcomes.append(outcome)

    return outcomes
