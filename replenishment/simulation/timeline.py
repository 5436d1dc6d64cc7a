"""Batch timeline resolver.

Turns each batch's order day, production days and logistics channel into the
production end, arrival day and the money the batch ties up.
"""

import logging
import math
from dataclasses import dataclass
from typing import List

from ..models.batch import Batch
from ..models.logistics import LogisticsCosts
from ..models.module_state import ModuleState
from .config import SimulationConfig

logger = logging.getLogger(__name__)


@dataclass
class BatchTimeline:
    """
    Resolved day markers and costs of one batch.

    Attributes:
        batch_index: Position of the batch in the input list
        order_day: Day the order is placed (deposit due)
        production_end_day: Day production finishes (balance due)
        arrival_time: Day the batch lands, possibly fractional
        final_quantity: Units that land, including the extra buffer
        unit_cost: Production cost per unit
        unit_freight: Freight per unit in the unit-cost currency
    """
    batch_index: int
    order_day: int
    production_end_day: float
    arrival_time: float
    final_quantity: int
    unit_cost: float
    unit_freight: float

    @property
    def arrival_day(self) -> int:
        """Whole day the batch becomes sellable and freight is paid."""
        return int(math.floor(self.arrival_time))

    @property
    def production_cost(self) -> float:
        """Total production cost of the batch."""
        return self.final_quantity * self.unit_cost

    @property
    def freight_cost(self) -> float:
        """Total freight cost of the batch."""
        return self.final_quantity * self.unit_freight

    @property
    def landed_cost(self) -> float:
        """Production plus freight cost."""
        return self.production_cost + self.freight_cost

    def __str__(self) -> str:
        """String representation."""
        return (
            f"Batch #{self.batch_index + 1}: order d{self.order_day}, "
            f"production end d{self.production_end_day:g}, arrival d{self.arrival_day}, "
            f"{self.final_quantity} units"
        )


def unit_freight_cost(
    logistics_costs: LogisticsCosts,
    batch: Batch,
    exchange_rate: float,
    epsilon: float,
) -> float:
    """
    Per-unit freight of a batch converted into the unit-cost currency.

    Returns 0 when the exchange rate is below ``epsilon``.
    """
    if exchange_rate < epsilon:
        return 0.0
    return logistics_costs.for_type(batch.logistics_type) / exchange_rate


def resolve_timeline(
    index: int,
    batch: Batch,
    state: ModuleState,
    logistics_costs: LogisticsCosts,
    config: SimulationConfig,
) -> BatchTimeline:
    """
    Resolve one batch's timeline.

    Overlapping or out-of-order windows are not an error; arrivals are
    ordered by the inventory queue.

    Args:
        index: Position of the batch in the input list
        batch: Batch definition
        state: Module state (unit cost, exchange rate, lead times)
        logistics_costs: Per-unit freight per channel
        config: Simulation configuration

    Returns:
        BatchTimeline for the batch
    """
    production_end = batch.offset_day + batch.production_days
    arrival = production_end + state.logistics_days.for_type(batch.logistics_type)

    timeline = BatchTimeline(
        batch_index=index,
        order_day=batch.offset_day,
        production_end_day=production_end,
        arrival_time=arrival,
        final_quantity=batch.final_quantity,
        unit_cost=state.unit_cost,
        unit_freight=unit_freight_cost(
            logistics_costs, batch, state.exchange_rate, config.ratio_epsilon
        ),
    )
    logger.debug("Resolved %s", timeline)
    return timeline


def resolve_timelines(
    state: ModuleState,
    logistics_costs: LogisticsCosts,
    config: SimulationConfig,
) -> List[BatchTimeline]:
    """Resolve the timelines of all batches in input order."""
    return [
        resolve_timeline(i, batch, state, logistics_costs, config)
        for i, batch in enumerate(state.batches)
    ]
