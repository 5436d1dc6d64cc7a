"""Smart batch generator.

Greedy forward-chaining heuristic that proposes six monthly batches keeping
inventory continuously covered: each batch covers the 30 days after the
previous one sells out, and is ordered so it lands a safety buffer before
that sell-out day. It does not minimize cost or capital lock-up.
"""

import logging
import math
from datetime import date as Date
from typing import List, Optional, Sequence

from ..models.batch import Batch, LogisticsType
from ..models.module_state import ModuleState
from ..simulation.calendar import daily_demand
from ..simulation.constants import (
    COVERAGE_WINDOW_DAYS,
    DEFAULT_PRODUCTION_DAYS,
    DEFAULT_SAFETY_BUFFER_DAYS,
    SELL_SIMULATION_MAX_DAY,
    SMART_BATCH_COUNT,
)

logger = logging.getLogger(__name__)


def rolling_demand(
    monthly_daily_sales: Sequence[float],
    start_date: Date,
    from_day: int,
    days: int = COVERAGE_WINDOW_DAYS,
) -> float:
    """
    Total demand over ``days`` consecutive days starting at ``from_day``.

    This is a rolling look-ahead that may straddle calendar months, not a
    calendar month total.
    """
    return sum(
        daily_demand(monthly_daily_sales, start_date, from_day + offset)
        for offset in range(days)
    )


def sell_out_day(
    monthly_daily_sales: Sequence[float],
    start_date: Date,
    from_day: int,
    quantity: float,
    max_day: int = SELL_SIMULATION_MAX_DAY,
) -> int:
    """
    Day after the one on which ``quantity`` units sell out.

    Selling starts on ``from_day`` and consumes each day's demand. The walk
    stops at ``max_day`` when demand never exhausts the quantity (e.g. zero
    demand), which treats the batch as never fully sold.

    Args:
        monthly_daily_sales: Twelve daily sales figures
        start_date: Calendar date of day 0
        from_day: First selling day
        quantity: Units to sell
        max_day: Day at which the walk gives up

    Returns:
        Day after the last selling day
    """
    remaining = quantity
    day = from_day
    while remaining > 0 and day < max_day:
        remaining -= daily_demand(monthly_daily_sales, start_date, day)
        if remaining > 0:
            day += 1
    return day + 1


def generate_smart_batches(
    start_date: Date,
    monthly_daily_sales: Sequence[float],
    lead_time: float,
    safety_buffer_days: float = DEFAULT_SAFETY_BUFFER_DAYS,
    count: int = SMART_BATCH_COUNT,
    production_days: int = DEFAULT_PRODUCTION_DAYS,
) -> List[Batch]:
    """
    Propose a chain of sea batches covering demand without gaps.

    For each batch:
    1. Quantity is the rolling 30-day demand from the next coverage start
    2. The sell-out day of that quantity becomes the next coverage start
    3. The order day targets arrival ``safety_buffer_days`` before the
       coverage start, never before the lead time and never earlier than the
       previous batch's order day (the first batch is ordered on day 0)

    Args:
        start_date: Calendar date of day 0
        monthly_daily_sales: Twelve daily sales figures
        lead_time: Production plus transit days
        safety_buffer_days: Days a batch should land before it is needed
        count: Number of batches
        production_days: Production days of each batch

    Returns:
        Batches with non-decreasing offsets, ids 0..count-1
    """
    batches: List[Batch] = []
    coverage_start = lead_time

    for i in range(count):
        quantity = rolling_demand(monthly_daily_sales, start_date, int(coverage_start))
        sold_out = sell_out_day(monthly_daily_sales, start_date, int(coverage_start), quantity)
        target_arrival = max(lead_time, coverage_start - safety_buffer_days)

        if i == 0:
            offset = 0
        else:
            offset = max(0, batches[-1].offset_day, math.floor(target_arrival - lead_time))

        batches.append(Batch(
            id=i,
            name=f"Batch {i + 1}",
            quantity=math.floor(quantity + 0.5),
            offset_day=offset,
            production_days=production_days,
            logistics_type=LogisticsType.SEA,
        ))
        logger.debug(
            "Smart batch %d: %d units, offset %d, coverage d%d-d%d",
            i + 1, math.floor(quantity + 0.5), offset, int(coverage_start), sold_out
        )
        coverage_start = sold_out

    return batches


def smart_batches_for_state(
    state: ModuleState,
    safety_buffer_days: Optional[float] = None,
) -> List[Batch]:
    """
    Propose smart batches from a module state.

    Lead time is default production days plus sea transit days; the safety
    buffer defaults to the state's ``safety_days``.

    Args:
        state: Module state
        safety_buffer_days: Override of the state's safety buffer

    Returns:
        Proposed batches
    """
    lead_time = state.lead_time(LogisticsType.SEA, DEFAULT_PRODUCTION_DAYS)
    buffer_days = state.safety_days if safety_buffer_days is None else safety_buffer_days
    return generate_smart_batches(
        state.simulation_start_date,
        state.monthly_daily_sales,
        lead_time,
        safety_buffer_days=buffer_days,
    )
