"""Batch editing helpers: next-batch proposal, offset cascade and coverage relay."""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

from ..models.batch import Batch, LogisticsType
from ..models.module_state import ModuleState
from ..models.simulation_result import SimulationResult
from ..simulation.calendar import daily_demand, date_for_day, format_day_label
from ..simulation.constants import (
    COVERAGE_RELAY_MAX_DAY,
    COVERAGE_WINDOW_DAYS,
    DEFAULT_PRODUCTION_DAYS,
)
from .smart_batches import rolling_demand

logger = logging.getLogger(__name__)


def _estimated_sell_days(state: ModuleState, batch: Batch, lead_time: float) -> int:
    arrival = int(math.floor(batch.offset_day + lead_time))
    demand = daily_demand(state.monthly_daily_sales, state.simulation_start_date, arrival)
    if demand > 0:
        return int(math.ceil(batch.quantity / demand))
    return COVERAGE_WINDOW_DAYS


def propose_next_batch(
    state: ModuleState,
    result: Optional[SimulationResult] = None,
) -> Batch:
    """
    Propose one more sea batch appended after the current ones.

    The new batch should land when the last batch runs out:
    - If the last batch has a selling bar in ``result``, its end is the
      target arrival
    - Otherwise the selling time is estimated from the last batch's quantity
      and the daily demand of its arrival month (30 days when that is zero)
    - Without any batch, the target is the lead time itself and the batch is
      ordered on day 0

    The quantity is the rolling 30-day demand from the target arrival.

    Args:
        state: Module state with the current batches
        result: Last simulation result, if any

    Returns:
        New Batch with the next id
    """
    lead_time = state.lead_time(LogisticsType.SEA, DEFAULT_PRODUCTION_DAYS)
    offset = 0
    target_arrival = lead_time

    if state.batches:
        last_index = len(state.batches) - 1
        last = state.batches[last_index]
        selling_bar = None
        if result is not None:
            selling_bar = next(
                (bar for bar in result.gantt_selling if bar.batch_index == last_index), None
            )

        if selling_bar is not None:
            target_arrival = selling_bar.end
            offset = max(0, int(math.floor(target_arrival - lead_time)))
        else:
            target_arrival = last.offset_day + lead_time + _estimated_sell_days(state, last, lead_time)
            offset = max(0, int(math.floor(target_arrival - lead_time)))

    quantity = rolling_demand(
        state.monthly_daily_sales,
        state.simulation_start_date,
        int(math.floor(target_arrival)),
    )
    new_id = len(state.batches)
    batch = Batch(
        id=new_id,
        name=f"Batch {new_id + 1}",
        quantity=math.floor(quantity + 0.5),
        offset_day=offset,
        production_days=DEFAULT_PRODUCTION_DAYS,
        logistics_type=LogisticsType.SEA,
    )
    logger.debug("Proposed %s (target arrival d%g)", batch, target_arrival)
    return batch


def cascade_offsets(batches: List[Batch], index: int, new_offset: int) -> List[Batch]:
    """
    Change one batch's order day keeping order days non-decreasing.

    The new offset is clamped to >= 0 and to >= the previous batch's offset;
    every later batch is pushed forward to at least the offset before it.
    Earlier batches are untouched.

    Args:
        batches: Batches in order
        index: Position of the batch being changed
        new_offset: Requested order day

    Returns:
        New list of batches (inputs are not modified)

    Raises:
        IndexError: If index is out of range
    """
    if not 0 <= index < len(batches):
        raise IndexError(f"Batch index {index} out of range for {len(batches)} batches")

    updated = list(batches)
    offset = max(0, new_offset)
    if index > 0:
        offset = max(offset, updated[index - 1].offset_day)
    updated[index] = updated[index].model_copy(update={"offset_day": offset})

    current = offset
    for i in range(index + 1, len(updated)):
        if updated[i].offset_day < current:
            updated[i] = updated[i].model_copy(update={"offset_day": current})
        current = updated[i].offset_day

    return updated


@dataclass
class CoverageWindow:
    """
    Selling window of one batch in the coverage relay preview.

    Attributes:
        batch_index: Batch position
        start: First selling day
        end: Last selling day
        is_gap: True when selling starts more than a day after the previous
            batch's window ended
        months: Calendar months (1-12) the window touches, in order
        start_label: "M/D" of the start day
        end_label: "M/D" of the end day
    """
    batch_index: int
    start: int
    end: int
    is_gap: bool = False
    months: List[int] = field(default_factory=list)
    start_label: str = ""
    end_label: str = ""

    @property
    def days(self) -> int:
        """Window length in days, both ends included."""
        return self.end - self.start + 1


def _months_touched(state: ModuleState, start: int, end: int) -> List[int]:
    months: List[int] = []
    for day in range(start, end + 1):
        month = date_for_day(state.simulation_start_date, day).month
        if month not in months:
            months.append(month)
    return months


def coverage_relay(state: ModuleState, max_day: int = COVERAGE_RELAY_MAX_DAY) -> List[CoverageWindow]:
    """
    Preview how batches hand over selling to each other.

    Batches are relayed in definition order: each starts selling when it
    arrives, or the day after the previous batch sold out if that is later,
    and sells its final quantity against daily demand. The walk per batch
    stops at ``max_day``.

    Args:
        state: Module state with batches
        max_day: Day at which a sell walk gives up

    Returns:
        One CoverageWindow per batch
    """
    windows: List[CoverageWindow] = []
    start_date = state.simulation_start_date
    last_end: Optional[int] = None

    for index, batch in enumerate(state.batches):
        arrival = int(math.floor(
            batch.production_end_day + state.logistics_days.for_type(batch.logistics_type)
        ))
        start = arrival if last_end is None else max(arrival, last_end + 1)

        remaining = float(batch.final_quantity)
        day = start
        while remaining > 0 and day < max_day:
            remaining -= daily_demand(state.monthly_daily_sales, start_date, day)
            if remaining > 0:
                day += 1
        end = day

        window = CoverageWindow(
            batch_index=index,
            start=start,
            end=end,
            is_gap=last_end is not None and start > last_end + 1,
            months=_months_touched(state, start, end),
            start_label=format_day_label(start_date, start),
            end_label=format_day_label(start_date, end),
        )
        if window.is_gap:
            logger.debug("Coverage gap before batch #%d (d%d-d%d)", index + 1, last_end, start)
        windows.append(window)
        last_end = end

    return windows
