"""Inventory consumption simulator.

Day-stepped FIFO depletion of arriving batches against the seasonal demand
curve. This is the engine's core loop: it interleaves arrivals, consumption
and revenue postings into the cash & profit ledger.

FIFO Logic:
- Lots are consumed in arrival order
- Lots arriving on the same day are consumed in batch definition order
- Lots emptied mid-day hand the rest of the day's demand to the next lot
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..models.module_state import ModuleState
from .calendar import daily_demand, pricing_period
from .config import SimulationConfig
from .ledger import CashProfitLedger
from .pricing import UnitValuation
from .timeline import BatchTimeline

logger = logging.getLogger(__name__)


@dataclass
class InventoryLot:
    """
    Units of one batch still on hand.

    Attributes:
        batch_index: Batch the units belong to
        quantity: Remaining units
        unit_cost: Production cost per unit
        unit_freight: Freight per unit
        arrival_time: Arrival day used for FIFO ordering
    """
    batch_index: int
    quantity: float
    unit_cost: float
    unit_freight: float
    arrival_time: int

    @classmethod
    def from_timeline(cls, timeline: BatchTimeline) -> "InventoryLot":
        """Create a full lot for a resolved batch."""
        return cls(
            batch_index=timeline.batch_index,
            quantity=float(timeline.final_quantity),
            unit_cost=timeline.unit_cost,
            unit_freight=timeline.unit_freight,
            arrival_time=timeline.arrival_day,
        )

    @property
    def is_empty(self) -> bool:
        """True when nothing is left to sell."""
        return self.quantity <= 0


class InventoryQueue:
    """
    Arrival-ordered FIFO queue of inventory lots.

    Example:
        >>> queue = InventoryQueue()
        >>> queue.receive([InventoryLot(1, 100, 10.0, 1.0, 5), InventoryLot(0, 50, 10.0, 1.0, 5)])
        >>> queue.head.batch_index
        0
    """

    def __init__(self):
        """Initialize an empty queue."""
        self._lots: List[InventoryLot] = []

    def receive(self, lots: List[InventoryLot]) -> None:
        """
        Add arriving lots and restore FIFO order.

        Ordering is by (arrival_time, batch_index) ascending.

        Args:
            lots: Lots arriving today
        """
        self._lots.extend(lots)
        self._lots.sort(key=lambda lot: (lot.arrival_time, lot.batch_index))

    @property
    def head(self) -> Optional[InventoryLot]:
        """Lot consumed next, or None when empty."""
        return self._lots[0] if self._lots else None

    def take(self, quantity: float) -> float:
        """
        Take up to ``quantity`` units from the head lot.

        The head lot is dropped once it is empty.

        Args:
            quantity: Units wanted

        Returns:
            Units actually taken from the head lot
        """
        lot = self._lots[0]
        taken = min(quantity, lot.quantity)
        lot.quantity -= taken
        if lot.is_empty:
            self._lots.pop(0)
        return taken

    @property
    def on_hand(self) -> float:
        """Total units across all lots."""
        return sum(lot.quantity for lot in self._lots)

    @property
    def lots(self) -> List[InventoryLot]:
        """Lots in consumption order (copy)."""
        return list(self._lots)

    def __len__(self) -> int:
        return len(self._lots)

    def __bool__(self) -> bool:
        return bool(self._lots)


@dataclass
class SellingWindow:
    """
    Arrival and selling days of one batch.

    Attributes:
        arrival: Day the batch arrived, None when it never arrived
        start: First day units of the batch were sold
        end: Day after the last sale (exclusive end)
    """
    arrival: Optional[int] = None
    start: Optional[int] = None
    end: Optional[int] = None

    def mark_sold(self, day: int) -> None:
        """Record a sale on ``day``."""
        if self.start is None:
            self.start = day
        self.end = day + 1

    @property
    def has_sales(self) -> bool:
        """True when any unit of the batch was sold."""
        return self.start is not None and self.end is not None

    @property
    def holding_days(self) -> int:
        """Days between arrival and first sale, 0 when not applicable."""
        if not self.has_sales or self.arrival is None:
            return 0
        return max(0, self.start - self.arrival)


@dataclass
class ConsumptionOutcome:
    """
    Everything the day loop produces besides ledger postings.

    Attributes:
        daily_inventory: End-of-day units on hand, per day
        daily_missed: True on days with unmet demand after the first sale
        first_sale_day: Day of the first sale, or None
        windows: Selling window per batch
        batch_revenue: Recalled revenue per batch
        total_units_sold: Units sold over the horizon
        total_gmv: Units sold times list price
        total_revenue: Recalled revenue over all units
        total_net_profit: Profit over all units
    """
    daily_inventory: List[float]
    daily_missed: List[bool]
    first_sale_day: Optional[int] = None
    windows: List[SellingWindow] = field(default_factory=list)
    batch_revenue: List[float] = field(default_factory=list)
    total_units_sold: float = 0.0
    total_gmv: float = 0.0
    total_revenue: float = 0.0
    total_net_profit: float = 0.0


class InventoryConsumptionSimulator:
    """
    Runs the day loop over the simulation horizon.

    Each day:
    1. Lots arriving today join the queue
    2. Demand for the day's calendar month is drawn from the queue head
    3. Every consumption posts its revenue into the ledger
    4. Unmet demand after the first sale flags the day as missed
    """

    def __init__(
        self,
        state: ModuleState,
        timelines: List[BatchTimeline],
        valuation: UnitValuation,
        ledger: CashProfitLedger,
        config: SimulationConfig,
    ):
        """
        Initialize simulator.

        Args:
            state: Module state (demand curve, start date)
            timelines: Resolved batch timelines
            valuation: Per-unit recall/profit valuation
            ledger: Ledger receiving revenue postings
            config: Simulation configuration
        """
        self.state = state
        self.timelines = timelines
        self.valuation = valuation
        self.ledger = ledger
        self.config = config

    def _arrivals_by_day(self) -> Dict[int, List[BatchTimeline]]:
        arrivals: Dict[int, List[BatchTimeline]] = defaultdict(list)
        for timeline in self.timelines:
            arrivals[timeline.arrival_day].append(timeline)
        return arrivals

    def run(self) -> ConsumptionOutcome:
        """
        Simulate consumption for every day of the horizon.

        Returns:
            ConsumptionOutcome with daily inventory, missed days, selling
            windows and sales aggregates
        """
        horizon = self.config.horizon_days
        start_date = self.state.simulation_start_date
        arrivals = self._arrivals_by_day()
        queue = InventoryQueue()

        outcome = ConsumptionOutcome(
            daily_inventory=[0.0] * horizon,
            daily_missed=[False] * horizon,
            windows=[SellingWindow() for _ in self.timelines],
            batch_revenue=[0.0] * len(self.timelines),
        )

        for day in range(horizon):
            if day in arrivals:
                lots = []
                for timeline in arrivals[day]:
                    outcome.windows[timeline.batch_index].arrival = day
                    if timeline.final_quantity > 0:
                        lots.append(InventoryLot.from_timeline(timeline))
                queue.receive(lots)
                logger.debug(
                    "Day %d: %d lot(s) arrived, %.0f units on hand",
                    day, len(lots), queue.on_hand
                )

            demand = daily_demand(self.state.monthly_daily_sales, start_date, day)
            period = pricing_period(
                start_date, outcome.first_sale_day, day, self.config.pricing_periods
            )
            remaining = demand

            if queue.on_hand > 0 and demand > 0:
                if outcome.first_sale_day is None:
                    outcome.first_sale_day = day
                    logger.debug("First sale on day %d", day)

                while remaining > 0 and queue:
                    lot = queue.head
                    batch_index = lot.batch_index
                    outcome.windows[batch_index].mark_sold(day)

                    unit_recall, unit_profit = self.valuation.value(
                        period, lot.unit_cost, lot.unit_freight
                    )
                    taken = queue.take(remaining)
                    revenue = taken * unit_recall

                    outcome.batch_revenue[batch_index] += revenue
                    outcome.total_gmv += taken * self.valuation.price(period)
                    outcome.total_units_sold += taken
                    outcome.total_revenue += revenue
                    outcome.total_net_profit += taken * unit_profit
                    self.ledger.post_sale(day, batch_index, revenue)

                    remaining -= taken

            if (
                outcome.first_sale_day is not None
                and day >= outcome.first_sale_day
                and remaining > self.config.missed_demand_tolerance
            ):
                outcome.daily_missed[day] = True
            outcome.daily_inventory[day] = queue.on_hand

        return outcome
