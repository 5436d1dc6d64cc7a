"""Cash & profit ledger.

Accumulates dated deltas for two parallel series:

- Cash models liquidity: outflows on their due day, revenue when the
  platform pays it out (sale day + receivable delay).
- Profit models economic performance: the same outflows, but revenue on the
  sale day itself.
"""

import logging
from dataclasses import dataclass, field
from datetime import date as Date
from typing import Dict, List

from ..models.simulation_result import FinancialEvent, FinancialEventType
from .calendar import format_day_label
from .config import SimulationConfig
from .timeline import BatchTimeline

logger = logging.getLogger(__name__)


@dataclass
class RecallPosting:
    """Revenue of one batch paid out on one day."""
    day: int
    amount: float


@dataclass
class LedgerTotals:
    """
    Running sums over the full horizon.

    Attributes:
        running_cash: Cumulative cash position per day
        running_profit: Cumulative profit per day
        min_cash: Lowest cash position reached (0 when never negative)
        final_cash: Cash position on the last day
    """
    running_cash: List[float] = field(default_factory=list)
    running_profit: List[float] = field(default_factory=list)
    min_cash: float = 0.0
    final_cash: float = 0.0


class CashProfitLedger:
    """
    Dated cash and profit deltas plus the financial events behind them.

    Postings dated on or after the horizon are dropped.

    Example:
        >>> ledger = CashProfitLedger(date(2025, 1, 1), SimulationConfig(horizon_days=30))
        >>> ledger.post_outflow(0, FinancialEventType.DEPOSIT, 0, 3000.0)
        >>> ledger.totals().min_cash
        -3000.0
    """

    def __init__(self, start_date: Date, config: SimulationConfig):
        """
        Initialize ledger.

        Args:
            start_date: Calendar date of day 0 (for event labels)
            config: Simulation configuration
        """
        self.start_date = start_date
        self.config = config
        self.cash_delta: List[float] = [0.0] * config.horizon_days
        self.profit_delta: List[float] = [0.0] * config.horizon_days
        self.events: List[FinancialEvent] = []
        self.recall_postings: Dict[int, List[RecallPosting]] = {}
        self.dropped_postings = 0

    def post_outflow(
        self,
        day: int,
        event_type: FinancialEventType,
        batch_index: int,
        amount: float,
    ) -> bool:
        """
        Post a payment for a batch.

        The payment lowers both the cash and the profit delta of its day and
        is recorded as a negative financial event.

        Args:
            day: Due day
            event_type: DEPOSIT, BALANCE or FREIGHT
            batch_index: Batch paying
            amount: Positive amount paid

        Returns:
            True if posted, False when the day lies beyond the horizon
        """
        if not self.config.in_horizon(day):
            self.dropped_postings += 1
            logger.debug(
                "Dropped %s of batch #%d on day %d (beyond horizon)",
                event_type.value, batch_index + 1, day
            )
            return False

        self.cash_delta[day] -= amount
        self.profit_delta[day] -= amount
        self.events.append(FinancialEvent(
            day=day,
            type=event_type,
            batch_index=batch_index,
            amount=-amount,
            label=f"#{batch_index + 1} {event_type.value} {format_day_label(self.start_date, day)}",
        ))
        return True

    def post_batch_outflows(
        self,
        timeline: BatchTimeline,
        deposit_ratio: float,
        balance_ratio: float,
    ) -> None:
        """
        Post deposit, balance and freight of one batch.

        Args:
            timeline: Resolved batch timeline
            deposit_ratio: Share of production cost paid at order time
            balance_ratio: Share of production cost paid at production end
        """
        cost = timeline.production_cost
        self.post_outflow(
            timeline.order_day, FinancialEventType.DEPOSIT, timeline.batch_index,
            cost * deposit_ratio
        )
        self.post_outflow(
            int(timeline.production_end_day), FinancialEventType.BALANCE,
            timeline.batch_index, cost * balance_ratio
        )
        self.post_outflow(
            timeline.arrival_day, FinancialEventType.FREIGHT, timeline.batch_index,
            timeline.freight_cost
        )
        self.recall_postings.setdefault(timeline.batch_index, [])

    def post_sale(self, day: int, batch_index: int, revenue: float) -> None:
        """
        Post revenue of units sold on ``day``.

        Profit is credited on the sale day; cash arrives after the
        receivable delay and is also kept as a recall posting of the batch,
        merged with the previous posting when both fall on the same day.

        Args:
            day: Sale day
            batch_index: Batch the units came from
            revenue: Recalled revenue of the units
        """
        self.profit_delta[day] += revenue

        pay_day = day + self.config.receivable_delay_days
        if not self.config.in_horizon(pay_day):
            self.dropped_postings += 1
            return

        self.cash_delta[pay_day] += revenue
        postings = self.recall_postings.setdefault(batch_index, [])
        if postings and postings[-1].day == pay_day:
            postings[-1].amount += revenue
        else:
            postings.append(RecallPosting(day=pay_day, amount=revenue))

    def totals(self) -> LedgerTotals:
        """
        Accumulate running cash and profit over the full horizon.

        Returns:
            LedgerTotals with both running series, min cash and final cash
        """
        totals = LedgerTotals()
        cash = 0.0
        profit = 0.0
        for cash_change, profit_change in zip(self.cash_delta, self.profit_delta):
            cash += cash_change
            profit += profit_change
            totals.running_cash.append(cash)
            totals.running_profit.append(profit)
            if cash < totals.min_cash:
                totals.min_cash = cash
        totals.final_cash = cash
        return totals
