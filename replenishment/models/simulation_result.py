"""Simulation result data models.

A SimulationResult is the engine's only output. It is a frozen snapshot:
the caller reads it and throws it away on the next input change.
"""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


#: Label used when the cash series never crosses back to zero
BREAK_EVEN_NOT_REACHED = "not reached"

#: Label used when the profit series never turns non-negative
PROFITABILITY_NOT_REACHED = "not profitable"


class FinancialEventType(str, Enum):
    """Kind of dated cash movement."""
    DEPOSIT = "deposit"
    BALANCE = "balance"
    FREIGHT = "freight"
    RECALL = "recall"


class FinancialEvent(BaseModel):
    """
    A dated cash movement attributed to one batch.

    Attributes:
        day: Simulation day of the movement
        type: Event kind
        batch_index: Index of the batch in the input list
        amount: Signed amount (outflows negative)
        label: Display label, e.g. "#1 deposit 1/15"
    """
    model_config = ConfigDict(frozen=True)

    day: int = Field(..., description="Simulation day")
    type: FinancialEventType = Field(..., description="Event kind")
    batch_index: int = Field(..., description="Batch index")
    amount: float = Field(..., description="Signed amount, outflows negative")
    label: str = Field(default="", description="Display label")

    @property
    def is_outflow(self) -> bool:
        """True for deposits, balances and freight."""
        return self.amount < 0


class SeriesPoint(BaseModel):
    """One (day, value) point of a time series."""
    model_config = ConfigDict(frozen=True)

    x: int = Field(..., description="Simulation day")
    y: float = Field(..., description="Value on that day")


class GanttBar(BaseModel):
    """
    A per-batch time window for the timeline chart.

    Only the payload field relevant to the bar's collection is set:
    production bars carry ``cost``, shipping bars ``freight``, selling bars
    ``revenue``, holding bars ``duration`` and stock-out bars ``gap_days``.

    Attributes:
        start: Window start day
        end: Window end day (exclusive)
        batch_index: Batch the window belongs to
    """
    model_config = ConfigDict(frozen=True)

    start: float = Field(..., description="Window start day")
    end: float = Field(..., description="Window end day")
    batch_index: int = Field(..., description="Batch index")
    cost: Optional[float] = Field(None, description="Batch production cost")
    freight: Optional[float] = Field(None, description="Batch freight cost")
    revenue: Optional[float] = Field(None, description="Revenue recalled from the batch")
    duration: Optional[float] = Field(None, description="Holding duration in days")
    gap_days: Optional[float] = Field(None, description="Stock-out length in days")

    @property
    def length(self) -> float:
        """Window length in days."""
        return self.end - self.start


class SimulationResult(BaseModel):
    """
    Immutable output of one simulation run.

    Attributes:
        day_min: First day shown on charts (always 0)
        day_max: Last day shown on charts
        cash_series: Running cash position per day
        profit_series: Running economic profit per day
        inventory_series: End-of-day units on hand per day
        gantt_production: Order -> production end, per batch
        gantt_shipping: Production end -> arrival, per batch
        gantt_holding: Arrival -> first sale, per batch (only when positive)
        gantt_selling: First sale -> last sale (exclusive), per batch
        gantt_stockout: Stock-out episodes, attributed to a batch
        min_cash: Lowest running cash position (capital at risk)
        final_cash: Cash position at the end of the horizon
        total_net_profit: Sum of per-unit profit over all units sold
        total_revenue: Sum of recalled cash over all units sold
        total_gmv: Units sold times list price
        total_units_sold: Units sold over the horizon
        total_stockout_days: Sum of stock-out episode lengths
        break_even_day: First cash zero-crossing day, or None
        break_even_point: Cash series point at the crossing, or None
        break_even_date: "M/D" of the crossing or "not reached"
        profitability_day: First profit zero-crossing day, or None
        profitability_point: Profit series point at the crossing, or None
        profitability_date: "M/D" of the crossing or "not profitable"
        final_sellout_day: Start of a shortfall still open at the end of the
            stock-out window (inventory simply ran dry), or None
        financial_events: Deposits, balances, freight and chunked recalls by day
    """
    model_config = ConfigDict(frozen=True)

    day_min: int = 0
    day_max: int = 0

    cash_series: List[SeriesPoint] = Field(default_factory=list)
    profit_series: List[SeriesPoint] = Field(default_factory=list)
    inventory_series: List[SeriesPoint] = Field(default_factory=list)

    gantt_production: List[GanttBar] = Field(default_factory=list)
    gantt_shipping: List[GanttBar] = Field(default_factory=list)
    gantt_holding: List[GanttBar] = Field(default_factory=list)
    gantt_selling: List[GanttBar] = Field(default_factory=list)
    gantt_stockout: List[GanttBar] = Field(default_factory=list)

    min_cash: float = 0.0
    final_cash: float = 0.0
    total_net_profit: float = 0.0
    total_revenue: float = 0.0
    total_gmv: float = 0.0
    total_units_sold: float = 0.0
    total_stockout_days: float = 0.0

    break_even_day: Optional[int] = None
    break_even_point: Optional[SeriesPoint] = None
    break_even_date: str = BREAK_EVEN_NOT_REACHED
    profitability_day: Optional[int] = None
    profitability_point: Optional[SeriesPoint] = None
    profitability_date: str = PROFITABILITY_NOT_REACHED

    final_sellout_day: Optional[int] = None

    financial_events: List[FinancialEvent] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "SimulationResult":
        """Trivial result for a state without batches."""
        return cls()

    @property
    def is_empty(self) -> bool:
        """True when nothing was simulated."""
        return not self.cash_series and not self.gantt_production

    @property
    def reached_break_even(self) -> bool:
        """True when cash recovered within the horizon."""
        return self.break_even_day is not None

    @property
    def reached_profitability(self) -> bool:
        """True when cumulative profit turned non-negative within the horizon."""
        return self.profitability_day is not None

    def events_of_type(self, event_type: FinancialEventType) -> List[FinancialEvent]:
        """
        Get financial events of one kind.

        Args:
            event_type: Event kind to select

        Returns:
            Events of that kind, in day order
        """
        return [e for e in self.financial_events if e.type == event_type]

    def __str__(self) -> str:
        """String representation."""
        return (
            f"SimulationResult(min_cash={self.min_cash:,.2f}, final_cash={self.final_cash:,.2f}, "
            f"units={self.total_units_sold:,.0f}, break_even={self.break_even_date}, "
            f"stockout_days={self.total_stockout_days:.0f})"
        )
