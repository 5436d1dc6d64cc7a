"""Simulation configuration model."""

from pydantic import BaseModel, Field

from .constants import (
    BREAKEVEN_GUARD_DAY,
    CHART_STEP_DAYS,
    HORIZON_DAYS,
    MISSED_DEMAND_TOLERANCE,
    PRICING_PERIODS,
    RATIO_EPSILON,
    RECALL_CHUNK_DAYS,
    RECALL_EVENT_OFFSET_DAYS,
    RECALL_MIN_AMOUNT,
    RECEIVABLE_DELAY_DAYS,
    STOCKOUT_ATTRIBUTION_SLACK_DAYS,
    STOCKOUT_MIN_GAP_DAYS,
    STOCKOUT_WINDOW_DAYS,
)


class SimulationConfig(BaseModel):
    """
    Tunable constants of one simulation run.

    Defaults reproduce the production behaviour; tests shrink the horizon to
    keep scenarios small.

    Attributes:
        horizon_days: Number of simulated days
        receivable_delay_days: Days between a sale and its cash inflow
        breakeven_guard_day: Crossings on or before this day are ignored
        stockout_window_days: Last day (exclusive) scanned for stock-outs
        stockout_min_gap_days: Minimum shortfall run length to record
        stockout_attribution_slack_days: Slack when attributing a stock-out
        missed_demand_tolerance: Unmet units tolerated without a flag
        recall_chunk_days: Maximum distance from chunk start within a chunk
        recall_event_offset_days: Recall event day offset from chunk start
        recall_min_amount: Recall chunks at or below this are dropped
        pricing_periods: Number of pricing periods
        ratio_epsilon: Denominator magnitude below which ratios are zero
        chart_step_days: Chart window rounding step
    """
    horizon_days: int = Field(default=HORIZON_DAYS, description="Simulated days", gt=0)
    receivable_delay_days: int = Field(
        default=RECEIVABLE_DELAY_DAYS,
        description="Accounts-receivable delay in days",
        ge=0
    )
    breakeven_guard_day: int = Field(
        default=BREAKEVEN_GUARD_DAY,
        description="Crossings on or before this day are ignored",
        ge=0
    )
    stockout_window_days: int = Field(
        default=STOCKOUT_WINDOW_DAYS,
        description="Stock-out analysis window end (exclusive)",
        ge=0
    )
    stockout_min_gap_days: float = Field(
        default=STOCKOUT_MIN_GAP_DAYS,
        description="Minimum stock-out run length",
        ge=0
    )
    stockout_attribution_slack_days: int = Field(
        default=STOCKOUT_ATTRIBUTION_SLACK_DAYS,
        description="Slack for attributing a stock-out to a batch",
        ge=0
    )
    missed_demand_tolerance: float = Field(
        default=MISSED_DEMAND_TOLERANCE,
        description="Unmet units tolerated without flagging a stock-out day",
        ge=0
    )
    recall_chunk_days: int = Field(default=RECALL_CHUNK_DAYS, description="Recall chunk span", ge=0)
    recall_event_offset_days: int = Field(
        default=RECALL_EVENT_OFFSET_DAYS,
        description="Recall event offset from chunk start",
        ge=0
    )
    recall_min_amount: float = Field(
        default=RECALL_MIN_AMOUNT,
        description="Minimum recall chunk amount to report",
        ge=0
    )
    pricing_periods: int = Field(default=PRICING_PERIODS, description="Pricing periods", gt=0)
    ratio_epsilon: float = Field(default=RATIO_EPSILON, description="Ratio denominator guard", gt=0)
    chart_step_days: int = Field(default=CHART_STEP_DAYS, description="Chart window step", gt=0)

    @property
    def last_day(self) -> int:
        """Last simulated day index."""
        return self.horizon_days - 1

    def in_horizon(self, day: int) -> bool:
        """True when a posting on ``day`` is kept."""
        return day < self.horizon_days
