"""Replenishment simulation engine.

``simulate`` is a pure function: it builds fresh series and queues on every
call and returns one frozen SimulationResult. Identical inputs always give
equal results.

Pipeline:
1. Resolve every batch's timeline and post its deposit, balance and freight
2. Run the day loop (arrivals, FIFO consumption, revenue postings)
3. Chunk recall postings into recall events
4. Build gantt bars, detect stock-outs, accumulate running series and
   locate the cash and profit zero-crossings
"""

import logging
import math
from typing import List, Optional

from ..models.fee_breakdown import FeeBreakdownFunction
from ..models.logistics import LogisticsCosts
from ..models.module_state import ModuleState
from ..models.simulation_result import (
    BREAK_EVEN_NOT_REACHED,
    PROFITABILITY_NOT_REACHED,
    FinancialEvent,
    GanttBar,
    SeriesPoint,
    SimulationResult,
)
from .breakeven import find_zero_crossing
from .calendar import format_day_label
from .config import SimulationConfig
from .inventory import ConsumptionOutcome, InventoryConsumptionSimulator
from .ledger import CashProfitLedger
from .pricing import UnitValuation
from .recall_chunker import chunk_recalls
from .stockout import detect_stockouts
from .timeline import BatchTimeline, resolve_timelines

logger = logging.getLogger(__name__)


def chart_cutoff_day(
    events: List[FinancialEvent],
    bars: List[GanttBar],
    config: SimulationConfig,
) -> int:
    """
    Last day shown on charts.

    The last day with activity (financial event or bar end) plus one chart
    step, rounded up to a multiple of the chart step and capped at the last
    simulated day.

    Args:
        events: All financial events
        bars: Production, shipping and selling bars
        config: Simulation configuration

    Returns:
        Chart window end day
    """
    last_activity = max(
        [0.0] + [float(e.day) for e in events] + [bar.end for bar in bars]
    )
    step = config.chart_step_days
    raw_cutoff = last_activity + step
    return min(int(math.ceil(raw_cutoff / step)) * step, config.last_day)


def _build_gantt(timelines: List[BatchTimeline], outcome: ConsumptionOutcome):
    production, shipping, selling, holding = [], [], [], []
    for timeline in timelines:
        index = timeline.batch_index
        production.append(GanttBar(
            start=timeline.order_day,
            end=timeline.production_end_day,
            batch_index=index,
            cost=timeline.production_cost,
        ))
        shipping.append(GanttBar(
            start=timeline.production_end_day,
            end=timeline.arrival_time,
            batch_index=index,
            freight=timeline.freight_cost,
        ))

        window = outcome.windows[index]
        if not window.has_sales:
            continue
        selling.append(GanttBar(
            start=window.start,
            end=window.end,
            batch_index=index,
            revenue=outcome.batch_revenue[index],
        ))
        if window.holding_days > 0:
            holding.append(GanttBar(
                start=window.arrival,
                end=window.start,
                batch_index=index,
                duration=window.holding_days,
            ))
    return production, shipping, selling, holding


def simulate(
    state: ModuleState,
    logistics_costs: LogisticsCosts,
    selected_strategy_id: str = "",
    fee_breakdown: Optional[FeeBreakdownFunction] = None,
    config: Optional[SimulationConfig] = None,
) -> SimulationResult:
    """
    Simulate inventory, cash and profit for a replenishment plan.

    Args:
        state: Batches, demand curve, pricing and cost structure
        logistics_costs: Per-unit freight per logistics channel
        selected_strategy_id: Pricing strategy passed to ``fee_breakdown``;
            empty selects the margin fallback and ``fee_breakdown`` is not
            called
        fee_breakdown: Per-unit recall/profit for a price under a strategy
        config: Simulation configuration (defaults when omitted)

    Returns:
        Frozen SimulationResult

    Raises:
        Whatever ``fee_breakdown`` raises; the engine itself does not raise
        on degenerate numbers.
    """
    if config is None:
        config = SimulationConfig()
    if not state.batches:
        logger.debug("No batches, returning empty result")
        return SimulationResult.empty()

    start_date = state.simulation_start_date

    # Timelines and outflows
    timelines = resolve_timelines(state, logistics_costs, config)
    ledger = CashProfitLedger(start_date, config)
    for timeline in timelines:
        ledger.post_batch_outflows(timeline, state.deposit_ratio, state.balance_ratio)

    # Day loop
    valuation = UnitValuation(state.prices, state.margins, selected_strategy_id, fee_breakdown)
    outcome = InventoryConsumptionSimulator(state, timelines, valuation, ledger, config).run()

    # Recall events
    events = list(ledger.events)
    for timeline in timelines:
        events.extend(chunk_recalls(
            ledger.recall_postings.get(timeline.batch_index, []),
            timeline.batch_index,
            config,
        ))
    events.sort(key=lambda e: e.day)
    if ledger.dropped_postings:
        logger.debug("%d posting(s) fell beyond the horizon", ledger.dropped_postings)

    # Gantt bars and stock-outs
    production, shipping, selling, holding = _build_gantt(timelines, outcome)
    scan = detect_stockouts(outcome.daily_missed, outcome.first_sale_day, outcome.windows, config)
    stockout_bars = [
        GanttBar(
            start=episode.start,
            end=episode.end,
            batch_index=episode.batch_index,
            gap_days=episode.gap_days,
        )
        for episode in scan.episodes
    ]

    # Running series and crossings
    totals = ledger.totals()
    day_max = chart_cutoff_day(events, production + shipping + selling, config)

    break_even_day = find_zero_crossing(totals.running_cash, config.breakeven_guard_day)
    profitability_day = find_zero_crossing(totals.running_profit, config.breakeven_guard_day)

    result = SimulationResult(
        day_min=0,
        day_max=day_max,
        cash_series=[SeriesPoint(x=d, y=totals.running_cash[d]) for d in range(day_max + 1)],
        profit_series=[SeriesPoint(x=d, y=totals.running_profit[d]) for d in range(day_max + 1)],
        inventory_series=[
            SeriesPoint(x=d, y=outcome.daily_inventory[d]) for d in range(day_max + 1)
        ],
        gantt_production=production,
        gantt_shipping=shipping,
        gantt_holding=holding,
        gantt_selling=selling,
        gantt_stockout=stockout_bars,
        min_cash=totals.min_cash,
        final_cash=totals.final_cash,
        total_net_profit=outcome.total_net_profit,
        total_revenue=outcome.total_revenue,
        total_gmv=outcome.total_gmv,
        total_units_sold=outcome.total_units_sold,
        total_stockout_days=scan.total_days,
        break_even_day=break_even_day,
        break_even_point=(
            SeriesPoint(x=break_even_day, y=totals.running_cash[break_even_day])
            if break_even_day is not None else None
        ),
        break_even_date=(
            format_day_label(start_date, break_even_day)
            if break_even_day is not None else BREAK_EVEN_NOT_REACHED
        ),
        profitability_day=profitability_day,
        profitability_point=(
            SeriesPoint(x=profitability_day, y=totals.running_profit[profitability_day])
            if profitability_day is not None else None
        ),
        profitability_date=(
            format_day_label(start_date, profitability_day)
            if profitability_day is not None else PROFITABILITY_NOT_REACHED
        ),
        final_sellout_day=scan.final_sellout_day,
        financial_events=events,
    )

    logger.info(
        "Simulated %d batch(es): %.0f units sold, min cash %.2f, break-even %s, "
        "%d stock-out day(s)",
        len(timelines), result.total_units_sold, result.min_cash,
        result.break_even_date, result.total_stockout_days
    )
    return result
