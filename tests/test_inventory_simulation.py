"""Tests for the FIFO inventory queue and the day-stepped consumption simulator."""

import pytest

from replenishment.models import LogisticsCosts
from replenishment.simulation import (
    CashProfitLedger,
    InventoryConsumptionSimulator,
    InventoryLot,
    InventoryQueue,
    SellingWindow,
    SimulationConfig,
    UnitValuation,
    resolve_timelines,
)


def run_consumption(state, config=None, logistics_costs=None):
    """Run the day loop for a state and return (outcome, ledger)."""
    config = config or SimulationConfig()
    timelines = resolve_timelines(state, logistics_costs or LogisticsCosts(), config)
    ledger = CashProfitLedger(state.simulation_start_date, config)
    valuation = UnitValuation(state.prices, state.margins)
    outcome = InventoryConsumptionSimulator(state, timelines, valuation, ledger, config).run()
    return outcome, ledger


class TestInventoryQueue:
    """Tests for InventoryQueue ordering and draining."""

    def test_orders_by_arrival_then_batch_index(self):
        """Same-day arrivals are consumed in batch definition order."""
        queue = InventoryQueue()
        queue.receive([
            InventoryLot(2, 10, 1.0, 0.0, 20),
            InventoryLot(1, 10, 1.0, 0.0, 10),
            InventoryLot(0, 10, 1.0, 0.0, 20),
        ])

        assert [lot.batch_index for lot in queue.lots] == [1, 0, 2]

    def test_take_drops_empty_head(self):
        """Emptied head lot leaves the queue."""
        queue = InventoryQueue()
        queue.receive([InventoryLot(0, 30, 1.0, 0.0, 0), InventoryLot(1, 50, 1.0, 0.0, 1)])

        assert queue.take(50) == 30
        assert queue.head.batch_index == 1
        assert queue.take(20) == 20
        assert queue.on_hand == 30
        assert len(queue) == 1

    def test_empty_queue(self):
        """Empty queue is falsy and has no head."""
        queue = InventoryQueue()
        assert not queue
        assert queue.head is None
        assert queue.on_hand == 0


class TestSellingWindow:
    """Tests for SellingWindow bookkeeping."""

    def test_mark_sold_sets_start_once(self):
        """Start is the first sale day, end is exclusive."""
        window = SellingWindow(arrival=48)
        window.mark_sold(50)
        window.mark_sold(51)
        window.mark_sold(60)

        assert window.start == 50
        assert window.end == 61
        assert window.holding_days == 2

    def test_unsold_window(self):
        """Window without sales has no holding days."""
        window = SellingWindow(arrival=10)
        assert not window.has_sales
        assert window.holding_days == 0


class TestConsumption:
    """Tests for the consumption day loop."""

    def test_single_batch_depletes_at_daily_demand(self, flat_state):
        """1000 units at 50/day sell from day 50 through day 69.

        Given: One 1000-unit batch arriving on day 50, demand 50/day
        When: The day loop runs
        Then: Inventory falls by 50 per day and is empty from day 69
        """
        # Act
        outcome, _ = run_consumption(flat_state)

        # Assert
        assert outcome.first_sale_day == 50
        assert outcome.daily_inventory[49] == 0
        assert outcome.daily_inventory[50] == 950
        assert outcome.daily_inventory[68] == 50
        assert outcome.daily_inventory[69] == 0
        assert outcome.windows[0].start == 50
        assert outcome.windows[0].end == 70
        assert outcome.total_units_sold == 1000
        assert outcome.total_gmv == pytest.approx(20000.0)

    def test_missed_days_only_after_first_sale(self, flat_state):
        """Demand before the first arrival is not a stock-out."""
        outcome, _ = run_consumption(flat_state)

        assert not any(outcome.daily_missed[:70])
        assert all(outcome.daily_missed[70:])

    def test_inventory_never_negative(self, seasonal_state, make_batch):
        """Inventory stays non-negative under a seasonal curve."""
        state = seasonal_state.model_copy(update={
            "batches": [
                make_batch(0, 777, offset_day=0),
                make_batch(1, 1234, offset_day=20, extra_percent=3),
                make_batch(2, 55.5, offset_day=21),
            ],
        })

        outcome, _ = run_consumption(state)

        assert all(units >= 0 for units in outcome.daily_inventory)

    def test_fifo_earlier_arrival_consumed_first(self, flat_state, make_batch):
        """A batch arriving earlier is exhausted before a later one is touched.

        Given: Batch 0 ordered on day 10 (arrives 60), batch 1 on day 0 (arrives 50)
        When: The day loop runs
        Then: Batch 1 sells first; batch 0 only after it arrives
        """
        # Arrange
        state = flat_state.model_copy(update={
            "batches": [make_batch(0, 100, offset_day=10), make_batch(1, 100, offset_day=0)],
        })

        # Act
        outcome, _ = run_consumption(state)

        # Assert
        assert (outcome.windows[1].start, outcome.windows[1].end) == (50, 52)
        assert (outcome.windows[0].start, outcome.windows[0].end) == (60, 62)

    def test_same_day_arrivals_consumed_in_batch_order(self, flat_state, make_batch):
        """Tie on arrival day goes to the lower batch index."""
        state = flat_state.model_copy(update={
            "batches": [make_batch(0, 100), make_batch(1, 100)],
        })

        outcome, _ = run_consumption(state)

        assert (outcome.windows[0].start, outcome.windows[0].end) == (50, 52)
        assert (outcome.windows[1].start, outcome.windows[1].end) == (52, 54)

    def test_demand_split_across_lots_mid_day(self, flat_state, make_batch):
        """A lot emptied mid-day hands the remaining demand to the next lot."""
        state = flat_state.model_copy(update={
            "batches": [make_batch(0, 75), make_batch(1, 100)],
        })

        outcome, _ = run_consumption(state)

        # Day 51 takes 25 from batch 0 and 25 from batch 1
        assert outcome.windows[0].end == 52
        assert outcome.windows[1].start == 51
        assert outcome.daily_inventory[51] == 75
        assert not outcome.daily_missed[51]

    def test_zero_sales_month_plateaus(self, flat_state, make_batch):
        """No consumption during a zero-demand month.

        Given: Demand of 50/day except February (0), stock on hand from day 0
        When: The day loop runs
        Then: Inventory holds at its Jan 31 level through February and resumes in March
        """
        # Arrange
        curve = [50] * 12
        curve[1] = 0
        state = flat_state.model_copy(update={
            "monthly_daily_sales": curve,
            "batches": [make_batch(0, 3000, production_days=0)],
            "logistics_days": flat_state.logistics_days.model_copy(update={"sea": 0}),
        })

        # Act
        outcome, _ = run_consumption(state)

        # Assert
        assert outcome.daily_inventory[30] == 1450
        assert all(outcome.daily_inventory[d] == 1450 for d in range(31, 59))
        assert outcome.daily_inventory[59] == 1400
        assert not any(outcome.daily_missed[31:59])

    def test_zero_quantity_batch_never_sells(self, flat_state, make_batch):
        """A zero-quantity batch arrives but gets no selling window."""
        state = flat_state.model_copy(update={
            "batches": [make_batch(0, 0), make_batch(1, 100)],
        })

        outcome, _ = run_consumption(state)

        assert outcome.windows[0].arrival == 50
        assert not outcome.windows[0].has_sales
        assert outcome.windows[1].start == 50

    def test_batches_beyond_horizon_never_arrive(self, flat_state):
        """Short horizon ends before the arrival."""
        outcome, ledger = run_consumption(flat_state, SimulationConfig(horizon_days=40))

        assert outcome.first_sale_day is None
        assert outcome.total_units_sold == 0
        assert outcome.windows[0].arrival is None
        assert len(outcome.daily_inventory) == 40
