"""Tests for the cash & profit ledger and the break-even locator."""

import pytest
from datetime import date

from replenishment.models import FinancialEventType, LogisticsCosts
from replenishment.simulation import (
    CashProfitLedger,
    SimulationConfig,
    find_zero_crossing,
    resolve_timelines,
)


@pytest.fixture
def ledger():
    """Fixture for a 100-day ledger starting Jan 1, 2025."""
    return CashProfitLedger(date(2025, 1, 1), SimulationConfig(horizon_days=100))


class TestOutflows:
    """Tests for deposit, balance and freight postings."""

    def test_deposit_and_balance_split_production_cost(self, flat_state, logistics_costs):
        """30/70 split of a $10,000 batch.

        Given: 1000 units at $10, deposit ratio 0.3 and balance ratio 0.7
        When: The batch's outflows are posted
        Then: Deposit is $3,000 on day 0 and balance $7,000 on day 15
        """
        # Arrange
        config = SimulationConfig()
        timeline = resolve_timelines(flat_state, logistics_costs, config)[0]
        ledger = CashProfitLedger(flat_state.simulation_start_date, config)

        # Act
        ledger.post_batch_outflows(timeline, 0.3, 0.7)

        # Assert
        deposit, balance, freight = ledger.events
        assert (deposit.day, deposit.type, deposit.amount) == (0, FinancialEventType.DEPOSIT, pytest.approx(-3000.0))
        assert (balance.day, balance.type, balance.amount) == (15, FinancialEventType.BALANCE, pytest.approx(-7000.0))
        assert (freight.day, freight.type, freight.amount) == (50, FinancialEventType.FREIGHT, pytest.approx(-1000.0))
        assert deposit.amount + balance.amount == pytest.approx(-timeline.production_cost)

    def test_outflow_hits_cash_and_profit(self, ledger):
        """Outflows lower both series on their day."""
        ledger.post_outflow(5, FinancialEventType.DEPOSIT, 0, 300.0)

        assert ledger.cash_delta[5] == -300.0
        assert ledger.profit_delta[5] == -300.0

    def test_event_label_has_batch_kind_and_date(self, ledger):
        """Labels carry batch number, event kind and M/D."""
        ledger.post_outflow(14, FinancialEventType.BALANCE, 1, 700.0)

        assert ledger.events[0].label == "#2 balance 1/15"

    def test_outflow_beyond_horizon_dropped(self, ledger):
        """Postings on or after the horizon are not recorded."""
        assert not ledger.post_outflow(100, FinancialEventType.FREIGHT, 0, 50.0)
        assert ledger.events == []
        assert ledger.dropped_postings == 1


class TestSales:
    """Tests for revenue postings."""

    def test_cash_delayed_profit_same_day(self, ledger):
        """Cash arrives 14 days after the sale, profit on the sale day."""
        ledger.post_sale(10, 0, 750.0)

        assert ledger.profit_delta[10] == 750.0
        assert ledger.cash_delta[10] == 0.0
        assert ledger.cash_delta[24] == 750.0

    def test_same_pay_day_postings_merge(self, ledger):
        """Two sales of one batch on one day make a single recall posting."""
        ledger.post_sale(10, 0, 100.0)
        ledger.post_sale(10, 0, 50.0)
        ledger.post_sale(11, 0, 25.0)

        postings = ledger.recall_postings[0]
        assert [(p.day, p.amount) for p in postings] == [(24, 150.0), (25, 25.0)]

    def test_late_sale_keeps_profit_drops_cash(self, ledger):
        """Cash due beyond the horizon is dropped but profit still counts."""
        ledger.post_sale(90, 0, 500.0)

        assert ledger.profit_delta[90] == 500.0
        assert sum(ledger.cash_delta) == 0.0
        assert ledger.recall_postings.get(0, []) == []


class TestTotals:
    """Tests for running sums."""

    def test_conservation(self, ledger):
        """Final cash equals the sum of all cash deltas."""
        ledger.post_outflow(0, FinancialEventType.DEPOSIT, 0, 3000.0)
        ledger.post_outflow(15, FinancialEventType.BALANCE, 0, 7000.0)
        for day in range(30, 50):
            ledger.post_sale(day, 0, 600.0)

        totals = ledger.totals()

        assert totals.final_cash == pytest.approx(sum(ledger.cash_delta))
        assert totals.running_cash[-1] == pytest.approx(totals.final_cash)
        assert totals.final_cash == pytest.approx(2000.0)
        assert totals.min_cash == pytest.approx(-10000.0)
        assert len(totals.running_cash) == 100

    def test_min_cash_zero_without_outflows(self, ledger):
        """Min cash starts at zero."""
        ledger.post_sale(1, 0, 100.0)

        assert ledger.totals().min_cash == 0.0


class TestZeroCrossing:
    """Tests for the break-even locator."""

    def test_finds_first_crossing_after_guard(self):
        """Crossing on day 12 is reported."""
        series = [-5.0] * 12 + [1.0, 2.0]
        assert find_zero_crossing(series, 10) == 12

    def test_crossing_to_exactly_zero_counts(self):
        """Reaching zero is a crossing."""
        series = [-5.0] * 15 + [0.0]
        assert find_zero_crossing(series, 10) == 15

    def test_crossing_on_guard_day_ignored(self):
        """A crossing on or before the guard day is skipped."""
        series = [-1.0] * 10 + [1.0] + [-1.0] * 5 + [3.0]
        assert find_zero_crossing(series, 10) == 16

    def test_day_eleven_crossing_reported(self):
        """First day after the guard can cross."""
        series = [-1.0] * 11 + [1.0]
        assert find_zero_crossing(series, 10) == 11

    def test_never_negative(self):
        """A series that never dips has no crossing."""
        assert find_zero_crossing([0.0, 1.0, 2.0] * 10, 10) is None

    def test_never_recovers(self):
        """A series that stays negative has no crossing."""
        assert find_zero_crossing([-1.0] * 50, 10) is None
