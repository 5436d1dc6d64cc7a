"""Tests for calendar helpers and the batch timeline resolver."""

import pytest
from datetime import date

from replenishment.models import LogisticsCosts, LogisticsType
from replenishment.simulation import SimulationConfig, resolve_timeline, resolve_timelines
from replenishment.simulation.calendar import (
    daily_demand,
    date_for_day,
    format_day_label,
    pricing_period,
)


class TestCalendar:
    """Tests for day-to-date helpers."""

    def test_date_for_day(self):
        """Day 31 after Jan 1 is Feb 1."""
        assert date_for_day(date(2025, 1, 1), 31) == date(2025, 2, 1)

    def test_format_day_label_has_no_padding(self):
        """Labels are M/D without leading zeros."""
        assert format_day_label(date(2025, 1, 1), 0) == "1/1"
        assert format_day_label(date(2025, 1, 1), 78) == "3/20"
        assert format_day_label(date(2025, 12, 25), 10) == "1/4"

    def test_daily_demand_uses_calendar_month(self):
        """Demand comes from the calendar month of the day."""
        curve = list(range(1, 13))
        start = date(2025, 1, 1)
        assert daily_demand(curve, start, 0) == 1
        assert daily_demand(curve, start, 30) == 1
        assert daily_demand(curve, start, 31) == 2
        assert daily_demand(curve, start, 365) == 1


class TestPricingPeriod:
    """Tests for the pricing period index."""

    def test_period_zero_before_first_sale(self):
        """Before any sale the launch period applies."""
        assert pricing_period(date(2025, 1, 1), None, 200, 6) == 0

    def test_period_advances_on_day_of_month(self):
        """A month counts once the first sale's day-of-month is reached.

        Given: First sale on Jan 20 (day 19)
        When: Asking for Feb 19 and Feb 20
        Then: Feb 19 is still period 0, Feb 20 is period 1
        """
        start = date(2025, 1, 1)
        assert pricing_period(start, 19, 49, 6) == 0
        assert pricing_period(start, 19, 50, 6) == 1

    def test_period_capped(self):
        """The last period is open-ended."""
        start = date(2025, 1, 1)
        assert pricing_period(start, 0, 400, 6) == 5

    def test_period_across_year_boundary(self):
        """Elapsed months count across the new year."""
        start = date(2024, 11, 1)
        # First sale Nov 1, Jan 1 is two months later
        assert pricing_period(start, 0, 61, 6) == 2


class TestTimelineResolver:
    """Tests for resolving batch timelines."""

    def test_resolves_sea_batch(self, flat_state, logistics_costs):
        """Production end and arrival follow order day, production and transit days."""
        # Act
        timeline = resolve_timeline(
            0, flat_state.batches[0], flat_state, logistics_costs, SimulationConfig()
        )

        # Assert
        assert timeline.order_day == 0
        assert timeline.production_end_day == 15
        assert timeline.arrival_day == 50
        assert timeline.final_quantity == 1000
        assert timeline.production_cost == pytest.approx(10000.0)
        assert timeline.unit_freight == pytest.approx(1.0)
        assert timeline.freight_cost == pytest.approx(1000.0)
        assert timeline.landed_cost == pytest.approx(11000.0)

    def test_fractional_transit_days_floor_arrival(self, flat_state, logistics_costs, make_batch):
        """Fractional transit days keep the arrival time but floor the arrival day."""
        state = flat_state.model_copy(update={
            "logistics_days": flat_state.logistics_days.model_copy(update={"air": 10.5}),
        })
        batch = make_batch(0, 100, offset_day=3, logistics_type=LogisticsType.AIR)

        timeline = resolve_timeline(0, batch, state, logistics_costs, SimulationConfig())

        assert timeline.arrival_time == pytest.approx(28.5)
        assert timeline.arrival_day == 28

    def test_zero_exchange_rate_gives_zero_freight(self, flat_state, logistics_costs):
        """Freight conversion is skipped below the epsilon."""
        state = flat_state.model_copy(update={"exchange_rate": 0.0})

        timeline = resolve_timeline(0, state.batches[0], state, logistics_costs, SimulationConfig())

        assert timeline.unit_freight == 0.0
        assert timeline.freight_cost == 0.0

    def test_extra_percent_raises_cost(self, flat_state, logistics_costs, make_batch):
        """Production cost is based on the final quantity."""
        batch = make_batch(0, 1000, extra_percent=10)

        timeline = resolve_timeline(0, batch, flat_state, logistics_costs, SimulationConfig())

        assert timeline.final_quantity == 1100
        assert timeline.production_cost == pytest.approx(11000.0)

    def test_resolves_all_batches_in_order(self, flat_state, logistics_costs, make_batch):
        """Out-of-order windows are resolved as given."""
        state = flat_state.model_copy(update={
            "batches": [make_batch(0, 100, offset_day=30), make_batch(1, 100, offset_day=0)],
        })

        timelines = resolve_timelines(state, LogisticsCosts(), SimulationConfig())

        assert [t.batch_index for t in timelines] == [0, 1]
        assert [t.arrival_day for t in timelines] == [80, 50]
