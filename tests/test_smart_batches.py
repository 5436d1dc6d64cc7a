"""Tests for the smart batch generator."""

import pytest
from datetime import date

from replenishment.models import LogisticsType, ModuleState
from replenishment.planning import (
    generate_smart_batches,
    rolling_demand,
    sell_out_day,
    smart_batches_for_state,
)


class TestRollingDemand:
    """Tests for the 30-day look-ahead."""

    def test_flat_curve(self):
        """30 days at 50/day."""
        assert rolling_demand([50] * 12, date(2025, 1, 1), 0) == 1500

    def test_window_straddles_months(self):
        """Days 20-49 cover 11 January days and 19 February days."""
        curve = list(range(1, 13))
        assert rolling_demand(curve, date(2025, 1, 1), 20) == 11 * 1 + 19 * 2


class TestSellOutDay:
    """Tests for the sell-out walk."""

    def test_returns_day_after_last_sale(self):
        """1000 units at 50/day starting day 50 last sell on day 69."""
        assert sell_out_day([50] * 12, date(2025, 1, 1), 50, 1000) == 70

    def test_partial_last_day(self):
        """A partial last day still counts as a selling day."""
        assert sell_out_day([50] * 12, date(2025, 1, 1), 0, 1010) == 21

    def test_zero_demand_hits_ceiling(self):
        """The walk stops at the ceiling when nothing sells."""
        assert sell_out_day([0] * 12, date(2025, 1, 1), 10, 100) == 1001

    def test_custom_ceiling(self):
        """Ceiling is configurable."""
        assert sell_out_day([0] * 12, date(2025, 1, 1), 10, 100, max_day=200) == 201


class TestGenerateSmartBatches:
    """Tests for generate_smart_batches."""

    def test_flat_curve_chain(self):
        """Six 1500-unit batches, each landing 7 days before the previous sells out.

        Given: Flat 50/day demand, 50-day lead time, 7-day buffer
        When: Smart batches are generated
        Then: Coverage starts chain 50, 80, 110, ... and offsets follow
        """
        # Act
        batches = generate_smart_batches(date(2025, 1, 1), [50] * 12, lead_time=50, safety_buffer_days=7)

        # Assert
        assert len(batches) == 6
        assert [b.quantity for b in batches] == [1500] * 6
        assert [b.offset_day for b in batches] == [0, 23, 53, 83, 113, 143]
        assert [b.id for b in batches] == list(range(6))
        assert batches[0].name == "Batch 1"
        assert all(b.logistics_type == LogisticsType.SEA for b in batches)
        assert all(b.production_days == 15 for b in batches)

    def test_first_batch_always_ordered_day_zero(self):
        """The first batch is ordered immediately."""
        batches = generate_smart_batches(date(2025, 1, 1), [50] * 12, lead_time=80, safety_buffer_days=0)
        assert batches[0].offset_day == 0

    @pytest.mark.parametrize("buffer_days", [0, 7, 30, 120])
    def test_offsets_non_decreasing(self, buffer_days):
        """Offsets never go backwards under the seasonal default curve."""
        state = ModuleState(simulation_start_date=date(2025, 3, 15))

        batches = generate_smart_batches(
            state.simulation_start_date, state.monthly_daily_sales,
            lead_time=50, safety_buffer_days=buffer_days,
        )

        offsets = [b.offset_day for b in batches]
        assert all(later >= earlier for earlier, later in zip(offsets, offsets[1:]))
        assert all(offset >= 0 for offset in offsets)

    def test_quantities_follow_season(self):
        """A batch covering December is larger than one covering June."""
        curve = [50, 55, 60, 55, 50, 45, 40, 40, 50, 60, 80, 100]

        batches = generate_smart_batches(date(2025, 1, 1), curve, lead_time=50, count=12)

        assert max(b.quantity for b in batches) == pytest.approx(3000, abs=600)
        assert min(b.quantity for b in batches) >= 1200

    def test_custom_count(self):
        """Batch count is configurable."""
        assert len(generate_smart_batches(date(2025, 1, 1), [50] * 12, lead_time=50, count=3)) == 3


class TestSmartBatchesForState:
    """Tests for the state convenience wrapper."""

    def test_uses_sea_lead_time_and_safety_days(self, flat_state):
        """Lead time is 15 production days plus 35 sea days."""
        batches = smart_batches_for_state(flat_state)

        assert [b.offset_day for b in batches] == [0, 23, 53, 83, 113, 143]

    def test_buffer_override(self, flat_state):
        """Zero buffer targets arrival on the sell-out day."""
        batches = smart_batches_for_state(flat_state, safety_buffer_days=0)

        assert [b.offset_day for b in batches][:3] == [0, 30, 60]
