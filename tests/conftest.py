"""Pytest configuration and shared fixtures."""

import pytest
from datetime import date

from replenishment.models import (
    Batch,
    LogisticsCosts,
    LogisticsLeadTimes,
    LogisticsType,
    ModuleState,
)
from replenishment.simulation import SimulationConfig


@pytest.fixture
def start_date():
    """Fixture for simulation day 0 (Jan 1, 2025)."""
    return date(2025, 1, 1)


@pytest.fixture
def single_batch():
    """Fixture for one 1000-unit sea batch ordered on day 0."""
    return Batch(
        id=0,
        name="Batch 1",
        quantity=1000,
        offset_day=0,
        production_days=15,
        logistics_type=LogisticsType.SEA,
    )


@pytest.fixture
def flat_state(start_date, single_batch):
    """Fixture for a flat-demand state: 50 units/day, $20 price, 20% margin, $10 unit cost."""
    return ModuleState(
        batches=[single_batch],
        monthly_daily_sales=[50] * 12,
        prices=[20.0] * 6,
        margins=[20.0] * 6,
        unit_cost=10.0,
        exchange_rate=7.2,
        deposit_ratio=0.3,
        balance_ratio=0.7,
        simulation_start_date=start_date,
        logistics_days=LogisticsLeadTimes(sea=35, air=10, express=5),
        safety_days=7,
    )


@pytest.fixture
def logistics_costs():
    """Fixture for freight costs: 7.2 per unit by sea (1.0 after a 7.2 exchange rate)."""
    return LogisticsCosts(sea=7.2, air=36.0, express=72.0)


@pytest.fixture
def seasonal_state(start_date):
    """Fixture for a state with the default seasonal demand curve and no batches."""
    return ModuleState(simulation_start_date=start_date)


@pytest.fixture
def short_config():
    """Fixture for a 200-day horizon."""
    return SimulationConfig(horizon_days=200)


@pytest.fixture
def make_batch():
    """Fixture returning a batch builder with sensible defaults."""
    def _make_batch(batch_id, quantity, offset_day=0, production_days=15,
                    logistics_type=LogisticsType.SEA, extra_percent=0.0):
        return Batch(
            id=batch_id,
            name=f"Batch {batch_id + 1}",
            quantity=quantity,
            offset_day=offset_day,
            production_days=production_days,
            logistics_type=logistics_type,
            extra_percent=extra_percent,
        )
    return _make_batch
