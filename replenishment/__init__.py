"""Inventory replenishment planning for e-commerce sellers.

The package turns a handful of production/shipping batches and a seasonal
demand curve into a day-resolution inventory timeline, a dated cash and
profit ledger, break-even/profitability dates, and stock-out episodes.

Typical use:
    from replenishment import simulate
    from replenishment.models import ModuleState, LogisticsCosts

    result = simulate(state, LogisticsCosts(sea=9.0, air=30.0, express=40.0))
    print(result.break_even_date, result.min_cash)
"""

from .simulation.config import SimulationConfig
from .simulation.engine import simulate
from .planning.smart_batches import generate_smart_batches, smart_batches_for_state

__version__ = "1.0.0"

__all__ = [
    "SimulationConfig",
    "simulate",
    "generate_smart_batches",
    "smart_batches_for_state",
]
