"""Replenishment module state: the complete engine input."""

from datetime import date as Date
from typing import List
from pydantic import BaseModel, Field

from .batch import Batch, LogisticsType
from .logistics import LogisticsLeadTimes


DEFAULT_MONTHLY_DAILY_SALES = [50, 55, 60, 55, 50, 45, 40, 40, 50, 60, 80, 100]
DEFAULT_PRICES = [19.99, 24.99, 29.99, 29.99, 29.99, 29.99]
DEFAULT_MARGINS = [-10, 10, 20, 20, 25, 25]


class ModuleState(BaseModel):
    """
    Everything the simulation engine needs besides freight costs.

    Business Rules:
    - Demand is seasonal: one expected daily sales figure per calendar month
    - Prices and fallback margins are given per pricing period; period 0 is
      the launch month and periods are counted from the first sale
    - The unit production cost is paid in two parts: a deposit when the
      order is placed and the balance when production finishes
      (deposit_ratio + balance_ratio is expected to be 1)

    Attributes:
        batches: Batches to simulate, in definition order
        monthly_daily_sales: Expected units sold per day, January..December
        prices: Selling price per pricing period (6 periods)
        margins: Fallback net margin percent per pricing period
        unit_cost: Production cost per unit
        exchange_rate: Freight currency units per unit-cost currency unit
        deposit_ratio: Share of production cost paid at order time
        balance_ratio: Share of production cost paid when production ends
        simulation_start_date: Calendar date of simulation day 0
        logistics_days: Transit days per logistics channel
        safety_days: Safety buffer used when proposing batches
    """
    batches: List[Batch] = Field(
        default_factory=list,
        description="Batches to simulate"
    )
    monthly_daily_sales: List[float] = Field(
        default_factory=lambda: list(DEFAULT_MONTHLY_DAILY_SALES),
        description="Expected daily sales for each calendar month",
        min_length=12,
        max_length=12
    )
    prices: List[float] = Field(
        default_factory=lambda: list(DEFAULT_PRICES),
        description="Selling price per pricing period",
        min_length=6,
        max_length=6
    )
    margins: List[float] = Field(
        default_factory=lambda: list(DEFAULT_MARGINS),
        description="Fallback net margin percent per pricing period",
        min_length=6,
        max_length=6
    )
    unit_cost: float = Field(default=20.0, description="Production cost per unit", ge=0)
    exchange_rate: float = Field(default=7.2, description="Freight-to-cost currency rate", ge=0)
    deposit_ratio: float = Field(default=0.3, description="Deposit share of production cost", ge=0, le=1)
    balance_ratio: float = Field(default=0.7, description="Balance share of production cost", ge=0, le=1)
    simulation_start_date: Date = Field(
        default_factory=Date.today,
        description="Calendar date of simulation day 0"
    )
    logistics_days: LogisticsLeadTimes = Field(
        default_factory=LogisticsLeadTimes,
        description="Transit days per logistics channel"
    )
    safety_days: int = Field(default=7, description="Safety buffer in days", ge=0)

    def lead_time(self, logistics_type: LogisticsType, production_days: int = 15) -> float:
        """
        Total lead time from order to arrival for a channel.

        Args:
            logistics_type: Shipping channel
            production_days: Production days before shipping

        Returns:
            production_days + transit days of the channel
        """
        return production_days + self.logistics_days.for_type(logistics_type)

    def __str__(self) -> str:
        """String representation."""
        return (
            f"ModuleState(start={self.simulation_start_date}, "
            f"batches={len(self.batches)}, unit_cost={self.unit_cost:.2f})"
        )
