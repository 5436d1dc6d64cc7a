"""Replenishment batch data model."""

import math
from enum import Enum
from pydantic import BaseModel, Field


class LogisticsType(str, Enum):
    """First-mile logistics channel used to ship a batch."""
    SEA = "sea"
    AIR = "air"
    EXPRESS = "express"


class Batch(BaseModel):
    """
    One purchase order of inventory with its own production/shipping timeline.

    The ordered quantity is padded by ``extra_percent`` when the batch lands,
    which lets a seller over-order slightly to absorb defects or demand
    surprises without changing the base order.

    Attributes:
        id: Batch identifier (creation order for generated batches)
        name: Display name
        quantity: Base units ordered
        extra_percent: Buffer percentage applied on top of quantity
        offset_day: Day index (from simulation start) the order is placed
        production_days: Days of production before the batch ships
        logistics_type: Shipping channel (sea/air/express)
    """
    id: int = Field(..., description="Batch identifier")
    name: str = Field(default="", description="Display name")
    quantity: float = Field(..., description="Base units ordered", ge=0)
    extra_percent: float = Field(
        default=0.0,
        description="Buffer percentage applied at consumption time",
        ge=0
    )
    offset_day: int = Field(
        default=0,
        description="Day index when the order is placed",
        ge=0
    )
    production_days: int = Field(
        default=15,
        description="Production lead time in days",
        ge=0
    )
    logistics_type: LogisticsType = Field(
        default=LogisticsType.SEA,
        description="Shipping channel"
    )

    @property
    def final_quantity(self) -> int:
        """
        Units that actually land, including the extra buffer.

        Rounds half up so 0.5 units land as 1.

        Returns:
            round(quantity * (1 + extra_percent / 100))
        """
        return int(math.floor(self.quantity * (1 + self.extra_percent / 100.0) + 0.5))

    @property
    def production_end_day(self) -> int:
        """Day production finishes and the balance payment falls due."""
        return self.offset_day + self.production_days

    def __str__(self) -> str:
        """String representation."""
        label = self.name or f"Batch {self.id + 1}"
        return (
            f"{label}: {self.final_quantity} units via {self.logistics_type.value}, "
            f"ordered day {self.offset_day}"
        )
