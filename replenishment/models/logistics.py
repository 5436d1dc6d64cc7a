"""Logistics cost and lead-time tables keyed by logistics type."""

from pydantic import BaseModel, Field

from .batch import LogisticsType


class LogisticsCosts(BaseModel):
    """
    Per-unit freight cost for each logistics channel.

    Costs are expressed in the freight currency (the one the forwarder
    invoices in) and converted into the unit-cost currency by dividing by
    the module's exchange rate.

    Attributes:
        sea: Per-unit sea freight
        air: Per-unit air freight
        express: Per-unit express courier freight
    """
    sea: float = Field(default=0.0, description="Per-unit sea freight", ge=0)
    air: float = Field(default=0.0, description="Per-unit air freight", ge=0)
    express: float = Field(default=0.0, description="Per-unit express freight", ge=0)

    def for_type(self, logistics_type: LogisticsType) -> float:
        """
        Get per-unit freight cost for a logistics type.

        Args:
            logistics_type: Shipping channel

        Returns:
            Per-unit freight cost in the freight currency
        """
        return getattr(self, LogisticsType(logistics_type).value)


class LogisticsLeadTimes(BaseModel):
    """
    Transit days for each logistics channel.

    Attributes:
        sea: Sea transit days (default: 35)
        air: Air transit days (default: 10)
        express: Express courier transit days (default: 5)
    """
    sea: float = Field(default=35.0, description="Sea transit days", ge=0)
    air: float = Field(default=10.0, description="Air transit days", ge=0)
    express: float = Field(default=5.0, description="Express transit days", ge=0)

    def for_type(self, logistics_type: LogisticsType) -> float:
        """Get transit days for a logistics type."""
        return getattr(self, LogisticsType(logistics_type).value)
