"""Calendar helpers mapping simulation days to dates, demand and pricing periods."""

from datetime import date as Date, timedelta
from typing import Optional, Sequence


def date_for_day(start_date: Date, day: int) -> Date:
    """Calendar date of simulation day ``day``."""
    return start_date + timedelta(days=int(day))


def format_day_label(start_date: Date, day: int) -> str:
    """
    Short "M/D" label for a simulation day, without zero padding.

    Args:
        start_date: Calendar date of day 0
        day: Simulation day

    Returns:
        Label such as "3/7"
    """
    current = date_for_day(start_date, day)
    return f"{current.month}/{current.day}"


def daily_demand(monthly_daily_sales: Sequence[float], start_date: Date, day: int) -> float:
    """
    Expected units sold on a simulation day.

    Demand is seasonal, not day-exact: every day of a calendar month has the
    same demand.

    Args:
        monthly_daily_sales: Twelve daily sales figures, January first
        start_date: Calendar date of day 0
        day: Simulation day

    Returns:
        Demand for the calendar month the day falls in
    """
    return monthly_daily_sales[date_for_day(start_date, day).month - 1]


def pricing_period(
    start_date: Date,
    first_sale_day: Optional[int],
    day: int,
    periods: int,
) -> int:
    """
    Index of the price/margin period in effect on a day.

    Periods are elapsed calendar months since the first sale. A month only
    counts once its day-of-month has been reached again, so a first sale on
    Jan 20 stays in period 0 until Feb 20. The last period is open-ended.

    Args:
        start_date: Calendar date of day 0
        first_sale_day: Day of the first sale, or None before any sale
        day: Simulation day
        periods: Number of pricing periods

    Returns:
        Period index in [0, periods - 1]
    """
    if first_sale_day is None:
        return 0

    current = date_for_day(start_date, day)
    first_sale = date_for_day(start_date, first_sale_day)
    index = (current.year - first_sale.year) * 12 + (current.month - first_sale.month)
    if current.day < first_sale.day:
        index = max(0, index - 1)
    return min(periods - 1, index)
