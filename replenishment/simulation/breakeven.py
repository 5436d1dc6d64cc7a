"""Break-even locator."""

from typing import Optional, Sequence


def find_zero_crossing(running: Sequence[float], guard_day: int) -> Optional[int]:
    """
    Find the first day a running series climbs from negative to non-negative.

    Day 0 is compared against an implicit previous value of 0, so it can
    never be a crossing. Crossings on or before ``guard_day`` are ignored.

    Args:
        running: Running series indexed by day
        guard_day: Last day ignored

    Returns:
        Day of the first crossing, or None when the series never crosses
    """
    previous = 0.0
    for day, value in enumerate(running):
        if day > guard_day and previous < 0 <= value:
            return day
        previous = value
    return None
