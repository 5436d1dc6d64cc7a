"""Stock-out detector.

Re-walks the missed-demand flags after the day loop and turns contiguous
shortfall runs into stock-out episodes attributed to the batch that had just
run out.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .config import SimulationConfig
from .inventory import SellingWindow

logger = logging.getLogger(__name__)


@dataclass
class StockoutEpisode:
    """
    A contiguous run of days with unmet demand.

    Attributes:
        start: First missed day
        end: First day after the run (exclusive)
        batch_index: Batch whose selling window ended just before the run
    """
    start: int
    end: int
    batch_index: int

    @property
    def gap_days(self) -> int:
        """Length of the run in days."""
        return self.end - self.start

    def __str__(self) -> str:
        """String representation."""
        return f"Stock-out d{self.start}-d{self.end} ({self.gap_days} days) after batch #{self.batch_index + 1}"


@dataclass
class StockoutScan:
    """
    Result of a stock-out scan.

    Attributes:
        episodes: Closed shortfall runs, in day order
        final_sellout_day: Start of a run still open at the window end
    """
    episodes: List[StockoutEpisode] = field(default_factory=list)
    final_sellout_day: Optional[int] = None

    @property
    def total_days(self) -> int:
        """Sum of episode lengths."""
        return sum(episode.gap_days for episode in self.episodes)


def attribute_stockout(
    start: int,
    windows: Sequence[SellingWindow],
    slack_days: int,
) -> int:
    """
    Pick the batch that ran out right before a shortfall.

    Among batches whose selling window ended no later than
    ``start + slack_days``, the one with the latest end wins; ties go to the
    lower batch index. Defaults to batch 0.

    Args:
        start: First missed day
        windows: Selling window per batch
        slack_days: Allowed distance between window end and run start

    Returns:
        Batch index
    """
    batch_index = 0
    latest_end = -1
    for index, window in enumerate(windows):
        if window.end is not None and window.end <= start + slack_days and window.end > latest_end:
            latest_end = window.end
            batch_index = index
    return batch_index


def detect_stockouts(
    daily_missed: Sequence[bool],
    first_sale_day: Optional[int],
    windows: Sequence[SellingWindow],
    config: SimulationConfig,
) -> StockoutScan:
    """
    Find stock-out episodes between the first sale and the analysis window end.

    A run is closed by the first day without unmet demand and recorded only
    when longer than ``stockout_min_gap_days``. A run still open when the
    window ends is the plan running dry rather than a gap between batches;
    it is reported as the final sell-out day instead of an episode.

    Args:
        daily_missed: Missed-demand flag per day
        first_sale_day: Day of the first sale, or None when nothing sold
        windows: Selling window per batch
        config: Simulation configuration

    Returns:
        StockoutScan with episodes and the final sell-out day
    """
    scan = StockoutScan()
    if first_sale_day is None:
        return scan

    window_end = min(config.stockout_window_days, len(daily_missed))
    run_start: Optional[int] = None
    for day in range(first_sale_day, window_end):
        if daily_missed[day]:
            if run_start is None:
                run_start = day
            continue

        if run_start is not None:
            if day - run_start > config.stockout_min_gap_days:
                episode = StockoutEpisode(
                    start=run_start,
                    end=day,
                    batch_index=attribute_stockout(
                        run_start, windows, config.stockout_attribution_slack_days
                    ),
                )
                scan.episodes.append(episode)
                logger.debug("Detected %s", episode)
            run_start = None

    scan.final_sellout_day = run_start
    return scan
