"""Centralized constants for the replenishment simulation.

This module contains the tuned day counts and thresholds used by the engine
and the batch planning helpers. They reproduce the behaviour sellers are used
to from the spreadsheet-era planning tool, so changing them changes every
reported date.
"""

# ============================================================================
# HORIZON CONSTANTS (days)
# ============================================================================

#: Number of simulated days; postings on or after this day are dropped
HORIZON_DAYS = 500

#: Last day (exclusive) scanned for stock-out episodes
STOCKOUT_WINDOW_DAYS = 360

#: Chart window end is rounded up to a multiple of this many days
CHART_STEP_DAYS = 14


# ============================================================================
# CASH FLOW CONSTANTS
# ============================================================================

#: Days between a sale and the platform paying out its revenue
RECEIVABLE_DELAY_DAYS = 14

#: Crossings on or before this day are ignored by the break-even locator
#: Guards against spurious near-zero crossings right after day 0
BREAKEVEN_GUARD_DAY = 10

#: Recall postings whose distance from the chunk start exceeds this many days
#: open a new recall chunk
RECALL_CHUNK_DAYS = 14

#: A recall event is dated this many days after its chunk start
RECALL_EVENT_OFFSET_DAYS = 7

#: Recall chunks at or below this amount are not reported as events
RECALL_MIN_AMOUNT = 10.0


# ============================================================================
# DEMAND AND PRICING CONSTANTS
# ============================================================================

#: Number of pricing periods (months since first sale, last one open-ended)
PRICING_PERIODS = 6

#: Unmet demand at or below this many units does not flag a stock-out day
MISSED_DEMAND_TOLERANCE = 0.01

#: Shortfall runs must be longer than this many days to count as an episode
STOCKOUT_MIN_GAP_DAYS = 0.5

#: A stock-out is attributed to a batch whose selling window ended no later
#: than this many days after the shortfall started
STOCKOUT_ATTRIBUTION_SLACK_DAYS = 1

#: Denominators below this magnitude make a ratio evaluate to zero
RATIO_EPSILON = 0.001


# ============================================================================
# BATCH PLANNING CONSTANTS
# ============================================================================

#: Number of batches proposed by the smart batch generator
SMART_BATCH_COUNT = 6

#: Rolling look-ahead window used to size a batch (days)
COVERAGE_WINDOW_DAYS = 30

#: Sell-out simulation gives up after this day (batch never fully sold)
SELL_SIMULATION_MAX_DAY = 1000

#: Coverage relay preview gives up after this day
COVERAGE_RELAY_MAX_DAY = 2000

#: Production days used for generated batches
DEFAULT_PRODUCTION_DAYS = 15

#: Safety buffer between target arrival and previous sell-out (days)
DEFAULT_SAFETY_BUFFER_DAYS = 7

#: Recall completion assumed this many days after arrival for unsold batches
UNSOLD_RECALL_FALLBACK_DAYS = 60
