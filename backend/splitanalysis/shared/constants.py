"""
Constants for WinSplits exports and split analysis.

Single source of truth for the enums and thresholds shared by the
parser, the reconciler and the statistics.
"""

from enum import Enum


class TimeDataType(str, Enum):
    """
    Which representation the time fields of an export hold.

    Chosen by the user in WinSplits when exporting:
    - RELATIVE: "relative split times" checked (gap to the best time)
    - ACTUAL: plain elapsed times
    """
    RELATIVE = "RELATIVE"
    ACTUAL = "ACTUAL"


class Metric(str, Enum):
    """Leg = previous control to this one, split = cumulative from start."""
    LEG = "leg"
    SPLIT = "split"


class TimeUnit(str, Enum):
    """Smallest leading unit that format_time always emits."""
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"


class RaceStatus(str, Enum):
    """Outcome of a race, as encoded in the total time field."""
    FINISHED = "finished"
    DISQUALIFIED = "dsq"
    MISSING_PUNCH = "mp"
    DID_NOT_START = "dns"


# Total time field values that are statuses, not times
STATUS_SENTINELS: dict[str, RaceStatus] = {
    RaceStatus.DISQUALIFIED.value: RaceStatus.DISQUALIFIED,
    RaceStatus.MISSING_PUNCH.value: RaceStatus.MISSING_PUNCH,
    RaceStatus.DID_NOT_START.value: RaceStatus.DID_NOT_START,
}

FINISH = "Finish"
START = "Start"


# =============================================================================
# Mistake classification (leg times, percent of best leg time)
# =============================================================================

MINOR_MISTAKE_PERCENT = 15
MAJOR_MISTAKE_PERCENT = 30

# Doubling bucket boundaries: [0,1) [1,2) [2,4) ... [64,128), then >= 128
PERCENTAGE_BUCKET_BOUNDARIES: tuple[int, ...] = (0, 1, 2, 4, 8, 16, 32, 64, 128)

# Leg place buckets: name -> (min place, max place), both included
PLACE_BUCKETS: dict[str, tuple[int, int]] = {
    "leg_first_place": (1, 1),
    "leg_second_place": (2, 2),
    "leg_third_place": (3, 3),
    "leg_4_6_place": (4, 6),
    "leg_7_12_place": (7, 12),
}
