"""
Shared utilities (NOT business logic).

Usage:
    from splitanalysis.shared import parse_time, format_time
    from splitanalysis.shared.constants import Metric
"""
from .constants import (
    TimeDataType,
    Metric,
    TimeUnit,
    RaceStatus,
    STATUS_SENTINELS,
    FINISH,
    START,
)
from .time_codec import (
    FieldFormatError,
    parse_time,
    format_time,
    format_signed_time,
)

__all__ = [
    # Constants
    "TimeDataType",
    "Metric",
    "TimeUnit",
    "RaceStatus",
    "STATUS_SENTINELS",
    "FINISH",
    "START",
    # Time codec
    "FieldFormatError",
    "parse_time",
    "format_time",
    "format_signed_time",
]
