"""WinSplits feature module: split time parsing, reconciliation, statistics."""

from .models import (
    PerformanceRecord,
    Control,
    ChartPoint,
    PerformanceSeries,
    AthleteStats,
    Athlete,
    BestTimes,
    BestTimeTable,
    SecondBestTable,
    StructuralMismatch,
    Dataset,
)
from .parser import WinSplitsParser, FieldCursor, RowState, parse_place
from .reconciler import reconcile_times
from .stats import (
    MistakeLevel,
    aggregate_statistics,
    classify_mistake,
    percentage_loss,
    search_by_name,
)
from .service import SplitAnalysisService, analyze

__all__ = [
    "PerformanceRecord",
    "Control",
    "ChartPoint",
    "PerformanceSeries",
    "AthleteStats",
    "Athlete",
    "BestTimes",
    "BestTimeTable",
    "SecondBestTable",
    "StructuralMismatch",
    "Dataset",
    "WinSplitsParser",
    "FieldCursor",
    "RowState",
    "parse_place",
    "reconcile_times",
    "MistakeLevel",
    "aggregate_statistics",
    "classify_mistake",
    "percentage_loss",
    "search_by_name",
    "SplitAnalysisService",
    "analyze",
]
