"""SplitAnalysisService: parse, reconcile and analyze a WinSplits export."""

from __future__ import annotations

import logging
from pathlib import Path

from splitanalysis.shared.constants import TimeDataType

from .models import Athlete, Dataset
from .parser import WinSplitsParser
from .reconciler import reconcile_times
from .stats import aggregate_statistics, search_by_name

logger = logging.getLogger(__name__)


class SplitAnalysisService:
    """Runs the three stages in order.

    Each stage finishes for the whole field before the next starts: best
    times are only final at the end of the file, and second best times need
    every athlete's relative times.
    """

    def __init__(self, time_data_type: TimeDataType | str | None = None):
        self.parser = WinSplitsParser(time_data_type)

    @property
    def time_data_type(self) -> TimeDataType:
        return self.parser.time_data_type

    def analyze_text(self, raw: str) -> Dataset:
        return self._analyze(self.parser.parse_text(raw))

    def analyze_file(self, path: str | Path) -> Dataset:
        return self._analyze(self.parser.parse_file(path))

    def analyze_url(self, url: str) -> Dataset:
        return self._analyze(self.parser.parse_url(url))

    def find_athletes(self, dataset: Dataset, query: str) -> list[Athlete]:
        return search_by_name(dataset.results, query)

    def _analyze(self, dataset: Dataset) -> Dataset:
        reconcile_times(dataset)
        aggregate_statistics(dataset)

        if dataset.mismatches:
            logger.warning(
                f"{len(dataset.mismatches)} rows did not match the expected structure"
            )
        logger.info(
            f"Analyzed {dataset.number_of_participants} athletes, "
            f"optimal time {dataset.best.optimal_total_time or '-'}"
        )
        return dataset


def analyze(raw: str, time_data_type: TimeDataType | str | None = None) -> Dataset:
    """Parse and analyze exported text in one call."""
    return SplitAnalysisService(time_data_type).analyze_text(raw)
