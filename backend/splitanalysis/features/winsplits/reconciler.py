"""Completes the time representation the export did not supply.

Relative export: actual = best + relative.
Actual export:   relative = actual - best.

Needs the final best time table, so it runs after the whole file is parsed.
"""

from __future__ import annotations

import logging

from splitanalysis.shared.constants import Metric, TimeDataType
from splitanalysis.shared.time_codec import format_signed_time, format_time

from .models import Athlete, Dataset, PerformanceRecord, PerformanceSeries

logger = logging.getLogger(__name__)


def reconcile_times(dataset: Dataset) -> Dataset:
    """Fill actual or relative times for every control of every athlete."""
    relative_supplied = dataset.time_data_type is TimeDataType.RELATIVE
    logger.info(
        f"Reconciling {dataset.time_data_type.value} times for {len(dataset.results)} athletes "
        f"and {dataset.number_of_controls} controls"
    )

    for athlete in dataset.results:
        for control in athlete.controls:
            index = control.index(dataset.number_of_controls)
            for metric in Metric:
                best = dataset.best.for_metric(metric).times_in_seconds[index]
                record = control.performance(metric)
                if relative_supplied:
                    actual_from_relative(record, best)
                else:
                    relative_from_actual(record, best)

        rebuild_series(athlete)

    return dataset


def actual_from_relative(record: PerformanceRecord, best: int | None) -> None:
    if record.relative_time_in_seconds is None or best is None:
        _mark_missing(record)
        return
    record.actual_time_in_seconds = best + record.relative_time_in_seconds
    record.actual_time = format_time(record.actual_time_in_seconds)


def relative_from_actual(record: PerformanceRecord, best: int | None) -> None:
    if record.actual_time_in_seconds is None or best is None:
        _mark_missing(record)
        return
    record.relative_time_in_seconds = record.actual_time_in_seconds - best
    if record.relative_time_in_seconds < 0:
        logger.warning(
            f"Time {record.actual_time!r} is faster than the best time ({best}s)"
        )
        record.relative_time = format_signed_time(record.relative_time_in_seconds)
    else:
        record.relative_time = format_time(record.relative_time_in_seconds)


def _mark_missing(record: PerformanceRecord) -> None:
    # Missing on either side means missing on both
    record.relative_time_in_seconds = None
    record.actual_time_in_seconds = None
    record.actual_time = ""
    record.relative_time = ""


def rebuild_series(athlete: Athlete) -> None:
    """Project the controls into the athlete's leg and split series."""
    athlete.leg = PerformanceSeries.from_controls(athlete.controls, Metric.LEG)
    athlete.split = PerformanceSeries.from_controls(athlete.controls, Metric.SPLIT)
