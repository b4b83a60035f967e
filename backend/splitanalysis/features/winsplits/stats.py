"""Statistics for reconciled split times.

Runs once every athlete has both relative and actual times: the second best
table needs the relative times of the whole field.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from statistics import mean, median
from typing import Sequence

from splitanalysis.shared.constants import (
    MAJOR_MISTAKE_PERCENT,
    MINOR_MISTAKE_PERCENT,
    PERCENTAGE_BUCKET_BOUNDARIES,
    PLACE_BUCKETS,
    Metric,
    TimeUnit,
)
from splitanalysis.shared.time_codec import format_time

from .models import (
    Athlete,
    AthleteStats,
    ChartPoint,
    Dataset,
    PerformanceRecord,
    SecondBestTable,
)
from .reconciler import rebuild_series

logger = logging.getLogger(__name__)


class MistakeLevel(str, Enum):
    """How much slower than the best leg time a leg was."""
    NONE = "none"  # at most 15%
    MINOR = "minor"  # more than 15%, at most 30%
    MAJOR = "major"  # more than 30%


_MISTAKE_FIELDS = {
    MistakeLevel.NONE: "leg_no_mistake",
    MistakeLevel.MINOR: "leg_minor_mistake",
    MistakeLevel.MAJOR: "leg_major_mistake",
}


def aggregate_statistics(dataset: Dataset) -> Dataset:
    """Compute derived fields for every athlete and the aligned aggregates."""
    logger.info(f"Calculating statistics for {len(dataset.results)} athletes")

    dataset.second_best = build_second_best(dataset)
    best_leg = dataset.best.leg.times_in_seconds
    best_split = dataset.best.split.times_in_seconds

    for athlete in dataset.results:
        for index, control in enumerate(athlete.controls):
            for metric in Metric:
                best = dataset.best.for_metric(metric).times_in_seconds[index]
                runner_up = dataset.second_best.runner_up_gap(metric, index)
                minimize(control.performance(metric), best, runner_up)

        rebuild_series(athlete)

        average, middle = percentage_loss(athlete.leg.times_percentages)
        athlete.leg.average_percentage_loss = average
        athlete.leg.median_percentage_loss = middle
        athlete.split.times = chart_series(athlete, best_split)
        athlete.stats = calculate_athlete_stats(athlete, best_leg)

    dataset.aggregated = aggregate(dataset.results)

    dataset.best.optimal_total_time_in_seconds = optimal_total_time(best_leg)
    dataset.best.optimal_total_time = format_time(
        dataset.best.optimal_total_time_in_seconds, TimeUnit.MINUTES
    )
    return dataset


def build_second_best(dataset: Dataset) -> SecondBestTable:
    """Sorted non-negative relative times of the field, per control."""
    table = SecondBestTable()
    for metric in Metric:
        per_control = table.for_metric(metric)
        for index in range(dataset.number_of_controls + 1):
            values = [
                athlete.series(metric).relative_times_in_seconds[index]
                for athlete in dataset.results
            ]
            per_control.append(sorted(v for v in values if v is not None and v >= 0))
    return table


def minimize(record: PerformanceRecord, best: int | None, runner_up: int | None) -> None:
    """Fill the short display fields and the percentage of best."""
    relative = record.relative_time_in_seconds
    actual = best + relative if relative is not None and best is not None else None
    record.actual_time_minimized = format_time(actual, TimeUnit.MINUTES)
    record.relative_time_minimized = minimized_relative_time(relative, runner_up)
    record.percentage_of_best = percentage_of_best(relative, best)


def minimized_relative_time(
    relative: int | None, runner_up: int | None
) -> str | int | None:
    """Gap to the best time for display.

    Behind the best: "+1:05". Best at the control: how far ahead of the
    next athlete, "-12", or 0 when nobody else has a time there.
    """
    if relative is None or relative < 0:
        return None
    if relative > 0:
        return "+" + format_time(relative)
    if runner_up is not None and runner_up > 0:
        return "-" + format_time(runner_up)
    return 0


def round_one_decimal(value: float) -> float:
    """Round half up to one decimal: 16.65 → 16.7."""
    return math.floor(value * 10 + 0.5) / 10


def percentage_of_best(relative: int | None, best: int | None) -> float | None:
    """Time lost as percent of the best time: 10s on a 60s leg → 16.7."""
    if relative is None or not best:
        return None
    return round_one_decimal(relative * 100 / best)


def is_mistake(relative: int, best: int, percent: int) -> bool:
    return relative > best * percent / 100


def classify_mistake(relative: int | None, best: int | None) -> MistakeLevel | None:
    """Classify a leg. None when the leg or the best time is missing."""
    if relative is None or best is None:
        return None
    if is_mistake(relative, best, MAJOR_MISTAKE_PERCENT):
        return MistakeLevel.MAJOR
    if is_mistake(relative, best, MINOR_MISTAKE_PERCENT):
        return MistakeLevel.MINOR
    return MistakeLevel.NONE


def percentage_bucket(relative: int | None, best: int | None) -> str | None:
    """Name of the AthleteStats counter a leg falls in.

    Buckets double: [0,1) [1,2) [2,4) ... [64,128) percent, then >= 128.
    A leg faster than the best time counts as within 1 percent.
    """
    if relative is None or best is None:
        return None
    bounds = PERCENTAGE_BUCKET_BOUNDARIES
    if relative < 0:
        return f"leg_within_{bounds[1]}_percent"
    for low, high in zip(bounds, bounds[1:]):
        if best * low / 100 <= relative < best * high / 100:
            return f"leg_within_{high}_percent"
    if relative >= best * bounds[-1] / 100:
        return f"leg_above_{bounds[-1]}_percent"
    return None


def count_places(places: Sequence[int | None], min_place: int, max_place: int) -> int:
    return sum(1 for p in places if p is not None and min_place <= p <= max_place)


def calculate_athlete_stats(athlete: Athlete, best_leg: Sequence[int | None]) -> AthleteStats:
    """Place buckets, mistake counts and percentage buckets of the legs."""
    stats = AthleteStats()

    for name, (min_place, max_place) in PLACE_BUCKETS.items():
        setattr(stats, name, count_places(athlete.leg.places, min_place, max_place))

    for relative, best in zip(athlete.leg.relative_times_in_seconds, best_leg):
        level = classify_mistake(relative, best)
        if level is None:
            continue
        mistake_field = _MISTAKE_FIELDS[level]
        setattr(stats, mistake_field, getattr(stats, mistake_field) + 1)

        bucket = percentage_bucket(relative, best)
        if bucket is not None:
            setattr(stats, bucket, getattr(stats, bucket) + 1)

    return stats


def percentage_loss(percentages: Sequence[float | None]) -> tuple[float | None, float | None]:
    """Average (one decimal) and median of the known percentages."""
    values = sorted(p for p in percentages if p is not None)
    if not values:
        return None, None
    return round_one_decimal(mean(values)), median(values)


def chart_series(athlete: Athlete, best_split: Sequence[int | None]) -> list[ChartPoint]:
    """Split times per control for time axis charts. Missed controls → None."""
    points: list[ChartPoint] = []
    for control, relative, best in zip(
        athlete.controls, athlete.split.relative_times_in_seconds, best_split
    ):
        time = None
        if relative is not None and relative >= 0 and best is not None:
            time = format_time(best + relative, TimeUnit.HOURS, double_digits=True)
        points.append(ChartPoint(time=time, label=control.label))
    return points


def aggregate(results: Sequence[Athlete]) -> dict[str, list]:
    """Per-athlete values as lists aligned with results."""
    aggregated: dict[str, list] = {"names": [a.name for a in results]}
    for name in AthleteStats.field_names():
        aggregated[name] = [getattr(a.stats, name) for a in results]
    aggregated["average_percentage_loss"] = [a.leg.average_percentage_loss for a in results]
    aggregated["median_percentage_loss"] = [a.leg.median_percentage_loss for a in results]
    return aggregated


def optimal_total_time(best_leg: Sequence[int | None]) -> int | None:
    """Sum of the best leg times."""
    known = [s for s in best_leg if s is not None]
    if not known:
        return None
    if len(known) < len(best_leg):
        logger.warning(
            f"Optimal total time misses {len(best_leg) - len(known)} legs without a best time"
        )
    return sum(known)


def search_by_name(results: Sequence[Athlete], query: str) -> list[Athlete]:
    """Case-insensitive partial match on name or club."""
    query_lower = query.lower()
    found = []
    for a in results:
        if query_lower in a.name.lower():
            found.append(a)
        elif a.club and query_lower in a.club.lower():
            found.append(a)
    return found
