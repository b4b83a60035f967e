"""Data models for WinSplits split analysis (dataclasses, no DB dependency)."""

from __future__ import annotations

from dataclasses import dataclass, field, fields

from splitanalysis.shared.constants import (
    FINISH,
    Metric,
    RaceStatus,
    TimeDataType,
)


@dataclass
class PerformanceRecord:
    """Time and place at one control, for one metric (leg or split).

    Times in seconds are None when missing, never 0.
    """

    original_time: str | None = None  # "1:02.05" as read from the export
    relative_time: str | None = None
    relative_time_in_seconds: int | None = None
    relative_time_minimized: str | int | None = None  # "+1:05", "-0:12", 0 or None
    actual_time: str | None = None
    actual_time_in_seconds: int | None = None
    actual_time_minimized: str | None = None  # "12:05"
    place: int | None = None  # None = no place
    percentage_of_best: float | None = None  # relative / best * 100


@dataclass
class Control:
    """A control (1..N or "Finish") with its leg and split performance."""

    control: int | str
    leg: PerformanceRecord = field(default_factory=PerformanceRecord)
    split: PerformanceRecord = field(default_factory=PerformanceRecord)

    @property
    def is_finish(self) -> bool:
        return self.control == FINISH

    @property
    def label(self) -> str:
        return FINISH if self.is_finish else f"Control {self.control}"

    def index(self, number_of_controls: int) -> int:
        """Position in the best time table (Finish is last)."""
        return number_of_controls if self.is_finish else self.control - 1

    def performance(self, metric: Metric | str) -> PerformanceRecord:
        return getattr(self, Metric(metric).value)


@dataclass
class ChartPoint:
    """Split time at a control, ready for a time axis chart."""

    time: str | None  # "00:12:05", None if missed
    label: str  # "Control 3" / "Finish"


@dataclass
class PerformanceSeries:
    """Per-control values of one metric for one athlete.

    Always a projection of Athlete.controls: index i is controls[i].
    """

    relative_times: list[str | None] = field(default_factory=list)
    relative_times_in_seconds: list[int | None] = field(default_factory=list)
    relative_times_minimized: list[str | int | None] = field(default_factory=list)
    places: list[int | None] = field(default_factory=list)
    times_percentages: list[float | None] = field(default_factory=list)
    actual_times: list[str | None] = field(default_factory=list)
    actual_times_in_seconds: list[int | None] = field(default_factory=list)
    actual_times_minimized: list[str | None] = field(default_factory=list)

    # Leg only
    average_percentage_loss: float | None = None
    median_percentage_loss: float | None = None

    # Split only
    times: list[ChartPoint] = field(default_factory=list)

    @classmethod
    def from_controls(
        cls, controls: list[Control], metric: Metric | str
    ) -> PerformanceSeries:
        records = [c.performance(metric) for c in controls]
        return cls(
            relative_times=[r.relative_time for r in records],
            relative_times_in_seconds=[r.relative_time_in_seconds for r in records],
            relative_times_minimized=[r.relative_time_minimized for r in records],
            places=[r.place for r in records],
            times_percentages=[r.percentage_of_best for r in records],
            actual_times=[r.actual_time for r in records],
            actual_times_in_seconds=[r.actual_time_in_seconds for r in records],
            actual_times_minimized=[r.actual_time_minimized for r in records],
        )


@dataclass
class AthleteStats:
    """Per-athlete leg counts (places, mistakes, percentage buckets)."""

    leg_first_place: int = 0
    leg_second_place: int = 0
    leg_third_place: int = 0
    leg_4_6_place: int = 0
    leg_7_12_place: int = 0

    leg_no_mistake: int = 0
    leg_minor_mistake: int = 0  # 15-30% behind the best leg
    leg_major_mistake: int = 0  # > 30% behind

    leg_within_1_percent: int = 0  # [0, 1)
    leg_within_2_percent: int = 0  # [1, 2)
    leg_within_4_percent: int = 0
    leg_within_8_percent: int = 0
    leg_within_16_percent: int = 0
    leg_within_32_percent: int = 0
    leg_within_64_percent: int = 0
    leg_within_128_percent: int = 0  # [64, 128)
    leg_above_128_percent: int = 0

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]


@dataclass
class Athlete:
    """One competitor: two rows of the export."""

    position: int | str | None  # raw string until the split row is read
    name: str
    club: str | None
    total_time: str  # "1:02:05", or "dsq" / "mp" / "dns"
    diff_total_time: str  # "+3:12" or ""
    controls: list[Control] = field(default_factory=list)
    status: RaceStatus = RaceStatus.FINISHED
    total_time_in_seconds: int | None = None
    leg: PerformanceSeries = field(default_factory=PerformanceSeries)
    split: PerformanceSeries = field(default_factory=PerformanceSeries)
    stats: AthleteStats | None = None

    @property
    def finished(self) -> bool:
        return self.status is RaceStatus.FINISHED

    def series(self, metric: Metric | str) -> PerformanceSeries:
        return getattr(self, Metric(metric).value)


@dataclass
class BestTimes:
    """Fastest time per control position (0..N, Finish last) for a metric."""

    times_original: list[str | None] = field(default_factory=list)
    times: list[str | None] = field(default_factory=list)  # "m:ss"
    times_in_seconds: list[int | None] = field(default_factory=list)

    @classmethod
    def empty(cls, size: int) -> BestTimes:
        return cls(
            times_original=[None] * size,
            times=[None] * size,
            times_in_seconds=[None] * size,
        )


@dataclass
class BestTimeTable:
    """Best leg and split times, filled from the rows placed first."""

    leg: BestTimes = field(default_factory=BestTimes)
    split: BestTimes = field(default_factory=BestTimes)
    optimal_total_time_in_seconds: int | None = None  # sum of best legs
    optimal_total_time: str | None = None

    def for_metric(self, metric: Metric | str) -> BestTimes:
        return getattr(self, Metric(metric).value)


@dataclass
class SecondBestTable:
    """Sorted non-negative relative times per control position."""

    leg: list[list[int]] = field(default_factory=list)
    split: list[list[int]] = field(default_factory=list)

    def for_metric(self, metric: Metric | str) -> list[list[int]]:
        return getattr(self, Metric(metric).value)

    def runner_up_gap(self, metric: Metric | str, index: int) -> int | None:
        """Gap between the control winner and the next athlete."""
        relative_times = self.for_metric(metric)
        if index >= len(relative_times) or len(relative_times[index]) < 2:
            return None
        return relative_times[index][1]


@dataclass
class StructuralMismatch:
    """A row whose trailing echo field or width did not match."""

    line_number: int  # 1-based physical line
    metric: Metric  # leg row or split row
    athlete_name: str
    expected: str | None  # name (leg row) or club (split row)
    found: str | None
    cursor_position: int
    columns: int

    def describe(self) -> str:
        return (
            f"line {self.line_number} ({self.metric.value} row of {self.athlete_name!r}): "
            f"expected {self.expected!r}, found {self.found!r} "
            f"at column {self.cursor_position} of {self.columns}"
        )


@dataclass
class Dataset:
    """Full result of analyzing one export."""

    time_data_type: TimeDataType
    number_of_controls: int = 0
    number_of_participants: int = 0
    control_labels: list[str] = field(default_factory=list)  # Start, Control 1.., Finish
    best: BestTimeTable = field(default_factory=BestTimeTable)
    second_best: SecondBestTable = field(default_factory=SecondBestTable)
    results: list[Athlete] = field(default_factory=list)  # file order
    aggregated: dict[str, list] = field(default_factory=dict)  # aligned with results
    mismatches: list[StructuralMismatch] = field(default_factory=list)

    @property
    def has_mismatches(self) -> bool:
        return bool(self.mismatches)
