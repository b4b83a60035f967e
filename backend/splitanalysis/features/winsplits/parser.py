"""Parser for split times exported as text from WinSplits Online.

Every athlete takes two lines of the export:

    Pos<tab>Name<tab>Finish time<tab>Diff<tab><Controls-Finish><tab>Name<tab>
    <tab>Club<tab><tab><tab><Controls-Finish><tab>Club<tab>

where <Controls-Finish> is a time and a "(place)" per control plus finish.
The first line holds leg times, the second split times. Depending on the
export options the times are relative to the best time or actual times.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

import httpx

from splitanalysis.config import settings
from splitanalysis.shared.constants import (
    FINISH,
    START,
    STATUS_SENTINELS,
    Metric,
    TimeDataType,
    TimeUnit,
)
from splitanalysis.shared.time_codec import FieldFormatError, format_time, parse_time

from .models import (
    Athlete,
    BestTimes,
    BestTimeTable,
    Control,
    Dataset,
    StructuralMismatch,
)

logger = logging.getLogger(__name__)

# Title and column header lines at the top of every export, blank lines not counted
HEADER_LINES = 2

# Position, name, total time, diff, echoed name, trailing column
# plus the time/place pair of the finish
FIXED_COLUMNS = 8


class RowState(Enum):
    """Which of the two lines of an athlete is expected next."""
    AWAITING_LEG_ROW = "leg"
    AWAITING_SPLIT_ROW = "split"


class FieldCursor:
    """Reads the tab separated fields of one row from left to right."""

    def __init__(self, fields: list[str]):
        self.fields = fields
        self.position = 0

    def next(self) -> str:
        """Return the current field and advance. Past the end → ""."""
        value = self.fields[self.position] if self.position < len(self.fields) else ""
        self.position += 1
        return value

    def skip(self, count: int = 1) -> None:
        self.position += count

    @property
    def columns(self) -> int:
        return len(self.fields)


class BestTimeAccumulator:
    """Best leg and split times, collected from rows with place 1.

    The first place-1 row seen for a control wins; later ones are ignored.
    """

    def __init__(self, number_of_controls: int):
        size = number_of_controls + 1
        self._best = {metric: BestTimes.empty(size) for metric in Metric}
        self._recorded: dict[Metric, set[int]] = {metric: set() for metric in Metric}

    def record(self, metric: Metric, index: int, original_time: str) -> None:
        if index in self._recorded[metric]:
            return
        seconds = parse_time(original_time)
        best = self._best[metric]
        best.times_original[index] = original_time
        best.times[index] = format_time(seconds, TimeUnit.MINUTES)
        best.times_in_seconds[index] = seconds
        self._recorded[metric].add(index)

    def finalize(self) -> BestTimeTable:
        return BestTimeTable(leg=self._best[Metric.LEG], split=self._best[Metric.SPLIT])


def count_controls(columns: int) -> int | None:
    """Number of controls (finish excluded) described by a row.

    Rows normally end with a tab; without it the row is one column short.
    Returns None for rows that carry no athlete data.
    """
    surplus = columns - FIXED_COLUMNS
    if surplus % 2:
        surplus += 1
    number_of_controls = surplus // 2
    return number_of_controls if number_of_controls > 0 else None


def parse_place(text: str) -> int | None:
    """Parse a place field: "(12)" → 12, "" → None."""
    text = text.strip()
    if not text:
        return None
    digits = text[1:-1] if text.startswith("(") and text.endswith(")") else text
    if not (digits.isascii() and digits.isdigit()):
        raise FieldFormatError(f"Invalid place: {text!r}")
    return int(digits)


def create_controls(number_of_controls: int) -> list[Control]:
    """Controls 1..N followed by the finish."""
    controls = [Control(control=n) for n in range(1, number_of_controls + 1)]
    controls.append(Control(control=FINISH))
    return controls


def create_control_labels(number_of_controls: int) -> list[str]:
    """["Start", "Control 1", ..., "Finish"]."""
    labels = [START]
    labels.extend(f"Control {n}" for n in range(1, number_of_controls + 1))
    labels.append(FINISH)
    return labels


class WinSplitsParser:
    """Parser for WinSplits Online text exports."""

    def __init__(self, time_data_type: TimeDataType | str | None = None):
        """
        Args:
            time_data_type: RELATIVE or ACTUAL times in the export.
                Defaults to settings.time_data_type.
        """
        self.time_data_type = TimeDataType(time_data_type or settings.time_data_type)

    def parse_url(self, url: str) -> Dataset:
        """Download and parse an exported text file."""
        resp = httpx.get(url, timeout=settings.http_timeout, follow_redirects=True)
        resp.raise_for_status()
        return self.parse_text(resp.text)

    def parse_file(self, path: str | Path) -> Dataset:
        """Parse a local exported text file."""
        path = Path(path)
        content = path.read_text(encoding=settings.source_encoding)
        return self.parse_text(content)

    def parse_text(self, raw: str) -> Dataset:
        """Parse the export into athletes and best times.

        Only parsing is done here: actual/relative times are completed by
        the reconciler, statistics by the stats module.
        """
        logger.info(f"Parsing {self.time_data_type.value} times")

        dataset = Dataset(time_data_type=self.time_data_type)
        best: BestTimeAccumulator | None = None
        state = RowState.AWAITING_LEG_ROW
        athlete: Athlete | None = None
        headers_seen = 0

        lines = raw.lstrip("\ufeff").split("\n")
        for line_number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            if headers_seen < HEADER_LINES:
                headers_seen += 1
                continue

            fields = line.rstrip("\r").split("\t")
            if count_controls(len(fields)) is None:
                continue

            if best is None:
                # The first athlete row fixes the course for the whole file
                number_of_controls = count_controls(len(fields))
                dataset.number_of_controls = number_of_controls
                dataset.control_labels = create_control_labels(number_of_controls)
                best = BestTimeAccumulator(number_of_controls)

            cursor = FieldCursor(fields)

            if state is RowState.AWAITING_LEG_ROW:
                athlete = self._read_leg_row(cursor, dataset.number_of_controls, best)
                self._check_row_end(
                    cursor, dataset, line_number, Metric.LEG, athlete, athlete.name
                )
                state = RowState.AWAITING_SPLIT_ROW
            else:
                self._read_split_row(cursor, athlete, best)
                self._check_row_end(
                    cursor, dataset, line_number, Metric.SPLIT, athlete, athlete.club
                )
                _normalize_totals(athlete)
                dataset.results.append(athlete)
                dataset.number_of_participants += 1
                athlete = None
                state = RowState.AWAITING_LEG_ROW

        if athlete is not None:
            logger.warning(f"Dropping {athlete.name!r}: leg row without a split row")

        if best is not None:
            dataset.best = best.finalize()

        logger.info(
            f"Parsed {self.time_data_type.value} times for {len(dataset.results)} athletes "
            f"and {dataset.number_of_controls} controls"
        )
        return dataset

    def _read_leg_row(
        self,
        cursor: FieldCursor,
        number_of_controls: int,
        best: BestTimeAccumulator,
    ) -> Athlete:
        athlete = Athlete(
            position=cursor.next(),
            name=cursor.next(),
            club=None,
            total_time=cursor.next(),
            diff_total_time=cursor.next(),
            controls=create_controls(number_of_controls),
        )
        self._read_times(cursor, athlete, Metric.LEG, best)
        return athlete

    def _read_split_row(
        self,
        cursor: FieldCursor,
        athlete: Athlete,
        best: BestTimeAccumulator,
    ) -> None:
        cursor.skip()
        athlete.club = cursor.next()
        cursor.skip(2)
        self._read_times(cursor, athlete, Metric.SPLIT, best)

    def _read_times(
        self,
        cursor: FieldCursor,
        athlete: Athlete,
        metric: Metric,
        best: BestTimeAccumulator,
    ) -> None:
        """Read a time/place pair for every control and the finish."""
        for index, control in enumerate(athlete.controls):
            time_text = cursor.next()
            place = parse_place(cursor.next())

            record = control.performance(metric)
            record.original_time = time_text
            record.place = place

            if self.time_data_type is TimeDataType.RELATIVE:
                record.relative_time = time_text
                # The winner's field holds the actual time, the gap is zero
                record.relative_time_in_seconds = 0 if place == 1 else parse_time(time_text)
            else:
                record.actual_time = time_text
                record.actual_time_in_seconds = parse_time(time_text)

            if place == 1:
                best.record(metric, index, time_text)

    def _check_row_end(
        self,
        cursor: FieldCursor,
        dataset: Dataset,
        line_number: int,
        metric: Metric,
        athlete: Athlete,
        expected: str | None,
    ) -> None:
        """Rows end with the name (leg row) or club (split row) repeated."""
        found = cursor.next()
        consumed_all = cursor.columns - cursor.position in (0, 1)
        if consumed_all and found == expected:
            return

        mismatch = StructuralMismatch(
            line_number=line_number,
            metric=metric,
            athlete_name=athlete.name,
            expected=expected,
            found=found,
            cursor_position=cursor.position,
            columns=cursor.columns,
        )
        dataset.mismatches.append(mismatch)
        logger.warning(f"Structural mismatch: {mismatch.describe()}")


def _normalize_totals(athlete: Athlete) -> None:
    """Convert position and total times once both rows are read."""
    position = str(athlete.position).strip()
    if not position:
        athlete.position = None
    elif position.isascii() and position.isdigit():
        athlete.position = int(position)
    else:
        raise FieldFormatError(f"Invalid position: {position!r}")

    total_time = athlete.total_time.strip()
    status = STATUS_SENTINELS.get(total_time.lower())
    if status is not None:
        athlete.status = status
        athlete.total_time = total_time
    else:
        athlete.total_time_in_seconds = parse_time(total_time)
        athlete.total_time = format_time(athlete.total_time_in_seconds)

    diff = athlete.diff_total_time.strip().lstrip("+")
    if diff and diff.lower() not in STATUS_SENTINELS:
        athlete.diff_total_time = "+" + format_time(parse_time(diff), TimeUnit.MINUTES)
    else:
        athlete.diff_total_time = diff
