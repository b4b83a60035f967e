"""
Report generators for analyzed split times.

Formats a Dataset for console and JSON output.
"""

import json
from dataclasses import asdict
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional

from splitanalysis.features.winsplits.models import Athlete, Dataset


class ReportGenerator:
    """Generate reports in various formats."""

    def generate_console(self, dataset: Dataset, athletes: Optional[list[Athlete]] = None) -> str:
        """Generate ASCII report for console output."""

        lines = [
            "",
            "=" * 78,
            f"                SPLIT ANALYSIS ({dataset.time_data_type.value} times)",
            "=" * 78,
            "",
            f"Athletes:       {dataset.number_of_participants}",
            f"Controls:       {dataset.number_of_controls}",
            f"Optimal time:   {dataset.best.optimal_total_time or '-'}",
            f"Mismatches:     {len(dataset.mismatches)}",
            "",
        ]

        if dataset.number_of_controls == 0:
            lines.append("No athlete rows found.")
            return "\n".join(lines)

        # Best times table
        lines.extend([
            "-" * 78,
            "                    BEST TIMES",
            "-" * 78,
            "",
            "Control      |      Leg |    Split",
            "-------------|----------|---------",
        ])
        for index, label in enumerate(dataset.control_labels[1:]):
            leg = dataset.best.leg.times[index] or "-"
            split = dataset.best.split.times[index] or "-"
            lines.append(f"{label:<12} | {leg:>8} | {split:>8}")

        # Results table
        lines.extend([
            "",
            "-" * 78,
            "                    RESULTS",
            "-" * 78,
            "",
            " Pos | Name                     |     Time |  Avg % |  Med % | No | Min | Maj",
            "-----|--------------------------|----------|--------|--------|----|-----|----",
        ])

        for a in athletes if athletes is not None else dataset.results:
            position = str(a.position) if a.position is not None else "-"
            stats = a.stats
            lines.append(
                f"{position:>4} | {a.name[:24]:<24} | {a.total_time:>8} | "
                f"{_format_percentage(a.leg.average_percentage_loss):>6} | "
                f"{_format_percentage(a.leg.median_percentage_loss):>6} | "
                f"{stats.leg_no_mistake if stats else 0:>2} | "
                f"{stats.leg_minor_mistake if stats else 0:>3} | "
                f"{stats.leg_major_mistake if stats else 0:>3}"
            )

        if dataset.mismatches:
            lines.extend(["", "Structural mismatches:"])
            for mismatch in dataset.mismatches:
                lines.append(f"  - {mismatch.describe()}")

        lines.append("")
        return "\n".join(lines)

    def to_dict(self, dataset: Dataset) -> dict:
        """Dataset as plain JSON-compatible data."""
        output = asdict(dataset, dict_factory=_enum_values)
        output["analyzed_at"] = datetime.now(timezone.utc).isoformat()
        return output

    def save_json(self, dataset: Dataset, path: Path) -> None:
        """Save the dataset to JSON."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(self.to_dict(dataset), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


def _enum_values(items: list[tuple]) -> dict:
    return {key: value.value if isinstance(value, Enum) else value for key, value in items}


def _format_percentage(value: Optional[float]) -> str:
    if value is None:
        return "-"
    return f"{value:.1f}"
