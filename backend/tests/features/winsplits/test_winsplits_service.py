"""
Tests for SplitAnalysisService.

End to end: raw export in, analyzed dataset out.
"""

import logging

import pytest

from splitanalysis.config import settings
from splitanalysis.features.winsplits import SplitAnalysisService, analyze
from splitanalysis.shared.constants import TimeDataType

from winsplits_exports import ALICE_ONLY_EXPORT


class TestAnalyze:
    """Full pipeline."""

    def test_alice_only(self):
        dataset = analyze(ALICE_ONLY_EXPORT, TimeDataType.RELATIVE)
        alice = dataset.results[0]

        assert alice.leg.relative_times_in_seconds == [0, 0, 0]
        assert alice.leg.actual_times_in_seconds == [60, 120, 180]
        # Nobody else ran: the winner's gap is 0
        assert alice.leg.relative_times_minimized == [0, 0, 0]
        assert alice.stats.leg_first_place == 3
        assert dataset.best.optimal_total_time == "6:00"

    def test_both_exports_give_same_statistics(self, relative_export, actual_export):
        from_relative = analyze(relative_export, "RELATIVE")
        from_actual = analyze(actual_export, "ACTUAL")

        assert from_relative.aggregated == from_actual.aggregated
        assert from_relative.second_best == from_actual.second_best
        assert from_relative.best.optimal_total_time == from_actual.best.optimal_total_time

    def test_empty_input(self):
        dataset = analyze("", TimeDataType.RELATIVE)
        assert dataset.number_of_controls == 0
        assert dataset.results == []
        assert dataset.aggregated["names"] == []
        assert dataset.best.optimal_total_time == ""

    def test_mismatch_reported(self, caplog):
        export = ALICE_ONLY_EXPORT.replace("(1)\tAlice", "(1)\tBob")
        with caplog.at_level(logging.WARNING):
            dataset = analyze(export, TimeDataType.RELATIVE)
        assert dataset.has_mismatches
        assert "did not match" in caplog.text
        assert dataset.results[0].leg.actual_times_in_seconds == [60, 120, 180]


class TestSplitAnalysisService:
    def test_time_data_type(self):
        service = SplitAnalysisService("ACTUAL")
        assert service.time_data_type is TimeDataType.ACTUAL

    def test_default_time_data_type(self, monkeypatch):
        monkeypatch.setattr(settings, "time_data_type", TimeDataType.ACTUAL)
        assert SplitAnalysisService().time_data_type is TimeDataType.ACTUAL

    def test_invalid_time_data_type(self):
        with pytest.raises(ValueError):
            SplitAnalysisService("LAPS")

    def test_analyze_file(self, tmp_path, relative_export):
        path = tmp_path / "export.txt"
        path.write_text(relative_export, encoding="utf-8")
        dataset = SplitAnalysisService(TimeDataType.RELATIVE).analyze_file(path)
        assert dataset.number_of_participants == 4

    def test_find_athletes(self, relative_export):
        service = SplitAnalysisService(TimeDataType.RELATIVE)
        dataset = service.analyze_text(relative_export)
        assert [a.name for a in service.find_athletes(dataset, "lidingo")] == ["Bob"]
