"""Unit tests for depsplit.output.report."""

from __future__ import annotations

import pytest

from depsplit.output.report import render_report, report_lines


@pytest.mark.unit
class TestReport:
    """Tests for the upgrade report."""

    def test_tie_scenario(self, analyze, tie_scenario) -> None:
        text = render_report(analyze(tie_scenario))

        assert text == "A @ 1 brings in B @ 1\nC @ 1 brings in B @ 2\n"

    def test_majority_scenario(self, analyze, majority_scenario) -> None:
        lines = report_lines(analyze(majority_scenario))

        assert lines == ["old-term @ 0.1.0 brings in log @ 0.3.9"]

    def test_leverage_point_with_two_conflicts(self, analyze) -> None:
        specs = [
            ("a", "1", ["x 1", "y 1", "z 1"]),
            ("b", "1", ["x 2", "y 2"]),
            ("x", "1", []),
            ("x", "2", []),
            ("y", "1", []),
            ("y", "2", []),
            ("z", "1", []),
        ]

        lines = report_lines(analyze(specs))

        assert lines == [
            "a @ 1 brings in x @ 1",
            "a @ 1 brings in y @ 1",
            "b @ 1 brings in x @ 2",
            "b @ 1 brings in y @ 2",
        ]

    def test_marked_packages_are_not_reported(self, analyze) -> None:
        # m sits beneath the minority version of p, so it is not a starting point
        specs = [
            ("root", "1", ["p 2"]),
            ("other", "1", ["p 2"]),
            ("old", "1", ["p 1"]),
            ("p", "1", ["m 1"]),
            ("p", "2", []),
            ("m", "1", ["q 1"]),
            ("n", "1", ["q 2"]),
            ("q", "1", []),
            ("q", "2", []),
        ]

        lines = report_lines(analyze(specs))

        assert "old @ 1 brings in p @ 1" in lines
        assert not any(line.startswith("m @ ") for line in lines)

    def test_empty_when_no_conflicts(self, analyze) -> None:
        assert render_report(analyze([("a", "1", [])])) == ""

    def test_trimmed_report_matches_full(self, analyze, majority_scenario) -> None:
        full = render_report(analyze(majority_scenario))
        trimmed = render_report(analyze(majority_scenario, trim=True))

        assert trimmed == full
