"""Plain-text upgrade report.

For every leverage-point package the report lists each direct dependency
on a crate locked at several versions::

    tokio-util @ 0.6.9 brings in tokio @ 0.2.25
"""

from __future__ import annotations

from typing import List

from depsplit.core.analyzer import AnalysisResult


def report_lines(result: AnalysisResult) -> List[str]:
    """Return the report as a list of lines, in lockfile order."""
    return [
        f"{package.name} @ {package.version} brings in "
        f"{target.name} @ {target.version}"
        for package, target in result.leverage_edges()
    ]


def render_report(result: AnalysisResult) -> str:
    """Return the report text; empty when nothing needs upgrading."""
    lines = report_lines(result)
    return "".join(f"{line}\n" for line in lines)
