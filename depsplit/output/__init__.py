"""
Renderers for analysis results.

- :func:`render_report` — one line per upgrade candidate
- :func:`render_dot` — Graphviz graph of the (possibly trimmed) lockfile
"""

from __future__ import annotations

from depsplit.output.dot import render_dot
from depsplit.output.report import render_report

__all__ = ["render_dot", "render_report"]
