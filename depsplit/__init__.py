"""
depsplit — find the crates that split a Cargo.lock across versions

depsplit reads a resolved Cargo.lock and explains why several versions of
the same crate end up in one build. Every package and dependency edge is
classified so that maintainers can see:

    • which crates are locked at more than one version (conflict roots)
    • everything pulled in beneath those conflicts
    • the single-version crates that directly depend on a minority version,
      the cheapest places to upgrade to consolidate the lockfile

Results are available as a plain upgrade report, a Graphviz graph, a
table, or JSON.
"""

from __future__ import annotations

from depsplit.__version__ import __version__

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "depsplit Contributors"
__license__ = "Apache-2.0"
__description__ = "Explain duplicate crate versions in Cargo.lock files."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

from depsplit.core import (  # noqa: E402
    AnalysisResult,
    ConflictAnalyzer,
    DependencyGraph,
    LinkResolver,
    LockfileLoader,
)

__all__ = [
    "__version__",
    "AnalysisResult",
    "ConflictAnalyzer",
    "DependencyGraph",
    "LinkResolver",
    "LockfileLoader",
]
