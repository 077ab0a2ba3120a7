"""
Core functionality exports for depsplit.

This module provides convenient access to the analysis subsystems of
depsplit. Importing from here keeps user-facing imports clean and stable:

    from depsplit.core import LockfileLoader, ConflictAnalyzer

Individual stages are exported as well for callers that want to run them
on a graph of their own.
"""

from __future__ import annotations

from depsplit.core.depth import annotate_depth
from depsplit.core.trimmer import trim_graph
from depsplit.core.loader import LockfileLoader
from depsplit.core.graph import DependencyGraph
from depsplit.core.classifier import classify_popularity
from depsplit.core.propagator import propagate_conflicts
from depsplit.core.analyzer import AnalysisResult, ConflictAnalyzer, CrateVersions
from depsplit.core.presentation import (
    LinkResolver,
    edge_category,
    node_category,
    package_url,
)

__all__ = [
    "LockfileLoader",
    "DependencyGraph",
    "ConflictAnalyzer",
    "AnalysisResult",
    "CrateVersions",
    "classify_popularity",
    "propagate_conflicts",
    "annotate_depth",
    "trim_graph",
    "LinkResolver",
    "node_category",
    "edge_category",
    "package_url",
]
