"""
Display categories assigned to packages and dependency edges.

Renderers decide how each category is painted; the analysis only decides
which category applies.
"""

from __future__ import annotations

from enum import Enum


class NodeCategory(Enum):
    """Role of a package with respect to version conflicts."""

    # Single-version, untainted, directly pulls in a minority version
    LEVERAGE_POINT = "leverage-point"
    CONFLICT_ROOT = "conflict-root"
    CONFLICT_DESCENDANT = "conflict-descendant"
    MINORITY_ADJACENT = "minority-adjacent"
    UNAFFECTED = "unaffected"


class EdgeCategory(Enum):
    """Role of a dependency edge with respect to version conflicts."""

    MINORITY_LINK = "minority-link"
    MAJORITY_LINK = "majority-link"
    TAINT_PROPAGATION = "taint-propagation"
    SOURCE_DIVERGES = "source-diverges"
    NEUTRAL = "neutral"
