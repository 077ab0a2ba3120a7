"""Graph trimming.

Removes packages that have nothing to do with any version conflict so that
rendered graphs stay readable. Trimming is a display filter over an
already classified graph: ``versions``, ``popular``, ``dep_of_multi`` and
``dep_versions`` keep the values computed on the full graph.
"""

from __future__ import annotations

from typing import List, Set

from depsplit.models import Package
from depsplit.core.graph import DependencyGraph
from depsplit.utils.logger import get_logger

logger = get_logger("trimmer")

__all__ = ["trim_graph"]


def trim_graph(graph: DependencyGraph) -> List[Package]:
    """Prune single-version leaves until nothing more can be pruned.

    Each pass, for every surviving package:

    1. drop dependency edges whose target crate name no longer survives;
    2. remove the package if it has a single version and no edges left.

    Multi-version packages are never removed. Edges are dropped before
    their target so no surviving edge points at a removed package.

    Args:
        graph: A classified graph. Dependency lists of its packages are
            shortened in place.

    Returns:
        Surviving packages in lockfile order (the same objects as in
        ``graph``).
    """
    surviving: Set[str] = set(graph.names())
    removed = 0
    changed = True

    while changed:
        changed = False
        for package in graph:
            if package.name not in surviving:
                continue

            kept = [d for d in package.dependencies if d.name in surviving]
            if len(kept) != len(package.dependencies):
                package.dependencies = kept

            if package.versions < 2 and not package.dependencies:
                logger.info("Removing %s from the graph", package.name)
                surviving.discard(package.name)
                removed += 1
                changed = True

    logger.debug("Trimmed %d package(s); %d remain", removed, len(graph) - removed)
    return [p for p in graph if p.name in surviving]
