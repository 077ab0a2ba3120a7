"""Majority-version detection.

For every crate with more than one version in the graph, the version with
strictly more direct dependents than each of its siblings is *popular*
(the majority version). A tie for the highest dependent count leaves the
crate with no popular version at all.
"""

from __future__ import annotations

from depsplit.core.graph import DependencyGraph
from depsplit.utils.logger import get_logger

logger = get_logger("classifier")

__all__ = ["classify_popularity"]


def classify_popularity(graph: DependencyGraph) -> int:
    """Set ``popular`` on every version of every multi-version crate.

    Single-version packages are left with ``popular = False``.

    Args:
        graph: A built graph; ``incoming`` and ``versions`` must be set.

    Returns:
        Number of crates that have a popular version.
    """
    crates_with_majority = 0

    for name in graph.names():
        group = list(graph.versions_of(name).values())
        if len(group) < 2:
            continue

        has_majority = False
        for package in group:
            sibling_max = max(
                (other.incoming for other in group if other is not package),
                default=0,
            )
            package.popular = package.incoming > sibling_max
            has_majority = has_majority or package.popular

        if has_majority:
            crates_with_majority += 1
        else:
            logger.debug("No majority version for %s (tied dependents)", name)

    return crates_with_majority
