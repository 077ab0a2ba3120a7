"""Per-package dependency version depth.

``dep_versions`` is the largest version count among a package's direct
dependencies that are not the popular version of their crate. A
single-version, unmarked package with ``dep_versions > 1`` pulls in a
minority version of something directly, which makes it the cheapest place
to start consolidating.
"""

from __future__ import annotations

from depsplit.core.graph import DependencyGraph

__all__ = ["annotate_depth"]


def annotate_depth(graph: DependencyGraph) -> None:
    """Set ``dep_versions`` on every package of ``graph``.

    Requires ``versions`` and ``popular`` to be computed. Packages with no
    non-popular dependency get ``0``.
    """
    for package in graph:
        package.dep_versions = max(
            (
                target.versions
                for target in map(graph.resolve, package.dependencies)
                if not target.popular
            ),
            default=0,
        )
