"""Transitive conflict propagation.

A package is *beneath a conflict* (``dep_of_multi``) when it can be reached
from a version conflict through dependency edges. For an edge P -> D, D is
marked when:

- P is already marked, or
- P has several versions and either D also has several versions or P is
  not the popular version of its crate.

A popular multi-version package therefore does not mark its single-version
dependencies: that subtree is what the winning version is expected to pull
in. Once anything is marked, everything below it is marked too.

The closure is computed by repeated passes over all edges until a pass
marks nothing new. Marks only ever go from ``False`` to ``True``, so the
loop terminates on cyclic graphs and its result does not depend on the
order edges are visited in.
"""

from __future__ import annotations

from depsplit.models import Package
from depsplit.core.graph import DependencyGraph
from depsplit.utils.logger import get_logger

logger = get_logger("propagator")

__all__ = ["propagate_conflicts", "taints"]


def taints(source: Package, target: Package) -> bool:
    """Return True if the edge ``source -> target`` marks ``target``.

    Example::

        >>> taints(minority_version, single_version_dep)
        True
    """
    if source.dep_of_multi:
        return True
    return source.versions > 1 and (target.versions > 1 or not source.popular)


def propagate_conflicts(graph: DependencyGraph) -> int:
    """Mark every package beneath a version conflict.

    Requires ``versions`` and ``popular`` to be computed. Running it again
    on its own result marks nothing and takes a single pass.

    Args:
        graph: Graph to annotate in place.

    Returns:
        Number of passes over the edge set, including the final pass that
        made no change.
    """
    passes = 0
    changed = True

    while changed:
        changed = False
        passes += 1
        for package, target in graph.edges():
            if not target.dep_of_multi and taints(package, target):
                target.dep_of_multi = True
                changed = True

    marked = sum(1 for p in graph if p.dep_of_multi)
    logger.debug(
        "Conflict propagation converged after %d pass(es); %d package(s) marked",
        passes,
        marked,
    )
    return passes
