"""Dependency graph construction and lookup.

The :class:`DependencyGraph` owns every :class:`~depsplit.models.Package`
of one analysis run, grouped by crate name and then by version. Edges are
stored on each package as :class:`~depsplit.models.Dependency` keys and
dereferenced through the graph, so removing a node never leaves a dangling
object reference behind.

Typical usage::

    from depsplit.core.graph import DependencyGraph

    graph = DependencyGraph.build(records)
    for package, target in graph.edges():
        print(package.node_id, "->", target.node_id)
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from depsplit.models import Dependency, Package, PackageRecord
from depsplit.utils.logger import get_logger
from depsplit.exceptions import UnresolvedDependencyError

logger = get_logger("graph")

__all__ = ["DependencyGraph"]


class DependencyGraph:
    """All packages of a lockfile, keyed by name then version.

    Instances are created with :meth:`build`; the constructor only sets up
    empty state.

    Attributes:
        packages: Packages in lockfile order.
    """

    def __init__(self) -> None:
        self.packages: List[Package] = []
        self._index: Dict[str, Dict[str, Package]] = {}

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def build(cls, records: Iterable[PackageRecord]) -> "DependencyGraph":
        """Build a resolved graph from raw package records.

        For every record a :class:`Package` is created and indexed. Every
        dependency descriptor is then resolved by exact ``(name, version)``
        match (or, for a versionless descriptor, by the only package of that
        name), the resolved key is stored on the package and the target's
        ``incoming`` count is incremented. Finally ``versions`` is set to the
        size of each package's name group.

        Self-dependencies and duplicate edges are kept and each counted.

        Args:
            records: Package records in lockfile order.

        Returns:
            The built graph.

        Raises:
            UnresolvedDependencyError: A descriptor matches no package, or a
                versionless descriptor names a crate with several versions.
        """
        graph = cls()
        pending: List[Tuple[Package, List[Dependency]]] = []

        for record in records:
            package = Package(
                name=record.name,
                version=record.version,
                source=record.source or "",
            )
            replaced = graph._index.get(record.name, {}).get(record.version)
            if replaced is not None:
                logger.warning(
                    "Duplicate lockfile entry for %s; keeping the last one",
                    package.node_id,
                )
                graph.packages = [p for p in graph.packages if p is not replaced]
                pending = [(p, deps) for p, deps in pending if p is not replaced]

            graph._index.setdefault(record.name, {})[record.version] = package
            graph.packages.append(package)
            pending.append((package, list(record.dependencies)))

        for package, descriptors in pending:
            for descriptor in descriptors:
                target = graph._resolve_descriptor(package, descriptor)
                package.dependencies.append(descriptor.pinned(target.version))
                target.incoming += 1

        for package in graph.packages:
            package.versions = len(graph._index[package.name])

        logger.debug(
            "Built graph with %d package(s), %d crate name(s), %d edge(s)",
            len(graph.packages),
            len(graph._index),
            graph.edge_count(),
        )
        return graph

    def _resolve_descriptor(self, owner: Package, descriptor: Dependency) -> Package:
        """Find the package a descriptor refers to."""
        group = self._index.get(descriptor.name)

        if descriptor.version is None:
            if group is not None and len(group) == 1:
                return next(iter(group.values()))
            reason = "no package" if not group else f"{len(group)} versions"
            raise UnresolvedDependencyError(
                f"Ambiguous dependency {descriptor.name!r} of {owner.node_id}: "
                f"{reason} of that name in the lockfile",
                package=owner.node_id,
                dependency=descriptor.name,
            )

        target = group.get(descriptor.version) if group else None
        if target is None:
            raise UnresolvedDependencyError(
                f"Dependency {descriptor.name} {descriptor.version} of "
                f"{owner.node_id} is not in the lockfile",
                package=owner.node_id,
                dependency=descriptor.name,
                version=descriptor.version,
            )
        return target

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str, version: str) -> Optional[Package]:
        """Return the package with this key, or ``None``."""
        return self._index.get(name, {}).get(version)

    def resolve(self, dependency: Dependency) -> Package:
        """Dereference a resolved dependency edge.

        Raises:
            UnresolvedDependencyError: The edge's target is not in the graph.
        """
        target = self._index.get(dependency.name, {}).get(dependency.version or "")
        if target is None:
            raise UnresolvedDependencyError(
                f"Dependency {dependency.name} {dependency.version} is not in the graph",
                dependency=dependency.name,
                version=dependency.version,
            )
        return target

    def versions_of(self, name: str) -> Dict[str, Package]:
        """Return the ``version -> package`` group for a crate name."""
        return dict(self._index.get(name, {}))

    def names(self) -> List[str]:
        """Return crate names in order of first appearance."""
        return list(self._index)

    def edges(self) -> Iterator[Tuple[Package, Package]]:
        """Yield ``(package, dependency target)`` pairs in lockfile order."""
        for package in self.packages:
            for dependency in package.dependencies:
                yield package, self.resolve(dependency)

    def edge_count(self) -> int:
        """Return the number of dependency edges."""
        return sum(len(p.dependencies) for p in self.packages)

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.packages)

    def __iter__(self) -> Iterator[Package]:
        return iter(self.packages)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, Package):
            key = key.key
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        name, version = key
        return version in self._index.get(name, {})

    def __repr__(self) -> str:
        return (
            f"DependencyGraph(packages={len(self.packages)}, "
            f"names={len(self._index)})"
        )
