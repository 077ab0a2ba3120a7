"""Conflict analysis pipeline for depsplit.

This module runs the analysis stages in their fixed order over the
records of one lockfile:

1. **Graph construction** — :meth:`DependencyGraph.build`
2. **Popularity** — :func:`classify_popularity` finds majority versions
3. **Propagation** — :func:`propagate_conflicts` marks everything beneath
   a conflict
4. **Depth** — :func:`annotate_depth` computes ``dep_versions``
5. **Trimming** (optional) — :func:`trim_graph` drops irrelevant packages

The graph belongs to the run that built it; nothing is shared between
runs.

Typical usage::

    from depsplit.core import LockfileLoader, ConflictAnalyzer

    records  = LockfileLoader().load_file("Cargo.lock")
    result   = ConflictAnalyzer(trim=True).analyze(records)
    print(result.summary())

    for package, dependency in result.leverage_edges():
        print(f"{package} brings in {dependency}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from depsplit.core.depth import annotate_depth
from depsplit.core.trimmer import trim_graph
from depsplit.core.graph import DependencyGraph
from depsplit.core.classifier import classify_popularity
from depsplit.core.propagator import propagate_conflicts
from depsplit.utils.version_utils import version_sort_key
from depsplit.utils.logger import get_logger, log_stage
from depsplit.models import EdgeCategory, NodeCategory, Package, PackageRecord
from depsplit.core.presentation import LinkResolver, edge_category, node_category

logger = get_logger("analyzer")

# Public API
__all__ = [
    "ConflictAnalyzer",
    "AnalysisResult",
    "CrateVersions",
]


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------


@dataclass
class CrateVersions:
    """All locked versions of one multi-version crate.

    Attributes:
        name: Crate name.
        packages: The versions, oldest first.
        popular: Version with strictly the most dependents, or ``None`` on
            a tie.
    """

    name: str
    packages: List[Package]
    popular: Optional[str] = None

    @property
    def versions(self) -> List[str]:
        """Version strings, oldest first."""
        return [p.version for p in self.packages]

    @property
    def roots(self) -> List[Package]:
        """Versions that are not themselves beneath another conflict."""
        return [p for p in self.packages if not p.dep_of_multi]


@dataclass
class AnalysisResult:
    """Outcome of one analysis run.

    Attributes:
        graph: The fully classified graph.
        packages: Packages to present; all packages, or the survivors of
            trimming.
        passes: Propagation passes until the fixed point.
        trimmed: Whether trimming was applied.
    """

    graph: DependencyGraph
    packages: List[Package]
    passes: int = 0
    trimmed: bool = False
    _categories: Dict[Tuple[str, str], NodeCategory] = field(
        default_factory=dict, repr=False
    )

    # ------------------------------------------------------------------
    # Classification accessors
    # ------------------------------------------------------------------

    @property
    def removed_count(self) -> int:
        """Number of packages removed by trimming."""
        return len(self.graph) - len(self.packages)

    def node_category(self, package: Package) -> NodeCategory:
        """Return (and cache) the category of ``package``."""
        category = self._categories.get(package.key)
        if category is None:
            category = node_category(package)
            self._categories[package.key] = category
        return category

    def edges(self) -> List[Tuple[Package, Package, EdgeCategory]]:
        """Return surviving edges with their categories, in lockfile order."""
        return [
            (package, target, edge_category(package, target))
            for package in self.packages
            for target in map(self.graph.resolve, package.dependencies)
        ]

    def category_counts(self) -> Dict[NodeCategory, int]:
        """Count presented packages per node category."""
        counts = {category: 0 for category in NodeCategory}
        for package in self.packages:
            counts[self.node_category(package)] += 1
        return counts

    def by_category(self, category: NodeCategory) -> List[Package]:
        """Return presented packages of one category, in lockfile order."""
        return [p for p in self.packages if self.node_category(p) is category]

    def conflicted_crates(self) -> List[CrateVersions]:
        """Return every crate locked at more than one version, by name."""
        crates: List[CrateVersions] = []
        for name in sorted(self.graph.names()):
            group = self.graph.versions_of(name)
            if len(group) < 2:
                continue
            ordered = sorted(group.values(), key=lambda p: version_sort_key(p.version))
            popular = next((p.version for p in ordered if p.popular), None)
            crates.append(CrateVersions(name=name, packages=ordered, popular=popular))
        return crates

    def leverage_edges(self) -> List[Tuple[Package, Package]]:
        """Return ``(package, dependency)`` pairs worth upgrading.

        For every leverage-point package, each direct dependency on a crate
        with several versions is listed.
        """
        pairs: List[Tuple[Package, Package]] = []
        for package in self.by_category(NodeCategory.LEVERAGE_POINT):
            for dependency in package.dependencies:
                target = self.graph.resolve(dependency)
                if target.versions > 1:
                    pairs.append((package, target))
        return pairs

    # ------------------------------------------------------------------
    # Reporting & serialization
    # ------------------------------------------------------------------

    def summary(self) -> str:
        """Generate a human-readable summary of the analysis.

        Example::

            >>> print(result.summary())
            Analysis Summary:
            ==================================================
            Total packages: 312
            Crates with multiple versions: 9
            ...
        """
        counts = self.category_counts()
        crates = self.conflicted_crates()
        lines = [
            "Analysis Summary:",
            "=" * 50,
            f"Total packages: {len(self.graph)}",
            f"Crates with multiple versions: {len(crates)}",
            f"Propagation passes: {self.passes}",
        ]
        if self.trimmed:
            lines.append(f"Removed by trimming: {self.removed_count}")
        lines.append("")
        lines.append("Packages by category:")
        for category in NodeCategory:
            lines.append(f"  {category.value}: {counts[category]}")

        if crates:
            lines.append("")
            lines.append("Crates with multiple versions:")
            for crate in crates:
                majority = crate.popular or "none"
                lines.append(
                    f"  • {crate.name}: {', '.join(crate.versions)} "
                    f"(majority: {majority})"
                )

        return "\n".join(lines)

    def to_json(self, links: Optional[LinkResolver] = None) -> Dict[str, Any]:
        """Return a JSON-serializable representation of the result."""
        links = links or LinkResolver()

        packages = []
        for package in self.packages:
            entry = package.to_json()
            entry["category"] = self.node_category(package).value
            entry["url"] = links.url(package, specific=True)
            packages.append(entry)

        return {
            "summary": {
                "total_packages": len(self.graph),
                "presented_packages": len(self.packages),
                "propagation_passes": self.passes,
                "trimmed": self.trimmed,
                "categories": {
                    category.value: count
                    for category, count in self.category_counts().items()
                },
            },
            "conflicts": [
                {
                    "name": crate.name,
                    "versions": crate.versions,
                    "popular": crate.popular,
                }
                for crate in self.conflicted_crates()
            ],
            "leverage": [
                {
                    "package": package.node_id,
                    "brings_in": target.node_id,
                }
                for package, target in self.leverage_edges()
            ],
            "packages": packages,
            "edges": [
                {
                    "from": package.node_id,
                    "to": target.node_id,
                    "category": category.value,
                }
                for package, target, category in self.edges()
            ],
        }


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------


class ConflictAnalyzer:
    """Run the version-conflict analysis over lockfile records.

    Args:
        trim: Prune packages unrelated to any conflict after classification.

    Example::

        >>> analyzer = ConflictAnalyzer(trim=True)
        >>> result = analyzer.analyze(records)
        >>> result.category_counts()[NodeCategory.CONFLICT_ROOT]
        3
    """

    def __init__(self, *, trim: bool = False) -> None:
        self.trim = trim

    def analyze(self, records: Iterable[PackageRecord]) -> AnalysisResult:
        """Build and classify a graph from raw records.

        Raises:
            UnresolvedDependencyError: A dependency is missing from the
                records.
        """
        with log_stage(logger, "build"):
            graph = DependencyGraph.build(records)
        return self.analyze_graph(graph)

    def analyze_graph(self, graph: DependencyGraph) -> AnalysisResult:
        """Classify an already built graph in place.

        Derived attributes from any earlier run are cleared first, so the
        same graph can be analyzed again (before it is trimmed).
        """
        for package in graph:
            package.reset_analysis()

        with log_stage(logger, "popularity"):
            majority = classify_popularity(graph)
        with log_stage(logger, "propagation"):
            passes = propagate_conflicts(graph)
        with log_stage(logger, "depth"):
            annotate_depth(graph)

        packages = list(graph)
        if self.trim:
            with log_stage(logger, "trim"):
                packages = trim_graph(graph)

        result = AnalysisResult(
            graph=graph,
            packages=packages,
            passes=passes,
            trimmed=self.trim,
        )
        logger.info(
            "Analyzed %d package(s): %d crate(s) with multiple versions, "
            "%d with a majority version",
            len(graph),
            len(result.conflicted_crates()),
            majority,
        )
        return result
