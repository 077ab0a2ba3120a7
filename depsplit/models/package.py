"""
Package data model for depsplit.

This module defines the graph node used throughout the analysis: one
pinned ``(name, version)`` crate from the lockfile, its resolved
dependency edges, and the derived attributes the analysis stages fill in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from depsplit.models.dependency import Dependency
from depsplit.models.source import SourceKind, SourceLocator


@dataclass(eq=False)
class Package:
    """
    A crate pinned to one version within a dependency graph.

    Identity is the ``(name, version)`` pair: two packages with the same
    key compare equal and hash alike regardless of their derived state.

    Attributes:
        name: Crate name.
        version: Pinned version.
        source: Raw source locator string.
        dependencies: Resolved dependency edges, in lockfile order.
            Duplicates are kept and counted separately.
        versions: Number of packages in the graph sharing ``name``.
        incoming: Number of direct dependents in the whole graph.
        popular: Strictly more dependents than every other version of the
            same crate. Only meaningful when ``versions > 1``.
        dep_of_multi: Transitively beneath a version conflict.
        dep_versions: Largest ``versions`` among the non-popular direct
            dependencies.
    """

    name: str
    version: str
    source: str = ""
    dependencies: List[Dependency] = field(default_factory=list)

    versions: int = 0
    incoming: int = 0
    popular: bool = False
    dep_of_multi: bool = False
    dep_versions: int = 0

    locator: SourceLocator = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Parse the source locator once."""
        self.locator = SourceLocator.parse(self.source)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def key(self) -> Tuple[str, str]:
        """``(name, version)`` key of this package."""
        return (self.name, self.version)

    @property
    def node_id(self) -> str:
        """Stable ``name@version`` identifier."""
        return f"{self.name}@{self.version}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Package):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def is_multi_version(self) -> bool:
        """True when more than one version of this crate is in the graph."""
        return self.versions > 1

    @property
    def is_workspace(self) -> bool:
        """True for crates built from the local workspace."""
        return self.locator.kind is SourceKind.WORKSPACE

    def reset_analysis(self) -> None:
        """Clear every attribute computed by the classification stages."""
        self.popular = False
        self.dep_of_multi = False
        self.dep_versions = 0

    # ------------------------------------------------------------------
    # Reporting & serialization
    # ------------------------------------------------------------------

    def to_json(self) -> Dict[str, Any]:
        """
        Serialize package state to a JSON-compatible dictionary.

        Returns:
            JSON-safe package representation.
        """
        entry: Dict[str, Any] = {
            "name": self.name,
            "version": self.version,
            "source": self.locator.kind.value,
            "versions": self.versions,
            "incoming": self.incoming,
            "dep_of_multi": self.dep_of_multi,
            "dep_versions": self.dep_versions,
            "dependencies": [f"{d.name}@{d.version}" for d in self.dependencies],
        }
        if self.is_multi_version:
            entry["popular"] = self.popular
        return entry

    def __str__(self) -> str:
        return f"{self.name} @ {self.version}"

    def __repr__(self) -> str:
        return (
            "Package("
            f"name={self.name!r}, "
            f"version={self.version!r}, "
            f"versions={self.versions}, "
            f"incoming={self.incoming}, "
            f"popular={self.popular}, "
            f"dep_of_multi={self.dep_of_multi}, "
            f"dep_versions={self.dep_versions}"
            ")"
        )
