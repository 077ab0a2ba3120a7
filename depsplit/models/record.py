"""Raw package record produced by the lockfile loader."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from depsplit.models.dependency import Dependency


@dataclass
class PackageRecord:
    """One ``[[package]]`` entry of a lockfile, before graph construction.

    Attributes:
        name: Crate name.
        version: Pinned crate version.
        source: Source locator string (empty for workspace crates).
        dependencies: Parsed dependency descriptors, in lockfile order.
    """

    name: str
    version: str
    source: str = ""
    dependencies: List[Dependency] = field(default_factory=list)
