"""
Unified data model exports for depsplit.

This module re-exports all core data models to provide a stable and
convenient public API. Users can import models directly from
``depsplit.models`` instead of individual submodules.

Example:
    >>> from depsplit.models import Package, Dependency, NodeCategory
"""

from __future__ import annotations

from depsplit.models.package import Package
from depsplit.models.record import PackageRecord
from depsplit.models.dependency import Dependency
from depsplit.models.source import SourceKind, SourceLocator
from depsplit.models.category import EdgeCategory, NodeCategory

__all__ = [
    "Package",
    "PackageRecord",
    "Dependency",
    "SourceKind",
    "SourceLocator",
    "NodeCategory",
    "EdgeCategory",
]
