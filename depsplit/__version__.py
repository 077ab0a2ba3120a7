"""
depsplit version information.

Single source of truth for the package version, read by the build backend
(``[tool.setuptools.dynamic]``) and by ``depsplit --version``.
"""

from __future__ import annotations

__version__ = "0.3.0"
