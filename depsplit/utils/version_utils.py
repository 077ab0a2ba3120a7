"""
Version ordering utilities for depsplit.

Cargo versions are SemVer strings; most of them are also valid PEP 440
versions once normalized (``1.0.0-alpha.1`` parses as ``1.0.0a1``). This
module orders the versions of a crate for display, falling back to plain
string ordering for anything :mod:`packaging` rejects.
"""

from __future__ import annotations

from typing import Optional, Tuple

from packaging.version import InvalidVersion, Version, parse


def parse_version(value: str) -> Optional[Version]:
    """Parse a version string, returning ``None`` if it is not PEP 440 compatible.

    Examples:
        >>> parse_version("1.2.3")
        <Version('1.2.3')>
        >>> parse_version("not-a-version") is None
        True
    """
    try:
        parsed = parse(value)
    except InvalidVersion:
        return None
    return parsed if isinstance(parsed, Version) else None


def version_sort_key(value: str) -> Tuple[int, object, str]:
    """Sort key placing parseable versions first, in version order.

    Unparseable versions sort after every parseable one, by string.
    """
    parsed = parse_version(value)
    if parsed is None:
        return (1, (), value)
    return (0, parsed, value)
