"""
Dependency descriptor model for depsplit.

Each entry of a Cargo.lock ``dependencies`` array is a descriptor string::

    "vector_utils 0.1.0 (registry+https://github.com/rust-lang/crates.io-index)"
    "serde 1.0.130"
    "libc"

Version and source are omitted by Cargo when they are unambiguous within
the lockfile. After graph construction every stored dependency carries a
concrete version and acts as a ``(name, version)`` lookup key into the
graph; it never holds the target package itself.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from depsplit.constants import DEPENDENCY_DESCRIPTOR_PATTERN

_DESCRIPTOR_RE = re.compile(DEPENDENCY_DESCRIPTOR_PATTERN)


@dataclass(frozen=True)
class Dependency:
    """A dependency edge declared by a package.

    Attributes:
        name: Name of the depended-upon crate.
        version: Pinned version, or ``None`` before resolution when the
            lockfile omitted it.
        source: Source locator from the descriptor. Ignored for resolution.
    """

    name: str
    version: Optional[str] = None
    source: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> Optional["Dependency"]:
        """Parse a descriptor string.

        Returns:
            The parsed dependency, or ``None`` if ``text`` does not match
            the ``name [version] [(source)]`` grammar.

        Example::

            >>> Dependency.parse("libc 0.2.99 (registry+https://x)")
            Dependency(name='libc', version='0.2.99', source='registry+https://x')
        """
        match = _DESCRIPTOR_RE.match(text.strip())
        if not match:
            return None
        return cls(
            name=match.group("name"),
            version=match.group("version"),
            source=match.group("source"),
        )

    @property
    def key(self) -> Tuple[str, Optional[str]]:
        """Lookup key into the dependency graph."""
        return (self.name, self.version)

    def pinned(self, version: str) -> "Dependency":
        """Return a copy of this dependency pinned to ``version``."""
        return replace(self, version=version)

    def __str__(self) -> str:
        text = self.name if self.version is None else f"{self.name} {self.version}"
        if self.source:
            text += f" ({self.source})"
        return text
