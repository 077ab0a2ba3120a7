"""
Source locator model for depsplit.

Cargo.lock records where each crate came from in a free-form ``source``
string. This module parses that string once into a tagged
:class:`SourceLocator` so that link building never has to re-inspect
prefixes.

Recognized forms::

    ""                                                   workspace crate
    "registry+https://github.com/rust-lang/crates.io-index"
    "sparse+https://index.crates.io/"
    "git+https://github.com/org/repo.git?branch=main#abcdef0"
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from depsplit.constants import GIT_SOURCE_PREFIX, REGISTRY_SOURCE_PREFIX

_SPARSE_SOURCE_PREFIX = "sparse+"


class SourceKind(Enum):
    """Where a crate was resolved from."""

    WORKSPACE = "workspace"
    REGISTRY = "registry"
    GIT = "git"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class SourceLocator:
    """Parsed form of a Cargo.lock ``source`` string.

    Attributes:
        kind: The tagged source kind.
        raw: The original locator, unmodified.
        url: Locator without its ``registry+``/``git+`` prefix.
        scheme: URL scheme of a git source (``https``, ``ssh``...).
        host: Host name of a git source, lower-cased.
        netloc: Network location of a git source as written.
        path: URL path of a git source.
        query: URL query of a git source (``branch=main``...).
        commit: Commit hash taken from the URL fragment.
        error: Parser message when a git URL could not be split.
    """

    kind: SourceKind
    raw: str = ""
    url: str = ""
    scheme: str = ""
    host: str = ""
    netloc: str = ""
    path: str = ""
    query: str = ""
    commit: str = ""
    error: Optional[str] = None

    @classmethod
    def parse(cls, raw: Optional[str]) -> "SourceLocator":
        """Classify a source locator string.

        Never raises: a git URL the parser rejects yields a ``GIT``
        locator with :attr:`error` set, and link building decides whether
        that is fatal.
        """
        raw = raw or ""
        if not raw:
            return cls(kind=SourceKind.WORKSPACE)

        if raw.startswith(REGISTRY_SOURCE_PREFIX) or raw.startswith(
            _SPARSE_SOURCE_PREFIX
        ):
            _, _, url = raw.partition("+")
            return cls(kind=SourceKind.REGISTRY, raw=raw, url=url)

        if raw.startswith(GIT_SOURCE_PREFIX):
            url = raw[len(GIT_SOURCE_PREFIX) :]
            try:
                parts = urlsplit(url)
                host = parts.hostname or ""
            except ValueError as exc:
                return cls(kind=SourceKind.GIT, raw=raw, url=url, error=str(exc))
            return cls(
                kind=SourceKind.GIT,
                raw=raw,
                url=url,
                scheme=parts.scheme.lower(),
                host=host,
                netloc=parts.netloc,
                path=parts.path,
                query=parts.query,
                commit=parts.fragment,
            )

        return cls(kind=SourceKind.UNKNOWN, raw=raw, url=raw)

    @property
    def is_http(self) -> bool:
        """True for git sources served over ``http`` or ``https``."""
        return self.kind is SourceKind.GIT and self.scheme in ("http", "https")

    def base_url(self, *, strip_git_suffix: bool = False) -> str:
        """Return a git URL with query and fragment removed.

        Args:
            strip_git_suffix: Also drop a trailing ``.git`` from the path.
        """
        path = self.path
        if strip_git_suffix and path.endswith(".git"):
            path = path[: -len(".git")]
        return urlunsplit((self.scheme, self.netloc, path, "", ""))

    def __str__(self) -> str:
        return self.raw
