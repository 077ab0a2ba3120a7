"""Mapping of analysis results to display categories and hyperlinks.

Everything here is a pure function of package attributes (plus the link
configuration); nothing is mutated. Renderers turn the returned categories
into colors and line widths.
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from depsplit.utils.logger import get_logger
from depsplit.exceptions import SourceURLError
from depsplit.models import EdgeCategory, NodeCategory, Package, SourceKind
from depsplit.constants import (
    CRATES_IO_CRATE_URL,
    CRATES_IO_SEARCH_URL,
    DEFAULT_FORGE_HOSTS,
    WORKSPACE_MANIFEST,
)

logger = get_logger("presentation")

__all__ = [
    "node_category",
    "edge_category",
    "LinkResolver",
    "package_url",
]


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


def node_category(package: Package) -> NodeCategory:
    """Classify a package; the first matching rule wins.

    ========================  ==============================================
    LEVERAGE_POINT            one version, ``dep_versions > 1``, unmarked
    CONFLICT_ROOT             several versions, unmarked
    CONFLICT_DESCENDANT       several versions, marked
    MINORITY_ADJACENT         one version, marked
    UNAFFECTED                anything else
    ========================  ==============================================
    """
    if package.versions == 1 and package.dep_versions > 1 and not package.dep_of_multi:
        return NodeCategory.LEVERAGE_POINT
    if package.versions > 1:
        if package.dep_of_multi:
            return NodeCategory.CONFLICT_DESCENDANT
        return NodeCategory.CONFLICT_ROOT
    if package.versions == 1 and package.dep_of_multi:
        return NodeCategory.MINORITY_ADJACENT
    return NodeCategory.UNAFFECTED


def edge_category(source: Package, target: Package) -> EdgeCategory:
    """Classify the dependency edge ``source -> target``."""
    if source.versions == 1 and not source.dep_of_multi and target.versions > 1:
        if target.popular:
            return EdgeCategory.MAJORITY_LINK
        return EdgeCategory.MINORITY_LINK
    if target.versions > 1:
        return EdgeCategory.TAINT_PROPAGATION
    if source.versions > 1:
        return EdgeCategory.SOURCE_DIVERGES
    return EdgeCategory.NEUTRAL


# ---------------------------------------------------------------------------
# Hyperlinks
# ---------------------------------------------------------------------------


class LinkResolver:
    """Build the most useful URL for a package.

    Args:
        base_url: Prefix for workspace crates; the link becomes
            ``<base_url>/<name>/Cargo.toml``. Empty disables workspace links.
        forge_hosts: Hosts whose git URLs support ``/tree/<commit>`` links.
        strict: Raise :class:`SourceURLError` for a git source whose URL
            cannot be parsed instead of falling back to a search link.

    Example::

        >>> links = LinkResolver(base_url="https://github.com/org/repo/blob/main")
        >>> links.url(package, specific=True)
        'https://crates.io/crates/serde/1.0.130'
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        forge_hosts: Iterable[str] = DEFAULT_FORGE_HOSTS,
        strict: bool = False,
    ) -> None:
        self.base_url = base_url or ""
        self.forge_hosts: Tuple[str, ...] = tuple(h.lower() for h in forge_hosts)
        self.strict = strict

    def url(self, package: Package, *, specific: bool) -> str:
        """Return a link to the package.

        Args:
            package: Package to link.
            specific: Link to this exact version rather than the project.
        """
        locator = package.locator

        if (
            locator.kind is SourceKind.GIT
            and locator.error is not None
            and locator.url.startswith("http")
        ):
            if self.strict:
                raise SourceURLError(
                    f"Cannot parse git source of {package.node_id}",
                    source=locator.raw,
                )
            logger.warning(
                "Cannot parse git source of %s (%s); linking to search",
                package.node_id,
                locator.error,
            )
            return self._search_url(package)

        if locator.is_http:
            if locator.host in self.forge_hosts and locator.commit:
                url = locator.base_url(strip_git_suffix=specific)
                if specific:
                    url = f"{url}/tree/{locator.commit}"
                return url
            return locator.url

        if locator.kind is SourceKind.WORKSPACE and self.base_url:
            separator = "" if self.base_url.endswith("/") else "/"
            return f"{self.base_url}{separator}{package.name}/{WORKSPACE_MANIFEST}"

        if locator.kind is SourceKind.REGISTRY:
            url = f"{CRATES_IO_CRATE_URL}{package.name}"
            if specific:
                url = f"{url}/{package.version}"
            return url

        return self._search_url(package)

    @staticmethod
    def _search_url(package: Package) -> str:
        return f"{CRATES_IO_SEARCH_URL}{package.name}"


def package_url(
    package: Package,
    *,
    specific: bool,
    base_url: Optional[str] = None,
) -> str:
    """Shortcut for ``LinkResolver(base_url).url(package, specific=...)``."""
    return LinkResolver(base_url or "").url(package, specific=specific)
