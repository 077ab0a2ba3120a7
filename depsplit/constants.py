"""
Centralized constants for depsplit.

This module defines immutable values used across depsplit, including
crate index URLs, lockfile grammar, recognized forges, configuration
defaults and logging formats. All values are intended to be treated as
read-only.
"""

from typing import Final, Sequence

# ---------------------------------------------------------------------------
# crates.io endpoints
# ---------------------------------------------------------------------------

#: Base URL for crate pages on crates.io.
CRATES_IO_CRATE_URL: Final[str] = "https://crates.io/crates/"

#: Search URL used when a crate's source cannot be linked directly.
CRATES_IO_SEARCH_URL: Final[str] = "https://crates.io/search?q="

# ---------------------------------------------------------------------------
# Source locators
# ---------------------------------------------------------------------------

#: Prefix of source locators for crates pulled from a registry.
REGISTRY_SOURCE_PREFIX: Final[str] = "registry"

#: Prefix of source locators for crates pulled from a git repository.
GIT_SOURCE_PREFIX: Final[str] = "git+"

#: Hosts whose git URLs can be turned into browsable ``/tree/<hash>`` links.
DEFAULT_FORGE_HOSTS: Final[Sequence[str]] = ("github.com",)

#: Manifest file appended to workspace crate links.
WORKSPACE_MANIFEST: Final[str] = "Cargo.toml"

# ---------------------------------------------------------------------------
# Lockfile grammar
# ---------------------------------------------------------------------------

#: Default lockfile name looked up by the CLI.
DEFAULT_LOCKFILE: Final[str] = "Cargo.lock"

#: Dependency descriptor grammar: ``name version (source)``.
#: Version and source are optional (Cargo.lock v3 omits both when the
#: name is unambiguous).
DEPENDENCY_DESCRIPTOR_PATTERN: Final[str] = (
    r"^(?P<name>\S+)(?:\s+(?P<version>[^\s(]\S*))?(?:\s+\((?P<source>[^)]+)\))?$"
)

# ---------------------------------------------------------------------------
# Configuration defaults
# ---------------------------------------------------------------------------

#: Prune packages that are irrelevant to any version conflict.
DEFAULT_TRIM: Final[bool] = False

#: URL prefix for in-workspace crates (empty disables workspace links).
DEFAULT_BASE_URL: Final[str] = ""

#: Treat an unparseable git source URL as a fatal error.
DEFAULT_STRICT_URLS: Final[bool] = False

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed file size (in bytes) when reading lockfiles.
MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10 MB

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
