"""Configuration file support for depsplit.

Options can be stored in either of two places in the working directory:

- ``depsplit.toml`` with a ``[depsplit]`` table
- ``pyproject.toml`` with a ``[tool.depsplit]`` table

An explicit file given with ``--config`` (or ``DEPSPLIT_CONFIG``) replaces
the lookup. Command-line options override file values, which override the
defaults below.

Example (``depsplit.toml``)::

    [depsplit]
    base_url = "https://github.com/org/repo/blob/main/"
    trim = true
    forge_hosts = ["github.com", "gitlab.com"]
    strict_urls = false
"""

from __future__ import annotations

from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

import tomli as tomllib

from depsplit.exceptions import ConfigError
from depsplit.utils.logger import get_logger
from depsplit.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_FORGE_HOSTS,
    DEFAULT_STRICT_URLS,
    DEFAULT_TRIM,
)

logger = get_logger("config")

#: File names searched in the working directory, in order.
CONFIG_FILE = "depsplit.toml"
PYPROJECT_FILE = "pyproject.toml"

#: Option name -> expected TOML type.
OPTION_TYPES: Mapping[str, type] = {
    "base_url": str,
    "trim": bool,
    "forge_hosts": list,
    "strict_urls": bool,
}


@dataclass
class DepSplitConfig:
    """Validated depsplit options.

    Attributes:
        base_url: Prefix for links to workspace crates
            (``<base_url>/<crate>/Cargo.toml``); empty disables them.
        trim: Drop packages unrelated to any version conflict.
        forge_hosts: Git hosts whose URLs accept ``/tree/<commit>``.
        strict_urls: Fail on a git source URL that cannot be parsed
            instead of linking to a crates.io search.
        source_path: File the options were read from, ``None`` for defaults.
    """

    base_url: str = DEFAULT_BASE_URL
    trim: bool = DEFAULT_TRIM
    forge_hosts: Tuple[str, ...] = tuple(DEFAULT_FORGE_HOSTS)
    strict_urls: bool = DEFAULT_STRICT_URLS

    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return the user-facing options (without ``source_path``)."""
        return {
            "base_url": self.base_url,
            "trim": self.trim,
            "forge_hosts": list(self.forge_hosts),
            "strict_urls": self.strict_urls,
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Return the configuration file to use, or ``None``.

    Args:
        explicit_path: File named on the command line; it must exist.

    Raises:
        ConfigError: ``explicit_path`` is not an existing file.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        return resolved

    cwd = Path.cwd()
    candidate = cwd / CONFIG_FILE
    if candidate.is_file():
        logger.debug("Using %s", candidate)
        return candidate

    candidate = cwd / PYPROJECT_FILE
    if candidate.is_file() and _pyproject_has_depsplit_section(candidate):
        logger.debug("Using [tool.depsplit] from %s", candidate)
        return candidate

    return None


def _pyproject_has_depsplit_section(path: Path) -> bool:
    """True if ``path`` parses and has a ``[tool.depsplit]`` table."""
    try:
        document = _read_toml(path)
    except ConfigError as exc:
        logger.debug("Ignoring %s: %s", path, exc)
        return False
    tool = document.get("tool", {})
    return isinstance(tool, dict) and "depsplit" in tool


def load_config(config_path: Optional[Path] = None) -> DepSplitConfig:
    """Find, read and validate the configuration.

    Args:
        config_path: Explicit file; ``None`` searches the working directory.

    Returns:
        The options, or defaults when no file is found.

    Raises:
        ConfigError: The file is unreadable, not TOML, or has unknown keys
            or wrongly typed values.
    """
    path = discover_config_file(config_path)
    if path is None:
        logger.debug("No configuration file; using defaults")
        return DepSplitConfig()

    logger.info("Loading configuration from %s", path)
    document = _read_toml(path)
    if path.name == PYPROJECT_FILE:
        section = document.get("tool", {}).get("depsplit", {})
    else:
        section = document.get("depsplit", {})

    config = _parse_section(section, config_path=str(path)) if section else DepSplitConfig()
    config.source_path = path
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Parse a TOML file.

    Raises:
        ConfigError: The file cannot be opened or decoded.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> DepSplitConfig:
    """Validate a ``[depsplit]`` table and build the options from it.

    Raises:
        ConfigError: Unknown keys or values of the wrong type.
    """
    unknown = sorted(set(section) - set(OPTION_TYPES))
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(unknown)}",
            config_path=config_path,
        )

    for key, value in section.items():
        expected = OPTION_TYPES[key]
        if not isinstance(value, expected):
            raise ConfigError(
                f"{key} must be a {expected.__name__}, got {type(value).__name__}",
                config_path=config_path,
                option=key,
            )

    config = DepSplitConfig()
    config.base_url = section.get("base_url", config.base_url)
    config.trim = section.get("trim", config.trim)
    config.strict_urls = section.get("strict_urls", config.strict_urls)

    if "forge_hosts" in section:
        hosts = section["forge_hosts"]
        if not all(isinstance(host, str) and host for host in hosts):
            raise ConfigError(
                "forge_hosts must be a list of non-empty strings",
                config_path=config_path,
                option="forge_hosts",
            )
        config.forge_hosts = tuple(host.lower() for host in hosts)

    return config
