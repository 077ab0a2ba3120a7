"""Cargo.lock loader.

Reads a Cargo.lock file (TOML) and turns every ``[[package]]`` table into a
:class:`~depsplit.models.PackageRecord`, parsing each dependency descriptor
on the way:

- ``"name version (source)"`` — lockfile format v1/v2
- ``"name version"`` — v3, when the source is unambiguous
- ``"name"`` — v3, when only one version of the crate is locked

A descriptor that matches none of these forms is skipped with a warning;
it never becomes a dependency edge. Anything that prevents reading the
lockfile as a whole raises :class:`~depsplit.exceptions.LockfileError`.

Typical usage::

    from depsplit.core.loader import LockfileLoader

    loader = LockfileLoader()
    records = loader.load_file("Cargo.lock")
    print(f"{len(records)} packages, {len(loader.skipped)} skipped descriptors")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import tomli as tomllib

from depsplit.utils import get_logger, safe_read_file
from depsplit.models import Dependency, PackageRecord
from depsplit.exceptions import FileOperationError, LockfileError


class LockfileLoader:
    """Loader for Cargo.lock files.

    The loader remembers the descriptors it had to skip during the last
    load in :attr:`skipped` so callers can report them.

    Example::

        >>> loader = LockfileLoader()
        >>> records = loader.load_string(content, source_name="inline")
        >>> records[0].name
        'anyhow'
    """

    def __init__(self) -> None:
        """Initialise the loader with empty state."""
        self.logger = get_logger("loader")
        self.skipped: List[str] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load_file(self, file_path: Union[str, Path]) -> List[PackageRecord]:
        """Read and parse a lockfile from disk.

        Args:
            file_path: Path to ``Cargo.lock``.

        Returns:
            Package records in file order.

        Raises:
            LockfileError: File cannot be read or is not a valid lockfile.
        """
        path = Path(file_path)
        self.logger.info("Loading lockfile %s", path)

        try:
            content = safe_read_file(path)
        except FileOperationError as exc:
            raise LockfileError(
                f"Cannot read lockfile: {exc.message}",
                file_path=str(path),
            ) from exc

        return self.load_string(content, source_name=str(path))

    def load_string(
        self,
        content: str,
        *,
        source_name: Optional[str] = None,
    ) -> List[PackageRecord]:
        """Parse lockfile content.

        Args:
            content: TOML text of a lockfile.
            source_name: Name used in error messages and logs.

        Returns:
            Package records in document order.

        Raises:
            LockfileError: Content is not valid TOML or a package table is
                malformed.
        """
        self.skipped = []

        try:
            document = tomllib.loads(content)
        except tomllib.TOMLDecodeError as exc:
            raise LockfileError(
                f"Invalid TOML: {exc}",
                file_path=source_name,
            ) from exc

        self._check_format_version(document, source_name)

        tables = document.get("package", [])
        if not isinstance(tables, list):
            raise LockfileError(
                "Expected an array of [[package]] tables",
                file_path=source_name,
            )

        records = [
            self._parse_package(table, index, source_name)
            for index, table in enumerate(tables)
        ]

        self.logger.debug(
            "Loaded %d package(s) from %s", len(records), source_name or "<string>"
        )
        if self.skipped:
            self.logger.warning(
                "Skipped %d malformed dependency descriptor(s)", len(self.skipped)
            )
        return records

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_format_version(
        self,
        document: Dict[str, Any],
        source_name: Optional[str],
    ) -> None:
        """Log the lockfile format version; newer formats are not rejected."""
        version = document.get("version")
        if version is None:
            self.logger.debug("Lockfile without format version (v1/v2)")
        elif isinstance(version, int) and version > 4:
            self.logger.warning(
                "Lockfile %s uses format version %d; results may be incomplete",
                source_name or "<string>",
                version,
            )
        else:
            self.logger.debug("Lockfile format version %s", version)

    def _parse_package(
        self,
        table: Any,
        index: int,
        source_name: Optional[str],
    ) -> PackageRecord:
        """Convert one ``[[package]]`` table into a record."""
        if not isinstance(table, dict):
            raise LockfileError(
                "Package entry is not a table",
                file_path=source_name,
                entry=index,
            )

        name = table.get("name")
        version = table.get("version")
        if not isinstance(name, str) or not name:
            raise LockfileError(
                "Package entry has no name",
                file_path=source_name,
                entry=index,
            )
        if not isinstance(version, str) or not version:
            raise LockfileError(
                f"Package {name!r} has no version",
                file_path=source_name,
                entry=index,
            )

        source = table.get("source", "")
        if not isinstance(source, str):
            raise LockfileError(
                f"Package {name!r} has a non-string source",
                file_path=source_name,
                entry=index,
            )

        descriptors = table.get("dependencies", [])
        if not isinstance(descriptors, list):
            raise LockfileError(
                f"Dependencies of {name!r} are not an array",
                file_path=source_name,
                entry=index,
            )

        return PackageRecord(
            name=name,
            version=version,
            source=source,
            dependencies=self._parse_dependencies(name, descriptors),
        )

    def _parse_dependencies(self, owner: str, descriptors: List[Any]) -> List[Dependency]:
        """Parse descriptor strings, skipping the malformed ones."""
        dependencies: List[Dependency] = []

        for descriptor in descriptors:
            parsed = (
                Dependency.parse(descriptor) if isinstance(descriptor, str) else None
            )
            if parsed is None:
                self.logger.warning(
                    "Failed to parse dependency %r of %s", descriptor, owner
                )
                self.skipped.append(str(descriptor))
                continue
            dependencies.append(parsed)

        return dependencies
