"""
Exceptions raised by depsplit.

Every error derives from :class:`DepSplitError`, which carries a short
message plus a ``details`` mapping (file, entry index, package...) that is
appended when the error is printed::

    Invalid TOML: Expected '=' after a key (file=Cargo.lock)

The CLI prints these errors and exits with status 1; anything else is
reported as an unexpected error.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

#: Longest value kept in ``details`` before it is shortened.
_MAX_DETAIL_LENGTH = 200


def _details(**values: Any) -> Dict[str, Any]:
    """Build a details mapping, skipping ``None`` values."""
    return {key: value for key, value in values.items() if value is not None}


def _shorten(text: str) -> str:
    if len(text) <= _MAX_DETAIL_LENGTH:
        return text
    return text[:_MAX_DETAIL_LENGTH] + "..."


class DepSplitError(Exception):
    """Base class for depsplit errors.

    Args:
        message: Human-readable description.
        details: Context shown after the message as ``key=value`` pairs.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        self.details: Dict[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}("
            f"message={self.message!r}, details={self.details!r})"
        )


class ConfigError(DepSplitError):
    """A configuration file is missing, unreadable or has invalid options."""

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        super().__init__(message, _details(path=config_path, option=option))
        self.config_path = config_path
        self.option = option


class LockfileError(DepSplitError):
    """A lockfile cannot be read, is not TOML, or has a malformed entry.

    Args:
        message: Error description.
        file_path: Lockfile path, when reading from disk.
        entry: Index of the offending ``[[package]]`` table.
    """

    __slots__ = ("file_path", "entry")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        entry: Optional[int] = None,
    ) -> None:
        super().__init__(message, _details(file=file_path, entry=entry))
        self.file_path = file_path
        self.entry = entry


class UnresolvedDependencyError(DepSplitError):
    """A dependency names a package the lockfile does not contain.

    Cargo never writes such a lockfile, so the analysis stops.

    Args:
        message: Error description.
        package: ``name@version`` of the depending package.
        dependency: Name of the dependency.
        version: Requested version, if the descriptor had one.
    """

    __slots__ = ("package", "dependency", "version")

    def __init__(
        self,
        message: str,
        *,
        package: Optional[str] = None,
        dependency: Optional[str] = None,
        version: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            _details(package=package, dependency=dependency, version=version),
        )
        self.package = package
        self.dependency = dependency
        self.version = version


class SourceURLError(DepSplitError):
    """A git source locator has no usable URL (only raised in strict mode)."""

    __slots__ = ("source",)

    def __init__(self, message: str, *, source: Optional[str] = None) -> None:
        super().__init__(
            message,
            _details(source=_shorten(source) if source is not None else None),
        )
        self.source = source


class FileOperationError(DepSplitError):
    """Reading the lockfile or writing rendered output failed.

    Args:
        message: Error description.
        file_path: File involved.
        operation: ``read`` or ``write``.
        original_error: Underlying exception, if any.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(
            message,
            _details(
                path=file_path,
                operation=operation,
                error=str(original_error) if original_error else None,
            ),
        )
        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error
