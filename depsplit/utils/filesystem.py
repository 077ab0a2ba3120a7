"""
File helpers for depsplit.

Lockfiles are read with a size cap and rendered output is written through
a temporary file in the destination directory, so an interrupted run never
leaves a half-written ``.dot`` or ``.json`` behind. Every failure surfaces
as :class:`~depsplit.exceptions.FileOperationError`.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from depsplit.utils.logger import get_logger
from depsplit.exceptions import FileOperationError
from depsplit.constants import MAX_FILE_SIZE

logger = get_logger("filesystem")

PathLike = Union[str, Path]


def _validated_file(path: Path) -> Path:
    """Return ``path`` resolved, or raise if it is not an existing file."""
    if not path.exists():
        problem = "File not found"
    elif not path.is_file():
        problem = "Not a file"
    else:
        return path.resolve()
    raise FileOperationError(
        f"{problem}: {path}",
        file_path=str(path),
        operation="read",
    )


def _atomic_write(target: Path, content: str) -> None:
    """Write ``content`` next to ``target`` and move it into place."""
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, name = tempfile.mkstemp(
        dir=str(target.parent),
        prefix=f".{target.name}.",
        suffix=".tmp",
    )
    temp_path = Path(name)

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(content)
            fh.flush()
            os.fsync(fh.fileno())
        temp_path.replace(target)
    except OSError as exc:
        try:
            temp_path.unlink(missing_ok=True)
        except OSError as cleanup_exc:
            logger.warning("Could not remove %s: %s", temp_path, cleanup_exc)
        raise FileOperationError(
            f"Atomic write failed: {exc}",
            file_path=str(target),
            operation="write",
            original_error=exc,
        ) from exc


def safe_read_file(
    file_path: PathLike,
    *,
    max_size: Optional[int] = MAX_FILE_SIZE,
    encoding: str = "utf-8",
) -> str:
    """Read a text file, refusing anything larger than ``max_size`` bytes.

    Args:
        file_path: File to read.
        max_size: Size limit in bytes; ``None`` disables it.
        encoding: Text encoding.

    Raises:
        FileOperationError: Missing, too large, unreadable or undecodable.
    """
    path = _validated_file(Path(file_path))

    size = path.stat().st_size
    if max_size is not None and size > max_size:
        raise FileOperationError(
            f"File too large: {size} bytes (max {max_size})",
            file_path=str(path),
            operation="read",
        )

    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise FileOperationError(
            f"Failed to read file: {exc}",
            file_path=str(path),
            operation="read",
            original_error=exc,
        ) from exc


def safe_write_file(file_path: PathLike, content: str) -> Path:
    """Atomically write ``content``, creating missing parent directories.

    Returns:
        The resolved destination path.
    """
    path = Path(file_path).expanduser()
    _atomic_write(path, content)
    logger.debug("Wrote %d characters to %s", len(content), path)
    return path.resolve()
