"""
Logging for depsplit.

All loggers live under the ``depsplit`` namespace. Library use stays
silent (a :class:`logging.NullHandler` is attached until the CLI calls
:func:`setup_logging`), and the CLI sends diagnostics to stderr so that
reports and DOT output on stdout can be piped.

The ``-v`` flag maps to INFO (stage progress, removed packages) and
``-vv`` to DEBUG, which also times every analysis stage via
:func:`log_stage`.
"""

from __future__ import annotations

import os
import sys
import copy
import time
import logging
import threading
from contextlib import contextmanager
from typing import IO, Iterator, Optional

from depsplit.constants import (
    LOG_DATE_FORMAT,
    LOG_DEFAULT_FORMAT,
    LOG_VERBOSE_FORMAT,
)

_ROOT_NAME = "depsplit"

_setup_lock = threading.Lock()


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name when writing to a terminal.

    Only a copy of each record is modified, so other handlers see the
    plain level name.
    """

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str,
        *,
        datefmt: Optional[str] = None,
        use_color: bool = True,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname)
        if color and self.use_color and self._should_use_color():
            record = copy.copy(record)
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)

    @staticmethod
    def _should_use_color() -> bool:
        """False under ``NO_COLOR`` or ``CI``, or when stderr is not a TTY."""
        if os.environ.get("NO_COLOR") or os.environ.get("CI"):
            return False
        try:
            return sys.stderr.isatty()
        except (AttributeError, OSError):
            return False


def level_for_verbosity(verbose: int) -> int:
    """Map a ``-v`` count to a logging level (0=WARNING, 1=INFO, 2+=DEBUG)."""
    if verbose >= 2:
        return logging.DEBUG
    return logging.INFO if verbose == 1 else logging.WARNING


def setup_logging(
    *,
    level: int = logging.INFO,
    verbose: bool = False,
    stream: Optional[IO[str]] = None,
) -> None:
    """Send depsplit log records to ``stream`` (stderr by default).

    Replaces any handler installed by an earlier call, so it can be called
    once per CLI invocation.

    Args:
        level: Minimum level to emit.
        verbose: Use the detailed format with timestamps and logger names.
        stream: Destination stream.
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        ColoredFormatter(
            LOG_VERBOSE_FORMAT if verbose else LOG_DEFAULT_FORMAT,
            datefmt=LOG_DATE_FORMAT,
            use_color=not os.environ.get("NO_COLOR"),
        )
    )

    with _setup_lock:
        root = logging.getLogger(_ROOT_NAME)
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)
        root.propagate = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger in the ``depsplit`` namespace.

    ``get_logger("graph")`` and ``get_logger("depsplit.graph")`` return the
    same logger; ``get_logger()`` returns the namespace root.
    """
    if not name or name == _ROOT_NAME:
        qualified = _ROOT_NAME
    elif name.startswith(f"{_ROOT_NAME}."):
        qualified = name
    else:
        qualified = f"{_ROOT_NAME}.{name}"

    logger = logging.getLogger(qualified)
    if not logger.handlers and (not logger.parent or not logger.parent.handlers):
        logger.addHandler(logging.NullHandler())
    return logger


@contextmanager
def log_stage(logger: logging.Logger, stage: str) -> Iterator[None]:
    """Log the start and duration of an analysis stage at DEBUG level.

    Example::

        >>> with log_stage(logger, "propagation"):
        ...     propagate_conflicts(graph)
    """
    logger.debug("Stage %s: started", stage)
    started = time.perf_counter()
    try:
        yield
    finally:
        elapsed = (time.perf_counter() - started) * 1000
        logger.debug("Stage %s: finished in %.1f ms", stage, elapsed)
