"""
Support for ``python -m depsplit``, equivalent to the ``depsplit`` script.
"""

from __future__ import annotations

import sys


def _print_startup_error(exc: ImportError) -> None:
    """Explain on stderr why the CLI could not be imported.

    Usually a missing dependency (click, rich, tomli, packaging) in the
    active environment.
    """
    try:
        from depsplit.__version__ import __version__ as version
    except ImportError:
        version = "<unknown>"

    sys.stderr.write(
        "depsplit CLI could not be started.\n"
        f"Python version : {sys.version}\n"
        f"depsplit version: {version}\n"
        f"ImportError: {exc}\n"
    )


def main() -> int:
    """Import and run the CLI, returning its exit code."""
    try:
        from depsplit.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return 1

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
