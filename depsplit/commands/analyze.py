"""Analyze command implementation for depsplit.

Reads a ``Cargo.lock`` file and explains why several versions of the same
crate are locked. The command orchestrates three core components:

1. **LockfileLoader** — parses the lockfile into package records.
2. **ConflictAnalyzer** — builds the dependency graph, finds majority
   versions, marks everything beneath a conflict and (optionally) trims
   packages unrelated to any conflict.
3. **Renderers** — print the result as an upgrade report, a Graphviz
   graph, a table, or JSON.

Typical usage::

    # Which crates should be upgraded to drop duplicate versions?
    $ depsplit analyze Cargo.lock

    # Render the conflict graph
    $ depsplit analyze --trim --dot Cargo.lock | dot -Tsvg > deps.svg

    # Link workspace crates to their manifests in the repository
    $ depsplit analyze --dot --baseurl https://github.com/org/repo/blob/main/

    # Machine-readable output
    $ depsplit analyze --format json -o analysis.json
"""

from __future__ import annotations

import sys
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import click

from depsplit.models import NodeCategory
from depsplit.exceptions import DepSplitError
from depsplit.output import render_dot, render_report
from depsplit.context import pass_context, DepSplitContext
from depsplit.constants import DEFAULT_LOCKFILE
from depsplit.core import (
    AnalysisResult,
    ConflictAnalyzer,
    LinkResolver,
    LockfileLoader,
)
from depsplit.utils import (
    colorize_category,
    get_logger,
    print_error,
    print_success,
    print_table,
    print_warning,
    safe_write_file,
)

logger = get_logger("commands.analyze")

FORMATS = ("report", "dot", "table", "json")


@click.command()
@click.argument(
    "lockfile",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=DEFAULT_LOCKFILE,
)
@click.option(
    "--trim/--no-trim",
    default=None,
    help="Remove packages that do not depend transitively on a crate "
    "with more than one version.",
)
@click.option(
    "--dot",
    is_flag=True,
    help="Render the dependency graph in Graphviz dot format "
    "(same as --format dot).",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(FORMATS, case_sensitive=False),
    default="report",
    help="Output format.",
)
@click.option(
    "--baseurl",
    "base_url",
    metavar="URL",
    default=None,
    help="URL prefix for hyperlinks to crates in this workspace, "
    "e.g. https://github.com/<org>/<repo>/blob/master/",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the output to a file instead of stdout.",
)
@pass_context
def analyze(
    ctx: DepSplitContext,
    lockfile: Path,
    trim: Optional[bool],
    dot: bool,
    output_format: str,
    base_url: Optional[str],
    output: Optional[Path],
) -> None:
    """Explain duplicate crate versions in a Cargo.lock file.

    Every package is classified as a leverage point (a single-version
    crate that directly pulls in a minority version of another crate), a
    conflict root, a conflict descendant, a package beneath a conflict, or
    unaffected. The default report lists one line per leverage point and
    multi-version dependency.

    Options given on the command line override the configuration file.

    Args:
        ctx: Depsplit context with configuration and verbosity settings.
        lockfile: Path to the lockfile (default: ``Cargo.lock``).
        trim: Remove packages unrelated to any conflict.
        dot: Shorthand for ``--format dot``.
        output_format: ``report``, ``dot``, ``table`` or ``json``.
        base_url: URL prefix for workspace crates.
        output: Optional destination file.

    Exits:
        0 on success, 1 if the lockfile cannot be analyzed.
    """
    config = ctx.effective_config()
    if dot:
        output_format = "dot"
    output_format = output_format.lower()
    trim = config.trim if trim is None else trim
    links = LinkResolver(
        config.base_url if base_url is None else base_url,
        forge_hosts=config.forge_hosts,
        strict=config.strict_urls,
    )

    if output is not None and output_format == "table":
        print_warning("--output is ignored for the table format")

    try:
        result = _run_analysis(lockfile, trim=trim)
        text = _render(result, output_format, links)

        if text is not None:
            if output is not None:
                written = safe_write_file(output, text)
                print_success(f"Wrote {output_format} output to {written}")
            else:
                click.echo(text, nl=False)

        if ctx.verbose > 0 or output_format == "table":
            _display_summary(result)

    except DepSplitError as e:
        print_error(f"{e}")
        logger.debug("Analysis failed", exc_info=True)
        sys.exit(1)


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


def _run_analysis(lockfile: Path, *, trim: bool) -> AnalysisResult:
    """Load the lockfile and run every analysis stage.

    Raises:
        LockfileError: The lockfile cannot be read or decoded.
        UnresolvedDependencyError: A dependency is missing from the lockfile.
    """
    logger.info("Analyzing %s...", lockfile)

    loader = LockfileLoader()
    records = loader.load_file(lockfile)
    if loader.skipped:
        print_warning(
            f"Skipped {len(loader.skipped)} malformed dependency descriptor(s)"
        )

    return ConflictAnalyzer(trim=trim).analyze(records)


def _render(
    result: AnalysisResult,
    output_format: str,
    links: LinkResolver,
) -> Optional[str]:
    """Render ``result`` as text, or print a table and return ``None``."""
    if output_format == "dot":
        return render_dot(result, links)
    if output_format == "json":
        return json.dumps(result.to_json(links), indent=2) + "\n"
    if output_format == "table":
        _display_table(result)
        return None
    return render_report(result)


# ---------------------------------------------------------------------------
# Display renderers
# ---------------------------------------------------------------------------


def _display_table(result: AnalysisResult) -> None:
    """Render crates with multiple versions as a Rich-formatted table.

    One row per crate; versions are listed oldest first with the majority
    version highlighted, followed by the leverage points that pull in a
    version of the crate.

    Example::

        ┏━━━━━━━━━┳━━━━━━━━━━━━━━━━━━━━━┳━━━━━━━━━━━━━━━━━━━━━━━━━━━┓
        ┃ Crate   ┃ Versions            ┃ Brought in by             ┃
        ┡━━━━━━━━━╇━━━━━━━━━━━━━━━━━━━━━╇━━━━━━━━━━━━━━━━━━━━━━━━━━━┩
        │ tokio   │ 0.2.25, 1.12.0      │ tokio-util @ 0.6.9 → 0.2… │
        └─────────┴─────────────────────┴───────────────────────────┘
    """
    crates = result.conflicted_crates()
    if not crates:
        print_success("Every crate is locked at a single version")
        return

    brought_in: Dict[str, List[str]] = {}
    for package, target in result.leverage_edges():
        brought_in.setdefault(target.name, []).append(
            f"{package.name} @ {package.version} → {target.version}"
        )

    data: List[Dict[str, Any]] = []
    for crate in crates:
        versions = [
            f"[bold]{p.version}[/bold]" if p.popular else p.version
            for p in crate.packages
        ]
        role = colorize_category(
            (
                NodeCategory.CONFLICT_ROOT
                if crate.roots
                else NodeCategory.CONFLICT_DESCENDANT
            ).value
        )
        data.append(
            {
                "Crate": crate.name,
                "Versions": ", ".join(versions),
                "Role": role,
                "Brought in by": "\n".join(brought_in.get(crate.name, []))
                or "[dim]-[/dim]",
            }
        )

    column_styles: Dict[str, Dict[str, Any]] = {
        "Crate": {"style": "bold cyan", "no_wrap": True},
        "Versions": {"justify": "left"},
        "Role": {"justify": "center", "no_wrap": True},
        "Brought in by": {"justify": "left", "no_wrap": False},
    }

    print_table(
        data,
        title="Crates With Multiple Versions",
        column_styles=column_styles,
        show_row_lines=True,
    )


def _display_summary(result: AnalysisResult) -> None:
    """Print the analysis summary to stderr, keeping stdout machine-readable."""
    click.echo("\n" + result.summary(), err=True)
