from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, List, Sequence, Tuple, Union

import pytest

from depsplit.core.graph import DependencyGraph
from depsplit.core.analyzer import AnalysisResult, ConflictAnalyzer
from depsplit.models import Dependency, PackageRecord

REGISTRY = "registry+https://github.com/rust-lang/crates.io-index"

# (name, version, ["dep-name dep-version", ...]) with an optional source
PackageTuple = Union[
    Tuple[str, str, Sequence[str]],
    Tuple[str, str, Sequence[str], str],
]


def make_records(entries: Iterable[PackageTuple]) -> List[PackageRecord]:
    """Turn compact tuples into package records."""
    records = []
    for entry in entries:
        name, version, deps = entry[0], entry[1], entry[2]
        source = entry[3] if len(entry) > 3 else REGISTRY
        records.append(
            PackageRecord(
                name=name,
                version=version,
                source=source,
                dependencies=[Dependency.parse(d) for d in deps],
            )
        )
    return records


@pytest.fixture
def build_graph() -> Callable[[Iterable[PackageTuple]], DependencyGraph]:
    """Return a factory building an unclassified graph from tuples."""

    def _build(entries: Iterable[PackageTuple]) -> DependencyGraph:
        return DependencyGraph.build(make_records(entries))

    return _build


@pytest.fixture
def analyze() -> Callable[..., AnalysisResult]:
    """Return a factory running the full analysis over tuples."""

    def _analyze(entries: Iterable[PackageTuple], *, trim: bool = False) -> AnalysisResult:
        return ConflictAnalyzer(trim=trim).analyze(make_records(entries))

    return _analyze


@pytest.fixture
def tie_scenario() -> List[PackageTuple]:
    """A@1 -> B@1, C@1 -> B@2: two versions of B with one dependent each."""
    return [
        ("A", "1", ["B 1"]),
        ("B", "1", []),
        ("B", "2", []),
        ("C", "1", ["B 2"]),
    ]


@pytest.fixture
def majority_scenario() -> List[PackageTuple]:
    """log has a majority version (0.4) and a minority version (0.3).

    app -> [web, cli, log 0.4]
    web -> [log 0.4, http]
    cli -> [old-term]
    old-term -> [log 0.3]
    log 0.3 -> [cfg-if]
    log 0.4 -> [cfg-if, serde]
    http -> []
    cfg-if -> []
    serde -> []
    """
    return [
        ("app", "0.1.0", ["web 1.0.0", "cli 2.0.0", "log 0.4.14"], ""),
        ("web", "1.0.0", ["log 0.4.14", "http 0.2.5"]),
        ("cli", "2.0.0", ["old-term 0.1.0"]),
        ("old-term", "0.1.0", ["log 0.3.9"]),
        ("log", "0.3.9", ["cfg-if 1.0.0"]),
        ("log", "0.4.14", ["cfg-if 1.0.0", "serde 1.0.130"]),
        ("http", "0.2.5", []),
        ("cfg-if", "1.0.0", []),
        ("serde", "1.0.130", []),
    ]


@pytest.fixture(autouse=True)
def reset_depsplit_logging() -> Iterator[None]:
    """Undo handler and propagation changes made by ``setup_logging``."""
    yield
    root = logging.getLogger("depsplit")
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
    root.propagate = True
