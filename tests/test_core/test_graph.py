"""Unit tests for depsplit.core.graph."""

from __future__ import annotations

import logging

import pytest

from conftest import make_records

from depsplit.core.graph import DependencyGraph
from depsplit.exceptions import UnresolvedDependencyError
from depsplit.models import Dependency, Package, PackageRecord


@pytest.mark.unit
class TestBuild:
    """Tests for DependencyGraph.build."""

    def test_incoming_and_versions(self, build_graph, majority_scenario) -> None:
        graph = build_graph(majority_scenario)

        assert len(graph) == 9
        assert graph.get("log", "0.4.14").incoming == 2
        assert graph.get("log", "0.3.9").incoming == 1
        assert graph.get("cfg-if", "1.0.0").incoming == 2
        assert graph.get("app", "0.1.0").incoming == 0
        assert graph.get("log", "0.3.9").versions == 2
        assert graph.get("serde", "1.0.130").versions == 1

    def test_packages_keep_lockfile_order(self, build_graph, tie_scenario) -> None:
        graph = build_graph(tie_scenario)

        assert [p.node_id for p in graph] == ["A@1", "B@1", "B@2", "C@1"]
        assert graph.names() == ["A", "B", "C"]

    def test_derived_state_starts_clear(self, build_graph, tie_scenario) -> None:
        graph = build_graph(tie_scenario)

        assert all(not p.popular and not p.dep_of_multi for p in graph)
        assert all(p.dep_versions == 0 for p in graph)

    def test_forward_references_resolve(self, build_graph) -> None:
        graph = build_graph([("a", "1", ["b 1"]), ("b", "1", [])])

        assert graph.get("b", "1").incoming == 1

    def test_self_dependency_counted(self, build_graph) -> None:
        graph = build_graph([("a", "1", ["a 1"])])

        assert graph.get("a", "1").incoming == 1
        assert graph.edge_count() == 1

    def test_duplicate_edges_counted(self, build_graph) -> None:
        graph = build_graph([("a", "1", ["b 1", "b 1"]), ("b", "1", [])])

        assert graph.get("b", "1").incoming == 2
        assert graph.edge_count() == 2

    def test_versionless_descriptor_resolves_unique_name(self, build_graph) -> None:
        graph = build_graph([("a", "1", ["b"]), ("b", "2.0.0", [])])

        assert graph.get("a", "1").dependencies == [Dependency("b", "2.0.0")]
        assert graph.get("b", "2.0.0").incoming == 1

    def test_versionless_descriptor_keeps_source(self) -> None:
        records = [
            PackageRecord("a", "1", "", [Dependency("b", None, "registry+x")]),
            PackageRecord("b", "2", "registry+x", []),
        ]

        graph = DependencyGraph.build(records)

        assert graph.get("a", "1").dependencies == [Dependency("b", "2", "registry+x")]

    def test_ambiguous_versionless_descriptor(self, build_graph) -> None:
        specs = [("a", "1", ["b"]), ("b", "1", []), ("b", "2", [])]

        with pytest.raises(UnresolvedDependencyError, match="2 versions") as exc_info:
            build_graph(specs)

        assert exc_info.value.package == "a@1"
        assert exc_info.value.dependency == "b"

    def test_versionless_descriptor_without_package(self, build_graph) -> None:
        with pytest.raises(UnresolvedDependencyError, match="no package"):
            build_graph([("a", "1", ["missing"])])

    def test_unknown_version(self, build_graph) -> None:
        with pytest.raises(UnresolvedDependencyError) as exc_info:
            build_graph([("a", "1", ["b 9"]), ("b", "1", [])])

        assert exc_info.value.version == "9"
        assert "not in the lockfile" in exc_info.value.message

    def test_duplicate_record_keeps_last(self, caplog: pytest.LogCaptureFixture) -> None:
        records = make_records(
            [
                ("a", "1", ["b 1"]),
                ("b", "1", []),
                ("a", "1", []),
            ]
        )

        with caplog.at_level(logging.WARNING, logger="depsplit"):
            graph = DependencyGraph.build(records)

        assert len(graph) == 2
        assert graph.get("a", "1").dependencies == []
        assert graph.get("b", "1").incoming == 0
        assert "Duplicate lockfile entry for a@1" in caplog.text

    def test_empty(self) -> None:
        graph = DependencyGraph.build([])

        assert len(graph) == 0
        assert list(graph.edges()) == []


@pytest.mark.unit
class TestLookup:
    """Tests for lookup helpers."""

    def test_get_missing(self, build_graph, tie_scenario) -> None:
        graph = build_graph(tie_scenario)

        assert graph.get("B", "3") is None
        assert graph.get("Z", "1") is None

    def test_resolve(self, build_graph, tie_scenario) -> None:
        graph = build_graph(tie_scenario)

        assert graph.resolve(Dependency("B", "2")) is graph.get("B", "2")

    def test_resolve_missing(self, build_graph, tie_scenario) -> None:
        graph = build_graph(tie_scenario)

        with pytest.raises(UnresolvedDependencyError):
            graph.resolve(Dependency("B", "3"))

    def test_versions_of_returns_copy(self, build_graph, tie_scenario) -> None:
        graph = build_graph(tie_scenario)

        group = graph.versions_of("B")
        group.clear()

        assert sorted(graph.versions_of("B")) == ["1", "2"]
        assert graph.versions_of("Z") == {}

    def test_edges(self, build_graph, tie_scenario) -> None:
        graph = build_graph(tie_scenario)

        edges = [(p.node_id, t.node_id) for p, t in graph.edges()]

        assert edges == [("A@1", "B@1"), ("C@1", "B@2")]
        assert graph.edge_count() == 2

    def test_contains(self, build_graph, tie_scenario) -> None:
        graph = build_graph(tie_scenario)

        assert ("B", "1") in graph
        assert Package("C", "1") in graph
        assert ("B", "3") not in graph
        assert "B" not in graph

    def test_repr(self, build_graph, tie_scenario) -> None:
        assert repr(build_graph(tie_scenario)) == "DependencyGraph(packages=4, names=3)"
