"""Unit tests for depsplit.output.dot."""

from __future__ import annotations

import pytest

from depsplit.core.presentation import LinkResolver
from depsplit.output.dot import render_dot

TIE_DOT = """\
digraph crates {
  "A@1" [id="A"; URL="https://crates.io/crates/A/1"; color="blue"; style="filled"; fillcolor="yellow"];
  subgraph "clusterB" {
    id = "B";
    rank = "max";
    label = "B";
    URL = "https://crates.io/crates/B";
    "B@1" [id="B@1"; label="1"; shape="box"; URL="https://crates.io/crates/B/1"; color="red"];
    "B@2" [id="B@2"; label="2"; shape="box"; URL="https://crates.io/crates/B/2"; color="red"];
  }
  "C@1" [id="C"; URL="https://crates.io/crates/C/1"; color="blue"; style="filled"; fillcolor="yellow"];
  "A@1" -> "B@1" [color="red"; penwidth=3];
  "C@1" -> "B@2" [color="red"; penwidth=3];
}
"""


@pytest.mark.unit
class TestRenderDot:
    """Tests for Graphviz output."""

    def test_tie_scenario(self, analyze, tie_scenario) -> None:
        assert render_dot(analyze(tie_scenario), LinkResolver()) == TIE_DOT

    def test_workspace_node_label_and_link(self, analyze, majority_scenario) -> None:
        links = LinkResolver("https://github.com/org/repo/blob/master/")

        dot = render_dot(analyze(majority_scenario), links)

        assert (
            '  "app@0.1.0" [id="app"; label="app"; '
            'URL="https://github.com/org/repo/blob/master/app/Cargo.toml"];\n'
        ) in dot

    def test_edge_styles(self, analyze, majority_scenario) -> None:
        dot = render_dot(analyze(majority_scenario), LinkResolver())

        assert '  "app@0.1.0" -> "log@0.4.14" [color="blue"; penwidth=2];\n' in dot
        assert '  "log@0.3.9" -> "cfg-if@1.0.0" [color="blue"];\n' in dot
        assert '  "app@0.1.0" -> "web@1.0.0" [penwidth=1.5];\n' in dot

    def test_minority_adjacent_node(self, analyze, majority_scenario) -> None:
        dot = render_dot(analyze(majority_scenario), LinkResolver())

        assert (
            '  "cfg-if@1.0.0" [id="cfg-if"; '
            'URL="https://crates.io/crates/cfg-if/1.0.0"; color="yellow"];\n'
        ) in dot

    def test_trimmed_graph_omits_removed_packages(self, analyze, majority_scenario) -> None:
        dot = render_dot(analyze(majority_scenario, trim=True), LinkResolver())

        assert '"serde@1.0.130"' not in dot
        assert '"http@0.2.5"' not in dot
        assert '"cfg-if@1.0.0"' not in dot
        assert 'subgraph "clusterlog"' in dot

    def test_conflict_descendant_and_taint_edge(self, analyze) -> None:
        specs = [
            ("a", "1", ["x 1"]),
            ("b", "1", ["x 2"]),
            ("c", "1", ["x 2"]),
            ("x", "1", ["y 1"]),
            ("x", "2", ["y 2"]),
            ("y", "1", []),
            ("y", "2", []),
        ]

        dot = render_dot(analyze(specs), LinkResolver())

        assert '"y@1" [id="y@1"; label="1"; shape="box"; ' in dot
        assert 'URL="https://crates.io/crates/y/1"; color="orange"];' in dot
        assert '  "x@1" -> "y@1" [color="orange"];\n' in dot

    def test_quotes_are_escaped(self, analyze) -> None:
        specs = [('we"ird', "1", [], "")]

        dot = render_dot(analyze(specs), LinkResolver())

        assert '"we\\"ird@1" [id="we\\"ird"; label="we\\"ird";' in dot

    def test_empty_result(self, analyze) -> None:
        assert render_dot(analyze([]), LinkResolver()) == "digraph crates {\n}\n"
