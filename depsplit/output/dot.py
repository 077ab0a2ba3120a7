"""Graphviz DOT output.

Every presented package becomes a node with id ``name@version``. Crates
with more than one presented version are grouped into a
``cluster<name>`` subgraph labelled with the crate name, and their nodes
are labelled with the version only. Node and edge styling is derived from
the categories computed by :mod:`depsplit.core.presentation`.
"""

from __future__ import annotations

from typing import Dict, List

from depsplit.models import EdgeCategory, NodeCategory, Package
from depsplit.core.analyzer import AnalysisResult
from depsplit.core.presentation import LinkResolver, edge_category

#: Extra node attributes per category.
NODE_STYLES: Dict[NodeCategory, str] = {
    NodeCategory.LEVERAGE_POINT: 'color="blue"; style="filled"; fillcolor="yellow"',
    NodeCategory.CONFLICT_ROOT: 'color="red"',
    NodeCategory.CONFLICT_DESCENDANT: 'color="orange"',
    NodeCategory.MINORITY_ADJACENT: 'color="yellow"',
    NodeCategory.UNAFFECTED: "",
}

#: Edge attributes per category.
EDGE_STYLES: Dict[EdgeCategory, str] = {
    EdgeCategory.MINORITY_LINK: 'color="red"; penwidth=3',
    EdgeCategory.MAJORITY_LINK: 'color="blue"; penwidth=2',
    EdgeCategory.TAINT_PROPAGATION: 'color="orange"',
    EdgeCategory.SOURCE_DIVERGES: 'color="blue"',
    EdgeCategory.NEUTRAL: "penwidth=1.5",
}


def _quote(value: str) -> str:
    """Quote a DOT identifier or attribute value."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _node_line(
    package: Package,
    result: AnalysisResult,
    links: LinkResolver,
    indent: str,
) -> str:
    attrs: List[str] = []
    if package.versions > 1:
        attrs.append(f"id={_quote(package.node_id)}")
        attrs.append(f"label={_quote(package.version)}")
        attrs.append('shape="box"')
    else:
        attrs.append(f"id={_quote(package.name)}")
        if package.is_workspace:
            attrs.append(f"label={_quote(package.name)}")
    attrs.append(f"URL={_quote(links.url(package, specific=True))}")

    style = NODE_STYLES[result.node_category(package)]
    if style:
        attrs.append(style)

    return f"{indent}{_quote(package.node_id)} [{'; '.join(attrs)}];\n"


def _write_nodes(result: AnalysisResult, links: LinkResolver, out: List[str]) -> None:
    groups: Dict[str, List[Package]] = {}
    for package in result.packages:
        groups.setdefault(package.name, []).append(package)

    for name, members in groups.items():
        if len(members) == 1:
            out.append(_node_line(members[0], result, links, "  "))
            continue

        out.append(f"  subgraph {_quote('cluster' + name)} {{\n")
        out.append(f"    id = {_quote(name)};\n")
        out.append('    rank = "max";\n')
        out.append(f"    label = {_quote(name)};\n")
        out.append(f"    URL = {_quote(links.url(members[0], specific=False))};\n")
        for package in members:
            out.append(_node_line(package, result, links, "    "))
        out.append("  }\n")


def _write_edges(result: AnalysisResult, out: List[str]) -> None:
    for package in result.packages:
        for dependency in package.dependencies:
            target = result.graph.resolve(dependency)
            style = EDGE_STYLES[edge_category(package, target)]
            out.append(
                f"  {_quote(package.node_id)} -> {_quote(target.node_id)} [{style}];\n"
            )


def render_dot(result: AnalysisResult, links: LinkResolver) -> str:
    """Render the presented packages of ``result`` as a DOT digraph.

    Args:
        result: Analysis result; trimmed results render only survivors.
        links: Resolver for node and cluster ``URL`` attributes.

    Returns:
        DOT source text ending with a newline.
    """
    out: List[str] = ["digraph crates {\n"]
    _write_nodes(result, links, out)
    _write_edges(result, out)
    out.append("}\n")
    return "".join(out)
