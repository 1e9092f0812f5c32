"""Build-time checks for diagram specs and converted graphs.

Conversion never reports problems: dangling connections are dropped and
unknown variants become empty graphs. These helpers let content tooling
surface such problems as warnings instead.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

import networkx as nx

from .layout import ZoneIndex
from .models import NetworkDiagram

if TYPE_CHECKING:
    from .models import DiagramSpec, FlowGraph


@dataclass
class DiagramIssue:
    """A problem found in a diagram spec."""

    code: str
    message: str
    severity: Literal["warning", "error"] = "warning"


def validate_diagram(spec: DiagramSpec | None) -> list[DiagramIssue]:
    """Report content problems that conversion silently tolerates."""
    if spec is None:
        return [DiagramIssue("unknown-variant", "Diagram has no known variant and renders empty")]

    issues: list[DiagramIssue] = []
    if not isinstance(spec, NetworkDiagram):
        return issues

    labels = Counter(zone.label for zone in spec.zones)
    for label, count in labels.items():
        if count > 1:
            issues.append(DiagramIssue(
                "duplicate-zone-label",
                f"{count} zones are labelled '{label}'; connections only reach the first",
            ))

    index = ZoneIndex(spec.zones)
    for conn in spec.connections:
        for end in (conn.source, conn.target):
            if index.resolve(end) is None:
                issues.append(DiagramIssue(
                    "dangling-connection",
                    f"Connection '{conn.source}' -> '{conn.target}' names unknown zone '{end}'",
                ))

    return issues


def build_containment_graph(graph: FlowGraph) -> nx.DiGraph:
    """Directed graph with an edge from every parent to each of its children."""
    tree = nx.DiGraph()
    for node in graph.nodes:
        tree.add_node(node.id)
    for node in graph.nodes:
        if node.parent_id:
            tree.add_edge(node.parent_id, node.id)
    return tree


def check_graph(graph: FlowGraph) -> list[str]:
    """Find integrity problems in a converted graph.

    Returns:
        Human readable problems; empty when the graph is sound
    """
    problems: list[str] = []

    node_ids = Counter(node.id for node in graph.nodes)
    for node_id, count in node_ids.items():
        if count > 1:
            problems.append(f"Node id '{node_id}' is used {count} times")

    edge_ids = Counter(edge.id for edge in graph.edges)
    for edge_id, count in edge_ids.items():
        if count > 1:
            problems.append(f"Edge id '{edge_id}' is used {count} times")

    by_id = {node.id: node for node in graph.nodes}

    for node in graph.nodes:
        if not node.parent_id:
            continue
        parent = by_id.get(node.parent_id)
        if parent is None:
            problems.append(f"Node '{node.id}' has unknown parent '{node.parent_id}'")
            continue
        if parent.width is None or parent.height is None:
            problems.append(f"Parent '{parent.id}' of node '{node.id}' has no size")
            continue
        if not (0 <= node.x <= parent.width and 0 <= node.y <= parent.height):
            problems.append(
                f"Node '{node.id}' at ({node.x}, {node.y}) lies outside "
                f"parent '{parent.id}' ({parent.width}x{parent.height})"
            )

    tree = build_containment_graph(graph)
    if not nx.is_directed_acyclic_graph(tree):
        cycle = nx.find_cycle(tree)
        problems.append("Parent cycle: " + " -> ".join(src for src, _ in cycle))

    for edge in graph.edges:
        for end in (edge.source, edge.target):
            node = by_id.get(end)
            if node is None:
                problems.append(f"Edge '{edge.id}' references unknown node '{end}'")
            elif not node.is_container:
                problems.append(f"Edge '{edge.id}' touches non-container node '{end}'")

    return problems
