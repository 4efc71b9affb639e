"""Structural checks for authored graphs.

These never block editing; they point out things that will misbehave at
preview time (dead-end auto-advance nodes, rules that can never match, nodes
nobody can reach).
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum

from dialograph.graph.models import Graph, SemanticMatchRule
from dialograph.graph.queries import outgoing_edges
from dialograph.layout.levels import compute_levels


class Severity(str, Enum):
    error = "error"
    warning = "warning"
    info = "info"


@dataclass
class GraphProblem:
    severity: Severity
    message: str
    node_id: str | None = None


def reachable_nodes(graph: Graph) -> set[str]:
    """Ids reachable from the start node, ignoring conditions."""
    seen = {graph.start}
    queue = deque([graph.start])
    while queue:
        for edge in outgoing_edges(queue.popleft(), graph):
            if edge.target not in seen:
                seen.add(edge.target)
                queue.append(edge.target)
    return seen


def find_problems(graph: Graph) -> list[GraphProblem]:
    """List structural problems, errors first."""
    problems: list[GraphProblem] = []
    reachable = reachable_nodes(graph)

    for node in graph.nodes:
        edges = outgoing_edges(node, graph)
        if node.auto_advance and not edges:
            problems.append(
                GraphProblem(Severity.error, "Auto-advance node has no outgoing edges", node.id)
            )
        if node.auto_advance and len(edges) > 1:
            problems.append(
                GraphProblem(
                    Severity.warning,
                    f"Auto-advance node has {len(edges)} outgoing edges; one is picked at random",
                    node.id,
                )
            )
        if not node.prompt.strip():
            problems.append(GraphProblem(Severity.warning, "Node has an empty prompt", node.id))
        if node.id not in reachable:
            problems.append(
                GraphProblem(Severity.warning, "Node is unreachable from the start", node.id)
            )

        for edge in edges:
            if not edge.rules:
                problems.append(
                    GraphProblem(Severity.warning, f"Edge to {edge.target} has no rules", node.id)
                )
            if node.auto_advance:
                continue
            for rule in edge.rules:
                if isinstance(rule, SemanticMatchRule) and rule.name is None:
                    problems.append(
                        GraphProblem(
                            Severity.warning,
                            f"Semantic rule on edge to {edge.target} has no positive examples",
                            node.id,
                        )
                    )

    if compute_levels(graph) is None and len(reachable) == len(graph.nodes):
        problems.append(
            GraphProblem(Severity.info, "Graph has cycles; auto-layout is unavailable")
        )

    order = {Severity.error: 0, Severity.warning: 1, Severity.info: 2}
    return sorted(problems, key=lambda p: order[p.severity])
