"""Read-only queries over a dialog graph."""

from collections.abc import Mapping

from dialograph.graph.models import Edge, Graph, Node, RepeatedFailRule
from dialograph.world.state import conditions_pass


def _node_id(node: Node | str) -> str:
    return node if isinstance(node, str) else node.id


def outgoing_edges(
    node: Node | str,
    graph: Graph,
    world: Mapping[str, str] | None = None,
) -> list[Edge]:
    """Edges leaving `node` in graph order.

    When `world` is given, edges whose conditions fail are dropped. Passing
    None (not an empty world) skips condition checks entirely, which is what
    structural tools such as layout want.
    """
    node_id = _node_id(node)
    return [
        edge
        for edge in graph.edges
        if edge.source == node_id and (world is None or conditions_pass(edge.conditions, world))
    ]


def incoming_edges(node: Node | str, graph: Graph) -> list[Edge]:
    """Edges arriving at `node` in graph order, conditions ignored."""
    node_id = _node_id(node)
    return [edge for edge in graph.edges if edge.target == node_id]


def is_repeated_fail_only(edge: Edge) -> bool:
    """True iff the edge has rules and every one of them is a repeated-fail rule."""
    return bool(edge.rules) and all(isinstance(rule, RepeatedFailRule) for rule in edge.rules)


def repeated_fail_edges(
    node: Node | str,
    graph: Graph,
    world: Mapping[str, str] | None = None,
) -> list[Edge]:
    return [edge for edge in outgoing_edges(node, graph, world) if is_repeated_fail_only(edge)]


def find_edge(graph: Graph, source: str, target: str) -> Edge | None:
    for edge in graph.edges:
        if edge.source == source and edge.target == target:
            return edge
    return None
