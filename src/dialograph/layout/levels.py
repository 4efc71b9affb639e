"""Layered layout: longest-path levels from the start node.

compute_levels is a modified BFS with in-degree accounting. A node is only
expanded once every incoming edge has delivered it, so its final depth is the
length of the longest path from start. Nodes on a cycle never get there, which
is how cycles are detected.
"""

from collections import deque

from dialograph.graph.models import Graph
from dialograph.graph.queries import outgoing_edges


def compute_levels(graph: Graph) -> list[list[str]] | None:
    """Group node ids by longest-path depth from `graph.start`.

    Conditions are ignored; this is a structural pass. The graph is not
    modified.

    Returns:
        One list of node ids per depth, 0..max depth, each in first-visit
        order. None when some node never finishes: a cycle reachable from the
        start, or a node the start cannot reach.
    """
    # Start gets one virtual incoming edge from outside the graph.
    in_degree: dict[str, int] = {graph.start: 1}
    for edge in graph.edges:
        in_degree[edge.target] = in_degree.get(edge.target, 0) + 1

    finished: set[str] = set()
    depth_of: dict[str, int] = {}
    queue: deque[tuple[str, int]] = deque([(graph.start, 0)])

    while queue:
        node_id, depth = queue.popleft()
        in_degree[node_id] -= 1
        if in_degree[node_id] == 0:
            finished.add(node_id)
            for edge in outgoing_edges(node_id, graph):
                queue.append((edge.target, depth + 1))
        # FIFO order means depth never decreases; dict keeps first-visit order.
        depth_of[node_id] = depth

    if len(finished) != len(graph.nodes):
        return None

    levels: list[list[str]] = [[] for _ in range(max(depth_of.values()) + 1)]
    for node_id, depth in depth_of.items():
        levels[depth].append(node_id)
    return levels


def layout_positions(
    levels: list[list[str]],
    node_width: float,
    x_spacing: float,
    y_spacing: float,
) -> dict[str, tuple[float, float]]:
    """Coordinates for each node: one row per level, rows centred on x=0."""
    positions: dict[str, tuple[float, float]] = {}
    y = 0.0
    for row in levels:
        x = -(node_width + (len(row) - 1) * x_spacing) / 2.0
        for node_id in row:
            positions[node_id] = (x, y)
            x += x_spacing
        y += y_spacing
    return positions
