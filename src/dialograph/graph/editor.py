"""Validated editing operations on a dialog graph.

The editor owns the authoring copy of a graph. Traversal sessions never read
it directly; they take a snapshot (see Graph.snapshot) at session start.
"""

import logging
from typing import Any

from dialograph.core.errors import ValidationError
from dialograph.graph.models import (
    Condition,
    Edge,
    EdgeRule,
    Graph,
    MatchCandidate,
    Mutation,
    Node,
    SemanticMatchRule,
)
from dialograph.graph.queries import find_edge
from dialograph.layout.levels import compute_levels, layout_positions

logger = logging.getLogger(__name__)

_NODE_FIELDS = frozenset({"title", "prompt", "retry_prompt", "auto_advance", "fx", "fy"})


def default_edge_rules() -> list[EdgeRule]:
    """Rules for a freshly drawn edge: one semantic rule with an empty example."""
    return [SemanticMatchRule(match_candidates=[MatchCandidate(text="")])]


class GraphEditor:
    """Mutating operations that keep a graph's invariants intact."""

    def __init__(self, graph: Graph):
        self.graph = graph

    def _require_node(self, node_id: str) -> Node:
        node = self.graph.find_node(node_id)
        if node is None:
            raise ValidationError(f"Node '{node_id}' does not exist")
        return node

    # --- nodes ---------------------------------------------------------------

    def add_node(self, **fields: Any) -> Node:
        """Append a new node; an id is generated unless given."""
        node = Node(**fields)
        if self.graph.find_node(node.id) is not None:
            raise ValidationError(f"Node '{node.id}' already exists")
        self.graph.nodes.append(node)
        self.graph.reindex()
        logger.debug(f"Added node {node.id}")
        return node

    def update_node(self, node_id: str, **changes: Any) -> Node:
        """Change editable node fields. Node ids are immutable."""
        node = self._require_node(node_id)
        unknown = set(changes) - _NODE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update node field(s): {', '.join(sorted(unknown))}")
        for field_name, value in changes.items():
            setattr(node, field_name, value)
        return node

    def delete_node(self, node_id: str) -> list[Edge]:
        """Remove a node and every edge touching it.

        Returns:
            The edges removed along with the node.
        """
        self._require_node(node_id)
        if node_id == self.graph.start:
            raise ValidationError("Cannot delete the start node; choose another start first")

        removed = [e for e in self.graph.edges if node_id in (e.source, e.target)]
        self.graph.nodes = [n for n in self.graph.nodes if n.id != node_id]
        self.graph.edges = [e for e in self.graph.edges if node_id not in (e.source, e.target)]
        self.graph.reindex()
        logger.debug(f"Deleted node {node_id} and {len(removed)} incident edge(s)")
        return removed

    def set_start(self, node_id: str) -> None:
        self._require_node(node_id)
        self.graph.start = node_id

    # --- edges ---------------------------------------------------------------

    def add_edge(
        self,
        source: str,
        target: str,
        rules: list[EdgeRule] | None = None,
        conditions: list[Condition] | None = None,
        mutations: list[Mutation] | None = None,
    ) -> Edge:
        """Connect two existing nodes.

        Raises:
            ValidationError: On unknown nodes, self-loops, duplicate edges or an
                empty rule list.
        """
        self._require_node(source)
        self._require_node(target)
        if source == target:
            raise ValidationError(f"Self-loop on node '{source}' is not allowed")
        if find_edge(self.graph, source, target) is not None:
            raise ValidationError(f"Edge {source} -> {target} already exists")
        if rules is not None and not rules:
            raise ValidationError("An edge needs at least one rule")

        edge = Edge(
            source=source,
            target=target,
            rules=rules if rules is not None else default_edge_rules(),
            conditions=conditions or [],
            mutations=mutations or [],
        )
        self.graph.edges.append(edge)
        return edge

    def branch_from(self, source: str, **node_fields: Any) -> tuple[Node, Edge]:
        """Create a new node and an edge leading to it from `source`."""
        self._require_node(source)
        node = self.add_node(**node_fields)
        return node, self.add_edge(source, node.id)

    def delete_edge(self, source: str, target: str) -> Edge:
        edge = find_edge(self.graph, source, target)
        if edge is None:
            raise ValidationError(f"Edge {source} -> {target} does not exist")
        self.graph.edges = [e for e in self.graph.edges if e is not edge]
        return edge

    def add_example(
        self,
        source: str,
        target: str,
        text: str,
        anti_example: bool = False,
        rule_index: int | None = None,
    ) -> MatchCandidate:
        """Append an example phrase to a semantic rule of an edge.

        Without `rule_index` the edge's first semantic match rule is used.
        """
        edge = find_edge(self.graph, source, target)
        if edge is None:
            raise ValidationError(f"Edge {source} -> {target} does not exist")

        if rule_index is None:
            rule = next((r for r in edge.rules if isinstance(r, SemanticMatchRule)), None)
        elif 0 <= rule_index < len(edge.rules):
            rule = edge.rules[rule_index]
        else:
            rule = None
        if not isinstance(rule, SemanticMatchRule):
            raise ValidationError(f"Edge {source} -> {target} has no such semantic match rule")

        candidate = MatchCandidate(text=text, anti_example=anti_example)
        rule.match_candidates.append(candidate)
        return candidate

    # --- layout --------------------------------------------------------------

    def apply_auto_layout(
        self,
        node_width: float,
        x_spacing: float,
        y_spacing: float,
    ) -> bool:
        """Pin every node to its layered position.

        Returns:
            False (leaving the graph untouched) when no layout exists.
        """
        levels = compute_levels(self.graph)
        if levels is None:
            logger.warning(f"Cannot apply layout to graph '{self.graph.id}': it has cycles")
            return False
        for node_id, (x, y) in layout_positions(levels, node_width, x_spacing, y_spacing).items():
            node = self.graph.get_node(node_id)
            node.fx = x
            node.fy = y
        return True
