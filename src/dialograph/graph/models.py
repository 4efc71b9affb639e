"""Dialog graph domain models.

Nodes live in an ordered list indexed by id; edges refer to nodes by id only,
so a graph never holds object back-references and copies cleanly.
"""

import uuid
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field, PrivateAttr, model_validator

from dialograph.core.errors import ConfigurationError, NotFoundError


class ConditionKind(str, Enum):
    """How a condition compares the world state."""

    REQUIRE = "require"
    FORBID = "forbid"


class MutationKind(str, Enum):
    """How a mutation changes the world state."""

    ADD = "add"
    REMOVE = "remove"


class Node(BaseModel):
    """A dialog node: what the user is told, and what to say on no-match."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), frozen=True)
    title: str = ""
    prompt: str = ""
    retry_prompt: str = ""
    # None means unset; treated as False
    auto_advance: bool | None = None
    fx: float | None = Field(default=None, description="Pinned layout x coordinate")
    fy: float | None = Field(default=None, description="Pinned layout y coordinate")


class MatchCandidate(BaseModel):
    """An example phrase, positive unless marked as an anti-example."""

    text: str
    # None means unset; treated as a positive example
    anti_example: bool | None = None


class SemanticMatchRule(BaseModel):
    """Rule scored by text similarity against example phrases."""

    type: Literal["semantic_match"] = "semantic_match"
    match_candidates: list[MatchCandidate] = Field(default_factory=list)

    @property
    def name(self) -> str | None:
        """Text of the first positive example, if any."""
        for candidate in self.match_candidates:
            if not candidate.anti_example:
                return candidate.text
        return None


class RepeatedFailRule(BaseModel):
    """Fallback taken after `fail_count` consecutive non-matches."""

    type: Literal["repeated_fail"] = "repeated_fail"
    fail_count: int = Field(ge=0)
    fail_message: str | None = None


EdgeRule = Annotated[SemanticMatchRule | RepeatedFailRule, Field(discriminator="type")]


class Condition(BaseModel):
    """World-state check gating an edge."""

    kind: ConditionKind
    key: str
    value: str = ""


class Mutation(BaseModel):
    """World-state change applied when an edge is taken."""

    kind: MutationKind
    key: str
    value: str = ""


class Edge(BaseModel):
    """Directed transition between two nodes, referenced by id."""

    source: str
    target: str
    rules: list[EdgeRule] = Field(default_factory=list)
    conditions: list[Condition] = Field(default_factory=list)
    mutations: list[Mutation] = Field(default_factory=list)


def edge_name(edge: Edge) -> str | None:
    """Name of an edge: the name of its first semantic match rule."""
    for rule in edge.rules:
        if isinstance(rule, SemanticMatchRule):
            return rule.name
    return None


class Graph(BaseModel):
    """A whole dialog graph.

    Construction validates that `start` and every edge endpoint refer to
    existing nodes and raises ConfigurationError otherwise.
    """

    id: str
    name: str = ""
    start: str
    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)
    content_id: str | None = None

    _index: dict[str, Node] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _check_references(self) -> "Graph":
        self.reindex()
        if len(self._index) != len(self.nodes):
            raise ConfigurationError(f"Graph '{self.id}' has duplicate node ids")
        if self.start not in self._index:
            raise ConfigurationError(
                f"Start node '{self.start}' not found in graph '{self.id}'"
            )
        for edge in self.edges:
            for endpoint in (edge.source, edge.target):
                if endpoint not in self._index:
                    raise ConfigurationError(
                        f"Edge {edge.source} -> {edge.target} references missing node "
                        f"'{endpoint}'"
                    )
        return self

    def reindex(self) -> None:
        """Rebuild the id -> node index after the node list changed."""
        self._index = {node.id: node for node in self.nodes}

    def has_node(self, node_id: str) -> bool:
        return self.find_node(node_id) is not None

    def find_node(self, node_id: str) -> Node | None:
        node = self._index.get(node_id)
        if node is None:
            # Nodes appended to the list directly are not indexed yet
            self.reindex()
            node = self._index.get(node_id)
        return node

    def get_node(self, node_id: str) -> Node:
        """Resolve a node id.

        Raises:
            NotFoundError: If no node has this id.
        """
        node = self.find_node(node_id)
        if node is None:
            raise NotFoundError(f"Node '{node_id}' not found in graph '{self.id}'")
        return node

    @property
    def start_node(self) -> Node:
        return self.get_node(self.start)

    def snapshot(self) -> "Graph":
        """Independent deep copy, safe to hand to a traversal session."""
        copy = self.model_copy(deep=True)
        copy.reindex()
        return copy
