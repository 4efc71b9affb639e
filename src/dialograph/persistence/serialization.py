"""Index-based wire format for dialog graphs.

In memory, edges name their endpoints by node id. On the wire, edges name
them by position in the node list (`sourceIndex`, `targetIndex`), rules are
`{type, data}` records with integer type tags, and field names are camelCase.
Only the fields listed here are persisted; layout coordinates travel as an
`anchor` when both are set.
"""

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from dialograph.core.errors import ConfigurationError
from dialograph.graph.models import (
    Condition,
    ConditionKind,
    Edge,
    EdgeRule,
    Graph,
    MatchCandidate,
    Mutation,
    MutationKind,
    Node,
    RepeatedFailRule,
    SemanticMatchRule,
)


class WireRuleType(IntEnum):
    SEMANTIC_MATCH = 0
    REPEATED_FAIL = 1


class WireConditionType(IntEnum):
    REQUIRE = 0
    FORBID = 1


class WireMutationType(IntEnum):
    ADD = 0
    REMOVE = 1


_CONDITION_KINDS = {
    WireConditionType.REQUIRE: ConditionKind.REQUIRE,
    WireConditionType.FORBID: ConditionKind.FORBID,
}
_MUTATION_KINDS = {
    WireMutationType.ADD: MutationKind.ADD,
    WireMutationType.REMOVE: MutationKind.REMOVE,
}


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SerializableNodeAnchor(_WireModel):
    x: float
    y: float


class SerializableNode(_WireModel):
    id: str
    title: str = ""
    prompt: str = ""
    retry_prompt: str = Field(default="", alias="retryPrompt")
    auto_advance: bool | None = Field(default=None, alias="autoAdvance")
    anchor: SerializableNodeAnchor | None = None


class SerializableRule(_WireModel):
    type: WireRuleType
    # Some stores drop empty objects, so data may be missing entirely
    data: dict[str, Any] | None = None


class SerializableCondition(_WireModel):
    condition_type: WireConditionType = Field(alias="conditionType")
    key: str
    value: str = ""


class SerializableMutation(_WireModel):
    mutation_type: WireMutationType = Field(alias="mutationType")
    key: str
    value: str = ""


class SerializableEdge(_WireModel):
    source_index: int = Field(alias="sourceIndex")
    target_index: int = Field(alias="targetIndex")
    rules: list[SerializableRule] = Field(default_factory=list)
    mutations: list[SerializableMutation] = Field(default_factory=list)
    conditions: list[SerializableCondition] = Field(default_factory=list)


class SerializableGraph(_WireModel):
    """A graph in wire form, safe to hand to any store."""

    id: str
    content_id: str | None = Field(default=None, alias="contentId")
    name: str = ""
    start: str
    nodes: list[SerializableNode] = Field(default_factory=list)
    edges: list[SerializableEdge] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-compatible dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SerializableGraph":
        """Validate raw stored data.

        Raises:
            ConfigurationError: If the data does not have the wire shape.
        """
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Malformed serialized graph: {e}") from e


# --- wire -> memory ----------------------------------------------------------


def _rule_from_wire(rule: SerializableRule) -> EdgeRule:
    data = rule.data or {}
    if rule.type is WireRuleType.SEMANTIC_MATCH:
        return SemanticMatchRule(
            match_candidates=[
                MatchCandidate(text=c.get("text", ""), anti_example=c.get("antiExample"))
                for c in data.get("matchCandidates") or []
            ]
        )
    if "failCount" not in data:
        raise ConfigurationError("Repeated-fail rule is missing failCount")
    return RepeatedFailRule(fail_count=int(data["failCount"]), fail_message=data.get("failMessage"))


def _node_from_wire(node: SerializableNode) -> Node:
    return Node(
        id=node.id,
        title=node.title,
        prompt=node.prompt,
        retry_prompt=node.retry_prompt,
        auto_advance=node.auto_advance,
        fx=node.anchor.x if node.anchor else None,
        fy=node.anchor.y if node.anchor else None,
    )


def serializable_to_graph(serializable: SerializableGraph | dict[str, Any]) -> Graph:
    """Rebuild an in-memory graph from wire form.

    Raises:
        ConfigurationError: On malformed data, an edge index outside the node
            list, or a start id that names no node.
    """
    if isinstance(serializable, dict):
        serializable = SerializableGraph.from_dict(serializable)

    nodes = [_node_from_wire(n) for n in serializable.nodes]
    edges = []
    for position, e in enumerate(serializable.edges):
        for index in (e.source_index, e.target_index):
            if not 0 <= index < len(nodes):
                raise ConfigurationError(
                    f"Edge #{position} references node index {index}, "
                    f"graph has {len(nodes)} node(s)"
                )
        edges.append(
            Edge(
                source=nodes[e.source_index].id,
                target=nodes[e.target_index].id,
                rules=[_rule_from_wire(r) for r in e.rules],
                conditions=[
                    Condition(kind=_CONDITION_KINDS[c.condition_type], key=c.key, value=c.value)
                    for c in e.conditions
                ],
                mutations=[
                    Mutation(kind=_MUTATION_KINDS[m.mutation_type], key=m.key, value=m.value)
                    for m in e.mutations
                ],
            )
        )

    return Graph(
        id=serializable.id,
        content_id=serializable.content_id,
        name=serializable.name,
        start=serializable.start,
        nodes=nodes,
        edges=edges,
    )


# --- memory -> wire ----------------------------------------------------------


def _rule_to_wire(rule: EdgeRule) -> SerializableRule:
    if isinstance(rule, SemanticMatchRule):
        candidates: list[dict[str, Any]] = []
        for c in rule.match_candidates:
            item: dict[str, Any] = {"text": c.text}
            if c.anti_example is not None:
                item["antiExample"] = c.anti_example
            candidates.append(item)
        return SerializableRule(
            type=WireRuleType.SEMANTIC_MATCH, data={"matchCandidates": candidates}
        )

    data: dict[str, Any] = {"failCount": rule.fail_count}
    if rule.fail_message is not None:
        data["failMessage"] = rule.fail_message
    return SerializableRule(type=WireRuleType.REPEATED_FAIL, data=data)


def _node_to_wire(node: Node) -> SerializableNode:
    anchor = None
    if node.fx is not None and node.fy is not None:
        anchor = SerializableNodeAnchor(x=float(node.fx), y=float(node.fy))
    return SerializableNode(
        id=node.id,
        title=node.title,
        prompt=node.prompt,
        retry_prompt=node.retry_prompt,
        auto_advance=node.auto_advance,
        anchor=anchor,
    )


def graph_to_serializable(graph: Graph) -> SerializableGraph:
    """Convert an in-memory graph to wire form, preserving node and edge order.

    Raises:
        ConfigurationError: If an edge names a node missing from the graph.
    """
    positions = {node.id: i for i, node in enumerate(graph.nodes)}
    conditions_out = {kind: wire for wire, kind in _CONDITION_KINDS.items()}
    mutations_out = {kind: wire for wire, kind in _MUTATION_KINDS.items()}

    edges = []
    for e in graph.edges:
        if e.source not in positions or e.target not in positions:
            raise ConfigurationError(f"Edge {e.source} -> {e.target} references a missing node")
        edges.append(
            SerializableEdge(
                source_index=positions[e.source],
                target_index=positions[e.target],
                rules=[_rule_to_wire(r) for r in e.rules],
                mutations=[
                    SerializableMutation(
                        mutation_type=mutations_out[m.kind], key=m.key, value=m.value
                    )
                    for m in e.mutations
                ],
                conditions=[
                    SerializableCondition(
                        condition_type=conditions_out[c.kind], key=c.key, value=c.value
                    )
                    for c in e.conditions
                ],
            )
        )

    return SerializableGraph(
        id=graph.id,
        content_id=graph.content_id,
        name=graph.name,
        start=graph.start,
        nodes=[_node_to_wire(n) for n in graph.nodes],
        edges=edges,
    )
