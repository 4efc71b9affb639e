"""Dialog graph model and queries.

The editor lives in dialograph.graph.editor and is imported from there.
"""

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
    edge_name,
)
from dialograph.graph.queries import (
    find_edge,
    incoming_edges,
    is_repeated_fail_only,
    outgoing_edges,
    repeated_fail_edges,
)

__all__ = [
    "Graph",
    "Node",
    "Edge",
    "EdgeRule",
    "SemanticMatchRule",
    "RepeatedFailRule",
    "MatchCandidate",
    "Condition",
    "ConditionKind",
    "Mutation",
    "MutationKind",
    "edge_name",
    "outgoing_edges",
    "incoming_edges",
    "is_repeated_fail_only",
    "repeated_fail_edges",
    "find_edge",
]
