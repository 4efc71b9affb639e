"""Graph serialization and persistence."""

from dialograph.persistence.files import dump_graph_file, load_graph_file, read_graph_data
from dialograph.persistence.serialization import (
    SerializableEdge,
    SerializableGraph,
    SerializableNode,
    graph_to_serializable,
    serializable_to_graph,
)
from dialograph.persistence.store import (
    GraphStore,
    InMemoryGraphStore,
    JsonFileGraphStore,
    SaveResult,
    create_store,
    load_graph,
)

__all__ = [
    "SerializableGraph",
    "SerializableNode",
    "SerializableEdge",
    "graph_to_serializable",
    "serializable_to_graph",
    "load_graph_file",
    "dump_graph_file",
    "read_graph_data",
    "GraphStore",
    "InMemoryGraphStore",
    "JsonFileGraphStore",
    "SaveResult",
    "create_store",
    "load_graph",
]
