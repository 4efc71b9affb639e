"""Graph stores: load and save serialized graphs by id."""

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from dialograph.config.settings import PersistenceConfig
from dialograph.core.errors import NotFoundError, PersistenceError, ValidationError
from dialograph.graph.models import Graph
from dialograph.persistence.serialization import SerializableGraph, serializable_to_graph

logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r"^[A-Za-z0-9_.-]+$")


@dataclass
class SaveResult:
    success: bool
    is_new_graph: bool = False


class GraphStore(Protocol):
    """Interface for graph persistence backends."""

    async def load(self, graph_id: str) -> SerializableGraph:
        """Load a graph by id.

        Raises:
            NotFoundError: If no graph has this id.
        """
        ...

    async def save(self, graph: SerializableGraph) -> SaveResult:
        """Create or overwrite the graph stored under `graph.id`.

        Raises:
            ValidationError: If the id cannot be stored by this backend.
        """
        ...


class InMemoryGraphStore:
    """Keeps serialized graphs in a dict. Useful for tests and previews."""

    def __init__(self) -> None:
        self._graphs: dict[str, SerializableGraph] = {}

    async def load(self, graph_id: str) -> SerializableGraph:
        if graph_id not in self._graphs:
            raise NotFoundError(f"No graph found named {graph_id}.")
        return self._graphs[graph_id].model_copy(deep=True)

    async def save(self, graph: SerializableGraph) -> SaveResult:
        is_new = graph.id not in self._graphs
        self._graphs[graph.id] = graph.model_copy(deep=True)
        return SaveResult(success=True, is_new_graph=is_new)


class JsonFileGraphStore:
    """One `<graph id>.json` file per graph inside a directory."""

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def _path(self, graph_id: str, error: type[Exception] = NotFoundError) -> Path:
        if not _SAFE_ID.match(graph_id):
            raise error(f"Invalid graph id: {graph_id!r}")
        return self.directory / f"{graph_id}.json"

    async def load(self, graph_id: str) -> SerializableGraph:
        path = self._path(graph_id, ValidationError)
        if not path.exists():
            raise NotFoundError(f"No graph found named {graph_id}.")
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Failed to read graph {graph_id}: {e}") from e
        return SerializableGraph.from_dict(data)

    async def save(self, graph: SerializableGraph) -> SaveResult:
        path = self._path(graph.id)
        is_new = not path.exists()
        if is_new:
            logger.info(f"Creating new graph {graph.id}.")
        else:
            logger.info(f"Saving existing graph {graph.id}.")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(graph.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Failed to save graph {graph.id}: {e}")
            return SaveResult(success=False)
        return SaveResult(success=True, is_new_graph=is_new)


def create_store(config: PersistenceConfig) -> GraphStore:
    if config.backend == "memory":
        return InMemoryGraphStore()
    return JsonFileGraphStore(config.path)


async def load_graph(store: GraphStore, graph_id: str) -> Graph:
    """Load and deserialize a graph in one go."""
    return serializable_to_graph(await store.load(graph_id))
