"""Read and write graph files (JSON or YAML, wire format)."""

import json
from pathlib import Path
from typing import Any

import yaml

from dialograph.core.errors import ConfigurationError
from dialograph.graph.models import Graph
from dialograph.persistence.serialization import graph_to_serializable, serializable_to_graph

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def read_graph_data(path: Path | str) -> dict[str, Any]:
    """Raw wire-format data from a .json, .yaml or .yml file."""
    graph_path = Path(path)
    if not graph_path.exists():
        raise FileNotFoundError(f"Graph file not found: {graph_path}")

    with open(graph_path, encoding="utf-8") as f:
        try:
            if graph_path.suffix.lower() in _YAML_SUFFIXES:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot parse graph file {graph_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Graph file {graph_path} must contain a mapping")
    return data


def load_graph_file(path: Path | str) -> Graph:
    return serializable_to_graph(read_graph_data(path))


def dump_graph_file(graph: Graph, path: Path | str) -> Path:
    """Write `graph` in wire format; YAML for .yaml/.yml, JSON otherwise."""
    graph_path = Path(path)
    data = graph_to_serializable(graph).to_dict()
    graph_path.parent.mkdir(parents=True, exist_ok=True)
    with open(graph_path, "w", encoding="utf-8") as f:
        if graph_path.suffix.lower() in _YAML_SUFFIXES:
            yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
        else:
            json.dump(data, f, indent=2, ensure_ascii=False)
    return graph_path
