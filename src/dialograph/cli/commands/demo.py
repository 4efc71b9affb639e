"""Demo command: write a starter graph."""

from pathlib import Path

import typer

from dialograph.graph.demo import create_demo_graph, create_welcome_graph
from dialograph.persistence.files import dump_graph_file


def demo(
    output: Path = typer.Argument(..., help="Where to write the graph (.json/.yaml)"),
    welcome: bool = typer.Option(
        False, "--welcome", help="Write the single-node welcome graph instead"
    ),
) -> None:
    """Write the "Get Lamp" demo graph (or the welcome graph)."""
    graph = create_welcome_graph() if welcome else create_demo_graph()
    path = dump_graph_file(graph, output)
    typer.echo(f"Wrote {graph.name} to {path}")
