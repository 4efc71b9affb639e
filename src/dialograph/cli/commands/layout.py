"""Layout command: compute layered positions for a graph file."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from dialograph.config.loader import ConfigLoader
from dialograph.core.errors import DialographError
from dialograph.graph.editor import GraphEditor
from dialograph.layout.levels import compute_levels
from dialograph.persistence.files import dump_graph_file, load_graph_file


def _label(text: str, width: int = 40) -> str:
    text = " ".join(text.split())
    return text if len(text) <= width else text[: width - 3] + "..."


def layout(
    graph_path: Path = typer.Argument(..., help="Graph file (.json/.yaml)"),
    write: bool = typer.Option(False, "--write", "-w", help="Write positions back to the file"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to dialograph.yaml"),
) -> None:
    """Show the layered layout of a graph, optionally pinning nodes to it."""
    console = Console()
    try:
        settings = ConfigLoader.load(config)
        graph = load_graph_file(graph_path)
    except (DialographError, FileNotFoundError) as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)

    levels = compute_levels(graph)
    if levels is None:
        console.print("[red]Cannot apply layout to a graph with cycles.[/]")
        raise typer.Exit(1)

    table = Table(title=f"Layout of {graph.name or graph.id}")
    table.add_column("Level", justify="right")
    table.add_column("Nodes")
    for depth, row in enumerate(levels):
        names = [_label(graph.get_node(n).title or graph.get_node(n).prompt or n) for n in row]
        table.add_row(str(depth), "\n".join(names))
    console.print(table)

    if write:
        cfg = settings.layout
        GraphEditor(graph).apply_auto_layout(cfg.node_width, cfg.x_spacing, cfg.y_spacing)
        dump_graph_file(graph, graph_path)
        console.print(f"[green]Wrote positions to {graph_path}[/]")
