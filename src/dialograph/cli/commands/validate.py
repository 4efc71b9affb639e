"""Validate command: report structural problems in a graph file."""

from pathlib import Path

import typer
from rich.console import Console

from dialograph.core.errors import DialographError
from dialograph.graph.validation import Severity, find_problems
from dialograph.persistence.files import load_graph_file

_STYLES = {Severity.error: "red", Severity.warning: "yellow", Severity.info: "dim"}


def validate(
    graph_path: Path = typer.Argument(..., help="Graph file (.json/.yaml)"),
) -> None:
    """Check a graph and exit non-zero if it has errors."""
    console = Console()
    try:
        graph = load_graph_file(graph_path)
    except (DialographError, FileNotFoundError) as e:
        console.print(f"[red]error:[/] {e}")
        raise typer.Exit(1)

    problems = find_problems(graph)
    for problem in problems:
        where = f" [dim]({problem.node_id})[/]" if problem.node_id else ""
        style = _STYLES[problem.severity]
        console.print(f"[{style}]{problem.severity.value}:[/] {problem.message}{where}")

    errors = sum(1 for p in problems if p.severity is Severity.error)
    console.print(
        f"{len(graph.nodes)} node(s), {len(graph.edges)} edge(s), "
        f"{errors} error(s), {len(problems) - errors} other issue(s)"
    )
    if errors:
        raise typer.Exit(1)
