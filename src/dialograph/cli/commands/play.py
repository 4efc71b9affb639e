"""Play command: preview a graph interactively."""

import asyncio
from pathlib import Path

import typer

from dialograph.core.errors import DialographError


def play(
    graph: str = typer.Argument(..., help="Graph file (.json/.yaml) or graph id in the store"),
    node: str | None = typer.Option(None, "--node", "-n", help="Start at this node id"),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to dialograph.yaml or its directory"
    ),
    seed: int | None = typer.Option(None, "--seed", help="Seed for random auto-advance picks"),
    debug: bool = typer.Option(False, "--debug", help="Show rule scores and debug logs"),
) -> None:
    """Start an interactive preview of a dialog graph."""
    from dialograph.cli.preview_runner import PreviewConfig, run_preview

    preview_config = PreviewConfig(
        graph=graph,
        config_path=config,
        start_node=node,
        seed=seed,
        debug=debug,
    )

    try:
        asyncio.run(run_preview(preview_config))
    except KeyboardInterrupt:
        pass
    except (DialographError, FileNotFoundError) as e:
        typer.echo(f"Fatal error: {e}", err=True)
        raise typer.Exit(1)
