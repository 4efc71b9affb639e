"""`dialograph` command: author, check and preview dialog graphs from the shell.

Graph files are YAML or JSON in the wire format. `play` also accepts the id of
a graph held by the configured store.
"""

import typer

from dialograph import __version__
from dialograph.cli.commands.demo import demo
from dialograph.cli.commands.layout import layout
from dialograph.cli.commands.play import play
from dialograph.cli.commands.validate import validate

app = typer.Typer(
    name="dialograph",
    help=(
        "Author and preview branching dialog graphs. "
        "Write a starter graph with demo, check it with validate, "
        "pin node positions with layout and talk through it with play."
    ),
    add_completion=False,
)

app.command(name="play")(play)
app.command(name="layout")(layout)
app.command(name="validate")(validate)
app.command(name="demo")(demo)


def version_callback(value: bool) -> None:
    """Print version and exit"""
    if value:
        typer.echo(f"dialograph version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Author and preview branching dialog graphs driven by semantic matching."""
    pass


def cli() -> None:
    """Entry point for CLI"""
    app()


if __name__ == "__main__":
    cli()
