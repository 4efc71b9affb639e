"""Interactive preview runner for the dialograph CLI."""

from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from dialograph.config.loader import ConfigLoader
from dialograph.config.settings import DialographConfig
from dialograph.graph.models import Graph
from dialograph.inference.engine import StepResult
from dialograph.inference.tester import rule_label
from dialograph.observability.logging import setup_logging
from dialograph.persistence.files import load_graph_file
from dialograph.persistence.store import create_store, load_graph
from dialograph.runtime.session import DialogSession, TurnResult
from dialograph.scoring.base import SimilarityScorer
from dialograph.scoring.embedding import EmbeddingScorer
from dialograph.scoring.factory import build_scorer


@dataclass
class PreviewConfig:
    """Configuration for preview runner."""

    graph: str
    config_path: Path | None = None
    start_node: str | None = None
    seed: int | None = None
    debug: bool = False


async def resolve_graph(ref: str, config: DialographConfig) -> Graph:
    """A graph file path, or otherwise a graph id in the configured store."""
    if Path(ref).is_file():
        return load_graph_file(ref)
    return await load_graph(create_store(config.persistence), ref)


class PreviewRunner:
    """Interactive preview of a dialog graph in the terminal."""

    def __init__(self, config: PreviewConfig, console: Console | None = None):
        self.config = config
        self.console = console or Console()
        self.session: DialogSession | None = None
        self.scorer: SimilarityScorer | None = None
        self._running = False

    async def setup(self) -> None:
        """Load configuration, graph and scorer.

        Raises:
            DialographError: If the graph or config cannot be used.
        """
        settings = ConfigLoader.load(self.config.config_path)
        setup_logging(
            "DEBUG" if self.config.debug else settings.logging.level,
            json_file=settings.logging.json_file,
        )
        if self.config.seed is not None:
            settings.session.seed = self.config.seed

        graph = await resolve_graph(self.config.graph, settings)

        self.scorer = build_scorer(settings.scorer)
        if isinstance(self.scorer, EmbeddingScorer):
            with self.console.status(f"[bold blue]Loading {self.scorer.model_name}...[/]"):
                await self.scorer.load()

        self.session = DialogSession(
            graph,
            self.scorer,
            config=settings.session,
            start_node=self.config.start_node,
        )

    async def start(self) -> None:
        """Start the interactive session."""
        if self.session is None:
            await self.setup()
        assert self.session is not None

        self.console.print(f"[bold]{self.session.graph.name or self.session.graph.id}[/]")
        self.console.print("Type '/restart' to start over, 'exit' or 'quit' to end.\n")
        self._print_turn(self.session.start())

        self._running = True
        while self._running:
            try:
                user_input = Prompt.ask("[bold green]You[/]")
            except (KeyboardInterrupt, EOFError):
                self.console.print("\n[yellow]Goodbye![/]")
                break

            if self._is_exit_command(user_input):
                self.console.print("\n[yellow]Goodbye![/]")
                break
            if user_input.strip().lower() == "/restart":
                self._print_turn(self.session.restart())
                continue
            if self.session.finished:
                self.console.print("[dim]The conversation is over. Type '/restart'.[/]")
                continue

            try:
                with self.console.status("[bold blue]Thinking...[/]"):
                    turn = await self.session.submit(user_input)
            except Exception as e:
                if self.config.debug:
                    self.console.print_exception()
                else:
                    self.console.print(f"[red]Error: {e}[/]")
                continue

            if self.config.debug and turn.step is not None:
                self._print_scores(turn.step)
            self._print_turn(turn)

    def _print_turn(self, turn: TurnResult) -> None:
        for item in turn.messages:
            if not item.user and item.text:
                self.console.print(f"[bold blue]Bot > [/]{item.text}\n")

    def _print_scores(self, step: StepResult) -> None:
        table = Table(title="Rule scores", show_lines=False)
        table.add_column("Edge")
        table.add_column("Best example")
        table.add_column("Qualifies")
        table.add_column("Chosen")
        for scored in step.evaluation.scored_rules:
            table.add_row(
                f"{scored.edge.source[:8]} -> {scored.edge.target[:8]}",
                rule_label(scored),
                "yes" if scored.qualifying_score is not None else "no",
                "*" if scored.chosen else "",
            )
        self.console.print(table)
        if step.evaluation.is_fallback:
            self.console.print("[dim]Taken via repeated-fail fallback[/]")

    def _is_exit_command(self, user_input: str) -> bool:
        """Check if input is an exit command."""
        return user_input.strip().lower() in ("quit", "exit", "q", "/quit", "/exit")

    async def cleanup(self) -> None:
        """Clean up resources."""
        self._running = False
        self.session = None

    async def __aenter__(self) -> "PreviewRunner":
        await self.setup()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.cleanup()


async def run_preview(config: PreviewConfig) -> None:
    """Run an interactive preview session.

    Args:
        config: Preview configuration
    """
    async with PreviewRunner(config) as runner:
        await runner.start()
