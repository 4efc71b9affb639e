"""Preview session: a conversation over a snapshot of a graph.

The session owns its own copy of the graph and its own world state, so edits
made in the editor while a session runs never show up half-applied. Call
reload() between turns to pick up a newer graph.
"""

import random
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field

from dialograph.config.settings import SessionConfig
from dialograph.core.errors import SessionBusyError
from dialograph.graph.models import Edge, Graph
from dialograph.inference.engine import InferenceState, StepResult, TraversalEngine
from dialograph.observability.logging import ContextLogger
from dialograph.scoring.base import SimilarityScorer
from dialograph.world.state import new_world


@dataclass
class TranscriptItem:
    text: str
    user: bool = False


@dataclass
class TurnResult:
    """What one turn added to the conversation."""

    messages: list[TranscriptItem] = field(default_factory=list)
    step: StepResult | None = None
    finished: bool = False


class DialogSession:
    """Runs one conversation through a dialog graph."""

    def __init__(
        self,
        graph: Graph,
        scorer: SimilarityScorer,
        config: SessionConfig | None = None,
        start_node: str | None = None,
        initial_world: Mapping[str, str] | None = None,
        session_id: str | None = None,
    ):
        self.config = config or SessionConfig()
        self.scorer = scorer
        self.session_id = session_id or f"session_{uuid.uuid4().hex[:6]}"
        self.start_node = start_node
        self.initial_world = dict(initial_world or {})
        self.transcript: list[TranscriptItem] = []
        self.finished = False
        self._busy = False
        self._rng = random.Random(self.config.seed)
        self._load(graph)
        self.state: InferenceState = self.engine.initial_state(
            self.start_node, new_world(self.initial_world)
        )

    def _load(self, graph: Graph) -> None:
        self.graph = graph.snapshot()
        self.engine = TraversalEngine(
            self.graph,
            self.scorer,
            rng=self._rng,
            max_auto_advance_hops=self.config.max_auto_advance_hops,
        )
        self.log = ContextLogger(__name__).with_context(
            session_id=self.session_id, graph_id=self.graph.id
        )

    def _say(self, turn: TurnResult, text: str, user: bool = False) -> None:
        item = TranscriptItem(text=text, user=user)
        self.transcript.append(item)
        turn.messages.append(item)

    def _arrive(self, turn: TurnResult, hops: list[Edge]) -> None:
        for edge in hops:
            self._say(turn, self.graph.get_node(edge.target).prompt)
        if self.engine.is_leaf(self.state):
            self.finished = True
            turn.finished = True
            self._say(turn, self.config.end_message)
            self.log.info(f"Session finished at node {self.state.current_node}")

    def start(self) -> TurnResult:
        """Begin (or begin again) from the start node with a fresh world.

        Raises:
            NotFoundError: If the configured start node is not in the graph.
            AutoAdvanceDeadEnd: If an auto-advance chain from the start dead-ends.
        """
        if self._busy:
            raise SessionBusyError("Cannot restart while an utterance is being evaluated")
        self.transcript = []
        self.finished = False
        turn = TurnResult()
        self.state = self.engine.initial_state(self.start_node, new_world(self.initial_world))
        self._say(turn, self.engine.current_node(self.state).prompt)
        self.state, hops = self.engine.advance(self.state)
        self._arrive(turn, hops)
        self.log.info(f"Session started at node {self.state.current_node}")
        return turn

    restart = start

    def reload(self, graph: Graph) -> TurnResult:
        """Swap in a new snapshot of `graph` and start over."""
        if self._busy:
            raise SessionBusyError("Cannot reload while an utterance is being evaluated")
        self._load(graph)
        return self.start()

    async def submit(self, utterance: str) -> TurnResult:
        """Process one user utterance.

        Blank utterances and utterances after the conversation finished are
        ignored. On failure the session state is left as it was.

        Raises:
            SessionBusyError: If another utterance is still being evaluated.
            NotReadyError: If the scorer is not ready.
        """
        if self._busy:
            raise SessionBusyError(f"Session {self.session_id} is still evaluating")
        turn = TurnResult(finished=self.finished)
        if self.finished or not utterance.strip():
            return turn

        self._busy = True
        try:
            step = await self.engine.step(utterance, self.state)
        finally:
            self._busy = False

        self._say(turn, utterance, user=True)
        turn.step = step
        self.state = step.state

        if step.edge is None:
            self.log.debug(
                f"No match at {self.state.current_node} (attempt {self.state.attempt_number})"
            )
            self._say(turn, self.engine.current_node(self.state).retry_prompt)
            return turn

        if step.fail_message:
            self._say(turn, step.fail_message)
        self._say(turn, self.graph.get_node(step.edge.target).prompt)
        self._arrive(turn, step.auto_advanced)
        return turn
