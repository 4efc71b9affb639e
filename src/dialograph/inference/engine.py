"""Traversal engine: one inference step plus the auto-advance loop.

World state is updated atomically: mutations are applied to a working copy
and committed to the session's world only once the whole transition,
including any auto-advance chain, has succeeded.
"""

import logging
import random
from dataclasses import dataclass, field

from dialograph.core.errors import AutoAdvanceDeadEnd, ConfigurationError
from dialograph.graph.models import Edge, EdgeRule, Graph, Node, RepeatedFailRule
from dialograph.graph.queries import outgoing_edges
from dialograph.inference.evaluator import EvaluationResult, RuleEvaluator
from dialograph.scoring.base import SimilarityScorer
from dialograph.world.state import WorldState, apply_mutations

logger = logging.getLogger(__name__)


@dataclass
class InferenceState:
    """Where a traversal is: node, consecutive misses there, and the world.

    States are replaced on every step; `world` is shared by reference between
    a state and its successors.
    """

    current_node: str
    attempt_number: int = 0
    world: WorldState = field(default_factory=dict)


@dataclass
class StepResult:
    """Outcome of one step."""

    state: InferenceState
    evaluation: EvaluationResult
    edge: Edge | None = None
    rule: EdgeRule | None = None
    # Edges followed automatically after the transition, in order
    auto_advanced: list[Edge] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return self.edge is not None

    @property
    def fail_message(self) -> str | None:
        if isinstance(self.rule, RepeatedFailRule):
            return self.rule.fail_message
        return None


def _commit(world: WorldState, working: WorldState) -> None:
    world.clear()
    world.update(working)


class TraversalEngine:
    """Moves an InferenceState through a graph."""

    def __init__(
        self,
        graph: Graph,
        scorer: SimilarityScorer,
        rng: random.Random | None = None,
        max_auto_advance_hops: int | None = None,
    ):
        """
        Args:
            graph: Graph to traverse. Treat it as read-only while in use.
            scorer: Similarity scorer used for semantic match rules.
            rng: Source of randomness for multi-edge auto-advance picks.
            max_auto_advance_hops: Abort longer auto-advance chains; None
                follows them for as long as the graph allows.
        """
        self.graph = graph
        self.evaluator = RuleEvaluator(graph, scorer)
        self.rng = rng or random.Random()
        self.max_auto_advance_hops = max_auto_advance_hops

    def initial_state(
        self,
        node_id: str | None = None,
        world: WorldState | None = None,
    ) -> InferenceState:
        """State at the start of a session (start node unless `node_id` is given)."""
        node = self.graph.get_node(node_id or self.graph.start)
        return InferenceState(
            current_node=node.id,
            attempt_number=0,
            world=world if world is not None else {},
        )

    def current_node(self, state: InferenceState) -> Node:
        return self.graph.get_node(state.current_node)

    async def step(self, utterance: str, state: InferenceState) -> StepResult:
        """Evaluate an utterance and move to the next state.

        On a match (or a repeated-fail fallback) the edge's mutations are
        applied, the target becomes current with attempt 0, and any
        auto-advance chain from there is followed. Otherwise the node stays
        current and the attempt count grows by one.

        Raises:
            NotReadyError: If the scorer is not ready.
            AutoAdvanceDeadEnd: If an auto-advance node has nowhere to go.
        """
        node = self.current_node(state)
        evaluation = await self.evaluator.evaluate_node(
            utterance, node, state.world, state.attempt_number
        )

        if evaluation.edge is None:
            return StepResult(
                state=InferenceState(
                    current_node=node.id,
                    attempt_number=state.attempt_number + 1,
                    world=state.world,
                ),
                evaluation=evaluation,
            )

        edge = evaluation.edge
        working = dict(state.world)
        apply_mutations(working, edge)
        target, hops = self._follow_auto_advance(edge.target, working)
        _commit(state.world, working)

        logger.info(
            f"Transition {node.id} -> {edge.target}"
            + (" (repeated-fail fallback)" if evaluation.is_fallback else "")
            + (f", auto-advanced {len(hops)} hop(s) to {target}" if hops else "")
        )
        return StepResult(
            state=InferenceState(current_node=target, attempt_number=0, world=state.world),
            evaluation=evaluation,
            edge=edge,
            rule=evaluation.rule,
            auto_advanced=hops,
        )

    def advance(self, state: InferenceState) -> tuple[InferenceState, list[Edge]]:
        """Follow auto-advance edges from the current node, if it is one.

        Returns:
            The state at the first node needing input, and the edges taken.
        """
        working = dict(state.world)
        target, hops = self._follow_auto_advance(state.current_node, working)
        if not hops:
            return state, hops
        _commit(state.world, working)
        return InferenceState(current_node=target, attempt_number=0, world=state.world), hops

    def _follow_auto_advance(self, node_id: str, world: WorldState) -> tuple[str, list[Edge]]:
        hops: list[Edge] = []
        node = self.graph.get_node(node_id)
        while node.auto_advance:
            if self.max_auto_advance_hops is not None and len(hops) >= self.max_auto_advance_hops:
                logger.error(f"Auto-advance chain from {node_id} exceeded {len(hops)} hops")
                raise ConfigurationError(
                    f"Auto-advance chain from '{node_id}' exceeded "
                    f"{self.max_auto_advance_hops} hops; check for auto-advance cycles"
                )
            edges = outgoing_edges(node, self.graph, world)
            if not edges:
                logger.error(f"Auto-advance node {node.id} has no outgoing edges")
                raise AutoAdvanceDeadEnd(node.id)
            if len(edges) >= 2:
                logger.warning(
                    f"Multiple edges ({len(edges)}) on auto-advance node {node.id}. "
                    "Picking randomly."
                )
            edge = self.rng.choice(edges)
            apply_mutations(world, edge)
            hops.append(edge)
            node = self.graph.get_node(edge.target)
        return node.id, hops

    def is_leaf(self, state: InferenceState) -> bool:
        """True when no edge leaves the current node under the current world."""
        return not outgoing_edges(state.current_node, self.graph, state.world)
