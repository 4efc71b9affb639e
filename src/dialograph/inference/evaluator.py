"""Rule evaluation: decide which outgoing edge an utterance selects.

Every semantic match rule on every eligible edge is scored so that callers
can show the full picture, then the best qualifying rule above the scorer's
threshold wins. Repeated-fail rules are consulted only when nothing matched.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from dialograph.core.errors import NotReadyError, ScorerError
from dialograph.graph.models import (
    Edge,
    EdgeRule,
    Graph,
    MatchCandidate,
    Node,
    RepeatedFailRule,
    SemanticMatchRule,
)
from dialograph.graph.queries import is_repeated_fail_only, outgoing_edges
from dialograph.scoring.base import SimilarityScorer

logger = logging.getLogger(__name__)


@dataclass
class ScoredCandidate:
    """A match candidate with the score the scorer gave it."""

    candidate: MatchCandidate
    score: float
    # True for the best candidate of its rule (first one on ties)
    top_score: bool = False


@dataclass
class ScoredRule:
    """Scoring detail for one semantic match rule."""

    edge: Edge
    rule: SemanticMatchRule
    rule_index: int
    scored_candidates: list[ScoredCandidate] = field(default_factory=list)
    top_score: float | None = None
    qualifying_score: float | None = None
    chosen: bool = False

    @property
    def best_candidate(self) -> ScoredCandidate | None:
        for scored in self.scored_candidates:
            if scored.top_score:
                return scored
        return None


@dataclass
class EvaluationResult:
    """Outcome of evaluating an utterance at one node."""

    scored_rules: list[ScoredRule] = field(default_factory=list)
    edge: Edge | None = None
    rule: EdgeRule | None = None

    @property
    def matched(self) -> bool:
        return self.edge is not None

    @property
    def is_fallback(self) -> bool:
        return isinstance(self.rule, RepeatedFailRule)


class RuleEvaluator:
    """Scores outgoing edges of a node against an utterance."""

    def __init__(self, graph: Graph, scorer: SimilarityScorer):
        self.graph = graph
        self.scorer = scorer

    async def score_rule(
        self,
        utterance: str,
        edge: Edge,
        rule: SemanticMatchRule,
        rule_index: int,
    ) -> ScoredRule:
        """Score a single semantic match rule.

        A rule without candidates is not sent to the scorer and gets no score.
        """
        scored = ScoredRule(edge=edge, rule=rule, rule_index=rule_index)
        if not rule.match_candidates:
            return scored

        texts = [c.text for c in rule.match_candidates]
        scores = await self.scorer.score(utterance, texts)
        if len(scores) != len(texts):
            raise ScorerError(f"Scorer returned {len(scores)} scores for {len(texts)} candidates")

        best_index = 0
        for i, (candidate, score) in enumerate(zip(rule.match_candidates, scores)):
            scored.scored_candidates.append(ScoredCandidate(candidate=candidate, score=score))
            if score > scores[best_index]:
                best_index = i

        best = scored.scored_candidates[best_index]
        best.top_score = True
        scored.top_score = best.score
        if not best.candidate.anti_example:
            scored.qualifying_score = best.score
        return scored

    async def evaluate_node(
        self,
        utterance: str,
        node: Node,
        world: Mapping[str, str] | None,
        attempt_number: int = 0,
    ) -> EvaluationResult:
        """Pick the transition an utterance selects at `node`.

        Args:
            utterance: Free text from the user.
            node: Node the conversation is at.
            world: World state gating edges; None ignores conditions.
            attempt_number: Consecutive non-matches so far at this node.

        Raises:
            NotReadyError: If the scorer is not ready.
            ScorerError: If the scorer breaks its contract.
        """
        if not self.scorer.ready():
            raise NotReadyError("Similarity scorer not ready yet. Please wait...")
        threshold = self.scorer.threshold()

        edges = outgoing_edges(node, self.graph, world)
        result = EvaluationResult()
        best: ScoredRule | None = None
        best_score = float("-inf")

        for edge in edges:
            for rule_index, rule in enumerate(edge.rules):
                if not isinstance(rule, SemanticMatchRule):
                    continue
                scored = await self.score_rule(utterance, edge, rule, rule_index)
                result.scored_rules.append(scored)
                qualifying = scored.qualifying_score
                # Strictly above threshold; ties keep the first rule seen
                if qualifying is not None and qualifying > threshold and qualifying > best_score:
                    best, best_score = scored, qualifying

        if best is not None:
            best.chosen = True
            result.edge = best.edge
            result.rule = best.rule
            logger.debug(
                f"Node {node.id}: matched {best.edge.source} -> {best.edge.target} "
                f"with {best_score:.3f} (threshold {threshold})"
            )
            return result

        for edge in edges:
            if not is_repeated_fail_only(edge):
                continue
            for rule in edge.rules:
                if isinstance(rule, RepeatedFailRule) and attempt_number >= rule.fail_count:
                    result.edge = edge
                    result.rule = rule
                    logger.debug(
                        f"Node {node.id}: repeated-fail fallback to {edge.target} "
                        f"after {attempt_number} attempt(s)"
                    )
                    return result

        logger.debug(f"Node {node.id}: no match among {len(result.scored_rules)} rule(s)")
        return result
