"""Try utterances against a single node while authoring.

Conditions are ignored (no world state), so every outgoing edge is scored.
"""

from dataclasses import dataclass, field

from dialograph.graph.models import Graph, edge_name
from dialograph.inference.evaluator import EvaluationResult, RuleEvaluator, ScoredRule
from dialograph.scoring.base import SimilarityScorer


@dataclass
class NodeTestReport:
    utterance: str
    summary: str
    result: EvaluationResult
    # Semantic rules ordered by their best candidate's score, best first
    ranked_rules: list[ScoredRule] = field(default_factory=list)


def rule_label(scored: ScoredRule) -> str:
    """Best example of a rule with its score, e.g. 'give me a lamp (0.82)'."""
    best = scored.best_candidate
    if best is None:
        return "No examples yet"
    return f"{best.candidate.text} ({best.score:.2f})"


def _rank_key(scored: ScoredRule) -> float:
    best = scored.best_candidate
    return best.score if best is not None else float("-inf")


class NodeTester:
    """Evaluates utterances at a node and reports how each rule scored."""

    def __init__(self, graph: Graph, scorer: SimilarityScorer):
        self.evaluator = RuleEvaluator(graph, scorer)
        self.graph = graph

    async def test_utterance(self, node_id: str, utterance: str) -> NodeTestReport:
        node = self.graph.get_node(node_id)
        result = await self.evaluator.evaluate_node(utterance, node, world=None)
        if result.edge is not None:
            summary = f'Matched "{edge_name(result.edge) or result.edge.target}"'
        else:
            summary = "No match"
        return NodeTestReport(
            utterance=utterance,
            summary=summary,
            result=result,
            ranked_rules=sorted(result.scored_rules, key=_rank_key, reverse=True),
        )
