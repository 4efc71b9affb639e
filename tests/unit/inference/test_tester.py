"""Unit tests for the single-node utterance tester."""

import pytest

from dialograph.inference.evaluator import ScoredRule
from dialograph.inference.tester import NodeTester, rule_label
from tests.factories import make_edge, semantic
from tests.mocks import StubScorer


class TestNodeTester:
    @pytest.mark.asyncio
    async def test_match_summary_uses_edge_name(self, branching_graph):
        tester = NodeTester(branching_graph, StubScorer({"nope": 0.9, "yes": 0.2}))

        report = await tester.test_utterance("start", "nah")

        assert report.summary == 'Matched "no"'
        assert report.result.edge.target == "declined"

    @pytest.mark.asyncio
    async def test_no_match_summary(self, branching_graph):
        report = await NodeTester(branching_graph, StubScorer()).test_utterance("start", "??")

        assert report.summary == "No match"
        assert report.utterance == "??"

    @pytest.mark.asyncio
    async def test_rules_ranked_by_best_score(self, branching_graph):
        tester = NodeTester(branching_graph, StubScorer({"yes": 0.3, "nope": 0.4}))

        report = await tester.test_utterance("start", "hmm")

        assert [r.edge.target for r in report.ranked_rules] == ["declined", "accepted"]
        assert [rule_label(r) for r in report.ranked_rules] == ["nope (0.40)", "yes (0.30)"]

    @pytest.mark.asyncio
    async def test_conditions_are_ignored(self, story_graph):
        """The tester has no world, so gated edges are scored too."""
        report = await NodeTester(story_graph, StubScorer({"open vault": 0.9})).test_utterance(
            "start", "open the vault"
        )

        assert report.result.edge.target == "vault"


def test_rule_label_without_examples():
    rule = semantic()
    scored = ScoredRule(edge=make_edge("a", "b", rule), rule=rule, rule_index=0)

    assert rule_label(scored) == "No examples yet"
