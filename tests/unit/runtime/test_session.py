"""Unit tests for preview sessions."""

import asyncio

import pytest

from dialograph.config.settings import SessionConfig
from dialograph.core.errors import NotReadyError, SessionBusyError
from dialograph.runtime.session import DialogSession
from tests.factories import make_edge, make_graph, make_node, repeated_fail, semantic
from tests.mocks import StubScorer, exact_match_scorer


def _texts(turn):
    return [(m.text, m.user) for m in turn.messages]


class TestStart:
    def test_start_shows_start_prompt(self, branching_graph):
        session = DialogSession(branching_graph, StubScorer())

        turn = session.start()

        assert _texts(turn) == [("prompt start", False)]
        assert not turn.finished
        assert session.state.current_node == "start"

    def test_start_on_leaf_finishes_immediately(self):
        session = DialogSession(make_graph(["only"]), StubScorer())

        turn = session.start()

        assert turn.finished
        assert [m.text for m in turn.messages] == ["prompt only", "To be continued..."]

    def test_start_follows_auto_advance(self):
        graph = make_graph(
            nodes=[make_node("intro", auto_advance=True), make_node("ask")],
            edges=[make_edge("intro", "ask"), make_edge("ask", "intro")],
        )
        session = DialogSession(graph, StubScorer())

        turn = session.start()

        assert [m.text for m in turn.messages] == ["prompt intro", "prompt ask"]
        assert session.state.current_node == "ask"

    def test_start_node_and_initial_world(self, story_graph):
        session = DialogSession(
            story_graph, StubScorer(), start_node="start", initial_world={"has_key": "yes"}
        )

        session.start()
        session.state.world["extra"] = "x"
        session.restart()

        assert session.state.world == {"has_key": "yes"}
        assert session.initial_world == {"has_key": "yes"}

    @pytest.mark.asyncio
    async def test_initial_world_applies_before_start(self, story_graph):
        """
        GIVEN a session built with an initial world but never started
        WHEN submitting an utterance whose edge requires that world
        THEN the condition sees the initial world and the edge is taken
        """
        # Arrange
        session = DialogSession(
            story_graph, exact_match_scorer(), initial_world={"has_key": "yes"}
        )

        # Act
        turn = await session.submit("open vault")

        # Assert
        assert turn.step.edge is not None
        assert session.state.current_node == "vault"
        assert session.state.world == {"has_key": "yes"}


class TestSubmit:
    @pytest.mark.asyncio
    async def test_no_match_shows_retry_prompt(self, branching_graph):
        session = DialogSession(branching_graph, StubScorer())
        session.start()

        turn = await session.submit("what?")

        assert _texts(turn) == [("what?", True), ("retry start", False)]
        assert session.state.attempt_number == 1

    @pytest.mark.asyncio
    async def test_match_reaching_leaf_ends_conversation(self, branching_graph):
        """
        GIVEN a session at the start node
        WHEN the user says something matching a leaf edge
        THEN the target prompt and end message are shown
        """
        # Arrange
        session = DialogSession(
            branching_graph, exact_match_scorer(), config=SessionConfig(end_message="The End")
        )
        session.start()

        # Act
        turn = await session.submit("yes")

        # Assert
        assert _texts(turn) == [("yes", True), ("prompt accepted", False), ("The End", False)]
        assert turn.finished and session.finished

    @pytest.mark.asyncio
    async def test_fail_message_precedes_target_prompt(self):
        graph = make_graph(
            ["why", "goodbye", "other"],
            edges=[
                make_edge("why", "other", semantic("something")),
                make_edge("why", "goodbye", repeated_fail(1, "Trust me.")),
            ],
        )
        session = DialogSession(graph, StubScorer())
        session.start()

        await session.submit("uh")
        turn = await session.submit("uh")

        assert [m.text for m in turn.messages] == [
            "uh",
            "Trust me.",
            "prompt goodbye",
            "To be continued...",
        ]

    @pytest.mark.asyncio
    async def test_blank_and_finished_input_is_ignored(self, branching_graph):
        session = DialogSession(branching_graph, exact_match_scorer())
        session.start()

        blank = await session.submit("   ")
        await session.submit("no")
        after_end = await session.submit("yes")

        assert blank.messages == [] and blank.step is None
        assert after_end.messages == [] and after_end.finished
        assert session.state.current_node == "declined"

    @pytest.mark.asyncio
    async def test_transcript_accumulates(self, branching_graph):
        session = DialogSession(branching_graph, exact_match_scorer())
        session.start()

        await session.submit("hmm")
        await session.submit("sure")

        assert [m.user for m in session.transcript] == [False, True, False, True, False, False]

    @pytest.mark.asyncio
    async def test_not_ready_propagates_and_keeps_state(self, branching_graph):
        scorer = StubScorer(ready=False)
        session = DialogSession(branching_graph, scorer)
        session.start()

        with pytest.raises(NotReadyError):
            await session.submit("yes")

        assert session.state.current_node == "start"
        assert len(session.transcript) == 1

    @pytest.mark.asyncio
    async def test_concurrent_submit_is_rejected(self, branching_graph):
        """A second utterance while the first is being scored raises SessionBusyError."""
        # Arrange
        release = asyncio.Event()

        class SlowScorer(StubScorer):
            async def score(self, utterance, candidates):
                await release.wait()
                return await super().score(utterance, candidates)

        session = DialogSession(branching_graph, SlowScorer())
        session.start()

        # Act
        first = asyncio.create_task(session.submit("one"))
        await asyncio.sleep(0)

        # Assert
        with pytest.raises(SessionBusyError):
            await session.submit("two")
        with pytest.raises(SessionBusyError):
            session.restart()
        release.set()
        turn = await first
        assert turn.messages[0].text == "one"


class TestSnapshot:
    @pytest.mark.asyncio
    async def test_editing_source_graph_does_not_affect_session(self, branching_graph):
        session = DialogSession(branching_graph, exact_match_scorer())
        session.start()

        branching_graph.get_node("accepted").prompt = "edited"
        turn = await session.submit("yes")

        assert "prompt accepted" in [m.text for m in turn.messages]

    @pytest.mark.asyncio
    async def test_reload_picks_up_edits(self, branching_graph):
        session = DialogSession(branching_graph, exact_match_scorer())
        session.start()

        branching_graph.get_node("start").prompt = "edited start"
        turn = session.reload(branching_graph)

        assert [m.text for m in turn.messages] == ["edited start"]
