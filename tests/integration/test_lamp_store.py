"""Integration tests: the demo graph played end to end with the lexical scorer."""

import pytest

from dialograph.config.settings import SessionConfig
from dialograph.graph.demo import create_demo_graph
from dialograph.graph.editor import GraphEditor
from dialograph.persistence.serialization import graph_to_serializable, serializable_to_graph
from dialograph.runtime.session import DialogSession
from dialograph.scoring.lexical import LexicalScorer

pytestmark = pytest.mark.integration


def _bot(turn):
    return [m.text for m in turn.messages if not m.user]


@pytest.fixture
def session():
    graph = serializable_to_graph(graph_to_serializable(create_demo_graph()))
    return DialogSession(graph, LexicalScorer(), config=SessionConfig(seed=0))


@pytest.mark.asyncio
async def test_present_path(session):
    """
    GIVEN the Get Lamp store
    WHEN the user asks for a lamp as a present
    THEN the bot auto-advances through the recommendation to goodbye
    """
    # Arrange
    opening = session.start()

    # Act
    ask = await session.submit("give me a lamp")
    present = await session.submit("It's a present")

    # Assert
    assert opening.messages[0].text.startswith("Welcome to the Lamp Store")
    assert _bot(ask)[0].startswith("You've come to the right place")
    assert _bot(present)[1:] == ["I hope you enjoy your new lamp", "To be continued..."]
    assert "iLamp 6E" in _bot(present)[0]
    assert session.finished


@pytest.mark.asyncio
async def test_anti_example_keeps_user_at_welcome(session):
    session.start()

    turn = await session.submit("i love lamp")

    assert _bot(turn) == ["We sell lamps, what can I do for you?"]
    assert session.state.attempt_number == 1


@pytest.mark.asyncio
async def test_repeated_fail_pushes_the_lamp(session):
    """Three misses at 'But Why?' and the fourth turn takes the fallback."""
    session.start()
    await session.submit("one lamp please")

    misses = [await session.submit("blue cheese") for _ in range(3)]
    fallback = await session.submit("blue cheese")

    assert all(_bot(t) == ["Why do you need a lamp?"] for t in misses)
    assert _bot(fallback) == [
        "Look, trust me.  You want this lamp right here.",
        "I hope you enjoy your new lamp",
        "To be continued...",
    ]


@pytest.mark.asyncio
async def test_robbery_path(session):
    session.start()

    turn = await session.submit("be cool, this is a robbery")

    assert _bot(turn)[0].startswith("Please!  No!")
    assert _bot(turn)[-1] == "To be continued..."


@pytest.mark.asyncio
async def test_authoring_loop_reload(session):
    """Adding an example in the editor takes effect after reload."""
    graph = create_demo_graph()
    editor = GraphEditor(graph)
    welcome = graph.start
    why = graph.edges[0].target
    session.reload(graph)

    assert (await session.submit("purchase illumination")).step.edge is None

    editor.add_example(welcome, why, "purchase illumination")
    session.reload(graph)
    turn = await session.submit("purchase illumination")

    assert turn.step.edge.target == why


def test_layout_then_round_trip():
    graph = create_demo_graph()

    assert GraphEditor(graph).apply_auto_layout(162, 462, 260)
    restored = serializable_to_graph(graph_to_serializable(graph))

    assert [(n.fx, n.fy) for n in restored.nodes] == [(n.fx, n.fy) for n in graph.nodes]
