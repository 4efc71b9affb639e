"""Shared fixtures for dialograph tests.

Uses StubScorer for deterministic, fast tests without loading any model.
"""

import pytest

from dialograph.graph.models import Graph
from tests.factories import (
    add,
    make_edge,
    make_graph,
    make_node,
    repeated_fail,
    require,
    semantic,
)
from tests.mocks import StubScorer


@pytest.fixture
def stub_scorer() -> StubScorer:
    return StubScorer()


@pytest.fixture
def branching_graph() -> Graph:
    """start --(yes)--> accepted, start --(no)--> declined."""
    return make_graph(
        ["start", "accepted", "declined"],
        edges=[
            make_edge("start", "accepted", semantic("yes", "sure")),
            make_edge("start", "declined", semantic("no", "nope")),
        ],
    )


@pytest.fixture
def story_graph() -> Graph:
    """Small story with world state, auto-advance and a repeated-fail exit.

    start --(key)--> vault [requires has_key]
    start --(look)--> hall [adds has_key]
    hall (auto) --> start
    start --(fail x2)--> lost
    """
    return make_graph(
        nodes=[
            make_node("start"),
            make_node("vault"),
            make_node("hall", auto_advance=True),
            make_node("lost", prompt="You wander off."),
        ],
        edges=[
            make_edge(
                "start", "vault", semantic("open vault"), conditions=[require("has_key", "yes")]
            ),
            make_edge("start", "hall", semantic("look around"), mutations=[add("has_key", "yes")]),
            make_edge("hall", "start", semantic()),
            make_edge("start", "lost", repeated_fail(2, "You give up.")),
        ],
    )
