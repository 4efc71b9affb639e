"""Seed graphs for new projects and demos."""

import uuid

from dialograph.graph.models import (
    Edge,
    Graph,
    MatchCandidate,
    Node,
    RepeatedFailRule,
    SemanticMatchRule,
)


def _examples(*texts: str, anti: tuple[str, ...] = ()) -> SemanticMatchRule:
    candidates = [MatchCandidate(text=t) for t in texts]
    candidates.extend(MatchCandidate(text=t, anti_example=True) for t in anti)
    return SemanticMatchRule(match_candidates=candidates)


def create_welcome_graph() -> Graph:
    """Single-node graph every new project starts from."""
    start = Node(
        id=str(uuid.uuid4()),
        prompt="What's on your human mind?",
        retry_prompt="Answer the question, human.",
        fx=0.0,
        fy=0.0,
    )
    return Graph(id="hello_world", name="Hello World", start=start.id, nodes=[start])


def create_demo_graph() -> Graph:
    """The "Get Lamp" store: semantic branches, auto-advance and a repeated-fail exit."""
    welcome = Node(
        prompt=(
            "Welcome to the Lamp Store.  We love lamp, and we love you.  How can I be "
            "helpful to you on this particularly dark evening?"
        ),
        retry_prompt="We sell lamps, what can I do for you?",
        fx=433.9,
        fy=-53.8,
    )
    why = Node(
        title="But Why?",
        prompt=(
            "You've come to the right place.  We have literally hundreds of lamps here, "
            "but as well you know each lamp has its own secret purpose.  What is it you "
            "require of your lamp?"
        ),
        retry_prompt="Why do you need a lamp?",
        fx=433.3,
        fy=130.0,
    )
    present = Node(
        prompt=(
            "How nice!  I'd recommend the iLamp 6E, it was released just this week so "
            "they'll know you actually love them."
        ),
        auto_advance=True,
        fx=213.1,
        fy=415.2,
    )
    fire = Node(
        prompt=(
            "Nothing is as powerful and beautiful as a roaring blaze.  This antique oil "
            "lantern should serve your purposes neatly."
        ),
        auto_advance=True,
        fx=470.1,
        fy=410.8,
    )
    dark = Node(
        prompt=(
            "Indeed it is, the sun has not risen for three days now.  Some say it is the "
            "end times.  I would recommend The Lightmaster, its luminous flux is well "
            "over 9000!"
        ),
        auto_advance=True,
        fx=668.7,
        fy=376.0,
    )
    goodbye = Node(prompt="I hope you enjoy your new lamp", fx=285.0, fy=747.6)
    robbery = Node(
        prompt=(
            "Please!  No!  I have children...just take the lamps and go.  What...this "
            "lamp?  No, please, this was my great grandfathers, its all I have to "
            "remember him by.  I beg you... Nooooooo!"
        ),
        auto_advance=True,
        fx=-128.2,
        fy=219.8,
    )

    edges = [
        Edge(
            source=welcome.id,
            target=why.id,
            rules=[
                _examples(
                    "I would like a lamp",
                    "give me a lamp",
                    "one lamp please",
                    anti=("i love lamp",),
                )
            ],
        ),
        Edge(
            source=why.id,
            target=present.id,
            rules=[
                _examples("It's a present", "As a present", "I need it to give to someone")
            ],
        ),
        Edge(
            source=why.id,
            target=fire.id,
            rules=[_examples("to start a fire", "I want to commit arson")],
        ),
        Edge(
            source=why.id,
            target=dark.id,
            rules=[_examples("its very dark", "it is too dark", "its dark in here!")],
        ),
        Edge(source=present.id, target=goodbye.id, rules=[SemanticMatchRule()]),
        Edge(source=fire.id, target=goodbye.id, rules=[SemanticMatchRule()]),
        Edge(source=dark.id, target=goodbye.id, rules=[SemanticMatchRule()]),
        Edge(
            source=why.id,
            target=goodbye.id,
            rules=[
                RepeatedFailRule(
                    fail_count=3,
                    fail_message="Look, trust me.  You want this lamp right here.",
                )
            ],
        ),
        Edge(
            source=welcome.id,
            target=robbery.id,
            rules=[_examples("Be cool, this is a robbery")],
        ),
        Edge(source=robbery.id, target=goodbye.id, rules=[SemanticMatchRule()]),
    ]
    return Graph(
        id="demo_graph",
        name="Get Lamp",
        start=welcome.id,
        nodes=[welcome, why, present, fire, dark, goodbye, robbery],
        edges=edges,
    )
