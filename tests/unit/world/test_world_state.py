"""Unit tests for world state conditions and mutations."""

from dialograph.world.state import (
    apply_mutation,
    apply_mutations,
    condition_passes,
    conditions_pass,
    new_world,
)
from tests.factories import add, forbid, make_edge, remove, require


class TestConditions:
    def test_require_passes_on_exact_match(self):
        assert condition_passes(require("mood", "happy"), {"mood": "happy"})

    def test_require_fails_on_other_value(self):
        assert not condition_passes(require("mood", "happy"), {"mood": "sad"})

    def test_require_fails_on_absent_key(self):
        assert not condition_passes(require("mood", "happy"), {})

    def test_forbid_passes_on_absent_key(self):
        assert condition_passes(forbid("mood", "happy"), {})

    def test_forbid_passes_on_other_value(self):
        assert condition_passes(forbid("mood", "happy"), {"mood": "sad"})

    def test_forbid_fails_on_exact_match(self):
        assert not condition_passes(forbid("mood", "happy"), {"mood": "happy"})

    def test_empty_value_matches_present_empty_string(self):
        """Values compare as plain strings, empty string included."""
        assert condition_passes(require("flag", ""), {"flag": ""})
        assert not condition_passes(require("flag", ""), {})

    def test_empty_condition_list_passes(self):
        assert conditions_pass([], {})

    def test_all_conditions_must_pass(self):
        """
        GIVEN a require that passes and a forbid that fails
        WHEN checking both together
        THEN the edge is gated off
        """
        conditions = [require("a", "1"), forbid("b", "2")]

        assert conditions_pass(conditions, {"a": "1", "b": "3"})
        assert not conditions_pass(conditions, {"a": "1", "b": "2"})


class TestMutations:
    def test_add_sets_value(self):
        world = {}
        apply_mutation(world, add("k", "v"))
        assert world == {"k": "v"}

    def test_add_overwrites_value(self):
        world = {"k": "old"}
        apply_mutation(world, add("k", "new"))
        assert world == {"k": "new"}

    def test_remove_deletes_key(self):
        world = {"k": "v", "other": "x"}
        apply_mutation(world, remove("k"))
        assert world == {"other": "x"}

    def test_remove_missing_key_is_noop(self):
        world = {"other": "x"}
        apply_mutation(world, remove("k"))
        assert world == {"other": "x"}

    def test_mutations_apply_in_list_order(self):
        """
        GIVEN an edge with Add(k, a), Remove(k), Add(k, b)
        WHEN applying its mutations
        THEN the last one wins
        """
        # Arrange
        edge = make_edge("x", "y", mutations=[add("k", "a"), remove("k"), add("k", "b")])
        world = {}

        # Act
        apply_mutations(world, edge)

        # Assert
        assert world == {"k": "b"}

    def test_add_then_remove_leaves_key_absent(self):
        edge = make_edge("x", "y", mutations=[add("k", "a"), remove("k")])
        world = {}

        apply_mutations(world, edge)

        assert "k" not in world


def test_new_world_copies_initial_mapping():
    initial = {"k": "v"}

    world = new_world(initial)
    world["k"] = "changed"

    assert initial == {"k": "v"}
    assert new_world() == {}
