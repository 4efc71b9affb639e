"""World state: story-global string facts gating and updated by edges."""

import logging
from collections.abc import Iterable, Mapping, MutableMapping

from dialograph.graph.models import Condition, ConditionKind, Edge, Mutation, MutationKind

logger = logging.getLogger(__name__)

WorldState = dict[str, str]


def new_world(initial: Mapping[str, str] | None = None) -> WorldState:
    """Fresh world for a session, copied so callers keep their own mapping."""
    return dict(initial or {})


def condition_passes(condition: Condition, world: Mapping[str, str]) -> bool:
    """Require passes on an exact match; Forbid passes otherwise, absent key included."""
    matches = condition.key in world and world[condition.key] == condition.value
    if condition.kind is ConditionKind.REQUIRE:
        return matches
    return not matches


def conditions_pass(conditions: Iterable[Condition], world: Mapping[str, str]) -> bool:
    """AND over all conditions; an empty list passes."""
    return all(condition_passes(c, world) for c in conditions)


def apply_mutation(world: MutableMapping[str, str], mutation: Mutation) -> None:
    if mutation.kind is MutationKind.ADD:
        world[mutation.key] = mutation.value
    else:
        world.pop(mutation.key, None)


def apply_mutations(world: MutableMapping[str, str], edge: Edge) -> None:
    """Apply an edge's mutations in list order, in place."""
    for mutation in edge.mutations:
        apply_mutation(world, mutation)
    if edge.mutations:
        logger.debug(
            f"Applied {len(edge.mutations)} mutation(s) from {edge.source} -> {edge.target}"
        )
