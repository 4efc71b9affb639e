"""World state handling."""

from dialograph.world.state import (
    WorldState,
    apply_mutation,
    apply_mutations,
    condition_passes,
    conditions_pass,
    new_world,
)

__all__ = [
    "WorldState",
    "new_world",
    "condition_passes",
    "conditions_pass",
    "apply_mutation",
    "apply_mutations",
]
