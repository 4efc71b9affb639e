"""Deterministic layered auto-layout."""

from dialograph.layout.levels import compute_levels, layout_positions

__all__ = ["compute_levels", "layout_positions"]
