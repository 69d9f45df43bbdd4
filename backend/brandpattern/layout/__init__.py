"""Grid-scaffolded randomized layout."""

from brandpattern.layout.engine import GridSpec, generate_layout, grid_for

__all__ = ["GridSpec", "generate_layout", "grid_for"]
