"""Brand pattern generator: randomized tiled patterns from uploaded shapes."""

__version__ = "0.1.0"
