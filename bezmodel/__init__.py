"""Bézier curve modelling core: curves, splines, editor state and the JSON scene format."""

__version__ = "0.1.0"

__all__ = [
    "events",
    "config",
    "bezier",
    "curves",
    "splines",
    "schema",
    "records",
    "scenefile",
]