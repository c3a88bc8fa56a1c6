"""Domain models for strokematch.

This module contains the value types representing strokes, their encodings
and library entries. All models are:

- Immutable (frozen dataclasses, nested tuples for maps)
- Serializable to plain dictionaries for persistence
- Independent of how points are captured or rendered

Key classes:
- Point: A 2D point on a stroke
- Bounds: Extrema of a point sequence
- EncodedShape: The four map representations of a stroke
- LabeledEntry: A named reference shape
"""

from strokematch.domain.shape import (
    QUADRANT_COUNT,
    CircleMap,
    EncodedShape,
    FlatMap,
    GridMap,
    LabeledEntry,
)
from strokematch.domain.stroke import Bounds, Point

__all__: list[str] = [
    # Map aliases
    "CircleMap",
    "FlatMap",
    "GridMap",
    "QUADRANT_COUNT",
    # Core types
    "Point",
    "Bounds",
    "EncodedShape",
    "LabeledEntry",
]
