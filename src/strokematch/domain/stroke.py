"""Core geometric types for stroke representation.

This module defines the fundamental geometric types used throughout strokematch:
- Point: A 2D point on a drawn stroke
- Bounds: The axis-aligned extrema of a point sequence
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts. Points have no identity
    beyond their value; a stroke may contain duplicates.

    Attributes:
        x: X coordinate in input units
        y: Y coordinate in input units
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))


@dataclass(frozen=True, slots=True)
class Bounds:
    """Extrema of a point sequence.

    For any non-empty sequence ``left <= right`` and ``bottom <= top``.
    The empty sequence yields all-zero bounds.

    Attributes:
        left: Smallest x coordinate
        right: Largest x coordinate
        top: Largest y coordinate
        bottom: Smallest y coordinate
    """

    left: float = 0.0
    right: float = 0.0
    top: float = 0.0
    bottom: float = 0.0

    @property
    def width(self) -> float:
        """Horizontal extent."""
        return self.right - self.left

    @property
    def height(self) -> float:
        """Vertical extent."""
        return self.top - self.bottom

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with left, right, top and bottom fields
        """
        return {
            "left": self.left,
            "right": self.right,
            "top": self.top,
            "bottom": self.bottom,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Bounds":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with left, right, top and bottom fields

        Returns:
            Bounds instance
        """
        return cls(
            left=float(data["left"]),
            right=float(data["right"]),
            top=float(data["top"]),
            bottom=float(data["bottom"]),
        )
