"""Encoded shape and labeled entry types.

An EncodedShape holds the map representations of one finalized stroke:

- grid map: ``precision x precision`` density ratios over the bounding box,
  indexed ``grid_map[row][col]`` with row 0 at the bottom
- circle maps: ``precision`` rings x 4 quadrants of density ratios, centered on
  the center of mass and on the geometric median, indexed ``[ring][quadrant]``
- flat maps: ``precision ** 2`` integer bins counting line segments along the
  horizontal and vertical axis

Maps are stored as nested tuples so a shape can be shared freely without
copying. Shapes are produced by ``strokematch.core.encoder``.
"""

from dataclasses import dataclass
from typing import Any

from strokematch.domain.stroke import Bounds, Point

GridMap = tuple[tuple[float, ...], ...]
CircleMap = tuple[tuple[float, ...], ...]
FlatMap = tuple[int, ...]

QUADRANT_COUNT = 4


@dataclass(frozen=True)
class EncodedShape:
    """Map representations of a stroke at a fixed precision.

    Two shapes are only directly comparable when their precision matches.

    Attributes:
        precision: Resolution shared by all four representations
        points: The source point sequence, kept for re-encoding
        bounds: Extrema of the source points
        grid_map: Density ratio per grid cell
        circle_map_by_mass: Density ratio per ring/quadrant around the center of mass
        circle_map_by_median: Density ratio per ring/quadrant around the geometric median
        flat_map_horizontal: Segment count per bin along the x axis
        flat_map_vertical: Segment count per bin along the y axis
    """

    precision: int
    points: tuple[Point, ...]
    bounds: Bounds
    grid_map: GridMap
    circle_map_by_mass: CircleMap
    circle_map_by_median: CircleMap
    flat_map_horizontal: FlatMap
    flat_map_vertical: FlatMap

    @property
    def point_count(self) -> int:
        """Number of source points."""
        return len(self.points)

    def is_empty(self) -> bool:
        """Check if the shape was encoded from zero points."""
        return len(self.points) == 0

    def circle_map(self, use_median: bool = True) -> CircleMap:
        """Get the circle map for the requested center.

        Args:
            use_median: Geometric-median centered map (True) or
                center-of-mass centered map (False)

        Returns:
            The selected circle map
        """
        return self.circle_map_by_median if use_median else self.circle_map_by_mass

    def flat_map(self, horizontal: bool = True) -> FlatMap:
        """Get the horizontal or vertical flat map."""
        return self.flat_map_horizontal if horizontal else self.flat_map_vertical

    def _check_dimensions(self) -> None:
        p = self.precision
        if p < 1:
            raise ValueError(f"Shape precision must be positive, got {p}")
        if len(self.grid_map) != p or any(len(row) != p for row in self.grid_map):
            raise ValueError(f"grid_map is not {p}x{p}")
        for name in ("circle_map_by_mass", "circle_map_by_median"):
            rings = getattr(self, name)
            if len(rings) != p or any(len(ring) != QUADRANT_COUNT for ring in rings):
                raise ValueError(f"{name} is not {p}x{QUADRANT_COUNT}")
        for name in ("flat_map_horizontal", "flat_map_vertical"):
            if len(getattr(self, name)) != p * p:
                raise ValueError(f"{name} does not have {p * p} bins")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the shape, maps included
        """
        return {
            "precision": self.precision,
            "points": [[p.x, p.y] for p in self.points],
            "bounds": self.bounds.to_dict(),
            "grid_map": [list(row) for row in self.grid_map],
            "circle_map_by_mass": [list(ring) for ring in self.circle_map_by_mass],
            "circle_map_by_median": [list(ring) for ring in self.circle_map_by_median],
            "flat_map_horizontal": list(self.flat_map_horizontal),
            "flat_map_vertical": list(self.flat_map_vertical),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EncodedShape":
        """Deserialize from dictionary without recomputing the maps.

        Args:
            data: Dictionary representation of a shape

        Returns:
            EncodedShape instance

        Raises:
            ValueError: If a map does not match the stored precision
        """
        shape = cls(
            precision=int(data["precision"]),
            points=tuple(Point(float(x), float(y)) for x, y in data["points"]),
            bounds=Bounds.from_dict(data["bounds"]),
            grid_map=tuple(tuple(float(v) for v in row) for row in data["grid_map"]),
            circle_map_by_mass=tuple(
                tuple(float(v) for v in ring) for ring in data["circle_map_by_mass"]
            ),
            circle_map_by_median=tuple(
                tuple(float(v) for v in ring) for ring in data["circle_map_by_median"]
            ),
            flat_map_horizontal=tuple(int(v) for v in data["flat_map_horizontal"]),
            flat_map_vertical=tuple(int(v) for v in data["flat_map_vertical"]),
        )
        shape._check_dimensions()
        return shape


@dataclass(frozen=True)
class LabeledEntry:
    """A named reference shape stored in a library.

    Attributes:
        name: Label, unique within a library
        shape: Encoded reference stroke
    """

    name: str
    shape: EncodedShape

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with name and shape fields
        """
        return {"name": self.name, "shape": self.shape.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LabeledEntry":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with name and shape fields

        Returns:
            LabeledEntry instance
        """
        return cls(name=str(data["name"]), shape=EncodedShape.from_dict(data["shape"]))
