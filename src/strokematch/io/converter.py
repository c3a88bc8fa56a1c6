"""Conversion between JSON documents and domain models.

This module translates between the plain data stored in library and stroke
files and the strokematch domain models.

Library document layout::

    {
        "format_version": 1,
        "name": "letters",
        "precision": 5,
        "weights": {"grid": 1.0, "circle": 1.0, "horizontal": 1.0, "vertical": 1.0},
        "entries": [{"name": "Empty", "shape": {...}}, ...]
    }

Each entry carries either a full ``shape`` (see ``EncodedShape.to_dict``) or
only ``points``. Stroke documents are arrays of ``[x, y]`` pairs or of
``{"x": ..., "y": ...}`` objects.
"""

from typing import Any

from strokematch.core.encoder import ShapeEncoder
from strokematch.core.library import MatchLibrary, ScoreWeights
from strokematch.domain import EncodedShape, LabeledEntry, Point

FORMAT_VERSION = 1


def points_from_data(data: Any) -> list[Point]:
    """Convert a stroke document to points.

    Args:
        data: List of [x, y] pairs or {"x", "y"} objects

    Returns:
        Points in document order

    Raises:
        ValueError: If the document is not a list of points
    """
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of points, got {type(data).__name__}")

    points: list[Point] = []
    for index, item in enumerate(data):
        if isinstance(item, dict):
            if "x" not in item or "y" not in item:
                raise ValueError(f"Point {index} is missing 'x' or 'y'")
            points.append(Point.from_dict(item))
        elif isinstance(item, (list, tuple)) and len(item) == 2:
            points.append(Point(float(item[0]), float(item[1])))
        else:
            raise ValueError(f"Point {index} must be [x, y] or {{'x': .., 'y': ..}}")
    return points


def points_to_data(points: list[Point]) -> list[list[float]]:
    """Convert points to a stroke document."""
    return [[p.x, p.y] for p in points]


def library_to_dict(library: MatchLibrary) -> dict[str, Any]:
    """Serialize a library to a document.

    Args:
        library: Library to serialize

    Returns:
        Library document with every entry's full shape
    """
    return {
        "format_version": FORMAT_VERSION,
        "name": library.name,
        "precision": library.precision,
        "weights": library.weights.to_dict(),
        "entries": [entry.to_dict() for entry in library.entries],
    }


def _entry_from_dict(
    data: dict[str, Any], precision: int, encoder: ShapeEncoder
) -> LabeledEntry:
    name = str(data["name"])

    if "shape" in data:
        shape = EncodedShape.from_dict(data["shape"])
        if shape.precision != precision:
            shape = encoder.reencode(shape, precision)
    elif "points" in data:
        shape = encoder.encode(points_from_data(data["points"]), precision)
    else:
        raise ValueError(f"Entry '{name}' has neither 'shape' nor 'points'")

    return LabeledEntry(name, shape)


def library_from_dict(
    data: dict[str, Any], encoder: ShapeEncoder | None = None
) -> MatchLibrary:
    """Rebuild a library from a document.

    Entries stored at another precision than the library's, or stored as
    points only, are re-encoded. The reserved empty entry is restored when the
    document lacks it.

    Args:
        data: Library document
        encoder: Encoder for re-encoding (defaults if None)

    Returns:
        MatchLibrary with the document's name, precision, weights and entries

    Raises:
        ValueError: If the document is malformed or has an unknown version
        KeyError: If a required field is missing
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

    version = data.get("format_version", FORMAT_VERSION)
    if version != FORMAT_VERSION:
        raise ValueError(f"Unsupported format version {version}")

    encoder = encoder or ShapeEncoder()
    precision = int(data["precision"])
    weights = ScoreWeights(**data.get("weights", {}))

    library = MatchLibrary(
        str(data["name"]), precision=precision, weights=weights, encoder=encoder
    )
    for entry_data in data.get("entries", []):
        library.add_entry(_entry_from_dict(entry_data, precision, encoder))

    return library
