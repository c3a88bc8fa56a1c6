"""Readers for library and stroke files.

This module provides the LibraryReader class for loading library files into
MatchLibrary instances, and read_stroke for loading a single stroke.
"""

import json
from pathlib import Path

from strokematch.core.encoder import ShapeEncoder
from strokematch.core.library import MatchLibrary
from strokematch.domain import Point
from strokematch.exceptions import LibraryFormatError, LibraryLoadError, StrokeLoadError
from strokematch.io.converter import library_from_dict, points_from_data


def read_stroke(path: Path) -> list[Point]:
    """Load a stroke file.

    Args:
        path: JSON file holding a list of points

    Returns:
        Points in drawing order

    Raises:
        StrokeLoadError: If the file is missing, not JSON, or not a point list
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return points_from_data(data)
    except (OSError, ValueError, TypeError) as e:
        raise StrokeLoadError(str(path), str(e)) from e


class LibraryReader:
    """Loads library files.

    Example:
        reader = LibraryReader(Path("letters.json"))
        reader.load()
        library = reader.library
    """

    def __init__(self, library_path: Path, encoder: ShapeEncoder | None = None) -> None:
        """Initialize the library reader.

        Args:
            library_path: Path to the JSON library file
            encoder: Encoder used for entries that need re-encoding
        """
        self._library_path = library_path
        self._encoder = encoder
        self._library: MatchLibrary | None = None

    def load(self) -> None:
        """Load the library file.

        Raises:
            LibraryLoadError: If the file does not exist or cannot be read
            LibraryFormatError: If the file is not a valid library document
        """
        if not self._library_path.exists():
            raise LibraryLoadError(str(self._library_path), "file not found")

        try:
            text = self._library_path.read_text(encoding="utf-8")
        except OSError as e:
            raise LibraryLoadError(str(self._library_path), str(e)) from e

        try:
            data = json.loads(text)
            self._library = library_from_dict(data, self._encoder)
        except (ValueError, KeyError, TypeError) as e:
            raise LibraryFormatError(str(self._library_path), str(e)) from e

    @property
    def library(self) -> MatchLibrary:
        """Return the loaded library.

        Raises:
            RuntimeError: If the library has not been loaded yet
        """
        if self._library is None:
            raise RuntimeError("Library not loaded. Call load() first.")
        return self._library

    def __enter__(self) -> "LibraryReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self._library = None
