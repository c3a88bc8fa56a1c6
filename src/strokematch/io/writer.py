"""Writers for saving libraries and strokes.

This module provides the LibraryWriter class for writing a MatchLibrary to a
JSON library file, and write_stroke for saving a single stroke.
"""

import json
from pathlib import Path

from strokematch.core.library import MatchLibrary
from strokematch.domain import Point
from strokematch.exceptions import LibrarySaveError, StrokeSaveError
from strokematch.io.converter import library_to_dict, points_to_data


def write_stroke(path: Path, points: list[Point]) -> None:
    """Save a stroke as a JSON array of [x, y] pairs.

    Args:
        path: Destination file
        points: Points in drawing order

    Raises:
        StrokeSaveError: If the file cannot be written
    """
    try:
        path.write_text(json.dumps(points_to_data(points)), encoding="utf-8")
    except OSError as e:
        raise StrokeSaveError(str(path), str(e)) from e


class LibraryWriter:
    """Writes libraries as JSON documents.

    The document is written to a temporary sibling file first and then moved
    over the target, so an interrupted save leaves the old file intact.

    Example:
        writer = LibraryWriter(library, Path("letters.json"))
        writer.save()
    """

    def __init__(self, library: MatchLibrary, output_path: Path) -> None:
        """Initialize the library writer.

        Args:
            library: Library to write
            output_path: Path where the library will be saved
        """
        self._library = library
        self._output_path = output_path

    def save(self) -> None:
        """Save the library to the output path.

        Raises:
            LibrarySaveError: If the file cannot be written
        """
        tmp_path = self._output_path.with_name(self._output_path.name + ".tmp")
        try:
            self._output_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps(library_to_dict(self._library), indent=2),
                encoding="utf-8",
            )
            tmp_path.replace(self._output_path)
        except OSError as e:
            if tmp_path.exists():
                tmp_path.unlink()
            raise LibrarySaveError(str(self._output_path), str(e)) from e
