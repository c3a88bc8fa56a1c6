"""Recognition session over a set of match libraries.

The DrawingRecognizer is the synchronous boundary a UI or controller layer
talks to. It receives finalized strokes as point sequences and never polls
for input itself. It keeps:

- an ordered list of libraries with one current selection
- a history of recognized labels
- recognition statistics through a RecognitionLogger
"""

import time
from collections.abc import Sequence

import structlog

from strokematch.config import StrokeMatchSettings
from strokematch.core.encoder import ShapeEncoder
from strokematch.core.library import EMPTY_ENTRY_NAME, Match, MatchLibrary, ScoreWeights
from strokematch.domain import EncodedShape, LabeledEntry, Point
from strokematch.exceptions import EntryNotFoundError, LibraryNotFoundError
from strokematch.utils import RecognitionLogger, RecognitionStats


class DrawingRecognizer:
    """Coordinates encoding, library selection and recognition.

    Example:
        recognizer = DrawingRecognizer(StrokeMatchSettings())
        recognizer.add_drawing("circle", circle_points)
        match = recognizer.recognize(drawn_points)
        print(match.name, match.percent)
    """

    def __init__(
        self,
        settings: StrokeMatchSettings | None = None,
        libraries: Sequence[MatchLibrary] | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the recognizer.

        Args:
            settings: Encoder, weight and library settings (defaults if None)
            libraries: Existing libraries to use instead of creating the
                configured default ones
            logger: Structured logger (the "strokematch" logger if None)
        """
        self.settings = settings or StrokeMatchSettings()
        self.encoder = ShapeEncoder(self.settings.encoder)
        self.logger = logger or structlog.get_logger("strokematch")
        self.recognition_logger = RecognitionLogger(self.logger)

        if libraries:
            self._libraries = list(libraries)
        else:
            self._libraries = [
                self._new_library(name) for name in self.settings.library.default_names
            ]
        self._current = 0
        self._history: list[str] = []

    def _new_library(self, name: str) -> MatchLibrary:
        return MatchLibrary(
            name,
            precision=self.settings.encoder.precision,
            weights=ScoreWeights.from_config(self.settings.weights),
            encoder=self.encoder,
        )

    @property
    def libraries(self) -> list[MatchLibrary]:
        """All libraries, in selection-index order."""
        return list(self._libraries)

    @property
    def current_library(self) -> MatchLibrary:
        """The library used for recognition and new drawings."""
        return self._libraries[self._current]

    @property
    def current_index(self) -> int:
        """Index of the current library."""
        return self._current

    @property
    def history(self) -> list[str]:
        """Labels of every recognized drawing, oldest first."""
        return list(self._history)

    @property
    def stats(self) -> RecognitionStats:
        """Recognition statistics for this session."""
        return self.recognition_logger.stats

    def add_library(self, name: str) -> MatchLibrary:
        """Create a library with the configured precision and weights.

        Returns:
            The new library (not selected)
        """
        library = self._new_library(name)
        self._libraries.append(library)
        return library

    def select_library(self, index: int) -> MatchLibrary:
        """Make the library at ``index`` the current one.

        Raises:
            LibraryNotFoundError: If index is out of range
        """
        if not 0 <= index < len(self._libraries):
            raise LibraryNotFoundError(index, len(self._libraries))

        self._current = index
        self.recognition_logger.log_library_selected(self.current_library.name, index)
        return self.current_library

    def encode(self, points: Sequence[Point]) -> EncodedShape:
        """Encode a stroke at the current library's precision."""
        return self.encoder.encode(points, self.current_library.precision)

    def rank(self, points: Sequence[Point]) -> list[Match]:
        """Rank every entry of the current library against a stroke."""
        return self.current_library.rank(self.encode(points))

    def recognize(self, points: Sequence[Point]) -> Match | None:
        """Find the closest entry of the current library to a stroke.

        The matched label is appended to the history.

        Returns:
            Best match, or None if the current library has no entries
        """
        matches = self.recognize_ranked(points)
        return matches[0] if matches else None

    def recognize_ranked(self, points: Sequence[Point]) -> list[Match]:
        """Rank a stroke once and record the best match like ``recognize``.

        Returns:
            Every entry of the current library, best first
        """
        start_time = time.time()
        library = self.current_library
        matches = library.rank(self.encode(points))
        duration_ms = (time.time() - start_time) * 1000

        best = matches[0] if matches else None
        if best is not None:
            self._history.append(best.name)

        self.recognition_logger.log_recognition(
            library=library.name,
            name=best.name if best else None,
            percent=best.percent if best else 0.0,
            candidates=len(matches),
            duration_ms=duration_ms,
        )
        return matches

    def add_drawing(self, name: str, points: Sequence[Point]) -> LabeledEntry:
        """Encode a stroke and store it in the current library under ``name``.

        An existing entry with the same name is replaced in place.
        """
        library = self.current_library
        replaced = name in library
        entry = library.add(name, self.encode(points))
        self.recognition_logger.log_entry_added(
            library.name, name, entry.shape.point_count, replaced
        )
        return entry

    def remove_drawing(self, name: str) -> LabeledEntry:
        """Remove an entry from the current library.

        Raises:
            EntryNotFoundError: If the current library has no such entry
        """
        library = self.current_library
        removed = library.remove(name)
        if removed is None:
            raise EntryNotFoundError(name)

        self.recognition_logger.log_entry_removed(library.name, name)
        return removed

    def clear_current_library(self) -> None:
        """Clear the current library back to its reserved empty entry."""
        library = self.current_library
        removed = sum(1 for name in library.names if name != EMPTY_ENTRY_NAME)
        library.clear()
        self.recognition_logger.log_library_cleared(library.name, removed)

    def set_precision(self, precision: int) -> None:
        """Re-encode every library at a new precision."""
        for library in self._libraries:
            library.set_precision(precision)
        self.recognition_logger.log_precision_changed(precision, len(self._libraries))

    def clear_history(self) -> None:
        """Forget all recognized labels."""
        self._history.clear()
