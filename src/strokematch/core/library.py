"""Match library: labeled reference shapes and weighted ranking.

A MatchLibrary stores named reference shapes and ranks an input shape against
all of them. Scoring for one candidate works in three steps:

1. Compute four raw differences. Grid and circle MSEs are scaled by 100 to
   bring them to the magnitude of the flat map mismatch fractions.
2. Couple the grid and circle differences with ``bias_correct``.
3. Fuse the four values with the library's per-representation weights.

Lower raw scores are closer matches. A ranked list is converted to confidence
percentages relative to the mean raw score of the list.
"""

import logging
import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from strokematch.config import EncoderConfig, WeightsConfig
from strokematch.core.comparator import (
    MAX_DIFFERENCE,
    bias_correct,
    circle_difference,
    flat_map_difference,
    grid_difference,
)
from strokematch.core.encoder import ShapeEncoder, validate_precision
from strokematch.domain import EncodedShape, LabeledEntry
from strokematch.exceptions import InvalidWeightError

logger = logging.getLogger(__name__)

EMPTY_ENTRY_NAME = "Empty"

# Grid and circle MSEs are much smaller than flat map mismatch fractions
DENSITY_SCALE = 100.0


@dataclass(frozen=True)
class ScoreWeights:
    """Weights applied to each representation difference.

    Attributes:
        grid: Grid map weight
        circle: Circle map weight
        horizontal: Horizontal flat map weight
        vertical: Vertical flat map weight
    """

    grid: float = 1.0
    circle: float = 1.0
    horizontal: float = 1.0
    vertical: float = 1.0

    def __post_init__(self) -> None:
        for name in ("grid", "circle", "horizontal", "vertical"):
            value = getattr(self, name)
            if value < 0:
                raise InvalidWeightError(name, value)

    @classmethod
    def from_config(cls, config: WeightsConfig) -> "ScoreWeights":
        """Build weights from a WeightsConfig."""
        return cls(
            grid=config.grid,
            circle=config.circle,
            horizontal=config.horizontal,
            vertical=config.vertical,
        )

    def to_dict(self) -> dict[str, float]:
        """Serialize to dictionary."""
        return {
            "grid": self.grid,
            "circle": self.circle,
            "horizontal": self.horizontal,
            "vertical": self.vertical,
        }


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-representation differences of one comparison.

    Grid and circle values are scaled and bias corrected; none of the four
    are weighted. ``total`` is the weighted raw score.
    """

    grid: float
    circle: float
    horizontal: float
    vertical: float
    total: float


@dataclass(frozen=True)
class Match:
    """One ranked candidate.

    Attributes:
        entry: The library entry compared against
        score: Raw score (lower is closer)
        percent: Confidence in [0, 100], truncated to two decimals
    """

    entry: LabeledEntry
    score: float
    percent: float

    @property
    def name(self) -> str:
        """Label of the matched entry."""
        return self.entry.name


def score_against(
    shape: EncodedShape, reference: EncodedShape, weights: ScoreWeights
) -> ScoreBreakdown:
    """Score a shape against one reference shape.

    Args:
        shape: Shape being classified
        reference: Stored reference shape
        weights: Per-representation weights

    Returns:
        ScoreBreakdown whose total is the raw score
    """
    grid = DENSITY_SCALE * grid_difference(shape, reference)
    circle = DENSITY_SCALE * circle_difference(shape, reference, use_median=True)
    horizontal = flat_map_difference(shape, reference, horizontal=True)
    vertical = flat_map_difference(shape, reference, horizontal=False)

    grid, circle = bias_correct(grid, circle)

    total = (
        horizontal * weights.horizontal
        + vertical * weights.vertical
        + circle * weights.circle
        + grid * weights.grid
    )
    return ScoreBreakdown(
        grid=grid, circle=circle, horizontal=horizontal, vertical=vertical, total=total
    )


def to_percentages(scores: Sequence[float]) -> list[float]:
    """Convert raw scores to confidence percentages.

    Each score is divided by the mean score (1 if the mean is 0), capped at 1,
    and mapped to ``100 - 100 * ratio``, truncated to two decimals. A perfect
    score of 0 gives 100; scores at or above the mean give 0.

    Args:
        scores: Raw scores

    Returns:
        Percentages in the same order

    Examples:
        >>> to_percentages([1.0, 8.0])
        [77.77, 0.0]
    """
    if not scores:
        return []

    mean = sum(scores) / len(scores)
    if mean == 0:
        mean = 1.0

    percentages: list[float] = []
    for score in scores:
        ratio = min(score / mean, 1.0)
        percent = 100 - 100 * ratio
        percentages.append(math.trunc(percent * 100) / 100)
    return percentages


class MatchLibrary:
    """A named collection of labeled reference shapes.

    Entries are keyed by name and keep insertion order. The library always
    starts with a reserved ``"Empty"`` entry encoded from zero points, and
    ``clear()`` puts it back.

    Example:
        library = MatchLibrary("shapes", precision=5)
        library.add("circle", encode(circle_points, 5))
        match = library.best_match(encode(drawn_points, 5))
    """

    def __init__(
        self,
        name: str,
        precision: int = 5,
        weights: ScoreWeights | None = None,
        encoder: ShapeEncoder | None = None,
    ) -> None:
        """Initialize a library holding only the reserved empty entry.

        Args:
            name: Library name, used for identification
            precision: Precision of the reserved entry and of re-encoding
            weights: Scoring weights (all 1.0 if None)
            encoder: Encoder used for the reserved entry and re-encoding

        Raises:
            InvalidPrecisionError: If precision is not a positive integer
        """
        self.name = name
        self._precision = validate_precision(precision)
        self.weights = weights or ScoreWeights()
        self._encoder = encoder or ShapeEncoder()
        self._entries: dict[str, LabeledEntry] = {}
        self._add_empty_entry()

    @classmethod
    def from_config(
        cls,
        name: str,
        encoder_config: EncoderConfig,
        weights_config: WeightsConfig,
    ) -> "MatchLibrary":
        """Create a library from encoder and weight settings."""
        return cls(
            name,
            precision=encoder_config.precision,
            weights=ScoreWeights.from_config(weights_config),
            encoder=ShapeEncoder(encoder_config),
        )

    @property
    def precision(self) -> int:
        """Precision entries are encoded at."""
        return self._precision

    @property
    def encoder(self) -> ShapeEncoder:
        """Encoder used by this library."""
        return self._encoder

    @property
    def entries(self) -> tuple[LabeledEntry, ...]:
        """Stored entries in insertion order."""
        return tuple(self._entries.values())

    @property
    def names(self) -> list[str]:
        """Stored entry names in insertion order."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LabeledEntry]:
        return iter(self.entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def get(self, name: str) -> LabeledEntry | None:
        """Look up an entry by name, None if absent."""
        return self._entries.get(name)

    def _add_empty_entry(self) -> None:
        empty = self._encoder.encode([], self._precision)
        self._entries[EMPTY_ENTRY_NAME] = LabeledEntry(EMPTY_ENTRY_NAME, empty)

    def add(self, name: str, shape: EncodedShape) -> LabeledEntry:
        """Add an entry, replacing any entry with the same name in place.

        Args:
            name: Entry label
            shape: Encoded reference stroke

        Returns:
            The stored entry
        """
        return self.add_entry(LabeledEntry(name, shape))

    def add_entry(self, entry: LabeledEntry) -> LabeledEntry:
        """Add a prebuilt entry, replacing any entry with the same name in place."""
        if entry.shape.precision != self._precision:
            logger.debug(
                "Entry '%s' has precision %d, library '%s' uses %d",
                entry.name,
                entry.shape.precision,
                self.name,
                self._precision,
            )

        if entry.name in self._entries:
            logger.debug("Replacing entry '%s' in library '%s'", entry.name, self.name)

        # Assigning an existing key keeps its position
        self._entries[entry.name] = entry
        return entry

    def remove(self, name: str) -> LabeledEntry | None:
        """Remove an entry by name.

        Returns:
            The removed entry, or None if no entry had that name
        """
        return self._entries.pop(name, None)

    def remove_entry(self, entry: LabeledEntry) -> bool:
        """Remove a specific entry if it is the one stored under its name.

        Returns:
            True if the entry was removed
        """
        if self._entries.get(entry.name) != entry:
            return False
        del self._entries[entry.name]
        return True

    def clear(self) -> None:
        """Remove every entry, leaving only the reserved empty entry."""
        self._entries = {}
        self._add_empty_entry()

    def set_weights(
        self,
        grid: float = 1.0,
        circle: float = 1.0,
        horizontal: float = 1.0,
        vertical: float = 1.0,
    ) -> None:
        """Set the per-representation weights used when scoring.

        Raises:
            InvalidWeightError: If any weight is negative
        """
        self.weights = ScoreWeights(
            grid=grid, circle=circle, horizontal=horizontal, vertical=vertical
        )

    def set_precision(self, precision: int) -> None:
        """Re-encode every stored entry at a new precision.

        Raises:
            InvalidPrecisionError: If precision is not a positive integer
        """
        validate_precision(precision)
        self._entries = {
            name: LabeledEntry(name, self._encoder.reencode(entry.shape, precision))
            for name, entry in self._entries.items()
        }
        self._precision = precision

    def score(self, shape: EncodedShape, entry: LabeledEntry) -> ScoreBreakdown:
        """Score a shape against one entry with this library's weights."""
        return score_against(shape, entry.shape, self.weights)

    def rank(self, shape: EncodedShape) -> list[Match]:
        """Rank every stored entry against a shape.

        Args:
            shape: Shape being classified

        Returns:
            One Match per entry, sorted by raw score ascending (ties keep
            insertion order), with percentages relative to the mean score
        """
        scored = [(entry, self.score(shape, entry).total) for entry in self._entries.values()]
        scored.sort(key=lambda pair: pair[1])

        percentages = to_percentages([score for _, score in scored])
        matches = [
            Match(entry=entry, score=score, percent=percent)
            for (entry, score), percent in zip(scored, percentages)
        ]

        if matches:
            logger.debug(
                "Ranked %d entries in '%s', best '%s' (%.2f%%)",
                len(matches),
                self.name,
                matches[0].name,
                matches[0].percent,
            )
        return matches

    def best_match(self, shape: EncodedShape) -> Match | None:
        """Get the closest entry to a shape, None if the library is empty."""
        matches = self.rank(shape)
        return matches[0] if matches else None

    def compare_entries(self, first: str, second: str) -> float:
        """Raw score between two stored entries.

        Returns:
            The raw score, or ``MAX_DIFFERENCE`` if either name is missing
        """
        entry = self._entries.get(first)
        other = self._entries.get(second)
        if entry is None or other is None:
            logger.debug("Cannot compare '%s' and '%s': name not found", first, second)
            return MAX_DIFFERENCE
        return self.score(entry.shape, other).total
