"""Core recognition algorithms for strokematch.

This module contains the core algorithms for:

- Geometry operations (center of mass, geometric median, bounds)
- Shape encoding (grid, circle and flat map representations)
- Representation comparison (MSE, shift-tolerant mismatch, bias coupling)
- Library scoring, ranking and confidence percentages

All encoding and comparison functions are:
- Stateless and deterministic
- Pure (no I/O, no side effects)
- Non-raising on degenerate geometry or incomparable shapes

Key functions:
- center_of_mass: Arithmetic mean of a point sequence
- geometric_median: Weiszfeld approximation of the geometric median
- bounds_of: Extrema of a point sequence
- encode: Encode a stroke at a precision
- grid_difference / circle_difference / flat_map_difference: Pairwise differences
- bias_correct: Couple grid and circle differences
- score_against: Weighted raw score of one comparison
- to_percentages: Raw scores to confidence percentages

Key classes:
- ShapeEncoder: Builds EncodedShape instances
- MatchLibrary: Named collection of labeled shapes, ranks input shapes
- DrawingRecognizer: Session over several libraries with history
"""

from strokematch.core.comparator import (
    MAX_DIFFERENCE,
    bias_correct,
    circle_difference,
    flat_map_difference,
    flat_sequence_difference,
    grid_difference,
)
from strokematch.core.encoder import (
    ShapeEncoder,
    bin_segments,
    encode,
    quadrant_index,
    segment_lines,
)
from strokematch.core.geometry import (
    bounds_of,
    center_of_mass,
    distance,
    geometric_median,
)
from strokematch.core.library import (
    EMPTY_ENTRY_NAME,
    Match,
    MatchLibrary,
    ScoreBreakdown,
    ScoreWeights,
    score_against,
    to_percentages,
)
from strokematch.core.recognizer import DrawingRecognizer

__all__ = [
    # Constants
    "EMPTY_ENTRY_NAME",
    "MAX_DIFFERENCE",
    # Recognizer classes
    "DrawingRecognizer",
    # Library classes
    "Match",
    "MatchLibrary",
    "ScoreBreakdown",
    "ScoreWeights",
    # Encoder classes
    "ShapeEncoder",
    # Comparison functions
    "bias_correct",
    "bin_segments",
    # Geometry functions
    "bounds_of",
    "center_of_mass",
    "circle_difference",
    "distance",
    "encode",
    "flat_map_difference",
    "flat_sequence_difference",
    "geometric_median",
    "grid_difference",
    "quadrant_index",
    "score_against",
    "segment_lines",
    "to_percentages",
]
