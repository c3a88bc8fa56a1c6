"""Strokematch - Classify freehand strokes against a library of reference strokes.

Strokematch encodes a drawn stroke (an ordered sequence of 2D points) into
several coarse density maps and compares them against the stored encodings of
a named library, returning the closest label with a confidence percentage.

Example:
    >>> from strokematch.core import MatchLibrary, encode
    >>> library = MatchLibrary("letters", precision=5)
    >>> library.add("L", encode(l_points, 5))
    >>> match = library.best_match(encode(drawn_points, 5))
    >>> match.name, match.percent
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
