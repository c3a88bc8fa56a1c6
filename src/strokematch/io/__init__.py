"""Library and stroke file I/O for strokematch.

This module handles reading and writing JSON library files and stroke files.
It provides a clean abstraction layer between the file documents and the
domain models.

Key responsibilities:
- Load and save libraries with their weights, precision and entries
- Re-encode entries stored at another precision
- Load and save strokes as point sequences

Key classes:
- LibraryReader: Load library files
- LibraryWriter: Save library files
"""

from strokematch.io.reader import LibraryReader, read_stroke
from strokematch.io.writer import LibraryWriter, write_stroke

__all__ = [
    "LibraryReader",
    "LibraryWriter",
    "read_stroke",
    "write_stroke",
]
