"""Exception hierarchy for Strokematch."""


class StrokeMatchError(Exception):
    """Base exception for all Strokematch errors."""

    pass


class EncodingError(StrokeMatchError):
    """Errors related to shape encoding."""

    pass


class InvalidPrecisionError(EncodingError, ValueError):
    """Precision is not a positive integer."""

    def __init__(self, precision: object) -> None:
        self.precision = precision
        super().__init__(f"Precision must be a positive integer, got {precision!r}")


class LibraryError(StrokeMatchError):
    """Errors related to match libraries."""

    pass


class InvalidWeightError(LibraryError, ValueError):
    """A representation weight is negative."""

    def __init__(self, weight_name: str, value: float) -> None:
        self.weight_name = weight_name
        self.value = value
        super().__init__(f"Weight '{weight_name}' must be non-negative, got {value}")


class EntryNotFoundError(LibraryError):
    """Requested entry not found in library."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Entry '{name}' not found in library")


class LibraryNotFoundError(LibraryError):
    """Requested library index does not exist."""

    def __init__(self, index: int, count: int) -> None:
        self.index = index
        self.count = count
        super().__init__(f"Library index {index} out of range (have {count} libraries)")


class StorageError(StrokeMatchError):
    """Errors related to reading or writing files."""

    pass


class LibraryLoadError(StorageError):
    """Error loading a library file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load library '{path}': {reason}")


class LibrarySaveError(StorageError):
    """Error saving a library file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save library '{path}': {reason}")


class LibraryFormatError(StorageError):
    """Unsupported or invalid library document."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid library format '{path}': {details}")


class StrokeLoadError(StorageError):
    """Error loading a stroke file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load stroke '{path}': {reason}")


class StrokeSaveError(StorageError):
    """Error saving a stroke file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save stroke '{path}': {reason}")
