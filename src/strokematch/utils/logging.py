"""Logging utilities for Strokematch."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers installed by configure_logging, replaced on reconfiguration
_installed_handlers: list[logging.Handler] = []


@dataclass
class RecognitionStats:
    """Statistics from a recognition session."""

    recognition_count: int = 0
    entries_added: int = 0
    entries_removed: int = 0
    libraries_cleared: int = 0
    last_match: str | None = None
    durations_ms: list[float] = field(default_factory=list)

    @property
    def avg_recognition_ms(self) -> float:
        """Average time per recognition."""
        if not self.durations_ms:
            return 0.0
        return sum(self.durations_ms) / len(self.durations_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging to the console and an optional file.

    Args:
        log_file: Path to log file (no file logging if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    _installed_handlers.append(console_handler)

    for handler in _installed_handlers:
        root_logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("strokematch")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class RecognitionLogger:
    """Logger for tracking recognition events and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = RecognitionStats()

    def log_recognition(
        self,
        library: str,
        name: str | None,
        percent: float,
        candidates: int,
        duration_ms: float,
    ) -> None:
        """Log a finished recognition."""
        self._logger.info(
            "Drawing recognized",
            library=library,
            match=name,
            percent=percent,
            candidates=candidates,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.recognition_count += 1
        self._stats.last_match = name
        self._stats.durations_ms.append(duration_ms)

    def log_entry_added(self, library: str, name: str, point_count: int, replaced: bool) -> None:
        """Log an entry added to (or replaced in) a library."""
        self._logger.info(
            "Entry added",
            library=library,
            entry=name,
            points=point_count,
            replaced=replaced,
        )
        self._stats.entries_added += 1

    def log_entry_removed(self, library: str, name: str) -> None:
        """Log an entry removed from a library."""
        self._logger.info("Entry removed", library=library, entry=name)
        self._stats.entries_removed += 1

    def log_library_cleared(self, library: str, removed: int) -> None:
        """Log a library cleared back to its reserved entry."""
        self._logger.info("Library cleared", library=library, removed=removed)
        self._stats.libraries_cleared += 1

    def log_library_selected(self, library: str, index: int) -> None:
        """Log a change of the current library."""
        self._logger.debug("Library selected", library=library, index=index)

    def log_precision_changed(self, precision: int, libraries: int) -> None:
        """Log a precision change applied to every library."""
        self._logger.info("Precision changed", precision=precision, libraries=libraries)

    @property
    def stats(self) -> RecognitionStats:
        """Get current recognition statistics."""
        return self._stats
