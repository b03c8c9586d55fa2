"""Exceptions, friendly messages and logging setup for goldenrasp."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger("goldenrasp")


class GoldenRaspError(Exception):
    """Base exception for all goldenrasp errors."""

    pass


class DataLoadError(GoldenRaspError):
    """The movie CSV file is missing or unreadable."""

    pass


class MovieNotFoundError(GoldenRaspError):
    """No movie exists with the requested ID."""

    def __init__(self, movie_id: int) -> None:
        self.movie_id = movie_id
        super().__init__(f"Movie with ID {movie_id} not found")


class MovieValidationError(GoldenRaspError):
    """A movie record was rejected by validation.

    Attributes:
        field: Name of the offending field.
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class IntervalInvariantError(GoldenRaspError):
    """An interval record violates the positive-gap invariant.

    Raised only for programming errors: records built by the calculator
    always satisfy the invariant.
    """

    pass


class IdAllocationError(GoldenRaspError):
    """The ID store cannot be read, written or moved backwards."""

    pass


def get_friendly_message(error: Exception) -> str:
    """Map an exception to a message suitable for end users.

    Args:
        error: The exception to describe.

    Returns:
        Short user-facing description.
    """
    if isinstance(error, DataLoadError):
        return f"Could not load movie data: {error}"
    if isinstance(error, MovieNotFoundError):
        return str(error)
    if isinstance(error, MovieValidationError):
        return f"Invalid movie ({error.field}): {error}"
    if isinstance(error, IdAllocationError):
        return f"Could not allocate a movie ID: {error}"
    if isinstance(error, IntervalInvariantError):
        return f"Internal error while computing intervals: {error}"
    if isinstance(error, FileNotFoundError):
        return f"File not found: {error.filename}"
    if isinstance(error, PermissionError):
        return f"Permission denied: {error.filename}"
    return f"Unexpected error: {error}"


def configure_logging(
    level: str | int = logging.WARNING,
    log_file: Path | None = None,
    stream: bool = True,
) -> None:
    """Configure the goldenrasp logger.

    Calling again replaces previously installed handlers.

    Args:
        level: Logging level name or number.
        log_file: Optional path of a UTF-8 log file.
        stream: Also log to stderr through rich.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if stream:
        stream_handler = RichHandler(console=Console(stderr=True), show_path=False)
        stream_handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logger.setLevel(level)
    logger.propagate = False


def log_error(error: Exception | str, context: str = "") -> None:
    """Log an error with optional context.

    Args:
        error: The error (exception or string).
        context: Optional context about where the error occurred.
    """
    if isinstance(error, str):
        message = error
        error_type = "Message"
    else:
        message = str(error)
        error_type = type(error).__name__

    entry = error_type
    if context:
        entry += f" ({context})"
    logger.error("%s: %s", entry, message)
