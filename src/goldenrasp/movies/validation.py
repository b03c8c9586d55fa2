"""Validation of movie records entered by users.

Checks run in a fixed order and the first failure is reported. The
reference year is always passed in explicitly so results do not depend on
the wall clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from goldenrasp.errors import MovieValidationError
from goldenrasp.movies.models import MovieRecord

YEAR_DIGITS = 4


@dataclass(frozen=True)
class ValidationRules:
    """Bounds applied by ``validate_movie``."""

    min_year: int = 1900
    max_year: int | None = None  # None = the reference year
    min_text_length: int = 2
    max_text_length: int = 255


DEFAULT_RULES = ValidationRules()


def _require(value: Any, field: str) -> None:
    if value is None:
        raise MovieValidationError(
            field, f"Field '{field}' is required and cannot be null"
        )


def _require_text(value: Any, field: str, rules: ValidationRules) -> str:
    if not isinstance(value, str):
        raise MovieValidationError(field, f"Field '{field}' must be a string")
    trimmed = value.strip()
    if not trimmed:
        raise MovieValidationError(
            field, f"Field '{field}' cannot be empty or contain only whitespace"
        )
    if len(trimmed) < rules.min_text_length:
        raise MovieValidationError(
            field,
            f"Field '{field}' must have at least {rules.min_text_length} character(s), "
            f"but had: {len(trimmed)}",
        )
    if len(trimmed) > rules.max_text_length:
        raise MovieValidationError(
            field,
            f"Field '{field}' must have at most {rules.max_text_length} character(s), "
            f"but had: {len(trimmed)}",
        )
    return trimmed


def _require_year(value: Any, reference_year: int, rules: ValidationRules) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MovieValidationError("year", f"Field 'year' must be an integer, but was: {value!r}")
    if value <= 0:
        raise MovieValidationError(
            "year", f"Field 'year' must be a positive integer, but was: {value}"
        )
    if value < rules.min_year:
        raise MovieValidationError(
            "year", f"Field 'year' must be at least {rules.min_year}, but was: {value}"
        )
    max_year = rules.max_year if rules.max_year is not None else reference_year
    if value > max_year:
        raise MovieValidationError(
            "year",
            f"Field 'year' cannot be in the future. Latest allowed year is {max_year}, "
            f"but was: {value}",
        )
    if len(str(value)) != YEAR_DIGITS:
        raise MovieValidationError(
            "year", f"Field 'year' must be exactly {YEAR_DIGITS} digits, but was: {value}"
        )
    return value


def validate_movie(
    year: Any,
    title: Any,
    studios: Any,
    producers: Any,
    winner: Any,
    *,
    reference_year: int,
    rules: ValidationRules = DEFAULT_RULES,
) -> MovieRecord:
    """Validate raw movie fields and build a record.

    Args:
        year: Award year.
        title: Movie title.
        studios: Studios credit string.
        producers: Producers credit string.
        winner: Whether the movie won.
        reference_year: Latest acceptable year when ``rules.max_year`` is None
            (callers normally pass the current year).
        rules: Bounds to apply.

    Returns:
        The validated record with text fields trimmed.

    Raises:
        MovieValidationError: On the first failed check.
    """
    for value, field in (
        (year, "year"),
        (title, "title"),
        (studios, "studios"),
        (producers, "producers"),
        (winner, "winner"),
    ):
        _require(value, field)

    if not isinstance(winner, bool):
        raise MovieValidationError("winner", "Field 'winner' must be true or false")

    clean_title = _require_text(title, "title", rules)
    clean_studios = _require_text(studios, "studios", rules)
    clean_producers = _require_text(producers, "producers", rules)
    clean_year = _require_year(year, reference_year, rules)

    return MovieRecord(
        year=clean_year,
        title=clean_title,
        studios=clean_studios,
        producers=clean_producers,
        winner=winner,
    )
