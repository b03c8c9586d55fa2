"""Movie records, CSV ingestion, validation and storage."""

from goldenrasp.movies.ids import IdAllocator
from goldenrasp.movies.loader import (
    CsvLoadReport,
    SkippedRow,
    append_movie_csv,
    load_movies_csv,
    read_movies_csv,
)
from goldenrasp.movies.models import MovieRecord, StoredMovie
from goldenrasp.movies.repository import MovieRepository
from goldenrasp.movies.validation import DEFAULT_RULES, ValidationRules, validate_movie

__all__ = [
    "MovieRecord",
    "StoredMovie",
    "MovieRepository",
    "IdAllocator",
    "CsvLoadReport",
    "SkippedRow",
    "read_movies_csv",
    "load_movies_csv",
    "append_movie_csv",
    "ValidationRules",
    "DEFAULT_RULES",
    "validate_movie",
]
