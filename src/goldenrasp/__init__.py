"""goldenrasp - shortest and longest gaps between a producer's worst-movie wins."""

from goldenrasp._version import __version__
from goldenrasp.intervals import (
    IntervalRecord,
    IntervalSelectionResult,
    find_producer_intervals,
    parse_producers,
)
from goldenrasp.movies import MovieRecord, MovieRepository

__all__ = [
    "__version__",
    "MovieRecord",
    "MovieRepository",
    "IntervalRecord",
    "IntervalSelectionResult",
    "find_producer_intervals",
    "parse_producers",
]
