"""Producer interval calculation.

The pipeline runs in three pure steps over an in-memory collection:

1. ``group_wins_by_producer`` - winning movies -> producer -> sorted win years
2. ``calculate_intervals`` - one record per consecutive pair of wins
3. ``select_min_max`` - records tied at the global minimum and maximum gap

Malformed data (missing years, unparseable credits, non-positive gaps) is
filtered item by item and never raised to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from goldenrasp.errors import IntervalInvariantError
from goldenrasp.intervals.models import IntervalRecord, IntervalSelectionResult
from goldenrasp.intervals.producers import parse_producers
from goldenrasp.movies.models import MovieRecord

logger = logging.getLogger(__name__)


def _is_year(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def winning_credits(movie: MovieRecord | None) -> tuple[int, list[str]] | None:
    """Extract the award year and producer names of a winning movie.

    Args:
        movie: A movie record, possibly None.

    Returns:
        ``(year, producers)`` for a winner with a year and at least one
        parseable producer, otherwise None.
    """
    if movie is None or not getattr(movie, "winner", False):
        return None
    year = getattr(movie, "year", None)
    if not _is_year(year):
        return None
    names = parse_producers(getattr(movie, "producers", None))
    if not names:
        return None
    return year, names


def group_wins_by_producer(
    movies: Iterable[MovieRecord | None] | None,
) -> dict[str, list[int]]:
    """Group the award years of winning movies by producer.

    Args:
        movies: Movie records; None entries and non-winners are ignored.

    Returns:
        Mapping of producer name to distinct win years, ascending.
    """
    if not movies:
        return {}

    years_by_producer: dict[str, set[int]] = {}
    skipped = 0

    for movie in movies:
        if movie is None or not getattr(movie, "winner", False):
            continue
        credits = winning_credits(movie)
        if credits is None:
            skipped += 1
            continue
        year, names = credits
        for name in names:
            years_by_producer.setdefault(name, set()).add(year)

    if skipped:
        logger.debug("Skipped %d winning movies without a usable year or producers", skipped)

    return {name: sorted(years) for name, years in years_by_producer.items()}


def build_interval(
    producer: str, previous_win: int | None, following_win: int | None
) -> IntervalRecord | None:
    """Build an interval record if the pair of years forms a valid gap.

    Args:
        producer: Producer name.
        previous_win: Earlier win year.
        following_win: Later win year.

    Returns:
        The record, or None when either year is missing or the gap is not positive.
    """
    if not isinstance(producer, str) or not producer.strip():
        return None
    if not _is_year(previous_win) or not _is_year(following_win):
        return None
    if following_win <= previous_win:
        return None
    return IntervalRecord.between(producer, previous_win, following_win)


def calculate_intervals(
    producer_wins: Mapping[str, Sequence[int | None]] | None,
) -> list[IntervalRecord]:
    """Calculate the gap between every pair of consecutive wins.

    A None year breaks the chain: neither pair touching it is emitted and the
    years on either side are not joined.

    Args:
        producer_wins: Mapping of producer name to ascending win years.

    Returns:
        Interval records, grouped by producer in mapping order.
    """
    if not producer_wins:
        return []

    intervals: list[IntervalRecord] = []

    for producer, years in producer_wins.items():
        if years is None or len(years) < 2:
            continue

        for previous_win, following_win in zip(years, years[1:]):
            record = build_interval(producer, previous_win, following_win)
            if record is None:
                logger.debug(
                    "Dropped interval for %s: %r -> %r", producer, previous_win, following_win
                )
                continue
            intervals.append(record)

    return intervals


def select_min_max(intervals: Iterable[IntervalRecord] | None) -> IntervalSelectionResult:
    """Select the intervals tied at the global minimum and maximum gap.

    Args:
        intervals: All interval records.

    Returns:
        Result whose ``min``/``max`` hold every tied record in encounter order.

    Raises:
        IntervalInvariantError: If a record has a non-positive or inconsistent gap.
    """
    intervals = list(intervals or ())
    if not intervals:
        return IntervalSelectionResult()

    for record in intervals:
        if not record.is_valid:
            raise IntervalInvariantError(f"Invalid interval record: {record!r}")

    global_min = min(record.interval for record in intervals)
    global_max = max(record.interval for record in intervals)

    return IntervalSelectionResult(
        min=[record for record in intervals if record.interval == global_min],
        max=[record for record in intervals if record.interval == global_max],
    )


def find_producer_intervals(
    movies: Iterable[MovieRecord | None] | None,
) -> IntervalSelectionResult:
    """Run the full pipeline on a collection of movies.

    Args:
        movies: Movie records (winners and nominees alike).

    Returns:
        The producers with the shortest and longest gaps between wins.
    """
    producer_wins = group_wins_by_producer(movies)
    intervals = calculate_intervals(producer_wins)
    result = select_min_max(intervals)
    logger.debug(
        "Computed %d intervals for %d producers (min=%s, max=%s)",
        len(intervals),
        len(producer_wins),
        result.min_interval,
        result.max_interval,
    )
    return result
