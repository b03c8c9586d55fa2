"""Producer interval calculation engine."""

from goldenrasp.intervals.engine import (
    build_interval,
    calculate_intervals,
    find_producer_intervals,
    group_wins_by_producer,
    select_min_max,
    winning_credits,
)
from goldenrasp.intervals.finder import ProducerIntervalFinder, WinnerSource
from goldenrasp.intervals.models import IntervalRecord, IntervalSelectionResult
from goldenrasp.intervals.producers import parse_producers

__all__ = [
    # Pipeline steps
    "parse_producers",
    "winning_credits",
    "group_wins_by_producer",
    "build_interval",
    "calculate_intervals",
    "select_min_max",
    "find_producer_intervals",
    "ProducerIntervalFinder",
    "WinnerSource",
    # Models
    "IntervalRecord",
    "IntervalSelectionResult",
]
