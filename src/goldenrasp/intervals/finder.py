"""Producer interval lookup over a movie repository."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from goldenrasp.intervals.engine import calculate_intervals, group_wins_by_producer, select_min_max
from goldenrasp.intervals.models import IntervalSelectionResult
from goldenrasp.movies.models import MovieRecord


class WinnerSource(Protocol):
    """Anything that can supply the winning movies."""

    def find_winners(self) -> list[MovieRecord] | None: ...


class ProducerIntervalFinder:
    """Find the producers with the shortest and longest gaps between wins."""

    def __init__(
        self,
        source: WinnerSource,
        progress_callback: Callable[[str, int, int], None] | None = None,
    ) -> None:
        """Initialize the finder.

        Args:
            source: Supplier of winning movies (usually a MovieRepository).
            progress_callback: Optional callback for progress updates.
                Signature: (stage: str, current: int, total: int)
        """
        self.source = source
        self._progress = progress_callback or (lambda *args: None)

    def find_intervals(self) -> IntervalSelectionResult:
        """Compute the min/max interval selection for the current winners.

        Returns:
            Selection result; empty when no producer has won twice.
        """
        self._progress("Loading winning movies...", 0, 3)
        winners = self.source.find_winners()

        self._progress("Grouping wins by producer", 1, 3)
        producer_wins = group_wins_by_producer(winners)

        self._progress("Calculating intervals", 2, 3)
        intervals = calculate_intervals(producer_wins)

        result = select_min_max(intervals)
        self._progress("Done", 3, 3)
        return result
