"""Output formatting for interval reports and movie listings.

Provides unified output handling in text, JSON, and CSV formats.
"""

from __future__ import annotations

import csv
import io
import json
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from goldenrasp.intervals.models import IntervalRecord, IntervalSelectionResult
    from goldenrasp.movies.models import StoredMovie


console = Console()


class ReportFormatter(ABC):
    """Abstract base class for report formatting."""

    @abstractmethod
    def to_json(self) -> str:
        """Convert report to JSON string."""
        pass

    @abstractmethod
    def to_csv(self) -> str:
        """Convert report to CSV string."""
        pass

    @abstractmethod
    def to_text(self, verbose: bool = False) -> None:
        """Output report as formatted text to console."""
        pass

    def render(self, format: str, verbose: bool = False) -> None:
        """Print the report in the requested format ("text", "json" or "csv")."""
        if format == "json":
            console.print_json(self.to_json())
        elif format == "csv":
            console.print(self.to_csv(), end="", markup=False, highlight=False, soft_wrap=True)
        else:
            self.to_text(verbose)


class IntervalReportFormatter(ReportFormatter):
    """Formatter for producer interval results."""

    def __init__(self, result: IntervalSelectionResult) -> None:
        self.result = result

    def to_dict(self) -> dict[str, Any]:
        """Convert the result to the public response shape."""
        return self.result.to_response()

    def to_json(self) -> str:
        """Convert the result to a JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def to_csv(self) -> str:
        """Convert the result to a CSV string, one row per interval."""
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(["Bucket", "Producer", "Interval", "Previous Win", "Following Win"])

        for bucket, records in (("min", self.result.min), ("max", self.result.max)):
            for record in records:
                writer.writerow(
                    [
                        bucket,
                        record.producer,
                        record.interval,
                        record.previous_win,
                        record.following_win,
                    ]
                )

        return output.getvalue()

    @staticmethod
    def _interval_table(records: list[IntervalRecord]) -> Table:
        table = Table(show_header=True, header_style="dim", box=None, padding=(0, 2))
        table.add_column("Producer", style="white")
        table.add_column("Interval", justify="right")
        table.add_column("Previous", style="dim", justify="right")
        table.add_column("Following", style="dim", justify="right")
        for record in records:
            table.add_row(
                escape(record.producer),
                str(record.interval),
                str(record.previous_win),
                str(record.following_win),
            )
        return table

    def to_text(self, verbose: bool = False) -> None:
        """Output the result as formatted text."""
        console.print()
        console.print("[bold blue]Producer Award Intervals[/bold blue]")
        console.print()

        if self.result.is_empty:
            console.print("[yellow]No producer has won more than once.[/yellow]")
            return

        console.print(f"[bold]Shortest interval[/bold] ({self.result.min_interval} years)")
        console.print(self._interval_table(self.result.min))
        console.print()

        console.print(f"[bold]Longest interval[/bold] ({self.result.max_interval} years)")
        console.print(self._interval_table(self.result.max))
        console.print()


class MovieListFormatter(ReportFormatter):
    """Formatter for movie listings."""

    def __init__(self, movies: list[StoredMovie]) -> None:
        self.movies = movies

    def to_json(self) -> str:
        """Convert the listing to a JSON string."""
        output = [movie.model_dump(mode="json") for movie in self.movies]
        return json.dumps(output, indent=2)

    def to_csv(self) -> str:
        """Convert the listing to a CSV string."""
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(["ID", "Year", "Title", "Studios", "Producers", "Winner"])

        for movie in self.movies:
            writer.writerow(
                [
                    movie.id,
                    movie.year or "",
                    movie.title,
                    movie.studios,
                    movie.producers or "",
                    "yes" if movie.winner else "",
                ]
            )

        return output.getvalue()

    def to_text(self, verbose: bool = False) -> None:
        """Output the listing as a table."""
        if not self.movies:
            console.print("[dim]No movies found.[/dim]")
            return

        table = Table(show_header=True, header_style="dim", box=None, padding=(0, 2))
        table.add_column("ID", style="dim", justify="right")
        table.add_column("Year", justify="right")
        table.add_column("Title", style="white")
        if verbose:
            table.add_column("Studios", style="dim")
        table.add_column("Producers")
        table.add_column("Winner", justify="center")

        for movie in self.movies:
            row = [str(movie.id), str(movie.year or ""), escape(movie.title)]
            if verbose:
                row.append(escape(movie.studios))
            row.extend([escape(movie.producers or ""), "[green]yes[/green]" if movie.winner else ""])
            table.add_row(*row)

        console.print(table)
        winners = sum(1 for m in self.movies if m.winner)
        console.print(f"[dim]{len(self.movies)} movies, {winners} winners[/dim]")
