"""CSV ingestion for the award movie list.

Expected format (semicolon separated, header row first):

    year;title;studios;producers;winner
    1980;Can't Stop the Music;Associated Film Distribution;Allan Carr;yes

An optional ``id`` column holds explicit movie IDs. Without it, a movie's ID
is its data row number (line number minus the header), so IDs stay stable
while rows are only ever appended.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path

from goldenrasp.errors import DataLoadError
from goldenrasp.movies.models import MovieRecord

logger = logging.getLogger(__name__)

ID_COLUMN = "id"
REQUIRED_COLUMNS = ("year", "title", "studios", "producers", "winner")

# Range accepted when loading historical data.
CSV_MIN_YEAR = 1900
CSV_MAX_YEAR = 2100


@dataclass
class SkippedRow:
    """A CSV row that was not loaded."""

    line_number: int
    reason: str


@dataclass
class CsvLoadReport:
    """Outcome of reading a movie CSV file.

    ``movie_ids`` runs parallel to ``movies``.
    """

    path: Path
    header: list[str] = field(default_factory=list)
    movies: list[MovieRecord] = field(default_factory=list)
    movie_ids: list[int] = field(default_factory=list)
    skipped: list[SkippedRow] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        """Number of non-blank data rows read (excluding the header)."""
        return len(self.movies) + len(self.skipped)

    @property
    def winner_count(self) -> int:
        """Number of loaded movies flagged as winners."""
        return sum(1 for m in self.movies if m.winner)

    @property
    def has_id_column(self) -> bool:
        """Whether the file carries explicit movie IDs."""
        return ID_COLUMN in _column_index(self.header)

    @property
    def max_id(self) -> int:
        """Highest movie ID in the file, 0 if empty."""
        return max(self.movie_ids, default=0)


def _column_index(header: list[str]) -> dict[str, int]:
    return {name.strip().lower(): index for index, name in enumerate(header)}


def _parse_id(value: str) -> int:
    value = value.strip()
    try:
        movie_id = int(value)
    except ValueError:
        raise ValueError(f"invalid ID format: {value!r}") from None
    if movie_id <= 0:
        raise ValueError(f"ID must be positive: {movie_id}")
    return movie_id


def _parse_year(value: str) -> int:
    value = value.strip()
    if not value:
        raise ValueError("year cannot be empty")
    try:
        year = int(value)
    except ValueError:
        raise ValueError(f"invalid year format: {value}") from None
    if not CSV_MIN_YEAR <= year <= CSV_MAX_YEAR:
        raise ValueError(f"year out of valid range ({CSV_MIN_YEAR}-{CSV_MAX_YEAR}): {year}")
    return year


def _parse_text(value: str, field_name: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{field_name} cannot be blank")
    return value


def _parse_winner(value: str, winner_value: str) -> bool:
    return value.strip().lower() == winner_value.lower()


def parse_row(
    row: list[str],
    columns: dict[str, int],
    winner_value: str = "yes",
) -> MovieRecord:
    """Parse one CSV row into a movie record.

    Args:
        row: Cell values of the row.
        columns: Column name to index, from the header.
        winner_value: Cell text meaning "won" (case-insensitive).

    Returns:
        The parsed record.

    Raises:
        ValueError: If a field is missing or invalid.
    """
    return MovieRecord(
        year=_parse_year(row[columns["year"]]),
        title=_parse_text(row[columns["title"]], "title"),
        studios=_parse_text(row[columns["studios"]], "studios"),
        producers=_parse_text(row[columns["producers"]], "producers"),
        winner=_parse_winner(row[columns["winner"]], winner_value),
    )


def read_movies_csv(
    path: Path,
    separator: str = ";",
    winner_value: str = "yes",
) -> CsvLoadReport:
    """Read a movie CSV file, keeping valid rows and recording skipped ones.

    Args:
        path: CSV file to read.
        separator: Field delimiter.
        winner_value: Cell text meaning "won".

    Returns:
        Report with the loaded movies and the skipped rows.

    Raises:
        DataLoadError: If the file is missing, unreadable or lacks a column.
    """
    report = CsvLoadReport(path=path)

    try:
        f = open(path, encoding="utf-8-sig", newline="")
    except FileNotFoundError:
        raise DataLoadError(f"CSV file not found: {path}") from None
    except OSError as e:
        raise DataLoadError(f"Cannot read CSV file {path}: {e}") from e

    with f:
        reader = csv.reader(f, delimiter=separator or ";")
        try:
            header = next(reader, None)
        except csv.Error as e:
            raise DataLoadError(f"Malformed CSV header in {path}: {e}") from e
        if header is None:
            return report

        report.header = header
        columns = _column_index(header)
        missing = [name for name in REQUIRED_COLUMNS if name not in columns]
        if missing:
            raise DataLoadError(f"CSV file {path} is missing columns: {', '.join(missing)}")

        try:
            for line_number, row in enumerate(reader, start=2):
                if not any(cell.strip() for cell in row):
                    continue
                if len(row) < len(header):
                    report.skipped.append(
                        SkippedRow(line_number, f"expected {len(header)} columns, got {len(row)}")
                    )
                    continue
                try:
                    if ID_COLUMN in columns:
                        movie_id = _parse_id(row[columns[ID_COLUMN]])
                    else:
                        movie_id = line_number - 1
                    record = parse_row(row, columns, winner_value)
                except ValueError as e:
                    report.skipped.append(SkippedRow(line_number, str(e)))
                    continue
                report.movies.append(record)
                report.movie_ids.append(movie_id)
        except csv.Error as e:
            raise DataLoadError(f"Malformed CSV data in {path}: {e}") from e

    for skipped in report.skipped:
        logger.debug("Line %d of %s skipped: %s", skipped.line_number, path, skipped.reason)
    logger.info(
        "Loaded %d movies from %s (%d skipped)", len(report.movies), path, len(report.skipped)
    )
    return report


def load_movies_csv(
    path: Path,
    separator: str = ";",
    winner_value: str = "yes",
) -> list[MovieRecord]:
    """Load the valid movie records from a CSV file.

    Args:
        path: CSV file to read.
        separator: Field delimiter.
        winner_value: Cell text meaning "won".

    Returns:
        Movie records in file order.
    """
    return read_movies_csv(path, separator, winner_value).movies


def append_movie_csv(
    path: Path,
    record: MovieRecord,
    movie_id: int | None = None,
    separator: str = ";",
    winner_value: str = "yes",
) -> None:
    """Append a movie row to a CSV file, following its header's column order.

    Creates the file with a default header if it does not exist.

    Args:
        path: CSV file to append to.
        record: Movie to write.
        movie_id: Written to the ``id`` column when the file has one.
        separator: Field delimiter.
        winner_value: Cell text written for winners.

    Raises:
        DataLoadError: If the file cannot be read or written.
    """
    separator = separator or ";"
    header: list[str] | None = None
    needs_newline = False

    try:
        if path.exists():
            with open(path, encoding="utf-8-sig", newline="") as f:
                content = f.read()
            header = next(csv.reader(content.splitlines(), delimiter=separator), None)
            needs_newline = bool(content) and not content.endswith(("\n", "\r"))

        values = {
            ID_COLUMN: str(movie_id) if movie_id is not None else "",
            "year": str(record.year) if record.year is not None else "",
            "title": record.title,
            "studios": record.studios,
            "producers": record.producers or "",
            "winner": winner_value if record.winner else "",
        }

        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8", newline="") as f:
            if needs_newline:
                f.write("\n")
            writer = csv.writer(f, delimiter=separator, lineterminator="\n")
            if header is None:
                header = list(REQUIRED_COLUMNS)
                writer.writerow(header)
            writer.writerow([values.get(name.strip().lower(), "") for name in header])
    except OSError as e:
        raise DataLoadError(f"Cannot write CSV file {path}: {e}") from e
