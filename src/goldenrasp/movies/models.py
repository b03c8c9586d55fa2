"""Data models for award-nominated movies."""

from pydantic import BaseModel, ConfigDict


class MovieRecord(BaseModel):
    """A nominated movie as read from the data file.

    ``producers`` holds the raw credits string (e.g. "A, B and C"). ``year``
    and ``producers`` are optional because upstream data may omit them; the
    interval engine ignores such records.
    """

    model_config = ConfigDict(frozen=True)

    year: int | None = None
    title: str
    studios: str = ""
    producers: str | None = None
    winner: bool = False

    @property
    def display_title(self) -> str:
        """Get the title with year for display."""
        if self.year:
            return f"{self.title} ({self.year})"
        return self.title


class StoredMovie(MovieRecord):
    """A movie held by the repository, identified by a never-reused ID."""

    id: int

    def to_record(self) -> MovieRecord:
        """Strip the ID, returning the plain record."""
        return MovieRecord.model_validate(self.model_dump(exclude={"id"}))
