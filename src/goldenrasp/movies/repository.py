"""In-memory movie store with never-reused IDs."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from goldenrasp.errors import MovieNotFoundError
from goldenrasp.movies.ids import IdAllocator
from goldenrasp.movies.models import MovieRecord, StoredMovie

logger = logging.getLogger(__name__)


class MovieRepository:
    """Hold movie records keyed by ID.

    IDs come from an ``IdAllocator`` so they keep increasing across deletes
    and, when the allocator is file-backed, across restarts.
    """

    def __init__(self, id_allocator: IdAllocator | None = None) -> None:
        """Initialize an empty repository.

        Args:
            id_allocator: ID source. Defaults to an in-memory allocator.
        """
        self.ids = id_allocator or IdAllocator()
        self._movies: dict[int, StoredMovie] = {}

    def __len__(self) -> int:
        return len(self._movies)

    def _store(self, movie_id: int, record: MovieRecord) -> StoredMovie:
        stored = StoredMovie(id=movie_id, **record.model_dump(exclude={"id"}))
        self._movies[movie_id] = stored
        return stored

    def load(
        self,
        records: Iterable[MovieRecord],
        ids: Iterable[int] | None = None,
    ) -> list[StoredMovie]:
        """Bulk-insert records.

        Args:
            records: Records to insert, in order.
            ids: Existing IDs for the records (e.g. from the data file). The
                allocator is synchronized so new IDs come after the highest
                one. If None, every record gets a fresh ID.

        Returns:
            The stored movies.
        """
        if ids is None:
            stored = [self.add(record) for record in records]
        else:
            stored = []
            for movie_id, record in zip(ids, records, strict=True):
                if movie_id in self._movies:
                    logger.warning("Duplicate movie ID %d; keeping the later row", movie_id)
                stored.append(self._store(movie_id, record))
            if stored:
                self.ids.synchronize(max(movie.id for movie in stored))
        logger.debug("Loaded %d movies into repository", len(stored))
        return stored

    def get(self, movie_id: int) -> StoredMovie:
        """Get a movie by ID.

        Raises:
            MovieNotFoundError: If no movie has this ID.
        """
        try:
            return self._movies[movie_id]
        except KeyError:
            raise MovieNotFoundError(movie_id) from None

    def list_movies(
        self,
        winner: bool | None = None,
        year: int | None = None,
    ) -> list[StoredMovie]:
        """List movies in ID order.

        Args:
            winner: If set, only movies whose winner flag matches.
            year: If set, only movies from this year.

        Returns:
            Matching movies.
        """
        movies = [self._movies[movie_id] for movie_id in sorted(self._movies)]
        if winner is not None:
            movies = [m for m in movies if m.winner == winner]
        if year is not None:
            movies = [m for m in movies if m.year == year]
        return movies

    def find_winners(self) -> list[MovieRecord]:
        """Get the winning movies as plain records, in ID order."""
        return [movie.to_record() for movie in self.list_movies(winner=True)]

    def add(self, record: MovieRecord) -> StoredMovie:
        """Insert a record under the next available ID."""
        return self._store(self.ids.next_id(), record)

    def update(self, movie_id: int, record: MovieRecord) -> StoredMovie:
        """Replace the movie stored under ``movie_id``.

        Raises:
            MovieNotFoundError: If no movie has this ID.
        """
        self.get(movie_id)
        return self._store(movie_id, record)

    def delete(self, movie_id: int) -> None:
        """Remove a movie. Its ID is never handed out again.

        Raises:
            MovieNotFoundError: If no movie has this ID.
        """
        self.get(movie_id)
        del self._movies[movie_id]
