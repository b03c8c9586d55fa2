"""Tests for the in-memory movie repository."""

import pytest

from goldenrasp.errors import MovieNotFoundError
from goldenrasp.movies import MovieRecord, MovieRepository


def make_record(title: str, year: int = 2000, winner: bool = False) -> MovieRecord:
    """Build a movie record."""
    return MovieRecord(year=year, title=title, studios="Studio", producers="Producer", winner=winner)


@pytest.fixture
def repository() -> MovieRepository:
    """Repository holding three movies with IDs 1-3."""
    repo = MovieRepository()
    repo.load(
        [
            make_record("A", 1980, winner=True),
            make_record("B", 1980),
            make_record("C", 1981, winner=True),
        ]
    )
    return repo


class TestMovieRepository:
    """Tests for MovieRepository."""

    def test_load_assigns_ids(self, repository: MovieRepository) -> None:
        """Test records get sequential IDs when none are given."""
        assert len(repository) == 3
        assert [m.id for m in repository.list_movies()] == [1, 2, 3]

    def test_load_with_ids(self) -> None:
        """Test explicit IDs are kept and new IDs come after them."""
        repo = MovieRepository()
        repo.load([make_record("A"), make_record("B")], ids=[4, 9])

        assert repo.get(9).title == "B"
        assert repo.add(make_record("C")).id == 10

    def test_load_ids_length_mismatch(self) -> None:
        """Test records and IDs must line up."""
        with pytest.raises(ValueError):
            MovieRepository().load([make_record("A")], ids=[1, 2])

    def test_get_missing(self, repository: MovieRepository) -> None:
        """Test unknown IDs raise MovieNotFoundError."""
        with pytest.raises(MovieNotFoundError, match="Movie with ID 42 not found"):
            repository.get(42)

    def test_list_filters(self, repository: MovieRepository) -> None:
        """Test filtering by winner flag and year."""
        assert [m.title for m in repository.list_movies(winner=True)] == ["A", "C"]
        assert [m.title for m in repository.list_movies(winner=False)] == ["B"]
        assert [m.title for m in repository.list_movies(year=1980)] == ["A", "B"]
        assert [m.title for m in repository.list_movies(winner=True, year=1980)] == ["A"]

    def test_find_winners_returns_plain_records(self, repository: MovieRepository) -> None:
        """Test winners are returned without IDs."""
        winners = repository.find_winners()
        assert [w.title for w in winners] == ["A", "C"]
        assert all(type(w) is MovieRecord for w in winners)

    def test_update(self, repository: MovieRepository) -> None:
        """Test update replaces the record under the same ID."""
        updated = repository.update(2, make_record("B2", 1982, winner=True))
        assert updated.id == 2
        assert repository.get(2).title == "B2"
        assert len(repository) == 3

    def test_update_missing(self, repository: MovieRepository) -> None:
        """Test updating an unknown ID raises."""
        with pytest.raises(MovieNotFoundError):
            repository.update(99, make_record("X"))

    def test_ids_never_reused(self, repository: MovieRepository) -> None:
        """Test deleting the newest movie does not free its ID."""
        repository.delete(3)
        assert repository.add(make_record("D")).id == 4
        with pytest.raises(MovieNotFoundError):
            repository.get(3)

    def test_delete_missing(self, repository: MovieRepository) -> None:
        """Test deleting an unknown ID raises."""
        with pytest.raises(MovieNotFoundError):
            repository.delete(99)
