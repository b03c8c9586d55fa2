"""Data models for producer win intervals."""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


class IntervalRecord(BaseModel):
    """The gap between two consecutive wins of one producer.

    Serializes with the public field names ``producer``, ``interval``,
    ``previousWin`` and ``followingWin`` when dumped ``by_alias``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    producer: str
    interval: int
    previous_win: int = Field(alias="previousWin")
    following_win: int = Field(alias="followingWin")

    @model_validator(mode="after")
    def _check_gap(self) -> Self:
        if not self.producer.strip():
            raise ValueError("Producer cannot be blank")
        if self.following_win <= self.previous_win:
            raise ValueError(
                f"followingWin ({self.following_win}) must be greater than "
                f"previousWin ({self.previous_win})"
            )
        if self.interval != self.following_win - self.previous_win:
            raise ValueError(
                f"Interval ({self.interval}) must equal followingWin - previousWin "
                f"({self.following_win - self.previous_win})"
            )
        return self

    @classmethod
    def between(cls, producer: str, previous_win: int, following_win: int) -> Self:
        """Build a record, computing the interval from the two years."""
        return cls(
            producer=producer,
            interval=following_win - previous_win,
            previous_win=previous_win,
            following_win=following_win,
        )

    @property
    def is_valid(self) -> bool:
        """Check the positive-gap invariant (also holds for unvalidated copies)."""
        return self.interval > 0 and self.interval == self.following_win - self.previous_win

    def __str__(self) -> str:
        return f"{self.producer}: {self.interval} years ({self.previous_win} -> {self.following_win})"


class IntervalSelectionResult(BaseModel):
    """Intervals tied at the global minimum and maximum gap."""

    model_config = ConfigDict(frozen=True)

    min: list[IntervalRecord] = Field(default_factory=list)
    max: list[IntervalRecord] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when no producer has won more than once."""
        return not self.min and not self.max

    @property
    def min_interval(self) -> int | None:
        """The global minimum gap, if any."""
        return self.min[0].interval if self.min else None

    @property
    def max_interval(self) -> int | None:
        """The global maximum gap, if any."""
        return self.max[0].interval if self.max else None

    def to_response(self) -> dict[str, list[dict[str, str | int]]]:
        """Dump to the public response shape with camelCase field names."""
        return self.model_dump(mode="json", by_alias=True)
