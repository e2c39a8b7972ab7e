"""Data records shared by the session archetype pipeline."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime


class EmptyInputError(ValueError):
    """Raised when there are no sessions to aggregate."""


@dataclass(frozen=True)
class RawObservation:
    """First and last event timestamps read from one session log file."""

    first_timestamp: datetime | None  # None yields no sessions
    last_timestamp: datetime | None = None
    source: str | None = None  # Log file path, informational only


@dataclass(frozen=True)
class Session:
    """A reconstructed unit of work.

    Sub-sessions produced by splitting a long log file carry ``end == start``;
    only ``duration_hours`` describes how long they lasted.
    """

    start: datetime
    end: datetime
    duration_hours: float


@dataclass(frozen=True)
class StatsSnapshot:
    """Statistics derived from all sessions of one run."""

    total_sessions: int
    total_hours: float
    hour_buckets: tuple[int, ...]  # 24 buckets, local hour of session start
    day_buckets: tuple[int, ...]  # 7 buckets, 0 = Sunday
    night_fraction: float
    morning_fraction: float
    afternoon_fraction: float
    evening_fraction: float
    weekend_ratio: float
    active_days: int
    total_days: int
    longest_streak: int
    avg_session_hours: float
    project_count: int
    peak_hour: int


@dataclass(frozen=True)
class ArchetypeRule:
    """A named archetype with its matching predicate and description."""

    id: str
    display_name: str
    subtitle: str
    tagline: str
    predicate: Callable[[StatsSnapshot], bool]
    describe: Callable[[StatsSnapshot], str]


@dataclass(frozen=True)
class ClassificationResult:
    """The archetype chosen for a snapshot, with its description evaluated."""

    rule: ArchetypeRule
    description: str
    is_default: bool = False

    @property
    def id(self) -> str:
        return self.rule.id

    @property
    def display_name(self) -> str:
        return self.rule.display_name

    @property
    def subtitle(self) -> str:
        return self.rule.subtitle

    @property
    def tagline(self) -> str:
        return self.rule.tagline
