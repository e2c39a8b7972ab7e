"""Statistics aggregation over reconstructed sessions."""

from collections.abc import Sequence
from datetime import date

from session_archetype.models import EmptyInputError, Session, StatsSnapshot

# Hour-of-day bands (inclusive start, exclusive end); night wraps around midnight
NIGHT_HOURS = (range(0, 5), range(22, 24))
MORNING_HOURS = (range(5, 9),)
AFTERNOON_HOURS = (range(9, 17),)
EVENING_HOURS = (range(17, 22),)


def _ratio(numerator: float, denominator: float) -> float:
    """Divide, resolving a zero denominator to 0."""
    return numerator / denominator if denominator else 0


def _band_count(hour_buckets: Sequence[int], band: tuple[range, ...]) -> int:
    return sum(hour_buckets[h] for hours in band for h in hours)


def _sunday_index(day: date) -> int:
    """Weekday index with Sunday = 0 (Python's weekday() has Monday = 0)."""
    return (day.weekday() + 1) % 7


def longest_streak(active_dates: set[date]) -> int:
    """Length of the longest run of consecutive calendar days.

    Returns 0 for an empty set and at least 1 otherwise.
    """
    if not active_dates:
        return 0

    dates = sorted(active_dates)
    best = current = 1
    for previous, day in zip(dates, dates[1:]):
        if (day - previous).days == 1:
            current += 1
            best = max(best, current)
        else:
            current = 1
    return best


def aggregate(sessions: Sequence[Session], project_count: int) -> StatsSnapshot:
    """Compute the statistics snapshot for a set of sessions.

    Session order does not matter; active dates are sorted internally for
    the streak computation.

    Args:
        sessions: Reconstructed sessions
        project_count: Number of distinct projects the sessions came from

    Returns:
        StatsSnapshot with histograms, band fractions, day counts and streaks

    Raises:
        EmptyInputError: If there are no sessions
    """
    if not sessions:
        raise EmptyInputError("No sessions to aggregate")

    total_sessions = len(sessions)
    total_hours = sum(s.duration_hours for s in sessions)

    hour_buckets = [0] * 24
    day_buckets = [0] * 7
    active_dates: set[date] = set()
    for session in sessions:
        # Sub-session starts keep the first timestamp's offset; re-localize
        start = session.start.astimezone()
        hour_buckets[start.hour] += 1
        day = start.date()
        day_buckets[_sunday_index(day)] += 1
        active_dates.add(day)

    weekday_avg = sum(day_buckets[1:6]) / 5
    weekend_avg = (day_buckets[0] + day_buckets[6]) / 2

    first_date = min(active_dates)
    last_date = max(active_dates)

    return StatsSnapshot(
        total_sessions=total_sessions,
        total_hours=total_hours,
        hour_buckets=tuple(hour_buckets),
        day_buckets=tuple(day_buckets),
        night_fraction=_ratio(_band_count(hour_buckets, NIGHT_HOURS), total_sessions),
        morning_fraction=_ratio(_band_count(hour_buckets, MORNING_HOURS), total_sessions),
        afternoon_fraction=_ratio(_band_count(hour_buckets, AFTERNOON_HOURS), total_sessions),
        evening_fraction=_ratio(_band_count(hour_buckets, EVENING_HOURS), total_sessions),
        weekend_ratio=_ratio(weekend_avg, weekday_avg),
        active_days=len(active_dates),
        total_days=(last_date - first_date).days + 1,
        longest_streak=longest_streak(active_dates),
        avg_session_hours=total_hours / total_sessions,
        project_count=project_count,
        peak_hour=hour_buckets.index(max(hour_buckets)),
    )
