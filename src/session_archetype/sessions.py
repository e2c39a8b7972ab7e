"""Session reconstruction from first/last timestamp observations."""

import math
from collections.abc import Iterable

from session_archetype.models import RawObservation, Session

# Idle gap assumed between real sessions; spans under twice this are one session
GAP_THRESHOLD_HOURS = 0.5

# Floor so zero-length sessions still count in ratio computations
MIN_SESSION_HOURS = 0.01

# Long spans are split into one sub-session per this many hours
SUB_SESSION_HOURS = 2


def reconstruct(observation: RawObservation) -> list[Session]:
    """Convert one observation into one or more sessions.

    A log file spanning less than an hour becomes a single session. Longer
    spans are assumed to hide several sessions separated by unrecorded idle
    gaps, so they are split into ``ceil(hours / 2)`` sub-sessions with evenly
    spaced start times, each taking an equal share of the total duration.

    Args:
        observation: First and last timestamps of one log file

    Returns:
        List of sessions (empty if the observation has no first timestamp)
    """
    start = observation.first_timestamp
    if start is None:
        return []
    end = observation.last_timestamp or start

    span = end - start
    duration_hours = max(span.total_seconds() / 3600, 0)

    if duration_hours < GAP_THRESHOLD_HOURS * 2:
        return [Session(start=start, end=end, duration_hours=max(duration_hours, MIN_SESSION_HOURS))]

    num_subs = max(1, math.ceil(duration_hours / SUB_SESSION_HOURS))
    sub_hours = duration_hours / num_subs
    sessions = []
    for i in range(num_subs):
        sub_start = start + span * (i / num_subs)
        sessions.append(Session(start=sub_start, end=sub_start, duration_hours=sub_hours))
    return sessions


def reconstruct_all(observations: Iterable[RawObservation | None]) -> list[Session]:
    """Reconstruct sessions for every observation, skipping missing ones."""
    sessions = []
    for observation in observations:
        if observation is None:
            continue
        sessions.extend(reconstruct(observation))
    return sessions
