"""End-to-end archetype diagnosis over session logs."""

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from session_archetype.archetypes import classify, default_rules
from session_archetype.ingest import DEFAULT_LOGS_DIR, scan_logs
from session_archetype.models import (
    ArchetypeRule,
    ClassificationResult,
    RawObservation,
    StatsSnapshot,
)
from session_archetype.sessions import reconstruct_all
from session_archetype.stats import aggregate

logger = logging.getLogger("session-archetype")

SUMMARY_VERSION = "1.0"


def diagnose(
    observations: Iterable[RawObservation],
    project_count: int,
    rules: Sequence[ArchetypeRule] | None = None,
) -> tuple[ClassificationResult, StatsSnapshot]:
    """Reconstruct sessions, aggregate them and classify the result.

    Args:
        observations: Raw first/last timestamp observations, in any order
        project_count: Number of projects the observations came from
        rules: Archetype rules in priority order (default: default_rules())

    Returns:
        (classification, snapshot)

    Raises:
        EmptyInputError: If the observations yield no sessions
    """
    sessions = reconstruct_all(observations)
    snapshot = aggregate(sessions, project_count)
    result = classify(snapshot, rules if rules is not None else default_rules())
    logger.debug(f"Classified {snapshot.total_sessions} sessions as {result.id}")
    return result, snapshot


def build_summary(result: ClassificationResult, snapshot: StatsSnapshot) -> dict:
    """Build the structured, JSON-serializable archetype summary."""
    return {
        "version": SUMMARY_VERSION,
        "archetype": result.id,
        "archetype_name": result.display_name,
        "archetype_subtitle": result.subtitle,
        "tagline": result.tagline,
        "description": result.description,
        "stats": {
            "total_hours": round(snapshot.total_hours, 1),
            "total_sessions": snapshot.total_sessions,
            "active_days": snapshot.active_days,
            "total_days": snapshot.total_days,
            "longest_streak": snapshot.longest_streak,
            "avg_session_minutes": round(snapshot.avg_session_hours * 60),
            "night_pct": round(snapshot.night_fraction * 100),
            "morning_pct": round(snapshot.morning_fraction * 100),
            "afternoon_pct": round(snapshot.afternoon_fraction * 100),
            "evening_pct": round(snapshot.evening_fraction * 100),
            "weekend_ratio": round(snapshot.weekend_ratio, 1),
            "project_count": snapshot.project_count,
        },
        "hour_buckets": list(snapshot.hour_buckets),
        "day_buckets": list(snapshot.day_buckets),
        "peak_hour": snapshot.peak_hour,
    }


def get_personality(
    logs_dir: Path = DEFAULT_LOGS_DIR,
    days: int | None = None,
    project: str | None = None,
) -> dict:
    """Scan session logs and return the archetype summary.

    Args:
        logs_dir: Directory containing project subdirectories
        days: Only include logs modified within this many days (default: all)
        project: Optional project directory name filter

    Returns:
        Summary dict (see build_summary)

    Raises:
        EmptyInputError: If no sessions were found
    """
    scan = scan_logs(logs_dir, days=days, project=project)
    result, snapshot = diagnose(scan.observations, scan.project_count)
    return build_summary(result, snapshot)
