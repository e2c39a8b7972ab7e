"""Pytest configuration and shared fixtures."""

import json
import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from session_archetype.models import Session, StatsSnapshot


def write_jsonl(path: Path, entries: list[dict]) -> Path:
    """Write entries as a JSONL session log."""
    path.write_text("\n".join(json.dumps(e) for e in entries) + "\n", encoding="utf-8")
    return path


def session_entries(start: str, end: str, session_id: str) -> list[dict]:
    """Minimal user/assistant/user transcript spanning start..end (naive ISO strings)."""
    return [
        {"type": "user", "sessionId": session_id, "timestamp": start, "message": {}},
        {"type": "assistant", "sessionId": session_id, "timestamp": start, "message": {}},
        {"type": "user", "sessionId": session_id, "timestamp": end, "message": {}},
    ]


def make_snapshot(**overrides) -> StatsSnapshot:
    """Snapshot that matches no archetype rule unless overridden.

    Defaults: all sessions in the afternoon, 20 sessions over 10 active days
    in a 15 day span, 1h average, 3 day streak, 5 projects.
    """
    fields = {
        "total_sessions": 20,
        "total_hours": 20.0,
        "hour_buckets": tuple([0] * 9 + [20] + [0] * 14),
        "day_buckets": (2, 4, 4, 4, 2, 2, 2),
        "night_fraction": 0.0,
        "morning_fraction": 0.0,
        "afternoon_fraction": 1.0,
        "evening_fraction": 0.0,
        "weekend_ratio": 1.0,
        "active_days": 10,
        "total_days": 15,
        "longest_streak": 3,
        "avg_session_hours": 1.0,
        "project_count": 5,
        "peak_hour": 9,
    }
    fields.update(overrides)
    return StatsSnapshot(**fields)


@pytest.fixture
def night_owl_sessions():
    """Five one-hour sessions at 2 AM on five consecutive days."""
    base = datetime(2025, 1, 6, 2, 0)
    return [
        Session(
            start=base + timedelta(days=i),
            end=base + timedelta(days=i, hours=1),
            duration_hours=1.0,
        )
        for i in range(5)
    ]


@pytest.fixture
def logs_dir():
    """Temporary ~/.claude/projects-style directory.

    Contains:
    - alpha: a 30 minute session at 02:00 and a 10 hour session from 01:00
    - beta: a 30 minute session at 02:15, an empty log and a malformed log
    - a stray file at the root that is not a project
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        alpha = root / "-home-user-alpha"
        beta = root / "-home-user-beta"
        alpha.mkdir()
        beta.mkdir()

        write_jsonl(
            alpha / "s1.jsonl", session_entries("2025-01-06T02:00:00", "2025-01-06T02:30:00", "s1")
        )
        write_jsonl(
            alpha / "s2.jsonl", session_entries("2025-01-07T01:00:00", "2025-01-07T11:00:00", "s2")
        )
        write_jsonl(
            beta / "s3.jsonl", session_entries("2025-01-08T02:15:00", "2025-01-08T02:45:00", "s3")
        )
        (beta / "empty.jsonl").write_text("")
        (beta / "broken.jsonl").write_text("not json at all\n")
        (beta / "notes.txt").write_text("ignored")
        (root / "stray.jsonl").write_text("ignored")

        yield root


@pytest.fixture
def empty_logs_dir():
    """Logs directory with one project and no session logs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "-home-user-empty").mkdir()
        yield root
