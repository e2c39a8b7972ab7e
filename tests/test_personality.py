"""Tests for the end-to-end diagnosis pipeline."""

import time
from datetime import datetime

import pytest
from conftest import session_entries, write_jsonl

from session_archetype.archetypes import BALANCED
from session_archetype.ingest import read_observation
from session_archetype.models import ArchetypeRule, EmptyInputError, RawObservation
from session_archetype.personality import build_summary, diagnose, get_personality
from session_archetype.sessions import reconstruct
from session_archetype.stats import aggregate


def night_observations() -> list[RawObservation]:
    return [
        RawObservation(
            first_timestamp=datetime(2025, 1, 6 + i, 2, 0),
            last_timestamp=datetime(2025, 1, 6 + i, 2, 45),
        )
        for i in range(5)
    ]


class TestDiagnose:
    """Tests for diagnose()."""

    def test_night_owl(self):
        result, snapshot = diagnose(night_observations(), project_count=1)
        assert result.id == "midnight-beast"
        assert snapshot.night_fraction == 1.0
        assert snapshot.longest_streak == 5

    def test_no_observations(self):
        with pytest.raises(EmptyInputError):
            diagnose([], project_count=0)

    def test_classifier_not_invoked_on_empty_input(self):
        calls = []
        rule = ArchetypeRule(
            id="spy",
            display_name="Spy",
            subtitle="",
            tagline="",
            predicate=lambda s: calls.append(s) or False,
            describe=lambda s: "",
        )
        with pytest.raises(EmptyInputError):
            diagnose([], project_count=0, rules=[rule])
        assert calls == []

    def test_custom_rules(self):
        result, _ = diagnose(night_observations(), project_count=1, rules=())
        assert result.rule is BALANCED


class TestBuildSummary:
    """Tests for the structured summary."""

    def test_summary_fields(self):
        result, snapshot = diagnose(night_observations(), project_count=1)
        summary = build_summary(result, snapshot)
        assert summary["version"] == "1.0"
        assert summary["archetype"] == "midnight-beast"
        assert summary["archetype_name"] == "🌙 The Midnight Beast"
        assert summary["archetype_subtitle"] == "深夜の怪物"
        assert summary["tagline"]
        assert summary["description"]
        assert summary["peak_hour"] == 2
        assert len(summary["hour_buckets"]) == 24
        assert summary["hour_buckets"][2] == 5

    def test_summary_rounding(self):
        result, snapshot = diagnose(night_observations(), project_count=1)
        stats = build_summary(result, snapshot)["stats"]
        assert stats["total_hours"] == 3.8
        assert stats["avg_session_minutes"] == 45
        assert stats["night_pct"] == 100
        assert stats["morning_pct"] == 0
        assert stats["weekend_ratio"] == 0.0
        assert stats["total_sessions"] == 5
        assert stats["project_count"] == 1


class TestGetPersonality:
    """Tests for scanning a logs directory end to end."""

    def test_logs_dir(self, logs_dir):
        summary = get_personality(logs_dir)
        stats = summary["stats"]
        assert summary["archetype"] == "midnight-beast"
        assert stats["total_sessions"] == 7
        assert stats["active_days"] == 3
        assert stats["longest_streak"] == 3
        assert stats["project_count"] == 2
        assert stats["total_hours"] == 11.0
        assert summary["peak_hour"] == 2

    def test_project_filter(self, logs_dir):
        summary = get_personality(logs_dir, project="beta")
        assert summary["stats"]["total_sessions"] == 1
        assert summary["stats"]["project_count"] == 1

    def test_empty_logs_dir(self, empty_logs_dir):
        with pytest.raises(EmptyInputError):
            get_personality(empty_logs_dir)


@pytest.fixture
def new_york_tz(monkeypatch):
    """Run with America/New_York as the local timezone."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset() not available on this platform")
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


class TestDaylightSaving:
    """Durations use real elapsed time and hours follow the local clock across DST."""

    def observation(self, tmp_path, start: str, end: str):
        path = write_jsonl(tmp_path / "s.jsonl", session_entries(start, end, "dst"))
        return read_observation(path)

    def test_spring_forward_duration(self, new_york_tz, tmp_path):
        # 01:00 EST to 03:30 EDT is 1.5 real hours, 2.5 on the wall clock
        observation = self.observation(tmp_path, "2024-03-10T06:00:00Z", "2024-03-10T07:30:00Z")
        sessions = reconstruct(observation)
        assert len(sessions) == 1
        assert sessions[0].duration_hours == pytest.approx(1.5)

        snapshot = aggregate(sessions, project_count=1)
        assert snapshot.total_hours == pytest.approx(1.5)
        assert snapshot.hour_buckets[1] == 1

    def test_fall_back_duration(self, new_york_tz, tmp_path):
        # 01:00 EDT to 01:30 EST is 1.5 real hours, 0.5 on the wall clock
        observation = self.observation(tmp_path, "2024-11-03T05:00:00Z", "2024-11-03T06:30:00Z")
        sessions = reconstruct(observation)
        assert len(sessions) == 1
        assert sessions[0].duration_hours == pytest.approx(1.5)

    def test_sub_session_hours_after_transition(self, new_york_tz, tmp_path):
        # 00:00 EST to 07:00 EDT: six real hours split at 00:00, 03:00 and 05:00 local
        observation = self.observation(tmp_path, "2024-03-10T05:00:00Z", "2024-03-10T11:00:00Z")
        sessions = reconstruct(observation)
        assert len(sessions) == 3

        snapshot = aggregate(sessions, project_count=1)
        assert [h for h, count in enumerate(snapshot.hour_buckets) if count] == [0, 3, 5]
        assert snapshot.active_days == 1
