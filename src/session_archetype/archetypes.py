"""Archetype rules and first-match classification."""

from collections.abc import Callable, Sequence

from session_archetype.models import ArchetypeRule, ClassificationResult, StatsSnapshot


def _static(text: str) -> Callable[[StatsSnapshot], str]:
    return lambda s: text


def _days_per_active_day(s: StatsSnapshot) -> float:
    return s.total_days / s.active_days


BALANCED = ArchetypeRule(
    id="balanced",
    display_name="⚖️ The Balanced Developer",
    subtitle="バランス型開発者",
    tagline='"Sustainable velocity wins the race."',
    predicate=lambda s: True,
    describe=_static("You code consistently without burning out. Rare and admirable."),
)


def default_rules() -> tuple[ArchetypeRule, ...]:
    """Build the archetype rule table in priority order.

    Predicates overlap, so the order decides which archetype wins:
    night and morning habits beat streaks, streaks beat weekday balance,
    and so on down to project breadth.
    """
    return (
        ArchetypeRule(
            id="midnight-beast",
            display_name="🌙 The Midnight Beast",
            subtitle="深夜の怪物",
            tagline="\"The compiler doesn't sleep, and neither do I.\"",
            predicate=lambda s: s.night_fraction >= 0.30,
            describe=_static("Your code runs on moonlight and caffeine. Peak hours: 0-5 AM."),
        ),
        ArchetypeRule(
            id="dawn-coder",
            display_name="🌅 The Dawn Coder",
            subtitle="夜明けのコーダー",
            tagline='"Fresh mind, fresh commits."',
            predicate=lambda s: s.morning_fraction >= 0.40,
            describe=_static("You code when the world sleeps. Clear mind, elegant solutions."),
        ),
        ArchetypeRule(
            id="unstoppable-machine",
            display_name="🤖 The Unstoppable Machine",
            subtitle="不滅の機械",
            tagline='"Rest days are a human concept."',
            predicate=lambda s: s.longest_streak >= 30,
            describe=lambda s: (
                f"{s.longest_streak} consecutive days of coding. You simply don't stop."
            ),
        ),
        ArchetypeRule(
            id="weekend-warrior",
            display_name="⚔️ The Weekend Warrior",
            subtitle="週末の戦士",
            tagline='"Monday to Friday is warmup."',
            predicate=lambda s: s.weekend_ratio >= 1.8,
            describe=_static("Saturday and Sunday are your real working days."),
        ),
        ArchetypeRule(
            id="burst-genius",
            display_name="⚡ The Burst Genius",
            subtitle="バースト型天才",
            tagline='"I do nothing for days, then ship everything at once."',
            predicate=lambda s: s.active_days > 0 and _days_per_active_day(s) >= 2.5,
            describe=_static("Irregular patterns. Long silences. Then explosive productivity."),
        ),
        ArchetypeRule(
            id="disciplined-architect",
            display_name="📐 The Disciplined Architect",
            subtitle="規律の申し子",
            tagline='"Consistency beats intensity."',
            predicate=lambda s: (
                s.active_days > 0
                and _days_per_active_day(s) < 1.3
                and s.total_hours / s.active_days < 6
            ),
            describe=_static("Steady pace every day. You finish what you start."),
        ),
        ArchetypeRule(
            id="session-monster",
            display_name="🔥 The Session Monster",
            subtitle="セッション怪獣",
            tagline='"One more context window..."',
            predicate=lambda s: s.avg_session_hours >= 2.5,
            describe=_static(
                "Long, deep sessions. You go down the rabbit hole and don't come back."
            ),
        ),
        ArchetypeRule(
            id="micro-shipper",
            display_name="📦 The Micro-Shipper",
            subtitle="超高速出荷者",
            tagline='"Ship small, ship often."',
            predicate=lambda s: s.active_days > 0 and s.total_sessions / s.active_days >= 15,
            describe=_static("Dozens of sessions per day. Fast, iterative, relentless."),
        ),
        ArchetypeRule(
            id="code-explorer",
            display_name="🗺️ The Code Explorer",
            subtitle="コード探検家",
            tagline='"Every project is a new world."',
            predicate=lambda s: s.project_count >= 20,
            describe=_static("Many projects, curious mind. You explore, you don't settle."),
        ),
        ArchetypeRule(
            id="mono-focused",
            display_name="🎯 The Mono-Focused",
            subtitle="モノフォーカスの匠",
            tagline='"One project. Total mastery."',
            predicate=lambda s: s.project_count <= 3 and s.total_sessions >= 100,
            describe=_static("Deep obsession with one thing. Mastery over breadth."),
        ),
    )


def classify(snapshot: StatsSnapshot, rules: Sequence[ArchetypeRule]) -> ClassificationResult:
    """Return the first rule whose predicate holds, or the balanced default.

    Args:
        snapshot: Statistics to classify
        rules: Archetype rules in priority order

    Returns:
        ClassificationResult with the rule's description evaluated for the snapshot
    """
    for rule in rules:
        if rule.predicate(snapshot):
            return ClassificationResult(rule=rule, description=rule.describe(snapshot))
    return ClassificationResult(
        rule=BALANCED, description=BALANCED.describe(snapshot), is_default=True
    )
