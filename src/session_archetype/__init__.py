"""Session Archetype - what kind of Claude Code developer are you?"""

from importlib.metadata import version

try:
    __version__ = version("session-archetype")
except Exception:
    __version__ = "0.1.0"  # Fallback for development

# Re-export public API
from session_archetype.archetypes import BALANCED, classify, default_rules
from session_archetype.models import (
    ArchetypeRule,
    ClassificationResult,
    EmptyInputError,
    RawObservation,
    Session,
    StatsSnapshot,
)
from session_archetype.personality import build_summary, diagnose, get_personality
from session_archetype.sessions import reconstruct, reconstruct_all
from session_archetype.stats import aggregate

__all__ = [
    # Version
    "__version__",
    # Models
    "RawObservation",
    "Session",
    "StatsSnapshot",
    "ArchetypeRule",
    "ClassificationResult",
    "EmptyInputError",
    # Pipeline
    "reconstruct",
    "reconstruct_all",
    "aggregate",
    "classify",
    "default_rules",
    "BALANCED",
    "diagnose",
    "build_summary",
    "get_personality",
]
