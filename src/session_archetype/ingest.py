"""Discovery and reading of Claude Code session logs."""

import json
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path

from session_archetype.models import RawObservation

logger = logging.getLogger("session-archetype")

# Default location for Claude Code session logs
DEFAULT_LOGS_DIR = Path(
    os.environ.get("SESSION_ARCHETYPE_LOGS_DIR", Path.home() / ".claude" / "projects")
)

# Bytes read from the start of a file to find its first line
HEAD_BYTES = 8192

# Bytes read from the end of a file to find its last line
TAIL_BYTES = 65536


@dataclass
class ScanResult:
    """Observations collected from a logs directory."""

    observations: list[RawObservation] = field(default_factory=list)
    project_count: int = 0
    files_found: int = 0
    files_skipped: int = 0


def _project_dirs(logs_dir: Path, project_filter: str | None = None) -> list[Path]:
    if not logs_dir.is_dir():
        return []
    return [
        d
        for d in sorted(logs_dir.iterdir())
        if d.is_dir() and (not project_filter or project_filter in d.name)
    ]


def count_projects(logs_dir: Path = DEFAULT_LOGS_DIR, project_filter: str | None = None) -> int:
    """Count project subdirectories in the logs directory."""
    return len(_project_dirs(logs_dir, project_filter))


def find_log_files(
    logs_dir: Path = DEFAULT_LOGS_DIR,
    days: int | None = None,
    project_filter: str | None = None,
) -> list[Path]:
    """Find JSONL session log files.

    Args:
        logs_dir: Directory containing project subdirectories
        days: Only include files modified within this many days (default: all)
        project_filter: Optional substring of the project directory name

    Returns:
        List of JSONL file paths, sorted by modification time (newest first)
    """
    if not logs_dir.exists():
        logger.warning(f"Logs directory does not exist: {logs_dir}")
        return []

    cutoff = datetime.now() - timedelta(days=days) if days is not None else None
    files = []

    for project_dir in _project_dirs(logs_dir, project_filter):
        for jsonl_file in project_dir.glob("*.jsonl"):
            try:
                mtime = datetime.fromtimestamp(jsonl_file.stat().st_mtime)
            except OSError as e:
                logger.warning(f"Could not stat {jsonl_file}: {e}")
                continue
            if cutoff is None or mtime >= cutoff:
                files.append((jsonl_file, mtime))

    files.sort(key=lambda x: x[1], reverse=True)
    return [f for f, _ in files]


def read_first_last_line(file_path: Path) -> tuple[str, str] | None:
    """Read the first and last non-blank lines of a file without reading all of it.

    The first line is taken from the first 8KB and the last line from the
    final 64KB, so very large transcripts stay cheap to scan.

    Returns:
        (first_line, last_line), or None for an empty file
    """
    with open(file_path, "rb") as f:
        head = f.read(HEAD_BYTES)
        if not head:
            return None
        first_line = head.decode("utf-8", errors="replace").split("\n", 1)[0]

        size = os.fstat(f.fileno()).st_size
        if size < 2:
            return first_line, first_line

        read_size = min(TAIL_BYTES, size)
        f.seek(size - read_size)
        tail = f.read(read_size).decode("utf-8", errors="replace")

    lines = [line for line in tail.split("\n") if line.strip()]
    last_line = lines[-1] if lines else first_line
    return first_line, last_line


def parse_timestamp(line: str) -> datetime | None:
    """Extract the event timestamp from a JSONL line.

    Accepts ISO-8601 strings (``Z`` suffix or offsets) and epoch milliseconds
    in a ``timestamp`` or ``ts`` field. Values are returned as aware datetimes
    in the local zone (naive strings are taken as local time), so the
    difference of two results is real elapsed time across DST changes.

    Returns:
        Aware local datetime, or None if the line has no usable timestamp
    """
    try:
        data = json.loads(line)
    except json.JSONDecodeError as e:
        logger.debug(f"JSON parse error: {e}")
        return None

    if not isinstance(data, dict):
        return None
    ts = data.get("timestamp") or data.get("ts")
    if not ts:
        return None

    try:
        if isinstance(ts, str):
            timestamp = datetime.fromisoformat(ts.replace("Z", "+00:00"))
        elif isinstance(ts, (int, float)) and not isinstance(ts, bool):
            timestamp = datetime.fromtimestamp(ts / 1000, tz=timezone.utc)
        else:
            return None
        return timestamp.astimezone()
    except (ValueError, OverflowError, OSError):
        logger.debug(f"Could not parse timestamp: {ts}")
        return None


def read_observation(file_path: Path) -> RawObservation | None:
    """Read the first and last timestamps of one session log.

    Returns:
        RawObservation, or None if the file is empty or its first line
        carries no parseable timestamp
    """
    lines = read_first_last_line(file_path)
    if lines is None:
        return None

    first_line, last_line = lines
    start = parse_timestamp(first_line)
    if start is None:
        logger.debug(f"No timestamp on first line of {file_path}")
        return None

    return RawObservation(
        first_timestamp=start,
        last_timestamp=parse_timestamp(last_line),
        source=str(file_path),
    )


def scan_logs(
    logs_dir: Path = DEFAULT_LOGS_DIR,
    days: int | None = None,
    project: str | None = None,
) -> ScanResult:
    """Collect observations from every session log under a logs directory.

    Args:
        logs_dir: Directory containing project subdirectories
        days: Only include files modified within this many days (default: all)
        project: Optional project directory name filter

    Returns:
        ScanResult with observations, project count and file stats
    """
    files = find_log_files(logs_dir, days=days, project_filter=project)
    result = ScanResult(
        project_count=count_projects(logs_dir, project_filter=project),
        files_found=len(files),
    )

    for file_path in files:
        try:
            observation = read_observation(file_path)
        except OSError as e:
            logger.warning(f"Could not read {file_path}: {e}")
            observation = None

        if observation is None:
            result.files_skipped += 1
        else:
            result.observations.append(observation)

    logger.debug(
        f"Scanned {result.files_found} files in {result.project_count} projects "
        f"({result.files_skipped} skipped)"
    )
    return result
