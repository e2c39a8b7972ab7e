"""MCP Session Archetype Server.

Provides tools for diagnosing a Claude Code developer archetype:
- get_archetype: Archetype classification with supporting stats
- get_stats: Session statistics only
- get_status: Logs directory and file counts
"""

import logging
import os

from fastmcp import FastMCP

from session_archetype import __version__
from session_archetype.ingest import DEFAULT_LOGS_DIR, count_projects, find_log_files
from session_archetype.models import EmptyInputError
from session_archetype.personality import get_personality

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("session-archetype")
if os.environ.get("DEV_MODE"):
    logger.setLevel(logging.DEBUG)

# Initialize MCP server
mcp = FastMCP("session-archetype")


def _no_data(days: int | None, project: str | None) -> dict:
    return {
        "status": "no_data",
        "message": f"No Claude Code sessions found in {DEFAULT_LOGS_DIR}",
        "days": days,
        "project": project,
    }


@mcp.tool()
def get_status() -> dict:
    """Get logs directory status.

    Returns:
        Status info including logs directory, project count and log file count
    """
    return {
        "status": "ok",
        "version": __version__,
        "logs_dir": str(DEFAULT_LOGS_DIR),
        "exists": DEFAULT_LOGS_DIR.is_dir(),
        "project_count": count_projects(DEFAULT_LOGS_DIR),
        "files_found": len(find_log_files(DEFAULT_LOGS_DIR)),
    }


@mcp.tool()
def get_archetype(days: int | None = None, project: str | None = None) -> dict:
    """Diagnose the developer archetype from session logs.

    Args:
        days: Only include logs modified within this many days (default: all)
        project: Optional project directory name filter

    Returns:
        Archetype id, name, tagline, description and the stats behind it
    """
    try:
        summary = get_personality(DEFAULT_LOGS_DIR, days=days, project=project)
    except EmptyInputError:
        logger.info("No sessions found for archetype diagnosis")
        return _no_data(days, project)
    return {"status": "ok", **summary}


@mcp.tool()
def get_stats(days: int | None = None, project: str | None = None) -> dict:
    """Get session statistics without the archetype.

    Args:
        days: Only include logs modified within this many days (default: all)
        project: Optional project directory name filter

    Returns:
        Session counts, hours, streaks, time-of-day percentages and hour histogram
    """
    try:
        summary = get_personality(DEFAULT_LOGS_DIR, days=days, project=project)
    except EmptyInputError:
        return _no_data(days, project)
    return {
        "status": "ok",
        "stats": summary["stats"],
        "hour_buckets": summary["hour_buckets"],
        "day_buckets": summary["day_buckets"],
        "peak_hour": summary["peak_hour"],
    }


def create_app():
    """Create the ASGI app for uvicorn."""
    # stateless_http=True allows resilience to server restarts
    return mcp.http_app(stateless_http=True)


def main():
    """Run the MCP server."""
    import uvicorn

    port = int(os.environ.get("PORT", 8082))
    host = os.environ.get("HOST", "127.0.0.1")

    print(f"Starting Session Archetype on {host}:{port}")
    print(
        f"Add to Claude Code: claude mcp add --transport http --scope user session-archetype http://{host}:{port}/mcp"
    )

    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    main()
