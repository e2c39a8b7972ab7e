"""Command-line interface for session archetype diagnosis."""

import argparse
import json
import logging
import sys
from pathlib import Path
from urllib.parse import quote

from session_archetype.ingest import DEFAULT_LOGS_DIR, count_projects, find_log_files
from session_archetype.models import EmptyInputError
from session_archetype.personality import get_personality

REPORT_WIDTH = 52
HOUR_BLOCKS = "▁▂▃▄▅▆▇█"

ANSI = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "magenta": "\033[35m",
    "cyan": "\033[36m",
}


def _paint(text: str, color: bool, *styles: str) -> str:
    if not color or not styles:
        return text
    return "".join(ANSI[s] for s in styles) + text + ANSI["reset"]


def _pct(value: int) -> str:
    return f"{value}%"


def render_hour_bar(buckets: list[int], peak_hour: int, color: bool = False) -> str:
    """Render the 24-hour histogram as a row of block characters.

    The peak hour is highlighted and night hours (0-4) are dimmed when
    color is enabled.
    """
    top = max(buckets) if buckets else 0
    if top == 0:
        return ""

    cells = []
    for hour, value in enumerate(buckets):
        block = HOUR_BLOCKS[round(value / top * 7)]
        if hour == peak_hour:
            cells.append(_paint(block, color, "yellow"))
        elif hour <= 4:
            cells.append(_paint(block, color, "dim"))
        else:
            cells.append(block)
    return "".join(cells)


def time_of_day_label(stats: dict, color: bool = False) -> str:
    """Describe when the user mostly codes, from the band percentages."""
    if stats["night_pct"] >= 25:
        return _paint(f"🌙 Night owl ({_pct(stats['night_pct'])} night sessions)", color, "blue")
    if stats["morning_pct"] >= 30:
        return _paint(
            f"🌅 Early bird ({_pct(stats['morning_pct'])} morning sessions)", color, "yellow"
        )
    if stats["evening_pct"] >= 40:
        return _paint(f"🌆 Evening coder ({_pct(stats['evening_pct'])} evening)", color, "magenta")
    return _paint(f"☀️ Day coder ({_pct(stats['afternoon_pct'])} afternoon)", color, "green")


def share_text(data: dict) -> str:
    """Plain-text blurb for sharing the archetype."""
    stats = data["stats"]
    name = data["archetype_name"]
    if data.get("archetype_subtitle"):
        name = f"{name} ({data['archetype_subtitle']})"
    return (
        f"My Claude Code archetype: {name}\n"
        f"{stats['total_hours']:.0f}h • {stats['total_sessions']} sessions • "
        f"{stats['longest_streak']}-day streak\n"
        "What's yours? session-archetype\n#claudecode"
    )


# Formatter registry: list of (predicate, formatter) tuples
# Order matters - first match wins
_FORMATTERS: list[tuple[callable, callable]] = []


def _register_formatter(predicate: callable):
    """Decorator to register a formatter with its predicate."""

    def decorator(formatter: callable):
        _FORMATTERS.append((predicate, formatter))
        return formatter

    return decorator


@_register_formatter(lambda d: "error" in d)
def _format_error(data: dict, color: bool) -> list[str]:
    return [_paint(data.get("message", data["error"]), color, "red")]


@_register_formatter(lambda d: "archetype" in d and "stats" in d)
def _format_report(data: dict, color: bool) -> list[str]:
    stats = data["stats"]
    border = "═" * REPORT_WIDTH
    rule = _paint("─" * (REPORT_WIDTH + 2), color, "dim")
    title = "  YOUR CLAUDE CODE DEVELOPER ARCHETYPE".ljust(REPORT_WIDTH)

    lines = [
        "",
        _paint(f"╔{border}╗", color, "bold", "cyan"),
        _paint("║", color, "bold", "cyan")
        + _paint(title, color, "bold")
        + _paint("║", color, "bold", "cyan"),
        _paint(f"╚{border}╝", color, "bold", "cyan"),
        "",
        f"  {_paint(data['archetype_name'], color, 'bold', 'yellow')}",
    ]
    if data.get("archetype_subtitle"):
        lines.append(f"  {_paint('「' + data['archetype_subtitle'] + '」', color, 'dim')}")
    lines += [
        "",
        f"  {_paint(data.get('tagline', ''), color, 'cyan')}",
        "",
        f"  {data.get('description', '')}",
        "",
        rule,
        f"  {_paint('Your data:', color, 'bold')}",
        f"  ⏱  {stats['total_hours']:.0f}h total  •  {stats['total_sessions']} sessions"
        f"  •  {stats['active_days']} active days",
        f"  🔥 Longest streak: {stats['longest_streak']} days",
        f"  📊 Avg session: {stats['avg_session_minutes']} min",
        "",
        "  Activity by hour (0h → 23h):",
        f"  {render_hour_bar(data['hour_buckets'], data['peak_hour'], color)}",
        f"  {_paint('0        6       12       18      23', color, 'dim')}",
        "",
        f"  {time_of_day_label(stats, color)}",
    ]
    if stats["weekend_ratio"] >= 1.5:
        lines.append(f"  ⚔️  Weekend warrior ({stats['weekend_ratio']:.1f}x weekend activity)")

    url = "https://x.com/intent/tweet?text=" + quote(share_text(data), safe="")
    lines += [
        "",
        rule,
        f"  {_paint('Share your archetype:', color, 'bold')}",
        f"  {_paint(url[:80] + '...', color, 'dim')}",
        "",
    ]
    return lines


@_register_formatter(lambda d: "stats" in d and "hour_buckets" in d)
def _format_stats(data: dict, color: bool) -> list[str]:
    stats = data["stats"]
    return [
        f"Sessions: {stats['total_sessions']}",
        f"Total hours: {stats['total_hours']}",
        f"Active days: {stats['active_days']} of {stats['total_days']}",
        f"Longest streak: {stats['longest_streak']} days",
        f"Avg session: {stats['avg_session_minutes']} min",
        f"Night/morning/afternoon/evening: {stats['night_pct']}% / {stats['morning_pct']}%"
        f" / {stats['afternoon_pct']}% / {stats['evening_pct']}%",
        f"Weekend ratio: {stats['weekend_ratio']}",
        f"Projects: {stats['project_count']}",
        f"Peak hour: {_paint(str(data['peak_hour']) + ':00', color, 'yellow')}",
    ]


@_register_formatter(lambda d: "files_found" in d)
def _format_status(data: dict, color: bool) -> list[str]:
    exists = _paint("yes", color, "green") if data["exists"] else _paint("no", color, "red")
    return [
        f"Logs directory: {data['logs_dir']}",
        f"Exists: {exists}",
        f"Projects: {data['project_count']}",
        f"Files found: {data['files_found']}",
    ]


def format_output(data: dict, json_output: bool = False, color: bool = False) -> str:
    """Format output as JSON or human-readable."""
    if json_output:
        return json.dumps(data, indent=2, ensure_ascii=False, default=str)

    for predicate, formatter in _FORMATTERS:
        if predicate(data):
            return "\n".join(formatter(data, color))

    # Fallback to JSON if no formatter matches
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _use_color(args, stream=None) -> bool:
    """Color only when requested and the target stream is a terminal."""
    stream = stream or sys.stdout
    return not args.json and not args.no_color and stream.isatty()


def _no_sessions(args) -> None:
    """Report that no sessions were found and exit with status 1."""
    data = {
        "error": "no_sessions",
        "message": "No Claude Code sessions found.",
        "logs_dir": str(args.logs_dir),
    }
    if args.json:
        print(format_output(data, json_output=True))
    else:
        print(format_output(data, color=_use_color(args, sys.stderr)), file=sys.stderr)
        print(f"Make sure you have sessions in {args.logs_dir}", file=sys.stderr)
    sys.exit(1)


def cmd_diagnose(args):
    """Show the archetype report."""
    try:
        result = get_personality(args.logs_dir, days=args.days, project=args.project)
    except EmptyInputError:
        _no_sessions(args)
        return
    print(format_output(result, args.json, color=_use_color(args)))


def cmd_stats(args):
    """Show the underlying statistics only."""
    try:
        summary = get_personality(args.logs_dir, days=args.days, project=args.project)
    except EmptyInputError:
        _no_sessions(args)
        return
    result = {
        "stats": summary["stats"],
        "hour_buckets": summary["hour_buckets"],
        "day_buckets": summary["day_buckets"],
        "peak_hour": summary["peak_hour"],
    }
    print(format_output(result, args.json, color=_use_color(args)))


def cmd_status(args):
    """Show where logs are read from and how many were found."""
    logs_dir = Path(args.logs_dir)
    result = {
        "logs_dir": str(logs_dir),
        "exists": logs_dir.is_dir(),
        "project_count": count_projects(logs_dir, project_filter=args.project),
        "files_found": len(find_log_files(logs_dir, days=args.days, project_filter=args.project)),
    }
    print(format_output(result, args.json, color=_use_color(args)))


def main():
    """CLI entry point."""
    epilog = """
Examples:
  session-archetype                      # Archetype report
  session-archetype --days 30            # Only logs touched in the last 30 days
  session-archetype --json               # Machine-readable summary
  session-archetype stats                # Statistics only
  session-archetype status               # Where logs are read from

Data location: ~/.claude/projects (override with --logs-dir or
SESSION_ARCHETYPE_LOGS_DIR)
"""
    parser = argparse.ArgumentParser(
        description="What kind of Claude Code developer are you?",
        prog="session-archetype",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--logs-dir",
        type=Path,
        default=DEFAULT_LOGS_DIR,
        help=f"Session logs directory (default: {DEFAULT_LOGS_DIR})",
    )
    parser.add_argument("--project", help="Project directory name filter")
    parser.add_argument("--days", type=int, help="Only logs modified in the last N days")
    parser.set_defaults(func=cmd_diagnose)
    subparsers = parser.add_subparsers(dest="command")

    sub = subparsers.add_parser("diagnose", help="Show the archetype report (default)")
    sub.set_defaults(func=cmd_diagnose)

    sub = subparsers.add_parser("stats", help="Show session statistics")
    sub.set_defaults(func=cmd_stats)

    sub = subparsers.add_parser("status", help="Show logs directory status")
    sub.set_defaults(func=cmd_status)

    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%H:%M:%S",
        )
    args.func(args)


if __name__ == "__main__":
    main()
