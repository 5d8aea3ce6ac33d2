"""Markdown report rendering for an analyzed history."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from histdash import config
from histdash.categories import summarize_categories
from histdash.errors import ReportWriteError
from histdash.services import frequency
from histdash.services.query_engine import HistoryAnalysis

logger = logging.getLogger("histdash")

_FULL_COMMAND_WIDTH = 60


def _pct(part: int, whole: int) -> str:
    if not whole:
        return "0.0"
    return f"{part / whole * 100:.1f}"


def _shorten(command: str, width: int = _FULL_COMMAND_WIDTH) -> str:
    if len(command) <= width:
        return command
    return command[:width] + "..."


def render_report(analysis: HistoryAnalysis, generated_at: Optional[datetime] = None) -> str:
    stamp = (generated_at or datetime.now(timezone.utc)).isoformat()
    overview = analysis.overview()
    total = overview.totalCommands
    records = analysis.records

    top = frequency.top_commands(records, config.REPORT_TOP_COMMANDS)
    top_full = frequency.full_command_frequency(records, config.REPORT_TOP_FULL_COMMANDS)
    git = frequency.git_subcommands(records)

    if overview.firstOrdinal is None:
        history_range = "n/a"
    else:
        history_range = f"Line {overview.firstOrdinal} to {overview.lastOrdinal}"

    lines = [
        "# Fish History Analysis Report",
        f"Generated: {stamp}",
        "",
        "## Overview",
        f"- **Total Commands**: {total:,}",
        f"- **Detected Sessions**: {overview.sessionCount}",
        f"- **Average Commands per Session**: {overview.avgCommandsPerSession}",
        f"- **History Range**: {history_range}",
        "",
        f"## Top {len(top)} Commands by Frequency",
        "| Rank | Command | Count | Percentage |",
        "|------|---------|-------|------------|",
    ]
    for rank, entry in enumerate(top, start=1):
        lines.append(f"| {rank} | `{entry.key}` | {entry.count} | {_pct(entry.count, total)}% |")

    lines += ["", "## Commands by Category"]
    for summary in summarize_categories(analysis.categories, total):
        lines.append(f"- **{summary.category.value}**: {summary.count} commands ({summary.percentage:.1f}%)")

    git_total = sum(entry.count for entry in git)
    lines += [
        "",
        "## Git Usage Analysis",
        f"Git commands represent {_pct(git_total, total)}% of all commands.",
        "",
        "### Top Git Subcommands",
        "| Subcommand | Count |",
        "|------------|-------|",
    ]
    for entry in git[:10]:
        lines.append(f"| `git {entry.key}` | {entry.count} |")

    lines += [
        "",
        "## Most Repeated Full Commands",
        "| Command | Count |",
        "|---------|-------|",
    ]
    for entry in top_full:
        lines.append(f"| `{_shorten(entry.key)}` | {entry.count} |")

    lines += ["", "## Session Analysis", ""]
    for session in analysis.sessions[: config.REPORT_SESSION_LIMIT]:
        first = session.commands[0].ordinal if session.commands else "?"
        last = session.commands[-1].ordinal if session.commands else "?"
        lines += [
            f"### Session {session.id}",
            f"- Commands: {session.commandCount}",
            f"- Line range: {first} - {last}",
            f"- Ended with: `{session.endedReason}`",
            "",
        ]

    return "\n".join(lines)


def default_report_path(history_file: Path | str) -> Path:
    return Path(history_file).parent / config.REPORT_FILENAME


def write_report(analysis: HistoryAnalysis, path: Path | str) -> Path:
    report_path = Path(path)
    logger.info("Generating analysis report")
    try:
        report_path.write_text(render_report(analysis), encoding="utf-8")
    except OSError as exc:
        raise ReportWriteError(report_path, str(exc)) from exc
    logger.info("Report saved to %s", report_path)
    return report_path
