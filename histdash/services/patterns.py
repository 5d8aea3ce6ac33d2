"""Pattern mining over the chronological command sequence.

Evolution buckets, sliding-window workflows, regex search, percentile time
slices and directory-visit patterns. Every function is a read-only pass over
an immutable record sequence.
"""
from __future__ import annotations

import math
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from histdash.errors import InvalidSearchPattern
from histdash.models import (
    CommandRecord,
    EvolutionBucket,
    ProjectPattern,
    SearchMatch,
    Session,
    SessionSummary,
    WorkflowPattern,
)
from histdash.services.frequency import rank_counts, top_base_commands

EVOLUTION_CHUNKS = 10
WORKFLOW_SEPARATOR = " → "
PROJECT_FOLLOW_COMMANDS = 5


def _mentions(record: CommandRecord, token: str) -> bool:
    return record.baseToken == token or token in record.command


def command_evolution(
    records: Sequence[CommandRecord],
    token: str,
    chunks: int = EVOLUTION_CHUNKS,
) -> list[EvolutionBucket]:
    """Count mentions of ``token`` across equal chunks of history.

    Chunk size is ``floor(total / chunks)``; the trailing remainder belongs to
    no chunk. With fewer records than chunks every bucket is empty and
    reports 0.0 percent.
    """
    chunk_size = len(records) // chunks if chunks > 0 else 0
    buckets: list[EvolutionBucket] = []
    for index in range(chunks):
        start = index * chunk_size
        chunk = records[start:start + chunk_size]
        count = sum(1 for record in chunk if _mentions(record, token))
        percentage = round(count / chunk_size * 100, 1) if chunk_size else 0.0
        buckets.append(
            EvolutionBucket(
                period=f"{index + 1}/{chunks}",
                chunkIndex=index + 1,
                count=count,
                percentage=percentage,
            )
        )
    return buckets


def workflow_patterns(
    records: Sequence[CommandRecord],
    window_size: int = 5,
    limit: int = 10,
) -> list[WorkflowPattern]:
    """Most frequent runs of ``window_size`` consecutive base commands."""
    if window_size < 1:
        raise ValueError(f"Window size must be at least 1, got {window_size}")

    tokens = [record.baseToken for record in records]
    windows = (
        WORKFLOW_SEPARATOR.join(tokens[start:start + window_size])
        for start in range(len(tokens) - window_size + 1)
    )
    return [
        WorkflowPattern(pattern=entry.key, count=entry.count)
        for entry in rank_counts(windows, limit=limit)
    ]


@dataclass(frozen=True)
class PatternCompileResult:
    regex: Optional[re.Pattern[str]] = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.regex is not None


def compile_search_pattern(pattern: str, ignore_case: bool = False) -> PatternCompileResult:
    flags = re.IGNORECASE if ignore_case else 0
    try:
        return PatternCompileResult(regex=re.compile(pattern, flags))
    except re.error as exc:
        return PatternCompileResult(error=str(exc))


def search_commands(
    records: Sequence[CommandRecord],
    pattern: str,
    ignore_case: bool = True,
) -> list[SearchMatch]:
    """Return every record whose command matches ``pattern`` anywhere.

    Raises InvalidSearchPattern if the pattern does not compile.
    """
    compiled = compile_search_pattern(pattern, ignore_case)
    if not compiled.ok:
        raise InvalidSearchPattern(pattern, compiled.error)

    regex = compiled.regex
    return [
        SearchMatch(ordinal=record.ordinal, command=record.command, chronologicalPosition=position)
        for position, record in enumerate(records, start=1)
        if regex.search(record.command)
    ]


def time_slice(
    records: Sequence[CommandRecord],
    start_percent: float,
    end_percent: float,
) -> list[CommandRecord]:
    """Half-open percentile range of history; percentages are not clamped."""
    total = len(records)
    start = math.floor(start_percent / 100 * total)
    end = math.floor(end_percent / 100 * total)
    return list(records[start:end])


def _cd_target(command: str) -> str:
    return command.replace("cd ", "", 1).strip()


def project_patterns(
    records: Sequence[CommandRecord],
    limit: int = 10,
    follow: int = PROJECT_FOLLOW_COMMANDS,
    top: int = 3,
) -> list[ProjectPattern]:
    """Most visited ``cd`` targets and what tends to run right after them.

    Follow-on commands from every visit to a directory share one pool.
    """
    visits: dict[str, int] = {}
    follow_on: dict[str, list[str]] = {}

    for index, record in enumerate(records):
        if record.baseToken != "cd" or len(record.command) <= 2:
            continue
        directory = _cd_target(record.command)
        visits[directory] = visits.get(directory, 0) + 1
        follow_on.setdefault(directory, []).extend(
            following.command for following in records[index + 1:index + 1 + follow]
        )

    ranked = sorted(visits.items(), key=lambda item: -item[1])[: max(0, limit)]
    return [
        ProjectPattern(
            directory=directory,
            visits=count,
            commonCommands=top_base_commands(follow_on[directory], n=top),
        )
        for directory, count in ranked
    ]


def recent_commands(records: Sequence[CommandRecord], n: int = 20) -> list[CommandRecord]:
    """The ``n`` most recent records, newest first."""
    if n <= 0:
        return []
    return list(reversed(records[-n:]))


def session_summaries(sessions: Sequence[Session], top: int = 3) -> list[SessionSummary]:
    return [
        SessionSummary(
            id=session.id,
            commandCount=session.commandCount,
            range=f"{session.startIndex}-{session.endIndex}",
            endedReason=session.endedReason,
            topCommands=top_base_commands((record.command for record in session.commands), n=top),
        )
        for session in sessions
    ]
