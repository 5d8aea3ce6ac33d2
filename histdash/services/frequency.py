"""Ranked frequency aggregates over the chronological command sequence."""
from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

from histdash.models import CommandRecord, RankedEntry
from histdash.parsers.history import base_token

UNKNOWN_SUBCOMMAND = "unknown"


def rank_counts(keys: Iterable[str], limit: int | None = None) -> list[RankedEntry]:
    """Count keys and rank them by descending count.

    Counter keeps first-insertion order and sorted() is stable, so equal counts
    stay in order of first occurrence.
    """
    counter: Counter[str] = Counter()
    for key in keys:
        counter[key] += 1
    ranked = sorted(counter.items(), key=lambda item: -item[1])
    if limit is not None:
        ranked = ranked[: max(0, limit)]
    return [RankedEntry(key=key, count=count) for key, count in ranked]


def top_commands(records: Sequence[CommandRecord], n: int = 20) -> list[RankedEntry]:
    return rank_counts((record.baseToken for record in records), limit=n)


def full_command_frequency(records: Sequence[CommandRecord], n: int = 20) -> list[RankedEntry]:
    return rank_counts((record.command.strip() for record in records), limit=n)


def _git_subcommand(command: str) -> str:
    parts = command.split()
    return parts[1] if len(parts) > 1 else UNKNOWN_SUBCOMMAND


def git_subcommands(records: Sequence[CommandRecord]) -> list[RankedEntry]:
    """Full (untruncated) ranking of git subcommands."""
    return rank_counts(_git_subcommand(record.command) for record in records if record.baseToken == "git")


def top_base_commands(commands: Iterable[str], n: int = 5) -> list[RankedEntry]:
    """Rank base commands of free command strings (follow-on pools, session bodies)."""
    return rank_counts((base_token(command) for command in commands), limit=n)
