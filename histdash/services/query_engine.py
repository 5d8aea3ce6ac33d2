"""Named query dispatch over an analyzed history."""
from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel

from histdash.categories import categorize, summarize_categories
from histdash.errors import QueryArgumentError, UnknownQueryError
from histdash.models import Category, CommandRecord, HistoryOverview, Session
from histdash.segmentation import average_session_length, segment_sessions
from histdash.services import frequency, patterns

logger = logging.getLogger("histdash.query")

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class HistoryAnalysis:
    """Immutable bundle of parsed records and the passes derived from them."""

    records: tuple[CommandRecord, ...]
    sessions: tuple[Session, ...]
    categories: Mapping[Category, tuple[CommandRecord, ...]] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def total(self) -> int:
        return len(self.records)

    def overview(self) -> HistoryOverview:
        records = self.records
        return HistoryOverview(
            totalCommands=len(records),
            uniqueCommands=len({record.command for record in records}),
            sessionCount=len(self.sessions),
            avgCommandsPerSession=average_session_length(len(records), len(self.sessions)),
            firstOrdinal=records[0].ordinal if records else None,
            lastOrdinal=records[-1].ordinal if records else None,
        )


def analyze_history(records: Sequence[CommandRecord]) -> HistoryAnalysis:
    chronological = tuple(records)
    return HistoryAnalysis(
        records=chronological,
        sessions=segment_sessions(chronological),
        categories=MappingProxyType(categorize(chronological)),
    )


def _int_arg(args: Sequence[str], index: int, default: int) -> int:
    # Leading integer prefix only ("12.5" -> 12, "3x" -> 3); no digits or zero
    # fall back to the default.
    if len(args) <= index:
        return default
    match = _LEADING_INT.match(str(args[index]))
    if match is None:
        return default
    return int(match.group(1)) or default


def _required_arg(args: Sequence[str], index: int, query: str, name: str) -> str:
    if len(args) <= index or not str(args[index]):
        raise QueryArgumentError(f"Query '{query}' requires a <{name}> argument")
    return str(args[index])


class QueryEngine:
    """Routes a query name plus positional string arguments to an analytic."""

    def __init__(self, analysis: HistoryAnalysis):
        self.analysis = analysis
        self._handlers: dict[str, Callable[[Sequence[str]], Any]] = {
            "search": self._search,
            "top": self._top,
            "full-commands": self._full_commands,
            "git-analysis": self._git_analysis,
            "categories": self._categories,
            "projects": self._projects,
            "evolution": self._evolution,
            "workflows": self._workflows,
            "sessions": self._sessions,
            "recent": self._recent,
            "time-slice": self._time_slice,
            "overview": self._overview,
        }

    def names(self) -> list[str]:
        return list(self._handlers)

    def run(self, name: str, *args: str) -> Any:
        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownQueryError(name)
        try:
            return handler(args)
        except ValueError as exc:
            logger.warning("Query %s failed: %s", name, exc)
            raise

    def _search(self, args: Sequence[str]):
        pattern = _required_arg(args, 0, "search", "pattern")
        return patterns.search_commands(self.analysis.records, pattern, ignore_case=True)

    def _top(self, args: Sequence[str]):
        return frequency.top_commands(self.analysis.records, _int_arg(args, 0, 10))

    def _full_commands(self, args: Sequence[str]):
        return frequency.full_command_frequency(self.analysis.records, _int_arg(args, 0, 10))

    def _git_analysis(self, args: Sequence[str]):
        return frequency.git_subcommands(self.analysis.records)

    def _categories(self, args: Sequence[str]):
        return summarize_categories(self.analysis.categories, self.analysis.total)

    def _projects(self, args: Sequence[str]):
        return patterns.project_patterns(self.analysis.records)

    def _evolution(self, args: Sequence[str]):
        token = _required_arg(args, 0, "evolution", "command")
        return patterns.command_evolution(self.analysis.records, token)

    def _workflows(self, args: Sequence[str]):
        return patterns.workflow_patterns(self.analysis.records, _int_arg(args, 0, 5))

    def _sessions(self, args: Sequence[str]):
        return patterns.session_summaries(self.analysis.sessions)

    def _recent(self, args: Sequence[str]):
        return patterns.recent_commands(self.analysis.records, _int_arg(args, 0, 20))

    def _time_slice(self, args: Sequence[str]):
        start = _int_arg(args, 0, 0)
        end = _int_arg(args, 1, 10)
        return patterns.time_slice(self.analysis.records, start, end)

    def _overview(self, args: Sequence[str]):
        return self.analysis.overview()


def to_jsonable(result: Any) -> Any:
    """Convert a query result into plain JSON-ready data."""
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json")
    if isinstance(result, (list, tuple)):
        return [to_jsonable(item) for item in result]
    if isinstance(result, Mapping):
        return {str(key.value if isinstance(key, Category) else key): to_jsonable(value) for key, value in result.items()}
    return result
