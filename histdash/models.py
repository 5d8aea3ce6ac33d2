"""Pydantic models for parsed history and analytics results."""
from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ── Parsed history ──────────────────────────────────────────────────

class CommandRecord(_Frozen):
    ordinal: int  # 1-based line number in the original (newest-first) file
    rawText: str
    command: str
    baseToken: str


class Session(_Frozen):
    id: int
    commands: tuple[CommandRecord, ...] = ()
    endedReason: str = "unknown"
    startIndex: int = 0
    endIndex: int = 0

    @property
    def commandCount(self) -> int:
        return len(self.commands)


class Category(str, Enum):
    VERSION_CONTROL = "Version Control"
    FILE_OPERATIONS = "File Operations"
    TEXT_PROCESSING = "Text Processing"
    DEVELOPMENT = "Development"
    PACKAGE_MANAGEMENT = "Package Management"
    SYSTEM = "System"
    NETWORK = "Network"
    EDITORS = "Editors"
    TERMINAL_SESSION = "Terminal/Session"
    ARCHIVES = "Archives"
    DOCKER = "Docker"
    OTHER = "Other"


# ── Analytics results ───────────────────────────────────────────────

class RankedEntry(_Frozen):
    key: str
    count: int = 0


class EvolutionBucket(_Frozen):
    period: str
    chunkIndex: int
    count: int = 0
    percentage: float = 0.0


class WorkflowPattern(_Frozen):
    pattern: str
    count: int = 0


class SearchMatch(_Frozen):
    ordinal: int
    command: str
    chronologicalPosition: int


class ProjectPattern(_Frozen):
    directory: str
    visits: int = 0
    commonCommands: list[RankedEntry] = Field(default_factory=list)


class SessionSummary(_Frozen):
    id: int
    commandCount: int = 0
    range: str = ""
    endedReason: str = "unknown"
    topCommands: list[RankedEntry] = Field(default_factory=list)


class CategorySummary(_Frozen):
    category: Category
    count: int = 0
    percentage: float = 0.0


class HistoryOverview(_Frozen):
    totalCommands: int = 0
    uniqueCommands: int = 0
    sessionCount: int = 0
    avgCommandsPerSession: int = 0
    firstOrdinal: Optional[int] = None
    lastOrdinal: Optional[int] = None
