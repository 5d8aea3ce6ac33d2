"""Split the chronological command sequence into sessions."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from histdash.models import CommandRecord, Session

logger = logging.getLogger("histdash.segmentation")

SESSION_END_PREFIXES = ("exit", "tmux", "logout", "shutdown", "reboot")
RESTART_COMMANDS = frozenset({"cd", "cd ~", "ls"})
RESTART_MIN_LENGTH = 50
UNKNOWN_END = "unknown"


def is_session_end(command: str) -> bool:
    # Prefix match on the whole command text, so "tmuxinator" counts too.
    return command.startswith(SESSION_END_PREFIXES)


def is_heuristic_restart(command: str, buffered: int) -> bool:
    if buffered <= RESTART_MIN_LENGTH:
        return False
    return command in RESTART_COMMANDS or command.startswith("tmux")


def segment_sessions(records: Sequence[CommandRecord]) -> tuple[Session, ...]:
    """Partition records into sessions in a single forward pass.

    The record that triggers a boundary belongs to the session it closes.
    """
    sessions: list[Session] = []
    current: list[CommandRecord] = []
    start_index = 0
    last_index = len(records) - 1

    for index, record in enumerate(records):
        current.append(record)

        ended = is_session_end(record.command)
        restart = is_heuristic_restart(record.command, len(current))
        if not (ended or restart or index == last_index):
            continue

        sessions.append(
            Session(
                id=len(sessions) + 1,
                commands=tuple(current),
                endedReason=record.command if ended else UNKNOWN_END,
                startIndex=start_index,
                endIndex=index,
            )
        )
        current = []
        start_index = index + 1

    logger.info("Detected %d sessions", len(sessions))
    return tuple(sessions)


def average_session_length(total: int, session_count: int) -> int:
    if session_count <= 0:
        return 0
    # Half-up rounding, not banker's rounding.
    return int(total / session_count + 0.5)
