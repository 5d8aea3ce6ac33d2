"""Parse a newest-first shell history dump into chronological CommandRecords."""
from __future__ import annotations

import logging
from pathlib import Path

from histdash.errors import HistoryReadError
from histdash.models import CommandRecord

logger = logging.getLogger("histdash.parser")


def base_token(command: str) -> str:
    parts = command.split()
    return parts[0] if parts else ""


def parse_history_text(text: str) -> tuple[CommandRecord, ...]:
    """Build chronological (oldest-first) records from raw log text.

    The log lists the most recent command first, so records are built in file
    order and then reversed. ``ordinal`` is the 1-based position among all
    lines of the file, blank ones included.
    """
    records: list[CommandRecord] = []
    for lineno, line in enumerate(text.split("\n"), start=1):
        command = line.strip()
        if not command:
            continue
        records.append(
            CommandRecord(
                ordinal=lineno,
                rawText=line,
                command=command,
                baseToken=base_token(command),
            )
        )

    records.reverse()
    return tuple(records)


def load_history_file(path: Path | str) -> tuple[CommandRecord, ...]:
    """Read and parse a history file.

    Raises HistoryReadError if the file cannot be read.
    """
    history_path = Path(path)
    logger.info("Reading history file %s", history_path)
    try:
        text = history_path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError as exc:
        raise HistoryReadError(history_path, "file not found", missing=True) from exc
    except PermissionError as exc:
        raise HistoryReadError(history_path, "permission denied") from exc
    except OSError as exc:
        raise HistoryReadError(history_path, exc.strerror or str(exc)) from exc

    records = parse_history_text(text)
    logger.info("Parsed %d commands from %s", len(records), history_path)
    return records
