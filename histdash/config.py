"""histdash configuration."""
import os
from pathlib import Path


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default

# History source
HISTORY_FILE = Path(os.getenv("HISTDASH_HISTORY_FILE", "./fish-history-sample.txt"))
REPORT_FILENAME = os.getenv("HISTDASH_REPORT_FILENAME", "fish-history-analysis.md")

# Report tuning
REPORT_TOP_COMMANDS = _env_int("HISTDASH_REPORT_TOP_COMMANDS", 15)
REPORT_TOP_FULL_COMMANDS = _env_int("HISTDASH_REPORT_TOP_FULL_COMMANDS", 10)
REPORT_SESSION_LIMIT = _env_int("HISTDASH_REPORT_SESSION_LIMIT", 5)

# Logging
LOG_LEVEL = os.getenv("HISTDASH_LOG_LEVEL", "INFO").upper()

# Re-read the history file when its mtime changes
STORE_AUTO_RELOAD = _env_bool("HISTDASH_STORE_AUTO_RELOAD", True)

# Server settings
HOST = os.getenv("HISTDASH_HOST", "127.0.0.1")
PORT = _env_int("HISTDASH_PORT", 8000)

# CORS
FRONTEND_ORIGIN = os.getenv("HISTDASH_FRONTEND_ORIGIN", "http://localhost:3000")
