"""History log parsers."""

from histdash.parsers.history import load_history_file, parse_history_text

__all__ = [
    "load_history_file",
    "parse_history_text",
]
