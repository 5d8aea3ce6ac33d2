"""Holds the analyzed history for the API, reloading when the file changes."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from histdash import config
from histdash.parsers.history import load_history_file
from histdash.services.query_engine import HistoryAnalysis, QueryEngine, analyze_history

logger = logging.getLogger("histdash.store")


class HistoryStore:
    """Lazily analyzes one history file and caches the result by mtime."""

    def __init__(self, history_path: Path, auto_reload: bool = True):
        self.history_path = Path(history_path)
        self.auto_reload = auto_reload
        self._analysis: Optional[HistoryAnalysis] = None
        self._mtime: Optional[float] = None

    def _current_mtime(self) -> Optional[float]:
        try:
            return self.history_path.stat().st_mtime
        except OSError:
            return None

    def set_path(self, history_path: Path | str) -> None:
        self.history_path = Path(history_path)
        self.invalidate()
        logger.info(f"Switched history file to: {self.history_path}")

    def invalidate(self) -> None:
        self._analysis = None
        self._mtime = None

    def get_analysis(self) -> HistoryAnalysis:
        """Return the cached analysis, re-reading the file if it changed.

        Raises HistoryReadError if the file cannot be read.
        """
        if self._analysis is not None:
            if not self.auto_reload or self._current_mtime() == self._mtime:
                return self._analysis
            logger.info("History file changed, reloading")

        mtime = self._current_mtime()
        analysis = analyze_history(load_history_file(self.history_path))
        self._analysis = analysis
        self._mtime = mtime
        return analysis

    def get_engine(self) -> QueryEngine:
        return QueryEngine(self.get_analysis())


# Global instance pointed at the configured history file
history_store = HistoryStore(config.HISTORY_FILE, auto_reload=config.STORE_AUTO_RELOAD)
