import os
import tempfile
import unittest
from pathlib import Path

from histdash.errors import HistoryReadError
from histdash.history_store import HistoryStore


class HistoryStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(tmpdir.cleanup)
        self.path = Path(tmpdir.name) / "fish-history.txt"
        self.path.write_text("git status\nls\n", encoding="utf-8")
        os.utime(self.path, (1_700_000_000, 1_700_000_000))

    def test_caches_analysis_until_file_changes(self) -> None:
        store = HistoryStore(self.path)

        first = store.get_analysis()
        self.assertIs(store.get_analysis(), first)

        self.path.write_text("vim notes\ngit status\nls\n", encoding="utf-8")
        os.utime(self.path, (1_700_000_100, 1_700_000_100))

        reloaded = store.get_analysis()
        self.assertIsNot(reloaded, first)
        self.assertEqual(reloaded.total, 3)

    def test_auto_reload_disabled_keeps_cached_analysis(self) -> None:
        store = HistoryStore(self.path, auto_reload=False)
        first = store.get_analysis()

        self.path.write_text("vim notes\n", encoding="utf-8")
        os.utime(self.path, (1_700_000_100, 1_700_000_100))

        self.assertIs(store.get_analysis(), first)
        store.invalidate()
        self.assertEqual(store.get_analysis().total, 1)

    def test_set_path_and_missing_file(self) -> None:
        store = HistoryStore(self.path)
        store.get_analysis()

        store.set_path(self.path.with_name("other.txt"))

        with self.assertRaises(HistoryReadError):
            store.get_engine()


if __name__ == "__main__":
    unittest.main()
