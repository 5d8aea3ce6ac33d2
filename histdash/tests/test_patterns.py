import unittest

from histdash.errors import InvalidSearchPattern
from histdash.parsers.history import parse_history_text
from histdash.segmentation import segment_sessions
from histdash.services.patterns import (
    command_evolution,
    compile_search_pattern,
    project_patterns,
    recent_commands,
    search_commands,
    session_summaries,
    time_slice,
    workflow_patterns,
)


def _records(chronological: list[str]):
    return parse_history_text("\n".join(reversed(chronological)))


class EvolutionTests(unittest.TestCase):
    def test_remainder_beyond_full_chunks_is_dropped(self) -> None:
        chronological = ["git status", "git log"] + ["ls"] * 18 + ["git push"] * 5
        records = _records(chronological)

        buckets = command_evolution(records, "git")

        self.assertEqual(len(buckets), 10)
        self.assertEqual(buckets[0].period, "1/10")
        self.assertEqual((buckets[0].count, buckets[0].percentage), (2, 100.0))
        self.assertTrue(all(bucket.count == 0 for bucket in buckets[1:]))
        self.assertEqual(sum(bucket.count for bucket in buckets), 2)

    def test_matches_base_token_or_substring(self) -> None:
        chronological = ["docker ps", "ls", "sudo docker images", "ls"] * 5
        records = _records(chronological)

        buckets = command_evolution(records, "docker")

        self.assertEqual([bucket.count for bucket in buckets], [1] * 10)
        self.assertEqual([bucket.percentage for bucket in buckets], [50.0] * 10)

    def test_fewer_records_than_chunks_reports_zero_buckets(self) -> None:
        buckets = command_evolution(_records(["git status", "git log", "ls"]), "git")

        self.assertEqual(len(buckets), 10)
        self.assertEqual([bucket.count for bucket in buckets], [0] * 10)
        self.assertEqual([bucket.percentage for bucket in buckets], [0.0] * 10)


class WorkflowPatternTests(unittest.TestCase):
    def test_counts_overlapping_windows(self) -> None:
        records = _records(["git", "make", "git", "make", "git"])

        patterns = workflow_patterns(records, 2)

        self.assertEqual(
            [(item.pattern, item.count) for item in patterns],
            [("git → make", 2), ("make → git", 2)],
        )

    def test_window_covering_the_whole_sequence_yields_one_pattern(self) -> None:
        records = _records(["ls", "cd src", "vim main.py"])

        patterns = workflow_patterns(records, 3)

        self.assertEqual([(item.pattern, item.count) for item in patterns], [("ls → cd → vim", 1)])

    def test_window_larger_than_sequence_is_empty(self) -> None:
        self.assertEqual(workflow_patterns(_records(["ls", "pwd"]), 3), [])
        self.assertEqual(workflow_patterns((), 5), [])

    def test_non_positive_window_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            workflow_patterns(_records(["ls"]), 0)

    def test_returns_at_most_ten_patterns(self) -> None:
        records = _records([f"cmd{i}" for i in range(30)])

        self.assertEqual(len(workflow_patterns(records, 1)), 10)


class SearchTests(unittest.TestCase):
    def setUp(self) -> None:
        self.records = _records(["ls", "Docker ps", "git status", "docker compose up"])

    def test_case_insensitive_search_reports_positions(self) -> None:
        matches = search_commands(self.records, "^docker", ignore_case=True)

        self.assertEqual(
            [(match.command, match.chronologicalPosition, match.ordinal) for match in matches],
            [("Docker ps", 2, 3), ("docker compose up", 4, 1)],
        )

    def test_case_sensitive_search(self) -> None:
        matches = search_commands(self.records, "docker", ignore_case=False)

        self.assertEqual([match.command for match in matches], ["docker compose up"])

    def test_invalid_pattern_fails_without_raising_re_error(self) -> None:
        compiled = compile_search_pattern("(unclosed")
        self.assertFalse(compiled.ok)
        self.assertTrue(compiled.error)

        with self.assertRaises(InvalidSearchPattern):
            search_commands(self.records, "(unclosed")

        self.assertEqual(len(search_commands(self.records, "git")), 1)


class TimeSliceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.records = _records([f"echo {i}" for i in range(10)])

    def test_half_open_percentile_range(self) -> None:
        self.assertEqual([r.command for r in time_slice(self.records, 0, 30)], ["echo 0", "echo 1", "echo 2"])
        self.assertEqual([r.command for r in time_slice(self.records, 25, 45)], ["echo 2", "echo 3"])

    def test_inverted_range_is_empty(self) -> None:
        self.assertEqual(time_slice(self.records, 80, 20), [])

    def test_out_of_range_percentages_are_not_clamped(self) -> None:
        self.assertEqual(len(time_slice(self.records, 0, 250)), 10)
        self.assertEqual(time_slice(self.records, 150, 200), [])

    def test_empty_sequence(self) -> None:
        self.assertEqual(time_slice((), 0, 100), [])


class ProjectPatternTests(unittest.TestCase):
    def test_visits_and_follow_on_commands_are_combined(self) -> None:
        records = _records(["cd app", "git status", "npm test", "cd lib", "ls", "cd app", "git pull", "cd"])

        projects = project_patterns(records)

        self.assertEqual([(p.directory, p.visits) for p in projects], [("app", 2), ("lib", 1)])
        self.assertEqual(
            [(entry.key, entry.count) for entry in projects[0].commonCommands],
            [("cd", 3), ("git", 2), ("npm", 1)],
        )
        self.assertEqual(
            [(entry.key, entry.count) for entry in projects[1].commonCommands],
            [("cd", 2), ("ls", 1), ("git", 1)],
        )

    def test_bare_cd_is_not_a_visit(self) -> None:
        self.assertEqual(project_patterns(_records(["cd", "ls"])), [])

    def test_limits_to_ten_directories(self) -> None:
        records = _records([f"cd dir{i}" for i in range(15)])

        projects = project_patterns(records)

        self.assertEqual(len(projects), 10)
        self.assertEqual(projects[0].directory, "dir0")


class RecentAndSessionSummaryTests(unittest.TestCase):
    def test_recent_commands_newest_first(self) -> None:
        records = _records(["a", "b", "c", "d"])

        self.assertEqual([r.command for r in recent_commands(records, 2)], ["d", "c"])
        self.assertEqual(recent_commands(records, 0), [])

    def test_session_summaries(self) -> None:
        records = _records(["git status", "git diff", "ls", "exit", "vim a"])

        summaries = session_summaries(segment_sessions(records))

        self.assertEqual([(s.id, s.commandCount, s.range) for s in summaries], [(1, 4, "0-3"), (2, 1, "4-4")])
        self.assertEqual([(e.key, e.count) for e in summaries[0].topCommands], [("git", 2), ("ls", 1), ("exit", 1)])
        self.assertEqual(summaries[0].endedReason, "exit")


if __name__ == "__main__":
    unittest.main()
