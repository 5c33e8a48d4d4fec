import unittest
from dataclasses import replace
from datetime import datetime, timezone

from vc_changelog.history.commit_classifier import DEFAULT_RULES
from vc_changelog.history.commit_model import Author, Commit
from vc_changelog.history.shortener import CommitShortener


def make_commit(message: str) -> Commit:
    return Commit(
        id="abc",
        author=Author(name="Jane Doe", email="jane@example.org"),
        date=datetime(2023, 1, 1, tzinfo=timezone.utc),
        message=message,
    )


class TestCommitShortener(unittest.TestCase):
    def setUp(self) -> None:
        self.shortener = CommitShortener()

    def test_empty_message_yields_none(self) -> None:
        self.assertIsNone(self.shortener.shorten(make_commit("")))

    def test_brief_without_references(self) -> None:
        commit = make_commit("Fix crash\n\nThe parser crashed on empty input.")
        self.assertEqual(self.shortener.shorten(commit), "Fix crash")

    def test_references_are_appended_in_body_order(self) -> None:
        commit = make_commit(
            "Fix crash\n\nBug 12: crash on start\nSome details\nJIRA: ABC-1\nCS1234 follow-up"
        )
        self.assertEqual(
            self.shortener.shorten(commit),
            "Fix crash (Bug 12: crash on start,JIRA: ABC-1,CS1234 follow-up)",
        )

    def test_lines_that_only_look_like_references_are_ignored(self) -> None:
        commit = make_commit("Fix crash\n\nBug report: see list\nSee CS1234\n  JIRA ABC")
        self.assertEqual(self.shortener.shorten(commit), "Fix crash")

    def test_brief_is_scanned_too(self) -> None:
        commit = make_commit("CS42 tweak timeouts")
        self.assertEqual(self.shortener.shorten(commit), "CS42 tweak timeouts (CS42 tweak timeouts)")

    def test_shortening_is_idempotent(self) -> None:
        commit = make_commit("Fix crash\n\nBug 12: crash on start")
        once = self.shortener.shorten(commit)
        twice = self.shortener.shorten(make_commit(once))
        self.assertEqual(once, twice)

    def test_custom_bug_references(self) -> None:
        rules = replace(DEFAULT_RULES, bug_references=(r"^Closes: #\d+",))
        shortener = CommitShortener(rules)
        commit = make_commit("Fix crash\n\nCloses: #7\nBug 12: crash")
        self.assertEqual(shortener.shorten(commit), "Fix crash (Closes: #7)")

    def test_unanchored_custom_pattern_matches_inside_a_line(self) -> None:
        rules = replace(DEFAULT_RULES, bug_references=(r"#\d+",))
        shortener = CommitShortener(rules)
        commit = make_commit("Fix crash\n\nCloses #7")
        self.assertEqual(shortener.shorten(commit), "Fix crash (Closes #7)")

    def test_body_is_split_on_newlines_only(self) -> None:
        commit = make_commit("Fix crash\n\nSee page\x0cBug 12: crash")
        self.assertEqual(self.shortener.shorten(commit), "Fix crash")


if __name__ == "__main__":
    unittest.main()
