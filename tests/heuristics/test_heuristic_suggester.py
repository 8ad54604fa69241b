import unittest
from datetime import date

from commit_assistant.analysis.models import ChangePresence
from commit_assistant.heuristics.suggester import (
    HeuristicSuggester,
    backfill,
    date_stamp,
    suggest_branch_names,
    suggest_commit_messages,
)


TODAY = date(2024, 1, 1)
NEW = ChangePresence(has_new_files=True)
DELETED = ChangePresence(has_deleted_files=True)
MODIFIED = ChangePresence(only_modified=True)
NOTHING = ChangePresence()


class TestCommitMessages(unittest.TestCase):
    def test_single_new_doc_file(self) -> None:
        self.assertEqual(
            suggest_commit_messages(["README.md"], NEW),
            ["feat: add README.md", "docs: add project documentation", "chore: update project files"],
        )

    def test_several_new_source_files(self) -> None:
        self.assertEqual(
            suggest_commit_messages(["a.py", "b.py"], NEW),
            ["feat: add new files", "feat: add new module", "chore: update project files"],
        )

    def test_new_config_file(self) -> None:
        messages = suggest_commit_messages(["settings.yml"], NEW)
        self.assertEqual(messages[1], "chore: add configuration files")

    def test_deleted_file(self) -> None:
        self.assertEqual(
            suggest_commit_messages(["old.py"], DELETED),
            ["chore: remove old.py", "chore: clean up obsolete code", "refactor: remove redundant files"],
        )

    def test_deleted_files(self) -> None:
        self.assertEqual(suggest_commit_messages(["a", "b"], DELETED)[0], "chore: remove unused files")

    def test_modified_categories(self) -> None:
        cases = [
            (["docs/guide.md"], ["docs: update project documentation", "docs: fix documentation content"]),
            (["pyproject.toml"], ["chore: adjust project settings", "chore: update config files"]),
            (["tests/test_app.py"], ["test: update test cases", "test: fix tests"]),
            (["src/app.py"], ["fix: fix bug", "perf: improve performance", "refactor: restructure code"]),
            (["site.css"], ["style: adjust styles", "ui: update user interface"]),
        ]
        for files, expected_prefix in cases:
            with self.subTest(files=files):
                messages = suggest_commit_messages(files, MODIFIED)
                self.assertEqual(messages[: len(expected_prefix)], expected_prefix)
                self.assertEqual(len(messages), 3)

    def test_generic_pool_fills_unknown_changes(self) -> None:
        self.assertEqual(
            suggest_commit_messages(["blob.bin"], NOTHING),
            ["chore: update project files", "refactor: improve code quality", "chore: routine maintenance"],
        )

    def test_empty_file_list(self) -> None:
        self.assertEqual(len(suggest_commit_messages([], NOTHING)), 3)


class TestBranchNames(unittest.TestCase):
    def test_docs_branch(self) -> None:
        self.assertEqual(
            suggest_branch_names(["README.md"], TODAY),
            ["docs/update-docs-20240101", "feature/update-20240101", "refactor/improve-code-20240101"],
        )

    def test_keyword_rules_are_truncated_to_three(self) -> None:
        files = ["src/feature_login.py", "src/bugfix.py", "README.md", "setup.toml", "test_x.py"]
        self.assertEqual(
            suggest_branch_names(files, TODAY),
            ["feature/new-feature-20240101", "fix/bug-fix-20240101", "docs/update-docs-20240101"],
        )

    def test_test_and_config_branches(self) -> None:
        self.assertEqual(
            suggest_branch_names(["ci.json", "tests/Spec_runner.rb"], TODAY),
            ["config/update-config-20240101", "test/update-tests-20240101", "feature/update-20240101"],
        )

    def test_generic_pool_only(self) -> None:
        self.assertEqual(
            suggest_branch_names(["src/app.py"], TODAY),
            ["feature/update-20240101", "refactor/improve-code-20240101", "chore/maintenance-20240101"],
        )

    def test_date_stamp_defaults_to_today(self) -> None:
        self.assertEqual(date_stamp(), date.today().strftime("%Y%m%d"))


class TestProperties(unittest.TestCase):
    FILE_SETS = [
        [],
        ["README.md"],
        ["a.py", "b.py", "c.py"],
        ["feature/add.py", "fix_bug.md", "x.toml", "test_spec.js"],
        ["Makefile"],
        ["add.md", "add.md"],
    ]

    def test_between_one_and_three_unique_entries(self) -> None:
        for files in self.FILE_SETS:
            for presence in (NEW, DELETED, MODIFIED, NOTHING):
                with self.subTest(files=files, presence=presence):
                    result = HeuristicSuggester(TODAY).suggest(files, presence)
                    for entries in (result.branch_names, result.commit_messages):
                        self.assertGreaterEqual(len(entries), 1)
                        self.assertLessEqual(len(entries), 3)
                        self.assertEqual(len(entries), len(set(entries)))


class TestBackfill(unittest.TestCase):
    def test_skips_duplicates_and_truncates(self) -> None:
        self.assertEqual(backfill(["a"], ["a", "b", "c", "d"]), ["a", "b", "c"])

    def test_does_not_modify_input(self) -> None:
        original = ["x"]
        backfill(original, ["y"])
        self.assertEqual(original, ["x"])


if __name__ == "__main__":
    unittest.main()
