import shutil
import subprocess
import tempfile
import unittest
from pathlib import Path

from commit_assistant.analysis.diff_analyzer import categorize_path
from commit_assistant.analysis.models import ChangeKind, ChangePresence, FileCategory, StagedChange
from commit_assistant.heuristics.suggester import HeuristicSuggester
from commit_assistant.vcs.git_client import GitClient, GitError
from commit_assistant.vcs.runner import CommandLaunchError, CommandResult


STAGED_STATUS_ARGS = ("diff", "--staged", "--name-status", "-z")


class FakeRunner:
    """Answer git commands from a table keyed by the argument tuple."""

    def __init__(self, responses=None, exc=None):
        self.responses = responses or {}
        self.exc = exc
        self.calls = []

    def run(self, command, args, timeout=None):
        self.calls.append((command, list(args)))
        if self.exc is not None:
            raise self.exc
        return self.responses.get(tuple(args), CommandResult(0, "", ""))


class TestGitClient(unittest.TestCase):
    def _client(self, runner):
        return GitClient(Path("/repo"), runner=runner)

    def test_get_staged_changes_parses_name_status(self) -> None:
        output = (
            "A\0new_file.py\0"
            "M\0src/app.py\0"
            "D\0old.txt\0"
            "R100\0docs/old.md\0docs/new.md\0"
            "C075\0base.py\0copy.py\0"
            "T\0link\0"
        )
        runner = FakeRunner({STAGED_STATUS_ARGS: CommandResult(0, output, "")})
        changes = self._client(runner).get_staged_changes()
        self.assertEqual(
            changes,
            [
                StagedChange(path="new_file.py", kind=ChangeKind.ADDED),
                StagedChange(path="src/app.py", kind=ChangeKind.MODIFIED),
                StagedChange(path="old.txt", kind=ChangeKind.DELETED),
                StagedChange(path="docs/new.md", kind=ChangeKind.RENAMED),
                StagedChange(path="copy.py", kind=ChangeKind.ADDED),
                StagedChange(path="link", kind=ChangeKind.TYPE_CHANGED),
            ],
        )

    def test_staged_paths_are_not_quoted(self) -> None:
        output = "A\0résumé.md\0M\0notes\twith tab.txt\0A\0say \"hi\".md\0"
        runner = FakeRunner({STAGED_STATUS_ARGS: CommandResult(0, output, "")})
        paths = [change.path for change in self._client(runner).get_staged_changes()]
        self.assertEqual(paths, ["résumé.md", "notes\twith tab.txt", 'say "hi".md'])

    def test_incomplete_rename_entry_is_skipped(self) -> None:
        runner = FakeRunner({STAGED_STATUS_ARGS: CommandResult(0, "M\0a.py\0R100\0old.py\0", "")})
        changes = self._client(runner).get_staged_changes()
        self.assertEqual(changes, [StagedChange(path="a.py", kind=ChangeKind.MODIFIED)])

    @unittest.skipUnless(shutil.which("git"), "git is not installed")
    def test_non_ascii_path_from_real_repository(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            subprocess.run(["git", "init", "-q"], cwd=root, check=True)
            (root / "résumé.md").write_text("# CV\n", encoding="utf-8")
            subprocess.run(["git", "add", "résumé.md"], cwd=root, check=True)

            changes = GitClient(root).get_staged_changes()

        self.assertEqual(changes, [StagedChange(path="résumé.md", kind=ChangeKind.ADDED)])
        suggestions = HeuristicSuggester().suggest(["résumé.md"], ChangePresence(has_new_files=True))
        self.assertEqual(suggestions.commit_messages[0], "feat: add résumé.md")
        self.assertEqual(categorize_path(changes[0].path), FileCategory.DOCS)

    def test_no_staged_changes(self) -> None:
        self.assertEqual(self._client(FakeRunner()).get_staged_changes(), [])

    def test_get_current_branch(self) -> None:
        runner = FakeRunner({("branch", "--show-current"): CommandResult(0, "main\n", "")})
        self.assertEqual(self._client(runner).get_current_branch(), "main")

    def test_detached_head_reports_head(self) -> None:
        runner = FakeRunner({("branch", "--show-current"): CommandResult(0, "\n", "")})
        self.assertEqual(self._client(runner).get_current_branch(), "HEAD")

    def test_failed_command_raises_with_stderr(self) -> None:
        runner = FakeRunner({("diff", "--staged"): CommandResult(128, "", "fatal: bad object\n")})
        with self.assertRaises(GitError) as ctx:
            self._client(runner).get_staged_diff()
        self.assertEqual(str(ctx.exception), "fatal: bad object")

    def test_failed_command_without_output(self) -> None:
        runner = FakeRunner({("commit", "-m", "msg"): CommandResult(1, "", "")})
        with self.assertRaises(GitError) as ctx:
            self._client(runner).commit("msg")
        self.assertEqual(str(ctx.exception), "git commit failed")

    def test_missing_git_executable_raises_git_error(self) -> None:
        runner = FakeRunner(exc=CommandLaunchError("Could not run 'git'"))
        with self.assertRaises(GitError):
            self._client(runner).get_current_branch()

    def test_mutating_commands(self) -> None:
        runner = FakeRunner()
        client = self._client(runner)
        client.create_branch("feature/login")
        client.commit("feat: add login\n\nLong body")
        self.assertEqual(
            runner.calls,
            [
                ("git", ["checkout", "-b", "feature/login"]),
                ("git", ["commit", "-m", "feat: add login\n\nLong body"]),
            ],
        )

    def test_branch_exists(self) -> None:
        runner = FakeRunner({("branch", "--list", "main"): CommandResult(0, "* main\n", "")})
        client = self._client(runner)
        self.assertTrue(client.branch_exists("main"))
        self.assertFalse(client.branch_exists("feature/none"))

    def test_is_valid_repo(self) -> None:
        args = ("rev-parse", "--is-inside-work-tree")
        self.assertTrue(self._client(FakeRunner({args: CommandResult(0, "true\n", "")})).is_valid_repo())
        self.assertFalse(self._client(FakeRunner({args: CommandResult(0, "false\n", "")})).is_valid_repo())
        self.assertFalse(
            self._client(FakeRunner({args: CommandResult(128, "", "fatal: not a git repository")})).is_valid_repo()
        )
        self.assertFalse(self._client(FakeRunner(exc=CommandLaunchError("no git"))).is_valid_repo())

    def test_find_repo_root(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / ".git").mkdir()
            nested = root / "src" / "pkg"
            nested.mkdir(parents=True)
            self.assertEqual(GitClient.find_repo_root(nested), root)

    def test_find_repo_root_outside_repository(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            start = Path(tmp).resolve()
            # Only valid when no ancestor of the temp dir is a repository.
            ancestors = [start, *start.parents]
            if any((p / ".git").exists() for p in ancestors):
                self.skipTest("temporary directory lives inside a git repository")
            self.assertIsNone(GitClient.find_repo_root(start))


if __name__ == "__main__":
    unittest.main()
