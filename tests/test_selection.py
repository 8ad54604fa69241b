import unittest

from commit_assistant.selection import SelectionFlow, first_line, is_valid_branch_name


class ScriptedChooser:
    """Chooser that replays prepared answers and records what it was shown."""

    def __init__(self, selections=(), texts=()):
        self.selections = list(selections)
        self.texts = list(texts)
        self.menus = []
        self.shown = []
        self.errors = []

    def select(self, prompt, options, default=0):
        self.menus.append((prompt, list(options)))
        return self.selections.pop(0)

    def input_text(self, prompt):
        return self.texts.pop(0)

    def show(self, text):
        self.shown.append(text)

    def error(self, message):
        self.errors.append(message)


class TestBranchValidation(unittest.TestCase):
    def test_valid_names(self):
        for name in ("feature/add-login-20240101", "fix_bug", "release/1.2"):
            with self.subTest(name=name):
                self.assertTrue(is_valid_branch_name(name))

    def test_invalid_names(self):
        for name in ("", "a b", "/x", ".hidden", "a:b", "a~1", "a^", "what?", "a*", "a[0]", "a\\b", "tab\there"):
            with self.subTest(name=name):
                self.assertFalse(is_valid_branch_name(name))

    def test_first_line(self):
        self.assertEqual(first_line("feat: x\n\nbody"), "feat: x")
        self.assertEqual(first_line("\n  fix: y  \n"), "fix: y")


class TestChooseBranch(unittest.TestCase):
    def test_keep_current_branch(self):
        chooser = ScriptedChooser(selections=[0])
        result = SelectionFlow(chooser).choose_branch("main", ["feature/a"])
        self.assertIsNone(result)
        self.assertEqual(
            chooser.menus[0][1],
            ["Keep current branch (main)", "feature/a", "Custom branch name"],
        )

    def test_pick_candidate(self):
        chooser = ScriptedChooser(selections=[2])
        result = SelectionFlow(chooser).choose_branch("main", ["feature/a", "fix/b"])
        self.assertEqual(result, "fix/b")

    def test_invalid_existing_and_duplicate_candidates_are_dropped(self):
        chooser = ScriptedChooser(selections=[0])
        flow = SelectionFlow(chooser, branch_exists=lambda name: name == "feature/old")
        with self.assertLogs("commit_assistant.selection", level="WARNING"):
            flow.choose_branch("main", ["bad name", "feature/old", "fix/b", "fix/b"])
        self.assertEqual(chooser.menus[0][1], ["Keep current branch (main)", "fix/b", "Custom branch name"])

    def test_custom_branch_retries_until_valid(self):
        chooser = ScriptedChooser(selections=[2], texts=["", "has space", "main", "  feature/custom  "])
        flow = SelectionFlow(chooser, branch_exists=lambda name: name == "main")
        result = flow.choose_branch("main", ["feature/a"])
        self.assertEqual(result, "feature/custom")
        self.assertEqual(
            chooser.errors,
            [
                "Branch name cannot be empty",
                "Branch name contains invalid characters",
                "Branch 'main' already exists",
            ],
        )

    def test_no_candidates_offers_keep_and_custom(self):
        chooser = ScriptedChooser(selections=[1], texts=["topic/x"])
        result = SelectionFlow(chooser).choose_branch("HEAD", [])
        self.assertEqual(result, "topic/x")
        self.assertEqual(chooser.menus[0][1], ["Keep current branch (HEAD)", "Custom branch name"])


class TestChooseCommitMessage(unittest.TestCase):
    def test_confirm_candidate_shows_full_message(self):
        chooser = ScriptedChooser(selections=[0, 0])
        message = SelectionFlow(chooser).choose_commit_message(["feat: add x\n\nbody text", "fix: y"])
        self.assertEqual(message, "feat: add x\n\nbody text")
        self.assertEqual(chooser.menus[0][1], ["feat: add x", "fix: y", "Custom commit message"])
        self.assertEqual(chooser.shown, ["feat: add x\n\nbody text"])
        self.assertEqual(chooser.menus[1][1], ["Use this message", "Choose again"])

    def test_choose_again_returns_to_list(self):
        chooser = ScriptedChooser(selections=[0, 1, 1, 0])
        message = SelectionFlow(chooser).choose_commit_message(["feat: a", "fix: b"])
        self.assertEqual(message, "fix: b")
        self.assertEqual(chooser.shown, ["feat: a", "fix: b"])
        self.assertEqual(chooser.menus[2][1], ["feat: a", "fix: b", "Custom commit message"])

    def test_custom_message_rejects_empty(self):
        chooser = ScriptedChooser(selections=[1, 0], texts=["   ", "docs: custom"])
        message = SelectionFlow(chooser).choose_commit_message(["feat: a"])
        self.assertEqual(message, "docs: custom")
        self.assertEqual(chooser.errors, ["Commit message cannot be empty"])
        self.assertEqual(chooser.shown, ["docs: custom"])

    def test_no_candidates_goes_to_custom(self):
        chooser = ScriptedChooser(selections=[0, 0], texts=["chore: manual"])
        message = SelectionFlow(chooser).choose_commit_message([])
        self.assertEqual(message, "chore: manual")
        self.assertEqual(chooser.menus[0][1], ["Custom commit message"])


if __name__ == "__main__":
    unittest.main()
