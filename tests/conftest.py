import pytest


@pytest.fixture(autouse=True)
def isolate_home_config(tmp_path, monkeypatch):
    """Point the configuration directory at an empty temporary directory.

    Tests must never pick up a real ``~/.config/git-auto-commit/config.toml``.
    Tests that need a config file patch ``_get_config_directory`` themselves.
    """
    config_dir = tmp_path / "git-auto-commit"
    monkeypatch.setattr(
        "commit_assistant.config.loader._get_config_directory",
        lambda: config_dir,
    )
    yield config_dir
