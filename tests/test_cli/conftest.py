"""Fixtures for CLI command tests."""

import re
from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from ghkit.git.runner import GitResult


def strip_ansi(text: str) -> str:
    """Strip ANSI escape codes from text."""
    ansi_escape = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")
    return ansi_escape.sub("", text)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "GITHUB_TOKEN",
        "GH_TOKEN",
        "GHKIT_REQUEST_TIMEOUT",
        "GHKIT_GIT_TIMEOUT",
        "GHKIT_LIST_DELAY",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI runner for testing."""
    return CliRunner(env={"NO_COLOR": "1", "FORCE_COLOR": "0", "TERM": "dumb"})


@pytest.fixture
def mock_client() -> Iterator[MagicMock]:
    """GitHubClient instance returned to every command."""
    with patch("ghkit.cli.common.GitHubClient") as mock_client_class:
        client = MagicMock()
        mock_client_class.return_value = client
        yield client


@pytest.fixture
def no_remote() -> Iterator[MagicMock]:
    """Working copy without an origin remote."""
    with patch("ghkit.cli.common.GitRunner") as mock_runner_class:
        git = MagicMock()
        git.run.return_value = GitResult(128, "", "fatal: not a git repository")
        mock_runner_class.return_value = git
        yield git


@pytest.fixture
def origin_remote() -> Iterator[MagicMock]:
    """Working copy cloned from octo/tool, on branch feature/login."""

    def run(args, cwd=None):
        if args[:2] == ["remote", "get-url"]:
            return GitResult(0, "git@github.com:octo/tool.git\n", "")
        if args == ["branch", "--show-current"]:
            return GitResult(0, "feature/login\n", "")
        return GitResult(1, "", "unexpected")

    with patch("ghkit.cli.common.GitRunner") as mock_runner_class:
        git = MagicMock()
        git.run.side_effect = run
        mock_runner_class.return_value = git
        yield git
