"""Tests for the issue commands."""

import json
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
from requests.exceptions import ReadTimeout
from typer.testing import CliRunner

from ghkit.cli.main import app
from ghkit.errors import PreconditionError, RemoteCallError
from ghkit.github_client.models import (
    CreatedItem,
    IssueListing,
    IssueStateFilter,
    IssueSummary,
    ItemState,
    RepositoryIdentifier,
    RepositoryIssues,
    TrackerItem,
)

from .conftest import strip_ansi

ISSUE_URL = "https://github.com/octo/repo2/issues/42"


def summary(number: int) -> IssueSummary:
    return IssueSummary(
        number=number,
        title=f"Issue {number}",
        state=ItemState.OPEN,
        labels=["bug"],
        created_at=datetime(2024, 4, 1, tzinfo=timezone.utc),
    )


class TestIssueCreate:
    def test_create_json(self, runner: CliRunner, mock_client: MagicMock) -> None:
        mock_client.create_issue.return_value = CreatedItem.from_url(ISSUE_URL)

        result = runner.invoke(
            app,
            [
                "issue",
                "create",
                "-r",
                "octo/repo2",
                "-t",
                "Fix login bug",
                "-l",
                "bug, urgent",
                "-a",
                "octocat",
                "--json",
            ],
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"url": ISSUE_URL, "number": 42}
        mock_client.create_issue.assert_called_once_with(
            RepositoryIdentifier(owner="octo", name="repo2"),
            title="Fix login bug",
            body=None,
            labels=["bug", "urgent"],
            assignees=["octocat"],
            milestone=None,
        )

    def test_create_quiet(self, runner: CliRunner, mock_client: MagicMock) -> None:
        mock_client.create_issue.return_value = CreatedItem.from_url(ISSUE_URL)

        result = runner.invoke(
            app, ["issue", "create", "-r", "octo/repo2", "-t", "Bug", "--quiet"]
        )

        assert result.exit_code == 0
        assert result.stdout == ISSUE_URL + "\n"

    def test_json_wins_over_quiet(
        self, runner: CliRunner, mock_client: MagicMock
    ) -> None:
        mock_client.create_issue.return_value = CreatedItem.from_url(ISSUE_URL)

        result = runner.invoke(
            app,
            ["issue", "create", "-r", "octo/repo2", "-t", "Bug", "--json", "--quiet"],
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout)["number"] == 42

    def test_create_human(self, runner: CliRunner, mock_client: MagicMock) -> None:
        mock_client.create_issue.return_value = CreatedItem.from_url(ISSUE_URL)

        result = runner.invoke(
            app, ["issue", "create", "-r", "octo/repo2", "-t", "Bug", "-b", "Details"]
        )

        assert result.exit_code == 0
        output = strip_ansi(result.stdout)
        assert "Repository: octo/repo2" in output
        assert ISSUE_URL in output
        assert "#42" in output

    def test_missing_title(self, runner: CliRunner, mock_client: MagicMock) -> None:
        result = runner.invoke(app, ["issue", "create", "-r", "octo/repo2", "--json"])

        assert result.exit_code == 1
        assert result.stdout == ""
        assert "Title is required" in result.stderr
        mock_client.create_issue.assert_not_called()

    def test_detects_repository(
        self, runner: CliRunner, mock_client: MagicMock, origin_remote: MagicMock
    ) -> None:
        mock_client.create_issue.return_value = CreatedItem.from_url(ISSUE_URL)

        result = runner.invoke(app, ["issue", "create", "-t", "Bug", "--quiet"])

        assert result.exit_code == 0
        repository = mock_client.create_issue.call_args.args[0]
        assert repository.full_name == "octo/tool"

    def test_undetectable_repository(
        self, runner: CliRunner, mock_client: MagicMock, no_remote: MagicMock
    ) -> None:
        result = runner.invoke(app, ["issue", "create", "-t", "Bug", "--json"])

        assert result.exit_code == 1
        assert result.stdout == ""
        assert "Cannot detect repository" in result.stderr
        mock_client.create_issue.assert_not_called()

    def test_missing_credentials(self, runner: CliRunner) -> None:
        with patch(
            "ghkit.cli.common.GitHubClient",
            side_effect=PreconditionError(
                "gh CLI is not authenticated.", hint="Run: gh auth login"
            ),
        ):
            result = runner.invoke(
                app, ["issue", "create", "-r", "octo/repo2", "-t", "Bug"]
            )

        assert result.exit_code == 1
        assert "not authenticated" in result.stderr
        assert "gh auth login" in result.stderr

    def test_editor_body(self, runner: CliRunner, mock_client: MagicMock) -> None:
        mock_client.create_issue.return_value = CreatedItem.from_url(ISSUE_URL)

        with patch(
            "ghkit.cli.common.click.edit", return_value="Written in editor\n"
        ):
            result = runner.invoke(
                app, ["issue", "create", "-r", "octo/repo2", "-t", "Bug", "-e", "--quiet"]
            )

        assert result.exit_code == 0
        assert mock_client.create_issue.call_args.kwargs["body"] == "Written in editor"

    def test_api_failure(self, runner: CliRunner, mock_client: MagicMock) -> None:
        mock_client.create_issue.side_effect = RemoteCallError(
            "Failed to create issue: Validation Failed [HTTP 422]"
        )

        result = runner.invoke(
            app, ["issue", "create", "-r", "octo/repo2", "-t", "Bug", "--json"]
        )

        assert result.exit_code == 1
        assert result.stdout == ""
        assert "Validation Failed" in result.stderr


class TestIssueRead:
    def test_read_json(
        self, runner: CliRunner, mock_client: MagicMock, sample_issue: TrackerItem
    ) -> None:
        mock_client.get_issue.return_value = sample_issue

        result = runner.invoke(
            app, ["issue", "read", "-r", "octo/repo2", "-n", "42", "--json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["title"] == "Login fails on timeout"
        assert data["comments"] == [
            {"author": "carol", "created": "2024-01-02T10:00:00Z", "body": "Confirmed"}
        ]
        assert mock_client.get_issue.call_args.kwargs["with_comments"] is True

    def test_no_comments_flag(
        self, runner: CliRunner, mock_client: MagicMock, sample_issue: TrackerItem
    ) -> None:
        mock_client.get_issue.return_value = sample_issue.model_copy(
            update={"comments": None}
        )

        result = runner.invoke(
            app,
            ["issue", "read", "-r", "octo/repo2", "-n", "42", "--no-comments", "--json"],
        )

        assert result.exit_code == 0
        assert "comments" not in json.loads(result.stdout)
        assert mock_client.get_issue.call_args.kwargs["with_comments"] is False

    def test_read_human(
        self, runner: CliRunner, mock_client: MagicMock, sample_issue: TrackerItem
    ) -> None:
        mock_client.get_issue.return_value = sample_issue

        result = runner.invoke(app, ["issue", "read", "-r", "octo/repo2", "-n", "42"])

        assert result.exit_code == 0
        output = strip_ansi(result.stdout)
        assert "Issue #42: Login fails on timeout" in output
        assert "Steps to reproduce" in output
        assert "@carol" in output

    def test_missing_number(self, runner: CliRunner, mock_client: MagicMock) -> None:
        result = runner.invoke(app, ["issue", "read", "-r", "octo/repo2"])

        assert result.exit_code == 1
        assert "Number is required" in result.stderr

    def test_invalid_repository(
        self, runner: CliRunner, mock_client: MagicMock
    ) -> None:
        result = runner.invoke(app, ["issue", "read", "-r", "octo", "-n", "1"])

        assert result.exit_code == 1
        assert "owner/repo" in result.stderr


class TestIssueComment:
    def test_comment(self, runner: CliRunner, mock_client: MagicMock) -> None:
        mock_client.comment_on_issue.return_value = ISSUE_URL + "#issuecomment-1"

        result = runner.invoke(
            app,
            ["issue", "comment", "-r", "octo/repo2", "-n", "42", "-b", "Fixed", "--json"],
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"url": ISSUE_URL + "#issuecomment-1"}
        mock_client.comment_on_issue.assert_called_once_with(
            RepositoryIdentifier(owner="octo", name="repo2"), 42, "Fixed"
        )

    def test_missing_body(self, runner: CliRunner, mock_client: MagicMock) -> None:
        result = runner.invoke(
            app, ["issue", "comment", "-r", "octo/repo2", "-n", "42"]
        )

        assert result.exit_code == 1
        assert "Comment body is required" in result.stderr
        mock_client.comment_on_issue.assert_not_called()

    def test_empty_editor_aborts(
        self, runner: CliRunner, mock_client: MagicMock
    ) -> None:
        with patch("ghkit.cli.common.click.edit", return_value=None):
            result = runner.invoke(
                app, ["issue", "comment", "-r", "octo/repo2", "-n", "42", "-e"]
            )

        assert result.exit_code == 1
        assert "empty body" in result.stderr
        mock_client.comment_on_issue.assert_not_called()


class TestIssueList:
    def test_single_repository(
        self, runner: CliRunner, mock_client: MagicMock
    ) -> None:
        mock_client.list_issues.return_value = [summary(1), summary(2)]

        result = runner.invoke(
            app,
            ["issue", "list", "-r", "octo/repo2", "-s", "ALL", "-l", "5", "--json"],
        )

        assert result.exit_code == 0
        assert [i["number"] for i in json.loads(result.stdout)] == [1, 2]
        mock_client.list_issues.assert_called_once_with(
            RepositoryIdentifier(owner="octo", name="repo2"),
            state=IssueStateFilter.ALL,
            limit=5,
        )

    def test_single_repository_quiet(
        self, runner: CliRunner, mock_client: MagicMock
    ) -> None:
        mock_client.list_issues.return_value = [summary(1)]

        result = runner.invoke(app, ["issue", "list", "-r", "octo/repo2", "--quiet"])

        assert result.stdout == "issues: 1\n"

    def test_single_repository_failure(
        self, runner: CliRunner, mock_client: MagicMock
    ) -> None:
        mock_client.list_issues.side_effect = RemoteCallError(
            "Failed to access repository octo/gone: Not Found [HTTP 404]"
        )

        result = runner.invoke(app, ["issue", "list", "-r", "octo/gone", "--json"])

        assert result.exit_code == 1
        assert result.stdout == ""
        assert "Not Found" in result.stderr

    def test_user_listing_with_failure(
        self, runner: CliRunner, mock_client: MagicMock
    ) -> None:
        mock_client.list_user_issues.return_value = IssueListing(
            user="octo",
            repositories=[
                RepositoryIssues(repo="octo/a", issues=[summary(1)]),
                RepositoryIssues(repo="octo/c", issues=[summary(2), summary(3)]),
            ],
            scanned=2,
            failed=1,
            failures=["octo/b: Failed to list issues of octo/b: boom"],
        )

        result = runner.invoke(app, ["issue", "list", "-u", "octo", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [entry["repo"] for entry in data] == ["octo/a", "octo/c"]
        assert "octo/b" in result.stderr
        assert mock_client.list_user_issues.call_args.kwargs["user"] == "octo"

    def test_user_listing_human_summary(
        self, runner: CliRunner, mock_client: MagicMock
    ) -> None:
        mock_client.list_user_issues.return_value = IssueListing(
            user="octo",
            repositories=[RepositoryIssues(repo="octo/a", issues=[summary(1)])],
            scanned=1,
            empty=2,
        )

        result = runner.invoke(app, ["issue", "list"])

        assert result.exit_code == 0
        output = strip_ansi(result.stdout)
        assert "octo/a" in output
        assert "Total issues:" in output
        assert "Repos (no issues): 2" in output

    def test_limit_must_be_positive(
        self, runner: CliRunner, mock_client: MagicMock
    ) -> None:
        result = runner.invoke(app, ["issue", "list", "-l", "0"])

        assert result.exit_code != 0
        mock_client.list_user_issues.assert_not_called()


class TestNetworkFailures:
    def test_read_timeout_is_reported(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
        with patch("ghkit.github_client.client.Github") as mock_github_class:
            mock_github_class.return_value.get_repo.side_effect = ReadTimeout(
                "Read timed out. (read timeout=30)"
            )
            result = runner.invoke(
                app, ["issue", "read", "-r", "octo/repo2", "-n", "42", "--json"]
            )

        assert result.exit_code == 1
        assert result.stdout == ""
        assert "network error" in result.stderr
        assert "Traceback" not in result.output
