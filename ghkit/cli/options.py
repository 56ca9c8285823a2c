"""Standardized CLI option definitions for consistent shorthand mappings.

This module provides centralized option definitions so the issue, PR and
branch commands share the same flags and short forms.
"""

import typer

from ..github_client.models import IssueStateFilter

# Target options
REPO_OPTION = typer.Option(
    None, "--repo", "-r", help="Target repo (owner/repo). Auto-detects if omitted."
)

NUMBER_OPTION = typer.Option(None, "--number", "-n", help="Issue or PR number")

# Content options
TITLE_OPTION = typer.Option(None, "--title", "-t", help="Title (required)")

BODY_OPTION = typer.Option(None, "--body", "-b", help="Body text")

COMMENT_BODY_OPTION = typer.Option(
    None, "--body", "-b", help="Comment text (required unless --editor)"
)

LABELS_OPTION = typer.Option(
    None, "--labels", "-l", help='Comma-separated labels (e.g. "bug,urgent")'
)

ASSIGNEES_OPTION = typer.Option(
    None, "--assignees", "-a", help='Comma-separated assignees (e.g. "user1,user2")'
)

MILESTONE_OPTION = typer.Option(None, "--milestone", "-m", help="Milestone name")

EDITOR_OPTION = typer.Option(
    False, "--editor", "-e", help="Open $EDITOR to write the body"
)

# Pull request options
BASE_OPTION = typer.Option(
    None, "--base", "-B", help="Base branch (default: repository default branch)"
)

HEAD_OPTION = typer.Option(
    None, "--head", "-H", help="Head branch (default: current branch)"
)

REVIEWERS_OPTION = typer.Option(
    None, "--reviewers", "-v", help='Comma-separated reviewers (e.g. "user1,user2")'
)

DRAFT_OPTION = typer.Option(False, "--draft", "-d", help="Create as draft PR")

# Read options
NO_COMMENTS_OPTION = typer.Option(
    False, "--no-comments", help="Show only the description (skip comments)"
)

NO_REVIEWS_OPTION = typer.Option(False, "--no-reviews", help="Skip review comments")

# Listing options
USER_OPTION = typer.Option(
    None, "--user", "-u", help="List a user's repos (default: authenticated user)"
)

STATE_OPTION = typer.Option(
    IssueStateFilter.OPEN,
    "--state",
    "-s",
    case_sensitive=False,
    help="Filter by state: open, closed, all",
)

LIMIT_OPTION = typer.Option(30, "--limit", "-l", min=1, help="Max issues per repo")

# Output options
JSON_OPTION = typer.Option(
    False, "--json", help="Output result as JSON (for programmatic use)"
)

QUIET_OPTION = typer.Option(False, "--quiet", help="Suppress decorative output")
