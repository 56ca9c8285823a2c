"""Pydantic models for GitHub data handled by ghkit.

These models map to GitHub's REST API issue and pull request objects, reduced
to the fields the commands display or emit as JSON.
API Reference: https://docs.github.com/en/rest/issues
"""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from ..errors import ValidationError

_TRAILING_NUMBER = re.compile(r"(\d+)/?$")
_REPOSITORY_NAME = re.compile(r"^([A-Za-z0-9_.-]+)/([A-Za-z0-9_.-]+)$")


def number_from_locator(url: str) -> int:
    """Extract the item number from the trailing digits of a URL.

    Only the final run of digits counts, so digits earlier in the URL
    (``.../repo2/issues/42``) never leak into the result.

    Raises:
        ValueError: If the URL does not end in a number
    """
    match = _TRAILING_NUMBER.search(url.strip())
    if not match:
        raise ValueError(f"No item number at the end of URL: {url}")
    return int(match.group(1))


def format_timestamp(value: datetime | None) -> str:
    """Render a timestamp as ISO 8601 in UTC, or an empty string."""
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class ItemState(str, Enum):
    """State of an issue or pull request."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"
    MERGED = "MERGED"


class IssueStateFilter(str, Enum):
    """State filter accepted by issue listings."""

    OPEN = "open"
    CLOSED = "closed"
    ALL = "all"


class RepositoryIdentifier(BaseModel):
    """Owner/name pair identifying a GitHub repository."""

    owner: str = Field(..., description="Repository owner (user or organization)")
    name: str = Field(..., description="Repository name")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def __str__(self) -> str:
        return self.full_name

    @classmethod
    def parse(cls, text: str) -> "RepositoryIdentifier":
        """Parse ``owner/name`` text.

        Raises:
            ValidationError: If the text is not in owner/name form
        """
        match = _REPOSITORY_NAME.match(text.strip())
        if not match:
            raise ValidationError(
                f"Invalid repository '{text}'. Expected owner/repo format."
            )
        return cls(owner=match.group(1), name=match.group(2))


class TrackerComment(BaseModel):
    """Comment on an issue or pull request.

    Maps to GitHub REST API Issue Comment object.
    API Reference: https://docs.github.com/en/rest/issues/comments
    """

    author: str = Field(..., description="Login of the comment author")
    body: str = Field("", description="Comment text in markdown")
    created_at: datetime | None = Field(None, description="Creation timestamp")

    def to_json(self) -> dict[str, Any]:
        return {
            "author": self.author,
            "created": format_timestamp(self.created_at),
            "body": self.body,
        }


class TrackerReview(BaseModel):
    """Pull request review.

    Maps to GitHub REST API Pull Request Review object.
    API Reference: https://docs.github.com/en/rest/pulls/reviews
    """

    author: str = Field(..., description="Login of the reviewer")
    state: str = Field(..., description="APPROVED, CHANGES_REQUESTED, COMMENTED, ...")
    body: str = Field("", description="Review summary text")
    submitted_at: datetime | None = Field(None, description="Submission timestamp")

    def to_json(self) -> dict[str, Any]:
        return {
            "author": self.author,
            "state": self.state,
            "body": self.body,
            "submitted": format_timestamp(self.submitted_at),
        }


class TrackerItem(BaseModel):
    """Issue or pull request with its comments.

    Maps to GitHub REST API Issue object.
    API Reference: https://docs.github.com/en/rest/issues/issues
    """

    number: int = Field(..., description="Item number within the repository")
    title: str = Field(..., description="Item title")
    state: ItemState = Field(..., description="OPEN, CLOSED or MERGED")
    author: str = Field(..., description="Login of the item author")
    labels: list[str] = Field(default_factory=list, description="Label names")
    assignees: list[str] = Field(default_factory=list, description="Assignee logins")
    body: str | None = Field(None, description="Description in markdown")
    milestone: str | None = Field(None, description="Milestone title")
    created_at: datetime | None = Field(None, description="Creation timestamp")
    updated_at: datetime | None = Field(None, description="Last update timestamp")
    comments: list[TrackerComment] | None = Field(
        None, description="Comments oldest first; None when not requested"
    )

    def to_json(self) -> dict[str, Any]:
        """Render the fixed JSON schema used by the read commands."""
        data: dict[str, Any] = {
            "number": self.number,
            "title": self.title,
            "state": self.state.value,
            "author": self.author,
            "labels": list(self.labels),
            "assignees": list(self.assignees),
            "body": self.body or "",
            "created": format_timestamp(self.created_at),
            "updated": format_timestamp(self.updated_at),
        }
        if self.comments is not None:
            data["comments"] = [comment.to_json() for comment in self.comments]
        return data


class PullRequestDetail(TrackerItem):
    """Pull request with branch, diff statistics and reviews.

    Maps to GitHub REST API Pull Request object.
    API Reference: https://docs.github.com/en/rest/pulls/pulls
    """

    base: str = Field("", description="Base branch name")
    head: str = Field("", description="Head branch name")
    additions: int = Field(0, description="Added lines")
    deletions: int = Field(0, description="Deleted lines")
    changed_files: int = Field(0, description="Number of changed files")
    commits: int = Field(0, description="Number of commits")
    draft: bool = Field(False, description="Whether the pull request is a draft")
    mergeable: bool | None = Field(None, description="Mergeability, if computed")
    requested_reviewers: list[str] = Field(
        default_factory=list, description="Logins of pending reviewers"
    )
    reviews: list[TrackerReview] | None = Field(
        None, description="Reviews with a non-empty body; None when not requested"
    )

    def to_json(self) -> dict[str, Any]:
        """Pull request JSON always carries both arrays, empty when skipped."""
        data = super().to_json()
        data.setdefault("comments", [])
        data.update(
            {
                "base": self.base,
                "head": self.head,
                "additions": self.additions,
                "deletions": self.deletions,
                "changed_files": self.changed_files,
                "draft": self.draft,
            }
        )
        data["reviews"] = [review.to_json() for review in self.reviews or []]
        return data


class CreatedItem(BaseModel):
    """Result of creating an issue or pull request."""

    url: str = Field(..., description="HTML URL of the new item")
    number: int = Field(..., description="Number parsed from the URL")

    @classmethod
    def from_url(cls, url: str) -> "CreatedItem":
        return cls(url=url, number=number_from_locator(url))

    def to_json(self) -> dict[str, Any]:
        return {"url": self.url, "number": self.number}


class IssueSummary(BaseModel):
    """Row of an issue listing."""

    number: int
    title: str
    state: ItemState
    labels: list[str] = Field(default_factory=list)
    created_at: datetime | None = None

    def to_json(self) -> dict[str, Any]:
        return {
            "number": self.number,
            "title": self.title,
            "state": self.state.value,
            "labels": list(self.labels),
            "created": format_timestamp(self.created_at),
        }


class RepositoryIssues(BaseModel):
    """Issues found in one repository."""

    repo: str = Field(..., description="Repository full name (owner/name)")
    issues: list[IssueSummary] = Field(default_factory=list)

    def to_json(self) -> dict[str, Any]:
        return {"repo": self.repo, "issues": [i.to_json() for i in self.issues]}


class IssueListing(BaseModel):
    """Aggregated result of listing issues across repositories.

    Repositories without matching issues are counted in ``empty`` and not
    included in ``repositories``; repositories whose fetch failed are counted
    in ``failed``.
    """

    user: str | None = Field(None, description="Owner whose repositories were scanned")
    repositories: list[RepositoryIssues] = Field(default_factory=list)
    scanned: int = Field(0, description="Repositories with at least one issue")
    empty: int = Field(0, description="Repositories without matching issues")
    failed: int = Field(0, description="Repositories whose fetch failed")
    failures: list[str] = Field(
        default_factory=list, description="'owner/name: error' for each failure"
    )

    @property
    def total_issues(self) -> int:
        return sum(len(entry.issues) for entry in self.repositories)

    def to_json(self) -> list[dict[str, Any]]:
        return [entry.to_json() for entry in self.repositories]
