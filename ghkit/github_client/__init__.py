"""GitHub API access for issue and pull request commands."""

from .client import GitHubClient
from .models import (
    CreatedItem,
    IssueListing,
    IssueStateFilter,
    ItemState,
    PullRequestDetail,
    RepositoryIdentifier,
    TrackerItem,
    number_from_locator,
)

__all__ = [
    "CreatedItem",
    "GitHubClient",
    "IssueListing",
    "IssueStateFilter",
    "ItemState",
    "PullRequestDetail",
    "RepositoryIdentifier",
    "TrackerItem",
    "number_from_locator",
]
