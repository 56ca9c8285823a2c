"""GitHub API client using PyGitHub."""

import logging
import time
from collections.abc import Callable

from github import Auth, Github
from github.GithubException import BadCredentialsException, GithubException
from github.Issue import Issue
from github.IssueComment import IssueComment
from github.NamedUser import NamedUser
from github.PullRequest import PullRequest
from github.PullRequestReview import PullRequestReview
from github.Repository import Repository
from requests.exceptions import RequestException

from ..config import DEFAULT_LIST_DELAY, DEFAULT_REQUEST_TIMEOUT
from ..errors import PreconditionError, RemoteCallError, ValidationError
from .auth import AUTH_HINT, resolve_token
from .models import (
    CreatedItem,
    IssueListing,
    IssueStateFilter,
    IssueSummary,
    ItemState,
    PullRequestDetail,
    RepositoryIdentifier,
    RepositoryIssues,
    TrackerComment,
    TrackerItem,
    TrackerReview,
)

logger = logging.getLogger(__name__)

# Upper bound on repositories scanned by a user-wide listing
MAX_USER_REPOS = 1000

# API responses and transport failures (connection errors, timeouts)
API_ERRORS = (GithubException, RequestException)


def _describe(error: GithubException | RequestException) -> str:
    """Human readable text of a PyGitHub or transport exception."""
    if isinstance(error, RequestException):
        return f"network error: {error}"
    data = error.data
    if isinstance(data, dict):
        message = data.get("message") or ""
        details = data.get("errors") or []
        extra = "; ".join(
            d.get("message", str(d)) if isinstance(d, dict) else str(d)
            for d in details
        )
        if message and extra:
            return f"{message} ({extra}) [HTTP {error.status}]"
        if message:
            return f"{message} [HTTP {error.status}]"
    return str(error)


def _login(user: NamedUser | None) -> str:
    return user.login if user is not None else "ghost"


class GitHubClient:
    """GitHub API client for the issue and pull request commands.

    Every method performs blocking calls and converts PyGitHub failures into
    :class:`RemoteCallError` with the API message preserved.
    """

    def __init__(
        self,
        token: str | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        list_delay: float = DEFAULT_LIST_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize GitHub client with authentication.

        Args:
            token: GitHub token. If None, it is discovered through the gh CLI.
            timeout: Per-request timeout in seconds
            list_delay: Pause between repositories in user-wide listings
            sleep: Sleep function, replaceable in tests
        """
        self.token = resolve_token(token)
        self.github = Github(auth=Auth.Token(self.token), timeout=timeout)
        self.list_delay = list_delay
        self._sleep = sleep

    def _call_failed(
        self, action: str, error: GithubException | RequestException
    ) -> Exception:
        if isinstance(error, BadCredentialsException):
            return PreconditionError(
                "GitHub rejected the credentials (token expired or invalid).",
                hint=AUTH_HINT,
            )
        return RemoteCallError(f"Failed to {action}: {_describe(error)}")

    def _check_rate_limit(self) -> None:
        """Sleep until reset if the remaining request budget is nearly spent."""
        try:
            remaining, _limit = self.github.rate_limiting
            logger.debug("GitHub API rate limit: %s requests remaining", remaining)
            if remaining < 10:
                sleep_time = self.github.rate_limiting_resettime - time.time() + 1
                if sleep_time > 0:
                    logger.warning(
                        "Rate limit low, sleeping for %.1f seconds...", sleep_time
                    )
                    self._sleep(sleep_time)
        except API_ERRORS as e:
            logger.debug("Could not check rate limit: %s", e)

    def get_repository(self, repo: RepositoryIdentifier) -> Repository:
        """Get repository object."""
        try:
            return self.github.get_repo(repo.full_name)
        except API_ERRORS as e:
            raise self._call_failed(f"access repository {repo}", e)

    # Conversion helpers

    def _convert_comment(self, comment: IssueComment) -> TrackerComment:
        return TrackerComment(
            author=_login(comment.user),
            body=comment.body or "",
            created_at=comment.created_at,
        )

    def _convert_review(self, review: PullRequestReview) -> TrackerReview:
        return TrackerReview(
            author=_login(review.user),
            state=review.state,
            body=review.body or "",
            submitted_at=review.submitted_at,
        )

    def _sorted_comments(self, comments: list[IssueComment]) -> list[TrackerComment]:
        converted = [self._convert_comment(c) for c in comments]
        # Oldest first; comments without a timestamp keep API order at the end
        return sorted(
            converted,
            key=lambda c: (c.created_at is None, c.created_at or 0),
        )

    def _issue_state(self, issue: Issue) -> ItemState:
        return ItemState.CLOSED if issue.state == "closed" else ItemState.OPEN

    def _convert_summary(self, issue: Issue) -> IssueSummary:
        return IssueSummary(
            number=issue.number,
            title=issue.title,
            state=self._issue_state(issue),
            labels=[label.name for label in issue.labels],
            created_at=issue.created_at,
        )

    # Issues

    def create_issue(
        self,
        repo: RepositoryIdentifier,
        title: str,
        body: str | None = None,
        labels: list[str] | None = None,
        assignees: list[str] | None = None,
        milestone: str | None = None,
    ) -> CreatedItem:
        """Create an issue and return its URL and number."""
        repository = self.get_repository(repo)
        kwargs: dict = {"title": title}
        if body:
            kwargs["body"] = body
        if labels:
            kwargs["labels"] = labels
        if assignees:
            kwargs["assignees"] = assignees
        try:
            if milestone:
                kwargs["milestone"] = self._find_milestone(repository, milestone)
            issue = repository.create_issue(**kwargs)
        except API_ERRORS as e:
            raise self._call_failed("create issue", e)
        logger.debug("Created issue %s", issue.html_url)
        return CreatedItem.from_url(issue.html_url)

    def _find_milestone(self, repository: Repository, title: str):
        for milestone in repository.get_milestones(state="open"):
            if milestone.title == title:
                return milestone
        raise ValidationError(
            f"Milestone '{title}' not found in {repository.full_name}."
        )

    def get_issue(
        self, repo: RepositoryIdentifier, number: int, with_comments: bool = True
    ) -> TrackerItem:
        """Fetch an issue and, optionally, its comments oldest first."""
        repository = self.get_repository(repo)
        try:
            issue = repository.get_issue(number)
            comments = (
                self._sorted_comments(list(issue.get_comments()))
                if with_comments
                else None
            )
            return TrackerItem(
                number=issue.number,
                title=issue.title,
                state=self._issue_state(issue),
                author=_login(issue.user),
                labels=[label.name for label in issue.labels],
                assignees=[user.login for user in issue.assignees],
                body=issue.body,
                milestone=issue.milestone.title if issue.milestone else None,
                created_at=issue.created_at,
                updated_at=issue.updated_at,
                comments=comments,
            )
        except API_ERRORS as e:
            raise self._call_failed(f"fetch issue #{number} from {repo}", e)

    def comment_on_issue(
        self, repo: RepositoryIdentifier, number: int, body: str
    ) -> str:
        """Add a comment to an issue and return the comment URL."""
        repository = self.get_repository(repo)
        try:
            comment = repository.get_issue(number).create_comment(body)
        except API_ERRORS as e:
            raise self._call_failed(f"comment on issue #{number}", e)
        return comment.html_url

    def list_issues(
        self,
        repo: RepositoryIdentifier,
        state: IssueStateFilter = IssueStateFilter.OPEN,
        limit: int = 30,
    ) -> list[IssueSummary]:
        """List issues of one repository, excluding pull requests."""
        repository = self.get_repository(repo)
        results: list[IssueSummary] = []
        if limit <= 0:
            return results
        try:
            for issue in repository.get_issues(state=state.value):
                if issue.pull_request is not None:
                    continue
                results.append(self._convert_summary(issue))
                if len(results) >= limit:
                    break
        except API_ERRORS as e:
            raise self._call_failed(f"list issues of {repo}", e)
        return results

    def authenticated_login(self) -> str:
        try:
            return self.github.get_user().login
        except API_ERRORS as e:
            raise self._call_failed("detect current user", e)

    def list_user_repositories(self, user: str) -> list[RepositoryIdentifier]:
        """Repositories owned by ``user``, in API order."""
        try:
            repos = []
            for repository in self.github.get_user(user).get_repos(type="owner"):
                repos.append(RepositoryIdentifier.parse(repository.full_name))
                if len(repos) >= MAX_USER_REPOS:
                    break
            return repos
        except API_ERRORS as e:
            raise self._call_failed(f"fetch repos for user {user}", e)

    def list_user_issues(
        self,
        user: str | None = None,
        state: IssueStateFilter = IssueStateFilter.OPEN,
        limit: int = 30,
        repositories: list[RepositoryIdentifier] | None = None,
    ) -> IssueListing:
        """List issues across every repository owned by a user.

        A failure on one repository is counted and the scan moves on; only
        failing to determine the user or the repository list is fatal.

        Args:
            user: Owner login; defaults to the authenticated user
            state: Issue state filter
            limit: Maximum issues per repository
            repositories: Repositories to scan instead of the user's list
        """
        login = user or self.authenticated_login()
        if repositories is None:
            self._check_rate_limit()
            repositories = self.list_user_repositories(login)

        listing = IssueListing(user=login)
        for index, repo in enumerate(repositories):
            if index > 0 and self.list_delay > 0:
                self._sleep(self.list_delay)
            try:
                issues = self.list_issues(repo, state=state, limit=limit)
            except (RemoteCallError, PreconditionError) as e:
                logger.info("Failed to fetch issues from %s: %s", repo, e)
                listing.failed += 1
                listing.failures.append(f"{repo}: {e}")
                continue
            if not issues:
                listing.empty += 1
                continue
            listing.repositories.append(
                RepositoryIssues(repo=repo.full_name, issues=issues)
            )
            listing.scanned += 1
        return listing

    # Pull requests

    def create_pull_request(
        self,
        repo: RepositoryIdentifier,
        title: str,
        head: str,
        base: str | None = None,
        body: str | None = None,
        labels: list[str] | None = None,
        reviewers: list[str] | None = None,
        draft: bool = False,
    ) -> CreatedItem:
        """Open a pull request, then apply labels and request reviewers."""
        repository = self.get_repository(repo)
        try:
            base_branch = base or repository.default_branch
            pr = repository.create_pull(
                base=base_branch, head=head, title=title, body=body or "", draft=draft
            )
        except API_ERRORS as e:
            raise self._call_failed("create PR", e)

        created = CreatedItem.from_url(pr.html_url)
        try:
            if labels:
                pr.add_to_labels(*labels)
            if reviewers:
                pr.create_review_request(reviewers=reviewers)
        except API_ERRORS as e:
            raise self._call_failed(
                f"update PR #{created.number} after creation ({pr.html_url})", e
            )
        return created

    def _pr_state(self, pr: PullRequest) -> ItemState:
        if pr.merged:
            return ItemState.MERGED
        return ItemState.CLOSED if pr.state == "closed" else ItemState.OPEN

    def get_pull_request(
        self,
        repo: RepositoryIdentifier,
        number: int,
        with_comments: bool = True,
        with_reviews: bool = True,
    ) -> PullRequestDetail:
        """Fetch a pull request with its comments and reviews."""
        repository = self.get_repository(repo)
        try:
            pr = repository.get_pull(number)
            comments = (
                self._sorted_comments(list(pr.get_issue_comments()))
                if with_comments
                else None
            )
            reviews = (
                [
                    self._convert_review(r)
                    for r in pr.get_reviews()
                    if r.body
                ]
                if with_reviews
                else None
            )
            return PullRequestDetail(
                number=pr.number,
                title=pr.title,
                state=self._pr_state(pr),
                author=_login(pr.user),
                labels=[label.name for label in pr.labels],
                assignees=[user.login for user in pr.assignees],
                body=pr.body,
                milestone=pr.milestone.title if pr.milestone else None,
                created_at=pr.created_at,
                updated_at=pr.updated_at,
                comments=comments,
                base=pr.base.ref,
                head=pr.head.ref,
                additions=pr.additions,
                deletions=pr.deletions,
                changed_files=pr.changed_files,
                commits=pr.commits,
                draft=bool(pr.draft),
                mergeable=pr.mergeable,
                requested_reviewers=[u.login for u in pr.requested_reviewers],
                reviews=reviews,
            )
        except API_ERRORS as e:
            raise self._call_failed(f"fetch PR #{number} from {repo}", e)

    def comment_on_pull_request(
        self, repo: RepositoryIdentifier, number: int, body: str
    ) -> str:
        """Add a conversation comment to a pull request and return its URL."""
        repository = self.get_repository(repo)
        try:
            comment = repository.get_pull(number).create_issue_comment(body)
        except API_ERRORS as e:
            raise self._call_failed(f"comment on PR #{number}", e)
        return comment.html_url
