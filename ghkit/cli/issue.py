"""CLI commands for GitHub issues."""

import typer

from ..errors import GhkitError, ValidationError
from ..github_client.models import IssueStateFilter, RepositoryIdentifier
from ..output.renderers import PREVIEW_WIDTH, truncate
from .common import (
    edit_body,
    load_config,
    make_client,
    make_renderer,
    make_resolver,
    require,
    require_number,
    split_csv,
)
from .options import (
    ASSIGNEES_OPTION,
    BODY_OPTION,
    COMMENT_BODY_OPTION,
    EDITOR_OPTION,
    JSON_OPTION,
    LABELS_OPTION,
    LIMIT_OPTION,
    MILESTONE_OPTION,
    NO_COMMENTS_OPTION,
    NUMBER_OPTION,
    QUIET_OPTION,
    REPO_OPTION,
    STATE_OPTION,
    TITLE_OPTION,
    USER_OPTION,
)

app = typer.Typer(
    help="Create, read, comment on and list GitHub issues",
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command()
def create(
    repo: str | None = REPO_OPTION,
    title: str | None = TITLE_OPTION,
    body: str | None = BODY_OPTION,
    labels: str | None = LABELS_OPTION,
    assignees: str | None = ASSIGNEES_OPTION,
    milestone: str | None = MILESTONE_OPTION,
    editor: bool = EDITOR_OPTION,
    json_output: bool = JSON_OPTION,
    quiet: bool = QUIET_OPTION,
) -> None:
    """Create an issue with title, body, labels and assignees.

    Examples:
        ghkit issue create -t "Fix login bug" -b "Login fails on timeout" -l bug
        ghkit issue create -r owner/repo -t "Add feature" -a octocat
        ghkit issue create -t "Bug" --json    # {"url": "...", "number": 42}
    """
    renderer = make_renderer(json_output, quiet)
    try:
        require(title, "Title is required. Use -t/--title to provide one.")
        assert title is not None
        label_list = split_csv(labels)
        assignee_list = split_csv(assignees)

        config = load_config()
        client = make_client(config)
        repository = make_resolver(repo, config).resolve()

        if editor:
            body = edit_body(body)

        renderer.header("GitHub Issue Creator")
        renderer.info(f"Repository: {repository}")
        renderer.info(f"Title:      {title}")
        if body:
            renderer.info(f"Body:       {truncate(body, PREVIEW_WIDTH)}")
        if label_list:
            renderer.info(f"Labels:     {', '.join(label_list)}")
        if assignee_list:
            renderer.info(f"Assignees:  {', '.join(assignee_list)}")
        if milestone:
            renderer.info(f"Milestone:  {milestone}")

        created = client.create_issue(
            repository,
            title=title,
            body=body,
            labels=label_list,
            assignees=assignee_list,
            milestone=milestone,
        )
    except GhkitError as e:
        renderer.error(e)
        raise typer.Exit(1)

    renderer.created("Issue", created)


@app.command()
def read(
    repo: str | None = REPO_OPTION,
    number: int | None = NUMBER_OPTION,
    no_comments: bool = NO_COMMENTS_OPTION,
    json_output: bool = JSON_OPTION,
    quiet: bool = QUIET_OPTION,
) -> None:
    """Read an issue's description and comments.

    Examples:
        ghkit issue read -n 42
        ghkit issue read -r owner/repo -n 42 --no-comments
        ghkit issue read -n 42 --json | jq '.title'
    """
    renderer = make_renderer(json_output, quiet)
    try:
        issue_number = require_number(number)
        config = load_config()
        client = make_client(config)
        repository = make_resolver(repo, config).resolve()

        renderer.header("GitHub Issue Reader")
        renderer.info(f"Repository: {repository}")

        issue = client.get_issue(
            repository, issue_number, with_comments=not no_comments
        )
    except GhkitError as e:
        renderer.error(e)
        raise typer.Exit(1)

    renderer.item(issue)


@app.command()
def comment(
    repo: str | None = REPO_OPTION,
    number: int | None = NUMBER_OPTION,
    body: str | None = COMMENT_BODY_OPTION,
    editor: bool = EDITOR_OPTION,
    json_output: bool = JSON_OPTION,
    quiet: bool = QUIET_OPTION,
) -> None:
    """Add a comment to an issue.

    Examples:
        ghkit issue comment -n 42 -b "Fixed in #43"
        ghkit issue comment -n 42 -e
    """
    renderer = make_renderer(json_output, quiet)
    try:
        issue_number = require_number(number)
        if not body and not editor:
            raise ValidationError(
                "Comment body is required. Use -b/--body or -e/--editor.",
                hint="Run with --help for usage information.",
            )
        config = load_config()
        client = make_client(config)
        repository = make_resolver(repo, config).resolve()

        if editor:
            body = edit_body(body, required=True)
        assert body is not None

        renderer.header("GitHub Issue Commenter")
        renderer.info(f"Repository: {repository}")
        renderer.info(f"Issue:      #{issue_number}")

        url = client.comment_on_issue(repository, issue_number, body)
    except GhkitError as e:
        renderer.error(e)
        raise typer.Exit(1)

    renderer.commented(url)


@app.command(name="list")
def list_issues(
    repo: str | None = REPO_OPTION,
    user: str | None = USER_OPTION,
    state: IssueStateFilter = STATE_OPTION,
    limit: int = LIMIT_OPTION,
    json_output: bool = JSON_OPTION,
    quiet: bool = QUIET_OPTION,
) -> None:
    """List issues of one repository, or of every repository a user owns.

    Without --repo, every repository owned by --user (default: the
    authenticated user) is scanned. Repositories that fail are reported on
    stderr and counted; the scan continues.

    Examples:
        ghkit issue list
        ghkit issue list -r owner/repo --json
        ghkit issue list -s all -l 5 -u octocat
    """
    renderer = make_renderer(json_output, quiet)
    try:
        config = load_config()
        client = make_client(config)
        renderer.header("GitHub Issues List Fetcher")

        if repo:
            repository = RepositoryIdentifier.parse(repo)
            renderer.info(
                f"Fetching issues from: {repository} "
                f"(state: {state.value}, limit: {limit})"
            )
            issues = client.list_issues(repository, state=state, limit=limit)
            renderer.issues(repository.full_name, issues)
            return

        renderer.info(f"User: {user or '(authenticated user)'}")
        renderer.info(f"State: {state.value} | Limit per repo: {limit}")
        listing = client.list_user_issues(user=user, state=state, limit=limit)
    except GhkitError as e:
        renderer.error(e)
        raise typer.Exit(1)

    for failure in listing.failures:
        renderer.warning(f"Failed to fetch issues from {failure}")
    renderer.listing(listing)
