"""CLI commands for GitHub pull requests."""

import typer

from ..errors import GhkitError, ValidationError
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
    BASE_OPTION,
    BODY_OPTION,
    COMMENT_BODY_OPTION,
    DRAFT_OPTION,
    EDITOR_OPTION,
    HEAD_OPTION,
    JSON_OPTION,
    LABELS_OPTION,
    NO_COMMENTS_OPTION,
    NO_REVIEWS_OPTION,
    NUMBER_OPTION,
    QUIET_OPTION,
    REPO_OPTION,
    REVIEWERS_OPTION,
    TITLE_OPTION,
)

app = typer.Typer(
    help="Create, read and comment on GitHub pull requests",
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command()
def create(
    repo: str | None = REPO_OPTION,
    title: str | None = TITLE_OPTION,
    body: str | None = BODY_OPTION,
    base: str | None = BASE_OPTION,
    head: str | None = HEAD_OPTION,
    labels: str | None = LABELS_OPTION,
    reviewers: str | None = REVIEWERS_OPTION,
    draft: bool = DRAFT_OPTION,
    editor: bool = EDITOR_OPTION,
    json_output: bool = JSON_OPTION,
    quiet: bool = QUIET_OPTION,
) -> None:
    """Create a pull request from the current (or given) branch.

    Examples:
        ghkit pr create -t "Add login feature" -b "Implements OAuth2 login"
        ghkit pr create -r owner/repo -t "Fix race condition" -B main -d
        ghkit pr create -t "Fix" --json    # {"url": "...", "number": 42}
    """
    renderer = make_renderer(json_output, quiet)
    try:
        require(title, "Title is required. Use -t/--title to provide one.")
        assert title is not None
        label_list = split_csv(labels)
        reviewer_list = split_csv(reviewers)

        config = load_config()
        client = make_client(config)
        resolver = make_resolver(repo, config)
        repository = resolver.resolve()
        head_branch = head or resolver.current_branch()

        if editor:
            body = edit_body(body)

        renderer.header("GitHub Pull Request Creator")
        renderer.info(f"Repository: {repository}")
        renderer.info(f"Title:      {title}")
        renderer.info(f"Head:       {head_branch}")
        if base:
            renderer.info(f"Base:       {base}")
        if draft:
            renderer.info("Draft:      yes")
        if body:
            renderer.info(f"Body:       {truncate(body, PREVIEW_WIDTH)}")
        if label_list:
            renderer.info(f"Labels:     {', '.join(label_list)}")
        if reviewer_list:
            renderer.info(f"Reviewers:  {', '.join(reviewer_list)}")

        created = client.create_pull_request(
            repository,
            title=title,
            head=head_branch,
            base=base,
            body=body,
            labels=label_list,
            reviewers=reviewer_list,
            draft=draft,
        )
    except GhkitError as e:
        renderer.error(e)
        raise typer.Exit(1)

    renderer.created("PR", created)


@app.command()
def read(
    repo: str | None = REPO_OPTION,
    number: int | None = NUMBER_OPTION,
    no_comments: bool = NO_COMMENTS_OPTION,
    no_reviews: bool = NO_REVIEWS_OPTION,
    json_output: bool = JSON_OPTION,
    quiet: bool = QUIET_OPTION,
) -> None:
    """Read a pull request's description, comments and reviews.

    Examples:
        ghkit pr read -n 42
        ghkit pr read -r owner/repo -n 42 --no-reviews
        ghkit pr read -n 42 --json | jq '.reviews'
    """
    renderer = make_renderer(json_output, quiet)
    try:
        pr_number = require_number(number)
        config = load_config()
        client = make_client(config)
        repository = make_resolver(repo, config).resolve()

        renderer.header("GitHub Pull Request Reader")
        renderer.info(f"Repository: {repository}")

        pr = client.get_pull_request(
            repository,
            pr_number,
            with_comments=not no_comments,
            with_reviews=not no_reviews,
        )
    except GhkitError as e:
        renderer.error(e)
        raise typer.Exit(1)

    renderer.item(pr)


@app.command()
def comment(
    repo: str | None = REPO_OPTION,
    number: int | None = NUMBER_OPTION,
    body: str | None = COMMENT_BODY_OPTION,
    editor: bool = EDITOR_OPTION,
    json_output: bool = JSON_OPTION,
    quiet: bool = QUIET_OPTION,
) -> None:
    """Add a comment to a pull request conversation.

    Examples:
        ghkit pr comment -n 42 -b "LGTM"
        ghkit pr comment -n 42 -e
    """
    renderer = make_renderer(json_output, quiet)
    try:
        pr_number = require_number(number)
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

        renderer.header("GitHub PR Commenter")
        renderer.info(f"Repository: {repository}")
        renderer.info(f"PR:         #{pr_number}")

        url = client.comment_on_pull_request(repository, pr_number, body)
    except GhkitError as e:
        renderer.error(e)
        raise typer.Exit(1)

    renderer.commented(url)
