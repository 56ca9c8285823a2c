"""Helpers shared by the issue, PR and branch commands."""

import click

from ..config import GhkitConfig
from ..errors import PreconditionError, ValidationError
from ..git.resolver import RepositoryResolver
from ..git.runner import GitRunner
from ..github_client.client import GitHubClient
from ..output.renderers import OutputMode, Renderer, get_renderer


def make_renderer(json_output: bool, quiet: bool) -> Renderer:
    return get_renderer(OutputMode.from_flags(json_output, quiet))


def load_config() -> GhkitConfig:
    return GhkitConfig.from_env()


def make_client(config: GhkitConfig) -> GitHubClient:
    """Build the API client; raises PreconditionError without credentials."""
    return GitHubClient(
        token=config.token,
        timeout=config.request_timeout,
        list_delay=config.list_delay,
    )


def make_resolver(repo: str | None, config: GhkitConfig) -> RepositoryResolver:
    return RepositoryResolver(explicit=repo, git=GitRunner(timeout=config.git_timeout))


def split_csv(value: str | None) -> list[str]:
    """Split a comma-separated option value, dropping blanks."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def require(value: object, message: str) -> None:
    if value is None or value == "":
        raise ValidationError(message, hint="Run with --help for usage information.")


def require_number(number: int | None, flag: str = "-n/--number") -> int:
    require(number, f"Number is required. Use {flag} to provide one.")
    assert number is not None
    if number <= 0:
        raise ValidationError(f"Invalid number {number}. Must be a positive integer.")
    return number


def edit_body(initial: str | None = None, required: bool = False) -> str | None:
    """Open $EDITOR for the body text.

    Returns None when the editor was closed without text, unless
    ``required`` is set, in which case that aborts with a ValidationError.
    """
    try:
        text = click.edit(initial or "")
    except click.ClickException as e:
        raise PreconditionError(f"Could not open the editor: {e.format_message()}")
    text = text.strip() if text else ""
    if not text:
        if required:
            raise ValidationError("Aborted: the editor returned an empty body.")
        return None
    return text
