"""CLI command for cleaning up local branches across repositories."""

from pathlib import Path

import typer

from ..cleanup.engine import BranchCleaner, discover_repositories, run_cleanup
from ..cleanup.models import CleanupReport
from ..errors import GhkitError, ValidationError
from ..git.runner import GitRunner
from .common import load_config, make_renderer
from .options import JSON_OPTION, QUIET_OPTION

app = typer.Typer(
    help="Local branch maintenance across git repositories",
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command()
def cleanup(
    path: Path | None = typer.Argument(
        None, help="Directory holding git repositories (default: current directory)"
    ),
    json_output: bool = JSON_OPTION,
    quiet: bool = QUIET_OPTION,
) -> None:
    """Reset every git repository under PATH to an up-to-date trunk branch.

    For each repository one level below PATH: stash uncommitted changes,
    check out main (or master), delete every other local branch, then pull.

    Do not run two cleanups against the same directory at the same time.

    Examples:
        ghkit branches cleanup
        ghkit branches cleanup ~/Sources --json
    """
    renderer = make_renderer(json_output, quiet)
    try:
        target = (path or Path.cwd()).expanduser()
        if not target.is_dir():
            raise ValidationError(f"Path not found: {target}")
        target = target.resolve()

        config = load_config()
        git = GitRunner(timeout=config.git_timeout)
        git.ensure_available()
    except GhkitError as e:
        renderer.error(e)
        raise typer.Exit(1)

    renderer.header("Git Branch Cleanup")
    renderer.info(f"Target path: {target}")

    repositories = discover_repositories(target)
    if not repositories:
        renderer.warning(f"No git repositories found in {target}")
        if json_output:
            renderer.cleanup_report(CleanupReport())
        raise typer.Exit(1)

    renderer.info(f"Found {len(repositories)} git repositories")
    report = run_cleanup(
        repositories,
        cleaner=BranchCleaner(git=git),
        on_outcome=renderer.cleanup_progress,
    )
    for outcome in report.failed:
        if outcome.detail:
            renderer.warning(f"{outcome.name}: {outcome.detail}")
    renderer.cleanup_report(report)
