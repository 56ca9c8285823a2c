"""Main CLI entry point."""

import sys

import click
import typer
from dotenv import load_dotenv
from rich.console import Console

from ..logging_setup import setup_logging
from . import branches, issue, pr

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="ghkit",
    help="GitHub issue, pull request and branch cleanup tools",
    add_completion=False,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-V", help="Show debug logging on stderr"
    ),
) -> None:
    """GitHub issue, pull request and branch cleanup tools."""
    setup_logging(verbose)


app.add_typer(issue.app, name="issue")
app.add_typer(pr.app, name="pr")
app.add_typer(branches.app, name="branches")


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from ghkit import __version__

    console.print(f"ghkit v{__version__}")


def main() -> None:
    """Console script entry point.

    Usage errors (unknown options, bad values) exit with status 1 instead of
    click's default 2, like every other failure.
    """
    try:
        rv = app(standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(1)
    except click.Abort:
        typer.echo("Aborted!", err=True)
        sys.exit(1)
    sys.exit(rv if isinstance(rv, int) else 0)


if __name__ == "__main__":
    main()
