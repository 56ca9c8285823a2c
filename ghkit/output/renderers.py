"""Result renderers for the three output modes.

Exactly one renderer is built per invocation by :func:`get_renderer`.
Results go to stdout; errors, warnings and hints always go to stderr so
that stdout stays parseable in JSON and quiet modes.
"""

import json
from enum import Enum
from typing import Any

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

from ..cleanup.models import CleanupOutcome, CleanupReport, Disposition
from ..errors import GhkitError
from ..github_client.models import (
    CreatedItem,
    IssueListing,
    IssueSummary,
    ItemState,
    PullRequestDetail,
    TrackerItem,
)

TITLE_WIDTH = 40
LABELS_WIDTH = 20
PREVIEW_WIDTH = 80

STATE_STYLES = {
    ItemState.OPEN: "green",
    ItemState.CLOSED: "red",
    ItemState.MERGED: "magenta",
}


class OutputMode(str, Enum):
    HUMAN = "human"
    QUIET = "quiet"
    JSON = "json"

    @classmethod
    def from_flags(cls, json_output: bool, quiet: bool) -> "OutputMode":
        """Pick the mode from CLI flags. JSON wins when both flags are set."""
        if json_output:
            return cls.JSON
        if quiet:
            return cls.QUIET
        return cls.HUMAN


def truncate(text: str, width: int) -> str:
    """Shorten ``text`` to ``width`` characters, ending in '...' when cut."""
    if len(text) <= width:
        return text
    if width <= 3:
        return text[:width]
    return text[: width - 3] + "..."


def _date(value: Any) -> str:
    return value.strftime("%Y-%m-%d") if value is not None else "-"


def _join(values: list[str]) -> str:
    return ", ".join(values) if values else "-"


class Renderer:
    """Base renderer: diagnostics on stderr, results left to subclasses."""

    mode: OutputMode

    def __init__(self, console: Console | None = None, err_console: Console | None = None):
        self.console = console or Console(highlight=False, emoji=False)
        self.err_console = err_console or Console(stderr=True, highlight=False, emoji=False)

    # Diagnostics, shown in every mode

    def error(self, error: GhkitError | str) -> None:
        message = error.message if isinstance(error, GhkitError) else error
        self.err_console.print(f"[red]✗ {escape(message)}[/red]", soft_wrap=True)
        hint = error.hint if isinstance(error, GhkitError) else None
        if hint:
            self.err_console.print(f"  {escape(hint)}", soft_wrap=True)

    def warning(self, message: str) -> None:
        self.err_console.print(f"[yellow]⚠ {escape(message)}[/yellow]", soft_wrap=True)

    # Progress messages, human mode only

    def header(self, title: str) -> None:
        pass

    def info(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass

    def cleanup_progress(self, outcome: CleanupOutcome) -> None:
        pass

    # Results

    def created(self, kind: str, item: CreatedItem) -> None:
        raise NotImplementedError

    def commented(self, url: str) -> None:
        raise NotImplementedError

    def item(self, item: TrackerItem) -> None:
        raise NotImplementedError

    def issues(self, repo: str, issues: list[IssueSummary]) -> None:
        raise NotImplementedError

    def listing(self, listing: IssueListing) -> None:
        raise NotImplementedError

    def cleanup_report(self, report: CleanupReport) -> None:
        raise NotImplementedError


class JsonRenderer(Renderer):
    """One JSON document on stdout, nothing else."""

    mode = OutputMode.JSON

    def _emit(self, payload: Any) -> None:
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))

    def created(self, kind: str, item: CreatedItem) -> None:
        self._emit(item.to_json())

    def commented(self, url: str) -> None:
        self._emit({"url": url})

    def item(self, item: TrackerItem) -> None:
        self._emit(item.to_json())

    def issues(self, repo: str, issues: list[IssueSummary]) -> None:
        self._emit([issue.to_json() for issue in issues])

    def listing(self, listing: IssueListing) -> None:
        self._emit(listing.to_json())

    def cleanup_report(self, report: CleanupReport) -> None:
        self._emit(report.to_json())


class QuietRenderer(Renderer):
    """Undecorated essentials: URLs, plain item text, one-line counts."""

    mode = OutputMode.QUIET

    def created(self, kind: str, item: CreatedItem) -> None:
        typer.echo(item.url)

    def commented(self, url: str) -> None:
        typer.echo(url)

    def item(self, item: TrackerItem) -> None:
        typer.echo(f"#{item.number}\t{item.state.value}\t{item.title}")
        if item.body:
            typer.echo(item.body)
        for comment in item.comments or []:
            typer.echo(f"@{comment.author}\t{_date(comment.created_at)}\t{comment.body}")

    def issues(self, repo: str, issues: list[IssueSummary]) -> None:
        typer.echo(f"issues: {len(issues)}")

    def listing(self, listing: IssueListing) -> None:
        typer.echo(
            f"issues: {listing.total_issues}, repos: {listing.scanned}, "
            f"empty: {listing.empty}, failed: {listing.failed}"
        )

    def cleanup_report(self, report: CleanupReport) -> None:
        typer.echo(report.summary_line())


class HumanRenderer(Renderer):
    """Headers, tables and state colors for interactive use.

    When stdout is not a terminal rich drops colors on its own; headers,
    section rules and table borders are skipped as well.
    """

    mode = OutputMode.HUMAN

    @property
    def decorate(self) -> bool:
        return self.console.is_terminal

    def header(self, title: str) -> None:
        if self.decorate:
            self.console.print(
                Panel(f"[bold]{escape(title)}[/bold]", style="green", expand=True)
            )

    def section(self, title: str) -> None:
        if self.decorate:
            self.console.print()
            self.console.print(Rule(escape(title), style="blue", align="left"))
        else:
            self.console.print()
            self.console.print(escape(title))

    def info(self, message: str) -> None:
        self.console.print(f"[cyan]ℹ {escape(message)}[/cyan]", soft_wrap=True)

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓ {escape(message)}[/green]", soft_wrap=True)

    def _state(self, state: ItemState) -> str:
        return f"[{STATE_STYLES.get(state, 'yellow')}]{state.value}[/]"

    def created(self, kind: str, item: CreatedItem) -> None:
        self.header(f"{kind} Created Successfully")
        self.console.print(f"  [bold]URL:[/bold] {escape(item.url)}", soft_wrap=True)
        self.console.print(f"  [bold]Number:[/bold] #{item.number}")

    def commented(self, url: str) -> None:
        self.success("Comment added")
        self.console.print(f"  [bold]URL:[/bold] {escape(url)}", soft_wrap=True)

    def _fields(self, rows: list[tuple[str, str]]) -> None:
        table = Table(box=None, show_header=False, padding=(0, 2))
        table.add_column("Field", style="bold")
        table.add_column("Value")
        for key, value in rows:
            table.add_row(f"{key}:", value)
        self.console.print(table)

    def _text_block(self, title: str, text: str) -> None:
        self.console.print()
        self.console.print(f"  [bold cyan]{escape(title)}[/bold cyan]")
        for line in text.splitlines() or [""]:
            self.console.print(f"  {escape(line)}", soft_wrap=True)

    def item(self, item: TrackerItem) -> None:
        is_pr = isinstance(item, PullRequestDetail)
        kind = "PR" if is_pr else "Issue"
        self.section(f"{kind} #{item.number}: {item.title}")

        rows = [
            ("State", self._state(item.state)),
            ("Author", escape(item.author)),
            ("Labels", escape(_join(item.labels))),
            ("Assignees", escape(_join(item.assignees))),
            ("Milestone", escape(item.milestone or "-")),
            ("Created", _date(item.created_at)),
            ("Updated", _date(item.updated_at)),
        ]
        if isinstance(item, PullRequestDetail):
            rows[1:1] = [("Branch", escape(f"{item.head} → {item.base}"))]
            rows.extend(
                [
                    (
                        "Changes",
                        f"[green]+{item.additions}[/green] [red]-{item.deletions}[/red]"
                        f" ({item.changed_files} files, {item.commits} commits)",
                    ),
                    ("Draft", "yes" if item.draft else "no"),
                    (
                        "Mergeable",
                        "unknown" if item.mergeable is None else
                        ("yes" if item.mergeable else "no"),
                    ),
                    ("Reviewers", escape(_join(item.requested_reviewers))),
                ]
            )
        self.console.print()
        self._fields(rows)
        self._text_block("Description:", item.body or "(no description)")

        if item.comments is not None:
            if not item.comments:
                self.console.print()
                self.info(f"No comments on this {kind.lower()}.")
            else:
                self.section(f"Comments ({len(item.comments)})")
                for comment in item.comments:
                    self._text_block(
                        f"@{comment.author}  {_date(comment.created_at)}", comment.body
                    )

        if isinstance(item, PullRequestDetail) and item.reviews is not None:
            if item.reviews:
                self.section(f"Reviews ({len(item.reviews)})")
                for review in item.reviews:
                    self._text_block(
                        f"@{review.author}  {review.state}  {_date(review.submitted_at)}",
                        review.body,
                    )
            else:
                self.info("No review comments on this PR.")
        self.console.print()

    def _issue_table(self, issues: list[IssueSummary]) -> Table:
        table = Table(box=box.SIMPLE_HEAD if self.decorate else None)
        table.add_column("#", style="bold", no_wrap=True)
        table.add_column("Title", no_wrap=True)
        table.add_column("State", no_wrap=True)
        table.add_column("Labels", no_wrap=True)
        table.add_column("Created", style="dim", no_wrap=True)
        for issue in issues:
            table.add_row(
                f"#{issue.number}",
                escape(truncate(issue.title, TITLE_WIDTH)),
                self._state(issue.state),
                escape(truncate(", ".join(issue.labels), LABELS_WIDTH)),
                _date(issue.created_at),
            )
        return table

    def issues(self, repo: str, issues: list[IssueSummary]) -> None:
        if not issues:
            self.info(f"No issues found in {repo}")
            return
        self.section(f"{repo}  ({len(issues)} issues)")
        self.console.print(self._issue_table(issues))

    def listing(self, listing: IssueListing) -> None:
        for entry in listing.repositories:
            self.issues(entry.repo, entry.issues)
        self.console.print()
        self.header("Summary")
        self.console.print(f"  [green]Total issues:[/green]      {listing.total_issues}")
        self.console.print(f"  [blue]Repos scanned:[/blue]     {listing.scanned}")
        if listing.empty:
            self.console.print(f"  [yellow]Repos (no issues):[/yellow] {listing.empty}")
        if listing.failed:
            self.console.print(f"  [red]Repos (failed):[/red]    {listing.failed}")
        self.console.print()

    def cleanup_progress(self, outcome: CleanupOutcome) -> None:
        self.section(f"{outcome.name}  {outcome.path}")
        if outcome.stashed:
            self.console.print("  [yellow]Uncommitted changes stashed[/yellow]")
        if outcome.trunk:
            self.console.print(f"  [green]→ on {escape(outcome.trunk)}[/green]")
        for deletion in outcome.deletions:
            if deletion.deleted:
                self.console.print(f"  [red]✗ deleted {escape(deletion.branch)}[/red]")
            else:
                self.console.print(
                    f"  [yellow]⚠ could not delete {escape(deletion.branch)}[/yellow]"
                )
        if outcome.disposition is Disposition.SUCCEEDED:
            self.console.print("  [green]✓ pull complete[/green]")
        elif outcome.disposition is Disposition.FAILED:
            self.console.print(f"  [red]✗ {escape(outcome.reason)}[/red]")
        else:
            self.console.print(f"  [yellow]skipped: {escape(outcome.reason)}[/yellow]")

    def cleanup_report(self, report: CleanupReport) -> None:
        self.console.print()
        self.header("Cleanup Summary")
        self.console.print(f"[green]✅ Succeeded: {len(report.succeeded)}[/green]")
        for outcome in report.succeeded:
            self.console.print(f"   - {escape(outcome.name)}")
        if report.failed:
            self.console.print(f"\n[red]❌ Failed: {len(report.failed)}[/red]")
            for outcome in report.failed:
                self.console.print(f"   - {escape(outcome.label)}")
        if report.skipped:
            self.console.print(f"\n[yellow]⚠️  Skipped: {len(report.skipped)}[/yellow]")
            for outcome in report.skipped:
                self.console.print(f"   - {escape(outcome.label)}")
        self.console.print()


_RENDERERS: dict[OutputMode, type[Renderer]] = {
    OutputMode.HUMAN: HumanRenderer,
    OutputMode.QUIET: QuietRenderer,
    OutputMode.JSON: JsonRenderer,
}


def get_renderer(mode: OutputMode, console: Console | None = None) -> Renderer:
    """Build the single renderer used for an invocation."""
    return _RENDERERS[mode](console=console)
