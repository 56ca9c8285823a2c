"""Logging configuration for the CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False) -> None:
    """Route log records to stderr through rich.

    Stdout is reserved for command results, so the handler always writes to
    stderr. Without --verbose only warnings and errors are shown.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    root = logging.getLogger()
    if not any(getattr(h, "_ghkit_handler", False) for h in root.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))
        handler._ghkit_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(level)
    # PyGithub and urllib3 are chatty at DEBUG
    for noisy in ("github", "urllib3"):
        logging.getLogger(noisy).setLevel(
            logging.INFO if verbose else logging.WARNING
        )
