"""GitHub token discovery."""

import logging
import shutil
import subprocess

from ..errors import PreconditionError

logger = logging.getLogger(__name__)

GH_INSTALL_URL = "https://cli.github.com/"
AUTH_HINT = "Run: gh auth login"


def token_from_gh_cli(timeout: float = 10.0) -> str | None:
    """Ask an installed and logged-in gh CLI for its token."""
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        logger.debug("gh auth token unavailable: %s", e)
        return None
    token = result.stdout.strip()
    return token if result.returncode == 0 and token else None


def resolve_token(explicit: str | None = None) -> str:
    """Return a GitHub token or raise PreconditionError.

    Order: explicit value (GITHUB_TOKEN / GH_TOKEN from config), then
    ``gh auth token``.
    """
    if explicit:
        return explicit
    if shutil.which("gh") is None:
        raise PreconditionError(
            "No GitHub token found and the gh CLI is not installed.",
            hint=f"Set GITHUB_TOKEN or install gh from {GH_INSTALL_URL}",
        )
    token = token_from_gh_cli()
    if not token:
        raise PreconditionError("gh CLI is not authenticated.", hint=AUTH_HINT)
    return token
