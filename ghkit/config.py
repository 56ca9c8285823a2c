"""Runtime configuration read from environment variables."""

import os

from pydantic import BaseModel, Field

from .errors import ValidationError

DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_GIT_TIMEOUT = 120.0
DEFAULT_LIST_DELAY = 0.5


def _read_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValidationError(
            f"Invalid value for {name}: '{raw}'. Expected a number of seconds."
        )
    if value < 0:
        raise ValidationError(f"Invalid value for {name}: '{raw}'. Must be >= 0.")
    return value


class GhkitConfig(BaseModel):
    """Configuration shared by all commands.

    Values come from the environment (a `.env` file is loaded by the CLI
    before this is read).
    """

    token: str | None = Field(
        None, description="GitHub token from GITHUB_TOKEN or GH_TOKEN"
    )
    request_timeout: float = Field(
        DEFAULT_REQUEST_TIMEOUT, description="GitHub API request timeout (seconds)"
    )
    git_timeout: float = Field(
        DEFAULT_GIT_TIMEOUT, description="Timeout for each git subprocess (seconds)"
    )
    list_delay: float = Field(
        DEFAULT_LIST_DELAY,
        description="Delay between repositories when listing issues (seconds)",
    )

    @classmethod
    def from_env(cls) -> "GhkitConfig":
        """Build configuration from environment variables."""
        return cls(
            token=os.getenv("GITHUB_TOKEN") or os.getenv("GH_TOKEN") or None,
            request_timeout=_read_float(
                "GHKIT_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT
            ),
            git_timeout=_read_float("GHKIT_GIT_TIMEOUT", DEFAULT_GIT_TIMEOUT),
            list_delay=_read_float("GHKIT_LIST_DELAY", DEFAULT_LIST_DELAY),
        )
