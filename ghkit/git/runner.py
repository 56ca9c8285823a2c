"""Thin wrapper around the git binary."""

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from ..config import DEFAULT_GIT_TIMEOUT
from ..errors import PreconditionError

logger = logging.getLogger(__name__)

TIMEOUT_RETURN_CODE = 124


@dataclass(frozen=True)
class GitResult:
    """Outcome of one git invocation."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def lines(self) -> list[str]:
        return [line.strip() for line in self.stdout.splitlines() if line.strip()]

    @property
    def error_text(self) -> str:
        return (self.stderr or self.stdout).strip()


class GitRunner:
    """Run git commands with an explicit timeout.

    Commands never raise on a non-zero exit; callers inspect
    :class:`GitResult` and decide what a failure means for them.
    """

    def __init__(self, timeout: float = DEFAULT_GIT_TIMEOUT, binary: str = "git"):
        self.timeout = timeout
        self.binary = binary

    def ensure_available(self) -> None:
        """Raise PreconditionError if the git binary cannot be found."""
        if shutil.which(self.binary) is None:
            raise PreconditionError(
                "git is not installed.", hint="Install it from https://git-scm.com/"
            )

    def run(self, args: list[str], cwd: Path | str | None = None) -> GitResult:
        cmd = [self.binary, *args]
        logger.debug("Running %s in %s", " ".join(cmd), cwd or ".")
        try:
            completed = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError:
            raise PreconditionError(
                "git is not installed.", hint="Install it from https://git-scm.com/"
            )
        except subprocess.TimeoutExpired:
            logger.warning("git %s timed out after %ss", args[0], self.timeout)
            return GitResult(
                TIMEOUT_RETURN_CODE, "", f"git {args[0]} timed out after {self.timeout}s"
            )
        if completed.returncode != 0:
            logger.debug(
                "git %s exited %d: %s",
                args[0],
                completed.returncode,
                completed.stderr.strip(),
            )
        return GitResult(completed.returncode, completed.stdout, completed.stderr)
