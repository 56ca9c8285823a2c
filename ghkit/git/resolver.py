"""Detect the target repository and branch from the local working copy."""

import logging
import re
from pathlib import Path

from ..errors import RepositoryResolutionError
from ..github_client.models import RepositoryIdentifier
from .runner import GitRunner

logger = logging.getLogger(__name__)

# https://github.com/o/n(.git), git@github.com:o/n(.git), ssh://git@github.com/o/n
_REMOTE_URL = re.compile(
    r"(?:^|[@/])github\.com[:/]"
    r"(?P<owner>[A-Za-z0-9_.-]+)/(?P<name>[A-Za-z0-9_.-]+?)(?:\.git)?/?$"
)


def parse_remote_url(url: str) -> RepositoryIdentifier | None:
    """Extract owner/name from a github.com remote URL, or None otherwise."""
    match = _REMOTE_URL.search(url.strip())
    if not match:
        return None
    return RepositoryIdentifier(owner=match.group("owner"), name=match.group("name"))


class RepositoryResolver:
    """Resolve the repository an invocation targets.

    An explicit ``owner/name`` wins. Otherwise the ``origin`` remote of the
    working copy is read once and the answer reused for the rest of the
    invocation.
    """

    def __init__(
        self,
        explicit: str | None = None,
        git: GitRunner | None = None,
        cwd: Path | str | None = None,
        remote: str = "origin",
    ):
        self.explicit = explicit
        self.git = git or GitRunner()
        self.cwd = cwd
        self.remote = remote
        self._resolved: RepositoryIdentifier | None = None

    def resolve(self) -> RepositoryIdentifier:
        if self._resolved is None:
            if self.explicit:
                self._resolved = RepositoryIdentifier.parse(self.explicit)
            else:
                self._resolved = self._detect()
                logger.debug("Detected repository %s", self._resolved)
        return self._resolved

    def _detect(self) -> RepositoryIdentifier:
        result = self.git.run(["remote", "get-url", self.remote], cwd=self.cwd)
        detected = parse_remote_url(result.stdout) if result.ok else None
        if detected is None:
            raise RepositoryResolutionError(
                "Cannot detect repository. Use -r/--repo to specify one."
            )
        return detected

    def current_branch(self) -> str:
        """Name of the checked-out branch, used as the default PR head."""
        result = self.git.run(["branch", "--show-current"], cwd=self.cwd)
        branch = result.stdout.strip() if result.ok else ""
        if not branch:
            raise RepositoryResolutionError(
                "Cannot detect current branch. Use -H/--head to specify one."
            )
        return branch
