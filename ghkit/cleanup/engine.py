"""Reset every git repository under a directory to an up-to-date trunk branch.

For each repository found one level below the target directory:

1. stash uncommitted changes to tracked files,
2. check out the trunk branch (first of ``TRUNK_BRANCHES`` that exists
   locally or on ``origin``),
3. force-delete every other local branch,
4. pull the trunk branch from ``origin``.

Repositories are processed one at a time and never affect each other.
Running two cleanups against the same directory at once is not supported.
"""

import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from pathlib import Path

from ..git.runner import GitResult, GitRunner
from .models import (
    BranchDeletion,
    CleanupOutcome,
    CleanupReport,
    Disposition,
    FailureReason,
    SkipReason,
)

logger = logging.getLogger(__name__)

TRUNK_BRANCHES: tuple[str, ...] = ("main", "master")
REMOTE = "origin"

# `git stash push` output when there was nothing to save
NOTHING_STASHED = "No local changes to save"


def discover_repositories(search_path: Path) -> list[Path]:
    """Immediate subdirectories of ``search_path`` holding a ``.git`` directory.

    Only one level is scanned. Results are sorted by name so repeated scans
    of an unchanged tree return the same order.
    """
    if not search_path.is_dir():
        return []
    return sorted(
        (
            child.resolve()
            for child in search_path.iterdir()
            if child.is_dir() and (child / ".git").is_dir()
        ),
        key=lambda p: p.name,
    )


class BranchCleaner:
    """Run the per-repository cleanup procedure with a :class:`GitRunner`."""

    def __init__(
        self,
        git: GitRunner | None = None,
        trunk_branches: tuple[str, ...] = TRUNK_BRANCHES,
        remote: str = REMOTE,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.git = git or GitRunner()
        self.trunk_branches = trunk_branches
        self.remote = remote
        self._clock = clock

    def find_trunk(self, repo: Path) -> str | None:
        for name in self.trunk_branches:
            for ref in (f"refs/heads/{name}", f"refs/remotes/{self.remote}/{name}"):
                if self.git.run(["show-ref", "--verify", "--quiet", ref], cwd=repo).ok:
                    return name
        return None

    def has_local_changes(self, repo: Path) -> bool:
        # Refresh stat info so touched but unchanged files do not count
        self.git.run(["update-index", "-q", "--refresh"], cwd=repo)
        # diff-index exits 1 when tracked files differ from HEAD
        result = self.git.run(["diff-index", "--quiet", "HEAD", "--"], cwd=repo)
        return result.returncode == 1

    def stash(self, repo: Path) -> GitResult:
        stamp = self._clock().strftime("%Y-%m-%d %H:%M:%S")
        message = f"Auto-stash by ghkit branches cleanup at {stamp}"
        return self.git.run(["stash", "push", "-m", message], cwd=repo)

    def local_branches(self, repo: Path) -> list[str]:
        result = self.git.run(["branch", "--format=%(refname:short)"], cwd=repo)
        return result.lines() if result.ok else []

    def delete_branches(self, repo: Path, trunk: str) -> list[BranchDeletion]:
        """Force-delete every local branch except ``trunk``.

        A failed deletion is recorded and the remaining branches are still
        attempted.
        """
        deletions = []
        for branch in self.local_branches(repo):
            if branch == trunk:
                continue
            result = self.git.run(["branch", "-D", branch], cwd=repo)
            if result.ok:
                deletions.append(BranchDeletion(branch=branch, deleted=True))
            else:
                logger.debug("Could not delete %s in %s", branch, repo.name)
                deletions.append(
                    BranchDeletion(
                        branch=branch, deleted=False, reason=result.error_text
                    )
                )
        return deletions

    def clean(self, repo: Path) -> CleanupOutcome:
        """Clean one repository and describe where it ended up."""
        name = repo.name
        base = {"name": name, "path": str(repo)}

        if not repo.is_dir():
            return CleanupOutcome(
                **base,
                disposition=Disposition.SKIPPED,
                reason=SkipReason.NOT_A_DIRECTORY.value,
            )
        if not (repo / ".git").is_dir():
            return CleanupOutcome(
                **base,
                disposition=Disposition.SKIPPED,
                reason=SkipReason.NOT_A_REPOSITORY.value,
            )

        stashed = False
        if self.has_local_changes(repo):
            logger.info("Stashing uncommitted changes in %s", name)
            stash = self.stash(repo)
            if not stash.ok:
                return CleanupOutcome(
                    **base,
                    disposition=Disposition.FAILED,
                    reason=FailureReason.STASH_FAILED.value,
                )
            stashed = NOTHING_STASHED not in stash.stdout

        trunk = self.find_trunk(repo)
        if trunk is None:
            return CleanupOutcome(
                **base,
                disposition=Disposition.FAILED,
                reason=FailureReason.NO_TRUNK.value,
                stashed=stashed,
            )

        checkout = self.git.run(["checkout", trunk], cwd=repo)
        if not checkout.ok:
            return CleanupOutcome(
                **base,
                disposition=Disposition.FAILED,
                reason=f"{trunk} {FailureReason.CHECKOUT_FAILED.value}",
                trunk=trunk,
                stashed=stashed,
                detail=checkout.error_text,
            )

        deletions = tuple(self.delete_branches(repo, trunk))

        pull = self.git.run(["pull", self.remote, trunk], cwd=repo)
        if not pull.ok:
            # Branches stay pruned; the repository is left on trunk
            return CleanupOutcome(
                **base,
                disposition=Disposition.FAILED,
                reason=FailureReason.PULL_FAILED.value,
                trunk=trunk,
                stashed=stashed,
                deletions=deletions,
                detail=pull.error_text,
            )

        return CleanupOutcome(
            **base,
            disposition=Disposition.SUCCEEDED,
            trunk=trunk,
            stashed=stashed,
            deletions=deletions,
        )


def run_cleanup(
    repositories: Iterable[Path],
    cleaner: BranchCleaner | None = None,
    on_outcome: Callable[[CleanupOutcome], None] | None = None,
) -> CleanupReport:
    """Clean each repository in order and collect the outcomes.

    Args:
        repositories: Paths to process, usually from :func:`discover_repositories`
        cleaner: Cleaner to use; a default one is built if omitted
        on_outcome: Called with each outcome as soon as it is known

    Returns:
        Report with succeeded, failed and skipped outcomes in processing order
    """
    cleaner = cleaner or BranchCleaner()
    report = CleanupReport()
    for repo in repositories:
        outcome = cleaner.clean(Path(repo))
        logger.debug("%s -> %s %s", outcome.name, outcome.disposition.value, outcome.reason)
        report.record(outcome)
        if on_outcome is not None:
            on_outcome(outcome)
    return report
