"""Result models for branch cleanup runs."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Disposition(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


class FailureReason(str, Enum):
    NO_TRUNK = "no main/master branch"
    STASH_FAILED = "stash failed"
    CHECKOUT_FAILED = "checkout failed"
    PULL_FAILED = "pull failed"


class SkipReason(str, Enum):
    NOT_A_DIRECTORY = "not a directory"
    NOT_A_REPOSITORY = "not a git repository"


class BranchDeletion(BaseModel):
    """Result of force-deleting one local branch."""

    branch: str
    deleted: bool
    reason: str = ""


class CleanupOutcome(BaseModel):
    """Final state of one repository after a cleanup pass."""

    model_config = {"frozen": True}

    name: str = Field(..., description="Directory name of the repository")
    path: str = Field(..., description="Absolute path of the repository")
    disposition: Disposition
    reason: str = Field("", description="Failure or skip reason")
    trunk: str | None = Field(None, description="Trunk branch that was checked out")
    stashed: bool = Field(False, description="Whether local changes were stashed")
    deletions: tuple[BranchDeletion, ...] = Field(
        default_factory=tuple, description="Per-branch deletion results"
    )
    detail: str = Field("", description="git error output for failures")

    @property
    def deleted_branches(self) -> list[str]:
        return [d.branch for d in self.deletions if d.deleted]

    @property
    def label(self) -> str:
        """``name (reason)`` form used in human and quiet listings."""
        return f"{self.name} ({self.reason})" if self.reason else self.name

    def to_json(self) -> dict[str, Any]:
        return {"name": self.name, "reason": self.reason}


class CleanupReport(BaseModel):
    """Outcomes of a cleanup run, grouped by disposition in processing order."""

    succeeded: list[CleanupOutcome] = Field(default_factory=list)
    failed: list[CleanupOutcome] = Field(default_factory=list)
    skipped: list[CleanupOutcome] = Field(default_factory=list)

    def record(self, outcome: CleanupOutcome) -> None:
        if outcome.disposition is Disposition.SUCCEEDED:
            self.succeeded.append(outcome)
        elif outcome.disposition is Disposition.FAILED:
            self.failed.append(outcome)
        else:
            self.skipped.append(outcome)

    @property
    def counts(self) -> dict[str, int]:
        return {
            "success": len(self.succeeded),
            "failed": len(self.failed),
            "skipped": len(self.skipped),
        }

    def to_json(self) -> dict[str, Any]:
        return {
            "success": [o.name for o in self.succeeded],
            "failed": [o.to_json() for o in self.failed],
            "skipped": [o.to_json() for o in self.skipped],
            "counts": self.counts,
        }

    def summary_line(self) -> str:
        counts = self.counts
        return (
            f"success: {counts['success']}, failed: {counts['failed']}, "
            f"skipped: {counts['skipped']}"
        )
