"""Branch cleanup across the git repositories in a directory."""

from .engine import BranchCleaner, discover_repositories, run_cleanup
from .models import CleanupOutcome, CleanupReport, Disposition

__all__ = [
    "BranchCleaner",
    "CleanupOutcome",
    "CleanupReport",
    "Disposition",
    "discover_repositories",
    "run_cleanup",
]
