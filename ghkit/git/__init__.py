"""Local git access: subprocess runner and repository resolution."""

from .resolver import RepositoryResolver, parse_remote_url
from .runner import GitResult, GitRunner

__all__ = ["GitResult", "GitRunner", "RepositoryResolver", "parse_remote_url"]
