"""Error types raised by ghkit commands."""


class GhkitError(Exception):
    """Base error for every failure reported to the user.

    Args:
        message: What went wrong
        hint: Optional one-line remediation shown under the message
    """

    def __init__(self, message: str, hint: str | None = None):
        super().__init__(message)
        self.message = message
        self.hint = hint


class PreconditionError(GhkitError):
    """A required tool, credential or binary is missing."""


class ValidationError(GhkitError):
    """A required argument is missing or malformed."""


class RepositoryResolutionError(GhkitError):
    """The target repository or branch could not be detected."""


class RemoteCallError(GhkitError):
    """A GitHub API call failed."""
