"""Shared test doubles."""

from pathlib import Path

from ghkit.git.runner import GitResult

OK = GitResult(0, "", "")
FAIL = GitResult(1, "", "error: failed")


class FakeGit:
    """Scripted stand-in for GitRunner.

    Responses are keyed by ``(repo_dir_name, args)`` or ``(None, args)`` for
    every repository. Unscripted commands succeed with empty output.
    """

    def __init__(self, responses: dict | None = None):
        self.responses = responses or {}
        self.calls: list[tuple[str | None, tuple[str, ...]]] = []

    def run(self, args: list[str], cwd: Path | str | None = None) -> GitResult:
        name = Path(cwd).name if cwd is not None else None
        key = tuple(args)
        self.calls.append((name, key))
        for lookup in ((name, key), (None, key)):
            if lookup in self.responses:
                return self.responses[lookup]
        return OK

    def ensure_available(self) -> None:
        pass

    def commands_for(self, name: str) -> list[tuple[str, ...]]:
        return [args for repo, args in self.calls if repo == name]


def make_repo_dirs(root: Path, *names: str, git: bool = True) -> list[Path]:
    """Create directories, optionally with an empty .git directory."""
    paths = []
    for name in names:
        path = root / name
        path.mkdir(parents=True)
        if git:
            (path / ".git").mkdir()
        paths.append(path)
    return paths
