"""Git module error types."""


class GitError(Exception):
    """Base error for git lookups."""

    pass


class NotARepositoryError(GitError):
    """Path is not inside a git repository."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class UntrackedFileError(GitError):
    """File exists in the work tree but has no committed history."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File is not tracked: {path}")
        self.path = path
