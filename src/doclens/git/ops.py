"""Read-only git lookups via pygit2 - returns serializable data models."""

from __future__ import annotations

from pathlib import Path

import pygit2

from doclens.git.errors import NotARepositoryError, UntrackedFileError
from doclens.git.models import BlameInfo


class GitOps:
    """Thin wrapper around pygit2.Repository with cleaner error handling."""

    def __init__(self, repo_path: Path | str) -> None:
        self._path = Path(repo_path)
        try:
            self._repo = pygit2.Repository(str(self._path))
        except pygit2.GitError as e:
            raise NotARepositoryError(str(self._path)) from e

    @classmethod
    def discover(cls, path: Path | str) -> GitOps:
        """Open the repository containing ``path``."""
        start = Path(path)
        if start.is_file():
            start = start.parent
        found = pygit2.discover_repository(str(start))
        if found is None:
            raise NotARepositoryError(str(path))
        return cls(found)

    @property
    def repo(self) -> pygit2.Repository:
        return self._repo

    @property
    def path(self) -> Path:
        """Work tree root."""
        return Path(self._repo.workdir) if self._repo.workdir else self._path

    def relative_path(self, file_path: Path | str) -> str:
        """Repository-relative POSIX path of a work tree file."""
        absolute = Path(file_path).resolve()
        try:
            return absolute.relative_to(self.path.resolve()).as_posix()
        except ValueError as e:
            raise NotARepositoryError(str(file_path)) from e

    def is_tracked(self, file_path: Path | str) -> bool:
        """True if the file is present in HEAD."""
        if self._repo.head_is_unborn:
            return False
        tree = self._repo.head.peel(pygit2.Tree)
        try:
            tree[self.relative_path(file_path)]
        except KeyError:
            return False
        return True

    def blame(self, file_path: Path | str) -> BlameInfo:
        """Whole-file blame as of HEAD."""
        if not self.is_tracked(file_path):
            raise UntrackedFileError(str(file_path))
        relative = self.relative_path(file_path)
        return BlameInfo.from_pygit2(relative, self._repo.blame(relative))
