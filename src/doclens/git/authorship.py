"""Revision-control authorship for a container declaration.

The author is the committer of the blame hunk covering the declaration
line; the last modifier is whoever committed the newest hunk in the file.
pygit2 calls block, so they run in a worker thread.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import structlog

from doclens.git.errors import GitError, NotARepositoryError
from doclens.git.ops import GitOps
from doclens.models import AuthorshipInfo

log = structlog.get_logger(__name__)


class GitAuthorshipProvider:
    """Authorship lookups backed by the repository containing each file."""

    async def is_under_version_control(self, file_path: Path | str) -> bool:
        return await asyncio.to_thread(self._is_tracked, Path(file_path))

    async def get_authorship_info(self, file_path: Path | str, line: int) -> AuthorshipInfo | None:
        """Authorship of the declaration at 0-based ``line``, or None if unknown."""
        return await asyncio.to_thread(self._authorship, Path(file_path), line)

    def _is_tracked(self, file_path: Path) -> bool:
        try:
            return GitOps.discover(file_path).is_tracked(file_path)
        except NotARepositoryError:
            return False

    def _authorship(self, file_path: Path, line: int) -> AuthorshipInfo | None:
        try:
            blame = GitOps.discover(file_path).blame(file_path)
        except GitError as e:
            log.debug("authorship_unavailable", path=str(file_path), error=str(e))
            return None

        latest = blame.latest_hunk()
        if latest is None:
            return None
        owner = blame.hunk_for_line(line) or blame.hunks[0]
        return AuthorshipInfo(
            author=owner.committer.name,
            last_modifier=latest.committer.name,
            last_modify_date=latest.committer.time.date().isoformat(),
        )
