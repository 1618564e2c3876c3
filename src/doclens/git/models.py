"""Serializable blame models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

import pygit2


@dataclass(frozen=True, slots=True)
class Signature:
    """Git committer signature."""

    name: str
    email: str
    time: datetime

    @classmethod
    def from_pygit2(cls, sig: pygit2.Signature) -> Signature:
        return cls(sig.name, sig.email, datetime.fromtimestamp(sig.time, tz=UTC))


@dataclass(frozen=True, slots=True)
class BlameHunk:
    """A run of lines last touched by one commit. ``start_line`` is 1-based."""

    commit_sha: str
    committer: Signature
    start_line: int
    line_count: int

    def covers(self, line: int) -> bool:
        """True if the 0-based ``line`` falls inside this hunk."""
        return self.start_line <= line + 1 < self.start_line + self.line_count


@dataclass(frozen=True, slots=True)
class BlameInfo:
    """Blame of one file."""

    path: str
    hunks: tuple[BlameHunk, ...]

    @classmethod
    def from_pygit2(cls, path: str, blame: pygit2.Blame) -> BlameInfo:
        return cls(
            path=path,
            hunks=tuple(
                BlameHunk(
                    commit_sha=str(hunk.final_commit_id),
                    committer=Signature.from_pygit2(hunk.final_committer),  # type: ignore[arg-type]
                    start_line=hunk.final_start_line_number,
                    line_count=hunk.lines_in_hunk,
                )
                for hunk in blame
            ),
        )

    def hunk_for_line(self, line: int) -> BlameHunk | None:
        return next((hunk for hunk in self.hunks if hunk.covers(line)), None)

    def latest_hunk(self) -> BlameHunk | None:
        if not self.hunks:
            return None
        return max(self.hunks, key=lambda hunk: hunk.committer.time)
