"""Git lookups for authorship metadata."""

from doclens.git.authorship import GitAuthorshipProvider
from doclens.git.errors import GitError, NotARepositoryError, UntrackedFileError
from doclens.git.models import BlameHunk, BlameInfo, Signature
from doclens.git.ops import GitOps

__all__ = [
    "GitAuthorshipProvider",
    "GitOps",
    # Errors
    "GitError",
    "NotARepositoryError",
    "UntrackedFileError",
    # Models
    "BlameHunk",
    "BlameInfo",
    "Signature",
]
