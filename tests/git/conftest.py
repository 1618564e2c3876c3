"""Test fixtures for git module."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pygit2
import pytest

if TYPE_CHECKING:
    from collections.abc import Generator

ALICE = pygit2.Signature("Alice", "alice@example.com", 1_700_000_000, 0)
BOB = pygit2.Signature("Bob", "bob@example.com", 1_710_000_000, 0)

ORIGINAL = """\
package demo;

public class Greeter {
    public String greet() {
        return "hi";
    }
}
"""

EDITED = ORIGINAL.replace('return "hi";', 'return "hello";')


def commit_file(
    repo: pygit2.Repository, relative: str, content: str, sig: pygit2.Signature, message: str
) -> None:
    path = Path(repo.workdir) / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    repo.index.add(relative)
    repo.index.write()
    tree = repo.index.write_tree()
    parents = [] if repo.head_is_unborn else [repo.head.target]
    repo.create_commit("refs/heads/main", sig, sig, message, tree, parents)


@pytest.fixture
def temp_repo(tmp_path: Path) -> Generator[pygit2.Repository, None, None]:
    """Repository where Alice added Greeter.java and Bob later edited line 5."""
    repo_path = tmp_path / "repo"
    repo_path.mkdir()

    repo = pygit2.init_repository(str(repo_path), initial_head="main")
    repo.config["user.name"] = "Test User"
    repo.config["user.email"] = "test@example.com"

    commit_file(repo, "src/Greeter.java", ORIGINAL, ALICE, "Add greeter")
    commit_file(repo, "src/Greeter.java", EDITED, BOB, "Friendlier greeting")
    repo.set_head("refs/heads/main")

    yield repo


@pytest.fixture
def greeter_path(temp_repo: pygit2.Repository) -> Path:
    return Path(temp_repo.workdir) / "src" / "Greeter.java"
