"""Locate and clean the documentation comment of a declaration.

The search walks upward from the line above the declaration:

    SEEKING_CLOSE  - find the nearest line ending with ``*/``
    VERIFYING_GAP  - everything between that line and the declaration must be
                     blank or annotations; otherwise resume SEEKING_CLOSE above
    SEEKING_OPEN   - walk up to the ``/**`` opening that block; a foreign
                     ``*/`` or a plain ``/*`` abandons the candidate

Only ``/** ... */`` blocks document declarations.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from enum import Enum, auto

from doclens.extraction.scanner import scan_line
from doclens.extraction.tags import parse_tag_table
from doclens.models import TagTable

_ANNOTATION_LINE = re.compile(r"^\s*@[\w.]+")
_TAG_SECTION_START = re.compile(r"^[ \t]*@\w+", re.MULTILINE)
_DECORATION = re.compile(r"^\s*\*\s?")
_EXCESS_BLANK_LINES = re.compile(r"\n{3,}")
_CONTAINER_AUTHOR = re.compile(r"@author\s+(.+?)(?:\n|$)")
_CONTAINER_SINCE = re.compile(r"@since\s+(.+?)(?:\n|$)")


class CommentSearchState(Enum):
    SEEKING_CLOSE = auto()
    VERIFYING_GAP = auto()
    SEEKING_OPEN = auto()


def find_doc_comment(lines: Sequence[str], target_line: int) -> str:
    """Raw text of the doc comment documenting ``target_line``, or ``""``."""
    state = CommentSearchState.SEEKING_CLOSE
    cursor = min(target_line, len(lines)) - 1
    close_line = -1

    while True:
        if state is CommentSearchState.SEEKING_CLOSE:
            if cursor < 0:
                return ""
            if lines[cursor].strip().endswith("*/"):
                close_line = cursor
                state = CommentSearchState.VERIFYING_GAP
            else:
                cursor -= 1

        elif state is CommentSearchState.VERIFYING_GAP:
            if is_annotation_gap(lines[close_line + 1 : target_line]):
                state = CommentSearchState.SEEKING_OPEN
            else:
                cursor = close_line - 1
                state = CommentSearchState.SEEKING_CLOSE

        else:
            text = lines[cursor] if cursor >= 0 else ""
            if "/**" in text:
                return "\n".join(lines[cursor : close_line + 1])
            abandoned = (
                cursor < 0
                or "/*" in text
                or (cursor != close_line and "*/" in text)
            )
            if abandoned:
                cursor = close_line - 1
                state = CommentSearchState.SEEKING_CLOSE
            else:
                cursor -= 1


def is_annotation_gap(lines: Sequence[str]) -> bool:
    """True if ``lines`` hold only blank lines and annotations.

    Annotation arguments may span several lines; they are followed by paren
    depth over the code-only projection of each line.
    """
    index = 0
    while index < len(lines):
        line = lines[index]
        if not line.strip():
            index += 1
            continue
        if not _ANNOTATION_LINE.match(line):
            return False
        depth = scan_line(line).paren_delta
        index += 1
        while index < len(lines) and depth > 0:
            depth += scan_line(lines[index]).paren_delta
            index += 1
    return True


def find_member_comment(
    lines: Sequence[str], target_line: int, container_comment: str
) -> str:
    """Like :func:`find_doc_comment`, but never returns the container's own comment.

    Generated members (e.g. a Lombok ``log`` field) are reported next to the
    container declaration and would otherwise pick up its comment.
    """
    raw = find_doc_comment(lines, target_line)
    if raw and container_comment and raw == container_comment:
        return ""
    return raw


def clean_comment(raw: str) -> str:
    """Strip delimiters and leading ``*`` decoration."""
    text = raw.replace("\r\n", "\n").replace("/**", "").replace("*/", "")
    text = "\n".join(_DECORATION.sub("", line, count=1) for line in text.split("\n"))
    return _EXCESS_BLANK_LINES.sub("\n\n", text).strip()


def split_description(cleaned: str) -> tuple[str, str]:
    """Split a cleaned comment into free-text description and tag section."""
    match = _TAG_SECTION_START.search(cleaned)
    if match is None:
        return cleaned.strip(), ""
    return cleaned[: match.start()].strip(), cleaned[match.start() :]


def parse_doc_comment(raw: str, signature: str) -> tuple[str, TagTable]:
    """Description and tag table of a raw ``/** ... */`` block."""
    description, raw_tags = split_description(clean_comment(raw))
    return description, parse_tag_table(raw_tags, signature)


def parse_container_tags(comment: str) -> tuple[str | None, str | None]:
    """``@author`` and ``@since`` of a container comment."""
    author = _CONTAINER_AUTHOR.search(comment)
    since = _CONTAINER_SINCE.search(comment)
    return (
        author.group(1).strip() if author else None,
        since.group(1).strip() if since else None,
    )
