"""Javadoc tag section parser.

Tokenization is line-based: a tag starts only where a (trimmed) line starts
with a recognized ``@tag``. Descriptions may therefore mention ``@return``
or ``@Override`` in running text without opening a new block.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from doclens.config.constants import TYPE_PARAMETER, UNKNOWN_TYPE, VOID_TYPE
from doclens.extraction.signature import parse_return_type, parse_signature_params
from doclens.models import ParamTag, ReturnTag, TagTable, ThrowsTag

SUPPORTED_TAGS = frozenset(
    {
        "param",
        "return",
        "returns",
        "throws",
        "exception",
        "since",
        "author",
        "deprecated",
        "see",
        "doc",
        "example",
    }
)

_TAG_LINE = re.compile(
    r"^\s*\*?\s*@(?P<tag>" + "|".join(sorted(SUPPORTED_TAGS)) + r")\b\s*(?P<content>.*)$",
    re.IGNORECASE,
)
_CONTINUATION_MARKER = re.compile(r"^\s*\*\s?")
_PARAM_CONTENT = re.compile(r"^(<\s*[A-Za-z_$][\w$]*\s*>|[A-Za-z_$][\w$]*)\s*(.*)$", re.DOTALL)
_THROWS_CONTENT = re.compile(r"^([\w.]+)\s*(.*)$", re.DOTALL)
_SINGLE_VALUED = ("since", "author", "deprecated", "doc", "example")


@dataclass(frozen=True, slots=True)
class TagBlock:
    """One recognized tag and its (possibly multi-line) content."""

    tag: str
    content: str


def tokenize_tag_blocks(raw_tags: str) -> list[TagBlock]:
    """Split a tag section into blocks, one per recognized tag line.

    Lines that do not start a tag continue the open block; lines before the
    first recognized tag are dropped.
    """
    blocks: list[TagBlock] = []
    active: str | None = None
    buffer: list[str] = []

    def flush() -> None:
        if active is not None:
            blocks.append(TagBlock(active, "\n".join(buffer).strip()))

    for raw_line in raw_tags.splitlines():
        line = _CONTINUATION_MARKER.sub("", raw_line, count=1)
        match = _TAG_LINE.match(line)
        if match:
            flush()
            active = match.group("tag").lower()
            buffer = [match.group("content").strip()]
        elif active is not None:
            buffer.append(line.strip())
    flush()
    return blocks


def parse_tag_table(raw_tags: str, signature: str) -> TagTable:
    """Parse a tag section into a :class:`TagTable`.

    ``signature`` supplies parameter types and the return type; a ``@return``
    on a void method or constructor is dropped.
    """
    if not raw_tags.strip():
        return TagTable()
    blocks = tokenize_tag_blocks(raw_tags)
    if not blocks:
        return TagTable()

    param_types = parse_signature_params(signature)
    return_type = parse_return_type(signature)

    params: list[ParamTag] = []
    throws: list[ThrowsTag] = []
    see: list[str] = []
    returns: ReturnTag | None = None
    single: dict[str, str | None] = dict.fromkeys(_SINGLE_VALUED)

    for block in blocks:
        content = block.content.strip()
        if block.tag == "param":
            param = parse_param_tag(content, param_types)
            if param is not None:
                params.append(param)
        elif block.tag in ("return", "returns"):
            if return_type != VOID_TYPE:
                returns = ReturnTag(type=return_type, description=content)
        elif block.tag in ("throws", "exception"):
            thrown = parse_throws_tag(content)
            if thrown is not None:
                throws.append(thrown)
        elif block.tag == "see":
            if content:
                see.append(content)
        else:
            single[block.tag] = content or None

    return TagTable(
        params=tuple(params),
        returns=returns,
        throws=tuple(throws),
        see=tuple(see),
        **single,
    )


def parse_param_tag(content: str, param_types: dict[str, str]) -> ParamTag | None:
    """``"<T> element type"`` or ``"id the user id"``."""
    match = _PARAM_CONTENT.match(content)
    if not match:
        return None
    name = re.sub(r"\s+", "", match.group(1))
    if name.startswith("<") and name.endswith(">"):
        param_type = TYPE_PARAMETER
    else:
        param_type = param_types.get(name, UNKNOWN_TYPE)
    return ParamTag(name=name, type=param_type, description=match.group(2).strip())


def parse_throws_tag(content: str) -> ThrowsTag | None:
    match = _THROWS_CONTENT.match(content)
    if not match:
        return None
    return ThrowsTag(type=match.group(1), description=match.group(2).strip())
