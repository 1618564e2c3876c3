"""Serializable documentation models produced by one parse pass.

Every record is immutable; a new parse supersedes the previous model
wholesale. Lists exposed to consumers are sorted by ``start_line``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal

AccessModifier = Literal["public", "protected", "private", "default"]
MethodKind = Literal["method", "constructor"]


@dataclass(frozen=True, slots=True)
class ParamTag:
    """``@param`` tag; ``type`` comes from the signature."""

    name: str
    type: str
    description: str


@dataclass(frozen=True, slots=True)
class ReturnTag:
    type: str
    description: str


@dataclass(frozen=True, slots=True)
class ThrowsTag:
    type: str
    description: str


@dataclass(frozen=True, slots=True)
class TagTable:
    """Structured tags of one documentation comment.

    Only tags present in the source are populated. ``TagTable()`` is the
    empty table; build a new one per declaration.
    """

    params: tuple[ParamTag, ...] = ()
    returns: ReturnTag | None = None
    throws: tuple[ThrowsTag, ...] = ()
    since: str | None = None
    author: str | None = None
    deprecated: str | None = None
    see: tuple[str, ...] = ()
    doc: str | None = None
    example: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class AuthorshipInfo:
    """Revision-control authorship of a container declaration."""

    author: str
    last_modifier: str
    last_modify_date: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class MethodDoc:
    """Documentation of one method or constructor.

    ``id`` is ``<name>_<start_line>``: unique within a document only.
    """

    id: str
    kind: MethodKind
    name: str
    signature: str
    full_signature: str
    start_line: int
    end_line: int
    has_comment: bool
    description: str
    tags: TagTable
    owner: str
    access_modifier: AccessModifier

    def __post_init__(self) -> None:
        if not 0 <= self.start_line <= self.end_line:
            raise ValueError(
                f"Invalid line span for {self.name}: {self.start_line}-{self.end_line}"
            )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class FieldDoc:
    name: str
    type: str
    signature: str
    start_line: int
    has_comment: bool
    description: str
    is_constant: bool
    access_modifier: AccessModifier
    owner: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class EnumConstantDoc:
    """Enum constant; ``arguments`` is the balanced ``(...)`` text or ``""``."""

    name: str
    start_line: int
    has_comment: bool
    description: str
    arguments: str
    owner: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class DocumentModel:
    """Aggregate parse result for one source document."""

    container_name: str
    container_comment: str
    package_name: str
    file_path: str
    methods: tuple[MethodDoc, ...] = ()
    fields: tuple[FieldDoc, ...] = ()
    enum_constants: tuple[EnumConstantDoc, ...] = ()
    authorship: AuthorshipInfo | None = None
    doc_author: str | None = None
    doc_since: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
