"""Declaration symbols as reported by a structural symbol provider.

Positions follow the LSP convention: 0-based lines and characters. Symbol
kinds use the LSP ``SymbolKind`` numbering so a ``textDocument/documentSymbol``
response can be read without translation.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from doclens.core.errors import SymbolError


class SymbolKind(IntEnum):
    """LSP symbol kinds."""

    FILE = 1
    MODULE = 2
    NAMESPACE = 3
    PACKAGE = 4
    CLASS = 5
    METHOD = 6
    PROPERTY = 7
    FIELD = 8
    CONSTRUCTOR = 9
    ENUM = 10
    INTERFACE = 11
    FUNCTION = 12
    VARIABLE = 13
    CONSTANT = 14
    STRING = 15
    NUMBER = 16
    BOOLEAN = 17
    ARRAY = 18
    OBJECT = 19
    KEY = 20
    NULL = 21
    ENUM_MEMBER = 22
    STRUCT = 23
    EVENT = 24
    OPERATOR = 25
    TYPE_PARAMETER = 26


CONTAINER_KINDS = frozenset({SymbolKind.CLASS, SymbolKind.INTERFACE, SymbolKind.ENUM})
CALLABLE_KINDS = frozenset({SymbolKind.METHOD, SymbolKind.CONSTRUCTOR, SymbolKind.FUNCTION})
DATA_MEMBER_KINDS = frozenset({SymbolKind.FIELD, SymbolKind.CONSTANT})


@dataclass(frozen=True, slots=True)
class Position:
    """Zero-based line/character position."""

    line: int
    character: int

    @classmethod
    def from_lsp(cls, data: Any) -> Position:
        if (
            not isinstance(data, Mapping)
            or not _is_int(data.get("line"))
            or not _is_int(data.get("character"))
        ):
            raise SymbolError.malformed("position", data)
        return cls(data["line"], data["character"])


@dataclass(frozen=True, slots=True)
class Range:
    """Start/end position pair."""

    start: Position
    end: Position

    @classmethod
    def from_lsp(cls, data: Any) -> Range:
        if not isinstance(data, Mapping):
            raise SymbolError.malformed("range", data)
        return cls(Position.from_lsp(data.get("start")), Position.from_lsp(data.get("end")))


@dataclass(frozen=True, slots=True)
class DeclarationSymbol:
    """One declaration reported by the provider.

    ``selection_range`` covers the identifier, ``range`` the whole declaration
    body. ``container_name`` is provenance from flat provider results and is
    never used to look anything up.
    """

    name: str
    kind: int
    range: Range
    selection_range: Range
    detail: str = ""
    children: tuple[DeclarationSymbol, ...] = ()
    container_name: str | None = None

    @property
    def start_line(self) -> int:
        """Line the declaration's identifier sits on."""
        return self.selection_range.start.line

    @property
    def end_line(self) -> int:
        return self.range.end.line

    @classmethod
    def from_lsp(cls, data: Any) -> DeclarationSymbol:
        """Build from a hierarchical LSP ``DocumentSymbol`` mapping."""
        if not isinstance(data, Mapping):
            raise SymbolError.malformed("document symbol", data)
        name = data.get("name")
        kind = data.get("kind")
        children = data.get("children") or []
        if not isinstance(name, str) or not _is_int(kind) or not isinstance(children, list):
            raise SymbolError.malformed("document symbol", data)
        full_range = Range.from_lsp(data.get("range"))
        selection = data.get("selectionRange")
        return cls(
            name=name,
            kind=kind,
            range=full_range,
            selection_range=Range.from_lsp(selection) if selection is not None else full_range,
            detail=data.get("detail") or "",
            children=tuple(cls.from_lsp(child) for child in children),
        )


def is_container(symbol: DeclarationSymbol) -> bool:
    """Class / Interface / Enum."""
    return symbol.kind in CONTAINER_KINDS


def is_callable(symbol: DeclarationSymbol) -> bool:
    """Method / Constructor / Function."""
    return symbol.kind in CALLABLE_KINDS


def is_data_member(symbol: DeclarationSymbol) -> bool:
    """Field / Constant (enum members excluded)."""
    return symbol.kind in DATA_MEMBER_KINDS


def is_enum_constant(symbol: DeclarationSymbol) -> bool:
    return symbol.kind == SymbolKind.ENUM_MEMBER


def is_constructor(symbol: DeclarationSymbol) -> bool:
    return symbol.kind == SymbolKind.CONSTRUCTOR


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
