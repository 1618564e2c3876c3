"""Tests for symbols/models.py."""

from __future__ import annotations

from typing import Any

import pytest

from doclens.core.errors import ErrorCode, SymbolError
from doclens.symbols.models import (
    DeclarationSymbol,
    Position,
    Range,
    SymbolKind,
    is_callable,
    is_constructor,
    is_container,
    is_data_member,
    is_enum_constant,
)


def _lsp_range(start: int, end: int) -> dict[str, Any]:
    return {"start": {"line": start, "character": 0}, "end": {"line": end, "character": 1}}


def _symbol(kind: SymbolKind) -> DeclarationSymbol:
    r = Range(Position(0, 0), Position(0, 1))
    return DeclarationSymbol(name="x", kind=kind, range=r, selection_range=r)


class TestSymbolKind:
    """LSP numbering is kept as-is."""

    def test_lsp_values(self) -> None:
        assert SymbolKind.CLASS == 5
        assert SymbolKind.METHOD == 6
        assert SymbolKind.FIELD == 8
        assert SymbolKind.CONSTRUCTOR == 9
        assert SymbolKind.ENUM == 10
        assert SymbolKind.INTERFACE == 11
        assert SymbolKind.CONSTANT == 14
        assert SymbolKind.ENUM_MEMBER == 22


class TestClassifiers:
    """Kind predicates."""

    @pytest.mark.parametrize("kind", [SymbolKind.CLASS, SymbolKind.INTERFACE, SymbolKind.ENUM])
    def test_containers(self, kind: SymbolKind) -> None:
        assert is_container(_symbol(kind))
        assert not is_callable(_symbol(kind))

    @pytest.mark.parametrize(
        "kind", [SymbolKind.METHOD, SymbolKind.CONSTRUCTOR, SymbolKind.FUNCTION]
    )
    def test_callables(self, kind: SymbolKind) -> None:
        assert is_callable(_symbol(kind))

    def test_data_members_exclude_enum_members(self) -> None:
        assert is_data_member(_symbol(SymbolKind.FIELD))
        assert is_data_member(_symbol(SymbolKind.CONSTANT))
        assert not is_data_member(_symbol(SymbolKind.ENUM_MEMBER))
        assert is_enum_constant(_symbol(SymbolKind.ENUM_MEMBER))

    def test_constructor(self) -> None:
        assert is_constructor(_symbol(SymbolKind.CONSTRUCTOR))
        assert not is_constructor(_symbol(SymbolKind.METHOD))


class TestFromLsp:
    """DeclarationSymbol.from_lsp conversion."""

    def test_converts_nested_tree(self) -> None:
        """Children are converted recursively and lines come from the selection range."""
        data = {
            "name": "UserService",
            "kind": 5,
            "range": _lsp_range(3, 40),
            "selectionRange": _lsp_range(5, 5),
            "children": [
                {
                    "name": "findById",
                    "kind": 6,
                    "detail": "User findById(Long id)",
                    "range": _lsp_range(10, 14),
                    "selectionRange": _lsp_range(12, 12),
                    "children": [],
                }
            ],
        }

        symbol = DeclarationSymbol.from_lsp(data)

        assert symbol.start_line == 5
        assert symbol.end_line == 40
        (child,) = symbol.children
        assert child.name == "findById"
        assert child.detail == "User findById(Long id)"
        assert child.start_line == 12
        assert child.end_line == 14

    def test_missing_selection_range_falls_back_to_range(self) -> None:
        data = {"name": "A", "kind": 5, "range": _lsp_range(2, 9), "children": []}

        symbol = DeclarationSymbol.from_lsp(data)

        assert symbol.selection_range == symbol.range
        assert symbol.start_line == 2

    @pytest.mark.parametrize(
        "data",
        [
            "not a mapping",
            {"name": 1, "kind": 5, "range": _lsp_range(0, 1), "children": []},
            {"name": "A", "kind": True, "range": _lsp_range(0, 1), "children": []},
            {"name": "A", "kind": 5, "range": {"start": {"line": 0}}, "children": []},
        ],
    )
    def test_malformed_raises_symbol_error(self, data: Any) -> None:
        with pytest.raises(SymbolError) as exc_info:
            DeclarationSymbol.from_lsp(data)
        assert exc_info.value.code == ErrorCode.SYMBOL_MALFORMED
