"""Flatten a declaration tree into leaf declarations tagged with their owner."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from doclens.config.constants import UNKNOWN_OWNER
from doclens.symbols.models import (
    DeclarationSymbol,
    is_callable,
    is_container,
    is_data_member,
    is_enum_constant,
)


@dataclass(frozen=True, slots=True)
class LeafDeclaration:
    """A non-container symbol and the dot-joined path of its containers."""

    symbol: DeclarationSymbol
    owner: str


def flatten_symbols(symbols: Iterable[DeclarationSymbol], owner: str = "") -> list[LeafDeclaration]:
    """Depth-first walk emitting callables, data members and enum constants.

    Containers extend the owner path (``Outer.Inner``) and are never emitted
    themselves. Output follows traversal order, not line order.
    """
    result: list[LeafDeclaration] = []
    for symbol in symbols:
        if is_container(symbol):
            path = f"{owner}.{symbol.name}" if owner else symbol.name
            if symbol.children:
                result.extend(flatten_symbols(symbol.children, path))
        elif is_callable(symbol) or is_data_member(symbol) or is_enum_constant(symbol):
            result.append(LeafDeclaration(symbol, owner or UNKNOWN_OWNER))
    return result
