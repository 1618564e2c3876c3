"""Declaration symbols: provider boundary, normalization, caching."""

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
from doclens.symbols.normalize import SymbolShape, detect_shape, normalize_symbols
from doclens.symbols.providers import JsonFileSymbolProvider, StaticSymbolProvider
from doclens.symbols.resolver import SymbolProvider, SymbolResolver

__all__ = [
    "DeclarationSymbol",
    "Position",
    "Range",
    "SymbolKind",
    "is_callable",
    "is_constructor",
    "is_container",
    "is_data_member",
    "is_enum_constant",
    "SymbolShape",
    "detect_shape",
    "normalize_symbols",
    "JsonFileSymbolProvider",
    "StaticSymbolProvider",
    "SymbolProvider",
    "SymbolResolver",
]
