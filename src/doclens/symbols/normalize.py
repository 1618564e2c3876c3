"""Normalize provider results into a list of DeclarationSymbol trees.

A symbol provider may legally answer with either shape:

* ``TREE`` - hierarchical ``DocumentSymbol`` records (``children`` present)
* ``FLAT`` - ``SymbolInformation`` records (``location`` + ``containerName``)

The shape is decided once, from the first element, and nothing past
``normalize_symbols`` ever sees the raw union.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

import structlog

from doclens.core.errors import SymbolError
from doclens.symbols.models import DeclarationSymbol, Range

log = structlog.get_logger(__name__)


class SymbolShape(Enum):
    """Discriminator for raw provider results."""

    TREE = "tree"
    FLAT = "flat"
    EMPTY = "empty"
    UNKNOWN = "unknown"


def detect_shape(raw: Any) -> SymbolShape:
    """Classify a raw provider result by duck-typing its first element."""
    if not isinstance(raw, Sequence) or isinstance(raw, str | bytes):
        return SymbolShape.UNKNOWN
    if len(raw) == 0:
        return SymbolShape.EMPTY
    first = raw[0]
    if _is_document_symbol(first):
        return SymbolShape.TREE
    if _is_symbol_information(first):
        return SymbolShape.FLAT
    return SymbolShape.UNKNOWN


def normalize_symbols(raw: Any) -> list[DeclarationSymbol]:
    """Convert any provider result to hierarchical symbols.

    Unrecognized or malformed results normalize to an empty list.
    """
    shape = detect_shape(raw)
    try:
        if shape is SymbolShape.TREE:
            return [
                item if isinstance(item, DeclarationSymbol) else DeclarationSymbol.from_lsp(item)
                for item in raw
            ]
        if shape is SymbolShape.FLAT:
            return [_from_symbol_information(item) for item in raw]
    except SymbolError as e:
        log.warning("symbols_malformed", shape=shape.value, **e.to_dict())
        return []

    if shape is SymbolShape.UNKNOWN:
        log.warning("symbols_unrecognized_shape", result_type=type(raw).__name__)
    return []


def _from_symbol_information(data: Any) -> DeclarationSymbol:
    if not _is_symbol_information(data):
        raise SymbolError.malformed("symbol information", data)
    location_range = Range.from_lsp(data["location"]["range"])
    return DeclarationSymbol(
        name=data["name"],
        kind=data["kind"],
        range=location_range,
        selection_range=location_range,
        container_name=data.get("containerName") or None,
    )


def _is_document_symbol(value: Any) -> bool:
    if isinstance(value, DeclarationSymbol):
        return True
    if not isinstance(value, Mapping):
        return False
    return (
        _is_int(value.get("kind"))
        and isinstance(value.get("children"), list)
        and _is_range(value.get("range"))
        and _is_range(value.get("selectionRange"))
    )


def _is_symbol_information(value: Any) -> bool:
    if not isinstance(value, Mapping):
        return False
    location = value.get("location")
    return (
        isinstance(value.get("name"), str)
        and _is_int(value.get("kind"))
        and isinstance(location, Mapping)
        and bool(location.get("uri"))
        and _is_range(location.get("range"))
    )


def _is_range(value: Any) -> bool:
    return (
        isinstance(value, Mapping)
        and _is_position(value.get("start"))
        and _is_position(value.get("end"))
    )


def _is_position(value: Any) -> bool:
    return (
        isinstance(value, Mapping)
        and _is_int(value.get("line"))
        and _is_int(value.get("character"))
    )


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
