"""Symbol lookup with LRU caching and in-flight request coalescing.

Design:
- Cache keyed by document id, entry valid only for the open version it was
  fetched at; strict LRU with a fixed capacity
- In-flight map keyed by "<document id>#<version | untracked>"; concurrent
  callers for one key share a single provider call
- Provider failures and malformed results resolve to [] and are logged,
  never raised to callers
- A failing version lookup is treated as an untracked document
- State lives on the instance so independent sessions stay isolated
"""

from __future__ import annotations

import asyncio
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Protocol

import structlog

from doclens.config.constants import DEFAULT_CACHE_ENTRIES, UNTRACKED_VERSION
from doclens.core.errors import SymbolError
from doclens.symbols.models import DeclarationSymbol
from doclens.symbols.normalize import normalize_symbols

log = structlog.get_logger(__name__)


class SymbolProvider(Protocol):
    """External structural-analysis service."""

    async def get_symbols(self, document_id: str) -> Any:
        """Return a raw symbol result (tree or flat shape). May raise."""
        ...

    def get_open_document_version(self, document_id: str) -> int | None:
        """Return the live version of an open document, or None."""
        ...


@dataclass(frozen=True, slots=True)
class _CachedSymbols:
    version: int
    symbols: list[DeclarationSymbol]


class SymbolResolver:
    """Caching, coalescing front for a :class:`SymbolProvider`."""

    def __init__(
        self, provider: SymbolProvider, max_entries: int = DEFAULT_CACHE_ENTRIES
    ) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self._provider = provider
        self._max_entries = max_entries
        self._cache: OrderedDict[str, _CachedSymbols] = OrderedDict()
        self._in_flight: dict[str, asyncio.Task[list[DeclarationSymbol]]] = {}

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    @property
    def in_flight_count(self) -> int:
        return len(self._in_flight)

    async def resolve(self, document_id: str) -> list[DeclarationSymbol]:
        """Resolve declaration symbols for a document.

        Returns a cached tree for the same open version, joins a pending
        request for the same key, or issues one provider call.
        """
        version = self._open_version(document_id)

        if version is not None:
            cached = self._get_cached(document_id, version)
            if cached is not None:
                log.debug("symbols_cache_hit", document_id=document_id, version=version)
                return cached

        request_key = _request_key(document_id, version)
        pending = self._in_flight.get(request_key)
        if pending is not None:
            return await asyncio.shield(pending)

        task = asyncio.ensure_future(self._fetch(document_id, version))
        self._in_flight[request_key] = task
        task.add_done_callback(lambda done: self._clear_in_flight(request_key, done))
        return await asyncio.shield(task)

    def invalidate(self, document_id: str) -> None:
        """Forget the cached tree and pending requests for one document."""
        self._cache.pop(document_id, None)
        prefix = f"{document_id}#"
        for key in [k for k in self._in_flight if k.startswith(prefix)]:
            del self._in_flight[key]

    def invalidate_all(self) -> None:
        self._cache.clear()
        self._in_flight.clear()

    async def _fetch(self, document_id: str, version: int | None) -> list[DeclarationSymbol]:
        try:
            raw = await self._provider.get_symbols(document_id)
        except Exception as e:  # noqa: BLE001
            err = SymbolError.provider_failed(document_id, str(e))
            log.error("symbols_provider_failed", exc_info=True, **err.to_dict())
            return []

        symbols = normalize_symbols(raw)
        # Skip caching when the document was invalidated mid-request.
        owner = self._in_flight.get(_request_key(document_id, version))
        if version is not None and owner is asyncio.current_task():
            self._set_cached(document_id, version, symbols)
        return symbols

    def _open_version(self, document_id: str) -> int | None:
        try:
            return self._provider.get_open_document_version(document_id)
        except Exception as e:  # noqa: BLE001
            log.warning("symbols_version_failed", document_id=document_id, error=str(e))
            return None

    def _clear_in_flight(self, request_key: str, task: asyncio.Task[Any]) -> None:
        # A re-issued request after invalidation owns the key now.
        if self._in_flight.get(request_key) is task:
            del self._in_flight[request_key]

    def _get_cached(self, document_id: str, version: int) -> list[DeclarationSymbol] | None:
        cached = self._cache.get(document_id)
        if cached is None or cached.version != version:
            return None
        self._cache.move_to_end(document_id)
        return cached.symbols

    def _set_cached(
        self, document_id: str, version: int, symbols: list[DeclarationSymbol]
    ) -> None:
        if document_id not in self._cache and len(self._cache) >= self._max_entries:
            self._cache.popitem(last=False)
        self._cache[document_id] = _CachedSymbols(version, symbols)
        self._cache.move_to_end(document_id)


def _request_key(document_id: str, version: int | None) -> str:
    return f"{document_id}#{UNTRACKED_VERSION if version is None else version}"
