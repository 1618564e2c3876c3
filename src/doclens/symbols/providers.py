"""Ready-made SymbolProvider implementations.

``StaticSymbolProvider`` serves pre-supplied results from memory (library
callers that already hold an LSP response, and tests). ``JsonFileSymbolProvider``
reads a saved ``textDocument/documentSymbol`` response from disk.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


class StaticSymbolProvider:
    """In-memory provider: document id -> raw symbol result and version."""

    def __init__(self) -> None:
        self._results: dict[str, Any] = {}
        self._versions: dict[str, int] = {}
        self.calls = 0

    def set_symbols(self, document_id: str, raw: Any, version: int | None = None) -> None:
        self._results[document_id] = raw
        if version is None:
            self._versions.pop(document_id, None)
        else:
            self._versions[document_id] = version

    def close(self, document_id: str) -> None:
        self._versions.pop(document_id, None)

    async def get_symbols(self, document_id: str) -> Any:
        self.calls += 1
        return self._results.get(document_id, [])

    def get_open_document_version(self, document_id: str) -> int | None:
        return self._versions.get(document_id)


class JsonFileSymbolProvider:
    """Serve one saved LSP documentSymbol response for any document.

    The file's modification time stands in for the document version, so an
    edited dump is re-read while an unchanged one stays cached.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    async def get_symbols(self, document_id: str) -> Any:  # noqa: ARG002
        with self._path.open(encoding="utf-8") as f:
            data = json.load(f)
        # Some clients save the full JSON-RPC envelope.
        if isinstance(data, dict) and "result" in data:
            return data["result"]
        return data

    def get_open_document_version(self, document_id: str) -> int | None:  # noqa: ARG002
        try:
            return self._path.stat().st_mtime_ns
        except OSError:
            return None
