"""Document parser: symbols + source text -> DocumentModel.

One ``parse`` call:
1. resolves declaration symbols (cached, coalesced)
2. picks the container declaration, or recovers it from text
3. flattens the tree and extracts each member independently
4. attaches authorship when a provider is configured

A member that fails to extract is logged and dropped; nothing raises out of
``parse`` for bad input.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path, PurePath
from typing import Protocol, TypeVar
from urllib.parse import unquote, urlparse

import structlog

from doclens.config.models import DocLensConfig
from doclens.core.errors import ExtractionError
from doclens.core.logging import parse_scope
from doclens.extraction.comments import (
    clean_comment,
    find_doc_comment,
    find_member_comment,
    parse_container_tags,
    parse_doc_comment,
)
from doclens.extraction.fallback import (
    extract_package_name,
    extract_primary_type_info,
)
from doclens.extraction.flatten import LeafDeclaration, flatten_symbols
from doclens.extraction.members import (
    extract_enum_arguments,
    extract_field_type,
    is_constant_declaration,
)
from doclens.extraction.signature import (
    extract_access_modifier,
    extract_display_signature,
    extract_full_signature,
)
from doclens.models import (
    AuthorshipInfo,
    DocumentModel,
    EnumConstantDoc,
    FieldDoc,
    MethodDoc,
    TagTable,
)
from doclens.symbols.models import (
    DeclarationSymbol,
    is_callable,
    is_constructor,
    is_container,
    is_data_member,
    is_enum_constant,
)
from doclens.symbols.resolver import SymbolProvider, SymbolResolver

log = structlog.get_logger(__name__)

_T = TypeVar("_T")


class AuthorshipProvider(Protocol):
    """Revision-control metadata source."""

    async def is_under_version_control(self, file_path: Path | str) -> bool: ...

    async def get_authorship_info(
        self, file_path: Path | str, line: int
    ) -> AuthorshipInfo | None: ...


def document_path(document_id: str) -> str:
    """Filesystem path of a document id (plain path or ``file://`` URI)."""
    if document_id.startswith("file://"):
        return unquote(urlparse(document_id).path)
    return document_id


def find_container_symbol(
    symbols: Sequence[DeclarationSymbol], file_path: str
) -> DeclarationSymbol | None:
    """Top-level container named after the file, else the first one."""
    containers = [s for s in symbols if is_container(s)]
    if not containers:
        return None
    base_name = PurePath(file_path).stem
    return next((s for s in containers if s.name == base_name), containers[0])


class DocumentParser:
    """Builds a :class:`DocumentModel` per document.

    Holds no per-document state between calls except through the resolver's
    symbol cache.
    """

    def __init__(
        self,
        resolver: SymbolResolver,
        authorship: AuthorshipProvider | None = None,
        config: DocLensConfig | None = None,
    ) -> None:
        self._resolver = resolver
        self._config = config or DocLensConfig()
        self._authorship = authorship if self._config.git.enabled else None

    @classmethod
    def from_config(
        cls,
        provider: SymbolProvider,
        config: DocLensConfig,
        authorship: AuthorshipProvider | None = None,
    ) -> DocumentParser:
        """Parser over ``provider`` with cache capacity taken from ``config``."""
        resolver = SymbolResolver(provider, max_entries=config.cache.max_entries)
        return cls(resolver, authorship=authorship, config=config)

    @property
    def resolver(self) -> SymbolResolver:
        return self._resolver

    async def parse(self, document_id: str, full_text: str) -> DocumentModel:
        with parse_scope(document_id):
            return await self._parse(document_id, full_text)

    def invalidate(self, document_id: str) -> None:
        self._resolver.invalidate(document_id)

    def invalidate_all(self) -> None:
        self._resolver.invalidate_all()

    async def _parse(self, document_id: str, full_text: str) -> DocumentModel:
        symbols = await self._resolver.resolve(document_id)
        file_path = document_path(document_id)
        lines = full_text.split("\n")

        container = find_container_symbol(symbols, file_path)
        if container is not None:
            container_name = container.name
            container_line = container.start_line
            container_comment = find_doc_comment(lines, container_line)
        else:
            fallback = extract_primary_type_info(full_text, file_path)
            container_name, container_line = fallback.name, fallback.line
            container_comment = fallback.comment
            log.debug("container_from_text", document_id=document_id, container=container_name)

        doc_author, doc_since = parse_container_tags(container_comment)
        leaves = flatten_symbols(symbols)

        methods = self._collect(
            leaves, is_callable, lambda leaf: self.parse_method(lines, leaf, container_comment)
        )
        fields = self._collect(
            leaves, is_data_member, lambda leaf: self.parse_field(lines, leaf, container_comment)
        )
        enum_constants = self._collect(
            leaves,
            is_enum_constant,
            lambda leaf: self.parse_enum_constant(lines, leaf, container_comment),
        )

        log.debug(
            "document_parsed",
            document_id=document_id,
            methods=len(methods),
            fields=len(fields),
            enum_constants=len(enum_constants),
        )
        return DocumentModel(
            container_name=container_name,
            container_comment=clean_comment(container_comment),
            package_name=extract_package_name(full_text),
            file_path=file_path,
            methods=tuple(sorted(methods, key=lambda m: m.start_line)),
            fields=tuple(sorted(fields, key=lambda f: f.start_line)),
            enum_constants=tuple(sorted(enum_constants, key=lambda e: e.start_line)),
            authorship=await self._lookup_authorship(file_path, container_line),
            doc_author=doc_author,
            doc_since=doc_since,
        )

    def parse_method(
        self, lines: Sequence[str], leaf: LeafDeclaration, container_comment: str = ""
    ) -> MethodDoc:
        symbol = leaf.symbol
        start_line = _checked_line(lines, symbol.start_line)
        full_signature = extract_full_signature(
            lines, start_line, self._config.parser.max_signature_lines
        )
        raw_comment = find_member_comment(lines, start_line, container_comment)
        if raw_comment:
            description, tags = parse_doc_comment(raw_comment, full_signature)
        else:
            description, tags = "", TagTable()
        return MethodDoc(
            id=f"{symbol.name}_{start_line}",
            kind="constructor" if is_constructor(symbol) else "method",
            name=symbol.name,
            signature=symbol.detail or extract_display_signature(lines[start_line]),
            full_signature=full_signature,
            start_line=start_line,
            end_line=symbol.end_line,
            has_comment=bool(raw_comment),
            description=description,
            tags=tags,
            owner=leaf.owner,
            access_modifier=extract_access_modifier(full_signature),
        )

    def parse_field(
        self, lines: Sequence[str], leaf: LeafDeclaration, container_comment: str = ""
    ) -> FieldDoc:
        symbol = leaf.symbol
        start_line = _checked_line(lines, symbol.start_line)
        line_text = lines[start_line].strip()
        raw_comment = find_member_comment(lines, start_line, container_comment)
        return FieldDoc(
            name=symbol.name,
            type=symbol.detail or extract_field_type(line_text),
            signature=line_text,
            start_line=start_line,
            has_comment=bool(raw_comment),
            description=clean_comment(raw_comment) if raw_comment else "",
            is_constant=is_constant_declaration(line_text),
            access_modifier=extract_access_modifier(line_text),
            owner=leaf.owner,
        )

    def parse_enum_constant(
        self, lines: Sequence[str], leaf: LeafDeclaration, container_comment: str = ""
    ) -> EnumConstantDoc:
        symbol = leaf.symbol
        start_line = _checked_line(lines, symbol.start_line)
        line_text = lines[start_line].strip()
        raw_comment = find_member_comment(lines, start_line, container_comment)
        return EnumConstantDoc(
            name=symbol.name,
            start_line=start_line,
            has_comment=bool(raw_comment),
            description=clean_comment(raw_comment) if raw_comment else "",
            arguments=extract_enum_arguments(line_text),
            owner=leaf.owner,
        )

    def _collect(
        self,
        leaves: Sequence[LeafDeclaration],
        accepts: Callable[[DeclarationSymbol], bool],
        extract: Callable[[LeafDeclaration], _T],
    ) -> list[_T]:
        result: list[_T] = []
        for leaf in leaves:
            if not accepts(leaf.symbol):
                continue
            try:
                result.append(extract(leaf))
            except Exception as e:  # noqa: BLE001
                err = ExtractionError.declaration_failed(leaf.symbol.name, str(e))
                log.warning("declaration_dropped", owner=leaf.owner, **err.to_dict())
        return result

    async def _lookup_authorship(self, file_path: str, line: int) -> AuthorshipInfo | None:
        if self._authorship is None:
            return None
        try:
            if not await self._authorship.is_under_version_control(file_path):
                return None
            return await self._authorship.get_authorship_info(file_path, line)
        except Exception as e:  # noqa: BLE001
            log.warning("authorship_failed", path=file_path, error=str(e))
            return None


def _checked_line(lines: Sequence[str], line: int) -> int:
    if not 0 <= line < len(lines):
        raise ExtractionError.line_out_of_range(line, len(lines))
    return line
