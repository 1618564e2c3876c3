"""End-to-end tests for DocumentParser."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from doclens.config.models import DocLensConfig, GitConfig, ParserConfig
from doclens.extraction.parser import DocumentParser, document_path, find_container_symbol
from doclens.models import AuthorshipInfo
from doclens.symbols.models import DeclarationSymbol, Position, Range, SymbolKind
from doclens.symbols.providers import StaticSymbolProvider
from doclens.symbols.resolver import SymbolResolver

DOCUMENT_ID = "file:///repo/src/com/example/UserService.java"

SOURCE = """\
package com.example;

/**
 * Manages users.
 * @author jane
 * @since 1.0
 */
@Slf4j
public class UserService {

    /** Maximum page size. */
    public static final int MAX_PAGE = 50;

    private final UserRepository repository;

    /**
     * Creates the service.
     * @param repository backing store
     * @return ignored for constructors
     */
    public UserService(UserRepository repository) {
        this.repository = repository;
    }

    /**
     * Finds a user.
     *
     * @param id the user id
     * @return the user
     * @throws NotFoundException when absent
     */
    @Transactional(readOnly = true)
    public User findById(
            Long id) throws NotFoundException {
        return repository.find(id);
    }

    enum Status {
        /** Everything fine. */
        OK(200, "OK"),
        PENDING;
    }
}
"""


def _range(start: int, end: int) -> dict[str, Any]:
    return {"start": {"line": start, "character": 0}, "end": {"line": end, "character": 1}}


def _node(
    name: str,
    kind: SymbolKind,
    start: int,
    end: int,
    children: list[dict[str, Any]] | None = None,
    detail: str = "",
) -> dict[str, Any]:
    return {
        "name": name,
        "kind": int(kind),
        "detail": detail,
        "range": _range(start, end),
        "selectionRange": _range(start, start),
        "children": children or [],
    }


SYMBOLS = [
    _node(
        "UserService",
        SymbolKind.CLASS,
        8,
        42,
        [
            # Generated by Lombok, reported on the class line
            _node("log", SymbolKind.FIELD, 8, 8, detail="Logger"),
            _node("MAX_PAGE", SymbolKind.CONSTANT, 11, 11),
            _node("repository", SymbolKind.FIELD, 13, 13),
            # Deliberately listed before the constructor
            _node("findById", SymbolKind.METHOD, 32, 35),
            _node("UserService", SymbolKind.CONSTRUCTOR, 20, 22),
            _node(
                "Status",
                SymbolKind.ENUM,
                37,
                41,
                [
                    _node("OK", SymbolKind.ENUM_MEMBER, 39, 39),
                    _node("PENDING", SymbolKind.ENUM_MEMBER, 40, 40),
                ],
            ),
        ],
    )
]


class FakeAuthorship:
    def __init__(self, *, tracked: bool = True, fail: bool = False) -> None:
        self.tracked = tracked
        self.fail = fail
        self.lines: list[int] = []

    async def is_under_version_control(self, file_path: Path | str) -> bool:
        return self.tracked

    async def get_authorship_info(self, file_path: Path | str, line: int) -> AuthorshipInfo | None:
        if self.fail:
            raise RuntimeError("blame failed")
        self.lines.append(line)
        return AuthorshipInfo("jane", "joe", "2024-05-01")


def _parser(raw: Any = SYMBOLS, **kwargs: Any) -> DocumentParser:
    provider = StaticSymbolProvider()
    provider.set_symbols(DOCUMENT_ID, raw, version=1)
    return DocumentParser(SymbolResolver(provider), **kwargs)


class TestDocumentParser:
    """Full parse of a symbol-backed document."""

    @pytest.mark.asyncio
    async def test_container_information(self) -> None:
        model = await _parser().parse(DOCUMENT_ID, SOURCE)

        assert model.container_name == "UserService"
        assert model.package_name == "com.example"
        assert model.file_path == "/repo/src/com/example/UserService.java"
        assert model.container_comment.startswith("Manages users.")
        assert (model.doc_author, model.doc_since) == ("jane", "1.0")
        assert model.authorship is None

    @pytest.mark.asyncio
    async def test_methods_sorted_with_tags(self) -> None:
        model = await _parser().parse(DOCUMENT_ID, SOURCE)

        constructor, find = model.methods
        assert constructor.kind == "constructor"
        assert constructor.id == "UserService_20"
        assert constructor.tags.returns is None
        assert constructor.tags.params[0].type == "UserRepository"

        assert find.name == "findById"
        assert find.kind == "method"
        assert find.signature == "public User findById("
        assert find.full_signature == "public User findById( Long id)"
        assert (find.start_line, find.end_line) == (32, 35)
        assert find.owner == "UserService"
        assert find.access_modifier == "public"
        assert find.has_comment
        assert find.description == "Finds a user."
        assert find.tags.params[0].type == "Long"
        assert find.tags.returns is not None and find.tags.returns.type == "User"
        assert find.tags.throws[0].type == "NotFoundException"

    @pytest.mark.asyncio
    async def test_fields_and_generated_member_dedup(self) -> None:
        model = await _parser().parse(DOCUMENT_ID, SOURCE)

        log_field, max_page, repository = model.fields
        assert log_field.name == "log"
        assert log_field.type == "Logger"
        assert not log_field.has_comment
        assert log_field.description == ""

        assert max_page.is_constant
        assert max_page.type == "int"
        assert max_page.description == "Maximum page size."
        assert max_page.access_modifier == "public"

        assert repository.type == "UserRepository"
        assert not repository.is_constant
        assert repository.access_modifier == "private"

    @pytest.mark.asyncio
    async def test_enum_constants(self) -> None:
        model = await _parser().parse(DOCUMENT_ID, SOURCE)

        ok, pending = model.enum_constants
        assert ok.arguments == '(200, "OK")'
        assert ok.description == "Everything fine."
        assert ok.owner == "UserService.Status"
        assert pending.arguments == ""
        assert not pending.has_comment

    @pytest.mark.asyncio
    async def test_broken_declaration_is_dropped(self) -> None:
        """A symbol pointing past the end of the text drops only itself."""
        raw = [
            _node(
                "UserService",
                SymbolKind.CLASS,
                8,
                42,
                [
                    _node("ghost", SymbolKind.METHOD, 500, 510),
                    _node("findById", SymbolKind.METHOD, 32, 35),
                    _node("inverted", SymbolKind.METHOD, 32, 10),
                ],
            )
        ]

        model = await _parser(raw).parse(DOCUMENT_ID, SOURCE)

        assert [m.name for m in model.methods] == ["findById"]

    @pytest.mark.asyncio
    async def test_signature_cap_from_config(self) -> None:
        config = DocLensConfig(parser=ParserConfig(max_signature_lines=1))

        model = await _parser(config=config).parse(DOCUMENT_ID, SOURCE)

        find = next(m for m in model.methods if m.name == "findById")
        assert find.full_signature == "public User findById("


class TestFallbackPath:
    """No symbols: container recovered from text."""

    @pytest.mark.asyncio
    async def test_provider_without_symbols(self) -> None:
        model = await _parser([]).parse(DOCUMENT_ID, SOURCE)

        assert model.container_name == "UserService"
        assert model.container_comment.startswith("Manages users.")
        assert model.methods == ()
        assert model.fields == ()

    @pytest.mark.asyncio
    async def test_malformed_symbols_fall_back(self) -> None:
        model = await _parser({"bogus": 1}).parse(DOCUMENT_ID, SOURCE)
        assert model.container_name == "UserService"

    @pytest.mark.asyncio
    async def test_no_type_at_all(self) -> None:
        model = await _parser([]).parse("Empty.java", "// nothing\n")

        assert model.container_name == "Unknown"
        assert model.container_comment == ""


class TestAuthorship:
    """Revision metadata is optional and never fatal."""

    @pytest.mark.asyncio
    async def test_attached_for_container_line(self) -> None:
        authorship = FakeAuthorship()

        model = await _parser(authorship=authorship).parse(DOCUMENT_ID, SOURCE)

        assert model.authorship == AuthorshipInfo("jane", "joe", "2024-05-01")
        assert authorship.lines == [8]

    @pytest.mark.asyncio
    async def test_untracked_file(self) -> None:
        model = await _parser(authorship=FakeAuthorship(tracked=False)).parse(DOCUMENT_ID, SOURCE)
        assert model.authorship is None

    @pytest.mark.asyncio
    async def test_failure_yields_none(self) -> None:
        model = await _parser(authorship=FakeAuthorship(fail=True)).parse(DOCUMENT_ID, SOURCE)

        assert model.authorship is None
        assert len(model.methods) == 2

    @pytest.mark.asyncio
    async def test_disabled_by_config(self) -> None:
        authorship = FakeAuthorship()
        config = DocLensConfig(git=GitConfig(enabled=False))

        model = await _parser(authorship=authorship, config=config).parse(DOCUMENT_ID, SOURCE)

        assert model.authorship is None
        assert authorship.lines == []


class TestHelpers:
    def test_document_path(self) -> None:
        assert document_path("file:///repo/My%20Dir/A.java") == "/repo/My Dir/A.java"
        assert document_path("/repo/A.java") == "/repo/A.java"

    def test_find_container_symbol_prefers_file_name(self) -> None:
        r = Range(Position(0, 0), Position(1, 0))
        first = DeclarationSymbol("Helper", SymbolKind.CLASS, r, r)
        named = DeclarationSymbol("Main", SymbolKind.INTERFACE, r, r)

        assert find_container_symbol([first, named], "/x/Main.java") is named
        assert find_container_symbol([first, named], "/x/Other.java") is first
        assert find_container_symbol([], "/x/Main.java") is None

    @pytest.mark.asyncio
    async def test_invalidate_forwards_to_resolver(self) -> None:
        parser = _parser()
        await parser.parse(DOCUMENT_ID, SOURCE)
        assert parser.resolver.cache_size == 1

        parser.invalidate(DOCUMENT_ID)

        assert parser.resolver.cache_size == 0
