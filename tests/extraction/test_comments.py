"""Tests for documentation comment location and cleaning."""

from __future__ import annotations

from doclens.extraction.comments import (
    clean_comment,
    find_doc_comment,
    find_member_comment,
    is_annotation_gap,
    parse_container_tags,
    parse_doc_comment,
    split_description,
)


def _lines(text: str) -> list[str]:
    return text.split("\n")


class TestFindDocComment:
    """Upward search from a declaration line."""

    def test_directly_above(self) -> None:
        lines = _lines("/**\n * Runs it.\n */\npublic void run() {}")

        assert find_doc_comment(lines, 3) == "/**\n * Runs it.\n */"

    def test_single_line_comment_block(self) -> None:
        lines = _lines("/** Size. */\nint size();")
        assert find_doc_comment(lines, 1) == "/** Size. */"

    def test_blank_lines_and_annotations_are_skipped(self) -> None:
        lines = _lines(
            "/**\n"
            " * Handles GET.\n"
            " */\n"
            "\n"
            "@GetMapping(\n"
            '    value = "/users",\n'
            '    produces = "application/json")\n'
            "@ResponseBody\n"
            "public List<User> list() {"
        )

        assert find_doc_comment(lines, 8).startswith("/**\n * Handles GET.")

    def test_code_between_comment_and_declaration(self) -> None:
        lines = _lines("/** Belongs to a. */\nint a;\nint b;")

        assert find_doc_comment(lines, 2) == ""

    def test_semicolon_only_gap_means_no_comment(self) -> None:
        lines = _lines("/** Stray. */\n;\nvoid run() {}")

        assert find_doc_comment(lines, 2) == ""

    def test_plain_block_comment_is_not_documentation(self) -> None:
        lines = _lines("/* just a note */\nvoid run() {}")

        assert find_doc_comment(lines, 1) == ""

    def test_plain_multi_line_block_does_not_chain_to_earlier_doc(self) -> None:
        lines = _lines(
            "/** Class doc. */\n"
            "class A {\n"
            "  /*\n"
            "   * implementation note\n"
            "   */\n"
            "  void run() {}"
        )

        assert find_doc_comment(lines, 5) == ""

    def test_no_comment_at_top_of_file(self) -> None:
        assert find_doc_comment(_lines("void run() {}"), 0) == ""

    def test_unterminated_opening_is_abandoned(self) -> None:
        lines = _lines("   doc text */\nvoid run() {}")
        assert find_doc_comment(lines, 1) == ""


class TestAnnotationGap:
    def test_empty_gap(self) -> None:
        assert is_annotation_gap([])

    def test_blank_and_annotations(self) -> None:
        assert is_annotation_gap(["", "   ", "@Override", "@SuppressWarnings(\"unchecked\")"])

    def test_multi_line_annotation_arguments(self) -> None:
        assert is_annotation_gap(["@Operation(", '  summary = "x",', "  tags = {\"a\"})"])

    def test_code_line_breaks_gap(self) -> None:
        assert not is_annotation_gap(["@Override", "int x = 1;"])


class TestFindMemberComment:
    def test_identical_container_comment_is_discarded(self) -> None:
        """A generated member reported on the container line must not inherit its comment."""
        lines = _lines("/** The service. */\n@Slf4j\npublic class Service {")
        container_comment = find_doc_comment(lines, 2)

        assert find_member_comment(lines, 2, container_comment) == ""

    def test_own_comment_is_kept(self) -> None:
        lines = _lines("/** The service. */\nclass S {\n  /** Count. */\n  int count;")
        container_comment = find_doc_comment(lines, 1)

        assert find_member_comment(lines, 3, container_comment) == "  /** Count. */"


class TestCleanAndSplit:
    def test_clean_comment_strips_decoration(self) -> None:
        raw = "/**\r\n * First line.\r\n *\r\n *   indented\r\n */"

        assert clean_comment(raw) == "First line.\n\n  indented"

    def test_clean_comment_collapses_blank_runs(self) -> None:
        raw = "/**\n * a\n *\n *\n *\n * b\n */"
        assert clean_comment(raw) == "a\n\nb"

    def test_split_without_tags(self) -> None:
        assert split_description("Only prose.") == ("Only prose.", "")

    def test_split_at_first_line_leading_tag(self) -> None:
        description, raw_tags = split_description("Loads it.\n\n@param id the id\n@return it")

        assert description == "Loads it."
        assert raw_tags == "@param id the id\n@return it"

    def test_parse_doc_comment(self) -> None:
        raw = "/**\n * Finds a user.\n *\n * @param id the id\n * @return the user\n */"

        description, tags = parse_doc_comment(raw, "public User find(Long id)")

        assert description == "Finds a user."
        assert tags.params[0].type == "Long"
        assert tags.returns is not None and tags.returns.type == "User"


class TestContainerTags:
    def test_author_and_since(self) -> None:
        comment = "/**\n * User service.\n * @author xiaowu\n * @since 2024-01-01\n */"

        assert parse_container_tags(comment) == ("xiaowu", "2024-01-01")

    def test_missing_tags(self) -> None:
        assert parse_container_tags("/** Plain. */") == (None, None)
        assert parse_container_tags("") == (None, None)
