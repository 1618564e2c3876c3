"""Tests for the structural line scanner."""

import pytest

from doclens.extraction.scanner import ScanState, scan_line


class TestScanLine:
    """Code projection and counts for a single line."""

    def test_plain_code(self) -> None:
        scan = scan_line("public void run() {")

        assert scan.code == "public void run() {"
        assert (scan.open_braces, scan.close_braces) == (1, 0)
        assert (scan.open_parens, scan.close_parens) == (1, 1)
        assert scan.state == ScanState()

    def test_line_comment_ends_code(self) -> None:
        scan = scan_line("int x = 1; // { not a brace")

        assert scan.code == "int x = 1; "
        assert scan.brace_delta == 0

    def test_braces_inside_strings_and_chars_are_ignored(self) -> None:
        scan = scan_line('String s = "{(}"; char c = \'{\';')

        assert scan.brace_delta == 0
        assert scan.paren_delta == 0
        assert "{" not in scan.code

    def test_escaped_quote_does_not_close_string(self) -> None:
        scan = scan_line(r'String s = "a\"{"; {')

        assert scan.open_braces == 1
        assert scan.state == ScanState()

    def test_inline_block_comment(self) -> None:
        scan = scan_line("class A /* { */ {")

        assert scan.open_braces == 1
        assert scan.code == "class A  {"

    @pytest.mark.parametrize(
        ("line", "in_block"),
        [("int a; /* start", True), ("/** doc", True), ("/* closed */ int b;", False)],
    )
    def test_block_comment_state_carries(self, line: str, in_block: bool) -> None:
        assert scan_line(line).state.in_block_comment is in_block


class TestMultiLineState:
    """State threaded across lines."""

    def test_block_comment_spanning_lines(self) -> None:
        lines = ["/* opening {", " * still comment }", " */ class A {"]
        state = ScanState()
        depth = 0
        codes = []
        for line in lines:
            scan = scan_line(line, state)
            state = scan.state
            depth += scan.brace_delta
            codes.append(scan.code)

        assert depth == 1
        assert codes[0] == "" and codes[1] == ""
        assert codes[2].strip() == "class A {"

    def test_default_state_is_code(self) -> None:
        assert scan_line("{", None).open_braces == 1
