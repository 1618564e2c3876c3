"""Single-pass lexical scanner for C-family source lines.

Classifies each character as code, line comment, block comment, string
literal or char literal, carrying block-comment / literal state across lines.
Callers only see the aggregate result: the code-only projection of a line
and its brace and paren counts.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ScanState:
    """Lexical context carried from one line to the next."""

    in_block_comment: bool = False
    in_string: bool = False
    in_char: bool = False


@dataclass(frozen=True, slots=True)
class LineScan:
    """Result of scanning one line."""

    code: str
    open_braces: int
    close_braces: int
    open_parens: int
    close_parens: int
    state: ScanState

    @property
    def brace_delta(self) -> int:
        return self.open_braces - self.close_braces

    @property
    def paren_delta(self) -> int:
        return self.open_parens - self.close_parens


def scan_line(line: str, state: ScanState | None = None) -> LineScan:
    """Project ``line`` onto its code-only characters.

    Comments and literal contents (quotes included) are dropped; braces and
    parens are counted only in code.
    """
    state = state or ScanState()
    in_block = state.in_block_comment
    in_string = state.in_string
    in_char = state.in_char
    escaped = False

    code: list[str] = []
    open_braces = close_braces = open_parens = close_parens = 0

    i = 0
    length = len(line)
    while i < length:
        ch = line[i]
        nxt = line[i + 1] if i + 1 < length else ""

        if in_block:
            if ch == "*" and nxt == "/":
                in_block = False
                i += 1
        elif in_string or in_char:
            quote = '"' if in_string else "'"
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                in_string = in_char = False
        elif ch == "/" and nxt == "/":
            break
        elif ch == "/" and nxt == "*":
            in_block = True
            i += 1
        elif ch == '"':
            in_string = True
        elif ch == "'":
            in_char = True
        else:
            if ch == "{":
                open_braces += 1
            elif ch == "}":
                close_braces += 1
            elif ch == "(":
                open_parens += 1
            elif ch == ")":
                close_parens += 1
            code.append(ch)
        i += 1

    return LineScan(
        code="".join(code),
        open_braces=open_braces,
        close_braces=close_braces,
        open_parens=open_parens,
        close_parens=close_parens,
        state=ScanState(in_block, in_string, in_char),
    )
