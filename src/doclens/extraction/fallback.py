"""Text-only recovery of container information when no symbols are available.

Used when the symbol provider has nothing for a document (no language
support, or a file without a recognized type). Best effort: the result may
be the ``Unknown`` placeholder.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePath

from doclens.config.constants import UNKNOWN_NAME
from doclens.extraction.comments import find_doc_comment
from doclens.extraction.scanner import ScanState, scan_line

_TOP_LEVEL_TYPE = re.compile(
    r"^\s*(?:@[\w.]+(?:\([^)]*\))?\s+)*"
    r"(?:(?:public|protected|private|abstract|final|static|sealed|non-sealed|strictfp)\s+)*"
    r"(?:class|interface|enum|record|@interface)\s+([A-Za-z_$][\w$]*)\b"
)
_ANY_TYPE = re.compile(r"\b(?:class|interface|enum|record)\s+([A-Za-z_$][\w$]*)")
_PACKAGE = re.compile(r"package\s+([\w.]+);")


@dataclass(frozen=True, slots=True)
class PrimaryTypeInfo:
    name: str
    line: int
    comment: str


def extract_primary_type_info(text: str, file_path: str) -> PrimaryTypeInfo:
    """Find the file's primary top-level type from source text alone.

    Only declarations at brace depth 0 count, so nested types are never
    chosen. A type named after the file wins over the first one found.
    When unbalanced braces hide every top-level declaration, the first type
    keyword anywhere in code is used instead.
    """
    lines = text.split("\n")
    base_name = PurePath(file_path).stem
    state = ScanState()
    depth = 0
    code_lines: list[str] = []
    first: tuple[str, int] | None = None
    chosen: tuple[str, int] | None = None

    for index, line in enumerate(lines):
        scan = scan_line(line, state)
        state = scan.state
        code_lines.append(scan.code)
        if depth == 0:
            match = _TOP_LEVEL_TYPE.match(scan.code)
            if match:
                first = first or (match.group(1), index)
                if match.group(1) == base_name:
                    chosen = (match.group(1), index)
                    break
        depth += scan.brace_delta

    chosen = chosen or first or _first_type_anywhere(code_lines)
    if chosen is None:
        return PrimaryTypeInfo(UNKNOWN_NAME, 0, find_doc_comment(lines, 0))
    name, line_no = chosen
    return PrimaryTypeInfo(name, line_no, find_doc_comment(lines, line_no))


def _first_type_anywhere(code_lines: list[str]) -> tuple[str, int] | None:
    for index, code in enumerate(code_lines):
        name = extract_class_name_from_text(code)
        if name != UNKNOWN_NAME:
            return name, index
    return None


def extract_class_name_from_text(text: str) -> str:
    match = _ANY_TYPE.search(text)
    return match.group(1) if match else UNKNOWN_NAME


def extract_package_name(text: str) -> str:
    match = _PACKAGE.search(text)
    return match.group(1) if match else ""
