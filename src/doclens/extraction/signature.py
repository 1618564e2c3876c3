"""Signature recovery and signature-derived type information.

Signatures are recovered from the scanner's code projection, then parsed as
plain text such as ``public <T> List<T> load(@NotNull final String id, int[] ids)``:
no grammar, only depth counting over ``()`` and ``<>``.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from doclens.config.constants import MAX_SIGNATURE_LINES, VOID_TYPE
from doclens.extraction.scanner import ScanState, scan_line
from doclens.models import AccessModifier

# Modifiers ignored in front of a parameter declaration
PARAM_MODIFIERS = frozenset({"final"})

_METHOD_MODIFIER_PREFIX = re.compile(
    r"^\s*(?:(?:public|private|protected|static|final|abstract|synchronized"
    r"|default|native|strictfp)\s+)*"
)
# "<ReturnType> <methodName>("
_RETURN_TYPE_PATTERN = re.compile(r"^([A-Za-z_$][\w$<>\[\].?,\s]*?)\s+[A-Za-z_$][\w$]*\s*\(")
_TYPE_THEN_NAME = re.compile(r"^[A-Za-z_$][\w$<>\[\].?,\s]*\s+[A-Za-z_$][\w$]*\s*\(")
_WHITESPACE = re.compile(r"\s+")
_ANNOTATION_NAME_CHAR = re.compile(r"[\w.]")


def extract_full_signature(
    lines: Sequence[str], start_line: int, max_lines: int = MAX_SIGNATURE_LINES
) -> str:
    """Accumulate a declaration signature that may span several lines.

    Only the scanner's code projection of each line is kept, so comments and
    string literals never count toward paren depth. Stops when depth first
    returns to zero after an opening ``(``, or after ``max_lines`` lines.
    Whitespace is collapsed.
    """
    parts: list[str] = []
    state = ScanState()
    depth = 0
    seen_open = False
    for line in lines[start_line : start_line + max_lines]:
        scan = scan_line(line, state)
        state = scan.state
        parts.append(scan.code)
        seen_open = seen_open or scan.open_parens > 0
        depth += scan.paren_delta
        if seen_open and depth <= 0:
            return _cut_after_parameters(_collapse(" ".join(parts)))
    return _collapse(" ".join(parts))


def extract_display_signature(line: str) -> str:
    """Declaration text of one line without a same-line body."""
    without_body = re.sub(r"\{.*$", "", line).strip()
    return without_body or line


def extract_access_modifier(text: str) -> AccessModifier:
    if "public " in text:
        return "public"
    if "protected " in text:
        return "protected"
    if "private " in text:
        return "private"
    return "default"


def find_matching_index(text: str, start: int, open_token: str, close_token: str) -> int:
    """Index of the token closing the one at ``start``, or -1 if unmatched."""
    depth = 0
    for index in range(start, len(text)):
        ch = text[index]
        if ch == open_token:
            depth += 1
        elif ch == close_token:
            depth -= 1
            if depth == 0:
                return index
    return -1


def extract_paren_content(signature: str) -> str | None:
    """Text inside the first top-level ``(...)``.

    A truncated signature yields everything after the ``(``.
    """
    open_paren = signature.find("(")
    if open_paren < 0:
        return None
    close_paren = find_matching_index(signature, open_paren, "(", ")")
    if close_paren < 0:
        content = signature[open_paren + 1 :].strip()
    else:
        content = signature[open_paren + 1 : close_paren].strip()
    return content or None


def split_top_level_commas(text: str) -> list[str]:
    """Split on commas outside ``<>`` and ``()``.

    ``"Map<String, List<Integer>>, int[]"`` -> ``["Map<String, List<Integer>>", " int[]"]``
    """
    result: list[str] = []
    current: list[str] = []
    angle_depth = paren_depth = 0
    for ch in text:
        if ch == "<":
            angle_depth += 1
        elif ch == ">":
            angle_depth = max(0, angle_depth - 1)
        elif ch == "(":
            paren_depth += 1
        elif ch == ")":
            paren_depth = max(0, paren_depth - 1)
        elif ch == "," and angle_depth == 0 and paren_depth == 0:
            result.append("".join(current))
            current = []
            continue
        current.append(ch)
    tail = "".join(current)
    if tail.strip():
        result.append(tail)
    return result


def strip_leading_annotation(text: str) -> str:
    """Drop one leading ``@Name`` or ``@Name(args)`` token."""
    index = 1
    while index < len(text) and _ANNOTATION_NAME_CHAR.match(text[index]):
        index += 1
    while index < len(text) and text[index].isspace():
        index += 1
    if index < len(text) and text[index] == "(":
        close_paren = find_matching_index(text, index, "(", ")")
        if close_paren < 0:
            return ""
        return text[close_paren + 1 :]
    return text[index:]


def strip_annotations_and_modifiers(declaration: str) -> str:
    """``"@NotNull final String name"`` -> ``"String name"``."""
    remaining = declaration
    while remaining:
        trimmed = remaining.lstrip()
        if trimmed.startswith("@"):
            remaining = strip_leading_annotation(trimmed)
            continue
        for modifier in PARAM_MODIFIERS:
            rest = trimmed[len(modifier) :]
            if trimmed.startswith(modifier) and (not rest or rest[0].isspace()):
                remaining = rest
                break
        else:
            return trimmed
    return remaining


def parse_signature_params(signature: str) -> dict[str, str]:
    """Map parameter name -> declared type."""
    result: dict[str, str] = {}
    params_text = extract_paren_content(signature)
    if not params_text:
        return result

    for declaration in split_top_level_commas(params_text):
        cleaned = strip_annotations_and_modifiers(declaration.strip())
        type_text, sep, name = cleaned.rpartition(" ")
        if not sep:
            continue
        type_text, name = type_text.strip(), name.strip()
        if type_text and name:
            result[name] = type_text
    return result


def remove_method_generic_declaration(signature: str) -> str:
    """``"public <T> T convert(...)"`` -> ``"public T convert(...)"``."""
    open_angle = signature.find("<")
    open_paren = signature.find("(")
    if open_angle < 0 or open_paren < 0 or open_angle > open_paren:
        return signature

    close_angle = find_matching_index(signature, open_angle, "<", ">")
    if close_angle < 0:
        return signature

    after_generic = signature[close_angle + 1 :].lstrip()
    # Only a declaration of the form "<T> Type name(" is a method generic.
    if _TYPE_THEN_NAME.match(after_generic):
        return signature[:open_angle] + after_generic
    return signature


def parse_return_type(signature: str) -> str:
    """Return type of a method signature; ``VOID_TYPE`` for constructors."""
    clean = re.sub(r"\{.*$", "", signature, flags=re.DOTALL).strip()
    without_generic = remove_method_generic_declaration(clean)
    without_modifiers = _METHOD_MODIFIER_PREFIX.sub("", without_generic, count=1)
    match = _RETURN_TYPE_PATTERN.match(without_modifiers)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return VOID_TYPE


def _cut_after_parameters(code: str) -> str:
    close_paren = find_matching_index(code, code.find("("), "(", ")")
    return code if close_paren < 0 else code[: close_paren + 1]


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()
