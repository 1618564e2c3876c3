"""Signature-free extraction for fields and enum constants.

Neither grammar fits the method path: fields have no parameter list, and
enum constants carry constructor arguments instead of a signature.
"""

from __future__ import annotations

import re

from doclens.config.constants import UNKNOWN_TYPE
from doclens.extraction.signature import find_matching_index

_TRAILING_SEPARATOR = re.compile(r"[,;]\s*$")


def is_constant_declaration(line: str) -> bool:
    """``static final`` data members are constants."""
    return "static" in line and "final" in line


def extract_field_type(line: str) -> str:
    """``"private static final int MAX_SIZE = 100;"`` -> ``"int"``."""
    declaration = line.split("=", 1)[0].strip().removesuffix(";").strip()
    parts = declaration.split()
    if len(parts) >= 2:
        return parts[-2]
    return UNKNOWN_TYPE


def extract_enum_arguments(line: str) -> str:
    """Balanced constructor-argument text of an enum constant line.

    ``'SUCCESS(200, "OK"),'`` -> ``'(200, "OK")'``; ``"PENDING,"`` -> ``""``.
    An unclosed argument list runs to the end of the line.
    """
    open_index = line.find("(")
    if open_index < 0:
        return ""
    close_index = find_matching_index(line, open_index, "(", ")")
    if close_index < 0:
        return _TRAILING_SEPARATOR.sub("", line[open_index:])
    return line[open_index : close_index + 1]
