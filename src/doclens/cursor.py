"""Map a cursor line to the method whose span contains it."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Sequence

from doclens.models import MethodDoc


def locate_enclosing_declaration(methods: Sequence[MethodDoc], line: int) -> MethodDoc | None:
    """Method whose ``[start_line, end_line]`` contains ``line``, or None.

    ``methods`` must be sorted by ``start_line`` (as ``DocumentModel.methods``
    is). Among overlapping spans the one starting last before ``line`` wins.
    """
    if not methods or line < methods[0].start_line or line > methods[-1].end_line:
        return None
    index = bisect_right(methods, line, key=lambda m: m.start_line) - 1
    if index < 0:
        return None
    candidate = methods[index]
    return candidate if line <= candidate.end_line else None
