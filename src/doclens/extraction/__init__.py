"""Documentation extraction: scanning, comment location, tag parsing."""

from doclens.extraction.comments import (
    CommentSearchState,
    clean_comment,
    find_doc_comment,
    find_member_comment,
    parse_doc_comment,
)
from doclens.extraction.flatten import LeafDeclaration, flatten_symbols
from doclens.extraction.parser import AuthorshipProvider, DocumentParser, document_path
from doclens.extraction.scanner import LineScan, ScanState, scan_line
from doclens.extraction.tags import parse_tag_table

__all__ = [
    "DocumentParser",
    "AuthorshipProvider",
    "document_path",
    # Building blocks
    "CommentSearchState",
    "LeafDeclaration",
    "LineScan",
    "ScanState",
    "clean_comment",
    "find_doc_comment",
    "find_member_comment",
    "flatten_symbols",
    "parse_doc_comment",
    "parse_tag_table",
    "scan_line",
]
