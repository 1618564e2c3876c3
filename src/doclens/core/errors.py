"""doclens error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Symbols
- 4xxx: Extraction
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Symbols (3xxx)
    SYMBOL_MALFORMED = 3001
    SYMBOL_PROVIDER_FAILED = 3002

    # Extraction (4xxx)
    LINE_OUT_OF_RANGE = 4001
    DECLARATION_FAILED = 4002


@dataclass(frozen=True, slots=True)
class DocLensError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'SYMBOL_MALFORMED')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(DocLensError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class SymbolError(DocLensError):
    """Errors raised while reading declaration symbols from a provider."""

    @classmethod
    def malformed(cls, what: str, value: Any) -> "SymbolError":
        return cls(
            code=ErrorCode.SYMBOL_MALFORMED,
            message=f"Malformed {what}: {value!r}",
            details={"what": what},
        )

    @classmethod
    def provider_failed(cls, document_id: str, reason: str) -> "SymbolError":
        return cls(
            code=ErrorCode.SYMBOL_PROVIDER_FAILED,
            message=f"Symbol provider failed for {document_id}: {reason}",
            details={"document_id": document_id, "reason": reason},
        )


class ExtractionError(DocLensError):
    """Errors raised while extracting one declaration's documentation."""

    @classmethod
    def line_out_of_range(cls, line: int, line_count: int) -> "ExtractionError":
        return cls(
            code=ErrorCode.LINE_OUT_OF_RANGE,
            message=f"Line {line} is outside the document ({line_count} lines)",
            details={"line": line, "line_count": line_count},
        )

    @classmethod
    def declaration_failed(cls, name: str, reason: str) -> "ExtractionError":
        return cls(
            code=ErrorCode.DECLARATION_FAILED,
            message=f"Failed to extract '{name}': {reason}",
            details={"declaration": name, "reason": reason},
        )

