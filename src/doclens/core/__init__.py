"""Core module exports."""

from doclens.core.errors import (
    ConfigError,
    DocLensError,
    ErrorCode,
    ExtractionError,
    SymbolError,
)
from doclens.core.logging import (
    configure_logging,
    parse_scope,
)

__all__ = [
    # Errors
    "DocLensError",
    "ConfigError",
    "ErrorCode",
    "ExtractionError",
    "SymbolError",
    # Logging
    "configure_logging",
    "parse_scope",
]
