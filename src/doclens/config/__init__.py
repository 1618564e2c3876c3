"""Config module exports."""

from doclens.config.loader import load_config
from doclens.config.models import (
    CacheConfig,
    DocLensConfig,
    GitConfig,
    LoggingConfig,
    ParserConfig,
)

__all__ = [
    "load_config",
    "DocLensConfig",
    "CacheConfig",
    "GitConfig",
    "LoggingConfig",
    "ParserConfig",
]
