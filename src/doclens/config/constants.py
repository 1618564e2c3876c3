"""Extraction constants.

This module contains values that should NOT be user-configurable: sentinels
consumers compare against and bounds the extraction heuristics rely on.

For configurable values, see models.py (CacheConfig, ParserConfig, etc.).
"""

# =============================================================================
# Heuristic Bounds
# =============================================================================

MAX_SIGNATURE_LINES = 15
"""Maximum lines scanned when recovering a multi-line declaration signature."""

DEFAULT_CACHE_ENTRIES = 128
"""Default symbol cache capacity (documents)."""

# =============================================================================
# Sentinels
# =============================================================================

UNKNOWN_OWNER = "Unknown"
"""Owner path for leaf declarations found outside any container."""

UNKNOWN_NAME = "Unknown"
"""Container name when neither symbols nor text yield one."""

UNKNOWN_TYPE = "unknown"
"""Parameter or field type that could not be recovered."""

TYPE_PARAMETER = "type-parameter"
"""Pseudo-type for generic parameters documented as ``@param <T>``."""

VOID_TYPE = "void"
"""Return type of void methods and constructors."""

UNTRACKED_VERSION = "untracked"
"""In-flight key suffix for documents without a known open version."""
