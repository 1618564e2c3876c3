"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (DOCLENS__SECTION__KEY)
3. Repo YAML (.doclens/config.yaml)
4. Global YAML (~/.config/doclens/config.yaml)
5. Built-in defaults (this file)

Examples:
    DOCLENS__LOGGING__LEVEL=DEBUG
    DOCLENS__CACHE__MAX_ENTRIES=256
    DOCLENS__GIT__ENABLED=false
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from doclens.config.constants import DEFAULT_CACHE_ENTRIES, MAX_SIGNATURE_LINES

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        DOCLENS__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every dropped declaration and cache hit.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class CacheConfig(BaseModel):
    """Symbol cache configuration.

    Env vars:
        DOCLENS__CACHE__MAX_ENTRIES: Documents kept in the symbol LRU
    """

    max_entries: int = Field(
        default=DEFAULT_CACHE_ENTRIES,
        description="Documents whose symbol trees are cached (strict LRU). "
        "TRADEOFF: Higher values keep more trees alive across a long session.",
    )

    @field_validator("max_entries")
    @classmethod
    def validate_max_entries(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_entries must be at least 1, got {v}")
        return v


class ParserConfig(BaseModel):
    """Extraction heuristics configuration.

    Env vars:
        DOCLENS__PARSER__MAX_SIGNATURE_LINES: Line cap for multi-line signatures
    """

    max_signature_lines: int = Field(
        default=MAX_SIGNATURE_LINES,
        description="Lines scanned when recovering a multi-line signature. "
        "Annotated controller methods rarely exceed 10.",
    )

    @field_validator("max_signature_lines")
    @classmethod
    def validate_max_signature_lines(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_signature_lines must be at least 1, got {v}")
        return v


class GitConfig(BaseModel):
    """Authorship metadata configuration.

    Env vars:
        DOCLENS__GIT__ENABLED: Look up blame-based authorship
    """

    enabled: bool = Field(
        default=True,
        description="Attach blame-based authorship to parsed documents.",
    )


class DocLensConfig(BaseModel):
    """Root configuration for doclens."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    git: GitConfig = Field(default_factory=GitConfig)
