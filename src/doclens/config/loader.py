"""Configuration loading with pydantic-settings.

Each YAML file is its own settings source, so pydantic-settings layers them
(nested sections merge key by key). First listed wins:

1. Direct kwargs to load_config()
2. Environment variables (DOCLENS__SECTION__KEY)
3. Repo config (<root>/.doclens/config.yaml)
4. Global config (~/.config/doclens/config.yaml)
5. Built-in defaults
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from doclens.config.models import (
    CacheConfig,
    DocLensConfig,
    GitConfig,
    LoggingConfig,
    ParserConfig,
)
from doclens.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/doclens/config.yaml").expanduser()
REPO_CONFIG_RELPATH = Path(".doclens") / "config.yaml"

# YAML files consulted by the settings class being built, highest precedence first
_yaml_files: ContextVar[tuple[Path, ...]] = ContextVar("yaml_files", default=())


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


class YamlFileSource(PydanticBaseSettingsSource):
    """Settings read from one YAML file; a missing file contributes nothing."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path) -> None:
        super().__init__(settings_cls)
        self.path = path
        self._data = _load_yaml(path)

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        value = self._data.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return {k: v for k, v in self._data.items() if k in self.settings_cls.model_fields}

    def __repr__(self) -> str:
        return f"YamlFileSource(path={self.path!s})"


class DocLensSettings(BaseSettings):
    """Root config. Env vars: DOCLENS__CACHE__MAX_ENTRIES, DOCLENS__GIT__ENABLED, etc."""

    model_config = SettingsConfigDict(
        env_prefix="DOCLENS__",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    logging: LoggingConfig = LoggingConfig()
    cache: CacheConfig = CacheConfig()
    parser: ParserConfig = ParserConfig()
    git: GitConfig = GitConfig()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        yaml_sources = (YamlFileSource(settings_cls, path) for path in _yaml_files.get())
        return (init_settings, env_settings, *yaml_sources)


@contextmanager
def _using_yaml_files(*paths: Path) -> Iterator[None]:
    token = _yaml_files.set(paths)
    try:
        yield
    finally:
        _yaml_files.reset(token)


def config_files(repo_root: Path) -> tuple[Path, ...]:
    """YAML files consulted for ``repo_root``, highest precedence first."""
    return (repo_root / REPO_CONFIG_RELPATH, GLOBAL_CONFIG_PATH)


def load_config(repo_root: Path | None = None, **kwargs: Any) -> DocLensConfig:
    """Load config: defaults < global yaml < repo yaml < env vars < kwargs.

    Args:
        repo_root: Directory holding .doclens/config.yaml.
                   Defaults to current working directory.
        **kwargs: Override values (highest precedence).

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On invalid YAML syntax or validation errors.
    """
    root = repo_root or Path.cwd()
    try:
        with _using_yaml_files(*config_files(root)):
            settings = DocLensSettings(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
    return DocLensConfig.model_validate(settings.model_dump())
