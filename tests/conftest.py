"""Shared test configuration for doclens.

Puts the working tree's src/ ahead of any installed doclens and keeps
logging configuration from leaking between tests.
"""

import logging
import sys
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

for module_name in [m for m in sys.modules if m == "doclens" or m.startswith("doclens.")]:
    del sys.modules[module_name]


@pytest.fixture(autouse=True)
def _isolated_logging() -> Generator[None, None, None]:
    """Undo configure_logging() calls made by CLI and logging tests."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def no_global_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the global config lookup at an empty location."""
    missing = tmp_path / "global" / "config.yaml"
    monkeypatch.setattr("doclens.config.loader.GLOBAL_CONFIG_PATH", missing)
    return missing
