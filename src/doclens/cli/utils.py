"""CLI utilities."""

import asyncio
from pathlib import Path

import click

from doclens.config.loader import load_config
from doclens.core.errors import ConfigError
from doclens.core.logging import configure_logging
from doclens.extraction.parser import DocumentParser
from doclens.git.authorship import GitAuthorshipProvider
from doclens.models import DocumentModel
from doclens.symbols.providers import JsonFileSymbolProvider, StaticSymbolProvider
from doclens.symbols.resolver import SymbolProvider


def find_project_root(start_path: Path) -> Path:
    """Nearest ancestor holding ``.git`` or ``.doclens``; the file's directory otherwise."""
    start = start_path.resolve()
    if start.is_file():
        start = start.parent

    current = start
    while current != current.parent:
        if (current / ".git").exists() or (current / ".doclens").exists():
            return current
        current = current.parent
    return start


def parse_file(
    file_path: Path, symbols_path: Path | None, *, verbose: bool = False
) -> DocumentModel:
    """Parse one source file, optionally driven by a saved symbol response.

    Without ``symbols_path`` only the text fallback runs, so members are
    empty and only container information is recovered. The project's
    ``logging`` section replaces the CLI default unless ``verbose`` is set.
    """
    try:
        config = load_config(find_project_root(file_path))
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    if not verbose:
        configure_logging(config=config.logging)

    provider: SymbolProvider = (
        JsonFileSymbolProvider(symbols_path) if symbols_path else StaticSymbolProvider()
    )
    parser = DocumentParser.from_config(provider, config, authorship=GitAuthorshipProvider())
    text = file_path.read_text(encoding="utf-8")
    return asyncio.run(parser.parse(str(file_path.resolve()), text))
