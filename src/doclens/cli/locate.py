"""doclens locate command - find the method enclosing a line."""

import json
import sys
from pathlib import Path

import click

from doclens.cli.utils import parse_file
from doclens.cursor import locate_enclosing_declaration


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("line", type=click.IntRange(min=1))
@click.option(
    "--symbols",
    "symbols_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Saved textDocument/documentSymbol response for FILE",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def locate_command(
    ctx: click.Context, file: Path, line: int, symbols_path: Path | None, as_json: bool
) -> None:
    """Print the method of FILE whose body contains LINE (1-based).

    Exits with status 1 when LINE is outside every method.
    """
    model = parse_file(file, symbols_path, verbose=ctx.obj.get("verbose", False))
    method = locate_enclosing_declaration(model.methods, line - 1)
    if method is None:
        click.echo(f"No method encloses line {line}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(method.to_dict(), indent=2))
    else:
        click.echo(f"{method.owner}.{method.name} ({method.start_line + 1}-{method.end_line + 1})")
        click.echo(method.signature)
