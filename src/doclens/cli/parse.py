"""doclens parse command - print the documentation model of a file."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from doclens.cli.utils import parse_file
from doclens.models import DocumentModel


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--symbols",
    "symbols_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Saved textDocument/documentSymbol response for FILE",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def parse_command(
    ctx: click.Context, file: Path, symbols_path: Path | None, as_json: bool
) -> None:
    """Extract documentation from FILE."""
    model = parse_file(file, symbols_path, verbose=ctx.obj.get("verbose", False))

    if as_json:
        click.echo(json.dumps(model.to_dict(), indent=2))
        return

    console = Console()
    header = model.container_name
    if model.package_name:
        header = f"{model.package_name}.{header}"
    console.print(f"[bold]{header}[/bold]")
    if model.container_comment:
        console.print(model.container_comment)
    if model.authorship:
        console.print(
            f"[dim]author {model.authorship.author}, last modified by "
            f"{model.authorship.last_modifier} on {model.authorship.last_modify_date}[/dim]"
        )
    console.print()
    console.print(_make_member_table(model))


def _make_member_table(model: DocumentModel) -> Table:
    table = Table(show_header=True, box=None, padding=(0, 1), pad_edge=False)
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Kind")
    table.add_column("Owner", style="cyan")
    table.add_column("Declaration")
    table.add_column("Description")

    rows: list[tuple[int, str, str, str, str]] = []
    rows.extend((m.start_line, m.kind, m.owner, m.signature, m.description) for m in model.methods)
    rows.extend(
        (f.start_line, "constant" if f.is_constant else "field", f.owner, f.signature, f.description)
        for f in model.fields
    )
    rows.extend(
        (e.start_line, "enum", e.owner, f"{e.name}{e.arguments}", e.description)
        for e in model.enum_constants
    )
    for line, kind, owner, declaration, description in sorted(rows, key=lambda r: r[0]):
        table.add_row(str(line + 1), kind, owner, declaration, description.split("\n", 1)[0])
    return table
