"""doclens CLI - doclens command."""

import click

from doclens import __version__
from doclens.cli.locate import locate_command
from doclens.cli.parse import parse_command
from doclens.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="doclens")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """doclens - documentation extraction from declaration comments."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(parse_command, name="parse")
cli.add_command(locate_command, name="locate")


if __name__ == "__main__":
    cli()
