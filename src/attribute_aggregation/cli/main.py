"""Main CLI entry point for attribute-aggregation.

Defines the CLI group and registers all subcommands.

Commands:
    serve        - Start the HTTP API server
    aggregate    - Run one aggregation from a request file
    authorities  - List configured attribute authorities

Usage:
    attribute-aggregation -h, --help                 Show help message
    attribute-aggregation -v, --version              Show version
    attribute-aggregation serve                      Start API server
    attribute-aggregation aggregate request.json     Aggregate and print JSON
    attribute-aggregation authorities                List authorities
"""

import sys

import click

from attribute_aggregation import __version__

from .commands.aggregate import aggregate
from .commands.authorities import authorities
from .commands.serve import serve


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """attribute-aggregation: enrich user attributes from attribute authorities."""
    if version:
        click.echo(f"attribute-aggregation {__version__}")
        sys.exit(0)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Register commands
cli.add_command(serve)
cli.add_command(aggregate)
cli.add_command(authorities)


def main() -> None:
    """CLI entry point."""
    cli()
