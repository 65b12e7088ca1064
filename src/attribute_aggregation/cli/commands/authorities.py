"""Authorities command for attribute-aggregation CLI.

Lists configured attribute authorities in invocation order.
"""

from __future__ import annotations

from pathlib import Path

import click

from attribute_aggregation.cli.config_loader import load_config
from attribute_aggregation.pips.registry import AGGREGATOR_TYPES


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: OS config dir or $ATTRIBUTE_AGGREGATION_CONFIG)",
)
def authorities(config_path: Path | None) -> None:
    """List configured attribute authorities."""
    config = load_config(config_path)

    if not config.authorities:
        click.echo("No attribute authorities configured.")
        return

    for index, authority in enumerate(config.authorities, start=1):
        known = authority.aggregator_type in AGGREGATOR_TYPES
        click.echo(f"{index}. {authority.id} (type: {authority.aggregator_type}{'' if known else ', UNKNOWN'})")
        click.echo(f"   endpoint: {authority.endpoint}")
        click.echo(f"   requires: {', '.join(authority.required_input_attributes) or '-'}")
        click.echo(f"   timeout: {authority.timeout_seconds}s, basic auth: {'yes' if authority.credentials else 'no'}")
