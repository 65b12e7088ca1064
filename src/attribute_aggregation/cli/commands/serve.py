"""Serve command for attribute-aggregation CLI.

Starts the HTTP API with uvicorn.
"""

from __future__ import annotations

from pathlib import Path

import click
import uvicorn

from attribute_aggregation import __version__
from attribute_aggregation.api.server import create_api_app
from attribute_aggregation.cli.config_loader import load_config
from attribute_aggregation.exceptions import ConfigurationError


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: OS config dir or $ATTRIBUTE_AGGREGATION_CONFIG)",
)
@click.option("--host", default=None, help="Bind address (overrides api.host)")
@click.option("--port", type=int, default=None, help="Bind port (overrides api.port)")
def serve(config_path: Path | None, host: str | None, port: int | None) -> None:
    """Start the attribute aggregation API server."""
    config = load_config(config_path)

    try:
        app = create_api_app(config)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    bind_host = host or config.api.host
    bind_port = port or config.api.port

    click.echo(f"attribute-aggregation v{__version__}", err=True)
    click.echo(f"Authorities: {', '.join(a.id for a in config.authorities) or '(none)'}", err=True)
    if not config.api.requires_basic_auth:
        click.echo("Warning: aggregate endpoint has no Basic auth configured", err=True)
    click.echo(f"Listening on http://{bind_host}:{bind_port}", err=True)

    uvicorn.run(app, host=bind_host, port=bind_port, log_level=config.logging.log_level.lower())
