"""Aggregate command for attribute-aggregation CLI.

Runs one aggregation from a request file against the configured
authorities and prints the result as JSON. Useful to check authority
connectivity and ARP behavior without starting the server.
"""

from __future__ import annotations

import json
from pathlib import Path

import click
from pydantic import ValidationError

from attribute_aggregation.aggregation.factory import create_aggregation_service
from attribute_aggregation.cli.config_loader import load_config
from attribute_aggregation.exceptions import AggregationAborted, ConfigurationError
from attribute_aggregation.models import AggregationRequest
from attribute_aggregation.utils.file_helpers import format_validation_errors


@click.command()
@click.argument("request_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: OS config dir or $ATTRIBUTE_AGGREGATION_CONFIG)",
)
@click.option("--outcome", "show_outcome", is_flag=True, help="Also print per-authority results to stderr")
def aggregate(request_file: Path, config_path: Path | None, show_outcome: bool) -> None:
    """Aggregate attributes for the request in REQUEST_FILE.

    REQUEST_FILE holds {"serviceProviderEntityId", "userAttributes", "arpAttributes"}.
    """
    config = load_config(config_path)

    try:
        request = AggregationRequest.model_validate_json(request_file.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Could not read request file {request_file}: {e}") from e
    except ValidationError as e:
        raise click.ClickException(f"Invalid request file {request_file}:\n{format_validation_errors(e)}") from e

    try:
        service = create_aggregation_service(config)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    try:
        outcome = service.aggregate_with_outcome(
            request.service_provider_id, request.attributes, request.arp_attributes
        )
    except AggregationAborted as e:
        raise click.ClickException(str(e)) from e
    finally:
        service.close()

    if show_outcome:
        for result in outcome.authorities:
            line = f"{result.authority_id}: {result.status.value}"
            if result.error_type:
                line += f" ({result.error_type}: {result.error_message})"
            elif result.attribute_count:
                line += f" ({result.attribute_count} attributes)"
            click.echo(line, err=True)

    click.echo(json.dumps([attribute.model_dump() for attribute in outcome.attributes], indent=2))
