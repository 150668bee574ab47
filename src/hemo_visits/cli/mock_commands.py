"""CLI commands for the mock visit records backend."""

import json
import logging
import sys
from typing import Optional

import click
import requests

from hemo_visits.config.schema import VALID_NAMING_CONVENTIONS, Config
from hemo_visits.mock_server.app import run_server

logger = logging.getLogger(__name__)


@click.group(name="mock")
def mock_group() -> None:
    """Run the in-memory mock backend.

    The mock backend serves, under its URL prefix:
    - /health - Health check endpoint
    - /patientVisits - Visit records (list, get, create, update, delete)
    - /treatments - Treatment records
    - /factors - Factor inventory
    - /patients - Patients
    """


@mock_group.command(name="start")
@click.option("--host", default=None, help="Bind address (overrides config file)")
@click.option("--port", type=int, default=None, help="Server port (overrides config file)")
@click.option(
    "--response-naming",
    type=click.Choice(VALID_NAMING_CONVENTIONS),
    default=None,
    help="Field naming used in responses (overrides config file)",
)
@click.option("--debug", is_flag=True, help="Enable debug mode")
@click.pass_context
def start_server(
    ctx: click.Context,
    host: Optional[str],
    port: Optional[int],
    response_naming: Optional[str],
    debug: bool,
) -> None:
    """Start the mock backend in the foreground.

    Examples:

        # Start with the configured settings\n
        hemo-visits mock start

        # Serve snake_case responses on a custom port\n
        hemo-visits mock start --port 9090 --response-naming snake
    """
    config: Config = ctx.obj["config"]
    overrides = {
        key: value
        for key, value in {"host": host, "port": port, "response_naming": response_naming}.items()
        if value is not None
    }
    try:
        server_config = config.mock_server.model_validate(
            {**config.mock_server.model_dump(), **overrides}
        )
    except ValueError as e:
        raise click.ClickException(f"Configuration error: {e}")

    base = f"http://{server_config.host}:{server_config.port}{server_config.url_prefix}"
    click.echo("=" * 50)
    click.echo("Hemophilia Visits Mock Backend")
    click.echo("=" * 50)
    click.echo(f"Health Check:    {base}/health")
    click.echo(f"Visits:          {base}/patientVisits")
    click.echo(f"Response naming: {server_config.response_naming}")
    click.echo("=" * 50)
    click.echo("")
    click.echo("Starting server... (Press Ctrl+C to stop)")

    try:
        run_server(server_config, debug=debug)
    except KeyboardInterrupt:
        click.echo("\n\nServer stopped by user.")
    except OSError as e:
        logger.exception("Failed to start mock server")
        raise click.ClickException(f"Failed to start server: {e}")


@mock_group.command(name="status")
@click.option("--json", "output_json", is_flag=True, help="Output status as JSON")
@click.pass_context
def server_status(ctx: click.Context, output_json: bool) -> None:
    """Check whether the configured backend answers its health check.

    Exits 1 when the backend is unreachable.
    """
    config: Config = ctx.obj["config"]
    health_url = f"{config.api.base_url}/health"

    try:
        response = requests.get(
            health_url,
            timeout=(config.api.timeout_connect, config.api.timeout_read),
            verify=config.api.verify_tls,
        )
        response.raise_for_status()
        health_data = response.json()
    except requests.RequestException as e:
        if output_json:
            click.echo(json.dumps({"running": False, "url": health_url, "error": str(e)}))
        else:
            click.echo(f"Status: Unreachable ({health_url})")
            click.echo(f"  {e}")
        sys.exit(1)

    if output_json:
        click.echo(json.dumps({"running": True, "url": health_url, **health_data}, indent=2))
    else:
        click.echo("Mock Backend Status")
        click.echo("=" * 50)
        click.echo("Status: Running ✓")
        click.echo(f"URL: {health_url}")
        click.echo(f"Response naming: {health_data.get('response_naming', 'unknown')}")
        click.echo(f"Visits stored: {health_data.get('visits', 0)}")
