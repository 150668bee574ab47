"""Main CLI entry point for hemo-visits.

This module provides the main Click command group for the hemo-visits CLI.
"""

from pathlib import Path
from typing import Optional

import click

from hemo_visits import __version__
from hemo_visits.cli.catalog_commands import catalog
from hemo_visits.cli.mock_commands import mock_group
from hemo_visits.cli.visit_commands import visits
from hemo_visits.config import load_config
from hemo_visits.logging_audit import configure_component_logging_from_config, configure_logging
from hemo_visits.utils.exceptions import ConfigurationError


@click.group()
@click.version_option(version=__version__, prog_name="hemo-visits")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: ./config/config.json)",
)
@click.option("--verbose", is_flag=True, help="Enable verbose logging (DEBUG level)")
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to log file (overrides config file)",
)
@click.option(
    "--redact-pii",
    is_flag=True,
    help="Redact PII (patient names, national ids) from logs",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: bool,
    log_file: Optional[Path],
    redact_pii: bool,
) -> None:
    """Hemophilia Visits - patient visit records for hemophilia treatment centers.

    Records visits, on-demand factor treatments and the matching inventory
    decrements against a visit records backend.

    Common usage:

        # List recorded visits
        hemo-visits visits list

        # Record a center visit with an on-demand treatment
        hemo-visits visits record --patient "Amna" --visit-type center_visit \\
            --factor-id 1 --quantity 2

        # Run the mock backend for local testing
        hemo-visits mock start

    Use --help with any command for more information.
    """
    ctx.ensure_object(dict)

    try:
        config_obj = load_config(config)
        ctx.obj["config"] = config_obj
    except ConfigurationError as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        ctx.exit(1)

    ctx.obj["verbose"] = verbose
    ctx.obj["redact_pii"] = redact_pii
    ctx.obj["log_file"] = log_file

    # CLI flags > config file > defaults
    log_level = "DEBUG" if verbose else config_obj.logging.level
    log_file_path = log_file if log_file else config_obj.logging.log_file
    redact_pii_setting = redact_pii if redact_pii else config_obj.logging.redact_pii

    configure_logging(
        level=log_level, log_file=log_file_path, redact_pii=redact_pii_setting
    )
    # --verbose opens every component to DEBUG
    if not verbose:
        configure_component_logging_from_config(config_obj.logging.components)


cli.add_command(visits)
cli.add_command(catalog)
cli.add_command(mock_group)


@cli.group()
def config() -> None:
    """Configuration management commands."""
    pass


@config.command()
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
def validate(config_file: Path) -> None:
    """Validate a configuration file.

    Example:
        hemo-visits config validate config/config.json
    """
    try:
        config_obj = load_config(config_file)

        click.echo(click.style("✓", fg="green", bold=True) + " Configuration is valid")
        click.echo(f"\nConfiguration file: {config_file}")

        click.echo("\nAPI:")
        click.echo(f"  Base URL:    {config_obj.api.base_url}")
        click.echo(f"  Verify TLS:  {config_obj.api.verify_tls}")
        click.echo(
            f"  Timeouts:    {config_obj.api.timeout_connect}s connect, "
            f"{config_obj.api.timeout_read}s read"
        )

        click.echo("\nLogging:")
        click.echo(f"  Level:       {config_obj.logging.level}")
        click.echo(f"  Log file:    {config_obj.logging.log_file}")
        click.echo(f"  Redact PII:  {config_obj.logging.redact_pii}")
        levels = ", ".join(
            f"{name}={level}" for name, level in config_obj.logging.components.as_levels().items()
        )
        click.echo(f"  Components:  {levels}")

        click.echo("\nMock server:")
        click.echo(f"  Address:     {config_obj.mock_server.host}:{config_obj.mock_server.port}")
        click.echo(f"  URL prefix:  {config_obj.mock_server.url_prefix or '/'}")
        click.echo(f"  Naming:      {config_obj.mock_server.response_naming}")

    except ConfigurationError as e:
        click.echo(click.style("✗", fg="red", bold=True) + " Configuration validation failed")
        click.echo(f"\n{e}", err=True)
        raise click.exceptions.Exit(1)


cli.add_command(config)


@cli.command()
def version() -> None:
    """Display version information."""
    click.echo(f"hemo-visits version {__version__}")


if __name__ == "__main__":
    cli()
