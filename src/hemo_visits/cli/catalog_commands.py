"""Reference list commands (states, centers, complaints)."""

import json
from typing import Optional

import click

from hemo_visits.form.catalog import COMPLAINT_OPTIONS, OTHER, STATE_CENTERS, centers_for


@click.group()
def catalog() -> None:
    """Reference lists offered by the visit form."""
    pass


@catalog.command()
@click.argument("state", required=False)
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def states(state: Optional[str], json_output: bool) -> None:
    """List states and their treatment centers.

    With STATE, list only that state's centers.

    Examples:

        hemo-visits catalog states

        hemo-visits catalog states Khartoum
    """
    if state is not None and state not in STATE_CENTERS:
        click.secho(f"Unknown state: {state}", fg="red", err=True)
        raise click.exceptions.Exit(1)

    selected = {state: centers_for(state)} if state else STATE_CENTERS
    if json_output:
        click.echo(json.dumps(selected, indent=2))
        return

    for name, centers in selected.items():
        click.secho(name, bold=True)
        for center in centers + [OTHER]:
            click.echo(f"  - {center}")


@catalog.command()
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def complaints(json_output: bool) -> None:
    """List the complaint options."""
    if json_output:
        click.echo(json.dumps(COMPLAINT_OPTIONS, indent=2))
        return
    for complaint in COMPLAINT_OPTIONS:
        click.echo(complaint)
