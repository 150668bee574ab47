"""Visit CLI commands for hemo-visits.

This module provides CLI commands to list, show, delete and record patient
visits against the configured backend.

Exit Codes:
    0: Success (including visits saved with a failed secondary step)
    1: Validation or configuration error
    2: Transport error (network, timeout, HTTP error status)
"""

import json
import logging
import sys
from typing import Optional

import click
import requests

from hemo_visits.config.schema import Config
from hemo_visits.form.controller import VisitFormController
from hemo_visits.form.drafts import TreatmentField, VisitField
from hemo_visits.models.submission import VisitSubmissionResult
from hemo_visits.models.visit import DiagnosisType, VisitType
from hemo_visits.services.factors import FactorsClient
from hemo_visits.services.patients import PatientsClient
from hemo_visits.services.treatments import TreatmentsClient
from hemo_visits.services.visits import PatientVisitsClient
from hemo_visits.transport.http_client import ApiClient
from hemo_visits.utils.exceptions import HemoVisitsError, ValidationError

logger = logging.getLogger(__name__)

EXIT_VALIDATION = 1
EXIT_TRANSPORT = 2

STATUS_COLORS = {
    "success": "green",
    "skipped": "blue",
    "failed": "red",
    "pending": "yellow",
}


def _api(ctx: click.Context) -> ApiClient:
    config: Config = ctx.obj["config"]
    return ApiClient(config.api)


def _transport_failure(error: requests.RequestException) -> None:
    click.secho(f"Backend error: {error}", fg="red", err=True)
    logger.error(f"Backend request failed: {error}")
    sys.exit(EXIT_TRANSPORT)


@click.group()
def visits() -> None:
    """Patient visit records."""
    pass


@visits.command("list")
@click.option("--json", "json_output", is_flag=True, help="Output visits as JSON")
@click.pass_context
def list_visits(ctx: click.Context, json_output: bool) -> None:
    """List all recorded visits.

    Examples:

        hemo-visits visits list

        hemo-visits visits list --json
    """
    try:
        with _api(ctx) as api:
            records = PatientVisitsClient(api).fetch_all()
    except requests.RequestException as e:
        _transport_failure(e)

    if json_output:
        click.echo(json.dumps([record.to_dict() for record in records], indent=2))
        return

    if not records:
        click.echo("No visits recorded.")
        return

    click.echo(f"{'ID':>5}  {'DATE':<10}  {'PATIENT':>7}  {'TYPE':<22}  {'DIAGNOSIS':<11}  CENTER")
    for record in records:
        click.echo(
            f"{record.id or '':>5}  {(record.visit_date or '')[:10]:<10}  "
            f"{record.patient_id or '':>7}  {record.visit_type or '-':<22}  "
            f"{record.diagnosis_type or '-':<11}  {record.center_name or '-'}"
        )
    click.echo(f"\n{len(records)} visit(s)")


@visits.command("show")
@click.argument("visit_id", type=int)
@click.pass_context
def show_visit(ctx: click.Context, visit_id: int) -> None:
    """Show one visit as JSON."""
    try:
        with _api(ctx) as api:
            record = PatientVisitsClient(api).fetch_by_id(visit_id)
    except requests.RequestException as e:
        _transport_failure(e)

    click.echo(json.dumps(record.to_dict(), indent=2))


@visits.command("delete")
@click.argument("visit_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_visit(ctx: click.Context, visit_id: int, yes: bool) -> None:
    """Delete a visit."""
    if not yes:
        click.confirm(f"Delete visit {visit_id}?", abort=True)

    try:
        with _api(ctx) as api:
            PatientVisitsClient(api).delete(visit_id)
    except requests.RequestException as e:
        _transport_failure(e)

    click.secho(f"✓ Visit {visit_id} deleted", fg="green")


@visits.command("record")
@click.option("--visit-id", type=int, default=None, help="Edit this visit instead of adding one")
@click.option("--patient", "patient_query", required=True,
              help="Patient name, national id or 'Name - ID' label")
@click.option("--date", "visit_date", default=None, help="Visit date (YYYY-MM-DD, default today)")
@click.option("--state", "center_state", default=None, help="Center state")
@click.option("--center", "center_name", default=None, help="Center name or 'Other'")
@click.option("--visit-type", type=click.Choice([t.value for t in VisitType]), default=None)
@click.option("--diagnosis", type=click.Choice([d.value for d in DiagnosisType]), default=None)
@click.option("--complaint", default=None, help="Complaint (see 'catalog complaints')")
@click.option("--complaint-other", default=None, help="Complaint text when complaint is 'Other'")
@click.option("--details", "complaint_details", default=None, help="Complaint details")
@click.option("--notes", default=None, help="Visit notes")
@click.option("--entered-by", default=None, help="Data-entry operator")
@click.option("--follow-up-date", default=None, help="Follow-up date for admissions (YYYY-MM-DD)")
@click.option("--factor-id", type=int, default=None, help="Factor given as on-demand treatment")
@click.option("--quantity", type=int, default=None, help="Units drawn from the factor lot")
@click.option("--indication", default=None, help="Indication of treatment")
@click.option("--json", "json_output", is_flag=True, help="Output the submission result as JSON")
@click.pass_context
def record_visit(
    ctx: click.Context,
    visit_id: Optional[int],
    patient_query: str,
    visit_date: Optional[str],
    center_state: Optional[str],
    center_name: Optional[str],
    visit_type: Optional[str],
    diagnosis: Optional[str],
    complaint: Optional[str],
    complaint_other: Optional[str],
    complaint_details: Optional[str],
    notes: Optional[str],
    entered_by: Optional[str],
    follow_up_date: Optional[str],
    factor_id: Optional[int],
    quantity: Optional[int],
    indication: Optional[str],
    json_output: bool,
) -> None:
    """Record a patient visit, with an optional on-demand treatment.

    For center visits with --factor-id, a treatment is recorded and the
    factor's inventory is decremented by --quantity after the visit saves.

    Examples:

        hemo-visits visits record --patient "Amna" --state Khartoum \\
            --center "Ibn Sina Hospital" --visit-type center_visit \\
            --complaint "Joint hemarthrosis" --factor-id 1 --quantity 2

        hemo-visits visits record --visit-id 7 --patient 1198723 --diagnosis admission \\
            --follow-up-date 2024-03-15
    """
    try:
        with _api(ctx) as api:
            visits_client = PatientVisitsClient(api)
            patients = PatientsClient(api).fetch_all()
            factor_client = FactorsClient(api)
            factors = factor_client.fetch_all()
            existing = visits_client.fetch_by_id(visit_id) if visit_id is not None else None

            if existing is not None:
                def save(request):
                    visits_client.update(visit_id, request)
            else:
                save = visits_client.create

            form = VisitFormController(
                patients,
                factors,
                save=save,
                treatments=TreatmentsClient(api),
                factor_service=factor_client,
                visit=existing,
            )

            _select_patient(form, patient_query)

            # State before center: changing the state clears the center
            visit_values = [
                (VisitField.VISIT_DATE, visit_date),
                (VisitField.CENTER_STATE, center_state),
                (VisitField.CENTER_NAME, center_name),
                (VisitField.VISIT_TYPE, visit_type),
                (VisitField.DIAGNOSIS_TYPE, diagnosis),
                (VisitField.COMPLAINT, complaint),
                (VisitField.COMPLAINT_OTHER, complaint_other),
                (VisitField.COMPLAINT_DETAILS, complaint_details),
                (VisitField.NOTES, notes),
                (VisitField.ENTERED_BY, entered_by),
            ]
            for field, value in visit_values:
                if value is not None:
                    form.set_field(field, value)

            if follow_up_date is not None:
                form.set_follow_up_date(follow_up_date)

            treatment_values = [
                (TreatmentField.FACTOR_ID, factor_id),
                (TreatmentField.QUANTITY_LOT, quantity),
                (TreatmentField.INDICATION_OF_TREATMENT, indication),
            ]
            for field, value in treatment_values:
                if value is not None:
                    form.set_treatment_field(field, str(value))

            result = form.submit()
    except ValidationError as e:
        click.secho(f"Validation Error: {e}", fg="red", err=True)
        logger.error(f"Validation error: {e}")
        sys.exit(EXIT_VALIDATION)
    except HemoVisitsError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(EXIT_VALIDATION)
    except requests.RequestException as e:
        _transport_failure(e)

    if json_output:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _print_result(result, edited=existing is not None)


def _select_patient(form: VisitFormController, query: str) -> None:
    """Select the single patient matching ``query``.

    Raises:
        ValidationError: If no patient or several patients match
    """
    form.update_search(query)
    matches = form.filtered_patients
    exact = [p for p in matches if p.label.lower() == query.lower()]
    if len(exact) == 1:
        matches = exact

    if not matches:
        raise ValidationError(f'No patients found matching "{query}"')
    if len(matches) > 1:
        candidates = ", ".join(p.label for p in matches[:5])
        raise ValidationError(
            f'{len(matches)} patients match "{query}": {candidates}. '
            f"Use the full 'Name - ID' label."
        )
    form.select_patient(matches[0])


def _print_result(result: VisitSubmissionResult, edited: bool) -> None:
    action = "updated" if edited else "saved"
    click.secho(f"✓ Visit {action} for patient {result.request.patient_id}", fg="green")

    click.echo("  Treatment: ", nl=False)
    click.secho(result.treatment_status, fg=STATUS_COLORS[result.treatment_status], nl=False)
    click.echo(f"  {result.treatment_message}")

    click.echo("  Inventory: ", nl=False)
    click.secho(result.inventory_status, fg=STATUS_COLORS[result.inventory_status], nl=False)
    click.echo(f"  {result.inventory_message}")

    if result.error_info is not None:
        click.secho(
            f"\n⚠ The visit was saved but a secondary step failed "
            f"({result.error_info.category.value}).",
            fg="yellow",
            err=True,
        )
        click.echo(f"  {result.error_info.remediation}", err=True)
