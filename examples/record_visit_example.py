"""Example: Recording patient visits with the visit form controller.

This example walks through the visit form the way a data-entry screen
drives it: search and select a patient, fill in the visit, attach an
on-demand treatment, submit, then inspect the per-step outcome.

Start the mock backend first, then run this example:
    hemo-visits mock start
    python examples/record_visit_example.py
"""

import logging

from hemo_visits.config import load_config
from hemo_visits.form import PointerEvent, PointerEventBus, VisitField, VisitFormController
from hemo_visits.form.drafts import TreatmentField
from hemo_visits.services import (
    FactorsClient,
    PatientsClient,
    PatientVisitsClient,
    TreatmentsClient,
)
from hemo_visits.transport import ApiClient

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def example_1_center_visit_with_treatment(api: ApiClient) -> None:
    """Example 1: Center visit with an on-demand factor treatment."""
    print("=" * 80)
    print("Example 1: Center Visit With On-demand Treatment")
    print("=" * 80)

    visits = PatientVisitsClient(api)
    factor_client = FactorsClient(api)
    form = VisitFormController(
        PatientsClient(api).fetch_all(),
        factor_client.fetch_all(),
        save=visits.create,
        treatments=TreatmentsClient(api),
        factor_service=factor_client,
    )

    # The host forwards pointer-downs; clicks outside the search close the dropdown
    bus = PointerEventBus()
    with form.mounted(bus, lambda target: target == "patient-search"):
        form.update_search("amna")
        print(f"\nSearch 'amna' matches: {[p.label for p in form.filtered_patients]}")
        bus.dispatch(PointerEvent(target="page-body"))
        print(f"Dropdown open after outside click: {form.dropdown_open}")

    form.select_patient(form.filtered_patients[0])
    form.set_field(VisitField.CENTER_STATE, "Khartoum")
    print(f"\nCenters offered for Khartoum: {form.center_options}")
    form.set_field(VisitField.CENTER_NAME, "Ibn Sina Hospital")
    form.set_field(VisitField.VISIT_TYPE, "center_visit")
    form.set_field(VisitField.COMPLAINT, "Joint hemarthrosis")
    form.set_field(VisitField.ENTERED_BY, "nurse.a")
    form.set_treatment_field(TreatmentField.FACTOR_ID, str(form.factors[0].id))
    form.set_treatment_field(TreatmentField.QUANTITY_LOT, "2")

    result = form.submit()

    print(f"\nVisit:     {result.visit_status}")
    print(f"Treatment: {result.treatment_status} ({result.treatment_message})")
    print(f"Inventory: {result.inventory_status} ({result.inventory_message})")


def example_2_admission_with_follow_up(api: ApiClient) -> None:
    """Example 2: Admission with a follow-up date appended to the notes."""
    print("\n" + "=" * 80)
    print("Example 2: Admission With Follow-up Date")
    print("=" * 80)

    visits = PatientVisitsClient(api)
    form = VisitFormController(
        PatientsClient(api).fetch_all(),
        [],
        save=visits.create,
        treatments=TreatmentsClient(api),
        factor_service=FactorsClient(api),
    )
    form.update_search("Omar")
    form.select_patient(form.filtered_patients[0])
    form.set_field(VisitField.CENTER_STATE, "Sennar")
    form.set_field(VisitField.CENTER_NAME, "Sennar Hospital")
    form.set_field(VisitField.ENTERED_BY, "nurse.a")
    form.set_field(VisitField.DIAGNOSIS_TYPE, "admission")
    form.set_field(VisitField.NOTES, "Admitted for iliopsoas hematoma")
    form.set_follow_up_date("2024-03-15")

    print(f"\nNotes to be saved:\n{form.effective_notes()}")
    form.submit()


def example_3_edit_latest_visit(api: ApiClient) -> None:
    """Example 3: Load the latest visit into the form and update it."""
    print("\n" + "=" * 80)
    print("Example 3: Edit a Visit")
    print("=" * 80)

    visits = PatientVisitsClient(api)
    latest = visits.fetch_all()[-1]
    form = VisitFormController(
        PatientsClient(api).fetch_all(),
        [],
        save=lambda request: visits.update(latest.id, request),
        treatments=TreatmentsClient(api),
        factor_service=FactorsClient(api),
        visit=latest,
    )
    print(f"\nEditing visit {latest.id} for {form.search_text}")
    form.set_field(VisitField.COMPLAINT_DETAILS, "Swelling reduced")
    form.submit()

    print(f"Saved details: {visits.fetch_by_id(latest.id).complaint_details}")


if __name__ == "__main__":
    config = load_config()
    with ApiClient(config.api) as api:
        example_1_center_visit_with_treatment(api)
        example_2_admission_with_follow_up(api)
        example_3_edit_latest_visit(api)
