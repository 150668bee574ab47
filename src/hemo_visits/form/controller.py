"""Visit form controller.

This module owns the state of the patient visit form: the visit draft, the
optional on-demand treatment draft, the admission follow-up date and the
patient search. On submit it hands the visit request to the caller's
``save`` callback, then records the treatment and decrements the factor
inventory as best-effort secondary effects.
"""

import logging
from contextlib import contextmanager
from datetime import date
from threading import Lock
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

from hemo_visits.form.catalog import COMPLAINT_OPTIONS, OTHER, STATE_CENTERS, centers_for
from hemo_visits.form.drafts import TreatmentDraft, TreatmentField, VisitDraft, VisitField
from hemo_visits.form.events import PointerEventBus, outside_pointer_listener
from hemo_visits.logging_audit import log_audit_event
from hemo_visits.models.factor import Factor, FactorUpdate
from hemo_visits.models.patient import Patient
from hemo_visits.models.submission import SubmissionState, VisitSubmissionResult
from hemo_visits.models.treatment import ON_DEMAND_TREATMENT, TreatmentRequest
from hemo_visits.models.visit import DiagnosisType, VisitRecord, VisitRequest, VisitType
from hemo_visits.services.factors import FactorsClient
from hemo_visits.services.treatments import TreatmentsClient
from hemo_visits.utils.dates import format_local_date, parse_calendar_date, to_iso_timestamp
from hemo_visits.utils.exceptions import (
    SubmissionInProgressError,
    SubmissionNotAllowedError,
    ValidationError,
    create_error_info,
)

logger = logging.getLogger(__name__)

FOLLOW_UP_LABEL = "Follow-up Date"

# Required visit inputs, in form order; visit_type stays optional
REQUIRED_FIELDS = (
    (VisitField.PATIENT_ID, "Patient"),
    (VisitField.VISIT_DATE, "Visit date"),
    (VisitField.CENTER_STATE, "Center state"),
    (VisitField.CENTER_NAME, "Center name"),
    (VisitField.ENTERED_BY, "Entered by"),
)


def _parse_int(value: str) -> int:
    """Parse a numeric input; empty or invalid input reads as 0."""
    try:
        return int(value.strip())
    except ValueError:
        return 0


def compose_notes(
    notes: str,
    diagnosis_type: DiagnosisType,
    follow_up_date: Optional[date],
) -> str:
    """Append the admission follow-up date to the notes.

    Example:
        >>> compose_notes("prior note", DiagnosisType.ADMISSION, date(2024, 3, 15))
        'prior note\\nFollow-up Date: 3/15/2024'
    """
    if diagnosis_type is not DiagnosisType.ADMISSION or follow_up_date is None:
        return notes
    follow_up = f"{FOLLOW_UP_LABEL}: {format_local_date(follow_up_date)}"
    return f"{notes}\n{follow_up}" if notes else follow_up


class VisitFormController:
    """State and behavior of the add/edit patient visit form.

    Attributes:
        patients: Patient snapshot offered in the search
        factors: Factor inventory snapshot offered for treatments
        visit: Visit being edited, or None when adding
        draft: Visit fields
        treatment: Treatment fields
        follow_up_date: Follow-up date for admissions

    Example:
        >>> form = VisitFormController(patients, factors, save=visits.create,
        ...                            treatments=treatments, factor_service=factor_client)
        >>> form.update_search("amna")
        >>> form.select_patient(form.filtered_patients[0])
        >>> form.set_field(VisitField.CENTER_STATE, "Khartoum")
        >>> result = form.submit()
    """

    def __init__(
        self,
        patients: Sequence[Patient],
        factors: Sequence[Factor],
        save: Callable[[VisitRequest], Any],
        treatments: TreatmentsClient,
        factor_service: FactorsClient,
        visit: Optional[VisitRecord] = None,
        today: Optional[date] = None,
    ) -> None:
        """Initialize the form, from ``visit`` when editing.

        Args:
            patients: Patient snapshot
            factors: Factor inventory snapshot
            save: Persists the visit request (create or update)
            treatments: Treatments collaborator
            factor_service: Factors collaborator
            visit: Existing visit to edit
            today: Default visit date (defaults to the current date)
        """
        self.patients = list(patients)
        self.factors = list(factors)
        self.visit = visit
        self._save = save
        self._treatments = treatments
        self._factor_service = factor_service

        self.draft = VisitDraft(visit_date=today or date.today())
        self.treatment = TreatmentDraft()
        self.follow_up_date: Optional[date] = None

        self._search_text = ""
        self._dropdown_open = False

        self._state = SubmissionState.IDLE
        self._state_lock = Lock()

        self._visit_setters: Dict[VisitField, Callable[[str], None]] = {
            VisitField.PATIENT_ID: self._set_patient_id,
            VisitField.VISIT_DATE: self._set_visit_date,
            VisitField.CENTER_STATE: self._set_center_state,
            VisitField.CENTER_NAME: self._set_center_name,
            VisitField.VISIT_TYPE: self._set_visit_type,
            VisitField.DIAGNOSIS_TYPE: self._set_diagnosis_type,
            VisitField.COMPLAINT: self._set_complaint,
            VisitField.COMPLAINT_OTHER: self._text_setter("complaint_other"),
            VisitField.COMPLAINT_DETAILS: self._text_setter("complaint_details"),
            VisitField.NOTES: self._text_setter("notes"),
            VisitField.ENTERED_BY: self._text_setter("entered_by"),
        }
        self._treatment_setters: Dict[TreatmentField, Callable[[str], None]] = {
            TreatmentField.FACTOR_ID: self._set_factor_id,
            TreatmentField.QUANTITY_LOT: self._set_quantity_lot,
            TreatmentField.INDICATION_OF_TREATMENT: self._set_indication,
        }

        if visit is not None:
            self._load_visit(visit)

    def _load_visit(self, visit: VisitRecord) -> None:
        self.draft = VisitDraft(
            patient_id=visit.patient_id or 0,
            visit_date=parse_calendar_date(visit.visit_date) if visit.visit_date else None,
            center_state=visit.center_state or "",
            center_name=visit.center_name or "",
            visit_type=_enum_or_none(VisitType, visit.visit_type),
            diagnosis_type=(
                _enum_or_none(DiagnosisType, visit.diagnosis_type) or DiagnosisType.FOLLOWUP
            ),
            complaint=visit.complaint or "",
            complaint_other=visit.complaint_other or "",
            complaint_details=visit.complaint_details or "",
            notes=visit.notes or "",
            entered_by=visit.entered_by or "",
        )

        patient = self.selected_patient
        if patient is not None:
            self._search_text = patient.label

        logger.debug("Visit form loaded visit %s", visit.id)

    # ------------------------------------------------------------------
    # Field mutation
    # ------------------------------------------------------------------

    def set_field(self, name: VisitField | str, value: str) -> None:
        """Apply a visit input change.

        Args:
            name: Field to change
            value: Raw input value; "" clears the field

        Raises:
            ValidationError: If the field is unknown or the value is not
                allowed for it
        """
        self._visit_setters[_as_field(VisitField, name)](value)

    def set_treatment_field(self, name: TreatmentField | str, value: str) -> None:
        """Apply a treatment input change.

        Raises:
            ValidationError: If the field is unknown or read-only
        """
        self._treatment_setters[_as_field(TreatmentField, name)](value)

    def set_follow_up_date(self, value: str) -> None:
        self.follow_up_date = parse_calendar_date(value) if value else None

    def _set_patient_id(self, value: str) -> None:
        self.draft.patient_id = _parse_int(value)

    def _set_visit_date(self, value: str) -> None:
        self.draft.visit_date = parse_calendar_date(value) if value else None

    def _set_center_state(self, value: str) -> None:
        if value and value not in STATE_CENTERS:
            raise ValidationError(f"Unknown state: {value!r}")
        self.draft.center_state = value
        self.draft.center_name = ""

    def _set_center_name(self, value: str) -> None:
        if value and (not self.draft.center_state or value not in self.center_options):
            raise ValidationError(
                f"Center {value!r} is not available for state {self.draft.center_state!r}"
            )
        self.draft.center_name = value

    def _set_visit_type(self, value: str) -> None:
        self.draft.visit_type = _parse_enum(VisitType, value) if value else None

    def _set_diagnosis_type(self, value: str) -> None:
        self.draft.diagnosis_type = (
            _parse_enum(DiagnosisType, value) if value else DiagnosisType.FOLLOWUP
        )

    def _set_complaint(self, value: str) -> None:
        if value and value not in COMPLAINT_OPTIONS:
            raise ValidationError(f"Unknown complaint: {value!r}")
        self.draft.complaint = value

    def _text_setter(self, attribute: str) -> Callable[[str], None]:
        def setter(value: str) -> None:
            setattr(self.draft, attribute, value or "")
        return setter

    def _set_factor_id(self, value: str) -> None:
        factor_id = _parse_int(value)
        factor = self._find_factor(factor_id)
        self.treatment.factor_id = factor_id
        self.treatment.lot = factor.lot_no if factor else ""
        self.treatment.quantity_lot = self._bounded_quantity(self.treatment.quantity_lot)

    def _set_quantity_lot(self, value: str) -> None:
        self.treatment.quantity_lot = self._bounded_quantity(_parse_int(value))

    def _bounded_quantity(self, quantity: int) -> int:
        """Clamp a quantity to [0, on-hand stock of the selected factor]."""
        quantity = max(0, quantity)
        factor = self.selected_factor
        if factor is not None and quantity > factor.quantity:
            logger.debug(
                "Quantity %d capped at on-hand stock %d of factor %s",
                quantity, factor.quantity, factor.id,
            )
            return max(0, factor.quantity)
        return quantity

    def _set_indication(self, value: str) -> None:
        self.treatment.indication_of_treatment = value or ""

    # ------------------------------------------------------------------
    # Patient search
    # ------------------------------------------------------------------

    @property
    def search_text(self) -> str:
        return self._search_text

    @property
    def dropdown_open(self) -> bool:
        return self._dropdown_open

    @property
    def filtered_patients(self) -> List[Patient]:
        """Patients whose name, national id or label contains the search text."""
        query = self._search_text.lower()
        return [
            patient for patient in self.patients
            if query in (patient.full_name or "").lower()
            or query in (patient.national_id_number or "").lower()
            or query in patient.label.lower()
        ]

    def update_search(self, text: str) -> None:
        self._search_text = text
        self._dropdown_open = True
        if not text:
            self.draft.patient_id = 0

    def focus_search(self) -> None:
        self._dropdown_open = True

    def close_dropdown(self) -> None:
        self._dropdown_open = False

    def select_patient(self, patient: Patient) -> None:
        self.draft.patient_id = patient.id
        self._search_text = patient.label
        self._dropdown_open = False

    @contextmanager
    def mounted(self, bus: PointerEventBus, search_contains: Callable[[Any], bool]) -> Iterator[
        "VisitFormController"
    ]:
        """Keep the form mounted: pointer-downs outside the search close the dropdown.

        Args:
            bus: Host pointer-event bus
            search_contains: Tells whether a pointer target lies within the
                patient search control
        """
        with outside_pointer_listener(bus, search_contains, self.close_dropdown):
            yield self

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def is_edit(self) -> bool:
        return self.visit is not None

    @property
    def available_centers(self) -> List[str]:
        return centers_for(self.draft.center_state)

    @property
    def center_options(self) -> List[str]:
        """Centers offered in the center select, "Other" last."""
        return self.available_centers + [OTHER]

    @property
    def selected_patient(self) -> Optional[Patient]:
        return next((p for p in self.patients if p.id == self.draft.patient_id), None)

    @property
    def selected_factor(self) -> Optional[Factor]:
        return self._find_factor(self.treatment.factor_id)

    def _find_factor(self, factor_id: int) -> Optional[Factor]:
        return next((f for f in self.factors if f.id == factor_id), None)

    @property
    def show_treatment_section(self) -> bool:
        return self.draft.visit_type is VisitType.CENTER_VISIT

    @property
    def show_follow_up_date(self) -> bool:
        return self.draft.diagnosis_type is DiagnosisType.ADMISSION

    @property
    def show_complaint_other(self) -> bool:
        return self.draft.complaint == OTHER

    @property
    def submission_state(self) -> SubmissionState:
        return self._state

    @property
    def missing_fields(self) -> List[str]:
        """Labels of required visit inputs that are still empty."""
        missing = []
        for field, label in REQUIRED_FIELDS:
            value = getattr(self.draft, field.value)
            if isinstance(value, str):
                value = value.strip()
            if not value:
                missing.append(label)
        return missing

    @property
    def can_submit(self) -> bool:
        """Whether the submit action is enabled."""
        return (
            self._state is SubmissionState.IDLE
            and bool(self.patients)
            and not self.missing_fields
        )

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def effective_notes(self) -> str:
        return compose_notes(self.draft.notes, self.draft.diagnosis_type, self.follow_up_date)

    def build_visit_request(self) -> VisitRequest:
        """Build the visit request from the current draft.

        Raises:
            ValidationError: If no visit date is set
        """
        if self.draft.visit_date is None:
            raise ValidationError("Visit date is required")
        return VisitRequest(
            patient_id=self.draft.patient_id,
            visit_date=to_iso_timestamp(self.draft.visit_date),
            center_state=self.draft.center_state,
            center_name=self.draft.center_name,
            diagnosis_type=self.draft.diagnosis_type,
            complaint=self.draft.complaint,
            complaint_other=self.draft.complaint_other,
            complaint_details=self.draft.complaint_details,
            notes=self.effective_notes(),
            entered_by=self.draft.entered_by,
            visit_type=self.draft.visit_type,
        )

    def build_treatment_request(self, visit_request: VisitRequest) -> TreatmentRequest:
        return TreatmentRequest(
            patient_id=visit_request.patient_id,
            treatment_center=self.draft.center_name or "",
            treatment_type=ON_DEMAND_TREATMENT,
            indication_of_treatment=self.treatment.indication_of_treatment or "",
            lot=self.treatment.lot or "",
            note_date=visit_request.visit_date,
            quantity_lot=self.treatment.quantity_lot,
        )

    def submit(self) -> VisitSubmissionResult:
        """Save the visit, then apply the treatment secondary effects.

        The visit request goes to ``save`` first; an exception from ``save``
        propagates and returns the form to idle. Treatment and inventory
        failures are logged and reported in the result, never raised.

        Returns:
            Per-step outcome of the submission

        Raises:
            SubmissionInProgressError: If a submission is in flight or done
            SubmissionNotAllowedError: If no patients are available or a
                required field is empty
        """
        with self._state_lock:
            if self._state is not SubmissionState.IDLE:
                raise SubmissionInProgressError(
                    f"Visit form already submitted (state={self._state.value})"
                )
            if not self.patients:
                raise SubmissionNotAllowedError("No patients available. Add patients first.")
            missing = self.missing_fields
            if missing:
                raise SubmissionNotAllowedError(
                    f"{missing[0]} is required",
                    missing_fields=missing,
                )
            self._state = SubmissionState.IN_FLIGHT

        try:
            result = self._run_submission()
        except Exception:
            self._state = SubmissionState.IDLE
            raise

        self._state = SubmissionState.DONE
        return result

    def _run_submission(self) -> VisitSubmissionResult:
        request = self.build_visit_request()
        result = VisitSubmissionResult(request=request)

        self._save(request)
        result.visit_status = "success"
        log_audit_event("VISIT_SAVED", {
            "status": "success",
            "patient_id": request.patient_id,
            "visit_id": self.visit.id if self.visit else "new",
            "visit_type": request.visit_type.value if request.visit_type else "",
        })

        self._apply_treatment(request, result)
        return result

    def _apply_treatment(self, request: VisitRequest, result: VisitSubmissionResult) -> None:
        if request.visit_type is not VisitType.CENTER_VISIT or self.treatment.factor_id <= 0:
            result.treatment_status = "skipped"
            result.treatment_message = "No on-demand treatment recorded"
            result.inventory_status = "skipped"
            return

        treatment_request = self.build_treatment_request(request)
        try:
            result.treatment = self._treatments.create(treatment_request)
            result.treatment_status = "success"
            result.treatment_message = f"Treatment recorded (lot {treatment_request.lot})"
            log_audit_event("TREATMENT_CREATED", {
                "status": "success",
                "patient_id": request.patient_id,
                "lot": treatment_request.lot,
                "quantity_lot": treatment_request.quantity_lot,
            })

            factor = self.selected_factor
            if factor is None or self.treatment.quantity_lot <= 0:
                result.inventory_status = "skipped"
                result.inventory_message = "No inventory to decrement"
                return

            # Read-modify-write on the supplied snapshot
            new_quantity = max(0, factor.quantity - self.treatment.quantity_lot)
            result.factor_id = factor.id
            result.quantity_before = factor.quantity
            result.quantity_after = new_quantity

            self._factor_service.update(factor.id, FactorUpdate.with_quantity(factor, new_quantity))
            result.inventory_status = "success"
            result.inventory_message = f"Factor {factor.id} quantity {factor.quantity} -> {new_quantity}"
            log_audit_event("INVENTORY_DECREMENTED", {
                "status": "success",
                "factor_id": factor.id,
                "quantity_before": factor.quantity,
                "quantity_after": new_quantity,
            })
        except Exception as e:
            logger.error("Error creating treatment or updating factor: %s", e)
            if result.treatment_status == "pending":
                result.treatment_status = "failed"
                result.treatment_message = str(e)
                result.inventory_status = "skipped"
            else:
                result.inventory_status = "failed"
                result.inventory_message = str(e)
            result.error_info = create_error_info(e)
            log_audit_event("SECONDARY_EFFECT_FAILED", {
                "status": "failure",
                "patient_id": request.patient_id,
                "factor_id": self.treatment.factor_id,
                "error_message": str(e),
            })


def _as_field(enum_cls, name):
    try:
        return enum_cls(name)
    except ValueError:
        raise ValidationError(f"Unknown form field: {name!r}")


def _parse_enum(enum_cls, value: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid value {value!r}. Must be one of: {allowed}")


def _enum_or_none(enum_cls, value: Optional[str]):
    if not value:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning("Ignoring unknown %s value from backend: %r", enum_cls.__name__, value)
        return None
