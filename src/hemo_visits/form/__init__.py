"""Form module.

This module provides the patient visit form controller and its reference lists.
"""

from hemo_visits.form.catalog import COMPLAINT_OPTIONS, STATE_CENTERS
from hemo_visits.form.controller import VisitFormController, compose_notes
from hemo_visits.form.drafts import TreatmentDraft, TreatmentField, VisitDraft, VisitField
from hemo_visits.form.events import PointerEvent, PointerEventBus

__all__ = [
    "COMPLAINT_OPTIONS",
    "STATE_CENTERS",
    "PointerEvent",
    "PointerEventBus",
    "TreatmentDraft",
    "TreatmentField",
    "VisitDraft",
    "VisitField",
    "VisitFormController",
    "compose_notes",
]
