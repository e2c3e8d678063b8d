import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable

from pydantic import ValidationError

from core.constants import FOLLOW_UP_ITEMS, OTHER_FOLLOW_UP_ITEM
from core.errors import RecordValidationError
from core.helpers import generate_record_id
from core.time_utils import now_ms, today as current_date
from models.draft import FollowUpDraft, MedicationDraft, PatientDraft, classify_medication_name
from models.patient import FollowUpConfig, Patient, VisitRecord
from services.storage_service import RecordStore

logger = logging.getLogger(__name__)


class SaveOutcome(str, Enum):
    CREATED = "created"
    PROFILE_UPDATED = "profile_updated"
    VISIT_APPENDED = "visit_appended"


@dataclass(frozen=True)
class ReconcileResult:
    patient: Patient
    outcome: SaveOutcome


# ------------------------------------------
# Follow-up item normalization
# ------------------------------------------
def normalize_follow_up_items(items: Iterable[str], other_text: str = "") -> tuple[str, ...]:
    """Drop the "Other" sentinel, adding its free text as a literal item."""
    items = list(items)
    result = []
    for item in items:
        if item != OTHER_FOLLOW_UP_ITEM and item not in result:
            result.append(item)

    text = (other_text or "").strip()
    if OTHER_FOLLOW_UP_ITEM in items and text and text not in result:
        result.append(text)
    return tuple(result)


def validate_draft(draft: PatientDraft):
    missing = draft.missing_fields()
    if missing:
        raise RecordValidationError(
            f"Missing required field(s): {', '.join(missing)}",
            missing_fields=missing,
        )


# ------------------------------------------
# Pure reconciliation
# ------------------------------------------
def build_patient(
    existing: Patient | None,
    draft: PatientDraft,
    is_new_visit: bool,
    *,
    today: date,
    created_at_ms: int,
) -> tuple[Patient, SaveOutcome]:
    """Turn a form submission into the patient record to persist.

    - no existing record: new patient seeded with one visit
    - existing, not a new visit: profile edit, history untouched
    - existing, new visit: current state replaced, one visit appended
    """
    validate_draft(draft)

    try:
        follow_up = FollowUpConfig(
            items=normalize_follow_up_items(draft.follow_up.items, draft.follow_up.other_text),
            interval_months=draft.follow_up.interval_months,
            last_follow_up_date=draft.follow_up.last_follow_up_date,
        )
        medications = [
            med
            for med in (row.to_medication(default_start=today) for row in draft.medications)
            if med is not None
        ]
    except ValidationError as e:
        raise RecordValidationError(f"Invalid patient record: {e.errors()[0]['msg']}") from e

    if existing is None:
        outcome = SaveOutcome.CREATED
        patient_id = generate_record_id()
        created_at = created_at_ms
        history = []
        assessments = []
    else:
        outcome = SaveOutcome.VISIT_APPENDED if is_new_visit else SaveOutcome.PROFILE_UPDATED
        patient_id = existing.id
        created_at = existing.created_at
        history = list(existing.visit_history)
        assessments = list(existing.assessment_history)

    if outcome is not SaveOutcome.PROFILE_UPDATED:
        history.append(
            VisitRecord(
                id=generate_record_id(),
                visit_date=follow_up.last_follow_up_date or today,
                clinical_summary=draft.clinical_summary.model_copy(deep=True),
                medications=tuple(m.model_copy(deep=True) for m in medications),
                follow_up_config=follow_up.model_copy(deep=True),
            )
        )

    patient = Patient(
        id=patient_id,
        id_card=draft.id_card.strip(),
        created_at=created_at,
        name=draft.name.strip(),
        gender=draft.gender,
        birthday=draft.birthday,
        allergies=draft.allergies,
        family_history=draft.family_history,
        phone=draft.phone.strip(),
        diagnosis=draft.diagnosis.strip(),
        diagnosis_date=draft.diagnosis_date,
        clinical_summary=draft.clinical_summary,
        medications=medications,
        follow_up_config=follow_up,
        visit_history=history,
        assessment_history=assessments,
    )
    return patient, outcome


# ------------------------------------------
# Persisting entry point used by the form page
# ------------------------------------------
def reconcile(
    existing: Patient | None,
    draft: PatientDraft,
    is_new_visit: bool,
    *,
    store: RecordStore,
    today: date | None = None,
) -> ReconcileResult:
    patient, outcome = build_patient(
        existing,
        draft,
        is_new_visit,
        today=today or current_date(),
        created_at_ms=now_ms(),
    )

    if outcome is SaveOutcome.CREATED:
        store.add(patient)
    else:
        store.update(patient)

    logger.info("Saved patient %s (%s), %d visit(s)", patient.id, outcome.value, len(patient.visit_history))
    return ReconcileResult(patient=patient, outcome=outcome)


# ------------------------------------------
# Form pre-fill
# ------------------------------------------
def draft_from_patient(patient: Patient) -> PatientDraft:
    """Pre-fill the form from a stored record.

    Items that are not catalogue labels came from the "Other" free text,
    so they are folded back into it.
    """
    known = [i for i in patient.follow_up_config.items if i in FOLLOW_UP_ITEMS]
    custom = [i for i in patient.follow_up_config.items if i not in FOLLOW_UP_ITEMS]
    if custom:
        known.append(OTHER_FOLLOW_UP_ITEM)

    return PatientDraft(
        name=patient.name,
        gender=patient.gender,
        birthday=patient.birthday,
        allergies=patient.allergies,
        family_history=patient.family_history,
        id_card=patient.id_card,
        phone=patient.phone,
        diagnosis=patient.diagnosis,
        diagnosis_date=patient.diagnosis_date,
        clinical_summary=patient.clinical_summary,
        medications=[
            MedicationDraft(
                name=classify_medication_name(m.name),
                usage=m.usage,
                dosage=m.dosage,
                start_date=m.start_date,
                end_date=m.end_date,
            )
            for m in patient.medications
        ],
        follow_up=FollowUpDraft(
            items=known,
            other_text="; ".join(custom),
            interval_months=patient.follow_up_config.interval_months,
            last_follow_up_date=patient.follow_up_config.last_follow_up_date,
        ),
    )


# ------------------------------------------
# Lookups and deletion
# ------------------------------------------
def list_patients(store: RecordStore) -> list[Patient]:
    return store.get_all()


def get_patient(store: RecordStore, patient_id: str) -> Patient | None:
    return store.get(patient_id)


def delete_patient(store: RecordStore, patient_id: str) -> bool:
    return store.delete(patient_id)


def delete_patients(store: RecordStore, patient_ids: Iterable[str]) -> int:
    return store.delete_many(patient_ids)


def visit_history_newest_first(patient: Patient) -> list[VisitRecord]:
    return sorted(patient.visit_history, key=lambda v: v.visit_date, reverse=True)
