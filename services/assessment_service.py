"""
Quality-of-life assessment (QOLIE-style) scoring.

Five sub-scores in [0, 10]; side effects count inversely. The total is a
percentage of the 50-point maximum and is always recomputed from the scores.
"""

import logging
from datetime import date

from pydantic import ValidationError

from core.errors import PatientNotFoundError, RecordValidationError
from core.helpers import generate_record_id
from core.time_utils import today as current_date
from models.patient import AssessmentRecord, AssessmentScores
from services.storage_service import RecordStore

logger = logging.getLogger(__name__)

SCORE_FIELDS = ["emotional", "social", "seizure", "side_effect", "overall"]


def build_scores(scores: dict) -> AssessmentScores:
    """Validate a dict of sub-scores (snake_case or camelCase keys)."""
    try:
        return AssessmentScores.model_validate(scores)
    except ValidationError as e:
        raise RecordValidationError(f"Invalid assessment scores: {e.error_count()} error(s)") from e


def score_total(scores: dict) -> int:
    return build_scores(scores).total


def record_assessment(
    store: RecordStore,
    patient_id: str,
    scores: dict,
    notes: str = "",
    *,
    today: date | None = None,
) -> AssessmentRecord:
    patient = store.get(patient_id)
    if patient is None:
        raise PatientNotFoundError(f"Patient {patient_id} not found")

    record = AssessmentRecord(
        id=generate_record_id(),
        assessed_on=today or current_date(),
        scores=build_scores(scores),
        notes=notes.strip(),
    )

    updated = patient.model_copy(update={"assessment_history": [*patient.assessment_history, record]})
    store.update(updated)

    logger.info("Recorded assessment %s for patient %s (total %d)", record.id, patient_id, record.total_score)
    return record


def assessment_trend(records: list[AssessmentRecord]) -> dict[str, int]:
    """Total score per assessment, one point each even when dates repeat."""
    trend = {}
    per_day = {}
    for a in sorted(records, key=lambda r: r.assessed_on):
        day = a.assessed_on.isoformat()
        per_day[day] = per_day.get(day, 0) + 1
        label = day if per_day[day] == 1 else f"{day} ({per_day[day]})"
        trend[label] = a.total_score
    return trend
