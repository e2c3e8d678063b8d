# models/draft.py
"""Form submission shapes for the patient form.

A draft is what the UI hands to the reconciliation service. Unlike Patient it
may be incomplete; required fields are checked by the service, not here.
"""

from datetime import date
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from core.constants import COMMON_MEDICATIONS, DEFAULT_INTERVAL_MONTHS
from models.patient import (
    ClinicalSummary,
    GenderField,
    IntervalMonths,
    Medication,
    OptionalDate,
    RecordModel,
)


# -----------------------------------------------------
# Medication name selection
# -----------------------------------------------------
class KnownMedication(BaseModel):
    kind: Literal["known"] = "known"
    name: str


class CustomMedication(BaseModel):
    kind: Literal["custom"] = "custom"
    text: str = ""


class UnsetMedication(BaseModel):
    kind: Literal["unset"] = "unset"


MedicationName = Annotated[
    Union[KnownMedication, CustomMedication, UnsetMedication],
    Field(discriminator="kind"),
]


def resolve_medication_name(name) -> str | None:
    """Return the stored medication name, or None when nothing was chosen."""
    if isinstance(name, KnownMedication):
        return name.name
    if isinstance(name, CustomMedication):
        return name.text.strip() or None
    return None


def classify_medication_name(stored: str):
    """Map a stored name back to the selection that would produce it."""
    if stored in COMMON_MEDICATIONS:
        return KnownMedication(name=stored)
    if stored.strip():
        return CustomMedication(text=stored)
    return UnsetMedication()


# -----------------------------------------------------
# Draft rows
# -----------------------------------------------------
class MedicationDraft(RecordModel):
    name: MedicationName = Field(default_factory=UnsetMedication)
    usage: str = ""
    dosage: str = ""
    start_date: OptionalDate = None
    end_date: OptionalDate = None

    def to_medication(self, default_start: date) -> Medication | None:
        name = resolve_medication_name(self.name)
        if name is None:
            return None
        return Medication(
            name=name,
            usage=self.usage.strip(),
            dosage=self.dosage.strip(),
            start_date=self.start_date or default_start,
            end_date=self.end_date,
        )


class FollowUpDraft(RecordModel):
    items: list[str] = Field(default_factory=list)
    # Free text used when the "Other" item is ticked
    other_text: str = ""
    interval_months: IntervalMonths = DEFAULT_INTERVAL_MONTHS
    last_follow_up_date: OptionalDate = None


class PatientDraft(RecordModel):
    name: str = ""
    gender: GenderField | None = None
    birthday: OptionalDate = None
    allergies: str = ""
    family_history: str = ""
    id_card: str = ""
    phone: str = ""
    diagnosis: str = ""
    diagnosis_date: OptionalDate = None
    clinical_summary: ClinicalSummary = Field(default_factory=ClinicalSummary)
    medications: list[MedicationDraft] = Field(default_factory=list)
    follow_up: FollowUpDraft = Field(default_factory=FollowUpDraft)

    def missing_fields(self) -> list[str]:
        missing = []
        if not self.name.strip():
            missing.append("name")
        if self.birthday is None:
            missing.append("birthday")
        if self.gender is None:
            missing.append("gender")
        if not self.diagnosis.strip():
            missing.append("diagnosis")
        return missing
