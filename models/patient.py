# models/patient.py

from datetime import date
from enum import Enum
from typing import Annotated

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    computed_field,
    model_validator,
)
from pydantic.alias_generators import to_camel

from core.constants import DEFAULT_INTERVAL_MONTHS
from core.time_utils import add_months, calculate_age, today


class RecordModel(BaseModel):
    """Base for stored records: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"

    @property
    def label(self) -> str:
        return self.value.capitalize()


# Older backups store the display characters instead of enum names
_LEGACY_GENDERS = {
    "男": Gender.MALE,
    "女": Gender.FEMALE,
    "male": Gender.MALE,
    "female": Gender.FEMALE,
}


def _legacy_gender(value):
    if isinstance(value, str):
        return _LEGACY_GENDERS.get(value.strip().lower(), value.strip().upper())
    return value


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _blank_to_default_interval(value):
    if value is None or (isinstance(value, str) and not value.strip()):
        return DEFAULT_INTERVAL_MONTHS
    return value


GenderField = Annotated[Gender, BeforeValidator(_legacy_gender)]
OptionalDate = Annotated[date | None, BeforeValidator(_blank_to_none)]
IntervalMonths = Annotated[int, BeforeValidator(_blank_to_default_interval), Field(gt=0)]


class ClinicalSummary(RecordModel):
    model_config = ConfigDict(frozen=True)

    syndrome: str = ""
    seizure_type: str = ""
    eeg: str = ""
    mri: str = ""
    genetic: str = ""
    biochemical: str = ""
    other: str = ""


class Medication(RecordModel):
    """One regimen line. A medication without end_date is active."""

    model_config = ConfigDict(frozen=True)

    name: str
    usage: str = ""
    dosage: str = ""
    start_date: OptionalDate = None
    end_date: OptionalDate = None

    @model_validator(mode="after")
    def _end_not_before_start(self):
        if self.start_date is None or self.end_date is None:
            return self
        if self.end_date < self.start_date:
            raise ValueError(
                f"endDate {self.end_date} precedes startDate {self.start_date} for {self.name!r}"
            )
        return self

    @property
    def is_active(self) -> bool:
        return self.end_date is None

    def display(self) -> str:
        return f"{self.name}({self.usage} {self.dosage})"


class FollowUpConfig(RecordModel):
    """Current scheduling state. next_follow_up_date is always derived."""

    model_config = ConfigDict(frozen=True)

    items: tuple[str, ...] = ()
    interval_months: IntervalMonths = DEFAULT_INTERVAL_MONTHS
    last_follow_up_date: OptionalDate = None

    @computed_field(alias="nextFollowUpDate")
    @property
    def next_follow_up_date(self) -> date | None:
        if self.last_follow_up_date is None:
            return None
        return add_months(self.last_follow_up_date, self.interval_months)


class VisitRecord(RecordModel):
    """Snapshot committed at visit time; never edited afterwards."""

    model_config = ConfigDict(frozen=True)

    id: str
    visit_date: date = Field(alias="date")
    clinical_summary: ClinicalSummary = Field(default_factory=ClinicalSummary)
    medications: tuple[Medication, ...] = ()
    follow_up_config: FollowUpConfig = Field(default_factory=FollowUpConfig)


class AssessmentScores(RecordModel):
    model_config = ConfigDict(frozen=True)

    emotional: int = Field(ge=0, le=10)
    social: int = Field(ge=0, le=10)
    seizure: int = Field(ge=0, le=10)
    side_effect: int = Field(ge=0, le=10)
    overall: int = Field(ge=0, le=10)

    @property
    def total(self) -> int:
        # Side effects score inversely; percentage of the 50-point maximum
        raw = self.emotional + self.social + self.seizure + (10 - self.side_effect) + self.overall
        return raw * 100 // 50


class AssessmentRecord(RecordModel):
    model_config = ConfigDict(frozen=True)

    id: str
    assessed_on: date = Field(alias="date")
    scores: AssessmentScores
    notes: str = ""

    @computed_field(alias="totalScore")
    @property
    def total_score(self) -> int:
        return self.scores.total


class Patient(RecordModel):
    # Identity
    id: str
    id_card: str = ""
    created_at: int

    # Demographics
    name: str
    gender: GenderField
    birthday: date

    # Static clinical info
    allergies: str = ""
    family_history: str = ""
    phone: str = ""
    diagnosis: str = ""
    diagnosis_date: OptionalDate = None

    # Current state, mirrored into each visit snapshot
    clinical_summary: ClinicalSummary = Field(default_factory=ClinicalSummary)
    medications: list[Medication] = Field(default_factory=list)
    follow_up_config: FollowUpConfig = Field(default_factory=FollowUpConfig)

    # Append-only history
    visit_history: list[VisitRecord] = Field(default_factory=list)
    assessment_history: list[AssessmentRecord] = Field(default_factory=list)

    @computed_field
    @property
    def age(self) -> int:
        return calculate_age(self.birthday, today())

    @property
    def identity(self) -> str:
        """Key used to deduplicate imports: idCard when present, else id."""
        return self.id_card.strip() or self.id

    @property
    def active_medications(self) -> list[Medication]:
        return [m for m in self.medications if m.is_active]

    def __repr__(self):
        return f"<Patient {self.id} - {self.name}>"
