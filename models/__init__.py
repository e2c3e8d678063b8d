from .kv_entry import KeyValueEntry
from .patient import (
    AssessmentRecord,
    AssessmentScores,
    ClinicalSummary,
    FollowUpConfig,
    Gender,
    Medication,
    Patient,
    VisitRecord,
)
from .draft import (
    CustomMedication,
    FollowUpDraft,
    KnownMedication,
    MedicationDraft,
    PatientDraft,
    UnsetMedication,
)
from .reminder import FollowUpReminder

__all__ = [
    "KeyValueEntry",
    "AssessmentRecord",
    "AssessmentScores",
    "ClinicalSummary",
    "FollowUpConfig",
    "Gender",
    "Medication",
    "Patient",
    "VisitRecord",
    "CustomMedication",
    "FollowUpDraft",
    "KnownMedication",
    "MedicationDraft",
    "PatientDraft",
    "UnsetMedication",
    "FollowUpReminder",
]
