from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from core.time_utils import created_on
from models.patient import Gender, Patient

TOP_MEDICATIONS = 5


@dataclass
class CohortInsights:
    total: int
    gender_counts: dict[str, int]
    age_groups: dict[str, int]
    top_medications: list[tuple[str, int]] = field(default_factory=list)


# (label, inclusive upper age bound); the last band is open-ended
AGE_BANDS = [
    ("infant", 1),
    ("toddler", 3),
    ("preschool", 6),
    ("school", 12),
    ("adolescent", None),
]


def _matches_term(p: Patient, term: str) -> bool:
    if not term:
        return True
    lower = term.lower()
    return (
        lower in p.name.lower()
        or term in p.id_card
        or term in p.phone
        or lower in p.diagnosis.lower()
        or lower in p.clinical_summary.syndrome.lower()
        or any(lower in m.name.lower() for m in p.medications)
    )


def search_patients(
    patients: Iterable[Patient],
    term: str = "",
    created_from: date | None = None,
    created_to: date | None = None,
) -> list[Patient]:
    """Filter by free-text term and an inclusive creation-date window."""
    term = (term or "").strip()
    result = []
    for p in patients:
        if not _matches_term(p, term):
            continue
        day = created_on(p.created_at)
        if created_from and day < created_from:
            continue
        if created_to and day > created_to:
            continue
        result.append(p)
    return result


def age_band(age: int) -> str:
    for label, upper in AGE_BANDS:
        if upper is None or age <= upper:
            return label
    return AGE_BANDS[-1][0]


def cohort_insights(patients: Iterable[Patient]) -> CohortInsights | None:
    patients = list(patients)
    if not patients:
        return None

    genders = Counter(p.gender for p in patients)
    ages = Counter(age_band(p.age) for p in patients)
    meds = Counter()
    for p in patients:
        for m in p.medications:
            # Group "Valproate 500mg" with "Valproate" by counting the first word
            name = m.name.split(" ")[0].strip()
            if name:
                meds[name] += 1

    return CohortInsights(
        total=len(patients),
        gender_counts={g.label: genders.get(g, 0) for g in Gender},
        age_groups={label: ages.get(label, 0) for label, _ in AGE_BANDS},
        top_medications=meds.most_common(TOP_MEDICATIONS),
    )
