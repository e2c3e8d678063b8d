"""Tests for patient search and cohort statistics."""

from datetime import date, datetime, timezone

from core.time_utils import add_months
from models.patient import ClinicalSummary, Gender, Medication
from services.insights_service import age_band, cohort_insights, search_patients


def _ms(day: date) -> int:
    return int(datetime(day.year, day.month, day.day, 12, tzinfo=timezone.utc).timestamp() * 1000)


def _born_years_ago(years: int) -> date:
    return add_months(date.today(), -12 * years)


class TestSearchPatients:
    def test_empty_term_returns_all(self, make_patient):
        patients = [make_patient(), make_patient()]
        assert search_patients(patients, "") == patients

    def test_matches_name_case_insensitively(self, make_patient):
        match = make_patient(name="Lily Zhang")
        assert search_patients([match, make_patient(name="Tom")], "lily") == [match]

    def test_matches_id_card_and_phone(self, make_patient):
        a = make_patient(id_card="110101X")
        b = make_patient(phone="13800001111")
        assert search_patients([a, b], "0101") == [a]
        assert search_patients([a, b], "0001111") == [b]

    def test_matches_syndrome_and_medication(self, make_patient):
        a = make_patient(clinical_summary=ClinicalSummary(syndrome="Dravet"))
        b = make_patient(medications=[Medication(name="Stiripentol", start_date=date(2024, 1, 1))])
        assert search_patients([a, b], "dravet") == [a]
        assert search_patients([a, b], "stiri") == [b]

    def test_creation_window_inclusive(self, make_patient):
        early = make_patient(created_at=_ms(date(2024, 1, 1)))
        mid = make_patient(created_at=_ms(date(2024, 2, 1)))
        late = make_patient(created_at=_ms(date(2024, 3, 1)))
        result = search_patients([early, mid, late], "", date(2024, 1, 1), date(2024, 2, 1))
        assert result == [early, mid]


def test_age_bands():
    assert [age_band(a) for a in (0, 1, 2, 3, 6, 7, 12, 13)] == [
        "infant", "infant", "toddler", "toddler", "preschool", "school", "school", "adolescent",
    ]


def test_cohort_insights(make_patient):
    patients = [
        make_patient(gender=Gender.MALE, birthday=_born_years_ago(2), medications=[
            Medication(name="Valproate 500mg", start_date=date(2024, 1, 1)),
            Medication(name="Clobazam", start_date=date(2024, 1, 1)),
        ]),
        make_patient(gender=Gender.FEMALE, birthday=_born_years_ago(8), medications=[
            Medication(name="Valproate", start_date=date(2024, 1, 1)),
        ]),
        make_patient(gender=Gender.FEMALE, birthday=_born_years_ago(15), medications=[]),
    ]
    stats = cohort_insights(patients)
    assert stats.total == 3
    assert stats.gender_counts == {"Male": 1, "Female": 2}
    assert stats.age_groups == {"infant": 0, "toddler": 1, "preschool": 0, "school": 1, "adolescent": 1}
    assert stats.top_medications == [("Valproate", 2), ("Clobazam", 1)]


def test_cohort_insights_empty():
    assert cohort_insights([]) is None
