"""Tests for quality-of-life assessment scoring."""

from datetime import date

import pytest

from core.errors import PatientNotFoundError, RecordValidationError
from services.assessment_service import assessment_trend, record_assessment, score_total

SCORES = {"emotional": 8, "social": 7, "seizure": 6, "side_effect": 2, "overall": 9}


def test_score_total_inverts_side_effects():
    assert score_total(SCORES) == 76
    assert score_total({**SCORES, "side_effect": 10}) == 60


def test_score_total_bounds():
    assert score_total({k: 0 for k in SCORES} | {"side_effect": 10}) == 0
    assert score_total({k: 10 for k in SCORES} | {"side_effect": 0}) == 100


def test_camel_case_keys_accepted():
    assert score_total({"emotional": 8, "social": 7, "seizure": 6, "sideEffect": 2, "overall": 9}) == 76


def test_out_of_range_rejected():
    with pytest.raises(RecordValidationError):
        score_total({**SCORES, "overall": 11})


def test_record_appends_to_history(store, make_patient):
    p = make_patient()
    store.add(p)

    first = record_assessment(store, p.id, SCORES, " stable ", today=date(2024, 1, 1))
    second = record_assessment(store, p.id, {**SCORES, "overall": 10}, today=date(2024, 4, 1))

    stored = store.get(p.id)
    assert [a.id for a in stored.assessment_history] == [first.id, second.id]
    assert stored.assessment_history[0].notes == "stable"
    assert stored.assessment_history[0].total_score == 76
    assert stored.assessment_history[1].assessed_on == date(2024, 4, 1)
    # Visit history is independent of assessments
    assert stored.visit_history == p.visit_history


def test_unknown_patient(store):
    with pytest.raises(PatientNotFoundError):
        record_assessment(store, "missing", SCORES)


def test_same_day_assessments_visible_after_save(store, make_patient):
    p = make_patient()
    store.add(p)

    record_assessment(store, p.id, SCORES, today=date(2024, 5, 2))
    record_assessment(store, p.id, {**SCORES, "overall": 10}, today=date(2024, 5, 2))

    history = store.get(p.id).assessment_history
    assert len(history) == 2
    assert assessment_trend(history) == {"2024-05-02": 76, "2024-05-02 (2)": 78}


def test_trend_is_chronological(store, make_patient):
    p = make_patient()
    store.add(p)
    record_assessment(store, p.id, SCORES, today=date(2024, 6, 1))
    record_assessment(store, p.id, {**SCORES, "social": 0}, today=date(2024, 1, 1))

    trend = assessment_trend(store.get(p.id).assessment_history)
    assert list(trend) == ["2024-01-01", "2024-06-01"]
    assert trend["2024-01-01"] == 62
