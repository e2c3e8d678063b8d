"""Pytest configuration and shared fixtures.

This module provides:
- an in-memory key-value backend and a RecordStore over it
- a SQLite in-memory session factory for the SQL backend
- factories for patients and drafts
"""

from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.database import init_db
from models.draft import FollowUpDraft, KnownMedication, MedicationDraft, PatientDraft
from models.patient import ClinicalSummary, FollowUpConfig, Gender, Medication, Patient
from services.storage_service import KeyValueBackend, RecordStore

TEST_KEY = "TEST_PATIENTS"


class InMemoryBackend(KeyValueBackend):
    def __init__(self):
        self.data: dict[str, str] = {}
        self.writes = 0

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.writes += 1
        self.data[key] = value

    def delete(self, key):
        self.data.pop(key, None)


@pytest.fixture
def backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def store(backend) -> RecordStore:
    return RecordStore(backend, key=TEST_KEY)


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


_counter = {"n": 0}


def _next_id() -> str:
    _counter["n"] += 1
    return f"patient-{_counter['n']:04d}"


@pytest.fixture
def make_patient():
    """Build a valid Patient; keyword arguments override defaults."""

    def _make(**overrides) -> Patient:
        fields = dict(
            id=_next_id(),
            id_card="",
            created_at=1_700_000_000_000,
            name="Test Child",
            gender=Gender.MALE,
            birthday=date(2018, 6, 1),
            diagnosis="Childhood absence epilepsy",
            clinical_summary=ClinicalSummary(syndrome="CAE", seizure_type="Generalized"),
            medications=[Medication(name="Valproate", usage="bid", dosage="0.25g", start_date=date(2023, 1, 1))],
            follow_up_config=FollowUpConfig(items=("EEG",), interval_months=3, last_follow_up_date=date(2024, 1, 10)),
        )
        fields.update(overrides)
        return Patient(**fields)

    return _make


@pytest.fixture
def make_draft():
    """Build a complete PatientDraft; keyword arguments override defaults."""

    def _make(**overrides) -> PatientDraft:
        fields = dict(
            name="Lily Zhang",
            gender=Gender.FEMALE,
            birthday=date(2019, 5, 20),
            id_card="110101201905200021",
            phone="13800000000",
            diagnosis="Focal epilepsy",
            diagnosis_date=date(2023, 2, 1),
            clinical_summary=ClinicalSummary(syndrome="SeLECTS", eeg="Centrotemporal spikes"),
            medications=[
                MedicationDraft(
                    name=KnownMedication(name="Levetiracetam"),
                    usage="bid",
                    dosage="250mg",
                    start_date=date(2023, 2, 1),
                )
            ],
            follow_up=FollowUpDraft(items=["EEG"], interval_months=3, last_follow_up_date=date(2024, 3, 1)),
        )
        fields.update(overrides)
        return PatientDraft(**fields)

    return _make
