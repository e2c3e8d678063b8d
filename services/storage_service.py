"""
Record Store
---------------------------------
The whole patient collection lives as one JSON array under a single key.
Every mutation is read-all -> transform -> write-all.
"""

import logging
from typing import Iterable

from pydantic import TypeAdapter
from sqlalchemy.orm import sessionmaker

from core.config import STORAGE_KEY
from core.database import SessionLocal, get_db_context
from models.kv_entry import KeyValueEntry
from models.patient import Patient

logger = logging.getLogger(__name__)

_PATIENT_LIST = TypeAdapter(list[Patient])


# ---------------------------------------------------------
# Key-value backends
# ---------------------------------------------------------
class KeyValueBackend:
    """Minimal get/set/delete contract over string values."""

    def get(self, key: str) -> str | None:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class SqlKeyValueBackend(KeyValueBackend):
    """Backend over the kv_store table, one short-lived session per call."""

    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self.session_factory = session_factory

    def get(self, key: str) -> str | None:
        with get_db_context(self.session_factory) as db:
            row = db.get(KeyValueEntry, key)
            return row.value if row else None

    def set(self, key: str, value: str) -> None:
        with get_db_context(self.session_factory) as db:
            row = db.get(KeyValueEntry, key)
            if row is None:
                db.add(KeyValueEntry(key=key, value=value))
            else:
                row.value = value
            db.commit()

    def delete(self, key: str) -> None:
        with get_db_context(self.session_factory) as db:
            db.query(KeyValueEntry).filter(KeyValueEntry.key == key).delete()
            db.commit()


# ---------------------------------------------------------
# Serialization
# ---------------------------------------------------------
def dump_patients(patients: Iterable[Patient], indent: int | None = None) -> str:
    return _PATIENT_LIST.dump_json(list(patients), by_alias=True, indent=indent).decode("utf-8")


def load_patients(raw: str | bytes) -> list[Patient]:
    return _PATIENT_LIST.validate_json(raw)


# ---------------------------------------------------------
# Store
# ---------------------------------------------------------
class RecordStore:
    def __init__(self, backend: KeyValueBackend, key: str = STORAGE_KEY):
        self.backend = backend
        self.key = key

    def get_all(self) -> list[Patient]:
        raw = self.backend.get(self.key)
        if not raw:
            return []
        return load_patients(raw)

    def save_all(self, patients: Iterable[Patient]) -> None:
        patients = list(patients)
        self.backend.set(self.key, dump_patients(patients))
        logger.debug("Saved %d patient record(s)", len(patients))

    def get(self, patient_id: str) -> Patient | None:
        return next((p for p in self.get_all() if p.id == patient_id), None)

    def add(self, patient: Patient) -> None:
        patients = self.get_all()
        patients.append(patient)
        self.save_all(patients)
        logger.info("Added patient %s", patient.id)

    def update(self, patient: Patient) -> bool:
        """Replace the stored patient with the same id. Unknown ids are a no-op."""
        patients = self.get_all()
        for index, existing in enumerate(patients):
            if existing.id == patient.id:
                patients[index] = patient
                self.save_all(patients)
                logger.info("Updated patient %s", patient.id)
                return True
        logger.debug("Update skipped, patient %s not found", patient.id)
        return False

    def delete(self, patient_id: str) -> bool:
        return self.delete_many([patient_id]) > 0

    def delete_many(self, patient_ids: Iterable[str]) -> int:
        doomed = set(patient_ids)
        patients = self.get_all()
        kept = [p for p in patients if p.id not in doomed]
        removed = len(patients) - len(kept)
        if removed:
            self.save_all(kept)
            logger.info("Deleted %d patient record(s)", removed)
        return removed

    def merge(self, incoming: Iterable[Patient]) -> int:
        # Imported lazily: import_service depends on this module
        from services.import_service import import_merge

        merged, added = import_merge(self.get_all(), list(incoming))
        self.save_all(merged)
        return added

    def clear(self) -> None:
        self.backend.delete(self.key)


def get_record_store() -> RecordStore:
    """Default store bound to the configured database."""
    return RecordStore(SqlKeyValueBackend(SessionLocal), STORAGE_KEY)
