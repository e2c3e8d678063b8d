"""
Import / Merge
---------------------------------
Backups are JSON arrays of patient records. A payload is validated as a whole
before anything is merged, so a bad file never produces a partial import.
"""

import logging
from typing import Iterable

from pydantic import ValidationError

from core.errors import ImportFormatError
from models.patient import Patient
from services.storage_service import RecordStore, load_patients

logger = logging.getLogger(__name__)


def parse_import_payload(raw: str | bytes) -> list[Patient]:
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ImportFormatError("Import file is not UTF-8 text.") from e
    try:
        return load_patients(raw.lstrip("\ufeff"))
    except ValidationError as e:
        logger.warning("Rejected import payload: %d validation error(s)", e.error_count())
        raise ImportFormatError("Import file is not a valid list of patient records.") from e


def import_merge(existing: Iterable[Patient], incoming: Iterable[Patient]) -> tuple[list[Patient], int]:
    """Append incoming patients whose identity is not already known.

    Identity is idCard when non-empty, else id. Duplicates, including
    repeats within the incoming batch, are dropped without overwriting.
    """
    merged = list(existing)
    seen = {p.identity for p in merged}

    added = 0
    for p in incoming:
        if p.identity in seen:
            logger.debug("Skipping duplicate patient %s", p.id)
            continue
        seen.add(p.identity)
        merged.append(p)
        added += 1

    return merged, added


def import_backup(store: RecordStore, raw: str | bytes) -> int:
    """Parse a backup file and merge it into the store. Returns the added count."""
    incoming = parse_import_payload(raw)
    added = store.merge(incoming)
    logger.info("Imported %d of %d patient record(s)", added, len(incoming))
    return added
