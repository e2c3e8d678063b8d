# scripts/export_backup.py
"""Write a full JSON backup of the store to the current directory."""

import logging
import sys

from core.logging_config import configure_logging
from core.time_utils import today
from services.export_service import backup_filename, export_json
from services.storage_service import get_record_store

logger = logging.getLogger(__name__)


def main(path: str | None = None):
    configure_logging()
    patients = get_record_store().get_all()
    path = path or backup_filename(today())
    with open(path, "w", encoding="utf-8") as f:
        f.write(export_json(patients))
    logger.info("Wrote %d patient record(s) to %s", len(patients), path)


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else None)
