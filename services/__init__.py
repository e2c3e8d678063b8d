from .storage_service import RecordStore, get_record_store
from .patient_service import reconcile, SaveOutcome
from .reminder_service import compute_reminders
from .import_service import import_merge, import_backup

# Export and insights helpers are imported directly by the pages that use them.

__all__ = [
    "RecordStore",
    "get_record_store",
    "reconcile",
    "SaveOutcome",
    "compute_reminders",
    "import_merge",
    "import_backup",
]
