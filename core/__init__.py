from .database import get_db_context, engine, SessionLocal, Base, init_db
from .errors import FollowUpError, RecordValidationError, ImportFormatError, PatientNotFoundError
from .time_utils import calculate_age, add_months

__all__ = [
    "get_db_context",
    "engine",
    "SessionLocal",
    "Base",
    "init_db",
    "FollowUpError",
    "RecordValidationError",
    "ImportFormatError",
    "PatientNotFoundError",
    "calculate_age",
    "add_months",
]
