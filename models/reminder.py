# models/reminder.py

from datetime import date

from pydantic import ConfigDict

from models.patient import RecordModel


class FollowUpReminder(RecordModel):
    """Derived at query time; never persisted."""

    model_config = ConfigDict(frozen=True)

    patient_id: str
    patient_name: str
    days_remaining: int
    is_overdue: bool
    due_date: date
