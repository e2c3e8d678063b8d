"""
Follow-up Reminder Engine
---------------------------------
Projects each patient's next follow-up date onto a ranked list of
due-soon and overdue reminders. Nothing here is persisted.
"""

from datetime import date
from typing import Iterable

from models.patient import Patient
from models.reminder import FollowUpReminder

# Patients due within this many days (or overdue) are listed
REMINDER_WINDOW_DAYS = 14


def days_until(due: date, today: date) -> int:
    """Signed calendar-day difference; negative means overdue."""
    return (due - today).days


def compute_reminders(patients: Iterable[Patient], today: date) -> list[FollowUpReminder]:
    reminders = []
    for p in patients:
        due = p.follow_up_config.next_follow_up_date
        if due is None:
            continue

        days = days_until(due, today)
        if days > REMINDER_WINDOW_DAYS:
            continue

        reminders.append(
            FollowUpReminder(
                patient_id=p.id,
                patient_name=p.name,
                days_remaining=days,
                is_overdue=days < 0,
                due_date=due,
            )
        )

    # sorted() is stable, so patients due the same day keep input order
    return sorted(reminders, key=lambda r: r.days_remaining)


def split_overdue(reminders: Iterable[FollowUpReminder]) -> tuple[list[FollowUpReminder], list[FollowUpReminder]]:
    """Return (overdue, upcoming) keeping the engine's order."""
    overdue, upcoming = [], []
    for r in reminders:
        (overdue if r.is_overdue else upcoming).append(r)
    return overdue, upcoming
