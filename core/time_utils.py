import calendar
from datetime import date, datetime, timezone


def now_utc() -> datetime:
    """Return a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def now_ms() -> int:
    """Milliseconds since the epoch, the unit used for createdAt."""
    return int(now_utc().timestamp() * 1000)


def today() -> date:
    return date.today()


def calculate_age(birthday: date, reference: date) -> int:
    """Whole years elapsed since birthday on the reference date.

    One year is subtracted when the reference month/day falls before the
    birth month/day. Birthdays in the future give 0.
    """
    age = reference.year - birthday.year
    if (reference.month, reference.day) < (birthday.month, birthday.day):
        age -= 1
    return max(0, age)


def add_months(day: date, months: int) -> date:
    """Advance a date by calendar months, clamping to the last day of the month.

    2024-01-31 + 1 month -> 2024-02-29.
    """
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def created_on(created_at_ms: int) -> date:
    """Calendar date (UTC) of a millisecond timestamp."""
    return datetime.fromtimestamp(created_at_ms / 1000, tz=timezone.utc).date()
