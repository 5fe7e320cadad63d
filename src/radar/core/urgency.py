"""Pure urgency classification - buckets and relative due-date labels."""

from datetime import date, datetime
from enum import Enum


class Bucket(str, Enum):
    """Urgency bucket, named after the colour it is displayed with."""

    RED = "red"
    AMBER = "amber"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    CYAN = "cyan"
    GRAY = "gray"


# Urgency tokens as stored on grocery and purchase records
TODAY = "today"
TOMORROW = "tomorrow"
DAY_AFTER = "dayAfter"
THIS_WEEK = "thisWeek"
THIRTY_DAYS = "30days"
DATE = "date"
NONE = "none"

URGENCY_LABELS = {
    TODAY: "Today",
    TOMORROW: "Tomorrow",
    DAY_AFTER: "Day After Tomorrow",
    THIS_WEEK: "This Week",
    THIRTY_DAYS: "Within 30 Days",
    NONE: "No Urgency",
    DATE: "Pick a Date",
}

_URGENCY_BUCKETS = {
    TODAY: Bucket.RED,
    TOMORROW: Bucket.ORANGE,
    DAY_AFTER: Bucket.AMBER,
    THIS_WEEK: Bucket.YELLOW,
    THIRTY_DAYS: Bucket.BLUE,
    DATE: Bucket.CYAN,
    NONE: Bucket.GRAY,
}


def to_day(as_of: date | datetime | None = None) -> date:
    """Calendar day of a reference instant (today if omitted)."""
    if as_of is None:
        return date.today()
    if isinstance(as_of, datetime):
        return as_of.date()
    return as_of


def days_until(due_date: date | None, as_of: date | datetime | None = None) -> int | None:
    """Whole calendar days until due (negative if overdue)."""
    if not due_date:
        return None
    return (due_date - to_day(as_of)).days


def color_for(
    urgency: str | None = None,
    due_date: date | None = None,
    as_of: date | datetime | None = None,
) -> Bucket:
    """
    Classify an item into an urgency bucket.

    A due date takes precedence over the urgency token.
    """
    days = days_until(due_date, as_of)
    if days is not None:
        if days < 0:
            return Bucket.RED
        if days == 0:
            return Bucket.AMBER
        if days <= 2:
            return Bucket.ORANGE
        if days <= 7:
            return Bucket.YELLOW
        return Bucket.GREEN

    return _URGENCY_BUCKETS.get(urgency or NONE, Bucket.GRAY)


def relative_label(due_date: date | None, as_of: date | datetime | None = None) -> str:
    """Human-relative due label: '3d overdue', 'Today', 'In 4 days', 'Mar 5'."""
    days = days_until(due_date, as_of)
    if days is None:
        return ""
    if days < 0:
        return f"{abs(days)}d overdue"
    if days == 0:
        return "Today"
    if days == 1:
        return "Tomorrow"
    if days <= 7:
        return f"In {days} days"
    return f"{due_date.strftime('%b')} {due_date.day}"


def due_label(
    urgency: str | None = None,
    due_date: date | None = None,
    as_of: date | datetime | None = None,
) -> str:
    """Relative label for a dated item, else the urgency token's own label."""
    if due_date:
        return relative_label(due_date, as_of)
    if urgency in (None, NONE, DATE):
        return ""
    return URGENCY_LABELS.get(urgency, "")
