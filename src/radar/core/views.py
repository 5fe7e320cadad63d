"""Pure view filtering and stream counters - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum

from .stream import StreamItem
from .urgency import to_day

# The week view's undated fallback matches "this_week", not the stored
# "thisWeek" token. Kept as-is until product decides otherwise.
WEEK_URGENCIES = ("today", "tomorrow", "this_week")


class View(Enum):
    """Named stream views."""

    ALL = "all"
    OVERDUE = "overdue"
    TODAY = "today"
    WEEK = "week"
    ASSIGNED = "assigned"

    @classmethod
    def parse(cls, name: str) -> "View":
        try:
            return cls(name.strip().lower())
        except ValueError:
            valid = ", ".join(v.value for v in cls)
            raise ValueError(f"Unknown view '{name}' (expected one of: {valid})") from None


@dataclass
class Identity:
    """The current user, as known to the auth/session layer."""

    uid: str | None = None
    display_name: str | None = None

    def matches(self, value: str | None) -> bool:
        if not value:
            return False
        return value == self.uid or value == self.display_name


@dataclass
class StreamStats:
    """Counters over the full, unfiltered stream."""

    total: int = 0
    overdue: int = 0
    today: int = 0
    assigned: int = 0

    def count_for(self, view: View) -> int | None:
        """Counter shown next to a view selector. The week view has none."""
        return {
            View.ALL: self.total,
            View.OVERDUE: self.overdue,
            View.TODAY: self.today,
            View.ASSIGNED: self.assigned,
        }.get(view)


def is_overdue(item: StreamItem, today: date) -> bool:
    return item.due_date is not None and item.due_date < today


def is_due_today(item: StreamItem, today: date) -> bool:
    if item.due_date is None:
        return item.urgency == "today"
    return item.due_date == today


def is_due_this_week(item: StreamItem, today: date) -> bool:
    if item.due_date is None:
        return item.urgency in WEEK_URGENCIES
    return today <= item.due_date <= today + timedelta(days=7)


def is_assigned_to(item: StreamItem, identity: Identity | None) -> bool:
    return identity is not None and identity.matches(item.assigned_to)


def matches_view(
    item: StreamItem,
    view: View,
    today: date,
    identity: Identity | None = None,
) -> bool:
    """Single predicate behind both the view filter and the counters."""
    match view:
        case View.ALL:
            return True
        case View.OVERDUE:
            return is_overdue(item, today)
        case View.TODAY:
            return is_due_today(item, today)
        case View.WEEK:
            return is_due_this_week(item, today)
        case View.ASSIGNED:
            return is_assigned_to(item, identity)
    raise ValueError(f"Unknown view: {view!r}")


def filter_stream(
    stream: list[StreamItem],
    view: View = View.ALL,
    identity: Identity | None = None,
    max_items: int | None = 10,
    as_of: date | datetime | None = None,
) -> list[StreamItem]:
    """
    Apply a view to an already ranked stream, then truncate.

    Pure function - no I/O. Never re-sorts. max_items=None means no limit.
    """
    today = to_day(as_of)
    filtered = [item for item in stream if matches_view(item, view, today, identity)]
    if max_items is None:
        return filtered
    return filtered[:max_items]


def compute_stats(
    stream: list[StreamItem],
    identity: Identity | None = None,
    as_of: date | datetime | None = None,
) -> StreamStats:
    """Count items per view over the full stream, independent of the active view."""
    today = to_day(as_of)
    return StreamStats(
        total=len(stream),
        overdue=sum(1 for i in stream if matches_view(i, View.OVERDUE, today, identity)),
        today=sum(1 for i in stream if matches_view(i, View.TODAY, today, identity)),
        assigned=sum(1 for i in stream if matches_view(i, View.ASSIGNED, today, identity)),
    )
