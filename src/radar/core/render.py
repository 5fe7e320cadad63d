"""Pure text formatting for the attention stream - no I/O dependencies."""

from datetime import date, datetime

from .records import PRIORITY_CRITICAL, PRIORITY_HIGH
from .stream import StreamItem
from .urgency import color_for, due_label
from .views import StreamStats, View

EMPTY_MESSAGE = "All caught up! No urgent tasks or deadlines coming up."

VIEW_LABELS = {
    View.ALL: "All",
    View.OVERDUE: "Overdue",
    View.TODAY: "Today",
    View.WEEK: "This Week",
    View.ASSIGNED: "Assigned to Me",
}


def format_item_line(item: StreamItem, as_of: date | datetime | None = None) -> str:
    """
    Format a single stream item for display.

    Pure function - no I/O.
    """
    parts = [f"- [{item.type.value}] {item.title}"]
    if item.has_reminder:
        parts.append("(reminder)")
    if item.subtitle:
        parts.append(f"· {item.subtitle}")

    label = due_label(item.urgency, item.due_date, as_of)
    if label:
        parts.append(f"· {label}")

    bucket = color_for(item.urgency, item.due_date, as_of)
    parts.append(f"[{bucket.value}]")

    if item.priority in (PRIORITY_HIGH, PRIORITY_CRITICAL):
        parts.append(f"!{item.priority}")
    return " ".join(parts)


def format_filter_bar(stats: StreamStats, active: View = View.ALL) -> str:
    """View selector row; counters are shown only when non-zero."""
    buttons = []
    for view, label in VIEW_LABELS.items():
        count = stats.count_for(view)
        text = f"{label} ({count})" if count else label
        buttons.append(f"[{text}]" if view == active else text)
    return " | ".join(buttons)


def format_stream(
    items: list[StreamItem],
    stats: StreamStats,
    view: View = View.ALL,
    as_of: date | datetime | None = None,
    show_filters: bool = True,
) -> str:
    """Render a filtered slice of the stream as plain text."""
    if stats.total == 0:
        return EMPTY_MESSAGE

    lines = []
    if show_filters:
        lines.append(format_filter_bar(stats, view))
        lines.append("")

    lines.extend(format_item_line(item, as_of) for item in items)
    if not items:
        lines.append("Nothing in this view.")

    if view == View.ALL and len(items) < stats.total:
        lines.append("")
        lines.append(f"Showing {len(items)} of {stats.total} items")
    return "\n".join(lines)


def item_to_dict(item: StreamItem, as_of: date | datetime | None = None) -> dict:
    """JSON-ready representation of a stream item, with its derived labels."""
    return {
        "id": item.id,
        "source_collection": item.source_collection,
        "type": item.type.value,
        "title": item.title,
        "subtitle": item.subtitle,
        "due_date": item.due_date.isoformat() if item.due_date else None,
        "urgency": item.urgency,
        "status": item.status,
        "priority": item.priority,
        "owner": item.owner,
        "assigned_to": item.assigned_to,
        "is_completed": item.is_completed,
        "has_reminder": item.has_reminder,
        "bucket": color_for(item.urgency, item.due_date, as_of).value,
        "label": due_label(item.urgency, item.due_date, as_of),
    }
