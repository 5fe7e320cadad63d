"""Tests for stream text formatting."""

from datetime import date, datetime, timedelta

import pytest

from radar.core.render import (
    EMPTY_MESSAGE,
    format_filter_bar,
    format_item_line,
    format_stream,
    item_to_dict,
)
from radar.core.stream import ItemType, StreamItem
from radar.core.views import StreamStats, View


@pytest.fixture
def now():
    return datetime(2024, 6, 10, 9, 0)


@pytest.fixture
def overdue_task(now):
    return StreamItem(
        id="t1",
        title="Write report",
        type=ItemType.TASK,
        source_collection="projects",
        subtitle="Work > Q3",
        due_date=now.date() - timedelta(days=1),
        priority="High",
        has_reminder=True,
    )


@pytest.fixture
def grocery():
    return StreamItem(
        id="g1",
        title="Milk",
        type=ItemType.GROCERY,
        source_collection="groceries",
        urgency="tomorrow",
    )


class TestFormatItemLine:
    def test_full_line(self, overdue_task, now):
        line = format_item_line(overdue_task, now)
        assert line == "- [task] Write report (reminder) · Work > Q3 · 1d overdue [red] !High"

    def test_undated_uses_urgency_bucket(self, grocery, now):
        assert format_item_line(grocery, now) == "- [grocery] Milk · Tomorrow [orange]"

    def test_pick_a_date_token_has_no_label(self, now):
        item = StreamItem(id="u1", title="Desk", type=ItemType.PURCHASE, source_collection="purchases", urgency="date")
        assert format_item_line(item, now) == "- [purchase] Desk [cyan]"

    def test_medium_priority_has_no_badge(self, now):
        item = StreamItem(id="x", title="X", type=ItemType.TASK, source_collection="projects", priority="Medium")
        assert "!" not in format_item_line(item, now)


class TestFormatFilterBar:
    def test_counts_shown_when_non_zero(self):
        bar = format_filter_bar(StreamStats(total=4, overdue=1, today=0, assigned=2), View.OVERDUE)
        assert bar == "All (4) | [Overdue (1)] | Today | This Week | Assigned to Me (2)"


class TestFormatStream:
    def test_empty_stream(self, now):
        assert format_stream([], StreamStats(), View.ALL, now) == EMPTY_MESSAGE

    def test_truncated_all_view_shows_footer(self, overdue_task, grocery, now):
        text = format_stream([overdue_task], StreamStats(total=2, overdue=1), View.ALL, now)
        assert text.endswith("Showing 1 of 2 items")

    def test_footer_only_for_all_view(self, overdue_task, now):
        text = format_stream([overdue_task], StreamStats(total=2, overdue=1), View.OVERDUE, now)
        assert "Showing" not in text

    def test_filters_can_be_hidden(self, overdue_task, grocery, now):
        stats = StreamStats(total=2, overdue=1)
        shown = format_stream([overdue_task, grocery], stats, View.ALL, now)
        hidden = format_stream([overdue_task, grocery], stats, View.ALL, now, show_filters=False)

        assert shown.startswith("[All (2)]")
        assert hidden.splitlines() == [format_item_line(overdue_task, now), format_item_line(grocery, now)]

    def test_empty_view_over_non_empty_stream(self, now):
        text = format_stream([], StreamStats(total=3), View.TODAY, now, show_filters=False)
        assert text == "Nothing in this view."


class TestItemToDict:
    def test_serializes_derived_fields(self, overdue_task, now):
        data = item_to_dict(overdue_task, now)
        assert data["due_date"] == "2024-06-09"
        assert data["type"] == "task"
        assert data["bucket"] == "red"
        assert data["label"] == "1d overdue"
        assert "original" not in data

    def test_undated(self, grocery, now):
        data = item_to_dict(grocery, now)
        assert data["due_date"] is None
        assert data["label"] == "Tomorrow"
        assert data["bucket"] == "orange"
