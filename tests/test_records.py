"""Tests for source record parsing."""

from datetime import date, datetime

import pytest

from radar.core.records import (
    Goal,
    GroceryItem,
    ProjectNode,
    PurchaseItem,
    Snapshot,
    parse_date,
    parse_flag,
)


class TestParseDate:
    def test_iso_date(self):
        assert parse_date("2024-06-10") == date(2024, 6, 10)

    def test_iso_timestamp(self):
        assert parse_date("2024-06-10T23:59:59.999Z") == date(2024, 6, 10)

    def test_space_separated_timestamp(self):
        assert parse_date("2024-06-10 09:00") == date(2024, 6, 10)
        assert parse_date(" 2024-06-10 ") == date(2024, 6, 10)

    def test_date_and_datetime_objects(self):
        assert parse_date(date(2024, 6, 10)) == date(2024, 6, 10)
        assert parse_date(datetime(2024, 6, 10, 8, 30)) == date(2024, 6, 10)

    def test_absent_or_garbage_is_none(self):
        assert parse_date(None) is None
        assert parse_date("") is None
        assert parse_date("next tuesday") is None
        assert parse_date(12345) is None


class TestParseFlag:
    @pytest.mark.parametrize("value", [True, "true", "True", "yes", "1", 1])
    def test_truthy(self, value):
        assert parse_flag(value) is True

    @pytest.mark.parametrize("value", [False, "false", "False", "no", "0", "", 0, None])
    def test_falsy(self, value):
        assert parse_flag(value) is False

    def test_string_false_flags_are_not_set(self):
        node = ProjectNode.from_api({"id": "p", "name": "P", "isArchived": "false", "isQuickNotes": "false"})
        grocery = GroceryItem.from_api({"id": "g", "name": "Milk", "completed": "false", "isHistory": "true"})

        assert node.is_archived is False
        assert node.is_quick_note is False
        assert grocery.completed is False
        assert grocery.is_history is True


class TestProjectNode:
    def test_from_api_recurses_into_subtasks(self):
        node = ProjectNode.from_api(
            {
                "id": "p1",
                "type": "project",
                "name": "House",
                "status": "In Progress",
                "priority": "High",
                "dueDate": "2024-06-12",
                "assignee": "alice",
                "subtasks": [
                    {"id": "t1", "type": "task", "name": "Paint", "status": "Not Started", "reminder": "r1"},
                ],
            }
        )

        assert node.is_project
        assert node.due_date == date(2024, 6, 12)
        assert node.assignee == "alice"
        assert len(node.subtasks) == 1
        assert node.subtasks[0].name == "Paint"
        assert node.subtasks[0].reminder == "r1"
        assert not node.subtasks[0].is_project

    def test_from_api_defaults(self):
        node = ProjectNode.from_api({"id": 7, "name": "Loose end"})

        assert node.id == "7"
        assert node.kind == "task"
        assert node.priority is None
        assert node.due_date is None
        assert node.is_archived is False
        assert node.is_quick_note is False
        assert node.subtasks == []

    def test_quick_notes_flag(self):
        node = ProjectNode.from_api({"id": "q", "name": "Notes", "isQuickNotes": True, "isArchived": True})
        assert node.is_quick_note
        assert node.is_archived


class TestFlatRecords:
    def test_grocery_from_api(self):
        g = GroceryItem.from_api(
            {
                "id": "g1",
                "name": "Milk",
                "category": "Dairy",
                "completed": False,
                "isHistory": False,
                "priority": "high",
                "urgency": "today",
                "assignedTo": "bob",
            }
        )
        assert g.name == "Milk"
        assert g.priority == "high"
        assert g.urgency == "today"
        assert g.assigned_to == "bob"
        assert g.store is None

    def test_purchase_from_api(self):
        p = PurchaseItem.from_api(
            {"id": "x", "itemName": "Desk", "status": "Ordered", "priorityLevel": "Must Have", "store": "IKEA"}
        )
        assert p.item_name == "Desk"
        assert p.priority_level == "Must Have"
        assert p.due_date is None

    def test_goal_from_api(self):
        goal = Goal.from_api({"id": "goal", "name": "Run 10k", "progress": 40, "status": "In Progress", "deadline": "2024-07-01"})
        assert goal.progress == 40
        assert goal.deadline == date(2024, 7, 1)


class TestSnapshot:
    def test_from_api_reads_all_collections(self):
        snap = Snapshot.from_api(
            {
                "projects": [{"id": "p", "name": "P"}],
                "groceries": [{"id": "g", "name": "G"}],
                "purchases": [{"id": "u", "itemName": "U"}],
                "goals": [{"id": "o", "name": "O"}],
            }
        )
        assert [len(snap.projects), len(snap.groceries), len(snap.purchases), len(snap.goals)] == [1, 1, 1, 1]

    def test_missing_collections_are_empty(self):
        snap = Snapshot.from_api({"groceries": None})
        assert snap == Snapshot()

    def test_null_names_become_empty(self):
        snap = Snapshot.from_api(
            {
                "projects": [{"id": "p", "name": None, "subtasks": [{"id": "t", "name": None}]}],
                "groceries": [{"id": "g", "name": None}],
                "purchases": [{"id": "u", "itemName": None}],
                "goals": [{"id": "o", "name": None}],
            }
        )
        assert snap.projects[0].name == ""
        assert snap.projects[0].subtasks[0].name == ""
        assert snap.groceries[0].name == ""
        assert snap.purchases[0].item_name == ""
        assert snap.goals[0].name == ""

    def test_documents_without_id_are_skipped(self, caplog):
        snap = Snapshot.from_api(
            {
                "projects": [{"id": "p", "name": "P", "subtasks": [{"name": "orphan"}, {"id": "t", "name": "T"}]}],
                "groceries": [{"name": "Milk", "urgency": "today"}, {"id": "g2", "name": "Eggs"}],
                "goals": [{"id": "", "name": "Blank"}, "not a document"],
            }
        )

        assert [t.id for t in snap.projects[0].subtasks] == ["t"]
        assert [g.id for g in snap.groceries] == ["g2"]
        assert snap.goals == []
        assert "without an id" in caplog.text
