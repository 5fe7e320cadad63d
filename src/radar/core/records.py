"""Source record models - read-only snapshots of the external stores."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime

logger = logging.getLogger(__name__)

# Project/task status and priority values
STATUS_COMPLETED = "Completed"
PRIORITY_LOW = "Low"
PRIORITY_MEDIUM = "Medium"
PRIORITY_HIGH = "High"
PRIORITY_CRITICAL = "Critical"

# Grocery priority is lower-case in the grocery store
GROCERY_PRIORITY_HIGH = "high"

# Purchase delivery status and priority level
PURCHASE_DELIVERED = "Delivered"
PURCHASE_CANCELLED = "Cancelled"
MUST_HAVE = "Must Have"

# Goal lifecycle
GOAL_ACHIEVED = "Achieved"
GOAL_ABANDONED = "Abandoned"


def parse_date(value) -> date | None:
    """
    Parse a due date leniently.

    Accepts date/datetime objects and ISO strings ("2024-06-10",
    "2024-06-10 09:00", "2024-06-10T09:00:00.000Z"). Anything else
    becomes None.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        value = value.strip()
        try:
            return datetime.fromisoformat(value).date()
        except ValueError:
            pass
        # Older interpreters reject a trailing "Z"; keep the day part
        try:
            return date.fromisoformat(value.split("T")[0])
        except ValueError:
            logger.debug(f"Ignoring unparseable date: {value!r}")
            return None
    return None


_TRUE = {"true", "yes", "1", "on"}


def parse_flag(value) -> bool:
    """Read a boolean field; strings like "false" stay false."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUE
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    return False


def from_documents(record_cls, documents, collection: str) -> list:
    """Build records from store documents, skipping any without an id."""
    records = []
    for doc in documents or []:
        if not isinstance(doc, dict) or doc.get("id") in (None, ""):
            logger.warning(f"Skipping {collection} document without an id: {doc!r}")
            continue
        records.append(record_cls.from_api(doc))
    return records


@dataclass
class ProjectNode:
    """A project, task or quick-note container with nested subtasks."""

    id: str
    name: str
    status: str = ""
    priority: str | None = None
    due_date: date | None = None
    reminder: str | None = None
    owner: str | None = None
    assignee: str | None = None
    is_archived: bool = False
    kind: str = "task"
    is_quick_note: bool = False
    subtasks: list["ProjectNode"] = field(default_factory=list)

    @property
    def is_project(self) -> bool:
        return self.kind == "project"

    @classmethod
    def from_api(cls, data: dict) -> "ProjectNode":
        """Create a node (and its subtree) from a store document."""
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            status=data.get("status", "") or "",
            priority=data.get("priority") or None,
            due_date=parse_date(data.get("dueDate")),
            reminder=data.get("reminder") or None,
            owner=data.get("owner") or None,
            assignee=data.get("assignee") or None,
            is_archived=parse_flag(data.get("isArchived")),
            kind=data.get("type", "task") or "task",
            is_quick_note=parse_flag(data.get("isQuickNotes")),
            subtasks=from_documents(cls, data.get("subtasks"), "projects"),
        )


@dataclass
class GroceryItem:
    """A grocery list entry."""

    id: str
    name: str
    category: str = ""
    store: str | None = None
    due_date: date | None = None
    urgency: str | None = None
    priority: str | None = None
    owner: str | None = None
    assigned_to: str | None = None
    completed: bool = False
    is_history: bool = False

    @classmethod
    def from_api(cls, data: dict) -> "GroceryItem":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            category=data.get("category", "") or "",
            store=data.get("store") or None,
            due_date=parse_date(data.get("dueDate")),
            urgency=data.get("urgency") or None,
            priority=data.get("priority") or None,
            owner=data.get("owner") or None,
            assigned_to=data.get("assignedTo") or None,
            completed=parse_flag(data.get("completed")),
            is_history=parse_flag(data.get("isHistory")),
        )


@dataclass
class PurchaseItem:
    """A purchase request tracked through delivery."""

    id: str
    item_name: str
    status: str = ""
    store: str | None = None
    due_date: date | None = None
    urgency: str | None = None
    priority_level: str | None = None
    owner: str | None = None
    assigned_to: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> "PurchaseItem":
        return cls(
            id=str(data["id"]),
            item_name=data.get("itemName") or "",
            status=data.get("status", "") or "",
            store=data.get("store") or None,
            due_date=parse_date(data.get("dueDate")),
            urgency=data.get("urgency") or None,
            priority_level=data.get("priorityLevel") or None,
            owner=data.get("owner") or None,
            assigned_to=data.get("assignedTo") or None,
        )


@dataclass
class Goal:
    """A goal with progress towards an optional deadline."""

    id: str
    name: str
    progress: int = 0
    status: str = ""
    deadline: date | None = None
    owner: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> "Goal":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            progress=data.get("progress", 0) or 0,
            status=data.get("status", "") or "",
            deadline=parse_date(data.get("deadline")),
            owner=data.get("owner") or None,
        )


@dataclass
class Snapshot:
    """All four source collections, read together."""

    projects: list[ProjectNode] = field(default_factory=list)
    groceries: list[GroceryItem] = field(default_factory=list)
    purchases: list[PurchaseItem] = field(default_factory=list)
    goals: list[Goal] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict) -> "Snapshot":
        """Build a snapshot from a {collection: [documents]} mapping."""
        return cls(
            projects=from_documents(ProjectNode, data.get("projects"), "projects"),
            groceries=from_documents(GroceryItem, data.get("groceries"), "groceries"),
            purchases=from_documents(PurchaseItem, data.get("purchases"), "purchases"),
            goals=from_documents(Goal, data.get("goals"), "goals"),
        )


# Fields written to a source document when its item is marked done
COMPLETION_UPDATES = {
    "projects": {"status": STATUS_COMPLETED},
    "groceries": {"completed": True},
    "purchases": {"status": PURCHASE_DELIVERED},
    "goals": {"status": GOAL_ACHIEVED, "progress": 100},
}

COLLECTIONS = tuple(COMPLETION_UPDATES)
