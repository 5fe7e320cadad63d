"""Pure stream assembly - normalize, flatten, merge and rank records."""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from functools import cmp_to_key
from typing import Any, Iterable

from .records import (
    GOAL_ABANDONED,
    GOAL_ACHIEVED,
    GROCERY_PRIORITY_HIGH,
    MUST_HAVE,
    PRIORITY_CRITICAL,
    PRIORITY_HIGH,
    PURCHASE_CANCELLED,
    PURCHASE_DELIVERED,
    STATUS_COMPLETED,
    Goal,
    GroceryItem,
    ProjectNode,
    PurchaseItem,
)

logger = logging.getLogger(__name__)

GOAL_HORIZON_DAYS = 30

PRIORITY_RANK = {"Critical": 0, "High": 1, "Medium": 2, "Low": 3}
DEFAULT_PRIORITY_RANK = PRIORITY_RANK["Medium"]


class ItemType(str, Enum):
    """What kind of record a stream item came from."""

    PROJECT = "project"
    TASK = "task"
    QUICK_NOTE = "quicknote"
    GROCERY = "grocery"
    PURCHASE = "purchase"
    GOAL = "goal"


@dataclass
class StreamItem:
    """One actionable entry in the attention stream."""

    id: str
    title: str
    type: ItemType
    source_collection: str
    subtitle: str | None = None
    due_date: date | None = None
    urgency: str | None = None
    status: str | None = None
    priority: str | None = None
    owner: str | None = None
    assigned_to: str | None = None
    is_completed: bool = False
    has_reminder: bool = False
    original: Any = None

    @property
    def key(self) -> tuple[str, str]:
        """Primary key - ids are only unique within one source collection."""
        return (self.source_collection, self.id)

    @property
    def priority_rank(self) -> int:
        return PRIORITY_RANK.get(self.priority or "", DEFAULT_PRIORITY_RANK)


# ============== Normalizers ==============


def normalize_project_node(node: ProjectNode, ancestor_path: tuple[str, ...] = ()) -> StreamItem | None:
    """Map a single tree node, or None if it does not need attention."""
    if node.status == STATUS_COMPLETED:
        return None
    if not (node.due_date or node.reminder or node.priority in (PRIORITY_HIGH, PRIORITY_CRITICAL)):
        return None

    if node.is_quick_note:
        item_type = ItemType.QUICK_NOTE
    elif node.is_project:
        item_type = ItemType.PROJECT
    else:
        item_type = ItemType.TASK

    return StreamItem(
        id=node.id,
        title=node.name,
        type=item_type,
        source_collection="projects",
        subtitle=" > ".join(name for name in ancestor_path if name) or None,
        due_date=node.due_date,
        status=node.status or None,
        priority=node.priority,
        owner=node.owner,
        assigned_to=node.assignee,
        is_completed=False,
        has_reminder=bool(node.reminder),
        original=node,
    )


def normalize_grocery(grocery: GroceryItem) -> StreamItem | None:
    if grocery.completed or grocery.is_history:
        return None
    if not (grocery.urgency or grocery.due_date or grocery.priority == GROCERY_PRIORITY_HIGH):
        return None

    return StreamItem(
        id=grocery.id,
        title=grocery.name,
        type=ItemType.GROCERY,
        source_collection="groceries",
        subtitle=grocery.store or grocery.category or None,
        due_date=grocery.due_date,
        urgency=grocery.urgency,
        priority=grocery.priority,
        owner=grocery.owner,
        assigned_to=grocery.assigned_to,
        is_completed=grocery.completed,
        original=grocery,
    )


def normalize_purchase(purchase: PurchaseItem) -> StreamItem | None:
    if purchase.status in (PURCHASE_DELIVERED, PURCHASE_CANCELLED):
        return None
    if not (purchase.urgency or purchase.due_date or purchase.priority_level == MUST_HAVE):
        return None

    return StreamItem(
        id=purchase.id,
        title=purchase.item_name,
        type=ItemType.PURCHASE,
        source_collection="purchases",
        subtitle=purchase.store,
        due_date=purchase.due_date,
        urgency=purchase.urgency,
        status=purchase.status or None,
        owner=purchase.owner,
        assigned_to=purchase.assigned_to,
        is_completed=purchase.status == PURCHASE_DELIVERED,
        original=purchase,
    )


def normalize_goal(goal: Goal, as_of: date | datetime | None = None) -> StreamItem | None:
    """Goals only surface once their deadline is within the horizon."""
    if goal.status in (GOAL_ACHIEVED, GOAL_ABANDONED) or not goal.deadline:
        return None

    now = _as_datetime(as_of)
    deadline = datetime.combine(goal.deadline, time.min)
    days_left = math.ceil((deadline - now).total_seconds() / 86400)
    if days_left > GOAL_HORIZON_DAYS:
        return None

    return StreamItem(
        id=goal.id,
        title=goal.name,
        type=ItemType.GOAL,
        source_collection="goals",
        subtitle=f"{goal.progress}% complete",
        due_date=goal.deadline,
        status=goal.status or None,
        owner=goal.owner,
        is_completed=goal.status == GOAL_ACHIEVED,
        original=goal,
    )


def normalize(
    record: ProjectNode | GroceryItem | PurchaseItem | Goal,
    as_of: date | datetime | None = None,
    ancestor_path: tuple[str, ...] = (),
) -> StreamItem | None:
    """Normalize any source record into a stream item (None = not included)."""
    match record:
        case ProjectNode():
            return normalize_project_node(record, ancestor_path)
        case GroceryItem():
            return normalize_grocery(record)
        case PurchaseItem():
            return normalize_purchase(record)
        case Goal():
            return normalize_goal(record, as_of)
    raise TypeError(f"Cannot normalize {type(record).__name__}")


def _as_datetime(as_of: date | datetime | None) -> datetime:
    if as_of is None:
        return datetime.now()
    if isinstance(as_of, datetime):
        return as_of
    return datetime.combine(as_of, time.min)


# ============== Tree flattening ==============


def flatten_projects(
    nodes: Iterable[ProjectNode],
    ancestor_path: tuple[str, ...] = (),
) -> list[StreamItem]:
    """
    Walk a project/task tree depth-first and collect stream items.

    Archived nodes drop their whole subtree. Nodes that are not themselves
    included are still descended into; the breadcrumb always carries the
    structural ancestry.
    """
    items: list[StreamItem] = []
    for node in nodes:
        if node.is_archived:
            continue

        item = normalize_project_node(node, ancestor_path)
        if item is not None:
            items.append(item)

        if node.subtasks:
            items.extend(flatten_projects(node.subtasks, ancestor_path + (node.name,)))
    return items


# ============== Merge and rank ==============


def compare_items(a: StreamItem, b: StreamItem) -> int:
    """
    Stream order: earlier due date first, undated last.

    Two undated items compare by priority rank. Anything else ties and
    keeps merge order.
    """
    if a.due_date and b.due_date:
        return (a.due_date > b.due_date) - (a.due_date < b.due_date)
    if a.due_date:
        return -1
    if b.due_date:
        return 1
    return a.priority_rank - b.priority_rank


def build_stream(
    projects: Iterable[ProjectNode],
    groceries: Iterable[GroceryItem],
    purchases: Iterable[PurchaseItem],
    goals: Iterable[Goal],
    as_of: date | datetime | None = None,
) -> list[StreamItem]:
    """
    Merge all sources into one ranked attention stream.

    Pure function - no I/O. Pass as_of for reproducible output.
    """
    merged = flatten_projects(projects)
    for record in [*groceries, *purchases, *goals]:
        item = normalize(record, as_of)
        if item is not None:
            merged.append(item)

    seen: set[tuple[str, str]] = set()
    unique = []
    for item in merged:
        if item.key in seen:
            logger.warning(f"Dropping duplicate stream item {item.key}")
            continue
        seen.add(item.key)
        unique.append(item)

    return sorted(unique, key=cmp_to_key(compare_items))
