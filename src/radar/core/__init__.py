"""Functional core - pure business logic with no I/O."""

from .records import Goal, GroceryItem, ProjectNode, PurchaseItem, Snapshot
from .urgency import Bucket, color_for, due_label, relative_label
from .stream import ItemType, StreamItem, build_stream, flatten_projects, normalize
from .views import Identity, StreamStats, View, compute_stats, filter_stream

__all__ = [
    # Records
    "ProjectNode",
    "GroceryItem",
    "PurchaseItem",
    "Goal",
    "Snapshot",
    # Urgency
    "Bucket",
    "color_for",
    "relative_label",
    "due_label",
    # Stream
    "ItemType",
    "StreamItem",
    "build_stream",
    "flatten_projects",
    "normalize",
    # Views
    "View",
    "Identity",
    "StreamStats",
    "filter_stream",
    "compute_stats",
]
