"""Record store interface."""

from typing import Protocol

from radar.core.records import Goal, GroceryItem, ProjectNode, PurchaseItem, Snapshot
from radar.core.stream import StreamItem


class RecordStore(Protocol):
    """Interface for reading source records and persisting completions."""

    def fetch_projects(self) -> list[ProjectNode]:
        """Fetch the top level of the project/task tree."""
        ...

    def fetch_groceries(self) -> list[GroceryItem]:
        ...

    def fetch_purchases(self) -> list[PurchaseItem]:
        ...

    def fetch_goals(self) -> list[Goal]:
        ...

    def snapshot(self) -> Snapshot:
        """Read all four collections as one consistent snapshot."""
        ...

    def mark_complete(self, item: StreamItem) -> None:
        """Persist that the record behind a stream item is done."""
        ...
