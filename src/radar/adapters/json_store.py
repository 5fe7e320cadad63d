"""File-based record store adapter."""

import json
import logging
from pathlib import Path

from radar.core.records import (
    COLLECTIONS,
    COMPLETION_UPDATES,
    Goal,
    GroceryItem,
    ProjectNode,
    PurchaseItem,
    Snapshot,
)
from radar.core.stream import StreamItem

from .errors import StoreError

logger = logging.getLogger(__name__)


class JsonFileStore:
    """
    JSON snapshot file storage.

    Implements RecordStore protocol. One file holds all four collections
    as {"projects": [...], "groceries": [...], "purchases": [...], "goals": [...]}.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def _read(self) -> dict:
        """Read the raw document. A missing file is an empty store."""
        if not self.path.exists():
            logger.debug(f"No snapshot file at {self.path}")
            return {}
        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as e:
            raise StoreError(f"Invalid JSON in {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"Expected an object at the top of {self.path}")
        return data

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2))

    def fetch_projects(self) -> list[ProjectNode]:
        return self.snapshot().projects

    def fetch_groceries(self) -> list[GroceryItem]:
        return self.snapshot().groceries

    def fetch_purchases(self) -> list[PurchaseItem]:
        return self.snapshot().purchases

    def fetch_goals(self) -> list[Goal]:
        return self.snapshot().goals

    def snapshot(self) -> Snapshot:
        """Read all collections from a single file read."""
        return Snapshot.from_api(self._read())

    def mark_complete(self, item: StreamItem) -> None:
        """Apply the collection's completion fields to the matching document."""
        if item.source_collection not in COLLECTIONS:
            raise KeyError(f"Unknown collection: {item.source_collection}")

        data = self._read()
        docs = data.get(item.source_collection) or []
        doc = _find_document(docs, item.id, recursive=item.source_collection == "projects")
        if doc is None:
            raise KeyError(f"No {item.source_collection} record with id {item.id}")

        doc.update(COMPLETION_UPDATES[item.source_collection])
        self._write(data)
        logger.info(f"Marked {item.source_collection}/{item.id} complete")


def _find_document(docs: list[dict], doc_id: str, recursive: bool = False) -> dict | None:
    """Find a document by id, descending into subtasks for project trees."""
    for doc in docs:
        if str(doc.get("id")) == doc_id:
            return doc
        if recursive and doc.get("subtasks"):
            found = _find_document(doc["subtasks"], doc_id, recursive=True)
            if found is not None:
                return found
    return None
