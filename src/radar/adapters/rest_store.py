"""REST record store adapter - HTTP client for a JSON document API."""

import logging

import requests

from radar.config import Config, load_config
from radar.core.records import (
    COLLECTIONS,
    COMPLETION_UPDATES,
    Goal,
    GroceryItem,
    ProjectNode,
    PurchaseItem,
    Snapshot,
    from_documents,
)
from radar.core.stream import StreamItem

from .errors import StoreError

logger = logging.getLogger(__name__)


class RestRecordStore:
    """
    REST record store adapter.

    Implements RecordStore protocol. Each collection lives at
    {base_url}/{collection}; a record at {base_url}/{collection}/{id}.
    No business logic - just I/O.
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        config: Config | None = None,
        timeout: float = 10.0,
    ):
        if base_url is None or token is None:
            config = config or load_config()
            base_url = base_url if base_url is not None else config.api_base_url
            token = token if token is not None else config.api_token
        if not base_url:
            raise StoreError("No API base URL configured. Set API_BASE_URL in radar.conf.")

        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._session = requests.Session()

    def _headers(self) -> dict:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def _get_collection(self, collection: str) -> list[dict]:
        """Fetch every document in a collection."""
        logger.debug(f"GET {self.base_url}/{collection}")
        resp = self._session.get(
            f"{self.base_url}/{collection}",
            headers=self._headers(),
            timeout=self.timeout,
        )
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, list):
            raise StoreError(f"Expected a list from /{collection}, got {type(data).__name__}")
        return data

    def fetch_projects(self) -> list[ProjectNode]:
        return from_documents(ProjectNode, self._get_collection("projects"), "projects")

    def fetch_groceries(self) -> list[GroceryItem]:
        return from_documents(GroceryItem, self._get_collection("groceries"), "groceries")

    def fetch_purchases(self) -> list[PurchaseItem]:
        return from_documents(PurchaseItem, self._get_collection("purchases"), "purchases")

    def fetch_goals(self) -> list[Goal]:
        return from_documents(Goal, self._get_collection("goals"), "goals")

    def snapshot(self) -> Snapshot:
        """Read all collections back to back into one snapshot."""
        return Snapshot(
            projects=self.fetch_projects(),
            groceries=self.fetch_groceries(),
            purchases=self.fetch_purchases(),
            goals=self.fetch_goals(),
        )

    def mark_complete(self, item: StreamItem) -> None:
        """PATCH the completion fields onto the source document."""
        if item.source_collection not in COLLECTIONS:
            raise KeyError(f"Unknown collection: {item.source_collection}")

        resp = self._session.patch(
            f"{self.base_url}/{item.source_collection}/{item.id}",
            json=COMPLETION_UPDATES[item.source_collection],
            headers=self._headers(),
            timeout=self.timeout,
        )
        if resp.status_code == 404:
            raise KeyError(f"No {item.source_collection} record with id {item.id}")
        resp.raise_for_status()
        logger.info(f"Marked {item.source_collection}/{item.id} complete")
