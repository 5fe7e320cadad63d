"""Shared workflow layer between the CLI and the engine.

Each function reads one snapshot from the configured store and runs the
pure core over it.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from .adapters.json_store import JsonFileStore
from .adapters.rest_store import RestRecordStore
from .config import Config
from .core.records import Snapshot
from .core.stream import StreamItem, build_stream
from .core.views import StreamStats, View, compute_stats, filter_stream
from .ports.record_store import RecordStore

logger = logging.getLogger(__name__)


@dataclass
class StreamResult:
    """A view over the stream, together with the counters for every view."""

    view: View
    items: list[StreamItem]
    stats: StreamStats
    stream: list[StreamItem]


def get_store(config: Config) -> RecordStore:
    """Resolve the record store from config: REST if configured, else the JSON file."""
    if config.api_base_url:
        return RestRecordStore(config.api_base_url, config.api_token)
    return JsonFileStore(config.snapshot_path)


def stream_from_snapshot(snapshot: Snapshot, as_of: datetime | None = None) -> list[StreamItem]:
    return build_stream(
        snapshot.projects,
        snapshot.groceries,
        snapshot.purchases,
        snapshot.goals,
        as_of=as_of,
    )


def load_stream(
    config: Config,
    view: View | None = None,
    max_items: int | None = None,
    as_of: datetime | None = None,
    store: RecordStore | None = None,
) -> StreamResult:
    """Build the stream, apply a view and count every view."""
    as_of = as_of or datetime.now()
    view = view or View.parse(config.default_view)
    max_items = config.max_items if max_items is None else max_items
    store = store or get_store(config)

    stream = stream_from_snapshot(store.snapshot(), as_of)
    identity = config.identity()
    logger.debug(f"Built stream of {len(stream)} items for view {view.value}")

    return StreamResult(
        view=view,
        items=filter_stream(stream, view, identity, max_items, as_of),
        stats=compute_stats(stream, identity, as_of),
        stream=stream,
    )


def find_item(stream: list[StreamItem], source_collection: str, item_id: str) -> StreamItem | None:
    """Look an item up by its (collection, id) primary key."""
    key = (source_collection, item_id)
    return next((item for item in stream if item.key == key), None)


def completion_callback(store: RecordStore) -> Callable[[StreamItem], None]:
    """The on-complete action handed to the presentation layer."""

    def on_complete(item: StreamItem) -> None:
        store.mark_complete(item)

    return on_complete


def complete_item(
    config: Config,
    source_collection: str,
    item_id: str,
    as_of: datetime | None = None,
    store: RecordStore | None = None,
) -> StreamItem:
    """
    Mark the record behind a stream item done.

    Raises KeyError if the item is not currently in the stream.
    """
    store = store or get_store(config)
    stream = stream_from_snapshot(store.snapshot(), as_of or datetime.now())
    item = find_item(stream, source_collection, item_id)
    if item is None:
        raise KeyError(f"{source_collection}/{item_id} is not in the stream")

    completion_callback(store)(item)
    return item
