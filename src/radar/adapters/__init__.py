"""Adapters - I/O implementations of ports."""

from .errors import StoreError
from .json_store import JsonFileStore
from .rest_store import RestRecordStore

__all__ = [
    "StoreError",
    "JsonFileStore",
    "RestRecordStore",
]
