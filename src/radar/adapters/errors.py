"""Adapter errors."""


class StoreError(Exception):
    """Raised when a record store returns something that cannot be read."""

    pass
