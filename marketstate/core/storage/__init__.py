"""
Storage layer for marketstate.

The backing store for historic price series is PostgreSQL, read through an
asyncpg pool.

Usage:
    from marketstate.core.storage import build_price_store

    store = build_price_store(config.database)
    if store is not None:
        rows = await store.fetch_field_rows("HEX", "priceUSD")
"""

from .base import (
    ConnectionError,
    DataError,
    PriceStorageInterface,
    StorageBase,
    StorageError,
)
from .postgres import PostgresPriceStore, build_price_store, quote_identifier

__all__ = [
    "StorageBase",
    "StorageError",
    "ConnectionError",
    "DataError",
    "PriceStorageInterface",
    "PostgresPriceStore",
    "build_price_store",
    "quote_identifier",
]
