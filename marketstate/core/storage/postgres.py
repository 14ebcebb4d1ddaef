"""
PostgreSQL storage for historic price series.
"""

import asyncio
import logging
import re
from typing import Any, Dict, List, Optional

import asyncpg
from asyncpg.pool import Pool

from ...config import DatabaseConfig
from .base import (
    ConnectionError,
    DataError,
    PriceStorageInterface,
    StorageBase,
)

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def quote_identifier(name: str) -> str:
    """
    Quote a (possibly schema-qualified) SQL identifier.

    Field names arrive from HTTP query strings, so anything that is not a
    plain identifier is rejected instead of escaped.

    Raises:
        DataError: If any part is not a plain identifier
    """
    parts = name.split(".")
    for part in parts:
        if not _IDENTIFIER.match(part):
            raise DataError(f"Invalid identifier: {name!r}")
    return ".".join(f'"{part}"' for part in parts)


class PostgresPriceStore(StorageBase, PriceStorageInterface):
    """
    Historic price reads from a PostgreSQL table.

    Expected schema: one row per (symbol, date) with one column per price
    field, e.g. historic_prices(symbol, date, priceUSD, priceNative, ...).
    The connection pool is created on first use.
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize PostgreSQL price storage.

        Args:
            config: Configuration with keys:
                - dsn: PostgreSQL connection URL
                - table: Price table name (default: historic_prices)
                - symbol_column: Symbol column (default: symbol)
                - date_column: Date column (default: date)
                - pool_kwargs: Extra asyncpg.create_pool arguments
        """
        super().__init__(config)
        self.pool: Optional[Pool] = None
        self.table = config.get("table", "historic_prices")
        self.symbol_column = config.get("symbol_column", "symbol")
        self.date_column = config.get("date_column", "date")
        self._pool_lock = asyncio.Lock()

    @classmethod
    def from_config(cls, database: DatabaseConfig) -> "PostgresPriceStore":
        return cls(
            {
                "dsn": database.postgres_url,
                "table": database.PRICES_TABLE,
                "symbol_column": database.SYMBOL_COLUMN,
                "date_column": database.DATE_COLUMN,
                "pool_kwargs": database.get_pool_kwargs(),
            }
        )

    async def connect(self) -> None:
        """Establish connection pool to PostgreSQL."""
        async with self._pool_lock:
            if self.pool is not None:
                return
            try:
                self.pool = await asyncpg.create_pool(
                    self.config["dsn"], **self.config.get("pool_kwargs", {})
                )
            except Exception as e:
                logger.error(f"Failed to connect to PostgreSQL: {e}")
                raise ConnectionError(f"PostgreSQL connection failed: {e}") from e

            self.is_connected = True
            logger.info("PostgreSQL connection pool established")

    async def disconnect(self) -> None:
        """Close connection pool."""
        if self.pool:
            await self.pool.close()
            self.pool = None
            self.is_connected = False
            logger.info("PostgreSQL connection pool closed")

    async def health_check(self) -> bool:
        """Check PostgreSQL connection health."""
        try:
            await self.connect()
            async with self.pool.acquire() as conn:
                result = await conn.fetchval("SELECT 1")
                return result == 1
        except Exception as e:
            logger.error(f"PostgreSQL health check failed: {e}")
            return False

    def build_field_query(self, field: str) -> str:
        """SQL selecting one non-null field for a symbol, ascending by date."""
        table = quote_identifier(self.table)
        symbol_column = quote_identifier(self.symbol_column)
        date_column = quote_identifier(self.date_column)
        field_column = quote_identifier(field)
        return (
            f"SELECT {date_column} AS \"date\", {field_column} AS {field_column} "
            f"FROM {table} "
            f"WHERE {symbol_column} = $1 AND {field_column} IS NOT NULL "
            f"ORDER BY {date_column} ASC"
        )

    async def fetch_field_rows(self, symbol: str, field: str) -> List[Dict[str, Any]]:
        """
        Fetch all rows of one price field for a symbol.

        Raises:
            DataError: Invalid field name or failed query
            ConnectionError: The pool could not be created
        """
        query = self.build_field_query(field)
        await self.connect()

        try:
            async with self.pool.acquire() as conn:
                records = await conn.fetch(query, symbol)
        except Exception as e:
            logger.error(f"Historic price query failed for {symbol}/{field}: {e}")
            raise DataError(f"Historic price query failed: {e}") from e

        return [dict(record) for record in records]


def build_price_store(database: DatabaseConfig) -> Optional[PostgresPriceStore]:
    """
    Create the price store, or None when credentials are not resolved.

    None means the historic price feature is disabled, not broken.
    """
    if not database.is_configured:
        logger.info("Price store not configured; historic prices disabled")
        return None
    return PostgresPriceStore.from_config(database)
