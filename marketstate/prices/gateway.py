"""
Historic price gateway.

Reads one symbol/field series from the price store and decides whether it
counts as data. Parsing is only a gate: successful results carry the rows
exactly as stored, and the parsed points alongside them.
"""

import logging
import math
import re
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

from ..core.storage.base import PriceStorageInterface, StorageError
from .models import (
    EMPTY_NO_ROWS,
    EMPTY_NO_VALID_ROWS,
    EMPTY_UNCONFIGURED,
    STORE_ERROR,
    BadRequestError,
    PricePoint,
    PriceSeriesData,
    PriceSeriesEmpty,
    PriceSeriesError,
    PriceSeriesResult,
)

logger = logging.getLogger(__name__)

# Leading decimal number of a string, as parseFloat reads it
_LEADING_NUMBER = re.compile(
    r"^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)


def parse_price(value: Any) -> Optional[float]:
    """
    Parse one stored price value.

    Numbers pass through, strings contribute their leading number
    ("12.5 USD" -> 12.5). Anything else, and NaN, is invalid.

    Returns:
        The price, or None when the value is not a usable number
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float, Decimal)):
        price = float(value)
    elif isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            return None
        price = float(match.group(1).replace("Infinity", "inf"))
    else:
        return None

    if math.isnan(price):
        return None
    return price


def parse_date(value: Any) -> Optional[datetime]:
    """Parse a stored date; numbers are epoch milliseconds. Unparseable gives None."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def parse_price_rows(rows: List[Dict[str, Any]], field: str) -> List[PricePoint]:
    """Parse {date, <field>} rows, dropping those without a valid price."""
    points = []
    for row in rows:
        price = parse_price(row.get(field))
        if price is None:
            continue
        points.append(PricePoint(date=parse_date(row.get("date")), price=price))
    return points


def json_safe_row(row: Dict[str, Any]) -> Dict[str, Any]:
    """
    Copy of a stored row with NaN and infinite numbers replaced by None.

    Float and numeric columns can hold such values, and JSON cannot encode
    them. Everything else is left as stored.
    """
    safe = {}
    for key, value in row.items():
        if isinstance(value, float) and not math.isfinite(value):
            value = None
        elif isinstance(value, Decimal) and not value.is_finite():
            value = None
        safe[key] = value
    return safe


class HistoricPriceGateway:
    """
    Serve historic price series for one symbol/field pair.

    A gateway without a store (credentials not resolved at startup) answers
    every valid request with PriceSeriesEmpty. The gateway keeps no cache;
    callers rely on the HTTP Cache-Control header instead.
    """

    def __init__(self, store: Optional[PriceStorageInterface]):
        self.store = store
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def is_configured(self) -> bool:
        return self.store is not None

    async def check_store(self) -> Optional[bool]:
        """Whether the store answers; None when no store is configured."""
        if self.store is None:
            return None
        return await self.store.health_check()

    async def get_historic_series(self, symbol: Optional[str], field: Optional[str]) -> PriceSeriesResult:
        """
        Fetch and gate one price series.

        Args:
            symbol: Token symbol, e.g. "HEX"
            field: Price column, e.g. "priceUSD"

        Returns:
            PriceSeriesData, PriceSeriesEmpty or PriceSeriesError

        Raises:
            BadRequestError: symbol or field missing or blank
        """
        if not symbol or not symbol.strip() or not field or not field.strip():
            raise BadRequestError("Missing required parameters")

        self.logger.info(f"Historic series request: symbol={symbol} field={field}")

        if self.store is None:
            self.logger.info("Price store not configured, returning empty data")
            return PriceSeriesEmpty(EMPTY_UNCONFIGURED)

        try:
            rows = await self.store.fetch_field_rows(symbol, field)
        except StorageError as e:
            self.logger.error(f"Price store error for {symbol}/{field}: {e}")
            return PriceSeriesError(STORE_ERROR, str(e))
        except Exception as e:
            self.logger.exception(f"Unexpected price store failure for {symbol}/{field}")
            return PriceSeriesError(STORE_ERROR, str(e))

        if not rows:
            self.logger.info(f"No data found for {symbol}/{field}")
            return PriceSeriesEmpty(EMPTY_NO_ROWS)

        points = parse_price_rows(rows, field)
        if not points:
            self.logger.info(f"No valid data after parsing {len(rows)} rows for {symbol}/{field}")
            return PriceSeriesEmpty(EMPTY_NO_VALID_ROWS)

        self.logger.info(f"Returning {len(rows)} rows for {symbol}/{field} ({len(points)} valid)")
        return PriceSeriesData(rows=rows, points=points)
