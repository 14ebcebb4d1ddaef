"""
Types for historic price series.

A gateway call ends in exactly one of three results. "No data" is
PriceSeriesEmpty, a normal return value; only PriceSeriesError reports a
failure. Invalid input raises BadRequestError before any result exists.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union


class BadRequestError(ValueError):
    """Raised when a caller omits or blanks a required parameter."""
    pass


@dataclass(frozen=True)
class PricePoint:
    """One parsed price observation."""

    date: Any
    price: float


@dataclass
class PriceSeriesData:
    """
    A non-empty series.

    Attributes:
        rows: Rows exactly as the store returned them, served to callers
        points: Parsed, valid subset of rows, ascending by date
    """

    rows: List[Dict[str, Any]]
    points: List[PricePoint] = field(default_factory=list)


@dataclass
class PriceSeriesEmpty:
    """
    No data to serve.

    Attributes:
        reason: "unconfigured", "no_rows" or "no_valid_rows"
    """

    reason: str


@dataclass
class PriceSeriesError:
    """
    The backing store failed.

    Attributes:
        kind: Error category, currently always "StoreError"
        message: Description of the failure, for logs only
    """

    kind: str
    message: str = ""


PriceSeriesResult = Union[PriceSeriesData, PriceSeriesEmpty, PriceSeriesError]

EMPTY_UNCONFIGURED = "unconfigured"
EMPTY_NO_ROWS = "no_rows"
EMPTY_NO_VALID_ROWS = "no_valid_rows"

STORE_ERROR = "StoreError"

# Served alongside successful series
CACHE_CONTROL = "public, s-maxage=3600, stale-while-revalidate"
