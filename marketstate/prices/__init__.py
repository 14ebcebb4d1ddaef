"""
Historic price series served from the price store.
"""

from .gateway import (
    HistoricPriceGateway,
    json_safe_row,
    parse_date,
    parse_price,
    parse_price_rows,
)
from .models import (
    CACHE_CONTROL,
    BadRequestError,
    PricePoint,
    PriceSeriesData,
    PriceSeriesEmpty,
    PriceSeriesError,
    PriceSeriesResult,
)

__all__ = [
    "HistoricPriceGateway",
    "parse_price",
    "parse_date",
    "parse_price_rows",
    "json_safe_row",
    "BadRequestError",
    "PricePoint",
    "PriceSeriesData",
    "PriceSeriesEmpty",
    "PriceSeriesError",
    "PriceSeriesResult",
    "CACHE_CONTROL",
]
