"""
HTTP routes for prices, whitelist and order progress.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..orders import OrderReader, filled_percentage, reconcile_fill_percentage
from ..prices import (
    CACHE_CONTROL,
    HistoricPriceGateway,
    PriceSeriesData,
    PriceSeriesEmpty,
    json_safe_row,
)
from ..whitelist import WhitelistAggregator
from .errors import error_response

router = APIRouter()


def get_gateway(request: Request) -> HistoricPriceGateway:
    return request.app.state.gateway


def get_aggregator(
    request: Request,
    chain_id: Optional[int] = Query(None, alias="chainId", description="Chain id, default chain if omitted"),
) -> WhitelistAggregator:
    return WhitelistAggregator(request.app.state.readers.get(chain_id))


def get_order_reader(
    request: Request,
    chain_id: Optional[int] = Query(None, alias="chainId", description="Chain id, default chain if omitted"),
) -> OrderReader:
    return OrderReader(request.app.state.readers.get(chain_id))


@router.get("/health")
async def health_check(gateway: HistoricPriceGateway = Depends(get_gateway)):
    """Service liveness plus the state of the price store."""
    store_ok = await gateway.check_store()
    if store_ok is None:
        return {"status": "healthy", "priceStore": "disabled"}
    if store_ok:
        return {"status": "healthy", "priceStore": "ok"}
    return {"status": "degraded", "priceStore": "unavailable"}


@router.get("/prices/historic")
async def get_historic_prices(
    symbol: Optional[str] = Query(None, description="Token symbol, e.g. HEX"),
    field: Optional[str] = Query(None, description="Price column, e.g. priceUSD"),
    gateway: HistoricPriceGateway = Depends(get_gateway),
):
    """
    Historic price rows for one symbol and field.

    Unconfigured store, no rows and no valid rows all answer {"data": null};
    only store failures are errors.
    """
    result = await gateway.get_historic_series(symbol, field)

    if isinstance(result, PriceSeriesData):
        return JSONResponse(
            content={"data": jsonable_encoder([json_safe_row(row) for row in result.rows])},
            headers={"Cache-Control": CACHE_CONTROL},
        )
    if isinstance(result, PriceSeriesEmpty):
        return JSONResponse(content={"data": None})
    return error_response(500, "Internal server error")


@router.get("/whitelist/active")
async def get_active_whitelist(aggregator: WhitelistAggregator = Depends(get_aggregator)):
    """Active whitelisted tokens in ascending on-chain index order."""
    entries = await aggregator.get_active_tokens()
    return {"data": [entry.to_dict() for entry in entries]}


@router.get("/whitelist/{index}")
async def get_whitelist_entry(
    index: int = Path(..., description="On-chain whitelist index"),
    aggregator: WhitelistAggregator = Depends(get_aggregator),
):
    entry = await aggregator.get_entry_at(index)
    return {"data": entry.to_dict()}


@router.get("/orders/{order_id}/progress")
async def get_order_progress(
    order_id: int = Path(..., description="Contract order id"),
    order_reader: OrderReader = Depends(get_order_reader),
):
    """
    Remaining and filled proportion of one order.

    Values are scaled by 1e18 and encoded as strings to survive JSON clients
    that parse numbers as doubles.
    """
    order = await order_reader.get_order(order_id)
    return {
        "data": {
            "orderId": str(order.order_id),
            "remainingFillPercentage": str(reconcile_fill_percentage(order)),
            "filledPercentage": str(filled_percentage(order)),
            "status": order.status.name.lower() if order.status is not None else None,
        }
    }
