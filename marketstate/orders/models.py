"""
Order records across contract schema generations.

Different exchange deployments expose the remaining-fill figure under
different names, or not at all. Each generation gets its own record type;
order_from_record() decides which one a raw mapping is, so downstream code
dispatches on the type instead of probing optional keys.

Attributes shared by every variant:
    order_id: Contract-assigned order id
    remaining_sell_amount: Unsold amount of the sell token, if exposed
    details: Original order terms, if exposed
    status: OrderStatus value, if exposed
    last_update_time: Unix timestamp of the last state change
    redeemed_percentage: Redeemed proportion scaled by 1e18
    owner: Order owner address
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, List, Mapping, Optional, Union


class OrderStatus(IntEnum):
    ACTIVE = 0
    CANCELLED = 1
    COMPLETED = 2


@dataclass(frozen=True)
class OrderDetails:
    """Terms an order was placed with."""

    sell_token: Optional[str] = None
    sell_amount: Optional[int] = None
    buy_tokens_index: List[int] = field(default_factory=list)
    buy_amounts: List[int] = field(default_factory=list)
    expiration_time: Optional[int] = None


@dataclass(frozen=True)
class LegacyOrder:
    """Generation exposing remainingFillPercentage."""

    order_id: int
    remaining_fill_percentage: int
    remaining_sell_amount: Optional[int] = None
    details: Optional[OrderDetails] = None
    status: Optional[OrderStatus] = None
    last_update_time: Optional[int] = None
    redeemed_percentage: Optional[int] = None
    owner: Optional[str] = None


@dataclass(frozen=True)
class CurrentOrder:
    """Generation exposing remainingExecutionPercentage."""

    order_id: int
    remaining_execution_percentage: int
    remaining_sell_amount: Optional[int] = None
    details: Optional[OrderDetails] = None
    status: Optional[OrderStatus] = None
    last_update_time: Optional[int] = None
    redeemed_percentage: Optional[int] = None
    owner: Optional[str] = None


@dataclass(frozen=True)
class AmountOnlyOrder:
    """Generation exposing neither percentage; progress comes from amounts."""

    order_id: int
    remaining_sell_amount: Optional[int] = None
    details: Optional[OrderDetails] = None
    status: Optional[OrderStatus] = None
    last_update_time: Optional[int] = None
    redeemed_percentage: Optional[int] = None
    owner: Optional[str] = None


OrderRecord = Union[LegacyOrder, CurrentOrder, AmountOnlyOrder]


def _optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    return int(value)


def _optional_status(value: Any) -> Optional[OrderStatus]:
    if value is None:
        return None
    try:
        return OrderStatus(int(value))
    except ValueError:
        return None


def _first_present(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return None


def _details_from_record(raw: Any) -> Optional[OrderDetails]:
    if raw is None:
        return None
    if isinstance(raw, OrderDetails):
        return raw
    if not isinstance(raw, Mapping):
        return order_details_from_tuple(raw)
    return OrderDetails(
        sell_token=raw.get("sellToken"),
        sell_amount=_optional_int(raw.get("sellAmount")),
        buy_tokens_index=[int(i) for i in raw.get("buyTokensIndex") or []],
        buy_amounts=[int(a) for a in raw.get("buyAmounts") or []],
        expiration_time=_optional_int(raw.get("expirationTime")),
    )


def order_details_from_tuple(raw: Any) -> OrderDetails:
    """Decode an OrderDetails struct returned positionally by web3."""
    sell_token, sell_amount, buy_tokens_index, buy_amounts, expiration_time = raw
    return OrderDetails(
        sell_token=sell_token,
        sell_amount=int(sell_amount),
        buy_tokens_index=[int(i) for i in buy_tokens_index],
        buy_amounts=[int(a) for a in buy_amounts],
        expiration_time=int(expiration_time),
    )


def order_from_record(record: Mapping[str, Any]) -> OrderRecord:
    """
    Classify a raw order mapping (contract field names) into a record type.

    A field counts as present unless its key is missing or its value is
    None; a zero percentage still selects its generation.

    Args:
        record: orderDetailsWithId-shaped mapping

    Returns:
        LegacyOrder, CurrentOrder or AmountOnlyOrder
    """
    common = {
        "order_id": int(record.get("orderId") or 0),
        "remaining_sell_amount": _optional_int(record.get("remainingSellAmount")),
        "details": _details_from_record(record.get("orderDetails")),
        "status": _optional_status(record.get("status")),
        "last_update_time": _optional_int(record.get("lastUpdateTime")),
        # Some deployments misspell the redeemed field
        "redeemed_percentage": _optional_int(
            _first_present(record, "redeemedPercentage", "redemeedPercentage")
        ),
        "owner": record.get("orderOwner"),
    }

    if record.get("remainingFillPercentage") is not None:
        return LegacyOrder(
            remaining_fill_percentage=int(record["remainingFillPercentage"]), **common
        )
    if record.get("remainingExecutionPercentage") is not None:
        return CurrentOrder(
            remaining_execution_percentage=int(record["remainingExecutionPercentage"]),
            **common,
        )
    return AmountOnlyOrder(**common)


def legacy_order_from_contract(raw: Any) -> LegacyOrder:
    """
    Decode the CompleteOrderDetails tuple returned by getOrderDetails.

    Layout: ((orderIndex, orderOwner), (orderId, remainingFillPercentage,
    redeemedPercentage, lastUpdateTime, status, creationProtocolFee,
    orderDetails)).
    """
    user_details, with_id = raw
    _, owner = user_details
    (
        order_id,
        remaining_fill_percentage,
        redeemed_percentage,
        last_update_time,
        status,
        _creation_protocol_fee,
        details,
    ) = with_id
    return LegacyOrder(
        order_id=int(order_id),
        remaining_fill_percentage=int(remaining_fill_percentage),
        details=order_details_from_tuple(details),
        status=_optional_status(status),
        last_update_time=int(last_update_time),
        redeemed_percentage=int(redeemed_percentage),
        owner=owner,
    )
