"""
Normalized order progress.

All values are Python ints scaled by 1e18 (1e18 == 100%). Order amounts can
exceed the exact-integer range of a float, so no float arithmetic happens
here.
"""

from typing import Any, Mapping, Union

from .models import AmountOnlyOrder, CurrentOrder, LegacyOrder, OrderRecord, order_from_record

PERCENTAGE_SCALE = 10 ** 18


def reconcile_fill_percentage(order: Union[OrderRecord, Mapping[str, Any]]) -> int:
    """
    Remaining unfilled proportion of an order, scaled by 1e18.

    Priority:
        1. remainingFillPercentage (LegacyOrder), verbatim
        2. remainingExecutionPercentage (CurrentOrder), verbatim
        3. remaining_sell_amount * 1e18 // details.sell_amount, with the
           denominator defaulting to 1 when the order carries no sell amount
           and a zero denominator yielding 0

    Never raises for a record; a raw mapping is classified first.
    """
    if isinstance(order, Mapping):
        order = order_from_record(order)

    if isinstance(order, LegacyOrder):
        return order.remaining_fill_percentage
    if isinstance(order, CurrentOrder):
        return order.remaining_execution_percentage

    return _percentage_from_amounts(order)


def _percentage_from_amounts(order: AmountOnlyOrder) -> int:
    remaining = order.remaining_sell_amount or 0

    original = 1
    if order.details is not None and order.details.sell_amount is not None:
        original = order.details.sell_amount

    if original == 0:
        return 0

    return remaining * PERCENTAGE_SCALE // original


def filled_percentage(order: Union[OrderRecord, Mapping[str, Any]]) -> int:
    """Filled proportion of an order, scaled by 1e18, floored at zero."""
    return max(PERCENTAGE_SCALE - reconcile_fill_percentage(order), 0)
