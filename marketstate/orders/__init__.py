"""
Order records and normalized order progress.
"""

from .models import (
    AmountOnlyOrder,
    CurrentOrder,
    LegacyOrder,
    OrderDetails,
    OrderRecord,
    OrderStatus,
    legacy_order_from_contract,
    order_from_record,
)
from .progress import PERCENTAGE_SCALE, filled_percentage, reconcile_fill_percentage
from .reader import OrderBatchConfig, OrderReader

__all__ = [
    "LegacyOrder",
    "CurrentOrder",
    "AmountOnlyOrder",
    "OrderDetails",
    "OrderRecord",
    "OrderStatus",
    "order_from_record",
    "legacy_order_from_contract",
    "reconcile_fill_percentage",
    "filled_percentage",
    "PERCENTAGE_SCALE",
    "OrderReader",
    "OrderBatchConfig",
]
