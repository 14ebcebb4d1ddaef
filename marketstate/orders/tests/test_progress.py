"""Tests for order progress reconciliation."""
import pytest

from marketstate.orders import (
    PERCENTAGE_SCALE,
    AmountOnlyOrder,
    CurrentOrder,
    LegacyOrder,
    OrderDetails,
    OrderStatus,
    filled_percentage,
    order_from_record,
    reconcile_fill_percentage,
)

HALF = 500000000000000000


class TestReconcileFillPercentage:
    """Test cases for reconcile_fill_percentage."""

    def test_legacy_percentage_is_verbatim(self):
        order = LegacyOrder(order_id=1, remaining_fill_percentage=HALF)

        assert reconcile_fill_percentage(order) == HALF

    def test_current_percentage_is_verbatim(self):
        order = CurrentOrder(order_id=1, remaining_execution_percentage=HALF)

        assert reconcile_fill_percentage(order) == HALF

    def test_amounts_fallback(self):
        order = AmountOnlyOrder(
            order_id=1,
            remaining_sell_amount=50,
            details=OrderDetails(sell_amount=200),
        )

        assert reconcile_fill_percentage(order) == 250000000000000000

    def test_amounts_fallback_is_exact_for_large_values(self):
        sell_amount = 3 * 10**30 + 7
        order = AmountOnlyOrder(
            order_id=1,
            remaining_sell_amount=sell_amount - 1,
            details=OrderDetails(sell_amount=sell_amount),
        )

        assert reconcile_fill_percentage(order) == (sell_amount - 1) * PERCENTAGE_SCALE // sell_amount

    def test_missing_details_and_remaining_gives_zero(self):
        assert reconcile_fill_percentage(AmountOnlyOrder(order_id=1)) == 0

    def test_missing_denominator_defaults_to_one(self):
        order = AmountOnlyOrder(order_id=1, remaining_sell_amount=2)

        assert reconcile_fill_percentage(order) == 2 * PERCENTAGE_SCALE

    def test_zero_denominator_gives_zero(self):
        order = AmountOnlyOrder(
            order_id=1,
            remaining_sell_amount=10,
            details=OrderDetails(sell_amount=0),
        )

        assert reconcile_fill_percentage(order) == 0

    def test_raw_mapping_is_classified(self):
        record = {"orderId": 3, "remainingFillPercentage": str(HALF)}

        assert reconcile_fill_percentage(record) == HALF

    def test_zero_percentage_counts_as_present(self):
        record = {
            "orderId": 3,
            "remainingFillPercentage": 0,
            "remainingExecutionPercentage": HALF,
        }

        assert reconcile_fill_percentage(record) == 0

    def test_legacy_field_takes_priority(self):
        record = {
            "orderId": 3,
            "remainingFillPercentage": HALF,
            "remainingExecutionPercentage": 1,
            "remainingSellAmount": 1,
            "orderDetails": {"sellAmount": 1},
        }

        assert reconcile_fill_percentage(record) == HALF

    def test_filled_percentage(self):
        order = LegacyOrder(order_id=1, remaining_fill_percentage=HALF // 2)

        assert filled_percentage(order) == PERCENTAGE_SCALE - HALF // 2

    def test_filled_percentage_floors_at_zero(self):
        order = AmountOnlyOrder(order_id=1, remaining_sell_amount=2)

        assert filled_percentage(order) == 0


class TestOrderFromRecord:
    """Test cases for raw record classification."""

    def test_amount_only_record(self):
        order = order_from_record(
            {
                "orderId": "9",
                "remainingSellAmount": "50",
                "orderDetails": {"sellToken": "0xabc", "sellAmount": "200", "buyTokensIndex": ["1"]},
                "status": 2,
            }
        )

        assert isinstance(order, AmountOnlyOrder)
        assert order.order_id == 9
        assert order.details.sell_amount == 200
        assert order.details.buy_tokens_index == [1]
        assert order.status is OrderStatus.COMPLETED

    @pytest.mark.parametrize("key", ["redeemedPercentage", "redemeedPercentage"])
    def test_redeemed_percentage_spellings(self, key):
        order = order_from_record({"orderId": 1, "remainingExecutionPercentage": 5, key: 7})

        assert isinstance(order, CurrentOrder)
        assert order.redeemed_percentage == 7

    def test_unknown_status_is_dropped(self):
        order = order_from_record({"orderId": 1, "status": 42})

        assert order.status is None
