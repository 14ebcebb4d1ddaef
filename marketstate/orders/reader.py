"""
Order reads from the exchange contract.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import List

from ..chain.abi import UINT256_LIMIT
from ..chain.errors import ConfigurationError, ContractRevertError, NotFoundError
from .models import LegacyOrder, legacy_order_from_contract

logger = logging.getLogger(__name__)


@dataclass
class OrderBatchConfig:
    """Batching for full order-book reads."""

    batch_size: int = 10
    batch_delay: float = 0.1


class OrderReader:
    """Fetch and decode order records through a chain reader."""

    def __init__(self, reader, config: OrderBatchConfig = None):
        self.reader = reader
        self.config = config or OrderBatchConfig()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def get_total_order_count(self) -> int:
        return int(await self.reader.read("getTotalOrderCount"))

    async def get_order(self, order_id: int) -> LegacyOrder:
        """
        Read one order by id.

        Raises:
            NotFoundError: Order id is not a positive uint256 or the contract
                reverts on it
            ConfigurationError: No contract address for the active chain
            RpcError: Any other read failure
        """
        if order_id < 1 or order_id >= UINT256_LIMIT:
            raise NotFoundError(f"Order id out of range: {order_id}")

        try:
            raw = await self.reader.read("getOrderDetails", order_id)
        except ContractRevertError as e:
            raise NotFoundError(f"No order with id {order_id}") from e

        return legacy_order_from_contract(raw)

    async def get_all_orders(self) -> List[LegacyOrder]:
        """
        Read every order in id order.

        Orders are fetched concurrently in batches with a pause between
        batches. Orders that fail to load are logged and skipped; a missing
        contract address still raises.
        """
        total = await self.get_total_order_count()
        if total == 0:
            return []

        order_ids = list(range(1, total + 1))
        batch_size = self.config.batch_size
        batches = [order_ids[i : i + batch_size] for i in range(0, len(order_ids), batch_size)]

        orders: List[LegacyOrder] = []
        failed = 0
        for batch_index, batch in enumerate(batches):
            results = await asyncio.gather(
                *(self.get_order(order_id) for order_id in batch),
                return_exceptions=True,
            )
            for order_id, result in zip(batch, results):
                if isinstance(result, ConfigurationError):
                    raise result
                if isinstance(result, Exception):
                    failed += 1
                    self.logger.warning(f"Skipping order {order_id}: {result}")
                    continue
                orders.append(result)

            if batch_index < len(batches) - 1:
                await asyncio.sleep(self.config.batch_delay)

        self.logger.info(f"Loaded {len(orders)}/{total} orders ({failed} failed)")
        return orders
