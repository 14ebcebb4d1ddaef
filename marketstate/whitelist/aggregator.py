"""
Whitelist aggregation over the exchange contract's paginated views.

The aggregator reads the whitelisted-entry count, then one page bounded by
that count, assigns each entry its on-chain index and filters to active
tokens. The two reads are sequential because the page bound depends on the
count.
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple

from ..chain.abi import UINT256_LIMIT
from ..chain.errors import ContractRevertError, NotFoundError
from .types import WhitelistEntry, WhitelistSnapshot

logger = logging.getLogger(__name__)

# Page size used when the total count is not known yet
DEFAULT_PAGE_SIZE = 100


def _decode_token_info(raw: Any) -> Tuple[str, bool]:
    """Unpack a TokenInfo struct returned either as a tuple or a mapping."""
    if isinstance(raw, dict):
        return raw["tokenAddress"], bool(raw["isActive"])
    token_address, is_active = raw[0], raw[1]
    return token_address, bool(is_active)


class WhitelistAggregator:
    """
    Assemble the token whitelist from a chain reader.

    The reader is anything with an async read(function_name, *args), usually
    a ChainReader or a RetryingChainReader wrapping one.
    """

    def __init__(self, reader):
        self.reader = reader
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def get_count(self) -> int:
        """
        Read the total number of whitelisted entries.

        Raises:
            ConfigurationError: No contract address for the active chain
            RpcError: Transport failure or contract revert
        """
        count = await self.reader.read("viewCountWhitelisted")
        return int(count)

    async def get_page(
        self,
        cursor: int = 0,
        size: Optional[int] = None,
        total_count: Optional[int] = None,
    ) -> WhitelistSnapshot:
        """
        Read one cursor-bounded page of raw whitelist entries.

        Args:
            cursor: Storage position of the first entry
            size: Page size; defaults to the rest of the known total count,
                or DEFAULT_PAGE_SIZE when the count is not known
            total_count: Total count from a previous get_count(), if any

        Returns:
            WhitelistSnapshot whose entries carry index = cursor + position
        """
        if cursor < 0:
            raise ValueError(f"Cursor must not be negative, got: {cursor}")

        if size is None:
            size = max(total_count - cursor, 0) if total_count is not None else DEFAULT_PAGE_SIZE
        if size <= 0:
            return WhitelistSnapshot(total_count=total_count or 0, entries=[], next_cursor=cursor)

        raw_entries, next_cursor = await self.reader.read("viewWhitelisted", cursor, size)
        entries = self._index_entries(raw_entries[:size], cursor)

        if total_count is None:
            # Only a lower bound is known without a count read
            total_count = cursor + len(entries)
        elif cursor + len(entries) > total_count:
            self.logger.warning(
                f"Whitelist grew during read: page ends at {cursor + len(entries)}, "
                f"count was {total_count}"
            )
            entries = entries[: max(total_count - cursor, 0)]

        return WhitelistSnapshot(
            total_count=total_count,
            entries=entries,
            next_cursor=int(next_cursor),
        )

    def _index_entries(self, raw_entries: Sequence[Any], cursor: int) -> List[WhitelistEntry]:
        entries = []
        for position, raw in enumerate(raw_entries):
            token_address, is_active = _decode_token_info(raw)
            entries.append(
                WhitelistEntry(
                    token_address=token_address,
                    is_active=is_active,
                    index=cursor + position,
                )
            )
        return entries

    async def get_all_entries(self) -> WhitelistSnapshot:
        """Read every whitelisted entry, active or not, bounded by the count."""
        total_count = await self.get_count()
        if total_count == 0:
            return WhitelistSnapshot(total_count=0, entries=[], next_cursor=0)
        return await self.get_page(0, total_count, total_count=total_count)

    async def get_active_tokens(self) -> List[WhitelistEntry]:
        """
        Read the active whitelist in ascending index order.

        A zero count returns an empty list without issuing the page call.
        """
        snapshot = await self.get_all_entries()
        active = snapshot.active_entries
        self.logger.info(
            f"Whitelist: {len(active)} active of {len(snapshot.entries)} entries "
            f"(count {snapshot.total_count})"
        )
        return active

    async def get_entry_at(self, index: int) -> WhitelistEntry:
        """
        Look up one entry by its storage index.

        Raises:
            NotFoundError: Index is outside the uint256 range or the contract
                rejects it as out of range
            ConfigurationError: No contract address for the active chain
            RpcError: Any other read failure
        """
        if index < 0 or index >= UINT256_LIMIT:
            raise NotFoundError(f"Whitelist index out of range: {index}")

        try:
            token_address, is_active = await self.reader.read("getTokenInfoAt", index)
        except ContractRevertError as e:
            raise NotFoundError(f"No whitelist entry at index {index}") from e

        return WhitelistEntry(token_address=token_address, is_active=bool(is_active), index=index)
