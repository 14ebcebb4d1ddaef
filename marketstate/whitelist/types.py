"""
Core types for the on-chain token whitelist.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class WhitelistEntry:
    """
    One whitelisted token as stored by the exchange contract.

    Attributes:
        token_address: Token contract address
        is_active: Whether the token is currently tradable
        index: Position of the entry in on-chain storage, assigned at read time
    """

    token_address: str
    is_active: bool
    index: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tokenAddress": self.token_address,
            "isActive": self.is_active,
            "index": self.index,
        }


@dataclass
class WhitelistSnapshot:
    """
    One paginated read of the whitelist.

    Attributes:
        total_count: Number of whitelisted entries known when the page was read
        entries: Entries of the page, ordered by index
        next_cursor: Cursor returned by the contract for the following page
    """

    total_count: int
    entries: List[WhitelistEntry] = field(default_factory=list)
    next_cursor: Optional[int] = None

    def __post_init__(self):
        if len(self.entries) > self.total_count:
            raise ValueError(
                f"Page holds {len(self.entries)} entries but total count is {self.total_count}"
            )

    @property
    def active_entries(self) -> List[WhitelistEntry]:
        return [entry for entry in self.entries if entry.is_active]
