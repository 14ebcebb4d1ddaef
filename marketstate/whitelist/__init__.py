"""
Token whitelist reads for the limit-order exchange.
"""

from .aggregator import DEFAULT_PAGE_SIZE, WhitelistAggregator
from .types import WhitelistEntry, WhitelistSnapshot

__all__ = [
    "WhitelistAggregator",
    "WhitelistEntry",
    "WhitelistSnapshot",
    "DEFAULT_PAGE_SIZE",
]
