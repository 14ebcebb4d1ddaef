"""
Batched background prefetching of static assets.
"""

from .scheduler import (
    AssetPrefetchScheduler,
    PrefetchState,
    PrefetchTarget,
    order_targets,
    partition_targets,
)

__all__ = [
    "AssetPrefetchScheduler",
    "PrefetchState",
    "PrefetchTarget",
    "order_targets",
    "partition_targets",
]
