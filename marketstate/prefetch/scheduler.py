"""
Background prefetching of static assets (coin logos).

Targets are ordered priority-first, then fetched in fixed-size batches: every
fetch in a batch starts at once, and the next batch is issued after a short
delay without waiting for the previous one to finish. Missing assets are
expected; failures are counted as loaded for progress purposes and never
raised.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Dict, Iterable, List, Optional, Set, Tuple

import aiohttp

from ..config import PrefetchConfig

logger = logging.getLogger(__name__)

FetchFunc = Callable[[str], Awaitable[bool]]


class PrefetchState(str, Enum):
    REQUESTED = "requested"
    IN_FLIGHT = "in_flight"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class PrefetchTarget:
    """An asset id and whether it belongs in the priority prefix."""

    id: str
    priority: bool = False


def partition_targets(targets: Iterable[PrefetchTarget]) -> Tuple[List[str], List[str]]:
    """
    Split targets into de-duplicated priority and remaining ids.

    Both lists keep their given order. An id flagged priority anywhere is
    only scheduled in the priority list.
    """
    targets = list(targets)
    priority_ids: List[str] = []
    seen: Set[str] = set()
    for target in targets:
        if target.priority and target.id not in seen:
            seen.add(target.id)
            priority_ids.append(target.id)

    other_ids: List[str] = []
    for target in targets:
        if target.id not in seen:
            seen.add(target.id)
            other_ids.append(target.id)

    return priority_ids, other_ids


def order_targets(targets: Iterable[PrefetchTarget]) -> List[str]:
    """Scheduled order: every priority id, then every other id."""
    priority_ids, other_ids = partition_targets(targets)
    return priority_ids + other_ids


class AssetPrefetchScheduler:
    """
    Fire-and-forget batched asset fetching.

    Args:
        config: Batch size, delays and asset URL layout
        fetch: Coroutine function taking an asset id and returning True when
            the asset loaded. Defaults to an HTTP GET against the asset host.
    """

    def __init__(self, config: PrefetchConfig, fetch: Optional[FetchFunc] = None):
        self.config = config
        self._fetch = fetch
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self.loaded_count = 0
        self.failed_count = 0
        self.total_count = 0
        self.priority_count = 0
        self.status: Dict[str, PrefetchState] = {}
        self.dispatched: List[str] = []

        self._priority_logged = False
        self._runs: Set[asyncio.Task] = set()

    order_targets = staticmethod(order_targets)

    def schedule(self, targets: Iterable[PrefetchTarget]) -> asyncio.Task:
        """
        Start prefetching in the background and return immediately.

        Must be called with a running event loop. The returned task never
        raises because of a failed asset.
        """
        task = asyncio.create_task(self.run(list(targets)))
        self._runs.add(task)
        task.add_done_callback(self._runs.discard)
        return task

    async def join(self) -> None:
        """Wait until everything scheduled so far has loaded or failed."""
        if self._runs:
            await asyncio.gather(*list(self._runs))

    async def run(self, targets: List[PrefetchTarget]) -> None:
        """Prefetch targets in the foreground."""
        priority_ids, other_ids = partition_targets(targets)
        asset_ids = priority_ids + other_ids

        self.total_count += len(asset_ids)
        self.priority_count += len(priority_ids)
        for asset_id in asset_ids:
            self.status[asset_id] = PrefetchState.REQUESTED

        if not asset_ids:
            return

        self.logger.info(
            f"Starting to prefetch {len(asset_ids)} assets "
            f"({len(priority_ids)} priority first)..."
        )

        await asyncio.sleep(self.config.INITIAL_DELAY)

        session = None
        fetch = self._fetch
        if fetch is None:
            session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.REQUEST_TIMEOUT)
            )
            fetch = self._http_fetcher(session)

        in_flight: List[asyncio.Task] = []
        try:
            batch_size = self.config.BATCH_SIZE
            for start in range(0, len(asset_ids), batch_size):
                batch = asset_ids[start : start + batch_size]
                for asset_id in batch:
                    self.dispatched.append(asset_id)
                    in_flight.append(asyncio.create_task(self._load(asset_id, fetch)))

                if start + batch_size < len(asset_ids):
                    await asyncio.sleep(self.config.BATCH_DELAY)

            self.logger.info(f"Dispatched all {len(asset_ids)} assets")
            await asyncio.gather(*in_flight)
            self.logger.info(
                f"Finished prefetching {len(asset_ids)} assets ({self.failed_count} missing)"
            )
        finally:
            if session is not None:
                await session.close()

    async def _load(self, asset_id: str, fetch: FetchFunc) -> None:
        self.status[asset_id] = PrefetchState.IN_FLIGHT
        try:
            ok = await fetch(asset_id)
        except Exception as e:
            # Missing logos are normal; callers fall back to a default image
            self.logger.debug(f"Prefetch of {asset_id} failed: {e}")
            ok = False

        if ok:
            self.status[asset_id] = PrefetchState.LOADED
        else:
            self.status[asset_id] = PrefetchState.FAILED
            self.failed_count += 1

        self.loaded_count += 1
        self._log_progress()

    def _log_progress(self) -> None:
        if (
            not self._priority_logged
            and self.priority_count
            and self.loaded_count >= self.priority_count
        ):
            self._priority_logged = True
            self.logger.info(
                f"Priority assets loaded ({self.priority_count}/{self.total_count})"
            )

        if self.loaded_count % self.config.PROGRESS_LOG_INTERVAL == 0:
            self.logger.info(f"Loaded {self.loaded_count}/{self.total_count} assets")

    def _http_fetcher(self, session: aiohttp.ClientSession) -> FetchFunc:
        async def fetch(asset_id: str) -> bool:
            async with session.get(self.config.asset_url(asset_id)) as response:
                await response.read()
                return 200 <= response.status < 300

        return fetch
