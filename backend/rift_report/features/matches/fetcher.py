"""Bounded-concurrency match fetching backed by the shared match cache."""

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

import structlog

from rift_report.core.riot_api import RiotAPIClient, RiotAPIError
from rift_report.core.riot_api.cache import LRUCache, match_cache
from rift_report.core.riot_api.endpoints import RegionLike

logger = structlog.get_logger(__name__)


class RequestThrottle:
    """
    Reservation clock enforcing a minimum spacing between requests.

    The spacing applies to all workers combined: each reservation pushes the
    next allowed time forward by ``rate_ms`` regardless of who asked.
    """

    def __init__(self, rate_ms: int, now: Optional[float] = None):
        self.rate_ms = rate_ms
        self.next_at = now if now is not None else self._now()

    @staticmethod
    def _now() -> float:
        return asyncio.get_running_loop().time()

    def reserve(self, now: float) -> float:
        """Claim the next slot and return how many seconds to wait for it."""
        wait = max(0.0, self.next_at - now)
        self.next_at = max(self.next_at, now) + self.rate_ms / 1000
        return wait

    async def acquire(self) -> None:
        """Wait for a request token; no-op when throttling is disabled."""
        if self.rate_ms <= 0:
            return
        wait = self.reserve(self._now())
        if wait:
            await asyncio.sleep(wait)


@dataclass(frozen=True)
class FetchPolicy:
    """Concurrency and throttle interval chosen for a batch."""

    concurrency: int
    rate_ms: int


def choose_fetch_policy(batch_size: int) -> FetchPolicy:
    """Larger batches get fewer workers and a throttle to avoid 429 storms."""
    if batch_size <= 20:
        return FetchPolicy(concurrency=16, rate_ms=0)
    if batch_size <= 50:
        return FetchPolicy(concurrency=10, rate_ms=35)
    if batch_size <= 120:
        return FetchPolicy(concurrency=8, rate_ms=60)
    return FetchPolicy(concurrency=6, rate_ms=60)


class MatchFetcher:
    """Fetch match bodies with a fixed worker pool, tolerating per-match failure."""

    def __init__(
        self,
        client: RiotAPIClient,
        cache: Optional[LRUCache[str, Dict[str, Any]]] = None,
        region: Optional[RegionLike] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            client: Riot API client used on cache misses
            cache: Match cache (defaults to the process-wide cache)
            region: Regional routing override for match requests
        """
        self.client = client
        self.cache = match_cache if cache is None else cache
        self.region = region

    async def fetch_matches(
        self,
        ids: List[str],
        concurrency: int = 16,
        rate_ms: int = 0,
        stop: Optional[asyncio.Event] = None,
    ) -> List[Dict[str, Any]]:
        """
        Retrieve match documents for ``ids``.

        Workers claim indices from one shared cursor, so no ID is processed
        twice. Results land in a slot array indexed by input position, which
        keeps input order no matter when each fetch completes. Failed matches
        are left out; the batch itself never fails.

        Args:
            ids: Match IDs in the desired output order
            concurrency: Number of workers
            rate_ms: Minimum spacing between upstream requests across all workers
            stop: Once set, workers stop claiming new IDs

        Returns:
            Successfully fetched (or cached) matches in input order
        """
        if not ids:
            return []

        results: List[Optional[Dict[str, Any]]] = [None] * len(ids)
        cursor: Iterator[Tuple[int, str]] = iter(enumerate(ids))
        throttle = RequestThrottle(rate_ms)
        worker_count = max(1, min(concurrency, len(ids)))

        async def worker() -> None:
            for idx, match_id in cursor:
                if stop is not None and stop.is_set():
                    return

                cached = self.cache.get(match_id)
                if cached is not None:
                    results[idx] = cached
                    continue

                try:
                    await throttle.acquire()
                    match = await self.client.get_match(match_id, self.region)
                except RiotAPIError as e:
                    logger.warning(
                        "Match fetch failed, skipping",
                        match_id=match_id,
                        status_code=e.status_code,
                        error=str(e),
                    )
                    continue

                self.cache.set(match_id, match)
                results[idx] = match

        await asyncio.gather(*(worker() for _ in range(worker_count)))

        fetched = [match for match in results if match is not None]
        logger.info(
            "Match batch fetched",
            requested=len(ids),
            fetched=len(fetched),
            concurrency=worker_count,
            rate_ms=rate_ms,
        )
        return fetched
