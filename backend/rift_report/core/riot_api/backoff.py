"""Adaptive backoff shared by every request issued through one client."""

import asyncio

import structlog

from .constants import BACKOFF_CAP_MS, BACKOFF_FLOOR_MS

logger = structlog.get_logger(__name__)


class AdaptiveBackoff:
    """
    Backoff counter that grows on 429 responses and decays on success.

    One instance is owned by one RiotAPIClient, so concurrent reports using
    separate clients never share timers. All mutations happen in synchronous
    sections between awaits, which makes them atomic on the event loop.
    """

    def __init__(
        self, floor_ms: int = BACKOFF_FLOOR_MS, cap_ms: int = BACKOFF_CAP_MS
    ) -> None:
        """
        Initialize backoff state.

        Args:
            floor_ms: Minimum backoff after a rate-limited attempt
            cap_ms: Maximum backoff after a rate-limited attempt
        """
        self.floor_ms = floor_ms
        self.cap_ms = cap_ms
        self.current_ms = 0

    async def wait_before_request(self) -> None:
        """Delay an outgoing request while the upstream is still recovering."""
        delay_ms = self.current_ms
        if delay_ms:
            await asyncio.sleep(delay_ms / 1000)

    async def on_rate_limited(self, retry_after_seconds: float) -> int:
        """
        Raise the backoff to at least the server hint, sleep it, then double it.

        Args:
            retry_after_seconds: Retry-After header value in seconds

        Returns:
            Milliseconds actually slept
        """
        self.current_ms = max(self.current_ms, int(retry_after_seconds * 1000))
        slept_ms = self.current_ms

        logger.info(
            "Rate limited by upstream, backing off",
            retry_after=retry_after_seconds,
            backoff_ms=slept_ms,
        )
        await asyncio.sleep(slept_ms / 1000)

        self.current_ms = min(max(self.current_ms * 2, self.floor_ms), self.cap_ms)
        return slept_ms

    def on_success(self) -> None:
        """Halve the backoff so the client drifts back to zero extra delay."""
        self.current_ms = max(0, self.current_ms // 2)
