"""Riot API HTTP client with adaptive backoff, timeouts and authentication."""

import asyncio
import math
from typing import Optional, Dict, Any, List, Union, Callable, Mapping
import httpx
import structlog

from rift_report.core.config import get_global_settings
from .backoff import AdaptiveBackoff
from .errors import (
    RiotAPIError,
    UpstreamError,
    NotFoundError,
    RateLimitExhaustedError,
    RequestTimeoutError,
)
from .endpoints import RiotAPIEndpoints, RegionLike, PlatformLike
from .constants import Region, Platform, DEFAULT_RETRY_AFTER_SECONDS

logger = structlog.get_logger(__name__)


class RiotAPIClient:
    """Riot API client sharing one adaptive backoff across all of its requests."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        region: Optional[Region] = None,
        platform: Optional[Platform] = None,
        timeout_ms: Optional[int] = None,
        max_retries: Optional[int] = None,
        request_callback: Optional[Callable[[str, int], None]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Riot API client.

        Args:
            api_key: Riot API key (uses config if None)
            region: Default region for regional endpoints
            platform: Default platform for platform endpoints
            timeout_ms: Per-request deadline in milliseconds
            max_retries: Retries granted to a request answered with 429
            request_callback: Optional callback for tracking API requests (metric_name, count)
            transport: Optional httpx transport, mainly for tests

        Raises:
            ValueError: If no API key is configured
        """
        settings = get_global_settings()
        self.api_key = api_key or settings.riot_api_key
        if not self.api_key:
            raise ValueError("Missing RIOT_API_KEY")

        self.region = region or Region(settings.riot_region)
        self.platform = platform or Platform(settings.riot_platform)
        self.timeout_ms = timeout_ms or settings.request_timeout_ms
        self.max_retries = (
            settings.max_rate_limit_retries if max_retries is None else max_retries
        )
        self.request_callback = request_callback

        # Initialize components
        self.backoff = AdaptiveBackoff()
        self.endpoints = RiotAPIEndpoints(self.region, self.platform)

        # HTTP session
        self.session: Optional[httpx.AsyncClient] = None
        self._transport = transport
        self._session_lock = asyncio.Lock()

    async def __aenter__(self):
        """Async context manager entry."""
        await self.start_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def start_session(self) -> None:
        """Start the httpx session."""
        if self.session is None or self.session.is_closed:
            async with self._session_lock:
                if self.session is None or self.session.is_closed:
                    headers = {
                        "X-Riot-Token": self.api_key,
                        "User-Agent": "RiftReport/1.0",
                    }

                    self.session = httpx.AsyncClient(
                        headers=headers,
                        timeout=httpx.Timeout(self.timeout_ms / 1000),
                        transport=self._transport,
                    )

                    logger.info(
                        "Riot API client session started",
                        region=self._enum_str(self.region),
                        platform=self._enum_str(self.platform),
                        api_key_prefix="[REDACTED]" if self.api_key else "None",
                    )

    async def close(self) -> None:
        """Close the httpx session."""
        if self.session and not self.session.is_closed:
            await self.session.aclose()
            logger.info("Riot API client session closed")

    async def _send(self, url: str) -> httpx.Response:
        """Issue one GET, translating transport failures into RiotAPIError."""
        if self.session is None:
            raise RiotAPIError("Session not initialized")

        try:
            return await asyncio.wait_for(
                self.session.get(url), timeout=self.timeout_ms / 1000
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise RequestTimeoutError(url, self.timeout_ms) from e
        except httpx.RequestError as e:
            raise RiotAPIError(f"Request failed: {str(e)}") from e

    @staticmethod
    def _parse_retry_after(headers: Mapping[str, str]) -> float:
        """Read the server-suggested delay in seconds, defaulting to one second."""
        raw = headers.get("Retry-After")
        try:
            value = float(raw) if raw else DEFAULT_RETRY_AFTER_SECONDS
        except ValueError:
            return DEFAULT_RETRY_AFTER_SECONDS
        if not math.isfinite(value) or value < 0:
            return DEFAULT_RETRY_AFTER_SECONDS
        return value

    def _raise_for_status(self, response: httpx.Response, url: str) -> None:
        """Raise UpstreamError (or NotFoundError) for any non-success status."""
        if response.is_success:
            return
        body = response.text or url
        if response.status_code == 404:
            raise NotFoundError(404, body, url)
        raise UpstreamError(response.status_code, body, url)

    async def get_json(self, url: str, retries: Optional[int] = None) -> Any:
        """
        GET a Riot API resource and decode its JSON body.

        A 429 response raises the shared backoff to at least the Retry-After
        hint, sleeps it, doubles it and retries the same URL until the retry
        budget is spent. Any success halves the backoff again.

        Args:
            url: Fully built request URL
            retries: Override for the 429 retry budget

        Returns:
            Decoded JSON document

        Raises:
            RateLimitExhaustedError: 429 persisted past the retry budget
            UpstreamError: Any other non-success status
            RequestTimeoutError: The whole request exceeded its deadline
            UpstreamError: A success status carried an undecodable body
            RiotAPIError: Any other transport failure
        """
        await self.start_session()

        remaining = self.max_retries if retries is None else retries
        attempt = 0

        while True:
            await self.backoff.wait_before_request()
            response = await self._send(url)

            if response.status_code == 429:
                retry_after = self._parse_retry_after(response.headers)
                if remaining <= 0:
                    logger.warning(
                        "Rate limit retries exhausted",
                        url=url,
                        attempts=attempt + 1,
                        backoff_ms=self.backoff.current_ms,
                    )
                    raise RateLimitExhaustedError(
                        response.text or "Rate limit exceeded", retry_after, url
                    )
                await self.backoff.on_rate_limited(retry_after)
                remaining -= 1
                attempt += 1
                continue

            self._raise_for_status(response, url)
            self.backoff.on_success()

            # Success - invoke callback to track request
            if self.request_callback:
                self.request_callback("requests_made", 1)

            try:
                return response.json()
            except ValueError as e:
                raise UpstreamError(response.status_code, response.text, url) from e

    @staticmethod
    def _enum_str(value: Union[Region, Platform, str]) -> str:
        """Extract string value from enum or return as-is."""
        return value.value if hasattr(value, "value") else value

    # Account endpoints
    async def get_account_by_riot_id(
        self, game_name: str, tag_line: str, region: Optional[RegionLike] = None
    ) -> Dict[str, Any]:
        """Get account by Riot ID (gameName#tagLine)."""
        url = self.endpoints.account_by_riot_id(game_name, tag_line, region)
        return await self.get_json(url)

    # Summoner endpoints
    async def get_summoner_by_puuid(
        self, puuid: str, platform: Optional[PlatformLike] = None
    ) -> Dict[str, Any]:
        """Get summoner profile by PUUID."""
        url = self.endpoints.summoner_by_puuid(puuid, platform)
        return await self.get_json(url)

    # Match endpoints
    async def get_match_ids_by_puuid(
        self,
        puuid: str,
        params: Optional[Mapping[str, Any]] = None,
        region: Optional[RegionLike] = None,
    ) -> List[str]:
        """Get one page of match IDs by PUUID, newest first."""
        url = self.endpoints.match_ids_by_puuid(puuid, params, region)
        response = await self.get_json(url)

        if not isinstance(response, list):
            raise RiotAPIError(
                f"Expected list response for match IDs, got {type(response)}"
            )
        return [str(match_id) for match_id in response]

    async def get_match(
        self, match_id: str, region: Optional[RegionLike] = None
    ) -> Dict[str, Any]:
        """Get match details by match ID."""
        url = self.endpoints.match_by_id(match_id, region)
        return await self.get_json(url)

    async def get_match_timeline(
        self, match_id: str, region: Optional[RegionLike] = None
    ) -> Dict[str, Any]:
        """Get the frame-by-frame timeline of a match."""
        url = self.endpoints.match_timeline_by_id(match_id, region)
        return await self.get_json(url)

    # Champion mastery endpoints
    async def get_champion_mastery_by_puuid(
        self, puuid: str, platform: Optional[PlatformLike] = None
    ) -> List[Dict[str, Any]]:
        """Get all champion masteries of a player, highest points first."""
        url = self.endpoints.champion_mastery_by_puuid(puuid, platform)
        return await self.get_json(url)

    # League endpoints
    async def get_league_entries_by_summoner(
        self, summoner_id: str, platform: Optional[PlatformLike] = None
    ) -> List[Dict[str, Any]]:
        """Get ranked league entries by summoner ID."""
        url = self.endpoints.league_entries_by_summoner(summoner_id, platform)
        response = await self.get_json(url)

        # API returns a list of league entries
        if not isinstance(response, list):
            raise RiotAPIError(
                f"Expected list response for league entries, got {type(response)}"
            )
        return response
