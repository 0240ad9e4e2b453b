"""Match-ID listing with single-page and exhaustive paging modes."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import structlog

from rift_report.core.riot_api import RiotAPIClient
from rift_report.core.riot_api.constants import (
    MATCH_IDS_MAX_PAGE_SIZE,
    MATCH_IDS_START_CEILING,
)
from rift_report.core.riot_api.endpoints import RegionLike

logger = structlog.get_logger(__name__)


@dataclass
class MatchIdQuery:
    """Options for listing a player's match IDs."""

    count: int = 20
    all: bool = False
    max: int = 300
    queue: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    def base_params(self) -> Dict[str, Any]:
        """Query parameters shared by every page; time bounds pass through verbatim."""
        params: Dict[str, Any] = {}
        if self.queue:
            params["queue"] = self.queue
        if self.start_time:
            params["startTime"] = self.start_time
        if self.end_time:
            params["endTime"] = self.end_time
        return params


async def load_match_ids(
    client: RiotAPIClient,
    puuid: str,
    query: MatchIdQuery,
    region: Optional[RegionLike] = None,
) -> List[str]:
    """
    Resolve a player's match IDs, newest first.

    Single-page mode issues one request for ``count`` IDs. All-mode walks pages
    of ``min(count, 100)`` until a page comes back empty or short, ``max`` IDs
    are collected, or the next offset would reach the upstream ceiling. The
    upstream has no total-count endpoint, so page fullness is the only signal.

    Errors are not swallowed: without IDs there is nothing to aggregate.

    Args:
        client: Riot API client
        puuid: Player PUUID
        query: Paging and filtering options
        region: Regional routing override

    Returns:
        Ordered list of match IDs (at most ``max`` in all-mode)
    """
    base = query.base_params()

    if not query.all:
        params = {**base, "start": 0, "count": query.count}
        return await client.get_match_ids_by_puuid(puuid, params, region)

    page = min(query.count, MATCH_IDS_MAX_PAGE_SIZE)
    start = 0
    collected: List[str] = []
    stop_reason = "max_reached"

    while len(collected) < query.max:
        params = {**base, "start": start, "count": page}
        ids = await client.get_match_ids_by_puuid(puuid, params, region)
        if not ids:
            stop_reason = "empty_page"
            break
        collected.extend(ids)
        if len(ids) < page:
            stop_reason = "short_page"
            break
        start += page
        if start >= MATCH_IDS_START_CEILING:
            stop_reason = "offset_ceiling"
            break

    logger.debug(
        "Match ID paging finished",
        puuid=puuid,
        fetched=len(collected),
        max=query.max,
        stop_reason=stop_reason,
    )
    return collected[: query.max]
