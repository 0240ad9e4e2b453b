"""
Riot API client package for League of Legends API integration.

This package provides the HTTP client used to ingest match history, including
adaptive 429 backoff, per-request timeouts and a bounded match cache.
"""

from .client import RiotAPIClient
from .backoff import AdaptiveBackoff
from .cache import LRUCache, match_cache
from .errors import (
    RiotAPIError,
    UpstreamError,
    NotFoundError,
    RateLimitExhaustedError,
    RequestTimeoutError,
)
from .models import (
    AccountDTO,
    SummonerDTO,
    ChampionMasteryDTO,
    LeagueEntryDTO,
)
from .endpoints import RiotAPIEndpoints, assert_region_group, platform_from_match_id

__all__ = [
    "RiotAPIClient",
    "AdaptiveBackoff",
    "LRUCache",
    "match_cache",
    "RiotAPIError",
    "UpstreamError",
    "NotFoundError",
    "RateLimitExhaustedError",
    "RequestTimeoutError",
    "AccountDTO",
    "SummonerDTO",
    "ChampionMasteryDTO",
    "LeagueEntryDTO",
    "RiotAPIEndpoints",
    "assert_region_group",
    "platform_from_match_id",
]
