"""Riot API endpoint definitions and routing information."""

from typing import Any, Mapping, Optional, Union
from urllib.parse import quote, urlencode

from .constants import Region, Platform

RegionLike = Union[Region, str]
PlatformLike = Union[Platform, str]


class RiotAPIEndpoints:
    """Riot API endpoint definitions and routing."""

    def __init__(
        self, region: Region = Region.AMERICAS, platform: Platform = Platform.NA1
    ):
        """
        Initialize endpoint configuration.

        Args:
            region: Default region for regional endpoints
            platform: Default platform for platform endpoints
        """
        self.region = region
        self.platform = platform

    def get_base_url(self, region: Optional[RegionLike] = None) -> str:
        """Get base URL for regional endpoints."""
        region = region or self.region
        # Handle both Region enum and string
        region_str = region.value if isinstance(region, Region) else region
        return f"https://{region_str}.api.riotgames.com"

    def get_platform_url(self, platform: Optional[PlatformLike] = None) -> str:
        """Get base URL for platform endpoints."""
        platform = platform or self.platform
        # Handle both Platform enum and string
        platform_str = platform.value if isinstance(platform, Platform) else platform
        return f"https://{platform_str}.api.riotgames.com"

    # Account endpoints (Regional)
    def account_by_riot_id(
        self, game_name: str, tag_line: str, region: Optional[RegionLike] = None
    ) -> str:
        """Get account by Riot ID endpoint."""
        base_url = self.get_base_url(region)
        return (
            f"{base_url}/riot/account/v1/accounts/by-riot-id/"
            f"{quote(game_name, safe='')}/{quote(tag_line, safe='')}"
        )

    # Summoner endpoints (Platform)
    def summoner_by_puuid(
        self, puuid: str, platform: Optional[PlatformLike] = None
    ) -> str:
        """Get summoner by PUUID endpoint."""
        platform_url = self.get_platform_url(platform)
        return f"{platform_url}/lol/summoner/v4/summoners/by-puuid/{puuid}"

    # Match endpoints (Regional)
    def match_ids_by_puuid(
        self,
        puuid: str,
        params: Optional[Mapping[str, Any]] = None,
        region: Optional[RegionLike] = None,
    ) -> str:
        """Get match ID list endpoint; query parameters are passed through verbatim."""
        base_url = self.get_base_url(region)
        url = f"{base_url}/lol/match/v5/matches/by-puuid/{puuid}/ids"
        query = {k: v for k, v in (params or {}).items() if v is not None}
        if not query:
            return url
        return f"{url}?{urlencode(query)}"

    def match_by_id(self, match_id: str, region: Optional[RegionLike] = None) -> str:
        """Get match by ID endpoint."""
        base_url = self.get_base_url(region)
        return f"{base_url}/lol/match/v5/matches/{match_id}"

    def match_timeline_by_id(
        self, match_id: str, region: Optional[RegionLike] = None
    ) -> str:
        """Get match timeline endpoint (frame-by-frame stats and events)."""
        return f"{self.match_by_id(match_id, region)}/timeline"

    # Champion mastery endpoints (Platform)
    def champion_mastery_by_puuid(
        self, puuid: str, platform: Optional[PlatformLike] = None
    ) -> str:
        """Get champion masteries by PUUID endpoint."""
        platform_url = self.get_platform_url(platform)
        return (
            f"{platform_url}/lol/champion-mastery/v4/champion-masteries/by-puuid/{puuid}"
        )

    # League endpoints (Platform)
    def league_entries_by_summoner(
        self, summoner_id: str, platform: Optional[PlatformLike] = None
    ) -> str:
        """Get ranked league entries by summoner ID endpoint."""
        platform_url = self.get_platform_url(platform)
        return f"{platform_url}/lol/league/v4/entries/by-summoner/{summoner_id}"


def assert_region_group(value: str) -> Region:
    """
    Validate a regional routing value.

    Raises:
        ValueError: If the value is not one of the four region groups
    """
    try:
        return Region(value.strip().lower())
    except ValueError:
        allowed = ", ".join(region.value for region in Region)
        raise ValueError(f"Invalid region group. Use: {allowed}") from None


def platform_from_match_id(match_id: str) -> str:
    """
    Derive the platform routing value from a match ID prefix.

    Example: "NA1_5012345678" -> "na1"
    """
    prefix = match_id.split("_")[0].lower() if match_id else ""
    return prefix or Platform.NA1.value
