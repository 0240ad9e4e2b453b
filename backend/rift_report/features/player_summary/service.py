"""Player report assembly: resolve, load, fetch, filter, aggregate."""

import asyncio
from typing import List, Optional, Tuple

import structlog
from pydantic import BaseModel, Field, ValidationError

from rift_report.core.config import Settings, get_global_settings
from rift_report.core.exceptions import InvalidReportQueryError, PlayerReportError
from rift_report.core.riot_api import (
    AccountDTO,
    ChampionMasteryDTO,
    LeagueEntryDTO,
    RiotAPIClient,
    RiotAPIError,
    SummonerDTO,
    assert_region_group,
    platform_from_match_id,
)
from rift_report.core.riot_api.cache import LRUCache
from rift_report.core.riot_api.constants import MATCH_IDS_MAX_PAGE_SIZE, Region
from rift_report.features.matches.fetcher import MatchFetcher, choose_fetch_policy
from rift_report.features.matches.filters import (
    MODE_UPSTREAM_QUEUE,
    MatchMode,
    filter_by_mode,
    only_summoners_rift,
)
from rift_report.features.matches.loader import MatchIdQuery, load_match_ids
from .aggregator import aggregate_for_puuid
from .lane_phase import compute_lane_phase
from .schemas import (
    AccountInfo,
    HistoryRow,
    MasteryEntry,
    PlayerReport,
    ProfileInfo,
    RankedEntry,
    ReportMeta,
    Summary,
)
from .transformers import to_history_rows

logger = structlog.get_logger(__name__)

DEFAULT_COUNT = 20
DEFAULT_MAX_IDS = 300
MAX_IDS_CEILING = 1000
MASTERY_TOP_N = 3
MAX_LANE_PHASE_ROWS = 20
LANE_PHASE_CONCURRENCY = 4


class ReportQuery(BaseModel):
    """Caller options for one player report."""

    riot_id: str
    region: str = Region.AMERICAS.value
    mode: MatchMode = MatchMode.ALL
    size: Optional[str] = None
    sr_only: bool = True
    count: Optional[int] = DEFAULT_COUNT
    all: bool = False
    max: Optional[int] = DEFAULT_MAX_IDS
    queue: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    lane_phase_limit: Optional[int] = Field(None, ge=0, le=MAX_LANE_PHASE_ROWS)

    def split_riot_id(self) -> Tuple[str, str]:
        """Split ``GameName#TagLine``; raises when either half is missing."""
        parts = self.riot_id.strip().split("#")
        game_name = parts[0].strip() if parts else ""
        tag_line = parts[1].strip() if len(parts) > 1 else ""
        if not game_name or not tag_line:
            raise InvalidReportQueryError(
                "Invalid Riot ID. Use GameName#TagLine",
                context={"riot_id": self.riot_id},
            )
        return game_name, tag_line

    def match_id_query(self) -> MatchIdQuery:
        """Resolve the ``size`` shorthand, clamps and queue inference."""
        count = min(self.count or DEFAULT_COUNT, MATCH_IDS_MAX_PAGE_SIZE)
        fetch_all = self.all
        max_ids = min(self.max or DEFAULT_MAX_IDS, MAX_IDS_CEILING)

        size = (self.size or "").strip().lower()
        if size == "all":
            fetch_all = True
            count = MATCH_IDS_MAX_PAGE_SIZE
            max_ids = max(max_ids, DEFAULT_MAX_IDS)
        elif size:
            try:
                count = min(int(size) or DEFAULT_COUNT, MATCH_IDS_MAX_PAGE_SIZE)
            except ValueError:
                count = DEFAULT_COUNT
            fetch_all = False

        queue = (self.queue or "").strip() or None
        if queue is None and self.mode in MODE_UPSTREAM_QUEUE:
            queue = str(MODE_UPSTREAM_QUEUE[self.mode])

        return MatchIdQuery(
            count=count,
            all=fetch_all,
            max=max_ids,
            queue=queue,
            start_time=self.start_time or None,
            end_time=self.end_time or None,
        )


class PlayerReportService:
    """Builds a PlayerReport from live Riot API data."""

    def __init__(
        self,
        client: RiotAPIClient,
        cache: Optional[LRUCache] = None,
        settings: Optional[Settings] = None,
    ):
        self.client = client
        self.cache = cache
        self.settings = settings or get_global_settings()

    async def build_report(self, query: ReportQuery) -> PlayerReport:
        """
        Produce a full report or raise PlayerReportError.

        Account resolution and match-ID listing failures abort the report.
        Profile, ranked, mastery, match and timeline failures only degrade it.
        """
        try:
            region = assert_region_group(query.region)
        except ValueError as e:
            raise InvalidReportQueryError(str(e), context={"region": query.region})
        game_name, tag_line = query.split_riot_id()

        try:
            account = AccountDTO(
                **await self.client.get_account_by_riot_id(game_name, tag_line, region)
            )
            ids = await load_match_ids(
                self.client, account.puuid, query.match_id_query(), region
            )
        except RiotAPIError as e:
            logger.error(
                "Player report aborted",
                riot_id=query.riot_id,
                status_code=e.status_code,
                error=str(e),
            )
            raise PlayerReportError(
                "Riot account not found" if e.is_not_found() else str(e),
                status_code=404 if e.is_not_found() else 500,
                operation="build_report",
                context={"riot_id": query.riot_id},
                original_error=e,
            ) from e

        account_info = AccountInfo(
            game_name=account.game_name, tag_line=account.tag_line, puuid=account.puuid
        )

        if not ids:
            return PlayerReport(
                account=account_info,
                meta=ReportMeta(ids=0, mode=query.mode.value, sr_only=False),
            )

        platform = platform_from_match_id(ids[0])
        profile, summoner = await self._load_profile(account.puuid, platform)
        ranked, mastery = await asyncio.gather(
            self._load_ranked(summoner, platform),
            self._load_mastery(account.puuid, platform),
        )

        policy = choose_fetch_policy(len(ids))
        fetcher = MatchFetcher(self.client, cache=self.cache, region=region)
        matches = await fetcher.fetch_matches(ids, policy.concurrency, policy.rate_ms)
        matches = filter_by_mode(matches, query.mode)

        history = to_history_rows(account.puuid, matches)

        # SR-only scoping applies to Summoner's Rift modes only
        sr_only = query.sr_only and query.mode in (MatchMode.RANKED, MatchMode.UNRANKED)
        summary: Summary = aggregate_for_puuid(
            account.puuid, only_summoners_rift(matches) if sr_only else matches
        )

        lane_phase_limit = (
            self.settings.lane_phase_limit
            if query.lane_phase_limit is None
            else query.lane_phase_limit
        )
        await self._attach_lane_phases(
            history[:lane_phase_limit], account.puuid, region
        )

        return PlayerReport(
            totals=summary.totals,
            streak=summary.streak,
            roles=summary.roles,
            champions=summary.champions,
            power_picks=summary.power_picks,
            account=account_info,
            profile=profile,
            history=history,
            ranked=ranked,
            mastery=mastery,
            meta=ReportMeta(ids=len(ids), mode=query.mode.value, sr_only=sr_only),
        )

    async def _load_profile(
        self, puuid: str, platform: str
    ) -> Tuple[ProfileInfo, Optional[SummonerDTO]]:
        try:
            summoner = SummonerDTO(
                **await self.client.get_summoner_by_puuid(puuid, platform)
            )
        except (RiotAPIError, ValidationError) as e:
            logger.warning(
                "Profile lookup failed, continuing without it",
                puuid=puuid,
                platform=platform,
                error=str(e),
            )
            return ProfileInfo(), None

        profile = ProfileInfo(
            profile_icon_id=summoner.profile_icon_id,
            summoner_level=summoner.summoner_level,
            platform=platform,
        )
        return profile, summoner

    async def _load_ranked(
        self, summoner: Optional[SummonerDTO], platform: str
    ) -> List[RankedEntry]:
        if summoner is None or not summoner.id:
            return []
        try:
            entries = await self.client.get_league_entries_by_summoner(
                summoner.id, platform
            )
            parsed = [LeagueEntryDTO(**entry) for entry in entries]
        except (RiotAPIError, ValidationError) as e:
            logger.warning("Ranked lookup failed", platform=platform, error=str(e))
            return []

        return [
            RankedEntry(
                queue_type=entry.queue_type,
                tier=entry.tier,
                rank=entry.rank,
                league_points=entry.league_points,
                wins=entry.wins,
                losses=entry.losses,
            )
            for entry in parsed
        ]

    async def _load_mastery(self, puuid: str, platform: str) -> List[MasteryEntry]:
        try:
            entries = await self.client.get_champion_mastery_by_puuid(puuid, platform)
            parsed = [ChampionMasteryDTO(**entry) for entry in entries or []]
        except (RiotAPIError, ValidationError, TypeError) as e:
            logger.warning("Mastery lookup failed", platform=platform, error=str(e))
            return []

        parsed.sort(key=lambda entry: entry.champion_points, reverse=True)
        return [
            MasteryEntry(
                champion_id=entry.champion_id,
                champion_level=entry.champion_level,
                champion_points=entry.champion_points,
            )
            for entry in parsed[:MASTERY_TOP_N]
        ]

    async def _attach_lane_phases(
        self, rows: List[HistoryRow], puuid: str, region: Region
    ) -> None:
        """Fetch timelines a few at a time; a failed timeline leaves its row bare."""
        semaphore = asyncio.Semaphore(LANE_PHASE_CONCURRENCY)

        async def attach(row: HistoryRow) -> None:
            try:
                async with semaphore:
                    timeline = await self.client.get_match_timeline(row.id, region)
            except RiotAPIError as e:
                logger.warning(
                    "Timeline fetch failed, lane phase omitted",
                    match_id=row.id,
                    error=str(e),
                )
                return
            row.lane_phase = compute_lane_phase(timeline, puuid)

        await asyncio.gather(*(attach(row) for row in rows if row.id))
