"""
Tests for player report assembly.
"""

import asyncio
from typing import Any, Dict, List
from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from rift_report.core.config import Settings
from rift_report.core.exceptions import InvalidReportQueryError, PlayerReportError
from rift_report.core.riot_api import (
    LRUCache,
    NotFoundError,
    RiotAPIClient,
    UpstreamError,
)
from rift_report.core.riot_api.constants import Region
from rift_report.features.matches import MatchMode
from rift_report.features.player_summary import PlayerReportService, ReportQuery
from rift_report.features.player_summary.service import (
    LANE_PHASE_CONCURRENCY,
    MAX_LANE_PHASE_ROWS,
)

ACCOUNT = {"puuid": "test-puuid-123", "gameName": "Tester", "tagLine": "NA1"}


def simple_timeline(puuid: str) -> Dict[str, Any]:
    me = {"minionsKilled": 70, "jungleMinionsKilled": 5, "totalGold": 4000, "xp": 5000}
    opp = {"minionsKilled": 60, "jungleMinionsKilled": 0, "totalGold": 3500, "xp": 4800}
    return {
        "metadata": {"participants": [puuid] + [f"p{i}" for i in range(2, 11)]},
        "info": {
            "frames": [
                {"timestamp": 600000, "participantFrames": {"1": me, "6": opp}},
            ]
        },
    }


@pytest.fixture
def matches(match_factory) -> Dict[str, Dict[str, Any]]:
    """Two SR ranked games, one ranked game on another map and one ARAM."""
    return {
        "NA1_1": match_factory("NA1_1", queue_id=420),
        "NA1_2": match_factory("NA1_2", queue_id=440),
        "NA1_3": match_factory("NA1_3", queue_id=420, map_id=12),
        "NA1_4": match_factory("NA1_4", queue_id=450, map_id=12),
    }


@pytest.fixture
def mock_riot_client(matches, puuid):
    client = AsyncMock(spec=RiotAPIClient)
    client.get_account_by_riot_id.return_value = ACCOUNT
    client.get_match_ids_by_puuid.return_value = list(matches)
    client.get_match.side_effect = lambda match_id, region=None: matches[match_id]
    client.get_summoner_by_puuid.return_value = {
        "id": "summoner-1",
        "puuid": puuid,
        "profileIconId": 29,
        "summonerLevel": 312,
    }
    client.get_league_entries_by_summoner.return_value = [
        {
            "queueType": "RANKED_SOLO_5x5",
            "tier": "GOLD",
            "rank": "II",
            "leaguePoints": 45,
            "wins": 30,
            "losses": 28,
        }
    ]
    client.get_champion_mastery_by_puuid.return_value = [
        {"championId": 103, "championLevel": 7, "championPoints": 120000},
        {"championId": 1, "championLevel": 5, "championPoints": 30000},
        {"championId": 238, "championLevel": 7, "championPoints": 250000},
        {"championId": 99, "championLevel": 4, "championPoints": 9000},
    ]
    client.get_match_timeline.side_effect = lambda match_id, region=None: (
        simple_timeline(puuid)
    )
    return client


@pytest.fixture
def service(mock_riot_client):
    return PlayerReportService(
        mock_riot_client,
        cache=LRUCache(maxsize=10),
        settings=Settings(riot_api_key="test_api_key", lane_phase_limit=2),
    )


class TestReportQuery:
    def test_defaults(self):
        query = ReportQuery(riot_id="A#B").match_id_query()
        assert (query.count, query.all, query.max, query.queue) == (20, False, 300, None)

    def test_size_all(self):
        query = ReportQuery(riot_id="A#B", size="all", max=100).match_id_query()
        assert (query.count, query.all, query.max) == (100, True, 300)

    def test_size_number_forces_single_page(self):
        query = ReportQuery(riot_id="A#B", size="50", all=True).match_id_query()
        assert (query.count, query.all) == (50, False)

    def test_size_garbage_defaults(self):
        assert ReportQuery(riot_id="A#B", size="lots").match_id_query().count == 20

    def test_clamps(self):
        query = ReportQuery(riot_id="A#B", count=500, max=5000).match_id_query()
        assert (query.count, query.max) == (100, 1000)

    def test_zero_count_defaults(self):
        assert ReportQuery(riot_id="A#B", count=0).match_id_query().count == 20

    @pytest.mark.parametrize(
        "mode, queue", [(MatchMode.ARAM, "450"), (MatchMode.ARENA, "1700")]
    )
    def test_queue_inferred(self, mode, queue):
        assert ReportQuery(riot_id="A#B", mode=mode).match_id_query().queue == queue

    def test_explicit_queue_wins(self):
        query = ReportQuery(riot_id="A#B", mode=MatchMode.ARAM, queue="900")
        assert query.match_id_query().queue == "900"

    def test_time_window_passed_through(self):
        query = ReportQuery(riot_id="A#B", start_time="1", end_time="2")
        assert query.match_id_query().base_params() == {
            "startTime": "1",
            "endTime": "2",
        }

    @pytest.mark.parametrize("riot_id", ["NoTag", "#NA1", "Name#", "  "])
    def test_invalid_riot_id(self, riot_id):
        with pytest.raises(InvalidReportQueryError):
            ReportQuery(riot_id=riot_id).split_riot_id()

    @pytest.mark.parametrize("limit", [-1, MAX_LANE_PHASE_ROWS + 1])
    def test_lane_phase_limit_bounds(self, limit):
        with pytest.raises(ValidationError):
            ReportQuery(riot_id="A#B", lane_phase_limit=limit)

    def test_split_riot_id(self):
        assert ReportQuery(riot_id=" Faker Fan#KR1 ").split_riot_id() == (
            "Faker Fan",
            "KR1",
        )


class TestBuildReport:
    async def test_ranked_report(self, service, mock_riot_client):
        report = await service.build_report(
            ReportQuery(riot_id="Tester#NA1", mode=MatchMode.RANKED)
        )

        assert report.account.game_name == "Tester"
        assert report.profile.profile_icon_id == 29
        assert report.profile.summoner_level == 312
        assert report.profile.platform == "na1"

        # History keeps every ranked game; aggregates are SR-only
        assert [row.id for row in report.history] == ["NA1_1", "NA1_2", "NA1_3"]
        assert report.totals.matches == 2
        assert report.meta.ids == 4
        assert report.meta.mode == "ranked"
        assert report.meta.sr_only is True

        assert report.ranked[0].tier == "GOLD"
        assert [m.champion_id for m in report.mastery] == [238, 103, 1]

        mock_riot_client.get_account_by_riot_id.assert_awaited_once_with(
            "Tester", "NA1", Region.AMERICAS
        )

    async def test_lane_phase_limited(self, service, mock_riot_client):
        report = await service.build_report(ReportQuery(riot_id="Tester#NA1"))

        phases = [row.lane_phase for row in report.history]
        assert phases[0] is not None and phases[1] is not None
        assert phases[0].cs10 == 75
        assert phases[0].gold_diff_10 == 500
        assert phases[2:] == [None, None]
        assert mock_riot_client.get_match_timeline.await_count == 2

    async def test_lane_phase_override(self, service, mock_riot_client):
        await service.build_report(ReportQuery(riot_id="Tester#NA1", lane_phase_limit=0))
        mock_riot_client.get_match_timeline.assert_not_awaited()

    async def test_lane_phase_fetches_are_bounded(
        self, service, mock_riot_client, match_factory, puuid
    ):
        """Timelines are fetched a few at a time, never all at once."""
        ids = [f"NA1_{i}" for i in range(12)]
        mock_riot_client.get_match_ids_by_puuid.return_value = ids
        mock_riot_client.get_match.side_effect = lambda match_id, region=None: (
            match_factory(match_id)
        )
        in_flight = 0
        peak = 0

        async def get_timeline(match_id, region=None):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return simple_timeline(puuid)

        mock_riot_client.get_match_timeline.side_effect = get_timeline

        report = await service.build_report(
            ReportQuery(riot_id="Tester#NA1", lane_phase_limit=12)
        )

        assert all(row.lane_phase is not None for row in report.history)
        assert mock_riot_client.get_match_timeline.await_count == 12
        assert peak == LANE_PHASE_CONCURRENCY

    async def test_sr_only_not_applied_to_all_mode(self, service):
        report = await service.build_report(ReportQuery(riot_id="Tester#NA1"))
        assert report.totals.matches == 4
        assert report.meta.sr_only is False

    async def test_sr_only_disabled(self, service):
        report = await service.build_report(
            ReportQuery(riot_id="Tester#NA1", mode=MatchMode.RANKED, sr_only=False)
        )
        assert report.totals.matches == 3
        assert report.meta.sr_only is False

    async def test_aram_mode(self, service, mock_riot_client):
        report = await service.build_report(
            ReportQuery(riot_id="Tester#NA1", mode=MatchMode.ARAM)
        )

        assert [row.id for row in report.history] == ["NA1_4"]
        assert report.totals.matches == 1
        params = mock_riot_client.get_match_ids_by_puuid.await_args.args[1]
        assert params["queue"] == "450"

    async def test_empty_ids(self, service, mock_riot_client):
        mock_riot_client.get_match_ids_by_puuid.return_value = []

        report = await service.build_report(
            ReportQuery(riot_id="Tester#NA1", mode=MatchMode.RANKED)
        )

        assert report.totals.matches == 0
        assert report.streak.type == "none"
        assert report.history == []
        assert report.profile.platform is None
        assert report.meta.ids == 0
        assert report.meta.sr_only is False
        mock_riot_client.get_summoner_by_puuid.assert_not_awaited()
        mock_riot_client.get_match.assert_not_awaited()

    async def test_profile_failure_degrades(self, service, mock_riot_client):
        mock_riot_client.get_summoner_by_puuid.side_effect = UpstreamError(503, "down")

        report = await service.build_report(ReportQuery(riot_id="Tester#NA1"))

        assert report.profile.profile_icon_id is None
        assert report.profile.platform is None
        assert report.ranked == []
        assert report.totals.matches == 4
        mock_riot_client.get_league_entries_by_summoner.assert_not_awaited()

    async def test_mastery_failure_degrades(self, service, mock_riot_client):
        mock_riot_client.get_champion_mastery_by_puuid.side_effect = UpstreamError(
            403, "forbidden"
        )
        report = await service.build_report(ReportQuery(riot_id="Tester#NA1"))
        assert report.mastery == []
        assert report.ranked != []

    async def test_failed_match_and_timeline_are_skipped(
        self, service, mock_riot_client, matches
    ):
        def get_match(match_id, region=None):
            if match_id == "NA1_2":
                raise UpstreamError(500, "boom")
            return matches[match_id]

        mock_riot_client.get_match.side_effect = get_match
        mock_riot_client.get_match_timeline.side_effect = UpstreamError(404, "gone")

        report = await service.build_report(ReportQuery(riot_id="Tester#NA1"))

        assert [row.id for row in report.history] == ["NA1_1", "NA1_3", "NA1_4"]
        assert all(row.lane_phase is None for row in report.history)

    async def test_invalid_riot_id(self, service, mock_riot_client):
        with pytest.raises(InvalidReportQueryError) as exc_info:
            await service.build_report(ReportQuery(riot_id="Tester"))

        assert exc_info.value.status_code == 400
        assert "GameName#TagLine" in exc_info.value.message
        mock_riot_client.get_account_by_riot_id.assert_not_awaited()

    async def test_invalid_region(self, service):
        with pytest.raises(InvalidReportQueryError) as exc_info:
            await service.build_report(ReportQuery(riot_id="A#B", region="na1"))
        assert "Invalid region group" in exc_info.value.message

    async def test_unknown_account(self, service, mock_riot_client):
        mock_riot_client.get_account_by_riot_id.side_effect = NotFoundError(
            404, "not found"
        )

        with pytest.raises(PlayerReportError) as exc_info:
            await service.build_report(ReportQuery(riot_id="Ghost#NA1"))

        assert exc_info.value.status_code == 404

    async def test_id_listing_failure_aborts(self, service, mock_riot_client):
        mock_riot_client.get_match_ids_by_puuid.side_effect = UpstreamError(
            500, "broken"
        )

        with pytest.raises(PlayerReportError) as exc_info:
            await service.build_report(ReportQuery(riot_id="Tester#NA1"))

        assert exc_info.value.status_code == 500
        assert isinstance(exc_info.value.original_error, UpstreamError)

    async def test_serialized_shape(self, service):
        report = await service.build_report(
            ReportQuery(riot_id="Tester#NA1", mode=MatchMode.RANKED)
        )
        payload: Dict[str, Any] = report.model_dump(by_alias=True)

        for key in ("account", "profile", "totals", "streak", "roles", "champions"):
            assert key in payload
        assert payload["_meta"] == {"ids": 4, "mode": "ranked", "srOnly": True}
        assert "powerPicks" in payload
        history: List[Dict[str, Any]] = payload["history"]
        assert history[0]["lanePhase"]["cs10"] == 75
