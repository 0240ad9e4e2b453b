"""
Tests for match-ID paging.
"""

from typing import Any, Dict, List
from unittest.mock import AsyncMock

import pytest

from rift_report.core.riot_api import RiotAPIClient, UpstreamError
from rift_report.features.matches import MatchIdQuery, load_match_ids


def paged_ids(total: int):
    """Side effect serving ``total`` sequential IDs page by page."""

    async def side_effect(puuid: str, params: Dict[str, Any], region=None) -> List[str]:
        start, count = params["start"], params["count"]
        return [f"NA1_{i}" for i in range(start, min(start + count, total))]

    return side_effect


@pytest.fixture
def mock_riot_client():
    return AsyncMock(spec=RiotAPIClient)


class TestSinglePage:
    async def test_one_request_with_count(self, mock_riot_client):
        """Single-page mode issues exactly one request at offset 0."""
        mock_riot_client.get_match_ids_by_puuid.return_value = ["NA1_1", "NA1_2"]

        ids = await load_match_ids(mock_riot_client, "puuid", MatchIdQuery())

        assert ids == ["NA1_1", "NA1_2"]
        mock_riot_client.get_match_ids_by_puuid.assert_awaited_once_with(
            "puuid", {"start": 0, "count": 20}, None
        )

    async def test_filters_forwarded(self, mock_riot_client):
        """Queue and time bounds pass through unchanged."""
        mock_riot_client.get_match_ids_by_puuid.return_value = []
        query = MatchIdQuery(
            count=5, queue="450", start_time="1700000000", end_time="1710000000"
        )

        await load_match_ids(mock_riot_client, "puuid", query, "europe")

        mock_riot_client.get_match_ids_by_puuid.assert_awaited_once_with(
            "puuid",
            {
                "queue": "450",
                "startTime": "1700000000",
                "endTime": "1710000000",
                "start": 0,
                "count": 5,
            },
            "europe",
        )


class TestAllMode:
    async def test_truncates_to_max(self, mock_riot_client):
        """Full pages are walked until max is reached, then trimmed."""
        mock_riot_client.get_match_ids_by_puuid.side_effect = paged_ids(10_000)

        ids = await load_match_ids(
            mock_riot_client, "puuid", MatchIdQuery(count=100, all=True, max=250)
        )

        assert len(ids) == 250
        assert ids[0] == "NA1_0"
        assert ids[-1] == "NA1_249"
        starts = [
            call.args[1]["start"]
            for call in mock_riot_client.get_match_ids_by_puuid.await_args_list
        ]
        assert starts == [0, 100, 200]

    async def test_short_page_stops(self, mock_riot_client):
        """A page shorter than requested ends paging."""
        mock_riot_client.get_match_ids_by_puuid.side_effect = paged_ids(140)

        ids = await load_match_ids(
            mock_riot_client, "puuid", MatchIdQuery(count=100, all=True, max=1000)
        )

        assert len(ids) == 140
        assert mock_riot_client.get_match_ids_by_puuid.await_count == 2

    async def test_empty_page_stops(self, mock_riot_client):
        """An empty page ends paging."""
        mock_riot_client.get_match_ids_by_puuid.side_effect = paged_ids(200)

        ids = await load_match_ids(
            mock_riot_client, "puuid", MatchIdQuery(count=100, all=True, max=1000)
        )

        assert len(ids) == 200
        assert mock_riot_client.get_match_ids_by_puuid.await_count == 3

    async def test_page_size_capped(self, mock_riot_client):
        """Pages never exceed 100 IDs."""
        mock_riot_client.get_match_ids_by_puuid.side_effect = paged_ids(0)

        await load_match_ids(
            mock_riot_client, "puuid", MatchIdQuery(count=500, all=True, max=300)
        )

        call = mock_riot_client.get_match_ids_by_puuid.await_args
        assert call.args[1]["count"] == 100

    async def test_offset_ceiling(self, mock_riot_client):
        """Paging stops once the next offset reaches 5000."""
        mock_riot_client.get_match_ids_by_puuid.side_effect = paged_ids(1_000_000)

        ids = await load_match_ids(
            mock_riot_client, "puuid", MatchIdQuery(count=100, all=True, max=100_000)
        )

        assert len(ids) == 5000
        assert mock_riot_client.get_match_ids_by_puuid.await_count == 50

    async def test_errors_propagate(self, mock_riot_client):
        """Listing failures are not swallowed."""
        mock_riot_client.get_match_ids_by_puuid.side_effect = UpstreamError(
            500, "boom"
        )

        with pytest.raises(UpstreamError):
            await load_match_ids(
                mock_riot_client, "puuid", MatchIdQuery(all=True, count=100)
            )
