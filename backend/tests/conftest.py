"""Shared fixtures: match document builders and a clean match cache."""

from typing import Any, Dict, List, Optional

import pytest

from rift_report.core.riot_api.cache import match_cache

PUUID = "test-puuid-123"


def build_participant(puuid: str = PUUID, **overrides: Any) -> Dict[str, Any]:
    """A mid-laner participant record; keyword overrides replace fields."""
    participant = {
        "puuid": puuid,
        "participantId": 1,
        "championName": "Ahri",
        "win": True,
        "kills": 5,
        "deaths": 2,
        "assists": 7,
        "totalMinionsKilled": 180,
        "neutralMinionsKilled": 10,
        "teamPosition": "MIDDLE",
        "individualPosition": "MIDDLE",
        "summoner1Id": 4,
        "summoner2Id": 14,
        "item0": 6655,
        "item1": 3020,
        "item2": 0,
        "item3": 0,
        "item4": 0,
        "item5": 0,
        "item6": 3340,
        "perks": {
            "styles": [
                {
                    "description": "primaryStyle",
                    "style": 8100,
                    "selections": [{"perk": 8112}, {"perk": 8139}],
                },
                {"description": "subStyle", "style": 8300, "selections": []},
            ]
        },
    }
    participant.update(overrides)
    return participant


def build_match(
    match_id: str,
    participant: Optional[Dict[str, Any]] = None,
    queue_id: int = 420,
    map_id: int = 11,
    others: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """A match document holding ``participant`` plus optional other players."""
    participants = [participant or build_participant()] + list(others or [])
    return {
        "metadata": {
            "matchId": match_id,
            "participants": [p["puuid"] for p in participants],
        },
        "info": {
            "gameStartTimestamp": 1710000000000,
            "gameDuration": 1800,
            "queueId": queue_id,
            "mapId": map_id,
            "participants": participants,
        },
    }


@pytest.fixture
def participant_factory():
    """Factory for participant records."""
    return build_participant


@pytest.fixture
def match_factory():
    """Factory for match documents."""
    return build_match


@pytest.fixture(autouse=True)
def clear_match_cache():
    """Keep the process-wide match cache from leaking between tests."""
    match_cache.clear()
    yield
    match_cache.clear()


@pytest.fixture
def puuid():
    """PUUID of the queried player in built matches."""
    return PUUID
