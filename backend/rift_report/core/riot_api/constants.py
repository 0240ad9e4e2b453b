"""Riot API constants and enum definitions."""

from enum import Enum


class Region(str, Enum):
    """Riot API regions for regional routing."""

    AMERICAS = "americas"
    ASIA = "asia"
    EUROPE = "europe"
    SEA = "sea"


class Platform(str, Enum):
    """Riot API platforms for platform routing."""

    BR1 = "br1"
    EUN1 = "eun1"
    EUW1 = "euw1"
    JP1 = "jp1"
    KR = "kr"
    LA1 = "la1"
    LA2 = "la2"
    NA1 = "na1"
    OC1 = "oc1"
    PH2 = "ph2"
    RU = "ru"
    SG2 = "sg2"
    TH2 = "th2"
    TR1 = "tr1"
    TW2 = "tw2"
    VN2 = "vn2"


class QueueType(int, Enum):
    """Riot API queue codes this service scopes matches by."""

    # Ranked queues
    RANKED_SOLO_5X5 = 420
    RANKED_FLEX_5X5 = 440

    # Normal queues
    NORMAL_DRAFT_5X5 = 400
    NORMAL_BLIND_PICK_5X5 = 430
    QUICKPLAY = 490

    # Casual modes
    ARAM = 450
    ARENA = 1700

    # Other queues
    CLASH = 700
    URF = 900
    ARURF = 1900


class MapId(int, Enum):
    """Map identifiers found in match info."""

    SUMMONERS_RIFT = 11
    HOWLING_ABYSS = 12


# Match-ID listing is paged; the upstream refuses offsets at or beyond this value.
MATCH_IDS_MAX_PAGE_SIZE = 100
MATCH_IDS_START_CEILING = 5000

# Adaptive backoff bounds (milliseconds) applied on 429 responses
BACKOFF_FLOOR_MS = 500
BACKOFF_CAP_MS = 8000
DEFAULT_RETRY_AFTER_SECONDS = 1
