"""Queue-category and map predicates over fetched matches."""

from enum import Enum
from typing import Any, Dict, FrozenSet, List

from rift_report.core.riot_api.constants import MapId, QueueType


class MatchMode(str, Enum):
    """Game-mode scopes a report can be restricted to."""

    ALL = "all"
    RANKED = "ranked"
    UNRANKED = "unranked"
    ARAM = "aram"
    ARENA = "arena"


MODE_QUEUES: Dict[MatchMode, FrozenSet[int]] = {
    MatchMode.RANKED: frozenset(
        {QueueType.RANKED_SOLO_5X5.value, QueueType.RANKED_FLEX_5X5.value}
    ),
    MatchMode.UNRANKED: frozenset(
        {
            QueueType.NORMAL_DRAFT_5X5.value,
            QueueType.NORMAL_BLIND_PICK_5X5.value,
            QueueType.QUICKPLAY.value,
        }
    ),
    MatchMode.ARAM: frozenset({QueueType.ARAM.value}),
    MatchMode.ARENA: frozenset({QueueType.ARENA.value}),
}

# Single-queue modes can be scoped upstream when listing IDs
MODE_UPSTREAM_QUEUE: Dict[MatchMode, int] = {
    MatchMode.ARAM: QueueType.ARAM.value,
    MatchMode.ARENA: QueueType.ARENA.value,
}

QUEUE_LABELS: Dict[int, str] = {
    QueueType.RANKED_SOLO_5X5.value: "Ranked Solo/Duo",
    QueueType.RANKED_FLEX_5X5.value: "Ranked Flex",
    QueueType.NORMAL_DRAFT_5X5.value: "Normal Draft",
    QueueType.NORMAL_BLIND_PICK_5X5.value: "Normal Blind",
    QueueType.QUICKPLAY.value: "Quickplay",
    QueueType.ARAM.value: "ARAM",
    QueueType.ARENA.value: "Arena",
    QueueType.CLASH.value: "Clash",
    QueueType.URF.value: "URF",
    QueueType.ARURF.value: "URF",
}


def _int_field(match: Dict[str, Any], field: str) -> int:
    try:
        return int((match.get("info") or {}).get(field) or 0)
    except (TypeError, ValueError):
        return 0


def queue_id_of(match: Dict[str, Any]) -> int:
    """Queue code of a match, 0 when missing."""
    return _int_field(match, "queueId")


def map_id_of(match: Dict[str, Any]) -> int:
    """Map identifier of a match, 0 when missing."""
    return _int_field(match, "mapId")


def filter_by_mode(
    matches: List[Dict[str, Any]], mode: MatchMode | str
) -> List[Dict[str, Any]]:
    """Keep matches whose queue belongs to ``mode``; ``all`` is the identity."""
    mode = MatchMode(mode)
    if mode is MatchMode.ALL:
        return matches
    queues = MODE_QUEUES[mode]
    return [match for match in matches if queue_id_of(match) in queues]


def only_summoners_rift(matches: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Keep only matches played on the primary 5v5 map."""
    return [m for m in matches if map_id_of(m) == MapId.SUMMONERS_RIFT.value]


def queue_label(queue_id: int) -> str:
    """Human label for common queues."""
    return QUEUE_LABELS.get(queue_id, "Other")
