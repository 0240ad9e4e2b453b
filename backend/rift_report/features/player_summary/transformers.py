"""Data transformation utilities for turning match documents into history rows."""

from typing import Any, Dict, List, Optional

from rift_report.features.matches.filters import map_id_of, queue_id_of, queue_label
from .aggregator import UNKNOWN_CHAMPION, find_participant
from .roles import DEFAULT_ROLE, as_int, infer_role, item_slots, total_cs
from .schemas import HistoryRow, RuneUsage


class HistoryRowTransformer:
    """Utility for building match-history rows for one player."""

    @staticmethod
    def derive_runes(perks: Optional[Dict[str, Any]]) -> RuneUsage:
        """Extract primary style, secondary style and keystone from a perks block.

        Styles are located by their description and fall back to position;
        the keystone is the first selection of the primary style.

        Example:
            >>> perks = {"styles": [{"description": "primaryStyle", "style": 8100,
            ...   "selections": [{"perk": 8112}]}, {"description": "subStyle", "style": 8300}]}
            >>> HistoryRowTransformer.derive_runes(perks).keystone
            8112
        """
        styles = (perks or {}).get("styles")
        if not isinstance(styles, list):
            styles = []

        def pick(description: str, position: int) -> Dict[str, Any]:
            for style in styles:
                if style and style.get("description") == description:
                    return style
            return (styles[position] or {}) if len(styles) > position else {}

        primary = pick("primaryStyle", 0)
        sub = pick("subStyle", 1)
        selections = primary.get("selections") or [{}]

        return RuneUsage(
            primary_style=as_int(primary.get("style")) or None,
            sub_style=as_int(sub.get("style")) or None,
            keystone=as_int((selections[0] or {}).get("perk")) or None,
        )

    @staticmethod
    def to_row(puuid: str, match: Dict[str, Any]) -> HistoryRow:
        """Build one history row; a missing participant yields neutral defaults."""
        info = match.get("info") or {}
        participant = find_participant(match, puuid) or {}
        queue_id = queue_id_of(match)

        kills = as_int(participant.get("kills"))
        deaths = as_int(participant.get("deaths"))
        assists = as_int(participant.get("assists"))
        trinket = as_int(participant.get("item6"))

        return HistoryRow(
            id=str((match.get("metadata") or {}).get("matchId") or ""),
            ts=as_int(info.get("gameStartTimestamp") or info.get("gameCreation")),
            queue_id=queue_id,
            queue_name=queue_label(queue_id),
            map_id=map_id_of(match),
            win=bool(participant.get("win")),
            champion=str(participant.get("championName") or UNKNOWN_CHAMPION),
            kills=kills,
            deaths=deaths,
            assists=assists,
            kda=(kills + assists) / deaths if deaths else float(kills + assists),
            cs=total_cs(participant),
            role=infer_role(participant) if participant else DEFAULT_ROLE,
            duration=max(0, as_int(info.get("gameDuration"))),
            items=[item for item in item_slots(participant) if item],
            trinket=trinket or None,
            spells=[
                spell
                for spell in (
                    as_int(participant.get("summoner1Id")),
                    as_int(participant.get("summoner2Id")),
                )
                if spell
            ],
            runes=HistoryRowTransformer.derive_runes(participant.get("perks")),
        )


def to_history_rows(puuid: str, matches: List[Dict[str, Any]]) -> List[HistoryRow]:
    """One history row per match, in input order."""
    return [HistoryRowTransformer.to_row(puuid, match) for match in matches]
