"""
Lane-phase statistics extracted from a match timeline.

The lane opponent is approximated as the participant in the mirrored slot on
the enemy team (slot +/- 5); it is not verified to share the player's role.
``first_blood_involved`` flags the player's involvement in any champion kill,
not strictly the game's first one.
"""

from typing import Any, Dict, Optional

from .reference import MYTHIC_ITEM_IDS
from .roles import as_int
from .schemas import LanePhase

TEN_MINUTES = 600
FIFTEEN_MINUTES = 900


def participant_slot(timeline: Dict[str, Any], puuid: str) -> int:
    """1-based participant slot of ``puuid`` in the timeline, 0 when absent."""
    participants = (timeline.get("metadata") or {}).get("participants") or []
    if puuid in participants:
        return participants.index(puuid) + 1

    for entry in (timeline.get("info") or {}).get("participants") or []:
        if entry.get("puuid") == puuid:
            return as_int(entry.get("participantId"))
    return 0


def mirrored_slot(slot: int) -> int:
    """Same position on the opposing team."""
    return slot + 5 if slot <= 5 else slot - 5


class _Checkpoint:
    """Values captured on the first frame at or past a timestamp."""

    def __init__(self, at_seconds: int):
        self.at_seconds = at_seconds
        self.cs: Optional[int] = None
        self.gold_diff: Optional[int] = None
        self.xp_diff: Optional[int] = None

    def observe(
        self, seconds: int, me: Dict[str, Any], opponent: Optional[Dict[str, Any]]
    ) -> None:
        if seconds < self.at_seconds:
            return
        if self.cs is None:
            self.cs = as_int(me.get("minionsKilled")) + as_int(
                me.get("jungleMinionsKilled")
            )
        if opponent is not None and self.gold_diff is None:
            self.gold_diff = as_int(me.get("totalGold")) - as_int(
                opponent.get("totalGold")
            )
            self.xp_diff = as_int(me.get("xp")) - as_int(opponent.get("xp"))


def compute_lane_phase(timeline: Dict[str, Any], puuid: str) -> LanePhase:
    """
    Extract CS, gold and XP differentials at 10 and 15 minutes, mythic timing
    and early combat involvement for ``puuid``.

    Returns an all-zero LanePhase when the player is not in the timeline.
    """
    slot = participant_slot(timeline, puuid)
    if not slot:
        return LanePhase()

    opponent_slot = mirrored_slot(slot)
    at_ten = _Checkpoint(TEN_MINUTES)
    at_fifteen = _Checkpoint(FIFTEEN_MINUTES)
    mythic_at: Optional[int] = None
    frames = (timeline.get("info") or {}).get("frames") or []

    for frame in frames:
        seconds = as_int(frame.get("timestamp")) // 1000
        participant_frames = frame.get("participantFrames") or {}
        me = participant_frames.get(str(slot))
        if me is None:
            continue
        opponent = participant_frames.get(str(opponent_slot))

        at_ten.observe(seconds, me, opponent)
        at_fifteen.observe(seconds, me, opponent)

        if mythic_at is None:
            for event in frame.get("events") or []:
                if (
                    event.get("type") == "ITEM_PURCHASED"
                    and event.get("participantId") == slot
                    and as_int(event.get("itemId")) in MYTHIC_ITEM_IDS
                ):
                    mythic_at = seconds
                    break

    return LanePhase(
        cs10=at_ten.cs or 0,
        cs15=at_fifteen.cs or 0,
        gold_diff_10=at_ten.gold_diff or 0,
        gold_diff_15=at_fifteen.gold_diff or 0,
        xp_diff_10=at_ten.xp_diff or 0,
        xp_diff_15=at_fifteen.xp_diff or 0,
        mythic_at=mythic_at,
        first_blood_involved=_involved_in_kill(frames, slot),
    )


def _involved_in_kill(frames: Any, slot: int) -> bool:
    for frame in frames:
        for event in frame.get("events") or []:
            if event.get("type") != "CHAMPION_KILL":
                continue
            assists = event.get("assistingParticipantIds") or []
            if (
                event.get("killerId") == slot
                or event.get("victimId") == slot
                or slot in assists
            ):
                return True
    return False
