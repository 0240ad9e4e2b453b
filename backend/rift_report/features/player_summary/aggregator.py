"""
Summary aggregation over a player's matches.

Reduces the matches a player appears in to totals, the current streak, a role
histogram, per-champion stats and power picks. The reduction is a pure
function of its inputs: identical input order gives identical output.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import structlog

from rift_report.utils.statistics import kda_ratio, percent, round_half_up
from .reference import POWER_PICK_LIMIT, POWER_PICK_MIN_GAMES
from .roles import as_int, infer_role
from .schemas import (
    ChampionStats,
    PowerPick,
    Role,
    RoleCount,
    Streak,
    Summary,
    Totals,
)

logger = structlog.get_logger(__name__)

UNKNOWN_CHAMPION = "Unknown"


def find_participant(match: Dict[str, Any], puuid: str) -> Optional[Dict[str, Any]]:
    """Return the participant record of ``puuid`` in ``match``, if present."""
    participants = (match.get("info") or {}).get("participants") or []
    for participant in participants:
        if participant and participant.get("puuid") == puuid:
            return participant
    return None


@dataclass
class _Tally:
    """Running counts for one champion or for the whole match list."""

    games: int = 0
    wins: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0

    def add(self, participant: Dict[str, Any]) -> None:
        self.games += 1
        if participant.get("win"):
            self.wins += 1
        self.kills += as_int(participant.get("kills"))
        self.deaths += as_int(participant.get("deaths"))
        self.assists += as_int(participant.get("assists"))

    @property
    def losses(self) -> int:
        return self.games - self.wins


def _streak(outcomes: List[bool]) -> Streak:
    if not outcomes:
        return Streak(type="none", count=0)
    first = outcomes[0]
    count = 0
    for outcome in outcomes:
        if outcome != first:
            break
        count += 1
    return Streak(type="win" if first else "loss", count=count)


def _power_picks(
    champions: List[ChampionStats], overall_winrate: float
) -> List[PowerPick]:
    picks = [
        PowerPick(
            champion=champ.champion,
            games=champ.games,
            player_winrate=champ.winrate,
            global_winrate=overall_winrate,
            diff=round_half_up(champ.winrate - overall_winrate),
        )
        for champ in champions
        if champ.games >= POWER_PICK_MIN_GAMES
    ]
    picks.sort(key=lambda pick: pick.diff, reverse=True)
    return picks[:POWER_PICK_LIMIT]


def aggregate_for_puuid(puuid: str, matches: List[Dict[str, Any]]) -> Summary:
    """
    Aggregate a player's performance over ``matches`` (newest first).

    Matches without a participant record for ``puuid`` are skipped.

    Args:
        puuid: Queried player's unique ID
        matches: Match documents in newest-first order

    Returns:
        Summary; the zero-match case yields all-zero totals, empty lists and
        a "none" streak
    """
    totals = _Tally()
    role_counts: Dict[Role, int] = {role: 0 for role in Role}
    champion_tallies: Dict[str, _Tally] = {}
    outcomes: List[bool] = []

    for match in matches:
        participant = find_participant(match, puuid)
        if participant is None:
            continue

        totals.add(participant)
        role_counts[infer_role(participant)] += 1

        champion = participant.get("championName") or UNKNOWN_CHAMPION
        champion_tallies.setdefault(champion, _Tally()).add(participant)

        outcomes.append(bool(participant.get("win")))

    winrate = percent(totals.wins, totals.games)

    champions = sorted(
        (
            ChampionStats(
                champion=name,
                games=tally.games,
                wins=tally.wins,
                losses=tally.losses,
                winrate=percent(tally.wins, tally.games),
                kills=tally.kills,
                deaths=tally.deaths,
                assists=tally.assists,
                kda=kda_ratio(tally.kills, tally.deaths, tally.assists),
            )
            for name, tally in champion_tallies.items()
        ),
        key=lambda champ: champ.games,
        reverse=True,
    )

    roles = sorted(
        (
            RoleCount(role=role, count=count)
            for role, count in role_counts.items()
            if count > 0
        ),
        key=lambda bucket: bucket.count,
        reverse=True,
    )

    summary = Summary(
        totals=Totals(
            matches=totals.games,
            wins=totals.wins,
            losses=totals.losses,
            kills=totals.kills,
            deaths=totals.deaths,
            assists=totals.assists,
            winrate=winrate,
            kda=kda_ratio(totals.kills, totals.deaths, totals.assists),
        ),
        streak=_streak(outcomes),
        roles=roles,
        champions=champions,
        power_picks=_power_picks(champions, winrate),
    )

    logger.debug(
        "Summary aggregated",
        puuid=puuid,
        matches_in=len(matches),
        matches_counted=totals.games,
        champions=len(champions),
    )
    return summary
