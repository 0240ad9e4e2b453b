"""Pydantic schemas for player summaries, history rows and reports."""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Lane role a participant is counted under."""

    TOP = "TOP"
    JUNGLE = "JUNGLE"
    MIDDLE = "MIDDLE"
    BOTTOM = "BOTTOM"
    SUPPORT = "SUPPORT"


class Totals(BaseModel):
    """Totals over every match the player appears in."""

    matches: int = 0
    wins: int = 0
    losses: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    winrate: float = 0.0
    kda: float = 0.0


class Streak(BaseModel):
    """Leading run of identical outcomes, newest match first."""

    type: Literal["win", "loss", "none"] = "none"
    count: int = 0


class RoleCount(BaseModel):
    """One role histogram bucket."""

    role: Role
    count: int


class ChampionStats(BaseModel):
    """Per-champion performance."""

    champion: str
    games: int
    wins: int
    losses: int
    winrate: float
    kills: int
    deaths: int
    assists: int
    kda: float


class PowerPick(BaseModel):
    """Champion whose win rate beats the player's overall win rate."""

    champion: str
    games: int
    player_winrate: float = Field(..., alias="playerWinrate")
    global_winrate: float = Field(..., alias="globalWinrate")
    diff: float

    model_config = ConfigDict(populate_by_name=True)


class Summary(BaseModel):
    """Aggregate statistics for one player over a list of matches."""

    totals: Totals = Field(default_factory=Totals)
    streak: Streak = Field(default_factory=Streak)
    roles: List[RoleCount] = Field(default_factory=list)
    champions: List[ChampionStats] = Field(default_factory=list)
    power_picks: List[PowerPick] = Field(default_factory=list, alias="powerPicks")

    model_config = ConfigDict(populate_by_name=True)


class LanePhase(BaseModel):
    """Early-game differentials read from a match timeline."""

    cs10: int = 0
    cs15: int = 0
    gold_diff_10: int = Field(0, alias="goldDiff10")
    gold_diff_15: int = Field(0, alias="goldDiff15")
    xp_diff_10: int = Field(0, alias="xpDiff10")
    xp_diff_15: int = Field(0, alias="xpDiff15")
    mythic_at: Optional[int] = Field(
        None, alias="mythicAt", description="Seconds since game start"
    )
    first_blood_involved: bool = Field(False, alias="firstBloodInvolved")

    model_config = ConfigDict(populate_by_name=True)


class RuneUsage(BaseModel):
    """Rune page highlights."""

    primary_style: Optional[int] = Field(None, alias="primaryStyle")
    sub_style: Optional[int] = Field(None, alias="subStyle")
    keystone: Optional[int] = None

    model_config = ConfigDict(populate_by_name=True)


class HistoryRow(BaseModel):
    """One row of match history for the queried player."""

    id: str
    ts: int
    queue_id: int = Field(..., alias="queueId")
    queue_name: str = Field(..., alias="queueName")
    map_id: int = Field(..., alias="mapId")
    win: bool
    champion: str
    kills: int
    deaths: int
    assists: int
    kda: float
    cs: int
    role: Role
    duration: int
    items: List[int] = Field(default_factory=list)
    trinket: Optional[int] = None
    spells: List[int] = Field(default_factory=list)
    runes: RuneUsage = Field(default_factory=RuneUsage)
    lane_phase: Optional[LanePhase] = Field(None, alias="lanePhase")

    model_config = ConfigDict(populate_by_name=True)


class AccountInfo(BaseModel):
    """Resolved Riot account."""

    game_name: str = Field(..., alias="gameName")
    tag_line: str = Field(..., alias="tagLine")
    puuid: str

    model_config = ConfigDict(populate_by_name=True)


class ProfileInfo(BaseModel):
    """Best-effort summoner profile; every field is null when the lookup failed."""

    profile_icon_id: Optional[int] = Field(None, alias="profileIconId")
    summoner_level: Optional[int] = Field(None, alias="summonerLevel")
    platform: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class RankedEntry(BaseModel):
    """Ranked standing in one queue."""

    queue_type: str = Field(..., alias="queueType")
    tier: Optional[str] = None
    rank: Optional[str] = None
    league_points: int = Field(0, alias="leaguePoints")
    wins: int = 0
    losses: int = 0

    model_config = ConfigDict(populate_by_name=True)


class MasteryEntry(BaseModel):
    """Mastery progress on one champion."""

    champion_id: int = Field(..., alias="championId")
    champion_level: int = Field(0, alias="championLevel")
    champion_points: int = Field(0, alias="championPoints")

    model_config = ConfigDict(populate_by_name=True)


class ReportMeta(BaseModel):
    """How the report was scoped."""

    ids: int
    mode: str
    sr_only: bool = Field(..., alias="srOnly")

    model_config = ConfigDict(populate_by_name=True)


class PlayerReport(Summary):
    """Full response: account, profile, summary fields and history."""

    account: AccountInfo
    profile: ProfileInfo = Field(default_factory=ProfileInfo)
    history: List[HistoryRow] = Field(default_factory=list)
    ranked: List[RankedEntry] = Field(default_factory=list)
    mastery: List[MasteryEntry] = Field(default_factory=list)
    meta: ReportMeta = Field(..., alias="_meta")
