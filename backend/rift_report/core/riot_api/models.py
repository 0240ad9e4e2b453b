"""Pydantic models for the Riot API documents the report reads fields from.

Match and timeline bodies are kept as raw dictionaries: they are cached and
shared read-only, and the reducers only read a handful of their fields.
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class AccountDTO(BaseModel):
    """Riot Account information."""

    puuid: str
    game_name: str = Field(..., alias="gameName")
    tag_line: str = Field(..., alias="tagLine")

    model_config = ConfigDict(populate_by_name=True)


class SummonerDTO(BaseModel):
    """League of Legends Summoner information."""

    id: Optional[str] = None
    puuid: str
    profile_icon_id: Optional[int] = Field(None, alias="profileIconId")
    summoner_level: Optional[int] = Field(None, alias="summonerLevel")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ChampionMasteryDTO(BaseModel):
    """Mastery progress on one champion."""

    champion_id: int = Field(..., alias="championId")
    champion_level: int = Field(0, alias="championLevel")
    champion_points: int = Field(0, alias="championPoints")
    last_play_time: Optional[int] = Field(None, alias="lastPlayTime")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class LeagueEntryDTO(BaseModel):
    """League entry information."""

    queue_type: str = Field(..., alias="queueType")
    tier: Optional[str] = None
    rank: Optional[str] = None
    league_points: int = Field(0, alias="leaguePoints")
    wins: int = 0
    losses: int = 0
    hot_streak: bool = Field(False, alias="hotStreak")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")
