"""Dependencies for the player summary feature."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, HTTPException

from rift_report.core.config import Settings, get_global_settings
from rift_report.core.riot_api import RiotAPIClient
from .service import PlayerReportService


async def get_riot_client() -> AsyncGenerator[RiotAPIClient, None]:
    """Get a Riot API client for the duration of one request."""
    try:
        client = RiotAPIClient()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e))

    await client.start_session()
    try:
        yield client
    finally:
        await client.close()


async def get_player_report_service(
    riot_client: Annotated[RiotAPIClient, Depends(get_riot_client)],
    settings: Annotated[Settings, Depends(get_global_settings)],
) -> PlayerReportService:
    """Get player report service instance.

    :param riot_client: Riot API client
    :param settings: Application settings
    :returns: Player report service bound to the request's client
    """
    return PlayerReportService(riot_client, settings=settings)


# Type aliases for cleaner dependency injection
PlayerReportServiceDep = Annotated[
    PlayerReportService, Depends(get_player_report_service)
]

__all__ = [
    "get_riot_client",
    "get_player_report_service",
    "PlayerReportServiceDep",
]
