"""Player summary API endpoint."""

from typing import Optional

import structlog
from fastapi import APIRouter, HTTPException, Query, Response

from rift_report.core.exceptions import PlayerReportError
from rift_report.features.matches.filters import MatchMode
from .dependencies import PlayerReportServiceDep
from .schemas import PlayerReport
from .service import MAX_LANE_PHASE_ROWS, ReportQuery

logger = structlog.get_logger(__name__)

REPORT_CACHE_CONTROL = "s-maxage=60"

router = APIRouter(prefix="/player", tags=["player-summary"])


@router.get("/summary", response_model=PlayerReport)
async def get_player_summary(
    response: Response,
    report_service: PlayerReportServiceDep,
    riot_id: str = Query(..., alias="riotId", description="GameName#TagLine"),
    region: str = Query("americas", description="Regional routing group"),
    mode: MatchMode = Query(MatchMode.ALL, description="Game-mode scope"),
    size: Optional[str] = Query(
        None, description='"all" for exhaustive paging, or a page size'
    ),
    sr_only: bool = Query(
        True, alias="srOnly", description="Aggregate Summoner's Rift only"
    ),
    count: Optional[int] = Query(20, ge=0, description="Page size (capped at 100)"),
    fetch_all: bool = Query(False, alias="all", description="Walk every page"),
    max_ids: Optional[int] = Query(
        300, ge=0, alias="max", description="ID cap in all-mode (capped at 1000)"
    ),
    queue: Optional[str] = Query(None, description="Upstream queue filter"),
    start_time: Optional[str] = Query(None, alias="startTime"),
    end_time: Optional[str] = Query(None, alias="endTime"),
    lane_phase: Optional[int] = Query(
        None,
        ge=0,
        le=MAX_LANE_PHASE_ROWS,
        alias="lanePhase",
        description="History rows that receive lane-phase stats",
    ),
):
    """
    Build a player report from live Riot API data.

    Modes:
    - all: every queue
    - ranked: Solo/Duo and Flex
    - unranked: Draft, Blind and Quickplay
    - aram / arena: scoped upstream by queue
    """
    query = ReportQuery(
        riot_id=riot_id,
        region=region,
        mode=mode,
        size=size,
        sr_only=sr_only,
        count=count,
        all=fetch_all,
        max=max_ids,
        queue=queue,
        start_time=start_time,
        end_time=end_time,
        lane_phase_limit=lane_phase,
    )
    try:
        report = await report_service.build_report(query)
    except PlayerReportError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(
            "Unexpected error building player report",
            riot_id=riot_id,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise HTTPException(status_code=500, detail=str(e))

    # Reports may be reused by shared caches for a minute
    response.headers["Cache-Control"] = REPORT_CACHE_CONTROL
    return report
