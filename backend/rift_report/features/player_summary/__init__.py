"""Player summary feature: report assembly and its HTTP endpoint."""

from .aggregator import aggregate_for_puuid, find_participant
from .lane_phase import compute_lane_phase
from .roles import infer_role
from .router import router
from .schemas import (
    HistoryRow,
    LanePhase,
    PlayerReport,
    Role,
    Summary,
)
from .service import PlayerReportService, ReportQuery
from .transformers import HistoryRowTransformer, to_history_rows

__all__ = [
    "aggregate_for_puuid",
    "find_participant",
    "compute_lane_phase",
    "infer_role",
    "router",
    "HistoryRow",
    "LanePhase",
    "PlayerReport",
    "Role",
    "Summary",
    "PlayerReportService",
    "ReportQuery",
    "HistoryRowTransformer",
    "to_history_rows",
]
