"""Match ingestion: ID listing, concurrent fetching and mode filters."""

from .fetcher import FetchPolicy, MatchFetcher, RequestThrottle, choose_fetch_policy
from .filters import MatchMode, filter_by_mode, only_summoners_rift, queue_label
from .loader import MatchIdQuery, load_match_ids

__all__ = [
    "FetchPolicy",
    "MatchFetcher",
    "RequestThrottle",
    "choose_fetch_policy",
    "MatchMode",
    "filter_by_mode",
    "only_summoners_rift",
    "queue_label",
    "MatchIdQuery",
    "load_match_ids",
]
