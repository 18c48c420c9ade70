"""Service layer for business logic and external integrations."""

from .config import AppConfig, get_config, reload_config
from .database import EntryStore, close_mongo_client, get_mongo_client
from .search_planner import SearchPlan, SearchPlanner, classify_strategy, plan_search

__all__ = [
    "AppConfig",
    "get_config",
    "reload_config",
    "EntryStore",
    "get_mongo_client",
    "close_mongo_client",
    "SearchPlan",
    "SearchPlanner",
    "classify_strategy",
    "plan_search",
]
