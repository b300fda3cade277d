"""Export BFV match schedules as CSV, XLSX, iCalendar and Jira import files."""

from .bfv import BfvApi, BfvApiError, TeamMatches
from .config import AppConfig, TeamConfig, load_config
from .grouping import TaskGroup, build_hierarchy, group_by_month
from .index import collect_index_entries, write_index
from .pipeline import run
from .records import MatchRecord, map_match

__all__ = [
    "AppConfig",
    "BfvApi",
    "BfvApiError",
    "MatchRecord",
    "TaskGroup",
    "TeamConfig",
    "TeamMatches",
    "build_hierarchy",
    "collect_index_entries",
    "group_by_month",
    "load_config",
    "map_match",
    "run",
    "write_index",
]
