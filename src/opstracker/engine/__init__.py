"""OpsTracker Engine - record schema, path mutation, progress and alerts."""

from .alerts import Alert, AlertLevel, due_alerts
from .calendar import EMOTIONAL_CODES, MONTHS, TEAM, MonthConfig, SprintWindow, month_config, roster
from .errors import (
    CorruptPersistedStateError,
    InvalidPathError,
    PersistenceWriteError,
    TrackerError,
    TypeMismatchError,
)
from .paths import (
    PlanningField,
    ReportingField,
    SprintField,
    get_at_path,
    planning_path,
    reporting_path,
    set_at_path,
    sprint_path,
    toggle_at_path,
    toggle_emotional_code,
)
from .progress import MemberOverview, Progress, progress, team_overview
from .state import MonthRecord, ReportingRecord, SprintRecord, TrackerState, init_state

__all__ = [
    # Calendar
    "TEAM",
    "MONTHS",
    "EMOTIONAL_CODES",
    "SprintWindow",
    "MonthConfig",
    "month_config",
    "roster",
    # State
    "TrackerState",
    "MonthRecord",
    "SprintRecord",
    "ReportingRecord",
    "init_state",
    # Mutation
    "PlanningField",
    "SprintField",
    "ReportingField",
    "planning_path",
    "sprint_path",
    "reporting_path",
    "get_at_path",
    "set_at_path",
    "toggle_at_path",
    "toggle_emotional_code",
    # Derivations
    "Progress",
    "MemberOverview",
    "progress",
    "team_overview",
    "Alert",
    "AlertLevel",
    "due_alerts",
    # Errors
    "TrackerError",
    "InvalidPathError",
    "TypeMismatchError",
    "CorruptPersistedStateError",
    "PersistenceWriteError",
]
