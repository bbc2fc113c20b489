"""
Tracker Service

The process-wide store of the Tracker State and the surface a presentation
layer calls into. State is loaded from the blob store (or initialized) on
first access; every successful mutation replaces the in-memory state first
and is then written through to the store.

A failed write is logged and ignored: memory stays authoritative and the
next successful write carries the lost change along with it.
"""

from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence

from opstracker.platform.logging import get_logger
from opstracker.storage.base import BlobStore
from opstracker.storage.codec import encode_state, load_state

from .alerts import DEFAULT_SPRINT_CLOSE_CUTOFF, Alert, due_alerts
from .calendar import MONTHS, TEAM, MonthConfig, month_config
from .errors import PersistenceWriteError
from .paths import get_at_path, set_at_path, toggle_at_path, toggle_emotional_code
from .progress import MemberOverview, Progress, progress, team_overview
from .state import MonthRecord, TrackerState

logger = get_logger(__name__)


class TrackerService:
    """Owns the current Tracker State and persists every committed mutation."""

    def __init__(
        self,
        store: BlobStore,
        storage_key: str,
        team: Optional[Mapping[str, Sequence[str]]] = None,
        months: Optional[Sequence[str]] = None,
        sprint_close_cutoff: str = DEFAULT_SPRINT_CLOSE_CUTOFF,
    ):
        self.store = store
        self.storage_key = storage_key
        self._team = {member: list(customers) for member, customers in (team or TEAM).items()}
        self.months = tuple(months or MONTHS)
        self.sprint_close_cutoff = sprint_close_cutoff
        self._state: Optional[TrackerState] = None

    # --- State lifecycle ---

    @property
    def state(self) -> TrackerState:
        """Current snapshot; loaded or initialized on first access."""
        if self._state is None:
            self._state = load_state(self.store, self.storage_key, self._team, self.months)
        return self._state

    def reload(self) -> TrackerState:
        """Drop the in-memory state and load it again from the store."""
        self._state = None
        return self.state

    def _commit(self, new_state: TrackerState, **log_context: Any) -> TrackerState:
        self._state = new_state
        try:
            self.store.save(self.storage_key, encode_state(new_state))
        except PersistenceWriteError as e:
            logger.warning("Tracker state not persisted, keeping in-memory change", error=str(e), **log_context)
        return new_state

    # --- Queries ---

    @property
    def roster(self) -> Dict[str, List[str]]:
        return {member: list(customers) for member, customers in self._team.items()}

    def month_config(self, month: str) -> MonthConfig:
        return month_config(month)

    def get_record(self, member: str, month: str) -> Optional[MonthRecord]:
        return self.state.get(member, {}).get(month)

    def get_field(self, member: str, month: str, path: str | Sequence[str]) -> Any:
        return get_at_path(self.state, member, month, path)

    def get_progress(self, member: str, month: str) -> Progress:
        return progress(self.state, member, month)

    def team_overview(self) -> List[MemberOverview]:
        return team_overview(self.state, self._team, self.months)

    def get_due_alerts(self, now: date) -> List[Alert]:
        return due_alerts(now, self.sprint_close_cutoff)

    # --- Commands ---

    def set_field(self, member: str, month: str, path: str | Sequence[str], value: Any) -> TrackerState:
        new_state = set_at_path(self.state, member, month, path, value)
        logger.debug("Field set", member=member, month=month, path=path)
        return self._commit(new_state, member=member, month=month)

    def toggle_field(self, member: str, month: str, path: str | Sequence[str]) -> TrackerState:
        new_state = toggle_at_path(self.state, member, month, path)
        logger.debug("Field toggled", member=member, month=month, path=path)
        return self._commit(new_state, member=member, month=month)

    def toggle_emotional_code(self, member: str, month: str, code: str) -> TrackerState:
        new_state = toggle_emotional_code(self.state, member, month, code)
        logger.debug("Emotional code toggled", member=member, month=month, code=code)
        return self._commit(new_state, member=member, month=month)
