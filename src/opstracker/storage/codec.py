"""
Tracker State codec and load-or-initialize.

The whole Tracker State is stored as one JSON blob under a single key, using
camelCase wire names. Anything that fails to decode into the record shape is
treated as corrupt and replaced with a freshly initialized state.
"""

from typing import List, Mapping, Sequence

from pydantic import ValidationError

from opstracker.engine.errors import CorruptPersistedStateError
from opstracker.engine.state import TrackerState, init_state, tracker_state_adapter
from opstracker.platform.logging import get_logger
from .base import BlobStore

logger = get_logger(__name__)


def encode_state(state: TrackerState) -> str:
    """Serialize the full Tracker State to a JSON blob."""
    return tracker_state_adapter.dump_json(state, by_alias=True).decode("utf-8")


def decode_state(blob: str | bytes) -> TrackerState:
    """
    Parse a JSON blob into a Tracker State.

    Raises:
        CorruptPersistedStateError: the blob is not JSON or does not match the record shape
    """
    try:
        return tracker_state_adapter.validate_json(blob)
    except ValidationError as e:
        raise CorruptPersistedStateError(f"Stored tracker state is unreadable: {e.error_count()} error(s)") from e


def reconcile_state(
    stored: TrackerState,
    roster: Mapping[str, Sequence[str]],
    months: Sequence[str],
) -> TrackerState:
    """
    Fit a decoded state to the current roster and calendar.

    The result has exactly the keys init_state would produce. Stored records
    are carried over wherever their member, month, sprint label or reporting
    period still exists; everything else is dropped.
    """
    fresh = init_state(roster, months)
    dropped: List[str] = []

    for member, stored_months in stored.items():
        if member not in fresh:
            dropped.append(member)
            continue
        for month, record in stored_months.items():
            if month not in fresh[member]:
                dropped.append(f"{member}/{month}")
                continue

            template = fresh[member][month]
            sprints = {
                label: record.sprints.get(label, default)
                for label, default in template.sprints.items()
            }
            reporting = {
                period: record.reporting.get(period, default)
                for period, default in template.reporting.items()
            }
            dropped.extend(
                f"{member}/{month}/sprints/{label}" for label in record.sprints if label not in sprints
            )
            dropped.extend(
                f"{member}/{month}/reporting/{period}" for period in record.reporting if period not in reporting
            )
            fresh[member][month] = template.model_copy(
                update={"planning": record.planning, "sprints": sprints, "reporting": reporting}
            )

    if dropped:
        logger.warning("Dropped stored records with no place in the current calendar", dropped=dropped)
    return fresh


def load_state(
    store: BlobStore,
    key: str,
    roster: Mapping[str, Sequence[str]],
    months: Sequence[str],
) -> TrackerState:
    """
    Load the Tracker State from store, falling back to init_state.

    A missing or corrupt blob is not an error for the caller: both yield a
    fresh state. Read failures of the store itself propagate.
    """
    blob = store.load(key)
    if blob is None:
        logger.info("No stored tracker state, initializing", key=key)
        return init_state(roster, months)

    try:
        stored = decode_state(blob)
    except CorruptPersistedStateError as e:
        logger.warning("Discarding corrupt tracker state", key=key, error=str(e))
        return init_state(roster, months)

    return reconcile_state(stored, roster, months)
