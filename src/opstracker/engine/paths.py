"""
Path Mutator

Read and update single leaves of a Month Record by path, producing a new
Tracker State. Only the records along the path are copied; everything else
is shared with the previous snapshot, which is never modified.

Paths are sequences of wire names, e.g. ("planning", "narrativeArc", "notes")
or ("sprints", "W3-4", "qaComplete"). The field enums below enumerate every
valid leaf, so callers can build paths without spelling segments by hand:

    path = sprint_path("W3-4", SprintField.QA_COMPLETE)
    state = toggle_at_path(state, "Nick", "January", path)
"""

from enum import Enum
from functools import lru_cache
from typing import Any, Callable, Dict, Sequence, Tuple, Type

from pydantic import BaseModel

from .errors import InvalidPathError, TypeMismatchError
from .state import MonthRecord, TrackerState, unique_tags

Path = Tuple[str, ...]


class PlanningField(str, Enum):
    """Leaves of the planning section."""
    NARRATIVE_ARC_DONE = "narrativeArc.done"
    NARRATIVE_ARC_NOTES = "narrativeArc.notes"
    EMOTIONAL_CODES_DONE = "emotionalCodes.done"
    EMOTIONAL_CODES_SELECTED = "emotionalCodes.selected"
    CAPACITY_CONFIRMED = "capacityConfirmed"
    CALENDAR_SENT = "calendarSent"
    CUSTOMER_SIGNOFF = "customerSignoff"


class SprintField(str, Enum):
    """Leaves of a Sprint Record."""
    SCOPE_NOTES = "scopeNotes"
    SCOPE_LOCKED = "scopeLocked"
    ALL_SCHEDULED = "allScheduled"
    QA_COMPLETE = "qaComplete"
    ZERO_TYPOS = "zeroTypos"
    CLEAN_RUNWAY = "cleanRunway"


class ReportingField(str, Enum):
    """Leaves of a Reporting Record."""
    PERFORMANCE_SIGNALS = "performanceSignals"
    QUALITATIVE_WINS = "qualitativeWins"
    NEXT_STEPS = "nextSteps"
    NOTES = "notes"


def planning_path(field: PlanningField) -> Path:
    return ("planning", *field.value.split("."))


def sprint_path(label: str, field: SprintField) -> Path:
    return ("sprints", label, field.value)


def reporting_path(period: str, field: ReportingField) -> Path:
    return ("reporting", period, field.value)


def parse_path(path: str | Sequence[str]) -> Path:
    """Accept either a dotted string or a sequence of segments."""
    if isinstance(path, str):
        return tuple(path.split(".")) if path else ()
    return tuple(path)


@lru_cache(maxsize=None)
def _field_lookup(model_cls: Type[BaseModel]) -> Dict[str, str]:
    """Map wire names and attribute names of a model to attribute names."""
    lookup = {}
    for name, info in model_cls.model_fields.items():
        lookup[name] = name
        if info.alias:
            lookup[info.alias] = name
    return lookup


def _is_branch(node: Any) -> bool:
    return isinstance(node, (BaseModel, dict))


LeafUpdate = Callable[[Any, Path], Any]


def _child(node: Any, segment: str, path: Path) -> Tuple[Any, str]:
    """Resolve one segment below node. Returns the child and the attribute or key it sits under."""
    if isinstance(node, BaseModel):
        attr = _field_lookup(type(node)).get(segment)
        if attr is None:
            raise InvalidPathError(f"Unknown field '{segment}' in path {'.'.join(path)}", path)
        return getattr(node, attr), attr
    if isinstance(node, dict):
        if segment not in node:
            raise InvalidPathError(f"Unknown key '{segment}' in path {'.'.join(path)}", path)
        return node[segment], segment
    raise InvalidPathError(f"Path {'.'.join(path)} continues past a leaf", path)


def _check_leaf(node: Any, path: Path) -> None:
    if _is_branch(node):
        raise InvalidPathError(f"Path {'.'.join(path)} ends on a record, not a leaf", path)


def _replace(node: Any, segments: Path, update: LeafUpdate, full_path: Path) -> Any:
    """Return a copy of node with the leaf at segments replaced by update(old_leaf)."""
    head, rest = segments[0], segments[1:]
    child, key = _child(node, head, full_path)

    if rest:
        new_child = _replace(child, rest, update, full_path)
    else:
        _check_leaf(child, full_path)
        new_child = update(child, full_path)

    if isinstance(node, BaseModel):
        return node.model_copy(update={key: new_child})
    return {**node, key: new_child}


def _locate(state: TrackerState, member: str, month: str, path: Path) -> MonthRecord:
    if member not in state:
        raise InvalidPathError(f"Unknown member '{member}'", path)
    if month not in state[member]:
        raise InvalidPathError(f"Unknown month '{month}' for member '{member}'", path)
    if not path:
        raise InvalidPathError("Empty path", path)
    return state[member][month]


def _apply(state: TrackerState, member: str, month: str, path: Path, update: LeafUpdate) -> TrackerState:
    record = _locate(state, member, month, path)
    new_record = _replace(record, path, update, path)
    return {**state, member: {**state[member], month: new_record}}


def _coerce_value(old: Any, value: Any, path: Path) -> Any:
    """Check that value is the same kind of leaf as old."""
    if isinstance(old, bool):
        if not isinstance(value, bool):
            raise TypeMismatchError(f"{'.'.join(path)} expects a boolean", path)
        return value
    if isinstance(old, str):
        if not isinstance(value, str):
            raise TypeMismatchError(f"{'.'.join(path)} expects text", path)
        return value
    if isinstance(old, tuple):
        if isinstance(value, str) or not isinstance(value, (list, tuple)) \
                or not all(isinstance(tag, str) for tag in value):
            raise TypeMismatchError(f"{'.'.join(path)} expects a list of tags", path)
        return unique_tags(value)
    raise TypeMismatchError(f"{'.'.join(path)} holds an unsupported leaf", path)


def get_at_path(state: TrackerState, member: str, month: str, path: str | Sequence[str]) -> Any:
    """Read the leaf at path without modifying anything."""
    segments = parse_path(path)
    node: Any = _locate(state, member, month, segments)
    for segment in segments:
        node, _ = _child(node, segment, segments)
    _check_leaf(node, segments)
    return node


def set_at_path(
    state: TrackerState,
    member: str,
    month: str,
    path: str | Sequence[str],
    value: Any,
) -> TrackerState:
    """
    Replace the leaf at path with value.

    Raises:
        InvalidPathError: member, month or any segment does not exist
        TypeMismatchError: value is not the kind of value the leaf holds
    """
    segments = parse_path(path)
    return _apply(state, member, month, segments, lambda old, p: _coerce_value(old, value, p))


def _negate(old: Any, path: Path) -> bool:
    if not isinstance(old, bool):
        raise TypeMismatchError(f"{'.'.join(path)} is not a boolean and cannot be toggled", path)
    return not old


def toggle_at_path(
    state: TrackerState,
    member: str,
    month: str,
    path: str | Sequence[str],
) -> TrackerState:
    """
    Negate the boolean leaf at path.

    Raises:
        InvalidPathError: member, month or any segment does not exist
        TypeMismatchError: the leaf is not a boolean
    """
    segments = parse_path(path)
    return _apply(state, member, month, segments, _negate)


def toggle_emotional_code(state: TrackerState, member: str, month: str, code: str) -> TrackerState:
    """Add code to the selected emotional codes, or remove it when already selected."""
    path = planning_path(PlanningField.EMOTIONAL_CODES_SELECTED)
    current = get_at_path(state, member, month, path)
    if code in current:
        selected = tuple(tag for tag in current if tag != code)
    else:
        selected = (*current, code)
    return set_at_path(state, member, month, path, selected)
