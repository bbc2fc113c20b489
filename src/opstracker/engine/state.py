"""
Tracker State schema and initializer.

The Tracker State is a plain mapping member -> month -> MonthRecord. Records
are frozen pydantic models: they are never changed in place, the path
mutator swaps in copies instead. Field names are snake_case in Python and
camelCase on the wire (and in mutation paths).
"""

from typing import Dict, Iterable, Mapping, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

from .calendar import month_config


def unique_tags(tags: Iterable[str]) -> Tuple[str, ...]:
    """Drop repeated tags, keeping the first occurrence of each."""
    seen = []
    for tag in tags:
        if tag not in seen:
            seen.append(tag)
    return tuple(seen)


class RecordModel(BaseModel):
    """Base for all record types in the Tracker State."""

    model_config = ConfigDict(
        frozen=True,
        strict=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class NarrativeArc(RecordModel):
    done: bool = False
    notes: str = ""


class EmotionalCodes(RecordModel):
    done: bool = False
    selected: Tuple[str, ...] = ()

    @field_validator("selected")
    @classmethod
    def _dedupe(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        return unique_tags(value)


class Planning(RecordModel):
    narrative_arc: NarrativeArc = NarrativeArc()
    emotional_codes: EmotionalCodes = EmotionalCodes()
    capacity_confirmed: bool = False
    calendar_sent: bool = False
    customer_signoff: bool = False


class SprintRecord(RecordModel):
    scope_notes: str = ""
    scope_locked: bool = False
    all_scheduled: bool = False
    qa_complete: bool = False
    zero_typos: bool = False
    clean_runway: bool = False


class ReportingRecord(RecordModel):
    performance_signals: bool = False
    qualitative_wins: bool = False
    next_steps: bool = False
    notes: str = ""


class MonthRecord(RecordModel):
    """Complete checklist state for one member in one month."""
    planning: Planning = Planning()
    sprints: Dict[str, SprintRecord] = {}
    reporting: Dict[str, ReportingRecord] = {}


TrackerState = Dict[str, Dict[str, MonthRecord]]

tracker_state_adapter: TypeAdapter[TrackerState] = TypeAdapter(TrackerState)


def init_month_record(month: str) -> MonthRecord:
    """Build a Month Record at its defaults with the keys the month's config dictates."""
    config = month_config(month)
    return MonthRecord(
        planning=Planning(),
        sprints={label: SprintRecord() for label in config.sprint_labels},
        reporting={period: ReportingRecord() for period in config.reporting_periods},
    )


def init_state(roster: Mapping[str, Sequence[str]], months: Sequence[str]) -> TrackerState:
    """
    Build the full Tracker State for every (member, month) combination.

    Args:
        roster: Mapping of member name to customer accounts (only names are used)
        months: Ordered tracked months

    Returns:
        A fresh Tracker State with every record at its defaults
    """
    return {
        member: {month: init_month_record(month) for month in months}
        for member in roster
    }
