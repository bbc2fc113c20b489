"""
Progress Aggregator

Counts checked items for a (member, month) slice:
- Planning: 5 items (narrative arc, emotional codes, capacity, calendar, sign-off)
- Sprints: 5 flags per sprint window
- Reporting: 3 flags per reporting period

Free-text notes never count.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence

from .state import MonthRecord, TrackerState

SPRINT_FLAGS = ("scope_locked", "all_scheduled", "qa_complete", "zero_typos", "clean_runway")
REPORTING_FLAGS = ("performance_signals", "qualitative_wins", "next_steps")


@dataclass(frozen=True)
class Progress:
    done: int = 0
    total: int = 0
    percent: int = 0


@dataclass
class MemberOverview:
    """Progress of one member across the tracked months."""
    member: str
    customers: List[str]
    months: Dict[str, Progress] = field(default_factory=dict)


def round_percent(done: int, total: int) -> int:
    """Percentage of done over total, rounding halves up. 0 when total is 0."""
    if total == 0:
        return 0
    return (200 * done + total) // (2 * total)


def _planning_items(record: MonthRecord) -> List[bool]:
    planning = record.planning
    return [
        planning.narrative_arc.done,
        planning.emotional_codes.done,
        planning.capacity_confirmed,
        planning.calendar_sent,
        planning.customer_signoff,
    ]


def progress(state: TrackerState, member: str, month: str) -> Progress:
    """
    Compute done/total/percent for one member and month.

    Missing members or months report nothing to do rather than failing.
    """
    record = state.get(member, {}).get(month)
    if record is None:
        return Progress()

    items = _planning_items(record)
    for sprint in record.sprints.values():
        items.extend(getattr(sprint, flag) for flag in SPRINT_FLAGS)
    for report in record.reporting.values():
        items.extend(getattr(report, flag) for flag in REPORTING_FLAGS)

    done = sum(1 for item in items if item)
    total = len(items)
    return Progress(done=done, total=total, percent=round_percent(done, total))


def team_overview(
    state: TrackerState,
    roster: Mapping[str, Sequence[str]],
    months: Sequence[str],
) -> List[MemberOverview]:
    """Progress for every member in roster order, month by month."""
    return [
        MemberOverview(
            member=member,
            customers=list(customers),
            months={month: progress(state, member, month) for month in months},
        )
        for member, customers in roster.items()
    ]
