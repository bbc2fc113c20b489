"""
Alert Evaluator

Date-driven notices for the tracker. Rules are evaluated independently in a
fixed priority order, so several alerts can be due on the same day:

- 15th to 19th: monthly calendar due to the customer (warning)
- 20th to 23rd: customer sign-off must be locked (urgent)
- Fridays: sprint close (urgent)
- Mondays: sprint start (info)

The caller always supplies "now"; nothing here reads the clock.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, List, NamedTuple

MONDAY = 0
FRIDAY = 4

DEFAULT_SPRINT_CLOSE_CUTOFF = "3pm"


class AlertLevel(str, Enum):
    """Severity levels for alerts."""
    INFO = "info"
    WARNING = "warning"
    URGENT = "urgent"


@dataclass(frozen=True)
class Alert:
    level: AlertLevel
    message: str


class AlertRule(NamedTuple):
    applies: Callable[[date], bool]
    level: AlertLevel
    message: str


ALERT_RULES = (
    AlertRule(
        lambda day: 15 <= day.day < 20,
        AlertLevel.WARNING,
        "Monthly calendar due to customer by 20th",
    ),
    AlertRule(
        lambda day: 20 <= day.day <= 23,
        AlertLevel.URGENT,
        "Customer sign-off must be locked by 23rd",
    ),
    AlertRule(
        lambda day: day.weekday() == FRIDAY,
        AlertLevel.URGENT,
        "SPRINT CLOSE: All content must be scheduled by {cutoff} today",
    ),
    AlertRule(
        lambda day: day.weekday() == MONDAY,
        AlertLevel.INFO,
        "Sprint start: Confirm scope is locked for this fortnight",
    ),
)


def due_alerts(now: date, sprint_close_cutoff: str = DEFAULT_SPRINT_CLOSE_CUTOFF) -> List[Alert]:
    """
    Evaluate every alert rule against now.

    Args:
        now: Current date or datetime
        sprint_close_cutoff: Time of day content must be scheduled by on sprint close

    Returns:
        Alerts in rule priority order; empty when nothing is due
    """
    return [
        Alert(level=rule.level, message=rule.message.format(cutoff=sprint_close_cutoff))
        for rule in ALERT_RULES
        if rule.applies(now)
    ]
