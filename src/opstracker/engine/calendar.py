"""
Calendar Config

Static tables for the tracked quarter: the team roster, the tracked months,
the sprint windows of each month and the reporting cadence.

Usage:
    config = month_config("February")
    labels = config.sprint_labels          # ("W1-2", "W3-4")
    periods = config.reporting_periods     # ("1st-2nd Week", "3rd-4th Week")
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class SprintWindow:
    """A fortnightly delivery period."""
    label: str
    range: str
    close: str


@dataclass(frozen=True)
class MonthConfig:
    """Sprint windows and reporting periods dictated for one month."""
    sprint_windows: Tuple[SprintWindow, ...]
    reporting_periods: Tuple[str, ...]

    @property
    def sprint_labels(self) -> Tuple[str, ...]:
        return tuple(window.label for window in self.sprint_windows)


TEAM: Dict[str, List[str]] = {
    "Nick": ["Carlo", "Build Club"],
    "Matt": ["Meridian", "Haast"],
    "Molly": ["Quarterzip"],
    "Tash": ["Lorikeet", "KC Ventures"],
}

MONTHS: Tuple[str, ...] = ("January", "February", "March")

EMOTIONAL_CODES: Tuple[str, ...] = (
    "Power",
    "Order",
    "Curiosity",
    "Status",
    "Tranquility",
    "Saving",
    "Vengeance",
)

SPRINT_WINDOWS: Dict[str, Tuple[SprintWindow, ...]] = {
    "January": (
        SprintWindow("W3-4", "Mon 20th – Fri 31st Jan", "Fri 17th Jan, 3pm"),
    ),
    "February": (
        SprintWindow("W1-2", "Mon 3rd – Fri 14th Feb", "Fri 31st Jan, 3pm"),
        SprintWindow("W3-4", "Mon 17th – Fri 28th Feb", "Fri 14th Feb, 3pm"),
    ),
    "March": (
        SprintWindow("W1-2", "Mon 3rd – Fri 14th Mar", "Fri 28th Feb, 3pm"),
        SprintWindow("W3-4", "Mon 17th – Fri 28th Mar", "Fri 14th Mar, 3pm"),
    ),
}

MONTHLY_PERIODS: Tuple[str, ...] = ("Monthly",)
FORTNIGHTLY_PERIODS: Tuple[str, ...] = ("1st-2nd Week", "3rd-4th Week")


def month_config(month: str) -> MonthConfig:
    """
    Get the sprint windows and reporting periods for a month.

    The first tracked month reports monthly, every other month fortnightly.
    An unknown month has no sprint windows.
    """
    windows = SPRINT_WINDOWS.get(month, ())
    if month == MONTHS[0]:
        return MonthConfig(sprint_windows=windows, reporting_periods=MONTHLY_PERIODS)
    return MonthConfig(sprint_windows=windows, reporting_periods=FORTNIGHTLY_PERIODS)


def roster() -> Dict[str, List[str]]:
    """Read-only view of the team roster (a fresh copy on every call)."""
    return {member: list(customers) for member, customers in TEAM.items()}
