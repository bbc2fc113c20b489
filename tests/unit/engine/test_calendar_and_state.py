"""
Unit tests for the Calendar Config and State Initializer.
"""

import pytest
from pydantic import ValidationError

from opstracker.engine.calendar import (
    EMOTIONAL_CODES,
    MONTHS,
    TEAM,
    month_config,
    roster,
)
from opstracker.engine.state import (
    MonthRecord,
    ReportingRecord,
    SprintRecord,
    init_state,
)


class TestMonthConfig:
    """Test sprint windows and reporting cadence per month."""

    def test_first_month_reports_monthly(self):
        config = month_config("January")
        assert config.reporting_periods == ("Monthly",)
        assert config.sprint_labels == ("W3-4",)

    @pytest.mark.parametrize("month", ["February", "March"])
    def test_later_months_report_fortnightly(self, month):
        config = month_config(month)
        assert config.reporting_periods == ("1st-2nd Week", "3rd-4th Week")
        assert config.sprint_labels == ("W1-2", "W3-4")

    def test_sprint_window_details(self):
        window = month_config("February").sprint_windows[1]
        assert window.label == "W3-4"
        assert window.range == "Mon 17th – Fri 28th Feb"
        assert window.close == "Fri 14th Feb, 3pm"

    def test_unknown_month_has_no_sprints(self):
        config = month_config("December")
        assert config.sprint_windows == ()

    def test_roster_is_a_copy(self):
        team = roster()
        team["Nick"].append("Someone Else")
        team["New"] = []
        assert roster() == TEAM
        assert "Someone Else" not in TEAM["Nick"]

    def test_emotional_code_vocabulary(self):
        assert len(EMOTIONAL_CODES) == len(set(EMOTIONAL_CODES)) == 7


class TestInitState:
    """Test the freshly initialized Tracker State."""

    def test_every_member_and_month_present(self, fresh_state):
        assert list(fresh_state) == list(TEAM)
        for months in fresh_state.values():
            assert list(months) == list(MONTHS)

    def test_keys_match_month_config(self, fresh_state):
        for member, months in fresh_state.items():
            for month, record in months.items():
                config = month_config(month)
                assert set(record.sprints) == set(config.sprint_labels)
                assert set(record.reporting) == set(config.reporting_periods)

    def test_records_at_defaults(self, fresh_state):
        record = fresh_state["Molly"]["February"]
        planning = record.planning
        assert planning.narrative_arc.done is False
        assert planning.narrative_arc.notes == ""
        assert planning.emotional_codes.done is False
        assert planning.emotional_codes.selected == ()
        assert not (planning.capacity_confirmed or planning.calendar_sent or planning.customer_signoff)
        assert all(sprint == SprintRecord() for sprint in record.sprints.values())
        assert all(report == ReportingRecord() for report in record.reporting.values())

    def test_deterministic(self):
        assert init_state(TEAM, MONTHS) == init_state(TEAM, MONTHS)

    def test_custom_roster_and_months(self):
        state = init_state({"Ana": ["Acme"]}, ["March"])
        assert list(state) == ["Ana"]
        assert list(state["Ana"]) == ["March"]
        assert isinstance(state["Ana"]["March"], MonthRecord)

    def test_records_are_frozen(self, fresh_state):
        record = fresh_state["Nick"]["January"]
        with pytest.raises(ValidationError):
            record.planning.calendar_sent = True

    def test_wire_names_are_camel_case(self, fresh_state):
        dumped = fresh_state["Nick"]["January"].model_dump(by_alias=True)
        assert set(dumped["planning"]) == {
            "narrativeArc",
            "emotionalCodes",
            "capacityConfirmed",
            "calendarSent",
            "customerSignoff",
        }
        assert set(dumped["sprints"]["W3-4"]) == {
            "scopeNotes",
            "scopeLocked",
            "allScheduled",
            "qaComplete",
            "zeroTypos",
            "cleanRunway",
        }
        assert set(dumped["reporting"]["Monthly"]) == {
            "performanceSignals",
            "qualitativeWins",
            "nextSteps",
            "notes",
        }
