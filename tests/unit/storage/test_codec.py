"""
Unit tests for the Tracker State codec and load-or-initialize.
"""

import json

import pytest

from opstracker.engine.calendar import MONTHS, TEAM
from opstracker.engine.errors import CorruptPersistedStateError
from opstracker.engine.paths import set_at_path, toggle_at_path
from opstracker.engine.state import SprintRecord, init_state
from opstracker.storage.codec import decode_state, encode_state, load_state, reconcile_state
from opstracker.storage.memory import InMemoryBlobStore

KEY = "kindling-q1-tracker"


@pytest.fixture
def worked_state(fresh_state):
    state = toggle_at_path(fresh_state, "Nick", "January", "planning.narrativeArc.done")
    state = set_at_path(state, "Nick", "January", "planning.narrativeArc.notes", "Fresh start")
    state = set_at_path(state, "Matt", "March", "planning.emotionalCodes.selected", ["Status", "Power"])
    state = toggle_at_path(state, "Tash", "February", "reporting.1st-2nd Week.performanceSignals")
    return state


class TestEncodeDecode:

    def test_round_trip(self, worked_state):
        assert decode_state(encode_state(worked_state)) == worked_state

    def test_wire_format_uses_camel_case(self, worked_state):
        data = json.loads(encode_state(worked_state))
        january = data["Nick"]["January"]
        assert january["planning"]["narrativeArc"] == {"done": True, "notes": "Fresh start"}
        assert data["Matt"]["March"]["planning"]["emotionalCodes"]["selected"] == ["Status", "Power"]
        assert january["sprints"]["W3-4"]["scopeLocked"] is False

    def test_whitespace_and_field_order_irrelevant(self, worked_state):
        data = json.loads(encode_state(worked_state))
        reordered = {member: dict(reversed(list(months.items()))) for member, months in data.items()}
        blob = json.dumps(reordered, indent=4)
        assert decode_state(blob) == worked_state

    def test_tag_order_preserved(self, worked_state):
        decoded = decode_state(encode_state(worked_state))
        assert decoded["Matt"]["March"].planning.emotional_codes.selected == ("Status", "Power")

    def test_duplicate_tags_collapsed(self, fresh_state):
        data = json.loads(encode_state(fresh_state))
        data["Nick"]["January"]["planning"]["emotionalCodes"]["selected"] = ["Order", "Order", "Saving"]
        decoded = decode_state(json.dumps(data))
        assert decoded["Nick"]["January"].planning.emotional_codes.selected == ("Order", "Saving")

    @pytest.mark.parametrize("blob", [
        "",
        "not json at all",
        "{\"Nick\": ",
        "[]",
        "null",
        "{\"Nick\": {\"January\": {\"planning\": 5}}}",
    ])
    def test_undecodable_blobs(self, blob):
        with pytest.raises(CorruptPersistedStateError):
            decode_state(blob)

    def test_wrong_leaf_types_are_corrupt(self, fresh_state):
        data = json.loads(encode_state(fresh_state))
        data["Nick"]["January"]["planning"]["calendarSent"] = "true"
        with pytest.raises(CorruptPersistedStateError):
            decode_state(json.dumps(data))

    def test_object_shaped_flags_are_corrupt(self, fresh_state):
        data = json.loads(encode_state(fresh_state))
        data["Nick"]["January"]["planning"]["capacityConfirmed"] = {"done": False}
        with pytest.raises(CorruptPersistedStateError):
            decode_state(json.dumps(data))

    def test_unknown_fields_are_corrupt(self, fresh_state):
        data = json.loads(encode_state(fresh_state))
        data["Nick"]["January"]["sprints"]["W3-4"]["extra"] = True
        with pytest.raises(CorruptPersistedStateError):
            decode_state(json.dumps(data))


class TestLoadState:

    def test_absent_blob_initializes(self):
        assert load_state(InMemoryBlobStore(), KEY, TEAM, MONTHS) == init_state(TEAM, MONTHS)

    def test_saved_state_round_trips(self, worked_state):
        store = InMemoryBlobStore()
        store.save(KEY, encode_state(worked_state))
        assert load_state(store, KEY, TEAM, MONTHS) == worked_state

    def test_corrupt_blob_initializes(self):
        store = InMemoryBlobStore({KEY: "{{{ definitely not json"})
        assert load_state(store, KEY, TEAM, MONTHS) == init_state(TEAM, MONTHS)

    def test_other_keys_ignored(self, worked_state):
        store = InMemoryBlobStore({"another-tool": encode_state(worked_state)})
        assert load_state(store, KEY, TEAM, MONTHS) == init_state(TEAM, MONTHS)


class TestReconcileState:

    def test_conforming_state_unchanged(self, worked_state):
        assert reconcile_state(worked_state, TEAM, MONTHS) == worked_state

    def test_renamed_sprint_label(self, fresh_state):
        record = fresh_state["Nick"]["January"]
        stale = record.model_copy(update={"sprints": {"W4-5": SprintRecord(scope_locked=True)}})
        stored = {**fresh_state, "Nick": {**fresh_state["Nick"], "January": stale}}

        result = reconcile_state(stored, TEAM, MONTHS)

        assert set(result["Nick"]["January"].sprints) == {"W3-4"}
        assert result["Nick"]["January"].sprints["W3-4"] == SprintRecord()

    def test_keeps_surviving_values(self, worked_state):
        trimmed = {**worked_state, "Nick": {"January": worked_state["Nick"]["January"]}}
        result = reconcile_state(trimmed, TEAM, MONTHS)

        assert result["Nick"]["January"].planning.narrative_arc.notes == "Fresh start"
        assert list(result["Nick"]) == list(MONTHS)
        assert result["Nick"]["February"] == init_state(TEAM, MONTHS)["Nick"]["February"]

    def test_drops_departed_members_and_months(self, worked_state):
        result = reconcile_state(worked_state, {"Matt": ["Meridian"]}, ["March"])
        assert list(result) == ["Matt"]
        assert list(result["Matt"]) == ["March"]
        assert result["Matt"]["March"].planning.emotional_codes.selected == ("Status", "Power")
