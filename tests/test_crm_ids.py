"""Tests for Attio id normalization and envelope unwrapping.

Tests cover:
- Compound id objects for every entity type
- Plain and numeric ids
- Missing or malformed ids
- Assignee and linked-record reference shapes
"""

import pytest

from attiomcp.crm import ids


class TestIds:
    """Tests for per-entity id normalizers."""

    def test_compound_record_id(self):
        raw = {"workspace_id": "ws_1", "object_id": "obj_1", "record_id": "rec_1"}
        assert ids.record_id(raw) == "rec_1"

    def test_plain_record_id(self):
        assert ids.record_id("rec_1") == "rec_1"

    @pytest.mark.parametrize("raw", [None, "", {}, {"workspace_id": "ws_1"}, [], True])
    def test_unusable_record_id(self, raw):
        """Missing or malformed ids normalize to None."""
        assert ids.record_id(raw) is None

    def test_entity_keys(self):
        """Each entity type reads its own inner key."""
        assert ids.task_id({"task_id": "t1"}) == "t1"
        assert ids.note_id({"note_id": "n1"}) == "n1"
        assert ids.meeting_id({"meeting_id": "m1"}) == "m1"
        assert ids.thread_id({"thread_id": "th1"}) == "th1"
        assert ids.list_id({"list_id": "l1"}) == "l1"
        assert ids.entry_id({"entry_id": "e1"}) == "e1"

    def test_wrong_entity_key(self):
        """A task id object is not a record id."""
        assert ids.record_id({"task_id": "t1"}) is None

    def test_numeric_id_becomes_text(self):
        assert ids.record_id(42) == "42"

    @pytest.mark.parametrize(
        "reference",
        [
            {"referenced_actor_type": "workspace-member", "referenced_actor_id": "m1"},
            {"id": "m1"},
            {"id": {"workspace_id": "ws_1", "workspace_member_id": "m1"}},
            {"workspace_member_id": "m1"},
            "m1",
        ],
    )
    def test_actor_id_shapes(self, reference):
        """Assignee references in any known shape resolve to the member id."""
        assert ids.actor_id(reference) == "m1"

    def test_linked_record_id_shapes(self):
        assert ids.linked_record_id({"target_record_id": "rec_1"}) == "rec_1"
        assert ids.linked_record_id({"record_id": {"record_id": "rec_2"}}) == "rec_2"
        assert ids.linked_record_id({"target_object": "companies"}) is None

    def test_unwrap_list(self):
        """Data envelopes and bare lists both yield the item list."""
        assert ids.unwrap_list({"data": [1, 2]}) == [1, 2]
        assert ids.unwrap_list([1, 2]) == [1, 2]
        assert ids.unwrap_list({"data": None}) == []
        assert ids.unwrap_list(None) == []
        assert ids.unwrap_list("data") == []
