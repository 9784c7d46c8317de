"""Tests for component action encoding."""

import pytest

from recruitbot.datatypes.actions import INDEXED_KINDS, ActionKind, ComponentAction, parse_custom_id


def test_plain_custom_ids_match_the_wire_tags():
    assert ComponentAction(ActionKind.OPEN_APPLICATION).custom_id == "open_recruitment"
    assert ComponentAction(ActionKind.CLOSE_TICKET).custom_id == "close_ticket"
    assert ComponentAction(ActionKind.SUBMIT_APPLICATION).custom_id == "recruitment_modal"


def test_indexed_custom_id_carries_index_and_field_id():
    action = ComponentAction.for_field(ActionKind.DELETE_FIELD, 2, "field_1700000000000")

    assert action.custom_id == "delete_field:2:field_1700000000000"
    assert parse_custom_id(action.custom_id) == action


@pytest.mark.parametrize("kind", [k for k in ActionKind if k not in INDEXED_KINDS])
def test_every_plain_kind_decodes(kind):
    assert parse_custom_id(kind.value) == ComponentAction(kind)


@pytest.mark.parametrize("custom_id", [
    None,
    "",
    "unknown",
    "open_recruitment:1:x",
    "delete_field",
    "delete_field:abc:x",
    "delete_field:1",
    "delete_field:-1:x",
])
def test_foreign_or_malformed_ids_are_ignored(custom_id):
    assert parse_custom_id(custom_id) is None


def test_indexed_kind_requires_reference():
    with pytest.raises(ValueError):
        ComponentAction(ActionKind.EDIT_FIELD)


def test_plain_kind_rejects_index():
    with pytest.raises(ValueError):
        ComponentAction(ActionKind.CONFIG_EMBED, index=0, field_id="x")
