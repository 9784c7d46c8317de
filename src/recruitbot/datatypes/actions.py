"""
Component actions and their custom id encoding.

Every button, select option and modal the bot creates carries a custom id
built from a :class:`ComponentAction`. The interaction dispatcher decodes the
id back into an action exactly once, so handlers only ever branch on
:class:`ActionKind` members.

Indexed actions reference a form field as ``<kind>:<index>:<field id>``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

SEPARATOR = ":"


class ActionKind(Enum):
    """Enumeration of every interactive control the bot emits."""

    # Recruitment workflow
    OPEN_APPLICATION = "open_recruitment"
    SUBMIT_APPLICATION = "recruitment_modal"
    CLOSE_TICKET = "close_ticket"

    # Configuration panel buttons
    CONFIG_CATEGORY = "config_category"
    CONFIG_STAFF = "config_staff"
    CONFIG_LOGS = "config_logs"
    CONFIG_EMBED = "config_embed"
    CONFIG_FIELDS = "config_modal"
    CONFIG_WELCOME = "config_welcome"

    # Configuration modals
    EDIT_CATEGORY = "edit_category"
    EDIT_STAFF = "edit_staff"
    EDIT_LOGS = "edit_logs"
    EDIT_EMBED = "edit_embed"
    EDIT_WELCOME = "edit_welcome"

    # Question editor
    SELECT_FIELD = "select_modal_field"
    ADD_FIELD = "add_field"
    FIELD_LIMIT_REACHED = "limit_reached"
    SUBMIT_NEW_FIELD = "add_modal_field"
    SHOW_FIELD = "field"
    EDIT_FIELD = "edit_field"
    DELETE_FIELD = "delete_field"
    SUBMIT_FIELD_EDIT = "edit_field_modal"

    def __str__(self) -> str:
        return self.value


INDEXED_KINDS = frozenset({
    ActionKind.SHOW_FIELD,
    ActionKind.EDIT_FIELD,
    ActionKind.DELETE_FIELD,
    ActionKind.SUBMIT_FIELD_EDIT,
})

_KINDS_BY_VALUE = {kind.value: kind for kind in ActionKind}


@dataclass(frozen=True, slots=True)
class ComponentAction:
    """A decoded custom id.

    Attributes:
        kind: Which control produced the interaction
        index: Position of the referenced form field (indexed kinds only)
        field_id: Id of the field that was at ``index`` when the control was built
    """

    kind: ActionKind
    index: Optional[int] = None
    field_id: Optional[str] = None

    def __post_init__(self) -> None:
        indexed = self.kind in INDEXED_KINDS
        if indexed and (self.index is None or self.index < 0 or not self.field_id):
            raise ValueError(f"{self.kind} requires a non-negative index and a field id")
        if not indexed and (self.index is not None or self.field_id is not None):
            raise ValueError(f"{self.kind} does not take an index")

    @classmethod
    def for_field(cls, kind: ActionKind, index: int, field_id: str) -> "ComponentAction":
        return cls(kind=kind, index=index, field_id=field_id)

    @property
    def custom_id(self) -> str:
        """Encode the action as a Discord custom id."""
        if self.kind in INDEXED_KINDS:
            return SEPARATOR.join((self.kind.value, str(self.index), str(self.field_id)))
        return self.kind.value


def parse_custom_id(custom_id: Optional[str]) -> Optional[ComponentAction]:
    """Decode a custom id, returning None for ids this bot did not produce."""
    if not custom_id:
        return None

    kind_text, _, rest = custom_id.partition(SEPARATOR)
    kind = _KINDS_BY_VALUE.get(kind_text)
    if kind is None:
        return None

    if kind not in INDEXED_KINDS:
        return ComponentAction(kind) if not rest else None

    index_text, _, field_id = rest.partition(SEPARATOR)
    if not index_text.isdecimal() or not field_id:
        return None
    return ComponentAction.for_field(kind, int(index_text), field_id)
