"""
Form-field management for the recruitment modal.

All operations mutate ``GuildConfiguration.modal_fields`` in place and never
let its length leave ``[0, MAX_FORM_FIELDS]``. Rejections are reported
through the return value; callers decide what to tell the user.

Fields are addressed by index. Index references handed out to the UI also
carry the field id, and a reference whose id no longer matches the field at
that index (the list shifted after a deletion) is treated as not found.
"""

from __future__ import annotations

import re
import time
from typing import Iterable, List, Optional, Tuple

from recruitbot.configuration.guild_config import FieldStyle, FormField, GuildConfiguration
from recruitbot.util.logger import get_logger

logger = get_logger("form_fields")

# Discord allows at most five inputs in one modal.
MAX_FORM_FIELDS = 5

# Discord text input bounds
MAX_INPUT_LENGTH = 4000
MAX_LABEL_LENGTH = 45
MAX_PLACEHOLDER_LENGTH = 100

AFFIRMATIVE_ANSWER = "oui"

_BOUNDS_PATTERN = re.compile(r"^\s*(\d*)\s*(?:-\s*(\d*)\s*)?$")


def list_fields(config: GuildConfiguration) -> List[Tuple[int, FormField]]:
    """Return the fields in order, each paired with its 1-based position."""
    return [(position, form_field) for position, form_field in enumerate(config.modal_fields, start=1)]


def is_full(config: GuildConfiguration) -> bool:
    return len(config.modal_fields) >= MAX_FORM_FIELDS


def get_field_at(config: GuildConfiguration, index: int, expected_id: Optional[str] = None) -> Optional[FormField]:
    """Return the field at ``index`` or None when out of range or stale."""
    if not 0 <= index < len(config.modal_fields):
        return None
    form_field = config.modal_fields[index]
    if expected_id is not None and form_field.id != expected_id:
        logger.debug("[FORM FIELDS] Stale reference to %s at index %d (now %s)", expected_id, index, form_field.id)
        return None
    return form_field


def add_field(config: GuildConfiguration, form_field: FormField) -> bool:
    """Append a field. Returns False, leaving the list untouched, when full."""
    if is_full(config):
        logger.debug("[FORM FIELDS] Rejected field %s: limit of %d reached", form_field.id, MAX_FORM_FIELDS)
        return False
    config.modal_fields.append(form_field)
    return True


def remove_field_at(config: GuildConfiguration, index: int, expected_id: Optional[str] = None) -> Optional[FormField]:
    """Remove and return the field at ``index``; None means not found."""
    if get_field_at(config, index, expected_id) is None:
        return None
    return config.modal_fields.pop(index)


def replace_field_at(
    config: GuildConfiguration,
    index: int,
    form_field: FormField,
    expected_id: Optional[str] = None,
) -> bool:
    """Swap the field at ``index`` for ``form_field``; False means not found."""
    if get_field_at(config, index, expected_id) is None:
        return False
    config.modal_fields[index] = form_field
    return True


# -------- Raw input normalization --------

def normalize_style(raw: str) -> FieldStyle:
    """"paragraph" in any case maps to PARAGRAPH, anything else to SHORT."""
    return FieldStyle.PARAGRAPH if (raw or "").lower() == FieldStyle.PARAGRAPH.value else FieldStyle.SHORT


def normalize_required(raw: str) -> bool:
    """"oui" in any case means required, anything else means optional."""
    return (raw or "").lower() == AFFIRMATIVE_ANSWER


def parse_length_bounds(raw: str) -> Tuple[Optional[int], Optional[int]]:
    """Parse ``"min-max"``, ``"min"`` or ``"-max"`` into optional bounds.

    Unparsable text yields ``(None, None)``. Values are clamped to what
    Discord accepts and a minimum larger than the maximum is dropped.
    """
    match = _BOUNDS_PATTERN.match(raw or "")
    if match is None:
        return None, None

    min_text, max_text = match.groups()
    min_length = min(int(min_text), MAX_INPUT_LENGTH) if min_text else None
    max_length = min(int(max_text), MAX_INPUT_LENGTH) if max_text else None
    if max_length == 0:
        max_length = None
    if min_length is not None and max_length is not None and min_length > max_length:
        min_length = None
    return min_length, max_length


def format_length_bounds(form_field: FormField) -> str:
    """Inverse of :func:`parse_length_bounds`, used to pre-fill the edit form."""
    if form_field.min_length is None and form_field.max_length is None:
        return ""
    min_text = "" if form_field.min_length is None else str(form_field.min_length)
    max_text = "" if form_field.max_length is None else str(form_field.max_length)
    return f"{min_text}-{max_text}" if max_text else min_text


def generate_field_id(existing_ids: Iterable[str]) -> str:
    """Derive an id from the current time in milliseconds, unique among ``existing_ids``."""
    taken = set(existing_ids)
    stamp = time.time_ns() // 1_000_000
    candidate = f"field_{stamp}"
    while candidate in taken:
        stamp += 1
        candidate = f"field_{stamp}"
    return candidate


def build_field(
    config: GuildConfiguration,
    *,
    label: str,
    placeholder: str = "",
    style: str = "",
    required: str = "",
    length: str = "",
    field_id: Optional[str] = None,
) -> FormField:
    """Build a FormField from raw modal input.

    A new id is generated unless ``field_id`` is given (edits keep the id so
    answers stay correlated with their question).
    """
    min_length, max_length = parse_length_bounds(length)
    return FormField(
        id=field_id or generate_field_id(f.id for f in config.modal_fields),
        label=label.strip()[:MAX_LABEL_LENGTH],
        placeholder=(placeholder or "").strip()[:MAX_PLACEHOLDER_LENGTH],
        required=normalize_required(required),
        style=normalize_style(style),
        min_length=min_length,
        max_length=max_length,
    )
