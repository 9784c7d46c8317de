"""
Typed interaction events.

Raw component and modal interactions are decoded once, at the dispatcher,
into one of three variants exposing only what the handlers use. Handlers
still answer through ``event.interaction``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

import discord

from recruitbot.datatypes.actions import ComponentAction, parse_custom_id


@dataclass(slots=True)
class InteractionEvent:
    """Fields shared by every decoded interaction."""

    interaction: discord.Interaction
    action: ComponentAction
    guild_id: int
    guild: Optional[discord.Guild]
    user: Union[discord.Member, discord.User]
    channel: Any


@dataclass(slots=True)
class ButtonPressed(InteractionEvent):
    """A button was clicked."""


@dataclass(slots=True)
class SelectChosen(InteractionEvent):
    """Options were picked in a string select menu."""

    values: List[str] = field(default_factory=list)


@dataclass(slots=True)
class ModalSubmitted(InteractionEvent):
    """A modal was submitted; ``values`` maps input custom id to text."""

    values: Dict[str, str] = field(default_factory=dict)

    def value(self, custom_id: str) -> str:
        """Submitted text of one input, empty when missing."""
        return self.values.get(custom_id) or ""


def extract_modal_values(data: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Flatten the component tree of a modal submission into ``{custom_id: value}``."""
    values: Dict[str, str] = {}
    for row in (data or {}).get("components", []):
        children = row.get("components")
        if children is None:
            # Label containers wrap a single component
            child = row.get("component")
            children = [child] if child else [row]
        for child in children:
            custom_id = child.get("custom_id")
            if custom_id is not None:
                values[custom_id] = child.get("value") or ""
    return values


def decode_interaction(interaction: discord.Interaction) -> Optional[InteractionEvent]:
    """Turn a raw interaction into a typed event.

    Returns None for application commands, interactions outside a guild and
    custom ids this bot did not create.
    """
    if interaction.guild_id is None:
        return None

    data = interaction.data or {}
    action = parse_custom_id(data.get("custom_id"))
    if action is None:
        return None

    common = dict(
        interaction=interaction,
        action=action,
        guild_id=interaction.guild_id,
        guild=interaction.guild,
        user=interaction.user,
        channel=interaction.channel,
    )

    if interaction.type == discord.InteractionType.modal_submit:
        return ModalSubmitted(**common, values=extract_modal_values(data))

    if interaction.type == discord.InteractionType.component:
        component_type = data.get("component_type")
        if component_type == discord.ComponentType.button.value:
            return ButtonPressed(**common)
        if component_type == discord.ComponentType.string_select.value:
            return SelectChosen(**common, values=list(data.get("values", [])))

    return None
