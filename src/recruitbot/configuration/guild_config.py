"""
Per-guild recruitment configuration.

Responsibilities:
- Define the configuration record (GuildConfiguration) and its questions (FormField)
- Build fresh default configurations, optionally overridden from app_config.yml
- Keep one record per guild behind the GuildConfigStore interface

Records live in memory only and are lost when the process stops.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

from recruitbot.configuration.app_configuration import app_config
from recruitbot.util.logger import get_logger

logger = get_logger("guild_config")


class FieldStyle(Enum):
    """Display style of a form input."""

    SHORT = "short"
    PARAGRAPH = "paragraph"

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True)
class FormField:
    """One question of the recruitment form."""

    id: str
    label: str
    placeholder: str = ""
    required: bool = True
    style: FieldStyle = FieldStyle.SHORT
    min_length: Optional[int] = None
    max_length: Optional[int] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FormField":
        """Build a field from a YAML mapping; ``id`` and ``label`` are mandatory."""
        style = FieldStyle.PARAGRAPH if str(data.get("style", "")).lower() == "paragraph" else FieldStyle.SHORT
        min_length = data.get("min_length")
        max_length = data.get("max_length")
        return cls(
            id=str(data["id"]),
            label=str(data["label"]),
            placeholder=str(data.get("placeholder") or ""),
            required=bool(data.get("required", True)),
            style=style,
            min_length=int(min_length) if min_length is not None else None,
            max_length=int(max_length) if max_length is not None else None,
        )


@dataclass(slots=True)
class GuildConfiguration:
    """Recruitment settings of a single guild."""

    ticket_category_id: Optional[str] = None
    staff_role_id: Optional[str] = None
    log_channel_id: Optional[str] = None
    welcome_message: str = ""
    modal_fields: List[FormField] = field(default_factory=list)
    embed_color: str = "#5865F2"
    embed_title: str = ""
    embed_description: str = ""
    button_label: str = ""
    ticket_name_format: str = "candidature-{username}"


DEFAULT_WELCOME_MESSAGE = "Merci de votre candidature ! Un membre du staff va vous répondre bientôt."
DEFAULT_EMBED_COLOR = "#5865F2"
DEFAULT_EMBED_TITLE = "📋 Recrutement"
DEFAULT_EMBED_DESCRIPTION = "Cliquez sur le bouton ci-dessous pour postuler !"
DEFAULT_BUTTON_LABEL = "✉️ Postuler"
DEFAULT_TICKET_NAME_FORMAT = "candidature-{username}"


def default_form_fields() -> List[FormField]:
    """Return new instances of the three stock recruitment questions."""
    return [
        FormField(
            id="age",
            label="Quel est votre âge ?",
            placeholder="Ex: 18",
            required=True,
            style=FieldStyle.SHORT,
            max_length=3,
        ),
        FormField(
            id="experience",
            label="Avez-vous de l'expérience ?",
            placeholder="Décrivez votre expérience...",
            required=True,
            style=FieldStyle.PARAGRAPH,
            min_length=20,
            max_length=1000,
        ),
        FormField(
            id="motivation",
            label="Pourquoi nous rejoindre ?",
            placeholder="Expliquez votre motivation...",
            required=True,
            style=FieldStyle.PARAGRAPH,
            min_length=20,
            max_length=1000,
        ),
    ]


def build_default_configuration(overrides: Optional[Mapping[str, Any]] = None) -> GuildConfiguration:
    """Create a fresh default configuration.

    ``overrides`` maps GuildConfiguration attribute names to values; unknown
    keys are ignored with a warning and ``modal_fields`` entries are parsed
    with :meth:`FormField.from_mapping`. Nothing is shared between the
    returned instances, so mutating one guild never leaks into another.
    """
    config = GuildConfiguration(
        welcome_message=DEFAULT_WELCOME_MESSAGE,
        modal_fields=default_form_fields(),
        embed_color=DEFAULT_EMBED_COLOR,
        embed_title=DEFAULT_EMBED_TITLE,
        embed_description=DEFAULT_EMBED_DESCRIPTION,
        button_label=DEFAULT_BUTTON_LABEL,
        ticket_name_format=DEFAULT_TICKET_NAME_FORMAT,
    )
    if not overrides:
        return config

    known = {f.name for f in fields(GuildConfiguration)}
    changes: Dict[str, Any] = {}
    for key, value in overrides.items():
        if key not in known:
            logger.warning("[GUILD CONFIG] Ignoring unknown default override %r", key)
            continue
        if key == "modal_fields":
            try:
                changes[key] = [FormField.from_mapping(item) for item in (value or [])][:5]
            except (KeyError, TypeError, ValueError) as exc:
                logger.error("[GUILD CONFIG] Invalid modal_fields override, keeping stock questions: %s", exc)
            continue
        changes[key] = None if value is None else str(value)
    return replace(config, **changes)


class GuildConfigStore(abc.ABC):
    """Storage interface for guild configurations.

    Call sites only rely on these two operations, so a persistent backend can
    replace the in-memory one without touching them.
    """

    @abc.abstractmethod
    def get_or_create(self, guild_id: int) -> GuildConfiguration:
        """Return the guild's configuration, inserting the defaults if absent."""

    @abc.abstractmethod
    def set(self, guild_id: int, config: GuildConfiguration) -> None:
        """Replace the stored configuration of the guild."""


class InMemoryGuildConfigStore(GuildConfigStore):
    """Process-local store; grows by one record per guild served, no eviction."""

    def __init__(self, defaults_factory: Optional[Callable[[], GuildConfiguration]] = None):
        self.guilds: Dict[int, GuildConfiguration] = {}
        self._defaults_factory = defaults_factory or build_default_configuration

    def get_or_create(self, guild_id: int) -> GuildConfiguration:
        config = self.guilds.get(guild_id)
        if config is None:
            config = self._defaults_factory()
            self.guilds[guild_id] = config
            logger.debug("[GUILD CONFIG] Created default configuration for guild %s", guild_id)
        return config

    def set(self, guild_id: int, config: GuildConfiguration) -> None:
        self.guilds[guild_id] = config
        logger.debug("[GUILD CONFIG] Stored configuration for guild %s", guild_id)


# Global guild configuration store instance
guild_config_store: GuildConfigStore = InMemoryGuildConfigStore(
    lambda: build_default_configuration(app_config.guild_defaults)
)
