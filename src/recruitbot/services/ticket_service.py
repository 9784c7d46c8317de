"""
Ticket workflow helpers: naming, channel creation and answer collection.

These functions hold the decisions of the recruitment workflow and the
platform calls it issues; responding to the interaction is left to the
handlers in :mod:`recruitbot.bot.ticket_handlers`.
"""

from __future__ import annotations

import re
from typing import Dict, List, Mapping, Optional, Tuple, Union

import discord

from recruitbot.configuration.guild_config import FormField, GuildConfiguration
from recruitbot.util.discord_utils import resolve_snowflake
from recruitbot.util.logger import get_logger

logger = get_logger("ticket_service")

USERNAME_PLACEHOLDER = "{username}"

# Discord caps embed field values at 1024 characters
EMBED_FIELD_VALUE_LIMIT = 1024


class TicketSetupError(Exception):
    """A submission precondition failed; ``user_message`` is shown to the applicant."""

    user_message = "❌ Impossible de créer votre ticket."


class CategoryNotConfiguredError(TicketSetupError):
    user_message = "❌ La catégorie n'est pas configurée !"


class CategoryNotFoundError(TicketSetupError):
    user_message = "❌ La catégorie configurée est introuvable. Contactez un administrateur."


def derive_ticket_name(name_format: str, username: str) -> str:
    """Substitute the applicant's username into the ticket name template."""
    return name_format.replace(USERNAME_PLACEHOLDER, username)


def _normalize_channel_name(name: str) -> str:
    # Discord lowercases text channel names and turns whitespace into dashes
    return re.sub(r"\s+", "-", name.strip().lower())


def ticket_markers(name_format: str) -> List[str]:
    """Static portions of the name template, used to recognise ticket channels.

    ``"candidature-{username}"`` gives ``["candidature"]``.
    """
    segments = (_normalize_channel_name(part).strip("-_") for part in name_format.split(USERNAME_PLACEHOLDER))
    return [segment for segment in segments if segment]


def is_ticket_channel(channel_name: Optional[str], name_format: str) -> bool:
    """True when ``channel_name`` contains every static marker of the template.

    A template without any static text cannot identify tickets, so nothing
    matches it.
    """
    markers = ticket_markers(name_format)
    if not markers or not channel_name:
        return False
    normalized = _normalize_channel_name(channel_name)
    return all(marker in normalized for marker in markers)


def collect_answers(fields: List[FormField], submitted: Mapping[str, str]) -> List[Tuple[str, str]]:
    """Pair each question with its answer, in field order, skipping empty answers."""
    answers: List[Tuple[str, str]] = []
    for form_field in fields:
        value = (submitted.get(form_field.id) or "").strip()
        if not value:
            continue
        if len(value) > EMBED_FIELD_VALUE_LIMIT:
            value = value[: EMBED_FIELD_VALUE_LIMIT - 3] + "..."
        answers.append((form_field.label, value))
    return answers


def fit_answers(answers: List[Tuple[str, str]], budget: int) -> List[Tuple[str, str]]:
    """Shorten answers so labels and values together use at most ``budget`` characters.

    The space left after the labels is shared evenly; answers shorter than
    their share hand the rest over to the longer ones.
    """
    remaining = budget - sum(len(label) for label, _ in answers)
    by_length = sorted(range(len(answers)), key=lambda i: len(answers[i][1]))
    allowances: Dict[int, int] = {}
    for position, i in enumerate(by_length):
        share = max(remaining // (len(by_length) - position), 1)
        allowances[i] = min(len(answers[i][1]), share)
        remaining -= allowances[i]

    fitted: List[Tuple[str, str]] = []
    for i, (label, value) in enumerate(answers):
        allowance = allowances[i]
        if len(value) > allowance:
            value = value[: allowance - 3] + "..." if allowance > 3 else value[:allowance]
        fitted.append((label, value))
    return fitted


def resolve_ticket_category(guild: discord.Guild, config: GuildConfiguration) -> discord.CategoryChannel:
    """Return the category tickets are created under.

    Raises:
        CategoryNotConfiguredError: No category id is stored.
        CategoryNotFoundError: The stored id does not name a category of this guild.
    """
    if not config.ticket_category_id:
        raise CategoryNotConfiguredError()

    category_id = resolve_snowflake(config.ticket_category_id)
    category = guild.get_channel(category_id) if category_id is not None else None
    if not isinstance(category, discord.CategoryChannel):
        logger.info(
            "[TICKETS] Guild %s has category id %r configured but it does not resolve",
            guild.id,
            config.ticket_category_id,
        )
        raise CategoryNotFoundError()
    return category


def resolve_staff_role(guild: discord.Guild, config: GuildConfiguration) -> Optional[discord.Role]:
    """Return the configured staff role, or None when unset or unknown."""
    if not config.staff_role_id:
        return None
    role_id = resolve_snowflake(config.staff_role_id)
    role = guild.get_role(role_id) if role_id is not None else None
    if role is None:
        logger.warning("[TICKETS] Staff role %r not found in guild %s", config.staff_role_id, guild.id)
    return role


def build_ticket_overwrites(
    guild: discord.Guild,
    applicant: Union[discord.Member, discord.User],
    staff_role: Optional[discord.Role],
) -> Dict[Union[discord.Role, discord.Member, discord.User], discord.PermissionOverwrite]:
    """Hide the channel from everyone but the applicant, the staff role and the bot."""
    overwrites: Dict[Union[discord.Role, discord.Member, discord.User], discord.PermissionOverwrite] = {
        guild.default_role: discord.PermissionOverwrite(view_channel=False),
        applicant: discord.PermissionOverwrite(view_channel=True, send_messages=True),
    }
    if staff_role is not None:
        overwrites[staff_role] = discord.PermissionOverwrite(view_channel=True, send_messages=True)
    if guild.me is not None:
        overwrites[guild.me] = discord.PermissionOverwrite(view_channel=True, send_messages=True)
    return overwrites


async def create_ticket_channel(
    guild: discord.Guild,
    applicant: Union[discord.Member, discord.User],
    config: GuildConfiguration,
    category: discord.CategoryChannel,
    staff_role: Optional[discord.Role],
) -> discord.TextChannel:
    """Create the applicant's private channel. Platform errors propagate."""
    name = derive_ticket_name(config.ticket_name_format, applicant.name)
    channel = await guild.create_text_channel(
        name,
        category=category,
        overwrites=build_ticket_overwrites(guild, applicant, staff_role),
        reason=f"Candidature de {applicant} ({applicant.id})",
    )
    logger.info("[TICKETS] Opened ticket #%s (%s) for user %s in guild %s", channel.name, channel.id, applicant.id, guild.id)
    return channel


class LogChannelSink:
    """Destination for ticket audit messages.

    The log channel id is stored by the configuration panel but nothing is
    posted to it yet; records only reach the debug log.
    """

    async def record(self, guild_id: int, config: GuildConfiguration, message: str) -> None:
        logger.debug("[LOG SINK] guild=%s log_channel=%s: %s", guild_id, config.log_channel_id, message)


log_sink = LogChannelSink()
