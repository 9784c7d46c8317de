"""
discord_utils.py
================

Stateless Discord helpers shared by the cogs, handlers and UI builders.
"""

import re
from typing import Optional

import discord

from recruitbot.util.logger import get_logger

logger = get_logger("discord_utils")

GENERIC_FAILURE_MESSAGE = "❌ Une erreur est survenue."

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6})$")


def resolve_snowflake(value: Optional[str]) -> Optional[int]:
    """Parse a stored id (digits, or a ``<#id>`` / ``<@&id>`` mention) into an int."""
    if not value:
        return None
    digits = value.strip().lstrip("<#@&").rstrip(">")
    return int(digits) if digits.isdecimal() else None


def parse_embed_color(value: Optional[str]) -> discord.Color:
    """Convert ``#RRGGBB`` into a colour, falling back to blurple for bad input."""
    match = _HEX_COLOR.match((value or "").strip())
    if match is None:
        logger.debug("Invalid embed colour %r, using blurple", value)
        return discord.Color.blurple()
    return discord.Color(int(match.group(1), 16))


def truncate(text: str, limit: int, suffix: str = "...") -> str:
    """Cut ``text`` to ``limit`` characters and mark the cut with ``suffix``."""
    if len(text) <= limit:
        return text
    return text[:limit] + suffix


def channel_mention(value: Optional[str]) -> Optional[str]:
    snowflake = resolve_snowflake(value)
    return f"<#{snowflake}>" if snowflake is not None else value


def role_mention(value: Optional[str]) -> Optional[str]:
    snowflake = resolve_snowflake(value)
    return f"<@&{snowflake}>" if snowflake is not None else value


async def report_failure(interaction: discord.Interaction) -> None:
    """Tell the user something went wrong, unless the interaction was already answered."""
    if interaction.response.is_done():
        return
    try:
        await interaction.response.send_message(GENERIC_FAILURE_MESSAGE, ephemeral=True)
    except discord.HTTPException:
        logger.exception("Failed to send the failure notice for interaction %s", interaction.id)
