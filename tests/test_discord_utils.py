"""Tests for the shared Discord helpers."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import discord
import pytest

from recruitbot.util import discord_utils

from conftest import make_interaction


@pytest.mark.parametrize("raw,expected", [
    ("123456789012345678", 123456789012345678),
    ("<#42>", 42),
    ("<@&77>", 77),
    (" 5 ", 5),
    ("", None),
    (None, None),
    ("abc", None),
    ("12a", None),
])
def test_resolve_snowflake(raw, expected):
    assert discord_utils.resolve_snowflake(raw) == expected


@pytest.mark.parametrize("raw,expected", [
    ("#112233", 0x112233),
    ("112233", 0x112233),
    ("#FFaa00", 0xFFAA00),
])
def test_parse_embed_color(raw, expected):
    assert discord_utils.parse_embed_color(raw).value == expected


@pytest.mark.parametrize("raw", ["", None, "rouge", "#12345", "#GGGGGG"])
def test_parse_embed_color_falls_back_to_blurple(raw):
    assert discord_utils.parse_embed_color(raw) == discord.Color.blurple()


def test_truncate():
    assert discord_utils.truncate("court", 10) == "court"
    assert discord_utils.truncate("x" * 12, 10) == "x" * 10 + "..."


def test_mentions():
    assert discord_utils.channel_mention("42") == "<#42>"
    assert discord_utils.role_mention("42") == "<@&42>"
    assert discord_utils.channel_mention(None) is None
    assert discord_utils.role_mention("pas un id") == "pas un id"


@pytest.mark.asyncio
async def test_report_failure_when_not_answered():
    interaction = make_interaction()

    await discord_utils.report_failure(interaction)

    interaction.response.send_message.assert_awaited_once_with(discord_utils.GENERIC_FAILURE_MESSAGE, ephemeral=True)


@pytest.mark.asyncio
async def test_report_failure_after_answer_sends_nothing():
    interaction = make_interaction(done=True)

    await discord_utils.report_failure(interaction)

    interaction.response.send_message.assert_not_awaited()


@pytest.mark.asyncio
async def test_report_failure_swallows_http_errors():
    interaction = make_interaction()
    response = SimpleNamespace(status=404, reason="Not Found")
    interaction.response.send_message = AsyncMock(side_effect=discord.NotFound(response, "Unknown interaction"))

    await discord_utils.report_failure(interaction)
