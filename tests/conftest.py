"""
Pytest configuration and fixtures for RecruitBot tests.
"""

import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add src directory to path so imports work
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from recruitbot.configuration import guild_config  # noqa: E402


@pytest.fixture
def store(monkeypatch):
    """Fresh in-memory store installed as the global one."""
    fresh = guild_config.InMemoryGuildConfigStore()
    monkeypatch.setattr(guild_config, "guild_config_store", fresh)
    return fresh


def make_interaction(*, done: bool = False, guild_id: int | None = 1, user=None, channel=None, guild=None):
    """Build a stand-in for discord.Interaction with awaitable responders."""
    response = SimpleNamespace(
        send_message=AsyncMock(),
        send_modal=AsyncMock(),
        edit_message=AsyncMock(),
        defer=AsyncMock(),
        is_done=MagicMock(return_value=done),
    )
    return SimpleNamespace(
        id=4242,
        guild_id=guild_id,
        guild=guild,
        user=user,
        channel=channel,
        data={},
        response=response,
        followup=SimpleNamespace(send=AsyncMock()),
        edit_original_response=AsyncMock(),
    )


def make_member(user_id: int = 42, name: str = "alice"):
    member = MagicMock()
    member.id = user_id
    member.name = name
    member.mention = f"<@{user_id}>"
    member.display_avatar.url = "https://cdn.example.com/avatar.png"
    return member


@pytest.fixture
def interaction_factory():
    return make_interaction


@pytest.fixture
def member():
    return make_member()
