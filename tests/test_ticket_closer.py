import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock

import discord
import pytest

from recruitbot.services.ticket_closer import TicketCloser


def make_channel(channel_id=10, delete=None):
    return SimpleNamespace(id=channel_id, delete=delete or AsyncMock())


@pytest.mark.asyncio
async def test_schedule_deletes_after_delay():
    closer = TicketCloser()
    channel = make_channel()

    assert closer.schedule(channel, 0) is True
    assert closer.is_closing(channel.id)

    await asyncio.sleep(0.05)

    channel.delete.assert_awaited_once()
    assert not closer.is_closing(channel.id)
    assert closer.pending_count() == 0


@pytest.mark.asyncio
async def test_second_schedule_is_rejected():
    closer = TicketCloser()
    channel = make_channel()

    assert closer.schedule(channel, 10) is True
    assert closer.schedule(channel, 10) is False
    assert closer.pending_count() == 1
    assert closer.schedule(make_channel(11), 10) is True
    assert closer.pending_count() == 2

    await closer.shutdown()


@pytest.mark.asyncio
async def test_cancel_prevents_deletion():
    closer = TicketCloser()
    channel = make_channel()
    closer.schedule(channel, 0.05)

    assert closer.cancel(channel.id) is True
    await asyncio.sleep(0.1)

    channel.delete.assert_not_awaited()
    assert closer.cancel(channel.id) is False


@pytest.mark.asyncio
async def test_channel_already_gone_is_swallowed():
    response = SimpleNamespace(status=404, reason="Not Found")
    channel = make_channel(delete=AsyncMock(side_effect=discord.NotFound(response, "Unknown Channel")))
    closer = TicketCloser()

    closer.schedule(channel, 0)
    await asyncio.sleep(0.05)

    channel.delete.assert_awaited_once()
    assert closer.pending_count() == 0


@pytest.mark.asyncio
async def test_shutdown_cancels_everything():
    closer = TicketCloser()
    channels = [make_channel(i) for i in range(3)]
    for channel in channels:
        closer.schedule(channel, 10)

    await closer.shutdown()

    assert closer.pending_count() == 0
    for channel in channels:
        channel.delete.assert_not_awaited()
