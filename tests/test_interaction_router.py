from types import SimpleNamespace
from unittest.mock import AsyncMock

import discord
import pytest

from recruitbot.bot.cogs import interaction_router
from recruitbot.datatypes.actions import ActionKind
from recruitbot.datatypes.events import ButtonPressed, ModalSubmitted
from recruitbot.util.discord_utils import GENERIC_FAILURE_MESSAGE

from conftest import make_interaction


def button_interaction(custom_id, *, done=False, guild_id=1):
    interaction = make_interaction(done=done, guild_id=guild_id)
    interaction.type = discord.InteractionType.component
    interaction.data = {"custom_id": custom_id, "component_type": discord.ComponentType.button.value}
    return interaction


def test_setup_adds_cog():
    captured = {}
    fake_bot = SimpleNamespace(add_cog=lambda cog: captured.setdefault("cog", cog))

    interaction_router.setup(fake_bot)

    assert isinstance(captured["cog"], interaction_router.InteractionRouterCog)


def test_every_action_with_a_handler_is_routed():
    unrouted = {kind for kind in ActionKind if kind not in interaction_router.ROUTES}

    # Select options are answered by the select handler, never dispatched on their own
    assert unrouted == {ActionKind.ADD_FIELD, ActionKind.FIELD_LIMIT_REACHED, ActionKind.SHOW_FIELD}


@pytest.mark.asyncio
async def test_dispatch_routes_to_handler_and_ensures_config(store):
    handler = AsyncMock()
    cog = interaction_router.InteractionRouterCog(SimpleNamespace(), routes={ActionKind.CLOSE_TICKET: handler})
    interaction = button_interaction("close_ticket", guild_id=7)

    assert await cog.dispatch(interaction) is True

    [event] = handler.await_args.args
    assert isinstance(event, ButtonPressed)
    assert event.guild_id == 7
    assert 7 in store.guilds


@pytest.mark.asyncio
async def test_dispatch_decodes_modal_values(store):
    handler = AsyncMock()
    cog = interaction_router.InteractionRouterCog(SimpleNamespace(), routes={ActionKind.EDIT_WELCOME: handler})
    interaction = make_interaction()
    interaction.type = discord.InteractionType.modal_submit
    interaction.data = {
        "custom_id": "edit_welcome",
        "components": [{"type": 1, "components": [{"type": 4, "custom_id": "message", "value": "Salut"}]}],
    }

    await cog.dispatch(interaction)

    [event] = handler.await_args.args
    assert isinstance(event, ModalSubmitted)
    assert event.value("message") == "Salut"


@pytest.mark.asyncio
async def test_foreign_interactions_are_ignored(store):
    handler = AsyncMock()
    cog = interaction_router.InteractionRouterCog(SimpleNamespace(), routes={ActionKind.CLOSE_TICKET: handler})
    interaction = button_interaction("another_bot_button")

    assert await cog.dispatch(interaction) is False

    handler.assert_not_awaited()
    interaction.response.send_message.assert_not_awaited()
    assert store.guilds == {}


@pytest.mark.asyncio
async def test_handler_failure_reports_generic_error(store):
    handler = AsyncMock(side_effect=RuntimeError("boom"))
    cog = interaction_router.InteractionRouterCog(SimpleNamespace(), routes={ActionKind.CLOSE_TICKET: handler})
    interaction = button_interaction("close_ticket")

    assert await cog.dispatch(interaction) is False

    interaction.response.send_message.assert_awaited_once_with(GENERIC_FAILURE_MESSAGE, ephemeral=True)


@pytest.mark.asyncio
async def test_handler_failure_after_answer_stays_silent(store):
    handler = AsyncMock(side_effect=RuntimeError("boom"))
    cog = interaction_router.InteractionRouterCog(SimpleNamespace(), routes={ActionKind.CLOSE_TICKET: handler})
    interaction = button_interaction("close_ticket", done=True)

    await cog.dispatch(interaction)

    interaction.response.send_message.assert_not_awaited()


@pytest.mark.asyncio
async def test_listener_skips_application_commands(monkeypatch):
    cog = interaction_router.InteractionRouterCog(SimpleNamespace(), routes={})
    dispatch = AsyncMock()
    monkeypatch.setattr(cog, "dispatch", dispatch)
    interaction = make_interaction()
    interaction.type = discord.InteractionType.application_command

    await cog.on_interaction(interaction)

    dispatch.assert_not_awaited()


@pytest.mark.asyncio
async def test_end_to_end_embed_edit(store):
    cog = interaction_router.InteractionRouterCog(SimpleNamespace())
    interaction = make_interaction(guild_id=3)
    interaction.type = discord.InteractionType.modal_submit
    interaction.data = {
        "custom_id": "edit_embed",
        "components": [
            {"type": 1, "components": [{"type": 4, "custom_id": "title", "value": "T"}]},
            {"type": 1, "components": [{"type": 4, "custom_id": "description", "value": "D"}]},
            {"type": 1, "components": [{"type": 4, "custom_id": "color", "value": "#112233"}]},
            {"type": 1, "components": [{"type": 4, "custom_id": "button", "value": "B"}]},
        ],
    }

    assert await cog.dispatch(interaction) is True

    config = store.get_or_create(3)
    assert (config.embed_title, config.embed_description, config.embed_color, config.button_label) == (
        "T", "D", "#112233", "B",
    )
