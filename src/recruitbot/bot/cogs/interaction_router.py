"""Interaction router Cog for RecruitBot.

Every button, select menu and modal the bot emits is answered here: the raw
interaction is decoded once into a typed event, the guild configuration is
ensured, and the event is handed to the handler registered for its action.
Unhandled exceptions stop at this layer: they are logged and the user gets a
generic failure notice if nothing was sent yet.
"""

from typing import Awaitable, Callable, Dict

import discord
from discord.ext import commands

from recruitbot.bot import config_handlers, ticket_handlers
from recruitbot.configuration import guild_config
from recruitbot.datatypes.actions import ActionKind
from recruitbot.datatypes.events import InteractionEvent, decode_interaction
from recruitbot.util.discord_utils import report_failure
from recruitbot.util.logger import get_logger

logger = get_logger("interaction_router")

Handler = Callable[[InteractionEvent], Awaitable[None]]

ROUTES: Dict[ActionKind, Handler] = {
    ActionKind.OPEN_APPLICATION: ticket_handlers.open_application,
    ActionKind.SUBMIT_APPLICATION: ticket_handlers.submit_application,
    ActionKind.CLOSE_TICKET: ticket_handlers.close_button,
    ActionKind.CONFIG_CATEGORY: config_handlers.open_id_editor,
    ActionKind.CONFIG_STAFF: config_handlers.open_id_editor,
    ActionKind.CONFIG_LOGS: config_handlers.open_id_editor,
    ActionKind.CONFIG_EMBED: config_handlers.open_embed_editor,
    ActionKind.CONFIG_FIELDS: config_handlers.open_field_selector,
    ActionKind.CONFIG_WELCOME: config_handlers.open_welcome_editor,
    ActionKind.EDIT_CATEGORY: config_handlers.apply_id_edit,
    ActionKind.EDIT_STAFF: config_handlers.apply_id_edit,
    ActionKind.EDIT_LOGS: config_handlers.apply_id_edit,
    ActionKind.EDIT_EMBED: config_handlers.apply_embed_edit,
    ActionKind.EDIT_WELCOME: config_handlers.apply_welcome_edit,
    ActionKind.SELECT_FIELD: config_handlers.on_field_selected,
    ActionKind.SUBMIT_NEW_FIELD: config_handlers.add_field_submitted,
    ActionKind.EDIT_FIELD: config_handlers.open_field_edit,
    ActionKind.DELETE_FIELD: config_handlers.delete_field,
    ActionKind.SUBMIT_FIELD_EDIT: config_handlers.field_edit_submitted,
}


class InteractionRouterCog(commands.Cog):
    """Cog dispatching component and modal interactions to their handlers."""

    def __init__(self, discord_bot_instance, routes: Dict[ActionKind, Handler] | None = None):
        self.discord_bot_instance = discord_bot_instance
        self.routes = ROUTES if routes is None else routes
        logger.info("Interaction router cog loaded")

    @commands.Cog.listener(name="on_interaction")
    async def on_interaction(self, interaction: discord.Interaction):
        if interaction.type not in (discord.InteractionType.component, discord.InteractionType.modal_submit):
            return
        await self.dispatch(interaction)

    async def dispatch(self, interaction: discord.Interaction) -> bool:
        """Route one interaction; returns whether a handler ran to completion."""
        try:
            event = decode_interaction(interaction)
            if event is None:
                logger.debug("Ignoring interaction %s with custom id %r", interaction.id, (interaction.data or {}).get("custom_id"))
                return False

            handler = self.routes.get(event.action.kind)
            if handler is None:
                logger.warning("No handler registered for %s", event.action.kind)
                return False

            guild_config.guild_config_store.get_or_create(event.guild_id)
            await handler(event)
            return True
        except Exception:
            logger.exception("Unhandled error while processing interaction %s", interaction.id)
            await report_failure(interaction)
            return False


def setup(discord_bot_instance):
    """Register the InteractionRouterCog with the bot."""
    discord_bot_instance.add_cog(InteractionRouterCog(discord_bot_instance))
