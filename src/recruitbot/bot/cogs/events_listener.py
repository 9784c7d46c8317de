"""Event listener Cog for RecruitBot.

This cog handles bot lifecycle events (on_ready), slash command errors and
the cleanup of pending ticket deletions when a channel disappears.
"""

import discord
from discord.ext import commands

from recruitbot.configuration.app_configuration import app_config
from recruitbot.services.ticket_closer import ticket_closer
from recruitbot.util.discord_utils import GENERIC_FAILURE_MESSAGE
from recruitbot.util.logger import get_logger

logger = get_logger("events_listener_cog")


class EventsListenerCog(commands.Cog):
    """Cog containing bot lifecycle and command error handlers."""

    def __init__(self, discord_bot_instance):
        self.bot = discord_bot_instance
        logger.info("Events listener cog loaded")

    @commands.Cog.listener(name='on_ready')
    async def on_ready(self):
        """Set the presence and log the connected identity."""
        if self.bot.user:
            await self.bot.change_presence(
                status=discord.Status.online,
                activity=discord.Activity(type=discord.ActivityType.watching, name=app_config.presence_text),
            )
            logger.info("Bot connected as %s (ID: %s)", self.bot.user, self.bot.user.id)
        else:
            logger.warning("Bot partially connected, but user information not yet available.")

    @commands.Cog.listener(name='on_guild_channel_delete')
    async def on_guild_channel_delete(self, channel: discord.abc.GuildChannel):
        """Drop the pending deletion of a ticket removed by someone else."""
        ticket_closer.cancel(channel.id)

    @commands.Cog.listener(name='on_application_command_error')
    async def on_application_command_error(self, application_context: discord.ApplicationContext, error: Exception):
        """Log slash command failures and tell the user, if they got no answer yet."""
        if isinstance(error, commands.CommandNotFound):
            return

        command_name = getattr(application_context.command, 'name', '<unknown>')
        logger.error("Error in command '%s': %s", command_name, error, exc_info=error)

        if application_context.interaction.response.is_done():
            return
        try:
            await application_context.respond(GENERIC_FAILURE_MESSAGE, ephemeral=True)
        except discord.HTTPException:
            logger.exception("Failed to report the error of command '%s'", command_name)


def setup(discord_bot_instance):
    """Register the EventsListenerCog with the bot."""
    discord_bot_instance.add_cog(EventsListenerCog(discord_bot_instance))
