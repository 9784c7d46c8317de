"""
Recruitment cog: panel publication and ticket closing.

Slash commands:
- /setup channel:<channel>: post the application panel (administrators)
- /close: close the current ticket channel (Manage Channels)

Buttons and modals of the workflow are answered by the interaction router.
"""

import discord
from discord.ext import commands

from recruitbot.bot import ticket_handlers
from recruitbot.configuration import guild_config
from recruitbot.services import ticket_service
from recruitbot.ui import panel_ui
from recruitbot.util.logger import get_logger

logger = get_logger("recruitment_cog")


class RecruitmentCog(commands.Cog):
    """Slash commands of the recruitment workflow."""

    def __init__(self, discord_bot_instance):
        self.discord_bot_instance = discord_bot_instance
        logger.info("Recruitment cog loaded")

    async def _ensure_guild_context(self, ctx: discord.ApplicationContext) -> bool:
        if not ctx.guild_id:
            await ctx.respond("Cette commande ne peut être utilisée que sur un serveur.", ephemeral=True)
            return False
        return True

    @commands.slash_command(name="setup", description="Configure le panneau de recrutement")
    @discord.default_permissions(administrator=True)
    async def setup_panel(
        self,
        ctx: discord.ApplicationContext,
        channel: discord.Option(discord.TextChannel, "Salon où envoyer le panneau", required=True),
    ):
        """Post the application panel in ``channel``."""
        if not await self._ensure_guild_context(ctx):
            return

        config = guild_config.guild_config_store.get_or_create(ctx.guild_id)
        panel_view = panel_ui.build_panel_view(config)
        try:
            await channel.send(embed=panel_ui.build_panel_embed(config), view=panel_view)
        except discord.HTTPException as exc:
            logger.error("[RECRUITMENT] Failed to post the panel in #%s of guild %s: %s", channel.id, ctx.guild_id, exc)
            await ctx.respond(f"❌ Impossible d'envoyer le panneau dans {channel.mention}.", ephemeral=True)
            return
        # The apply button is answered by the interaction router; drop the stored view
        panel_view.stop()

        logger.info("[RECRUITMENT] Panel posted in #%s of guild %s", channel.id, ctx.guild_id)
        await ctx.respond(f"✅ Panneau envoyé dans {channel.mention}", ephemeral=True)

    @commands.slash_command(name="close", description="Ferme le ticket de recrutement")
    @discord.default_permissions(manage_channels=True)
    async def close(self, ctx: discord.ApplicationContext):
        """Close the ticket this command is used in."""
        if not await self._ensure_guild_context(ctx):
            return

        config = guild_config.guild_config_store.get_or_create(ctx.guild_id)
        channel = ctx.channel
        if channel is None or not ticket_service.is_ticket_channel(getattr(channel, "name", None), config.ticket_name_format):
            await ctx.respond(ticket_handlers.WRONG_CONTEXT_MESSAGE, ephemeral=True)
            return

        await ticket_handlers.close_ticket(ctx.interaction, channel)


def setup(discord_bot_instance):
    """Add the recruitment cog to the supplied Discord bot instance."""
    discord_bot_instance.add_cog(RecruitmentCog(discord_bot_instance))
