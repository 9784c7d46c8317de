"""
Configuration cog: the /config panel.

/config answers with an ephemeral summary of the guild configuration and the
buttons opening each editor. Only administrators see the command; the
buttons and modals it spawns are answered by the interaction router.
"""

import discord
from discord.ext import commands

from recruitbot.configuration import guild_config
from recruitbot.ui.config_ui import build_config_embed, build_config_view
from recruitbot.util.logger import get_logger

logger = get_logger("guild_config_cog")


class GuildConfigCog(commands.Cog):
    """Interactive configuration panel for the recruitment bot."""

    def __init__(self, discord_bot_instance):
        self.discord_bot_instance = discord_bot_instance
        logger.info("Guild config cog loaded")

    @commands.slash_command(name="config", description="Affiche et modifie la configuration du bot")
    @discord.default_permissions(administrator=True)
    async def config_panel(self, ctx: discord.ApplicationContext):
        """Present the configuration summary with its edit buttons."""
        if not ctx.guild_id:
            await ctx.respond("Cette commande ne peut être utilisée que sur un serveur.", ephemeral=True)
            return

        config = guild_config.guild_config_store.get_or_create(ctx.guild_id)
        await ctx.respond(embed=build_config_embed(config), view=build_config_view(), ephemeral=True)


def setup(discord_bot_instance):
    """Add the configuration cog to the supplied Discord bot instance."""
    discord_bot_instance.add_cog(GuildConfigCog(discord_bot_instance))
