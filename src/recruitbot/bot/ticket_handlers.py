"""
Handlers of the recruitment workflow.

- open_application: "apply" button -> application modal
- submit_application: modal -> private ticket channel with the answers
- close_ticket: close button (and /close) -> acknowledgment + delayed deletion
"""

from __future__ import annotations

import discord

from recruitbot.configuration.app_configuration import app_config
from recruitbot.configuration import guild_config
from recruitbot.datatypes.events import ButtonPressed, ModalSubmitted
from recruitbot.services import ticket_service
from recruitbot.services.ticket_closer import ticket_closer
from recruitbot.ui import panel_ui
from recruitbot.util.logger import get_logger

logger = get_logger("ticket_handlers")

ALREADY_CLOSING_MESSAGE = "⏳ Ce ticket est déjà en cours de fermeture."
WRONG_CONTEXT_MESSAGE = "❌ Cette commande ne peut être utilisée que dans un ticket !"


async def open_application(event: ButtonPressed) -> None:
    config = guild_config.guild_config_store.get_or_create(event.guild_id)
    if not config.modal_fields:
        await event.interaction.response.send_message(
            "❌ Aucune question n'est configurée pour le moment.",
            ephemeral=True,
        )
        return
    await event.interaction.response.send_modal(panel_ui.build_application_modal(config))


async def submit_application(event: ModalSubmitted) -> None:
    """Create the applicant's ticket channel and post the collected answers."""
    interaction = event.interaction
    config = guild_config.guild_config_store.get_or_create(event.guild_id)
    guild = event.guild

    if guild is None:
        await interaction.response.send_message("❌ Serveur introuvable.", ephemeral=True)
        return

    try:
        category = ticket_service.resolve_ticket_category(guild, config)
    except ticket_service.TicketSetupError as exc:
        logger.info("[TICKETS] Submission refused in guild %s: %s", event.guild_id, type(exc).__name__)
        await interaction.response.send_message(exc.user_message, ephemeral=True)
        return

    await interaction.response.defer(ephemeral=True)

    staff_role = ticket_service.resolve_staff_role(guild, config)
    try:
        channel = await ticket_service.create_ticket_channel(guild, event.user, config, category, staff_role)
    except discord.HTTPException as exc:
        logger.error("[TICKETS] Failed to create ticket channel in guild %s: %s", event.guild_id, exc)
        await interaction.edit_original_response(content="❌ Impossible de créer le salon du ticket.")
        return

    answers = ticket_service.collect_answers(config.modal_fields, event.values)
    embed = panel_ui.build_ticket_embed(config, event.user, answers)
    close_view = panel_ui.build_close_view()
    try:
        await channel.send(
            content=staff_role.mention if staff_role is not None else None,
            embed=embed,
            view=close_view,
        )
    except discord.HTTPException as exc:
        logger.error("[TICKETS] Failed to post the application in #%s: %s", channel.id, exc)
        await interaction.edit_original_response(
            content=f"⚠️ Votre ticket {channel.mention} a été créé mais la candidature n'a pas pu y être publiée."
        )
        return
    # The close button is answered by the interaction router; drop the stored view
    close_view.stop()

    await ticket_service.log_sink.record(event.guild_id, config, f"Ticket {channel.name} ouvert par {event.user.id}")
    await interaction.edit_original_response(content=f"✅ Votre candidature a été créée : {channel.mention}")


async def close_ticket(interaction: discord.Interaction, channel) -> None:
    """Acknowledge the close request and schedule the channel deletion.

    Shared by the close button and the /close command.
    """
    if channel is None:
        await interaction.response.send_message(WRONG_CONTEXT_MESSAGE, ephemeral=True)
        return

    if ticket_closer.is_closing(channel.id):
        await interaction.response.send_message(ALREADY_CLOSING_MESSAGE, ephemeral=True)
        return

    delay = app_config.close_delay_seconds
    await interaction.response.send_message(f"🔒 Fermeture du ticket dans {delay:g} secondes...")
    ticket_closer.schedule(channel, delay)

    if interaction.guild_id is not None:
        config = guild_config.guild_config_store.get_or_create(interaction.guild_id)
        await ticket_service.log_sink.record(interaction.guild_id, config, f"Ticket {channel.name} fermé par {interaction.user.id}")


async def close_button(event: ButtonPressed) -> None:
    await close_ticket(event.interaction, event.channel)
