"""Embeds, views and modals of the applicant-facing recruitment workflow."""

import datetime
from typing import Iterable, Optional, Tuple, Union

import discord

from recruitbot.configuration.form_fields import MAX_FORM_FIELDS
from recruitbot.configuration.guild_config import FieldStyle, FormField, GuildConfiguration
from recruitbot.datatypes.actions import ActionKind, ComponentAction
from recruitbot.services.ticket_service import fit_answers
from recruitbot.util.discord_utils import parse_embed_color, truncate

APPLICATION_MODAL_TITLE = "Formulaire de recrutement"
TICKET_EMBED_TITLE = "📋 Nouvelle candidature"

# Discord limits on button labels, embed descriptions and whole embeds
BUTTON_LABEL_LIMIT = 80
EMBED_DESCRIPTION_LIMIT = 4096
EMBED_TOTAL_LIMIT = 6000


def build_panel_embed(config: GuildConfiguration) -> discord.Embed:
    """Create the public embed inviting members to apply."""
    return discord.Embed(
        title=config.embed_title,
        description=config.embed_description,
        color=parse_embed_color(config.embed_color),
        timestamp=datetime.datetime.now(datetime.timezone.utc),
    )


def build_panel_view(config: GuildConfiguration) -> discord.ui.View:
    """Single "apply" button; routed by custom id so it survives restarts."""
    view = discord.ui.View(timeout=None)
    view.add_item(
        discord.ui.Button(
            label=truncate(config.button_label, BUTTON_LABEL_LIMIT - 3),
            style=discord.ButtonStyle.primary,
            custom_id=ComponentAction(ActionKind.OPEN_APPLICATION).custom_id,
        )
    )
    return view


def build_input(form_field: FormField, *, value: Optional[str] = None) -> discord.ui.InputText:
    """Translate a form field into a modal text input."""
    return discord.ui.InputText(
        label=form_field.label,
        custom_id=form_field.id,
        placeholder=form_field.placeholder or None,
        style=discord.InputTextStyle.long if form_field.style is FieldStyle.PARAGRAPH else discord.InputTextStyle.short,
        required=form_field.required,
        min_length=form_field.min_length,
        max_length=form_field.max_length,
        value=value,
    )


def build_application_modal(config: GuildConfiguration) -> discord.ui.Modal:
    """One input per configured question, in order, never more than Discord allows."""
    modal = discord.ui.Modal(
        title=APPLICATION_MODAL_TITLE,
        custom_id=ComponentAction(ActionKind.SUBMIT_APPLICATION).custom_id,
    )
    for form_field in config.modal_fields[:MAX_FORM_FIELDS]:
        modal.add_item(build_input(form_field))
    return modal


def build_ticket_embed(
    config: GuildConfiguration,
    applicant: Union[discord.Member, discord.User],
    answers: Iterable[Tuple[str, str]],
) -> discord.Embed:
    """Summarise an application inside the new ticket channel."""
    embed = discord.Embed(
        title=TICKET_EMBED_TITLE,
        description=truncate(config.welcome_message, EMBED_DESCRIPTION_LIMIT - 3),
        color=parse_embed_color(config.embed_color),
        timestamp=datetime.datetime.now(datetime.timezone.utc),
    )
    embed.set_thumbnail(url=applicant.display_avatar.url)
    embed.add_field(name="👤 Candidat", value=applicant.mention, inline=True)
    embed.add_field(name="🆔 ID", value=str(applicant.id), inline=True)
    for label, answer in fit_answers(list(answers), EMBED_TOTAL_LIMIT - len(embed)):
        embed.add_field(name=label, value=answer, inline=False)
    return embed


def build_close_view() -> discord.ui.View:
    view = discord.ui.View(timeout=None)
    view.add_item(
        discord.ui.Button(
            label="Fermer le ticket",
            emoji="🔒",
            style=discord.ButtonStyle.danger,
            custom_id=ComponentAction(ActionKind.CLOSE_TICKET).custom_id,
        )
    )
    return view
