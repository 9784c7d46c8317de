import datetime
from typing import Optional, Tuple

import discord

from recruitbot.configuration.form_fields import (
    MAX_FORM_FIELDS,
    MAX_LABEL_LENGTH,
    MAX_PLACEHOLDER_LENGTH,
    format_length_bounds,
    is_full,
    list_fields,
)
from recruitbot.configuration.guild_config import FieldStyle, FormField, GuildConfiguration
from recruitbot.datatypes.actions import ActionKind, ComponentAction
from recruitbot.util.discord_utils import channel_mention, parse_embed_color, role_mention, truncate

NOT_SET = "❌ Non défini"
SUMMARY_TEXT_LIMIT = 100
SELECT_TEXT_LIMIT = 100

# (button kind, label, emoji, style, row)
CONFIG_BUTTONS: Tuple[Tuple[ActionKind, str, str, discord.ButtonStyle, int], ...] = (
    (ActionKind.CONFIG_CATEGORY, "Catégorie", "📁", discord.ButtonStyle.primary, 0),
    (ActionKind.CONFIG_STAFF, "Rôle Staff", "👥", discord.ButtonStyle.primary, 0),
    (ActionKind.CONFIG_LOGS, "Logs", "📝", discord.ButtonStyle.primary, 0),
    (ActionKind.CONFIG_EMBED, "Personnaliser Embed", "🎨", discord.ButtonStyle.secondary, 1),
    (ActionKind.CONFIG_FIELDS, "Questions du formulaire", "📝", discord.ButtonStyle.secondary, 1),
    (ActionKind.CONFIG_WELCOME, "Message bienvenue", "💬", discord.ButtonStyle.secondary, 1),
)

# Modal kind -> (title, placeholder) for the single-id editors
ID_EDITORS: dict[ActionKind, Tuple[str, str]] = {
    ActionKind.EDIT_CATEGORY: ("Configurer la catégorie", "Entrez l'ID de la catégorie"),
    ActionKind.EDIT_STAFF: ("Configurer le rôle staff", "Entrez l'ID du rôle"),
    ActionKind.EDIT_LOGS: ("Configurer les logs", "Entrez l'ID du salon"),
}

FIELD_LIMIT_NOTICE = (
    "📝 **Gestion des questions du formulaire**\n\n"
    f"⚠️ Discord limite à **{MAX_FORM_FIELDS} champs maximum** par modal."
)


def style_label(style: FieldStyle) -> str:
    return "Paragraphe" if style is FieldStyle.PARAGRAPH else "Court"


def build_config_embed(config: GuildConfiguration) -> discord.Embed:
    """Create a read-only summary of the guild configuration."""
    embed = discord.Embed(
        title="⚙️ Configuration du Bot de Recrutement",
        color=parse_embed_color(config.embed_color),
        timestamp=datetime.datetime.now(datetime.timezone.utc),
    )
    embed.add_field(name="📁 Catégorie des tickets", value=channel_mention(config.ticket_category_id) or NOT_SET, inline=True)
    embed.add_field(name="👥 Rôle Staff", value=role_mention(config.staff_role_id) or NOT_SET, inline=True)
    embed.add_field(name="📝 Salon de logs", value=channel_mention(config.log_channel_id) or NOT_SET, inline=True)
    embed.add_field(name="🎨 Couleur de l'embed", value=config.embed_color or NOT_SET, inline=True)
    embed.add_field(name="📋 Titre de l'embed", value=truncate(config.embed_title, SUMMARY_TEXT_LIMIT) or NOT_SET, inline=True)
    embed.add_field(name="🏷️ Label du bouton", value=config.button_label or NOT_SET, inline=True)
    embed.add_field(
        name="💬 Message de bienvenue",
        value=truncate(config.welcome_message, SUMMARY_TEXT_LIMIT) or NOT_SET,
        inline=False,
    )
    questions = "\n".join(f"{position}. {form_field.label}" for position, form_field in list_fields(config))
    embed.add_field(name="📝 Questions du formulaire", value=questions or "Aucune", inline=False)
    return embed


def build_config_view() -> discord.ui.View:
    view = discord.ui.View(timeout=None)
    for kind, label, emoji, style, row in CONFIG_BUTTONS:
        view.add_item(
            discord.ui.Button(
                label=label,
                emoji=emoji,
                style=style,
                row=row,
                custom_id=ComponentAction(kind).custom_id,
            )
        )
    return view


def _text_input(
    custom_id: str,
    label: str,
    *,
    value: Optional[str] = None,
    placeholder: Optional[str] = None,
    paragraph: bool = False,
    required: bool = True,
    max_length: Optional[int] = None,
) -> discord.ui.InputText:
    return discord.ui.InputText(
        custom_id=custom_id,
        label=label,
        value=value or None,
        placeholder=placeholder,
        style=discord.InputTextStyle.long if paragraph else discord.InputTextStyle.short,
        required=required,
        max_length=max_length,
    )


def build_id_modal(kind: ActionKind, current: Optional[str]) -> discord.ui.Modal:
    """Modal editing one of the category / staff role / log channel ids."""
    title, placeholder = ID_EDITORS[kind]
    modal = discord.ui.Modal(title=title, custom_id=ComponentAction(kind).custom_id)
    modal.add_item(_text_input("value", "ID", value=current, placeholder=placeholder, max_length=32))
    return modal


def build_embed_modal(config: GuildConfiguration) -> discord.ui.Modal:
    modal = discord.ui.Modal(title="Personnaliser l'embed", custom_id=ComponentAction(ActionKind.EDIT_EMBED).custom_id)
    modal.add_item(_text_input("title", "Titre", value=config.embed_title, max_length=256))
    modal.add_item(_text_input("description", "Description", value=config.embed_description, paragraph=True, max_length=4000))
    modal.add_item(_text_input("color", "Couleur (hex)", value=config.embed_color, placeholder="#5865F2", max_length=7))
    modal.add_item(_text_input("button", "Label du bouton", value=config.button_label, max_length=80))
    return modal


def build_welcome_modal(config: GuildConfiguration) -> discord.ui.Modal:
    modal = discord.ui.Modal(title="Message de bienvenue", custom_id=ComponentAction(ActionKind.EDIT_WELCOME).custom_id)
    modal.add_item(_text_input("message", "Message", value=config.welcome_message, paragraph=True, max_length=4000))
    return modal


def build_field_selector(config: GuildConfiguration) -> discord.ui.View:
    """Select menu listing the questions plus an "add" (or "limit reached") entry."""
    options = [
        discord.SelectOption(
            label=truncate(f"{position}. {form_field.label}", SELECT_TEXT_LIMIT - 3),
            description=f"{style_label(form_field.style)} - {'Obligatoire' if form_field.required else 'Optionnel'}",
            value=ComponentAction.for_field(ActionKind.SHOW_FIELD, position - 1, form_field.id).custom_id,
        )
        for position, form_field in list_fields(config)
    ]
    if is_full(config):
        options.append(
            discord.SelectOption(
                label=f"❌ Limite atteinte ({MAX_FORM_FIELDS} champs max)",
                description="Supprimez un champ pour en ajouter un nouveau",
                value=ComponentAction(ActionKind.FIELD_LIMIT_REACHED).custom_id,
            )
        )
    else:
        options.append(
            discord.SelectOption(
                label="➕ Ajouter un champ",
                description="Créer une nouvelle question",
                value=ComponentAction(ActionKind.ADD_FIELD).custom_id,
            )
        )

    view = discord.ui.View(timeout=None)
    view.add_item(
        discord.ui.Select(
            custom_id=ComponentAction(ActionKind.SELECT_FIELD).custom_id,
            placeholder="Sélectionnez un champ à modifier",
            options=options,
        )
    )
    return view


def describe_field(form_field: FormField) -> str:
    lines = [
        "**Question sélectionnée:**",
        "",
        f"**Label:** {form_field.label}",
        f"**Type:** {style_label(form_field.style)}",
        f"**Obligatoire:** {'Oui' if form_field.required else 'Non'}",
    ]
    if form_field.placeholder:
        lines.append(f"**Placeholder:** {form_field.placeholder}")
    bounds = format_length_bounds(form_field)
    if bounds:
        lines.append(f"**Longueur:** {bounds}")
    return "\n".join(lines)


def build_field_detail_view(index: int, form_field: FormField) -> discord.ui.View:
    view = discord.ui.View(timeout=None)
    view.add_item(
        discord.ui.Button(
            label="Modifier",
            style=discord.ButtonStyle.primary,
            custom_id=ComponentAction.for_field(ActionKind.EDIT_FIELD, index, form_field.id).custom_id,
        )
    )
    view.add_item(
        discord.ui.Button(
            label="Supprimer",
            style=discord.ButtonStyle.danger,
            custom_id=ComponentAction.for_field(ActionKind.DELETE_FIELD, index, form_field.id).custom_id,
        )
    )
    return view


def build_field_modal(form_field: Optional[FormField] = None, index: Optional[int] = None) -> discord.ui.Modal:
    """Add-question modal, or the edit modal pre-filled from ``form_field``."""
    if form_field is None or index is None:
        modal = discord.ui.Modal(title="Ajouter une question", custom_id=ComponentAction(ActionKind.SUBMIT_NEW_FIELD).custom_id)
        form_field = FormField(id="", label="", required=True, style=FieldStyle.SHORT)
    else:
        modal = discord.ui.Modal(
            title="Modifier la question",
            custom_id=ComponentAction.for_field(ActionKind.SUBMIT_FIELD_EDIT, index, form_field.id).custom_id,
        )

    modal.add_item(
        _text_input("label", "Question", value=form_field.label, placeholder="Ex: Quel est votre âge ?", max_length=MAX_LABEL_LENGTH)
    )
    modal.add_item(
        _text_input(
            "placeholder",
            "Placeholder",
            value=form_field.placeholder,
            placeholder="Ex: 18",
            required=False,
            max_length=MAX_PLACEHOLDER_LENGTH,
        )
    )
    modal.add_item(_text_input("style", "Type (short ou paragraph)", value=form_field.style.value, placeholder="short"))
    modal.add_item(
        _text_input("required", "Obligatoire ? (oui ou non)", value="oui" if form_field.required else "non", placeholder="oui")
    )
    modal.add_item(
        _text_input(
            "length",
            "Longueur min-max (optionnel)",
            value=format_length_bounds(form_field),
            placeholder="Ex: 20-1000",
            required=False,
            max_length=9,
        )
    )
    return modal
