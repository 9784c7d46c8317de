"""
Handlers behind the /config panel.

Entry buttons open pre-filled modals; modal submissions replace the edited
attributes in one ``dataclasses.replace`` and write the new record back
through the configuration store. The question editor mutates the field list
through :mod:`recruitbot.configuration.form_fields`.
"""

from __future__ import annotations

from dataclasses import replace

from recruitbot.configuration import form_fields, guild_config
from recruitbot.datatypes.actions import ActionKind, parse_custom_id
from recruitbot.datatypes.events import ButtonPressed, ModalSubmitted, SelectChosen
from recruitbot.ui import config_ui
from recruitbot.util.logger import get_logger

logger = get_logger("config_handlers")

FIELD_NOT_FOUND_MESSAGE = "❌ Champ introuvable !"
FIELD_LIMIT_MESSAGE = f"❌ Limite de {form_fields.MAX_FORM_FIELDS} champs atteinte !"

# Entry button -> modal kind, for the three id editors
ID_BUTTONS = {
    ActionKind.CONFIG_CATEGORY: ActionKind.EDIT_CATEGORY,
    ActionKind.CONFIG_STAFF: ActionKind.EDIT_STAFF,
    ActionKind.CONFIG_LOGS: ActionKind.EDIT_LOGS,
}

# Modal kind -> (configuration attribute, confirmation)
ID_ATTRIBUTES = {
    ActionKind.EDIT_CATEGORY: ("ticket_category_id", "✅ Catégorie mise à jour !"),
    ActionKind.EDIT_STAFF: ("staff_role_id", "✅ Rôle staff mis à jour !"),
    ActionKind.EDIT_LOGS: ("log_channel_id", "✅ Salon de logs mis à jour !"),
}


def _store():
    return guild_config.guild_config_store


# -------- Entry buttons --------

async def open_id_editor(event: ButtonPressed) -> None:
    modal_kind = ID_BUTTONS[event.action.kind]
    attribute, _ = ID_ATTRIBUTES[modal_kind]
    config = _store().get_or_create(event.guild_id)
    await event.interaction.response.send_modal(config_ui.build_id_modal(modal_kind, getattr(config, attribute)))


async def open_embed_editor(event: ButtonPressed) -> None:
    config = _store().get_or_create(event.guild_id)
    await event.interaction.response.send_modal(config_ui.build_embed_modal(config))


async def open_welcome_editor(event: ButtonPressed) -> None:
    config = _store().get_or_create(event.guild_id)
    await event.interaction.response.send_modal(config_ui.build_welcome_modal(config))


async def open_field_selector(event: ButtonPressed) -> None:
    config = _store().get_or_create(event.guild_id)
    await event.interaction.response.send_message(
        config_ui.FIELD_LIMIT_NOTICE,
        view=config_ui.build_field_selector(config),
        ephemeral=True,
    )


# -------- Modal submissions --------

async def apply_id_edit(event: ModalSubmitted) -> None:
    attribute, confirmation = ID_ATTRIBUTES[event.action.kind]
    store = _store()
    config = store.get_or_create(event.guild_id)
    store.set(event.guild_id, replace(config, **{attribute: event.value("value").strip() or None}))
    logger.info("[CONFIG] Guild %s updated %s", event.guild_id, attribute)
    await event.interaction.response.send_message(confirmation, ephemeral=True)


async def apply_embed_edit(event: ModalSubmitted) -> None:
    store = _store()
    config = store.get_or_create(event.guild_id)
    store.set(
        event.guild_id,
        replace(
            config,
            embed_title=event.value("title"),
            embed_description=event.value("description"),
            embed_color=event.value("color"),
            button_label=event.value("button"),
        ),
    )
    logger.info("[CONFIG] Guild %s updated the panel embed", event.guild_id)
    await event.interaction.response.send_message("✅ Embed personnalisé !", ephemeral=True)


async def apply_welcome_edit(event: ModalSubmitted) -> None:
    store = _store()
    config = store.get_or_create(event.guild_id)
    store.set(event.guild_id, replace(config, welcome_message=event.value("message")))
    logger.info("[CONFIG] Guild %s updated the welcome message", event.guild_id)
    await event.interaction.response.send_message("✅ Message de bienvenue mis à jour !", ephemeral=True)


# -------- Question editor --------

async def on_field_selected(event: SelectChosen) -> None:
    """Second step of the question editor: add a question or show one."""
    interaction = event.interaction
    choice = parse_custom_id(event.values[0]) if event.values else None
    config = _store().get_or_create(event.guild_id)

    if choice is None:
        await interaction.response.send_message(FIELD_NOT_FOUND_MESSAGE, ephemeral=True)
        return

    if choice.kind is ActionKind.FIELD_LIMIT_REACHED:
        await interaction.response.send_message(FIELD_LIMIT_MESSAGE, ephemeral=True)
        return

    if choice.kind is ActionKind.ADD_FIELD:
        if form_fields.is_full(config):
            await interaction.response.send_message(
                f"❌ Vous avez déjà {form_fields.MAX_FORM_FIELDS} champs (limite Discord)",
                ephemeral=True,
            )
            return
        await interaction.response.send_modal(config_ui.build_field_modal())
        return

    if choice.kind is ActionKind.SHOW_FIELD:
        form_field = form_fields.get_field_at(config, choice.index, choice.field_id)
        if form_field is None:
            await interaction.response.send_message(FIELD_NOT_FOUND_MESSAGE, ephemeral=True)
            return
        await interaction.response.send_message(
            config_ui.describe_field(form_field),
            view=config_ui.build_field_detail_view(choice.index, form_field),
            ephemeral=True,
        )
        return

    logger.warning("[CONFIG] Unexpected option %s in the question selector", choice.kind)
    await interaction.response.send_message(FIELD_NOT_FOUND_MESSAGE, ephemeral=True)


async def open_field_edit(event: ButtonPressed) -> None:
    action = event.action
    config = _store().get_or_create(event.guild_id)
    form_field = form_fields.get_field_at(config, action.index, action.field_id)
    if form_field is None:
        await event.interaction.response.send_message(FIELD_NOT_FOUND_MESSAGE, ephemeral=True)
        return
    await event.interaction.response.send_modal(config_ui.build_field_modal(form_field, action.index))


async def delete_field(event: ButtonPressed) -> None:
    action = event.action
    store = _store()
    config = store.get_or_create(event.guild_id)
    removed = form_fields.remove_field_at(config, action.index, action.field_id)
    if removed is None:
        await event.interaction.response.send_message(FIELD_NOT_FOUND_MESSAGE, ephemeral=True)
        return
    store.set(event.guild_id, config)
    logger.info("[CONFIG] Guild %s removed question %s", event.guild_id, removed.id)
    await event.interaction.response.edit_message(content="✅ Champ supprimé !", view=None)


def _field_from_submission(event: ModalSubmitted, config, field_id=None):
    return form_fields.build_field(
        config,
        label=event.value("label"),
        placeholder=event.value("placeholder"),
        style=event.value("style"),
        required=event.value("required"),
        length=event.value("length"),
        field_id=field_id,
    )


async def add_field_submitted(event: ModalSubmitted) -> None:
    interaction = event.interaction
    if not event.value("label").strip():
        await interaction.response.send_message("❌ La question ne peut pas être vide.", ephemeral=True)
        return

    store = _store()
    config = store.get_or_create(event.guild_id)
    new_field = _field_from_submission(event, config)
    if not form_fields.add_field(config, new_field):
        await interaction.response.send_message(FIELD_LIMIT_MESSAGE, ephemeral=True)
        return
    store.set(event.guild_id, config)
    logger.info("[CONFIG] Guild %s added question %s", event.guild_id, new_field.id)
    await interaction.response.send_message("✅ Question ajoutée avec succès !", ephemeral=True)


async def field_edit_submitted(event: ModalSubmitted) -> None:
    interaction = event.interaction
    action = event.action
    if not event.value("label").strip():
        await interaction.response.send_message("❌ La question ne peut pas être vide.", ephemeral=True)
        return

    store = _store()
    config = store.get_or_create(event.guild_id)
    updated = _field_from_submission(event, config, field_id=action.field_id)
    if not form_fields.replace_field_at(config, action.index, updated, action.field_id):
        await interaction.response.send_message(FIELD_NOT_FOUND_MESSAGE, ephemeral=True)
        return
    store.set(event.guild_id, config)
    logger.info("[CONFIG] Guild %s edited question %s", event.guild_id, updated.id)
    await interaction.response.send_message("✅ Question modifiée !", ephemeral=True)
