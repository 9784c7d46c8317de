import discord
import pytest

from recruitbot.configuration.guild_config import FieldStyle, FormField, GuildConfiguration, build_default_configuration
from recruitbot.ui import panel_ui


def test_panel_embed_uses_configured_texts():
    config = build_default_configuration()
    config.embed_color = "#112233"

    embed = panel_ui.build_panel_embed(config)

    assert embed.title == "📋 Recrutement"
    assert embed.description == "Cliquez sur le bouton ci-dessous pour postuler !"
    assert embed.color == discord.Color(0x112233)


def test_panel_embed_with_invalid_colour_uses_blurple():
    config = build_default_configuration()
    config.embed_color = "rouge"

    assert panel_ui.build_panel_embed(config).color == discord.Color.blurple()


@pytest.mark.asyncio
async def test_panel_view_button():
    view = panel_ui.build_panel_view(build_default_configuration())

    [button] = view.children
    assert button.custom_id == "open_recruitment"
    assert button.label == "✉️ Postuler"
    assert view.timeout is None


@pytest.mark.asyncio
async def test_application_modal_never_exceeds_five_inputs():
    config = GuildConfiguration(modal_fields=[FormField(id=f"q{i}", label=f"Q{i}") for i in range(7)])

    modal = panel_ui.build_application_modal(config)

    assert modal.title == "Formulaire de recrutement"
    assert [child.custom_id for child in modal.children] == ["q0", "q1", "q2", "q3", "q4"]


@pytest.mark.asyncio
async def test_input_mirrors_field():
    form_field = FormField(
        id="experience",
        label="Expérience ?",
        placeholder="",
        required=False,
        style=FieldStyle.PARAGRAPH,
        min_length=20,
        max_length=1000,
    )

    text_input = panel_ui.build_input(form_field)

    assert text_input.custom_id == "experience"
    assert text_input.style is discord.InputTextStyle.long
    assert text_input.required is False
    assert text_input.placeholder is None
    assert (text_input.min_length, text_input.max_length) == (20, 1000)


def test_ticket_embed(member):
    config = build_default_configuration()

    embed = panel_ui.build_ticket_embed(config, member, [("Quel est votre âge ?", "21")])

    assert embed.title == "📋 Nouvelle candidature"
    assert embed.description == config.welcome_message
    assert embed.thumbnail.url == "https://cdn.example.com/avatar.png"
    assert [(f.name, f.value) for f in embed.fields] == [
        ("👤 Candidat", "<@42>"),
        ("🆔 ID", "42"),
        ("Quel est votre âge ?", "21"),
    ]
    assert embed.fields[2].inline is False


@pytest.mark.asyncio
async def test_close_view():
    [button] = panel_ui.build_close_view().children

    assert button.custom_id == "close_ticket"
    assert button.style is discord.ButtonStyle.danger


def test_ticket_embed_stays_within_discord_total(member):
    config = build_default_configuration()
    config.welcome_message = "b" * 4000
    answers = [(f"Question {i} ?", "a" * 1024) for i in range(5)]

    embed = panel_ui.build_ticket_embed(config, member, answers)

    assert len(embed) <= panel_ui.EMBED_TOTAL_LIMIT
    assert len(embed.fields) == 7
    assert all(f.value for f in embed.fields)
