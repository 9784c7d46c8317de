import os
import sys
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from recruitbot import main


@pytest.fixture(autouse=True)
def _restore_env(monkeypatch):
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


def test_resolve_base_dir_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("RECRUITBOT_HOME", str(tmp_path))

    assert main.resolve_base_dir() == tmp_path.resolve()


def test_resolve_base_dir_compiled(tmp_path, monkeypatch):
    monkeypatch.delenv("RECRUITBOT_HOME", raising=False)
    monkeypatch.setattr(sys, "frozen", True, raising=False)
    monkeypatch.setattr(sys, "argv", [str(tmp_path / "recruitbot.exe")])

    assert main.resolve_base_dir() == tmp_path.resolve()


def test_resolve_base_dir_source(monkeypatch):
    monkeypatch.delenv("RECRUITBOT_HOME", raising=False)
    monkeypatch.setattr(sys, "frozen", False, raising=False)
    monkeypatch.setattr(sys, "compiled", False, raising=False)

    assert main.resolve_base_dir() == main.Path(main.__file__).resolve().parents[2]


def test_missing_token_exits(monkeypatch):
    monkeypatch.setattr(main, "load_dotenv", lambda **kwargs: False)
    monkeypatch.delenv("DISCORD_TOKEN", raising=False)

    with pytest.raises(SystemExit) as excinfo:
        main.load_environment()

    assert excinfo.value.code == 1


def test_token_is_returned(monkeypatch):
    monkeypatch.setattr(main, "load_dotenv", lambda **kwargs: False)
    monkeypatch.setenv("DISCORD_TOKEN", "abc.def")

    assert main.load_environment() == "abc.def"


def test_intents_are_minimal():
    intents = main.build_intents()

    assert intents.guilds is True
    assert intents.guild_messages is True
    assert intents.members is False
    assert intents.message_content is False


def test_load_cogs_registers_every_cog():
    bot = SimpleNamespace(add_cog=MagicMock())

    main.load_cogs(bot)

    names = {type(call.args[0]).__name__ for call in bot.add_cog.call_args_list}
    assert names == {"EventsListenerCog", "InteractionRouterCog", "GuildConfigCog", "RecruitmentCog"}


@pytest.mark.asyncio
async def test_shutdown_runtime_closes_bot(monkeypatch):
    closer = SimpleNamespace(shutdown=AsyncMock())
    monkeypatch.setattr(main, "ticket_closer", closer)
    bot = SimpleNamespace(is_closed=MagicMock(return_value=False), close=AsyncMock())

    await main.shutdown_runtime(bot)

    closer.shutdown.assert_awaited_once()
    bot.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_shutdown_runtime_skips_closed_bot(monkeypatch):
    monkeypatch.setattr(main, "ticket_closer", SimpleNamespace(shutdown=AsyncMock()))
    bot = SimpleNamespace(is_closed=MagicMock(return_value=True), close=AsyncMock())

    await main.shutdown_runtime(bot)

    bot.close.assert_not_awaited()


@pytest.mark.asyncio
async def test_async_main_login_failure(monkeypatch):
    bot = SimpleNamespace(is_closed=MagicMock(return_value=False), close=AsyncMock())
    monkeypatch.setattr(main, "load_environment", lambda: "token")
    monkeypatch.setattr(main, "create_bot", lambda: bot)
    monkeypatch.setattr(main, "start_bot", AsyncMock(side_effect=discord.LoginFailure("bad token")))
    monkeypatch.setattr(main, "ticket_closer", SimpleNamespace(shutdown=AsyncMock()))

    assert await main.async_main() == 1
    bot.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_async_main_clean_run(monkeypatch):
    bot = SimpleNamespace(is_closed=MagicMock(return_value=True), close=AsyncMock())
    monkeypatch.setattr(main, "load_environment", lambda: "token")
    monkeypatch.setattr(main, "create_bot", lambda: bot)
    monkeypatch.setattr(main, "start_bot", AsyncMock())
    monkeypatch.setattr(main, "ticket_closer", SimpleNamespace(shutdown=AsyncMock()))

    assert await main.async_main() == 0


@pytest.mark.parametrize("code,expected", [(1, 1), (None, 1), ("2", 2), ("oops", 1)])
def test_main_maps_system_exit(monkeypatch, code, expected):
    def fake_run(coro):
        coro.close()
        raise SystemExit(code)

    monkeypatch.setattr(main.asyncio, "run", fake_run)

    assert main.main() == expected
