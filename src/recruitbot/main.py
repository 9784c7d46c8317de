"""
Discord Recruitment Bot
=======================

A Discord bot that posts a recruitment panel, collects applications through
a modal form, opens a private ticket channel per applicant and lets staff
close it. Administrators edit the per-server setup through /config.
"""

import os
import sys
from pathlib import Path

def resolve_base_dir() -> Path:
    """Determine the base directory of the project.
    Resolution order:
    1. RECRUITBOT_HOME environment variable, if set.
    2. If running in a frozen/compiled context (e.g., PyInstaller, Nuitka), use the executable's directory.
    3. Otherwise, assume running from source and use the grandparent of this file's directory.
    """
    if env_home := os.getenv("RECRUITBOT_HOME"):
        return Path(env_home).resolve()

    if getattr(sys, "frozen", False) or getattr(sys, "compiled", False):
        return Path(sys.argv[0]).resolve().parent

    return Path(__file__).resolve().parents[2]

BASE_DIR = resolve_base_dir()
os.chdir(BASE_DIR)

import asyncio
import discord
from dotenv import load_dotenv

from recruitbot.services.ticket_closer import ticket_closer
from recruitbot.util.logger import get_logger, handle_exception


logger = get_logger("main")


def load_environment() -> str:
    """Load environment variables and return the Discord bot token.

    Returns
    -------
    str
        Discord bot token extracted from the loaded environment.

    Raises
    ------
    SystemExit
        If the required ``DISCORD_TOKEN`` variable is missing.
    """
    load_dotenv(dotenv_path=BASE_DIR / ".env")
    token = os.getenv("DISCORD_TOKEN")
    if not token:
        logger.critical("'DISCORD_TOKEN' environment variable not set. Bot cannot start.")
        sys.exit(1)
    return token


def build_intents() -> discord.Intents:
    """Guild and guild message events are all the recruitment flow needs."""
    intents = discord.Intents.none()
    intents.guilds = True
    intents.guild_messages = True
    return intents


def load_cogs(discord_bot_instance: discord.Bot) -> None:
    """Register all operational cogs with the provided Discord bot instance."""
    from recruitbot.bot.cogs import events_listener, guild_config_cmds, interaction_router, recruitment_cmds

    events_listener.setup(discord_bot_instance)
    interaction_router.setup(discord_bot_instance)
    guild_config_cmds.setup(discord_bot_instance)
    recruitment_cmds.setup(discord_bot_instance)

    logger.info("All cogs loaded successfully.")


def create_bot() -> discord.Bot:
    """Instantiate the Discord bot and register all cogs."""
    bot = discord.Bot(intents=build_intents())
    load_cogs(bot)
    return bot


async def start_bot(bot: discord.Bot, token: str) -> None:
    """Start the Discord bot and handle lifecycle logging around the connection."""
    logger.info("Attempting to connect to Discord…")
    try:
        await bot.start(token)
    except asyncio.CancelledError:
        logger.info("Discord bot start cancelled; shutting down")
    finally:
        logger.info("Discord bot start routine finished.")


async def shutdown_runtime(bot: discord.Bot | None = None) -> None:
    """Cancel pending ticket deletions and close the Discord connection."""
    try:
        await ticket_closer.shutdown()
    except Exception as exc:
        logger.exception("Error during ticket closer shutdown: %s", exc)

    if bot is not None and not bot.is_closed():
        try:
            await bot.close()
        except Exception as exc:
            logger.exception("Error while closing the Discord client: %s", exc)

    logger.info("Shutdown complete.")


async def async_main() -> int:
    """Bootstrap the bot and run it until disconnect, returning an exit code."""
    token = load_environment()

    try:
        bot = create_bot()
    except Exception as exc:
        logger.critical("Failed to initialize Discord bot: %s", exc)
        return 1

    exit_code = 0
    try:
        await start_bot(bot, token)
    except discord.LoginFailure as exc:
        logger.critical("Discord rejected the token: %s", exc)
        exit_code = 1
    except Exception as exc:
        logger.critical("Discord bot runtime error: %s", exc)
        exit_code = 1
    finally:
        await shutdown_runtime(bot)

    return exit_code


def main() -> int:
    """Entrypoint that orchestrates the async runtime and returns the process code."""
    logger.info("Starting Discord Recruitment Bot…")
    try:
        return asyncio.run(async_main())
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user.")
        return 0
    except SystemExit as exit_exc:
        code = exit_exc.code
        if isinstance(code, int):
            return code
        if code is None:
            return 1
        try:
            return int(code)
        except (ValueError, TypeError):
            logger.warning("SystemExit.code is not an int (%r); defaulting to 1", code)
            return 1
    except Exception as exc:
        logger.critical("An unexpected error occurred while running the bot: %s", exc)
        return 1


if __name__ == "__main__":
    sys.excepthook = handle_exception
    sys.exit(main())
