"""
Discord integration for RecruitBot.

- **cogs/**: slash commands and listeners registered on the bot
- **ticket_handlers.py**: handlers of the application workflow
- **config_handlers.py**: handlers of the /config panel editors
"""
