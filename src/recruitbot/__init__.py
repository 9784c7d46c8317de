"""
RecruitBot - Discord recruitment ticket bot

RecruitBot posts an application panel, collects answers through a modal
form, opens a private channel per applicant with those answers and lets the
staff close it once the application is handled.

Core Components:

- **Configuration**: per-guild settings (ticket category, staff role, panel
  appearance, form questions) held in memory behind a store interface
- **Ticket workflow**: panel publication, application modal, ticket channel
  creation and delayed closing
- **Configuration panel**: /config embed with modal editors and a two-step
  question editor

Usage:
    from recruitbot.main import main
    main()  # Starts the bot
"""
