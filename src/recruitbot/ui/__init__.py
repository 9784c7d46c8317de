"""
User interface components for RecruitBot.

- **panel_ui.py**: Applicant-facing embeds, buttons and the application modal.

- **config_ui.py**: The /config summary embed, its entry buttons, the editor
  modals and the question selector.
"""
