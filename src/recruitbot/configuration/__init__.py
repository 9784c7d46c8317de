"""
Configuration management for RecruitBot.

- **app_configuration.py**: YAML loader for process-wide settings (close
  delay, presence text, default guild values). Falls back to defaults on a
  missing or malformed file.

- **guild_config.py**: Per-guild configuration record, its form questions and
  the in-memory store keyed by guild id.

- **form_fields.py**: Operations on the ordered question list, capped at five
  entries, and normalization of raw modal input into questions.
"""
