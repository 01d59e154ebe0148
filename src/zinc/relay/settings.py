"""Relay settings — the record persisted to ``settings.json``."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

APP_NAME = "zinc"
SETTINGS_FILENAME = "settings.json"


class SettingsError(Exception):
    """Raised when the settings file cannot be read, parsed or written."""


class Settings(BaseModel):
    """User settings for the message relay."""

    api_key: str = Field(default="", description="API key for the completion provider.")
    model: str = Field(
        default="openrouter/anthropic/claude-3-haiku",
        description="LiteLLM model string (provider/model).",
    )
    ai_enabled: bool = Field(default=True, description="Master switch for the relay.")


class SettingsStore:
    """Loads and saves :class:`Settings` as pretty-printed JSON.

    The file lives in the per-user application directory unless *path* is
    given.  Loading a missing file writes the defaults first.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or Path(click.get_app_dir(APP_NAME)) / SETTINGS_FILENAME

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Settings:
        if not self._path.exists():
            defaults = Settings()
            self.save(defaults)
            logger.info("Created default settings at %s", self._path)
            return defaults
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SettingsError(f"Cannot read {self._path}: {exc}") from exc
        try:
            return Settings.model_validate_json(raw)
        except ValidationError as exc:
            raise SettingsError(f"Invalid settings in {self._path}: {exc}") from exc

    def save(self, settings: Settings) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(settings.model_dump_json(indent=2), encoding="utf-8")
        except OSError as exc:
            raise SettingsError(f"Cannot write {self._path}: {exc}") from exc
