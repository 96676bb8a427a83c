"""Remembered workout preferences with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/HIITTime/settings.json

Usage::

    settings = load_settings()
    settings.sound_enabled = False
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.sequencer import SessionConfig


logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "HIITTime"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── workout ───────────────────────────────────────────────────────
    work_duration: int = 40                # seconds
    rest_duration: int = 20
    lead_in_duration: int = 5
    repetitions: int = 8

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    def to_session_config(self) -> SessionConfig:
        return SessionConfig(
            lead_in_seconds=self.lead_in_duration,
            work_seconds=self.work_duration,
            rest_seconds=self.rest_duration,
            repetitions=self.repetitions,
            cue_enabled=self.sound_enabled,
        )

    def remember(self, config: SessionConfig) -> None:
        """Copy the values of a config that was just used."""
        self.work_duration = config.work_seconds
        self.rest_duration = config.rest_seconds
        self.lead_in_duration = config.lead_in_seconds
        self.repetitions = config.repetitions
        self.sound_enabled = config.cue_enabled


def _check_types(values: dict) -> None:
    """Raise TypeError unless each value matches its field's default type."""
    defaults = Settings()
    for key, value in values.items():
        expected = type(getattr(defaults, key))
        # bool is an int subclass, so compare exact types
        if type(value) is not expected:
            raise TypeError(
                f"{key} should be {expected.__name__}, got {type(value).__name__}"
            )


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        _check_types(filtered)
        return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings at %s: %s", SETTINGS_PATH, exc)
        return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
    logger.debug("Settings saved to %s", SETTINGS_PATH)
