"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/FollowAlong/settings.json

Usage::

    settings = load_settings()
    settings.muted = True
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, field
from pathlib import Path

logger = logging.getLogger(__name__)


# Reuse the app-support directory from db.py
APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "FollowAlong"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timeline ──────────────────────────────────────────────────────
    boxing_round_count: int = 5            # half-time rest follows this round
    thresholds: list[int] = field(default_factory=lambda: [120, 60])  # seconds left

    # ── cues ──────────────────────────────────────────────────────────
    muted: bool = False                    # audio only; haptics still fire
    sound_volume: int = 85                 # 0-100
    haptics_enabled: bool = True

    # ── history ───────────────────────────────────────────────────────
    log_sessions: bool = True


def _valid(value, default) -> bool:
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool)
    if isinstance(default, list):
        return isinstance(value, list) and all(
            isinstance(v, int) and not isinstance(v, bool) for v in value
        )
    return True


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults.

    Unknown keys are dropped; a value of the wrong type falls back to
    that field's default.
    """
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            defaults = asdict(Settings())
            filtered = {}
            for key, value in data.items():
                if key not in defaults:
                    continue
                if not _valid(value, defaults[key]):
                    logger.warning("Ignoring invalid setting %s=%r", key, value)
                    continue
                filtered[key] = value
            return Settings(**filtered)
    except (OSError, ValueError, AttributeError):
        logger.warning("Ignoring unreadable settings at %s", SETTINGS_PATH, exc_info=True)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
