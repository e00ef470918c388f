"""User defaults with JSON persistence.

Settings are read from:
    ~/.config/detimer/settings.json

Example file::

    {"sound_path": "~/sons/sino.wav", "sound_volume": 50}

Command-line flags override every value here.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path

logger = logging.getLogger(__name__)


CONFIG_DIR = Path.home() / ".config" / "detimer"
SETTINGS_PATH = CONFIG_DIR / "settings.json"
CACHE_DIR = Path.home() / ".cache" / "detimer"


@dataclass
class Settings:
    """All user-configurable defaults."""

    # ── audio ─────────────────────────────────────────────────────────
    sound_path: str | None = None          # WAV played by --som without a file
    sound_volume: int = 70                 # 0-100

    # ── timing ────────────────────────────────────────────────────────
    poll_interval_ms: int = 100

    # ── misc ──────────────────────────────────────────────────────────
    log_level: str = "WARNING"
    cache_dir: str = str(CACHE_DIR)


def _valid_value(name: str, value) -> bool:
    """Type and range check for one settings value."""
    if name == "sound_path":
        return value is None or isinstance(value, str)
    if name == "cache_dir":
        return isinstance(value, str)
    if name in ("sound_volume", "poll_interval_ms"):
        return isinstance(value, int) and not isinstance(value, bool) and value >= 0
    if name == "log_level":
        return isinstance(value, str) and isinstance(logging.getLevelName(value.upper()), int)
    return False


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from disk, falling back to defaults.

    Unknown keys are ignored; a value of the wrong type keeps its default
    and logs a warning.
    """
    path = path or SETTINGS_PATH
    if not path.exists():
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
    except (OSError, ValueError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return Settings()

    for name, value in list(filtered.items()):
        if not _valid_value(name, value):
            logger.warning("Ignoring invalid %s=%r in %s", name, value, path)
            del filtered[name]
    return Settings(**filtered)
