"""Settings manager: loads/saves UserSettings to OS-appropriate config dir.

Persists user preferences as JSON to
``~/.config/docconvert/user_settings.json`` (Linux) or the equivalent
platform directory via ``platformdirs``.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path
from typing import Optional

import platformdirs

from docconvert.domain.models.settings import UserSettings

logger = logging.getLogger(__name__)

_APP_NAME = "docconvert"
_SETTINGS_FILENAME = "user_settings.json"


class SettingsManager:
    """Load, save and reset :class:`UserSettings` in a per-user config directory.

    Parameters
    ----------
    config_dir : Path | None
        Override the default config directory (useful for testing).
    """

    def __init__(self, config_dir: Optional[Path] = None) -> None:
        self._config_dir = Path(config_dir) if config_dir else Path(platformdirs.user_config_dir(_APP_NAME))
        self._settings_path = self._config_dir / _SETTINGS_FILENAME

    def load(self) -> UserSettings:
        """Load user settings from disk, falling back to defaults.

        A corrupted file is reported and ignored; it is overwritten by the
        next :meth:`save`.
        """
        if not self._settings_path.exists():
            return UserSettings()

        try:
            raw = json.loads(self._settings_path.read_text(encoding="utf-8"))
            return UserSettings.model_validate(raw)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable settings file %s: %s", self._settings_path, exc)
            return UserSettings()

    def save(self, settings: UserSettings) -> None:
        """Persist settings atomically (write to temp, then rename)."""
        self._config_dir.mkdir(parents=True, exist_ok=True)

        data = settings.model_dump(mode="json")
        tmp_fd, tmp_path = tempfile.mkstemp(dir=self._config_dir, suffix=".tmp")
        try:
            with open(tmp_fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2, ensure_ascii=False)
            Path(tmp_path).replace(self._settings_path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise
        logger.debug("Saved settings to %s", self._settings_path)

    def reset_to_defaults(self) -> UserSettings:
        """Delete the persisted file and return factory defaults."""
        self._settings_path.unlink(missing_ok=True)
        return UserSettings()

    @property
    def settings_path(self) -> Path:
        return self._settings_path
