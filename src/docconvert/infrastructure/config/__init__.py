"""Configuration adapters: engine config provider and user settings store."""

from docconvert.infrastructure.config.json_config_provider import JsonConfigProvider
from docconvert.infrastructure.config.settings_manager import SettingsManager

__all__ = ["JsonConfigProvider", "SettingsManager"]
