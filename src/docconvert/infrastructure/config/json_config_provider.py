"""JSON config provider: implements ConfigProviderPort on top of ``docconvert.config.loader``."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from docconvert.config.loader import load_config
from docconvert.config.models import EngineConfig
from docconvert.domain.ports.config_provider import ConfigProviderPort


class JsonConfigProvider(ConfigProviderPort):
    """Load the engine configuration from a JSON file, lazily.

    Loader failures propagate as :class:`ConfigurationError`.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None) -> None:
        self._config_path = config_path
        self._config: Optional[EngineConfig] = None

    def get_config(self) -> EngineConfig:
        """Return the current engine configuration, loading on first use."""
        if self._config is None:
            self._config = load_config(self._config_path)
        return self._config
