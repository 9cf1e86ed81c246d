"""Engine configuration package."""

from docconvert.config.loader import clear_cache, get_config, load_config
from docconvert.config.models import EngineConfig

__all__ = ["EngineConfig", "clear_cache", "get_config", "load_config"]
