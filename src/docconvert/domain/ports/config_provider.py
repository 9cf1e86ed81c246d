"""Port: Configuration provider: supply the engine configuration."""

from abc import ABC, abstractmethod
from typing import Any


class ConfigProviderPort(ABC):
    """Contract for providing configuration to the application.

    The concrete return type is ``Any`` at the domain level; the
    ``EngineConfig`` Pydantic model in ``docconvert.config`` is the typed
    contract. This keeps the domain free of configuration models.
    """

    @abstractmethod
    def get_config(self) -> Any:
        """Return the current engine configuration object."""
        ...
