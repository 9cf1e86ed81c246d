"""Domain ports: abstract interfaces implemented by infrastructure."""

from docconvert.domain.ports.config_provider import ConfigProviderPort
from docconvert.domain.ports.serializer import RenderContext, SerializerPort
from docconvert.domain.ports.source_reader import SourceReaderPort

__all__ = [
    "ConfigProviderPort",
    "RenderContext",
    "SerializerPort",
    "SourceReaderPort",
]
