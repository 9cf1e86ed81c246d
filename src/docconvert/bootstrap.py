"""Composition Root: Dependency Injection Container.

This module is the ONLY place where concrete infrastructure classes are
imported and wired together. All other layers refer to ports (interfaces).
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union

from docconvert.config.models import EngineConfig
from docconvert.domain.models.formats import DocumentFormat
from docconvert.domain.models.settings import UserSettings
from docconvert.domain.ports.config_provider import ConfigProviderPort
from docconvert.domain.ports.serializer import SerializerPort
from docconvert.domain.ports.source_reader import SourceReaderPort

from docconvert.infrastructure.config.json_config_provider import JsonConfigProvider
from docconvert.infrastructure.config.settings_manager import SettingsManager
from docconvert.infrastructure.readers.csv_reader import CsvSourceReader
from docconvert.infrastructure.readers.json_reader import JsonSourceReader
from docconvert.infrastructure.readers.xml_reader import XmlSourceReader
from docconvert.infrastructure.renderers.pdf_renderer import PdfRenderer
from docconvert.infrastructure.serializers.csv_serializer import CsvSerializer
from docconvert.infrastructure.serializers.html_serializer import HtmlSerializer
from docconvert.infrastructure.serializers.json_serializer import JsonSerializer
from docconvert.infrastructure.serializers.text_serializer import TextSerializer
from docconvert.infrastructure.serializers.xml_serializer import XmlSerializer

from docconvert.application.use_cases.batch_convert import BatchConvertUseCase
from docconvert.application.use_cases.convert_content import ConvertContentUseCase


class Container:
    """Simple dependency injection container.

    Wires every reader and serializer to its format and provides
    pre-configured use cases.

    Usage::

        container = Container()
        result = container.convert_content().execute(raw, "json", "csv")
    """

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        settings_dir: Optional[Path] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        # -- Infrastructure singletons ---------------------------------------
        self._config_provider = JsonConfigProvider(config_path)
        self._config: EngineConfig = self._config_provider.get_config()
        self._settings_manager = SettingsManager(settings_dir)
        self._clock = clock

        readers: list[SourceReaderPort] = [
            JsonSourceReader(),
            CsvSourceReader(),
            XmlSourceReader(),
        ]
        serializers: list[SerializerPort] = [
            CsvSerializer(self._config.csv),
            HtmlSerializer(self._config.html),
            XmlSerializer(self._config.xml),
            TextSerializer(self._config.text),
            JsonSerializer(),
            PdfRenderer(self._config.pdf),
        ]
        self._readers = {reader.source_format: reader for reader in readers}
        self._serializers = {serializer.target_format: serializer for serializer in serializers}

    # -- Port accessors ------------------------------------------------------

    @property
    def config_provider(self) -> ConfigProviderPort:
        return self._config_provider

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def settings_manager(self) -> SettingsManager:
        return self._settings_manager

    @property
    def user_settings(self) -> UserSettings:
        return self._settings_manager.load()

    def get_reader(self, fmt: DocumentFormat) -> Optional[SourceReaderPort]:
        return self._readers.get(fmt)

    def get_serializer(self, fmt: DocumentFormat) -> Optional[SerializerPort]:
        return self._serializers.get(fmt)

    # -- Use case factories --------------------------------------------------

    def convert_content(self) -> ConvertContentUseCase:
        if self._clock is None:
            return ConvertContentUseCase(self._readers, self._serializers)
        return ConvertContentUseCase(self._readers, self._serializers, clock=self._clock)

    def batch_convert(self) -> BatchConvertUseCase:
        return BatchConvertUseCase(self.convert_content())
