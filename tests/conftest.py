"""Shared fixtures for the docconvert test-suite."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from docconvert.bootstrap import Container
from docconvert.config.loader import clear_cache
from docconvert.domain.models.conversion import ConversionOptions
from docconvert.domain.ports.serializer import RenderContext

FIXED_NOW = datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _fresh_config_cache():
    """Ensure a clean config cache for every test."""
    clear_cache()
    yield
    clear_cache()


@pytest.fixture()
def settings_dir(tmp_path: Path) -> Path:
    return tmp_path / "settings"


@pytest.fixture()
def container(settings_dir: Path) -> Container:
    return Container(settings_dir=settings_dir, clock=lambda: FIXED_NOW)


@pytest.fixture()
def context() -> RenderContext:
    return RenderContext(options=ConversionOptions(), source_name="data.json", generated_at=FIXED_NOW)


@pytest.fixture()
def make_context():
    """Build a RenderContext with the given option overrides."""

    def _make(source_name: str = "data.json", **options) -> RenderContext:
        return RenderContext(
            options=ConversionOptions(**options),
            source_name=source_name,
            generated_at=FIXED_NOW,
        )

    return _make
