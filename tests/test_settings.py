"""Tests for user settings persistence.

Covers:
- UserSettings model defaults and validation
- SettingsManager load / save / reset with a temp directory
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from docconvert.domain.models.conversion import ConversionOptions
from docconvert.domain.models.formats import DocumentFormat, PageSize
from docconvert.domain.models.settings import UserSettings
from docconvert.infrastructure.config.settings_manager import SettingsManager


@pytest.fixture()
def manager(settings_dir: Path) -> SettingsManager:
    return SettingsManager(config_dir=settings_dir)


# ── Model Tests ───────────────────────────────────────────────────────────


class TestUserSettingsModel:
    def test_defaults(self) -> None:
        settings = UserSettings()
        assert settings.options == ConversionOptions()
        assert settings.default_target is None
        assert settings.output_dir is None

    def test_options_validation(self) -> None:
        with pytest.raises(ValidationError):
            UserSettings(options={"font_size": 200})

    def test_serialization_roundtrip(self) -> None:
        original = UserSettings(
            options=ConversionOptions(page_size=PageSize.LETTER, compression=True),
            default_target=DocumentFormat.PDF,
        )
        restored = UserSettings.model_validate(original.model_dump(mode="json"))
        assert restored == original


# ── SettingsManager Tests ─────────────────────────────────────────────────


class TestSettingsManager:
    def test_load_defaults_when_no_file(self, manager: SettingsManager) -> None:
        assert manager.load() == UserSettings()

    def test_save_and_load(self, manager: SettingsManager) -> None:
        manager.save(UserSettings(options=ConversionOptions(font_size=14), output_dir="out"))
        loaded = manager.load()
        assert loaded.options.font_size == 14
        assert loaded.output_dir == "out"

    def test_reset_to_defaults(self, manager: SettingsManager) -> None:
        manager.save(UserSettings(default_target=DocumentFormat.CSV))
        assert manager.settings_path.exists()

        assert manager.reset_to_defaults() == UserSettings()
        assert not manager.settings_path.exists()

    def test_reset_without_file(self, manager: SettingsManager) -> None:
        assert manager.reset_to_defaults() == UserSettings()

    def test_corrupted_file_returns_defaults(
        self, manager: SettingsManager, settings_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        settings_dir.mkdir(parents=True, exist_ok=True)
        manager.settings_path.write_text("{{invalid json", encoding="utf-8")

        assert manager.load() == UserSettings()
        assert "Ignoring unreadable settings file" in caplog.text

    def test_invalid_values_return_defaults(self, manager: SettingsManager, settings_dir: Path) -> None:
        settings_dir.mkdir(parents=True, exist_ok=True)
        manager.settings_path.write_text(json.dumps({"options": {"margin": -1}}), encoding="utf-8")
        assert manager.load() == UserSettings()

    def test_save_creates_directory(self, tmp_path: Path) -> None:
        mgr = SettingsManager(config_dir=tmp_path / "deep" / "nested")
        mgr.save(UserSettings())
        assert mgr.settings_path.exists()

    def test_saved_file_is_json(self, manager: SettingsManager) -> None:
        manager.save(UserSettings())
        data = json.loads(manager.settings_path.read_text(encoding="utf-8"))
        assert set(data) == {"options", "default_target", "output_dir"}
        assert data["options"]["page_size"] == "A4"

    def test_no_temp_files_left_behind(self, manager: SettingsManager, settings_dir: Path) -> None:
        manager.save(UserSettings())
        assert [p.name for p in settings_dir.iterdir()] == ["user_settings.json"]

    def test_container_exposes_settings(self, container, manager: SettingsManager) -> None:
        manager.save(UserSettings(default_target=DocumentFormat.HTML))
        assert container.user_settings.default_target is DocumentFormat.HTML
