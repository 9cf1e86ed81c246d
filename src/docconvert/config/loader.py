"""Engine configuration loading.

A custom file only needs the keys it changes: its JSON is merged over the
bundled ``engine_default.json`` before validation. Every failure (missing
file, malformed JSON, schema violation) surfaces as a
:class:`ConfigurationError` naming the file and, for schema violations,
the dotted path of each offending key.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from docconvert.config.models import EngineConfig
from docconvert.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "engine_default.json"

# Validated configs keyed by resolved file path
_loaded: dict[Path, EngineConfig] = {}


def _read_json(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigurationError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigurationError(f"Cannot read config file {path}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"{path.name}: line {exc.lineno} column {exc.colno}: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path.name}: top level must be an object")
    return data


def merge_over(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively lay *override* over *base*; nested objects merge, anything else replaces."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_over(merged[key], value)
        else:
            merged[key] = value
    return merged


def _describe(exc: ValidationError) -> str:
    lines = []
    for error in exc.errors():
        where = ".".join(str(part) for part in error["loc"]) or "<root>"
        lines.append(f"{where}: {error['msg']}")
    return "; ".join(lines)


def load_config(path: Optional[Union[str, Path]] = None) -> EngineConfig:
    """Return the validated engine configuration for *path* (default: bundled file).

    Results are cached per resolved path until :func:`clear_cache`.

    Raises
    ------
    ConfigurationError
        The file is missing or unreadable, is not a JSON object, or does
        not validate against :class:`EngineConfig`.
    """
    config_path = Path(path).resolve() if path else DEFAULT_CONFIG_PATH.resolve()
    cached = _loaded.get(config_path)
    if cached is not None:
        return cached

    data = _read_json(DEFAULT_CONFIG_PATH)
    if config_path != DEFAULT_CONFIG_PATH.resolve():
        data = merge_over(data, _read_json(config_path))
        logger.debug("Merged engine config %s over defaults", config_path)

    try:
        config = EngineConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"{config_path.name}: {_describe(exc)}") from exc
    _loaded[config_path] = config
    return config


def get_config() -> EngineConfig:
    """The bundled default configuration."""
    return load_config()


def clear_cache() -> None:
    _loaded.clear()
