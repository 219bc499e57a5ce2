"""Utility helpers for loading and storing plugin settings in YAML."""
from __future__ import annotations

import logging
import math
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from config import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    MAX_TEMPERATURE,
    MIN_TEMPERATURE,
    get_config_path,
)

logger = logging.getLogger(__name__)

SETTINGS_SECTION = "translator"

# Default shape of the settings tree.
DEFAULT_SETTINGS: Dict[str, Any] = {
    SETTINGS_SECTION: {
        "api_key": "",
        "model": DEFAULT_MODEL,
        "max_tokens": DEFAULT_MAX_TOKENS,
        "temperature": DEFAULT_TEMPERATURE,
    },
}


@dataclass(frozen=True)
class TranslatorSettings:
    """Immutable snapshot of the values the engine needs for one call."""

    api_key: str = ""
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.strip())

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TranslatorSettings":
        """Build a snapshot from a raw section, replacing invalid values with defaults."""
        api_key = data.get("api_key")
        model = data.get("model")
        return cls(
            api_key=str(api_key) if api_key is not None else "",
            model=str(model).strip() if model and str(model).strip() else DEFAULT_MODEL,
            max_tokens=_coerce_max_tokens(data.get("max_tokens", DEFAULT_MAX_TOKENS)),
            temperature=_coerce_temperature(data.get("temperature", DEFAULT_TEMPERATURE)),
        )


def _coerce_max_tokens(raw: Any) -> int:
    if isinstance(raw, bool):
        raw = None
    if isinstance(raw, float) and not raw.is_integer():
        logger.warning("Non-integer max_tokens %r ignored, using default %s", raw, DEFAULT_MAX_TOKENS)
        return DEFAULT_MAX_TOKENS
    try:
        value = int(raw)
    except (TypeError, ValueError, OverflowError):
        logger.warning("Invalid max_tokens value %r, using default %s", raw, DEFAULT_MAX_TOKENS)
        return DEFAULT_MAX_TOKENS
    if value <= 0:
        logger.warning("Non-positive max_tokens %s ignored, using default %s", value, DEFAULT_MAX_TOKENS)
        return DEFAULT_MAX_TOKENS
    return value


def _coerce_temperature(raw: Any) -> float:
    if isinstance(raw, bool):
        raw = None
    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        logger.warning("Invalid temperature value %r, using default %s", raw, DEFAULT_TEMPERATURE)
        return DEFAULT_TEMPERATURE
    if math.isnan(value) or not MIN_TEMPERATURE <= value <= MAX_TEMPERATURE:
        logger.warning(
            "Temperature %s outside [%s, %s], using default %s",
            value,
            MIN_TEMPERATURE,
            MAX_TEMPERATURE,
            DEFAULT_TEMPERATURE,
        )
        return DEFAULT_TEMPERATURE
    return value


def _merge_dicts(base: Dict[str, Any], extra: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge two dictionaries without mutating the inputs."""
    merged = deepcopy(base)
    for key, value in extra.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


class SettingsStore:
    """
    YAML-backed settings store.

    The file is re-read on every `load()`; nothing is cached between calls so
    edits made while the host process is running are picked up.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else get_config_path()

    def load(self) -> Dict[str, Any]:
        """Load settings from disk (or return defaults)."""
        settings = deepcopy(DEFAULT_SETTINGS)
        if not self.path.is_file():
            return settings
        try:
            raw_data = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Failed to read settings from %s, using defaults: %s", self.path, exc)
            return settings
        if not isinstance(raw_data, dict):
            logger.warning("Settings file %s must contain a mapping, using defaults", self.path)
            return settings
        return _merge_dicts(settings, raw_data)

    def save(self, settings: Dict[str, Any]) -> None:
        """Persist settings into the YAML file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            yaml.safe_dump(settings, allow_unicode=True, sort_keys=False),
            encoding="utf-8",
        )

    def update_translator(self, **values: Any) -> Dict[str, Any]:
        """Merge the given translator keys into the stored settings and save them."""
        changes = {key: value for key, value in values.items() if value is not None}
        settings = _merge_dicts(self.load(), {SETTINGS_SECTION: changes})
        self.save(settings)
        return settings

    def load_translator_settings(self) -> TranslatorSettings:
        """Return a fresh immutable snapshot of the translator section."""
        section = self.load().get(SETTINGS_SECTION) or {}
        if not isinstance(section, dict):
            logger.warning("Settings section %r must be a mapping, using defaults", SETTINGS_SECTION)
            section = {}
        return TranslatorSettings.from_mapping(section)


class InMemorySettingsStore(SettingsStore):
    """Settings store kept in a dict, for harnesses that own persistence themselves."""

    def __init__(self, settings: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(path=Path("<memory>"))
        self._data: Dict[str, Any] = _merge_dicts(DEFAULT_SETTINGS, settings or {})

    def load(self) -> Dict[str, Any]:
        return deepcopy(self._data)

    def save(self, settings: Dict[str, Any]) -> None:
        self._data = deepcopy(settings)
