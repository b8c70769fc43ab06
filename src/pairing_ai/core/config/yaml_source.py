"""YAML settings source with environment-based file merging."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic_settings import PydanticBaseSettingsSource


if TYPE_CHECKING:
    from pydantic.fields import FieldInfo


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge override into base dict, returning a new dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_dir(directory: Path) -> dict[str, Any]:
    """Load and deep-merge every ``*.yaml`` file of a directory in name order."""
    merged: dict[str, Any] = {}
    if not directory.is_dir():
        return merged

    for yaml_file in sorted(directory.glob("*.yaml")):
        with yaml_file.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        merged = deep_merge(merged, data)
    return merged


class MultiYamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load and merge YAML files based on APP_ENV.

    Base files come from ``config/base/``; overrides from
    ``config/environments/{APP_ENV}/`` are merged on top. The config
    directory can be relocated with the ``CONFIG_DIR`` environment variable.
    """

    def __init__(self, settings_cls: type[Any]) -> None:
        super().__init__(settings_cls)
        self._config_dir = self._find_config_dir()
        self._app_env = os.getenv("APP_ENV", "development")
        self._yaml_data: dict[str, Any] = {}
        self._load_yaml_files()

    def _find_config_dir(self) -> Path:
        override = os.getenv("CONFIG_DIR")
        if override:
            return Path(override)

        # src/pairing_ai/core/config/yaml_source.py -> project root
        project_root = Path(__file__).resolve().parents[4]
        return project_root / "config"

    def _load_yaml_files(self) -> None:
        merged = load_yaml_dir(self._config_dir / "base")
        env_overrides = load_yaml_dir(self._config_dir / "environments" / self._app_env)
        self._yaml_data = deep_merge(merged, env_overrides)

    def get_field_value(
        self,
        _field: FieldInfo,
        field_name: str,
    ) -> tuple[Any, str, bool]:
        """Get the value for a specific field from YAML data."""
        value = self._yaml_data.get(field_name)
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, Any]:
        """Return all YAML configuration data."""
        return self._yaml_data
