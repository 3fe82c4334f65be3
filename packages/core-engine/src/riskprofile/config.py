"""riskprofile configuration management.

Handles loading, saving, and managing .riskprofile.yaml config files.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from riskprofile_shared.constants.constants import (
    CONFIG_ENV_VAR,
    CONFIG_FILE_NAME,
    DB_ENV_VAR,
    DEFAULT_CONFIG,
)

logger = logging.getLogger(__name__)


class RiskProfileConfig:
    """Application configuration loaded from .riskprofile.yaml."""

    def __init__(self, config_data: dict[str, Any] | None = None):
        self._data = _deep_merge(DEFAULT_CONFIG, config_data or {})

    # ─── Storage Settings ──────────────────────────────────────────────────────
    @property
    def db_path(self) -> str:
        return os.environ.get(DB_ENV_VAR, self._data["storage"]["db_path"])

    # ─── Reassessment Policy ───────────────────────────────────────────────────
    @property
    def annual_months(self) -> int:
        return int(self._data["reassessment"]["annual_months"])

    @property
    def advisory_months(self) -> int:
        return int(self._data["reassessment"]["advisory_months"])

    # ─── Report Settings ───────────────────────────────────────────────────────
    @property
    def default_report_format(self) -> str:
        return self._data["reports"]["default_format"]

    @property
    def include_history(self) -> bool:
        return bool(self._data["reports"]["include_history"])

    # ─── Logging ───────────────────────────────────────────────────────────────
    @property
    def log_level(self) -> str:
        return str(self._data["logging"]["level"]).upper()

    # ─── Utility Methods ───────────────────────────────────────────────────────
    def get(self, key: str, default: Any = None) -> Any:
        """Get a nested config value using dot notation."""
        keys = key.split(".")
        value = self._data
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a nested config value using dot notation."""
        keys = key.split(".")
        data = self._data
        for k in keys[:-1]:
            if k not in data or not isinstance(data[k], dict):
                data[k] = {}
            data = data[k]
        data[keys[-1]] = value

    def to_dict(self) -> dict[str, Any]:
        """Return the full config as a dict."""
        return _deep_merge(self._data, {})


def load_config(directory: str | None = None) -> RiskProfileConfig:
    """Load configuration from .riskprofile.yaml.

    Search order:
    1. RISKPROFILE_CONFIG environment variable
    2. .riskprofile.yaml in the specified directory
    3. .riskprofile.yaml in current working directory
    4. Default config (if no file found)

    Args:
        directory: Directory to search for config file.

    Returns:
        RiskProfileConfig instance.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        config_path = Path(env_path)
        if config_path.exists():
            return _load_from_file(config_path)
        logger.debug("%s points to missing file %s, ignoring", CONFIG_ENV_VAR, config_path)

    if directory:
        config_path = Path(directory) / CONFIG_FILE_NAME
        if config_path.exists():
            return _load_from_file(config_path)

    config_path = Path.cwd() / CONFIG_FILE_NAME
    if config_path.exists():
        return _load_from_file(config_path)

    return RiskProfileConfig()


def save_config(directory: str, config: RiskProfileConfig | None = None) -> Path:
    """Save configuration to .riskprofile.yaml.

    Args:
        directory: Directory where the config will be saved.
        config: Config to save. Uses defaults if None.

    Returns:
        Path to the saved config file.
    """
    config = config or RiskProfileConfig()
    config_path = Path(directory) / CONFIG_FILE_NAME

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(
            config.to_dict(),
            f,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )

    return config_path


def _load_from_file(path: Path) -> RiskProfileConfig:
    """Load config from a YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    return RiskProfileConfig(data)


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dicts, with override taking precedence."""
    result = {
        key: _deep_merge(value, {}) if isinstance(value, dict) else value
        for key, value in base.items()
    }
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
