"""Load DashboardSettings from a YAML file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from opsdeck.models.settings import ConfigLoadError, DashboardSettings

logger = logging.getLogger(__name__)


def load_settings(path: str | Path | None) -> DashboardSettings:
    """Read and validate settings.

    A missing path or file yields the defaults. Settings may sit at the top
    level of the document or under a ``dashboard`` key.

    Args:
        path: Path to a YAML settings file, or None.

    Returns:
        The validated settings.

    Raises:
        ConfigLoadError: If the file cannot be read, parsed or validated.
    """
    if path is None:
        return DashboardSettings()

    settings_path = Path(path).expanduser()
    if not settings_path.exists():
        logger.debug("Settings file %s not found, using defaults", settings_path)
        return DashboardSettings()

    try:
        with settings_path.open(encoding="utf-8") as f:
            document: Any = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigLoadError(f"Failed to read settings from {settings_path}: {e}") from e

    if document is None:
        return DashboardSettings()
    if not isinstance(document, dict):
        raise ConfigLoadError(f"Settings in {settings_path} must be a mapping")

    section = document.get("dashboard", document)
    if not isinstance(section, dict):
        raise ConfigLoadError(f"'dashboard' section in {settings_path} must be a mapping")

    try:
        settings = DashboardSettings.model_validate(section)
    except ValidationError as e:
        raise ConfigLoadError(f"Invalid settings in {settings_path}: {e}") from e

    logger.info("Loaded settings from %s", settings_path)
    return settings


__all__ = ["load_settings"]
