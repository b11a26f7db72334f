"""
Configuration loader — reads authsetup.yml into a SetupConfig.

The file is optional. A project without one gets the defaults, which
reproduce the tool's stock behavior (auto-detected package manager,
stock package specs, installs enabled).
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from authsetup.core.models.config import SetupConfig

logger = logging.getLogger(__name__)

# Default config filename
SETUP_CONFIG_FILE = "authsetup.yml"


class ConfigError(Exception):
    """Raised when authsetup.yml exists but cannot be used."""


def find_config_file(project_root: Path) -> Path | None:
    """Return the project's authsetup.yml, or None if there is none."""
    candidate = project_root / SETUP_CONFIG_FILE
    return candidate if candidate.is_file() else None


def load_config(project_root: Path, path: Path | None = None) -> SetupConfig:
    """Load and validate setup configuration for a project.

    Args:
        project_root: Target project directory.
        path: Explicit config path. If None, looks for authsetup.yml
            in the project root.

    Returns:
        Validated SetupConfig (defaults when no file exists).

    Raises:
        ConfigError: If the file is unreadable or invalid.
    """
    if path is None:
        path = find_config_file(project_root)
        if path is None:
            logger.debug("No %s in %s, using defaults", SETUP_CONFIG_FILE, project_root)
            return SetupConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading setup config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return SetupConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = SetupConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid setup configuration in {path}: {e}") from e

    logger.info(
        "Loaded setup config (package_manager=%s, install=%s)",
        config.package_manager,
        config.install,
    )
    return config
