"""
Configuration loader — reads hostprep.yml into ProvisionConfig.

The file is optional: when none is given and none is found walking
up from the working directory, the defaults apply.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from hostprep.core.errors import HostprepError
from hostprep.core.models.config import ProvisionConfig

logger = logging.getLogger(__name__)

CONFIG_FILE = "hostprep.yml"
CONFIG_ENV = "HOSTPREP_CONFIG"


class ConfigError(HostprepError):
    """Raised when the configuration file is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for hostprep.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to hostprep.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def resolve_config_path(path: Path | None = None) -> Path | None:
    """Explicit path, else ``$HOSTPREP_CONFIG``, else an upward search."""
    if path is not None:
        return path
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path)
    return find_config_file()


def load_config(path: Path | None = None) -> ProvisionConfig:
    """Load and validate provisioning configuration.

    Args:
        path: Explicit path to hostprep.yml. If None, see
            ``resolve_config_path``; nothing found means defaults.

    Raises:
        ConfigError: If an explicitly named file is missing, or any
            file is unreadable or invalid.
    """
    explicit = path is not None or bool(os.environ.get(CONFIG_ENV))
    path = resolve_config_path(path)

    if path is None:
        logger.debug("No %s found, using defaults", CONFIG_FILE)
        return ProvisionConfig()

    if not path.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return ProvisionConfig()

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return ProvisionConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        return ProvisionConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e
