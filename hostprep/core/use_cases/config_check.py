"""
Config check use case — validate hostprep.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from hostprep.core.config.loader import CONFIG_FILE, ConfigError, load_config, resolve_config_path
from hostprep.core.models.config import ProvisionConfig


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: ProvisionConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "config": self.config.model_dump(mode="json") if self.config else None,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate configuration and report issues.

    Finding no file is valid (defaults apply) but produces a warning. A
    file named by ``--config`` or ``$HOSTPREP_CONFIG`` that does not exist
    is an error.
    """
    result = ConfigCheckResult()

    resolved = resolve_config_path(config_path)
    if resolved is None:
        result.warnings.append(f"No {CONFIG_FILE} found; built-in defaults apply.")
    else:
        result.config_path = resolved

    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.errors.append(str(e))
        return result
    result.config = config

    # Semantic checks
    if not config.python.upgrade_candidates:
        result.warnings.append(
            "python.upgrade_candidates is empty; an old interpreter will fail the run."
        )
    if not config.python.base_packages:
        result.errors.append("python.base_packages must name at least one package.")
    if config.compose.plugin_package == config.compose.classic_package:
        result.warnings.append("compose.plugin_package and compose.classic_package are the same package.")
    if config.strict:
        result.warnings.append("strict is on: group, service and pip self-upgrade failures are fatal.")

    result.valid = not result.errors
    return result
