"""
Compose step — ``docker compose`` (v2 plugin), falling back to the
classic ``docker-compose`` (v1) package.
"""

from __future__ import annotations

import logging

from hostprep.core.errors import ProvisionError
from hostprep.core.models.report import StepResult
from hostprep.core.services.steps.base import StepContext

logger = logging.getLogger(__name__)


def install_compose(ctx: StepContext) -> StepResult:
    settings = ctx.config.compose
    result = StepResult(name="compose")

    found = ctx.call("docker", "compose_version")
    if found.ok:
        result.version = found.first_line
        logger.info("Docker Compose v2 present: %s", result.version)
        return result

    if ctx.which(settings.classic_binary):
        result.version = ctx.call("docker", "classic_compose_version").first_line
        logger.info("Docker Compose (v1) present: %s", result.version)
        return result

    logger.info("Installing %s (Compose v2)...", settings.plugin_package)
    ctx.install([settings.plugin_package])
    found = ctx.call("docker", "compose_version")
    if found.ok:
        result.version = found.first_line
        result.status = "installed"
        logger.info("Docker Compose v2 installed: %s", result.version)
        return result

    ctx.warn(
        result,
        "Could not install %s. Trying classic %s (v1).",
        settings.plugin_package, settings.classic_package,
    )
    ctx.install([settings.classic_package])
    if ctx.which(settings.classic_binary):
        result.version = ctx.call("docker", "classic_compose_version").first_line
        result.status = "installed"
        logger.info("Docker Compose (v1) installed: %s", result.version)
        return result

    raise ProvisionError(
        "Failed to install Docker Compose. Check your repositories or install manually.",
        step=result.name,
    )
