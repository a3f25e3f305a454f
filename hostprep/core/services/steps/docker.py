"""
Container runtime step — Docker Engine from the distro repository.

Also enables the service and puts the invoking user in the
``docker`` group (Linux only). On macOS nothing is installed: Docker
Desktop is the supported route there.
"""

from __future__ import annotations

import logging

from hostprep.core.errors import ProvisionError
from hostprep.core.models.report import StepResult
from hostprep.core.services.steps.base import StepContext

logger = logging.getLogger(__name__)

DOCKER_DESKTOP_URL = "https://www.docker.com/products/docker-desktop/"
DOCKER_ENGINE_DOCS = "https://docs.docker.com/engine/install/"


def install_docker(ctx: StepContext) -> StepResult:
    settings = ctx.config.docker
    result = StepResult(name="docker")

    if ctx.which("docker"):
        result.version = ctx.call("docker", "version").first_line
        logger.info("Docker already installed: %s", result.version)
    elif ctx.host.is_macos:
        ctx.warn(result, "On macOS, install Docker Desktop from %s (recommended).", DOCKER_DESKTOP_URL)
        if not ctx.which("brew"):
            ctx.warn(result, "Homebrew not found. Install from https://brew.sh if you prefer CLI-managed tools.")
        result.status = "skipped"
    else:
        logger.info("Installing Docker Engine (via distro repository)...")
        ctx.require_install(settings.prerequisites, step=result.name)

        policy = ctx.call("apt", "policy", package=settings.package)
        if policy.metadata.get("known"):
            ctx.require_install([settings.package], step=result.name)
        else:
            ctx.best_effort(ctx.install([settings.package]), f"install {settings.package}", result)

        if not ctx.which("docker"):
            raise ProvisionError(
                f"Failed to install {settings.package} from repository. "
                f"Consider the official Docker repo: {DOCKER_ENGINE_DOCS}",
                step=result.name,
            )
        result.version = ctx.call("docker", "version").first_line
        result.status = "installed"
        logger.info("Docker installed: %s", result.version)

    if ctx.host.is_macos:
        logger.info("Skipping docker group configuration on macOS (not needed with Docker Desktop).")
        return result

    if ctx.which("systemctl"):
        ctx.best_effort(
            ctx.call("system", "service_enable", service=settings.service),
            f"enable the {settings.service} service",
            result,
        )
    _configure_group(ctx, result)
    return result


def _configure_group(ctx: StepContext, result: StepResult) -> None:
    group = ctx.config.docker.group
    user = ctx.host.target_user

    if not ctx.call("system", "group_exists", group=group).ok:
        ctx.best_effort(ctx.call("system", "group_add", group=group), f"create group {group}", result)

    if not user:
        ctx.warn(result, "Cannot determine the invoking user (USER unset); skipping %s group setup.", group)
        return

    groups = ctx.call("system", "user_groups", user=user).metadata.get("groups", [])
    if group in groups:
        logger.info("User is already in the %s group", group)
        return

    logger.info("Adding %s to the %s group", user, group)
    ctx.best_effort(
        ctx.call("system", "user_add_group", user=user, group=group),
        f"add {user} to group {group}",
        result,
    )
    ctx.report.group_changed = True
    ctx.warn(result, "Log out/in or run 'newgrp %s' for group changes to take effect.", group)
