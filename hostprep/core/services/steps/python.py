"""
Language runtime step — Python 3 at a minimum version, plus pip.

An interpreter below the minimum triggers the upgrade candidates
(``python3.10``, then ``python3.11`` by default). If ``python3``
still reports an older version afterwards the run fails.
"""

from __future__ import annotations

import logging

from hostprep.core.domain.version import meets_minimum
from hostprep.core.errors import ProvisionError
from hostprep.core.models.report import StepResult
from hostprep.core.services.steps.base import StepContext

logger = logging.getLogger(__name__)


def ensure_python(ctx: StepContext) -> StepResult:
    settings = ctx.config.python
    interpreter = settings.interpreter
    result = StepResult(name="python")

    if ctx.which(interpreter):
        version = _interpreter_version(ctx, result)
        logger.info("%s found: %s", interpreter, version)
    else:
        logger.info("Installing %s and related packages...", interpreter)
        ctx.require_install(settings.base_packages, step=result.name)
        if not ctx.which(interpreter):
            raise ProvisionError(f"Failed to install {interpreter}.", step=result.name)
        version = _interpreter_version(ctx, result)
        result.status = "installed"
        logger.info("%s installed: %s", interpreter, version)

    if _sufficient(version, settings.minimum, result):
        logger.info("Python version meets requirement (>=%s).", settings.minimum)
    else:
        ctx.warn(result, "Python %s < %s. Attempting to install a newer version...", version, settings.minimum)
        version = _upgrade(ctx, result)
        result.status = "installed"
    result.version = version

    _ensure_pip(ctx, result)
    if settings.upgrade_pip:
        ctx.best_effort(
            ctx.call("python", "pip_install", packages=["pip"], upgrade=True),
            "upgrade pip",
            result,
        )
    return result


def _interpreter_version(ctx: StepContext, result: StepResult) -> str:
    receipt = ctx.call("python", "version")
    version = receipt.metadata.get("version")
    if receipt.failed or not version:
        raise ProvisionError(
            f"Could not determine {ctx.config.python.interpreter} version: {receipt.error}",
            step=result.name,
        )
    return version


def _sufficient(version: str, minimum: str, result: StepResult) -> bool:
    try:
        return meets_minimum(version, minimum)
    except ValueError as e:
        raise ProvisionError(f"Unrecognised Python version {version!r}: {e}", step=result.name) from e


def _upgrade(ctx: StepContext, result: StepResult) -> str:
    settings = ctx.config.python
    for candidate in settings.upgrade_candidates:
        if ctx.install(candidate).ok:
            break
        logger.info("Could not install %s, trying the next candidate", candidate[0])

    version = _interpreter_version(ctx, result)
    logger.info("Current Python version: %s", version)
    if not _sufficient(version, settings.minimum, result):
        raise ProvisionError(
            f"Python is still <{settings.minimum}. "
            "Update your distro or add a repo with a newer Python.",
            step=result.name,
        )
    return version


def _ensure_pip(ctx: StepContext, result: StepResult) -> None:
    settings = ctx.config.python
    if ctx.which(settings.pip_command):
        logger.info("%s found: %s", settings.pip_command, ctx.call("python", "pip_version").first_line)
        return
    logger.info("Installing %s...", settings.pip_command)
    ctx.require_install([settings.pip_package], step=result.name)
