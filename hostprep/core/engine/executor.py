"""
Engine executor — runs the provisioning steps in order.

Flow:
    docker → compose → python → framework → summary

Fail-fast: the first ``ProvisionError`` stops the run and propagates.
Whatever the completed steps changed on the host stays changed.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from hostprep.adapters.registry import AdapterRegistry
from hostprep.core.models.config import ProvisionConfig
from hostprep.core.models.report import ProvisionReport, VersionSummary
from hostprep.core.services.steps import ALL_STEPS, Step, StepContext

logger = logging.getLogger(__name__)


def run_provisioning(
    ctx: StepContext,
    steps: Sequence[tuple[str, Step]] = ALL_STEPS,
) -> ProvisionReport:
    """Execute every step against ``ctx`` and return the report."""
    labels = ", ".join(name for name, _ in steps)
    logger.info("Starting installation (%s)...", labels)

    for name, step in steps:
        logger.debug("Step %s", name)
        ctx.report.add(step(ctx))

    logger.info("Done!")
    return ctx.report


def collect_summary(registry: AdapterRegistry, config: ProvisionConfig) -> VersionSummary:
    """Ask every tool for its version once more and record the answers."""

    def version_of(adapter: str, operation: str, **params) -> str | None:
        receipt = registry.call(adapter, operation, **params)
        if not receipt.ok:
            return None
        return receipt.first_line or None

    compose = version_of("docker", "compose_version") or version_of("docker", "classic_compose_version")
    return VersionSummary(entries={
        "Docker": version_of("docker", "version"),
        "Docker Compose": compose,
        "Python3": version_of("python", "full_version"),
        "pip3": version_of("python", "pip_version"),
        config.framework.label: version_of("python", "module_version", module=config.framework.module),
    })
