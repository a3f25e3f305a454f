"""
Provision use case — wire runner, adapters and steps for one run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from hostprep.adapters.containers.docker import DockerAdapter
from hostprep.adapters.languages.python import PythonAdapter
from hostprep.adapters.packages.apt import AptAdapter
from hostprep.adapters.registry import AdapterRegistry
from hostprep.adapters.shell.command import CommandRunner
from hostprep.adapters.shell.filesystem import FilesystemAdapter
from hostprep.adapters.shell.system import SystemAdapter
from hostprep.core.engine.executor import collect_summary, run_provisioning
from hostprep.core.models.config import ProvisionConfig
from hostprep.core.models.host import HostEnvironment
from hostprep.core.models.report import ProvisionReport, VersionSummary
from hostprep.core.services.privilege import resolve_privilege
from hostprep.core.services.steps import StepContext

logger = logging.getLogger(__name__)


@dataclass
class ProvisionOutcome:
    """Report of a completed run plus the final version summary."""

    report: ProvisionReport = field(default_factory=ProvisionReport)
    summary: VersionSummary = field(default_factory=VersionSummary)

    def to_dict(self) -> dict:
        return {"report": self.report.to_dict(), "summary": self.summary.to_dict()}


def build_registry(runner: CommandRunner, config: ProvisionConfig) -> AdapterRegistry:
    """Register one adapter per external collaborator."""
    registry = AdapterRegistry()
    registry.register(AptAdapter(runner))
    registry.register(DockerAdapter(runner, classic_binary=config.compose.classic_binary))
    registry.register(PythonAdapter(
        runner,
        interpreter=config.python.interpreter,
        pip_command=config.python.pip_command,
    ))
    registry.register(SystemAdapter(runner))
    registry.register(FilesystemAdapter())
    return registry


def provision(
    config: ProvisionConfig,
    host: HostEnvironment,
    runner: CommandRunner | None = None,
) -> ProvisionOutcome:
    """Run the privilege check, every step, then the version summary.

    Raises:
        ProvisionError: On the first unrecoverable failure.
    """
    if runner is None:
        runner = CommandRunner(timeout=config.command_timeout)
    runner.privilege_prefix = resolve_privilege(host, runner)

    registry = build_registry(runner, config)
    ctx = StepContext(registry=registry, runner=runner, config=config, host=host)
    report = run_provisioning(ctx)
    return ProvisionOutcome(report=report, summary=collect_summary(registry, config))


def summarize(config: ProvisionConfig, runner: CommandRunner | None = None) -> VersionSummary:
    """Version summary only; installs nothing and needs no privileges."""
    if runner is None:
        runner = CommandRunner(timeout=config.command_timeout)
    return collect_summary(build_registry(runner, config), config)
