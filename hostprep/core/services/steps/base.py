"""
Step context — what every provisioning step works with.

Steps are plain functions ``(StepContext) -> StepResult``. They read
receipts and decide; a fatal outcome raises ``ProvisionError``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from hostprep.adapters.registry import AdapterRegistry
from hostprep.adapters.shell.command import CommandRunner
from hostprep.core.errors import ProvisionError
from hostprep.core.models.action import Receipt
from hostprep.core.models.config import ProvisionConfig
from hostprep.core.models.host import HostEnvironment
from hostprep.core.models.report import ProvisionReport, StepResult

logger = logging.getLogger(__name__)


@dataclass
class StepContext:
    """Shared state for one provisioning run."""

    registry: AdapterRegistry
    runner: CommandRunner
    config: ProvisionConfig
    host: HostEnvironment
    report: ProvisionReport = field(default_factory=ProvisionReport)

    def call(self, adapter: str, operation: str, **params: Any) -> Receipt:
        return self.registry.call(adapter, operation, **params)

    def which(self, name: str) -> bool:
        return self.runner.which(name) is not None

    # ── Package installs ────────────────────────────────────────

    def install(self, packages: Sequence[str]) -> Receipt:
        """Attempt an install; the caller decides what a failure means."""
        receipt = self.call("apt", "install", packages=list(packages))
        if receipt.failed:
            logger.debug("Install of %s failed: %s", " ".join(packages), receipt.error)
        return receipt

    def require_install(self, packages: Sequence[str], step: str | None = None) -> Receipt:
        """Install or raise: there is no fallback for these packages."""
        receipt = self.install(packages)
        if receipt.failed:
            raise ProvisionError(
                f"Failed to install {' '.join(packages)}: {receipt.error}",
                step=step,
            )
        return receipt

    # ── Severity helpers ────────────────────────────────────────

    def warn(self, result: StepResult, message: str, *args: Any) -> None:
        """Log a recoverable problem and keep it on the step result."""
        logger.warning(message, *args)
        result.warnings.append(message % args if args else message)

    def best_effort(self, receipt: Receipt, what: str, result: StepResult) -> Receipt:
        """Tolerate a failed side operation unless the run is strict."""
        if receipt.failed:
            if self.config.strict:
                raise ProvisionError(f"Could not {what}: {receipt.error}", step=result.name)
            self.warn(result, "Could not %s (continuing): %s", what, receipt.error)
        return receipt


Step = Callable[[StepContext], StepResult]
