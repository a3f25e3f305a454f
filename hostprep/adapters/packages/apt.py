"""
APT adapter — Debian/Ubuntu package manager operations.

Action params:
    operation (str): One of 'update', 'install', 'policy'.
    packages (list[str]): Package names (for 'install').
    package (str): Package name (for 'policy').

The package index is refreshed at most once per adapter instance;
'install' triggers the refresh on first use.
"""

from __future__ import annotations

import logging

from hostprep.adapters.base import CommandAdapter, ExecutionContext
from hostprep.adapters.shell.command import CommandRunner
from hostprep.core.models.action import Receipt

logger = logging.getLogger(__name__)

_INSTALL_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


class AptAdapter(CommandAdapter):
    """apt-get / apt-cache through the privilege prefix."""

    operations = frozenset({"update", "install", "policy"})
    required = {"install": ("packages",), "policy": ("package",)}

    def __init__(self, runner: CommandRunner):
        super().__init__(runner)
        self._refreshed = False

    @property
    def name(self) -> str:
        return "apt"

    def is_available(self) -> bool:
        return self.runner.which("apt-get") is not None

    # ── Operations ──────────────────────────────────────────────

    def _update(self, ctx: ExecutionContext) -> Receipt:
        if self._refreshed:
            return Receipt.skip(
                adapter=self.name,
                action_id=ctx.action.id,
                reason="Package index already refreshed",
            )
        logger.info("Refreshing package index (apt update)...")
        receipt = self._exec(ctx, ["apt-get", "update", "-y"], privileged=True)
        if receipt.ok:
            self._refreshed = True
        return receipt

    def _install(self, ctx: ExecutionContext) -> Receipt:
        packages = list(ctx.params["packages"])
        refresh = self._update(ctx)
        if refresh.failed:
            return Receipt.failure(
                adapter=self.name,
                action_id=ctx.action.id,
                error=f"apt-get update failed: {refresh.error}",
                metadata={"packages": packages},
            )
        logger.info("Installing packages: %s", " ".join(packages))
        return self._exec(
            ctx,
            ["apt-get", "install", "-y", "--no-install-recommends", *packages],
            privileged=True,
            env_overrides=_INSTALL_ENV,
            packages=packages,
        )

    def _policy(self, ctx: ExecutionContext) -> Receipt:
        package = ctx.params["package"]
        result = self.runner.run(["apt-cache", "policy", package])
        # apt-cache prints an "Installed:" line for every package it knows,
        # "(none)" included; unknown packages print nothing.
        known = result.ok and "Installed" in result.stdout
        return self._receipt(ctx, result, package=package, known=known)
