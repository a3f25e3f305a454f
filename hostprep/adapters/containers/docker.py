"""
Docker adapter — runtime and Compose version queries.

Uses the docker CLI, never the Docker API.

Action params:
    operation (str): One of 'version', 'compose_version',
                     'classic_compose_version'.
"""

from __future__ import annotations

from hostprep.adapters.base import CommandAdapter, ExecutionContext
from hostprep.adapters.shell.command import CommandRunner
from hostprep.core.models.action import Receipt


class DockerAdapter(CommandAdapter):
    """Docker Engine and Docker Compose (v2 plugin and classic v1)."""

    operations = frozenset({"version", "compose_version", "classic_compose_version"})

    def __init__(self, runner: CommandRunner, classic_binary: str = "docker-compose"):
        super().__init__(runner)
        self._classic_binary = classic_binary

    @property
    def name(self) -> str:
        return "docker"

    def is_available(self) -> bool:
        return any(self.runner.which(tool) for tool in ("docker", self._classic_binary))

    # ── Operations ──────────────────────────────────────────────

    def _version(self, ctx: ExecutionContext) -> Receipt:
        return self._exec(ctx, ["docker", "--version"])

    def _compose_version(self, ctx: ExecutionContext) -> Receipt:
        return self._exec(ctx, ["docker", "compose", "version"], flavour="v2")

    def _classic_compose_version(self, ctx: ExecutionContext) -> Receipt:
        return self._exec(ctx, [self._classic_binary, "--version"], flavour="v1")
