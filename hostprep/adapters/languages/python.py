"""
Python adapter — interpreter and pip operations.

Detects the interpreter version, installs packages into the user
site (``pip install --user``), and queries module versions.

Action params:
    operation (str): One of 'version', 'full_version', 'pip_version',
                     'pip_install', 'module_version', 'stdlib_check'.
    packages (list[str]): Requirements (for 'pip_install').
    upgrade (bool): Pass ``--upgrade`` (for 'pip_install').
    no_input (bool): Pass ``--no-input`` (for 'pip_install').
    no_cache (bool): Pass ``--no-cache-dir`` (for 'pip_install').
    index_url (str): Alternate index (for 'pip_install').
    trusted_hosts (list[str]): Hosts trusted without TLS checks (for 'pip_install').
    module (str): Module run with ``-m`` (for 'module_version').
"""

from __future__ import annotations

from hostprep.adapters.base import CommandAdapter, ExecutionContext
from hostprep.adapters.shell.command import CommandRunner
from hostprep.core.models.action import Receipt

_MAJOR_MINOR = 'import sys; print("%d.%d" % sys.version_info[:2])'
# A third-party "importlib" on sys.path hides the stdlib one (and its util).
_STDLIB_CHECK = "import importlib; print(hasattr(importlib, 'util'))"


class PythonAdapter(CommandAdapter):
    """Python interpreter toolchain adapter."""

    operations = frozenset({
        "version", "full_version", "pip_version", "pip_install",
        "module_version", "stdlib_check",
    })
    required = {"pip_install": ("packages",), "module_version": ("module",)}

    def __init__(
        self,
        runner: CommandRunner,
        interpreter: str = "python3",
        pip_command: str = "pip3",
    ):
        super().__init__(runner)
        self.interpreter = interpreter
        self.pip_command = pip_command

    @property
    def name(self) -> str:
        return "python"

    def is_available(self) -> bool:
        return any(self.runner.which(tool) for tool in (self.interpreter, self.pip_command))

    # ── Operations ──────────────────────────────────────────────

    def _version(self, ctx: ExecutionContext) -> Receipt:
        result = self.runner.run([self.interpreter, "-c", _MAJOR_MINOR])
        return self._receipt(ctx, result, version=result.stdout.strip() if result.ok else None)

    def _full_version(self, ctx: ExecutionContext) -> Receipt:
        return self._exec(ctx, [self.interpreter, "--version"])

    def _pip_version(self, ctx: ExecutionContext) -> Receipt:
        return self._exec(ctx, [self.pip_command, "--version"])

    def _pip_install(self, ctx: ExecutionContext) -> Receipt:
        params = ctx.params
        cmd = [self.interpreter, "-m", "pip", "install", "--user"]
        if params.get("upgrade"):
            cmd.append("--upgrade")
        if params.get("no_input"):
            cmd.append("--no-input")
        if params.get("no_cache"):
            cmd.append("--no-cache-dir")
        if params.get("index_url"):
            cmd.extend(["-i", params["index_url"]])
        for host in params.get("trusted_hosts", []):
            cmd.extend(["--trusted-host", host])
        cmd.extend(params["packages"])
        return self._exec(ctx, cmd, packages=list(params["packages"]))

    def _module_version(self, ctx: ExecutionContext) -> Receipt:
        return self._exec(ctx, [self.interpreter, "-m", ctx.params["module"], "--version"])

    def _stdlib_check(self, ctx: ExecutionContext) -> Receipt:
        result = self.runner.run([self.interpreter, "-c", _STDLIB_CHECK])
        return self._receipt(ctx, result, shadowed=result.stdout.strip() != "True")
