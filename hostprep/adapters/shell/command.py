"""
Command runner — the single place where ``subprocess.run`` is called.

Every adapter executes through one ``CommandRunner``. The runner owns
the privilege-escalation prefix (``sudo`` or nothing when already root)
so adapters only say *whether* a command needs root.

Calls are blocking and synchronous. A missing binary is a result
with exit code 127, never an exception.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)

EXIT_NOT_FOUND = 127
EXIT_TIMEOUT = 124


@dataclass
class CommandResult:
    """Captured outcome of one command."""

    argv: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    elapsed_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Stripped stdout, or stderr when stdout is empty."""
        return (self.stdout or "").strip() or (self.stderr or "").strip()

    @property
    def error(self) -> str:
        return (self.stderr or "").strip() or f"Command exited with code {self.returncode}"


class CommandRunner:
    """Run external commands, optionally through the privilege prefix.

    Args:
        privilege_prefix: Prepended to privileged commands (``["sudo"]``).
            Empty when the process already runs as root.
        timeout: Seconds before a command is abandoned. ``None`` waits
            indefinitely.
    """

    def __init__(
        self,
        privilege_prefix: Sequence[str] = (),
        timeout: int | None = None,
    ):
        self.privilege_prefix = list(privilege_prefix)
        self.timeout = timeout

    def which(self, name: str) -> str | None:
        """Presence check: resolve ``name`` on ``PATH``."""
        return shutil.which(name)

    def build_command(
        self,
        argv: Sequence[str],
        *,
        privileged: bool = False,
        env_overrides: Mapping[str, str] | None = None,
    ) -> list[str]:
        """Final argv, with the privilege prefix applied.

        ``sudo`` resets the environment, so overrides for a privileged
        command travel as ``env KEY=VALUE`` after the prefix.
        """
        cmd = list(argv)
        if privileged and self.privilege_prefix:
            if env_overrides:
                cmd = ["env", *(f"{k}={v}" for k, v in env_overrides.items()), *cmd]
            cmd = [*self.privilege_prefix, *cmd]
        return cmd

    def run(
        self,
        argv: Sequence[str],
        *,
        privileged: bool = False,
        env_overrides: Mapping[str, str] | None = None,
    ) -> CommandResult:
        """Run a command to completion and capture its output."""
        cmd = self.build_command(argv, privileged=privileged, env_overrides=env_overrides)
        env = None
        if env_overrides:
            env = {**os.environ, **env_overrides}

        logger.debug("Executing: %s", shlex.join(cmd))
        start = time.monotonic()
        result = self._execute(cmd, env)
        result.elapsed_ms = int((time.monotonic() - start) * 1000)

        if not result.ok:
            logger.debug("Exit %d from %s: %s", result.returncode, cmd[0], result.error)
        return result

    def _execute(self, cmd: list[str], env: dict[str, str] | None) -> CommandResult:
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                env=env,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            return CommandResult(cmd, EXIT_NOT_FOUND, stderr=f"{cmd[0]}: command not found")
        except subprocess.TimeoutExpired:
            return CommandResult(cmd, EXIT_TIMEOUT, stderr=f"Command timed out after {self.timeout}s")
        except OSError as e:
            return CommandResult(cmd, EXIT_NOT_FOUND, stderr=f"{cmd[0]}: {e}")
        return CommandResult(cmd, proc.returncode, proc.stdout or "", proc.stderr or "")
