"""
Host model — the slice of the process environment provisioning reads.

Built once at startup from ``os.environ`` (``USER``, ``SUDO_USER``,
``PATH``, ``HOME``) plus the effective uid and the kernel name.
Tests construct it directly.
"""

from __future__ import annotations

import os
import platform
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel


class HostEnvironment(BaseModel):
    """Who we run as and what the shell environment looks like."""

    euid: int
    user: str = ""
    sudo_user: str | None = None
    path: str = ""
    home: str = ""
    system: str = "Linux"           # platform.system(): Linux, Darwin, ...

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> HostEnvironment:
        """Snapshot the current process environment."""
        env = os.environ if environ is None else environ
        return cls(
            euid=os.geteuid(),
            user=env.get("USER", ""),
            sudo_user=env.get("SUDO_USER") or None,
            path=env.get("PATH", ""),
            home=env.get("HOME") or str(Path.home()),
            system=platform.system(),
        )

    @property
    def is_root(self) -> bool:
        return self.euid == 0

    @property
    def is_macos(self) -> bool:
        return self.system == "Darwin"

    @property
    def target_user(self) -> str:
        """The human user behind the run (``SUDO_USER`` wins over ``USER``)."""
        return self.sudo_user or self.user

    @property
    def path_entries(self) -> list[str]:
        """``PATH`` split into entries, trailing slashes removed."""
        return [p.rstrip("/") or "/" for p in self.path.split(os.pathsep) if p]

    def expand(self, path: str) -> str:
        """Expand a leading ``~`` against this host's ``HOME``."""
        if path == "~":
            return self.home
        if path.startswith("~/"):
            return str(Path(self.home) / path[2:])
        return path
