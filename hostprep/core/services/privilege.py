"""
Privilege check — decide how root-only commands get run.

Runs before anything is installed: a host where we are neither root
nor able to ``sudo`` fails here, with nothing touched.
"""

from __future__ import annotations

import logging

from hostprep.adapters.shell.command import CommandRunner
from hostprep.core.errors import ProvisionError
from hostprep.core.models.host import HostEnvironment

logger = logging.getLogger(__name__)

SUDO = "sudo"


def resolve_privilege(host: HostEnvironment, runner: CommandRunner) -> list[str]:
    """Return the privilege-escalation prefix for this host.

    Returns:
        ``[]`` when already root, ``["sudo"]`` when sudo is on PATH.

    Raises:
        ProvisionError: Neither root nor sudo is available.
    """
    if host.is_root:
        logger.debug("Running as root, no privilege prefix")
        return []
    if runner.which(SUDO):
        logger.debug("Using %s for privileged commands", SUDO)
        return [SUDO]
    raise ProvisionError(
        "Root or sudo privileges are required. Either run as root or install sudo.",
        step="privilege",
    )
