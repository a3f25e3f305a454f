"""
Error hierarchy — what the CLI turns into a non-zero exit.

Adapters never raise (failures are receipts). Steps raise
``ProvisionError`` when a mandatory install or verification fails
and no fallback is left.
"""

from __future__ import annotations


class HostprepError(Exception):
    """Base class for every error the CLI reports as fatal."""


class ProvisionError(HostprepError):
    """A provisioning step failed and cannot continue."""

    def __init__(self, message: str, step: str | None = None):
        super().__init__(message)
        self.step = step
