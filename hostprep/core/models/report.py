"""
Run report — what each step found or did.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

StepStatus = Literal["present", "installed", "skipped"]


@dataclass
class StepResult:
    """Outcome of one provisioning step (fatal outcomes raise instead)."""

    name: str
    status: StepStatus = "present"
    version: str | None = None
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "status": self.status,
            "version": self.version,
            "warnings": self.warnings,
        }


@dataclass
class ProvisionReport:
    """All step results of a run, in execution order."""

    steps: list[StepResult] = field(default_factory=list)
    group_changed: bool = False
    profile_updated: bool = False

    def add(self, result: StepResult) -> None:
        self.steps.append(result)

    @property
    def installed(self) -> list[str]:
        return [s.name for s in self.steps if s.status == "installed"]

    @property
    def warnings(self) -> list[str]:
        return [w for s in self.steps for w in s.warnings]

    def to_dict(self) -> dict:
        return {
            "steps": [s.to_dict() for s in self.steps],
            "installed": self.installed,
            "warnings": self.warnings,
            "group_changed": self.group_changed,
            "profile_updated": self.profile_updated,
        }


@dataclass
class VersionSummary:
    """Detected version line per tool; ``None`` means not found."""

    entries: dict[str, str | None] = field(default_factory=dict)

    NOT_FOUND = "not found"

    def lines(self) -> list[tuple[str, str]]:
        return [(label, value or self.NOT_FOUND) for label, value in self.entries.items()]

    def to_dict(self) -> dict:
        return dict(self.entries)
