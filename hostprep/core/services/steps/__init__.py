"""Provisioning steps, in execution order."""

from hostprep.core.services.steps.base import Step, StepContext
from hostprep.core.services.steps.compose import install_compose
from hostprep.core.services.steps.docker import install_docker
from hostprep.core.services.steps.framework import install_framework
from hostprep.core.services.steps.python import ensure_python

ALL_STEPS: list[tuple[str, Step]] = [
    ("docker", install_docker),
    ("compose", install_compose),
    ("python", ensure_python),
    ("framework", install_framework),
]

__all__ = [
    "ALL_STEPS",
    "Step",
    "StepContext",
    "ensure_python",
    "install_compose",
    "install_docker",
    "install_framework",
]
