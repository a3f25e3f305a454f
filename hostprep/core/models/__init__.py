"""
Domain models for hostprep.

    from hostprep.core.models import Action, Receipt, HostEnvironment, ProvisionConfig
"""

from hostprep.core.models.action import Action, Receipt
from hostprep.core.models.config import (
    ComposeSettings,
    DockerSettings,
    FrameworkSettings,
    ProfileSettings,
    ProvisionConfig,
    PythonSettings,
)
from hostprep.core.models.host import HostEnvironment
from hostprep.core.models.report import ProvisionReport, StepResult, VersionSummary

__all__ = [
    # action.py
    "Action",
    # config.py
    "ComposeSettings",
    "DockerSettings",
    "FrameworkSettings",
    # host.py
    "HostEnvironment",
    "ProfileSettings",
    "ProvisionConfig",
    # report.py
    "ProvisionReport",
    "PythonSettings",
    "Receipt",
    "StepResult",
    "VersionSummary",
]
