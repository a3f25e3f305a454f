"""
Provisioning configuration — which packages make up the toolchain.

Loaded from an optional ``hostprep.yml``. Every key has a default
that reproduces the stock Debian/Ubuntu toolchain, so an absent
file is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

from hostprep.core.domain.version import parse_version


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid")


class DockerSettings(_Section):
    """Container runtime (Docker Engine from the distro repository)."""

    prerequisites: list[str] = Field(
        default_factory=lambda: ["ca-certificates", "curl", "gnupg", "lsb-release"],
    )
    package: str = "docker.io"
    service: str = "docker"
    group: str = "docker"


class ComposeSettings(_Section):
    """Compose v2 plugin, with the classic v1 package as fallback."""

    plugin_package: str = "docker-compose-plugin"
    classic_package: str = "docker-compose"
    classic_binary: str = "docker-compose"


class PythonSettings(_Section):
    """Interpreter, its minimum version, and pip."""

    interpreter: str = "python3"
    minimum: str = "3.9"
    base_packages: list[str] = Field(
        default_factory=lambda: ["python3", "python3-venv", "python3-pip"],
    )
    pip_command: str = "pip3"
    pip_package: str = "python3-pip"
    # Tried in order; the first set that installs wins.
    upgrade_candidates: list[list[str]] = Field(
        default_factory=lambda: [
            ["python3.10", "python3.10-venv", "python3.10-distutils"],
            ["python3.11", "python3.11-venv", "python3.11-distutils"],
        ],
    )
    upgrade_pip: bool = True

    @field_validator("minimum")
    @classmethod
    def _minimum_is_version(cls, value: str) -> str:
        parse_version(value)
        return value


class FrameworkSettings(_Section):
    """Web framework installed per-user with pip."""

    package: str = "django"
    module: str = "django"
    label: str = "Django"
    fallback_index: str = "https://pypi.org/simple"
    trusted_hosts: list[str] = Field(
        default_factory=lambda: ["pypi.org", "files.pythonhosted.org"],
    )


class ProfileSettings(_Section):
    """Shell profile that receives the ``~/.local/bin`` PATH export."""

    file: str = "~/.bashrc"
    user_bin: str = "~/.local/bin"

    @property
    def export_line(self) -> str:
        target = self.user_bin
        if target.startswith("~/"):
            target = "$HOME/" + target[2:]
        return f'export PATH="{target}:$PATH"'


class ProvisionConfig(_Section):
    """Root configuration for a provisioning run."""

    # Make best-effort operations (group, service, pip self-upgrade) fatal.
    strict: bool = False
    command_timeout: PositiveInt | None = None

    docker: DockerSettings = Field(default_factory=DockerSettings)
    compose: ComposeSettings = Field(default_factory=ComposeSettings)
    python: PythonSettings = Field(default_factory=PythonSettings)
    framework: FrameworkSettings = Field(default_factory=FrameworkSettings)
    profile: ProfileSettings = Field(default_factory=ProfileSettings)
