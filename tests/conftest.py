"""
Shared test fixtures — a simulated host behind the CommandRunner seam.

``FakeHost`` answers the commands provisioning issues (apt-get,
apt-cache, docker, python3 -m pip, getent, ...) from in-memory state,
applies the effects of successful installs, and records every command.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from hostprep.adapters.shell.command import CommandResult, CommandRunner
from hostprep.core.models.config import ProvisionConfig
from hostprep.core.models.host import HostEnvironment
from hostprep.core.services.steps import StepContext
from hostprep.core.use_cases.provision import build_registry

SYSTEM_TOOLS = {"apt-get", "apt-cache", "systemctl", "getent", "groupadd", "id", "usermod"}

# Binaries that appear once a package is installed.
PROVIDES = {
    "docker.io": {"docker"},
    "docker-compose": {"docker-compose"},
    "python3": {"python3"},
    "python3-pip": {"pip3"},
}


class FakeHost(CommandRunner):
    """In-memory host. Construct it in the state the test needs."""

    def __init__(
        self,
        *,
        tools: set[str] | tuple[str, ...] = (),
        sudo: bool = True,
        python_version: str = "3.11",
        compose_plugin: bool = False,
        django: bool = False,
        known_packages: tuple[str, ...] = ("docker.io",),
        broken_packages: tuple[str, ...] = (),
        python_upgrades: dict[str, str] | None = None,
        groups: tuple[str, ...] = (),
        user_groups: tuple[str, ...] = ("alice",),
        pip_primary_fails: bool = False,
        pip_fallback_fails: bool = False,
        shadowed_importlib: bool = False,
        usermod_fails: bool = False,
    ):
        super().__init__()
        self.binaries = set(SYSTEM_TOOLS) | set(tools)
        if sudo:
            self.binaries.add("sudo")
        self.python_version = python_version
        self.compose_plugin = compose_plugin
        self.django = django
        self.known_packages = set(known_packages)
        self.broken_packages = set(broken_packages)
        self.python_upgrades = dict(python_upgrades or {})
        self.groups = set(groups)
        self.user_group_list = list(user_groups)
        self.pip_primary_fails = pip_primary_fails
        self.pip_fallback_fails = pip_fallback_fails
        self.shadowed_importlib = shadowed_importlib
        self.usermod_fails = usermod_fails
        self.commands: list[list[str]] = []

    # ── Inspection helpers ──────────────────────────────────────

    def argvs(self) -> list[list[str]]:
        """Recorded commands with the privilege prefix and env stripped."""
        return [self._strip(cmd) for cmd in self.commands]

    def ran(self, *prefix: str) -> bool:
        return any(argv[: len(prefix)] == list(prefix) for argv in self.argvs())

    @property
    def apt_installs(self) -> list[list[str]]:
        return [
            [a for a in argv[2:] if not a.startswith("-")]
            for argv in self.argvs()
            if argv[:2] == ["apt-get", "install"]
        ]

    @property
    def pip_installs(self) -> list[list[str]]:
        return [argv for argv in self.argvs() if argv[1:4] == ["-m", "pip", "install"]]

    def pip_installs_of(self, package: str) -> list[list[str]]:
        return [argv for argv in self.pip_installs if argv[-1] == package]

    # ── CommandRunner seam ──────────────────────────────────────

    def which(self, name: str) -> str | None:
        return f"/usr/bin/{name}" if name in self.binaries else None

    def _execute(self, cmd: list[str], env: dict[str, str] | None) -> CommandResult:
        self.commands.append(cmd)
        argv = self._strip(cmd)
        if not argv or argv[0] not in self.binaries:
            return CommandResult(cmd, 127, stderr=f"{argv[0] if argv else ''}: command not found")
        out = self._dispatch(argv)
        if isinstance(out, tuple):
            code, stderr = out
            return CommandResult(cmd, code, stderr=stderr)
        return CommandResult(cmd, 0, stdout=out)

    def _strip(self, cmd: list[str]) -> list[str]:
        argv = list(cmd)
        prefix = self.privilege_prefix
        if prefix and argv[: len(prefix)] == prefix:
            argv = argv[len(prefix):]
        if argv and argv[0] == "env":
            argv = argv[1:]
            while argv and "=" in argv[0]:
                argv = argv[1:]
        return argv

    def _dispatch(self, argv: list[str]) -> str | tuple[int, str]:
        tool, args = argv[0], argv[1:]

        if tool == "apt-get":
            if args[0] == "update":
                return "Reading package lists... Done\n"
            packages = [a for a in args[1:] if not a.startswith("-")]
            broken = [p for p in packages if p in self.broken_packages]
            if broken:
                return 100, f"E: Unable to locate package {broken[0]}"
            for pkg in packages:
                self.binaries |= PROVIDES.get(pkg, set())
                if pkg == "docker-compose-plugin":
                    self.compose_plugin = True
                if pkg in self.python_upgrades:
                    self.python_version = self.python_upgrades[pkg]
            return "Setting up packages...\n"

        if tool == "apt-cache":
            pkg = args[1]
            if pkg in self.known_packages:
                return f"{pkg}:\n  Installed: (none)\n  Candidate: 24.0.7\n"
            return ""

        if tool == "docker":
            if args == ["--version"]:
                return "Docker version 24.0.7, build afdd53b\n"
            if args == ["compose", "version"]:
                if self.compose_plugin:
                    return "Docker Compose version v2.24.0\n"
                return 1, "docker: 'compose' is not a docker command."

        if tool == "docker-compose":
            return "docker-compose version 1.29.2, build unknown\n"

        if tool == "python3":
            return self._python(args)

        if tool == "pip3":
            return f"pip 23.0.1 from /usr/lib/python3/dist-packages/pip (python {self.python_version})\n"

        if tool == "systemctl":
            return ""

        if tool == "getent":
            return f"{args[1]}:x:999:\n" if args[1] in self.groups else (2, "")

        if tool == "groupadd":
            self.groups.add(args[0])
            return ""

        if tool == "id":
            return " ".join(self.user_group_list) + "\n"

        if tool == "usermod":
            if self.usermod_fails:
                return 6, f"usermod: group '{args[1]}' does not exist"
            self.user_group_list.append(args[1])
            return ""

        return 127, f"{tool}: unexpected arguments {args}"

    def _python(self, args: list[str]) -> str | tuple[int, str]:
        if args[0] == "--version":
            return f"Python {self.python_version}.4\n"
        if args[0] == "-c":
            if "importlib" in args[1]:
                return "False\n" if self.shadowed_importlib else "True\n"
            return f"{self.python_version}\n"
        if args[:2] == ["-m", "django"]:
            return "4.2.7\n" if self.django else (1, "/usr/bin/python3: No module named django")
        if args[:3] == ["-m", "pip", "install"]:
            if args[-1] != "django":
                return "Successfully installed pip\n"
            fallback = "-i" in args
            if (fallback and self.pip_fallback_fails) or (not fallback and self.pip_primary_fails):
                return 1, "ERROR: No matching distribution found for django"
            self.django = True
            return "Successfully installed django-4.2.7\n"
        return 127, f"python3: unexpected arguments {args}"


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """A fresh home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def host_env(home: Path) -> HostEnvironment:
    """Unprivileged Linux user whose PATH already has ~/.local/bin."""
    return HostEnvironment(
        euid=1000,
        user="alice",
        path=f"/usr/local/bin:/usr/bin:{home}/.local/bin",
        home=str(home),
        system="Linux",
    )


@pytest.fixture
def config() -> ProvisionConfig:
    return ProvisionConfig()


@pytest.fixture
def bare_host() -> FakeHost:
    """Nothing installed beyond the base system tools and sudo."""
    return FakeHost(python_upgrades={"python3.10": "3.10"})


@pytest.fixture
def provisioned_host() -> FakeHost:
    """Every tool present, user already in the docker group."""
    return FakeHost(
        tools={"docker", "python3", "pip3"},
        compose_plugin=True,
        django=True,
        groups=("docker",),
        user_groups=("alice", "docker"),
    )


@pytest.fixture
def make_ctx(host_env: HostEnvironment, config: ProvisionConfig):
    """Build a StepContext around a runner, as provision() would."""

    def _make(
        runner: CommandRunner,
        host: HostEnvironment | None = None,
        cfg: ProvisionConfig | None = None,
    ) -> StepContext:
        cfg = cfg or config
        return StepContext(
            registry=build_registry(runner, cfg),
            runner=runner,
            config=cfg,
            host=host or host_env,
        )

    return _make


@pytest.fixture
def fake_host():
    """Factory for a FakeHost in a custom state."""
    return FakeHost
