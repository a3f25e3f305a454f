"""
Framework step — Django into the user site with pip, and
``~/.local/bin`` on PATH through the shell profile.

The default index is tried first; on failure pip is pointed at
PyPI explicitly with the cache disabled (the fallback source).
"""

from __future__ import annotations

import logging

from hostprep.core.errors import ProvisionError
from hostprep.core.models.report import StepResult
from hostprep.core.services.steps.base import StepContext

logger = logging.getLogger(__name__)


def install_framework(ctx: StepContext) -> StepResult:
    fw = ctx.config.framework
    result = StepResult(name="framework")

    check = ctx.call("python", "stdlib_check")
    if check.failed or check.metadata.get("shadowed"):
        ctx.warn(
            result,
            "Detected an 'importlib' without 'util'; a third-party package named "
            "'importlib' may be shadowing the stdlib. Consider 'pip3 uninstall -y importlib' "
            "or removing ./importlib.py from your project.",
        )

    found = ctx.call("python", "module_version", module=fw.module)
    if found.ok:
        result.version = found.first_line
        logger.info("%s already installed (user/site): v%s", fw.label, result.version)
    else:
        logger.info("Installing %s via pip into ~/.local...", fw.label)
        receipt = ctx.call("python", "pip_install", packages=[fw.package], no_input=True)
        if receipt.failed:
            ctx.warn(result, "Standard installation failed. Trying with explicit PyPI index and no cache.")
            receipt = ctx.call(
                "python",
                "pip_install",
                packages=[fw.package],
                no_cache=True,
                index_url=fw.fallback_index,
                trusted_hosts=fw.trusted_hosts,
            )
            if receipt.failed:
                raise ProvisionError(f"Failed to install {fw.label}: {receipt.error}", step=result.name)

        found = ctx.call("python", "module_version", module=fw.module)
        if found.failed:
            raise ProvisionError(
                f"{fw.label} was installed but is not importable: {found.error}",
                step=result.name,
            )
        result.version = found.first_line
        result.status = "installed"
        logger.info("%s installed: %s", fw.label, result.version)

    ensure_user_bin_on_path(ctx, result)
    return result


def ensure_user_bin_on_path(ctx: StepContext, result: StepResult) -> None:
    """Append the PATH export to the profile when ``~/.local/bin`` is missing."""
    profile = ctx.config.profile
    user_bin = ctx.host.expand(profile.user_bin).rstrip("/")
    if user_bin in ctx.host.path_entries:
        logger.debug("%s already on PATH", user_bin)
        return

    profile_file = ctx.host.expand(profile.file)
    line = profile.export_line
    current = ctx.call("filesystem", "read", path=profile_file)
    if current.failed and not current.metadata.get("missing"):
        raise ProvisionError(f"Could not read {profile.file}: {current.error}", step=result.name)
    existing = current.output if current.ok else ""
    if line in existing.splitlines():
        logger.info("%s already exports %s (new shells will pick it up)", profile.file, profile.user_bin)
        return

    ctx.warn(result, "Adding %s to PATH in %s", profile.user_bin, profile.file)
    content = line + "\n"
    if existing and not existing.endswith("\n"):
        content = "\n" + content
    appended = ctx.call("filesystem", "append", path=profile_file, content=content)
    if appended.failed:
        raise ProvisionError(f"Could not update {profile.file}: {appended.error}", step=result.name)
    ctx.report.profile_updated = True
    ctx.warn(result, "Restart your terminal or run: source %s", profile.file)
