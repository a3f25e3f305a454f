"""
System adapter — service manager and account operations.

Action params:
    operation (str): One of 'service_enable', 'group_exists', 'group_add',
                     'user_groups', 'user_add_group'.
    service (str): systemd unit (for 'service_enable').
    group (str): Group name.
    user (str): User name (for 'user_groups', 'user_add_group').
"""

from __future__ import annotations

from hostprep.adapters.base import CommandAdapter, ExecutionContext
from hostprep.core.models.action import Receipt


class SystemAdapter(CommandAdapter):
    """systemctl, getent, groupadd, id and usermod."""

    operations = frozenset({
        "service_enable", "group_exists", "group_add", "user_groups", "user_add_group",
    })
    required = {
        "service_enable": ("service",),
        "group_exists": ("group",),
        "group_add": ("group",),
        "user_groups": ("user",),
        "user_add_group": ("user", "group"),
    }

    @property
    def name(self) -> str:
        return "system"

    def is_available(self) -> bool:
        return self.runner.which("getent") is not None

    # ── Operations ──────────────────────────────────────────────

    def _service_enable(self, ctx: ExecutionContext) -> Receipt:
        return self._exec(
            ctx, ["systemctl", "enable", "--now", ctx.params["service"]], privileged=True,
        )

    def _group_exists(self, ctx: ExecutionContext) -> Receipt:
        return self._exec(ctx, ["getent", "group", ctx.params["group"]])

    def _group_add(self, ctx: ExecutionContext) -> Receipt:
        return self._exec(ctx, ["groupadd", ctx.params["group"]], privileged=True)

    def _user_groups(self, ctx: ExecutionContext) -> Receipt:
        result = self.runner.run(["id", "-nG", ctx.params["user"]])
        groups = result.stdout.split() if result.ok else []
        return self._receipt(ctx, result, groups=groups)

    def _user_add_group(self, ctx: ExecutionContext) -> Receipt:
        return self._exec(
            ctx,
            ["usermod", "-aG", ctx.params["group"], ctx.params["user"]],
            privileged=True,
        )
