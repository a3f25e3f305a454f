"""
Adapter base — how steps reach external tools.

An adapter owns one external collaborator (apt, docker, the Python
interpreter, ...). It receives an Action whose ``params["operation"]``
names what to do and answers with a Receipt. Failures are receipts too.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar

from pydantic import BaseModel, Field

from hostprep.adapters.shell.command import CommandResult, CommandRunner
from hostprep.core.models.action import Action, Receipt


class ExecutionContext(BaseModel):
    """The action being executed and its parameters."""

    action: Action
    params: dict[str, Any] = Field(default_factory=dict)

    @property
    def operation(self) -> str:
        return self.params.get("operation", "")


class Adapter(ABC):
    """Interface every adapter implements. ``execute`` must not raise."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry key (``apt``, ``docker``, ``python``, ...)."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the underlying tool is present. Fast, never raises."""

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Return ``(True, "")`` or ``(False, reason)``."""

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Perform the action."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class OperationAdapter(Adapter):
    """Adapter with a fixed table of operations.

    Subclasses list their ``operations`` and implement one
    ``_<operation>(ctx)`` method per entry. ``required`` maps an
    operation to the params it cannot run without.
    """

    operations: ClassVar[frozenset[str]] = frozenset()
    required: ClassVar[Mapping[str, Sequence[str]]] = {}

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        operation = context.operation
        if not operation:
            return False, "Missing required param: 'operation'"
        if operation not in self.operations:
            return False, f"Unknown operation '{operation}'. Valid: {', '.join(sorted(self.operations))}"
        for param in self.required.get(operation, ()):
            if context.params.get(param) in (None, "", [], ()):
                return False, f"Missing required param: '{param}'"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        handler = getattr(self, f"_{context.operation}", None)
        if handler is None:
            return self._fail(context, f"Unknown operation: {context.operation}")
        try:
            return handler(context)
        except Exception as e:
            return self._fail(context, f"{self.name} error: {e}")

    def _fail(self, ctx: ExecutionContext, error: str, **kwargs: Any) -> Receipt:
        return Receipt.failure(adapter=self.name, action_id=ctx.action.id, error=error, **kwargs)


class CommandAdapter(OperationAdapter):
    """Operation adapter whose operations are CLI invocations."""

    def __init__(self, runner: CommandRunner):
        self._runner = runner

    @property
    def runner(self) -> CommandRunner:
        return self._runner

    def _exec(
        self,
        ctx: ExecutionContext,
        argv: Sequence[str],
        *,
        privileged: bool = False,
        env_overrides: Mapping[str, str] | None = None,
        **metadata: Any,
    ) -> Receipt:
        """Run ``argv`` and turn the result into a receipt."""
        result = self._runner.run(argv, privileged=privileged, env_overrides=env_overrides)
        return self._receipt(ctx, result, **metadata)

    def _receipt(self, ctx: ExecutionContext, result: CommandResult, **metadata: Any) -> Receipt:
        meta = {"command": " ".join(result.argv), "return_code": result.returncode, **metadata}
        if result.ok:
            return Receipt.success(
                adapter=self.name,
                action_id=ctx.action.id,
                output=result.output,
                duration_ms=result.elapsed_ms,
                metadata=meta,
            )
        return self._fail(
            ctx,
            result.error,
            output=result.stdout.strip(),
            duration_ms=result.elapsed_ms,
            metadata=meta,
        )
