"""
Mock adapter — scripted stand-in for any adapter.

Operations nobody scripted succeed with the default output. Scripted
receipts are handed out in order; the last one keeps answering.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any

from hostprep.adapters.base import Adapter, ExecutionContext
from hostprep.core.models.action import Action, Receipt


class MockAdapter(Adapter):
    """Answers under ``adapter_name`` and records every action it gets."""

    def __init__(self, adapter_name: str = "mock", available: bool = True, output: str = ""):
        self._name = adapter_name
        self._available = available
        self._output = output
        self._scripts: dict[str, list[Receipt]] = defaultdict(list)
        self.calls: list[Action] = []

    @property
    def name(self) -> str:
        return self._name

    def is_available(self) -> bool:
        return self._available

    # ── Scripting ───────────────────────────────────────────────

    def script(self, operation: str, *receipts: Receipt) -> None:
        """Queue receipts for ``operation``."""
        self._scripts[operation].extend(receipts)

    def respond(self, operation: str, output: str = "", **metadata: Any) -> None:
        self.script(operation, Receipt.success(
            adapter=self._name,
            action_id=f"{self._name}.{operation}",
            output=output,
            metadata=metadata,
        ))

    def fail(self, operation: str, error: str = "mock failure") -> None:
        self.script(operation, Receipt.failure(
            adapter=self._name,
            action_id=f"{self._name}.{operation}",
            error=error,
        ))

    def calls_to(self, operation: str) -> int:
        return sum(1 for action in self.calls if action.params.get("operation") == operation)

    def reset(self) -> None:
        self._scripts.clear()
        self.calls.clear()

    # ── Adapter ─────────────────────────────────────────────────

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self.calls.append(context.action)
        queue = self._scripts.get(context.operation)
        if queue:
            return queue.pop(0) if len(queue) > 1 else queue[0].model_copy()
        return Receipt.success(adapter=self._name, action_id=context.action.id, output=self._output)
