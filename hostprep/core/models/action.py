"""
Action and Receipt — what a step asks of an adapter, and the answer.

A step never catches tool errors: it reads ``receipt.ok`` /
``receipt.failed`` and decides.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

ReceiptStatus = Literal["ok", "skipped", "failed"]


class Action(BaseModel):
    """One requested adapter operation."""

    id: str                         # "<adapter>.<operation>"
    adapter: str
    params: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def for_operation(cls, adapter: str, operation: str, **params: Any) -> Action:
        return cls(
            id=f"{adapter}.{operation}",
            adapter=adapter,
            params={"operation": operation, **params},
        )


class Receipt(BaseModel):
    """Outcome of one action. Adapters return these instead of raising."""

    adapter: str
    action_id: str
    status: ReceiptStatus = "ok"
    output: str = ""
    error: str | None = None
    duration_ms: int = 0
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @property
    def first_line(self) -> str:
        """First output line, which is what ``--version`` commands report."""
        for line in self.output.splitlines():
            if line.strip():
                return line.strip()
        return ""

    @classmethod
    def success(cls, adapter: str, action_id: str, output: str = "", **kwargs: Any) -> Receipt:
        return cls(adapter=adapter, action_id=action_id, output=output, **kwargs)

    @classmethod
    def failure(cls, adapter: str, action_id: str, error: str, **kwargs: Any) -> Receipt:
        return cls(adapter=adapter, action_id=action_id, status="failed", error=error, **kwargs)

    @classmethod
    def skip(cls, adapter: str, action_id: str, reason: str = "", **kwargs: Any) -> Receipt:
        """Nothing to do; ``reason`` goes in the output."""
        return cls(adapter=adapter, action_id=action_id, status="skipped", output=reason, **kwargs)
