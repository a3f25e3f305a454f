"""
Adapter registry — the one dispatch point between steps and tools.

Steps never hold adapters; they name an adapter and an operation and
get a Receipt back. Lookup, validation, availability and execution
failures all come back as failed receipts.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from hostprep.adapters.base import Adapter, ExecutionContext
from hostprep.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Adapters by name, plus the dispatcher that runs actions on them."""

    def __init__(self, adapters: list[Adapter] | None = None) -> None:
        self._adapters: dict[str, Adapter] = {}
        for adapter in adapters or ():
            self.register(adapter)

    def __contains__(self, name: str) -> bool:
        return name in self._adapters

    @property
    def names(self) -> list[str]:
        return list(self._adapters)

    def register(self, adapter: Adapter) -> None:
        if adapter.name in self._adapters:
            logger.warning("Replacing adapter %s", adapter.name)
        self._adapters[adapter.name] = adapter

    def get(self, name: str) -> Adapter | None:
        return self._adapters.get(name)

    def call(self, adapter: str, operation: str, **params: Any) -> Receipt:
        """Run one operation: ``registry.call("apt", "install", packages=[...])``."""
        return self.execute_action(Action.for_operation(adapter, operation, **params))

    def execute_action(self, action: Action) -> Receipt:
        """Validate, check availability, then execute ``action``.

        Always returns a Receipt.
        """
        started = time.monotonic()
        adapter = self._adapters.get(action.adapter)
        if adapter is None:
            return _failed(action, f"No adapter registered for '{action.adapter}'")

        context = ExecutionContext(action=action, params=action.params)
        try:
            valid, reason = adapter.validate(context)
        except Exception as e:
            return _failed(action, f"Validation error: {e}")
        if not valid:
            return _failed(action, f"Validation failed: {reason}")

        if not adapter.is_available():
            return _failed(action, f"Adapter '{action.adapter}' is not available on this host")

        try:
            receipt = adapter.execute(context)
        except Exception as e:
            logger.error("Adapter %s raised on %s: %s", action.adapter, action.id, e)
            receipt = _failed(action, f"Unexpected error: {e}")

        receipt.duration_ms = int((time.monotonic() - started) * 1000)
        logger.debug("%s -> %s (%d ms)", action.id, receipt.status, receipt.duration_ms)
        return receipt


def _failed(action: Action, error: str) -> Receipt:
    return Receipt.failure(adapter=action.adapter, action_id=action.id, error=error)
