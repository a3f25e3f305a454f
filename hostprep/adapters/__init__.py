"""Adapters — bindings for the external tools provisioning drives.

Public re-exports for convenient access.
"""

from hostprep.adapters.base import Adapter, CommandAdapter, ExecutionContext, OperationAdapter
from hostprep.adapters.mock import MockAdapter
from hostprep.adapters.registry import AdapterRegistry

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "CommandAdapter",
    "ExecutionContext",
    "MockAdapter",
    "OperationAdapter",
]
