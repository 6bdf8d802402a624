"""Ports - interfaces/protocols for external dependencies."""

from .task_store import TaskStore, StoreError

__all__ = [
    "TaskStore",
    "StoreError",
]
