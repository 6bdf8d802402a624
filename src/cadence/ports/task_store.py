"""Task store interface."""

from datetime import date
from typing import Protocol

from cadence.core.records import TaskRecord


class StoreError(Exception):
    """Raised when the store cannot complete a read or write."""


class TaskStore(Protocol):
    """Interface for persisting task records in any backend."""

    def insert(self, record: TaskRecord) -> TaskRecord:
        """Save a new record and return it with its assigned id."""
        ...

    def update(self, task_id: str, fields: dict) -> TaskRecord:
        """Patch fields ({attribute: value}) on one record."""
        ...

    def delete(self, task_id: str) -> None:
        ...

    def bulk_insert(self, records: list[TaskRecord]) -> list[TaskRecord]:
        ...

    def bulk_update(self, parent_id: str, fields: dict) -> None:
        """Patch fields on every child of a parent."""
        ...

    def bulk_delete(self, parent_id: str) -> None:
        """Delete every child of a parent."""
        ...

    def query_by_date_range(self, user_id: str, dates: list[date]) -> list[TaskRecord]:
        """Records whose scheduled_date is one of `dates`."""
        ...

    def get(self, task_id: str) -> TaskRecord:
        ...

    def query_confirmed(
        self, user_id: str, include_completed: bool = False
    ) -> list[TaskRecord]:
        """Records confirmed for the planner, any date."""
        ...

    def delete_habits_titled(self, user_id: str, title: str) -> None:
        """Delete every habit row sharing a title."""
        ...
