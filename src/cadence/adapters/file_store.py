"""File-based task storage adapter."""

import json
import logging
import uuid
from datetime import date
from pathlib import Path

from cadence.core.records import TaskRecord, TaskType, fields_to_row
from cadence.ports.task_store import StoreError

logger = logging.getLogger(__name__)


class FileTaskStore:
    """
    File-based task storage.

    Implements TaskStore protocol. All rows live in one JSON file, in the
    same shape the REST backend returns them.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _read(self) -> list[dict]:
        """Load all rows. A missing file is an empty store."""
        if not self.path.exists():
            return []
        try:
            rows = json.loads(self.path.read_text() or "[]")
        except json.JSONDecodeError as e:
            raise StoreError(f"Corrupt task file {self.path}: {e}") from e
        if not isinstance(rows, list):
            raise StoreError(f"Corrupt task file {self.path}: expected a list of rows")
        return rows

    def _write(self, rows: list[dict]) -> None:
        self.path.write_text(json.dumps(rows, indent=2, ensure_ascii=False))

    def _new_row(self, record: TaskRecord) -> dict:
        row = record.to_row()
        row["id"] = record.id or str(uuid.uuid4())
        return row

    def insert(self, record: TaskRecord) -> TaskRecord:
        rows = self._read()
        row = self._new_row(record)
        rows.append(row)
        self._write(rows)
        return TaskRecord.from_row(row)

    def get(self, task_id: str) -> TaskRecord:
        for row in self._read():
            if row.get("id") == task_id:
                return TaskRecord.from_row(row)
        raise StoreError(f"Task {task_id} not found")

    def update(self, task_id: str, fields: dict) -> TaskRecord:
        rows = self._read()
        for row in rows:
            if row.get("id") == task_id:
                row.update(fields_to_row(fields))
                self._write(rows)
                return TaskRecord.from_row(row)
        raise StoreError(f"Task {task_id} not found")

    def delete(self, task_id: str) -> None:
        rows = self._read()
        remaining = [r for r in rows if r.get("id") != task_id]
        if len(remaining) == len(rows):
            raise StoreError(f"Task {task_id} not found")
        self._write(remaining)

    def bulk_insert(self, records: list[TaskRecord]) -> list[TaskRecord]:
        if not records:
            return []
        rows = self._read()
        new_rows = [self._new_row(r) for r in records]
        rows.extend(new_rows)
        self._write(rows)
        return [TaskRecord.from_row(r) for r in new_rows]

    def bulk_update(self, parent_id: str, fields: dict) -> None:
        rows = self._read()
        patch = fields_to_row(fields)
        for row in rows:
            if row.get("parent_task_id") == parent_id:
                row.update(patch)
        self._write(rows)

    def bulk_delete(self, parent_id: str) -> None:
        rows = self._read()
        self._write([r for r in rows if r.get("parent_task_id") != parent_id])

    def query_by_date_range(self, user_id: str, dates: list[date]) -> list[TaskRecord]:
        wanted = {d.isoformat() for d in dates}
        return [
            TaskRecord.from_row(r)
            for r in self._read()
            if r.get("user_id") == user_id and r.get("scheduled_date") in wanted
        ]

    def query_confirmed(
        self, user_id: str, include_completed: bool = False
    ) -> list[TaskRecord]:
        return [
            TaskRecord.from_row(r)
            for r in self._read()
            if r.get("user_id") == user_id
            and r.get("scheduled")
            and (include_completed or not r.get("completed"))
        ]

    def delete_habits_titled(self, user_id: str, title: str) -> None:
        rows = self._read()
        remaining = [
            r
            for r in rows
            if not (
                r.get("user_id") == user_id
                and r.get("type") == TaskType.HABIT
                and r.get("title") == title
            )
        ]
        logger.debug(f"Deleted {len(rows) - len(remaining)} habit rows titled {title!r}")
        self._write(remaining)
