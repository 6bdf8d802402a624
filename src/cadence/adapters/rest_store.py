"""PostgREST adapter - HTTP client for a Supabase-style tasks table."""

import logging
from datetime import date

import requests

from cadence.config import Config, load_config
from cadence.core.records import TaskRecord, TaskType, fields_to_row
from cadence.ports.task_store import StoreError

logger = logging.getLogger(__name__)


class RestTaskStore:
    """
    PostgREST task store.

    Implements TaskStore protocol. Filters use PostgREST operators
    (`id=eq.<id>`, `scheduled_date=in.(...)`). No business logic - just I/O.
    """

    def __init__(self, config: Config | None = None, session: requests.Session | None = None):
        self.config = config or load_config()
        if not self.config.rest_url or not self.config.rest_api_key:
            raise StoreError("Missing REST_URL or REST_API_KEY. Add them to config/cadence.conf")
        self.endpoint = f"{self.config.rest_url.rstrip('/')}/rest/v1/{self.config.rest_table}"
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "apikey": self.config.rest_api_key,
                "Authorization": f"Bearer {self.config.rest_api_key}",
                "Content-Type": "application/json",
                "Prefer": "return=representation",
            }
        )

    def _request(self, method: str, params: dict, payload: dict | list | None = None) -> list[dict]:
        """Make a request against the table. Returns the affected rows."""
        logger.debug(f"{method} {self.endpoint} {params}")
        try:
            resp = self._session.request(
                method,
                self.endpoint,
                params=params,
                json=payload,
                timeout=self.config.request_timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            raise StoreError(f"{method} {self.config.rest_table} failed: {e}") from e

        if not resp.content:
            return []
        return resp.json()

    def insert(self, record: TaskRecord) -> TaskRecord:
        rows = self._request("POST", {}, record.to_row())
        if not rows:
            raise StoreError(f"Insert of {record.title!r} returned no row")
        return TaskRecord.from_row(rows[0])

    def get(self, task_id: str) -> TaskRecord:
        rows = self._request("GET", {"id": f"eq.{task_id}", "select": "*"})
        if not rows:
            raise StoreError(f"Task {task_id} not found")
        return TaskRecord.from_row(rows[0])

    def update(self, task_id: str, fields: dict) -> TaskRecord:
        rows = self._request("PATCH", {"id": f"eq.{task_id}"}, fields_to_row(fields))
        if not rows:
            raise StoreError(f"Task {task_id} not found")
        return TaskRecord.from_row(rows[0])

    def delete(self, task_id: str) -> None:
        self._request("DELETE", {"id": f"eq.{task_id}"})

    def bulk_insert(self, records: list[TaskRecord]) -> list[TaskRecord]:
        if not records:
            return []
        rows = self._request("POST", {}, [r.to_row() for r in records])
        return [TaskRecord.from_row(r) for r in rows]

    def bulk_update(self, parent_id: str, fields: dict) -> None:
        self._request("PATCH", {"parent_task_id": f"eq.{parent_id}"}, fields_to_row(fields))

    def bulk_delete(self, parent_id: str) -> None:
        self._request("DELETE", {"parent_task_id": f"eq.{parent_id}"})

    def query_by_date_range(self, user_id: str, dates: list[date]) -> list[TaskRecord]:
        if not dates:
            return []
        in_list = ",".join(d.isoformat() for d in dates)
        rows = self._request(
            "GET",
            {
                "user_id": f"eq.{user_id}",
                "scheduled_date": f"in.({in_list})",
                "select": "*",
            },
        )
        return [TaskRecord.from_row(r) for r in rows]

    def query_confirmed(
        self, user_id: str, include_completed: bool = False
    ) -> list[TaskRecord]:
        params = {"user_id": f"eq.{user_id}", "scheduled": "eq.true", "select": "*"}
        if not include_completed:
            params["completed"] = "eq.false"
        return [TaskRecord.from_row(r) for r in self._request("GET", params)]

    def delete_habits_titled(self, user_id: str, title: str) -> None:
        self._request(
            "DELETE",
            {
                "user_id": f"eq.{user_id}",
                "type": f"eq.{TaskType.HABIT.value}",
                "title": f"eq.{title}",
            },
        )
