"""Shared workflow layer between the CLI and the task stores.

Each function composes the pure core (interpretation, recurrence, instance
planning) with a TaskStore, and leaves presentation to the caller.
"""

import logging
from dataclasses import dataclass, replace
from datetime import date
from pathlib import Path

from .adapters.file_store import FileTaskStore
from .adapters.rest_store import RestTaskStore
from .config import DATA_DIR, Config
from .core.context import process_text
from .core.instances import EditAction, build_instances, plan_edit
from .core.lexicon import Lexicon
from .core.planner import count_tasks_by_day, timeline_for_day
from .core.records import Frequency, Priority, TaskRecord, as_date, parse_duration
from .core.schedule import visible_week
from .ports.task_store import StoreError, TaskStore

logger = logging.getLogger(__name__)

# Fields written back when an edit is saved
EDITABLE_FIELDS = (
    "title",
    "details",
    "type",
    "scheduled_date",
    "start_time",
    "color",
    "frequency",
    "repeat_days",
    "priority",
    "notification_time",
    "duration_minutes",
    "inbox_only",
    "location",
    "category",
)


class InstanceMaterializationError(StoreError):
    """Raised when a parent was saved but its instances were not."""

    def __init__(self, parent_id: str, instances: list[TaskRecord], cause: Exception):
        self.parent_id = parent_id
        self.instances = instances
        super().__init__(
            f"Saved task {parent_id} but not its {len(instances)} instances: {cause}"
        )


def get_store(config: Config) -> TaskStore:
    """Resolve the task store backend from config."""
    if config.store_backend == "rest":
        return RestTaskStore(config)
    if config.store_backend != "file":
        logger.warning(f"Unknown STORE_BACKEND {config.store_backend!r}, using file store")
    if config.store_file:
        return FileTaskStore(Path(config.store_file).expanduser())
    return FileTaskStore(DATA_DIR / "tasks.json")


def _materialize(store: TaskStore, parent_id: str, instances: list[TaskRecord]) -> list[TaskRecord]:
    if not instances:
        return []
    try:
        saved = store.bulk_insert(instances)
    except StoreError as e:
        raise InstanceMaterializationError(parent_id, instances, e) from e
    logger.info(f"Materialized {len(saved)} instances of task {parent_id}")
    return saved


def retry_instances(store: TaskStore, error: InstanceMaterializationError) -> list[TaskRecord]:
    """Insert the instances a failed save left behind. The parent is not touched."""
    return _materialize(store, error.parent_id, error.instances)


def create_task_from_text(
    store: TaskStore,
    text: str,
    user_id: str,
    frequency: str = Frequency.ONCE.value,
    inbox_only: bool = True,
    priority: str = Priority.MEDIUM.value,
    duration: str | int | None = None,
    today: date | None = None,
    lexicon: Lexicon | None = None,
    horizons: dict[str, int] | None = None,
) -> TaskRecord:
    """Interpret a sentence and save it. Confirmed recurring tasks get their instances."""
    context = process_text(text, today=today, lexicon=lexicon)
    record = TaskRecord(
        title=context.title,
        type=context.type,
        scheduled_date=as_date(context.date),
        start_time=context.time,
        frequency=frequency,
        priority=priority,
        inbox_only=inbox_only,
        duration_minutes=parse_duration(duration) if duration is not None else None,
        color=context.suggested_color,
        location=context.location,
        category=context.category,
        user_id=user_id,
    )
    saved = store.insert(record)
    logger.info(f"Created {saved.type} {saved.id}: {saved.title!r}")

    if not saved.inbox_only and saved.is_recurring:
        _materialize(store, saved.id, build_instances(saved, horizons))
    return saved


def save_task_edit(
    store: TaskStore,
    previous: TaskRecord,
    updated: TaskRecord,
    horizons: dict[str, int] | None = None,
) -> TaskRecord:
    """
    Save an edited record and bring its children in line.

    The record itself is written first. Children of a recurring record are
    then either regenerated (delete, then insert) or patched in bulk. An
    instance or a one-off record is saved on its own. The two steps are not
    atomic: a failed insert raises InstanceMaterializationError, which can be
    passed to retry_instances().
    """
    plan = plan_edit(previous, updated, horizons)
    saved = store.update(updated.id, {name: getattr(updated, name) for name in EDITABLE_FIELDS})

    if plan.action is EditAction.REGENERATE:
        if plan.delete_children:
            store.bulk_delete(saved.id)
        _materialize(store, saved.id, plan.instances)
    elif plan.action is EditAction.PROPAGATE:
        store.bulk_update(saved.id, plan.fields)
    return saved


def confirm_task(
    store: TaskStore,
    task_id: str,
    today: date | None = None,
    horizons: dict[str, int] | None = None,
) -> TaskRecord:
    """Move an inbox record onto the planner, dated today if it has no date."""
    previous = store.get(task_id)
    if not previous.inbox_only:
        logger.info(f"Task {task_id} is already on the planner")
        return previous

    updated = replace(
        previous,
        inbox_only=False,
        scheduled_date=previous.scheduled_date or today or date.today(),
    )
    return save_task_edit(store, previous, updated, horizons)


def delete_task(store: TaskStore, record: TaskRecord) -> None:
    """Delete a record with its instances. Habits take every same-titled habit row along."""
    if not record.is_instance:
        store.bulk_delete(record.id)
    if record.is_habit:
        store.delete_habits_titled(record.user_id, record.title)
    else:
        store.delete(record.id)
    logger.info(f"Deleted {record.type} {record.id}: {record.title!r}")


@dataclass
class DayView:
    """Planner state for one day, edited optimistically."""

    day: date
    records: list[TaskRecord]
    store: TaskStore

    @property
    def timeline(self) -> list[TaskRecord]:
        return timeline_for_day(self.records, self.day)

    def toggle_completion(self, task_id: str) -> TaskRecord:
        """Flip `completed` locally, then in the store. Rolls back if the store fails."""
        index = next((i for i, r in enumerate(self.records) if r.id == task_id), None)
        if index is None:
            raise StoreError(f"Task {task_id} is not loaded for {self.day.isoformat()}")

        original = self.records[index]
        toggled = replace(original, completed=not original.completed)
        self.records[index] = toggled
        try:
            self.store.update(task_id, {"completed": toggled.completed})
        except StoreError:
            logger.warning(f"Rolling back completion of task {task_id}")
            self.records[index] = original
            raise
        return toggled


def load_day(store: TaskStore, user_id: str, day: date) -> DayView:
    """Everything confirmed for the user; the timeline picks what shows on `day`."""
    return DayView(day=day, records=store.query_confirmed(user_id, include_completed=True), store=store)


def load_week_counts(store: TaskStore, user_id: str, anchor: date) -> dict[date, int]:
    """Visible item count for each day of the Sunday-start week around `anchor`."""
    days = visible_week(anchor)
    records = {r.id: r for r in store.query_by_date_range(user_id, days)}
    # Habits and recurring parents can start before the week
    for record in store.query_confirmed(user_id, include_completed=True):
        if record.is_habit or (record.is_recurring and not record.is_instance):
            records.setdefault(record.id, record)
    return count_tasks_by_day(list(records.values()), days)
