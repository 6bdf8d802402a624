"""Materialized occurrences of recurring records - pure planning, no I/O.

A confirmed recurring record (the parent) gets a bounded window of child
rows, one per future occurrence. Editing the parent either regenerates
that window or patches the non-schedule fields onto the existing children.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum

from dateutil.relativedelta import relativedelta

from cadence.core.records import Frequency, Priority, TaskRecord, as_date

# Occurrences generated ahead of the origin, per frequency
DEFAULT_HORIZONS = {
    Frequency.DAILY.value: 30,
    Frequency.WEEKLY.value: 12,
    Frequency.MONTHLY.value: 6,
}

# Changing any of these invalidates the existing children
SCHEDULE_FIELDS = ("scheduled_date", "frequency", "repeat_days", "start_time")

# Copied onto existing children when the schedule is unchanged
PROPAGATED_FIELDS = (
    "title",
    "details",
    "type",
    "color",
    "notification_time",
    "duration_minutes",
    "location",
    "frequency",
)


def _step(frequency: str, n: int) -> relativedelta | None:
    match frequency:
        case Frequency.DAILY:
            return relativedelta(days=n)
        case Frequency.WEEKLY:
            return relativedelta(weeks=n)
        case Frequency.MONTHLY:
            # relativedelta clamps to the end of shorter months
            return relativedelta(months=n)
        case _:
            return None


def future_dates(
    origin: date, frequency: str, horizons: dict[str, int] | None = None
) -> list[date]:
    """Occurrence dates after `origin`, one period apart, within the horizon."""
    horizons = horizons or DEFAULT_HORIZONS
    count = horizons.get(frequency, 0)
    if count <= 0 or _step(frequency, 1) is None:
        return []
    return [origin + _step(frequency, i + 1) for i in range(count)]


def build_instances(
    parent: TaskRecord, horizons: dict[str, int] | None = None
) -> list[TaskRecord]:
    """Child rows for a saved recurring parent. Nothing for once/custom."""
    if parent.id is None:
        raise ValueError(f"Task {parent.title!r} must be saved before generating instances")
    origin = as_date(parent.scheduled_date)
    if origin is None:
        return []

    return [
        replace(
            parent,
            id=None,
            scheduled_date=day,
            repeat_days=None,
            priority=parent.priority or Priority.MEDIUM.value,
            parent_task_id=parent.id,
            inbox_only=False,
            completed=False,
        )
        for day in future_dates(origin, parent.frequency, horizons)
    ]


class EditAction(Enum):
    REGENERATE = "regenerate"
    PROPAGATE = "propagate"
    SAVE_ONLY = "save_only"


@dataclass
class EditPlan:
    """What saving an edit does to a record's children."""

    action: EditAction
    delete_children: bool = False
    instances: list[TaskRecord] = field(default_factory=list)
    fields: dict = field(default_factory=dict)


def schedule_changed(previous: TaskRecord, updated: TaskRecord) -> bool:
    return any(getattr(previous, f) != getattr(updated, f) for f in SCHEDULE_FIELDS)


def propagated_fields(record: TaskRecord) -> dict:
    return {name: getattr(record, name) for name in PROPAGATED_FIELDS}


def plan_edit(
    previous: TaskRecord, updated: TaskRecord, horizons: dict[str, int] | None = None
) -> EditPlan:
    """
    Decide how an edit reaches the children.

    A confirmed recurring record whose schedule is untouched only has its
    display fields patched onto the children. Confirming an inbox record,
    or saving a recurring one with a new schedule, regenerates the window:
    old children are deleted first when the record was already confirmed,
    and new ones are built only if the result is confirmed and recurring.

    Instances and one-off records have no children: only the row itself
    is saved.
    """
    if updated.is_instance:
        return EditPlan(EditAction.SAVE_ONLY)

    was_confirmed = not previous.inbox_only
    now_confirmed = not updated.inbox_only
    changed = schedule_changed(previous, updated)

    if was_confirmed and now_confirmed and updated.is_recurring and not changed:
        return EditPlan(EditAction.PROPAGATE, fields=propagated_fields(updated))

    if (
        (not was_confirmed and now_confirmed)
        or updated.is_recurring
        or (previous.is_recurring and changed)
    ):
        instances = []
        if now_confirmed and updated.is_recurring:
            instances = build_instances(updated, horizons)
        return EditPlan(
            EditAction.REGENERATE,
            delete_children=was_confirmed,
            instances=instances,
        )

    return EditPlan(EditAction.SAVE_ONLY)
