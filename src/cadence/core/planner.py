"""Planner views - which records appear on a given day."""

from datetime import date

from cadence.core.records import TaskRecord, as_date
from cadence.core.schedule import dedupe_habits, is_date_in_schedule, should_show_habit_on_date


def _time_order(record: TaskRecord) -> tuple[bool, str]:
    # Untimed records go last
    return (record.start_time is None, record.start_time or "")


def timeline_for_day(
    records: list[TaskRecord], day: date, only_completed: bool = False
) -> list[TaskRecord]:
    """
    Records visible on `day`, ordered by start time.

    Inbox-only records never show. Habits with a priority follow the habit
    rule and are de-duplicated. A recurring parent gives way to its own
    materialized child on days where one exists.
    """
    confirmed = [r for r in records if not r.inbox_only]
    child_days = {
        (r.parent_task_id, as_date(r.scheduled_date)) for r in confirmed if r.is_instance
    }

    habits = []
    items = []
    for record in confirmed:
        if only_completed and not record.completed:
            continue
        origin = as_date(record.scheduled_date)

        if record.is_habit and record.priority:
            if should_show_habit_on_date(record, day):
                habits.append(record)
        elif record.is_instance or not record.is_recurring:
            if origin == day:
                items.append(record)
        elif (record.id, day) in child_days and day != origin:
            continue
        elif is_date_in_schedule(day, origin, record.frequency, record.repeat_days):
            items.append(record)

    return sorted(dedupe_habits(habits) + items, key=_time_order)


def count_tasks_by_day(records: list[TaskRecord], days: list[date]) -> dict[date, int]:
    """Number of visible items on each day, counted as timeline_for_day shows them."""
    return {day: len(timeline_for_day(records, day)) for day in days}


def filter_tasks(
    records: list[TaskRecord],
    only_completed: bool = False,
    area: str = "all",
    exclude_inbox_only: bool = False,
) -> list[TaskRecord]:
    """Planner filter bar: completion, area (category) and inbox visibility."""
    result = []
    for record in records:
        if only_completed and not record.completed:
            continue
        if exclude_inbox_only and record.inbox_only:
            continue
        if area != "all" and record.category and record.category != area:
            continue
        result.append(record)
    return result
