"""Recurrence rules - pure functions, no I/O dependencies."""

from datetime import date, datetime, timedelta

from cadence.core.records import Frequency, Priority, TaskRecord, TaskType, as_date, js_weekday


def is_date_in_schedule(
    day: date,
    scheduled_date: date | datetime | str | None,
    frequency: str,
    repeat_days: list[int] | None = None,
) -> bool:
    """
    Does a record with this origin and frequency occur on `day`?

    daily: every day from the origin on
    once / custom: the origin only
    weekly: the listed weekdays (0 = Sunday) from the origin on, or the
        origin's weekday when no days are listed
    monthly: the origin's day of month, from the origin on

    Only the calendar date of `day` counts; a time of day is ignored.
    """
    day = as_date(day)
    origin = as_date(scheduled_date)
    if day is None or origin is None:
        return False

    match frequency:
        case Frequency.DAILY:
            return day >= origin
        case Frequency.ONCE | Frequency.CUSTOM:
            return day == origin
        case Frequency.WEEKLY if repeat_days:
            return js_weekday(day) in repeat_days and day >= origin
        case Frequency.WEEKLY:
            return day.weekday() == origin.weekday() and day >= origin
        case Frequency.MONTHLY:
            return day.day == origin.day and day >= origin
        case _:
            return False


def should_show_habit_on_date(record: TaskRecord, day: date) -> bool:
    """
    Habit visibility, driven by priority.

    From the origin on, a high-priority habit shows every day, a medium one
    on the origin's weekday and a low one on the origin's day of month.
    """
    if record.type != TaskType.HABIT or not record.priority:
        return False
    day = as_date(day)
    origin = as_date(record.scheduled_date)
    if day is None or origin is None:
        return False

    if day < origin:
        return False
    if day == origin:
        return True

    match record.priority:
        case Priority.HIGH:
            return True
        case Priority.MEDIUM:
            return day.weekday() == origin.weekday()
        case Priority.LOW:
            return day.day == origin.day
        case _:
            return False


def dedupe_habits(records: list[TaskRecord]) -> list[TaskRecord]:
    """
    One record per (title, start time): the one with the latest origin.

    Order of first appearance is kept; equal origins keep the first seen.
    """
    kept: dict[tuple[str, str], TaskRecord] = {}
    for record in records:
        key = record.dedupe_key()
        current = kept.get(key)
        if current is None or _origin(record) > _origin(current):
            kept[key] = record
    return list(kept.values())


def _origin(record: TaskRecord) -> date:
    return as_date(record.scheduled_date) or date.min


def visible_week(anchor: date) -> list[date]:
    """The seven days of the Sunday-start week containing `anchor`."""
    sunday = anchor - timedelta(days=js_weekday(anchor))
    return [sunday + timedelta(days=i) for i in range(7)]


def previous_week_start(days: list[date]) -> date | None:
    if not days:
        return None
    return days[0] - timedelta(days=7)


def next_week_start(days: list[date]) -> date | None:
    if not days:
        return None
    return days[-1] + timedelta(days=1)
