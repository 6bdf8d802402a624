"""Task record model - pure data, no I/O dependencies."""

import logging
from dataclasses import dataclass, fields
from datetime import date, datetime
from enum import Enum

logger = logging.getLogger(__name__)


class TaskType(str, Enum):
    """Kind of planner item."""

    TASK = "task"
    MEETING = "meeting"
    EVENT = "event"
    HABIT = "habit"


class Frequency(str, Enum):
    """How often a record recurs."""

    ONCE = "once"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


class Priority(str, Enum):
    """Importance, and for habits also how widely the habit recurs."""

    HIGH = "high"  # habit: every day after the origin
    MEDIUM = "medium"  # habit: same weekday as the origin
    LOW = "low"  # habit: same day of month as the origin


# Wire column names that differ from the attribute names
_COLUMN_NAMES = {
    "duration_minutes": "duration",
}


def as_date(value) -> date | None:
    """Coerce a date, datetime or ISO string to a date. None if unparseable."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).split("T")[0])
    except ValueError:
        return None


def js_weekday(day: date) -> int:
    """Weekday index with Sunday = 0, as stored in repeat_days."""
    return (day.weekday() + 1) % 7


@dataclass
class TaskRecord:
    """A persisted planner row: task, meeting, event or habit."""

    title: str
    type: str = TaskType.TASK.value
    scheduled_date: date | None = None
    start_time: str | None = None
    duration_minutes: int | None = None
    frequency: str = Frequency.ONCE.value
    repeat_days: list[int] | None = None
    priority: str = Priority.MEDIUM.value
    parent_task_id: str | None = None
    inbox_only: bool = True
    completed: bool = False
    details: str = ""
    color: str | None = None
    notification_time: str | None = None
    location: str | None = None
    category: str | None = None
    user_id: str = ""
    id: str | None = None

    @property
    def is_habit(self) -> bool:
        return self.type == TaskType.HABIT

    @property
    def is_instance(self) -> bool:
        """Materialized child of a recurring parent."""
        return self.parent_task_id is not None

    @property
    def is_recurring(self) -> bool:
        return bool(self.frequency) and self.frequency != Frequency.ONCE

    def dedupe_key(self) -> tuple[str, str]:
        """Key shared by habit rows that represent the same habit."""
        return (self.title, self.start_time or "00:00")

    def to_row(self) -> dict:
        """Serialize to a store row (snake_case columns, ISO dates)."""
        row = {}
        for f in fields(self):
            if f.name == "inbox_only":
                continue
            row[_COLUMN_NAMES.get(f.name, f.name)] = getattr(self, f.name)
        row["scheduled_date"] = (
            self.scheduled_date.isoformat() if self.scheduled_date else None
        )
        row["scheduled"] = not self.inbox_only
        if row["id"] is None:
            del row["id"]
        return row

    @classmethod
    def from_row(cls, data: dict) -> "TaskRecord":
        """Create a TaskRecord from a store row."""
        scheduled_date = as_date(data.get("scheduled_date"))
        if data.get("scheduled_date") and scheduled_date is None:
            logger.warning(
                f"Ignoring unparseable scheduled_date {data['scheduled_date']!r} "
                f"on task {data.get('id')}"
            )

        duration = data.get("duration")
        try:
            duration = int(duration) if duration not in (None, "") else None
        except (TypeError, ValueError):
            duration = None

        if "scheduled" in data:
            inbox_only = not data["scheduled"]
        else:
            inbox_only = data.get("inbox_only", True)

        repeat_days = data.get("repeat_days")
        return cls(
            id=data.get("id"),
            title=data.get("title", ""),
            type=data.get("type") or TaskType.TASK.value,
            scheduled_date=scheduled_date,
            start_time=data.get("start_time"),
            duration_minutes=duration,
            frequency=data.get("frequency") or Frequency.ONCE.value,
            repeat_days=list(repeat_days) if repeat_days else None,
            priority=data.get("priority") or "",
            parent_task_id=data.get("parent_task_id"),
            inbox_only=bool(inbox_only),
            completed=bool(data.get("completed", False)),
            details=data.get("details") or "",
            color=data.get("color"),
            notification_time=data.get("notification_time"),
            location=data.get("location"),
            category=data.get("category"),
            user_id=data.get("user_id", ""),
        )


def fields_to_row(changes: dict) -> dict:
    """Translate a partial {attribute: value} update into store columns."""
    row = {}
    for name, value in changes.items():
        if name == "inbox_only":
            row["scheduled"] = not value
        elif name == "scheduled_date":
            row["scheduled_date"] = value.isoformat() if isinstance(value, date) else value
        else:
            row[_COLUMN_NAMES.get(name, name)] = value
    return row


def parse_duration(duration: str | int | None) -> int:
    """
    Convert a duration label ("15min", "1h30", "90") to minutes.

    Unknown labels fall back to 30 minutes.
    """
    if duration is None or duration == "":
        return 30
    if isinstance(duration, int):
        return duration
    labels = {
        "5min": 5,
        "15min": 15,
        "30min": 30,
        "45min": 45,
        "1h": 60,
        "1h30": 90,
        "2h": 120,
        "custom": 30,
    }
    if duration.isdigit():
        return int(duration)
    return labels.get(duration, 30)

