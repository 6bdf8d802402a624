"""Functional core - pure business logic with no I/O."""

from .records import TaskRecord, TaskType, Frequency, Priority, parse_duration
from .lexicon import Lexicon, PORTUGUESE, ENGLISH, get_lexicon
from .context import DetectedContext, Dialog, process_text
from .schedule import (
    is_date_in_schedule,
    should_show_habit_on_date,
    dedupe_habits,
    visible_week,
)
from .planner import timeline_for_day, count_tasks_by_day, filter_tasks
from .instances import EditAction, EditPlan, build_instances, plan_edit

__all__ = [
    # Records
    "TaskRecord",
    "TaskType",
    "Frequency",
    "Priority",
    "parse_duration",
    # Interpretation
    "Lexicon",
    "PORTUGUESE",
    "ENGLISH",
    "get_lexicon",
    "DetectedContext",
    "Dialog",
    "process_text",
    # Recurrence
    "is_date_in_schedule",
    "should_show_habit_on_date",
    "dedupe_habits",
    "visible_week",
    "timeline_for_day",
    "count_tasks_by_day",
    "filter_tasks",
    # Instances
    "EditAction",
    "EditPlan",
    "build_instances",
    "plan_edit",
]
