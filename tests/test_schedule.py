"""Tests for the schedule predicate and the habit visibility rule."""

from datetime import date, datetime, timedelta

import pytest

from cadence.core.records import TaskRecord
from cadence.core.schedule import (
    dedupe_habits,
    is_date_in_schedule,
    next_week_start,
    previous_week_start,
    should_show_habit_on_date,
    visible_week,
)


@pytest.fixture
def today():
    # A Wednesday
    return date(2025, 1, 15)


def habit(origin: date, priority: str = "medium", title: str = "Meditar", start_time=None):
    return TaskRecord(
        title=title,
        type="habit",
        scheduled_date=origin,
        priority=priority,
        start_time=start_time,
        inbox_only=False,
    )


class TestIsDateInSchedule:
    def test_daily_from_origin_on(self, today):
        for offset in range(0, 60):
            assert is_date_in_schedule(today + timedelta(days=offset), today, "daily")
        assert not is_date_in_schedule(today - timedelta(days=1), today, "daily")

    def test_once_only_on_origin(self, today):
        assert is_date_in_schedule(today, today, "once")
        for offset in (-7, -1, 1, 7, 30):
            assert not is_date_in_schedule(today + timedelta(days=offset), today, "once")

    def test_custom_behaves_like_once(self, today):
        assert is_date_in_schedule(today, today, "custom")
        assert not is_date_in_schedule(today + timedelta(days=7), today, "custom")

    def test_weekly_with_repeat_days(self):
        last_monday = date(2025, 1, 13)
        next_monday = date(2025, 1, 20)
        next_tuesday = date(2025, 1, 21)

        assert is_date_in_schedule(next_monday, last_monday, "weekly", [1])
        assert not is_date_in_schedule(next_tuesday, last_monday, "weekly", [1])

    def test_weekly_repeat_days_not_before_origin(self):
        assert not is_date_in_schedule(date(2025, 1, 6), date(2025, 1, 13), "weekly", [1])

    def test_weekly_several_days(self):
        origin = date(2025, 1, 13)
        # Sunday and Friday
        assert is_date_in_schedule(date(2025, 1, 19), origin, "weekly", [0, 5])
        assert is_date_in_schedule(date(2025, 1, 17), origin, "weekly", [0, 5])
        assert not is_date_in_schedule(date(2025, 1, 18), origin, "weekly", [0, 5])

    def test_weekly_without_repeat_days_uses_origin_weekday(self, today):
        assert is_date_in_schedule(date(2025, 1, 22), today, "weekly")
        assert not is_date_in_schedule(date(2025, 1, 23), today, "weekly")
        assert not is_date_in_schedule(date(2025, 1, 8), today, "weekly")

    def test_monthly_same_day_of_month(self):
        origin = date(2025, 1, 31)
        assert is_date_in_schedule(date(2025, 3, 31), origin, "monthly")
        assert not is_date_in_schedule(date(2025, 2, 28), origin, "monthly")
        assert not is_date_in_schedule(date(2024, 12, 31), origin, "monthly")

    def test_unknown_frequency(self, today):
        assert not is_date_in_schedule(today, today, "yearly")

    def test_origin_formats(self, today):
        assert is_date_in_schedule(today, "2025-01-15", "once")
        assert is_date_in_schedule(today, "2025-01-15T10:30:00", "once")
        assert is_date_in_schedule(today, datetime(2025, 1, 15, 23, 59), "once")

    def test_unparseable_origin(self, today):
        assert not is_date_in_schedule(today, "not-a-date", "daily")
        assert not is_date_in_schedule(today, None, "daily")

    def test_day_with_time_of_day(self, today):
        assert is_date_in_schedule(datetime(2025, 1, 20, 10, 30), today, "daily")
        assert is_date_in_schedule(datetime(2025, 1, 15, 8, 0), today, "once")
        assert not is_date_in_schedule(datetime(2025, 1, 14, 23, 59), today, "daily")

    def test_day_as_string(self, today):
        assert is_date_in_schedule("2025-01-22", today, "weekly")
        assert not is_date_in_schedule("someday", today, "daily")


class TestShouldShowHabitOnDate:
    def test_medium_shows_on_same_weekday(self, today):
        record = habit(today, "medium")
        assert should_show_habit_on_date(record, date(2025, 1, 22))
        assert not should_show_habit_on_date(record, date(2025, 1, 23))

    def test_high_is_monotonic(self, today):
        record = habit(today, "high")
        for offset in range(0, 90):
            assert should_show_habit_on_date(record, today + timedelta(days=offset))

    def test_low_shows_on_same_day_of_month(self, today):
        record = habit(today, "low")
        assert should_show_habit_on_date(record, date(2025, 2, 15))
        assert not should_show_habit_on_date(record, date(2025, 2, 16))

    def test_never_before_origin(self, today):
        for priority in ("high", "medium", "low"):
            assert not should_show_habit_on_date(habit(today, priority), today - timedelta(days=7))

    def test_always_on_origin(self, today):
        assert should_show_habit_on_date(habit(today, "urgent"), today)

    def test_unknown_priority_after_origin(self, today):
        assert not should_show_habit_on_date(habit(today, "urgent"), today + timedelta(days=7))

    def test_day_with_time_of_day(self, today):
        assert should_show_habit_on_date(habit(today, "medium"), datetime(2025, 1, 22, 7, 0))
        assert not should_show_habit_on_date(habit(today, "high"), datetime(2025, 1, 14, 23, 0))

    def test_requires_habit_with_priority_and_origin(self, today):
        assert not should_show_habit_on_date(habit(today, ""), today)
        assert not should_show_habit_on_date(habit(None, "high"), today)
        task = TaskRecord(title="Comprar pão", scheduled_date=today, priority="high")
        assert not should_show_habit_on_date(task, today)


class TestDedupeHabits:
    def test_keeps_latest_origin(self):
        older = habit(date(2025, 1, 10), "high")
        newer = habit(date(2025, 1, 14), "high")
        assert dedupe_habits([older, newer]) == [newer]
        assert dedupe_habits([newer, older]) == [newer]

    def test_untimed_matches_midnight(self):
        a = habit(date(2025, 1, 10), start_time=None)
        b = habit(date(2025, 1, 12), start_time="00:00")
        assert dedupe_habits([a, b]) == [b]

    def test_different_times_are_separate(self):
        a = habit(date(2025, 1, 10), start_time="07:00")
        b = habit(date(2025, 1, 10), start_time="21:00")
        assert dedupe_habits([a, b]) == [a, b]

    def test_tie_keeps_first_seen(self):
        a = habit(date(2025, 1, 10))
        b = habit(date(2025, 1, 10))
        a.id, b.id = "a", "b"
        assert [r.id for r in dedupe_habits([a, b])] == ["a"]


class TestVisibleWeek:
    def test_sunday_start(self, today):
        days = visible_week(today)
        assert days[0] == date(2025, 1, 12)
        assert days[-1] == date(2025, 1, 18)
        assert len(days) == 7

    def test_sunday_anchor_starts_its_own_week(self):
        assert visible_week(date(2025, 1, 19))[0] == date(2025, 1, 19)

    def test_navigation(self, today):
        days = visible_week(today)
        assert previous_week_start(days) == date(2025, 1, 5)
        assert next_week_start(days) == date(2025, 1, 19)

    def test_navigation_without_days(self):
        assert previous_week_start([]) is None
        assert next_week_start([]) is None
