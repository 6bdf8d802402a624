"""Tests for sentence interpretation and the rewrite rules."""

from datetime import date

import pytest

from cadence.core.context import (
    DetectedContext,
    Dialog,
    distrust,
    gather_signals,
    process_text,
    select_rule,
)
from cadence.core.lexicon import ENGLISH


@pytest.fixture
def today():
    # A Wednesday
    return date(2025, 1, 15)


class TestScenarios:
    def test_family_lunch(self, today):
        ctx = process_text("almoço domingo com os pais da Gardenia", today=today)

        assert ctx.type == "event"
        assert ctx.category == "social"
        assert ctx.suggested_color == "#FF3B30"
        assert "Gardenia" in ctx.title
        assert ctx.time == "12:30"
        assert "Gardenia" in ctx.location
        assert ctx.date == "2025-01-19"
        assert "pais de Gardenia" in ctx.people

    def test_meeting_tomorrow(self, today):
        ctx = process_text("reunião amanhã às 15h", today=today)

        assert ctx.type == "meeting"
        assert ctx.date == "2025-01-16"
        assert ctx.time == "15:00"
        assert ctx.title == "Reunião"
        assert ctx.category == "work"
        assert ctx.icon == "briefcase"

    def test_family_lunch_keeps_explicit_time_and_place(self, today):
        ctx = process_text("almoço às 13h com os pais da Gardenia no Fasano", today=today)

        assert ctx.time == "13:00"
        assert ctx.location == "Fasano"
        assert ctx.title == "Almoço com pais de Gardenia"

    def test_deterministic(self, today):
        text = "jantar com Pedro na sexta às 20h no Bar do Zé"
        assert process_text(text, today=today) == process_text(text, today=today)

    def test_unrecognised_text_falls_back(self, today):
        ctx = process_text("xyz", today=today)

        assert ctx.title == "Xyz"
        assert ctx.type == "task"
        assert ctx.date == "2025-01-15"
        assert ctx.time is None

    def test_title_never_empty_when_text_is_all_fragments(self, today):
        ctx = process_text("amanhã", today=today)
        assert ctx.title == "Amanhã"


class TestTravelRule:
    def test_destination_in_title(self, today):
        ctx = process_text("viagem para Lisboa", today=today)

        assert ctx.title == "Viagem para Lisboa"
        assert ctx.type == "event"
        assert ctx.date == "2025-01-22"
        assert ctx.icon == "plane"

    def test_prefixes_trip_word(self, today):
        ctx = process_text("férias em Paris", today=today)

        assert ctx.title == "Viagem: Férias"
        assert ctx.location == "Paris"
        assert ctx.type == "event"

    def test_english(self, today):
        ctx = process_text("vacation in Rome", today=today, lexicon=ENGLISH)

        assert ctx.title == "Trip: Vacation"
        assert ctx.location == "Rome"


class TestRuleSelection:
    @pytest.mark.parametrize(
        "text,tag",
        [
            ("almoço com os pais da Gardenia", "family_meal"),
            ("viagem para Lisboa", "travel"),
            ("comprar pão", "generic"),
        ],
    )
    def test_first_applicable_rule(self, text, tag, today):
        assert select_rule(gather_signals(text, today)).tag == tag

    def test_family_meal_wins_over_travel(self, today):
        signals = gather_signals("jantar com a família da Ana antes da viagem", today)
        assert select_rule(signals).tag == "family_meal"


class TestConfidenceGate:
    def test_distrust_resets_type_date_and_time(self, today):
        ctx = DetectedContext(title="X", date="2025-02-01", time="10:00", type="meeting")

        result = distrust(ctx, today)

        assert result.type == "task"
        assert result.date == "2025-01-15"
        assert result.time is None
        assert result.title == "X"


class TestQuickAdd:
    def test_returns_type_date_and_time_only(self, today):
        ctx = process_text("reunião amanhã às 15h", today=today, dialog=Dialog.QUICK_ADD)

        assert ctx.title == "reunião amanhã às 15h"
        assert ctx.type == "meeting"
        assert ctx.date == "2025-01-16"
        assert ctx.time == "15:00"
        assert ctx.location is None
        assert ctx.people == []

    def test_no_explicit_date_means_today(self, today):
        ctx = process_text("  comprar pão  ", today=today, dialog=Dialog.QUICK_ADD)

        assert ctx.title == "comprar pão"
        assert ctx.date == "2025-01-15"


class TestEnglish:
    def test_meeting(self, today):
        ctx = process_text("meeting tomorrow at 3pm", today=today, lexicon=ENGLISH)

        assert ctx.type == "meeting"
        assert ctx.date == "2025-01-16"
        assert ctx.time == "15:00"
        assert ctx.title == "Meeting"

    def test_family_dinner(self, today):
        ctx = process_text("dinner with the parents of Anna", today=today, lexicon=ENGLISH)

        assert ctx.type == "event"
        assert ctx.title == "Dinner with parents of Anna"
        assert ctx.time == "20:00"
        assert ctx.location == "Anna's house"
        assert ctx.people == ["parents of Anna"]


class TestToDict:
    def test_json_shape(self, today):
        data = process_text("reunião amanhã às 15h", today=today).to_dict()
        assert set(data) == {
            "title", "date", "time", "type", "location", "people",
            "category", "suggested_color", "icon", "confidence",
        }
