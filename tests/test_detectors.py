"""Tests for the free-text detectors."""

from datetime import date

import pytest

from cadence.core.detectors import (
    DEFAULT_ICON,
    detect_category,
    detect_date,
    detect_icon,
    detect_location,
    detect_people,
    detect_time,
    detect_type,
    match_date,
    suggest_color,
)
from cadence.core.lexicon import ENGLISH, get_lexicon, PORTUGUESE


@pytest.fixture
def today():
    # A Wednesday
    return date(2025, 1, 15)


class TestDetectType:
    def test_meeting_with_date_and_time(self):
        result = detect_type("reunião amanhã às 15h", has_date=True, has_time=True)
        assert result.type == "meeting"
        assert result.scores["meeting"] == 3
        assert result.scores["event"] == 2
        assert result.confidence == pytest.approx(0.5)

    def test_shared_meal_forces_event(self):
        result = detect_type("almoço com pedro")
        assert result.type == "event"
        assert result.confidence == 1.0

    def test_habit_phrase_weighs_double(self):
        result = detect_type("meditar todo dia")
        assert result.type == "habit"
        assert result.scores["habit"] == 3
        assert result.confidence == pytest.approx(0.75)

    def test_plain_sentence_is_task(self):
        result = detect_type("comprar pão")
        assert result.type == "task"
        assert result.confidence == 1.0

    def test_tie_goes_to_earlier_type(self):
        result = detect_type("reunião na festa")
        assert result.scores == {"task": 1, "meeting": 1, "event": 1, "habit": 0}
        assert result.type == "task"
        assert result.trusted

    def test_date_alone_favours_event(self):
        result = detect_type("festa amanhã", has_date=True)
        assert result.type == "event"
        assert result.scores["event"] == 2

    def test_english(self):
        result = detect_type("meeting with sales on zoom", ENGLISH)
        assert result.type == "meeting"


class TestDetectDate:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("pagar conta hoje", date(2025, 1, 15)),
            ("pagar conta amanhã", date(2025, 1, 16)),
            ("pagar conta amanha", date(2025, 1, 16)),
            ("pagar conta depois de amanhã", date(2025, 1, 17)),
            ("entregar relatório dia 20/02", date(2025, 2, 20)),
            ("natal 25/12/26", date(2026, 12, 25)),
            ("prova em 10-03-2025", date(2025, 3, 10)),
            ("academia sexta", date(2025, 1, 17)),
            ("almoço domingo", date(2025, 1, 19)),
            ("próxima semana revisar contrato", date(2025, 1, 22)),
            ("comprar pão", date(2025, 1, 15)),
        ],
    )
    def test_phrases(self, text, expected, today):
        assert detect_date(text, today=today) == expected

    def test_same_weekday_wraps_to_next_week(self, today):
        assert detect_date("aula quarta", today=today) == date(2025, 1, 22)

    def test_invalid_numeric_date_falls_through(self, today):
        assert detect_date("31/02 ou 10/03", today=today) == date(2025, 3, 10)

    def test_travel_defaults_to_a_week_out(self, today):
        assert detect_date("viagem para Lisboa", today=today) == date(2025, 1, 22)

    def test_explicit_date_beats_travel_default(self, today):
        assert detect_date("viagem amanhã", today=today) == date(2025, 1, 16)

    def test_match_date_is_none_without_explicit_date(self, today):
        assert match_date("viagem para Lisboa", today=today) is None
        assert match_date("comprar pão", today=today) is None

    def test_english(self, today):
        assert detect_date("call mom tomorrow", ENGLISH, today) == date(2025, 1, 16)
        assert detect_date("the day after tomorrow", ENGLISH, today) == date(2025, 1, 17)
        assert detect_date("dentist on friday", ENGLISH, today) == date(2025, 1, 17)


class TestDetectTime:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("reunião às 15h", "15:00"),
            ("reunião às 15h30", "15:30"),
            ("reunião 9:30", "09:30"),
            ("reunião 14.45", "14:45"),
            ("reunião às 10 horas", "10:00"),
            ("call at 3pm", "15:00"),
            ("call at 3:30 pm", "15:30"),
            ("flight 12am", "00:00"),
            ("almoço ao meio-dia", "12:00"),
            ("festa à meia-noite", "00:00"),
            ("correr de manhã", "09:00"),
            ("estudar à tarde", "14:00"),
            ("ler à noite", "19:00"),
            ("almoço", "12:30"),
            ("jantar", "20:00"),
            ("café da manhã", "08:00"),
            ("café com ana", "16:00"),
        ],
    )
    def test_phrases(self, text, expected):
        assert detect_time(text) == expected

    def test_none_when_nothing_matches(self):
        assert detect_time("comprar pão") is None
        assert detect_time("café") is None

    def test_tomorrow_is_not_morning(self):
        assert detect_time("pagar conta amanhã") is None
        assert detect_time("pay rent tomorrow", ENGLISH) is None


class TestDetectLocation:
    def test_preposition_and_place(self):
        assert detect_location("reunião no escritório") == "escritório"

    def test_stops_at_date_word(self):
        assert detect_location("jantar no Restaurante Fasano amanhã") == "Restaurante Fasano"

    def test_skips_time_phrase(self):
        assert detect_location("aula à tarde na escola") == "escola"

    def test_clock_time_is_not_a_place(self):
        assert detect_location("reunião às 15h") is None

    def test_family_house(self):
        assert detect_location("almoço com os pais da Gardenia") == "Casa de Gardenia"

    def test_none(self):
        assert detect_location("comprar pão") is None

    def test_english(self):
        assert detect_location("meeting at the office", ENGLISH) == "office"
        assert detect_location("dinner with the parents of Anna", ENGLISH) == "Anna's house"


class TestDetectPeople:
    def test_names_after_companion_words(self):
        assert detect_people("almoço com Pedro e Maria") == ["Pedro", "Maria"]

    def test_two_word_name(self):
        assert detect_people("reunião com Ana Paula amanhã") == ["Ana Paula"]

    def test_drops_capitalised_stop_word(self):
        assert detect_people("café com Pedro Amanhã") == ["Pedro"]

    def test_family_relation(self):
        assert detect_people("almoço com os pais da Gardenia") == ["pais de Gardenia"]

    def test_duplicates_removed(self):
        assert detect_people("ligar com Pedro e Pedro") == ["Pedro"]

    def test_lowercase_is_not_a_name(self):
        assert detect_people("comprar pão com manteiga") == []


class TestDetectCategory:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("reunião com cliente", "work"),
            ("consulta no dentista", "health"),
            ("estudar para a prova", "study"),
            ("pagar conta de luz", "financial"),
            ("almoço com pedro", "social"),
            ("comprar pão", None),
        ],
    )
    def test_buckets(self, text, expected):
        assert detect_category(text) == expected

    def test_colors(self):
        assert suggest_color("work") == "#9b87f5"
        assert suggest_color("social") == "#FF3B30"
        assert suggest_color("hobby") is None
        assert suggest_color(None) is None


class TestDetectIcon:
    def test_first_match(self):
        assert detect_icon("jantar com ana") == "utensils"
        assert detect_icon("ir à academia") == "dumbbell"
        assert detect_icon("viagem para lisboa") == "plane"

    def test_matches_at_word_start_only(self):
        assert detect_icon("acelerar projeto") == DEFAULT_ICON


class TestGetLexicon:
    def test_lookup(self):
        assert get_lexicon("en") is ENGLISH
        assert get_lexicon("en-US") is ENGLISH
        assert get_lexicon("pt-BR") is PORTUGUESE

    def test_defaults_to_portuguese(self):
        assert get_lexicon(None) is PORTUGUESE
        assert get_lexicon("fr") is PORTUGUESE
