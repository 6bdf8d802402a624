"""Sentence interpretation - runs the detectors and the rewrite rules.

process_text() is the single entry point for both the smart-task dialog
(full context) and the quick-add dialog (type, date and time only).

Rules are tried in order and the first one that applies builds the
result:

    FamilyMealOverrideRule  "almoço com os pais da Gardenia"
    TravelOverrideRule      "viagem para Lisboa"
    GenericRule             everything else
"""

import logging
from dataclasses import asdict, dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Protocol

from cadence.core.detectors import (
    DEFAULT_ICON,
    TypeDetection,
    capitalize,
    detect_category,
    detect_date,
    detect_icon,
    detect_location,
    detect_people,
    detect_time,
    detect_type,
    match_clock,
    match_date,
    suggest_color,
    trim_place,
)
from cadence.core.lexicon import PORTUGUESE, Lexicon
from cadence.core.records import TaskType
from cadence.core.titles import clean_title, family_meal_title

logger = logging.getLogger(__name__)


class Dialog(Enum):
    """Which input flow is asking."""

    SMART_TASK = "smart"
    QUICK_ADD = "quick"


@dataclass
class DetectedContext:
    """Structured reading of one sentence."""

    title: str
    date: str
    time: str | None
    type: str
    location: str | None = None
    people: list[str] = field(default_factory=list)
    category: str | None = None
    suggested_color: str | None = None
    icon: str = DEFAULT_ICON
    confidence: float = 1.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Signals:
    """Everything the detectors found, before any rule runs."""

    text: str
    lexicon: Lexicon
    today: date
    detection: TypeDetection
    date: date
    time: str | None
    location: str | None
    people: tuple[str, ...]
    category: str | None
    icon: str


def gather_signals(text: str, today: date, lexicon: Lexicon = PORTUGUESE) -> Signals:
    lower = text.lower()
    explicit_date = match_date(lower, lexicon, today)
    detection = detect_type(
        lower,
        lexicon,
        has_date=explicit_date is not None,
        has_time=match_clock(lower, lexicon) is not None,
    )
    return Signals(
        text=text,
        lexicon=lexicon,
        today=today,
        detection=detection,
        date=explicit_date or detect_date(lower, lexicon, today),
        time=detect_time(lower, lexicon),
        location=detect_location(text, lexicon),
        people=tuple(detect_people(text, lexicon)),
        category=detect_category(lower, lexicon),
        icon=detect_icon(lower, lexicon),
    )


def distrust(context: DetectedContext, today: date) -> DetectedContext:
    """Fallback for a type guess below the confidence threshold."""
    return replace(context, type=TaskType.TASK.value, date=today.isoformat(), time=None)


class Rule(Protocol):
    """A rewrite rule: decides whether it owns the sentence, then builds the result."""

    tag: str

    def applies(self, signals: Signals) -> bool:
        ...

    def apply(self, signals: Signals) -> DetectedContext:
        ...


class GenericRule:
    """Merge the detectors' output under a cleaned title."""

    tag = "generic"

    def applies(self, signals: Signals) -> bool:
        return True

    def apply(self, signals: Signals) -> DetectedContext:
        title = clean_title(
            signals.text,
            signals.lexicon,
            time=signals.time,
            location=signals.location,
            people=signals.people,
        )
        context = DetectedContext(
            title=capitalize(title),
            date=signals.date.isoformat(),
            time=signals.time,
            type=signals.detection.type,
            location=signals.location,
            people=list(signals.people),
            category=signals.category,
            suggested_color=suggest_color(signals.category),
            icon=signals.icon,
            confidence=signals.detection.confidence,
        )
        if not signals.detection.trusted:
            context = distrust(context, signals.today)
        return context


class TravelOverrideRule:
    """Trips: name the destination and treat plain tasks as events."""

    tag = "travel"

    def applies(self, signals: Signals) -> bool:
        return bool(signals.lexicon.travel.search(signals.text))

    def apply(self, signals: Signals) -> DetectedContext:
        lexicon = signals.lexicon
        context = GenericRule().apply(signals)
        title, location = context.title, context.location

        if len(title.strip()) < 3:
            match = lexicon.destination.search(signals.text)
            place = trim_place(match["place"], lexicon) if match else ""
            if place:
                place = capitalize(place)
                title = lexicon.trip_to_template.format(place=place)
                location = location or place
            else:
                title = capitalize(lexicon.trip_word)

        if lexicon.trip_word not in title.lower():
            title = lexicon.trip_prefix + title

        kind = context.type
        if kind == TaskType.TASK.value:
            kind = TaskType.EVENT.value
        return replace(context, title=title, location=location, type=kind)


class FamilyMealOverrideRule:
    """Meals with someone's family become social events at their house."""

    tag = "family_meal"

    def applies(self, signals: Signals) -> bool:
        return bool(signals.lexicon.family_meal.search(signals.text))

    def apply(self, signals: Signals) -> DetectedContext:
        lexicon = signals.lexicon
        match = lexicon.family_meal.search(signals.text)
        name = match["name"]

        time = signals.time or lexicon.family_meal_times.get(match["meal"].lower())

        location = signals.location
        if not location:
            place = lexicon.place_after.search(signals.text)
            location = trim_place(place["place"], lexicon) if place else ""
        if not location:
            location = lexicon.house_template.format(name=name)

        people = list(signals.people)
        relation = lexicon.relation_template.format(
            relation=match["relation"].lower(), name=name
        )
        if relation not in people:
            people.append(relation)

        return DetectedContext(
            title=family_meal_title(match, lexicon),
            date=signals.date.isoformat(),
            time=time,
            type=TaskType.EVENT.value,
            location=location,
            people=people,
            category="social",
            suggested_color=suggest_color("social"),
            icon=signals.icon,
            confidence=signals.detection.confidence,
        )


RULES: tuple[Rule, ...] = (
    FamilyMealOverrideRule(),
    TravelOverrideRule(),
    GenericRule(),
)


def select_rule(signals: Signals, rules: tuple[Rule, ...] = RULES) -> Rule:
    """First rule that applies. The last rule must always apply."""
    for rule in rules:
        if rule.applies(signals):
            return rule
    raise ValueError("No rule applies; the rule list must end with GenericRule")


def _quick_add(text: str, today: date, lexicon: Lexicon) -> DetectedContext:
    lower = text.lower()
    explicit_date = match_date(lower, lexicon, today)
    clock = match_clock(lower, lexicon)
    detection = detect_type(
        lower, lexicon, has_date=explicit_date is not None, has_time=clock is not None
    )
    context = DetectedContext(
        title=text.strip(),
        date=(explicit_date or today).isoformat(),
        time=clock or detect_time(lower, lexicon),
        type=detection.type,
        confidence=detection.confidence,
    )
    if not detection.trusted:
        context = distrust(context, today)
    return context


def process_text(
    text: str,
    *,
    today: date | None = None,
    lexicon: Lexicon | None = None,
    dialog: Dialog = Dialog.SMART_TASK,
) -> DetectedContext:
    """
    Interpret one sentence.

    Always returns a context: unrecognised input falls back to a task for
    today with the sentence itself as the title.
    """
    today = today or date.today()
    lexicon = lexicon or PORTUGUESE
    text = text or ""

    if dialog is Dialog.QUICK_ADD:
        return _quick_add(text, today, lexicon)

    signals = gather_signals(text, today, lexicon)
    rule = select_rule(signals)
    context = rule.apply(signals)
    if not context.title:
        context = replace(context, title=capitalize(text.strip()))

    logger.debug(f"Parsed {text!r} with {rule.tag} rule: {context.type} on {context.date}")
    return context
