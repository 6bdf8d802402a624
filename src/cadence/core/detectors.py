"""Free-text detectors - pure functions, no I/O dependencies.

Each detector maps a sentence to an optional fragment (a date, a time, a
place, people, a category, an icon or a task type). Detectors never raise:
when nothing is recognised they return None, an empty list or a default.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta

from cadence.core.lexicon import NUMERIC_DATE, PORTUGUESE, Lexicon
from cadence.core.records import TaskType, js_weekday

# Below this ratio the type guess is not trusted
MIN_CONFIDENCE = 0.3

# Tie-break order for the type scores
TYPE_ORDER = (
    TaskType.TASK.value,
    TaskType.MEETING.value,
    TaskType.EVENT.value,
    TaskType.HABIT.value,
)

CATEGORY_COLORS = {
    "work": "#9b87f5",
    "personal": "#FF9500",
    "health": "#4CD964",
    "study": "#5AC8FA",
    "financial": "#FFCC33",
    "social": "#FF3B30",
}

DEFAULT_ICON = "list-checks"


@dataclass
class TypeDetection:
    """Outcome of the type scorer."""

    type: str
    confidence: float
    scores: dict[str, int] = field(default_factory=dict)

    @property
    def trusted(self) -> bool:
        return self.confidence >= MIN_CONFIDENCE


def capitalize(text: str) -> str:
    """Upper-case the first character only, leaving the rest untouched."""
    return text[:1].upper() + text[1:]


def is_shared_meal(text: str, lexicon: Lexicon = PORTUGUESE) -> bool:
    """A meal word together with a companion word ("almoço com ...")."""
    return bool(lexicon.meal.search(text) and lexicon.companion.search(text))


def detect_type(
    text: str,
    lexicon: Lexicon = PORTUGUESE,
    has_date: bool = False,
    has_time: bool = False,
) -> TypeDetection:
    """
    Score the sentence against each task type.

    Task starts at 1; every other type gains a point per matching pattern.
    An explicit date and time favour meetings and events, a date alone
    favours events, and any habit phrase weighs double. Ties go to the
    earlier type in TYPE_ORDER.
    """
    if is_shared_meal(text, lexicon):
        return TypeDetection(TaskType.EVENT.value, 1.0)

    scores = {
        TaskType.TASK.value: 1,
        TaskType.MEETING.value: sum(1 for p in lexicon.meeting if p.search(text)),
        TaskType.EVENT.value: sum(1 for p in lexicon.event if p.search(text)),
        TaskType.HABIT.value: sum(1 for p in lexicon.habit if p.search(text)),
    }

    if has_date and has_time:
        scores[TaskType.MEETING.value] += 2
        scores[TaskType.EVENT.value] += 2
    elif has_date:
        scores[TaskType.EVENT.value] += 1
    if scores[TaskType.HABIT.value] > 0:
        scores[TaskType.HABIT.value] += 2

    # max() keeps the first of equal scores
    best = max(TYPE_ORDER, key=lambda t: scores[t])
    return TypeDetection(best, scores[best] / sum(scores.values()), scores)


def _numeric_date(text: str, today: date) -> date | None:
    for match in NUMERIC_DATE.finditer(text):
        day, month, year = match.groups()
        year = int(year) if year else None
        if year is not None and year < 100:
            year += 2000
        try:
            return date(year or today.year, int(month), int(day))
        except ValueError:
            continue
    return None


def _weekday_offset(text: str, lexicon: Lexicon, today: date) -> date | None:
    hits = []
    for pattern, weekday in lexicon.weekdays:
        match = pattern.search(text)
        if match:
            hits.append((match.start(), weekday))
    if not hits:
        return None

    _, weekday = min(hits)
    days_to_add = weekday - js_weekday(today)
    if days_to_add <= 0:
        days_to_add += 7
    return today + timedelta(days=days_to_add)


def match_date(
    text: str, lexicon: Lexicon = PORTUGUESE, today: date | None = None
) -> date | None:
    """Date named explicitly in the sentence, or None."""
    today = today or date.today()

    if lexicon.day_after_tomorrow.search(text):
        return today + timedelta(days=2)
    if lexicon.today.search(text):
        return today
    if lexicon.tomorrow.search(text):
        return today + timedelta(days=1)

    numeric = _numeric_date(text, today)
    if numeric:
        return numeric

    weekday = _weekday_offset(text, lexicon, today)
    if weekday:
        return weekday

    if lexicon.next_week.search(text):
        return today + timedelta(days=7)
    return None


def detect_date(
    text: str, lexicon: Lexicon = PORTUGUESE, today: date | None = None
) -> date:
    """Date for the sentence. Trips default to a week out, anything else to today."""
    today = today or date.today()
    found = match_date(text, lexicon, today)
    if found:
        return found
    if lexicon.travel.search(text):
        return today + timedelta(days=7)
    return today


def match_clock(text: str, lexicon: Lexicon = PORTUGUESE) -> str | None:
    """Explicit clock time ("15h", "9:30", "3pm") as HH:MM, or None."""
    match = lexicon.clock.search(text)
    if not match:
        return None

    hour = int(match["hour"])
    minute = int(match["minute"] or match["minute2"] or 0)
    meridiem = (match["meridiem"] or match["meridiem2"] or "").lower()
    if meridiem == "pm" and hour < 12:
        hour += 12
    elif meridiem == "am" and hour == 12:
        hour = 0
    return f"{hour:02d}:{minute:02d}"


def detect_time(text: str, lexicon: Lexicon = PORTUGUESE) -> str | None:
    """Explicit time, else part of day, else the usual hour of a meal."""
    clock = match_clock(text, lexicon)
    if clock:
        return clock

    if lexicon.noon.search(text):
        return "12:00"
    if lexicon.midnight.search(text):
        return "00:00"
    if lexicon.morning.search(text):
        return "09:00"
    if lexicon.afternoon.search(text):
        return "14:00"
    if lexicon.evening.search(text):
        return "19:00"

    if lexicon.lunch.search(text):
        return "12:30"
    if lexicon.dinner.search(text):
        return "20:00"
    if lexicon.breakfast.search(text):
        return "08:00"
    if lexicon.coffee.search(text) and lexicon.companion.search(text):
        return "16:00"
    return None


def trim_place(place: str, lexicon: Lexicon = PORTUGUESE) -> str:
    """Cut a captured place at the first date/time/companion word."""
    stop = lexicon.stop_words.search(place)
    if stop:
        place = place[: stop.start()]
    return place.strip(" -'\"")


def detect_location(text: str, lexicon: Lexicon = PORTUGUESE) -> str | None:
    """Place after a preposition, or the house of a named family."""
    for match in lexicon.location.finditer(text):
        place = trim_place(match["place"], lexicon)
        if place:
            return place

    family = lexicon.family.search(text)
    if family:
        return lexicon.house_template.format(name=family["name"])
    return None


def detect_people(text: str, lexicon: Lexicon = PORTUGUESE) -> list[str]:
    """Capitalised names after "com"/"e", plus a family relation entry."""
    people = []
    for match in lexicon.people.finditer(text):
        words = []
        for word in match["name"].split():
            if lexicon.stop_words.fullmatch(word):
                break
            words.append(word)
        if words:
            people.append(" ".join(words))

    family = lexicon.family.search(text)
    if family:
        people.append(
            lexicon.relation_template.format(
                relation=family["relation"].lower(), name=family["name"]
            )
        )

    return list(dict.fromkeys(people))


def detect_category(text: str, lexicon: Lexicon = PORTUGUESE) -> str | None:
    if is_shared_meal(text, lexicon):
        return "social"
    for category, pattern in lexicon.categories:
        if pattern.search(text):
            return category
    return None


def suggest_color(category: str | None) -> str | None:
    if not category:
        return None
    return CATEGORY_COLORS.get(category)


def detect_icon(text: str, lexicon: Lexicon = PORTUGUESE) -> str:
    for pattern, icon in lexicon.icons:
        if pattern.search(text):
            return icon
    return DEFAULT_ICON
