"""Title cleanup - strips recognised fragments from the original sentence."""

import re

from cadence.core.detectors import capitalize
from cadence.core.lexicon import NUMERIC_DATE, PORTUGUESE, Lexicon

_SPACES = re.compile(r"\s+")
_SPACE_BEFORE_PUNCT = re.compile(r"\s+([,.;:!?])")
_REPEATED_PUNCT = re.compile(r"([,.;:])(?:\s*[,.;:])+")
_EDGE_CHARS = " ,.;:-"


def family_meal_title(match: re.Match, lexicon: Lexicon = PORTUGUESE) -> str:
    """Title for a family meal match: "Almoço com pais de Gardenia"."""
    return lexicon.family_meal_title.format(
        meal=capitalize(match["meal"].lower()),
        relation=match["relation"].lower(),
        name=match["name"],
    )


def tidy(title: str) -> str:
    """Collapse whitespace and drop stray punctuation left by removals."""
    title = _SPACES.sub(" ", title)
    title = _SPACE_BEFORE_PUNCT.sub(r"\1", title)
    title = _REPEATED_PUNCT.sub(r"\1", title)
    return title.strip(_EDGE_CHARS)


def clean_title(
    text: str,
    lexicon: Lexicon = PORTUGUESE,
    time: str | None = None,
    location: str | None = None,
    people: list[str] | tuple[str, ...] = (),
) -> str:
    """
    Strip date, time, place and people fragments from the sentence.

    Date phrases always go, since a date is always detected. Time phrases
    go only when a time was found, and the place and names only as the
    exact detected values. A family meal gets its fixed title instead.
    """
    family = lexicon.family_meal.search(text)
    if family:
        return family_meal_title(family, lexicon)

    title = lexicon.verb_prefix.sub("", text, count=1)

    title = lexicon.date_phrases.sub("", title)
    title = re.sub(lexicon.numeric_date_lead + NUMERIC_DATE.pattern, "", title)
    title = lexicon.weekday_phrases.sub("", title)

    if time:
        title = re.sub(
            lexicon.time_lead + lexicon.clock.pattern, "", title, flags=re.IGNORECASE
        )
        title = lexicon.time_phrases.sub("", title)

    if location:
        title = re.sub(
            rf"\b{lexicon.location_prepositions}\s+{re.escape(location)}(?!\w)",
            "",
            title,
            flags=re.IGNORECASE,
        )

    for person in people:
        name = re.escape(person)
        title = re.sub(
            rf"\b{lexicon.companion_word}\s+{name}(?!\w)", "", title, flags=re.IGNORECASE
        )
        title = re.sub(rf"\b{name}(?!\w)", "", title, flags=re.IGNORECASE)

    return tidy(title)
