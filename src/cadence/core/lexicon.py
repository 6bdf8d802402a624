"""Keyword tables and compiled patterns for the text interpreter.

A Lexicon bundles everything language-specific the detectors and the title
cleaner need. Patterns are compiled once here and never mutated.
"""

import re
from dataclasses import dataclass


def _any(*words: str) -> re.Pattern:
    """Case-insensitive pattern matching any of the given whole words/phrases."""
    return re.compile(r"\b(?:" + "|".join(words) + r")\b", re.IGNORECASE)


def _each(*words: str) -> tuple[re.Pattern, ...]:
    """One compiled pattern per keyword, so matches can be counted."""
    return tuple(_any(w) for w in words)


def _icons(*pairs: tuple[str, str]) -> tuple[tuple[re.Pattern, str], ...]:
    """Keyword prefixes mapped to icon names; a keyword matches at a word start."""
    return tuple((re.compile(r"\b" + re.escape(kw), re.IGNORECASE), icon) for kw, icon in pairs)


# Explicit clock times: 15:30, 9.15, 15h, 15h30, 15 horas, 3pm, 3:30 pm
_CLOCK = (
    r"\b(?P<hour>[01]?\d|2[0-3])"
    r"(?:"
    r"[:.](?P<minute>[0-5]\d)(?:\s*(?P<meridiem>am|pm))?\b"
    r"|\s*(?P<meridiem2>am|pm)\b"
    r"|\s*{suffix}(?:\s*(?P<minute2>[0-5]\d))?\b"
    r")"
)

# dd/mm or dd/mm/yyyy (also with dashes)
NUMERIC_DATE = re.compile(r"\b(\d{1,2})[/-](\d{1,2})(?:[/-](\d{2,4}))?\b")


@dataclass(frozen=True)
class Lexicon:
    """Language pack for the detectors."""

    code: str

    # Type detection
    meeting: tuple[re.Pattern, ...]
    event: tuple[re.Pattern, ...]
    habit: tuple[re.Pattern, ...]
    meal: re.Pattern
    companion: re.Pattern

    # Dates
    today: re.Pattern
    tomorrow: re.Pattern
    day_after_tomorrow: re.Pattern
    next_week: re.Pattern
    weekdays: tuple[tuple[re.Pattern, int], ...]  # (pattern, weekday with Sunday=0)
    travel: re.Pattern

    # Times
    clock: re.Pattern
    noon: re.Pattern
    midnight: re.Pattern
    morning: re.Pattern
    afternoon: re.Pattern
    evening: re.Pattern
    lunch: re.Pattern
    dinner: re.Pattern
    breakfast: re.Pattern
    coffee: re.Pattern

    # Places and people
    location: re.Pattern
    stop_words: re.Pattern
    family: re.Pattern
    house_template: str
    people: re.Pattern
    relation_template: str

    # Categories, in priority order
    categories: tuple[tuple[str, re.Pattern], ...]

    # Icons, in priority order (first hit wins)
    icons: tuple[tuple[re.Pattern, str], ...]

    # Title cleanup
    verb_prefix: re.Pattern
    date_phrases: re.Pattern
    weekday_phrases: re.Pattern
    numeric_date_lead: str
    time_lead: str
    time_phrases: re.Pattern
    location_prepositions: str
    companion_word: str

    # Rewrite rules
    family_meal: re.Pattern
    family_meal_title: str
    family_meal_times: dict
    place_after: re.Pattern
    destination: re.Pattern
    trip_word: str
    trip_to_template: str
    trip_prefix: str


_PT_WEEKDAYS = (
    (r"domingo", 0),
    (r"segunda(?:-feira)?", 1),
    (r"ter[çc]a(?:-feira)?", 2),
    (r"quarta(?:-feira)?", 3),
    (r"quinta(?:-feira)?", 4),
    (r"sexta(?:-feira)?", 5),
    (r"s[áa]bado", 6),
)

_PT_WEEKDAY_WORDS = "|".join(w for w, _ in _PT_WEEKDAYS)

PORTUGUESE = Lexicon(
    code="pt",
    meeting=_each(
        "reunião", "reuniao", "reunir", "encontro", "conversa com", "call",
        "meeting", "entrevista", "apresentação", "discussão", "conferência",
        "videoconferência", "skype", "zoom", "teams", "google meet", "meet",
    ),
    event=_each(
        "evento", "festa", "celebração", "aniversário", "comemoração",
        "casamento", "cerimônia", "formatura", "workshop", "seminário",
        "palestra", "show", "concerto", "teatro", "cinema", "churrasco",
        "viagem", "viajar", "visitar", "ir para", "voo", "embarque", "hotel",
        "excursão", "passeio", "férias",
        "almoço com", "jantar com", "café com",
    ),
    habit=_each(
        "hábito", "habito", "rotina", "diariamente", "todos os dias",
        "todo dia", "cada dia", "todas as manhãs", "toda noite",
        "toda semana", "semanalmente", "todo mês", "todos os meses",
        "mensalmente", "toda " + "(?:" + _PT_WEEKDAY_WORDS + ")",
        "sempre", "frequente", "prática", "regular",
    ),
    meal=_any("almoço", "almoco", "jantar", "café", "cafe"),
    companion=_any("com"),
    today=_any("hoje"),
    tomorrow=_any("amanhã", "amanha"),
    day_after_tomorrow=_any(r"depois\s+de\s+amanh[ãa]"),
    next_week=_any(r"pr[óo]xima\s+semana"),
    weekdays=tuple((_any(w), i) for w, i in _PT_WEEKDAYS),
    travel=_any("viagem", "viajar", "voo", "passear", "excursão", "excursao", "férias", "ferias"),
    clock=re.compile(_CLOCK.format(suffix=r"(?:horas?|hrs?|h)"), re.IGNORECASE),
    noon=_any(r"meio[\s-]dia"),
    midnight=_any(r"meia[\s-]noite"),
    morning=re.compile(r"(?<!café da )(?<!cafe da )\bmanh[ãa]\b", re.IGNORECASE),
    afternoon=_any("tarde"),
    evening=_any("noite"),
    lunch=_any("almoço", "almoco", "almoçar"),
    dinner=_any("jantar"),
    breakfast=_any(r"caf[ée]\s+da\s+manh[ãa]"),
    coffee=_any("café", "cafe"),
    location=re.compile(
        r"\b(?:em|no|na|nos|nas|ao|aos|à|às)\s+(?=(?P<place>[^\W\d_][^,.;:!?\d]*))",
        re.IGNORECASE,
    ),
    stop_words=_any(
        "hoje", "amanhã", "amanha", r"depois\s+de", "com", "e", "às", "as",
        "ao", "para", "pr[óo]xima", "pr[óo]ximo", "dia", r"de\s+manhã",
        "manhã", "tarde", "noite", r"meio[\s-]dia", _PT_WEEKDAY_WORDS,
    ),
    family=re.compile(
        r"\bcom\s+(?:os\s+|as\s+|a\s+|o\s+)?"
        r"(?P<relation>pais|família|familia|parentes|avós|avos|tios|primos)"
        r"\s+d[aeo]s?\s+(?P<name>[A-ZÀ-Ý][a-zà-ÿ]+)",
        re.IGNORECASE,
    ),
    house_template="Casa de {name}",
    people=re.compile(
        r"\b(?:com|e)\s+(?P<name>[A-ZÀ-Ý][a-zà-ÿ]+(?:\s[A-ZÀ-Ý][a-zà-ÿ]+)?)"
    ),
    relation_template="{relation} de {name}",
    categories=(
        ("work", _any("trabalho", "reunião", "reuniao", "escritório", "cliente",
                      "projeto", "negócio", "profissional")),
        ("personal", _any("pessoal", "casa", "família", "familia", "amigo", "lazer")),
        ("health", _any("médico", "medico", "dentista", "consulta", "exame",
                        "academia", "treino", "exercício", "yoga", "fisioterapia")),
        ("study", _any("estudo", "estudar", "curso", "aula", "faculdade",
                       "escola", "livro", "leitura")),
        ("financial", _any("banco", "financeiro", "pagamento", "pagar",
                           "compra", "conta", "dinheiro")),
        ("social", _any("almoço com", "jantar com", "café com", "encontro",
                        "confraternização", "festa", "social")),
    ),
    icons=_icons(
        ("tomar banho", "shower-head"),
        ("banho", "shower-head"),
        ("banheira", "bath"),
        ("escovar", "brush"),
        ("café da manhã", "coffee"),
        ("almoço", "utensils"),
        ("almoçar", "utensils"),
        ("jantar", "utensils"),
        ("lanche", "utensils"),
        ("café", "coffee"),
        ("pizza", "pizza"),
        ("ler", "book"),
        ("leitura", "book"),
        ("livro", "book"),
        ("estudar", "book"),
        ("programar", "monitor"),
        ("computador", "monitor"),
        ("reunião", "briefcase"),
        ("reuniao", "briefcase"),
        ("aula", "school"),
        ("curso", "school"),
        ("faculdade", "graduation-cap"),
        ("escrever", "pencil"),
        ("música", "music"),
        ("dormir", "bed"),
        ("descansar", "bed"),
        ("academia", "dumbbell"),
        ("treino", "dumbbell"),
        ("treinar", "dumbbell"),
        ("exercício", "dumbbell"),
        ("correr", "dumbbell"),
        ("caminhada", "dumbbell"),
        ("bicicleta", "bike"),
        ("filme", "film"),
        ("cinema", "film"),
        ("série", "tv"),
        ("aniversário", "cake"),
        ("festa", "sparkles"),
        ("telefonar", "phone"),
        ("ligar", "phone"),
        ("e-mail", "mail"),
        ("email", "mail"),
        ("mensagem", "message-square"),
        ("whatsapp", "message-square"),
        ("foto", "camera"),
        ("supermercado", "shopping-cart"),
        ("mercado", "shopping-cart"),
        ("compras", "shopping-cart"),
        ("comprar", "shopping-cart"),
        ("lixo", "trash"),
        ("limpar", "sparkles"),
        ("faxina", "sparkles"),
        ("casa", "home"),
        ("ônibus", "bus"),
        ("carro", "car"),
        ("viagem", "plane"),
        ("viajar", "plane"),
        ("voo", "plane"),
        ("praia", "sun"),
        ("pagar", "wallet"),
        ("conta", "wallet"),
        ("banco", "credit-card"),
        ("namorad", "heart"),
        ("compromisso", "git-commit"),
    ),
    verb_prefix=re.compile(
        r"^\s*(?:adicionar|criar|agendar|marcar|lembrar\s+de|lembrar|lembrete(?:\s*:)?)\s+",
        re.IGNORECASE,
    ),
    date_phrases=_any(
        r"(?:na\s+)?pr[óo]xima\s+semana",
        r"(?:no\s+)?pr[óo]ximo\s+m[êe]s",
        r"depois\s+de\s+amanh[ãa]",
        "amanhã", "amanha", "hoje",
    ),
    weekday_phrases=_any(
        r"(?:(?:n[oa]|nest[ea]|pr[óo]xim[oa]|est[ea])\s+)?(?:" + _PT_WEEKDAY_WORDS + ")"
    ),
    numeric_date_lead=r"(?:\b(?:dia|em|no)\s+)?",
    time_lead=r"(?:\b(?:às|as|ao|a partir das|pelas)\s+)?",
    time_phrases=_any(
        r"(?:ao\s+)?meio[\s-]dia", r"(?:à\s+)?meia[\s-]noite",
        r"(?:de|da|pela)\s+manh[ãa]", r"(?:à|a|da|de)\s+tarde",
        r"(?:à|a|de|da)\s+noite",
    ),
    location_prepositions=r"(?:em|no|na|nos|nas|ao|aos|à|às)",
    companion_word="com",
    family_meal=re.compile(
        r"\b(?P<meal>almoço|almoco|jantar|café|cafe)\b.*?\bcom\b.*?"
        r"(?:\b(?:os|as)\s+)?\b(?P<relation>pais|família|familia|parentes)"
        r"\s+d[aeo]s?\s+(?P<name>[A-ZÀ-Ý][a-zà-ÿ]+)",
        re.IGNORECASE,
    ),
    family_meal_title="{meal} com {relation} de {name}",
    family_meal_times={
        "almoço": "12:30",
        "almoco": "12:30",
        "jantar": "20:00",
        "café": "09:00",
        "cafe": "09:00",
    },
    place_after=re.compile(
        r"\b(?:na|no)\s+(?P<place>[^\W\d_][^,.;:!?\d]*)", re.IGNORECASE
    ),
    destination=re.compile(
        r"\bpara\s+(?:(?:o|a|os|as)\s+)?(?P<place>[^\W\d_][^,.;:!?\d]*)",
        re.IGNORECASE,
    ),
    trip_word="viagem",
    trip_to_template="Viagem para {place}",
    trip_prefix="Viagem: ",
)


_EN_WEEKDAYS = (
    (r"sunday", 0),
    (r"monday", 1),
    (r"tuesday", 2),
    (r"wednesday", 3),
    (r"thursday", 4),
    (r"friday", 5),
    (r"saturday", 6),
)

_EN_WEEKDAY_WORDS = "|".join(w for w, _ in _EN_WEEKDAYS)

ENGLISH = Lexicon(
    code="en",
    meeting=_each(
        "meeting", "meet with", "call", "sync", "standup", "stand-up",
        "interview", "presentation", "discussion", "conference",
        "video call", "skype", "zoom", "teams", "google meet", "1:1",
    ),
    event=_each(
        "event", "party", "celebration", "birthday", "anniversary", "wedding",
        "ceremony", "graduation", "workshop", "seminar", "talk", "concert",
        "show", "theater", "theatre", "cinema", "barbecue", "trip", "travel",
        "visit", "go to", "flight", "boarding", "hotel", "excursion",
        "vacation", "lunch with", "dinner with", "coffee with",
    ),
    habit=_each(
        "habit", "routine", "daily", "every day", "each day", "every morning",
        "every night", "every week", "weekly", "every month", "monthly",
        "every (?:" + _EN_WEEKDAY_WORDS + ")", "always", "regularly", "practice",
    ),
    meal=_any("lunch", "dinner", "coffee"),
    companion=_any("with"),
    today=_any("today", "tonight"),
    tomorrow=_any("tomorrow"),
    day_after_tomorrow=_any(r"(?:the\s+)?day\s+after\s+tomorrow"),
    next_week=_any(r"next\s+week"),
    weekdays=tuple((_any(w), i) for w, i in _EN_WEEKDAYS),
    travel=_any("trip", "travel", "flight", "vacation", "holiday", "excursion"),
    clock=re.compile(_CLOCK.format(suffix=r"(?:hours?|h|o'clock)"), re.IGNORECASE),
    noon=_any("noon", "midday"),
    midnight=_any("midnight"),
    morning=_any("morning"),
    afternoon=_any("afternoon"),
    evening=_any("evening", "tonight", "night"),
    lunch=_any("lunch"),
    dinner=_any("dinner"),
    breakfast=_any("breakfast", "brunch"),
    coffee=_any("coffee"),
    location=re.compile(
        r"\b(?:at|in)\s+(?:the\s+)?(?=(?P<place>[^\W\d_][^,.;:!?\d]*))",
        re.IGNORECASE,
    ),
    stop_words=_any(
        "today", "tonight", "tomorrow", "with", "and", "at", "on", "for",
        "next", "this", "morning", "afternoon", "evening", "night", "noon",
        r"the\s+day", _EN_WEEKDAY_WORDS,
    ),
    family=re.compile(
        r"\bwith\s+(?:the\s+|my\s+)?"
        r"(?P<relation>parents|family|relatives|grandparents|uncles|cousins)"
        r"\s+of\s+(?P<name>[A-Z][a-z]+)",
        re.IGNORECASE,
    ),
    house_template="{name}'s house",
    people=re.compile(r"\b(?:with|and)\s+(?P<name>[A-Z][a-z]+(?:\s[A-Z][a-z]+)?)"),
    relation_template="{relation} of {name}",
    categories=(
        ("work", _any("work", "meeting", "office", "client", "project",
                      "business", "deadline")),
        ("personal", _any("personal", "home", "house", "family", "friend", "leisure")),
        ("health", _any("doctor", "dentist", "appointment", "checkup", "gym",
                        "workout", "exercise", "yoga", "physio", "run")),
        ("study", _any("study", "course", "class", "lecture", "college",
                       "school", "book", "reading", "homework")),
        ("financial", _any("bank", "finance", "payment", "pay", "purchase",
                           "bill", "money", "taxes")),
        ("social", _any("lunch with", "dinner with", "coffee with", "hangout",
                        "get-together", "party", "social")),
    ),
    icons=_icons(
        ("shower", "shower-head"),
        ("bath", "bath"),
        ("brush", "brush"),
        ("breakfast", "coffee"),
        ("lunch", "utensils"),
        ("dinner", "utensils"),
        ("snack", "utensils"),
        ("coffee", "coffee"),
        ("pizza", "pizza"),
        ("read", "book"),
        ("book", "book"),
        ("study", "book"),
        ("code", "monitor"),
        ("computer", "monitor"),
        ("meeting", "briefcase"),
        ("class", "school"),
        ("course", "school"),
        ("college", "graduation-cap"),
        ("write", "pencil"),
        ("music", "music"),
        ("sleep", "bed"),
        ("rest", "bed"),
        ("gym", "dumbbell"),
        ("workout", "dumbbell"),
        ("exercise", "dumbbell"),
        ("run", "dumbbell"),
        ("walk", "dumbbell"),
        ("bike", "bike"),
        ("movie", "film"),
        ("cinema", "film"),
        ("series", "tv"),
        ("birthday", "cake"),
        ("party", "sparkles"),
        ("call", "phone"),
        ("phone", "phone"),
        ("email", "mail"),
        ("message", "message-square"),
        ("photo", "camera"),
        ("groceries", "shopping-cart"),
        ("shopping", "shopping-cart"),
        ("buy", "shopping-cart"),
        ("trash", "trash"),
        ("clean", "sparkles"),
        ("home", "home"),
        ("bus", "bus"),
        ("car", "car"),
        ("trip", "plane"),
        ("travel", "plane"),
        ("flight", "plane"),
        ("beach", "sun"),
        ("pay", "wallet"),
        ("bill", "wallet"),
        ("bank", "credit-card"),
        ("date night", "heart"),
        ("appointment", "git-commit"),
    ),
    verb_prefix=re.compile(
        r"^\s*(?:add|create|schedule|book|plan|remind\s+me\s+to|remember\s+to|reminder(?:\s*:)?)\s+",
        re.IGNORECASE,
    ),
    date_phrases=_any(
        r"next\s+week", r"next\s+month", r"(?:the\s+)?day\s+after\s+tomorrow",
        "tomorrow", "today",
    ),
    weekday_phrases=_any(
        r"(?:(?:on|next|this)\s+)?(?:" + _EN_WEEKDAY_WORDS + ")"
    ),
    numeric_date_lead=r"(?:\bon\s+)?",
    time_lead=r"(?:\b(?:at|by|from)\s+)?",
    time_phrases=_any(
        r"(?:at\s+)?noon", r"(?:at\s+)?midday", r"(?:at\s+)?midnight",
        r"(?:in\s+the|this)\s+morning", r"(?:in\s+the|this)\s+afternoon",
        r"(?:in\s+the|this)\s+evening", "tonight", r"at\s+night",
    ),
    location_prepositions=r"(?:at|in)(?:\s+the)?",
    companion_word="with",
    family_meal=re.compile(
        r"\b(?P<meal>lunch|dinner|coffee|breakfast)\b.*?\bwith\b.*?"
        r"(?:\b(?:the|my)\s+)?\b(?P<relation>parents|family|relatives)"
        r"\s+of\s+(?P<name>[A-Z][a-z]+)",
        re.IGNORECASE,
    ),
    family_meal_title="{meal} with {relation} of {name}",
    family_meal_times={
        "lunch": "12:30",
        "dinner": "20:00",
        "coffee": "09:00",
        "breakfast": "08:00",
    },
    place_after=re.compile(
        r"\bat\s+(?:the\s+)?(?P<place>[^\W\d_][^,.;:!?\d]*)", re.IGNORECASE
    ),
    destination=re.compile(
        r"\bto\s+(?:the\s+)?(?P<place>[^\W\d_][^,.;:!?\d]*)", re.IGNORECASE
    ),
    trip_word="trip",
    trip_to_template="Trip to {place}",
    trip_prefix="Trip: ",
)

LEXICONS = {
    PORTUGUESE.code: PORTUGUESE,
    ENGLISH.code: ENGLISH,
}


def get_lexicon(code: str | None) -> Lexicon:
    """Look up a lexicon by language code, defaulting to Portuguese."""
    if not code:
        return PORTUGUESE
    return LEXICONS.get(code.lower().split("-")[0], PORTUGUESE)
