"""
Input parser.

Turns one piece of user text into a ParsedInput: normalized text, tokens with
heuristic part-of-speech tags, action verbs, nouns, multi-word phrases and the
semantic intents (tracking, scheduling, billing...) the feature detector scores
against.

This is deliberately shallow: lexicon lookups, suffix rules and regexes. It
never tries to understand grammar.
"""

import re

from src.catalog.schema import SemanticIntent
from src.discovery.models import ParsedInput, Token


# =============================================================================
# Lexicons
# =============================================================================

ACTION_VERBS = frozenset({
    "create", "build", "make", "design", "develop",
    "add", "include", "integrate", "connect",
    "track", "manage", "organize", "handle",
    "schedule", "book", "reserve", "plan",
    "send", "notify", "alert", "remind",
    "invoice", "bill", "charge", "pay",
    "report", "analyze", "monitor", "measure",
    "assign", "delegate", "share", "collaborate",
    "automate", "streamline", "simplify", "optimize",
    "change", "modify", "update", "edit", "fix",
    "remove", "delete", "hide", "disable",
    "show", "display", "view", "see",
})

STYLE_ADJECTIVES = frozenset({
    "modern", "minimal", "clean", "simple", "sleek",
    "professional", "corporate", "business", "formal",
    "colorful", "vibrant", "bold", "bright", "dark",
    "friendly", "playful", "fun", "casual",
    "elegant", "sophisticated", "premium", "luxurious",
    "compact", "spacious", "dense", "airy",
})

QUANTITY_WORDS = frozenset({
    "all", "every", "each", "some", "many", "few",
    "multiple", "several", "single", "one", "two",
    "daily", "weekly", "monthly", "yearly", "annual",
})

PRIORITY_WORDS = frozenset({
    "important", "critical", "urgent", "priority",
    "essential", "required", "necessary", "optional",
    "main", "primary", "secondary", "minor",
})

TIME_WORDS = frozenset({
    "today", "tomorrow", "yesterday", "now", "later",
    "morning", "afternoon", "evening", "night",
    "before", "after", "during", "while",
    "immediately", "soon", "eventually", "always", "never",
})

STATUS_WORDS = frozenset({
    "active", "inactive", "pending", "completed", "done",
    "open", "closed", "new", "old", "archived",
    "approved", "rejected", "cancelled", "draft",
})

STOP_WORDS = frozenset({
    "a", "an", "the", "and", "or", "but", "is", "are", "was", "were",
    "be", "been", "being", "have", "has", "had", "do", "does", "did",
    "will", "would", "could", "should", "may", "might", "must", "shall",
    "can", "to", "of", "in", "for", "on", "with", "at", "by", "from",
    "as", "into", "through", "during", "before", "after", "above", "below",
    "between", "under", "again", "further", "then", "once", "here", "there",
    "when", "where", "why", "how", "all", "each", "few", "more", "most",
    "other", "some", "such", "no", "nor", "not", "only", "own", "same",
    "so", "than", "too", "very", "just", "also", "now", "me", "my", "i",
    "we", "our", "you", "your", "it", "its", "that", "this", "these", "those",
})

IRREGULAR_LEMMAS = {
    "built": "build",
    "made": "make",
    "sent": "send",
    "paid": "pay",
    "set": "set",
    "put": "put",
}

_KNOWN_LEMMAS = ACTION_VERBS | STYLE_ADJECTIVES | STATUS_WORDS

_DETERMINERS = ("a", "an", "the")
_CONJUNCTIONS = ("and", "or", "but")
_PREPOSITIONS = ("in", "on", "at", "to", "for", "with", "by", "from")
_PRONOUNS = ("i", "me", "my", "we", "our", "you", "your", "it", "they")

_NOUN_SUFFIX = re.compile(r"(tion|ment|ness|ity|er|or|ist|ism)$")
_ADJECTIVE_SUFFIX = re.compile(r"(ful|less|ous|ive|able|ible|al|ical)$")

SEMANTIC_PATTERNS: list[tuple[re.Pattern, SemanticIntent]] = [
    (re.compile(r"track(ing)?|monitor(ing)?|follow|watch|log(ging)?"), SemanticIntent.TRACKING),
    (re.compile(r"schedul(e|ing)|appoint(ment)?|book(ing)?|calendar|plan(ning)?"), SemanticIntent.SCHEDULING),
    (re.compile(r"manag(e|ing|ement)|organiz(e|ing)|handle|control"), SemanticIntent.MANAGING),
    (re.compile(r"organiz(e|ing)|sort(ing)?|categor(y|ize)|group(ing)?"), SemanticIntent.ORGANIZING),
    (re.compile(r"send|message|notify|alert|communicate|email|sms"), SemanticIntent.COMMUNICATING),
    (re.compile(r"invoice|bill(ing)?|payment|charge|price|cost|money"), SemanticIntent.BILLING),
    (re.compile(r"report(ing)?|analyz(e|ing)|analytic|statistic|dashboard|metric"), SemanticIntent.REPORTING),
    (re.compile(r"team|collaborat(e|ion)|share|together|assign|delegate"), SemanticIntent.COLLABORATING),
    (re.compile(r"automat(e|ion)|workflow|trigger|when.*then|if.*then"), SemanticIntent.AUTOMATING),
    (re.compile(r"monitor(ing)?|watch|observ(e|ing)|check|status"), SemanticIntent.MONITORING),
]


# =============================================================================
# Parser
# =============================================================================

def normalize(text: str) -> str:
    """Lowercase, unify quotes, collapse whitespace and drop stray symbols."""
    text = text.lower()
    text = re.sub(r"[‘’]", "'", text)
    text = re.sub(r"[“”]", '"', text)
    text = re.sub(r"\s+", " ", text)
    text = re.sub(r"[^\w\s'\"$.,!?-]", "", text)
    return text.strip()


def lemmatize(word: str) -> str:
    """
    Strip common inflections.

    Suffix rules are tried against the known lexicons first, so "scheduling"
    becomes "schedule" and "booking" becomes "book".
    """
    lower = word.lower()
    if lower in IRREGULAR_LEMMAS:
        return IRREGULAR_LEMMAS[lower]

    if lower.endswith("ing") and len(lower) > 4:
        base = lower[:-3]
        for candidate in (base, base + "e", base[:-1]):
            if candidate in _KNOWN_LEMMAS:
                return candidate
        if base.endswith(("t", "n", "d")):
            return base
        return base + "e"

    if lower.endswith("ed") and len(lower) > 3:
        base = lower[:-2]
        for candidate in (base, base + "e", lower[:-1], base[:-1]):
            if candidate in _KNOWN_LEMMAS:
                return candidate
        return base

    if lower.endswith("ies") and len(lower) > 4:
        return lower[:-3] + "y"

    if lower.endswith("s") and not lower.endswith("ss") and len(lower) > 3:
        return lower[:-1]

    return lower


def tag_pos(word: str, lemma: str, context: list[str], index: int) -> str:
    """Heuristic part-of-speech tag: lexicons, then neighbors, then suffixes."""
    lower = word.lower()

    if lemma in ACTION_VERBS:
        return "verb"
    if lemma in STYLE_ADJECTIVES:
        return "adjective"
    if lemma in QUANTITY_WORDS or lemma in PRIORITY_WORDS:
        return "adjective"
    if lemma in TIME_WORDS:
        return "adverb"
    if lemma in STATUS_WORDS:
        return "adjective"
    if lower in STOP_WORDS:
        if lower in _DETERMINERS:
            return "determiner"
        if lower in _CONJUNCTIONS:
            return "conjunction"
        if lower in _PREPOSITIONS:
            return "preposition"
        if lower in _PRONOUNS:
            return "pronoun"

    if re.match(r"^\d+$", word) or re.match(r"^\$[\d,]+", word):
        return "number"

    prev_word = context[index - 1].lower() if index > 0 else ""

    if prev_word in ("more", "very", "really", "quite", "so"):
        return "adjective"
    if prev_word in ("to", "can", "will", "would", "should", "could", "must", "please"):
        return "verb"
    if prev_word in ("a", "an", "the", "my", "your", "our", "their"):
        return "noun"

    if _NOUN_SUFFIX.search(lower):
        return "noun"
    if _ADJECTIVE_SUFFIX.search(lower):
        return "adjective"

    return "noun" if len(lower) > 2 and lower not in STOP_WORDS else "unknown"


def importance(word: str, lemma: str, pos: str) -> float:
    score = 0.5
    if pos == "noun":
        score += 0.3
    elif pos == "verb":
        score += 0.2
    elif pos == "adjective":
        score += 0.1

    if lemma in ACTION_VERBS:
        score += 0.2
    if lemma in STOP_WORDS:
        score -= 0.4
    if len(word) > 6:
        score += 0.1

    return min(max(score, 0.0), 1.0)


def tokenize(normalized: str) -> list[Token]:
    words = [w for w in normalized.split(" ") if w]
    tokens = []
    for index, word in enumerate(words):
        cleaned = re.sub(r"[.,!?'\"]", "", word)
        lemma = lemmatize(cleaned)
        pos = tag_pos(cleaned, lemma, words, index)
        tokens.append(
            Token(
                text=word,
                lemma=lemma,
                pos=pos,
                index=index,
                importance=importance(cleaned, lemma, pos),
            )
        )
    return tokens


def detect_semantic_intents(normalized: str) -> list[SemanticIntent]:
    """All semantic intents whose pattern fires, in pattern order, deduplicated."""
    intents: list[SemanticIntent] = []
    for pattern, intent in SEMANTIC_PATTERNS:
        if pattern.search(normalized) and intent not in intents:
            intents.append(intent)
    return intents


def extract_phrases(tokens: list[Token]) -> list[str]:
    """Runs of two or more important, non-stop-word tokens."""
    phrases = []
    current: list[str] = []

    for token in tokens:
        if token.importance > 0.5 and token.lemma not in STOP_WORDS:
            current.append(re.sub(r"[.,!?'\"]", "", token.text))
            continue
        if len(current) >= 2:
            phrases.append(" ".join(current))
        current = []

    if len(current) >= 2:
        phrases.append(" ".join(current))

    return phrases


def parse(text: str) -> ParsedInput:
    """Parse free text into a ParsedInput."""
    normalized = normalize(text)
    tokens = tokenize(normalized)

    return ParsedInput(
        original=text,
        normalized=normalized,
        tokens=tokens,
        actions=[t.lemma for t in tokens if t.pos == "verb" and t.lemma in ACTION_VERBS],
        nouns=[t.lemma for t in tokens if t.pos == "noun" and t.lemma not in STOP_WORDS and t.lemma],
        adjectives=[t.lemma for t in tokens if t.pos == "adjective"],
        phrases=extract_phrases(tokens),
        intents=detect_semantic_intents(normalized),
    )


__all__ = [
    "ACTION_VERBS",
    "STOP_WORDS",
    "SEMANTIC_PATTERNS",
    "normalize",
    "lemmatize",
    "tokenize",
    "detect_semantic_intents",
    "extract_phrases",
    "parse",
]
