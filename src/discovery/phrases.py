"""
Trigger phrase tables and acknowledgment pools.

All free-text triggers the conversation reacts to (quick-build, affirmative,
negative, vague, skip) are plain data here, with small pure functions on top,
so each table can be tested on its own.

Acknowledgments are picked with an explicit random.Random so that replaying a
turn with the same state gives the same wording.
"""

import random
import re
from enum import Enum
from typing import Optional, Sequence

from src.discovery.constants import VAGUE_ANSWER_LENGTH
from src.discovery.parser import normalize


# =============================================================================
# Trigger Tables
# =============================================================================

QUICK_BUILD_PHRASES: list[str] = [
    "just build it",
    "just build",
    "build it now",
    "build now",
    "build it",
    "go ahead and build",
    "start building",
    "let's build",
    "lets build",
    "just make it",
    "make it now",
    "skip the questions",
    "skip questions",
    "skip all",
    "enough questions",
    "that's enough",
    "ship it",
    "skip",
    "done",
]

# A quick-build phrase preceded by one of these is not a quick build ("don't build it yet").
QUICK_BUILD_BLOCKERS: list[str] = ["don't", "dont", "do not", "not yet", "before you build", "wait"]

SKIP_PHRASES: list[str] = [
    "skip",
    "skip this",
    "skip it",
    "skip that",
    "pass",
    "no preference",
    "none",
    "doesn't matter",
    "don't care",
    "whatever",
    "n/a",
    "not sure yet",
]

AFFIRMATIVE_PHRASES: list[str] = [
    "yes",
    "yeah",
    "yep",
    "yup",
    "ya",
    "sure",
    "correct",
    "right",
    "exactly",
    "perfect",
    "great",
    "good",
    "ok",
    "okay",
    "absolutely",
    "definitely",
    "of course",
    "confirmed",
    "confirm",
    "approve",
    "looks good",
    "looks great",
    "looks right",
    "sounds good",
    "sounds great",
    "sounds right",
    "that's right",
    "thats right",
    "that's it",
    "that works",
    "all good",
    "spot on",
    "love it",
    "go for it",
    "let's do it",
    "lets do it",
]

NEGATIVE_PHRASES: list[str] = [
    "no",
    "nope",
    "nah",
    "wrong",
    "incorrect",
    "not quite",
    "not really",
    "not exactly",
    "not right",
    "not it",
    "that's wrong",
    "thats wrong",
    "that's not right",
    "doesn't look right",
    "actually no",
]

VAGUE_ANSWERS: list[str] = [
    "yes",
    "no",
    "maybe",
    "not sure",
    "idk",
    "i don't know",
    "dont know",
    "dunno",
    "sure",
    "ok",
    "okay",
    "kind of",
    "sort of",
    "probably",
    "possibly",
    "perhaps",
    "whatever",
    "yeah",
    "yep",
    "nope",
    "nah",
]

# Words that carry no new information after a yes/no ("nope, that's wrong").
FILLER_WORDS = frozenset({
    "that's", "thats", "it", "is", "its", "it's", "not", "right", "wrong", "quite",
    "really", "thanks", "thank", "you", "please", "so", "well", "um", "uh", "hmm",
    "the", "this", "that", "just", "actually", "yet", "all", "looks", "look", "good",
    "great", "sounds", "perfect", "ok", "okay", "yes", "no", "to", "me", "for",
    "now", "and", "but", "exactly", "correct", "totally", "definitely", "nope",
    "yeah", "yep", "sure", "go", "ahead", "lol",
})


class ConfirmationKind(str, Enum):
    AFFIRMATIVE = "affirmative"
    NEGATIVE = "negative"
    ELABORATION = "elaboration"


def _clean(text: str) -> str:
    """Normalized text with sentence punctuation removed."""
    cleaned = re.sub(r"[.,!?\"]", " ", normalize(text))
    return re.sub(r"\s+", " ", cleaned).strip()


def _contains_phrase(cleaned: str, phrase: str) -> bool:
    return re.search(r"(?<![\w'])" + re.escape(phrase) + r"(?![\w'])", cleaned) is not None


def _leading_phrase(cleaned: str, phrases: Sequence[str]) -> Optional[str]:
    """Longest phrase the reply starts with, as whole words."""
    best = None
    for phrase in phrases:
        if cleaned == phrase or cleaned.startswith(phrase + " "):
            if best is None or len(phrase) > len(best):
                best = phrase
    return best


def _has_substance(remainder: str) -> bool:
    return any(len(w) > 2 and w not in FILLER_WORDS for w in remainder.split())


# =============================================================================
# Classifiers
# =============================================================================

def is_quick_build(text: str, allow_bare_skip: bool = True) -> bool:
    """
    Whether the reply asks to stop asking and build now.

    The phrase has to lead the reply, after nothing but filler ("ok, ship
    it"), and whatever follows it must carry no new information ("skip the
    questions please"). An answer that merely mentions building somewhere
    ("later I want you to build it so customers can book") is an answer.
    With allow_bare_skip=False a bare "skip" is left for the current
    question to handle.
    """
    cleaned = _clean(text)
    if not cleaned:
        return False
    if any(_contains_phrase(cleaned, b) for b in QUICK_BUILD_BLOCKERS):
        return False

    words = cleaned.split()
    for i, word in enumerate(words):
        candidate = " ".join(words[i:])
        phrase = _leading_phrase(candidate, QUICK_BUILD_PHRASES)
        if phrase is not None:
            if phrase == "skip" and not allow_bare_skip:
                return False
            return not _has_substance(candidate[len(phrase):])
        if word not in FILLER_WORDS:
            break
    return False


def is_skip(text: str) -> bool:
    """Whether the reply skips the current personalization question."""
    return _clean(text) in SKIP_PHRASES


def classify_confirmation(text: str) -> ConfirmationKind:
    """
    Sort a reply to the confirmation summary into affirmative, negative or elaboration.

    A yes or no followed by new content ("not quite, I also do car repairs")
    is an elaboration: the content is what matters.
    """
    cleaned = _clean(text)
    if not cleaned:
        return ConfirmationKind.ELABORATION

    negative = _leading_phrase(cleaned, NEGATIVE_PHRASES)
    affirmative = _leading_phrase(cleaned, AFFIRMATIVE_PHRASES)

    if negative and (not affirmative or len(negative) >= len(affirmative)):
        remainder = cleaned[len(negative):]
        return ConfirmationKind.ELABORATION if _has_substance(remainder) else ConfirmationKind.NEGATIVE

    if affirmative:
        remainder = cleaned[len(affirmative):]
        return ConfirmationKind.ELABORATION if _has_substance(remainder) else ConfirmationKind.AFFIRMATIVE

    # "this looks good", "I think that's right"
    multi_word = [p for p in AFFIRMATIVE_PHRASES if " " in p]
    if any(_contains_phrase(cleaned, p) for p in multi_word) and not any(
        _contains_phrase(cleaned, n) for n in NEGATIVE_PHRASES
    ):
        return ConfirmationKind.AFFIRMATIVE

    return ConfirmationKind.ELABORATION


def is_vague(text: str) -> bool:
    """Short answers and bare yes/no/maybe replies."""
    stripped = text.strip()
    if len(stripped) < VAGUE_ANSWER_LENGTH:
        return True
    return _clean(stripped) in VAGUE_ANSWERS


# =============================================================================
# Personalization
# =============================================================================

THEME_PRESETS: dict[str, list[str]] = {
    "professional": ["professional", "corporate", "business", "formal", "serious", "trustworthy"],
    "modern": ["modern", "sleek", "fresh", "contemporary", "techy"],
    "minimal": ["minimal", "simple", "clean", "calm", "quiet", "understated"],
    "bold": ["bold", "vibrant", "bright", "colorful", "energetic", "loud"],
    "playful": ["playful", "fun", "friendly", "casual", "cheerful", "warm"],
    "elegant": ["elegant", "luxury", "luxurious", "premium", "sophisticated", "classy"],
    "dark": ["dark", "night", "moody"],
}

DEFAULT_THEME = "professional"

VIBE_QUESTION = "Almost there. What vibe should the app have?"
VIBE_OPTIONS = ["Professional", "Modern", "Minimal", "Bold", "Playful", "Skip"]
NAME_QUESTION = "What's the name of your business? (You can say skip.)"

_NAME_PREFIXES = re.compile(
    r"^(?:it's called|its called|it is called|we're called|we are called|we're|"
    r"the name is|our name is|my business is called|my business is|name is|called)\s+",
    re.IGNORECASE,
)


def match_theme_preset(text: str) -> Optional[str]:
    """First preset whose vocabulary appears in the reply."""
    cleaned = _clean(text)
    for preset, words in THEME_PRESETS.items():
        if any(re.search(r"\b" + re.escape(w), cleaned) for w in words):
            return preset
    return None


def clean_business_name(text: str) -> Optional[str]:
    """Strip lead-ins like "it's called" and surrounding punctuation."""
    name = _NAME_PREFIXES.sub("", text.strip())
    name = name.strip(" \t\"'.!?")
    return name or None


# =============================================================================
# Acknowledgments
# =============================================================================

INDUSTRY_NAMES: dict[str, str] = {
    "restaurant": "restaurant",
    "bakery": "bakery",
    "salon": "salon",
    "fitness-coach": "personal training",
    "gym": "gym/fitness studio",
    "real-estate": "real estate",
    "property-management": "property management",
    "medical": "healthcare",
    "dental": "dental",
    "therapy": "therapy",
    "plumber": "plumbing",
    "electrician": "electrical services",
    "hvac": "HVAC",
    "contractor": "contracting",
    "cleaning": "cleaning services",
    "commercial-cleaning": "commercial cleaning",
    "tutor": "tutoring",
    "mechanic": "auto repair",
    "landscaping": "landscaping",
    "home-health": "home health care",
    "photography": "photography",
    "consulting": "consulting",
    "legal": "legal",
    "ecommerce": "online store",
    "general": "business",
}


def format_industry_name(kit_id: Optional[str]) -> str:
    if not kit_id:
        return "business"
    return INDUSTRY_NAMES.get(kit_id, kit_id.replace("-", " "))


def industry_understood(industry: str) -> list[str]:
    return [
        f"Got it - {industry}! I can work with that.",
        f"{industry.capitalize()} - perfect, I know exactly the kind of app you need.",
        f"A {industry} app - great, that helps me understand what to build.",
    ]


NEEDS_CLARIFICATION = [
    "I'd like to understand better - can you tell me what your business actually does? What's the main service or product?",
    "Help me out - what kind of work do you do day-to-day? That'll help me build the right app.",
    "I want to make sure I build something useful - what does your business do exactly?",
]

TEAM_SIZE_UNDERSTOOD: dict[str, list[str]] = {
    "solo": [
        "Solo operation - got it. I'll keep things simple and focused.",
        "Just you - perfect, I'll build something lean that doesn't overwhelm.",
    ],
    "small": [
        "Small team - I'll include what you need to coordinate without overcomplicating things.",
        "Got it, small crew. I'll add team features that actually help.",
    ],
    "team": [
        "Larger team - I'll make sure there's proper organization and permissions.",
        "Understood - I'll build in the team management features you'll need.",
    ],
}

LEARNED_NOTHING = [
    "I'm not quite following - can you tell me more about what you need?",
    "Help me understand better - what kind of business is this for?",
    "I want to make sure I get this right - what does your business do?",
]

NEUTRAL = [
    "Okay.",
    "Got it.",
    "Understood.",
]


def ready_to_build(industry: str, team_size: Optional[str]) -> list[str]:
    who = "a solo operation" if team_size == "solo" else "a team"
    return [
        f"Got it - a {industry} app for {who}. Let me build that for you.",
        f"Perfect - I understand what you need. Building your {industry} app now.",
        f"Clear picture now. Let me create something that fits your {industry} business.",
    ]


COMPLETION = [
    "Alright, I have what I need. Building your app now.",
    "Got enough to work with. Let me put this together for you.",
    "I think I understand what you need. Building it now.",
]

NEGATIVE_FOLLOW_UP = [
    "No problem - what should I change?",
    "Got it. What did I get wrong?",
    "Okay, tell me what's off and I'll fix it.",
]

CORRECTION_APPLIED = [
    "Got it, I've updated the plan.",
    "Thanks - I've folded that in.",
    "Makes sense. Here's the updated plan.",
]

CONFIRM_PROMPT = [
    "Does this look right?",
    "Did I get that right?",
    "Anything I missed?",
]


def pick(pool: Sequence[str], rng: random.Random) -> str:
    """Choose one phrase from a pool."""
    return rng.choice(list(pool))


__all__ = [
    "QUICK_BUILD_PHRASES",
    "SKIP_PHRASES",
    "AFFIRMATIVE_PHRASES",
    "NEGATIVE_PHRASES",
    "VAGUE_ANSWERS",
    "ConfirmationKind",
    "is_quick_build",
    "is_skip",
    "classify_confirmation",
    "is_vague",
    "THEME_PRESETS",
    "DEFAULT_THEME",
    "VIBE_QUESTION",
    "VIBE_OPTIONS",
    "NAME_QUESTION",
    "match_theme_preset",
    "clean_business_name",
    "format_industry_name",
    "industry_understood",
    "NEEDS_CLARIFICATION",
    "TEAM_SIZE_UNDERSTOOD",
    "LEARNED_NOTHING",
    "NEUTRAL",
    "ready_to_build",
    "COMPLETION",
    "NEGATIVE_FOLLOW_UP",
    "CORRECTION_APPLIED",
    "CONFIRM_PROMPT",
    "pick",
]
