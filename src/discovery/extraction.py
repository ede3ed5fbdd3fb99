"""
Slot extraction heuristics.

Regex and keyword-table readings of one reply, used by the input analyzer's
fallback path and to back up the AI path on answers to specific questions.
Each detector returns a typed SlotUpdate (or None); extract_slots() runs them
all for one turn.

Confidences here are raw; the analyzer applies the fallback cap.
"""

import re
from typing import Optional

from src.catalog.schema import KitKnowledge, SlotName, SmartQuestion
from src.discovery.models import (
    AppIntent,
    ComplexityUpdate,
    CustomerFacingUpdate,
    IntegrationsUpdate,
    PrimaryEntitiesUpdate,
    SlotSource,
    SlotUpdate,
    TeamSizeUpdate,
)
from src.discovery.parser import normalize
from src.discovery.phrases import ConfirmationKind, classify_confirmation


# =============================================================================
# Team Size
# =============================================================================

SOLO_PATTERN = re.compile(
    r"\b(solo|myself|just me|only me|one person|one-man|one man|by myself|on my own"
    r"|freelancer?|independent|sole trader|sole proprietor)\b"
)
SMALL_TEAM_PATTERN = re.compile(r"\b(small team|small crew|few people|couple of|partner|2-5)\b")
MEDIUM_TEAM_PATTERN = re.compile(r"\b(6-20|medium|mid-sized|growing team|department)\b")
LARGE_TEAM_PATTERN = re.compile(
    r"\b(large|larger|big team|enterprise|company-wide|organization)\b|\b(?:20|6)\+"
)
GENERIC_TEAM_PATTERN = re.compile(r"\b(team|staff|employees|crew|workers)\b")
HEADCOUNT_PATTERN = re.compile(
    r"\b(\d+)\s+(?:employees|staff|workers|people|techs|technicians|stylists|trainers|guys)\b"
)


def _team_size_for_headcount(count: int) -> str:
    if count <= 1:
        return "solo"
    if count <= 5:
        return "small"
    if count <= 20:
        return "medium"
    return "large"


def detect_team_size(text: str) -> Optional[TeamSizeUpdate]:
    """
    Team size from phrasing like "just me", "small team", "12 employees".

    Explicit size words win over the bare mention of a team.
    """
    normalized = normalize(text)

    match = SOLO_PATTERN.search(normalized)
    if match:
        return TeamSizeUpdate(
            value="solo", confidence=0.9, source=SlotSource.EXPLICIT, evidence=match.group(0)
        )

    match = HEADCOUNT_PATTERN.search(normalized)
    if match:
        return TeamSizeUpdate(
            value=_team_size_for_headcount(int(match.group(1))),
            confidence=0.85,
            source=SlotSource.EXPLICIT,
            evidence=match.group(0),
        )

    match = SMALL_TEAM_PATTERN.search(normalized)
    if match:
        return TeamSizeUpdate(value="small", confidence=0.85, evidence=match.group(0))

    match = MEDIUM_TEAM_PATTERN.search(normalized)
    if match:
        return TeamSizeUpdate(value="medium", confidence=0.8, evidence=match.group(0))

    match = LARGE_TEAM_PATTERN.search(normalized)
    if match:
        return TeamSizeUpdate(value="large", confidence=0.8, evidence=match.group(0))

    match = GENERIC_TEAM_PATTERN.search(normalized)
    if match:
        return TeamSizeUpdate(value="small", confidence=0.6, evidence=match.group(0))

    return None


# =============================================================================
# Complexity
# =============================================================================

ADVANCED_PATTERN = re.compile(
    r"\b(advanced|large|enterprise|chain|franchise|group|multiple locations|multiple clinics)\b|\d+\+"
)
MEDIUM_PATTERN = re.compile(r"\b(medium|growing|busy|mid-sized)\b")
SIMPLE_PATTERN = re.compile(
    r"\b(simple|basic|small|single|solo|just me|independent|1 location|under \d+)\b"
)
RANGE_PATTERN = re.compile(r"\b(\d+)\s*-\s*(\d+)\b")

TEAM_SIZE_COMPLEXITY = {
    "solo": "simple",
    "small": "medium",
    "medium": "medium",
    "large": "advanced",
}


def detect_complexity(text: str) -> Optional[ComplexityUpdate]:
    """
    Complexity from scale words ("chain", "growing", "single") or numeric ranges.

    Checked from the largest scale down, so "small team, 3 locations, growing"
    reads as medium rather than simple.
    """
    normalized = normalize(text)

    match = ADVANCED_PATTERN.search(normalized)
    if match:
        return ComplexityUpdate(value="advanced", confidence=0.6, evidence=match.group(0))

    match = MEDIUM_PATTERN.search(normalized)
    if match:
        return ComplexityUpdate(value="medium", confidence=0.6, evidence=match.group(0))

    match = RANGE_PATTERN.search(normalized)
    if match:
        value = "simple" if int(match.group(1)) <= 1 else "medium"
        return ComplexityUpdate(value=value, confidence=0.6, evidence=match.group(0))

    match = SIMPLE_PATTERN.search(normalized)
    if match:
        return ComplexityUpdate(value="simple", confidence=0.6, evidence=match.group(0))

    return None


def complexity_from_team_size(update: TeamSizeUpdate) -> ComplexityUpdate:
    """Team size implies a complexity, slightly less confidently."""
    return ComplexityUpdate(
        value=TEAM_SIZE_COMPLEXITY[update.value],
        confidence=update.confidence * 0.9,
        source=SlotSource.INFERRED,
        evidence=f"team size {update.value}",
    )


# =============================================================================
# Customer-Facing, Integrations, Entities, Intent
# =============================================================================

CUSTOMER_FACING_PATTERN = re.compile(
    r"\b(customers? (?:can|will|could|should)|clients? (?:can|will|could|should)|portal"
    r"|book online|online booking|self-serve|customers? book|clients? book|customer-facing)"
)
INTERNAL_PATTERN = re.compile(r"\b(internal|back-office|back office|staff only|just for me|only for me|just us)\b")
HYBRID_PATTERN = re.compile(r"\b(both|hybrid|full|end-to-end)\b")

INTEGRATION_KEYWORDS: dict[str, list[str]] = {
    "stripe": ["stripe", "card payment", "credit card", "online payment"],
    "twilio": ["twilio", "sms", "text message", "texts"],
    "email": ["email", "e-mail", "mailchimp", "newsletter"],
    "google-calendar": ["google calendar", "gcal", "calendar sync"],
    "quickbooks": ["quickbooks", "xero", "accounting software"],
    "zapier": ["zapier", "webhook"],
}

GENERIC_ENTITIES = [
    "customer", "client", "job", "appointment", "invoice", "quote", "order", "product",
    "project", "task", "patient", "student", "member", "property", "tenant", "vehicle",
    "lesson", "booking", "lead", "employee", "inventory",
]

INTENT_KEYWORDS: dict[str, list[str]] = {
    "operations": ["manage", "track", "schedule", "workflow", "organize", "operations"],
    "customer-facing": ["customer", "client", "booking", "appointment", "portal"],
    "internal": ["team", "staff", "employee", "internal"],
    "hybrid": ["both", "full", "complete", "end-to-end"],
}


def detect_customer_facing(text: str) -> Optional[CustomerFacingUpdate]:
    normalized = normalize(text)

    match = CUSTOMER_FACING_PATTERN.search(normalized)
    if match:
        return CustomerFacingUpdate(value=True, confidence=0.85, evidence=match.group(0))

    match = INTERNAL_PATTERN.search(normalized)
    if match:
        return CustomerFacingUpdate(value=False, confidence=0.85, evidence=match.group(0))

    match = HYBRID_PATTERN.search(normalized)
    if match:
        return CustomerFacingUpdate(value=True, confidence=0.7, evidence=match.group(0))

    return None


def detect_integrations(text: str) -> Optional[IntegrationsUpdate]:
    normalized = normalize(text)
    found = [
        name
        for name, keywords in INTEGRATION_KEYWORDS.items()
        if any(re.search(r"\b" + re.escape(kw), normalized) for kw in keywords)
    ]
    if not found:
        return None
    return IntegrationsUpdate(value=found, confidence=0.85, evidence=", ".join(found))


def _mentions(normalized: str, entity: str) -> bool:
    word = entity.replace("_", " ")
    return re.search(r"\b" + re.escape(word), normalized) is not None


def detect_entities(text: str, kit: Optional[KitKnowledge] = None) -> Optional[PrimaryEntitiesUpdate]:
    """Record types the reply names: the kit's own entities first, then common ones."""
    normalized = normalize(text)
    candidates = list(kit.entities) if kit else []
    candidates += [e for e in GENERIC_ENTITIES if e not in candidates]

    found = [e for e in candidates if _mentions(normalized, e)]
    if not found:
        return None
    return PrimaryEntitiesUpdate(value=found, confidence=0.7, evidence=", ".join(found))


def detect_intent(text: str) -> Optional[AppIntent]:
    """Intent with the most keyword hits; ties go to the first listed."""
    normalized = normalize(text)
    best: Optional[str] = None
    best_hits = 0
    for intent, keywords in INTENT_KEYWORDS.items():
        hits = sum(1 for kw in keywords if re.search(r"\b" + re.escape(kw), normalized))
        if hits > best_hits:
            best, best_hits = intent, hits
    return best


# =============================================================================
# Question Answers
# =============================================================================

def answer_for_question(text: str, question: SmartQuestion) -> Optional[SlotUpdate]:
    """
    Read a direct answer to a slot question.

    Handles replies that only make sense in context: "yes" to the booking
    question, "Larger team (6+)" to the team question.
    """
    if question.slot == SlotName.TEAM_SIZE:
        return detect_team_size(text)

    if question.slot == SlotName.COMPLEXITY:
        return detect_complexity(text)

    if question.slot == SlotName.CUSTOMER_FACING:
        update = detect_customer_facing(text)
        if update is not None:
            return update
        kind = classify_confirmation(text)
        if kind == ConfirmationKind.AFFIRMATIVE or re.match(r"^\s*(yes|yeah|yep|sure)\b", text.lower()):
            return CustomerFacingUpdate(value=True, confidence=0.9, source=SlotSource.EXPLICIT, evidence=text)
        if kind == ConfirmationKind.NEGATIVE or re.match(r"^\s*(no|nope|nah|maybe later)\b", text.lower()):
            return CustomerFacingUpdate(value=False, confidence=0.9, source=SlotSource.EXPLICIT, evidence=text)
        return None

    if question.slot == SlotName.INTEGRATIONS:
        update = detect_integrations(text)
        if update is None and re.search(r"\b(none|no|nothing|not yet)\b", normalize(text)):
            return IntegrationsUpdate(value=[], confidence=0.9, source=SlotSource.EXPLICIT, evidence=text)
        return update

    return None


def question_enables(text: str, question: SmartQuestion) -> list[str]:
    """Features switched on by answering a feature question with anything but a no."""
    if not question.enables:
        return []
    normalized = normalize(text)
    if re.match(r"^(no|nope|nah|neither|not really|none)\b", normalized):
        return []
    if question.slot == SlotName.CUSTOMER_FACING and re.search(r"\b(internal|maybe later)\b", normalized):
        return []
    return list(question.enables)


# =============================================================================
# Turn Extraction
# =============================================================================

def extract_slots(
    text: str,
    kit: Optional[KitKnowledge] = None,
    question: Optional[SmartQuestion] = None,
) -> list[SlotUpdate]:
    """
    Every non-industry slot update one reply supports.

    When the reply answers a slot question, that answer replaces the generic
    reading of the same slot.
    """
    updates: list[SlotUpdate] = []

    team_size = detect_team_size(text)
    if team_size is not None:
        updates.append(team_size)

    complexity = detect_complexity(text)
    if complexity is not None:
        updates.append(complexity)
    elif team_size is not None:
        updates.append(complexity_from_team_size(team_size))

    for detector in (detect_customer_facing, detect_integrations):
        update = detector(text)
        if update is not None:
            updates.append(update)

    entities = detect_entities(text, kit)
    if entities is not None:
        updates.append(entities)

    if question is not None and question.slot is not None:
        answer = answer_for_question(text, question)
        if answer is not None:
            updates = [u for u in updates if u.slot != answer.slot]
            updates.append(answer)

    return updates


__all__ = [
    "detect_team_size",
    "detect_complexity",
    "complexity_from_team_size",
    "detect_customer_facing",
    "detect_integrations",
    "detect_entities",
    "detect_intent",
    "answer_for_question",
    "question_enables",
    "extract_slots",
]
