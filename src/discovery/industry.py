"""
Industry resolution.

Keyword-table fallback used when the text-completion provider is unavailable,
plus the helpers that map kit ids to the ResolvedIndustry view the classifiers
use.

Scoring: each kit keyword found in the text (as a word prefix, so "plumb"
matches "plumbing") adds its token count. Highest total wins; ties go to the
kit listed first. Confidence depends on how the match was made:

    self-identification ("I'm a plumber", "we run a bakery")  0.65
    multi-word match (score >= 2)                             0.55
    single keyword                                            0.45
"""

import re
from typing import Optional

from pydantic import BaseModel, Field

from src.catalog.kits import KITS, KITS_BY_ID, get_kit_knowledge
from src.catalog.schema import KitKnowledge, SubVerticalOption
from src.discovery.constants import (
    FALLBACK_CONFIDENCE_CAP,
    MULTI_WORD_CONFIDENCE,
    SELF_IDENTIFIED_CONFIDENCE,
    SINGLE_KEYWORD_CONFIDENCE,
)
from src.discovery.models import ResolvedIndustry
from src.discovery.parser import normalize


SELF_IDENTIFICATION = (
    r"\b(?:i am|i'm|im|we are|we're|i run|we run|i own|we own|i operate|we operate"
    r"|i work as|my business is|our business is|my company is|i have|we have)\s+"
    r"(?:an?\s+|the\s+|my\s+|our\s+)?(?:[\w'-]+\s+){0,3}?"
)


def _keyword_pattern(keyword: str) -> re.Pattern:
    return re.compile(r"\b" + re.escape(keyword.lower()))


_KIT_PATTERNS: list[tuple[KitKnowledge, list[tuple[str, re.Pattern]]]] = [
    (kit, [(kw, _keyword_pattern(kw)) for kw in kit.keywords]) for kit in KITS
]


class IndustryMatch(BaseModel):
    """Outcome of the keyword fallback for one piece of text."""

    kit_id: str
    score: int
    matched: list[str] = Field(default_factory=list)
    self_identified: bool = False
    confidence: float


def score_kits(text: str) -> list[tuple[KitKnowledge, int, list[str]]]:
    """Every kit with at least one keyword hit, in catalog order."""
    normalized = normalize(text)
    results = []
    for kit, patterns in _KIT_PATTERNS:
        matched = [kw for kw, pattern in patterns if pattern.search(normalized)]
        if matched:
            results.append((kit, sum(len(kw.split()) for kw in matched), matched))
    return results


def is_self_identified(text: str, keywords: list[str]) -> bool:
    normalized = normalize(text)
    return any(
        re.search(SELF_IDENTIFICATION + re.escape(kw.lower()), normalized)
        for kw in keywords
    )


def resolve_industry(text: str) -> Optional[IndustryMatch]:
    """Best kit for free text, or None when no keyword matches."""
    best: Optional[tuple[KitKnowledge, int, list[str]]] = None
    for candidate in score_kits(text):
        if best is None or candidate[1] > best[1]:
            best = candidate

    if best is None:
        return None

    kit, score, matched = best
    self_identified = is_self_identified(text, matched)
    if self_identified:
        confidence = SELF_IDENTIFIED_CONFIDENCE
    elif score >= 2:
        confidence = MULTI_WORD_CONFIDENCE
    else:
        confidence = SINGLE_KEYWORD_CONFIDENCE

    return IndustryMatch(
        kit_id=kit.id,
        score=score,
        matched=matched,
        self_identified=self_identified,
        confidence=min(confidence, FALLBACK_CONFIDENCE_CAP),
    )


def detect_sub_vertical(text: str, kit: KitKnowledge) -> Optional[SubVerticalOption]:
    """
    Which sub-vertical of an ambiguous kit the text points at.

    Returns None when the kit has no sub-verticals, nothing matches, or two
    options match equally well.
    """
    if not kit.sub_verticals:
        return None

    normalized = normalize(text)
    scored = []
    for option in kit.sub_verticals:
        hits = sum(1 for kw in option.keywords if _keyword_pattern(kw).search(normalized))
        scored.append((hits, option))

    scored.sort(key=lambda item: item[0], reverse=True)
    top_hits, top = scored[0]
    if top_hits == 0 or (len(scored) > 1 and scored[1][0] == top_hits):
        return None
    return top


def resolved_industry_for(kit_id: Optional[str]) -> ResolvedIndustry:
    """Classifier view of a kit; unknown ids resolve to the general kit."""
    kit = get_kit_knowledge(kit_id)
    return ResolvedIndustry(
        id=kit.category,
        kit_id=kit.id,
        name=kit.name,
        profession_id=kit.profession,
    )


def match_kit_label(label: Optional[str]) -> Optional[str]:
    """
    Map a free-form industry label (e.g. from the AI path) to a kit id.

    Tries the id itself, then display names, then the keyword fallback.
    """
    if not label:
        return None

    candidate = label.strip().lower().replace("_", "-").replace(" ", "-")
    if candidate in KITS_BY_ID:
        return candidate

    lowered = label.strip().lower()
    for kit in KITS:
        if kit.name.lower() == lowered:
            return kit.id

    match = resolve_industry(label)
    return match.kit_id if match else None


__all__ = [
    "IndustryMatch",
    "score_kits",
    "is_self_identified",
    "resolve_industry",
    "detect_sub_vertical",
    "resolved_industry_for",
    "match_kit_label",
]
