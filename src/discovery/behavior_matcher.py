"""
Behavior Matcher.

Picks the single behavior bundle (vertical template) that best fits the
description, or None when nothing fits well enough.
"""

from typing import Optional

import structlog

from src.catalog.behaviors import BEHAVIOR_BUNDLES
from src.catalog.schema import BehaviorBundle
from src.discovery.constants import (
    BEHAVIOR_FEATURE_WEIGHT,
    BEHAVIOR_INDUSTRY_WEIGHT,
    BEHAVIOR_KEYWORD_WEIGHT,
    BEHAVIOR_MATCH_THRESHOLD,
    BEHAVIOR_NOUN_WEIGHT,
    BEHAVIOR_PROFESSION_WEIGHT,
)
from src.discovery.models import DetectedFeature, MatchedBehavior, ParsedInput, ResolvedIndustry

logger = structlog.get_logger(__name__)


class BehaviorMatcher:
    """Scores behavior bundles and returns the arg-max."""

    def __init__(self, bundles: Optional[list[BehaviorBundle]] = None):
        self.bundles = bundles if bundles is not None else BEHAVIOR_BUNDLES

    def score_bundle(
        self,
        bundle: BehaviorBundle,
        parsed: ParsedInput,
        industry: ResolvedIndustry,
        feature_ids: set[str],
    ) -> tuple[float, str]:
        score = 0.0
        reasons: list[str] = []

        for keyword in bundle.keywords:
            if keyword in parsed.normalized:
                score += BEHAVIOR_KEYWORD_WEIGHT * (bundle.weight / 10)
                reasons.append(f'keyword "{keyword}"')

        if industry.id in bundle.industries:
            score += BEHAVIOR_INDUSTRY_WEIGHT
            reasons.append(f"industry {industry.name}")

        if industry.profession_id and industry.profession_id == bundle.id:
            score += BEHAVIOR_PROFESSION_WEIGHT
            reasons.append("profession match")

        if bundle.features:
            overlap = sum(1 for f in bundle.features if f in feature_ids)
            score += (overlap / len(bundle.features)) * BEHAVIOR_FEATURE_WEIGHT
            if overlap:
                reasons.append(f"{overlap} feature match")

        for noun in parsed.nouns:
            if any(noun in k or k.split(" ")[0] in noun for k in bundle.keywords):
                score += BEHAVIOR_NOUN_WEIGHT
                reasons.append(f'noun "{noun}"')
                break

        score *= 1 + (bundle.weight - 5) * 0.05
        return min(max(score, 0.0), 1.0), "; ".join(reasons[:2]) or "general match"

    def match(
        self,
        parsed: ParsedInput,
        industry: ResolvedIndustry,
        features: list[DetectedFeature],
    ) -> Optional[MatchedBehavior]:
        """
        Best bundle for this input.

        Ties go to the bundle listed first in the catalog. Returns None when the
        best score is below BEHAVIOR_MATCH_THRESHOLD.
        """
        feature_ids = {f.id for f in features}
        best: Optional[BehaviorBundle] = None
        best_score = -1.0
        best_reason = ""

        for bundle in self.bundles:
            score, reason = self.score_bundle(bundle, parsed, industry, feature_ids)
            if score > best_score:
                best, best_score, best_reason = bundle, score, reason

        if best is None or best_score < BEHAVIOR_MATCH_THRESHOLD:
            logger.debug("behavior_no_match", best_score=round(max(best_score, 0.0), 3))
            return None

        return MatchedBehavior(
            id=best.id,
            name=best.name,
            confidence=best_score,
            features=list(best.features),
            entities=list(best.entities),
            workflows=list(best.workflows),
            theme=best.theme,
            reasoning=best_reason,
        )


__all__ = ["BehaviorMatcher"]
