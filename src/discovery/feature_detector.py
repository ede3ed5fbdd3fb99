"""
Feature Detector.

Scores every catalog feature against a parsed description, gates features on
their dependencies, and tops the result up with the features every app in the
resolved industry needs.

Scoring is additive per feature:
- +0.25 per distinct keyword found in the normalized text
- +0.2 per declared intent present in the parsed intents
- +0.15 if the feature is relevant to the resolved industry category
- +0.15 for the first noun that overlaps a keyword
- +0.1 for the first action verb contained in a keyword
- +0.15 for the first multi-word phrase sharing a token with a keyword
"""

from typing import Optional

import structlog

from src.catalog.features import FEATURES, FEATURES_BY_ID, SUGGESTED_IMPLEMENTATIONS
from src.catalog.schema import FeatureDefinition, Priority
from src.discovery.constants import (
    ACTION_WEIGHT,
    ALWAYS_INCLUDE_CONFIDENCE,
    DEPENDENCY_GATE_THRESHOLD,
    INDUSTRY_WEIGHT,
    INTENT_WEIGHT,
    KEYWORD_WEIGHT,
    MIN_FEATURE_SCORE,
    NOUN_WEIGHT,
    PHRASE_WEIGHT,
    PRIORITY_ESSENTIAL,
    PRIORITY_IMPORTANT,
)
from src.discovery.models import DetectedFeature, FeatureScore, ParsedInput, ResolvedIndustry

logger = structlog.get_logger(__name__)


def priority_for_score(score: float) -> Priority:
    """Priority is recomputed from score, overriding the catalog default."""
    if score > PRIORITY_ESSENTIAL:
        return Priority.ESSENTIAL
    if score >= PRIORITY_IMPORTANT:
        return Priority.IMPORTANT
    return Priority.NICE_TO_HAVE


def _noun_overlaps(noun: str, keywords: list[str]) -> bool:
    return any(noun in k or k.split(" ")[0] in noun for k in keywords)


class FeatureDetector:
    """Detects product features from a parsed description."""

    def __init__(self, features: Optional[list[FeatureDefinition]] = None):
        self.features = features if features is not None else FEATURES
        self._by_id = {f.id: f for f in self.features} if features is not None else FEATURES_BY_ID

    # -------------------------------------------------------------------------
    # Scoring
    # -------------------------------------------------------------------------

    def score_features(self, parsed: ParsedInput, industry: ResolvedIndustry) -> list[FeatureScore]:
        """Score every feature; features with no signal at all are omitted."""
        results = []
        text = parsed.normalized
        phrase_tokens = [set(p.lower().split(" ")) for p in parsed.phrases]

        for feature in self.features:
            score = 0.0
            reasons: list[str] = []

            for keyword in dict.fromkeys(feature.keywords):
                if keyword in text:
                    score += KEYWORD_WEIGHT
                    reasons.append(f'matched keyword "{keyword}"')

            for intent in feature.intents:
                if intent in parsed.intents:
                    score += INTENT_WEIGHT
                    reasons.append(f"matched intent {intent.value}")

            if feature.industries and industry.id in feature.industries:
                score += INDUSTRY_WEIGHT
                reasons.append(f"relevant to {industry.name}")

            for noun in parsed.nouns:
                if _noun_overlaps(noun, feature.keywords):
                    score += NOUN_WEIGHT
                    reasons.append(f'noun "{noun}" suggests this feature')
                    break

            for action in parsed.actions:
                if any(action in k for k in feature.keywords):
                    score += ACTION_WEIGHT
                    reasons.append(f'action "{action}" relates to this feature')
                    break

            for phrase, words in zip(parsed.phrases, phrase_tokens):
                if any(w in words for k in feature.keywords for w in k.split(" ")):
                    score += PHRASE_WEIGHT
                    reasons.append(f'phrase "{phrase}" suggests this feature')
                    break

            if score > 0:
                results.append(FeatureScore(feature_id=feature.id, score=score, reasons=reasons))

        return results

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def select(self, scores: list[FeatureScore], industry: ResolvedIndustry) -> list[DetectedFeature]:
        """
        Turn raw scores into detected features.

        Filters to score > MIN_FEATURE_SCORE, sorts by descending score (stable,
        so catalog order breaks ties), drops any feature whose dependencies did
        not score > DEPENDENCY_GATE_THRESHOLD in the same pass, then appends the
        industry's always-on features.
        """
        ranked = sorted(
            (s for s in scores if s.score > MIN_FEATURE_SCORE),
            key=lambda s: s.score,
            reverse=True,
        )
        gate = {s.feature_id for s in ranked if s.score > DEPENDENCY_GATE_THRESHOLD}

        detected: list[DetectedFeature] = []
        for item in ranked:
            feature = self.get_feature(item.feature_id)
            if feature is None:
                continue
            missing = [dep for dep in feature.dependencies if dep not in gate]
            if missing:
                logger.debug(
                    "feature_dependency_gated",
                    feature=feature.id,
                    score=round(item.score, 3),
                    missing=missing,
                )
                continue

            detected.append(
                DetectedFeature(
                    id=feature.id,
                    name=feature.name,
                    confidence=item.score,
                    priority=priority_for_score(item.score),
                    reasoning="; ".join(item.reasons[:2]),
                    dependencies=list(feature.dependencies),
                    suggested_implementation=SUGGESTED_IMPLEMENTATIONS.get(feature.id, ""),
                )
            )

        present = {d.id for d in detected}
        for feature in self.essential_features(industry):
            if feature.id in present:
                continue
            detected.append(
                DetectedFeature(
                    id=feature.id,
                    name=feature.name,
                    confidence=ALWAYS_INCLUDE_CONFIDENCE,
                    priority=Priority.ESSENTIAL,
                    reasoning=f"standard feature for {industry.name}",
                    dependencies=list(feature.dependencies),
                    suggested_implementation=SUGGESTED_IMPLEMENTATIONS.get(feature.id, ""),
                )
            )

        return detected

    def detect(self, parsed: ParsedInput, industry: ResolvedIndustry) -> list[DetectedFeature]:
        """Score, gate and top up in one pass."""
        return self.select(self.score_features(parsed, industry), industry)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def essential_features(self, industry: ResolvedIndustry) -> list[FeatureDefinition]:
        """crud, plus default-essential features relevant to the category."""
        return [
            f
            for f in self.features
            if f.id == "crud"
            or (
                f.default_priority == Priority.ESSENTIAL
                and (f.industries is None or industry.id in f.industries)
            )
        ]

    def get_feature(self, feature_id: str) -> Optional[FeatureDefinition]:
        return self._by_id.get(feature_id)

    def dependents_of(self, feature_id: str) -> list[FeatureDefinition]:
        """Features that declare a dependency on feature_id."""
        return [f for f in self.features if feature_id in f.dependencies]


__all__ = [
    "FeatureDetector",
    "priority_for_score",
]
