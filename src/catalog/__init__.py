"""
Knowledge Catalogs.

Read-only data shipped with the package:

- features: FeatureDefinition catalog and suggested implementations
- behaviors: BehaviorBundle vertical templates
- kits: KitKnowledge per industry, smart questions and sub-verticals

Example:
    from src.catalog import get_kit_knowledge

    kit = get_kit_knowledge("plumber")
    first = kit.smart_questions[0].question
"""

from src.catalog.schema import (
    SlotName,
    Priority,
    SemanticIntent,
    FeatureDefinition,
    BehaviorBundle,
    SmartQuestion,
    SubVerticalOption,
    KitKnowledge,
)
from src.catalog.features import FEATURES, FEATURES_BY_ID, SUGGESTED_IMPLEMENTATIONS
from src.catalog.behaviors import BEHAVIOR_BUNDLES, BUNDLES_BY_ID
from src.catalog.kits import (
    KITS,
    KITS_BY_ID,
    GENERAL_KIT,
    FALLBACK_QUESTIONS,
    TEAM_SIZE_FEATURES,
    BUSINESS_TYPE,
    QUESTIONS_BY_ID,
    get_kit_knowledge,
    is_known_kit,
    question_plan,
    find_question,
)

__all__ = [
    # Schema
    "SlotName",
    "Priority",
    "SemanticIntent",
    "FeatureDefinition",
    "BehaviorBundle",
    "SmartQuestion",
    "SubVerticalOption",
    "KitKnowledge",
    # Features
    "FEATURES",
    "FEATURES_BY_ID",
    "SUGGESTED_IMPLEMENTATIONS",
    # Behaviors
    "BEHAVIOR_BUNDLES",
    "BUNDLES_BY_ID",
    # Kits
    "KITS",
    "KITS_BY_ID",
    "GENERAL_KIT",
    "FALLBACK_QUESTIONS",
    "TEAM_SIZE_FEATURES",
    "BUSINESS_TYPE",
    "QUESTIONS_BY_ID",
    "get_kit_knowledge",
    "is_known_kit",
    "question_plan",
    "find_question",
]
