"""
Knowledge Catalog Schema.

Pydantic models for the read-only catalogs shipped with the package:
- FeatureDefinition: a product capability the detector can switch on
- BehaviorBundle: a pre-packaged vertical template (e.g. "Plumbing Business")
- KitKnowledge: everything the conversation knows about one industry,
  including its ordered smart questions and sub-vertical options

The enums shared with the discovery package live here so the catalog can be
imported without pulling in any discovery code.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# =============================================================================
# Shared Enums
# =============================================================================

class SlotName(str, Enum):
    """Closed set of ledger slots."""
    INDUSTRY = "industry"
    SUB_VERTICAL = "sub_vertical"
    TEAM_SIZE = "team_size"
    COMPLEXITY = "complexity"
    CUSTOMER_FACING = "customer_facing"
    PRIMARY_ENTITIES = "primary_entities"
    INTEGRATIONS = "integrations"


class Priority(str, Enum):
    """Feature priority, recomputed from score by the detector."""
    ESSENTIAL = "essential"
    IMPORTANT = "important"
    NICE_TO_HAVE = "nice_to_have"


class SemanticIntent(str, Enum):
    """What the user wants the app to do, detected from verb patterns."""
    TRACKING = "tracking"
    SCHEDULING = "scheduling"
    MANAGING = "managing"
    ORGANIZING = "organizing"
    COMMUNICATING = "communicating"
    BILLING = "billing"
    REPORTING = "reporting"
    COLLABORATING = "collaborating"
    AUTOMATING = "automating"
    MONITORING = "monitoring"


# =============================================================================
# Features & Behaviors
# =============================================================================

class FeatureDefinition(BaseModel):
    """A capability the feature detector can score."""

    id: str
    name: str
    keywords: list[str]
    intents: list[SemanticIntent] = Field(default_factory=list)
    dependencies: list[str] = Field(default_factory=list)
    conflicts: list[str] = Field(default_factory=list)
    industries: Optional[list[str]] = Field(
        default=None,
        description="Industry categories this feature is relevant to; None means any",
    )
    default_priority: Priority
    description: str = ""


class BehaviorBundle(BaseModel):
    """A vertical template matched against the whole description."""

    id: str
    name: str
    description: str = ""
    keywords: list[str]
    industries: list[str]
    features: list[str]
    entities: list[str]
    workflows: list[str] = Field(default_factory=list)
    theme: str = Field(default="professional", description="Default visual preset")
    weight: int = Field(ge=1, le=10, description="Higher = more specific")


# =============================================================================
# Industry Kits
# =============================================================================

class SmartQuestion(BaseModel):
    """An industry-specific clarifying question."""

    id: str
    question: str
    purpose: str
    slot: Optional[SlotName] = Field(
        default=None,
        description="Ledger slot this question resolves; None for feature-only questions",
    )
    options: list[str] = Field(default_factory=list)
    enables: list[str] = Field(
        default_factory=list,
        description="Feature ids switched on by an affirmative answer",
    )


class SubVerticalOption(BaseModel):
    """One side of an ambiguous industry (e.g. rentals vs. sales)."""

    value: str
    label: str
    kit: str
    keywords: list[str] = Field(default_factory=list)


class KitKnowledge(BaseModel):
    """Per-industry knowledge entry."""

    id: str
    name: str
    category: str
    profession: Optional[str] = Field(
        default=None,
        description="Behavior bundle id for this profession, if one exists",
    )
    keywords: list[str] = Field(description="Trigger phrases, including common misspellings")
    entities: list[str] = Field(default_factory=list)
    smart_questions: list[SmartQuestion] = Field(default_factory=list)
    core_features: list[str] = Field(default_factory=list)
    optional_features: list[str] = Field(default_factory=list)
    feature_descriptions: dict[str, str] = Field(default_factory=dict)
    sub_verticals: list[SubVerticalOption] = Field(default_factory=list)

    @property
    def has_sub_verticals(self) -> bool:
        return len(self.sub_verticals) > 0

    def question(self, question_id: str) -> Optional[SmartQuestion]:
        """Look up a smart question by id."""
        for q in self.smart_questions:
            if q.id == question_id:
                return q
        return None

    def describe_feature(self, feature_id: str) -> str:
        """Human-readable feature description, falling back to the id."""
        return self.feature_descriptions.get(feature_id, feature_id.replace("_", " "))


__all__ = [
    "SlotName",
    "Priority",
    "SemanticIntent",
    "FeatureDefinition",
    "BehaviorBundle",
    "SmartQuestion",
    "SubVerticalOption",
    "KitKnowledge",
]
