"""
Discovery Engine data models.

Everything that flows through a turn is a Pydantic model:
- Slot / SlotUpdate / CertaintyLedger: what the engine believes, and how sure it is
- ParsedInput / FeatureScore / DetectedFeature / MatchedBehavior: classifier outputs
- AnalysisResult / AIExtraction / CompletionRequest: the input analyzer contract
- ConversationState / DiscoveryResponse / AppConfig: the conversation protocol

ConversationState round-trips through the caller between turns, so it must
stay JSON-serializable.
"""

import random
from enum import Enum
from typing import Annotated, Any, Generic, Literal, Optional, TypeVar, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from src.catalog.schema import Priority, SemanticIntent, SlotName


T = TypeVar("T")

TeamSize = Literal["solo", "small", "medium", "large"]
Complexity = Literal["simple", "medium", "advanced"]
AppIntent = Literal["operations", "customer-facing", "internal", "hybrid"]


def _clamp(value: Any) -> float:
    return min(max(float(value), 0.0), 1.0)


# =============================================================================
# Slots & Ledger
# =============================================================================

class SlotSource(str, Enum):
    """Where a slot value came from."""
    EXPLICIT = "explicit"
    INFERRED = "inferred"
    DEFAULT = "default"


class Slot(BaseModel, Generic[T]):
    """A named piece of inferred knowledge."""

    value: Optional[T] = None
    confidence: float = 0.0
    source: SlotSource = SlotSource.DEFAULT
    evidence: Optional[str] = None

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, v: Any) -> float:
        return _clamp(v)

    @property
    def is_set(self) -> bool:
        if isinstance(self.value, list):
            return len(self.value) > 0
        return self.value is not None


class _SlotUpdateBase(BaseModel):
    confidence: float
    source: SlotSource = SlotSource.INFERRED
    evidence: Optional[str] = None

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, v: Any) -> float:
        return _clamp(v)


class IndustryUpdate(_SlotUpdateBase):
    slot: Literal["industry"] = "industry"
    value: str


class SubVerticalUpdate(_SlotUpdateBase):
    slot: Literal["sub_vertical"] = "sub_vertical"
    value: str


class TeamSizeUpdate(_SlotUpdateBase):
    slot: Literal["team_size"] = "team_size"
    value: TeamSize


class ComplexityUpdate(_SlotUpdateBase):
    slot: Literal["complexity"] = "complexity"
    value: Complexity


class CustomerFacingUpdate(_SlotUpdateBase):
    slot: Literal["customer_facing"] = "customer_facing"
    value: bool


class PrimaryEntitiesUpdate(_SlotUpdateBase):
    slot: Literal["primary_entities"] = "primary_entities"
    value: list[str]


class IntegrationsUpdate(_SlotUpdateBase):
    slot: Literal["integrations"] = "integrations"
    value: list[str]


SlotUpdate = Annotated[
    Union[
        IndustryUpdate,
        SubVerticalUpdate,
        TeamSizeUpdate,
        ComplexityUpdate,
        CustomerFacingUpdate,
        PrimaryEntitiesUpdate,
        IntegrationsUpdate,
    ],
    Field(discriminator="slot"),
]


class CertaintyLedger(BaseModel):
    """The seven slots plus derived gaps and suggestions."""

    industry: Slot[str] = Field(default_factory=Slot[str])
    sub_vertical: Slot[str] = Field(default_factory=Slot[str])
    team_size: Slot[TeamSize] = Field(default_factory=Slot[TeamSize])
    complexity: Slot[Complexity] = Field(default_factory=Slot[Complexity])
    customer_facing: Slot[bool] = Field(default_factory=Slot[bool])
    primary_entities: Slot[list[str]] = Field(default_factory=Slot[list[str]])
    integrations: Slot[list[str]] = Field(default_factory=Slot[list[str]])
    gaps: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)

    def slot(self, name: Union[SlotName, str]) -> Slot:
        return getattr(self, SlotName(name).value)

    def is_known(self, name: Union[SlotName, str], threshold: float) -> bool:
        s = self.slot(name)
        return s.is_set and s.confidence >= threshold


# =============================================================================
# Parser & Classifier Outputs
# =============================================================================

class Token(BaseModel):
    text: str
    lemma: str
    pos: str
    index: int
    importance: float


class ParsedInput(BaseModel):
    """Structured view of one piece of user text."""

    original: str
    normalized: str
    tokens: list[Token] = Field(default_factory=list)
    actions: list[str] = Field(default_factory=list)
    nouns: list[str] = Field(default_factory=list)
    adjectives: list[str] = Field(default_factory=list)
    phrases: list[str] = Field(default_factory=list)
    intents: list[SemanticIntent] = Field(default_factory=list)


class ResolvedIndustry(BaseModel):
    """Industry as seen by the feature detector and behavior matcher."""

    id: str = Field(description="Industry category, e.g. 'trades'")
    kit_id: str
    name: str
    profession_id: Optional[str] = Field(default=None, description="Behavior bundle id, if any")


class FeatureScore(BaseModel):
    """Raw score from the scoring pass, before gating."""

    feature_id: str
    score: float
    reasons: list[str] = Field(default_factory=list)


class DetectedFeature(BaseModel):
    id: str
    name: str
    confidence: float
    priority: Priority
    reasoning: str
    dependencies: list[str] = Field(default_factory=list)
    suggested_implementation: str = ""

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, v: Any) -> float:
        return _clamp(v)


class MatchedBehavior(BaseModel):
    id: str
    name: str
    confidence: float
    features: list[str]
    entities: list[str]
    workflows: list[str]
    theme: str
    reasoning: str

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, v: Any) -> float:
        return _clamp(v)


# =============================================================================
# Input Analyzer Contract
# =============================================================================

class CompletionRequest(BaseModel):
    """One call to the text-completion provider."""

    prompt: str
    system_prompt: str
    max_tokens: int = 1000
    temperature: float = 0.3
    timeout: float = 15.0


class AIExtraction(BaseModel):
    """JSON contract the provider is asked to return."""

    model_config = ConfigDict(extra="ignore")

    industry: Optional[str] = None
    sub_vertical: Optional[str] = None
    intent: Optional[AppIntent] = None
    confidence: float = 0.0
    team_size: Optional[TeamSize] = None
    complexity: Optional[Complexity] = None
    customer_facing: Optional[bool] = None
    primary_entities: list[str] = Field(default_factory=list)
    integrations: list[str] = Field(default_factory=list)
    interpretation: Optional[str] = None

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, v: Any) -> float:
        return _clamp(v)

    @field_validator("industry", "sub_vertical", mode="before")
    @classmethod
    def normalize_label(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v

    @field_validator("intent", "team_size", "complexity", mode="before")
    @classmethod
    def drop_unknown_choice(cls, v: Any, info: ValidationInfo) -> Any:
        # Models sometimes invent labels; an unknown label is just "not extracted".
        allowed = {
            "intent": ("operations", "customer-facing", "internal", "hybrid"),
            "team_size": ("solo", "small", "medium", "large"),
            "complexity": ("simple", "medium", "advanced"),
        }[info.field_name]
        if isinstance(v, str):
            v = v.strip().lower()
            return v if v in allowed else None
        return v

    @field_validator("primary_entities", "integrations", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class AnalysisResult(BaseModel):
    """What one turn of text told us."""

    kit_id: Optional[str] = None
    intent: Optional[AppIntent] = None
    confidence: float = 0.0
    updates: list[SlotUpdate] = Field(default_factory=list)
    source: Literal["ai", "fallback"] = "fallback"
    interpretation: Optional[str] = None
    failure_reason: Optional[str] = None

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, v: Any) -> float:
        return _clamp(v)

    def update_for(self, name: Union[SlotName, str]) -> Optional[Any]:
        key = SlotName(name).value
        for update in self.updates:
            if update.slot == key:
                return update
        return None


# =============================================================================
# Conversation Protocol
# =============================================================================

class DiscoveryStep(str, Enum):
    """Conversation phases."""
    INIT = "init"
    ASK_REQUIRED_QUESTION = "ask_required_question"
    ASK_OPTIONAL_QUESTION = "ask_optional_question"
    ASK_PERSONALIZATION = "ask_personalization"
    AWAIT_CONFIRMATION = "await_confirmation"
    COMPLETE = "complete"


class ConversationState(BaseModel):
    """
    Everything the engine needs to continue a conversation.

    The engine keeps nothing between turns: callers send this back with each
    reply and receive an updated copy.
    """

    conversation_id: str = Field(default_factory=lambda: str(uuid4()))
    seed: int = Field(default_factory=lambda: random.randrange(2**31))
    turn: int = 0
    step: DiscoveryStep = DiscoveryStep.INIT
    original_input: str = ""
    ledger: CertaintyLedger = Field(default_factory=CertaintyLedger)
    intent: Optional[AppIntent] = None
    behavior_id: Optional[str] = None

    questions_asked: list[str] = Field(default_factory=list)
    questions_credited: list[str] = Field(default_factory=list)
    question_count: int = 0
    current_question: Optional[str] = None

    personalization_asked: list[str] = Field(default_factory=list)
    current_personalization: Optional[str] = None

    confidence: float = 0.0
    fast_path: bool = False
    enabled_features: list[str] = Field(default_factory=list)
    answers: dict[str, str] = Field(default_factory=dict)

    pending_confirmation: bool = False
    user_confirmed: bool = False
    business_name: Optional[str] = None
    theme_preset: Optional[str] = None
    secondary_industries: list[str] = Field(default_factory=list)
    elaborations: list[str] = Field(default_factory=list)
    corrections: int = 0

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, v: Any) -> float:
        return _clamp(v)

    @property
    def kit_id(self) -> Optional[str]:
        return self.ledger.industry.value


class AppConfig(BaseModel):
    """Build configuration handed to app generation."""

    industry: str
    sub_vertical: Optional[str] = None
    team_size: TeamSize
    complexity: Complexity
    customer_facing: bool
    features: list[str]
    answers: dict[str, str] = Field(default_factory=dict)
    business_name: Optional[str] = None
    theme_preset: Optional[str] = None
    integrations: list[str] = Field(default_factory=list)
    primary_entities: list[str] = Field(default_factory=list)
    secondary_industries: list[str] = Field(default_factory=list)
    behavior: Optional[str] = None
    original_description: str = ""


class DiscoveryResponse(BaseModel):
    """What the caller shows the user after a turn."""

    message: Optional[str] = None
    question: Optional[str] = None
    options: list[str] = Field(default_factory=list)
    complete: bool = False
    app_config: Optional[AppConfig] = None
    confidence: float = 0.0
    step: DiscoveryStep = DiscoveryStep.INIT
    question_count: int = 0
    enabled_features: list[str] = Field(default_factory=list)
    answers: dict[str, str] = Field(default_factory=dict)
    pending_confirmation: bool = False


class TurnResult(BaseModel):
    response: DiscoveryResponse
    state: ConversationState


__all__ = [
    "TeamSize",
    "Complexity",
    "AppIntent",
    "SlotSource",
    "Slot",
    "IndustryUpdate",
    "SubVerticalUpdate",
    "TeamSizeUpdate",
    "ComplexityUpdate",
    "CustomerFacingUpdate",
    "PrimaryEntitiesUpdate",
    "IntegrationsUpdate",
    "SlotUpdate",
    "CertaintyLedger",
    "Token",
    "ParsedInput",
    "ResolvedIndustry",
    "FeatureScore",
    "DetectedFeature",
    "MatchedBehavior",
    "CompletionRequest",
    "AIExtraction",
    "AnalysisResult",
    "DiscoveryStep",
    "ConversationState",
    "AppConfig",
    "DiscoveryResponse",
    "TurnResult",
]
