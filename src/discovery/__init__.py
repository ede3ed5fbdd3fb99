"""
Discovery.

Turns free-form business descriptions into an app build configuration:

- parser: normalization, tokens, nouns, actions, phrases, semantic intents
- feature_detector / behavior_matcher: weighted keyword classifiers
- industry / extraction: keyword-table fallbacks for industry and slots
- analyzer: Claude extraction with a deterministic fallback
- ledger: certainty ledger merge rules, gaps, suggestions, readiness
- engine: the multi-turn conversation state machine

Example:
    from src.discovery import DiscoveryEngine

    engine = DiscoveryEngine()
    turn = await engine.start("I run a small cleaning company")
    print(turn.response.question)
"""

from src.discovery.models import (
    Slot,
    SlotSource,
    SlotUpdate,
    CertaintyLedger,
    ParsedInput,
    ResolvedIndustry,
    DetectedFeature,
    MatchedBehavior,
    AnalysisResult,
    DiscoveryStep,
    ConversationState,
    AppConfig,
    DiscoveryResponse,
    TurnResult,
)
from src.discovery.parser import parse
from src.discovery.feature_detector import FeatureDetector
from src.discovery.behavior_matcher import BehaviorMatcher
from src.discovery.industry import resolve_industry, resolved_industry_for
from src.discovery.analyzer import (
    AnthropicCompletionProvider,
    CompletionProvider,
    InputAnalyzer,
    get_input_analyzer,
    reset_input_analyzer,
)
from src.discovery.engine import (
    DiscoveryEngine,
    assert_can_complete,
    get_discovery_engine,
    reset_discovery_engine,
)

__all__ = [
    # Models
    "Slot",
    "SlotSource",
    "SlotUpdate",
    "CertaintyLedger",
    "ParsedInput",
    "ResolvedIndustry",
    "DetectedFeature",
    "MatchedBehavior",
    "AnalysisResult",
    "DiscoveryStep",
    "ConversationState",
    "AppConfig",
    "DiscoveryResponse",
    "TurnResult",
    # Classifiers
    "parse",
    "FeatureDetector",
    "BehaviorMatcher",
    "resolve_industry",
    "resolved_industry_for",
    # Analyzer
    "CompletionProvider",
    "AnthropicCompletionProvider",
    "InputAnalyzer",
    "get_input_analyzer",
    "reset_input_analyzer",
    # Engine
    "DiscoveryEngine",
    "assert_can_complete",
    "get_discovery_engine",
    "reset_discovery_engine",
]
