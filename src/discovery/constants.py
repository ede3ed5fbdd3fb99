"""
Scoring thresholds and conversation limits.

These are fixed properties of the engine rather than deployment settings, so
they live here instead of in src.config.settings.
"""

# Feature detector
MIN_FEATURE_SCORE = 0.1
DEPENDENCY_GATE_THRESHOLD = 0.2
PRIORITY_IMPORTANT = 0.5  # score >= this
PRIORITY_ESSENTIAL = 0.8  # score > this
ALWAYS_INCLUDE_CONFIDENCE = 0.6

KEYWORD_WEIGHT = 0.25
INTENT_WEIGHT = 0.2
INDUSTRY_WEIGHT = 0.15
NOUN_WEIGHT = 0.15
ACTION_WEIGHT = 0.1
PHRASE_WEIGHT = 0.15

# Behavior matcher
BEHAVIOR_MATCH_THRESHOLD = 0.3
BEHAVIOR_KEYWORD_WEIGHT = 0.15
BEHAVIOR_INDUSTRY_WEIGHT = 0.2
BEHAVIOR_PROFESSION_WEIGHT = 0.4
BEHAVIOR_FEATURE_WEIGHT = 0.3
BEHAVIOR_NOUN_WEIGHT = 0.1

# Input analyzer fallback
FALLBACK_CONFIDENCE_CAP = 0.65
SELF_IDENTIFIED_CONFIDENCE = 0.65
MULTI_WORD_CONFIDENCE = 0.55
SINGLE_KEYWORD_CONFIDENCE = 0.45
ANSWERED_SLOT_CONFIDENCE = 0.9

# Conversation
FAST_PATH_THRESHOLD = 0.6
SLOT_KNOWN_THRESHOLD = 0.6
GAP_THRESHOLD = 0.5
AUTO_COMPLETE_THRESHOLD = 0.95
MIN_QUESTIONS = 3
MAX_QUESTIONS = 4
VAGUE_ANSWER_LENGTH = 10
MAX_SUGGESTIONS = 5

__all__ = [
    "MIN_FEATURE_SCORE",
    "DEPENDENCY_GATE_THRESHOLD",
    "PRIORITY_IMPORTANT",
    "PRIORITY_ESSENTIAL",
    "ALWAYS_INCLUDE_CONFIDENCE",
    "KEYWORD_WEIGHT",
    "INTENT_WEIGHT",
    "INDUSTRY_WEIGHT",
    "NOUN_WEIGHT",
    "ACTION_WEIGHT",
    "PHRASE_WEIGHT",
    "BEHAVIOR_MATCH_THRESHOLD",
    "BEHAVIOR_KEYWORD_WEIGHT",
    "BEHAVIOR_INDUSTRY_WEIGHT",
    "BEHAVIOR_PROFESSION_WEIGHT",
    "BEHAVIOR_FEATURE_WEIGHT",
    "BEHAVIOR_NOUN_WEIGHT",
    "FALLBACK_CONFIDENCE_CAP",
    "SELF_IDENTIFIED_CONFIDENCE",
    "MULTI_WORD_CONFIDENCE",
    "SINGLE_KEYWORD_CONFIDENCE",
    "ANSWERED_SLOT_CONFIDENCE",
    "FAST_PATH_THRESHOLD",
    "SLOT_KNOWN_THRESHOLD",
    "GAP_THRESHOLD",
    "AUTO_COMPLETE_THRESHOLD",
    "MIN_QUESTIONS",
    "MAX_QUESTIONS",
    "VAGUE_ANSWER_LENGTH",
    "MAX_SUGGESTIONS",
]
