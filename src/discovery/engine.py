"""
Discovery Engine.

Multi-turn conversation that decides what app to build:

    INIT -> ASK_REQUIRED_QUESTION* -> ASK_OPTIONAL_QUESTION? ->
    ASK_PERSONALIZATION (vibe, name) -> AWAIT_CONFIRMATION -> COMPLETE

The engine is stateless. start() returns a ConversationState that the caller
hands back to respond() with the next reply; respond() never mutates the state
it was given.

Completion gate: COMPLETE is only emitted when confidence reaches
AUTO_COMPLETE_THRESHOLD or the user confirmed (explicitly or with a
quick-build phrase). Anything else is intercepted and sent back to
confirmation.

Usage:
    engine = DiscoveryEngine()
    turn = await engine.start("I'm a solo plumber")
    turn = await engine.respond(turn.state, "Emergency calls mostly")
"""

import random
from typing import Optional

import structlog

from src.catalog.kits import (
    TEAM_SIZE_FEATURES,
    find_question,
    get_kit_knowledge,
    is_known_kit,
    question_plan,
)
from src.catalog.schema import KitKnowledge, Priority, SmartQuestion
from src.core.exceptions import CompletionGateError
from src.discovery.analyzer import InputAnalyzer, get_input_analyzer
from src.discovery.behavior_matcher import BehaviorMatcher
from src.discovery.constants import (
    AUTO_COMPLETE_THRESHOLD,
    FALLBACK_CONFIDENCE_CAP,
    FAST_PATH_THRESHOLD,
    MAX_QUESTIONS,
    MIN_QUESTIONS,
    SLOT_KNOWN_THRESHOLD,
)
from src.discovery.extraction import question_enables
from src.discovery.feature_detector import FeatureDetector
from src.discovery.industry import resolved_industry_for
from src.discovery.ledger import apply_updates, refresh
from src.discovery.models import (
    AnalysisResult,
    AppConfig,
    ConversationState,
    DiscoveryResponse,
    DiscoveryStep,
    TurnResult,
)
from src.discovery.parser import parse
from src.discovery.phrases import (
    COMPLETION,
    CONFIRM_PROMPT,
    CORRECTION_APPLIED,
    LEARNED_NOTHING,
    NAME_QUESTION,
    NEEDS_CLARIFICATION,
    NEGATIVE_FOLLOW_UP,
    NEUTRAL,
    TEAM_SIZE_UNDERSTOOD,
    VIBE_OPTIONS,
    VIBE_QUESTION,
    ConfirmationKind,
    classify_confirmation,
    clean_business_name,
    format_industry_name,
    industry_understood,
    is_quick_build,
    is_skip,
    is_vague,
    match_theme_preset,
    pick,
    ready_to_build,
)
from src.discovery.summary import build_app_config, render_summary

logger = structlog.get_logger(__name__)

PERSONALIZATION_ORDER = ("vibe", "name")

_TEAM_ACK_BUCKET = {"solo": "solo", "small": "small", "medium": "team", "large": "team"}


def assert_can_complete(state: ConversationState) -> None:
    """Raise CompletionGateError unless the conversation may complete."""
    if state.confidence >= AUTO_COMPLETE_THRESHOLD or state.user_confirmed:
        return
    raise CompletionGateError(state.confidence, AUTO_COMPLETE_THRESHOLD, state.user_confirmed)


def turn_rng(state: ConversationState) -> random.Random:
    """Phrase picker for this turn; same state and turn, same wording."""
    return random.Random(state.seed * 1_000_003 + state.turn)


def _join(*parts: Optional[str]) -> Optional[str]:
    text = "\n\n".join(p for p in parts if p)
    return text or None


class DiscoveryEngine:
    """Runs the discovery conversation, one turn at a time."""

    def __init__(
        self,
        analyzer: Optional[InputAnalyzer] = None,
        feature_detector: Optional[FeatureDetector] = None,
        behavior_matcher: Optional[BehaviorMatcher] = None,
    ) -> None:
        self.analyzer = analyzer or get_input_analyzer()
        self.feature_detector = feature_detector or FeatureDetector()
        self.behavior_matcher = behavior_matcher or BehaviorMatcher()

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    async def start(self, description: str, seed: Optional[int] = None) -> TurnResult:
        """Open a conversation from the user's first description."""
        state = ConversationState() if seed is None else ConversationState(seed=seed)
        return await self._begin(state, description)

    async def respond(self, state: ConversationState, message: str) -> TurnResult:
        """Continue a conversation with the user's next reply."""
        state = state.model_copy(deep=True)

        if state.step == DiscoveryStep.INIT:
            return await self._begin(state, message)

        if state.step == DiscoveryStep.COMPLETE:
            logger.debug("discovery_already_complete", conversation_id=state.conversation_id)
            return self._respond(state, complete=True, app_config=build_app_config(state))

        state.turn += 1
        rng = turn_rng(state)
        text = message.strip()

        in_personalization = state.step == DiscoveryStep.ASK_PERSONALIZATION
        if is_quick_build(text, allow_bare_skip=not in_personalization):
            logger.info(
                "quick_build",
                conversation_id=state.conversation_id,
                step=state.step.value,
                question_count=state.question_count,
            )
            state.user_confirmed = True
            return self._complete(state, rng)

        if state.step in (DiscoveryStep.ASK_REQUIRED_QUESTION, DiscoveryStep.ASK_OPTIONAL_QUESTION):
            return await self._handle_answer(state, text, rng)
        if state.step == DiscoveryStep.ASK_PERSONALIZATION:
            return self._handle_personalization(state, text, rng)
        return await self._handle_confirmation(state, text, rng)

    # -------------------------------------------------------------------------
    # Turn handlers
    # -------------------------------------------------------------------------

    async def _begin(self, state: ConversationState, description: str) -> TurnResult:
        text = description.strip()
        state.turn = 1
        state.original_input = text
        rng = turn_rng(state)

        result = await self.analyzer.analyze(text, state.ledger)
        self._absorb(state, result)

        kit = get_kit_knowledge(state.kit_id)
        ambiguous = kit.has_sub_verticals and not state.ledger.is_known("sub_vertical", SLOT_KNOWN_THRESHOLD)
        state.fast_path = (
            is_known_kit(state.kit_id) and state.confidence >= FAST_PATH_THRESHOLD and not ambiguous
        )
        logger.info(
            "discovery_started",
            conversation_id=state.conversation_id,
            kit=kit.id,
            confidence=round(state.confidence, 3),
            fast_path=state.fast_path,
            source=result.source,
        )

        if is_quick_build(text, allow_bare_skip=False):
            logger.info("quick_build", conversation_id=state.conversation_id, step="init", question_count=0)
            state.user_confirmed = True
            return self._complete(state, rng)

        state.step = DiscoveryStep.ASK_REQUIRED_QUESTION
        ack = pick(industry_understood(format_industry_name(kit.id)), rng) if is_known_kit(kit.id) else None
        return self._advance(state, rng, ack)

    async def _handle_answer(self, state: ConversationState, text: str, rng: random.Random) -> TurnResult:
        question = find_question(state.current_question, get_kit_knowledge(state.kit_id))
        before = state.ledger.model_copy(deep=True)

        result = await self.analyzer.analyze(text, state.ledger, question)
        if question is not None:
            state.answers[question.id] = text
        self._absorb(state, result)

        if state.kit_id != before.industry.value and is_known_kit(state.kit_id):
            ack = pick(industry_understood(format_industry_name(state.kit_id)), rng)
        elif state.ledger.team_size.value and state.ledger.team_size.value != before.team_size.value:
            ack = pick(TEAM_SIZE_UNDERSTOOD[_TEAM_ACK_BUCKET[state.ledger.team_size.value]], rng)
        elif not result.updates and not is_known_kit(state.kit_id):
            ack = pick(LEARNED_NOTHING, rng)
        else:
            ack = pick(NEUTRAL, rng)

        return self._advance(state, rng, ack)

    def _handle_personalization(self, state: ConversationState, text: str, rng: random.Random) -> TurnResult:
        current = state.current_personalization
        if is_skip(text):
            logger.info("personalization_skipped", conversation_id=state.conversation_id, item=current)
        elif current == "vibe":
            state.theme_preset = match_theme_preset(text)
        elif current == "name":
            state.business_name = clean_business_name(text)

        state.current_personalization = None
        return self._next_personalization(state, rng, None)

    async def _handle_confirmation(self, state: ConversationState, text: str, rng: random.Random) -> TurnResult:
        kind = classify_confirmation(text)
        logger.info("confirmation_classified", conversation_id=state.conversation_id, kind=kind.value)

        if kind == ConfirmationKind.AFFIRMATIVE:
            state.user_confirmed = True
            return self._complete(state, rng)

        if kind == ConfirmationKind.NEGATIVE:
            return self._respond(
                state,
                message=pick(NEGATIVE_FOLLOW_UP, rng),
                question=None,
            )

        previous_kit = state.kit_id
        result = await self.analyzer.analyze(text, state.ledger)
        state.elaborations.append(text)
        state.corrections += 1
        self._absorb(state, result)

        mentioned = result.kit_id
        if state.kit_id != previous_kit:
            # The correction replaced the primary industry.
            state.secondary_industries = [k for k in state.secondary_industries if k != state.kit_id]
            if is_known_kit(previous_kit) and previous_kit not in state.secondary_industries:
                state.secondary_industries.append(previous_kit)
        elif is_known_kit(mentioned) and mentioned != state.kit_id and mentioned not in state.secondary_industries:
            state.secondary_industries.append(mentioned)
        self._refresh_features(state)

        logger.info(
            "confirmation_elaborated",
            conversation_id=state.conversation_id,
            kit=state.kit_id,
            secondary=state.secondary_industries,
            features=len(state.enabled_features),
        )
        return self._respond(
            state,
            message=_join(pick(CORRECTION_APPLIED, rng), render_summary(state)),
            question=pick(CONFIRM_PROMPT, rng),
            options=["Looks good", "Not quite"],
        )

    # -------------------------------------------------------------------------
    # Flow
    # -------------------------------------------------------------------------

    def _advance(self, state: ConversationState, rng: random.Random, ack: Optional[str]) -> TurnResult:
        """Ask the next question, or move on to personalization."""
        state.current_question = None

        if state.question_count < MIN_QUESTIONS:
            question = self._next_question(state)
            if question is not None:
                return self._ask(state, question, DiscoveryStep.ASK_REQUIRED_QUESTION, rng, ack)
        elif (
            state.question_count == MIN_QUESTIONS
            and state.question_count < MAX_QUESTIONS
            and state.step != DiscoveryStep.ASK_OPTIONAL_QUESTION
            and any(is_vague(a) for a in state.answers.values())
        ):
            question = self._next_question(state)
            if question is not None:
                logger.info("optional_question", conversation_id=state.conversation_id, question=question.id)
                return self._ask(state, question, DiscoveryStep.ASK_OPTIONAL_QUESTION, rng, ack)

        return self._next_personalization(state, rng, ack)

    def _next_question(self, state: ConversationState) -> Optional[SmartQuestion]:
        """
        Next unresolved question of the current kit.

        On the fast path, questions whose slot is already known are credited
        (they count toward question_count). Otherwise they are skipped.
        """
        kit = get_kit_knowledge(state.kit_id)
        done = set(state.questions_asked) | set(state.questions_credited)

        for question in question_plan(kit):
            if question.id in done:
                continue
            if question.slot is not None and state.ledger.is_known(question.slot, SLOT_KNOWN_THRESHOLD):
                if state.fast_path and state.question_count < MIN_QUESTIONS:
                    state.questions_credited.append(question.id)
                    state.question_count += 1
                    logger.info(
                        "question_credited",
                        conversation_id=state.conversation_id,
                        question=question.id,
                        question_count=state.question_count,
                    )
                    if state.question_count >= MIN_QUESTIONS:
                        return None
                continue
            return question
        return None

    def _ask(
        self,
        state: ConversationState,
        question: SmartQuestion,
        step: DiscoveryStep,
        rng: random.Random,
        ack: Optional[str],
    ) -> TurnResult:
        state.step = step
        state.current_question = question.id
        state.questions_asked.append(question.id)
        state.question_count += 1
        logger.info(
            "question_asked",
            conversation_id=state.conversation_id,
            question=question.id,
            question_count=state.question_count,
        )
        text = pick(NEEDS_CLARIFICATION, rng) if question.id == "business_type" else question.question
        return self._respond(state, message=ack, question=text, options=list(question.options))

    def _next_personalization(self, state: ConversationState, rng: random.Random, ack: Optional[str]) -> TurnResult:
        for item in PERSONALIZATION_ORDER:
            if item in state.personalization_asked:
                continue
            if item == "vibe" and state.theme_preset:
                continue
            if item == "name" and state.business_name:
                continue

            state.personalization_asked.append(item)
            state.current_personalization = item
            state.step = DiscoveryStep.ASK_PERSONALIZATION
            if item == "vibe":
                return self._respond(state, message=ack, question=VIBE_QUESTION, options=list(VIBE_OPTIONS))
            return self._respond(state, message=ack, question=NAME_QUESTION, options=["Skip"])

        return self._enter_confirmation(state, rng, ack)

    def _enter_confirmation(self, state: ConversationState, rng: random.Random, ack: Optional[str]) -> TurnResult:
        state.current_question = None
        state.current_personalization = None

        if state.confidence >= AUTO_COMPLETE_THRESHOLD:
            logger.info(
                "auto_complete",
                conversation_id=state.conversation_id,
                confidence=round(state.confidence, 3),
            )
            return self._complete(state, rng)

        return self._await_confirmation(state, rng, ack)

    def _await_confirmation(self, state: ConversationState, rng: random.Random, ack: Optional[str]) -> TurnResult:
        state.step = DiscoveryStep.AWAIT_CONFIRMATION
        state.pending_confirmation = True
        return self._respond(
            state,
            message=_join(ack, render_summary(state)),
            question=pick(CONFIRM_PROMPT, rng),
            options=["Looks good", "Not quite"],
        )

    def _complete(self, state: ConversationState, rng: random.Random) -> TurnResult:
        try:
            assert_can_complete(state)
        except CompletionGateError as e:
            logger.error(
                "completion_gate_violation",
                conversation_id=state.conversation_id,
                **e.details,
            )
            return self._await_confirmation(state, rng, None)

        state.step = DiscoveryStep.COMPLETE
        state.pending_confirmation = False
        state.current_question = None
        state.current_personalization = None
        config = build_app_config(state)

        logger.info(
            "discovery_completed",
            conversation_id=state.conversation_id,
            kit=config.industry,
            confidence=round(state.confidence, 3),
            user_confirmed=state.user_confirmed,
            question_count=state.question_count,
            features=len(config.features),
        )

        if is_known_kit(state.kit_id):
            message = pick(ready_to_build(format_industry_name(state.kit_id), state.ledger.team_size.value), rng)
        else:
            message = pick(COMPLETION, rng)
        return self._respond(state, message=message, complete=True, app_config=config)

    # -------------------------------------------------------------------------
    # State updates
    # -------------------------------------------------------------------------

    def _absorb(self, state: ConversationState, result: AnalysisResult) -> None:
        """Merge one analysis into the state."""
        state.ledger = apply_updates(state.ledger, result.updates)
        confidence = result.confidence
        if not is_known_kit(state.kit_id):
            # No concrete industry yet, so nothing may auto-complete.
            confidence = min(confidence, FALLBACK_CONFIDENCE_CAP)
        state.confidence = max(state.confidence, confidence)
        if state.intent is None and result.intent is not None:
            state.intent = result.intent
        self._refresh_features(state)

    def _refresh_features(self, state: ConversationState) -> None:
        """
        Recompute enabled features from everything said so far.

        Kit core features, detected important/essential features, team-size
        features, features switched on by answers, and the core features of any
        secondary industries.
        """
        kit: KitKnowledge = get_kit_knowledge(state.kit_id)
        industry = resolved_industry_for(kit.id)
        corpus = " ".join([state.original_input, *state.answers.values(), *state.elaborations])
        parsed = parse(corpus)

        detected = self.feature_detector.detect(parsed, industry)
        behavior = self.behavior_matcher.match(parsed, industry, detected)
        state.behavior_id = behavior.id if behavior else None

        features = list(kit.core_features)
        features += [d.id for d in detected if d.priority != Priority.NICE_TO_HAVE]
        if state.ledger.team_size.value:
            features += TEAM_SIZE_FEATURES[state.ledger.team_size.value]
        for question_id, answer in state.answers.items():
            question = find_question(question_id, kit)
            if question is not None:
                features += question_enables(answer, question)
        for secondary in state.secondary_industries:
            features += get_kit_knowledge(secondary).core_features

        state.enabled_features = list(dict.fromkeys(features))
        state.ledger = refresh(state.ledger, kit, state.enabled_features, behavior)

    # -------------------------------------------------------------------------
    # Responses
    # -------------------------------------------------------------------------

    def _respond(
        self,
        state: ConversationState,
        message: Optional[str] = None,
        question: Optional[str] = None,
        options: Optional[list[str]] = None,
        complete: bool = False,
        app_config: Optional[AppConfig] = None,
    ) -> TurnResult:
        response = DiscoveryResponse(
            message=message,
            question=question,
            options=options or [],
            complete=complete,
            app_config=app_config,
            confidence=state.confidence,
            step=state.step,
            question_count=state.question_count,
            enabled_features=list(state.enabled_features),
            answers=dict(state.answers),
            pending_confirmation=state.pending_confirmation,
        )
        return TurnResult(response=response, state=state)


# =============================================================================
# Singleton Instance
# =============================================================================

_engine_instance: Optional[DiscoveryEngine] = None


def get_discovery_engine() -> DiscoveryEngine:
    """Get the singleton discovery engine."""
    global _engine_instance
    if _engine_instance is None:
        _engine_instance = DiscoveryEngine()
    return _engine_instance


def reset_discovery_engine() -> None:
    global _engine_instance
    _engine_instance = None


__all__ = [
    "DiscoveryEngine",
    "assert_can_complete",
    "turn_rng",
    "get_discovery_engine",
    "reset_discovery_engine",
]
