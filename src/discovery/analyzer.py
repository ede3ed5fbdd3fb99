"""
Input Analyzer.

Reads one turn of user text and returns an AnalysisResult: which kit the text
points at, how sure we are, and the typed slot updates it supports.

Two paths:
- AI: Claude is asked for a fixed JSON extraction, validated with pydantic
- Fallback: keyword tables and regex heuristics, capped at
  FALLBACK_CONFIDENCE_CAP so they can never auto-complete a conversation

Every AI failure (not configured, circuit open, timeout, provider error,
malformed JSON) is logged and answered by the fallback. analyze() never raises
for provider problems.
"""

import asyncio
import json
import re
from typing import Any, Optional, Protocol

import anthropic
import structlog
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.catalog.kits import KITS, get_kit_knowledge, is_known_kit
from src.catalog.schema import KitKnowledge, SlotName, SmartQuestion, SubVerticalOption
from src.config import get_settings
from src.core.circuit_breaker import CircuitBreaker, get_circuit_breaker
from src.core.exceptions import (
    CircuitBreakerOpenError,
    CompletionResponseError,
    CompletionTimeoutError,
    CompletionUnavailableError,
    ConfigurationError,
)
from src.discovery.constants import ANSWERED_SLOT_CONFIDENCE, FALLBACK_CONFIDENCE_CAP
from src.discovery.extraction import answer_for_question, detect_intent, extract_slots
from src.discovery.industry import detect_sub_vertical, match_kit_label, resolve_industry
from src.discovery.ledger import format_ledger_as_context
from src.discovery.models import (
    AIExtraction,
    AnalysisResult,
    CertaintyLedger,
    ComplexityUpdate,
    CompletionRequest,
    CustomerFacingUpdate,
    IndustryUpdate,
    IntegrationsUpdate,
    PrimaryEntitiesUpdate,
    SlotSource,
    SlotUpdate,
    SubVerticalUpdate,
    TeamSizeUpdate,
)

logger = structlog.get_logger(__name__)

CIRCUIT_NAME = "text_completion"


# =============================================================================
# Prompts
# =============================================================================

SYSTEM_PROMPT = """You help figure out what kind of business app someone needs.

Read the user's message and extract what it tells you. Respond with ONLY a JSON
object, no prose, in exactly this shape:

{
  "industry": "<one of the industry ids below, or null>",
  "sub_vertical": "<sub-vertical value if the message settles it, or null>",
  "intent": "operations" | "customer-facing" | "internal" | "hybrid" | null,
  "confidence": <0.0-1.0, how sure you are about the industry>,
  "team_size": "solo" | "small" | "medium" | "large" | null,
  "complexity": "simple" | "medium" | "advanced" | null,
  "customer_facing": true | false | null,
  "primary_entities": ["things they need to track"],
  "integrations": ["tools they mention, e.g. stripe, google-calendar"],
  "interpretation": "<one sentence on what they need>"
}

Use null for anything the message does not say. Do not guess.

Industry ids: {industry_ids}"""


def build_prompt(text: str, ledger: CertaintyLedger, question: Optional[SmartQuestion] = None) -> str:
    parts = [f"WHAT WE ALREADY KNOW:\n{format_ledger_as_context(ledger)}"]
    if question is not None:
        parts.append(f"WE JUST ASKED:\n{question.question}")
    parts.append(f"USER MESSAGE:\n{text}")
    return "\n\n".join(parts)


def parse_json_response(text: str) -> dict[str, Any]:
    """Parse JSON from Claude's response, handling code fences and surrounding prose."""
    raw = text
    text = text.strip()

    if text.startswith("```"):
        lines = text.split("\n")
        if lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        text = "\n".join(lines)

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        data = _first_json_object(text)
        if data is None:
            raise CompletionResponseError("No JSON object in response", raw)

    if not isinstance(data, dict):
        raise CompletionResponseError("Response JSON is not an object", raw)
    return data


def _first_json_object(text: str) -> Optional[dict[str, Any]]:
    """First well-formed JSON object embedded in prose, ignoring anything after it."""
    decoder = json.JSONDecoder()
    for match in re.finditer(r"\{", text):
        try:
            data, _ = decoder.raw_decode(text, match.start())
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data
    return None


# =============================================================================
# Providers
# =============================================================================

class CompletionProvider(Protocol):
    """Anything that turns a CompletionRequest into reply text."""

    name: str

    async def complete(self, request: CompletionRequest) -> str:
        ...


class AnthropicCompletionProvider:
    """
    Claude via the Anthropic SDK.

    Transient SDK errors (rate limits, connection drops, 5xx) are retried with
    exponential backoff; anything left over is raised as a
    CompletionProviderError subclass.
    """

    name = "anthropic"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_attempts: Optional[int] = None,
    ) -> None:
        settings = get_settings()
        if api_key is None and settings.anthropic_api_key is not None:
            api_key = settings.anthropic_api_key.get_secret_value()
        if not api_key:
            raise ConfigurationError("Anthropic API key is not configured", "anthropic_api_key")

        self._api_key = api_key
        self.model = model or settings.ai_model
        self.max_attempts = max_attempts or settings.ai_max_retries
        self._client: Optional[anthropic.AsyncAnthropic] = None

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            # Retries are handled here, not by the SDK.
            self._client = anthropic.AsyncAnthropic(api_key=self._api_key, max_retries=0)
        return self._client

    async def complete(self, request: CompletionRequest) -> str:
        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type(
                    (anthropic.RateLimitError, anthropic.APIConnectionError, anthropic.InternalServerError)
                ),
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_exponential(multiplier=1, min=2, max=10),
                before_sleep=lambda retry_state: logger.warning(
                    "anthropic_retry",
                    attempt=retry_state.attempt_number,
                    wait=retry_state.next_action.sleep,
                ),
                reraise=True,
            ):
                with attempt:
                    response = await self.client.messages.create(
                        model=self.model,
                        max_tokens=request.max_tokens,
                        temperature=request.temperature,
                        system=request.system_prompt,
                        messages=[{"role": "user", "content": request.prompt}],
                        timeout=request.timeout,
                    )
        except anthropic.APITimeoutError as e:
            raise CompletionTimeoutError(self.name, "Request timed out") from e
        except anthropic.APIError as e:
            raise CompletionUnavailableError(self.name, str(e)) from e

        if not response.content:
            raise CompletionResponseError("Empty response from provider")
        return response.content[0].text


# =============================================================================
# Analyzer
# =============================================================================

def _sub_vertical_option(kit: KitKnowledge, label: str) -> Optional[SubVerticalOption]:
    for option in kit.sub_verticals:
        if label in (option.value, option.kit, option.label.lower()):
            return option
    return None


def _raise_answered(update: SlotUpdate, ceiling: float = 1.0) -> SlotUpdate:
    """Mark the slot the user was asked about as explicit, raised to at most ceiling."""
    confidence = min(max(update.confidence, ANSWERED_SLOT_CONFIDENCE), ceiling)
    return update.model_copy(update={"confidence": confidence, "source": SlotSource.EXPLICIT})


def _cap(update: SlotUpdate) -> SlotUpdate:
    return update.model_copy(update={"confidence": min(update.confidence, FALLBACK_CONFIDENCE_CAP)})


class InputAnalyzer:
    """Turns one reply into an AnalysisResult, via Claude when possible."""

    def __init__(
        self,
        provider: Optional[CompletionProvider] = None,
        timeout: Optional[float] = None,
        breaker: Optional[CircuitBreaker] = None,
    ) -> None:
        settings = get_settings()
        self.provider = provider
        self.timeout = timeout if timeout is not None else settings.ai_timeout_seconds
        self.max_tokens = settings.ai_max_tokens
        self.temperature = settings.ai_temperature
        self.breaker = breaker or get_circuit_breaker(
            CIRCUIT_NAME,
            failure_threshold=settings.ai_failure_threshold,
            recovery_timeout=settings.ai_recovery_timeout_seconds,
        )
        self.system_prompt = SYSTEM_PROMPT.replace(
            "{industry_ids}", ", ".join(k.id for k in KITS)
        )
        self._guarded_complete = self.breaker(self._complete)

    async def _complete(self, request: CompletionRequest) -> str:
        return await asyncio.wait_for(self.provider.complete(request), timeout=self.timeout)

    async def analyze(
        self,
        text: str,
        ledger: CertaintyLedger,
        question: Optional[SmartQuestion] = None,
    ) -> AnalysisResult:
        """Analyze one reply; falls back to heuristics on any AI failure."""
        if self.provider is None:
            return self.fallback(text, ledger, question, reason="provider_not_configured")

        request = CompletionRequest(
            prompt=build_prompt(text, ledger, question),
            system_prompt=self.system_prompt,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            timeout=self.timeout,
        )

        # The breaker records the outcome of every call that gets through.
        try:
            raw = await self._guarded_complete(request)
        except CircuitBreakerOpenError:
            return self._fail(text, ledger, question, "circuit_open")
        except (asyncio.TimeoutError, CompletionTimeoutError):
            return self._fail(text, ledger, question, "timeout")
        except Exception as e:
            return self._fail(text, ledger, question, f"provider_error: {type(e).__name__}", error=str(e))

        try:
            extraction = AIExtraction.model_validate(parse_json_response(raw))
        except (CompletionResponseError, ValidationError) as e:
            return self._fail(text, ledger, question, "malformed_response", error=str(e)[:200])

        result = self.from_extraction(extraction, text, ledger, question)
        logger.info(
            "analysis_completed",
            path="ai",
            kit=result.kit_id,
            confidence=round(result.confidence, 3),
            updates=[u.slot for u in result.updates],
        )
        return result

    def _fail(
        self,
        text: str,
        ledger: CertaintyLedger,
        question: Optional[SmartQuestion],
        reason: str,
        error: Optional[str] = None,
    ) -> AnalysisResult:
        logger.warning("ai_analysis_failed", reason=reason, error=error)
        return self.fallback(text, ledger, question, reason=reason)

    # -------------------------------------------------------------------------
    # AI path
    # -------------------------------------------------------------------------

    def from_extraction(
        self,
        extraction: AIExtraction,
        text: str,
        ledger: CertaintyLedger,
        question: Optional[SmartQuestion] = None,
    ) -> AnalysisResult:
        """Convert a validated AI extraction into typed slot updates."""
        confidence = extraction.confidence
        updates: list[SlotUpdate] = []

        kit_id = match_kit_label(extraction.industry)
        if kit_id is not None and not is_known_kit(kit_id):
            kit_id = None
        kit = get_kit_knowledge(kit_id or ledger.industry.value)

        if extraction.sub_vertical and kit.has_sub_verticals:
            option = _sub_vertical_option(kit, extraction.sub_vertical)
            if option is not None:
                updates.append(SubVerticalUpdate(value=option.value, confidence=confidence, evidence=text))
                if option.kit != kit.id:
                    kit_id = option.kit

        if kit_id is not None:
            updates.append(
                IndustryUpdate(value=kit_id, confidence=confidence, evidence=extraction.interpretation)
            )
        if extraction.team_size is not None:
            updates.append(TeamSizeUpdate(value=extraction.team_size, confidence=confidence))
        if extraction.complexity is not None:
            updates.append(ComplexityUpdate(value=extraction.complexity, confidence=confidence))
        if extraction.customer_facing is not None:
            updates.append(CustomerFacingUpdate(value=extraction.customer_facing, confidence=confidence))
        if extraction.primary_entities:
            updates.append(PrimaryEntitiesUpdate(value=extraction.primary_entities, confidence=confidence))
        if extraction.integrations:
            updates.append(
                IntegrationsUpdate(
                    value=[i.lower().replace(" ", "-") for i in extraction.integrations],
                    confidence=confidence,
                )
            )

        if question is not None and question.slot is not None:
            answered = question.slot.value
            if not any(u.slot == answered for u in updates):
                heuristic = answer_for_question(text, question)
                if heuristic is not None:
                    updates.append(heuristic)
            updates = [_raise_answered(u) if u.slot == answered else u for u in updates]

        return AnalysisResult(
            kit_id=kit_id,
            intent=extraction.intent or detect_intent(text),
            confidence=confidence,
            updates=updates,
            source="ai",
            interpretation=extraction.interpretation,
        )

    # -------------------------------------------------------------------------
    # Fallback path
    # -------------------------------------------------------------------------

    def fallback(
        self,
        text: str,
        ledger: CertaintyLedger,
        question: Optional[SmartQuestion] = None,
        reason: Optional[str] = None,
    ) -> AnalysisResult:
        """Keyword and regex analysis; every confidence is capped below the auto-complete gate."""
        match = resolve_industry(text)
        known = ledger.industry.value if is_known_kit(ledger.industry.value) else None
        answered = question.slot.value if question is not None and question.slot is not None else None

        kit_id = match.kit_id if match else None
        confidence = match.confidence if match else 0.0
        industry_update: Optional[IndustryUpdate] = None
        if match is not None:
            industry_update = IndustryUpdate(
                value=match.kit_id,
                confidence=match.confidence,
                source=SlotSource.EXPLICIT if match.self_identified else SlotSource.INFERRED,
                evidence=", ".join(match.matched),
            )

        # Sub-verticals are read against the conversation's kit, not a passing keyword.
        kit = get_kit_knowledge(known or kit_id)
        updates: list[SlotUpdate] = []

        switched = False
        option = detect_sub_vertical(text, kit)
        if option is not None:
            updates.append(SubVerticalUpdate(value=option.value, confidence=0.6, evidence=text))
            if option.kit != kit.id:
                switched = True
                kit_id = option.kit
                confidence = max(confidence, 0.6)
                industry_update = IndustryUpdate(
                    value=option.kit,
                    confidence=0.6,
                    source=SlotSource.EXPLICIT,
                    evidence=option.label,
                )
                kit = get_kit_knowledge(option.kit)

        updates.extend(extract_slots(text, kit, question))

        # Default entities only for the kit the conversation is actually about.
        if kit_id is not None and kit.id == kit_id and kit.entities:
            if not any(u.slot == SlotName.PRIMARY_ENTITIES.value for u in updates):
                updates.append(
                    PrimaryEntitiesUpdate(
                        value=list(kit.entities),
                        confidence=confidence,
                        evidence=f"typical for {kit.name}",
                    )
                )

        capped = [
            _raise_answered(u, FALLBACK_CONFIDENCE_CAP) if u.slot == answered else _cap(u)
            for u in updates
        ]
        if industry_update is not None:
            # Answering the sub-vertical question settles the industry as firmly as the answer.
            if switched and answered == SlotName.SUB_VERTICAL.value:
                capped.insert(0, _raise_answered(industry_update, FALLBACK_CONFIDENCE_CAP))
            else:
                capped.insert(0, _cap(industry_update))

        result = AnalysisResult(
            kit_id=kit_id,
            intent=detect_intent(text),
            confidence=min(confidence, FALLBACK_CONFIDENCE_CAP),
            updates=capped,
            source="fallback",
            failure_reason=reason,
        )
        logger.info(
            "analysis_completed",
            path="fallback",
            reason=reason,
            kit=result.kit_id,
            confidence=round(result.confidence, 3),
            updates=[u.slot for u in result.updates],
        )
        return result


# =============================================================================
# Singleton Instance
# =============================================================================

_analyzer_instance: Optional[InputAnalyzer] = None


def get_input_analyzer() -> InputAnalyzer:
    """Get the singleton analyzer, wired to Claude when a key is configured."""
    global _analyzer_instance
    if _analyzer_instance is None:
        settings = get_settings()
        provider: Optional[CompletionProvider] = None
        if settings.ai_configured:
            provider = AnthropicCompletionProvider()
        else:
            logger.info("ai_provider_disabled", ai_enabled=settings.ai_enabled)
        _analyzer_instance = InputAnalyzer(provider=provider)
    return _analyzer_instance


def reset_input_analyzer() -> None:
    """Drop the singleton (tests, settings reloads)."""
    global _analyzer_instance
    _analyzer_instance = None


__all__ = [
    "SYSTEM_PROMPT",
    "build_prompt",
    "parse_json_response",
    "CompletionProvider",
    "AnthropicCompletionProvider",
    "InputAnalyzer",
    "get_input_analyzer",
    "reset_input_analyzer",
]
