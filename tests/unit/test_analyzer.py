"""Unit tests for the input analyzer and the Anthropic provider."""

import json

import anthropic
import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from src.catalog.kits import TEAM_SIZE, get_kit_knowledge
from src.core.circuit_breaker import CircuitBreaker
from src.core.exceptions import (
    CompletionResponseError,
    CompletionTimeoutError,
    ConfigurationError,
)
from src.discovery.analyzer import (
    AnthropicCompletionProvider,
    InputAnalyzer,
    build_prompt,
    parse_json_response,
)
from src.discovery.constants import FALLBACK_CONFIDENCE_CAP
from src.discovery.ledger import empty_ledger, merge_update
from src.discovery.models import CompletionRequest, IndustryUpdate, SlotSource


PLUMBER_EXTRACTION = json.dumps({
    "industry": "plumber",
    "intent": "operations",
    "confidence": 0.92,
    "team_size": "solo",
    "primary_entities": ["job", "invoice"],
    "integrations": ["Google Calendar"],
    "interpretation": "A solo plumber tracking jobs and invoices",
})


class TestParseJsonResponse:
    """Test JSON extraction from provider replies."""

    def test_plain_json(self):
        assert parse_json_response('{"industry": "plumber"}') == {"industry": "plumber"}

    def test_code_fence(self):
        assert parse_json_response('```json\n{"industry": "salon"}\n```') == {"industry": "salon"}

    def test_surrounding_prose(self):
        assert parse_json_response('Sure! {"industry": "gym"} Hope that helps.') == {"industry": "gym"}

    def test_no_json(self):
        with pytest.raises(CompletionResponseError):
            parse_json_response("I could not tell what business this is.")

    def test_non_object(self):
        with pytest.raises(CompletionResponseError):
            parse_json_response("[1, 2, 3]")

    def test_first_of_two_objects(self):
        text = 'Sure: {"industry": "plumber", "confidence": 0.9} (alt: {"industry": "hvac"})'

        assert parse_json_response(text) == {"industry": "plumber", "confidence": 0.9}

    def test_stray_brace_before_object(self):
        text = 'Use {braces} like this: {"industry": "salon"}'

        assert parse_json_response(text) == {"industry": "salon"}


class TestBuildPrompt:
    """Test prompt assembly."""

    def test_includes_context_question_and_message(self):
        ledger = merge_update(empty_ledger(), IndustryUpdate(value="plumber", confidence=0.65))
        prompt = build_prompt("Just me", ledger, TEAM_SIZE)

        assert "Industry: plumber (65% certain)" in prompt
        assert TEAM_SIZE.question in prompt
        assert prompt.endswith("USER MESSAGE:\nJust me")


class TestAIPath:
    """Test analysis through a completion provider."""

    @pytest.mark.asyncio
    async def test_extraction_becomes_slot_updates(self, make_provider, breaker):
        analyzer = InputAnalyzer(provider=make_provider([PLUMBER_EXTRACTION]), breaker=breaker)

        result = await analyzer.analyze("I'm a solo plumber", empty_ledger())

        assert result.source == "ai"
        assert result.kit_id == "plumber"
        assert result.confidence == pytest.approx(0.92)
        assert result.intent == "operations"
        assert result.update_for("team_size").value == "solo"
        assert result.update_for("integrations").value == ["google-calendar"]

    @pytest.mark.asyncio
    async def test_unknown_industry_label_is_dropped(self, make_provider, breaker):
        reply = json.dumps({"industry": "aerospace", "confidence": 0.9})
        analyzer = InputAnalyzer(provider=make_provider([reply]), breaker=breaker)

        result = await analyzer.analyze("we build rockets", empty_ledger())

        assert result.kit_id is None
        assert result.update_for("industry") is None

    @pytest.mark.asyncio
    async def test_answered_slot_is_explicit(self, make_provider, breaker):
        reply = json.dumps({"team_size": "solo", "confidence": 0.5})
        analyzer = InputAnalyzer(provider=make_provider([reply]), breaker=breaker)

        result = await analyzer.analyze("Just me", empty_ledger(), TEAM_SIZE)
        update = result.update_for("team_size")

        assert update.confidence == pytest.approx(0.9)
        assert update.source == SlotSource.EXPLICIT

    @pytest.mark.asyncio
    async def test_prompt_lists_industry_ids(self, make_provider, breaker):
        provider = make_provider([PLUMBER_EXTRACTION])
        analyzer = InputAnalyzer(provider=provider, breaker=breaker)

        await analyzer.analyze("I'm a solo plumber", empty_ledger())

        assert "plumber" in provider.requests[0].system_prompt
        assert "{industry_ids}" not in provider.requests[0].system_prompt


class TestFallbackPath:
    """Test that every AI failure lands on the capped fallback."""

    @pytest.mark.asyncio
    async def test_no_provider(self, fallback_analyzer):
        result = await fallback_analyzer.analyze("I'm a solo plumber", empty_ledger())

        assert result.source == "fallback"
        assert result.failure_reason == "provider_not_configured"
        assert result.kit_id == "plumber"

    @pytest.mark.asyncio
    async def test_malformed_response(self, make_provider, breaker):
        analyzer = InputAnalyzer(provider=make_provider(["not json at all"]), breaker=breaker)

        result = await analyzer.analyze("I'm a solo plumber", empty_ledger())

        assert result.source == "fallback"
        assert result.failure_reason == "malformed_response"
        assert result.kit_id == "plumber"

    @pytest.mark.asyncio
    async def test_timeout_records_failure(self, make_provider, breaker):
        analyzer = InputAnalyzer(provider=make_provider(delay=1.0), timeout=0.01, breaker=breaker)

        result = await analyzer.analyze("I'm a solo plumber", empty_ledger())

        assert result.failure_reason == "timeout"
        assert breaker.snapshot()["failure_count"] == 1

    @pytest.mark.asyncio
    async def test_provider_error(self, make_provider, breaker):
        analyzer = InputAnalyzer(provider=make_provider(error=RuntimeError("boom")), breaker=breaker)

        result = await analyzer.analyze("I'm a solo plumber", empty_ledger())

        assert result.failure_reason.startswith("provider_error")

    @pytest.mark.asyncio
    async def test_open_circuit_skips_provider(self, make_provider):
        breaker = CircuitBreaker(name="open_test", failure_threshold=1)
        await breaker.record_failure()
        provider = make_provider([PLUMBER_EXTRACTION])
        analyzer = InputAnalyzer(provider=provider, breaker=breaker)

        result = await analyzer.analyze("I'm a solo plumber", empty_ledger())

        assert result.failure_reason == "circuit_open"
        assert provider.requests == []

    @pytest.mark.asyncio
    async def test_repeated_failures_open_the_circuit(self, make_provider, breaker):
        analyzer = InputAnalyzer(provider=make_provider(error=RuntimeError("down")), breaker=breaker)

        await analyzer.analyze("plumber", empty_ledger())
        await analyzer.analyze("plumber", empty_ledger())

        assert breaker.is_open

    @pytest.mark.asyncio
    async def test_success_resets_failure_count(self, make_provider, breaker):
        await breaker.record_failure()
        analyzer = InputAnalyzer(provider=make_provider([PLUMBER_EXTRACTION]), breaker=breaker)

        result = await analyzer.analyze("I'm a solo plumber", empty_ledger())

        assert result.source == "ai"
        assert breaker.snapshot()["failure_count"] == 0

    def test_fallback_confidences_are_capped(self, fallback_analyzer):
        result = fallback_analyzer.fallback("I'm a solo plumber with 3 guys, we use stripe", empty_ledger())

        assert result.confidence <= FALLBACK_CONFIDENCE_CAP
        assert all(u.confidence <= FALLBACK_CONFIDENCE_CAP for u in result.updates)

    def test_answered_slot_is_explicit_within_cap(self, fallback_analyzer):
        result = fallback_analyzer.fallback("Just me", empty_ledger(), TEAM_SIZE)
        update = result.update_for("team_size")

        assert update.value == "solo"
        assert update.confidence == pytest.approx(FALLBACK_CONFIDENCE_CAP)
        assert update.source == SlotSource.EXPLICIT

    def test_default_entities_for_resolved_kit(self, fallback_analyzer):
        result = fallback_analyzer.fallback("I'm a solo plumber", empty_ledger())

        assert result.update_for("primary_entities").value == get_kit_knowledge("plumber").entities

    def test_sub_vertical_switches_kit(self, fallback_analyzer):
        ledger = merge_update(empty_ledger(), IndustryUpdate(value="real-estate", confidence=0.55))

        result = fallback_analyzer.fallback("I manage rental properties for tenants", ledger)

        assert result.kit_id == "property-management"
        assert result.update_for("sub_vertical").value == "rentals"


class TestAnthropicProvider:
    """Test the Anthropic SDK wrapper."""

    def test_requires_api_key(self):
        mock_settings = MagicMock()
        mock_settings.anthropic_api_key = None

        with patch("src.discovery.analyzer.get_settings", return_value=mock_settings):
            with pytest.raises(ConfigurationError):
                AnthropicCompletionProvider()

    @pytest.mark.asyncio
    async def test_returns_text(self):
        provider = AnthropicCompletionProvider(api_key="test-key", model="test-model", max_attempts=1)
        provider._client = MagicMock()
        provider._client.messages.create = AsyncMock(
            return_value=MagicMock(content=[MagicMock(text='{"industry": "plumber"}')])
        )

        reply = await provider.complete(CompletionRequest(prompt="hi", system_prompt="sys"))

        assert reply == '{"industry": "plumber"}'
        kwargs = provider._client.messages.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["system"] == "sys"

    @pytest.mark.asyncio
    async def test_timeout_is_mapped(self):
        provider = AnthropicCompletionProvider(api_key="test-key", max_attempts=1)
        provider._client = MagicMock()
        provider._client.messages.create = AsyncMock(
            side_effect=anthropic.APITimeoutError(
                request=httpx.Request("POST", "https://api.anthropic.com/v1/messages")
            )
        )

        with pytest.raises(CompletionTimeoutError):
            await provider.complete(CompletionRequest(prompt="hi", system_prompt="sys"))
