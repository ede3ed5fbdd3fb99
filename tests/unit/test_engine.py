"""Unit tests for the discovery engine conversation flow."""

import json
import random

import pytest

from src.catalog.kits import BILLING, TRADE_JOB_TYPES
from src.core.exceptions import CompletionGateError
from src.discovery.constants import AUTO_COMPLETE_THRESHOLD, MAX_QUESTIONS
from src.discovery.analyzer import InputAnalyzer
from src.discovery.engine import DiscoveryEngine, assert_can_complete
from src.discovery.models import ConversationState, DiscoveryStep
from src.discovery.phrases import NAME_QUESTION, NEEDS_CLARIFICATION, VIBE_QUESTION


REPLY_POOL = [
    "yes",
    "no",
    "skip",
    "just build it",
    "Modern",
    "not quite, I also do car repairs",
    "2 employees",
    "We use Stripe",
    "whatever",
    "Emergency calls mostly",
]


def assert_gate(turn):
    """A completed turn must have passed the completion gate."""
    response = turn.response
    if response.complete:
        assert turn.state.confidence >= AUTO_COMPLETE_THRESHOLD or turn.state.user_confirmed
        assert response.app_config is not None
    assert response.question_count <= MAX_QUESTIONS


class TestStart:
    """Test opening a conversation."""

    @pytest.mark.asyncio
    async def test_plumber_takes_fast_path(self, engine, plumber_description):
        turn = await engine.start(plumber_description, seed=3)
        state = turn.state

        assert state.kit_id == "plumber"
        assert state.confidence == pytest.approx(0.65)
        assert state.fast_path is True
        assert "team_size" in state.questions_credited
        assert turn.response.question == TRADE_JOB_TYPES.question
        assert turn.response.question_count == 2
        assert turn.response.step == DiscoveryStep.ASK_REQUIRED_QUESTION

    @pytest.mark.asyncio
    async def test_vague_description_asks_what_the_business_does(self, engine):
        turn = await engine.start("I need an app for my business", seed=3)

        assert turn.state.confidence == 0.0
        assert turn.state.fast_path is False
        assert turn.response.question in NEEDS_CLARIFICATION

    @pytest.mark.asyncio
    async def test_same_seed_same_wording(self, engine, plumber_description):
        first = await engine.start(plumber_description, seed=11)
        second = await engine.start(plumber_description, seed=11)

        assert first.response.message == second.response.message


class TestFullConversation:
    """Test a conversation from description to build config."""

    @pytest.mark.asyncio
    async def test_plumber_conversation(self, engine, plumber_description):
        turn = await engine.start(plumber_description, seed=3)

        turn = await engine.respond(turn.state, "Emergency calls mostly")
        assert turn.response.question == BILLING.question
        assert turn.response.question_count == 3
        assert "job_tracking" in turn.response.enabled_features

        turn = await engine.respond(turn.state, "Quotes first, then invoices")
        assert turn.response.question == VIBE_QUESTION
        assert turn.response.step == DiscoveryStep.ASK_PERSONALIZATION

        turn = await engine.respond(turn.state, "Modern")
        assert turn.state.theme_preset == "modern"
        assert turn.response.question == NAME_QUESTION

        turn = await engine.respond(turn.state, "Drip Fix Plumbing")
        assert turn.response.step == DiscoveryStep.AWAIT_CONFIRMATION
        assert turn.response.pending_confirmation is True
        assert "I'll create a plumbing app focused on business operations." in turn.response.message

        turn = await engine.respond(turn.state, "yes")
        config = turn.response.app_config

        assert turn.response.complete is True
        assert config.industry == "plumber"
        assert config.team_size == "solo"
        assert config.business_name == "Drip Fix Plumbing"
        assert config.theme_preset == "modern"
        assert "quotes" in config.features
        assert "invoicing" in config.features

    @pytest.mark.asyncio
    async def test_quick_build_mid_conversation(self, engine, plumber_description):
        turn = await engine.start(plumber_description, seed=3)

        turn = await engine.respond(turn.state, "just build it")

        assert turn.response.complete is True
        assert turn.response.question_count == 2
        assert turn.response.app_config.industry == "plumber"

    @pytest.mark.asyncio
    async def test_build_mentioned_inside_answer_is_an_answer(self, engine, plumber_description):
        turn = await engine.start(plumber_description, seed=3)

        turn = await engine.respond(
            turn.state, "Emergency calls, and later I want you to build it so customers can book"
        )

        assert turn.response.complete is False
        assert turn.response.step == DiscoveryStep.ASK_REQUIRED_QUESTION
        assert turn.response.question_count == 3

    @pytest.mark.asyncio
    async def test_negative_confirmation_keeps_waiting(self, engine, plumber_description):
        turn = await engine.start(plumber_description, seed=3)
        for reply in ["Emergency calls mostly", "Quotes first", "skip", "skip"]:
            turn = await engine.respond(turn.state, reply)
        assert turn.response.step == DiscoveryStep.AWAIT_CONFIRMATION

        turn = await engine.respond(turn.state, "no")

        assert turn.response.complete is False
        assert turn.response.step == DiscoveryStep.AWAIT_CONFIRMATION
        assert turn.response.message


class TestElaboration:
    """Test corrections given at confirmation time."""

    async def _at_confirmation(self, engine, description):
        turn = await engine.start(description, seed=3)
        for reply in ["Emergency calls mostly", "Quotes first, then invoices", "Modern", "Drip Fix Plumbing"]:
            turn = await engine.respond(turn.state, reply)
        assert turn.response.step == DiscoveryStep.AWAIT_CONFIRMATION
        return turn

    @pytest.mark.asyncio
    async def test_second_industry_is_added(self, engine, plumber_description):
        turn = await self._at_confirmation(engine, plumber_description)

        turn = await engine.respond(turn.state, "not quite, I also do car repairs")

        assert turn.state.kit_id == "plumber"
        assert turn.state.secondary_industries == ["mechanic"]
        assert turn.state.corrections == 1
        assert "inventory" in turn.response.enabled_features
        assert turn.response.step == DiscoveryStep.AWAIT_CONFIRMATION
        assert "also covering auto repair" in turn.response.message

        turn = await engine.respond(turn.state, "looks good")

        assert turn.response.complete is True
        assert turn.response.app_config.secondary_industries == ["mechanic"]


class TestUnresolvedIndustry:
    """Test conversations where no concrete industry is ever identified."""

    @pytest.mark.asyncio
    async def test_confident_ai_without_industry_never_auto_completes(self, make_provider, breaker):
        reply = json.dumps({"industry": None, "confidence": 0.99})
        analyzer = InputAnalyzer(provider=make_provider([reply] * 12), breaker=breaker)
        engine = DiscoveryEngine(analyzer=analyzer)

        turn = await engine.start("I need an app for my business", seed=3)
        for _ in range(10):
            assert turn.response.complete is False
            assert turn.state.confidence < AUTO_COMPLETE_THRESHOLD
            if turn.response.step == DiscoveryStep.AWAIT_CONFIRMATION:
                break
            turn = await engine.respond(turn.state, "Dog walking")

        assert turn.response.step == DiscoveryStep.AWAIT_CONFIRMATION
        assert turn.response.complete is False
        assert turn.state.confidence < AUTO_COMPLETE_THRESHOLD


class TestStateHandling:
    """Test statelessness and completed conversations."""

    @pytest.mark.asyncio
    async def test_respond_does_not_mutate_input(self, engine, plumber_description):
        turn = await engine.start(plumber_description, seed=3)
        before = turn.state.model_dump()

        await engine.respond(turn.state, "Emergency calls mostly")

        assert turn.state.model_dump() == before

    @pytest.mark.asyncio
    async def test_complete_state_re_emits_config(self, engine, plumber_description):
        turn = await engine.start(plumber_description, seed=3)
        done = await engine.respond(turn.state, "just build it")

        again = await engine.respond(done.state, "hello?")

        assert again.response.complete is True
        assert again.response.app_config == done.response.app_config

    @pytest.mark.asyncio
    async def test_init_state_is_treated_as_start(self, engine, plumber_description):
        turn = await engine.respond(ConversationState(seed=3), plumber_description)

        assert turn.state.kit_id == "plumber"
        assert turn.response.step == DiscoveryStep.ASK_REQUIRED_QUESTION


class TestCompletionGate:
    """Test the completion gate."""

    def test_low_confidence_without_confirmation_raises(self):
        state = ConversationState(confidence=0.5)

        with pytest.raises(CompletionGateError) as exc_info:
            assert_can_complete(state)
        assert exc_info.value.threshold == AUTO_COMPLETE_THRESHOLD

    def test_confirmation_passes(self):
        assert_can_complete(ConversationState(confidence=0.1, user_confirmed=True))

    def test_high_confidence_passes(self):
        assert_can_complete(ConversationState(confidence=0.97))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("seed", range(12))
    async def test_random_conversations_respect_gate(self, engine, seed):
        rng = random.Random(seed)
        description = rng.choice(
            ["I'm a solo plumber", "I run a cleaning business", "I need an app for my business"]
        )
        turn = await engine.start(description, seed=seed)
        assert_gate(turn)

        for _ in range(15):
            if turn.response.complete:
                break
            turn = await engine.respond(turn.state, rng.choice(REPLY_POOL))
            assert_gate(turn)
