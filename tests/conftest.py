"""
Pytest Configuration and Shared Fixtures.

This module provides common fixtures for all tests:

- FakeProvider: scripted text-completion provider
- breaker: private circuit breaker, so tests never share failure counts
- fallback_analyzer / engine: analyzer and engine with no provider configured
- plumber_description: the description most conversation tests start from
"""

import asyncio
from typing import Optional

import pytest

from src.api.dependencies import reset_dependencies
from src.core.circuit_breaker import CircuitBreaker, reset_all_circuit_breakers
from src.discovery.analyzer import InputAnalyzer
from src.discovery.engine import DiscoveryEngine
from src.discovery.models import CompletionRequest


class FakeProvider:
    """Completion provider that returns canned replies in order."""

    name = "fake"

    def __init__(
        self,
        replies: Optional[list[str]] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.replies = list(replies or [])
        self.error = error
        self.delay = delay
        self.requests: list[CompletionRequest] = []

    async def complete(self, request: CompletionRequest) -> str:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.replies.pop(0) if self.replies else "{}"


@pytest.fixture(autouse=True)
def reset_singletons():
    """Drop cached engine, analyzer and breaker state between tests."""
    yield
    reset_dependencies()
    reset_all_circuit_breakers()


@pytest.fixture
def breaker() -> CircuitBreaker:
    return CircuitBreaker(name="test_completion", failure_threshold=2, recovery_timeout=60.0)


@pytest.fixture
def fallback_analyzer(breaker) -> InputAnalyzer:
    """Analyzer with no provider: every turn goes through the keyword fallback."""
    return InputAnalyzer(provider=None, timeout=1.0, breaker=breaker)


@pytest.fixture
def engine(fallback_analyzer) -> DiscoveryEngine:
    return DiscoveryEngine(analyzer=fallback_analyzer)


@pytest.fixture
def plumber_description() -> str:
    return "I'm a solo plumber"


@pytest.fixture
def make_provider():
    """Factory for FakeProvider instances."""
    return FakeProvider
