"""Unit tests for the circuit breaker."""

import pytest

from src.core.circuit_breaker import (
    CircuitBreaker,
    CircuitState,
    get_all_circuit_breakers,
    get_circuit_breaker,
    reset_all_circuit_breakers,
)
from src.core.exceptions import CircuitBreakerOpenError


class TestCircuitBreakerStates:
    """Test state transitions."""

    @pytest.mark.asyncio
    async def test_opens_after_threshold(self):
        breaker = CircuitBreaker(name="test", failure_threshold=3)

        await breaker.record_failure()
        await breaker.record_failure()
        assert breaker.state == CircuitState.CLOSED

        await breaker.record_failure()
        assert breaker.is_open
        assert breaker.can_execute() is False
        assert breaker.time_until_recovery() > 0

    @pytest.mark.asyncio
    async def test_success_resets_failure_count(self):
        breaker = CircuitBreaker(name="test", failure_threshold=2)

        await breaker.record_failure()
        await breaker.record_success()
        await breaker.record_failure()

        assert breaker.state == CircuitState.CLOSED

    @pytest.mark.asyncio
    async def test_half_open_then_closed(self):
        breaker = CircuitBreaker(name="test", failure_threshold=1, recovery_timeout=0.0)

        await breaker.record_failure()
        assert breaker.state == CircuitState.HALF_OPEN

        await breaker.record_success()
        assert breaker.state == CircuitState.CLOSED

    @pytest.mark.asyncio
    async def test_half_open_failure_reopens(self):
        breaker = CircuitBreaker(name="test", failure_threshold=1, recovery_timeout=0.0)

        await breaker.record_failure()
        assert breaker.state == CircuitState.HALF_OPEN

        await breaker.record_failure()
        assert breaker._state == CircuitState.OPEN


class TestCircuitBreakerDecorator:
    """Test decorator usage."""

    @pytest.mark.asyncio
    async def test_passes_through_when_closed(self):
        breaker = CircuitBreaker(name="test")

        @breaker
        async def call():
            return "ok"

        assert await call() == "ok"

    @pytest.mark.asyncio
    async def test_raises_when_open(self):
        breaker = CircuitBreaker(name="test", failure_threshold=1)

        @breaker
        async def call():
            raise RuntimeError("down")

        with pytest.raises(RuntimeError):
            await call()

        with pytest.raises(CircuitBreakerOpenError) as exc_info:
            await call()
        assert exc_info.value.service == "test"


class TestRegistry:
    """Test the global breaker registry."""

    def test_get_returns_same_instance(self):
        first = get_circuit_breaker("registry_test", failure_threshold=5)
        second = get_circuit_breaker("registry_test", failure_threshold=1)

        assert first is second
        assert second.failure_threshold == 5
        assert "registry_test" in get_all_circuit_breakers()

    @pytest.mark.asyncio
    async def test_reset_all(self):
        breaker = get_circuit_breaker("reset_test", failure_threshold=1)
        await breaker.record_failure()
        assert breaker.is_open

        reset_all_circuit_breakers()

        assert breaker.state == CircuitState.CLOSED

    @pytest.mark.asyncio
    async def test_snapshot(self):
        breaker = CircuitBreaker(name="snap", failure_threshold=5)
        await breaker.record_failure()

        snapshot = breaker.snapshot()

        assert snapshot == {
            "name": "snap",
            "state": "closed",
            "failure_count": 1,
            "recovery_in_seconds": 0.0,
        }
