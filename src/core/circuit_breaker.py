"""
Circuit breaker guarding the external text-completion provider.

After repeated provider failures the breaker opens and the input analyzer
skips the provider entirely, answering every turn from the keyword fallback
until the recovery timeout elapses.

States:
- CLOSED: provider calls pass through
- OPEN: provider calls are skipped
- HALF_OPEN: one trial call decides whether to close again

Usage:
    breaker = get_circuit_breaker("text_completion", failure_threshold=3)

    @breaker
    async def call_provider():
        ...

    # Or manual usage:
    if breaker.can_execute():
        try:
            reply = await provider.complete(request)
            await breaker.record_success()
        except Exception:
            await breaker.record_failure()
"""

import asyncio
import time
from dataclasses import dataclass, field
from enum import Enum
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

import structlog

from src.core.exceptions import CircuitBreakerOpenError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class CircuitState(Enum):
    """Circuit breaker states."""

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


@dataclass
class CircuitBreaker:
    """
    Failure counter that temporarily disables an unreliable dependency.

    Args:
        name: Identifier for this circuit (e.g., "text_completion")
        failure_threshold: Consecutive failures before opening
        recovery_timeout: Seconds to stay open before a trial call
        success_threshold: Trial successes needed to close again
    """

    name: str
    failure_threshold: int = 3
    recovery_timeout: float = 60.0
    success_threshold: int = 1

    _state: CircuitState = field(default=CircuitState.CLOSED, init=False)
    _failure_count: int = field(default=0, init=False)
    _success_count: int = field(default=0, init=False)
    _opened_at: Optional[float] = field(default=None, init=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False)

    @property
    def state(self) -> CircuitState:
        """Current state, moving OPEN to HALF_OPEN once the timeout has passed."""
        if self._state == CircuitState.OPEN and self._opened_at is not None:
            if time.monotonic() - self._opened_at >= self.recovery_timeout:
                self._state = CircuitState.HALF_OPEN
                self._success_count = 0
                logger.info("circuit_breaker_half_open", name=self.name)
        return self._state

    @property
    def is_open(self) -> bool:
        return self.state == CircuitState.OPEN

    def can_execute(self) -> bool:
        """Check if a call may go through."""
        return self.state != CircuitState.OPEN

    def time_until_recovery(self) -> float:
        """Seconds left before the breaker allows a trial call."""
        if self._state != CircuitState.OPEN or self._opened_at is None:
            return 0.0
        elapsed = time.monotonic() - self._opened_at
        return max(0.0, self.recovery_timeout - elapsed)

    async def record_success(self) -> None:
        """Record a successful call."""
        async with self._lock:
            if self._state == CircuitState.HALF_OPEN:
                self._success_count += 1
                if self._success_count >= self.success_threshold:
                    self._close()
            else:
                self._failure_count = 0

    async def record_failure(self) -> None:
        """Record a failed call, opening the circuit when the threshold is hit."""
        async with self._lock:
            self._failure_count += 1

            if self._state == CircuitState.HALF_OPEN:
                self._open()
                logger.warning("circuit_breaker_reopened", name=self.name)
            elif (
                self._state == CircuitState.CLOSED
                and self._failure_count >= self.failure_threshold
            ):
                self._open()
                logger.warning(
                    "circuit_breaker_opened",
                    name=self.name,
                    failure_count=self._failure_count,
                    recovery_timeout=self.recovery_timeout,
                )

    def _open(self) -> None:
        self._state = CircuitState.OPEN
        self._opened_at = time.monotonic()
        self._success_count = 0

    def _close(self) -> None:
        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._success_count = 0
        self._opened_at = None
        logger.info("circuit_breaker_closed", name=self.name)

    def reset(self) -> None:
        """Force the breaker back to CLOSED."""
        self._close()

    def snapshot(self) -> dict[str, Any]:
        """Serializable view used by the health endpoint."""
        return {
            "name": self.name,
            "state": self.state.value,
            "failure_count": self._failure_count,
            "recovery_in_seconds": round(self.time_until_recovery(), 1),
        }

    def __call__(self, func: Callable[..., T]) -> Callable[..., T]:
        """Use as decorator for async functions."""

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            if not self.can_execute():
                raise CircuitBreakerOpenError(self.name, self.time_until_recovery())

            try:
                result = await func(*args, **kwargs)
            except Exception:
                await self.record_failure()
                raise
            await self.record_success()
            return result

        return wrapper


# =============================================================================
# Global Circuit Breaker Registry
# =============================================================================


_circuit_breakers: dict[str, CircuitBreaker] = {}


def get_circuit_breaker(
    name: str,
    failure_threshold: int = 3,
    recovery_timeout: float = 60.0,
) -> CircuitBreaker:
    """
    Get or create a circuit breaker by name.

    Thresholds only apply the first time a name is registered.
    """
    if name not in _circuit_breakers:
        _circuit_breakers[name] = CircuitBreaker(
            name=name,
            failure_threshold=failure_threshold,
            recovery_timeout=recovery_timeout,
        )
    return _circuit_breakers[name]


def get_all_circuit_breakers() -> dict[str, CircuitBreaker]:
    """Get all registered circuit breakers."""
    return _circuit_breakers.copy()


def reset_all_circuit_breakers() -> None:
    """Reset all circuit breakers to closed state."""
    for breaker in _circuit_breakers.values():
        breaker.reset()
