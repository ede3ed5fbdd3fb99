"""
Core infrastructure modules for the Discovery Engine.

Provides common utilities used across the application:
- exceptions: Standardized exception hierarchy
- circuit_breaker: Resilience pattern for the text-completion provider
"""

from src.core.exceptions import (
    DiscoveryError,
    RetryableError,
    PermanentError,
    CompletionProviderError,
    CompletionTimeoutError,
    CompletionUnavailableError,
    CompletionResponseError,
    ConfigurationError,
    InvariantViolationError,
    CompletionGateError,
    CircuitBreakerOpenError,
)
from src.core.circuit_breaker import (
    CircuitBreaker,
    CircuitState,
    get_circuit_breaker,
    get_all_circuit_breakers,
    reset_all_circuit_breakers,
)

__all__ = [
    # Exceptions
    "DiscoveryError",
    "RetryableError",
    "PermanentError",
    "CompletionProviderError",
    "CompletionTimeoutError",
    "CompletionUnavailableError",
    "CompletionResponseError",
    "ConfigurationError",
    "InvariantViolationError",
    "CompletionGateError",
    "CircuitBreakerOpenError",
    # Circuit Breaker
    "CircuitBreaker",
    "CircuitState",
    "get_circuit_breaker",
    "get_all_circuit_breakers",
    "reset_all_circuit_breakers",
]
