"""
Core exception hierarchy for the Discovery Engine.

Provides standardized exception types with categorization for retry logic.
Errors from the text-completion provider are always recoverable: the input
analyzer catches them and falls back to keyword heuristics. The only error the
engine treats as fatal is an invariant violation, which it intercepts itself.
"""

from typing import Any, Optional


# =============================================================================
# Base Exceptions
# =============================================================================


class DiscoveryError(Exception):
    """Base exception for all Discovery Engine errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class RetryableError(DiscoveryError):
    """
    Transient errors that should be retried.

    Examples: Rate limits, timeouts, temporary network issues.
    """

    pass


class PermanentError(DiscoveryError):
    """
    Errors that won't be fixed by retrying.

    Examples: Malformed model output, invalid configuration.
    """

    pass


# =============================================================================
# Completion Provider Errors
# =============================================================================


class CompletionProviderError(RetryableError):
    """Base exception for text-completion provider failures."""

    def __init__(
        self,
        provider: str,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ):
        self.provider = provider
        super().__init__(f"[{provider}] {message}", details)


class CompletionTimeoutError(CompletionProviderError):
    """Raised when a completion call exceeds its timeout."""

    pass


class CompletionUnavailableError(CompletionProviderError):
    """Raised when the provider is not configured or temporarily unavailable."""

    pass


class CompletionResponseError(PermanentError):
    """Raised when the provider reply has no usable JSON payload."""

    def __init__(self, message: str, raw_response: str = ""):
        self.raw_response = raw_response
        super().__init__(message, {"raw_response": raw_response[:200]} if raw_response else None)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(PermanentError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        self.config_key = config_key
        details = {"config_key": config_key} if config_key else None
        super().__init__(message, details)


# =============================================================================
# Invariant Violations
# =============================================================================


class InvariantViolationError(PermanentError):
    """Raised when an internal engine invariant would be broken."""

    pass


class CompletionGateError(InvariantViolationError):
    """Raised when a conversation tries to complete below the confidence gate."""

    def __init__(self, confidence: float, threshold: float, user_confirmed: bool):
        self.confidence = confidence
        self.threshold = threshold
        self.user_confirmed = user_confirmed
        super().__init__(
            f"Cannot complete at confidence {confidence:.2f} without confirmation "
            f"(threshold {threshold:.2f})",
            {
                "confidence": confidence,
                "threshold": threshold,
                "user_confirmed": user_confirmed,
            },
        )


# =============================================================================
# Circuit Breaker
# =============================================================================


class CircuitBreakerOpenError(RetryableError):
    """Raised when circuit breaker is open and blocking requests."""

    def __init__(self, service: str, recovery_time: float):
        self.service = service
        self.recovery_time = recovery_time
        super().__init__(
            f"Circuit breaker open for {service}. Recovery in {recovery_time:.1f}s",
            {"service": service, "recovery_time": recovery_time},
        )
