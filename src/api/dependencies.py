"""FastAPI dependency injection providers.

This module provides dependency functions for injecting services into route handlers.
Tests override get_engine via app.dependency_overrides.
"""

from src.discovery.analyzer import reset_input_analyzer
from src.discovery.engine import DiscoveryEngine, get_discovery_engine, reset_discovery_engine


def get_engine() -> DiscoveryEngine:
    """
    Get the DiscoveryEngine instance.

    The engine holds no conversation state, so one instance serves every request.
    """
    return get_discovery_engine()


def reset_dependencies() -> None:
    """Drop cached singletons. Called on shutdown and in tests."""
    reset_discovery_engine()
    reset_input_analyzer()
