"""
Configuration Management.

This module provides centralized configuration using Pydantic Settings.

Configuration sources (in order of precedence):
1. Environment variables
2. .env file
3. Default values

The Anthropic key is loaded from the environment and never committed to
source control. Scoring thresholds are not settings; they live in
src.discovery.constants.

Example:
    from src.config import get_settings

    settings = get_settings()
    if settings.ai_configured:
        ...
"""

from src.config.settings import Settings, get_settings, settings

__all__ = [
    "Settings",
    "get_settings",
    "settings",
]
