"""
Discovery FastAPI Application.

This module contains the REST API for the Discovery Engine:

- main: FastAPI application entry point and configuration
- routes/: API endpoint definitions
- models: Pydantic request/response models
- dependencies: FastAPI dependency injection providers

API Structure:
- /health - Health check and liveness probe
- /api/v1/discovery/start - Begin a conversation
- /api/v1/discovery/continue - Send the next reply with the previous state

Example:
    from src.api.main import app

    # Run with: uvicorn src.api.main:app --reload
"""

from src.api.main import app

__all__ = ["app"]
