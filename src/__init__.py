"""
Discovery Engine - conversational requirements discovery for generated business apps.

This package contains the modules of the Discovery Engine:
- catalog: Read-only knowledge catalogs (features, behavior bundles, industry kits)
- discovery: Parser, scoring components, certainty ledger and the conversation state machine
- api: FastAPI application exposing stateless start/continue endpoints
- config: Pydantic settings
- core: Exception hierarchy and circuit breaker
"""

__version__ = "1.0.0"
