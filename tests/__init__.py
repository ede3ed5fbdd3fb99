"""
Discovery Engine Test Suite.

- unit/: parser, classifiers, ledger, analyzer, phrases and engine tests
- integration/: API endpoint tests through FastAPI's TestClient
- conftest.py: Shared fixtures and test configuration

Run tests with: pytest
Run with coverage: pytest --cov=src
"""
