"""
Podsite Test Suite.

- unit/: renderer, repository, stores, identity provider, settings
- integration/: the FastAPI app end to end against the in-memory store
- conftest.py: Shared fixtures and test configuration

Run tests with: pytest
Run with coverage: pytest --cov=podsite
"""
