"""
Podsite FastAPI Application.

- main: FastAPI application factory and exception handlers
- routes/: endpoints per resource (episodes, blog, contact, profile, auth, health)
- models: request/response envelopes
- dependencies: store, identity provider and actor providers
- errors: storage failure mapping for route handlers

API Structure (under /api):
- /health, /health/ready
- /auth/login, /auth/signup
- /episodes, /blog, /contact, /profile

Example:
    from podsite.api import app

    # Run with: uvicorn podsite.api.main:app --reload
"""

from podsite.api.main import app, create_app

__all__ = ["app", "create_app"]
