"""
Podsite - content service for a podcast and blog promotional website.

This package contains the core modules for the site backend:
- api: FastAPI application and endpoints
- auth: Identity provider integration (Supabase Auth)
- config: Pydantic settings and configuration
- content: Record models and the content repository
- core: Exceptions and logging setup
- markdown: Restricted markdown renderer and HTML output
- store: Key-value store backends (Supabase table, in-memory)
"""

__version__ = "0.1.0"
