"""
Configuration Management.

Configuration sources (in order of precedence):
1. Environment variables
2. .env file
3. Default values

Example:
    from podsite.config import get_settings

    settings = get_settings()
    table = settings.kv_table
"""

from podsite.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
