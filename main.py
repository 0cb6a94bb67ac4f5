"""
Podsite - Main Entry Point

Runs the content service with uvicorn.
"""

import uvicorn

from podsite.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "podsite.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
