"""
Stockroom - Main entry point.

Runs the API with uvicorn:
    python -m stockroom
"""

from __future__ import annotations

import uvicorn

from stockroom.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "stockroom.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
