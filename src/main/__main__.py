"""
Main module entry point.

This allows running the gateway as: python -m src.main
"""

import uvicorn

from src.main.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "src.main.app:app",
        host=settings.ge.host,
        port=settings.ge.port,
        reload=settings.ge.reload,
        log_level=settings.logging.level.value.lower(),
    )


if __name__ == "__main__":
    main()
