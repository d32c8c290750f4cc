"""
Process entry point.

Usage:
    python -m tinyurl

Listens on HOST:PORT from settings (127.0.0.1:9876 by default).
"""

import logging

import uvicorn

from tinyurl.core.logging_config import setup_logging
from tinyurl.core.setting import settings

logger = logging.getLogger("tinyurl")


def main() -> None:
    setup_logging(settings.LOG_LEVEL)
    logger.info(f"Listening on: {settings.HOST}:{settings.PORT}")
    uvicorn.run(
        "tinyurl.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
