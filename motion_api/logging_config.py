"""
logging_config.py — Loguru setup for Motion API

Level and output format come from Settings (LOG_LEVEL, ENVIRONMENT), so
.env files apply the same way they do for the Supabase and backend keys.
uvicorn, httpx and supabase log through the stdlib; those records are
forwarded to Loguru and carry the request_id the middleware binds.

Business Rules:
- Production writes one JSON object per line to stdout
- Other environments get a colored line with the request id column
- request_id is "-" for records logged outside a request

Called by: motion_api/main.py (on import)
Depends on: motion_api/config.py
"""

import logging
import sys

from loguru import logger

from .config import Settings

_DEV_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[request_id]}</cyan> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "{message}"
)


def setup_logging(config: Settings | None = None) -> None:
    """Replace Loguru's sinks and route stdlib logging into them.

    Reads a fresh Settings unless one is passed in.
    """
    config = config or Settings()
    log_level = config.log_level.upper()

    logger.remove()
    if config.is_production:
        logger.add(sys.stdout, level=log_level, format="{message}", serialize=True)
    else:
        logger.add(sys.stdout, level=log_level, format=_DEV_FORMAT, colorize=True)
    logger.configure(extra={"request_id": "-"})

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name in ("httpx", "httpcore", "hpack", "uvicorn.access"):
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.info("Logging configured", level=log_level, production=config.is_production)


class _InterceptHandler(logging.Handler):
    """Forward stdlib records to Loguru, attributed to the original caller."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())
