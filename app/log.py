import logging
import sys

from loguru import logger

from app import settings


class _InterceptHandler(logging.Handler):
    """Forward stdlib log records (tortoise, uvicorn) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def configure_logging(level: str | None = None) -> None:
    level = level or settings.LOG_LEVEL
    logger.remove()
    logger.add(sys.stderr, level=level, backtrace=False, diagnose=False)

    # Query logging only while developing, errors always
    db_level = logging.DEBUG if settings.ENV == "development" else logging.WARNING
    for name in ("tortoise", "tortoise.db_client"):
        std = logging.getLogger(name)
        std.handlers = [_InterceptHandler()]
        std.setLevel(db_level)
        std.propagate = False
