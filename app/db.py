"""
Process-wide database handle.

Tortoise keeps one connection set per process. ``init_db`` may be called from
the app lifespan, a maintenance script, or a reloaded module; only the first
call opens connections. ``close_db`` is the matching teardown hook.
"""

from loguru import logger
from tortoise import Tortoise

from app import settings

_initialized: bool = False


def tortoise_config(db_url: str | None = None) -> dict:
    return {
        "connections": {"default": db_url or settings.db_url},
        "apps": {
            "models": {
                "models": settings.MODEL_MODULES,
                "default_connection": "default",
            }
        },
        "use_tz": True,
        "timezone": "UTC",
    }


async def init_db(db_url: str | None = None, generate_schemas: bool = False) -> None:
    global _initialized
    if _initialized:
        return
    await Tortoise.init(config=tortoise_config(db_url))
    _initialized = True
    logger.info("Database connections opened")
    if generate_schemas:
        await Tortoise.generate_schemas(safe=True)


async def close_db() -> None:
    global _initialized
    if not _initialized:
        return
    await Tortoise.close_connections()
    _initialized = False
    logger.info("Database connections closed")


def is_initialized() -> bool:
    return _initialized
