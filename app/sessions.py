import json
import secrets

from loguru import logger
from redis.asyncio import Redis

from app.settings import REDIS_URL, SESSION_TTL

_redis: Redis | None = None


def get_redis() -> Redis:
    global _redis
    if _redis is None:
        _redis = Redis.from_url(REDIS_URL, decode_responses=True)
    return _redis


async def close_redis() -> None:
    global _redis
    if _redis is not None:
        await _redis.aclose()
        _redis = None


def _session_key(token: str) -> str:
    return f"session:{token}"


async def create_session(data: dict) -> str:
    """Store session data and return the opaque token handed to the client."""
    token = secrets.token_urlsafe(32)
    await get_redis().setex(_session_key(token), SESSION_TTL, json.dumps(data))
    return token


async def get_session(token: str) -> dict | None:
    try:
        data = await get_redis().get(_session_key(token))
        return json.loads(data) if data else None
    except Exception:
        logger.opt(exception=True).warning(
            "Redis get failed, treating session as missing"
        )
        return None


async def delete_session(token: str) -> None:
    try:
        await get_redis().delete(_session_key(token))
    except Exception:
        logger.opt(exception=True).warning("Redis delete failed for session")


async def refresh_session(token: str, data: dict) -> None:
    """Overwrite session data in place, keeping its remaining lifetime."""
    try:
        await get_redis().set(_session_key(token), json.dumps(data), keepttl=True)
    except Exception:
        logger.opt(exception=True).warning("Redis refresh failed for session")
