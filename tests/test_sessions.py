"""
Redis session store. The Redis client is replaced with an AsyncMock.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

from app.sessions import create_session, delete_session, get_session, refresh_session
from app.settings import SESSION_TTL

REDIS_PATH = "app.sessions.get_redis"


def _redis(**methods) -> MagicMock:
    mock = MagicMock()
    for name, value in methods.items():
        setattr(mock, name, value)
    return mock


class TestSessions:
    async def test_create_stores_with_ttl(self):
        redis = _redis(setex=AsyncMock())
        with patch(REDIS_PATH, return_value=redis):
            token = await create_session({"id": "u1"})
        key, ttl, raw = redis.setex.call_args.args
        assert key == f"session:{token}"
        assert ttl == SESSION_TTL
        assert json.loads(raw) == {"id": "u1"}

    async def test_get_decodes(self):
        redis = _redis(get=AsyncMock(return_value='{"id": "u1"}'))
        with patch(REDIS_PATH, return_value=redis):
            assert await get_session("tok") == {"id": "u1"}
        redis.get.assert_awaited_once_with("session:tok")

    async def test_get_missing(self):
        redis = _redis(get=AsyncMock(return_value=None))
        with patch(REDIS_PATH, return_value=redis):
            assert await get_session("tok") is None

    async def test_get_treats_redis_failure_as_signed_out(self):
        redis = _redis(get=AsyncMock(side_effect=ConnectionError("down")))
        with patch(REDIS_PATH, return_value=redis):
            assert await get_session("tok") is None

    async def test_refresh_keeps_ttl(self):
        redis = _redis(set=AsyncMock())
        with patch(REDIS_PATH, return_value=redis):
            await refresh_session("tok", {"id": "u1"})
        _, kwargs = redis.set.call_args
        assert kwargs == {"keepttl": True}

    async def test_refresh_swallows_redis_failure(self):
        redis = _redis(set=AsyncMock(side_effect=ConnectionError("down")))
        with patch(REDIS_PATH, return_value=redis):
            await refresh_session("tok", {"id": "u1"})
        redis.set.assert_awaited_once()

    async def test_delete(self):
        redis = _redis(delete=AsyncMock())
        with patch(REDIS_PATH, return_value=redis):
            await delete_session("tok")
        redis.delete.assert_awaited_once_with("session:tok")
