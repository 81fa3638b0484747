"""RedisRemoteCache: command mapping and error translation (client mocked)."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from taskboard.core.config import Settings
from taskboard.infrastructure.cache.redis_cache import RedisRemoteCache
from taskboard.infrastructure.exceptions import RemoteCacheUnavailableError


@pytest.fixture
def redis_client() -> AsyncMock:
    return AsyncMock()


async def test_get_returns_raw_bytes(redis_client) -> None:
    redis_client.get.return_value = b'{"id": 1}'
    assert await RedisRemoteCache(redis_client).get("task_1") == b'{"id": 1}'
    redis_client.get.assert_awaited_once_with("task_1")


async def test_set_uses_millisecond_expiry(redis_client) -> None:
    await RedisRemoteCache(redis_client).set("k", b"v", timedelta(seconds=1.5))
    redis_client.set.assert_awaited_once_with("k", b"v", px=1500)


async def test_sub_millisecond_ttl_rounds_up(redis_client) -> None:
    await RedisRemoteCache(redis_client).set("k", b"v", timedelta(microseconds=10))
    assert redis_client.set.await_args.kwargs["px"] == 1


async def test_remove_deletes_key(redis_client) -> None:
    await RedisRemoteCache(redis_client).remove("task_1")
    redis_client.delete.assert_awaited_once_with("task_1")


@pytest.mark.parametrize(
    "error", [RedisConnectionError("refused"), RedisTimeoutError("timed out")]
)
async def test_redis_errors_become_unavailable(redis_client, error) -> None:
    redis_client.get.side_effect = error
    redis_client.set.side_effect = error
    redis_client.delete.side_effect = error
    cache = RedisRemoteCache(redis_client)

    with pytest.raises(RemoteCacheUnavailableError) as exc_info:
        await cache.get("k")
    assert exc_info.value.error_code == "REMOTE_CACHE_UNAVAILABLE"
    assert exc_info.value.details["operation"] == "get"

    with pytest.raises(RemoteCacheUnavailableError):
        await cache.set("k", b"v", timedelta(seconds=1))
    with pytest.raises(RemoteCacheUnavailableError):
        await cache.remove("k")


async def test_close_closes_client(redis_client) -> None:
    await RedisRemoteCache(redis_client).close()
    redis_client.aclose.assert_awaited_once()


async def test_from_settings_configures_client() -> None:
    settings = Settings(redis_host="cache.internal", redis_port=6380, redis_db=2)
    cache = RedisRemoteCache.from_settings(settings)
    kwargs = cache.redis.connection_pool.connection_kwargs
    assert kwargs["host"] == "cache.internal"
    assert kwargs["port"] == 6380
    assert kwargs["db"] == 2
    await cache.close()
