"""Cache: two-tier cache service, its tiers and the connectivity monitor.

Used by TaskService (through ICacheService) for cache-aside reads. Key
format lives in taskboard.shared.cache_keys (DRY).
"""

from taskboard.infrastructure.cache.cache_protocol import RemoteCacheProtocol
from taskboard.infrastructure.cache.connectivity import ConnectivityMonitor
from taskboard.infrastructure.cache.local_cache import LocalCache
from taskboard.infrastructure.cache.redis_cache import RedisRemoteCache
from taskboard.infrastructure.cache.tiered_cache import (
    CacheService,
    CacheSettings,
    CacheStatus,
)

__all__ = [
    "CacheService",
    "CacheSettings",
    "CacheStatus",
    "ConnectivityMonitor",
    "LocalCache",
    "RedisRemoteCache",
    "RemoteCacheProtocol",
]
