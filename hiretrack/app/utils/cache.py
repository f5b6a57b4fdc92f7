"""
Redis cache utility - used for per-user application stats.
If Redis is unavailable, caching is disabled and every op is a no-op / miss.
"""
import json
from typing import Any

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from hiretrack.app.core.config import settings
from hiretrack.app.core.logging_config import get_logger

logger = get_logger("utils.cache")
_client: aioredis.Redis | None = None


async def connect() -> None:
    global _client
    url = settings.redis_url
    if not url:
        logger.info("redis_url not set - caching disabled")
        return
    try:
        _client = aioredis.Redis.from_url(url, encoding="utf-8", decode_responses=True)
        await _client.ping()
        logger.info("Redis connected - caching enabled")
    except (RedisError, OSError) as e:
        logger.warning("Redis connect failed: %s - caching disabled", e)
        _client = None


async def close() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


async def get(key: str) -> Any:
    if not _client:
        return None
    try:
        val = await _client.get(key)
    except RedisError as e:
        logger.debug("Cache get failed key=%s error=%s", key, e)
        return None
    return json.loads(val) if val else None


async def set(key: str, value: Any, ttl: int | None = None) -> None:
    if not _client:
        return
    ttl_val = ttl if ttl is not None else settings.application_stats_cache_ttl
    try:
        await _client.set(key, json.dumps(value), ex=ttl_val)
    except RedisError as e:
        logger.debug("Cache set failed key=%s error=%s", key, e)


async def delete(key: str) -> None:
    if not _client:
        return
    try:
        await _client.delete(key)
    except RedisError as e:
        logger.debug("Cache delete failed key=%s error=%s", key, e)
