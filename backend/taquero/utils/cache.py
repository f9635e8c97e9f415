"""Redis caching for expensive read endpoints (the finance dashboard).

Redis is optional at runtime: when it is unreachable, or caching is
switched off with ``CACHE_ENABLED=false``, calls fall straight through
to the wrapped function.
"""

import functools
import hashlib
import json
import logging
from datetime import date, datetime
from typing import Callable, Optional

import redis.asyncio as redis

from taquero.config import settings

logger = logging.getLogger(__name__)

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> redis.Redis:
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
            max_connections=50,
        )
    return _redis_client


async def close_redis():
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


def cache_key(*args, **kwargs) -> str:
    """Deterministic hash of the call arguments."""
    if not args and not kwargs:
        return "default"

    key_data = json.dumps({"args": args, "kwargs": kwargs}, sort_keys=True)
    return hashlib.md5(key_data.encode()).hexdigest()


def _key_kwargs(kwargs: dict) -> dict:
    # Only plain values take part in the key; sessions and users are skipped.
    out = {}
    for k, v in kwargs.items():
        if k.startswith("_"):
            continue
        if isinstance(v, (int, str, bool, float, type(None))):
            out[k] = v
        elif isinstance(v, (date, datetime)):
            out[k] = v.isoformat()
        elif isinstance(v, (list, tuple)) and all(isinstance(i, str) for i in v):
            out[k] = sorted(v)
    return out


def cached(ttl: int = 300, prefix: str = "cache"):
    """Cache an async function's JSON-serialisable result in Redis.

    Cache keys: {prefix}:{function_name}:{kwargs_hash}
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            if not settings.cache_enabled:
                return await func(*args, **kwargs)

            key = f"{prefix}:{func.__name__}:{cache_key(**_key_kwargs(kwargs))}"

            try:
                redis_client = await get_redis()
                cached_value = await redis_client.get(key)
                if cached_value:
                    logger.debug(f"Cache HIT: {key}")
                    return json.loads(cached_value)
                logger.debug(f"Cache MISS: {key}")
            except redis.RedisError as e:
                logger.warning(f"Redis error (falling back to uncached): {e}")
                return await func(*args, **kwargs)

            result = await func(*args, **kwargs)
            serialized = result.model_dump(mode="json") if hasattr(result, "model_dump") else result

            try:
                await redis_client.setex(key, ttl, json.dumps(serialized, default=str))
            except redis.RedisError as e:
                logger.warning(f"Redis error while storing {key}: {e}")
            return result

        return wrapper

    return decorator


async def invalidate_cache(pattern: str):
    """Delete keys matching ``pattern`` (e.g. "finance:*")."""
    if not settings.cache_enabled:
        return
    try:
        redis_client = await get_redis()
        keys = [key async for key in redis_client.scan_iter(match=pattern)]
        if keys:
            await redis_client.delete(*keys)
            logger.info(f"Invalidated {len(keys)} cache keys matching {pattern}")
    except redis.RedisError as e:
        logger.warning(f"Failed to invalidate cache: {e}")
