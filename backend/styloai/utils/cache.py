"""
Caching utilities for StyloAI backend.
Provides Redis-based caching with an in-memory TTL cache fallback.
"""
import json
import hashlib
import logging
from typing import Optional, Dict, Any

import redis
from cachetools import TTLCache

from ..config import settings

logger = logging.getLogger(__name__)


# In-memory caches (fallback when Redis is unavailable)
_in_memory_caches: Dict[str, TTLCache] = {}

# Redis client (initialized lazily)
_redis_client: Optional[redis.Redis] = None
_redis_checked = False


def get_redis_client() -> Optional[redis.Redis]:
    """Get or create the Redis client; None when REDIS_URL is unset or unreachable."""
    global _redis_client, _redis_checked
    if _redis_checked:
        return _redis_client

    _redis_checked = True
    if not settings.REDIS_URL:
        logger.debug("REDIS_URL not set, using in-memory cache only")
        return None

    try:
        logger.info(f"Attempting Redis connection via REDIS_URL: {settings.REDIS_URL[:50]}...")
        client = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
            health_check_interval=30
        )
        client.ping()
        _redis_client = client
        logger.info("Redis connected via REDIS_URL")
    except redis.RedisError as e:
        logger.warning(f"Redis connection failed: {e}. Using in-memory cache only.")
        _redis_client = None

    return _redis_client


def get_in_memory_cache(cache_name: str, maxsize: int = 256, ttl: int = 300) -> TTLCache:
    """Get or create an in-memory TTL cache."""
    if cache_name not in _in_memory_caches:
        _in_memory_caches[cache_name] = TTLCache(maxsize=maxsize, ttl=ttl)
    return _in_memory_caches[cache_name]


def _generate_cache_key(prefix: str, *args, **kwargs) -> str:
    """Generate a cache key from prefix and arguments."""
    key_data = json.dumps({"args": args, "kwargs": kwargs}, sort_keys=True)
    key_hash = hashlib.md5(key_data.encode()).hexdigest()
    return f"{prefix}:{key_hash}"


def cache_get(key: str, cache_name: str = "default") -> Optional[Any]:
    """Get value from cache (Redis or in-memory)."""
    redis_client = get_redis_client()
    if redis_client:
        try:
            cached = redis_client.get(key)
            if cached:
                logger.debug(f"Redis cache HIT for key: {key[:50]}")
                return json.loads(cached)
            logger.debug(f"Redis cache MISS for key: {key[:50]}")
            return None
        except redis.RedisError as e:
            logger.warning(f"Redis get failed for key {key[:50]}: {e}")

    return get_in_memory_cache(cache_name).get(key)


def cache_set(key: str, value: Any, ttl: int = 300, cache_name: str = "default") -> bool:
    """Set value in cache (Redis or in-memory)."""
    redis_client = get_redis_client()
    if redis_client:
        try:
            redis_client.setex(key, ttl, json.dumps(value))
            logger.debug(f"Redis cache SET for key: {key[:50]} (TTL: {ttl}s)")
            return True
        except redis.RedisError as e:
            logger.warning(f"Redis set failed for key {key[:50]}: {e}")

    get_in_memory_cache(cache_name, ttl=ttl)[key] = value
    return True


# Weather lookups

def weather_cache_key(city: Optional[str] = None, lat: Optional[float] = None, lon: Optional[float] = None) -> str:
    """City names are case-insensitive, coordinates are rounded to ~1km."""
    if city:
        return _generate_cache_key("weather", city=city.strip().lower())
    return _generate_cache_key("weather", lat=round(float(lat), 2), lon=round(float(lon), 2))


def get_cached_weather(key: str) -> Optional[Dict]:
    return cache_get(key, cache_name="weather")


def set_cached_weather(key: str, weather: Dict, ttl: Optional[int] = None) -> bool:
    return cache_set(key, weather, ttl=ttl or settings.WEATHER_CACHE_TTL, cache_name="weather")


def clear_all_caches():
    """Clear all caches (useful for testing or cache invalidation)."""
    redis_client = get_redis_client()
    if redis_client:
        try:
            redis_client.flushdb()
        except redis.RedisError as e:
            logger.warning(f"Redis flush failed: {e}")

    for cache in _in_memory_caches.values():
        cache.clear()

    logger.info("All caches cleared")
