"""
The process-wide Redis client and Cache, exposed as FastAPI dependencies.

Connection settings come from REDIS_URL, or from REDIS_HOST, REDIS_PORT,
REDIS_PASSWORD and REDIS_DB when no URL is given. Connecting is lazy, so
importing this module never touches the network.
"""

import os

import redis

from storefront_backend.cache import CACHE_PREFIX, Cache


def _build_client() -> redis.Redis:
    options = dict(
        decode_responses=False,  # Cache works on raw bytes
        socket_connect_timeout=5,
        socket_timeout=5,
        retry_on_timeout=True,
        health_check_interval=30,
    )

    url = os.environ.get("REDIS_URL")
    if url:
        return redis.Redis.from_url(url, **options)

    return redis.Redis(
        host=os.environ.get("REDIS_HOST", "localhost"),
        port=int(os.environ.get("REDIS_PORT", "6379")),
        password=os.environ.get("REDIS_PASSWORD") or None,
        db=int(os.environ.get("REDIS_DB", "0")),
        **options,
    )


_cache = Cache(_build_client(), prefix=CACHE_PREFIX)


def get_cache() -> Cache:
    """
    Usage:
        @router.get("/reviews/{review_id}")
        def get_review(review_id: int, cache: Cache = Depends(get_cache)):
            ...
    """
    return _cache
