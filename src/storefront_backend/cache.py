"""
TTL cache on top of Redis.

Values are stored as orjson under namespaced keys with a fixed time-to-live.
Each tagged value is also recorded in a `tag:{name}` set so writers can drop
everything carrying a tag. A tag set lives as long as the longest-lived value
registered in it.

Redis failures never reach callers: reads degrade to misses and writes are
dropped, both logged.
"""

import hashlib
import logging
from collections import Counter
from typing import Any, Dict, Iterable, Optional, Set

import orjson
import redis

logger = logging.getLogger(__name__)

CACHE_PREFIX = "storefront"


def stable_key(obj: Any) -> str:
    """
    SHA-1 of the canonical JSON form of `obj`; mapping order is irrelevant.

    Example:
        >>> stable_key({"page": 0, "limit": 10}) == stable_key({"limit": 10, "page": 0})
        True
    """
    return hashlib.sha1(orjson.dumps(obj, option=orjson.OPT_SORT_KEYS)).hexdigest()


def _decode(value) -> str:
    return value.decode() if isinstance(value, bytes) else value


class Cache:
    """
    Example:
        >>> cache = Cache(redis.Redis(), default_ttl=240)
        >>> cache.set_with_tags(cache.key("review", 12), {"id": 12}, tags={"review:12"})
        >>> cache.get_by_key("storefront:review:12")
        {'id': 12}
        >>> cache.invalidate_tags("review:12")
    """

    def __init__(self, client: redis.Redis, prefix: str = CACHE_PREFIX, default_ttl: int = 600):
        self.client = client
        self.prefix = prefix
        self.default_ttl = default_ttl
        self._stats = Counter()

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    def k(self, *parts: Any) -> str:
        """`cache.k("session", "ab12")` -> `storefront:session:ab12`"""
        return ":".join([self.prefix, *(str(p) for p in parts)])

    def key(self, kind: str, ident: Any) -> str:
        """Entity key for scalar ids, hashed key for parameter mappings."""
        if not isinstance(ident, (str, int)):
            ident = stable_key(ident)
        return self.k(kind, ident)

    def _tag_key(self, tag: str) -> str:
        return self.k("tag", tag)

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def get_by_key(self, key: str) -> Any:
        try:
            raw = self.client.get(key)
        except redis.RedisError as e:
            logger.warning(f"Cache read failed for {key}: {e}")
            raw = None

        if raw is None:
            self._stats["misses"] += 1
            logger.debug(f"Cache MISS: {key}")
            return None

        self._stats["hits"] += 1
        logger.debug(f"Cache HIT: {key}")
        return orjson.loads(raw)

    def set_by_key(self, key: str, payload: Any, ttl: Optional[int] = None) -> None:
        self.set_with_tags(key, payload, tags=(), ttl=ttl)

    def set_with_tags(self, key: str, payload: Any, tags: Iterable[str], ttl: Optional[int] = None) -> None:
        """
        Store `payload` under `key` for `ttl` seconds and register it with
        every tag in `tags`.

        A tag set's expiry is only ever pushed out, never shortened, so it
        outlives every key it holds.
        """
        ttl = ttl or self.default_ttl
        tags = sorted({t for t in tags if t})

        try:
            remaining = {}
            if tags:
                read = self.client.pipeline()
                for tag in tags:
                    read.ttl(self._tag_key(tag))
                remaining = dict(zip(tags, read.execute()))

            pipe = self.client.pipeline()
            pipe.setex(key, ttl, orjson.dumps(payload))
            for tag in tags:
                pipe.sadd(self._tag_key(tag), key)
                # -2 missing, -1 no expiry yet
                if remaining[tag] < ttl:
                    pipe.expire(self._tag_key(tag), ttl)
            pipe.execute()
        except redis.RedisError as e:
            logger.error(f"Cache write failed for {key}: {e}")
            return

        self._stats["sets"] += 1
        logger.debug(f"Cache SET: {key} ttl={ttl}s tags={tags}")

    def delete_by_key(self, key: str) -> None:
        try:
            self.client.delete(key)
        except redis.RedisError as e:
            logger.error(f"Cache delete failed for {key}: {e}")

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    def keys_for_tag(self, tag: str) -> Set[str]:
        try:
            return {_decode(k) for k in self.client.smembers(self._tag_key(tag))}
        except redis.RedisError as e:
            logger.error(f"Cache tag lookup failed for {tag}: {e}")
            return set()

    def invalidate_tags(self, *tags: str) -> int:
        """
        Delete every value registered with any of `tags`.

        Returns:
            Number of cache keys removed
        """
        tags = {t for t in tags if t}
        if not tags:
            return 0

        keys = set()
        for tag in tags:
            keys |= self.keys_for_tag(tag)

        try:
            self.client.delete(*keys, *(self._tag_key(t) for t in tags))
        except redis.RedisError as e:
            logger.error(f"Cache invalidation failed for {sorted(tags)}: {e}")
            return 0

        self._stats["invalidations"] += len(keys)
        logger.info(f"Cache INVALIDATE: tags={sorted(tags)} keys={len(keys)}")
        return len(keys)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def get_stats(self) -> Dict[str, float]:
        reads = self._stats["hits"] + self._stats["misses"]
        return {
            "hits": self._stats["hits"],
            "misses": self._stats["misses"],
            "sets": self._stats["sets"],
            "invalidations": self._stats["invalidations"],
            "hit_rate": self._stats["hits"] / reads if reads else 0.0,
        }
