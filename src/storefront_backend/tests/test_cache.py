"""
Tests for the Redis cache facade, backed by fakeredis.
"""

import pytest
import redis

from storefront_backend.cache import Cache, stable_key


@pytest.mark.unit
class TestCacheBasics:

    def test_key_helpers_use_prefix(self, cache):
        assert cache.k("review", 12) == "storefront:review:12"
        assert cache.key("product", 7) == "storefront:product:7"

    def test_key_hashes_mappings(self, cache):
        key = cache.key("product:list", {"page": 0, "limit": 10})
        assert key.startswith("storefront:product:list:")
        assert key == cache.key("product:list", {"limit": 10, "page": 0})

    def test_set_and_get_round_trip(self, cache):
        cache.set_by_key("storefront:review:1", {"id": 1, "text": "ok"}, ttl=60)
        assert cache.get_by_key("storefront:review:1") == {"id": 1, "text": "ok"}

    def test_set_uses_ttl(self, cache, redis_client):
        cache.set_by_key("storefront:review:2", {"id": 2}, ttl=240)
        assert 0 < redis_client.ttl("storefront:review:2") <= 240

    def test_miss_returns_none(self, cache):
        assert cache.get_by_key("storefront:missing") is None

    def test_stats_count_hits_and_misses(self, cache):
        cache.set_by_key("storefront:a", 1)
        cache.get_by_key("storefront:a")
        cache.get_by_key("storefront:b")

        stats = cache.get_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["sets"] == 1
        assert stats["hit_rate"] == 0.5

    def test_delete_by_key(self, cache):
        cache.set_by_key("storefront:a", 1)
        cache.delete_by_key("storefront:a")
        assert cache.get_by_key("storefront:a") is None


@pytest.mark.unit
class TestCacheTags:

    def test_invalidate_tags_drops_tagged_keys(self, cache):
        cache.set_with_tags("storefront:product:list:a", [1], tags={"product:list"}, ttl=60)
        cache.set_with_tags("storefront:product:list:b", [2], tags={"product:list"}, ttl=60)
        cache.set_with_tags("storefront:review:1", {"id": 1}, tags={"review:1"}, ttl=60)

        cache.invalidate_tags("product:list")

        assert cache.get_by_key("storefront:product:list:a") is None
        assert cache.get_by_key("storefront:product:list:b") is None
        assert cache.get_by_key("storefront:review:1") == {"id": 1}

    def test_keys_for_tag(self, cache):
        cache.set_with_tags("storefront:review:3", {"id": 3}, tags={"review:3", "review:list:product:1"})
        assert cache.keys_for_tag("review:list:product:1") == {"storefront:review:3"}

    def test_tag_sets_expire_with_value(self, cache, redis_client):
        cache.set_with_tags("storefront:review:4", {"id": 4}, tags={"review:4"}, ttl=30)
        assert 0 < redis_client.ttl("storefront:tag:review:4") <= 30

    def test_shorter_ttl_does_not_shrink_tag_set(self, cache, redis_client):
        cache.set_with_tags("storefront:product:list:a", [1], tags={"product:list"}, ttl=240)
        cache.set_with_tags("storefront:product:7", {"id": 7}, tags={"product:list"}, ttl=60)

        assert redis_client.ttl("storefront:tag:product:list") > 60
        assert redis_client.ttl("storefront:tag:product:list") >= redis_client.ttl("storefront:product:list:a")
        assert cache.invalidate_tags("product:list") == 2
        assert cache.get_by_key("storefront:product:list:a") is None

    def test_longer_ttl_extends_tag_set(self, cache, redis_client):
        cache.set_with_tags("storefront:product:7", {"id": 7}, tags={"product:list"}, ttl=60)
        cache.set_with_tags("storefront:product:list:a", [1], tags={"product:list"}, ttl=240)
        assert redis_client.ttl("storefront:tag:product:list") > 60

    def test_invalidate_reports_removed_keys(self, cache):
        cache.set_with_tags("storefront:x", 1, tags={"t"})
        cache.set_with_tags("storefront:y", 2, tags={"t"})
        assert cache.invalidate_tags("t") == 2
        assert cache.invalidate_tags("t") == 0


@pytest.mark.unit
class TestCacheBackendErrors:
    """Test that backend failures degrade to cache misses."""

    class _BrokenClient:
        def get(self, key):
            raise redis.ConnectionError("down")

        def pipeline(self):
            raise redis.ConnectionError("down")

    def test_get_error_is_a_miss(self):
        cache = Cache(self._BrokenClient())
        assert cache.get_by_key("storefront:a") is None
        assert cache.get_stats()["misses"] == 1

    def test_set_error_is_swallowed(self):
        cache = Cache(self._BrokenClient())
        cache.set_by_key("storefront:a", 1)
        assert cache.get_stats()["sets"] == 0


@pytest.mark.unit
def test_stable_key_ignores_mapping_order():
    assert stable_key({"a": 1, "b": [1, 2]}) == stable_key({"b": [1, 2], "a": 1})
    assert stable_key({"a": 1}) != stable_key({"a": 2})
