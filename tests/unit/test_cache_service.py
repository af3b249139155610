"""결과 캐시 유닛 테스트 (가짜 시계 사용)"""
from product_feed.services.cache_service import ResultCache


class TestResultCache:
    """TTL 캐시 테스트"""

    def test_miss_returns_none(self, fake_clock):
        cache = ResultCache(ttl_seconds=600, clock=fake_clock)

        assert cache.get("electronics_6") is None

    def test_put_then_get(self, fake_clock, listings_factory):
        cache = ResultCache(ttl_seconds=600, clock=fake_clock)
        data = listings_factory(3)

        cache.put("electronics_6", data)

        assert cache.get("electronics_6") == data

    def test_fresh_until_ttl(self, fake_clock, listings_factory):
        cache = ResultCache(ttl_seconds=600, clock=fake_clock)
        cache.put("k", listings_factory(1))

        fake_clock.advance(599)

        assert cache.get("k") is not None

    def test_stale_entry_evicted_on_read(self, fake_clock, listings_factory):
        cache = ResultCache(ttl_seconds=600, clock=fake_clock)
        cache.put("k", listings_factory(1))

        fake_clock.advance(600)

        assert cache.size == 1  # 읽기 전에는 그대로 보관
        assert cache.get("k") is None
        assert cache.size == 0

    def test_empty_result_is_cacheable(self, fake_clock):
        cache = ResultCache(ttl_seconds=600, clock=fake_clock)

        cache.put("k", [])

        assert cache.get("k") == []

    def test_put_overwrites_and_refreshes_timestamp(self, fake_clock, listings_factory):
        cache = ResultCache(ttl_seconds=600, clock=fake_clock)
        cache.put("k", listings_factory(1))
        fake_clock.advance(500)

        cache.put("k", listings_factory(2))
        fake_clock.advance(500)

        assert len(cache.get("k")) == 2

    def test_get_returns_copy(self, fake_clock, listings_factory):
        cache = ResultCache(ttl_seconds=600, clock=fake_clock)
        cache.put("k", listings_factory(2))

        cache.get("k").clear()

        assert len(cache.get("k")) == 2

    def test_clear(self, fake_clock, listings_factory):
        cache = ResultCache(ttl_seconds=600, clock=fake_clock)
        cache.put("a", listings_factory(1))
        cache.put("b", listings_factory(1))

        cache.clear()

        assert cache.size == 0
