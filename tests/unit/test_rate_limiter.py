"""슬라이딩 윈도우 Rate Limiter 테스트"""
from product_feed.services.rate_limiter import SlidingWindowRateLimiter


class TestSlidingWindowRateLimiter:
    def test_admits_up_to_cap_then_rejects(self, fake_clock):
        limiter = SlidingWindowRateLimiter(max_requests=10, window_seconds=60, clock=fake_clock)

        admitted = [limiter.admit("1.2.3.4") for _ in range(10)]

        assert all(admitted)
        assert limiter.admit("1.2.3.4") is False

    def test_admitted_again_after_window(self, fake_clock):
        limiter = SlidingWindowRateLimiter(max_requests=10, window_seconds=60, clock=fake_clock)
        for _ in range(10):
            limiter.admit("1.2.3.4")

        fake_clock.advance(60)

        assert limiter.admit("1.2.3.4") is True

    def test_window_slides_per_request(self, fake_clock):
        limiter = SlidingWindowRateLimiter(max_requests=2, window_seconds=60, clock=fake_clock)
        limiter.admit("c")
        fake_clock.advance(30)
        limiter.admit("c")

        fake_clock.advance(30)  # 첫 요청만 윈도우를 벗어남

        assert limiter.admit("c") is True
        assert limiter.admit("c") is False

    def test_rejected_requests_are_not_recorded(self, fake_clock):
        limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=60, clock=fake_clock)
        limiter.admit("c")
        fake_clock.advance(30)
        assert limiter.admit("c") is False

        fake_clock.advance(30)

        assert limiter.admit("c") is True

    def test_clients_are_independent(self, fake_clock):
        limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=60, clock=fake_clock)

        assert limiter.admit("a") is True
        assert limiter.admit("b") is True
        assert limiter.admit("a") is False

    def test_retry_after(self, fake_clock):
        limiter = SlidingWindowRateLimiter(max_requests=2, window_seconds=60, clock=fake_clock)
        assert limiter.retry_after("c") == 0.0

        limiter.admit("c")
        fake_clock.advance(15)
        limiter.admit("c")

        assert limiter.retry_after("c") == 45.0

    def test_idle_clients_are_dropped_after_window(self, fake_clock):
        limiter = SlidingWindowRateLimiter(max_requests=10, window_seconds=60, clock=fake_clock)
        for i in range(1000):
            limiter.admit(f"10.0.{i // 256}.{i % 256}")
        assert limiter.tracked_clients == 1000

        fake_clock.advance(120)
        limiter.admit("10.9.9.9")

        assert limiter.tracked_clients == 1

    def test_active_client_survives_sweep(self, fake_clock):
        limiter = SlidingWindowRateLimiter(max_requests=2, window_seconds=60, clock=fake_clock)
        limiter.admit("idle")
        fake_clock.advance(50)
        limiter.admit("busy")
        limiter.admit("busy")

        fake_clock.advance(20)

        assert limiter.admit("busy") is False
        assert limiter.tracked_clients == 1
