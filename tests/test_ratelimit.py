from fastapi.testclient import TestClient

from landing_api.core.ratelimit import RateLimiter
from landing_api.main import create_app

from .conftest import make_settings


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def test_limiter_caps_requests_per_window():
    clock = FakeClock()
    limiter = RateLimiter(max_requests=2, window_seconds=60, clock=clock)

    first = limiter.hit("1.2.3.4")
    second = limiter.hit("1.2.3.4")
    third = limiter.hit("1.2.3.4")

    assert (first.allowed, first.remaining) == (True, 1)
    assert (second.allowed, second.remaining) == (True, 0)
    assert not third.allowed
    assert third.headers()["Retry-After"] == "60"


def test_limiter_keys_are_independent():
    limiter = RateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())
    assert limiter.hit("a").allowed
    assert not limiter.hit("a").allowed
    assert limiter.hit("b").allowed


def test_limiter_window_rolls_over():
    clock = FakeClock()
    limiter = RateLimiter(max_requests=1, window_seconds=60, clock=clock)
    assert limiter.hit("a").allowed

    clock.now += 30
    denied = limiter.hit("a")
    assert not denied.allowed
    assert denied.reset_after == 30

    clock.now += 30
    assert limiter.hit("a").allowed


def test_limiter_prunes_expired_windows():
    clock = FakeClock()
    limiter = RateLimiter(max_requests=5, window_seconds=60, clock=clock)
    limiter.hit("a")
    limiter.hit("b")

    clock.now += 120
    limiter.hit("c")
    assert set(limiter.windows) == {"c"}


def test_middleware_returns_429_with_headers(tmp_path):
    client = TestClient(create_app(make_settings(tmp_path, RATE_LIMIT_MAX=3)))

    remaining = [client.get("/api/ping").headers["RateLimit-Remaining"] for _ in range(3)]
    assert remaining == ["2", "1", "0"]

    r = client.get("/api/ping")
    assert r.status_code == 429
    assert r.json() == {"ok": False, "error": "too many requests"}
    assert r.headers["RateLimit-Limit"] == "3"
    assert "Retry-After" in r.headers


def test_middleware_covers_admin_routes(tmp_path):
    client = TestClient(create_app(make_settings(tmp_path, RATE_LIMIT_MAX=1)))
    assert client.get("/api/ping").status_code == 200
    r = client.get("/api/inquiries", headers={"X-API-Key": "wrong"})
    assert r.status_code == 429


def test_rotating_leading_forwarded_entries_shares_one_bucket(tmp_path):
    client = TestClient(create_app(make_settings(tmp_path, RATE_LIMIT_MAX=3)))
    statuses = [
        client.get("/api/ping", headers={"X-Forwarded-For": f"198.51.100.{i}, 10.0.0.1"}).status_code
        for i in range(5)
    ]
    assert statuses == [200, 200, 200, 429, 429]


def test_proxy_appended_entry_selects_bucket(tmp_path):
    client = TestClient(create_app(make_settings(tmp_path, RATE_LIMIT_MAX=1)))
    assert client.get("/api/ping", headers={"X-Forwarded-For": "10.0.0.1"}).status_code == 200
    assert client.get("/api/ping", headers={"X-Forwarded-For": "10.0.0.1"}).status_code == 429
    assert client.get("/api/ping", headers={"X-Forwarded-For": "10.0.0.1, 10.0.0.2"}).status_code == 200


def test_without_trusted_proxy_peer_address_is_the_key(tmp_path):
    client = TestClient(create_app(make_settings(tmp_path, RATE_LIMIT_MAX=1, TRUST_PROXY=False)))
    assert client.get("/api/ping", headers={"X-Forwarded-For": "10.0.0.1"}).status_code == 200
    assert client.get("/api/ping", headers={"X-Forwarded-For": "10.0.0.2"}).status_code == 429
