"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Gitter client, a product of Garudex Labs

Tests for rate-limit metrics.
"""

from gitter.sdk.metrics import RateLimitMetrics


class TestRateLimitMetrics:
    def test_starts_undefined(self):
        metrics = RateLimitMetrics()
        assert metrics.rate_limit is None
        assert metrics.remaining is None
        assert metrics.reset is None

    def test_update_from_headers(self):
        metrics = RateLimitMetrics()
        metrics.update_from_headers({
            "x-ratelimit-limit": "100",
            "x-ratelimit-remaining": "99",
            "x-ratelimit-reset": "1700000000",
        })
        assert (metrics.rate_limit, metrics.remaining, metrics.reset) == (100, 99, 1700000000)

    def test_header_names_are_case_insensitive(self):
        metrics = RateLimitMetrics()
        metrics.update_from_headers({"X-RateLimit-Remaining": "7"})
        assert metrics.remaining == 7

    def test_last_write_wins_including_missing_headers(self):
        metrics = RateLimitMetrics()
        metrics.update_from_headers({"x-ratelimit-limit": "100", "x-ratelimit-remaining": "5"})
        metrics.update_from_headers({"x-ratelimit-remaining": "4"})
        assert metrics.rate_limit is None
        assert metrics.remaining == 4

    def test_non_numeric_header_becomes_none(self):
        metrics = RateLimitMetrics()
        metrics.update_from_headers({"x-ratelimit-reset": "soon"})
        assert metrics.reset is None
