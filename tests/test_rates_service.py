# tests/test_rates_service.py
"""
Rates Service Tests - Cache, TTL and Graceful Degradation

This module tests ExchangeRateProvider: the TTL cache, wholesale snapshot
replacement, the stale and built-in fallbacks on upstream failure, and that
concurrent callers trigger at most one fetch.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- remitcore.application.rates_service (ExchangeRateProvider, FALLBACK_RATES)
- remitcore.adapters.providers.base (RateSourceError)
- conftest (FakeClock, FakeSource)
- pytest (testing framework)
"""
import threading
import time
from datetime import timedelta
from decimal import Decimal

import pytest

from conftest import FakeSource
from remitcore.adapters.providers.base import RateSourceError
from remitcore.application.rates_service import FALLBACK_RATES, ExchangeRateProvider


class TestCaching:
    def test_first_call_fetches(self, rates, source, clock):
        snap = rates.get_rates()
        assert source.calls == 1
        assert snap.base == "USD"
        assert snap.source == "live"
        assert snap.fetched_at == clock.now
        assert snap.rates["MXN"] == Decimal("17.5")

    def test_two_calls_within_ttl_fetch_once(self, rates, source, clock):
        first = rates.get_rates()
        clock.advance(minutes=59)
        second = rates.get_rates()
        assert source.calls == 1
        assert second is first
        assert dict(second.rates) == dict(first.rates)

    def test_refetch_after_ttl(self, rates, source, clock):
        rates.get_rates()
        clock.advance(hours=1)
        source.rates = {"MXN": Decimal("18.1")}
        snap = rates.get_rates()
        assert source.calls == 2
        assert snap.rates["MXN"] == Decimal("18.1")
        assert snap.fetched_at == clock.now

    def test_replacement_is_wholesale(self, rates, source, clock):
        rates.get_rates()
        clock.advance(hours=2)
        source.rates = {"GTQ": Decimal("7.7")}
        snap = rates.get_rates()
        # No merge with the previous table
        assert "MXN" not in snap.rates
        assert rates.cached_snapshot() is snap

    def test_snapshot_rates_are_read_only(self, rates):
        snap = rates.get_rates()
        with pytest.raises(TypeError):
            snap.rates["MXN"] = Decimal("1")

    def test_invalidate_forces_refetch(self, rates, source):
        rates.get_rates()
        rates.invalidate()
        rates.get_rates()
        assert source.calls == 2

    def test_cache_age(self, rates, clock):
        assert rates.cache_age_seconds() is None
        rates.get_rates()
        clock.advance(seconds=90)
        assert rates.cache_age_seconds() == 90


class TestFallback:
    def test_unreachable_without_cache_returns_fallback_table(self, clock):
        source = FakeSource(error=RateSourceError("connection refused"))
        provider = ExchangeRateProvider(source, clock=clock)

        snap = provider.get_rates()

        assert snap.source == "fallback"
        assert snap.fetched_at == clock.now
        assert dict(snap.rates) == FALLBACK_RATES
        assert snap.rates["MXN"] == Decimal("17.5")
        # Fallback is not cached: the next call tries upstream again
        assert provider.cached_snapshot() is None
        provider.get_rates()
        assert source.calls == 2

    def test_unreachable_with_stale_cache_returns_stale(self, rates, source, clock):
        good = rates.get_rates()
        clock.advance(hours=5)
        source.error = RateSourceError("timeout")

        snap = rates.get_rates()

        assert snap is good
        assert snap.source == "live"
        assert rates.failure_count == 1

    def test_any_upstream_exception_degrades(self, clock):
        source = FakeSource(error=ValueError("unexpected payload"))
        provider = ExchangeRateProvider(source, clock=clock)
        assert provider.get_rates().source == "fallback"

    def test_recovers_after_failure(self, clock):
        source = FakeSource(error=RateSourceError("down"))
        provider = ExchangeRateProvider(source, clock=clock)
        provider.get_rates()
        source.error = None
        snap = provider.get_rates()
        assert snap.source == "live"
        assert provider.cached_snapshot() is snap


class SlowSource(FakeSource):
    def fetch_usd_rates(self):
        time.sleep(0.05)
        return super().fetch_usd_rates()


class TestConcurrency:
    def test_concurrent_callers_share_one_fetch(self, clock):
        source = SlowSource()
        provider = ExchangeRateProvider(source, ttl=timedelta(hours=1), clock=clock)
        barrier = threading.Barrier(8)
        results = []

        def worker():
            barrier.wait()
            results.append(provider.get_rates())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert source.calls == 1
        assert len(results) == 8
        assert all(snap is results[0] for snap in results)
