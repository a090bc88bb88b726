# src/remitcore/application/rates_service.py
"""
Rates Service - Cached USD Exchange Rates With Graceful Degradation

This module owns the single shared rate cache. Pricing must stay available
even when the upstream source is down, so a failed fetch never reaches the
caller: it falls back to the last good snapshot, however old, and when there
has never been one, to a small built-in table stamped with the current time.

Cache policy:
1. Cached snapshot younger than the TTL (default 1 hour): return it, no network.
2. Otherwise fetch once from the upstream source.
3. Success: swap the whole snapshot into the cache and return it.
4. Failure: last cached snapshot, else the built-in fallback table.

Files that USE this module:
- remitcore.application.transfer_service (prices transfers with ExchangeRateProvider)
- remitcore.application.health (reports cache age)
- remitcore.app (wires the provider)
- tests.test_rates_service (unit tests)

Files that this module USES:
- remitcore.adapters.providers.base (RateSource interface, RateSourceError)
- remitcore.domain.models (RateSnapshot)
"""
from __future__ import annotations  # Enable postponed evaluation of annotations

import logging
import threading
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, Dict, Optional

from remitcore.adapters.providers.base import RateSource
from remitcore.domain.models import RateSnapshot

log = logging.getLogger(__name__)

# Most common corridors, used only when no live table was ever obtained
FALLBACK_RATES: Dict[str, Decimal] = {
    "MXN": Decimal("17.5"),
    "GTQ": Decimal("7.8"),
    "HNL": Decimal("24.5"),
    "DOP": Decimal("58.2"),
    "COP": Decimal("4100"),
    "PEN": Decimal("3.7"),
    "NIO": Decimal("36.5"),
    "CRC": Decimal("510"),
}

DEFAULT_TTL = timedelta(hours=1)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExchangeRateProvider:
    """
    Shared, read-mostly cache of USD-based rate snapshots.

    Readers see either the previous full snapshot or the new full snapshot:
    the cache slot holds one immutable RateSnapshot and is replaced by a
    single assignment. A refresh lock makes concurrent callers with a stale
    cache wait for one upstream fetch instead of issuing several.
    """

    def __init__(
        self,
        source: RateSource,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = _utcnow,
        fallback_rates: Optional[Dict[str, Decimal]] = None,
    ):
        """
        Initialize the rates service.

        Args:
            source: Upstream RateSource, called at most once per refresh
            ttl: Freshness window for cached snapshots
            clock: Returns the current UTC time (injectable for tests)
            fallback_rates: Table used when nothing was ever fetched
        """
        self.source = source
        self.ttl = ttl
        self._clock = clock
        self._fallback_rates = dict(fallback_rates if fallback_rates is not None else FALLBACK_RATES)
        self._snapshot: Optional[RateSnapshot] = None
        self._refresh_lock = threading.Lock()
        self.fetch_count = 0
        self.failure_count = 0

    def get_rates(self) -> RateSnapshot:
        """
        Return a rate snapshot, fresh when obtainable.

        Never raises because of an upstream failure.

        Returns:
            Fresh cached snapshot, newly fetched snapshot, stale cached
            snapshot, or the built-in fallback table (in that preference)
        """
        snap = self._snapshot
        if snap is not None and snap.is_fresh(self.ttl, self._clock()):
            log.debug("Using cached rate snapshot from %s", snap.fetched_at)
            return snap

        with self._refresh_lock:
            # Another caller may have refreshed while we waited
            snap = self._snapshot
            if snap is not None and snap.is_fresh(self.ttl, self._clock()):
                return snap
            return self._refresh(snap)

    def _refresh(self, previous: Optional[RateSnapshot]) -> RateSnapshot:
        self.fetch_count += 1
        try:
            rates = self.source.fetch_usd_rates()
        except Exception as e:
            self.failure_count += 1
            if previous is not None:
                log.warning(
                    "Rate fetch from %s failed, serving stale snapshot from %s: %s",
                    self.source.name, previous.fetched_at, e,
                )
                return previous
            log.warning("Rate fetch from %s failed and no snapshot cached, using fallback table: %s",
                        self.source.name, e)
            return RateSnapshot(rates=self._fallback_rates, fetched_at=self._clock(), source="fallback")

        new_snap = RateSnapshot(rates=rates, fetched_at=self._clock(), source="live")
        self._snapshot = new_snap
        log.info("Rate cache updated: %d currencies (ttl=%s)", len(rates), self.ttl)
        return new_snap

    def cached_snapshot(self) -> Optional[RateSnapshot]:
        """Last successfully fetched snapshot, if any (no network)."""
        return self._snapshot

    def cache_age_seconds(self) -> Optional[int]:
        """
        Seconds since the cached snapshot was fetched.

        Returns:
            Age in whole seconds, or None if nothing is cached
        """
        snap = self._snapshot
        if snap is None:
            return None
        return int(snap.age(self._clock()).total_seconds())

    def invalidate(self) -> None:
        """Drop the cached snapshot so the next call refetches."""
        self._snapshot = None
