# tests/conftest.py
"""
Shared Test Fixtures - Fakes for Clock, Randomness and Rate Sources

Files that USE this module:
- pytest (fixtures are injected into every test module)

Files that this module USES:
- remitcore.adapters.providers.base (RateSource for FakeSource)
- remitcore.application.* (ledger, vault, rates service, transfer service)
- remitcore.domain.* (corridor catalog, models)
"""
import threading
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from remitcore.adapters.providers.base import RateSource
from remitcore.application.ledger import TransferLedger
from remitcore.application.rates_service import ExchangeRateProvider
from remitcore.application.settlement import SimulatedSettlement
from remitcore.application.transfer_service import TransferService
from remitcore.application.vault import SessionVault
from remitcore.domain.corridors import corridor_catalog
from remitcore.domain.models import TransferStatus


class FakeClock:
    def __init__(self, start=None):
        self.now = start or datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


class ScriptedRandom:
    """
    Deterministic stand-in for random.Random.

    random() returns the scripted values in order, then ``default``.
    choice() returns ``initial_status`` when choosing among statuses and the
    first element otherwise.
    """

    def __init__(self, values=(), default=0.0, initial_status=TransferStatus.PENDING):
        self._values = list(values)
        self.default = default
        self.initial_status = initial_status
        self._lock = threading.Lock()

    def random(self):
        with self._lock:
            if self._values:
                return self._values.pop(0)
            return self.default

    def choice(self, seq):
        seq = list(seq)
        if seq and isinstance(seq[0], TransferStatus):
            return self.initial_status
        return seq[0]


class FakeSource(RateSource):
    name = "fake"

    def __init__(self, rates=None, error=None):
        self.rates = rates if rates is not None else {"MXN": Decimal("17.5"), "COP": Decimal("4100")}
        self.error = error
        self.calls = 0

    def fetch_usd_rates(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return dict(self.rates)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def source():
    return FakeSource()


@pytest.fixture
def rates(source, clock):
    return ExchangeRateProvider(source, ttl=timedelta(hours=1), clock=clock)


@pytest.fixture
def advance_rng():
    """Random source for status checks; never advances unless scripted."""
    return ScriptedRandom(default=0.0)


@pytest.fixture
def ledger(advance_rng, clock):
    return TransferLedger(
        rng=advance_rng,
        clock=clock,
        settlement=SimulatedSettlement(ScriptedRandom(initial_status=TransferStatus.PENDING)),
    )


@pytest.fixture
def vault(clock):
    return SessionVault(max_sessions=3, session_ttl=timedelta(minutes=30), clock=clock)


@pytest.fixture
def service(rates, ledger, vault):
    return TransferService(
        catalog=corridor_catalog,
        rates=rates,
        ledger=ledger,
        vault=vault,
        daily_limit=Decimal("10000"),
        monthly_limit=Decimal("50000"),
    )
