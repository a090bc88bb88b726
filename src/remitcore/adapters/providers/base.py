# src/remitcore/adapters/providers/base.py
"""
Base Interface for Exchange Rate Sources

This module defines the abstract base class for upstream rate sources.
A source performs exactly one fetch per call and does no caching; caching
and fallback live in remitcore.application.rates_service.

Files that USE this module:
- remitcore.adapters.providers.exchangerate_api (ExchangeRateApiSource implements RateSource)
- remitcore.application.rates_service (ExchangeRateProvider depends on RateSource)
- tests.test_rates_service (fake sources for unit tests)

Files that this module USES:
- None (pure interface definition)
"""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict


class RateSourceError(RuntimeError):
    """Raised when an upstream source cannot produce a usable rate table."""
    pass


class RateSource(ABC):
    name = "source"

    @abstractmethod
    def fetch_usd_rates(self) -> Dict[str, Decimal]:
        """Return currency code -> units per 1 USD. Raise RateSourceError on failure."""
        raise NotImplementedError
