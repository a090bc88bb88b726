# src/remitcore/adapters/providers/__init__.py
"""
Provider Adapters - External API Clients

This package contains adapters for upstream exchange rate APIs.
All sources implement the RateSource interface.
"""

from remitcore.adapters.providers.base import RateSource, RateSourceError
from remitcore.adapters.providers.exchangerate_api import ExchangeRateApiSource

__all__ = [
    "RateSource",
    "RateSourceError",
    "ExchangeRateApiSource",
]
