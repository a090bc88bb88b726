# src/remitcore/adapters/providers/exchangerate_api.py
"""
ExchangeRate-API Source for USD-based Rate Tables

This module implements the client for the public ExchangeRate-API endpoint
(``/v4/latest/USD``), which returns the whole USD-based rate table in one
call. Every request is bounded by the configured HTTP timeout. Any failure
is raised as RateSourceError so the rates service can degrade gracefully.

Files that USE this module:
- remitcore.app (wires ExchangeRateApiSource into ExchangeRateProvider)
- tests.test_providers (unit tests)

Files that this module USES:
- remitcore.adapters.providers.base (RateSource interface, RateSourceError)
- remitcore.config (settings for API URL and timeout)
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Optional

import requests

from remitcore.adapters.providers.base import RateSource, RateSourceError
from remitcore.config import settings

log = logging.getLogger(__name__)


class ExchangeRateApiSource(RateSource):
    name = "exchangerate-api"

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[int] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize ExchangeRate-API source.

        Args:
            base_url: Optional custom API URL (defaults to settings.fx_api_url)
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
            session: Optional requests.Session to reuse connections
        """
        self.url = base_url or settings.fx_api_url
        self.timeout = timeout or settings.http_timeout_seconds
        self._http = session or requests

    def fetch_usd_rates(self) -> Dict[str, Decimal]:
        """
        Fetch the latest USD-based rate table.

        Returns:
            Currency code -> units of that currency per 1 USD

        Raises:
            RateSourceError: On timeout, HTTP error, invalid JSON, or a payload
                without a usable ``rates`` table
        """
        try:
            log.info("Fetching fresh USD rate table from %s", self.name)
            resp = self._http.get(self.url, timeout=self.timeout)

            if resp.status_code >= 500:
                log.warning("%s returned 5xx error (%d)", self.name, resp.status_code)
                raise RateSourceError(f"{self.name} returned {resp.status_code} (server error)")

            resp.raise_for_status()
            data = resp.json()
        except requests.exceptions.Timeout:
            log.warning("%s timeout after %d seconds", self.name, self.timeout)
            raise RateSourceError(f"{self.name} timeout after {self.timeout}s")
        except requests.exceptions.HTTPError as e:
            log.error("%s HTTP error: %s", self.name, e)
            raise RateSourceError(f"{self.name} HTTP error: {e}") from e
        except requests.exceptions.RequestException as e:
            log.warning("%s request failed (network/connection error): %s", self.name, e)
            raise RateSourceError(f"{self.name} request failed: {e}") from e
        except ValueError as e:
            log.error("%s returned invalid JSON: %s", self.name, e)
            raise RateSourceError(f"{self.name} returned invalid JSON: {e}")

        return self._parse_rates(data)

    def _parse_rates(self, data) -> Dict[str, Decimal]:
        """
        Extract the rate table from a payload.

        Expect: {"base": "USD", "date": "2024-05-01", "rates": {"MXN": 17.5, ...}}
        Entries that are not positive numbers are dropped.
        """
        if not isinstance(data, dict) or not isinstance(data.get("rates"), dict):
            log.error("%s unexpected response structure: %s", self.name, data)
            raise RateSourceError(f"{self.name} response missing 'rates' table")

        base = data.get("base", "USD")
        if base != "USD":
            raise RateSourceError(f"{self.name} returned base {base}, expected USD")

        rates: Dict[str, Decimal] = {}
        for code, raw in data["rates"].items():
            try:
                rate = Decimal(str(raw))
            except (InvalidOperation, ValueError, TypeError):
                log.debug("Skipping unparseable rate for %s: %r", code, raw)
                continue
            if not rate.is_finite() or rate <= 0:
                log.debug("Skipping non-positive rate for %s: %s", code, rate)
                continue
            rates[str(code).upper()] = rate

        if not rates:
            raise RateSourceError(f"{self.name} returned an empty rate table")

        log.info("%s returned %d rates (provider date=%s)", self.name, len(rates), data.get("date"))
        return rates
