# src/remitcore/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- Destination corridors
- Exchange rate snapshots
- Pricing results
- Transfer records and their status
- Stored recipient detail handles (reference + masked account)

Files that USE this module:
- remitcore.application.* (all services use domain models)
- remitcore.adapters.* (adapters create and render domain models)
- tests.* (tests use domain models for test data)

Files that this module USES:
- None (pure domain layer, no external dependencies)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from dataclasses import dataclass, field  # Decorator for creating data classes
from datetime import datetime, timedelta  # Date/time utilities for timestamps
from decimal import ROUND_HALF_UP, Decimal  # Exact decimal arithmetic for money
from enum import Enum  # Enumerations for transfer status
from types import MappingProxyType  # Read-only view over rate tables
from typing import Any, Dict, Mapping, Optional, Tuple

CENTS = Decimal("0.01")
BASE_CURRENCY = "USD"


def to_money(value: Decimal) -> Decimal:
    """Quantize a Decimal to cents using half-up rounding."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


class TransferStatus(str, Enum):
    """Simulated settlement states, in order."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"

    def next(self) -> Optional["TransferStatus"]:
        """Return the single successor state, or None at the terminal state."""
        order = list(TransferStatus)
        idx = order.index(self)
        if idx + 1 < len(order):
            return order[idx + 1]
        return None

    @property
    def is_terminal(self) -> bool:
        return self.next() is None


@dataclass(frozen=True)
class Corridor:
    """
    A supported outbound destination.

    Attributes:
        country: Destination country name (unique, matched case-insensitively)
        currency: Three-letter currency code paid out in the destination
        delivery_time: Typical delivery bucket, e.g. "35 minutes" or "1-3 hours"
        region: Grouping tag, e.g. "Latin America"
    """
    country: str
    currency: str
    delivery_time: str
    region: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "country": self.country,
            "currency": self.currency,
            "delivery_time": self.delivery_time,
            "region": self.region,
        }


@dataclass(frozen=True)
class RateSnapshot:
    """
    USD-based exchange rate table at a point in time.

    A snapshot is never modified after construction; the rates service swaps
    whole snapshots in and out of its cache.

    Attributes:
        rates: Currency code -> units of that currency per 1 USD
        fetched_at: When the table was obtained (UTC)
        source: "live" for an upstream fetch, "fallback" for the built-in table
        base: Always "USD"
    """
    rates: Mapping[str, Decimal]
    fetched_at: datetime
    source: str = "live"
    base: str = BASE_CURRENCY

    def __post_init__(self) -> None:
        object.__setattr__(self, "rates", MappingProxyType(dict(self.rates)))

    def rate_for(self, currency: str) -> Optional[Decimal]:
        """Return the rate for a currency code, or None when not quoted."""
        rate = self.rates.get(currency.upper())
        if rate is None or rate <= 0:
            return None
        return rate

    def age(self, now: datetime) -> timedelta:
        return now - self.fetched_at

    def is_fresh(self, ttl: timedelta, now: datetime) -> bool:
        """True while the snapshot is younger than the TTL."""
        return self.age(now) < ttl

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base": self.base,
            "rates": {code: str(rate) for code, rate in self.rates.items()},
            "fetched_at": self.fetched_at.isoformat(),
            "source": self.source,
        }


@dataclass(frozen=True)
class PricingResult:
    """
    Outcome of pricing a send amount for one corridor.

    Attributes:
        corridor: Destination corridor
        amount_sent: USD amount the sender pays
        fee: Transfer fee in USD
        net_amount: amount_sent - fee
        exchange_rate: Destination currency per 1 USD, taken from the snapshot
        amount_received: net_amount * exchange_rate, in destination currency
        rate_fetched_at: Timestamp of the snapshot the rate came from
    """
    corridor: Corridor
    amount_sent: Decimal
    fee: Decimal
    net_amount: Decimal
    exchange_rate: Decimal
    amount_received: Decimal
    rate_fetched_at: datetime

    @property
    def currency(self) -> str:
        return self.corridor.currency

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from_currency": BASE_CURRENCY,
            "to_currency": self.currency,
            "to_country": self.corridor.country,
            "amount": str(self.amount_sent),
            "fee": str(self.fee),
            "net_amount": str(self.net_amount),
            "exchange_rate": str(self.exchange_rate),
            "recipient_amount": str(self.amount_received),
            "delivery_time": self.corridor.delivery_time,
            "rate_timestamp": self.rate_fetched_at.isoformat(),
        }


@dataclass(frozen=True)
class ExchangeRateQuote:
    """Rate for one destination currency with the matching delivery time."""
    currency: str
    rate: Decimal
    fetched_at: datetime
    delivery_time: str
    source: str = "live"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from_currency": BASE_CURRENCY,
            "to_currency": self.currency,
            "rate": str(self.rate),
            "timestamp": self.fetched_at.isoformat(),
            "delivery_time": self.delivery_time,
            "source": self.source,
        }


@dataclass(frozen=True)
class StatusChange:
    status: TransferStatus
    at: datetime


@dataclass(frozen=True)
class Transfer:
    """
    Read-only view of a transfer record.

    The ledger keeps its own mutable record; callers only ever receive
    instances of this class. Pricing fields are fixed at creation.
    """
    id: str
    provider_reference: str
    amount_sent: Decimal
    fee: Decimal
    net_amount: Decimal
    exchange_rate: Decimal
    amount_received: Decimal
    recipient_name: str
    destination_country: str
    destination_currency: str
    delivery_time: str
    status: TransferStatus
    created_at: datetime
    estimated_arrival: datetime
    masked_account: Optional[str] = None
    status_history: Tuple[StatusChange, ...] = field(default_factory=tuple)
    source_currency: str = BASE_CURRENCY

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation (money as strings)."""
        data: Dict[str, Any] = {
            "id": self.id,
            "provider_reference": self.provider_reference,
            "from_currency": self.source_currency,
            "to_currency": self.destination_currency,
            "amount": str(self.amount_sent),
            "fee": str(self.fee),
            "net_amount": str(self.net_amount),
            "exchange_rate": str(self.exchange_rate),
            "recipient_amount": str(self.amount_received),
            "recipient_name": self.recipient_name,
            "recipient_country": self.destination_country,
            "delivery_time": self.delivery_time,
            "status": self.status.value,
            "estimated_arrival": self.estimated_arrival.isoformat(),
            "created_at": self.created_at.isoformat(),
            "status_history": [
                {"status": change.status.value, "timestamp": change.at.isoformat()}
                for change in self.status_history
            ],
        }
        if self.masked_account is not None:
            data["masked_account"] = self.masked_account
        return data


@dataclass(frozen=True)
class StoredDetails:
    """
    What a caller gets back after storing recipient bank details.

    Attributes:
        reference: Opaque token, e.g. "acct_1f2e3d4c"
        masked_account: Last four characters behind a marker, e.g. "...8952"
    """
    reference: str
    masked_account: str

    def to_dict(self) -> Dict[str, str]:
        return {"reference": self.reference, "masked_account": self.masked_account}
