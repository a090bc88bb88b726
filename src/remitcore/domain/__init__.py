# src/remitcore/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models, business rules and static reference
data. No dependencies on infrastructure or external systems.
"""

from remitcore.domain.models import (
    Corridor,
    ExchangeRateQuote,
    PricingResult,
    RateSnapshot,
    StatusChange,
    StoredDetails,
    Transfer,
    TransferStatus,
)
from remitcore.domain.errors import (
    DomainError,
    InvalidAmountError,
    InvalidRequestError,
    LedgerIntegrityError,
    LimitExceededError,
    NotFoundError,
    RateUnavailableError,
    SessionNotFoundError,
    TransferNotFoundError,
    UnsupportedCorridorError,
)
from remitcore.domain.corridors import CorridorCatalog, corridor_catalog
from remitcore.domain.fees import FeeSchedule, calculate_fee

__all__ = [
    "Corridor",
    "ExchangeRateQuote",
    "PricingResult",
    "RateSnapshot",
    "StatusChange",
    "StoredDetails",
    "Transfer",
    "TransferStatus",
    "DomainError",
    "InvalidAmountError",
    "InvalidRequestError",
    "LedgerIntegrityError",
    "LimitExceededError",
    "NotFoundError",
    "RateUnavailableError",
    "SessionNotFoundError",
    "TransferNotFoundError",
    "UnsupportedCorridorError",
    "CorridorCatalog",
    "corridor_catalog",
    "FeeSchedule",
    "calculate_fee",
]
