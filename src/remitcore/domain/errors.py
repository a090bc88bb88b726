# src/remitcore/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines domain-specific exceptions that represent business rule
violations. Every DomainError is an expected, recoverable outcome: it carries
a stable ``kind`` and a message that is safe to show to an end user (it never
contains recipient banking data).

LedgerIntegrityError is deliberately not a DomainError: it signals a broken
internal invariant and should be surfaced loudly instead of being turned into
a user-facing message.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Optional


class DomainError(Exception):
    """Base exception for domain errors."""
    kind = "DomainError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(DomainError):
    """Raised when call arguments are missing or malformed."""
    kind = "InvalidRequest"


class InvalidAmountError(DomainError):
    """Raised when the send amount is zero or negative."""
    kind = "InvalidAmount"

    def __init__(self, amount: Decimal):
        super().__init__("Amount must be greater than $0")
        self.amount = amount


class LimitExceededError(DomainError):
    """Raised when the send amount is above the per-transaction ceiling."""
    kind = "LimitExceeded"

    def __init__(self, amount: Decimal, limit: Decimal):
        super().__init__(
            f"Amount exceeds per-transaction limit of ${limit}. "
            "Please split into multiple transfers or contact support."
        )
        self.amount = amount
        self.limit = limit


class UnsupportedCorridorError(DomainError):
    """Raised when the destination country is not in the corridor catalog."""
    kind = "UnsupportedCorridor"

    def __init__(self, country: str):
        super().__init__(f"Sorry, we don't support transfers to {country} yet.")
        self.country = country


class RateUnavailableError(DomainError):
    """Raised when the rate snapshot has no entry for the destination currency."""
    kind = "RateUnavailable"

    def __init__(self, currency: str):
        super().__init__(f"Exchange rate not available for {currency}")
        self.currency = currency


class NotFoundError(DomainError):
    """Raised when a requested record does not exist."""
    kind = "NotFound"


class TransferNotFoundError(NotFoundError):
    def __init__(self, transfer_id: str):
        super().__init__(
            f"Transfer not found: {transfer_id}. Please check the transfer ID and try again."
        )
        self.transfer_id = transfer_id


class SessionNotFoundError(NotFoundError):
    def __init__(self, session_id: Optional[str] = None):
        super().__init__(
            "No recipient details stored for this session. "
            "Please provide the recipient's bank details first."
        )
        self.session_id = session_id


class LedgerIntegrityError(RuntimeError):
    """Raised when a ledger record violates an internal invariant."""
    pass
