# src/remitcore/domain/requests.py
"""
Request Models - Typed Arguments for Core Operations

Every operation the transport collaborator calls takes loosely typed
arguments (numbers as strings, camelCase keys, stray whitespace). These
Pydantic models coerce and validate them once, at the boundary, before any
pricing or vault logic runs.

Business rules (amount > 0, per-transaction limit, supported corridor) are
NOT checked here: they belong to the ledger and produce their own error kinds.

Files that USE this module:
- remitcore.application.transfer_service (parse_request for every operation)
- tests.test_requests (unit tests)

Files that this module USES:
- remitcore.domain.errors (InvalidRequestError)
- remitcore.shared.validators (field validation helpers)
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from remitcore.domain.errors import InvalidRequestError
from remitcore.shared.validators import (
    sanitize_user_input,
    validate_account_number,
    validate_currency_code,
    validate_session_id,
)

RequestT = TypeVar("RequestT", bound=BaseModel)


class _Request(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


def _clean_name(value: str, what: str) -> str:
    cleaned = sanitize_user_input(value)
    if not cleaned:
        raise ValueError(f"{what} must not be empty")
    return cleaned


class QuoteRequest(_Request):
    amount: Decimal
    country: str = Field(alias="to_country")

    @field_validator("amount")
    @classmethod
    def finite_amount(cls, v: Decimal) -> Decimal:
        if not v.is_finite():
            raise ValueError("amount must be a finite number")
        return v

    @field_validator("country")
    @classmethod
    def clean_country(cls, v: str) -> str:
        return _clean_name(v, "country")


class TransferRequest(QuoteRequest):
    recipient_name: str

    @field_validator("recipient_name")
    @classmethod
    def clean_recipient(cls, v: str) -> str:
        return _clean_name(v, "recipient_name")


class SessionRequest(_Request):
    session_id: str

    @field_validator("session_id")
    @classmethod
    def check_session_id(cls, v: str) -> str:
        if not validate_session_id(v):
            raise ValueError("session_id is not a valid session identifier")
        return v


class FundTransferRequest(TransferRequest, SessionRequest):
    pass


class StoreDetailsRequest(SessionRequest):
    """Raw recipient bank details. Sensitive fields are kept out of repr."""
    account_number: str = Field(alias="accountNumber", repr=False)
    document_id: Optional[str] = Field(default=None, alias="documentId", repr=False)
    address: Optional[str] = Field(default=None, repr=False)
    bank_name: Optional[str] = Field(default=None, alias="bankName")
    routing_number: Optional[str] = Field(default=None, alias="routingNumber", repr=False)

    @field_validator("account_number")
    @classmethod
    def check_account_number(cls, v: str) -> str:
        compact = "".join(v.split())
        if not validate_account_number(compact):
            raise ValueError("account_number must be 4-34 letters or digits")
        return compact

    @field_validator("document_id", "address", "bank_name", "routing_number")
    @classmethod
    def strip_optional(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = " ".join(v.split())
        return v or None


class ExchangeRateRequest(_Request):
    currency: str = Field(alias="to_currency")
    country: Optional[str] = Field(default=None, alias="to_country")

    @field_validator("currency")
    @classmethod
    def check_currency(cls, v: str) -> str:
        code = v.strip().upper()
        if not validate_currency_code(code):
            raise ValueError("currency must be a three-letter code")
        return code


class StatusRequest(_Request):
    transfer_id: str

    @field_validator("transfer_id")
    @classmethod
    def clean_transfer_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("transfer_id must not be empty")
        return v


class HistoryRequest(_Request):
    limit: int = Field(default=10, ge=0, le=1000)


class CorridorListRequest(_Request):
    region: Optional[str] = None

    @field_validator("region")
    @classmethod
    def clean_region(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return sanitize_user_input(v) or None


def parse_request(model: Type[RequestT], **kwargs: Any) -> RequestT:
    """
    Validate keyword arguments into a request model.

    Args:
        model: Request model class
        **kwargs: Raw arguments from the caller

    Returns:
        Validated, immutable request instance

    Raises:
        InvalidRequestError: If any field is missing or malformed. The message
            names the offending fields only, never their values.
    """
    try:
        return model.model_validate(kwargs)
    except ValidationError as e:
        # Error locations use aliases; report the Python field names
        by_alias = {info.alias: name for name, info in model.model_fields.items() if info.alias}
        fields = sorted({
            ".".join(str(by_alias.get(part, part)) for part in err["loc"]) or "request"
            for err in e.errors()
        })
        raise InvalidRequestError(f"Invalid or missing fields: {', '.join(fields)}") from None
