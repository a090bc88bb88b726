# src/remitcore/application/transfer_service.py
"""
Transfer Service - Operations Exposed to the Transport Layer

This is the one entry point the outer transport (tool protocol server, bot,
HTTP handler) calls. Every operation takes plain keyword arguments, validates
them into a request model, and returns domain objects with ``to_dict()``
views. Expected failures are raised as DomainError subclasses whose messages
are safe to show to the end user.

Recipient bank details enter through store_recipient_details and are only
ever read back inside fund_transfer_from_session, which passes them straight
to the ledger's funding step. No operation returns them.

Files that USE this module:
- remitcore.app (build_service composes TransferService)
- tests.test_transfer_service (unit tests)

Files that this module USES:
- remitcore.application.ledger (TransferLedger)
- remitcore.application.rates_service (ExchangeRateProvider)
- remitcore.application.vault (SessionVault, RecipientDetails)
- remitcore.domain.* (catalog, models, errors, request models)
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from remitcore.application.ledger import TransferLedger
from remitcore.application.rates_service import ExchangeRateProvider
from remitcore.application.vault import RecipientDetails, SessionVault
from remitcore.domain.corridors import CorridorCatalog
from remitcore.domain.errors import RateUnavailableError, UnsupportedCorridorError
from remitcore.domain.models import (
    Corridor,
    ExchangeRateQuote,
    PricingResult,
    RateSnapshot,
    StoredDetails,
    Transfer,
)
from remitcore.domain.requests import (
    CorridorListRequest,
    ExchangeRateRequest,
    FundTransferRequest,
    HistoryRequest,
    QuoteRequest,
    SessionRequest,
    StatusRequest,
    StoreDetailsRequest,
    TransferRequest,
    parse_request,
)

logger = logging.getLogger(__name__)

DEFAULT_DELIVERY_TIME = "1-3 hours"


class TransferService:
    """Facade over catalog, rates, ledger and vault."""

    def __init__(
        self,
        catalog: CorridorCatalog,
        rates: ExchangeRateProvider,
        ledger: TransferLedger,
        vault: SessionVault,
        history_default_limit: int = 10,
        daily_limit: Optional[Decimal] = None,
        monthly_limit: Optional[Decimal] = None,
    ):
        self.catalog = catalog
        self.rates = rates
        self.ledger = ledger
        self.vault = vault
        self.history_default_limit = history_default_limit
        self.daily_limit = daily_limit
        self.monthly_limit = monthly_limit

    # -------------------------------------------------------------- corridors

    def resolve_corridor(self, country: str) -> Optional[Corridor]:
        """Corridor for a destination country, or None when unsupported."""
        return self.catalog.find(country or "")

    def list_corridors(self, region: Optional[str] = None) -> List[Corridor]:
        req = parse_request(CorridorListRequest, region=region)
        return self.catalog.filter(req.region)

    def group_corridors(self, region: Optional[str] = None) -> Dict[str, List[Corridor]]:
        req = parse_request(CorridorListRequest, region=region)
        return self.catalog.group_by_region(req.region)

    # ------------------------------------------------------------------ rates

    def get_rate_snapshot(self) -> RateSnapshot:
        return self.rates.get_rates()

    def get_exchange_rate(self, to_currency: str, to_country: Optional[str] = None) -> ExchangeRateQuote:
        """
        Current rate from USD to one currency, with the corridor delivery time.

        Args:
            to_currency: Destination currency code
            to_country: Optional country, used to pick the delivery time

        Returns:
            ExchangeRateQuote

        Raises:
            RateUnavailableError: The snapshot does not quote the currency
        """
        req = parse_request(ExchangeRateRequest, currency=to_currency, country=to_country)
        snapshot = self.rates.get_rates()
        rate = snapshot.rate_for(req.currency)
        if rate is None:
            raise RateUnavailableError(req.currency)

        corridor = self.catalog.find_by_currency(req.currency)
        if corridor is None and req.country:
            corridor = self.catalog.find(req.country)
        return ExchangeRateQuote(
            currency=req.currency,
            rate=rate,
            fetched_at=snapshot.fetched_at,
            delivery_time=corridor.delivery_time if corridor else DEFAULT_DELIVERY_TIME,
            source=snapshot.source,
        )

    # ---------------------------------------------------------------- pricing

    def _price(self, amount: Decimal, country: str) -> PricingResult:
        # Check order: amount, limit, corridor, rate
        amount = self.ledger.check_amount(amount)
        corridor = self.catalog.find(country)
        if corridor is None:
            raise UnsupportedCorridorError(country)
        return self.ledger.quote(amount, corridor, self.rates.get_rates())

    def quote_transfer(self, amount: Any, to_country: str) -> PricingResult:
        """Price a transfer without creating it."""
        req = parse_request(QuoteRequest, amount=amount, country=to_country)
        return self._price(req.amount, req.country)

    def price_and_create_transfer(self, amount: Any, to_country: str, recipient_name: str) -> Transfer:
        """
        Price a transfer and record it.

        Raises:
            InvalidRequestError, InvalidAmountError, LimitExceededError,
            UnsupportedCorridorError, RateUnavailableError
        """
        req = parse_request(TransferRequest, amount=amount, country=to_country, recipient_name=recipient_name)
        pricing = self._price(req.amount, req.country)
        return self.ledger.create(req.recipient_name, pricing.corridor, pricing)

    # -------------------------------------------------------------- transfers

    def get_transfer_status(self, transfer_id: str) -> Transfer:
        """
        Check a transfer, possibly advancing it one step.

        Raises:
            TransferNotFoundError: Unknown id
        """
        req = parse_request(StatusRequest, transfer_id=transfer_id)
        return self.ledger.advance_status(req.transfer_id)

    def list_transfers(self, limit: Optional[int] = None) -> List[Transfer]:
        if limit is None:
            limit = self.history_default_limit
        req = parse_request(HistoryRequest, limit=limit)
        return self.ledger.list(req.limit)

    def transfer_limits(self) -> Dict[str, Any]:
        """Per-transaction, daily and monthly limits plus the fee schedule."""
        schedule = self.ledger.fee_schedule
        limits: Dict[str, Any] = {
            "per_transaction": str(self.ledger.per_transaction_limit),
            "fees": {
                "standard": str(schedule.rate),
                "min_fee": str(schedule.floor),
                "max_fee": str(schedule.ceiling),
            },
        }
        if self.daily_limit is not None:
            limits["daily"] = str(self.daily_limit)
        if self.monthly_limit is not None:
            limits["monthly"] = str(self.monthly_limit)
        return limits

    # ------------------------------------------------------ recipient details

    def store_recipient_details(self, session_id: str, **fields: Any) -> StoredDetails:
        """
        Store raw recipient bank details for a session.

        Args:
            session_id: Transport session identifier
            **fields: account_number (or accountNumber), document_id, address,
                bank_name, routing_number

        Returns:
            StoredDetails (opaque reference and masked account only)
        """
        req = parse_request(StoreDetailsRequest, session_id=session_id, **fields)
        details = RecipientDetails(
            account_number=req.account_number,
            document_id=req.document_id,
            address=req.address,
            bank_name=req.bank_name,
            routing_number=req.routing_number,
        )
        return self.vault.store(req.session_id, details)

    def fund_transfer_from_session(
        self, session_id: str, amount: Any, to_country: str, recipient_name: str,
    ) -> Transfer:
        """
        Create a transfer paid out to the details stored for a session.

        Pricing is validated before the stored details are touched.

        Raises:
            SessionNotFoundError plus every error of price_and_create_transfer
        """
        req = parse_request(
            FundTransferRequest,
            session_id=session_id,
            amount=amount,
            country=to_country,
            recipient_name=recipient_name,
        )
        pricing = self._price(req.amount, req.country)
        transfer = self.ledger.fund_from_session(
            self.vault, req.session_id, req.recipient_name, pricing.corridor, pricing,
        )
        logger.info("Transfer %s funded from stored details %s", transfer.id, transfer.masked_account)
        return transfer

    def end_session(self, session_id: str) -> bool:
        """Drop everything stored for a session. Returns True if anything was removed."""
        req = parse_request(SessionRequest, session_id=session_id)
        return self.vault.discard(req.session_id)
