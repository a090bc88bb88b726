# src/remitcore/application/ledger.py
"""
Transfer Ledger - Pricing, Transfer Records and Status Progression

The ledger owns every transfer record for the life of the process. It prices
send amounts, creates records with sequential ids (TXN-1000, TXN-1001, ...),
and advances their simulated settlement status.

Status only ever moves forward one step at a time:
pending -> processing -> completed. A status check advances a record with
probability one half (drawn from the injectable random source) and never
past completed.

Locking: one lock guards the id -> record map; each record carries its own
lock so status changes on one transfer never wait on another.

Files that USE this module:
- remitcore.application.transfer_service (quote/create/advance/list)
- remitcore.application.health (reports ledger size)
- remitcore.app (wires the ledger)
- tests.test_ledger (unit tests)

Files that this module USES:
- remitcore.application.settlement (SimulatedSettlement for new transfers)
- remitcore.application.vault (resolve raw details when funding from a session)
- remitcore.domain.* (models, errors, fee schedule)
"""
from __future__ import annotations

import itertools
import logging
import random
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Callable, Dict, List, Optional

from remitcore.application.settlement import RandomSource, SimulatedSettlement
from remitcore.application.vault import RecipientDetails, SessionVault
from remitcore.domain.errors import (
    InvalidAmountError,
    LedgerIntegrityError,
    LimitExceededError,
    RateUnavailableError,
    TransferNotFoundError,
)
from remitcore.domain.fees import DEFAULT_FEE_SCHEDULE, FeeSchedule, calculate_fee
from remitcore.domain.models import (
    Corridor,
    PricingResult,
    RateSnapshot,
    StatusChange,
    Transfer,
    TransferStatus,
    to_money,
)

logger = logging.getLogger(__name__)

DEFAULT_PER_TRANSACTION_LIMIT = Decimal("5000")
ADVANCE_THRESHOLD = 0.5


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class _TransferRecord:
    """Mutable ledger-internal record. Never handed out."""
    seq: int
    id: str
    provider_reference: str
    pricing: PricingResult
    recipient_name: str
    created_at: datetime
    estimated_arrival: datetime
    status: TransferStatus
    masked_account: Optional[str] = None
    history: List[StatusChange] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class TransferLedger:
    """In-memory owner of transfer records."""

    def __init__(
        self,
        fee_schedule: FeeSchedule = DEFAULT_FEE_SCHEDULE,
        per_transaction_limit: Decimal = DEFAULT_PER_TRANSACTION_LIMIT,
        rng: Optional[RandomSource] = None,
        clock: Callable[[], datetime] = _utcnow,
        settlement: Optional[SimulatedSettlement] = None,
        first_id: int = 1000,
        delivery: timedelta = timedelta(minutes=35),
    ):
        self.fee_schedule = fee_schedule
        self.per_transaction_limit = per_transaction_limit
        self._rng: RandomSource = rng if rng is not None else random.Random()
        self._clock = clock
        self._settlement = settlement or SimulatedSettlement(self._rng, delivery=delivery)
        self._ids = itertools.count(first_id)
        self._records: Dict[str, _TransferRecord] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------ pricing

    def check_amount(self, amount) -> Decimal:
        """
        Validate a send amount against the per-transaction rules.

        Returns:
            The amount as a Decimal

        Raises:
            InvalidAmountError: amount not a finite number greater than 0
            LimitExceededError: amount above the per-transaction limit
        """
        if not isinstance(amount, Decimal):
            try:
                amount = Decimal(str(amount))
            except (InvalidOperation, ValueError, TypeError):
                raise InvalidAmountError(amount) from None
        if not amount.is_finite() or amount <= 0:
            raise InvalidAmountError(amount)
        if amount > self.per_transaction_limit:
            raise LimitExceededError(amount, self.per_transaction_limit)
        return amount

    def quote(self, amount: Decimal, corridor: Corridor, snapshot: RateSnapshot) -> PricingResult:
        """
        Price a send amount for a corridor. Pure: creates nothing.

        Args:
            amount: USD amount the sender pays
            corridor: Destination corridor
            snapshot: Rate snapshot to take the corridor's rate from

        Returns:
            PricingResult with fee, net amount, rate and received amount

        Raises:
            InvalidAmountError: amount <= 0
            LimitExceededError: amount above the per-transaction limit
            RateUnavailableError: snapshot has no rate for the corridor currency
        """
        amount = self.check_amount(amount)

        rate = snapshot.rate_for(corridor.currency)
        if rate is None:
            raise RateUnavailableError(corridor.currency)

        fee = calculate_fee(amount, self.fee_schedule)
        net = amount - fee
        return PricingResult(
            corridor=corridor,
            amount_sent=amount,
            fee=fee,
            net_amount=net,
            exchange_rate=rate,
            amount_received=to_money(net * rate),
            rate_fetched_at=snapshot.fetched_at,
        )

    # ---------------------------------------------------------------- creation

    def create(
        self,
        recipient_name: str,
        corridor: Corridor,
        pricing: PricingResult,
        funding: Optional[RecipientDetails] = None,
    ) -> Transfer:
        """
        Record a new transfer and submit it to settlement.

        Args:
            recipient_name: Recipient as entered by the sender
            corridor: Destination corridor (must match the pricing corridor)
            pricing: Result of quote()
            funding: Raw recipient details when funded from a session

        Returns:
            Read-only Transfer view of the new record
        """
        if pricing.corridor != corridor:
            raise ValueError("Pricing was computed for a different corridor")

        created_at = self._clock()
        with self._lock:
            seq = next(self._ids)
        transfer_id = f"TXN-{seq}"

        receipt = self._settlement.submit(
            transfer_id, pricing, recipient_name, created_at, details=funding,
        )

        # Walk up to the provider's reported status one step at a time
        history = [StatusChange(TransferStatus.PENDING, created_at)]
        status = TransferStatus.PENDING
        while status != receipt.status:
            status = status.next()
            if status is None:
                raise LedgerIntegrityError(f"Settlement reported unknown status {receipt.status!r}")
            history.append(StatusChange(status, created_at))

        record = _TransferRecord(
            seq=seq,
            id=transfer_id,
            provider_reference=receipt.provider_reference,
            pricing=pricing,
            recipient_name=recipient_name,
            created_at=created_at,
            estimated_arrival=receipt.estimated_arrival,
            status=status,
            masked_account=funding.masked_account if funding is not None else None,
            history=history,
        )
        with self._lock:
            self._records[transfer_id] = record

        logger.info(
            "Transfer %s created: %s USD -> %s %s (%s), status=%s",
            transfer_id, pricing.amount_sent, pricing.amount_received,
            corridor.currency, corridor.country, status.value,
        )
        with record.lock:
            return self._view(record)

    def fund_from_session(
        self,
        vault: SessionVault,
        session_id: str,
        recipient_name: str,
        corridor: Corridor,
        pricing: PricingResult,
    ) -> Transfer:
        """
        Create a transfer paid out to the bank details stored for a session.

        The raw details go to settlement only; the returned Transfer carries
        the masked account number.

        Raises:
            SessionNotFoundError: No details stored for the session
        """
        details = vault.resolve(session_id)
        return self.create(recipient_name, corridor, pricing, funding=details)

    # ------------------------------------------------------------------ status

    def advance_status(self, transfer_id: str) -> Transfer:
        """
        Check a transfer's status, possibly moving it one step forward.

        Raises:
            TransferNotFoundError: Unknown transfer id
        """
        record = self._lookup(transfer_id)
        with record.lock:
            current = record.status
            if not isinstance(current, TransferStatus):
                raise LedgerIntegrityError(f"Transfer {transfer_id} has invalid status {current!r}")
            nxt = current.next()
            if nxt is not None and self._rng.random() > ADVANCE_THRESHOLD:
                record.status = nxt
                record.history.append(StatusChange(nxt, self._clock()))
                logger.info("Transfer %s advanced %s -> %s", transfer_id, current.value, nxt.value)
            return self._view(record)

    def get(self, transfer_id: str) -> Transfer:
        """Read a transfer without advancing it."""
        record = self._lookup(transfer_id)
        with record.lock:
            return self._view(record)

    def list(self, limit: int = 10) -> List[Transfer]:
        """
        Most recently created transfers first.

        Args:
            limit: Maximum number of transfers (default 10); <= 0 returns none

        Returns:
            List of Transfer views
        """
        if limit <= 0:
            return []
        with self._lock:
            records = list(self._records.values())
        records.sort(key=lambda r: (r.created_at, r.seq), reverse=True)
        views = []
        for record in records[:limit]:
            with record.lock:
                views.append(self._view(record))
        return views

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def status_counts(self) -> Dict[str, int]:
        with self._lock:
            records = list(self._records.values())
        counts = {status.value: 0 for status in TransferStatus}
        for record in records:
            counts[record.status.value] += 1
        return counts

    # ---------------------------------------------------------------- internals

    def _lookup(self, transfer_id: str) -> _TransferRecord:
        with self._lock:
            record = self._records.get(transfer_id)
        if record is None:
            raise TransferNotFoundError(transfer_id)
        return record

    @staticmethod
    def _view(record: _TransferRecord) -> Transfer:
        # Caller holds record.lock (or the record is not shared yet)
        pricing = record.pricing
        if pricing.net_amount != pricing.amount_sent - pricing.fee:
            raise LedgerIntegrityError(f"Transfer {record.id} has inconsistent amounts")
        if not isinstance(record.status, TransferStatus):
            raise LedgerIntegrityError(f"Transfer {record.id} has invalid status {record.status!r}")
        return Transfer(
            id=record.id,
            provider_reference=record.provider_reference,
            amount_sent=pricing.amount_sent,
            fee=pricing.fee,
            net_amount=pricing.net_amount,
            exchange_rate=pricing.exchange_rate,
            amount_received=pricing.amount_received,
            recipient_name=record.recipient_name,
            destination_country=pricing.corridor.country,
            destination_currency=pricing.corridor.currency,
            delivery_time=pricing.corridor.delivery_time,
            status=record.status,
            created_at=record.created_at,
            estimated_arrival=record.estimated_arrival,
            masked_account=record.masked_account,
            status_history=tuple(record.history),
        )
