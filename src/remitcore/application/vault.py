# src/remitcore/application/vault.py
"""
Session Vault - Private Storage for Recipient Bank Details

Raw recipient banking fields (account number, document id, address) enter
the core through SessionVault.store and leave it only through
SessionVault.resolve, which the ledger calls when funding a transfer. Every
other path (results returned to the caller, log lines, health reports) sees
an opaque reference and a masked account number.

Memory is bounded two ways: entries idle for longer than the session TTL
are purged, and past ``max_sessions`` the least recently used session is
evicted. Ending a session with discard() removes its entry immediately.

Files that USE this module:
- remitcore.application.transfer_service (stores details, hands the vault to the ledger)
- remitcore.application.ledger (resolves details when funding from a session)
- remitcore.application.health (reports vault size)
- tests.test_vault (unit tests)

Files that this module USES:
- remitcore.domain.errors (SessionNotFoundError)
- remitcore.domain.models (StoredDetails)
"""
from __future__ import annotations

import logging
import secrets
import threading
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from remitcore.domain.errors import SessionNotFoundError
from remitcore.domain.models import StoredDetails

logger = logging.getLogger(__name__)

MASK_MARKER = "..."
REFERENCE_PREFIX = "acct_"
MIN_ACCOUNT_LENGTH = 4


def mask_account_number(account_number: str) -> str:
    """
    Reveal only the last four characters of an account number.

    Args:
        account_number: Full account number (at least 4 characters)

    Returns:
        Masked form, e.g. "78800058952" -> "...8952"

    Raises:
        ValueError: If the number is too short to mask
    """
    if len(account_number) < MIN_ACCOUNT_LENGTH:
        raise ValueError(f"account_number must have at least {MIN_ACCOUNT_LENGTH} characters")
    return f"{MASK_MARKER}{account_number[-4:]}"


def new_reference() -> str:
    """Opaque reference: "acct_" followed by 8 random hex characters."""
    return f"{REFERENCE_PREFIX}{secrets.token_hex(4)}"


@dataclass(frozen=True, repr=False)
class RecipientDetails:
    """Raw recipient bank details. Only the vault and the funding step hold these."""
    account_number: str
    document_id: Optional[str] = None
    address: Optional[str] = None
    bank_name: Optional[str] = None
    routing_number: Optional[str] = None

    def __post_init__(self) -> None:
        # A shorter number would be revealed whole by its mask
        mask_account_number(self.account_number or "")

    @property
    def masked_account(self) -> str:
        return mask_account_number(self.account_number)

    def __repr__(self) -> str:
        return f"RecipientDetails(account={self.masked_account})"

    __str__ = __repr__


@dataclass
class _SessionRecord:
    reference: str
    masked_account: str
    details: RecipientDetails
    touched_at: datetime


class SessionVault:
    """Lock-guarded, bounded per-session store of recipient details."""

    def __init__(
        self,
        max_sessions: int = 1000,
        session_ttl: Optional[timedelta] = timedelta(minutes=30),
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.max_sessions = max_sessions
        self.session_ttl = session_ttl
        self._clock = clock
        self._records: "OrderedDict[str, _SessionRecord]" = OrderedDict()
        self._lock = threading.Lock()

    def store(self, session_id: str, details: RecipientDetails) -> StoredDetails:
        """
        Store raw details for a session, replacing any earlier details.

        Args:
            session_id: Transport session identifier
            details: Raw recipient bank details

        Returns:
            StoredDetails with an opaque reference and the masked account
        """
        masked = details.masked_account
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            record = _SessionRecord(
                reference=new_reference(),
                masked_account=masked,
                details=details,
                touched_at=now,
            )
            replaced = session_id in self._records
            self._records[session_id] = record
            self._records.move_to_end(session_id)
            while len(self._records) > self.max_sessions:
                _, evicted = self._records.popitem(last=False)
                logger.info("Vault full, evicted session details %s", evicted.reference)

        logger.info(
            "Stored recipient details %s (%s)%s",
            record.reference, masked, " replacing previous details" if replaced else "",
        )
        return StoredDetails(reference=record.reference, masked_account=masked)

    def resolve(self, session_id: str) -> RecipientDetails:
        """
        Return the raw details stored for a session.

        Internal to the core: the result must never be returned to a caller
        or written to a log.

        Raises:
            SessionNotFoundError: If nothing is stored for the session
        """
        with self._lock:
            self._purge_expired(self._clock())
            record = self._records.get(session_id)
            if record is None:
                raise SessionNotFoundError(session_id)
            record.touched_at = self._clock()
            self._records.move_to_end(session_id)
            logger.debug("Resolved recipient details %s for funding", record.reference)
            return record.details

    def describe(self, session_id: str) -> Optional[StoredDetails]:
        """Reference and masked account for a session, without raw fields."""
        with self._lock:
            record = self._records.get(session_id)
            if record is None:
                return None
            return StoredDetails(reference=record.reference, masked_account=record.masked_account)

    def discard(self, session_id: str) -> bool:
        """
        Forget a session's details (session ended).

        Returns:
            True if an entry was removed
        """
        with self._lock:
            record = self._records.pop(session_id, None)
        if record is not None:
            logger.info("Discarded recipient details %s", record.reference)
        return record is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _purge_expired(self, now: datetime) -> None:
        # Caller holds self._lock
        if self.session_ttl is None:
            return
        cutoff = now - self.session_ttl
        expired = [sid for sid, rec in self._records.items() if rec.touched_at <= cutoff]
        for sid in expired:
            rec = self._records.pop(sid)
            logger.info("Expired recipient details %s", rec.reference)
