# src/remitcore/application/settlement.py
"""
Simulated Settlement - Stand-in for the Payout Provider

There is no real banking rail behind the core. This module plays the payout
provider's part: it accepts a priced transfer (and, when funded from a
session, the recipient's raw bank details), assigns a provider reference and
reports an initial status drawn at random so that freshly created transfers
look like they are at different points of the provider's pipeline.

Files that USE this module:
- remitcore.application.ledger (submits every new transfer)
- tests.test_ledger (spy settlement to observe funding details)

Files that this module USES:
- remitcore.domain.models (PricingResult, TransferStatus)
"""
from __future__ import annotations

import logging
import string
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Optional, Protocol, Sequence, TypeVar

from remitcore.domain.models import PricingResult, TransferStatus

if TYPE_CHECKING:
    from remitcore.application.vault import RecipientDetails

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomSource(Protocol):
    """Subset of random.Random the simulation needs (injectable for tests)."""
    def random(self) -> float:
        ...

    def choice(self, seq: Sequence[T]) -> T:
        ...


@dataclass(frozen=True)
class SettlementReceipt:
    provider_reference: str
    status: TransferStatus
    estimated_arrival: datetime


class SimulatedSettlement:
    def __init__(self, rng: RandomSource, delivery: timedelta = timedelta(minutes=35)):
        self._rng = rng
        self.delivery = delivery

    def submit(
        self,
        transfer_id: str,
        pricing: PricingResult,
        recipient_name: str,
        submitted_at: datetime,
        details: Optional["RecipientDetails"] = None,
    ) -> SettlementReceipt:
        """
        Hand a transfer to the (simulated) payout provider.

        Args:
            transfer_id: Ledger id of the transfer
            pricing: Priced amounts for the transfer
            recipient_name: Recipient as entered by the sender
            submitted_at: Creation time of the transfer
            details: Raw recipient bank details when funded from a session

        Returns:
            SettlementReceipt with provider reference, initial status and ETA
        """
        suffix = "".join(self._rng.choice(string.ascii_lowercase + string.digits) for _ in range(9))
        reference = f"BAMBU-{int(submitted_at.timestamp() * 1000)}-{suffix}"
        status = self._rng.choice(list(TransferStatus))

        if details is not None:
            logger.info("Submitted %s to settlement with payout account %s", transfer_id, details.masked_account)
        else:
            logger.info("Submitted %s to settlement", transfer_id)

        return SettlementReceipt(
            provider_reference=reference,
            status=status,
            estimated_arrival=submitted_at + self.delivery,
        )
