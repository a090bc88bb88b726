# src/remitcore/domain/fees.py
"""
Fee Calculator - Percentage Fee With Floor and Ceiling

The fee for a transfer is a percentage of the send amount, never below the
schedule floor and never above the schedule ceiling.

Files that USE this module:
- remitcore.application.ledger (prices transfers with calculate_fee)
- remitcore.app (builds FeeSchedule from settings)

Files that this module USES:
- None (pure function over Decimal)
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class FeeSchedule:
    rate: Decimal = Decimal("0.015")
    floor: Decimal = Decimal("2.99")
    ceiling: Decimal = Decimal("50")

    def __post_init__(self) -> None:
        if self.floor > self.ceiling:
            raise ValueError(f"Fee floor {self.floor} is above ceiling {self.ceiling}")


DEFAULT_FEE_SCHEDULE = FeeSchedule()


def calculate_fee(amount: Decimal, schedule: FeeSchedule = DEFAULT_FEE_SCHEDULE) -> Decimal:
    """
    Compute the transfer fee for a send amount.

    fee = clamp(amount * rate, floor, ceiling), exact. Only the received
    amount is rounded to cents, so net = amount - fee holds exactly.

    Args:
        amount: USD send amount (caller guarantees amount > 0)
        schedule: Fee schedule to apply

    Returns:
        Fee in USD, unrounded (e.g. 333.33 -> 4.99995)
    """
    return max(schedule.floor, min(amount * schedule.rate, schedule.ceiling))
