# tests/test_fees.py
"""
Fee Calculator Tests - Percentage Fee With Floor and Ceiling

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- remitcore.domain.fees (calculate_fee, FeeSchedule)
- pytest (testing framework)
"""
from decimal import Decimal

import pytest

from remitcore.domain.fees import FeeSchedule, calculate_fee


class TestCalculateFee:
    @pytest.mark.parametrize("amount, expected", [
        ("1", "2.99"),        # 0.015 -> floor
        ("100", "2.99"),      # 1.50 -> floor
        ("199.33", "2.99"),   # 2.98995 -> floor
        ("200", "3.00"),
        ("333.33", "4.99995"), # exact, not rounded to cents
        ("1000", "15.00"),
        ("3333.33", "49.99995"), # just under the ceiling
        ("4000", "50.00"),    # 60 -> ceiling
        ("5000", "50.00"),
    ])
    def test_default_schedule(self, amount, expected):
        assert calculate_fee(Decimal(amount)) == Decimal(expected)

    def test_fee_is_clamped_for_a_range_of_amounts(self):
        schedule = FeeSchedule()
        for cents in range(1, 500001, 997):
            amount = Decimal(cents) / 100
            fee = calculate_fee(amount, schedule)
            assert schedule.floor <= fee <= schedule.ceiling
            assert fee == max(schedule.floor, min(amount * schedule.rate, schedule.ceiling))

    @pytest.mark.parametrize("amount", ["200.01", "333.33", "1234.57", "2999.99", "3333.33"])
    def test_fee_keeps_sub_cent_digits(self, amount):
        amount = Decimal(amount)
        fee = calculate_fee(amount)
        assert fee == amount * Decimal("0.015")

    def test_custom_schedule(self):
        schedule = FeeSchedule(rate=Decimal("0.02"), floor=Decimal("1"), ceiling=Decimal("10"))
        assert calculate_fee(Decimal("100"), schedule) == Decimal("2.00")
        assert calculate_fee(Decimal("10"), schedule) == Decimal("1.00")
        assert calculate_fee(Decimal("1000"), schedule) == Decimal("10.00")

    def test_floor_above_ceiling_rejected(self):
        with pytest.raises(ValueError):
            FeeSchedule(floor=Decimal("60"), ceiling=Decimal("50"))
