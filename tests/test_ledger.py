# tests/test_ledger.py
"""
Ledger Tests - Pricing, Creation and Status Progression

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- remitcore.application.ledger (TransferLedger)
- remitcore.application.settlement (SimulatedSettlement, spied on for funding)
- conftest (FakeClock, ScriptedRandom)
- pytest (testing framework)
"""
import dataclasses
import logging
import threading
from datetime import timedelta
from decimal import Decimal

import pytest

from conftest import ScriptedRandom
from remitcore.application.ledger import TransferLedger
from remitcore.application.settlement import SimulatedSettlement
from remitcore.application.vault import RecipientDetails
from remitcore.domain.corridors import corridor_catalog
from remitcore.domain.errors import (
    InvalidAmountError,
    LedgerIntegrityError,
    LimitExceededError,
    RateUnavailableError,
    SessionNotFoundError,
    TransferNotFoundError,
)
from remitcore.domain.models import RateSnapshot, TransferStatus

MEXICO = corridor_catalog.find("Mexico")
COLOMBIA = corridor_catalog.find("Colombia")


@pytest.fixture
def snapshot(clock):
    return RateSnapshot({"MXN": Decimal("17.5"), "COP": Decimal("4100")}, fetched_at=clock())


def _create(ledger, snapshot, amount="100", corridor=MEXICO, name="Maria"):
    pricing = ledger.quote(Decimal(amount), corridor, snapshot)
    return ledger.create(name, corridor, pricing)


class SpySettlement(SimulatedSettlement):
    def __init__(self):
        super().__init__(ScriptedRandom())
        self.submitted = []

    def submit(self, transfer_id, pricing, recipient_name, submitted_at, details=None):
        self.submitted.append(details)
        return super().submit(transfer_id, pricing, recipient_name, submitted_at, details=details)


class TestQuote:
    def test_mexico_scenario(self, ledger, snapshot, clock):
        pricing = ledger.quote(Decimal("100"), MEXICO, snapshot)
        assert pricing.fee == Decimal("2.99")
        assert pricing.net_amount == Decimal("97.01")
        assert pricing.exchange_rate == Decimal("17.5")
        assert pricing.amount_received == Decimal("1697.68")
        assert pricing.rate_fetched_at == clock()

    def test_fee_is_exact_and_only_received_is_rounded(self, ledger, snapshot):
        pricing = ledger.quote(Decimal("333.33"), MEXICO, snapshot)
        assert pricing.fee == Decimal("4.99995")
        assert pricing.net_amount == Decimal("328.33005")
        # 328.33005 * 17.5 = 5745.775875
        assert pricing.amount_received == Decimal("5745.78")

    @pytest.mark.parametrize("amount", ["NaN", "sNaN", "Infinity", "-Infinity"])
    def test_non_finite_amount(self, ledger, snapshot, amount):
        with pytest.raises(InvalidAmountError):
            ledger.quote(Decimal(amount), MEXICO, snapshot)

    @pytest.mark.parametrize("amount", ["lots", None, object()])
    def test_non_numeric_amount(self, ledger, amount):
        with pytest.raises(InvalidAmountError):
            ledger.check_amount(amount)

    def test_net_is_sent_minus_fee(self, ledger, snapshot):
        pricing = ledger.quote(Decimal("2500"), MEXICO, snapshot)
        assert pricing.fee == Decimal("37.50")
        assert pricing.net_amount == pricing.amount_sent - pricing.fee

    @pytest.mark.parametrize("amount", ["0", "-5", "-0.01"])
    def test_non_positive_amount(self, ledger, snapshot, amount):
        with pytest.raises(InvalidAmountError) as exc:
            ledger.quote(Decimal(amount), MEXICO, snapshot)
        assert exc.value.kind == "InvalidAmount"

    def test_limit_is_inclusive(self, ledger, snapshot):
        pricing = ledger.quote(Decimal("5000"), MEXICO, snapshot)
        assert pricing.fee == Decimal("50.00")

    def test_above_limit(self, ledger, snapshot):
        with pytest.raises(LimitExceededError) as exc:
            ledger.quote(Decimal("5000.01"), MEXICO, snapshot)
        assert "5000" in exc.value.message

    def test_float_amount_is_converted_exactly(self, ledger, snapshot):
        assert ledger.check_amount(0.1) == Decimal("0.1")

    def test_missing_rate(self, ledger, clock):
        snap = RateSnapshot({"MXN": Decimal("17.5")}, fetched_at=clock())
        with pytest.raises(RateUnavailableError) as exc:
            ledger.quote(Decimal("100"), COLOMBIA, snap)
        assert exc.value.currency == "COP"

    def test_quote_creates_nothing(self, ledger, snapshot):
        ledger.quote(Decimal("100"), MEXICO, snapshot)
        assert len(ledger) == 0


class TestCreate:
    def test_sequential_ids(self, ledger, snapshot):
        ids = [_create(ledger, snapshot).id for _ in range(3)]
        assert ids == ["TXN-1000", "TXN-1001", "TXN-1002"]

    def test_fields(self, ledger, snapshot, clock):
        t = _create(ledger, snapshot)
        assert t.status == TransferStatus.PENDING
        assert t.recipient_name == "Maria"
        assert t.destination_country == "Mexico"
        assert t.destination_currency == "MXN"
        assert t.amount_received == Decimal("1697.68")
        assert t.created_at == clock()
        assert t.estimated_arrival == clock() + timedelta(minutes=35)
        assert t.provider_reference.startswith("BAMBU-")
        assert t.masked_account is None
        assert [c.status for c in t.status_history] == [TransferStatus.PENDING]

    def test_initial_status_from_settlement(self, clock, snapshot):
        ledger = TransferLedger(
            rng=ScriptedRandom(),
            clock=clock,
            settlement=SimulatedSettlement(ScriptedRandom(initial_status=TransferStatus.PROCESSING)),
        )
        t = _create(ledger, snapshot)
        assert t.status == TransferStatus.PROCESSING
        assert [c.status for c in t.status_history] == [TransferStatus.PENDING, TransferStatus.PROCESSING]

    def test_corridor_mismatch(self, ledger, snapshot):
        pricing = ledger.quote(Decimal("100"), MEXICO, snapshot)
        with pytest.raises(ValueError):
            ledger.create("Maria", COLOMBIA, pricing)

    def test_returned_view_is_frozen(self, ledger, snapshot):
        t = _create(ledger, snapshot)
        with pytest.raises(dataclasses.FrozenInstanceError):
            t.status = TransferStatus.COMPLETED


class TestAdvanceStatus:
    def test_no_advance_below_threshold(self, ledger, snapshot):
        t = _create(ledger, snapshot)
        assert ledger.advance_status(t.id).status == TransferStatus.PENDING

    def test_advances_one_step(self, ledger, snapshot, advance_rng, clock):
        t = _create(ledger, snapshot)
        advance_rng._values.extend([0.9])
        clock.advance(minutes=5)

        checked = ledger.advance_status(t.id)

        assert checked.status == TransferStatus.PROCESSING
        assert checked.status_history[-1].at == clock()
        # Pricing is fixed at creation
        assert checked.amount_received == t.amount_received

    def test_exactly_half_does_not_advance(self, ledger, snapshot, advance_rng):
        t = _create(ledger, snapshot)
        advance_rng._values.extend([0.5])
        assert ledger.advance_status(t.id).status == TransferStatus.PENDING

    def test_never_past_completed(self, ledger, snapshot, advance_rng):
        t = _create(ledger, snapshot)
        advance_rng.default = 0.99
        seen = [ledger.advance_status(t.id).status for _ in range(5)]
        assert seen == [
            TransferStatus.PROCESSING,
            TransferStatus.COMPLETED,
            TransferStatus.COMPLETED,
            TransferStatus.COMPLETED,
            TransferStatus.COMPLETED,
        ]
        assert len(ledger.get(t.id).status_history) == 3

    def test_unknown_id(self, ledger):
        with pytest.raises(TransferNotFoundError) as exc:
            ledger.advance_status("TXN-9999")
        assert exc.value.kind == "NotFound"
        assert "TXN-9999" in exc.value.message

    def test_get_does_not_advance(self, ledger, snapshot, advance_rng):
        t = _create(ledger, snapshot)
        advance_rng.default = 0.99
        assert ledger.get(t.id).status == TransferStatus.PENDING

    def test_concurrent_checks_never_skip(self, clock, snapshot):
        ledger = TransferLedger(
            rng=ScriptedRandom(default=0.99),
            clock=clock,
            settlement=SimulatedSettlement(ScriptedRandom()),
        )
        t = _create(ledger, snapshot)

        threads = [threading.Thread(target=ledger.advance_status, args=(t.id,)) for _ in range(10)]
        for th in threads:
            th.start()
        for th in threads:
            th.join()

        final = ledger.get(t.id)
        assert final.status == TransferStatus.COMPLETED
        assert [c.status for c in final.status_history] == list(TransferStatus)


class TestList:
    def test_most_recent_first(self, ledger, snapshot, clock):
        first = _create(ledger, snapshot, name="A")
        clock.advance(minutes=1)
        second = _create(ledger, snapshot, name="B")
        assert [t.id for t in ledger.list()] == [second.id, first.id]

    def test_same_timestamp_ordered_by_creation(self, ledger, snapshot):
        ids = [_create(ledger, snapshot).id for _ in range(3)]
        assert [t.id for t in ledger.list()] == list(reversed(ids))

    def test_limit(self, ledger, snapshot, clock):
        for _ in range(12):
            _create(ledger, snapshot)
            clock.advance(seconds=1)
        assert len(ledger.list()) == 10
        assert len(ledger.list(3)) == 3
        assert ledger.list(0) == []

    def test_empty(self, ledger):
        assert ledger.list() == []

    def test_status_counts(self, ledger, snapshot):
        _create(ledger, snapshot)
        _create(ledger, snapshot)
        assert ledger.status_counts() == {"pending": 2, "processing": 0, "completed": 0}


class TestFundFromSession:
    def test_raw_details_reach_settlement_only(self, vault, snapshot, clock):
        spy = SpySettlement()
        ledger = TransferLedger(rng=ScriptedRandom(), clock=clock, settlement=spy)
        vault.store("s1", RecipientDetails(account_number="78800058952", document_id="1020304050"))
        pricing = ledger.quote(Decimal("200"), COLOMBIA, snapshot)

        t = ledger.fund_from_session(vault, "s1", "Edison", COLOMBIA, pricing)

        assert spy.submitted[0].account_number == "78800058952"
        assert t.masked_account == "...8952"
        assert "78800058952" not in repr(t)
        assert "78800058952" not in str(t.to_dict())

    def test_missing_session(self, ledger, vault, snapshot):
        pricing = ledger.quote(Decimal("100"), MEXICO, snapshot)
        with pytest.raises(SessionNotFoundError):
            ledger.fund_from_session(vault, "nobody", "Maria", MEXICO, pricing)
        assert len(ledger) == 0


class TestIntegrity:
    def test_inconsistent_amounts_are_reported(self, ledger, snapshot):
        t = _create(ledger, snapshot)
        record = ledger._records[t.id]
        record.pricing = dataclasses.replace(record.pricing, net_amount=Decimal("1.00"))
        with pytest.raises(LedgerIntegrityError):
            ledger.get(t.id)


class TestSettlement:
    def test_funded_submit_uses_mask_only(self, clock, snapshot, caplog):
        settlement = SimulatedSettlement(ScriptedRandom())
        details = RecipientDetails(account_number="78800058952", document_id="1020304050")
        pricing = TransferLedger(clock=clock).quote(Decimal("200"), COLOMBIA, snapshot)

        with caplog.at_level(logging.DEBUG):
            receipt = settlement.submit("TXN-1000", pricing, "Edison", clock(), details=details)

        assert "...8952" in caplog.text
        assert "78800058952" not in caplog.text
        assert "1020304050" not in caplog.text
        assert "78800058952" not in repr(receipt)
        assert {f.name for f in dataclasses.fields(receipt)} == {
            "provider_reference", "status", "estimated_arrival",
        }
        assert receipt.provider_reference == f"BAMBU-{int(clock().timestamp() * 1000)}-aaaaaaaaa"
