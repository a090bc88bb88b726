# src/remitcore/adapters/formatting/formatter.py
"""
Message Formatter - Text Formatting and Presentation

This module renders core results as short plain-text messages for a
text-generation consumer (the assistant that relays them to the user).
Only masked account numbers and opaque references ever appear here.

Files that USE this module:
- transport collaborators (render tool results as text)
- tests.test_formatter (unit tests)

Files that this module USES:
- remitcore.domain.models (Transfer, PricingResult, ExchangeRateQuote, Corridor, StoredDetails)
- remitcore.domain.errors (error kinds for format_error)
"""
from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from remitcore.domain.errors import (
    DomainError,
    UnsupportedCorridorError,
)
from remitcore.domain.models import (
    Corridor,
    ExchangeRateQuote,
    PricingResult,
    StoredDetails,
    Transfer,
)


def _fmt_money(value: Decimal) -> str:
    """Two decimals with thousands separators, e.g. 12345.6 -> '12,345.60'."""
    return f"{value:,.2f}"


def _fmt_rate(value: Decimal) -> str:
    return f"{value:.4f}"


def format_transfer_created(transfer: Transfer) -> str:
    """
    Confirmation line for a newly created transfer.

    Args:
        transfer: Transfer returned by the service

    Returns:
        One-paragraph confirmation text
    """
    msg = (
        f"✅ Transfer initiated! {transfer.recipient_name} in {transfer.destination_country} "
        f"will receive {_fmt_money(transfer.amount_received)} {transfer.destination_currency}. "
        f"Estimated delivery: {transfer.delivery_time}. Transfer ID: {transfer.id}"
    )
    if transfer.masked_account:
        msg += f"\n🏦 Paid out to account {transfer.masked_account}"
    return msg


def format_transfer_status(transfer: Transfer) -> str:
    arrival = transfer.estimated_arrival.strftime("%Y-%m-%d %H:%M UTC")
    return (
        f"📊 Transfer Status: {transfer.status.value.upper()}\n\n"
        f"💸 {_fmt_money(transfer.amount_received)} {transfer.destination_currency} "
        f"to {transfer.recipient_name}\n"
        f"📅 Estimated arrival: {arrival}\n"
        f"🆔 {transfer.id}"
    )


def format_history(transfers: Sequence[Transfer]) -> str:
    """List of transfers, most recent first, or a hint when there are none."""
    if not transfers:
        return '📭 No transfers found. Start by saying "Send $100 to Mexico"'
    plural = "s" if len(transfers) != 1 else ""
    lines = [f"📋 Found {len(transfers)} transfer{plural}:", ""]
    for t in transfers:
        lines.append(
            f"• {_fmt_money(t.amount_received)} {t.destination_currency} to {t.recipient_name} "
            f"- {t.status.value.upper()} ({t.id})"
        )
    return "\n".join(lines)


def format_corridors(grouped: Dict[str, List[Corridor]], region: Optional[str] = None) -> str:
    """
    Supported countries grouped by region.

    Args:
        grouped: Output of CorridorCatalog.group_by_region
        region: Region the list was filtered to, if any
    """
    total = sum(len(corridors) for corridors in grouped.values())
    where = f" in {region}" if region else " worldwide"
    lines = [f"🌍 We support transfers to {total} countries{where}:"]
    for reg, corridors in grouped.items():
        lines.append("")
        lines.append(f"**{reg}** ({len(corridors)} countries):")
        for c in corridors:
            lines.append(f"  • {c.country} ({c.currency}) - {c.delivery_time}")
    return "\n".join(lines)


def format_exchange_rate(quote: ExchangeRateQuote) -> str:
    updated = quote.fetched_at.strftime("%Y-%m-%d %H:%M UTC")
    return (
        f"💱 Current rate: 1 USD = {_fmt_rate(quote.rate)} {quote.currency}\n\n"
        f"📦 Delivery time: {quote.delivery_time}\n\n"
        f"Last updated: {updated}"
    )


def format_quote(pricing: PricingResult) -> str:
    return (
        f"💵 You send: ${_fmt_money(pricing.amount_sent)}\n"
        f"🧾 Fee: ${_fmt_money(pricing.fee)}\n"
        f"💱 Rate: 1 USD = {_fmt_rate(pricing.exchange_rate)} {pricing.currency}\n"
        f"🎯 They receive: {_fmt_money(pricing.amount_received)} {pricing.currency} "
        f"in {pricing.corridor.country} ({pricing.corridor.delivery_time})"
    )


def format_stored_details(stored: StoredDetails) -> str:
    return (
        f"🔒 Recipient bank details saved securely. Account {stored.masked_account} "
        f"(reference {stored.reference})."
    )


def format_error(error: DomainError, supported_countries: Optional[Sequence[str]] = None) -> str:
    """
    User-facing message for an expected failure.

    Args:
        error: Any DomainError raised by the service
        supported_countries: Optional list appended to unsupported-corridor errors

    Returns:
        Message prefixed with ❌; never contains recipient bank details
    """
    msg = f"❌ {error.message}"
    if isinstance(error, UnsupportedCorridorError) and supported_countries:
        msg += f" Supported countries: {', '.join(supported_countries)}"
    return msg
