# src/remitcore/adapters/formatting/__init__.py
"""
Formatting Adapters - Message Formatting

This package renders core results as plain text for the outer consumer.
"""

from remitcore.adapters.formatting.formatter import (
    format_corridors,
    format_error,
    format_exchange_rate,
    format_history,
    format_quote,
    format_stored_details,
    format_transfer_created,
    format_transfer_status,
)

__all__ = [
    "format_corridors",
    "format_error",
    "format_exchange_rate",
    "format_history",
    "format_quote",
    "format_stored_details",
    "format_transfer_created",
    "format_transfer_status",
]
