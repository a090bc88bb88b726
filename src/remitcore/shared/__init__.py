# src/remitcore/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Logging configuration
"""

from remitcore.shared.validators import (
    sanitize_user_input,
    validate_account_number,
    validate_currency_code,
    validate_http_url,
    validate_session_id,
)
from remitcore.shared.logging_conf import setup_logging

__all__ = [
    "validate_http_url",
    "validate_currency_code",
    "validate_session_id",
    "validate_account_number",
    "sanitize_user_input",
    "setup_logging",
]
