# src/remitcore/shared/validators.py
"""
Input Validation Utilities - Security and Data Validation

This module provides input validation functions used at the boundary of the
core: configuration values (upstream URL) and caller-supplied arguments
(session ids, currency codes, account numbers, free-text names).

Files that USE this module:
- remitcore.config.settings (uses validate_http_url in Settings field validators)
- remitcore.domain.requests (request models validate their fields with these helpers)

Files that this module USES:
- None (pure utility functions)
"""
import re


def validate_http_url(url: str) -> bool:
    """
    Validate that a URL uses http or https and has a host.

    Args:
        url: URL to validate

    Returns:
        True if valid, False otherwise
    """
    if not url:
        return False
    return bool(re.match(r'^https?://[^\s/$.?#][^\s]*$', url))


def validate_currency_code(code: str) -> bool:
    """
    Validate ISO-4217 style currency code (three uppercase letters).

    Args:
        code: Currency code to validate

    Returns:
        True if valid, False otherwise
    """
    if not code:
        return False
    return bool(re.match(r'^[A-Z]{3}$', code))


def validate_session_id(session_id: str) -> bool:
    """
    Validate a transport session identifier.

    Session ids are opaque to the core, but they must be non-blank,
    printable and reasonably short.

    Args:
        session_id: Session identifier to validate

    Returns:
        True if valid, False otherwise
    """
    if not session_id or session_id.isspace():
        return False
    return len(session_id) <= 128 and bool(re.match(r'^[A-Za-z0-9_.:-]+$', session_id))


def validate_account_number(account_number: str, min_length: int = 4) -> bool:
    """
    Validate a bank account number.

    Accepts digits and letters (IBAN style), at least ``min_length``
    characters so the masked form never reveals the whole number.

    Args:
        account_number: Account number to validate (spaces already removed)
        min_length: Minimum length requirement

    Returns:
        True if valid, False otherwise
    """
    if not account_number:
        return False
    if len(account_number) < min_length or len(account_number) > 34:
        return False
    return bool(re.match(r'^[A-Za-z0-9]+$', account_number))


def sanitize_user_input(text: str, max_length: int = 200) -> str:
    """
    Sanitize free-text input such as a recipient or country name.

    Args:
        text: Input text to sanitize
        max_length: Maximum allowed length

    Returns:
        Sanitized text
    """
    if not text:
        return ""

    # Markup characters never make it into records
    sanitized = re.sub(r'[<>"\']', '', text)

    # Collapse runs of whitespace
    sanitized = re.sub(r'\s+', ' ', sanitized)

    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized.strip()
