# src/remitcore/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains adapters for systems outside the core:
- Providers (upstream exchange rate API)
- Formatting (plain-text rendering of results)
"""

__all__ = []
