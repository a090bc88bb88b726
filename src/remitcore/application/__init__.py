# src/remitcore/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains the services that own the core's mutable state (rate
cache, transfer ledger, recipient vault) and the facade the transport calls.
"""

from remitcore.application.rates_service import ExchangeRateProvider, FALLBACK_RATES
from remitcore.application.ledger import TransferLedger
from remitcore.application.vault import SessionVault
from remitcore.application.settlement import SimulatedSettlement
from remitcore.application.transfer_service import TransferService
from remitcore.application.health import HealthChecker, HealthStatus

__all__ = [
    "ExchangeRateProvider",
    "FALLBACK_RATES",
    "TransferLedger",
    "SessionVault",
    "SimulatedSettlement",
    "TransferService",
    "HealthChecker",
    "HealthStatus",
]
