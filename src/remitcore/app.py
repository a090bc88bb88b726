# src/remitcore/app.py
"""
Application Entry Point - Service Composition

This module is the composition root of the transfer core. build_service()
wires settings, the upstream rate source, the rate cache, the ledger and the
vault into a TransferService for the transport layer to call. main() sets up
logging, builds the service, warms the rate cache and logs a readiness
summary.

Files that USE this module:
- python -m remitcore (module entry point)
- transport collaborators (call build_service)
- tests.test_app (unit tests)

Files that this module USES:
- remitcore.shared.logging_conf (setup_logging for logging configuration)
- remitcore.config (settings for configuration management)
- remitcore.adapters.providers.exchangerate_api (upstream rate source)
- remitcore.application.* (services)
- remitcore.domain.* (catalog, fee schedule)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations for forward references

import logging  # Standard library for logging messages and errors
import random  # Randomness for the settlement simulation
from datetime import timedelta  # TTLs and delivery windows
from typing import Optional

from remitcore.adapters.providers.base import RateSource
from remitcore.adapters.providers.exchangerate_api import ExchangeRateApiSource
from remitcore.application.health import HealthChecker
from remitcore.application.ledger import TransferLedger
from remitcore.application.rates_service import ExchangeRateProvider
from remitcore.application.settlement import SimulatedSettlement
from remitcore.application.transfer_service import TransferService
from remitcore.application.vault import SessionVault
from remitcore.config import Settings
from remitcore.domain.corridors import corridor_catalog
from remitcore.domain.fees import FeeSchedule
from remitcore.shared.logging_conf import setup_logging


def build_service(
    config: Optional[Settings] = None,
    source: Optional[RateSource] = None,
    rng: Optional[random.Random] = None,
) -> TransferService:
    """
    Wire a TransferService from settings.

    Args:
        config: Settings to use (defaults to the global settings)
        source: Upstream rate source (defaults to ExchangeRateApiSource)
        rng: Random source for the settlement simulation

    Returns:
        Ready-to-use TransferService
    """
    if config is None:
        from remitcore.config import settings as config

    rng = rng or random.Random()
    source = source or ExchangeRateApiSource(
        base_url=config.fx_api_url, timeout=config.http_timeout_seconds,
    )
    rates = ExchangeRateProvider(source, ttl=timedelta(seconds=config.rate_cache_seconds))
    delivery = timedelta(minutes=config.estimated_delivery_minutes)
    ledger = TransferLedger(
        fee_schedule=FeeSchedule(rate=config.fee_rate, floor=config.fee_min, ceiling=config.fee_max),
        per_transaction_limit=config.per_transaction_limit,
        rng=rng,
        settlement=SimulatedSettlement(rng, delivery=delivery),
    )
    vault = SessionVault(
        max_sessions=config.vault_max_sessions,
        session_ttl=timedelta(seconds=config.vault_session_ttl_seconds),
    )
    return TransferService(
        catalog=corridor_catalog,
        rates=rates,
        ledger=ledger,
        vault=vault,
        history_default_limit=config.history_default_limit,
        daily_limit=config.daily_limit,
        monthly_limit=config.monthly_limit,
    )


def main() -> None:
    """
    Start the transfer core.

    This function:
    1. Sets up logging from settings
    2. Builds the TransferService
    3. Warms the rate cache (falls back silently when offline)
    4. Logs component health
    """
    from remitcore.config import settings

    setup_logging(
        level=logging.INFO,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
        log_stdout=settings.log_stdout,
    )
    logger = logging.getLogger(__name__)

    service = build_service(settings)
    snapshot = service.get_rate_snapshot()
    logger.info(
        "Rate cache warmed: %d currencies from %s at %s",
        len(snapshot.rates), snapshot.source, snapshot.fetched_at.isoformat(),
    )

    health = HealthChecker(service).get_overall_health()
    logger.info("Health: %s", health.message)
    logger.info(
        "Transfer core ready: %d corridors, per-transaction limit $%s, rate TTL %d minutes",
        len(service.catalog), settings.per_transaction_limit, settings.rate_cache_minutes,
    )


if __name__ == "__main__":
    main()
