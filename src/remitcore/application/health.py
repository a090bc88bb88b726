# src/remitcore/application/health.py
"""
Health Checker - Component Monitoring and Diagnostics

Reports the state of the rate cache, the transfer ledger and the recipient
vault. Never touches the network: rate health is judged from the cached
snapshot only. Vault health reports counts, never stored details.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from remitcore.application.transfer_service import TransferService

logger = logging.getLogger(__name__)


@dataclass
class HealthStatus:
    """Represents the health status of a component."""
    is_healthy: bool
    message: str
    last_check: datetime
    details: Optional[Dict[str, Any]] = None


class HealthChecker:
    """Centralized health checking for the core components."""

    def __init__(self, service: TransferService):
        self.service = service

    def check_rates(self) -> HealthStatus:
        """Rate cache is healthy while it holds a snapshot younger than its TTL."""
        rates = self.service.rates
        snap = rates.cached_snapshot()
        now = datetime.now(timezone.utc)
        if snap is None:
            return HealthStatus(
                is_healthy=False,
                message="No live rate snapshot cached yet",
                last_check=now,
                details={"fetches": rates.fetch_count, "failures": rates.failure_count},
            )

        age = rates.cache_age_seconds()
        ttl_seconds = int(rates.ttl.total_seconds())
        fresh = age is not None and age < ttl_seconds
        return HealthStatus(
            is_healthy=fresh,
            message=(
                f"Rates {'fresh' if fresh else 'stale'}: {len(snap.rates)} currencies, "
                f"age {age}s (ttl {ttl_seconds}s)"
            ),
            last_check=now,
            details={
                "fetched_at": snap.fetched_at.isoformat(),
                "age_seconds": age,
                "ttl_seconds": ttl_seconds,
                "currencies": len(snap.rates),
                "fetches": rates.fetch_count,
                "failures": rates.failure_count,
            },
        )

    def check_ledger(self) -> HealthStatus:
        try:
            counts = self.service.ledger.status_counts()
        except Exception as e:
            logger.error("Ledger health check failed: %s", e)
            return HealthStatus(
                is_healthy=False,
                message=f"Ledger error: {e}",
                last_check=datetime.now(timezone.utc),
            )
        total = sum(counts.values())
        return HealthStatus(
            is_healthy=True,
            message=f"Ledger holds {total} transfers",
            last_check=datetime.now(timezone.utc),
            details={"total": total, "by_status": counts},
        )

    def check_vault(self) -> HealthStatus:
        vault = self.service.vault
        size = len(vault)
        return HealthStatus(
            is_healthy=size <= vault.max_sessions,
            message=f"Vault holds details for {size} sessions (max {vault.max_sessions})",
            last_check=datetime.now(timezone.utc),
            details={"sessions": size, "max_sessions": vault.max_sessions},
        )

    def check_catalog(self) -> HealthStatus:
        catalog = self.service.catalog
        return HealthStatus(
            is_healthy=len(catalog) > 0,
            message=f"{len(catalog)} corridors in {len(catalog.regions())} regions",
            last_check=datetime.now(timezone.utc),
            details={"corridors": len(catalog), "regions": catalog.regions()},
        )

    def check_all(self) -> Dict[str, HealthStatus]:
        """Run every check."""
        return {
            "rates": self.check_rates(),
            "ledger": self.check_ledger(),
            "vault": self.check_vault(),
            "catalog": self.check_catalog(),
        }

    def get_overall_health(self) -> HealthStatus:
        """
        Combine all checks into one status.

        The core is healthy when the ledger, vault and catalog are; a stale or
        missing rate cache only degrades it, since pricing falls back.
        """
        checks = self.check_all()
        critical = [name for name in ("ledger", "vault", "catalog") if not checks[name].is_healthy]
        degraded = [name for name, status in checks.items() if not status.is_healthy and name not in critical]
        if critical:
            message = f"Unhealthy components: {', '.join(critical)}"
        elif degraded:
            message = f"Degraded components: {', '.join(degraded)}"
        else:
            message = "All components healthy"
        return HealthStatus(
            is_healthy=not critical,
            message=message,
            last_check=datetime.now(timezone.utc),
            details={name: status.is_healthy for name, status in checks.items()},
        )
