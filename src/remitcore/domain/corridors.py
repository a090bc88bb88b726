# src/remitcore/domain/corridors.py
"""
Corridor Catalog - Supported Destinations

Static reference data: every destination country the core can send to, with
its payout currency, typical delivery time and region. Lookups are pure;
an unknown country is a normal negative result, not an error.

Files that USE this module:
- remitcore.application.transfer_service (resolves destinations and lists corridors)
- remitcore.application.health (reports catalog size)
- tests.test_corridors (unit tests)

Files that this module USES:
- remitcore.domain.models (Corridor)
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from remitcore.domain.models import Corridor

# (country, currency, delivery time, region)
_CORRIDOR_ROWS: Tuple[Tuple[str, str, str, str], ...] = (
    ("Mexico", "MXN", "35 minutes", "Latin America"),
    ("Guatemala", "GTQ", "1-2 hours", "Latin America"),
    ("Honduras", "HNL", "1-2 hours", "Latin America"),
    ("Dominican Republic", "DOP", "35 minutes", "Caribbean"),
    ("El Salvador", "USD", "35 minutes", "Latin America"),
    ("Colombia", "COP", "1-3 hours", "Latin America"),
    ("Peru", "PEN", "1-3 hours", "Latin America"),
    ("Ecuador", "USD", "1-3 hours", "Latin America"),
    ("Nicaragua", "NIO", "2-4 hours", "Latin America"),
    ("Costa Rica", "CRC", "1-2 hours", "Latin America"),
    ("Brazil", "BRL", "1-3 hours", "Latin America"),
    ("Argentina", "ARS", "2-4 hours", "Latin America"),
    ("Chile", "CLP", "1-3 hours", "Latin America"),
    ("Panama", "PAB", "1-2 hours", "Latin America"),
    ("Bolivia", "BOB", "2-4 hours", "Latin America"),
    ("Paraguay", "PYG", "2-4 hours", "Latin America"),
    ("Uruguay", "UYU", "2-4 hours", "Latin America"),
    ("Venezuela", "VES", "2-4 hours", "Latin America"),
    ("Jamaica", "JMD", "1-3 hours", "Caribbean"),
    ("Trinidad and Tobago", "TTD", "2-4 hours", "Caribbean"),
    ("Haiti", "HTG", "2-4 hours", "Caribbean"),
    ("Cuba", "CUP", "4-6 hours", "Caribbean"),
    ("Philippines", "PHP", "1-3 hours", "Asia"),
    ("India", "INR", "2-4 hours", "Asia"),
    ("Vietnam", "VND", "2-4 hours", "Asia"),
    ("Thailand", "THB", "1-3 hours", "Asia"),
    ("Indonesia", "IDR", "2-4 hours", "Asia"),
    ("China", "CNY", "2-4 hours", "Asia"),
    ("Japan", "JPY", "1-3 hours", "Asia"),
    ("South Korea", "KRW", "1-3 hours", "Asia"),
    ("Pakistan", "PKR", "2-4 hours", "Asia"),
    ("Bangladesh", "BDT", "2-4 hours", "Asia"),
    ("Malaysia", "MYR", "1-3 hours", "Asia"),
    ("Singapore", "SGD", "35 minutes", "Asia"),
    ("Nepal", "NPR", "2-4 hours", "Asia"),
    ("Sri Lanka", "LKR", "2-4 hours", "Asia"),
    ("Myanmar", "MMK", "4-6 hours", "Asia"),
    ("Cambodia", "KHR", "2-4 hours", "Asia"),
    ("Taiwan", "TWD", "1-3 hours", "Asia"),
    ("Hong Kong", "HKD", "35 minutes", "Asia"),
    ("Nigeria", "NGN", "2-4 hours", "Africa"),
    ("Kenya", "KES", "1-3 hours", "Africa"),
    ("Ghana", "GHS", "2-4 hours", "Africa"),
    ("South Africa", "ZAR", "1-3 hours", "Africa"),
    ("Egypt", "EGP", "2-4 hours", "Africa"),
    ("Morocco", "MAD", "2-4 hours", "Africa"),
    ("Ethiopia", "ETB", "4-6 hours", "Africa"),
    ("Uganda", "UGX", "2-4 hours", "Africa"),
    ("Tanzania", "TZS", "2-4 hours", "Africa"),
    ("Senegal", "XOF", "2-4 hours", "Africa"),
    ("Ivory Coast", "XOF", "2-4 hours", "Africa"),
    ("Cameroon", "XAF", "2-4 hours", "Africa"),
    ("Zimbabwe", "ZWL", "4-6 hours", "Africa"),
    ("Rwanda", "RWF", "2-4 hours", "Africa"),
    ("United Kingdom", "GBP", "35 minutes", "Europe"),
    ("France", "EUR", "35 minutes", "Europe"),
    ("Germany", "EUR", "35 minutes", "Europe"),
    ("Spain", "EUR", "35 minutes", "Europe"),
    ("Italy", "EUR", "35 minutes", "Europe"),
    ("Netherlands", "EUR", "35 minutes", "Europe"),
    ("Poland", "PLN", "1-2 hours", "Europe"),
    ("Romania", "RON", "1-3 hours", "Europe"),
    ("Ukraine", "UAH", "2-4 hours", "Europe"),
    ("Russia", "RUB", "2-4 hours", "Europe"),
    ("Turkey", "TRY", "1-3 hours", "Europe"),
    ("Switzerland", "CHF", "35 minutes", "Europe"),
    ("Sweden", "SEK", "1-2 hours", "Europe"),
    ("Norway", "NOK", "1-2 hours", "Europe"),
    ("Denmark", "DKK", "1-2 hours", "Europe"),
    ("Portugal", "EUR", "35 minutes", "Europe"),
    ("Greece", "EUR", "1-2 hours", "Europe"),
    ("Czech Republic", "CZK", "1-2 hours", "Europe"),
    ("Hungary", "HUF", "1-3 hours", "Europe"),
    ("Austria", "EUR", "35 minutes", "Europe"),
    ("Belgium", "EUR", "35 minutes", "Europe"),
    ("Ireland", "EUR", "35 minutes", "Europe"),
    ("United Arab Emirates", "AED", "1-2 hours", "Middle East"),
    ("Saudi Arabia", "SAR", "1-3 hours", "Middle East"),
    ("Jordan", "JOD", "2-4 hours", "Middle East"),
    ("Lebanon", "LBP", "2-4 hours", "Middle East"),
    ("Kuwait", "KWD", "1-3 hours", "Middle East"),
    ("Qatar", "QAR", "1-2 hours", "Middle East"),
    ("Bahrain", "BHD", "1-2 hours", "Middle East"),
    ("Oman", "OMR", "1-3 hours", "Middle East"),
    ("Israel", "ILS", "1-3 hours", "Middle East"),
    ("Australia", "AUD", "1-3 hours", "Oceania"),
    ("New Zealand", "NZD", "1-3 hours", "Oceania"),
    ("Fiji", "FJD", "2-4 hours", "Oceania"),
    ("Papua New Guinea", "PGK", "4-6 hours", "Oceania"),
    ("Canada", "CAD", "35 minutes", "North America"),
)


def _norm(text: str) -> str:
    return " ".join(text.split()).casefold()


class CorridorCatalog:
    """Read-only lookup over a fixed list of corridors."""

    def __init__(self, corridors: Iterable[Corridor]):
        self._corridors: Tuple[Corridor, ...] = tuple(corridors)
        self._by_country: Dict[str, Corridor] = {}
        for corridor in self._corridors:
            key = _norm(corridor.country)
            if key in self._by_country:
                raise ValueError(f"Duplicate corridor for country: {corridor.country}")
            self._by_country[key] = corridor

    def __len__(self) -> int:
        return len(self._corridors)

    def __iter__(self):
        return iter(self._corridors)

    def find(self, country: str) -> Optional[Corridor]:
        """
        Look up a corridor by destination country.

        Args:
            country: Country name, any case; surrounding whitespace ignored

        Returns:
            Matching Corridor, or None if the country is not supported
        """
        if not country:
            return None
        return self._by_country.get(_norm(country))

    def find_by_currency(self, currency: str) -> Optional[Corridor]:
        """First corridor paying out in ``currency`` (catalog order), or None."""
        if not currency:
            return None
        code = currency.strip().upper()
        for corridor in self._corridors:
            if corridor.currency == code:
                return corridor
        return None

    def group_by_region(self, region: Optional[str] = None) -> Dict[str, List[Corridor]]:
        """
        Group corridors by region.

        Regions appear in order of first appearance in the catalog and
        corridors keep catalog order inside each region.

        Args:
            region: Optional region to restrict to (case-insensitive)

        Returns:
            Ordered dict of region name -> corridors
        """
        wanted = _norm(region) if region else None
        grouped: Dict[str, List[Corridor]] = {}
        for corridor in self._corridors:
            if wanted is not None and _norm(corridor.region) != wanted:
                continue
            grouped.setdefault(corridor.region, []).append(corridor)
        return grouped

    def filter(self, region: Optional[str] = None) -> List[Corridor]:
        """Corridors (optionally for one region), grouped by region for display."""
        grouped = self.group_by_region(region)
        return [corridor for corridors in grouped.values() for corridor in corridors]

    def regions(self) -> List[str]:
        return list(self.group_by_region().keys())

    def countries(self) -> List[str]:
        return [corridor.country for corridor in self._corridors]


DEFAULT_CORRIDORS: Tuple[Corridor, ...] = tuple(Corridor(*row) for row in _CORRIDOR_ROWS)

# Global catalog instance
corridor_catalog = CorridorCatalog(DEFAULT_CORRIDORS)
