from __future__ import annotations

from decimal import Decimal

from mortgage_compare.domain.market import MarketSource
from mortgage_compare.ports.market_rate_provider import MarketRateProvider, MarketSnapshot

# (provider, rate offset, apr offset, points) relative to the profile's base rate
_LENDER_SPREADS: tuple[tuple[str, Decimal, Decimal, Decimal], ...] = (
    ("Lender A", Decimal("-0.125"), Decimal("-0.05"), Decimal("0.5")),
    ("Lender B", Decimal("0"), Decimal("0.15"), Decimal("0")),
    ("Lender C", Decimal("0.125"), Decimal("0.25"), Decimal("0")),
    ("Lender D", Decimal("-0.25"), Decimal("-0.1"), Decimal("1.0")),
    ("Lender E", Decimal("0.25"), Decimal("0.35"), Decimal("0")),
)


class SyntheticMarketRateProvider(MarketRateProvider):
    """
    Deterministic stand-in for a live rate feed.

    Base rate by term (30y: 6.8, 15y: 6.2, others: 7.0), shifted by credit
    score, then spread across five fictional lenders.
    """

    def base_rate(self, term_years: int, credit_score: int) -> Decimal:
        if term_years == 30:
            rate = Decimal("6.8")
        elif term_years == 15:
            rate = Decimal("6.2")
        else:
            rate = Decimal("7.0")

        if credit_score >= 760:
            rate -= Decimal("0.5")
        elif credit_score >= 700:
            rate -= Decimal("0.25")
        elif credit_score < 680:
            rate += Decimal("0.25")

        return rate

    def current_rates(self, term_years: int, credit_score: int) -> MarketSnapshot:
        base = self.base_rate(term_years, credit_score)
        return MarketSnapshot.from_sources(
            MarketSource(provider=name, rate=base + rate_offset, apr=base + apr_offset, points=points)
            for name, rate_offset, apr_offset, points in _LENDER_SPREADS
        )
