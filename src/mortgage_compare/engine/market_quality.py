from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Sequence

from mortgage_compare.domain.loan import InvalidLoanInput, require_number
from mortgage_compare.domain.market import (
    MarketComparison,
    MarketDistribution,
    RateQuality,
)
from mortgage_compare.domain.money import RATE, WHOLE, round_half_up

EXCELLENT_MARGIN = Decimal("0.125")
FAIR_MARGIN = Decimal("0.25")


def _require_rates(values: Iterable[Decimal | int], name: str) -> list[Decimal]:
    rates = [require_number(value, name) for value in values]
    if not rates:
        raise InvalidLoanInput.for_field(name, f"{name} must contain at least one rate")
    return rates


def median(values: Sequence[Decimal | int]) -> Decimal:
    """Middle value, or the mean of the two middle values for even lengths."""
    ordered = sorted(_require_rates(values, "values"))
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def build_distribution(rates: Iterable[Decimal | int]) -> MarketDistribution:
    """Summarise reference rates; the average is rounded to 3 places."""
    values = _require_rates(rates, "rates")
    return MarketDistribution(
        rates=tuple(values),
        average=round_half_up(sum(values, Decimal("0")) / len(values), RATE),
        minimum=min(values),
        maximum=max(values),
        median=median(values),
    )


def classify_rate(candidate_rate: Decimal | int, distribution: MarketDistribution) -> RateQuality:
    """
    Place a rate on the quality ladder. The first matching band wins:

    - Excellent: within 0.125 of the market minimum
    - Good: at or below the market average
    - Fair: at most 0.25 above the average
    - Poor: everything else
    """
    rate = require_number(candidate_rate, "candidate_rate")

    if rate <= distribution.minimum + EXCELLENT_MARGIN:
        return RateQuality.EXCELLENT
    if rate <= distribution.average:
        return RateQuality.GOOD
    if rate <= distribution.average + FAIR_MARGIN:
        return RateQuality.FAIR
    return RateQuality.POOR


def percentile_rank(candidate_rate: Decimal | int, reference_rates: Sequence[Decimal | int]) -> int:
    """
    Share of reference rates strictly below the candidate, as 0..100.

    Uses the position of the first reference rate >= candidate in ascending
    order; 100 when the candidate exceeds every reference rate.
    """
    rate = require_number(candidate_rate, "candidate_rate")
    ordered = sorted(_require_rates(reference_rates, "reference_rates"))

    index = next((i for i, value in enumerate(ordered) if value >= rate), None)
    if index is None:
        return 100
    return int(round_half_up(Decimal(index) / len(ordered) * 100, WHOLE))


def compare_to_market(candidate_rate: Decimal | int, distribution: MarketDistribution) -> MarketComparison:
    rate = require_number(candidate_rate, "candidate_rate")
    percentile = percentile_rank(rate, distribution.rates)

    return MarketComparison(
        quality=classify_rate(rate, distribution),
        difference=rate - distribution.average,
        percentile=percentile,
        better_than_percent=100 - percentile,
        market_average=distribution.average,
        market_min=distribution.minimum,
        market_max=distribution.maximum,
    )
