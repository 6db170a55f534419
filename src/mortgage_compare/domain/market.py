from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class RateQuality(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


@dataclass(frozen=True, slots=True)
class MarketDistribution:
    """
    Reference rates with their summary statistics.

    Build one with ``engine.market_quality.build_distribution`` so the
    statistics are always derived from ``rates``.
    """

    rates: tuple[Decimal, ...]
    average: Decimal
    minimum: Decimal
    maximum: Decimal
    median: Decimal


@dataclass(frozen=True, slots=True)
class MarketSource:
    provider: str
    rate: Decimal
    apr: Decimal
    points: Decimal


@dataclass(frozen=True, slots=True)
class MarketComparison:
    quality: RateQuality
    difference: Decimal
    percentile: int
    better_than_percent: int
    market_average: Decimal
    market_min: Decimal
    market_max: Decimal
