from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from mortgage_compare.domain.errors import InternalError
from mortgage_compare.domain.market import MarketDistribution, MarketSource
from mortgage_compare.engine.market_quality import build_distribution


@dataclass(frozen=True)
class MarketSnapshot:
    """Current offers from individual lenders plus their rate distribution."""

    sources: tuple[MarketSource, ...]
    distribution: MarketDistribution

    @classmethod
    def from_sources(cls, sources: Iterable[MarketSource]) -> MarketSnapshot:
        """
        Build a snapshot whose distribution summarises the sources' rates.

        Raises:
            InternalError: If there are no sources (the feed has no data)
        """
        sources = tuple(sources)
        if not sources:
            raise InternalError("Market rate provider returned no rates")
        return cls(sources=sources, distribution=build_distribution(source.rate for source in sources))


class MarketRateProvider(ABC):
    """
    Port for current market rate data.

    Contract (Preconditions):
        - term_years and credit_score are pre-validated by the caller (UseCase)
        - Implementations return at least one source; build snapshots with
          MarketSnapshot.from_sources so an empty feed is an InternalError
    """

    @abstractmethod
    def current_rates(self, term_years: int, credit_score: int) -> MarketSnapshot:
        """
        Fetch current market rates for a loan profile.

        Args:
            term_years: Loan term in years - pre-validated
            credit_score: Borrower credit score - pre-validated

        Returns:
            MarketSnapshot with per-lender sources and the rate distribution

        Raises:
            InternalError: If no market data is available
        """
        ...
