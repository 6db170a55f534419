from __future__ import annotations

from dataclasses import dataclass

from mortgage_compare.domain.comparison import (
    ALL_METRICS,
    LoanRanking,
    Metric,
    MetricScore,
    PairwiseComparison,
)
from mortgage_compare.domain.loan import LoanRecord
from mortgage_compare.engine.comparator import (
    comparison_matrix,
    rank_loans,
    score_across_metrics,
)


@dataclass(frozen=True, slots=True)
class CompareLoanOffersRequest:
    loans: tuple[LoanRecord, ...]
    metrics: tuple[Metric, ...] = ALL_METRICS


@dataclass(frozen=True, slots=True)
class LoanOffersComparison:
    ranking: LoanRanking
    comparisons: list[PairwiseComparison]
    scores: list[MetricScore]

    @property
    def best_loan(self) -> LoanRecord:
        return self.ranking.best


class CompareLoanOffers:
    """
    Use case for comparing two or more loan offers side by side.

    Responsibilities:
    - Validate every offer's terms
    - Rank offers by five-year total cost
    - Build the full pairwise comparison matrix
    - Score offers across the requested metrics
    """

    def execute(self, request: CompareLoanOffersRequest) -> LoanOffersComparison:
        """
        Raises:
            InvalidLoanInput: If fewer than 2 loans are given or any terms are invalid
        """
        for loan in request.loans:
            loan.terms.validate()

        ranking = rank_loans(request.loans)

        return LoanOffersComparison(
            ranking=ranking,
            comparisons=comparison_matrix(request.loans),
            scores=score_across_metrics(request.loans, request.metrics),
        )
