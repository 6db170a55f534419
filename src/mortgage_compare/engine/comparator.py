from __future__ import annotations

from decimal import Decimal
from itertools import combinations
from typing import Sequence

from mortgage_compare.domain.comparison import (
    ALL_METRICS,
    BetterOption,
    ComparisonResult,
    HeadToHead,
    LoanRanking,
    LoanStatistics,
    Metric,
    MetricBreakdown,
    MetricScore,
    PairwiseComparison,
)
from mortgage_compare.domain.loan import InvalidLoanInput, LoanRecord
from mortgage_compare.domain.money import RATE, round_half_up


def _require_at_least_two(loans: Sequence[LoanRecord]) -> None:
    if len(loans) < 2:
        raise InvalidLoanInput.for_field("loans", "at least 2 loans are required for comparison")


def compare_loans(a: LoanRecord, b: LoanRecord) -> ComparisonResult:
    """
    Compare loan B against loan A; every delta is B - A.

    The better option is whichever has the lower five-year total. Equal totals
    favour A.
    """
    five_year_diff = b.five_year_total - a.five_year_total

    return ComparisonResult(
        monthly_payment_diff=b.payment.total - a.payment.total,
        apr_diff=b.terms.apr - a.terms.apr,
        closing_costs_diff=b.closing_costs.total - a.closing_costs.total,
        five_year_diff=five_year_diff,
        better_option=BetterOption.LOAN2 if five_year_diff < 0 else BetterOption.LOAN1,
    )


def rank_loans(loans: Sequence[LoanRecord]) -> LoanRanking:
    """Order loans by five-year total, cheapest first; ties keep input order."""
    _require_at_least_two(loans)
    return LoanRanking(ranked=tuple(sorted(loans, key=lambda loan: loan.five_year_total)))


def comparison_matrix(loans: Sequence[LoanRecord]) -> list[PairwiseComparison]:
    """Every unordered pair (i < j), each compared independently."""
    _require_at_least_two(loans)
    return [
        PairwiseComparison(first_index=i, second_index=j, result=compare_loans(loans[i], loans[j]))
        for i, j in combinations(range(len(loans)), 2)
    ]


def score_across_metrics(
    loans: Sequence[LoanRecord],
    metrics: Sequence[Metric] = ALL_METRICS,
) -> list[MetricScore]:
    """
    One point per metric for every loan at that metric's minimum.

    Ties at the minimum all score. Results are sorted by score, highest first,
    keeping input order among equal scores.
    """
    _require_at_least_two(loans)
    if not metrics:
        raise InvalidLoanInput.for_field("metrics", "at least one metric is required")

    won: list[list[Metric]] = [[] for _ in loans]
    for metric in metrics:
        values = [metric.value_of(loan) for loan in loans]
        best = min(values)
        for index, value in enumerate(values):
            if value == best:
                won[index].append(metric)

    scores = [
        MetricScore(loan=loan, score=len(metrics_won), metrics_won=tuple(metrics_won))
        for loan, metrics_won in zip(loans, won)
    ]
    return sorted(scores, key=lambda s: s.score, reverse=True)


def head_to_head(a: LoanRecord, b: LoanRecord, metrics: Sequence[Metric] = ALL_METRICS) -> HeadToHead:
    """
    Compare two loans metric by metric, plus the overall five-year verdict.

    Each metric is won by the lower value; equal values favour A, like the
    overall verdict.
    """
    breakdown = []
    for metric in metrics:
        first, second = metric.value_of(a), metric.value_of(b)
        breakdown.append(
            MetricBreakdown(
                metric=metric,
                loan1_value=first,
                loan2_value=second,
                difference=second - first,
                winner=BetterOption.LOAN2 if second < first else BetterOption.LOAN1,
            )
        )

    return HeadToHead(comparison=compare_loans(a, b), breakdown=tuple(breakdown))


def loan_statistics(loans: Sequence[LoanRecord]) -> LoanStatistics:
    """
    Summary figures across offers.

    The average APR is rounded to 3 places and the average payment to cents.
    The best loan has the lowest APR; ties keep the earliest offer.
    """
    if not loans:
        raise InvalidLoanInput.for_field("loans", "at least 1 loan is required for statistics")

    aprs = [loan.terms.apr for loan in loans]
    payments = [loan.payment.total for loan in loans]
    count = Decimal(len(loans))

    return LoanStatistics(
        total_loans=len(loans),
        average_apr=round_half_up(sum(aprs, Decimal("0")) / count, RATE),
        lowest_apr=min(aprs),
        highest_apr=max(aprs),
        average_monthly_payment=round_half_up(sum(payments, Decimal("0")) / count),
        total_loan_amount=sum((loan.terms.loan_amount for loan in loans), Decimal("0")),
        best_loan=min(loans, key=lambda loan: loan.terms.apr),
    )
