from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from mortgage_compare.domain.loan import LoanRecord


class BetterOption(str, Enum):
    LOAN1 = "loan1"
    LOAN2 = "loan2"


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Deltas for an ordered pair (A, B), each computed as B - A."""

    monthly_payment_diff: Decimal
    apr_diff: Decimal
    closing_costs_diff: Decimal
    five_year_diff: Decimal
    better_option: BetterOption


@dataclass(frozen=True, slots=True)
class PairwiseComparison:
    first_index: int
    second_index: int
    result: ComparisonResult


@dataclass(frozen=True, slots=True)
class LoanRanking:
    ranked: tuple[LoanRecord, ...]

    @property
    def best(self) -> LoanRecord:
        return self.ranked[0]


class Metric(str, Enum):
    APR = "apr"
    MONTHLY_PAYMENT = "monthly_payment"
    CLOSING_COSTS = "closing_costs"
    FIVE_YEAR_TOTAL = "five_year_total"

    def value_of(self, loan: LoanRecord) -> Decimal:
        if self is Metric.APR:
            return loan.terms.apr
        if self is Metric.MONTHLY_PAYMENT:
            return loan.payment.total
        if self is Metric.CLOSING_COSTS:
            return loan.closing_costs.total
        return loan.five_year_total


ALL_METRICS = (
    Metric.APR,
    Metric.MONTHLY_PAYMENT,
    Metric.CLOSING_COSTS,
    Metric.FIVE_YEAR_TOTAL,
)


@dataclass(frozen=True, slots=True)
class MetricScore:
    loan: LoanRecord
    score: int
    metrics_won: tuple[Metric, ...]


@dataclass(frozen=True, slots=True)
class MetricBreakdown:
    """One metric of a two-loan comparison; difference is loan2 - loan1."""

    metric: Metric
    loan1_value: Decimal
    loan2_value: Decimal
    difference: Decimal
    winner: BetterOption


@dataclass(frozen=True, slots=True)
class HeadToHead:
    comparison: ComparisonResult
    breakdown: tuple[MetricBreakdown, ...]

    @property
    def overall_winner(self) -> BetterOption:
        return self.comparison.better_option


@dataclass(frozen=True, slots=True)
class LoanStatistics:
    """Aggregates over a set of offers; best_loan is the one with the lowest APR."""

    total_loans: int
    average_apr: Decimal
    lowest_apr: Decimal
    highest_apr: Decimal
    average_monthly_payment: Decimal
    total_loan_amount: Decimal
    best_loan: LoanRecord
