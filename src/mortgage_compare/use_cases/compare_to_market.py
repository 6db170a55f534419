"""Compare a borrower's quoted APR to current market rates."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal

from mortgage_compare.domain.errors import InternalError
from mortgage_compare.domain.loan import (
    DEFAULT_CREDIT_SCORE,
    MAX_APR,
    MAX_LOAN_AMOUNT,
    MAX_PROPERTY_VALUE,
    InvalidLoanInput,
    require_credit_score,
    require_number,
    require_term,
)
from mortgage_compare.domain.market import MarketComparison, RateQuality
from mortgage_compare.domain.money import TENTH, WHOLE, round_half_up
from mortgage_compare.engine.amortization import FIVE_YEAR_MONTHS, MONTHS_PER_YEAR, monthly_payment
from mortgage_compare.engine.estimators import PMI_LTV_THRESHOLD, loan_to_value, points_breakeven_months
from mortgage_compare.engine.market_quality import compare_to_market
from mortgage_compare.ports.market_rate_provider import MarketRateProvider, MarketSnapshot

SIGNIFICANT_SAVINGS_PER_MONTH = Decimal("100")
SIGNIFICANT_APR_GAP = Decimal("0.5")
# LTVs just above the PMI threshold, where a slightly larger down payment drops PMI
NEAR_PMI_LTV_CEILING = Decimal("85")


@dataclass(frozen=True, slots=True)
class MarketCompareRequest:
    loan_amount: Decimal
    apr: Decimal
    term_years: int
    current_monthly_payment: Decimal
    credit_score: int = DEFAULT_CREDIT_SCORE
    points_paid: Decimal | None = None
    property_value: Decimal | None = None

    def validate(self) -> None:
        if not 0 < require_number(self.loan_amount, "loan_amount") <= MAX_LOAN_AMOUNT:
            raise InvalidLoanInput.for_field(
                "loan_amount", f"loan_amount must be > 0 and <= {MAX_LOAN_AMOUNT}"
            )
        if not 0 < require_number(self.apr, "apr") < MAX_APR:
            raise InvalidLoanInput.for_field("apr", f"apr must be > 0 and < {MAX_APR}")
        require_term(self.term_years)
        if require_number(self.current_monthly_payment, "current_monthly_payment") <= 0:
            raise InvalidLoanInput.for_field("current_monthly_payment", "current_monthly_payment must be > 0")
        require_credit_score(self.credit_score)
        if self.points_paid is not None and require_number(self.points_paid, "points_paid") < 0:
            raise InvalidLoanInput.for_field("points_paid", "points_paid must be >= 0")
        if self.property_value is not None:
            if not 0 < require_number(self.property_value, "property_value") <= MAX_PROPERTY_VALUE:
                raise InvalidLoanInput.for_field(
                    "property_value", f"property_value must be > 0 and <= {MAX_PROPERTY_VALUE}"
                )


@dataclass(frozen=True, slots=True)
class PotentialSavings:
    monthly: Decimal
    five_year: Decimal
    lifetime: Decimal


@dataclass(frozen=True, slots=True)
class MarketReport:
    comparison: MarketComparison
    snapshot: MarketSnapshot
    potential_savings: PotentialSavings
    recommendations: tuple[str, ...]


def points_recommendation(loan_amount: Decimal, points_paid: Decimal, monthly_savings: Decimal) -> str:
    """Cost of the discount points paid and the months of savings needed to recover it."""
    points_cost = loan_amount * points_paid / Decimal("100")
    breakeven = points_breakeven_months(points_cost, monthly_savings)
    recovered = "never reached without monthly savings" if math.isinf(breakeven) else f"{breakeven} months"
    return (
        f"You paid {points_paid} points (${round_half_up(points_cost, WHOLE)}). "
        f"Breakeven: {recovered}."
    )


def market_recommendations(
    comparison: MarketComparison,
    monthly_savings: Decimal,
    request: MarketCompareRequest | None = None,
) -> list[str]:
    """
    Advice on the market position first, then notes on points and LTV when
    the request carries points or a property value.
    """
    recommendations = []

    if comparison.quality in (RateQuality.POOR, RateQuality.FAIR):
        recommendations.append(
            "Your rate is above market average. Consider shopping around for better offers."
        )
        if monthly_savings > SIGNIFICANT_SAVINGS_PER_MONTH:
            dollars = round_half_up(monthly_savings, WHOLE)
            recommendations.append(
                f"You could save approximately ${dollars}/month with a better rate."
            )

    if comparison.quality is RateQuality.EXCELLENT:
        recommendations.append("Your rate is excellent! This is better than most market offers.")

    if comparison.difference > SIGNIFICANT_APR_GAP:
        recommendations.append(
            "Your APR is significantly higher than market average. Request a breakdown of fees."
        )

    if request is None:
        return recommendations

    if request.points_paid:
        recommendations.append(points_recommendation(request.loan_amount, request.points_paid, monthly_savings))

    ltv = loan_to_value(request.loan_amount, request.property_value)
    if ltv is not None and PMI_LTV_THRESHOLD < ltv < NEAR_PMI_LTV_CEILING:
        recommendations.append(
            f"Your LTV is {round_half_up(ltv, TENTH)}%. "
            "Consider a larger down payment to eliminate PMI and get better rates."
        )

    return recommendations


class CompareToMarket:
    """
    Use case for benchmarking a quoted APR against the market.

    Responsibilities:
    - Fetch current rates for the loan profile from the provider
    - Place the APR on the market quality ladder and percentile scale
    - Estimate savings at the best market rate
    - Produce textual recommendations
    """

    def __init__(self, market_rate_provider: MarketRateProvider) -> None:
        self._provider = market_rate_provider

    def execute(self, request: MarketCompareRequest) -> MarketReport:
        """
        Raises:
            InvalidLoanInput: If the request is invalid
            InternalError: If the provider returns no market rates
        """
        request.validate()

        snapshot = self._provider.current_rates(request.term_years, request.credit_score)
        if not snapshot.sources:
            raise InternalError("Market rate provider returned no rates", term_years=request.term_years)

        comparison = compare_to_market(request.apr, snapshot.distribution)

        best_monthly = monthly_payment(request.loan_amount, snapshot.distribution.minimum, request.term_years)
        monthly_savings = request.current_monthly_payment - best_monthly

        return MarketReport(
            comparison=comparison,
            snapshot=snapshot,
            potential_savings=PotentialSavings(
                monthly=round_half_up(monthly_savings),
                five_year=round_half_up(monthly_savings * FIVE_YEAR_MONTHS),
                lifetime=round_half_up(monthly_savings * request.term_years * MONTHS_PER_YEAR),
            ),
            recommendations=tuple(market_recommendations(comparison, monthly_savings, request)),
        )
