from __future__ import annotations

from decimal import Decimal

from mortgage_compare.domain.fees import FeeAnalysis, FeeLevel
from mortgage_compare.domain.loan import MAX_APR, InvalidLoanInput, require_number
from mortgage_compare.domain.money import TENTH, round_half_up
from mortgage_compare.engine.amortization import monthly_payment

# Upper bounds (exclusive) of the APR - rate gap for each level; anything above is HIGH
FEE_LEVEL_CEILINGS: tuple[tuple[Decimal, FeeLevel], ...] = (
    (Decimal("0.125"), FeeLevel.EXCELLENT),
    (Decimal("0.25"), FeeLevel.GOOD),
    (Decimal("0.5"), FeeLevel.FAIR),
)

WIDE_APR_GAP = Decimal("0.5")
REASONABLE_APR_GAP = Decimal("0.25")
HIGH_FEE_PERCENT = Decimal("3")


def classify_fee_level(apr_difference: Decimal | int) -> FeeLevel:
    """
    Read the APR - rate gap. The first matching band wins:

    - Excellent: under 0.125
    - Good: under 0.25
    - Fair: under 0.5
    - High: 0.5 and above
    """
    gap = require_number(apr_difference, "apr_difference")
    for ceiling, level in FEE_LEVEL_CEILINGS:
        if gap < ceiling:
            return level
    return FeeLevel.HIGH


def fee_recommendations(apr_difference: Decimal, fee_percent: Decimal) -> list[str]:
    recommendations = []

    if apr_difference > WIDE_APR_GAP:
        recommendations.append("Request an itemized breakdown of all fees and closing costs.")
        recommendations.append(
            "Ask your lender to explain why the APR is significantly higher than the interest rate."
        )

    if fee_percent > HIGH_FEE_PERCENT:
        recommendations.append(
            f"Closing costs are {round_half_up(fee_percent, TENTH)}% of loan amount, which is high. "
            "Negotiate or shop around."
        )

    if apr_difference < REASONABLE_APR_GAP:
        recommendations.append("Your fees appear reasonable relative to your interest rate.")

    return recommendations


def analyze_fees(
    loan_amount: Decimal | int,
    interest_rate: Decimal | int,
    apr: Decimal | int,
    term_years: int,
    closing_costs: Decimal | int = Decimal("0"),
) -> FeeAnalysis:
    """
    Estimate how much fees weigh on a loan from its APR and note rate.

    The payment at the APR is an approximation of the cost including fees;
    the difference from the note-rate payment is what the fees add per month.

    Raises:
        InvalidLoanInput: If apr < interest_rate, closing_costs is negative, or
            either rate is out of range for the amortization formula
    """
    amount = require_number(loan_amount, "loan_amount")
    note_rate = require_number(interest_rate, "interest_rate")
    quoted_apr = require_number(apr, "apr")
    costs = require_number(closing_costs, "closing_costs")

    if quoted_apr < note_rate:
        raise InvalidLoanInput.for_field("apr", "apr must be >= interest_rate")
    if costs < 0:
        raise InvalidLoanInput.for_field("closing_costs", "closing_costs must be >= 0")

    payment_at_rate = monthly_payment(amount, note_rate, term_years)
    payment_at_apr = monthly_payment(amount, quoted_apr, term_years, max_rate=MAX_APR)

    apr_difference = quoted_apr - note_rate
    fee_percent = costs / amount * Decimal("100")

    return FeeAnalysis(
        interest_rate=note_rate,
        apr=quoted_apr,
        apr_difference=apr_difference,
        level=classify_fee_level(apr_difference),
        monthly_payment_at_rate=round_half_up(payment_at_rate),
        monthly_payment_at_apr=round_half_up(payment_at_apr),
        closing_costs=costs,
        fee_percent=fee_percent,
        recommendations=tuple(fee_recommendations(apr_difference, fee_percent)),
    )
