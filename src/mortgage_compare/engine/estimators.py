from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal

from mortgage_compare.domain.loan import (
    InvalidLoanInput,
    require_credit_score,
    require_number,
)
from mortgage_compare.domain.money import PERCENT, round_half_up
from mortgage_compare.domain.refinance import (
    DEFAULT_RECOMMENDED_MAX_MONTHS,
    RefinanceRecommendation,
)

PMI_LTV_THRESHOLD = Decimal("80")


@dataclass(frozen=True, slots=True)
class PmiTier:
    """Annual PMI rate (as a fraction of the loan) for scores at or above min_score."""

    min_score: int
    annual_rate: Decimal


# Evaluated top to bottom; the last tier catches every remaining score
DEFAULT_PMI_TIERS: tuple[PmiTier, ...] = (
    PmiTier(min_score=760, annual_rate=Decimal("0.003")),
    PmiTier(min_score=700, annual_rate=Decimal("0.005")),
    PmiTier(min_score=680, annual_rate=Decimal("0.007")),
    PmiTier(min_score=0, annual_rate=Decimal("0.01")),
)


def loan_to_value(loan_amount: Decimal | int, property_value: Decimal | int | None) -> Decimal | None:
    """
    Loan amount as a percentage of property value, rounded to 2 places.

    Returns None when the property value is missing or zero.
    """
    amount = require_number(loan_amount, "loan_amount")
    if property_value is None:
        return None

    value = require_number(property_value, "property_value")
    if value == 0:
        return None
    if amount < 0 or value < 0:
        raise InvalidLoanInput("loan_amount and property_value must not be negative")

    return round_half_up(amount / value * Decimal("100"), PERCENT)


def estimate_pmi(
    loan_amount: Decimal | int,
    ltv: Decimal | int | None,
    credit_score: int,
    tiers: tuple[PmiTier, ...] = DEFAULT_PMI_TIERS,
) -> Decimal:
    """
    Monthly private mortgage insurance estimate, rounded to cents.

    Zero at or below 80% LTV (or when LTV is unknown).

    Raises:
        InvalidLoanInput: If loan_amount <= 0 or the credit score is out of range
    """
    amount = require_number(loan_amount, "loan_amount")
    if amount <= 0:
        raise InvalidLoanInput.for_field("loan_amount", "loan_amount must be > 0")
    score = require_credit_score(credit_score)
    if ltv is None or require_number(ltv, "ltv") <= PMI_LTV_THRESHOLD:
        return Decimal("0")

    for tier in tiers:
        if score >= tier.min_score:
            return round_half_up(amount * tier.annual_rate / Decimal("12"))

    raise InvalidLoanInput.for_field("credit_score", f"no PMI tier covers credit_score {score}")


def points_breakeven_months(points_cost: Decimal | int, monthly_savings: Decimal | int) -> int | float:
    """
    Months of savings needed to recover the cost of discount points.

    Returns math.inf when the savings are not positive (never recovered).

    Raises:
        InvalidLoanInput: If points_cost is negative
    """
    cost = require_number(points_cost, "points_cost")
    if cost < 0:
        raise InvalidLoanInput.for_field("points_cost", "points_cost must be >= 0")
    savings = require_number(monthly_savings, "monthly_savings")
    if savings <= 0:
        return math.inf
    return math.ceil(cost / savings)


def refinance_breakeven_months(new_closing_costs: Decimal | int, monthly_savings: Decimal | int) -> int | None:
    """
    Months of savings needed to recover refinance closing costs.

    Returns None when the savings are not positive: the refinance never pays
    for itself.

    Raises:
        InvalidLoanInput: If new_closing_costs is negative
    """
    cost = require_number(new_closing_costs, "new_closing_costs")
    if cost < 0:
        raise InvalidLoanInput.for_field("new_closing_costs", "new_closing_costs must be >= 0")
    savings = require_number(monthly_savings, "monthly_savings")
    if savings <= 0:
        return None
    return math.ceil(cost / savings)


def classify_refinance(
    breakeven_months: int | None,
    recommended_max_months: int = DEFAULT_RECOMMENDED_MAX_MONTHS,
) -> RefinanceRecommendation:
    if breakeven_months is None:
        return RefinanceRecommendation.NOT_RECOMMENDED
    if breakeven_months < 0:
        raise InvalidLoanInput.for_field("breakeven_months", "breakeven_months must be >= 0")
    if breakeven_months <= recommended_max_months:
        return RefinanceRecommendation.RECOMMENDED
    return RefinanceRecommendation.CONSIDER
