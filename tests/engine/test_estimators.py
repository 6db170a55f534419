import math
from decimal import Decimal

import pytest

from mortgage_compare.domain.loan import InvalidLoanInput
from mortgage_compare.domain.refinance import RefinanceRecommendation
from mortgage_compare.engine.estimators import (
    PmiTier,
    classify_refinance,
    estimate_pmi,
    loan_to_value,
    points_breakeven_months,
    refinance_breakeven_months,
)


# ============================================================================
# loan_to_value
# ============================================================================


def test_ltv_percentage():
    assert loan_to_value(Decimal("280000"), Decimal("350000")) == Decimal("80.00")


def test_ltv_rounded_to_two_places():
    assert loan_to_value(Decimal("280000"), Decimal("300000")) == Decimal("93.33")


@pytest.mark.parametrize("property_value", [None, Decimal("0"), 0])
def test_ltv_undefined_without_property_value(property_value):
    assert loan_to_value(Decimal("280000"), property_value) is None


def test_ltv_rejects_negative_values():
    with pytest.raises(InvalidLoanInput, match="must not be negative"):
        loan_to_value(Decimal("-1"), Decimal("100000"))


# ============================================================================
# estimate_pmi
# ============================================================================


def test_pmi_top_tier():
    assert estimate_pmi(Decimal("100000"), Decimal("85"), 770) == Decimal("25.00")


@pytest.mark.parametrize(
    ("credit_score", "expected"),
    [
        (760, Decimal("25.00")),
        (759, Decimal("41.67")),
        (700, Decimal("41.67")),
        (699, Decimal("58.33")),
        (680, Decimal("58.33")),
        (679, Decimal("83.33")),
        (300, Decimal("83.33")),
    ],
)
def test_pmi_tier_boundaries(credit_score, expected):
    assert estimate_pmi(Decimal("100000"), Decimal("90"), credit_score) == expected


@pytest.mark.parametrize("ltv", [Decimal("80"), Decimal("79.99"), Decimal("50")])
def test_no_pmi_at_or_below_eighty_ltv(ltv):
    assert estimate_pmi(Decimal("100000"), ltv, 650) == Decimal("0")


def test_no_pmi_when_ltv_unknown():
    assert estimate_pmi(Decimal("100000"), None, 650) == Decimal("0")


def test_pmi_with_custom_tiers():
    tiers = (PmiTier(min_score=0, annual_rate=Decimal("0.012")),)

    assert estimate_pmi(Decimal("100000"), Decimal("95"), 800, tiers) == Decimal("100.00")


def test_pmi_rejects_credit_score_out_of_range():
    with pytest.raises(InvalidLoanInput, match="credit_score must be between 300 and 850"):
        estimate_pmi(Decimal("100000"), Decimal("90"), 900)


@pytest.mark.parametrize("loan_amount", [Decimal("0"), Decimal("-100000")])
def test_pmi_rejects_non_positive_loan_amount(loan_amount):
    with pytest.raises(InvalidLoanInput, match="loan_amount must be > 0"):
        estimate_pmi(loan_amount, Decimal("85"), 770)


# ============================================================================
# points_breakeven_months
# ============================================================================


def test_points_breakeven_rounds_up():
    assert points_breakeven_months(Decimal("1000"), Decimal("300")) == 4


def test_points_breakeven_exact_division():
    assert points_breakeven_months(Decimal("3000"), Decimal("100")) == 30


@pytest.mark.parametrize("savings", [Decimal("0"), Decimal("-5")])
def test_points_never_recovered_without_savings(savings):
    assert points_breakeven_months(Decimal("1000"), savings) == math.inf


# ============================================================================
# refinance_breakeven_months / classify_refinance
# ============================================================================


def test_refinance_breakeven():
    assert refinance_breakeven_months(Decimal("3600"), Decimal("150")) == 24


def test_refinance_breakeven_rounds_up():
    assert refinance_breakeven_months(Decimal("3601"), Decimal("150")) == 25


@pytest.mark.parametrize("savings", [Decimal("0"), Decimal("-25")])
def test_refinance_breakeven_none_without_savings(savings):
    assert refinance_breakeven_months(Decimal("3600"), savings) is None


def test_classify_recommended_at_threshold():
    assert classify_refinance(36) is RefinanceRecommendation.RECOMMENDED


def test_classify_consider_past_threshold():
    assert classify_refinance(37) is RefinanceRecommendation.CONSIDER


def test_classify_not_recommended_without_breakeven():
    assert classify_refinance(None) is RefinanceRecommendation.NOT_RECOMMENDED


def test_classify_uses_custom_threshold():
    assert classify_refinance(40, recommended_max_months=48) is RefinanceRecommendation.RECOMMENDED


def test_thirty_six_month_breakeven_is_recommended():
    months = refinance_breakeven_months(Decimal("5400"), Decimal("150"))

    assert months == 36
    assert classify_refinance(months) is RefinanceRecommendation.RECOMMENDED


# ============================================================================
# Negative costs
# ============================================================================


def test_points_breakeven_rejects_negative_cost():
    with pytest.raises(InvalidLoanInput, match="points_cost must be >= 0") as exc_info:
        points_breakeven_months(Decimal("-1000"), Decimal("50"))

    assert exc_info.value.errors[0]["field"] == "points_cost"


def test_refinance_breakeven_rejects_negative_closing_costs():
    with pytest.raises(InvalidLoanInput, match="new_closing_costs must be >= 0"):
        refinance_breakeven_months(-3600, 150)


def test_free_points_recovered_immediately():
    assert points_breakeven_months(Decimal("0"), Decimal("50")) == 0


def test_classify_rejects_negative_breakeven():
    with pytest.raises(InvalidLoanInput, match="breakeven_months must be >= 0"):
        classify_refinance(-24)
