from decimal import Decimal

import pytest

from mortgage_compare.domain.comparison import BetterOption, Metric
from mortgage_compare.domain.loan import (
    ClosingCosts,
    InvalidLoanInput,
    LoanRecord,
    LoanTerms,
    PaymentBreakdown,
)
from mortgage_compare.engine.comparator import (
    compare_loans,
    comparison_matrix,
    head_to_head,
    loan_statistics,
    rank_loans,
    score_across_metrics,
)


def make_loan(
    payment: str,
    closing: str,
    apr: str = "6.875",
    lender: str | None = None,
) -> LoanRecord:
    return LoanRecord(
        terms=LoanTerms(
            loan_amount=Decimal("300000"),
            interest_rate=Decimal("6.0"),
            apr=Decimal(apr),
            term_years=30,
        ),
        payment=PaymentBreakdown(principal_interest=Decimal(payment)),
        closing_costs=ClosingCosts(total=Decimal(closing)),
        lender_name=lender,
    )


# five-year totals: 50000, 48000, 52000
LOAN_A = make_loan("800", "2000", lender="A")
LOAN_B = make_loan("770", "1800", lender="B")
LOAN_C = make_loan("840", "1600", lender="C")


# ============================================================================
# compare_loans
# ============================================================================


def test_compare_prefers_lower_five_year_total():
    result = compare_loans(LOAN_A, LOAN_B)

    assert result.five_year_diff == Decimal("-2000")
    assert result.better_option is BetterOption.LOAN2


def test_compare_deltas_are_second_minus_first():
    a = make_loan("800", "2000", apr="6.5")
    b = make_loan("770", "1800", apr="6.75")

    result = compare_loans(a, b)

    assert result.monthly_payment_diff == Decimal("-30")
    assert result.apr_diff == Decimal("0.25")
    assert result.closing_costs_diff == Decimal("-200")


def test_compare_is_antisymmetric():
    forward = compare_loans(LOAN_A, LOAN_B)
    backward = compare_loans(LOAN_B, LOAN_A)

    assert forward.five_year_diff == -backward.five_year_diff
    assert backward.better_option is BetterOption.LOAN1


def test_compare_tie_favours_first_loan():
    result = compare_loans(make_loan("800", "2000"), make_loan("790", "2600"))

    assert result.five_year_diff == Decimal("0")
    assert result.better_option is BetterOption.LOAN1


@pytest.mark.parametrize(
    ("a", "b"),
    [(LOAN_A, LOAN_B), (LOAN_B, LOAN_A), (LOAN_A, LOAN_C), (LOAN_C, LOAN_B)],
)
def test_better_option_agrees_with_sign_of_five_year_diff(a, b):
    result = compare_loans(a, b)

    expected = BetterOption.LOAN2 if result.five_year_diff < 0 else BetterOption.LOAN1
    assert result.better_option is expected


# ============================================================================
# rank_loans
# ============================================================================


def test_rank_cheapest_first():
    ranking = rank_loans([LOAN_A, LOAN_B, LOAN_C])

    assert [loan.lender_name for loan in ranking.ranked] == ["B", "A", "C"]
    assert ranking.best is LOAN_B


def test_rank_ties_keep_input_order():
    first = make_loan("800", "2000", lender="first")
    second = make_loan("790", "2600", lender="second")

    ranking = rank_loans([first, second])

    assert [loan.lender_name for loan in ranking.ranked] == ["first", "second"]


def test_rank_does_not_mutate_input():
    loans = [LOAN_A, LOAN_B, LOAN_C]

    rank_loans(loans)

    assert loans == [LOAN_A, LOAN_B, LOAN_C]


@pytest.mark.parametrize("loans", [[], [LOAN_A]])
def test_rank_requires_two_loans(loans):
    with pytest.raises(InvalidLoanInput, match="at least 2 loans are required for comparison"):
        rank_loans(loans)


# ============================================================================
# comparison_matrix
# ============================================================================


def test_matrix_covers_every_pair():
    matrix = comparison_matrix([LOAN_A, LOAN_B, LOAN_C])

    assert [(p.first_index, p.second_index) for p in matrix] == [(0, 1), (0, 2), (1, 2)]


def test_matrix_entries_match_pairwise_comparison():
    matrix = comparison_matrix([LOAN_A, LOAN_B, LOAN_C])

    assert matrix[1].result == compare_loans(LOAN_A, LOAN_C)


def test_matrix_requires_two_loans():
    with pytest.raises(InvalidLoanInput, match="at least 2 loans"):
        comparison_matrix([LOAN_A])


# ============================================================================
# score_across_metrics
# ============================================================================


def _scoring_loans() -> list[LoanRecord]:
    # apr: 1 and 3 tie; monthly: 2; closing: 2 and 3 tie; five-year: 2
    return [
        make_loan("2000", "5000", apr="6.5", lender="1"),
        make_loan("1950", "3000", apr="6.8", lender="2"),
        make_loan("2100", "3000", apr="6.5", lender="3"),
    ]


def test_scores_one_point_per_metric_won():
    scores = score_across_metrics(_scoring_loans())

    assert [(s.loan.lender_name, s.score) for s in scores] == [("2", 3), ("3", 2), ("1", 1)]


def test_scores_record_metrics_won():
    scores = score_across_metrics(_scoring_loans())

    assert scores[0].metrics_won == (
        Metric.MONTHLY_PAYMENT,
        Metric.CLOSING_COSTS,
        Metric.FIVE_YEAR_TOTAL,
    )
    assert scores[2].metrics_won == (Metric.APR,)


def test_scores_ties_at_minimum_all_score():
    scores = score_across_metrics(_scoring_loans(), metrics=[Metric.APR])

    assert [(s.loan.lender_name, s.score) for s in scores] == [("1", 1), ("3", 1), ("2", 0)]


def test_scores_require_a_metric():
    with pytest.raises(InvalidLoanInput, match="at least one metric is required"):
        score_across_metrics(_scoring_loans(), metrics=[])


# ============================================================================
# head_to_head
# ============================================================================


def test_head_to_head_breaks_down_every_metric():
    result = head_to_head(LOAN_A, LOAN_B)

    assert [row.metric for row in result.breakdown] == [
        Metric.APR,
        Metric.MONTHLY_PAYMENT,
        Metric.CLOSING_COSTS,
        Metric.FIVE_YEAR_TOTAL,
    ]
    assert [row.difference for row in result.breakdown] == [
        Decimal("0"),
        Decimal("-30"),
        Decimal("-200"),
        Decimal("-2000"),
    ]


def test_head_to_head_reports_both_values():
    row = head_to_head(LOAN_A, LOAN_B).breakdown[1]

    assert row.loan1_value == Decimal("800")
    assert row.loan2_value == Decimal("770")


def test_head_to_head_lower_value_wins_each_metric():
    a = make_loan("800", "2000", apr="6.5")
    b = make_loan("770", "1800", apr="6.75")

    winners = [row.winner for row in head_to_head(a, b).breakdown]

    assert winners == [BetterOption.LOAN1, BetterOption.LOAN2, BetterOption.LOAN2, BetterOption.LOAN2]


def test_head_to_head_equal_values_favour_first_loan():
    apr_row = head_to_head(LOAN_A, LOAN_B).breakdown[0]

    assert apr_row.winner is BetterOption.LOAN1


def test_head_to_head_overall_winner_follows_five_year_total():
    assert head_to_head(LOAN_A, LOAN_B).overall_winner is BetterOption.LOAN2
    assert head_to_head(LOAN_B, LOAN_A).overall_winner is BetterOption.LOAN1


def test_head_to_head_carries_pairwise_comparison():
    result = head_to_head(LOAN_A, LOAN_C)

    assert result.comparison == compare_loans(LOAN_A, LOAN_C)


def test_head_to_head_limited_metrics():
    result = head_to_head(LOAN_A, LOAN_B, metrics=[Metric.CLOSING_COSTS])

    assert [row.metric for row in result.breakdown] == [Metric.CLOSING_COSTS]


# ============================================================================
# loan_statistics
# ============================================================================


def _statistics_loans() -> list[LoanRecord]:
    return [
        make_loan("800", "2000", apr="6.875", lender="1"),
        make_loan("770", "1800", apr="6.5", lender="2"),
        make_loan("840", "1600", apr="7.0", lender="3"),
    ]


def test_statistics_aggregate_aprs():
    stats = loan_statistics(_statistics_loans())

    assert stats.total_loans == 3
    assert stats.average_apr == Decimal("6.792")
    assert stats.lowest_apr == Decimal("6.5")
    assert stats.highest_apr == Decimal("7.0")


def test_statistics_aggregate_payments_and_amounts():
    stats = loan_statistics(_statistics_loans())

    assert stats.average_monthly_payment == Decimal("803.33")
    assert stats.total_loan_amount == Decimal("900000")


def test_statistics_best_loan_has_lowest_apr():
    assert loan_statistics(_statistics_loans()).best_loan.lender_name == "2"


def test_statistics_best_loan_tie_keeps_first():
    loans = [make_loan("800", "2000", lender="1"), make_loan("700", "1000", lender="2")]

    assert loan_statistics(loans).best_loan.lender_name == "1"


def test_statistics_single_loan():
    stats = loan_statistics([LOAN_A])

    assert stats.total_loans == 1
    assert stats.average_apr == stats.lowest_apr == stats.highest_apr == Decimal("6.875")
    assert stats.best_loan is LOAN_A


def test_statistics_require_a_loan():
    with pytest.raises(InvalidLoanInput, match="at least 1 loan is required"):
        loan_statistics([])
