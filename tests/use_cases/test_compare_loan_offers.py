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
from mortgage_compare.use_cases.compare_loan_offers import (
    CompareLoanOffers,
    CompareLoanOffersRequest,
)


def _offer(lender: str, payment: str, closing: str, apr: str = "6.875", term_years: int = 30) -> LoanRecord:
    return LoanRecord(
        terms=LoanTerms(
            loan_amount=Decimal("280000"),
            interest_rate=Decimal("6.5"),
            apr=Decimal(apr),
            term_years=term_years,
        ),
        payment=PaymentBreakdown(principal_interest=Decimal(payment)),
        closing_costs=ClosingCosts(total=Decimal(closing)),
        lender_name=lender,
    )


def test_ranks_offers_and_picks_best():
    offers = (
        _offer("A", "800", "2000"),
        _offer("B", "770", "1800"),
        _offer("C", "840", "1600"),
    )

    result = CompareLoanOffers().execute(CompareLoanOffersRequest(loans=offers))

    assert [loan.lender_name for loan in result.ranking.ranked] == ["B", "A", "C"]
    assert result.best_loan.lender_name == "B"


def test_builds_full_pairwise_matrix():
    offers = (_offer("A", "800", "2000"), _offer("B", "770", "1800"), _offer("C", "840", "1600"))

    result = CompareLoanOffers().execute(CompareLoanOffersRequest(loans=offers))

    assert len(result.comparisons) == 3
    first = result.comparisons[0]
    assert (first.first_index, first.second_index) == (0, 1)
    assert first.result.five_year_diff == Decimal("-2000")
    assert first.result.better_option is BetterOption.LOAN2


def test_scores_on_requested_metrics_only():
    offers = (_offer("A", "800", "2000", apr="7.0"), _offer("B", "770", "1800", apr="6.9"))

    result = CompareLoanOffers().execute(
        CompareLoanOffersRequest(loans=offers, metrics=(Metric.APR,))
    )

    assert [(s.loan.lender_name, s.score) for s in result.scores] == [("B", 1), ("A", 0)]


def test_rejects_single_offer():
    with pytest.raises(InvalidLoanInput, match="at least 2 loans are required for comparison"):
        CompareLoanOffers().execute(CompareLoanOffersRequest(loans=(_offer("A", "800", "2000"),)))


def test_rejects_offer_with_invalid_terms():
    offers = (_offer("A", "800", "2000"), _offer("B", "770", "1800", term_years=40))

    with pytest.raises(InvalidLoanInput, match="term_years must be one of"):
        CompareLoanOffers().execute(CompareLoanOffersRequest(loans=offers))
