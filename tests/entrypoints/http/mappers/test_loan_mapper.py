"""
Test suite for LoanMapper.

- Converts request DTOs to domain requests (str → Decimal)
- Applies the default credit score when the request omits one
- Converts domain results to response DTOs (Decimal → str)
- Reports offers by their position in the request
- Formats APR breakdown rows to 3 places and money rows to cents
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from mortgage_compare.domain.comparison import ALL_METRICS, BetterOption, Metric
from mortgage_compare.domain.errors import ValidationError
from mortgage_compare.domain.loan import ClosingCosts, LoanRecord, LoanTerms, PaymentBreakdown
from mortgage_compare.engine.amortization import AmortizationYear
from mortgage_compare.entrypoints.http.dtos.loans import (
    CompareLoansRequestDTO,
    CompareTwoLoansRequestDTO,
    LoanDetailsDTO,
    LoanEstimateRequestDTO,
    LoanOfferDTO,
    LoanStatisticsRequestDTO,
)
from mortgage_compare.entrypoints.http.mappers.loan_mapper import LoanMapper
from mortgage_compare.use_cases.build_loan_estimate import LoanEstimate
from mortgage_compare.use_cases.compare_loan_offers import CompareLoanOffers
from mortgage_compare.use_cases.compare_two_loans import CompareTwoLoans
from mortgage_compare.use_cases.summarize_loans import SummarizeLoans


def _details(**overrides) -> LoanDetailsDTO:
    values = dict(
        loan_amount="280000.00",
        interest_rate="6.75",
        apr="6.875",
        loan_term=30,
        property_value="350000.00",
    )
    values.update(overrides)
    return LoanDetailsDTO(**values)


# ==============================================================================
# to_estimate_request() - DTO → Domain
# ==============================================================================


def test_to_estimate_request_converts_strings_to_decimal() -> None:
    dto = LoanEstimateRequestDTO(
        loan_details=_details(credit_score=700),
        closing_costs={"total": "8500.00", "loan_costs": "4200.00", "lender_credits": "-500.00"},
        escrow="450.00",
        lender_name="Lender A",
    )

    request = LoanMapper.to_estimate_request(dto)

    assert request.terms == LoanTerms(
        loan_amount=Decimal("280000.00"),
        interest_rate=Decimal("6.75"),
        apr=Decimal("6.875"),
        term_years=30,
        property_value=Decimal("350000.00"),
        credit_score=700,
    )
    assert request.closing_costs.total == Decimal("8500.00")
    assert request.closing_costs.lender_credits == Decimal("-500.00")
    assert request.escrow == Decimal("450.00")
    assert request.principal_interest is None
    assert request.mortgage_insurance is None
    assert request.lender_name == "Lender A"


def test_to_estimate_request_applies_default_credit_score() -> None:
    dto = LoanEstimateRequestDTO(loan_details=_details())

    request = LoanMapper.to_estimate_request(dto, default_credit_score=680)

    assert request.terms.credit_score == 680


def test_to_estimate_request_keeps_stated_payment() -> None:
    dto = LoanEstimateRequestDTO(loan_details=_details(), principal_interest="1900.00", mortgage_insurance="95")

    request = LoanMapper.to_estimate_request(dto)

    assert request.principal_interest == Decimal("1900.00")
    assert request.mortgage_insurance == Decimal("95")


# ==============================================================================
# to_estimate_response() - Domain → DTO
# ==============================================================================


def test_to_estimate_response_formats_decimals() -> None:
    record = LoanRecord(
        terms=LoanTerms(
            loan_amount=Decimal("280000"),
            interest_rate=Decimal("6.75"),
            apr=Decimal("6.875"),
            term_years=30,
            property_value=Decimal("300000"),
        ),
        payment=PaymentBreakdown(
            principal_interest=Decimal("1816.07"),
            mortgage_insurance=Decimal("116.67"),
            escrow=Decimal("450"),
        ),
        closing_costs=ClosingCosts(total=Decimal("8500")),
    )
    estimate = LoanEstimate(
        record=record,
        ltv=Decimal("93.33"),
        total_interest=Decimal("373785.20"),
        implied_apr=Decimal("4.5"),
    )

    dto = LoanMapper.to_estimate_response(estimate)

    assert dto.loan_details.loan_amount == "280000.00"
    assert dto.loan_details.interest_rate == "6.750"
    assert dto.monthly_payment.total == "2382.74"
    assert dto.closing_costs.total == "8500.00"
    assert dto.ltv == "93.33"
    assert dto.implied_apr == "4.500"
    assert dto.five_year_total == "151464.40"
    assert dto.schedule is None


def test_to_schedule_formats_rows() -> None:
    schedule = (
        AmortizationYear(
            year=1,
            principal_paid=Decimal("3071.5"),
            interest_paid=Decimal("18721.34"),
            ending_balance=Decimal("276928.5"),
        ),
    )

    rows = LoanMapper.to_schedule(schedule)

    assert rows is not None
    assert rows[0].model_dump() == {
        "year": 1,
        "principal_paid": "3071.50",
        "interest_paid": "18721.34",
        "ending_balance": "276928.50",
    }


def test_to_estimate_request_passes_schedule_flag() -> None:
    dto = LoanEstimateRequestDTO(loan_details=_details(), include_schedule=True)

    assert LoanMapper.to_estimate_request(dto).include_schedule is True


# ==============================================================================
# Offer comparison
# ==============================================================================


def _compare_dto(metrics: list[Metric] | None = None) -> CompareLoansRequestDTO:
    return CompareLoansRequestDTO(
        loans=[
            LoanOfferDTO(
                loan_details=_details(),
                principal_interest="800.00",
                closing_costs={"total": "2000.00"},
                lender_name="A",
            ),
            LoanOfferDTO(
                loan_details=_details(),
                principal_interest="770.00",
                closing_costs={"total": "1800.00"},
                lender_name="B",
            ),
        ],
        metrics=metrics,
    )


def test_to_compare_request_builds_loan_records() -> None:
    request = LoanMapper.to_compare_request(_compare_dto())

    assert len(request.loans) == 2
    assert request.loans[1].payment.principal_interest == Decimal("770.00")
    assert request.loans[1].closing_costs.total == Decimal("1800.00")
    assert request.loans[1].lender_name == "B"
    assert request.metrics == ALL_METRICS


def test_to_compare_request_keeps_requested_metrics() -> None:
    request = LoanMapper.to_compare_request(_compare_dto(metrics=[Metric.APR]))

    assert request.metrics == (Metric.APR,)


def test_to_compare_response_reports_request_positions() -> None:
    request = LoanMapper.to_compare_request(_compare_dto())
    result = CompareLoanOffers().execute(request)

    dto = LoanMapper.to_compare_response(request, result)

    assert [r.index for r in dto.ranking] == [1, 0]
    assert dto.best_loan.lender_name == "B"
    assert dto.best_loan.five_year_total == "48000.00"
    assert dto.comparisons[0].loan1_index == 0
    assert dto.comparisons[0].loan2_index == 1
    assert dto.comparisons[0].five_year_diff == "-2000.00"
    assert dto.comparisons[0].better_option is BetterOption.LOAN2
    assert dto.scores[0].index == 1


def test_to_compare_request_reports_offer_field_paths() -> None:
    dto = _compare_dto()
    dto.loans[1].principal_interest = "abc"

    with pytest.raises(ValidationError) as exc_info:
        LoanMapper.to_compare_request(dto)

    assert exc_info.value.errors[0]["field"] == "loans.1.principal_interest"


# ==============================================================================
# Two-offer breakdown and statistics
# ==============================================================================


def _compare_two_dto() -> CompareTwoLoansRequestDTO:
    first, second = _compare_dto().loans
    return CompareTwoLoansRequestDTO(loan1=first, loan2=second)


def test_to_compare_two_request_builds_both_records() -> None:
    request = LoanMapper.to_compare_two_request(_compare_two_dto(), default_credit_score=700)

    assert request.loan1.lender_name == "A"
    assert request.loan2.payment.principal_interest == Decimal("770.00")
    assert request.loan2.terms.credit_score == 700


def test_to_compare_two_response_formats_breakdown() -> None:
    result = CompareTwoLoans().execute(LoanMapper.to_compare_two_request(_compare_two_dto()))

    dto = LoanMapper.to_compare_two_response(result)

    rows = {row.metric: row for row in dto.breakdown}
    assert rows[Metric.APR].loan1 == "6.875"
    assert rows[Metric.APR].difference == "0.000"
    assert rows[Metric.APR].winner is BetterOption.LOAN1
    assert rows[Metric.MONTHLY_PAYMENT].difference == "-30.00"
    assert rows[Metric.FIVE_YEAR_TOTAL].loan2 == "48000.00"
    assert dto.comparison.loan1_index == 0
    assert dto.comparison.loan2_index == 1
    assert dto.overall_winner is BetterOption.LOAN2


def test_to_statistics_request_builds_records() -> None:
    dto = LoanStatisticsRequestDTO(loans=_compare_dto().loans[:1])

    request = LoanMapper.to_statistics_request(dto)

    assert len(request.loans) == 1
    assert request.loans[0].lender_name == "A"


def test_to_statistics_response_reports_best_loan_position() -> None:
    loans = _compare_dto().loans
    loans[1].loan_details = _details(apr="6.75")
    request = LoanMapper.to_statistics_request(LoanStatisticsRequestDTO(loans=loans))
    stats = SummarizeLoans().execute(request)

    dto = LoanMapper.to_statistics_response(request, stats)

    assert dto.total_loans == 2
    assert dto.average_apr == "6.813"
    assert dto.lowest_apr == "6.750"
    assert dto.highest_apr == "6.875"
    assert dto.average_monthly_payment == "785.00"
    assert dto.total_loan_amount == "560000.00"
    assert dto.best_loan.index == 1
    assert dto.best_loan.lender_name == "B"
