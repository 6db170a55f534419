from __future__ import annotations

from decimal import Decimal

from mortgage_compare.domain.fees import FeeLevel
from mortgage_compare.entrypoints.http.dtos.fees import FeeAnalysisRequestDTO
from mortgage_compare.entrypoints.http.mappers.fee_mapper import FeeMapper
from mortgage_compare.use_cases.analyze_fees import AnalyzeFees


def _dto(**overrides) -> FeeAnalysisRequestDTO:
    values = dict(loan_amount="280000.00", interest_rate="6.75", apr="7.125", loan_term=30, closing_costs="9800.00")
    values.update(overrides)
    return FeeAnalysisRequestDTO(**values)


def test_to_domain_request() -> None:
    request = FeeMapper.to_domain_request(_dto())

    assert request.loan_amount == Decimal("280000.00")
    assert request.interest_rate == Decimal("6.75")
    assert request.apr == Decimal("7.125")
    assert request.term_years == 30
    assert request.closing_costs == Decimal("9800.00")


def test_closing_costs_default_to_zero() -> None:
    dto = FeeAnalysisRequestDTO(loan_amount="280000.00", interest_rate="6.75", apr="7.125", loan_term=30)

    assert FeeMapper.to_domain_request(dto).closing_costs == Decimal("0")


def test_to_response_formats_decimals() -> None:
    analysis = AnalyzeFees().execute(FeeMapper.to_domain_request(_dto()))

    dto = FeeMapper.to_response(analysis)

    assert dto.interest_rate == "6.750"
    assert dto.apr == "7.125"
    assert dto.apr_difference == "0.375"
    assert dto.interpretation is FeeLevel.FAIR
    assert dto.closing_costs == "9800.00"
    assert dto.fee_percent == "3.50"
    assert dto.monthly_payment_at_rate == str(analysis.monthly_payment_at_rate)
    assert dto.monthly_difference == str(analysis.monthly_difference)
    assert dto.recommendations == list(analysis.recommendations)
