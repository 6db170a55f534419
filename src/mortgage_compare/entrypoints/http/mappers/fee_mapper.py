from __future__ import annotations

from mortgage_compare.domain.fees import FeeAnalysis
from mortgage_compare.entrypoints.http.dtos.fees import FeeAnalysisRequestDTO, FeeAnalysisResponseDTO
from mortgage_compare.entrypoints.http.mappers.decimals import DecimalParser, money, rate
from mortgage_compare.use_cases.analyze_fees import FeeAnalysisRequest


class FeeMapper:
    """Maps between REST DTOs and domain models for APR fee analysis."""

    @staticmethod
    def to_domain_request(dto: FeeAnalysisRequestDTO) -> FeeAnalysisRequest:
        """
        Raises:
            ValidationError: If any string value is not a valid decimal
        """
        parser = DecimalParser()

        request = FeeAnalysisRequest(
            loan_amount=parser.parse("loan_amount", dto.loan_amount),
            interest_rate=parser.parse("interest_rate", dto.interest_rate),
            apr=parser.parse("apr", dto.apr),
            term_years=dto.loan_term,
            closing_costs=parser.parse("closing_costs", dto.closing_costs),
        )

        parser.raise_if_errors()
        return request

    @staticmethod
    def to_response(analysis: FeeAnalysis) -> FeeAnalysisResponseDTO:
        return FeeAnalysisResponseDTO(
            interest_rate=rate(analysis.interest_rate),
            apr=rate(analysis.apr),
            apr_difference=rate(analysis.apr_difference),
            interpretation=analysis.level,
            monthly_payment_at_rate=money(analysis.monthly_payment_at_rate),
            monthly_payment_at_apr=money(analysis.monthly_payment_at_apr),
            monthly_difference=money(analysis.monthly_difference),
            closing_costs=money(analysis.closing_costs),
            fee_percent=money(analysis.fee_percent),
            recommendations=list(analysis.recommendations),
        )
