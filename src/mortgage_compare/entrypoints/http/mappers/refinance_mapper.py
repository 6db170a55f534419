from __future__ import annotations

from mortgage_compare.entrypoints.http.dtos.refinance import (
    RefinanceAnalysisDTO,
    RefinanceRequestDTO,
    RefinanceResponseDTO,
)
from mortgage_compare.entrypoints.http.mappers.decimals import DecimalParser, money
from mortgage_compare.use_cases.evaluate_refinance import RefinanceEvaluation, RefinanceRequest


class RefinanceMapper:
    """Maps between REST DTOs and domain models for refinance evaluation."""

    @staticmethod
    def to_domain_request(dto: RefinanceRequestDTO) -> RefinanceRequest:
        """
        Raises:
            ValidationError: If any string value is not a valid decimal
        """
        parser = DecimalParser()

        request = RefinanceRequest(
            loan_amount=parser.parse("loan_amount", dto.loan_amount),
            current_monthly_payment=parser.parse("current_monthly_payment", dto.current_monthly_payment),
            current_term_years=dto.current_loan_term,
            new_interest_rate=parser.parse("new_interest_rate", dto.new_interest_rate),
            new_closing_costs=parser.parse("new_closing_costs", dto.new_closing_costs),
            new_term_years=dto.new_loan_term,
        )

        parser.raise_if_errors()
        return request

    @staticmethod
    def to_response(evaluation: RefinanceEvaluation) -> RefinanceResponseDTO:
        analysis = None
        if evaluation.short_term is not None and evaluation.long_term is not None:
            analysis = RefinanceAnalysisDTO(short_term=evaluation.short_term, long_term=evaluation.long_term)

        return RefinanceResponseDTO(
            recommendation=evaluation.recommendation,
            current_monthly=money(evaluation.current_monthly),
            new_monthly=money(evaluation.new_monthly),
            monthly_savings=money(evaluation.monthly_savings),
            break_even_months=evaluation.break_even_months,
            break_even_years=None if evaluation.break_even_years is None else str(evaluation.break_even_years),
            new_closing_costs=money(evaluation.new_closing_costs),
            total_savings_over_life=money(evaluation.total_savings_over_life),
            analysis=analysis,
        )
