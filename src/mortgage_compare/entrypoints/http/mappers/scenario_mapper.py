from __future__ import annotations

from mortgage_compare.domain.loan import DEFAULT_CREDIT_SCORE
from mortgage_compare.entrypoints.http.dtos.scenarios import (
    ScenarioDTO,
    ScenarioRequestDTO,
    ScenarioResponseDTO,
    ScenarioSummaryDTO,
)
from mortgage_compare.entrypoints.http.mappers.decimals import (
    DecimalParser,
    money,
    optional_money,
    rate,
)
from mortgage_compare.entrypoints.http.mappers.loan_mapper import LoanMapper
from mortgage_compare.use_cases.calculate_scenarios import Scenario, ScenarioRequest, ScenarioSet


class ScenarioMapper:
    """Maps between REST DTOs and domain models for scenario pricing."""

    @staticmethod
    def to_domain_request(
        dto: ScenarioRequestDTO,
        default_credit_score: int = DEFAULT_CREDIT_SCORE,
    ) -> ScenarioRequest:
        """
        Raises:
            ValidationError: If any string value is not a valid decimal
        """
        parser = DecimalParser()

        request = ScenarioRequest(
            property_value=parser.parse("property_value", dto.property_value),
            interest_rate=parser.parse("interest_rate", dto.interest_rate),
            down_payment_percents=tuple(
                parser.parse(f"down_payment_percents.{i}", percent)
                for i, percent in enumerate(dto.down_payment_percents)
            ),
            loan_terms=tuple(dto.loan_terms),
            credit_score=dto.credit_score if dto.credit_score is not None else default_credit_score,
            closing_costs=parser.parse("closing_costs", dto.closing_costs),
        )

        parser.raise_if_errors()
        return request

    @staticmethod
    def to_scenario(scenario: Scenario) -> ScenarioDTO:
        return ScenarioDTO(
            down_payment_percent=str(scenario.down_payment_percent),
            down_payment_amount=money(scenario.down_payment_amount),
            loan_term=scenario.loan_term,
            loan_amount=money(scenario.loan_amount),
            ltv=optional_money(scenario.ltv),
            monthly_payment=LoanMapper.to_payment(scenario.payment),
            total_interest=money(scenario.total_interest),
            total_paid=money(scenario.total_paid),
            lifetime_cost=money(scenario.lifetime_cost),
            five_year_cost=money(scenario.five_year_cost),
        )

    @staticmethod
    def to_response(request: ScenarioRequest, result: ScenarioSet) -> ScenarioResponseDTO:
        return ScenarioResponseDTO(
            scenarios=[ScenarioMapper.to_scenario(s) for s in result.scenarios],
            best_scenario=ScenarioMapper.to_scenario(result.best),
            summary=ScenarioSummaryDTO(
                property_value=money(request.property_value),
                interest_rate=rate(request.interest_rate),
                scenarios_generated=len(result.scenarios),
            ),
        )
