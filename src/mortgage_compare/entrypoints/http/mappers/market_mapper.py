from __future__ import annotations

from mortgage_compare.domain.loan import DEFAULT_CREDIT_SCORE
from mortgage_compare.entrypoints.http.dtos.market import (
    MarketComparisonDTO,
    MarketCompareRequestDTO,
    MarketCompareResponseDTO,
    MarketDataDTO,
    MarketRangeDTO,
    MarketRatesDTO,
    MarketSourceDTO,
    PotentialSavingsDTO,
)
from mortgage_compare.entrypoints.http.mappers.decimals import DecimalParser, money, rate
from mortgage_compare.use_cases.compare_to_market import MarketCompareRequest, MarketReport


class MarketMapper:
    """Maps between REST DTOs and domain models for market comparison."""

    @staticmethod
    def to_domain_request(
        dto: MarketCompareRequestDTO,
        default_credit_score: int = DEFAULT_CREDIT_SCORE,
    ) -> MarketCompareRequest:
        """
        Raises:
            ValidationError: If any string value is not a valid decimal
        """
        parser = DecimalParser()

        request = MarketCompareRequest(
            loan_amount=parser.parse("loan_amount", dto.loan_amount),
            apr=parser.parse("apr", dto.apr),
            term_years=dto.loan_term,
            current_monthly_payment=parser.parse("monthly_payment", dto.monthly_payment),
            credit_score=dto.credit_score if dto.credit_score is not None else default_credit_score,
            points_paid=parser.parse_optional("points_paid", dto.points_paid),
            property_value=parser.parse_optional("property_value", dto.property_value),
        )

        parser.raise_if_errors()
        return request

    @staticmethod
    def to_response(report: MarketReport) -> MarketCompareResponseDTO:
        comparison = report.comparison
        distribution = report.snapshot.distribution

        return MarketCompareResponseDTO(
            comparison=MarketComparisonDTO(
                quality=comparison.quality,
                difference=rate(comparison.difference),
                percentile=comparison.percentile,
                better_than_percent=comparison.better_than_percent,
                market_average=rate(comparison.market_average),
                market_range=MarketRangeDTO(min=rate(comparison.market_min), max=rate(comparison.market_max)),
            ),
            market_data=MarketDataDTO(
                rates=MarketRatesDTO(
                    average=rate(distribution.average),
                    min=rate(distribution.minimum),
                    max=rate(distribution.maximum),
                    median=rate(distribution.median),
                ),
                sources=[
                    MarketSourceDTO(
                        provider=source.provider,
                        rate=rate(source.rate),
                        apr=rate(source.apr),
                        points=str(source.points),
                    )
                    for source in report.snapshot.sources
                ],
            ),
            potential_savings=PotentialSavingsDTO(
                monthly=money(report.potential_savings.monthly),
                five_year=money(report.potential_savings.five_year),
                lifetime=money(report.potential_savings.lifetime),
            ),
            recommendations=list(report.recommendations),
        )
