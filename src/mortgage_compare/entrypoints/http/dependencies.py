"""
Dependency injection for FastAPI routes.

Every use case is stateless, so a fresh instance per request is cheap; tests
replace these factories through app.dependency_overrides.
"""

from __future__ import annotations

from fastapi import Depends

from mortgage_compare.adapters.synthetic_market_rate_provider import SyntheticMarketRateProvider
from mortgage_compare.infra.config import Settings, get_settings
from mortgage_compare.ports.market_rate_provider import MarketRateProvider
from mortgage_compare.use_cases.analyze_fees import AnalyzeFees
from mortgage_compare.use_cases.build_loan_estimate import BuildLoanEstimate
from mortgage_compare.use_cases.calculate_scenarios import CalculateScenarios
from mortgage_compare.use_cases.compare_loan_offers import CompareLoanOffers
from mortgage_compare.use_cases.compare_to_market import CompareToMarket
from mortgage_compare.use_cases.compare_two_loans import CompareTwoLoans
from mortgage_compare.use_cases.evaluate_refinance import EvaluateRefinance
from mortgage_compare.use_cases.summarize_loans import SummarizeLoans


def get_build_loan_estimate_use_case() -> BuildLoanEstimate:
    return BuildLoanEstimate()


def get_compare_loan_offers_use_case() -> CompareLoanOffers:
    return CompareLoanOffers()


def get_compare_two_loans_use_case() -> CompareTwoLoans:
    return CompareTwoLoans()


def get_summarize_loans_use_case() -> SummarizeLoans:
    return SummarizeLoans()


def get_calculate_scenarios_use_case() -> CalculateScenarios:
    return CalculateScenarios()


def get_analyze_fees_use_case() -> AnalyzeFees:
    return AnalyzeFees()


def get_evaluate_refinance_use_case(settings: Settings = Depends(get_settings)) -> EvaluateRefinance:
    """
    Factory for EvaluateRefinance using the configured breakeven threshold.

    Args:
        settings: Application settings (injected by FastAPI)

    Returns:
        EvaluateRefinance: Use case with recommended_max_months from settings
    """
    return EvaluateRefinance(recommended_max_months=settings.refinance_recommended_max_months)


def get_market_rate_provider() -> MarketRateProvider:
    return SyntheticMarketRateProvider()


def get_compare_to_market_use_case(
    provider: MarketRateProvider = Depends(get_market_rate_provider),
) -> CompareToMarket:
    """
    Factory for CompareToMarket wired to the market rate provider.

    Args:
        provider: Market rate provider (injected by FastAPI via Depends)

    Returns:
        CompareToMarket: Configured use case instance
    """
    return CompareToMarket(market_rate_provider=provider)
